"""
Surface shading and colour quantization.
"""
import numpy as np
from beamy import constants
from beamy.scene import HitResult
from beamy.transforms import normalize


def shade(scene, hits: HitResult, shadows: bool = False) -> np.ndarray:
    """
    Lambertian colour for every ray in a hit batch.

    color = albedo * (ambient + sum(light.color * intensity * max(0, N.L) / dist^2))

    Rays that missed stay black; the ambient term only applies to hits.

    Args:
        scene: Scene providing ambient colour, occluders and lights
        hits: HitResult from Scene.hits
        shadows: Cast a shadow ray toward each light and drop occluded lights

    Returns:
        (N, 3) array of linear RGB colours (unclamped)
    """
    n_rays = hits.distance.shape[0]
    colors = np.zeros((n_rays, 3))

    mask = hits.mask
    if not np.any(mask):
        return colors

    points = hits.hit_point[mask]
    normals = hits.normal[mask]
    albedo_table = np.array([obj.color for obj in scene.occluders])
    albedo = albedo_table[hits.index[mask]]

    lighting = np.tile(scene.ambient, (points.shape[0], 1))

    for light in scene.lights:
        to_light = light.position - points
        dist = np.linalg.norm(to_light, axis=1)
        L = normalize(to_light)

        n_dot_l = np.maximum(np.sum(normals * L, axis=1), 0.0)
        with np.errstate(divide='ignore', invalid='ignore'):
            falloff = np.where(dist > 0.0, light.intensity / dist**2, 0.0)
        contribution = n_dot_l * falloff

        if shadows:
            shadow_origins = points + normals * constants.EPSILON
            t_block, _ = scene.intersect(shadow_origins, L)
            contribution[t_block < dist] = 0.0

        lighting += light.color[None, :] * contribution[:, None]

    colors[mask] = albedo * lighting
    return colors


def quantize(colors) -> np.ndarray:
    """
    Convert linear colours to 8-bit channels.

    Values are scaled by 255, truncated toward zero and clamped to [0, 255];
    NaN maps to 0.
    """
    scaled = np.trunc(np.nan_to_num(np.asarray(colors, dtype=float), nan=0.0) * constants.MAX_CHANNEL_VALUE)
    return np.clip(scaled, 0, constants.MAX_CHANNEL_VALUE).astype(np.uint8)
