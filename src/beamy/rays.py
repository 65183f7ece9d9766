"""
Primary ray generation: pixel coordinates to world-space rays.
"""
from dataclasses import dataclass
import numpy as np
from beamy.transforms import normalize, transform_directions, vec3


@dataclass(eq=False)
class Ray:
    origin: np.ndarray
    direction: np.ndarray

    def __post_init__(self):
        self.origin = vec3(self.origin)
        self.direction = vec3(self.direction)

    def at(self, t) -> np.ndarray:
        """Point at distance `t` along the ray."""
        return self.origin + self.direction * t


def camera_space_directions(xs, ys, width, height, fov):
    """
    Unit directions through pixel centers for a camera looking down -Z.

    Pixel centers map to normalized device coordinates in [-1, 1], widened by
    the aspect ratio and scaled by tan(fov / 2). Y grows downward in pixels
    and upward in camera space.

    Args:
        xs, ys: (N,) pixel coordinates
        width, height: Image size in pixels
        fov: Vertical field of view in radians

    Returns:
        (N, 3) unit directions in camera space
    """
    xs = np.asarray(xs, dtype=float)
    ys = np.asarray(ys, dtype=float)

    aspect_ratio = width / height
    tan_half_fov = np.tan(fov / 2.0)

    sx = (((xs + 0.5) / width) * 2.0 - 1.0) * aspect_ratio * tan_half_fov
    sy = (1.0 - ((ys + 0.5) / height) * 2.0) * tan_half_fov
    sz = np.full(sx.shape, -1.0)

    return normalize(np.stack([sx, sy, sz], axis=-1))


def generate_directions(xs, ys, scene):
    """
    World-space primary ray directions for a batch of pixels.

    Args:
        xs, ys: (N,) pixel coordinates
        scene: Scene providing image size and camera

    Returns:
        (N, 3) unit directions; every ray starts at the camera position
    """
    camera = scene.camera
    local = camera_space_directions(xs, ys, scene.width, scene.height, camera.fov)
    return transform_directions(camera.orientation(), local)


def primary_ray(x, y, scene) -> Ray:
    """Ray through the center of pixel (x, y)."""
    direction = generate_directions([x], [y], scene)[0]
    return Ray(origin=scene.camera.position.copy(), direction=direction)
