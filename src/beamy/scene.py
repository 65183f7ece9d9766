"""
Scene container and nearest-hit resolution.
"""
from dataclasses import dataclass, field
import logging
import numpy as np
from beamy import constants
from beamy.primitives import (
    Camera, Light, Occluder, Plane, SceneObject, Sphere, intersect, surface_normal)
from beamy.transforms import vec3

logger = logging.getLogger(__name__)


@dataclass
class HitResult:
    """
    Nearest intersections for a batch of rays.

    Attributes:
        distance: Distance to hit point (N,) shape array, inf on miss
        index: Index into Scene.occluders (N,), -1 on miss
        hit_point: 3D coordinates of hit point (N, 3) shape, NaN on miss
        normal: Unit surface normal at hit point (N, 3) shape, NaN on miss
    """
    distance: np.ndarray  # (N,) shape
    index: np.ndarray  # (N,) shape
    hit_point: np.ndarray  # (N, 3) shape
    normal: np.ndarray  # (N, 3) shape

    def __post_init__(self):
        """Validate array shapes."""
        if self.distance.ndim != 1:
            raise ValueError(f"distance must be 1D array, got shape {self.distance.shape}")
        if self.index.ndim != 1:
            raise ValueError(f"index must be 1D array, got shape {self.index.shape}")
        if self.hit_point.ndim != 2 or self.hit_point.shape[1] != 3:
            raise ValueError(f"hit_point must be (N,3) array, got shape {self.hit_point.shape}")
        if self.normal.shape != self.hit_point.shape:
            raise ValueError(f"normal shape {self.normal.shape} doesn't match hit_point shape {self.hit_point.shape}")

        n_rays = self.distance.shape[0]
        if self.index.shape[0] != n_rays:
            raise ValueError(f"index shape {self.index.shape} doesn't match distance shape {self.distance.shape}")
        if self.hit_point.shape[0] != n_rays:
            raise ValueError(f"hit_point shape {self.hit_point.shape} doesn't match distance shape {self.distance.shape}")

    @property
    def mask(self) -> np.ndarray:
        """Boolean mask of rays that hit something."""
        return self.index >= 0


@dataclass(frozen=True, eq=False)
class Hit:
    """A single intersection record."""
    distance: float
    obj: Occluder
    point: np.ndarray
    normal: np.ndarray


@dataclass(eq=False)
class Scene:
    """
    Everything needed to render one image.

    Objects are split once, at insertion, into occluders (spheres, planes),
    which take part in visibility, and lights, which only illuminate. Both
    collections keep insertion order; ties between equally distant occluders
    go to the one added first.
    """
    width: int = constants.DEFAULT_WIDTH
    height: int = constants.DEFAULT_HEIGHT
    ambient: np.ndarray = field(default_factory=lambda: np.zeros(3))
    camera: Camera = field(default_factory=Camera)
    objects: list = field(default_factory=list)
    occluders: list = field(init=False, default_factory=list)
    lights: list = field(init=False, default_factory=list)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Scene dimensions must be positive, got {self.width}x{self.height}")
        self.ambient = vec3(self.ambient)

        initial = self.objects
        self.objects = []
        for obj in initial:
            self.add(obj)

    def add(self, obj: SceneObject):
        """Take ownership of an object, routing it to occluders or lights."""
        match obj:
            case Light():
                self.lights.append(obj)
            case Camera():
                raise TypeError("The camera is set on Scene.camera, not added as an object")
            case Sphere() | Plane():
                self.occluders.append(obj)
            case _:
                raise TypeError(f"Cannot add {type(obj).__name__} to a scene")
        self.objects.append(obj)
        logger.debug("Added %s (%d occluders, %d lights)",
                     type(obj).__name__, len(self.occluders), len(self.lights))

    def intersect(self, ray_origin, ray_directions):
        """
        Nearest occluder along each ray.

        Lights never take part. With equal distances the occluder inserted
        first wins.

        Args:
            ray_origin: (3,) origin point, or (N, 3) per-ray origins
            ray_directions: (3,) or (N, 3) ray directions

        Returns:
            tuple: (t, index) with inf / -1 where nothing was hit
        """
        is_single = ray_directions.ndim == 1
        if is_single:
            ray_directions = ray_directions[None, :]

        n_rays = ray_directions.shape[0]
        t = np.full(n_rays, np.inf)
        index = np.full(n_rays, -1, dtype=np.intp)

        if self.occluders:
            t_candidates = np.stack(
                [intersect(p, ray_origin, ray_directions) for p in self.occluders], axis=1)  # (N, K)
            t_candidates = np.where(np.isnan(t_candidates), np.inf, t_candidates)

            # argmin keeps the first minimum, which preserves insertion order on ties
            nearest = np.argmin(t_candidates, axis=1)
            t = t_candidates[np.arange(n_rays), nearest]
            hit = np.isfinite(t)
            index[hit] = nearest[hit]

        if is_single:
            return t[0], index[0]
        return t, index

    def hits(self, ray_origin, ray_directions) -> HitResult:
        """
        Nearest hits with hit points and surface normals for a batch of rays.

        Args:
            ray_origin: (3,) origin point, or (N, 3) per-ray origins
            ray_directions: (N, 3) array of ray directions

        Returns:
            HitResult for all rays
        """
        ray_origin = np.asarray(ray_origin, dtype=float)
        ray_directions = np.atleast_2d(np.asarray(ray_directions, dtype=float))
        t, index = self.intersect(ray_origin, ray_directions)

        n_rays = ray_directions.shape[0]
        hit_points = np.full((n_rays, 3), np.nan)
        normals = np.full((n_rays, 3), np.nan)

        for k, primitive in enumerate(self.occluders):
            mask = index == k
            if not np.any(mask):
                continue
            origins = ray_origin if ray_origin.ndim == 1 else ray_origin[mask]
            hit_points[mask] = origins + t[mask, None] * ray_directions[mask]
            normals[mask] = surface_normal(primitive, origins, ray_directions[mask], t[mask])

        return HitResult(distance=t, index=index, hit_point=hit_points, normal=normals)

    def nearest_hit(self, ray) -> Hit | None:
        """Nearest hit for a single Ray, or None when it escapes the scene."""
        result = self.hits(ray.origin, ray.direction[None, :])
        if not result.mask[0]:
            return None
        return Hit(
            distance=float(result.distance[0]),
            obj=self.occluders[result.index[0]],
            point=result.hit_point[0],
            normal=result.normal[0],
        )
