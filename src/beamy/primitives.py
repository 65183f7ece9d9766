"""
Scene primitives: spheres, planes, lights and the camera.

Intersection and normal queries dispatch over the closed set of occluding
variants (Sphere, Plane) with a single match statement.
"""
from dataclasses import dataclass, field
import numpy as np
from beamy import constants
from beamy import intersections
from beamy.transforms import (
    quaternion_conjugate,
    quaternion_identity,
    quaternion_to_matrix4,
    scale_matrix,
    translation_matrix,
    vec3,
)


@dataclass(eq=False)
class SceneObject:
    """
    Fields shared by every object placed in a scene.

    Attributes:
        position: (3,) world position
        scale: (3,) per-axis scale, expected positive (not enforced)
        color: (3,) RGB albedo
        rotation: (4,) orientation quaternion (w, x, y, z)
    """
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))
    color: np.ndarray = field(default_factory=lambda: np.ones(3))
    rotation: np.ndarray = field(default_factory=quaternion_identity)

    def __post_init__(self):
        self.position = vec3(self.position)
        self.scale = vec3(self.scale)
        self.color = vec3(self.color)
        self.rotation = np.asarray(self.rotation, dtype=float).reshape(4)

    def transformation(self) -> np.ndarray:
        """Object-to-world matrix T * R * S."""
        T = translation_matrix(self.position)
        R = quaternion_to_matrix4(self.rotation)
        S = scale_matrix(self.scale)
        return T @ R @ S


@dataclass(eq=False)
class Sphere(SceneObject):
    radius: float = constants.DEFAULT_RADIUS


@dataclass(eq=False)
class Plane(SceneObject):
    """Infinite plane through `position`, visible to rays travelling along `norm`."""
    norm: np.ndarray = field(default_factory=lambda: np.array(constants.DEFAULT_PLANE_NORMAL))

    def __post_init__(self):
        super().__post_init__()
        self.norm = vec3(self.norm)


@dataclass(eq=False)
class Light(SceneObject):
    """Point emitter. Lights illuminate but never occlude."""
    intensity: float = constants.DEFAULT_INTENSITY


@dataclass(eq=False)
class Camera(SceneObject):
    """
    Pinhole camera looking down its local -Z axis.

    Attributes:
        fov: Vertical field of view in radians
    """
    fov: float = constants.DEFAULT_FOV

    def orientation(self) -> np.ndarray:
        """Camera-to-world rotation."""
        return quaternion_to_matrix4(self.rotation)

    def view(self) -> np.ndarray:
        """World-to-camera matrix, the inverse of the camera's placement."""
        R = quaternion_to_matrix4(quaternion_conjugate(self.rotation))
        T = translation_matrix(-self.position)
        return R @ T


Occluder = Sphere | Plane


def intersect(primitive, ray_origin, ray_directions):
    """
    Intersection distances of rays against a single primitive.

    Args:
        primitive: Sphere, Plane or Light
        ray_origin: (3,) or (N, 3) ray origins
        ray_directions: (3,) or (N, 3) ray directions

    Returns:
        Distance (or (N,) distances), inf where the ray misses
    """
    match primitive:
        case Sphere():
            return intersections.intersect_sphere(
                ray_origin, ray_directions, primitive.position, primitive.radius)
        case Plane():
            return intersections.intersect_plane(
                ray_origin, ray_directions, primitive.position, primitive.norm)
        case Light():
            if ray_directions.ndim == 1:
                return np.inf
            return np.full(ray_directions.shape[0], np.inf)
        case _:
            raise TypeError(f"{type(primitive).__name__} is not an intersectable primitive")


def surface_normal(primitive, ray_origin, ray_directions, t):
    """
    Unit surface normals where rays meet a primitive at distance `t`.

    Args:
        primitive: Sphere or Plane
        ray_origin: (3,) or (N, 3) ray origins
        ray_directions: (3,) or (N, 3) ray directions
        t: Hit distance(s) as returned by `intersect`

    Returns:
        Normals with the shape of `ray_directions`
    """
    hit_points = ray_origin + np.asarray(t)[..., None] * ray_directions
    match primitive:
        case Sphere():
            return intersections.sphere_normals(hit_points, primitive.position)
        case Plane():
            return intersections.plane_normals(hit_points, primitive.norm)
        case _:
            raise TypeError(f"{type(primitive).__name__} has no surface normal")
