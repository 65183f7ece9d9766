"""
Ray-geometry intersection calculations for the beamy ray tracer.

This module contains the closed-form intersection solvers for rays against the
primitives a scene can hold: spheres and infinite planes. Every solver accepts
a single ray direction (3,) or a batch (N, 3) and reports "no hit" as inf.
"""
import numpy as np
from beamy import constants
from beamy.transforms import normalize


def solve_quadratic_vectorized(a, b, c):
    """
    Solve at^2 + bt + c = 0 for vectorized arrays.

    Args:
        a, b, c: Arrays of quadratic coefficients

    Returns:
        tuple: (t1, t2, valid_mask) where t1 <= t2 are roots and valid_mask indicates valid solutions
    """
    discriminant = b**2 - 4.0 * a * c
    valid_mask = (a > constants.DEGENERATE_DIRECTION) & (discriminant >= 0)

    t1 = np.full(a.shape, np.inf)
    t2 = np.full(a.shape, np.inf)

    if np.any(valid_mask):
        sqrt_disc = np.sqrt(discriminant[valid_mask])
        inv_2a = 0.5 / a[valid_mask]
        t1[valid_mask] = (-b[valid_mask] - sqrt_disc) * inv_2a
        t2[valid_mask] = (-b[valid_mask] + sqrt_disc) * inv_2a

    return t1, t2, valid_mask


def intersect_sphere(ray_origin, ray_directions, center, radius):
    """
    Vectorized intersection solver for ray and sphere.

    The nearest non-negative root wins: the smaller root when it lies in front
    of the origin, otherwise the larger one (origin inside the sphere).

    Args:
        ray_origin: (3,) origin point, or (N, 3) per-ray origins
        ray_directions: (N, 3) array of ray directions
        center: (3,) sphere center
        radius: Sphere radius

    Returns:
        Array of intersection distances (inf where no intersection)
    """
    # Handle single vs batch
    is_single = ray_directions.ndim == 1
    if is_single:
        ray_directions = ray_directions[None, :]

    oc = ray_origin - center

    # Quadratic equation coefficients
    a = np.sum(ray_directions**2, axis=1)
    b = 2.0 * np.sum(oc * ray_directions, axis=1)
    c = np.broadcast_to(np.sum(oc**2, axis=-1) - radius**2, a.shape)

    t1, t2, valid_mask = solve_quadratic_vectorized(a, b, c)

    t = np.full(ray_directions.shape[0], np.inf)

    if np.any(valid_mask):
        # Select smallest non-negative t
        best_t = np.full(t1.shape, np.inf)
        m1 = valid_mask & (t1 >= 0.0)
        best_t[m1] = t1[m1]
        m2 = valid_mask & ~m1 & (t2 >= 0.0)
        best_t[m2] = t2[m2]
        t = best_t

    return t[0] if is_single else t


def intersect_plane(ray_origin, ray_directions, point, normal):
    """
    Vectorized intersection solver for ray and infinite plane.

    Only rays travelling along the plane normal (direction . normal > EPSILON)
    can hit; parallel and opposing rays miss.

    Args:
        ray_origin: (3,) origin point, or (N, 3) per-ray origins
        ray_directions: (N, 3) array of ray directions
        point: (3,) any point on the plane
        normal: (3,) plane normal

    Returns:
        Array of intersection distances (inf where no intersection)
    """
    is_single = ray_directions.ndim == 1
    if is_single:
        ray_directions = ray_directions[None, :]

    denom = np.sum(ray_directions * normal, axis=1)
    numer = np.broadcast_to(np.sum((point - ray_origin) * normal, axis=-1), denom.shape)

    t = np.full(ray_directions.shape[0], np.inf)

    facing = denom > constants.EPSILON
    if np.any(facing):
        t_plane = numer[facing] / denom[facing]
        t_plane[t_plane < 0.0] = np.inf
        t[facing] = t_plane

    return t[0] if is_single else t


def sphere_normals(hit_points, center):
    """Unit normals pointing from the sphere center to each hit point."""
    return normalize(hit_points - center)


def plane_normals(hit_points, normal):
    """Plane normals are the negated unit normal, independent of the ray."""
    n = -normalize(normal)
    return np.broadcast_to(n, np.shape(hit_points)).copy()
