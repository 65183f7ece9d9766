"""
Vector, quaternion and matrix helpers for the beamy ray tracer.

All values are plain numpy float arrays:
- vectors are (3,) or (N, 3)
- quaternions are (4,) in (w, x, y, z) order
- matrices are (4, 4) and act on column vectors
"""
import numpy as np


def vec3(values):
    """Coerce a 3-sequence into a float (3,) array."""
    return np.asarray(values, dtype=float).reshape(3)


def normalize(v):
    """
    Normalize vectors along the last axis.

    Zero-length vectors come back as zero vectors instead of NaN.

    Args:
        v: (3,) or (N, 3) array

    Returns:
        Array of the same shape with unit length rows
    """
    v = np.asarray(v, dtype=float)
    norm = np.linalg.norm(v, axis=-1, keepdims=True)
    with np.errstate(divide='ignore', invalid='ignore'):
        out = np.where(norm > 0.0, v / norm, 0.0)
    return out


def quaternion_identity():
    return np.array([1.0, 0.0, 0.0, 0.0])


def axis_angle(axis, angle):
    """
    Quaternion rotating by `angle` radians about `axis`.

    Args:
        axis: (3,) rotation axis, normalized here
        angle: Rotation angle in radians

    Returns:
        (4,) unit quaternion
    """
    axis = normalize(vec3(axis))
    half = 0.5 * angle
    return np.concatenate(([np.cos(half)], axis * np.sin(half)))


def quaternion_multiply(q, r):
    """Hamilton product q * r (apply r first, then q)."""
    w1, x1, y1, z1 = q
    w2, x2, y2, z2 = r
    return np.array([
        w1*w2 - x1*x2 - y1*y2 - z1*z2,
        w1*x2 + x1*w2 + y1*z2 - z1*y2,
        w1*y2 - x1*z2 + y1*w2 + z1*x2,
        w1*z2 + x1*y2 - y1*x2 + z1*w2,
    ])


def quaternion_conjugate(q):
    w, x, y, z = q
    return np.array([w, -x, -y, -z])


def quaternion_to_matrix4(q):
    """
    Rotation matrix for a quaternion.

    The quaternion is normalized first so slightly drifted inputs still give
    an orthonormal rotation.
    """
    q = np.asarray(q, dtype=float)
    n = np.linalg.norm(q)
    w, x, y, z = q / n if n > 0.0 else quaternion_identity()

    m = np.identity(4)
    m[0, 0] = 1.0 - 2.0 * (y*y + z*z)
    m[0, 1] = 2.0 * (x*y - w*z)
    m[0, 2] = 2.0 * (x*z + w*y)
    m[1, 0] = 2.0 * (x*y + w*z)
    m[1, 1] = 1.0 - 2.0 * (x*x + z*z)
    m[1, 2] = 2.0 * (y*z - w*x)
    m[2, 0] = 2.0 * (x*z - w*y)
    m[2, 1] = 2.0 * (y*z + w*x)
    m[2, 2] = 1.0 - 2.0 * (x*x + y*y)
    return m


def euler_to_quaternion(degrees):
    """
    Compose per-axis rotations given in degrees as X * Y * Z.

    Args:
        degrees: (3,) rotation angles about X, Y and Z

    Returns:
        (4,) unit quaternion
    """
    rx, ry, rz = np.deg2rad(vec3(degrees))
    qx = axis_angle([1.0, 0.0, 0.0], rx)
    qy = axis_angle([0.0, 1.0, 0.0], ry)
    qz = axis_angle([0.0, 0.0, 1.0], rz)
    return quaternion_multiply(quaternion_multiply(qx, qy), qz)


def translation_matrix(offset):
    m = np.identity(4)
    m[:3, 3] = vec3(offset)
    return m


def scale_matrix(factors):
    return np.diag(np.append(vec3(factors), 1.0))


def transform_directions(matrix, directions):
    """
    Apply a (4, 4) matrix to direction vectors (w = 0, translation ignored).

    Args:
        matrix: (4, 4) transform
        directions: (3,) or (N, 3) array

    Returns:
        Transformed directions with the input's shape
    """
    directions = np.asarray(directions, dtype=float)
    return np.sum(directions[..., None, :] * matrix[:3, :3], axis=-1)


def transform_points(matrix, points):
    """Apply a (4, 4) matrix to points (w = 1)."""
    points = np.asarray(points, dtype=float)
    return np.sum(points[..., None, :] * matrix[:3, :3], axis=-1) + matrix[:3, 3]
