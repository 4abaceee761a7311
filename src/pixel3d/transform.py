"""
Rotation, Projection and Normal Mathematics

This module implements the per-vertex math of the frame pipeline:
- Right-handed rotations about the X, Y and Z axes (radians)
- Perspective projection onto the screen plane
- Triangle normals from three vertices
- A Numba-compiled batch kernel that applies the full model transform

Coordinate Systems:
- Model: +X right, +Y up, +Z away from the viewer
- Camera: at the origin looking down +Z
- Screen: +X right, +Y down (the projection flips Y)

Model transform order is fixed: scale by zoom, rotate X, rotate Y, rotate Z,
then translate by the camera distance along +Z. Rotations do not commute,
so the batch kernel and the scalar functions must apply the same sequence.
"""

from typing import Optional, Sequence, Tuple
import math
import numpy as np
from numba import njit

from .config import DEFAULT_PROJECTION_DISTANCE

Vec3 = Tuple[float, float, float]


def rotate_x(x: float, y: float, z: float, angle: float) -> Vec3:
    """Rotate a point about the X axis."""
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    return x, y * cos_a - z * sin_a, y * sin_a + z * cos_a


def rotate_y(x: float, y: float, z: float, angle: float) -> Vec3:
    """Rotate a point about the Y axis."""
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    return x * cos_a + z * sin_a, y, -x * sin_a + z * cos_a


def rotate_z(x: float, y: float, z: float, angle: float) -> Vec3:
    """Rotate a point about the Z axis."""
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    return x * cos_a - y * sin_a, x * sin_a + y * cos_a, z


def project(
    x: float, y: float, z: float,
    center_x: float, center_y: float,
    distance: float = DEFAULT_PROJECTION_DISTANCE
) -> Optional[Tuple[float, float]]:
    """
    Project a camera-space point to screen coordinates.

    Args:
        x, y, z: Camera-space coordinates
        center_x, center_y: Screen position of the optical axis
        distance: Focal distance of the perspective divide

    Returns:
        (sx, sy) screen coordinates, or None when the point is at or
        behind the camera plane (z <= -distance)
    """
    if z <= -distance:
        return None
    scale = distance / (distance + z)
    return center_x + x * scale, center_y - y * scale


def calculate_normal(
    v1: Sequence[float],
    v2: Sequence[float],
    v3: Sequence[float]
) -> Vec3:
    """
    Unit normal of a triangle, (v2 - v1) x (v3 - v1).

    A degenerate triangle yields (0, 0, 0).
    """
    ax, ay, az = v2[0] - v1[0], v2[1] - v1[1], v2[2] - v1[2]
    bx, by, bz = v3[0] - v1[0], v3[1] - v1[1], v3[2] - v1[2]

    nx = ay * bz - az * by
    ny = az * bx - ax * bz
    nz = ax * by - ay * bx

    length = math.sqrt(nx * nx + ny * ny + nz * nz)
    if length > 0:
        nx, ny, nz = nx / length, ny / length, nz / length

    return nx, ny, nz


def transform_point(
    x: float, y: float, z: float,
    zoom: float,
    rotation_x: float, rotation_y: float, rotation_z: float,
    camera_distance: float
) -> Vec3:
    """Apply the model transform to a single point."""
    x, y, z = x * zoom, y * zoom, z * zoom
    x, y, z = rotate_x(x, y, z, rotation_x)
    x, y, z = rotate_y(x, y, z, rotation_y)
    x, y, z = rotate_z(x, y, z, rotation_z)
    return x, y, z + camera_distance


@njit(cache=True)
def _transform_kernel(
    points: np.ndarray,
    zoom: float,
    cos_x: float, sin_x: float,
    cos_y: float, sin_y: float,
    cos_z: float, sin_z: float,
    camera_distance: float
) -> np.ndarray:
    """Transform an (N, 3) float64 array of points."""
    n = points.shape[0]
    out = np.empty((n, 3), dtype=np.float64)

    for i in range(n):
        x = points[i, 0] * zoom
        y = points[i, 1] * zoom
        z = points[i, 2] * zoom

        # X
        y, z = y * cos_x - z * sin_x, y * sin_x + z * cos_x
        # Y
        x, z = x * cos_y + z * sin_y, -x * sin_y + z * cos_y
        # Z
        x, y = x * cos_z - y * sin_z, x * sin_z + y * cos_z

        out[i, 0] = x
        out[i, 1] = y
        out[i, 2] = z + camera_distance

    return out


def transform_vertices(
    vertices: np.ndarray,
    zoom: float,
    rotation_x: float,
    rotation_y: float,
    rotation_z: float,
    camera_distance: float
) -> np.ndarray:
    """
    Batch model transform.

    Args:
        vertices: Array of shape (..., 3) with model-space positions
        zoom: Uniform scale factor
        rotation_x, rotation_y, rotation_z: Angles in radians
        camera_distance: Translation along +Z applied last

    Returns:
        Camera-space positions, same shape as the input
    """
    vertices = np.asarray(vertices, dtype=np.float64)
    if vertices.shape[-1] != 3:
        raise ValueError("Vertices must have shape (..., 3)")
    if vertices.size == 0:
        return vertices.copy()

    flat = np.ascontiguousarray(vertices.reshape(-1, 3))
    out = _transform_kernel(
        flat,
        float(zoom),
        math.cos(rotation_x), math.sin(rotation_x),
        math.cos(rotation_y), math.sin(rotation_y),
        math.cos(rotation_z), math.sin(rotation_z),
        float(camera_distance)
    )
    return out.reshape(vertices.shape)
