"""
Voxel Data Structures

A voxel is an axis-aligned cube with 8 corner vertices and 12 triangles.
The triangle topology, shade constants and direction hints are the same for
every voxel and live in one shared table (FACE_DATA). Only the position,
size, color and corner vertices are per-voxel.

Corner layout (s = size / 2):

    index  offset          index  offset
    0      (-s, -s, -s)    4      (-s, -s, +s)
    1      (+s, -s, -s)    5      (+s, -s, +s)
    2      (+s, +s, -s)    6      (+s, +s, +s)
    3      (-s, +s, -s)    7      (-s, +s, +s)

Corners 0-3 form the front square (nearest the camera), 4-7 the back square.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import NamedTuple, Sequence, Tuple
import numpy as np

Vec3 = Tuple[float, float, float]
Color = Tuple[float, float, float, float]


class FaceDirection(IntEnum):
    """Cube sides, in FACE_DATA order."""
    FRONT = 0   # -Z
    BACK = 1    # +Z
    LEFT = 2    # -X
    RIGHT = 3   # +X
    TOP = 4     # +Y
    BOTTOM = 5  # -Y


# Axis-aligned direction hint for each side
FACE_DIRECTIONS: Tuple[Tuple[int, int, int], ...] = (
    (0, 0, -1),  # FRONT
    (0, 0, 1),   # BACK
    (-1, 0, 0),  # LEFT
    (1, 0, 0),   # RIGHT
    (0, 1, 0),   # TOP
    (0, -1, 0),  # BOTTOM
)

# Static "directional light" per side, applied only when shading is enabled
FACE_SHADES: Tuple[float, ...] = (1.0, 0.6, 0.8, 0.9, 0.7, 0.5)

# Unit cube corners, scaled by size / 2 around the voxel center
CORNER_OFFSETS = np.array([
    [-1, -1, -1],
    [1, -1, -1],
    [1, 1, -1],
    [-1, 1, -1],
    [-1, -1, 1],
    [1, -1, 1],
    [1, 1, 1],
    [-1, 1, 1],
], dtype=np.float64)


class Face(NamedTuple):
    """One triangle of the cube topology."""
    indices: Tuple[int, int, int]    # corner indices into Voxel.vertices
    shade: float                     # shade constant in (0, 1]
    direction: Tuple[int, int, int]  # outward axis hint, for occlusion only


def _side(direction: FaceDirection, first, second) -> Tuple[Face, Face]:
    return (
        Face(first, FACE_SHADES[direction], FACE_DIRECTIONS[direction]),
        Face(second, FACE_SHADES[direction], FACE_DIRECTIONS[direction]),
    )


# Two triangles per side with one winding throughout, so the normal computed
# from the transformed corners always points into the cube. Back-facing
# triangles are the ones whose computed normal has negative z.
FACE_DATA: Tuple[Face, ...] = (
    *_side(FaceDirection.FRONT, (0, 1, 2), (0, 2, 3)),
    *_side(FaceDirection.BACK, (4, 6, 5), (4, 7, 6)),
    *_side(FaceDirection.LEFT, (0, 3, 7), (0, 7, 4)),
    *_side(FaceDirection.RIGHT, (1, 5, 6), (1, 6, 2)),
    *_side(FaceDirection.TOP, (2, 6, 7), (2, 7, 3)),
    *_side(FaceDirection.BOTTOM, (0, 4, 5), (0, 5, 1)),
)


class FaceCheck(NamedTuple):
    """A side's direction and the FACE_DATA indices of its two triangles."""
    direction: Tuple[int, int, int]
    faces: Tuple[int, int]


FACE_CHECKS: Tuple[FaceCheck, ...] = tuple(
    FaceCheck(FACE_DIRECTIONS[side], (2 * side, 2 * side + 1))
    for side in FaceDirection
)


@dataclass(eq=False)
class Voxel:
    """
    A single colored cube.

    Vertices are computed once from the position and size and are read-only;
    rotation and zoom are applied per frame on copies.
    """

    position: Vec3
    size: float
    color: Color
    vertices: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        if self.size <= 0:
            raise ValueError(f"Voxel size must be positive, got {self.size}")

        self.position = tuple(float(c) for c in self.position)
        self.size = float(self.size)
        self.color = _as_rgba(self.color)

        vertices = np.asarray(self.position) + CORNER_OFFSETS * (self.size / 2)
        vertices.flags.writeable = False
        self.vertices = vertices

    @property
    def faces(self) -> Tuple[Face, ...]:
        """The shared 12-triangle topology."""
        return FACE_DATA

    def neighbor_position(self, direction: Sequence[int]) -> Vec3:
        """Position one voxel step away along an axis direction."""
        x, y, z = self.position
        return (
            x + direction[0] * self.size,
            y + direction[1] * self.size,
            z + direction[2] * self.size,
        )


def _as_rgba(color: Sequence[float]) -> Color:
    """Normalize a color to an RGBA float tuple."""
    if len(color) == 3:
        r, g, b = color
        a = 1.0
    elif len(color) == 4:
        r, g, b, a = color
    else:
        raise ValueError(f"Color must have 3 or 4 components, got {len(color)}")
    return (float(r), float(g), float(b), float(a))


def create_voxel(
    x: float, y: float, z: float,
    size: float,
    color: Sequence[float]
) -> Voxel:
    """
    Create a voxel centered at (x, y, z).

    Args:
        x, y, z: Center position
        size: Edge length
        color: RGB or RGBA floats in [0, 1]

    Returns:
        New Voxel
    """
    return Voxel((x, y, z), size, color)
