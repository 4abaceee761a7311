"""
Occlusion Index and Visibility Filter

Interior-face elimination for voxel models:
1. Index: hash every voxel's integer grid position
2. Filter: a side of a voxel is visible when no voxel sits one voxel-size
   step away in that side's direction

Grid positions are measured in voxel-size steps from the first voxel of the
model, so positions built from sizes such as 0.1 or 0.3 still meet their
neighbors despite float round-off.

The filter only strips sides that are sealed against a touching voxel. It
never merges coplanar faces, and it assumes one uniform voxel size across
the model (voxels of different sizes are never treated as neighbors).
"""

from typing import Iterable, List, Sequence, Set, Tuple

from .voxel import FACE_CHECKS, Face, Voxel

Vec3 = Tuple[float, float, float]
GridKey = Tuple[int, int, int]


class OcclusionIndex:
    """
    Set of occupied voxel grid cells with O(1) membership tests.

    The index has no identity across frames; the frame pipeline builds a
    new one from the current voxel list every draw.
    """

    def __init__(
        self,
        positions: Iterable[Sequence[float]] = (),
        size: float = 1.0,
        origin: Vec3 = (0.0, 0.0, 0.0)
    ):
        """
        Initialize the index.

        Args:
            positions: Voxel center positions
            size: Uniform voxel edge length (one grid step)
            origin: Any voxel center on the grid
        """
        if size <= 0:
            raise ValueError(f"Voxel size must be positive, got {size}")

        self.size = float(size)
        self.origin = tuple(float(c) for c in origin)
        self._occupied: Set[GridKey] = {self.key(*p) for p in positions}

    @classmethod
    def build(cls, voxels: Sequence[Voxel]) -> "OcclusionIndex":
        """Index the positions of all voxels on the first voxel's grid."""
        if not voxels:
            return cls()
        first = voxels[0]
        return cls((voxel.position for voxel in voxels), first.size, first.position)

    def key(self, x: float, y: float, z: float) -> GridKey:
        """Integer grid cell of a position."""
        ox, oy, oz = self.origin
        s = self.size
        return (round((x - ox) / s), round((y - oy) / s), round((z - oz) / s))

    def contains(self, x: float, y: float, z: float) -> bool:
        """Check if a voxel exists at the given position."""
        return self.key(x, y, z) in self._occupied

    def __contains__(self, position: Sequence[float]) -> bool:
        return self.contains(*position)

    def __len__(self) -> int:
        return len(self._occupied)


def visible_faces(voxel: Voxel, index: OcclusionIndex) -> List[Face]:
    """
    Get the triangles of a voxel that are not sealed by a neighbor.

    Args:
        voxel: Voxel to test
        index: Occupancy of the whole model

    Returns:
        List of Face entries, two per exposed side
    """
    faces = voxel.faces
    result = []

    for check in FACE_CHECKS:
        if not index.contains(*voxel.neighbor_position(check.direction)):
            result.append(faces[check.faces[0]])
            result.append(faces[check.faces[1]])

    return result


def count_visible_faces(voxels: List[Voxel]) -> int:
    """Count exposed triangles over a whole model."""
    index = OcclusionIndex.build(voxels)
    return sum(len(visible_faces(voxel, index)) for voxel in voxels)
