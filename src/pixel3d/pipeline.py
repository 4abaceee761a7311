"""
Frame Pipeline

Per-frame geometry for a voxel model, in order:
1. Build the occlusion index from the voxel list
2. Keep only the unsealed triangles of each voxel
3. Transform the corners of voxels that have any visible triangle
   (scale, rotate X, rotate Y, rotate Z, push away from the camera)
4. Drop triangles with a vertex at or behind the camera plane (no clipping)
5. Backface cull on the recomputed normal
6. Project, drop on projection failure, average the depth
7. Sort back-to-front (painter's algorithm)
8. Rasterize as filled or wireframe triangles

Nothing here raises for degenerate geometry; affected triangles are simply
left out of the frame.
"""

from dataclasses import dataclass
from operator import attrgetter
from typing import List, NamedTuple, Optional, Sequence, Tuple
import numpy as np

from .canvas import Canvas
from .config import (
    DEFAULT_CAMERA_DISTANCE,
    DEFAULT_PROJECTION_DISTANCE,
    MIN_ZOOM,
    WIREFRAME_COLOR,
)
from .occlusion import OcclusionIndex, visible_faces
from .transform import calculate_normal, project, transform_vertices
from .voxel import Voxel


@dataclass
class RenderState:
    """
    View state of a model, read by the pipeline every frame.

    Angles are radians and are not wrapped. Zoom never goes below MIN_ZOOM
    through the Image3D setters.
    """

    rotation_x: float = 0.0
    rotation_y: float = 0.0
    rotation_z: float = 0.0
    zoom: float = 1.0
    center_x: float = 400.0
    center_y: float = 300.0
    camera_distance: float = DEFAULT_CAMERA_DISTANCE
    projection_distance: float = DEFAULT_PROJECTION_DISTANCE
    auto_rotate: bool = False
    auto_rotation_x: float = 0.0
    auto_rotation_y: float = 0.0
    auto_rotation_z: float = 0.0
    wireframe: bool = False
    shade_enabled: bool = False
    faces_rendered: int = 0

    def __post_init__(self):
        self.zoom = max(MIN_ZOOM, self.zoom)


class ScreenFace(NamedTuple):
    """A projected triangle, alive for one frame."""
    points: Tuple[Tuple[float, float], ...]      # 3 screen points
    color: Tuple[float, float, float, float]     # source RGBA
    shade: float                                 # intensity multiplier
    avg_z: float                                 # mean camera-space depth


def stack_vertices(voxels: Sequence[Voxel]) -> np.ndarray:
    """Stack voxel corners into an (N, 8, 3) array."""
    if not voxels:
        return np.zeros((0, 8, 3), dtype=np.float64)
    return np.stack([voxel.vertices for voxel in voxels])


def collect_faces(
    voxels: Sequence[Voxel],
    state: RenderState,
    vertex_block: Optional[np.ndarray] = None
) -> List[ScreenFace]:
    """
    Run the geometry stages of the pipeline.

    Args:
        voxels: The model
        state: View state
        vertex_block: Optional precomputed stack_vertices(voxels)

    Returns:
        Screen faces sorted by avg_z, farthest first
    """
    if vertex_block is None:
        vertex_block = stack_vertices(voxels)

    index = OcclusionIndex.build(voxels)

    active = []
    for i, voxel in enumerate(voxels):
        faces = visible_faces(voxel, index)
        if faces:
            active.append((i, faces))

    if not active:
        return []

    transformed = transform_vertices(
        vertex_block[[i for i, _ in active]],
        state.zoom,
        state.rotation_x, state.rotation_y, state.rotation_z,
        state.camera_distance
    )

    cx, cy = state.center_x, state.center_y
    distance = state.projection_distance
    pending = []

    for (i, faces), corners in zip(active, transformed.tolist()):
        color = voxels[i].color

        for face in faces:
            a, b, c = face.indices
            v1, v2, v3 = corners[a], corners[b], corners[c]

            # Whole triangle is dropped if any vertex is behind the camera
            if not (v1[2] > 0 and v2[2] > 0 and v3[2] > 0):
                continue

            _, _, nz = calculate_normal(v1, v2, v3)
            if nz < 0:
                continue

            p1 = project(v1[0], v1[1], v1[2], cx, cy, distance)
            p2 = project(v2[0], v2[1], v2[2], cx, cy, distance)
            p3 = project(v3[0], v3[1], v3[2], cx, cy, distance)
            if p1 is None or p2 is None or p3 is None:
                continue

            shade = face.shade if state.shade_enabled else 1.0
            avg_z = (v1[2] + v2[2] + v3[2]) / 3

            pending.append(ScreenFace((p1, p2, p3), color, shade, avg_z))

    pending.sort(key=attrgetter("avg_z"), reverse=True)
    return pending


def shaded_color(face: ScreenFace) -> Tuple[float, float, float, float]:
    """Multiply RGB by the face's shade; alpha is left as-is."""
    r, g, b, a = face.color
    s = face.shade
    return (r * s, g * s, b * s, a)


def rasterize(faces: Sequence[ScreenFace], canvas: Canvas, wireframe: bool = False):
    """
    Draw faces in list order.

    Args:
        faces: Sorted screen faces (farthest first)
        canvas: Drawing target
        wireframe: Draw white outlines instead of filled triangles
    """
    for face in faces:
        p1, p2, p3 = face.points
        if wireframe:
            canvas.line(p1, p2, WIREFRAME_COLOR)
            canvas.line(p2, p3, WIREFRAME_COLOR)
            canvas.line(p3, p1, WIREFRAME_COLOR)
        else:
            canvas.polygon((p1, p2, p3), shaded_color(face))
