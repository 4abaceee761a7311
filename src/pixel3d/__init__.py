"""
Pixel3D
=======

Real-time style rendering of pixel art as voxel solids.

Each opaque pixel of an image becomes a cube in a one-voxel-deep slab. The
model is rendered with rotation, zoom and flat per-side shading as a list of
triangles composited back-to-front (painter's algorithm), without a depth
buffer.

Key Features:
- Interior-face culling between touching voxels
- Fixed-order rigid transform (scale, rotate X/Y/Z, translate) with a
  Numba-compiled batch kernel
- Perspective projection, backface culling and depth sorting
- Filled or wireframe rasterization onto a Pillow image
- Procedural 3x3x3 default cube when an image cannot be loaded

Example Usage:
    from pixel3d import create_from_image, ImageCanvas

    model = create_from_image("sword.png", voxel_size=20)
    model.set_rotation(0.3, 0.6, 0.0)

    canvas = ImageCanvas(800, 600)
    model.draw(canvas)
    canvas.image.save("sword_3d.png")
"""

__version__ = "1.0.0"
__author__ = "Pixel3D Team"

from .canvas import Canvas, ImageCanvas, draw_overlay
from .config import ViewerConfig
from .ingestion import LoadResult, default_cube_voxels, load_voxels, voxels_from_rgba
from .occlusion import OcclusionIndex, visible_faces
from .pipeline import RenderState, ScreenFace
from .renderer import (
    Image3D,
    Settings,
    create_default_cube,
    create_from_image,
    create_from_rgba,
)
from .transform import calculate_normal, project, rotate_x, rotate_y, rotate_z
from .voxel import FACE_DATA, Face, Voxel, create_voxel

__all__ = [
    "Image3D",
    "Settings",
    "create_from_image",
    "create_from_rgba",
    "create_default_cube",
    "RenderState",
    "ScreenFace",
    "Canvas",
    "ImageCanvas",
    "draw_overlay",
    "ViewerConfig",
    "LoadResult",
    "load_voxels",
    "voxels_from_rgba",
    "default_cube_voxels",
    "OcclusionIndex",
    "visible_faces",
    "Voxel",
    "Face",
    "FACE_DATA",
    "create_voxel",
    "rotate_x",
    "rotate_y",
    "rotate_z",
    "project",
    "calculate_normal",
]
