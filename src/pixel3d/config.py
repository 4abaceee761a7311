"""
Default Settings

Shared constants for the voxel builder and frame pipeline, plus the
ViewerConfig used by the hosts (CLI, web app, demo) that drive the
update/draw loop.
"""

from dataclasses import dataclass
from typing import Tuple

# Edge length of one voxel in model units
DEFAULT_VOXEL_SIZE = 20.0

# How far the model is pushed away from the camera along +z
DEFAULT_CAMERA_DISTANCE = 300.0

# Focal distance used by the perspective divide
DEFAULT_PROJECTION_DISTANCE = 800.0

MIN_ZOOM = 0.1

# Pixels with alpha at or below this value (0-1) are empty space
ALPHA_THRESHOLD = 0.1

# Vertical background gradient (RGB floats, top -> bottom)
BACKGROUND_TOP: Tuple[float, float, float] = (0.45, 0.5, 0.65)
BACKGROUND_BOTTOM: Tuple[float, float, float] = (0.15, 0.2, 0.35)

WIREFRAME_COLOR: Tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)


@dataclass
class ViewerConfig:
    """
    Settings for a host that renders frames of an Image3D.

    Attributes:
        width, height: Output surface size in pixels
        voxel_size: Edge length passed to the model factory
        rotation_speed: Radians per second for held rotation input
        zoom_speed: Zoom units per second for held zoom input
        auto_rotation: Angular velocities (x, y, z) in radians per second
        fps: Frames per second for animated output
        background: Draw the gradient background
        overlay: Draw the settings text overlay
    """

    width: int = 800
    height: int = 600
    voxel_size: float = DEFAULT_VOXEL_SIZE
    rotation_speed: float = 2.0
    zoom_speed: float = 2.0
    auto_rotation: Tuple[float, float, float] = (0.0, 1.25, 0.0)
    fps: int = 30
    background: bool = True
    overlay: bool = False

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid surface size {self.width}x{self.height}")
        if self.voxel_size <= 0:
            raise ValueError(f"Voxel size must be positive, got {self.voxel_size}")
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")

    @property
    def center(self) -> Tuple[float, float]:
        """Screen center (x, y)."""
        return (self.width / 2, self.height / 2)

    @property
    def frame_time(self) -> float:
        """Seconds per frame."""
        return 1.0 / self.fps
