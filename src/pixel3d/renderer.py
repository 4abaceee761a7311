"""
Image3D Renderable Model

This is the primary interface for hosts. An Image3D owns:
1. The voxel list (from an image, or the default cube on load failure)
2. Its RenderState (rotation, zoom, screen center, toggles)
3. The per-frame entry points update(dt) and draw(canvas)

Hosts call update(dt) then draw(canvas) once per frame and drive the
setters from their input handling. Setters take effect on the next draw.

Example Usage:
    model = create_from_image("sword.png", voxel_size=20)
    model.set_position(400, 300)
    model.set_auto_rotation(0, 1.25, 0)

    canvas = ImageCanvas(800, 600)
    model.update(1 / 30)
    model.draw(canvas)
    canvas.image.save("frame.png")
"""

from pathlib import Path
from typing import List, NamedTuple, Optional, Tuple, Union
import logging
import numpy as np

from .canvas import Canvas
from .config import (
    DEFAULT_CAMERA_DISTANCE,
    DEFAULT_PROJECTION_DISTANCE,
    DEFAULT_VOXEL_SIZE,
    MIN_ZOOM,
)
from .ingestion import LoadResult, default_cube_voxels, load_voxels, voxels_from_rgba
from .pipeline import RenderState, ScreenFace, collect_faces, rasterize, stack_vertices
from .voxel import Voxel

LOGGER = logging.getLogger(__name__)


class Settings(NamedTuple):
    """Read-only snapshot of a model's settings and diagnostics."""
    zoom: float
    auto_rotate: bool
    wireframe: bool
    shade_enabled: bool
    rotation_x: float
    rotation_y: float
    rotation_z: float
    voxel_count: int
    faces_rendered: int
    loaded_from_image: bool


class Image3D:
    """
    A voxelized image with view state.

    Attributes:
        voxel_size: Edge length of every voxel in the model
        state: The RenderState read by the frame pipeline
        loaded_from_image: False when the model is the default cube
    """

    def __init__(
        self,
        image_path: Optional[Union[str, Path]] = None,
        voxel_size: float = DEFAULT_VOXEL_SIZE,
        voxels: Optional[List[Voxel]] = None,
        center: Tuple[float, float] = (400.0, 300.0),
        camera_distance: float = DEFAULT_CAMERA_DISTANCE,
        projection_distance: float = DEFAULT_PROJECTION_DISTANCE
    ):
        """
        Initialize the model.

        Args:
            image_path: Image to voxelize; the default cube is used when
                None or when the image cannot be loaded
            voxel_size: Edge length of each voxel
            voxels: Prebuilt voxels, used instead of image_path
            center: Screen position of the model center
            camera_distance: Distance from the camera to the model origin
            projection_distance: Focal distance of the projection
        """
        if voxel_size <= 0:
            raise ValueError(f"Voxel size must be positive, got {voxel_size}")

        self.voxel_size = voxel_size
        self.state = RenderState(
            center_x=center[0],
            center_y=center[1],
            camera_distance=camera_distance,
            projection_distance=projection_distance,
        )
        self.loaded_from_image = False
        self._voxels: List[Voxel] = []
        self._vertex_block = stack_vertices([])

        if voxels is not None:
            self._set_voxels(voxels)
        elif image_path is not None:
            self.load_image(image_path)
        else:
            self.load_default_cube()

    def _set_voxels(self, voxels: List[Voxel]):
        """Replace the voxel list wholesale."""
        self._voxels = list(voxels)
        self._vertex_block = stack_vertices(self._voxels)

    @property
    def voxels(self) -> List[Voxel]:
        """Get the current voxel list."""
        return self._voxels

    # Loading

    def load_image(self, image_path: Union[str, Path]) -> LoadResult:
        """
        Replace the model with the voxels of an image.

        Falls back to the default cube when the image cannot be loaded.

        Returns:
            The LoadResult from the loader
        """
        result = load_voxels(image_path, self.voxel_size)

        if not result.ok:
            LOGGER.warning("Could not load image '%s': %s", image_path, result.error)
            self.load_default_cube()
            return result

        self._set_voxels(result.voxels)
        self.loaded_from_image = True
        LOGGER.info("Loaded %d voxels from %s", len(self._voxels), image_path)
        return result

    def load_default_cube(self):
        """Replace the model with the 3x3x3 default cube."""
        self._set_voxels(default_cube_voxels(self.voxel_size))
        self.loaded_from_image = False
        LOGGER.info("Loaded default cube with %d voxels", len(self._voxels))

    # Per frame

    def update(self, dt: float):
        """Advance auto-rotation by dt seconds."""
        state = self.state
        if state.auto_rotate:
            state.rotation_x += state.auto_rotation_x * dt
            state.rotation_y += state.auto_rotation_y * dt
            state.rotation_z += state.auto_rotation_z * dt

    def collect_faces(self) -> List[ScreenFace]:
        """Run the geometry stages and return faces, farthest first."""
        return collect_faces(self._voxels, self.state, self._vertex_block)

    def draw(self, canvas: Canvas) -> List[ScreenFace]:
        """
        Render one frame onto a canvas.

        Records the face count for get_settings().

        Returns:
            The faces drawn, in draw order (for hosts and tests that
            inspect the frame; callers may ignore it)
        """
        faces = self.collect_faces()
        rasterize(faces, canvas, self.state.wireframe)

        self.state.faces_rendered = len(faces)
        LOGGER.debug(
            "Rendered %d faces from %d voxels", len(faces), len(self._voxels)
        )
        return faces

    # Screen position

    def set_position(self, x: float, y: float):
        self.state.center_x = x
        self.state.center_y = y

    # Relative rotation

    def rotate_left(self, amount: float):
        self.state.rotation_y += amount

    def rotate_right(self, amount: float):
        self.state.rotation_y -= amount

    def rotate_up(self, amount: float):
        self.state.rotation_x -= amount

    def rotate_down(self, amount: float):
        self.state.rotation_x += amount

    def roll_left(self, amount: float):
        self.state.rotation_z -= amount

    def roll_right(self, amount: float):
        self.state.rotation_z += amount

    # Absolute rotation

    def set_rotation_x(self, angle: float):
        self.state.rotation_x = angle

    def set_rotation_y(self, angle: float):
        self.state.rotation_y = angle

    def set_rotation_z(self, angle: float):
        self.state.rotation_z = angle

    def set_rotation(
        self,
        x: Optional[float] = None,
        y: Optional[float] = None,
        z: Optional[float] = None
    ):
        """Set rotation angles; axes passed as None keep their value."""
        if x is not None:
            self.state.rotation_x = x
        if y is not None:
            self.state.rotation_y = y
        if z is not None:
            self.state.rotation_z = z

    def reset_rotation(self):
        self.set_rotation(0.0, 0.0, 0.0)

    # Zoom

    def zoom_in(self, amount: float):
        self.state.zoom = max(MIN_ZOOM, self.state.zoom + amount)

    def zoom_out(self, amount: float):
        self.state.zoom = max(MIN_ZOOM, self.state.zoom - amount)

    def set_zoom(self, zoom: float):
        self.state.zoom = max(MIN_ZOOM, zoom)

    # Toggles

    def set_auto_rotation(self, x: float, y: float, z: float):
        """Set angular velocities (radians per second) and enable auto-rotation."""
        self.state.auto_rotation_x = x
        self.state.auto_rotation_y = y
        self.state.auto_rotation_z = z
        self.state.auto_rotate = True

    def toggle_auto_rotate(self):
        self.state.auto_rotate = not self.state.auto_rotate

    def toggle_wireframe(self):
        self.state.wireframe = not self.state.wireframe

    def toggle_shade(self):
        self.state.shade_enabled = not self.state.shade_enabled

    def get_settings(self) -> Settings:
        """Snapshot the current settings for display."""
        state = self.state
        return Settings(
            zoom=state.zoom,
            auto_rotate=state.auto_rotate,
            wireframe=state.wireframe,
            shade_enabled=state.shade_enabled,
            rotation_x=state.rotation_x,
            rotation_y=state.rotation_y,
            rotation_z=state.rotation_z,
            voxel_count=len(self._voxels),
            faces_rendered=state.faces_rendered,
            loaded_from_image=self.loaded_from_image,
        )


def create_from_image(
    image_path: Union[str, Path],
    voxel_size: float = DEFAULT_VOXEL_SIZE,
    **kwargs
) -> Image3D:
    """
    Create a model from an image, or the default cube if it cannot be loaded.

    Args:
        image_path: Path to the image
        voxel_size: Edge length of each voxel
        **kwargs: Passed to Image3D (center, camera_distance, ...)
    """
    return Image3D(image_path, voxel_size, **kwargs)


def create_from_rgba(
    rgba: np.ndarray,
    voxel_size: float = DEFAULT_VOXEL_SIZE,
    **kwargs
) -> Image3D:
    """
    Create a model from an in-memory RGBA array.

    Args:
        rgba: Array of shape (H, W, 4), uint8 or float in [0, 1]
        voxel_size: Edge length of each voxel
        **kwargs: Passed to Image3D
    """
    voxels = voxels_from_rgba(rgba, voxel_size)
    model = Image3D(voxel_size=voxel_size, voxels=voxels, **kwargs)
    model.loaded_from_image = True
    return model


def create_default_cube(voxel_size: float = DEFAULT_VOXEL_SIZE, **kwargs) -> Image3D:
    """Create a model holding the 3x3x3 default cube."""
    return Image3D(None, voxel_size, **kwargs)
