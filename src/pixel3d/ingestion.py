"""
Image Ingestion and Voxel Building Module

This module handles:
- Loading raster images of any format Pillow can decode, as RGBA floats
- Alpha thresholding (pixels at or below the threshold are empty space)
- Building a single-voxel-deep slab from the opaque pixels
- The procedural 3x3x3 default cube

Loading never raises for a bad file. load_voxels() returns a LoadResult and
the caller decides what to substitute on failure.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union
import logging
import numpy as np
from PIL import Image, UnidentifiedImageError

from .config import ALPHA_THRESHOLD, DEFAULT_VOXEL_SIZE
from .voxel import Voxel, create_voxel

LOGGER = logging.getLogger(__name__)

# Cycled per voxel when building the default cube
DEFAULT_CUBE_COLORS: Tuple[Tuple[float, float, float, float], ...] = (
    (1.0, 0.0, 0.0, 1.0),  # Red
    (0.0, 1.0, 0.0, 1.0),  # Green
    (0.0, 0.0, 1.0, 1.0),  # Blue
    (1.0, 1.0, 0.0, 1.0),  # Yellow
    (1.0, 0.0, 1.0, 1.0),  # Magenta
    (0.0, 1.0, 1.0, 1.0),  # Cyan
    (1.0, 0.5, 0.0, 1.0),  # Orange
    (0.5, 0.0, 1.0, 1.0),  # Purple
    (1.0, 1.0, 1.0, 1.0),  # White
)


class ImageLoader:
    """
    Pixel art image loader.

    Images are converted to RGBA and normalized to floats in [0, 1] so the
    alpha threshold and voxel colors share one scale regardless of the
    source format's bit depth.
    """

    def __init__(self, alpha_threshold: float = ALPHA_THRESHOLD):
        """
        Initialize the image loader.

        Args:
            alpha_threshold: Pixels with alpha > threshold become voxels (0-1)
        """
        self.alpha_threshold = alpha_threshold
        self._rgba: Optional[np.ndarray] = None

    def load(self, image_path: Union[str, Path]) -> "ImageLoader":
        """
        Load an image from disk.

        Args:
            image_path: Path to the image

        Returns:
            self for method chaining

        Raises:
            FileNotFoundError: The path does not exist
            PIL.UnidentifiedImageError: The file is not a decodable image
        """
        image_path = Path(image_path)
        if not image_path.exists():
            raise FileNotFoundError(f"Image not found: {image_path}")

        with Image.open(image_path) as img:
            if img.mode != "RGBA":
                img = img.convert("RGBA")
            rgba = np.array(img, dtype=np.uint8)

        return self.load_from_array(rgba)

    def load_from_array(self, rgba_array: np.ndarray) -> "ImageLoader":
        """
        Load from a numpy array instead of a file.

        Args:
            rgba_array: RGBA array of shape (H, W, 4); uint8 arrays are
                scaled to [0, 1], float arrays are used as-is

        Returns:
            self for method chaining
        """
        self._rgba = normalize_rgba(rgba_array)
        return self

    @property
    def rgba(self) -> np.ndarray:
        """Get the RGBA float array."""
        if self._rgba is None:
            raise RuntimeError("No image loaded")
        return self._rgba

    @property
    def alpha_mask(self) -> np.ndarray:
        """Get the binary alpha mask (True = voxel, False = empty)."""
        return self.rgba[:, :, 3] > self.alpha_threshold

    @property
    def size(self) -> Tuple[int, int]:
        """Get image size as (width, height)."""
        h, w = self.rgba.shape[:2]
        return (w, h)

    def build_voxels(self, voxel_size: float = DEFAULT_VOXEL_SIZE) -> List[Voxel]:
        """Build one voxel per opaque pixel."""
        return voxels_from_rgba(self.rgba, voxel_size, self.alpha_threshold)


def normalize_rgba(rgba_array: np.ndarray) -> np.ndarray:
    """
    Validate an RGBA array and convert it to float64 in [0, 1].

    Args:
        rgba_array: Array of shape (H, W, 4)

    Returns:
        Float array of the same shape
    """
    rgba_array = np.asarray(rgba_array)
    if rgba_array.ndim != 3 or rgba_array.shape[2] != 4:
        raise ValueError("Color array must have shape (H, W, 4)")

    if np.issubdtype(rgba_array.dtype, np.integer):
        return rgba_array.astype(np.float64) / 255.0
    return rgba_array.astype(np.float64)


def voxels_from_rgba(
    rgba: np.ndarray,
    voxel_size: float = DEFAULT_VOXEL_SIZE,
    alpha_threshold: float = ALPHA_THRESHOLD
) -> List[Voxel]:
    """
    Convert an image to a flat slab of voxels.

    Each opaque pixel (px, py) becomes a voxel at
    (offset_x + px * size, offset_y + (height - 1 - py) * size, 0), where
    the offsets center the sheet on the origin. Row 0 of the image ends up
    at the top of the model.

    Args:
        rgba: RGBA array of shape (H, W, 4), uint8 or float
        voxel_size: Edge length of each voxel
        alpha_threshold: Pixels with alpha > threshold become voxels (0-1)

    Returns:
        Voxels in row-major pixel order
    """
    if voxel_size <= 0:
        raise ValueError(f"Voxel size must be positive, got {voxel_size}")

    rgba = normalize_rgba(rgba)
    height, width = rgba.shape[:2]

    offset_x = -width * voxel_size / 2
    offset_y = -height * voxel_size / 2

    voxels = []
    for py, px in np.argwhere(rgba[:, :, 3] > alpha_threshold):
        x = offset_x + int(px) * voxel_size
        y = offset_y + (height - 1 - int(py)) * voxel_size
        voxels.append(create_voxel(x, y, 0.0, voxel_size, tuple(rgba[py, px])))

    return voxels


def default_cube_voxels(voxel_size: float = DEFAULT_VOXEL_SIZE) -> List[Voxel]:
    """
    Create the procedural 3x3x3 cube.

    Returns:
        27 voxels centered on the origin, colors cycling through
        DEFAULT_CUBE_COLORS
    """
    if voxel_size <= 0:
        raise ValueError(f"Voxel size must be positive, got {voxel_size}")

    voxels = []
    color_index = 0
    for x in range(-1, 2):
        for y in range(-1, 2):
            for z in range(-1, 2):
                voxels.append(create_voxel(
                    x * voxel_size, y * voxel_size, z * voxel_size,
                    voxel_size, DEFAULT_CUBE_COLORS[color_index]
                ))
                color_index = (color_index + 1) % len(DEFAULT_CUBE_COLORS)

    return voxels


@dataclass
class LoadResult:
    """
    Outcome of loading an image as voxels.

    Attributes:
        source: The requested image path
        voxels: Built voxels (empty on failure)
        error: Failure reason, None on success
        image_size: (width, height) of the decoded image
    """

    source: str
    voxels: List[Voxel] = field(default_factory=list)
    error: Optional[str] = None
    image_size: Optional[Tuple[int, int]] = None

    @property
    def ok(self) -> bool:
        """True when the image was decoded."""
        return self.error is None


def load_voxels(
    image_path: Union[str, Path],
    voxel_size: float = DEFAULT_VOXEL_SIZE,
    alpha_threshold: float = ALPHA_THRESHOLD
) -> LoadResult:
    """
    Load an image and build its voxels.

    Decode failures (missing file, unreadable or unsupported format,
    images over the Pillow pixel limit) are reported through the result,
    never raised.

    Args:
        image_path: Path to the image
        voxel_size: Edge length of each voxel
        alpha_threshold: Pixels with alpha > threshold become voxels (0-1)

    Returns:
        LoadResult
    """
    loader = ImageLoader(alpha_threshold)
    try:
        loader.load(image_path)
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError, ValueError) as e:
        return LoadResult(source=str(image_path), error=str(e))

    voxels = loader.build_voxels(voxel_size)
    LOGGER.debug("Built %d voxels from %s %s", len(voxels), image_path, loader.size)
    return LoadResult(source=str(image_path), voxels=voxels, image_size=loader.size)
