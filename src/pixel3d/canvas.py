"""
Raster Targets

The frame pipeline rasterizes onto anything with polygon() and line()
methods (the Canvas protocol). ImageCanvas is the Pillow-backed target used
by the CLI, the web app and the demo.

Colors are RGBA float tuples in [0, 1]; ImageCanvas converts them to 8-bit
and draws opaque (the alpha component is not blended).
"""

from typing import Optional, Protocol, Sequence, Tuple
import numpy as np
from PIL import Image, ImageDraw

from .config import BACKGROUND_BOTTOM, BACKGROUND_TOP

Point = Tuple[float, float]
Color = Sequence[float]


class Canvas(Protocol):
    """Drawing surface for the frame pipeline."""

    def polygon(self, points: Sequence[Point], color: Color) -> None:
        ...

    def line(self, start: Point, end: Point, color: Color) -> None:
        ...


def to_rgb8(color: Color) -> Tuple[int, int, int]:
    """Convert a float color to an 8-bit RGB tuple, clamping to [0, 1]."""
    return tuple(
        int(round(max(0.0, min(1.0, float(c))) * 255)) for c in color[:3]
    )


def vertical_gradient(
    width: int,
    height: int,
    top: Color = BACKGROUND_TOP,
    bottom: Color = BACKGROUND_BOTTOM
) -> Image.Image:
    """
    Create a vertical two-color gradient.

    Args:
        width, height: Image size in pixels
        top: RGB floats at the first row
        bottom: RGB floats at the last row

    Returns:
        RGB PIL image
    """
    t = np.linspace(0.0, 1.0, height, dtype=np.float64)[:, None]
    top_rgb = np.asarray(top[:3], dtype=np.float64)
    bottom_rgb = np.asarray(bottom[:3], dtype=np.float64)

    rows = (1.0 - t) * top_rgb + t * bottom_rgb            # (H, 3)
    pixels = np.repeat(rows[:, None, :], width, axis=1)    # (H, W, 3)
    pixels = np.clip(np.rint(pixels * 255), 0, 255).astype(np.uint8)

    return Image.fromarray(pixels)


class ImageCanvas:
    """
    Pillow image as a Canvas.

    Attributes:
        image: The RGB image being drawn on
    """

    def __init__(
        self,
        width: int,
        height: int,
        background: Optional[Color] = None,
        gradient: bool = True
    ):
        """
        Initialize the canvas.

        Args:
            width, height: Surface size in pixels
            background: Solid RGB fill; overrides the gradient when given
            gradient: Start from the default vertical gradient
        """
        self.width = width
        self.height = height

        if background is not None:
            self.image = Image.new("RGB", (width, height), to_rgb8(background))
        elif gradient:
            self.image = vertical_gradient(width, height)
        else:
            self.image = Image.new("RGB", (width, height), (0, 0, 0))

        self._draw = ImageDraw.Draw(self.image)

    def polygon(self, points: Sequence[Point], color: Color) -> None:
        """Fill a polygon."""
        self._draw.polygon([tuple(p) for p in points], fill=to_rgb8(color))

    def line(self, start: Point, end: Point, color: Color) -> None:
        """Draw a one-pixel line."""
        self._draw.line([tuple(start), tuple(end)], fill=to_rgb8(color), width=1)

    def text(self, position: Point, text: str, color: Color = (1.0, 1.0, 1.0)) -> None:
        """Draw text with Pillow's default bitmap font."""
        self._draw.text(tuple(position), text, fill=to_rgb8(color))

    def to_array(self) -> np.ndarray:
        """Get the image as an (H, W, 3) uint8 array."""
        return np.array(self.image, dtype=np.uint8)


def format_settings(settings, label: Optional[str] = None) -> list:
    """
    Build the overlay lines for a settings snapshot.

    Args:
        settings: Settings from Image3D.get_settings()
        label: Optional description of what is being displayed

    Returns:
        List of text lines
    """
    def on_off(flag):
        return "ON" if flag else "OFF"

    lines = [
        "3D Pixel Art Renderer",
        f"Voxels: {settings.voxel_count}",
        f"Faces rendered: {settings.faces_rendered}",
        f"Zoom: {settings.zoom:.1f}",
        f"Auto rotate: {on_off(settings.auto_rotate)}",
        f"Wireframe: {on_off(settings.wireframe)}",
        f"Shade: {on_off(settings.shade_enabled)}",
    ]
    if label:
        source = "image" if settings.loaded_from_image else "default cube"
        lines.append(f"Displaying: {label} ({source})")
    return lines


def draw_overlay(
    canvas: ImageCanvas,
    settings,
    label: Optional[str] = None,
    origin: Point = (10, 10),
    line_height: int = 14
) -> None:
    """Write the settings text in the top-left corner of a canvas."""
    x, y = origin
    for i, line in enumerate(format_settings(settings, label)):
        canvas.text((x, y + i * line_height), line, (1.0, 1.0, 1.0))
