"""
Command-Line Interface for Pixel3D

Usage:
    pixel3d sprite.png -o sprite_3d.png
    pixel3d sprite.png --rotation 0.4 0.6 0 --shade -o still.png
    pixel3d sprite.png --frames 60 --fps 30 -o turntable.gif

"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional
import time

from PIL import Image

from .canvas import ImageCanvas, draw_overlay
from .config import DEFAULT_VOXEL_SIZE, ViewerConfig
from .renderer import Image3D, create_default_cube, create_from_image


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pixel3d",
        description="Pixel3D - Render 2D pixel art as a rotating 3D voxel solid",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pixel3d sprite.png -o sprite_3d.png
      Render a single frame

  pixel3d sprite.png --rotation 0.4 0.6 0 --shade -o still.png
      Render at a fixed orientation with side shading

  pixel3d sprite.png --frames 60 --fps 30 -o turntable.gif
      Render an auto-rotating animation

  pixel3d --frames 48 --wireframe -o cube.gif
      Render the default cube as a wireframe

If the input image is missing or cannot be decoded, the default 3x3x3 cube
is rendered instead.
        """
    )

    # Input
    parser.add_argument(
        "input",
        nargs="?",
        help="Input image file (omit to render the default cube)"
    )

    # Output
    parser.add_argument(
        "-o", "--output",
        default="render.png",
        help="Output file; .gif writes all frames, other formats the last frame"
    )

    parser.add_argument(
        "--width",
        type=int,
        default=800,
        help="Output width in pixels (default: 800)"
    )

    parser.add_argument(
        "--height",
        type=int,
        default=600,
        help="Output height in pixels (default: 600)"
    )

    # Model settings
    parser.add_argument(
        "--voxel-size",
        type=float,
        default=DEFAULT_VOXEL_SIZE,
        help=f"Voxel edge length (default: {DEFAULT_VOXEL_SIZE:g})"
    )

    # View settings
    parser.add_argument(
        "--rotation",
        type=float,
        nargs=3,
        metavar=("X", "Y", "Z"),
        default=[0.0, 0.0, 0.0],
        help="Initial rotation in radians (default: 0 0 0)"
    )

    parser.add_argument(
        "--zoom",
        type=float,
        default=1.0,
        help="Zoom factor, minimum 0.1 (default: 1.0)"
    )

    parser.add_argument(
        "--wireframe",
        action="store_true",
        help="Draw triangle outlines instead of filled faces"
    )

    parser.add_argument(
        "--shade",
        action="store_true",
        help="Apply per-side shade constants"
    )

    # Animation
    parser.add_argument(
        "--frames",
        type=int,
        default=1,
        help="Number of frames to render (default: 1)"
    )

    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Frames per second for animation timing (default: 30)"
    )

    parser.add_argument(
        "--auto-rotation",
        type=float,
        nargs=3,
        metavar=("X", "Y", "Z"),
        default=None,
        help="Auto-rotation velocities in radians/s (default: 0 1.25 0 when --frames > 1)"
    )

    # Presentation
    parser.add_argument(
        "--no-background",
        action="store_true",
        help="Black background instead of the gradient"
    )

    parser.add_argument(
        "--overlay",
        action="store_true",
        help="Draw the settings overlay"
    )

    # Misc
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output with debug logging"
    )

    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print model and frame statistics"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0"
    )

    return parser


def configure_logging(verbose: bool):
    """Send library log records to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s"
    )
    if verbose:
        # numba's compiler logs at debug level
        logging.getLogger("numba").setLevel(logging.WARNING)


def build_model(args, config: ViewerConfig) -> Image3D:
    """Create the model and apply the view settings from the arguments."""
    if args.input:
        model = create_from_image(args.input, config.voxel_size)
    else:
        model = create_default_cube(config.voxel_size)

    model.set_position(*config.center)
    model.set_rotation(*args.rotation)
    model.set_zoom(args.zoom)

    if args.wireframe:
        model.toggle_wireframe()
    if args.shade:
        model.toggle_shade()

    if args.auto_rotation is not None:
        model.set_auto_rotation(*args.auto_rotation)
    elif args.frames > 1:
        model.set_auto_rotation(*config.auto_rotation)

    return model


def render_frames(
    model: Image3D,
    config: ViewerConfig,
    frames: int,
    label: Optional[str] = None
) -> List[Image.Image]:
    """
    Run the update/draw loop.

    Args:
        model: Model to render
        config: Surface size, timing and presentation settings
        frames: Number of frames
        label: Name shown in the overlay

    Returns:
        One RGB image per frame
    """
    images = []
    for i in range(frames):
        if i > 0:
            model.update(config.frame_time)

        canvas = ImageCanvas(config.width, config.height, gradient=config.background)
        model.draw(canvas)

        if config.overlay:
            draw_overlay(canvas, model.get_settings(), label)

        images.append(canvas.image)

    return images


def save_frames(images: List[Image.Image], output_path: Path, fps: int):
    """Write a GIF animation, or the last frame for other formats."""
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if output_path.suffix.lower() == ".gif":
        images[0].save(
            output_path,
            save_all=True,
            append_images=images[1:],
            duration=max(1, round(1000 / fps)),
            loop=0
        )
    else:
        images[-1].save(output_path)


def print_stats(model: Image3D):
    """Print the settings snapshot."""
    settings = model.get_settings()
    source = "image" if settings.loaded_from_image else "default cube"

    print("\nRender Statistics:")
    print(f"  Source: {source}")
    print(f"  Voxels: {settings.voxel_count}")
    print(f"  Faces rendered (last frame): {settings.faces_rendered}")
    print(f"  Zoom: {settings.zoom:.2f}")
    print(f"  Rotation: ({settings.rotation_x:.3f}, "
          f"{settings.rotation_y:.3f}, {settings.rotation_z:.3f})")
    print(f"  Wireframe: {settings.wireframe}, Shade: {settings.shade_enabled}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    if args.frames < 1:
        print("Error: --frames must be at least 1", file=sys.stderr)
        return 1

    start_time = time.time()

    try:
        config = ViewerConfig(
            width=args.width,
            height=args.height,
            voxel_size=args.voxel_size,
            fps=args.fps,
            background=not args.no_background,
            overlay=args.overlay
        )

        if args.verbose:
            print(f"Loading: {args.input or 'default cube'}")

        model = build_model(args, config)

        if args.verbose:
            print(f"Rendering {args.frames} frame(s) at {config.width}x{config.height}")

        label = Path(args.input).name if args.input else "default cube"
        images = render_frames(model, config, args.frames, label)

        output_path = Path(args.output)
        save_frames(images, output_path, config.fps)

        if args.stats or args.verbose:
            print_stats(model)

        elapsed = time.time() - start_time
        if args.verbose:
            print(f"Exported: {output_path}")
            print(f"\nCompleted in {elapsed:.2f}s")

        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
