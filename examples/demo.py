#!/usr/bin/env python3
"""
Pixel3D Demo Script

This script demonstrates the full rendering pipeline by:
1. Creating synthetic test sprites (no external images needed)
2. Building voxel models and running the update/draw loop
3. Saving a still frame and a turntable GIF per sprite
4. Printing face culling statistics

Run with: python examples/demo.py
"""

import sys
from pathlib import Path
import numpy as np
import time

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pixel3d import ImageCanvas, create_default_cube, create_from_rgba
from pixel3d.config import ViewerConfig
from pixel3d.occlusion import count_visible_faces


def create_test_sprite_ring(size: int = 16) -> np.ndarray:
    """Create a ring, which has both outer and inner edges."""
    rgba = np.zeros((size, size, 4), dtype=np.uint8)

    center = (size - 1) / 2
    outer = size / 2 - 1
    inner = outer / 2

    for y in range(size):
        for x in range(size):
            dist = np.hypot(x - center, y - center)
            if inner <= dist < outer:
                rgba[y, x] = [230, 180, 40, 255]  # Gold

    return rgba


def create_test_sprite_checker(size: int = 12) -> np.ndarray:
    """Create a checkerboard with transparent cells (no shared sides)."""
    rgba = np.zeros((size, size, 4), dtype=np.uint8)

    for y in range(size):
        for x in range(size):
            if (x + y) % 2 == 0:
                r = int(255 * x / size)
                g = int(255 * y / size)
                rgba[y, x] = [r, g, 160, 255]

    return rgba


def create_test_sprite_block(size: int = 12) -> np.ndarray:
    """Create a solid block with a color gradient."""
    rgba = np.zeros((size, size, 4), dtype=np.uint8)

    for y in range(size):
        for x in range(size):
            rgba[y, x] = [80 + 10 * x, 120, 200 - 10 * y, 255]

    return rgba


def render_turntable(model, config: ViewerConfig, frames: int) -> list:
    """Run the update/draw loop for a number of frames."""
    images = []
    for i in range(frames):
        if i > 0:
            model.update(config.frame_time)
        canvas = ImageCanvas(config.width, config.height)
        model.draw(canvas)
        images.append(canvas.image)
    return images


def run_demo():
    """Run the demonstration."""
    print("=" * 60)
    print("Pixel3D - Demo")
    print("=" * 60)
    print()

    # Create output directory
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    config = ViewerConfig(width=400, height=300, voxel_size=12, fps=20)

    models = [
        ("ring", create_from_rgba(create_test_sprite_ring(), config.voxel_size,
                                  center=config.center)),
        ("checker", create_from_rgba(create_test_sprite_checker(), config.voxel_size,
                                     center=config.center)),
        ("block", create_from_rgba(create_test_sprite_block(), config.voxel_size,
                                   center=config.center)),
        ("cube", create_default_cube(config.voxel_size * 2, center=config.center)),
    ]

    total_start = time.time()

    for name, model in models:
        print(f"\n--- Rendering: {name} ---")

        voxel_count = len(model.voxels)
        exposed = count_visible_faces(model.voxels)
        print(f"  Voxels: {voxel_count}")
        print(f"  Triangles: {voxel_count * 12} total, {exposed} after occlusion")
        if voxel_count:
            print(f"  Interior faces removed: {100 * (1 - exposed / (voxel_count * 12)):.1f}%")

        model.set_rotation(0.35, 0.5, 0.0)
        model.toggle_shade()

        start = time.time()
        still = render_turntable(model, config, 1)[0]
        print(f"  Still frame: {(time.time() - start) * 1000:.1f}ms, "
              f"{model.get_settings().faces_rendered} faces drawn")
        still.save(output_dir / f"{name}.png")

        model.set_auto_rotation(0.0, 1.25, 0.0)
        start = time.time()
        frames = render_turntable(model, config, 40)
        print(f"  Turntable: {len(frames)} frames in {(time.time() - start):.2f}s")

        frames[0].save(
            output_dir / f"{name}.gif",
            save_all=True,
            append_images=frames[1:],
            duration=round(1000 / config.fps),
            loop=0
        )
        print(f"    Saved: {output_dir / f'{name}.gif'}")

    total_time = time.time() - total_start

    print("\n" + "=" * 60)
    print(f"Demo complete! Total time: {total_time:.2f}s")
    print(f"Output files in: {output_dir}")
    print("=" * 60)

    return 0


if __name__ == "__main__":
    run_demo()
