#!/usr/bin/env python3
"""
Pixel3D Web Interface

A simple Gradio-based web UI for viewing 2D pixel art as a rotated 3D
voxel solid.

Run with: python app.py
Then open http://localhost:7860 in your browser
"""

import math
import sys
from pathlib import Path
import numpy as np

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

import gradio as gr
from pixel3d import ImageCanvas, create_default_cube, create_from_rgba, draw_overlay


def render_image(
    image,
    voxel_size: float,
    rotation_x: float,
    rotation_y: float,
    rotation_z: float,
    zoom: float,
    wireframe: bool,
    shade: bool,
    overlay: bool
):
    """
    Render an uploaded image (or the default cube) at the given view.

    Angles come from the sliders in degrees.

    Returns the rendered frame and a stats table.
    """
    width, height = 800, 600

    if image is None:
        model = create_default_cube(voxel_size, center=(width / 2, height / 2))
        label = "default cube"
    else:
        if image.ndim == 2:
            # Grayscale - convert to RGBA
            rgba = np.stack([image, image, image, np.full_like(image, 255)], axis=-1)
        elif image.shape[2] == 3:
            # RGB - add alpha
            rgba = np.concatenate(
                [image, np.full((*image.shape[:2], 1), 255, dtype=np.uint8)], axis=-1
            )
        else:
            rgba = image.astype(np.uint8)

        model = create_from_rgba(rgba, voxel_size, center=(width / 2, height / 2))
        label = f"{rgba.shape[1]}x{rgba.shape[0]} image"

    model.set_rotation(
        math.radians(rotation_x),
        math.radians(rotation_y),
        math.radians(rotation_z)
    )
    model.set_zoom(zoom)
    if wireframe:
        model.toggle_wireframe()
    if shade:
        model.toggle_shade()

    canvas = ImageCanvas(width, height)
    model.draw(canvas)

    settings = model.get_settings()
    if overlay:
        draw_overlay(canvas, settings, label)

    stats_text = f"""## Render Complete

| Metric | Value |
|--------|-------|
| Source | {label} |
| Voxels | {settings.voxel_count:,} |
| Faces Rendered | {settings.faces_rendered:,} |
| Zoom | {settings.zoom:.1f} |
| Wireframe | {"ON" if settings.wireframe else "OFF"} |
| Shade | {"ON" if settings.shade_enabled else "OFF"} |
"""

    return canvas.image, stats_text


def create_demo_image(style: str):
    """Create a small pixel art sprite for testing."""
    if not style:
        return None

    size = 16
    rgba = np.zeros((size, size, 4), dtype=np.uint8)

    if style == "Sword":
        # Blade along the diagonal
        for i in range(2, 12):
            rgba[i, 15 - i] = [200, 210, 230, 255]
            rgba[i + 1, 15 - i] = [140, 150, 170, 255]
        # Guard
        for i in range(9, 14):
            rgba[i, 18 - i] = [180, 140, 40, 255]
        # Grip
        for i in range(12, 15):
            rgba[i, 15 - i + 1] = [100, 60, 30, 255]

    elif style == "Heart":
        c = (size - 1) / 2
        for y in range(size):
            for x in range(size):
                nx = (x - c) / (size / 2.5)
                ny = (c - y) / (size / 2.5)
                if (nx * nx + ny * ny - 1) ** 3 - nx * nx * ny ** 3 <= 0:
                    rgba[y, x] = [220, 40, 60, 255]

    elif style == "Mushroom":
        cx = size // 2
        # Cap
        for y in range(2, 9):
            half_w = min(7, 2 + (y - 2) * 2)
            for x in range(cx - half_w, cx + half_w):
                rgba[y, x] = [200, 30, 30, 255]
        # Spots
        for y, x in [(4, cx - 3), (4, cx + 2), (6, cx)]:
            rgba[y, x] = [255, 255, 255, 255]
        # Stem
        for y in range(9, 14):
            for x in range(cx - 2, cx + 2):
                rgba[y, x] = [240, 220, 180, 255]

    return rgba


# Build the Gradio interface
with gr.Blocks(title="Pixel3D") as app:

    gr.Markdown("""
    # Pixel3D
    ### View 2D Pixel Art as a 3D Voxel Solid

    Upload a PNG image or try a demo sprite, then adjust the view.
    Without an image the default 3x3x3 cube is shown.
    """)

    with gr.Row():
        # Left column - Input
        with gr.Column(scale=1):
            gr.Markdown("### Input Image")

            image_input = gr.Image(
                label="Upload Image (PNG recommended)",
                type="numpy",
                image_mode="RGBA"
            )

            with gr.Row():
                demo_dropdown = gr.Dropdown(
                    choices=["Sword", "Heart", "Mushroom"],
                    label="Or try a demo"
                )
                demo_btn = gr.Button("Load Demo")

            gr.Markdown("### View")

            voxel_size = gr.Slider(
                minimum=2,
                maximum=40,
                value=20,
                step=1,
                label="Voxel Size"
            )

            rotation_x = gr.Slider(minimum=-180, maximum=180, value=20, step=1,
                                   label="Rotation X (degrees)")
            rotation_y = gr.Slider(minimum=-180, maximum=180, value=35, step=1,
                                   label="Rotation Y (degrees)")
            rotation_z = gr.Slider(minimum=-180, maximum=180, value=0, step=1,
                                   label="Rotation Z (degrees)")

            zoom = gr.Slider(
                minimum=0.1,
                maximum=4.0,
                value=1.0,
                step=0.1,
                label="Zoom"
            )

            with gr.Row():
                wireframe = gr.Checkbox(value=False, label="Wireframe")
                shade = gr.Checkbox(value=True, label="Shade")
                overlay = gr.Checkbox(value=False, label="Overlay")

            render_btn = gr.Button("Render", variant="primary")

        # Right column - Output
        with gr.Column(scale=2):
            gr.Markdown("### Rendered Frame")

            frame_output = gr.Image(label="Frame", type="pil")

            stats_output = gr.Markdown(
                value="Upload an image and click 'Render' to see results."
            )

    # Wire up events
    demo_btn.click(
        fn=create_demo_image,
        inputs=[demo_dropdown],
        outputs=[image_input]
    )

    render_btn.click(
        fn=render_image,
        inputs=[
            image_input,
            voxel_size,
            rotation_x,
            rotation_y,
            rotation_z,
            zoom,
            wireframe,
            shade,
            overlay
        ],
        outputs=[frame_output, stats_output]
    )


if __name__ == "__main__":
    print("\n" + "="*60)
    print("Pixel3D Web Interface")
    print("="*60)
    print("\nStarting server...")
    print("Open http://localhost:7860 in your browser\n")

    app.launch(
        server_name="0.0.0.0",
        server_port=7860,
        share=False
    )
