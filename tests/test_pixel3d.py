"""
Unit tests for Pixel3D.
"""

import math
import sys
import tempfile
from pathlib import Path
import numpy as np
import unittest

from PIL import Image

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pixel3d import Image3D, create_default_cube, create_from_image, create_from_rgba
from pixel3d.canvas import ImageCanvas, format_settings, to_rgb8, vertical_gradient
from pixel3d.cli import main as cli_main
from pixel3d.config import BACKGROUND_BOTTOM, BACKGROUND_TOP, ViewerConfig
from pixel3d.ingestion import (
    DEFAULT_CUBE_COLORS,
    default_cube_voxels,
    load_voxels,
    voxels_from_rgba,
)
from pixel3d.occlusion import OcclusionIndex, count_visible_faces, visible_faces
from pixel3d.pipeline import RenderState, collect_faces
from pixel3d.transform import (
    calculate_normal,
    project,
    rotate_x,
    rotate_y,
    rotate_z,
    transform_point,
    transform_vertices,
)
from pixel3d.voxel import FACE_CHECKS, FACE_DATA, FACE_DIRECTIONS, FACE_SHADES, create_voxel


class RecordingCanvas:
    """Canvas that records draw calls instead of rasterizing."""

    def __init__(self):
        self.polygons = []
        self.lines = []

    def polygon(self, points, color):
        self.polygons.append((tuple(points), tuple(color)))

    def line(self, start, end, color):
        self.lines.append((start, end, tuple(color)))


def opaque_rgba(width: int, height: int) -> np.ndarray:
    """Fully opaque white image."""
    return np.full((height, width, 4), 255, dtype=np.uint8)


class TestTransform(unittest.TestCase):
    """Tests for rotation, projection and normals."""

    def test_rotate_x(self):
        """Test a quarter turn about X takes +Y to +Z."""
        x, y, z = rotate_x(0, 1, 0, math.pi / 2)
        assert np.allclose((x, y, z), (0, 0, 1))

    def test_rotate_y(self):
        """Test a quarter turn about Y takes +X to -Z."""
        x, y, z = rotate_y(1, 0, 0, math.pi / 2)
        assert np.allclose((x, y, z), (0, 0, -1))

    def test_rotate_z(self):
        """Test a quarter turn about Z takes +X to +Y."""
        x, y, z = rotate_z(1, 0, 0, math.pi / 2)
        assert np.allclose((x, y, z), (0, 1, 0))

    def test_rotation_roundtrip(self):
        """Test rotating by an angle and back restores every voxel corner."""
        voxel = create_voxel(15, -5, 25, 10, (1, 1, 1))
        theta = 0.83

        for rotate in (rotate_x, rotate_y, rotate_z):
            for vertex in voxel.vertices:
                there = rotate(*vertex, theta)
                back = rotate(*there, -theta)
                assert np.allclose(back, vertex)

    def test_project_center(self):
        """Test the origin projects to the screen center."""
        assert project(0, 0, 0, 400, 300, 800) == (400, 300)

    def test_project_perspective(self):
        """Test perspective divide and Y flip."""
        sx, sy = project(100, 50, 800, 400, 300, 800)
        assert np.isclose(sx, 450)
        assert np.isclose(sy, 275)

    def test_project_at_camera_plane(self):
        """Test points at or behind the camera plane fail to project."""
        assert project(10, 10, -800, 400, 300, 800) is None
        assert project(10, 10, -900, 400, 300, 800) is None
        assert project(10, 10, -799, 400, 300, 800) is not None

    def test_normal(self):
        """Test normal of a counter-clockwise XY triangle."""
        assert np.allclose(calculate_normal((0, 0, 0), (1, 0, 0), (0, 1, 0)), (0, 0, 1))

    def test_degenerate_normal(self):
        """Test collinear points give the zero vector."""
        assert calculate_normal((0, 0, 0), (1, 1, 1), (2, 2, 2)) == (0, 0, 0)

    def test_batch_matches_scalar(self):
        """Test the compiled kernel applies the same transform sequence."""
        rng = np.random.default_rng(7)
        points = rng.uniform(-50, 50, size=(4, 8, 3))
        args = (1.7, 0.4, -1.1, 2.3, 300.0)

        batch = transform_vertices(points, *args)
        assert batch.shape == points.shape

        for point, result in zip(points.reshape(-1, 3), batch.reshape(-1, 3)):
            assert np.allclose(transform_point(*point, *args), result)

    def test_batch_empty(self):
        """Test an empty batch."""
        out = transform_vertices(np.zeros((0, 8, 3)), 1.0, 0, 0, 0, 300)
        assert out.shape == (0, 8, 3)


class TestVoxel(unittest.TestCase):
    """Tests for the voxel factory."""

    def test_vertices(self):
        """Test corner positions around the center."""
        voxel = create_voxel(0, 0, 0, 10, (1, 0, 0))
        assert voxel.vertices.shape == (8, 3)
        assert list(voxel.vertices[0]) == [-5, -5, -5]
        assert list(voxel.vertices[6]) == [5, 5, 5]
        # Front square is nearest the camera
        assert np.all(voxel.vertices[:4, 2] == -5)
        assert np.all(voxel.vertices[4:, 2] == 5)

    def test_vertices_read_only(self):
        """Test vertices cannot be modified in place."""
        voxel = create_voxel(0, 0, 0, 10, (1, 0, 0))
        with self.assertRaises(ValueError):
            voxel.vertices[0, 0] = 99.0

    def test_color_gets_alpha(self):
        """Test RGB colors become opaque RGBA."""
        voxel = create_voxel(0, 0, 0, 10, (0.2, 0.4, 0.6))
        assert voxel.color == (0.2, 0.4, 0.6, 1.0)

    def test_invalid_size(self):
        """Test non-positive sizes are rejected."""
        with self.assertRaises(ValueError):
            create_voxel(0, 0, 0, 0, (1, 1, 1))

    def test_shared_topology(self):
        """Test every voxel references the one face table."""
        a = create_voxel(0, 0, 0, 10, (1, 0, 0))
        b = create_voxel(10, 0, 0, 10, (0, 1, 0))
        assert a.faces is b.faces is FACE_DATA
        assert len(FACE_DATA) == 12

    def test_shades(self):
        """Test shade constants per side."""
        shades = [FACE_DATA[i].shade for i in range(0, 12, 2)]
        assert shades == [1.0, 0.6, 0.8, 0.9, 0.7, 0.5]

    def test_winding(self):
        """Test every triangle's computed normal points opposite its direction hint."""
        voxel = create_voxel(3, -7, 11, 4, (1, 1, 1))
        for face in FACE_DATA:
            a, b, c = face.indices
            normal = calculate_normal(voxel.vertices[a], voxel.vertices[b], voxel.vertices[c])
            assert np.allclose(normal, [-d for d in face.direction])


class TestOcclusion(unittest.TestCase):
    """Tests for the occlusion index and visibility filter."""

    def test_index_membership(self):
        """Test exact position lookups."""
        index = OcclusionIndex.build([create_voxel(0, 0, 0, 10, (1, 1, 1))])
        assert index.contains(0, 0, 0)
        assert (0.0, 0.0, 0.0) in index
        assert not index.contains(10, 0, 0)
        assert len(index) == 1

    def test_single_voxel(self):
        """Test an isolated voxel shows all 12 triangles."""
        voxel = create_voxel(0, 0, 0, 10, (1, 1, 1))
        faces = visible_faces(voxel, OcclusionIndex.build([voxel]))
        assert len(faces) == 12

    def test_two_adjacent(self):
        """Test the shared side is removed from both voxels."""
        left = create_voxel(0, 0, 0, 10, (1, 1, 1))
        right = create_voxel(10, 0, 0, 10, (1, 1, 1))
        index = OcclusionIndex.build([left, right])

        left_faces = visible_faces(left, index)
        right_faces = visible_faces(right, index)

        assert len(left_faces) == 10
        assert len(right_faces) == 10
        assert all(face.direction != (1, 0, 0) for face in left_faces)
        assert all(face.direction != (-1, 0, 0) for face in right_faces)

    def test_not_touching(self):
        """Test voxels with a gap between them keep all faces."""
        voxels = [create_voxel(0, 0, 0, 10, (1, 1, 1)), create_voxel(20, 0, 0, 10, (1, 1, 1))]
        assert count_visible_faces(voxels) == 24

    def test_image_2x2(self):
        """Test a 2x2 opaque image loses exactly the 4 shared sides."""
        voxels = voxels_from_rgba(opaque_rgba(2, 2), voxel_size=10)
        assert len(voxels) == 4

        shared_sides = 4
        expected = 4 * 12 - 2 * (shared_sides * 2)
        assert count_visible_faces(voxels) == expected == 32

    def test_fractional_voxel_sizes(self):
        """Test neighbors are found for sizes with no exact binary value."""
        for size in (10, 0.1, 0.3, 1.1, 2.2, 7.3):
            small = voxels_from_rgba(opaque_rgba(2, 2), voxel_size=size)
            assert count_visible_faces(small) == 32

            # 40 shared sides in a 5x5 sheet
            sheet = voxels_from_rgba(opaque_rgba(5, 5), voxel_size=size)
            assert count_visible_faces(sheet) == 25 * 12 - 2 * (40 * 2)

    def test_fractional_cube(self):
        """Test the default cube at a fractional size keeps only its surface."""
        assert count_visible_faces(default_cube_voxels(0.3)) == 108

    def test_default_cube_surface(self):
        """Test the 3x3x3 cube shows only its outer surface."""
        voxels = default_cube_voxels(20)
        # 6 sides * 9 squares * 2 triangles
        assert count_visible_faces(voxels) == 108

        index = OcclusionIndex.build(voxels)
        center = [v for v in voxels if v.position == (0.0, 0.0, 0.0)][0]
        assert visible_faces(center, index) == []

    def test_random_occupancy(self):
        """Test a side is hidden exactly when its neighbor exists."""
        rng = np.random.default_rng(42)
        size = 5.0
        occupied = np.argwhere(rng.random((4, 4, 4)) > 0.5)
        voxels = [create_voxel(*(p * size), size, (1, 1, 1)) for p in occupied]
        positions = {v.position for v in voxels}
        index = OcclusionIndex.build(voxels)

        for voxel in voxels:
            faces = visible_faces(voxel, index)
            for check in FACE_CHECKS:
                side = [FACE_DATA[i] for i in check.faces]
                has_neighbor = voxel.neighbor_position(check.direction) in positions
                if has_neighbor:
                    assert not any(face in faces for face in side)
                else:
                    assert all(face in faces for face in side)


class TestIngestion(unittest.TestCase):
    """Tests for image loading and voxel building."""

    def test_positions(self):
        """Test the slab is centered and row 0 is at the top."""
        voxels = voxels_from_rgba(opaque_rgba(2, 2), voxel_size=10)
        positions = [v.position for v in voxels]

        # Row-major pixel order: (0,0), (1,0), (0,1), (1,1)
        assert positions == [
            (-10.0, 0.0, 0.0),
            (0.0, 0.0, 0.0),
            (-10.0, -10.0, 0.0),
            (0.0, -10.0, 0.0),
        ]

    def test_alpha_threshold(self):
        """Test pixels at or below alpha 0.1 produce no voxel."""
        rgba = np.zeros((1, 4, 4), dtype=np.float64)
        rgba[0, :, 3] = [0.0, 0.1, 0.1001, 1.0]
        voxels = voxels_from_rgba(rgba, voxel_size=1)
        assert len(voxels) == 2

    def test_colors(self):
        """Test pixel colors are normalized to [0, 1]."""
        rgba = np.array([[[255, 128, 0, 255]]], dtype=np.uint8)
        voxel = voxels_from_rgba(rgba, voxel_size=1)[0]
        assert np.allclose(voxel.color, (1.0, 128 / 255, 0.0, 1.0))

    def test_bad_shape(self):
        """Test non-RGBA arrays are rejected."""
        with self.assertRaises(ValueError):
            voxels_from_rgba(np.zeros((4, 4, 3), dtype=np.uint8), voxel_size=1)

    def test_default_cube(self):
        """Test the default cube layout and color cycle."""
        voxels = default_cube_voxels(20)
        assert len(voxels) == 27
        assert voxels[0].position == (-20.0, -20.0, -20.0)
        assert voxels[-1].position == (20.0, 20.0, 20.0)
        assert voxels[0].color == DEFAULT_CUBE_COLORS[0]
        assert voxels[8].color == DEFAULT_CUBE_COLORS[8]
        assert voxels[9].color == DEFAULT_CUBE_COLORS[0]

    def test_load_missing_file(self):
        """Test a missing file is reported, not raised."""
        result = load_voxels("does/not/exist.png", 10)
        assert not result.ok
        assert result.voxels == []
        assert "exist.png" in result.error

    def test_load_unreadable_file(self):
        """Test a file that is not an image is reported, not raised."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.png"
            path.write_text("not an image")
            result = load_voxels(path, 10)
            assert not result.ok

    def test_load_oversized_image(self):
        """Test images over the Pillow pixel limit are reported, not raised."""
        limit = Image.MAX_IMAGE_PIXELS
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "huge.png"
            Image.fromarray(opaque_rgba(10, 10)).save(path)

            Image.MAX_IMAGE_PIXELS = 10
            try:
                result = load_voxels(path, 10)
                model = create_from_image(path, 10)
            finally:
                Image.MAX_IMAGE_PIXELS = limit

        assert not result.ok
        assert result.voxels == []
        assert len(model.voxels) == 27
        assert model.get_settings().loaded_from_image is False

    def test_load_png(self):
        """Test loading a real PNG with transparency."""
        rgba = np.zeros((3, 4, 4), dtype=np.uint8)
        rgba[1, :, :] = [10, 200, 30, 255]

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "strip.png"
            Image.fromarray(rgba).save(path)
            result = load_voxels(path, 10)

        assert result.ok
        assert result.image_size == (4, 3)
        assert len(result.voxels) == 4


class TestImage3D(unittest.TestCase):
    """Tests for the renderable model and its frame pipeline."""

    def test_fallback_to_default_cube(self):
        """Test a nonexistent path yields the 27-voxel default cube."""
        model = create_from_image("missing_sprite.png", 20)
        settings = model.get_settings()
        assert settings.voxel_count == 27
        assert settings.loaded_from_image is False

    def test_load_from_image(self):
        """Test a real image is flagged as loaded."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "dot.png"
            Image.fromarray(opaque_rgba(3, 2)).save(path)
            model = create_from_image(path, 10)

        settings = model.get_settings()
        assert settings.loaded_from_image is True
        assert settings.voxel_count == 6

    def test_reload_falls_back(self):
        """Test a failed reload replaces the model with the default cube."""
        model = create_from_rgba(opaque_rgba(2, 1), 10)
        assert model.loaded_from_image

        result = model.load_image("missing_sprite.png")
        assert not result.ok
        assert not model.loaded_from_image
        assert len(model.voxels) == 27

    def test_zoom_floor(self):
        """Test zoom never drops below 0.1."""
        model = create_default_cube()
        model.zoom_out(1000)
        assert model.get_settings().zoom == 0.1
        model.zoom_in(0.4)
        assert np.isclose(model.get_settings().zoom, 0.5)
        model.set_zoom(-3)
        assert model.get_settings().zoom == 0.1

    def test_update(self):
        """Test auto-rotation advances only when enabled."""
        model = create_default_cube()
        model.update(1.0)
        assert model.get_settings().rotation_x == 0

        model.set_auto_rotation(1.0, 2.0, 3.0)
        model.update(0.5)
        settings = model.get_settings()
        assert settings.auto_rotate
        assert (settings.rotation_x, settings.rotation_y, settings.rotation_z) == (0.5, 1.0, 1.5)

        model.toggle_auto_rotate()
        model.update(0.5)
        assert model.get_settings().rotation_x == 0.5

    def test_rotation_setters(self):
        """Test relative, absolute and reset rotation."""
        model = create_default_cube()
        model.rotate_left(0.2)
        model.rotate_down(0.3)
        model.roll_right(0.4)
        state = model.state
        assert (state.rotation_x, state.rotation_y, state.rotation_z) == (0.3, 0.2, 0.4)

        model.rotate_right(0.2)
        model.rotate_up(0.3)
        model.roll_left(0.4)
        assert (state.rotation_x, state.rotation_y, state.rotation_z) == (0.0, 0.0, 0.0)

        model.set_rotation(1.0, 2.0, 3.0)
        model.set_rotation(y=5.0)
        assert (state.rotation_x, state.rotation_y, state.rotation_z) == (1.0, 5.0, 3.0)

        model.set_rotation_z(-1.0)
        assert state.rotation_z == -1.0

        model.reset_rotation()
        assert (state.rotation_x, state.rotation_y, state.rotation_z) == (0.0, 0.0, 0.0)

    def test_toggles(self):
        """Test wireframe and shade toggles."""
        model = create_default_cube()
        model.toggle_wireframe()
        model.toggle_shade()
        settings = model.get_settings()
        assert settings.wireframe and settings.shade_enabled

        model.toggle_wireframe()
        assert not model.get_settings().wireframe

    def test_settings_snapshot(self):
        """Test settings are a read-only copy."""
        model = create_default_cube()
        settings = model.get_settings()
        with self.assertRaises(AttributeError):
            settings.zoom = 5.0
        model.set_zoom(2.0)
        assert settings.zoom == 1.0

    def test_draw_counts_faces(self):
        """Test draw fills one polygon per rendered face."""
        model = create_default_cube()
        model.set_rotation(0.4, 0.6, 0.0)
        canvas = RecordingCanvas()

        faces = model.draw(canvas)

        assert len(faces) > 0
        assert len(canvas.polygons) == len(faces)
        assert model.get_settings().faces_rendered == len(faces)

    def test_edge_on_sides_kept(self):
        """Test sides exactly edge-on to the camera survive culling."""
        model = create_default_cube()
        model.draw(RecordingCanvas())
        # 9 front squares plus 4 sides of 9 squares, 2 triangles each
        assert model.get_settings().faces_rendered == 90

    def test_wireframe(self):
        """Test wireframe draws three white lines per face."""
        model = create_default_cube()
        model.set_rotation(0.4, 0.6, 0.0)
        model.toggle_wireframe()
        canvas = RecordingCanvas()

        faces = model.draw(canvas)

        assert canvas.polygons == []
        assert len(canvas.lines) == 3 * len(faces)
        assert all(color == (1.0, 1.0, 1.0, 1.0) for _, _, color in canvas.lines)

    def test_shaded_fill(self):
        """Test fill color is RGB times shade with alpha unchanged."""
        voxel = create_voxel(0, 0, 0, 20, (0.5, 1.0, 0.8, 0.7))
        model = Image3D(voxels=[voxel])
        model.toggle_shade()
        model.set_rotation(0.3, 0.4, 0.0)
        canvas = RecordingCanvas()

        faces = model.draw(canvas)

        for face, (_, color) in zip(faces, canvas.polygons):
            s = face.shade
            assert np.allclose(color, (0.5 * s, 1.0 * s, 0.8 * s, 0.7))

    def test_unshaded_intensity(self):
        """Test shade is 1.0 when shading is off."""
        model = create_default_cube()
        model.set_rotation(0.4, 0.6, 0.0)
        assert all(face.shade == 1.0 for face in model.collect_faces())

    def test_depth_sort(self):
        """Test faces come out farthest first."""
        model = create_default_cube()
        model.set_rotation(0.7, -0.4, 0.2)
        faces = model.collect_faces()

        assert len(faces) > 1
        for near, far in zip(faces[1:], faces[:-1]):
            assert far.avg_z >= near.avg_z

    def test_backface_orientation(self):
        """Test exactly the sides turned toward the camera survive culling."""
        rotation = (0.3, 0.4, 0.2)
        model = Image3D(voxels=[create_voxel(0, 0, 0, 20, (1, 1, 1))])
        model.toggle_shade()
        model.set_rotation(*rotation)

        expected = set()
        for side, direction in enumerate(FACE_DIRECTIONS):
            x, y, z = rotate_x(*direction, rotation[0])
            x, y, z = rotate_y(x, y, z, rotation[1])
            x, y, z = rotate_z(x, y, z, rotation[2])
            if z < 0:
                expected.add(FACE_SHADES[side])

        faces = model.collect_faces()
        assert len(expected) == 3
        assert len(faces) == 2 * len(expected)
        assert {face.shade for face in faces} == expected

    def test_full_turn_orientation(self):
        """Test full turns keep the front side and cull the back side."""
        model = Image3D(voxels=[create_voxel(0, 0, 0, 20, (1, 1, 1))])
        model.toggle_shade()
        model.set_rotation(2 * math.pi, 4 * math.pi, -2 * math.pi)

        shades = {face.shade for face in model.collect_faces()}
        assert 1.0 in shades   # front
        assert 0.6 not in shades  # back

    def test_rotation_roundtrip_render(self):
        """Test rotating and rotating back reproduces the frame."""
        model = create_default_cube()
        model.set_rotation(0.25, 0.5, 0.0)
        before = model.collect_faces()

        model.rotate_left(1.0)
        model.rotate_right(1.0)
        after = model.collect_faces()

        assert model.state.rotation_y == 0.5
        assert before == after

    def test_behind_camera_dropped(self):
        """Test triangles crossing or behind the camera plane are dropped."""
        crossing = create_voxel(0, 0, -300, 20, (1, 1, 1))
        behind = create_voxel(0, 0, -1000, 20, (1, 1, 1))
        model = Image3D(voxels=[crossing, behind])

        assert model.draw(RecordingCanvas()) == []
        assert model.get_settings().faces_rendered == 0

    def test_state_clamps_zoom(self):
        """Test a RenderState built with zero zoom still renders."""
        state = RenderState(zoom=0.0, rotation_x=0.3, rotation_y=0.4)
        assert state.zoom == 0.1

        faces = collect_faces([create_voxel(0, 0, 0, 20, (1, 1, 1))], state)
        assert len(faces) == 6

    def test_empty_model(self):
        """Test a model with no voxels renders nothing."""
        model = Image3D(voxels=[])
        assert model.draw(RecordingCanvas()) == []
        assert model.get_settings().voxel_count == 0


class TestCanvas(unittest.TestCase):
    """Tests for the Pillow raster target."""

    def test_gradient(self):
        """Test gradient endpoints."""
        image = vertical_gradient(4, 10)
        pixels = np.array(image)
        assert pixels.shape == (10, 4, 3)
        assert tuple(pixels[0, 0]) == to_rgb8(BACKGROUND_TOP)
        assert tuple(pixels[-1, 3]) == to_rgb8(BACKGROUND_BOTTOM)

    def test_to_rgb8_clamps(self):
        """Test out-of-range colors are clamped."""
        assert to_rgb8((1.5, -0.2, 0.5, 1.0)) == (255, 0, 128)

    def test_render_default_cube(self):
        """Test the center pixel shows the front of the center column."""
        model = create_default_cube(20, center=(100, 75))
        canvas = ImageCanvas(200, 150)
        model.draw(canvas)

        # Voxel (0, 0, -20) is the 13th in build order: yellow
        assert canvas.image.getpixel((100, 75)) == (255, 255, 0)
        # Corners stay background
        assert canvas.image.getpixel((0, 0)) == to_rgb8(BACKGROUND_TOP)

    def test_overlay_text(self):
        """Test overlay lines include the diagnostics."""
        model = create_default_cube()
        model.draw(RecordingCanvas())
        lines = format_settings(model.get_settings(), "sword.png")
        assert "Voxels: 27" in lines
        assert any(line.startswith("Faces rendered:") for line in lines)
        assert lines[-1] == "Displaying: sword.png (default cube)"


class TestConfig(unittest.TestCase):
    """Tests for host configuration."""

    def test_defaults(self):
        """Test default viewer settings."""
        config = ViewerConfig()
        assert config.center == (400, 300)
        assert np.isclose(config.frame_time, 1 / 30)

    def test_validation(self):
        """Test invalid settings are rejected."""
        with self.assertRaises(ValueError):
            ViewerConfig(width=0)
        with self.assertRaises(ValueError):
            ViewerConfig(voxel_size=-1)


class TestCLI(unittest.TestCase):
    """Integration tests for the command-line interface."""

    def test_still_frame(self):
        """Test rendering a still PNG with the fallback cube."""
        with tempfile.TemporaryDirectory() as tmp:
            output = Path(tmp) / "out.png"
            code = cli_main([
                str(Path(tmp) / "missing.png"),
                "-o", str(output),
                "--width", "64", "--height", "48",
                "--shade",
            ])
            assert code == 0
            with Image.open(output) as img:
                assert img.size == (64, 48)

    def test_gif_animation(self):
        """Test rendering an animated GIF."""
        with tempfile.TemporaryDirectory() as tmp:
            output = Path(tmp) / "spin.gif"
            code = cli_main([
                "-o", str(output),
                "--width", "64", "--height", "48",
                "--frames", "3", "--fps", "2",
            ])
            assert code == 0
            with Image.open(output) as img:
                assert img.n_frames == 3

    def test_invalid_frames(self):
        """Test frame count validation."""
        assert cli_main(["--frames", "0"]) == 1


if __name__ == "__main__":
    unittest.main(verbosity=2)
