"""Unit tests for the pinhole camera module.

Tests cover:
- The view transformation
- Camera setup and pixel size for wide and tall canvases
- Ray generation through the center and corner pixels
- Rays from a transformed camera
- Rendering a world to a canvas, in full and by row band
- Edge cases (invalid sizes and fields of view)
"""

import math

import numpy as np
import pytest


def _book_camera():
    from src.whitted.camera.pinhole import Camera, view_transform
    from src.whitted.core.tuples import Point, Vector

    return Camera(
        11,
        11,
        math.pi / 2,
        view_transform(Point(0, 0, -5), Point(0, 0, 0), Vector(0, 1, 0)),
    )


class TestViewTransform:
    """Tests for the view transformation."""

    def test_default_orientation(self):
        """Test that looking down -z from the origin is the identity."""
        from src.whitted.camera.pinhole import view_transform
        from src.whitted.core.matrix import IDENTITY
        from src.whitted.core.tuples import Point, Vector

        assert view_transform(Point(0, 0, 0), Point(0, 0, -1), Vector(0, 1, 0)) == IDENTITY

    def test_looking_positive_z(self):
        """Test that looking down +z mirrors x and z."""
        from src.whitted.camera.pinhole import view_transform
        from src.whitted.core.matrix import scaling
        from src.whitted.core.tuples import Point, Vector

        t = view_transform(Point(0, 0, 0), Point(0, 0, 1), Vector(0, 1, 0))
        assert t == scaling(-1, 1, -1)

    def test_moves_the_world(self):
        """Test that the view transform moves the world, not the eye."""
        from src.whitted.camera.pinhole import view_transform
        from src.whitted.core.matrix import translation
        from src.whitted.core.tuples import Point, Vector

        t = view_transform(Point(0, 0, 8), Point(0, 0, 0), Vector(0, 1, 0))
        assert t == translation(0, 0, -8)

    def test_arbitrary_view(self):
        """Test an arbitrary eye, target and up vector."""
        from src.whitted.camera.pinhole import view_transform
        from src.whitted.core.matrix import Matrix
        from src.whitted.core.tuples import Point, Vector

        t = view_transform(Point(1, 3, 2), Point(4, -2, 8), Vector(1, 1, 0))
        assert t == Matrix(
            [
                [-0.50709, 0.50709, 0.67612, -2.36643],
                [0.76772, 0.60609, 0.12122, -2.82843],
                [-0.35857, 0.59761, -0.71714, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ]
        )


class TestCameraSetup:
    """Tests for camera construction."""

    def test_construct(self):
        """Test the stored camera parameters."""
        from src.whitted.camera.pinhole import Camera
        from src.whitted.core.matrix import IDENTITY

        c = Camera(160, 120, math.pi / 2)
        assert (c.hsize, c.vsize) == (160, 120)
        assert c.field_of_view == math.pi / 2
        assert c.transform == IDENTITY

    @pytest.mark.parametrize("hsize, vsize", [(200, 125), (125, 200)])
    def test_pixel_size(self, hsize, vsize):
        """Test the pixel size for horizontal and vertical canvases."""
        from src.whitted.camera.pinhole import Camera

        assert Camera(hsize, vsize, math.pi / 2).pixel_size == pytest.approx(0.01)

    @pytest.mark.parametrize("hsize, vsize", [(0, 10), (10, -1)])
    def test_invalid_size(self, hsize, vsize):
        """Test that non-positive canvas sizes are rejected."""
        from src.whitted.camera.pinhole import Camera

        with pytest.raises(ValueError):
            Camera(hsize, vsize, math.pi / 2)

    @pytest.mark.parametrize("fov", [0.0, math.pi, -1.0])
    def test_invalid_field_of_view(self, fov):
        """Test that fields of view outside (0, pi) are rejected."""
        from src.whitted.camera.pinhole import Camera

        with pytest.raises(ValueError):
            Camera(10, 10, fov)


class TestRayForPixel:
    """Tests for primary ray generation."""

    def test_center_of_canvas(self):
        """Test the ray through the center pixel."""
        from src.whitted.camera.pinhole import Camera
        from src.whitted.core.tuples import Point, Vector

        r = Camera(201, 101, math.pi / 2).ray_for_pixel(100, 50)
        assert r.origin == Point(0, 0, 0)
        assert r.direction == Vector(0, 0, -1)

    def test_corner_of_canvas(self):
        """Test the ray through the top-left pixel."""
        from src.whitted.camera.pinhole import Camera
        from src.whitted.core.tuples import Point, Vector

        r = Camera(201, 101, math.pi / 2).ray_for_pixel(0, 0)
        assert r.origin == Point(0, 0, 0)
        assert r.direction == Vector(0.66519, 0.33259, -0.66851)

    def test_transformed_camera(self):
        """Test a ray from a rotated and translated camera."""
        from src.whitted.camera.pinhole import Camera
        from src.whitted.core.matrix import rotation_y, translation
        from src.whitted.core.tuples import Point, Vector

        c = Camera(201, 101, math.pi / 2, rotation_y(math.pi / 4) * translation(0, -2, 5))
        r = c.ray_for_pixel(100, 50)
        assert r.origin == Point(0, 2, -5)
        assert r.direction == Vector(math.sqrt(2) / 2, 0, -math.sqrt(2) / 2)

    def test_directions_are_unit(self):
        """Test that every primary ray is normalized."""
        from src.whitted.camera.pinhole import Camera

        c = Camera(7, 5, math.pi / 3)
        for y in range(c.vsize):
            for x in range(c.hsize):
                assert c.ray_for_pixel(x, y).direction.magnitude() == pytest.approx(1.0)


class TestRender:
    """Tests for rendering through the camera."""

    def test_render_default_world(self, default_world):
        """Test the center pixel of a rendered default world."""
        image = _book_camera().render(default_world)
        pixel = image.pixel_at(5, 5)
        assert tuple(pixel) == pytest.approx((0.38066, 0.47583, 0.2855), abs=1e-4)

    def test_render_rows_band(self, default_world):
        """Test that a band matches the same rows of a full render."""
        camera = _book_camera()
        full = camera.render(default_world)
        band = camera.render_rows(default_world, 4, 7)
        assert band.shape == (3, 11, 3)
        np.testing.assert_allclose(band, full.pixels[4:7])

    def test_render_partial_leaves_rows_black(self, default_world):
        """Test that rows outside the requested range stay black."""
        image = _book_camera().render(default_world, start_row=5, end_row=6)
        assert not image.pixels[:5].any()
        assert image.pixels[5].any()

    def test_progress_and_stats(self, default_world):
        """Test the per-row callback and pixel counter."""
        from src.whitted.core.stats import RenderStats

        calls = []
        stats = RenderStats()
        _book_camera().render_rows(default_world, 0, 3, stats=stats, callback=lambda done, total: calls.append((done, total)))
        assert calls == [(1, 3), (2, 3), (3, 3)]
        assert stats.pixels == 33
        assert stats.intersection_tests > 0

    def test_invalid_row_range(self, default_world):
        """Test that an out-of-range band is rejected."""
        with pytest.raises(ValueError):
            _book_camera().render_rows(default_world, 5, 12)
