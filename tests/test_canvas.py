"""Unit tests for the canvas and PPM encoding.

Tests cover:
- Canvas creation, pixel access and bounds checks
- Band blitting
- PPM header, pixel data, clamping and line wrapping
"""

import numpy as np
import pytest


class TestCanvas:
    """Tests for canvas construction and pixel access."""

    def test_new_canvas_is_black(self):
        """Test that every pixel starts black."""
        from src.whitted.core.canvas import Canvas
        from src.whitted.core.tuples import Color

        canvas = Canvas(10, 20)
        assert canvas.width == 10
        assert canvas.height == 20
        assert canvas.pixels.shape == (20, 10, 3)
        assert canvas.pixel_at(9, 19) == Color(0, 0, 0)

    def test_invalid_size(self):
        """Test that non-positive sizes are rejected."""
        from src.whitted.core.canvas import Canvas

        with pytest.raises(ValueError):
            Canvas(0, 10)

    def test_write_and_read_pixel(self):
        """Test writing a pixel and reading it back."""
        from src.whitted.core.canvas import Canvas
        from src.whitted.core.tuples import Color

        canvas = Canvas(10, 20)
        canvas.write_pixel(2, 3, Color(1, 0, 0))
        assert canvas.pixel_at(2, 3) == Color(1, 0, 0)
        assert tuple(canvas.pixels[3, 2]) == (1.0, 0.0, 0.0)

    @pytest.mark.parametrize("x, y", [(-1, 0), (10, 0), (0, 20), (0, -1)])
    def test_out_of_bounds(self, x, y):
        """Test that pixels outside the canvas raise IndexError."""
        from src.whitted.core.canvas import Canvas
        from src.whitted.core.tuples import Color

        canvas = Canvas(10, 20)
        with pytest.raises(IndexError):
            canvas.write_pixel(x, y, Color(1, 1, 1))
        with pytest.raises(IndexError):
            canvas.pixel_at(x, y)

    def test_blit_band(self):
        """Test copying a band of rows into the canvas."""
        from src.whitted.core.canvas import Canvas
        from src.whitted.core.tuples import Color

        canvas = Canvas(4, 6)
        canvas.blit(np.full((2, 4, 3), 0.5), start_row=3)
        assert canvas.pixel_at(0, 3) == Color(0.5, 0.5, 0.5)
        assert canvas.pixel_at(3, 4) == Color(0.5, 0.5, 0.5)
        assert canvas.pixel_at(0, 2) == Color(0, 0, 0)
        assert canvas.pixel_at(0, 5) == Color(0, 0, 0)

    def test_blit_band_that_does_not_fit(self):
        """Test that a band overflowing the canvas is rejected."""
        from src.whitted.core.canvas import Canvas

        canvas = Canvas(4, 6)
        with pytest.raises(IndexError):
            canvas.blit(np.zeros((2, 4, 3)), start_row=5)
        with pytest.raises(IndexError):
            canvas.blit(np.zeros((2, 3, 3)), start_row=0)

    def test_from_array(self):
        """Test building a canvas from an existing array."""
        from src.whitted.core.canvas import Canvas

        canvas = Canvas.from_array(np.ones((3, 5, 3)))
        assert (canvas.width, canvas.height) == (5, 3)


class TestPPM:
    """Tests for the PPM encoder."""

    def test_header(self):
        """Test the first three lines of the PPM."""
        from src.whitted.core.canvas import Canvas

        lines = Canvas(5, 3).to_ppm().splitlines()
        assert lines[:3] == ["P3", "5 3", "255"]

    def test_pixel_data(self):
        """Test clamping and scaling of pixel data."""
        from src.whitted.core.canvas import Canvas
        from src.whitted.core.tuples import Color

        canvas = Canvas(5, 3)
        canvas.write_pixel(0, 0, Color(1.5, 0, 0))
        canvas.write_pixel(2, 1, Color(0, 0.5, 0))
        canvas.write_pixel(4, 2, Color(-0.5, 0, 1))
        lines = canvas.to_ppm().splitlines()
        assert lines[3:6] == [
            "255 0 0 0 0 0 0 0 0 0 0 0 0 0 0",
            "0 0 0 0 0 0 0 128 0 0 0 0 0 0 0",
            "0 0 0 0 0 0 0 0 0 0 0 0 0 0 255",
        ]

    def test_long_lines_are_wrapped(self):
        """Test that no line exceeds 70 characters."""
        from src.whitted.core.canvas import Canvas
        from src.whitted.core.tuples import Color

        canvas = Canvas(10, 2, background=Color(1, 0.8, 0.6))
        lines = canvas.to_ppm().split("\n")
        assert lines[3:7] == [
            "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204 ",
            "153 255 204 153 255 204 153 255 204 153 255 204 153",
            "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204 ",
            "153 255 204 153 255 204 153 255 204 153 255 204 153",
        ]
        assert all(len(line) <= 70 for line in lines)

    def test_ends_with_newline(self):
        """Test that the document ends with a newline."""
        from src.whitted.core.canvas import Canvas

        assert Canvas(5, 3).to_ppm().endswith("\n")

    def test_quantize_matches_color_to_255(self):
        """Test that array quantization matches per-color quantization."""
        from src.whitted.core.canvas import quantize
        from src.whitted.core.tuples import Color

        values = [-0.5, 0.0, 0.2, 0.5, 0.8, 1.0, 1.5]
        quantized = quantize(np.array(values)).tolist()
        assert quantized == [Color(v, v, v).to_255()[0] for v in values]
