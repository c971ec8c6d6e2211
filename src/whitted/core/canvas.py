"""Pixel canvas and PPM encoding.

The canvas stores linear RGB values in a numpy array of shape
(height, width, 3). Values are not clamped while rendering; clamping and
quantization happen only on output, using the same rule for PPM and PNG:
scale by 255, clamp to [0, 255], round up inside the range.

Example:
    >>> from src.whitted.core.canvas import Canvas
    >>> from src.whitted.core.tuples import Color
    >>> canvas = Canvas(5, 3)
    >>> canvas.write_pixel(0, 0, Color(1.5, 0.0, 0.0))
    >>> canvas.to_ppm().splitlines()[3]
    '255 0 0 0 0 0 0 0 0 0 0 0 0 0 0'
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from src.whitted.core.tuples import BLACK, Color

# Maximum PPM line length, excluding the newline.
PPM_LINE_LIMIT = 70


def quantize(pixels: npt.NDArray[np.float64]) -> npt.NDArray[np.uint8]:
    """Convert linear float channels to 8-bit values.

    Args:
        pixels: Array of channel values, nominally in [0, 1].

    Returns:
        Array of the same shape with dtype uint8.
    """
    scaled = np.asarray(pixels, dtype=np.float64) * 255.0
    result = np.where(scaled < 0.0, 0.0, np.where(scaled > 255.0, 255.0, np.ceil(scaled)))
    return result.astype(np.uint8)


class Canvas:
    """A rectangular grid of colors.

    Args:
        width: Width in pixels.
        height: Height in pixels.
        background: Initial color of every pixel. Default is black.

    Raises:
        ValueError: If width or height is not positive.
    """

    def __init__(self, width: int, height: int, background: Color = BLACK):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.empty((height, width, 3), dtype=np.float64)
        self.fill(background)

    @classmethod
    def from_array(cls, pixels: npt.ArrayLike) -> Canvas:
        """Create a canvas from an existing (height, width, 3) array."""
        array = np.asarray(pixels, dtype=np.float64)
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError(f"Expected an array of shape (height, width, 3), got {array.shape}")
        canvas = cls(array.shape[1], array.shape[0])
        canvas.pixels[...] = array
        return canvas

    def fill(self, color: Color) -> None:
        self.pixels[...] = (color.red, color.green, color.blue)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} canvas")

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        """Set the color at column x, row y.

        Raises:
            IndexError: If (x, y) is outside the canvas.
        """
        self._check_bounds(x, y)
        self.pixels[y, x] = (color.red, color.green, color.blue)

    def pixel_at(self, x: int, y: int) -> Color:
        self._check_bounds(x, y)
        r, g, b = self.pixels[y, x].tolist()
        return Color(r, g, b)

    def blit(self, rows: npt.ArrayLike, start_row: int = 0) -> None:
        """Copy a band of full-width rows into the canvas.

        Args:
            rows: Array of shape (n, width, 3).
            start_row: Canvas row the first band row lands on.
        """
        band = np.asarray(rows, dtype=np.float64)
        end_row = start_row + band.shape[0]
        if start_row < 0 or end_row > self.height or band.shape[1:] != (self.width, 3):
            raise IndexError(
                f"Band of shape {band.shape} at row {start_row} does not fit the "
                f"{self.width}x{self.height} canvas"
            )
        self.pixels[start_row:end_row] = band

    def to_uint8(self) -> npt.NDArray[np.uint8]:
        """Quantized copy of the canvas, shape (height, width, 3)."""
        return quantize(self.pixels)

    def to_ppm(self) -> str:
        """Encode the canvas as a plain-text PPM (P3) document.

        Lines are wrapped so that no line exceeds 70 characters. A value is
        moved to a new line when it and its trailing separator would not fit;
        the wrapped line keeps its trailing space. Every pixel row starts on
        a new line and the document ends with a newline.
        """
        out = [f"P3\n{self.width} {self.height}\n255\n"]
        values = self.to_uint8().reshape(self.height, self.width * 3).tolist()
        last = self.width * 3 - 1
        for row in values:
            line = ""
            for i, value in enumerate(row):
                text = str(value)
                suffix = "" if i == last else " "
                if len(line) + len(text) + len(suffix) > PPM_LINE_LIMIT:
                    out.append(line + "\n")
                    line = ""
                line += text + suffix
            out.append(line + "\n")
        return "".join(out)

    def __repr__(self) -> str:
        return f"Canvas({self.width}x{self.height})"
