"""Image export utilities for rendered canvases.

Supported formats:
    - PPM (plain text P3, written by Canvas.to_ppm)
    - PNG (8-bit RGB via Pillow)

The tracer already produces display-ready colors, so export only clamps and
quantizes; there is no tone mapping or gamma step.

Example:
    >>> from src.whitted.core.canvas import Canvas
    >>> from src.whitted.preview.export import save_png, save_ppm
    >>>
    >>> canvas = Canvas(64, 48)
    >>> save_ppm(canvas, "output.ppm")
    >>> save_png(canvas, "output.png")
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.whitted.core.canvas import Canvas

logger = logging.getLogger(__name__)


def canvas_to_uint8(canvas: Canvas) -> npt.NDArray[np.uint8]:
    """Convert a canvas to an 8-bit (H, W, 3) array.

    Channels are scaled by 255, clamped to [0, 255] and rounded up, the same
    quantization the PPM writer uses.
    """
    return canvas.to_uint8()


def save_ppm(canvas: Canvas, filepath: str | Path) -> None:
    """Save the canvas as a plain-text PPM (P3) file.

    Args:
        canvas: The canvas to save.
        filepath: Output file path (should end in .ppm).
    """
    Path(filepath).write_text(canvas.to_ppm(), encoding="ascii")
    logger.info("Saved %dx%d PPM to %s", canvas.width, canvas.height, filepath)


def save_png(canvas: Canvas, filepath: str | Path) -> None:
    """Save the canvas as an 8-bit RGB PNG file.

    Args:
        canvas: The canvas to save.
        filepath: Output file path (should end in .png).
    """
    pil_image = PILImage.fromarray(canvas_to_uint8(canvas), mode="RGB")
    pil_image.save(filepath)
    logger.info("Saved %dx%d PNG to %s", canvas.width, canvas.height, filepath)


def save_image(canvas: Canvas, filepath: str | Path) -> None:
    """Save the canvas, choosing PPM or PNG from the file suffix.

    Raises:
        ValueError: If the suffix is neither .ppm nor .png.
    """
    suffix = Path(filepath).suffix.lower()
    if suffix == ".ppm":
        save_ppm(canvas, filepath)
    elif suffix == ".png":
        save_png(canvas, filepath)
    else:
        raise ValueError(f"Unsupported image format {suffix!r}; use .ppm or .png")


def compute_rmse(
    image_a: npt.NDArray[np.floating] | Canvas,
    image_b: npt.NDArray[np.floating] | Canvas,
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array or canvas.
        image_b: Second image array or canvas (must have the same shape).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    a = image_a.pixels if isinstance(image_a, Canvas) else np.asarray(image_a)
    b = image_b.pixels if isinstance(image_b, Canvas) else np.asarray(image_b)
    if a.shape != b.shape:
        raise ValueError(f"Image shapes must match: {a.shape} vs {b.shape}")

    diff = a.astype(np.float64) - b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
