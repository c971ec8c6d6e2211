"""Matplotlib-based preview display for rendered canvases.

Example:
    >>> from src.whitted.preview.display import show_preview
    >>> canvas, stats = renderer.render()
    >>> show_preview(canvas, title="Showcase")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from src.whitted.core.canvas import Canvas


def canvas_to_display(canvas: Canvas | npt.NDArray[np.floating]) -> npt.NDArray[np.float32]:
    """Clamp a canvas (or raw pixel array) to [0, 1] for imshow.

    Returns:
        float32 array of shape (H, W, 3).
    """
    pixels = canvas.pixels if isinstance(canvas, Canvas) else np.asarray(canvas)
    return np.clip(pixels, 0.0, 1.0).astype(np.float32)


def show_preview(
    canvas: Canvas,
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display a rendered canvas as a Matplotlib figure.

    Args:
        canvas: The canvas to display.
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(canvas_to_display(canvas))
    ax.axis("off")
    ax.set_title(title if title is not None else f"Render Preview - {canvas.width}x{canvas.height}")

    plt.tight_layout()
    plt.show(block=block)


def show_comparison(
    canvas_a: Canvas,
    canvas_b: Canvas,
    *,
    labels: tuple[str, str] = ("A", "B"),
    diff_scale: float = 10.0,
    figsize: tuple[float, float] = (16, 6),
    block: bool = True,
) -> float:
    """Display two renders side by side with their amplified difference.

    Returns:
        RMSE between the two clamped images.
    """
    import matplotlib.pyplot as plt

    display_a = canvas_to_display(canvas_a)
    display_b = canvas_to_display(canvas_b)
    if display_a.shape != display_b.shape:
        raise ValueError(f"Image shapes must match: {display_a.shape} vs {display_b.shape}")

    diff = display_a.astype(np.float64) - display_b.astype(np.float64)
    rmse = float(np.sqrt(np.mean(diff**2)))
    diff_amplified = np.clip(np.abs(diff) * diff_scale, 0.0, 1.0)

    fig, axes = plt.subplots(1, 3, figsize=figsize)
    for ax, image, label in zip(
        axes, (display_a, display_b, diff_amplified), (*labels, f"Difference ({diff_scale}x) - RMSE: {rmse:.6f}")
    ):
        ax.imshow(image)
        ax.set_title(label)
        ax.axis("off")

    plt.tight_layout()
    plt.show(block=block)

    return rmse
