"""Preview module for output and visualization.

Components:
    export: PPM and PNG export utilities
    display: Matplotlib-based static preview
    interactive: Taichi GGUI window that fills in as bands finish

Example:
    >>> from src.whitted.preview import save_png, show_preview
    >>> canvas, stats = renderer.render()
    >>> save_png(canvas, "output.png")
    >>> show_preview(canvas)
"""

from src.whitted.preview.display import canvas_to_display, show_comparison, show_preview
from src.whitted.preview.export import canvas_to_uint8, compute_rmse, save_image, save_png, save_ppm
from src.whitted.preview.interactive import InteractivePreview

__all__ = [
    "InteractivePreview",
    "show_preview",
    "show_comparison",
    "canvas_to_display",
    "save_ppm",
    "save_png",
    "save_image",
    "canvas_to_uint8",
    "compute_rmse",
]
