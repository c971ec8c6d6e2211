"""Live render window built on Taichi's GGUI.

The window shows the image filling in as the ParallelRenderer's bands come
back, then keeps the finished image up until it is closed. A small panel
reports how many rows are done and can export the image as PNG.

Only the window uses Taichi; tracing stays on the CPU in plain Python.

Example:
    >>> from src.whitted.core.renderer import ParallelRenderer, RenderSettings
    >>> from src.whitted.preview.interactive import InteractivePreview
    >>> from src.whitted.scene.showcase import create_showcase_scene
    >>>
    >>> settings = RenderSettings(width=320, height=180)
    >>> world, camera = create_showcase_scene(settings=settings)
    >>> preview = InteractivePreview(settings.width, settings.height)
    >>> preview.run_render(ParallelRenderer(world, camera, settings))
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from typing import TYPE_CHECKING

import numpy as np
import taichi as ti

from src.whitted.core.canvas import Canvas

if TYPE_CHECKING:
    import numpy.typing as npt

    from src.whitted.core.renderer import ParallelRenderer

logger = logging.getLogger(__name__)


class InteractivePreview:
    """A GGUI window mirroring a Canvas that is rendered band by band.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        title: Window title.

    Attributes:
        canvas_buffer: The Canvas being filled in; this is what gets exported.
        display_image: Clamped float32 copy in Taichi's (x, y) layout, y up.
    """

    def __init__(self, width: int, height: int, *, title: str = "Whitted - Interactive Preview") -> None:
        self.width = width
        self.height = height
        self.title = title
        self.canvas_buffer = Canvas(width, height)
        self.display_image = ti.Vector.field(3, dtype=ti.f32, shape=(width, height))
        self._rows_done = 0
        # Opened on first use so the buffers work without a display.
        self._window = None
        self._gui_canvas = None

    def _open(self):
        if self._window is None:
            self._window = ti.ui.Window(name=self.title, res=(self.width, self.height), vsync=True)
            self._gui_canvas = self._window.get_canvas()
        return self._window

    @property
    def progress(self) -> float:
        """Fraction of rows rendered so far."""
        return self._rows_done / self.height

    def update_image(self, image: npt.NDArray[np.floating]) -> None:
        """Replace the whole image.

        Args:
            image: Array of shape (height, width, 3).

        Raises:
            ValueError: If the shape is not (height, width, 3).
        """
        if image.shape != (self.height, self.width, 3):
            raise ValueError(f"Image shape {image.shape} doesn't match expected {(self.height, self.width, 3)}")
        self.canvas_buffer.pixels[...] = image
        self._sync_display()

    def update_band(self, start_row: int, band: npt.NDArray[np.floating]) -> None:
        """Copy a finished band of rows into the image."""
        self.canvas_buffer.blit(band, start_row)
        self._rows_done += band.shape[0]
        self._sync_display()

    def _sync_display(self) -> None:
        clamped = np.clip(self.canvas_buffer.pixels, 0.0, 1.0).astype(np.float32)
        # Canvas rows run top-down; the field is indexed (x, y) bottom-up.
        as_xy = np.transpose(clamped[::-1], (1, 0, 2))
        self.display_image.from_numpy(np.ascontiguousarray(as_xy))

    def is_running(self) -> bool:
        return self._open().running

    def show_frame(self) -> None:
        """Present one frame with the status panel."""
        window = self._open()
        self._gui_canvas.set_image(self.display_image)
        with window.GUI.sub_window("Render", 0.02, 0.02, 0.25, 0.12) as panel:
            panel.text(f"Rows: {self._rows_done}/{self.height} ({self.progress:.0%})")
            if panel.button("Export PNG"):
                self.export_png()
        window.show()

    def run_render(self, renderer: ParallelRenderer) -> Canvas:
        """Render with live updates, then wait for the window to close.

        Closing the window mid-render stops consuming bands.

        Returns:
            The canvas, complete or as far as it got.
        """
        self._open()
        for result in renderer.iter_bands():
            self.update_band(result.start_row, result.pixels)
            logger.debug("Preview received rows %d-%d", result.start_row, result.end_row)
            if not self.is_running():
                logger.info("Preview closed at %.0f%%", self.progress * 100.0)
                return self.canvas_buffer
            self.show_frame()

        while self.is_running():
            self.show_frame()
        return self.canvas_buffer

    def close(self) -> None:
        if self._window is not None:
            self._window.running = False

    def export_png(self, filename: str | None = None) -> str:
        """Write the current image as PNG and return the path.

        Without a filename, a timestamped name in the working directory is
        used.
        """
        from src.whitted.preview.export import save_png

        if filename is None:
            filename = datetime.now().strftime("whitted_%Y%m%d_%H%M%S.png")
        save_png(self.canvas_buffer, filename)
        return filename

    @staticmethod
    def is_display_available() -> bool:
        """Best-effort check for a screen to open the window on."""
        if sys.platform == "win32":
            return True
        has_x11 = bool(os.environ.get("DISPLAY"))
        if sys.platform == "darwin":
            # Local sessions always have a screen; remote ones need X forwarding.
            return has_x11 or not os.environ.get("SSH_CONNECTION")
        return has_x11 or bool(os.environ.get("WAYLAND_DISPLAY"))
