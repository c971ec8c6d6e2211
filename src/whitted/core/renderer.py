"""Render settings and the row-band parallel renderer.

The tracing core is single-threaded and never mutates the scene, so an image
parallelizes cleanly over disjoint row bands. ParallelRenderer partitions
the rows, renders each band in a ``multiprocessing.Pool`` worker holding its
own copy of the world and camera, and blits the bands into one Canvas as they
come back. Each band also returns its RenderStats, merged into a total.

With ``workers=1`` everything runs in the calling process, which is what the
tests use.

Example:
    >>> from src.whitted.core.renderer import ParallelRenderer, RenderSettings
    >>> from src.whitted.scene.showcase import create_showcase_scene
    >>> settings = RenderSettings(width=160, height=90, workers=4)
    >>> world, camera = create_showcase_scene(settings=settings)
    >>> renderer = ParallelRenderer(world, camera, settings)
    >>> canvas, stats = renderer.render(lambda done, total: print(f"{done}/{total}"))

Note:
    This module is not imported by ``src.whitted.core`` to keep the core
    package free of scene and camera imports. Import it directly.
"""

from __future__ import annotations

import logging
import math
import multiprocessing
import os
import time
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field, fields
from typing import Any

import numpy as np
import numpy.typing as npt

from src.whitted.core.canvas import Canvas
from src.whitted.core.stats import RenderStats

logger = logging.getLogger(__name__)

# Called with (rendered_rows, total_rows) after each band.
ProgressCallback = Callable[[int, int], None]


# =============================================================================
# Settings
# =============================================================================


@dataclass
class RenderSettings:
    """Image and scheduling parameters for a render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        field_of_view: Camera field of view in radians.
        max_depth: Reflection/refraction bounce budget per primary ray.
        workers: Number of worker processes. None means one per CPU.
        rows_per_band: Rows per work item. None splits the image into one
            band per worker.
    """

    width: int = 400
    height: int = 225
    field_of_view: float = math.pi / 3.0
    max_depth: int = 5
    workers: int | None = None
    rows_per_band: int | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if not 0.0 < self.field_of_view < math.pi:
            raise ValueError(f"field_of_view must be in (0, pi) radians, got {self.field_of_view}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.rows_per_band is not None and self.rows_per_band < 1:
            raise ValueError(f"rows_per_band must be at least 1, got {self.rows_per_band}")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def resolved_workers(self) -> int:
        """Worker count with the CPU default applied."""
        if self.workers is not None:
            return self.workers
        return os.cpu_count() or 1

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> RenderSettings:
        """Build settings from a plain mapping, e.g. parsed JSON or TOML.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise ValueError(f"Unknown render settings: {', '.join(unknown)}")
        return cls(**dict(mapping))


def plan_bands(height: int, workers: int, rows_per_band: int | None = None) -> list[tuple[int, int]]:
    """Split rows [0, height) into contiguous (start, end) bands.

    Args:
        height: Number of image rows.
        workers: Number of workers; sets the band size when rows_per_band
            is None.
        rows_per_band: Explicit band size.

    Returns:
        Non-overlapping bands covering every row, in order.
    """
    if rows_per_band is None:
        rows_per_band = max(1, math.ceil(height / max(1, workers)))
    return [(start, min(start + rows_per_band, height)) for start in range(0, height, rows_per_band)]


# =============================================================================
# Worker side
# =============================================================================


@dataclass
class BandResult:
    """Pixels and counters for one rendered band."""

    start_row: int
    end_row: int
    pixels: npt.NDArray[np.float64]
    stats: RenderStats = field(default_factory=RenderStats)


# Per-process scene state, installed once by the pool initializer so that the
# world is not pickled again for every band.
_worker_state: dict[str, Any] = {}


def _init_worker(world, camera, remaining: int) -> None:
    _worker_state["world"] = world
    _worker_state["camera"] = camera
    _worker_state["remaining"] = remaining


def _render_band(band: tuple[int, int]) -> BandResult:
    start_row, end_row = band
    stats = RenderStats()
    camera = _worker_state["camera"]
    pixels = camera.render_rows(
        _worker_state["world"], start_row, end_row, _worker_state["remaining"], stats
    )
    return BandResult(start_row, end_row, pixels, stats)


# =============================================================================
# Collector side
# =============================================================================


class ParallelRenderer:
    """Render a world through a camera over a pool of worker processes.

    Args:
        world: The World to render.
        camera: Camera whose size defines the image.
        settings: Scheduling parameters. Only workers, rows_per_band and
            max_depth are read; the image size comes from the camera.
    """

    def __init__(self, world, camera, settings: RenderSettings | None = None):
        self.world = world
        self.camera = camera
        self.settings = settings if settings is not None else RenderSettings(
            width=camera.hsize, height=camera.vsize
        )

    @property
    def bands(self) -> list[tuple[int, int]]:
        return plan_bands(
            self.camera.vsize, self.settings.resolved_workers(), self.settings.rows_per_band
        )

    def iter_bands(self) -> Iterator[BandResult]:
        """Yield bands as they finish, in completion order."""
        bands = self.bands
        workers = min(self.settings.resolved_workers(), len(bands))
        remaining = self.settings.max_depth
        if workers <= 1:
            _init_worker(self.world, self.camera, remaining)
            try:
                for band in bands:
                    yield _render_band(band)
            finally:
                _worker_state.clear()
            return

        logger.info("Rendering %d bands on %d worker processes", len(bands), workers)
        with multiprocessing.Pool(
            processes=workers,
            initializer=_init_worker,
            initargs=(self.world, self.camera, remaining),
        ) as pool:
            yield from pool.imap_unordered(_render_band, bands)

    def render(self, callback: ProgressCallback | None = None) -> tuple[Canvas, RenderStats]:
        """Render the full image.

        Args:
            callback: Optional progress callback, called with
                (rendered_rows, total_rows) after each band.

        Returns:
            The finished canvas and the merged render statistics.
        """
        canvas = Canvas(self.camera.hsize, self.camera.vsize)
        stats = RenderStats()
        total = self.camera.vsize
        rendered = 0
        started = time.perf_counter()
        for result in self.iter_bands():
            canvas.blit(result.pixels, result.start_row)
            stats.merge(result.stats)
            rendered += result.end_row - result.start_row
            logger.debug("Band rows %d-%d done (%d/%d)", result.start_row, result.end_row, rendered, total)
            if callback is not None:
                callback(rendered, total)
        elapsed = time.perf_counter() - started
        logger.info(
            "Rendered %dx%d in %.2fs (%d intersection tests)",
            self.camera.hsize,
            self.camera.vsize,
            elapsed,
            stats.intersection_tests,
        )
        return canvas, stats
