"""Render statistics.

Instead of a process-wide counter, traversal code receives an optional
RenderStats object and increments it in place. Each worker process owns its
own instance; the collector merges them when the bands come back.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RenderStats:
    """Counters gathered while rendering.

    Attributes:
        intersection_tests: Number of ray-primitive intersection tests run.
            Composite shapes (groups, CSG) are not counted, only the leaves
            they delegate to.
        pixels: Number of pixels rendered.
    """

    intersection_tests: int = 0
    pixels: int = 0

    def merge(self, other: RenderStats) -> RenderStats:
        """Add another set of counters into this one and return self."""
        self.intersection_tests += other.intersection_tests
        self.pixels += other.pixels
        return self
