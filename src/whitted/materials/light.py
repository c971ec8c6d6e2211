"""Point light source."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.whitted.core.tuples import WHITE, Color, Point


@dataclass
class PointLight:
    """A light with no size, emitting equally in every direction.

    Attributes:
        position: Location of the light in world space.
        intensity: Color and brightness of the light.
    """

    position: Point
    intensity: Color = field(default_factory=lambda: WHITE)
