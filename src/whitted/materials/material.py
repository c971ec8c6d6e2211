"""Phong surface material.

A material either has a flat color or a pattern. When a pattern is set it
takes precedence over the color. The reflective and transparency
coefficients must lie in [0, 1].

Example:
    >>> from src.whitted.materials.material import Material, glass
    >>> from src.whitted.core.tuples import Color
    >>> red = Material(color=Color(1, 0, 0), specular=0.3)
    >>> glass().refractive_index
    1.5
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from src.whitted.core.tuples import WHITE, Color

if TYPE_CHECKING:
    from src.whitted.core.tuples import Point
    from src.whitted.materials.patterns import Pattern

# Common refractive indices.
VACUUM = 1.0
AIR = 1.00029
WATER = 1.333
GLASS = 1.5
DIAMOND = 2.417


@dataclass
class Material:
    """Surface response coefficients for the Phong model.

    Attributes:
        color: Flat surface color, used when no pattern is set.
        pattern: Optional procedural pattern overriding ``color``.
        ambient: Fraction of light reflected regardless of light direction.
        diffuse: Lambertian reflection coefficient.
        specular: Highlight strength.
        shininess: Highlight exponent; larger means a smaller highlight.
        reflective: Mirror reflectance in [0, 1].
        transparency: Fraction of light transmitted, in [0, 1].
        refractive_index: Index of refraction of the medium inside the
            surface.
        name: Optional label (set from MTL files).
    """

    color: Color = field(default_factory=lambda: WHITE)
    pattern: Pattern | None = None
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    transparency: float = 0.0
    refractive_index: float = VACUUM
    name: str | None = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.reflective <= 1.0:
            raise ValueError(f"reflective must be in [0, 1], got {self.reflective}")
        if not 0.0 <= self.transparency <= 1.0:
            raise ValueError(f"transparency must be in [0, 1], got {self.transparency}")

    def color_at(self, shape=None, world_point: Point | None = None, trail=()) -> Color:
        """Surface color at a point, evaluating the pattern if there is one.

        Args:
            shape: Shape being shaded; required when a pattern is set.
            world_point: World-space point on the surface.
            trail: Composite ancestors of the shape, outermost first.

        Raises:
            ValueError: If a pattern is set but no shape is given.
        """
        if self.pattern is None:
            return self.color
        if shape is None:
            raise ValueError(f"{self.pattern!r} needs the shape being shaded to map the point into pattern space")
        return self.pattern.pattern_at_shape(shape, world_point, trail)


class _SharedMaterial(Material):
    """Read-only material handed to every shape that has none of its own."""

    _sealed = False

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "_sealed", True)

    def __setattr__(self, name: str, value) -> None:
        if self._sealed:
            raise AttributeError(
                f"the default material is shared by every shape without a material; "
                f"assign a new Material() to the shape instead of setting {name!r}"
            )
        super().__setattr__(name, value)


DEFAULT_MATERIAL = _SharedMaterial()


def glass(**overrides) -> Material:
    """Clear glass: fully transparent with a refractive index of 1.5."""
    params = {"transparency": 1.0, "refractive_index": GLASS}
    params.update(overrides)
    return Material(**params)


def mirror(**overrides) -> Material:
    """Dark, fully reflective surface."""
    params = {
        "color": Color(0.0, 0.0, 0.0),
        "ambient": 0.0,
        "diffuse": 0.1,
        "specular": 1.0,
        "shininess": 300.0,
        "reflective": 1.0,
    }
    params.update(overrides)
    return Material(**params)
