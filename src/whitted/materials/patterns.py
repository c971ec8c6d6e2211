"""Procedural color patterns.

A pattern maps a point in its own space to a color. Evaluating a pattern on a
shape takes three steps: the world point goes into the shape's object space
(through any composite ancestors), then into pattern space through the
inverse of the pattern's own transform, then into ``pattern_at``.

Any color slot of a pattern may hold another pattern instead of a color. The
nested pattern is evaluated at the same pattern-space point, after its own
transform.

Example:
    >>> from src.whitted.core.matrix import scaling
    >>> from src.whitted.core.tuples import Color, Point
    >>> from src.whitted.materials.patterns import CheckersPattern, StripePattern
    >>> stripes = StripePattern(Color(1, 1, 1), Color(0, 0, 0))
    >>> stripes.pattern_at(Point(1.5, 0, 0))
    Color(0, 0, 0)
    >>> floor = CheckersPattern(
    ...     StripePattern(Color(1, 0, 0), Color(1, 1, 1), transform=scaling(0.25, 1, 1)),
    ...     Color(0.1, 0.1, 0.1),
    ... )
"""

from __future__ import annotations

import math
from typing import Union

from src.whitted.core.matrix import IDENTITY, Matrix
from src.whitted.core.tuples import BLACK, ORIGIN, WHITE, Color, Point
from src.whitted.materials.noise import PerlinNoise

# A color slot holds either a flat color or a nested pattern.
ColorSource = Union[Color, "Pattern"]


def _resolve(source: ColorSource, point: Point) -> Color:
    if isinstance(source, Pattern):
        return source.pattern_at(source.inverse * point)
    return source


class Pattern:
    """Base class for patterns.

    Args:
        transform: Pattern-to-object transform. Default is the identity.
    """

    def __init__(self, transform: Matrix | None = None):
        self.transform = transform if transform is not None else IDENTITY

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, value: Matrix) -> None:
        self._inverse = value.inverse()
        self._transform = value

    @property
    def inverse(self) -> Matrix:
        return self._inverse

    def pattern_at(self, point: Point) -> Color:
        """Color at a point in pattern space."""
        raise NotImplementedError(f"{type(self).__name__} must implement pattern_at()")

    def pattern_at_shape(self, shape, world_point: Point, trail=()) -> Color:
        """Color at a world-space point on a shape.

        Args:
            shape: The shape being shaded.
            world_point: Point on the shape's surface, in world space.
            trail: Composite ancestors of the shape, outermost first.
        """
        object_point = shape.world_to_object(world_point, trail)
        return self.pattern_at(self._inverse * object_point)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SolidPattern(Pattern):
    """A single color everywhere. Mostly useful as a nested slot."""

    def __init__(self, color: Color, transform: Matrix | None = None):
        super().__init__(transform)
        self.color = color

    def pattern_at(self, point: Point) -> Color:
        return self.color


class TwoColorPattern(Pattern):
    """Base for patterns that alternate or interpolate between two sources."""

    def __init__(self, a: ColorSource = WHITE, b: ColorSource = BLACK, transform: Matrix | None = None):
        super().__init__(transform)
        self.a = a
        self.b = b

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.a!r}, {self.b!r})"


class StripePattern(TwoColorPattern):
    """Alternates between ``a`` and ``b`` every unit along x."""

    def pattern_at(self, point: Point) -> Color:
        if math.floor(point.x) % 2 == 0:
            return _resolve(self.a, point)
        return _resolve(self.b, point)


class RingPattern(TwoColorPattern):
    """Concentric rings around the y axis, one unit wide."""

    def pattern_at(self, point: Point) -> Color:
        if math.floor(math.sqrt(point.x * point.x + point.z * point.z)) % 2 == 0:
            return _resolve(self.a, point)
        return _resolve(self.b, point)


class CheckersPattern(TwoColorPattern):
    """3D checkerboard of unit cubes."""

    def pattern_at(self, point: Point) -> Color:
        if (math.floor(point.x) + math.floor(point.y) + math.floor(point.z)) % 2 == 0:
            return _resolve(self.a, point)
        return _resolve(self.b, point)


class GradientPattern(TwoColorPattern):
    """Linear blend from ``a`` to ``b`` over the fractional part of x."""

    def pattern_at(self, point: Point) -> Color:
        a = _resolve(self.a, point)
        b = _resolve(self.b, point)
        fraction = point.x - math.floor(point.x)
        return a + (b - a) * fraction


class RadialGradientPattern(TwoColorPattern):
    """Linear blend over the fractional part of the distance from the origin."""

    def pattern_at(self, point: Point) -> Color:
        a = _resolve(self.a, point)
        b = _resolve(self.b, point)
        distance = (point - ORIGIN).magnitude()
        fraction = distance - math.floor(distance)
        return a + (b - a) * fraction


class BlendedPattern(TwoColorPattern):
    """Average of two sources, typically two nested patterns."""

    def pattern_at(self, point: Point) -> Color:
        return (_resolve(self.a, point) + _resolve(self.b, point)) * 0.5


class PerturbedPattern(Pattern):
    """Jitters the lookup point with Perlin noise before delegating.

    The pattern-space point is displaced by ``scale * noise(x, y, z)`` on
    every axis before the source is evaluated, which breaks up the hard
    edges of the wrapped pattern. The jitter happens in ``pattern_at``, so a
    perturbed pattern nested in another pattern's color slot is jittered too.

    Args:
        source: The pattern (or color) being perturbed.
        transform: Pattern-to-object transform.
        scale: Jitter amplitude.
        noise: Noise function. Default is a PerlinNoise seeded with 0.
    """

    def __init__(
        self,
        source: ColorSource,
        transform: Matrix | None = None,
        scale: float = 0.15,
        noise: PerlinNoise | None = None,
    ):
        super().__init__(transform)
        self.source = source
        self.scale = scale
        self.noise = noise if noise is not None else PerlinNoise()

    def jitter(self, point: Point) -> Point:
        offset = self.scale * self.noise(point.x, point.y, point.z)
        return Point(point.x + offset, point.y + offset, point.z + offset)

    def pattern_at(self, point: Point) -> Color:
        return _resolve(self.source, self.jitter(point))


class TestPattern(Pattern):
    """Returns the pattern-space point itself as a color."""

    __test__ = False  # keep pytest from collecting this class

    def pattern_at(self, point: Point) -> Color:
        return Color(point.x, point.y, point.z)
