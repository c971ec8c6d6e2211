"""Ray data structure.

A ray is an origin point plus a direction vector. Rays are immutable;
transforming a ray returns a new one. Directions are deliberately left
unnormalized after a transform so that ``t`` values stay comparable between
object space and world space.

Example:
    >>> from src.whitted.core.ray import Ray
    >>> from src.whitted.core.tuples import Point, Vector
    >>> ray = Ray(Point(2, 3, 4), Vector(1, 0, 0))
    >>> ray.position(2.5)
    Point(4.5, 3.0, 4.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.whitted.core.matrix import Matrix
from src.whitted.core.tuples import Point, Vector


@dataclass(frozen=True, slots=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of travel. Not required to be unit length.
    """

    origin: Point
    direction: Vector

    def position(self, t: float) -> Point:
        """Compute the point along the ray at parameter t."""
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix) -> Ray:
        """Return this ray with the matrix applied to origin and direction."""
        return Ray(matrix * self.origin, matrix * self.direction)
