"""Infinite plane through the origin in the xz plane."""

from __future__ import annotations

import math

from src.whitted.core.tuples import EPSILON, Point, Vector
from src.whitted.geometry.bounds import BoundingBox
from src.whitted.geometry.intersection import Intersection
from src.whitted.geometry.shape import Shape

_UP = Vector(0.0, 1.0, 0.0)


class Plane(Shape):
    """The plane y = 0 in object space, with normal +y everywhere."""

    def local_intersect(self, ray, trail=(), stats=None):
        dy = ray.direction.y
        if abs(dy) < EPSILON:
            # Parallel or coplanar.
            return []
        return [Intersection(-ray.origin.y / dy, self, trail=trail)]

    def local_normal(self, point, hit=None):
        return _UP

    def local_bounds(self):
        return BoundingBox(Point(-math.inf, 0.0, -math.inf), Point(math.inf, 0.0, math.inf))
