"""Unit-radius cylinder around the y axis.

The cylinder may be truncated to ``minimum < y < maximum`` and, when
``closed``, capped at both ends. Both limits are exclusive for the wall.

Example:
    >>> from src.whitted.core.ray import Ray
    >>> from src.whitted.core.tuples import Point, Vector
    >>> from src.whitted.geometry.cylinder import Cylinder
    >>> cyl = Cylinder(minimum=1, maximum=2, closed=True)
    >>> len(cyl.intersect(Ray(Point(0, 3, 0), Vector(0, -1, 0))))
    2
"""

from __future__ import annotations

import math

from src.whitted.core.tuples import EPSILON, Point, Vector, float_equal
from src.whitted.geometry.bounds import BoundingBox
from src.whitted.geometry.intersection import Intersection
from src.whitted.geometry.shape import Shape


class Cylinder(Shape):
    """Cylinder x^2 + z^2 = 1.

    Args:
        minimum: Lower y limit (exclusive). Default is unbounded.
        maximum: Upper y limit (exclusive). Default is unbounded.
        closed: If True the ends are capped.
        **kwargs: Passed to Shape (transform, material, name).
    """

    def __init__(self, minimum: float = -math.inf, maximum: float = math.inf, closed: bool = False, **kwargs):
        super().__init__(**kwargs)
        self.minimum = minimum
        self.maximum = maximum
        self.closed = closed

    def local_intersect(self, ray, trail=(), stats=None):
        o, d = ray.origin, ray.direction
        xs = []
        a = d.x * d.x + d.z * d.z
        if not float_equal(a, 0.0):
            b = 2.0 * (o.x * d.x + o.z * d.z)
            c = o.x * o.x + o.z * o.z - 1.0
            disc = b * b - 4.0 * a * c
            if disc < 0.0:
                return []
            root = math.sqrt(disc)
            t0 = (-b - root) / (2.0 * a)
            t1 = (-b + root) / (2.0 * a)
            if t0 > t1:
                t0, t1 = t1, t0
            y0 = o.y + t0 * d.y
            if self.minimum < y0 < self.maximum:
                xs.append(Intersection(t0, self, trail=trail))
            y1 = o.y + t1 * d.y
            if self.minimum < y1 < self.maximum:
                xs.append(Intersection(t1, self, trail=trail))
        self._intersect_caps(ray, xs, trail)
        return xs

    def _intersect_caps(self, ray, xs, trail):
        if not self.closed or float_equal(ray.direction.y, 0.0):
            return
        for cap in (self.minimum, self.maximum):
            t = (cap - ray.origin.y) / ray.direction.y
            x = ray.origin.x + t * ray.direction.x
            z = ray.origin.z + t * ray.direction.z
            if x * x + z * z <= 1.0:
                xs.append(Intersection(t, self, trail=trail))
        if len(xs) > 1:
            xs.sort(key=lambda i: i.t)

    def local_normal(self, point, hit=None):
        dist = point.x * point.x + point.z * point.z
        if dist < 1.0 and point.y >= self.maximum - EPSILON:
            return Vector(0.0, 1.0, 0.0)
        if dist < 1.0 and point.y <= self.minimum + EPSILON:
            return Vector(0.0, -1.0, 0.0)
        return Vector(point.x, 0.0, point.z)

    def local_bounds(self):
        return BoundingBox(Point(-1.0, self.minimum, -1.0), Point(1.0, self.maximum, 1.0))
