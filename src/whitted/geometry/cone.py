"""Double-napped cone x^2 + z^2 = y^2 with its apex at the origin."""

from __future__ import annotations

import math

from src.whitted.core.tuples import EPSILON, Point, Vector, float_equal
from src.whitted.geometry.bounds import BoundingBox
from src.whitted.geometry.intersection import Intersection
from src.whitted.geometry.shape import Shape


class Cone(Shape):
    """Cone around the y axis, optionally truncated and capped.

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
        a = d.x * d.x - d.y * d.y + d.z * d.z
        b = 2.0 * (o.x * d.x - o.y * d.y + o.z * d.z)
        c = o.x * o.x - o.y * o.y + o.z * o.z
        if float_equal(a, 0.0):
            if float_equal(b, 0.0):
                return []
            # Ray parallel to one of the halves: it crosses the other once.
            xs.append(Intersection(-c / (2.0 * b), self, trail=trail))
        else:
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
            if x * x + z * z <= abs(cap):
                xs.append(Intersection(t, self, trail=trail))
        if len(xs) > 1:
            xs.sort(key=lambda i: i.t)

    def local_normal(self, point, hit=None):
        dist = point.x * point.x + point.z * point.z
        if point.y >= self.maximum - EPSILON and dist <= abs(self.maximum):
            return Vector(0.0, 1.0, 0.0)
        if point.y <= self.minimum + EPSILON and dist <= abs(self.minimum):
            return Vector(0.0, -1.0, 0.0)
        y = math.sqrt(dist)
        if point.y > 0.0:
            y = -y
        return Vector(point.x, y, point.z)

    def local_bounds(self):
        # The cap disks reach out to sqrt(|y|), the wall to |y|.
        radius = max(1.0, abs(self.minimum), abs(self.maximum))
        return BoundingBox(Point(-radius, self.minimum, -radius), Point(radius, self.maximum, radius))
