"""Axis-aligned cube spanning [-1, 1] on every axis."""

from __future__ import annotations

from src.whitted.core.matrix import compose, scaling, translation
from src.whitted.core.tuples import Point, Vector
from src.whitted.geometry.bounds import BoundingBox, check_axis
from src.whitted.geometry.intersection import Intersection
from src.whitted.geometry.shape import Shape


class Cube(Shape):
    """Unit cube centered at the origin, intersected with the slab method."""

    def local_intersect(self, ray, trail=(), stats=None):
        o, d = ray.origin, ray.direction
        xtmin, xtmax = check_axis(o.x, d.x, -1.0, 1.0)
        ytmin, ytmax = check_axis(o.y, d.y, -1.0, 1.0)
        ztmin, ztmax = check_axis(o.z, d.z, -1.0, 1.0)
        tmin = max(xtmin, ytmin, ztmin)
        tmax = min(xtmax, ytmax, ztmax)
        if tmin > tmax:
            return []
        return [Intersection(tmin, self, trail=trail), Intersection(tmax, self, trail=trail)]

    def local_normal(self, point, hit=None):
        ax, ay, az = abs(point.x), abs(point.y), abs(point.z)
        maxc = max(ax, ay, az)
        if maxc == ax:
            return Vector(point.x, 0.0, 0.0)
        if maxc == ay:
            return Vector(0.0, point.y, 0.0)
        return Vector(0.0, 0.0, point.z)

    def local_bounds(self):
        return BoundingBox(Point(-1.0, -1.0, -1.0), Point(1.0, 1.0, 1.0))

    @classmethod
    def from_bounds(cls, box: BoundingBox, material=None, name=None) -> Cube:
        """Build a cube whose parent-space extent is exactly ``box``.

        Handy for room walls and for visualizing a group's bounds.

        Raises:
            ValueError: If the box is empty or unbounded.
        """
        if box.is_empty:
            raise ValueError("cannot build a cube from an empty box")
        lo, hi = box.min, box.max
        half = ((hi.x - lo.x) / 2.0, (hi.y - lo.y) / 2.0, (hi.z - lo.z) / 2.0)
        if any(h == float("inf") for h in half):
            raise ValueError(f"cannot build a cube from an unbounded box {box!r}")
        transform = compose(
            scaling(*half),
            translation((lo.x + hi.x) / 2.0, (lo.y + hi.y) / 2.0, (lo.z + hi.z) / 2.0),
        )
        return cls(transform=transform, material=material, name=name)
