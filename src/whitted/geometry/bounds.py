"""Axis-aligned bounding boxes.

Boxes are the acceleration structure of the tracer: a group tests the ray
against its box before touching any child, and skips the whole subtree when
the ray misses. A box only has to be conservative (it may be larger than what
it encloses, never smaller).

Boxes may be unbounded along an axis (planes, open cylinders). Transforming
such a box keeps it unbounded along every axis the infinite extent leaks into.

Example:
    >>> from src.whitted.geometry.bounds import BoundingBox
    >>> from src.whitted.core.tuples import Point
    >>> box = BoundingBox(Point(-1, -1, -1), Point(1, 1, 1))
    >>> box.contains_point(Point(0.5, 0, 0))
    True
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from src.whitted.core.tuples import EPSILON, Point

if TYPE_CHECKING:
    from src.whitted.core.matrix import Matrix
    from src.whitted.core.ray import Ray

INF = math.inf


def check_axis(origin: float, direction: float, minimum: float, maximum: float) -> tuple[float, float]:
    """Slab test along one axis.

    Computes the t values at which a ray crosses the two planes
    ``minimum`` and ``maximum`` of one axis.

    Args:
        origin: Ray origin component along the axis.
        direction: Ray direction component along the axis.
        minimum: Lower slab plane.
        maximum: Upper slab plane.

    Returns:
        (tmin, tmax) with tmin <= tmax. A ray parallel to the slab gets
        infinite values whose signs say whether it lies between the planes.
    """
    tmin_numerator = minimum - origin
    tmax_numerator = maximum - origin
    if abs(direction) >= EPSILON:
        tmin = tmin_numerator / direction
        tmax = tmax_numerator / direction
    else:
        tmin = math.copysign(INF, tmin_numerator)
        tmax = math.copysign(INF, tmax_numerator)
    if tmin > tmax:
        return tmax, tmin
    return tmin, tmax


class BoundingBox:
    """A box aligned to the x, y and z axes.

    A box built with no arguments is empty: its minimum is +inf and its
    maximum -inf on every axis, so adding the first point makes it a box
    around exactly that point.

    Args:
        minimum: Lower corner. Default is an empty box.
        maximum: Upper corner. Default is an empty box.
    """

    __slots__ = ("min", "max")

    def __init__(self, minimum: Point | None = None, maximum: Point | None = None):
        self.min = minimum if minimum is not None else Point(INF, INF, INF)
        self.max = maximum if maximum is not None else Point(-INF, -INF, -INF)

    @property
    def is_empty(self) -> bool:
        return self.min.x > self.max.x or self.min.y > self.max.y or self.min.z > self.max.z

    def add_point(self, point: Point) -> None:
        """Grow the box in place so that it contains the point."""
        self.min = Point(min(self.min.x, point.x), min(self.min.y, point.y), min(self.min.z, point.z))
        self.max = Point(max(self.max.x, point.x), max(self.max.y, point.y), max(self.max.z, point.z))

    def merge(self, other: BoundingBox) -> None:
        """Grow the box in place so that it contains another box."""
        if other.is_empty:
            return
        self.add_point(other.min)
        self.add_point(other.max)

    def contains_point(self, point: Point) -> bool:
        return (
            self.min.x <= point.x <= self.max.x
            and self.min.y <= point.y <= self.max.y
            and self.min.z <= point.z <= self.max.z
        )

    def contains_box(self, other: BoundingBox) -> bool:
        return self.contains_point(other.min) and self.contains_point(other.max)

    def corners(self) -> list[Point]:
        lo, hi = self.min, self.max
        return [
            Point(x, y, z)
            for x in (lo.x, hi.x)
            for y in (lo.y, hi.y)
            for z in (lo.z, hi.z)
        ]

    def transform(self, matrix: Matrix) -> BoundingBox:
        """Return the box enclosing all eight corners after the transform.

        Zero matrix entries never pick up an infinite coordinate, and an
        axis that mixes opposite infinities becomes unbounded both ways.
        """
        if self.is_empty:
            return BoundingBox()
        rows = [[matrix[r, c] for c in range(4)] for r in range(3)]
        lows = [INF, INF, INF]
        highs = [-INF, -INF, -INF]
        unbounded = [False, False, False]
        for corner in self.corners():
            coords = (corner.x, corner.y, corner.z, 1.0)
            for axis, row in enumerate(rows):
                value = sum(m * c for m, c in zip(row, coords) if m != 0.0)
                if math.isnan(value):
                    unbounded[axis] = True
                    continue
                lows[axis] = min(lows[axis], value)
                highs[axis] = max(highs[axis], value)
        for axis in range(3):
            if unbounded[axis]:
                lows[axis], highs[axis] = -INF, INF
        return BoundingBox(Point(*lows), Point(*highs))

    def intersects(self, ray: Ray) -> tuple[float, float] | None:
        """Slab test against a ray.

        Returns:
            (tmin, tmax) of the span the ray spends inside the box, or None
            when the ray misses it.
        """
        if self.is_empty:
            return None
        o, d = ray.origin, ray.direction
        xtmin, xtmax = check_axis(o.x, d.x, self.min.x, self.max.x)
        ytmin, ytmax = check_axis(o.y, d.y, self.min.y, self.max.y)
        ztmin, ztmax = check_axis(o.z, d.z, self.min.z, self.max.z)
        tmin = max(xtmin, ytmin, ztmin)
        tmax = min(xtmax, ytmax, ztmax)
        if tmin > tmax:
            return None
        return tmin, tmax

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoundingBox):
            return NotImplemented
        return self.min == other.min and self.max == other.max

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"BoundingBox({self.min!r}, {self.max!r})"
