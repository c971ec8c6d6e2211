"""Flat and smooth triangles.

Triangles are the building block of OBJ meshes. Intersection uses the
Moller-Trumbore algorithm, which also yields the barycentric coordinates
(u, v) of the hit. SmoothTriangle uses them to interpolate vertex normals.

Example:
    >>> from src.whitted.core.ray import Ray
    >>> from src.whitted.core.tuples import Point, Vector
    >>> from src.whitted.geometry.triangle import Triangle
    >>> tri = Triangle(Point(0, 1, 0), Point(-1, 0, 0), Point(1, 0, 0))
    >>> tri.normal == Vector(0, 0, -1)
    True
    >>> [i.t for i in tri.intersect(Ray(Point(0, 0.5, -2), Vector(0, 0, 1)))]
    [2.0]
"""

from __future__ import annotations

from src.whitted.core.tuples import EPSILON, Point, Vector
from src.whitted.geometry.bounds import BoundingBox
from src.whitted.geometry.intersection import Intersection
from src.whitted.geometry.shape import Shape


class Triangle(Shape):
    """A flat triangle with a constant face normal.

    Args:
        p1: First vertex.
        p2: Second vertex.
        p3: Third vertex.
        **kwargs: Passed to Shape (transform, material, name).

    Raises:
        ZeroVectorError: If the vertices are collinear.
    """

    def __init__(self, p1: Point, p2: Point, p3: Point, **kwargs):
        super().__init__(**kwargs)
        self.p1 = p1
        self.p2 = p2
        self.p3 = p3
        self.e1 = p2 - p1
        self.e2 = p3 - p1
        self.normal = self.e2.cross(self.e1).normalize()

    def local_intersect(self, ray, trail=(), stats=None):
        d = ray.direction
        dir_cross_e2 = d.cross(self.e2)
        det = self.e1.dot(dir_cross_e2)
        if abs(det) < EPSILON:
            return []
        f = 1.0 / det
        p1_to_origin = ray.origin - self.p1
        u = f * p1_to_origin.dot(dir_cross_e2)
        if u < 0.0 or u > 1.0:
            return []
        origin_cross_e1 = p1_to_origin.cross(self.e1)
        v = f * d.dot(origin_cross_e1)
        if v < 0.0 or u + v > 1.0:
            return []
        t = f * self.e2.dot(origin_cross_e1)
        return [Intersection(t, self, u, v, trail)]

    def local_normal(self, point, hit=None):
        return self.normal

    def local_bounds(self):
        box = BoundingBox()
        for p in (self.p1, self.p2, self.p3):
            box.add_point(p)
        return box

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.p1!r}, {self.p2!r}, {self.p3!r})"


class SmoothTriangle(Triangle):
    """A triangle whose normal is interpolated from per-vertex normals.

    Args:
        p1: First vertex.
        p2: Second vertex.
        p3: Third vertex.
        n1: Normal at p1.
        n2: Normal at p2.
        n3: Normal at p3.
        **kwargs: Passed to Shape (transform, material, name).
    """

    def __init__(self, p1: Point, p2: Point, p3: Point, n1: Vector, n2: Vector, n3: Vector, **kwargs):
        super().__init__(p1, p2, p3, **kwargs)
        self.n1 = n1
        self.n2 = n2
        self.n3 = n3

    def local_normal(self, point, hit=None):
        if hit is None or hit.u is None:
            # Without barycentric coordinates fall back to the face normal.
            return self.normal
        u, v = hit.u, hit.v
        return self.n2 * u + self.n3 * v + self.n1 * (1.0 - u - v)
