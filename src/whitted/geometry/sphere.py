"""Unit sphere centered at the origin.

Move, stretch and resize spheres with their transform.

Example:
    >>> from src.whitted.core.matrix import translation
    >>> from src.whitted.core.ray import Ray
    >>> from src.whitted.core.tuples import Point, Vector
    >>> from src.whitted.geometry.sphere import Sphere
    >>> ray = Ray(Point(0, 0, -5), Vector(0, 0, 1))
    >>> [i.t for i in Sphere().intersect(ray)]
    [4.0, 6.0]
"""

from __future__ import annotations

import math

from src.whitted.core.tuples import Point, Vector
from src.whitted.geometry.bounds import BoundingBox
from src.whitted.geometry.intersection import Intersection
from src.whitted.geometry.shape import Shape
from src.whitted.materials.material import glass


class Sphere(Shape):
    """Sphere of radius 1 around the object-space origin."""

    def local_intersect(self, ray, trail=(), stats=None):
        o, d = ray.origin, ray.direction
        # Vector from the sphere center (the origin) to the ray origin.
        ox, oy, oz = o.x, o.y, o.z
        a = d.x * d.x + d.y * d.y + d.z * d.z
        b = 2.0 * (d.x * ox + d.y * oy + d.z * oz)
        c = ox * ox + oy * oy + oz * oz - 1.0
        discriminant = b * b - 4.0 * a * c
        if discriminant <= 0.0:
            return []
        root = math.sqrt(discriminant)
        t1 = (-b - root) / (2.0 * a)
        t2 = (-b + root) / (2.0 * a)
        if t1 > t2:
            t1, t2 = t2, t1
        return [Intersection(t1, self, trail=trail), Intersection(t2, self, trail=trail)]

    def local_normal(self, point, hit=None):
        return Vector(point.x, point.y, point.z)

    def local_bounds(self):
        return BoundingBox(Point(-1.0, -1.0, -1.0), Point(1.0, 1.0, 1.0))


def glass_sphere(transform=None, **material_overrides) -> Sphere:
    """A sphere with a clear glass material (transparency 1, index 1.5)."""
    return Sphere(transform=transform, material=glass(**material_overrides))
