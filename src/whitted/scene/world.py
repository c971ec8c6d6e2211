"""The world: root objects, one light, and the recursive shading algorithm.

Rendering a pixel runs ``color_at``: intersect the ray with every root
object, pick the hit, precompute the shading state, and shade it. Shading
adds the Phong surface color to the reflected and refracted colors, each of
which casts one more ray through ``color_at`` with one fewer bounce
remaining. When both reflection and refraction are present they are blended
with Schlick's approximation.

Example:
    >>> from src.whitted.core.ray import Ray
    >>> from src.whitted.core.tuples import Point, Vector
    >>> from src.whitted.scene.world import default_world
    >>> world = default_world()
    >>> world.color_at(Ray(Point(0, 0, -5), Vector(0, 1, 0)))
    Color(0.0, 0.0, 0.0)
"""

from __future__ import annotations

import math

from src.whitted.core.matrix import scaling
from src.whitted.core.ray import Ray
from src.whitted.core.stats import RenderStats
from src.whitted.core.tuples import BLACK, Color, Point, float_equal
from src.whitted.geometry.intersection import Computations, Intersection, hit, prepare_computations
from src.whitted.geometry.shape import Shape
from src.whitted.geometry.sphere import Sphere
from src.whitted.materials.light import PointLight
from src.whitted.materials.material import Material
from src.whitted.materials.phong import lighting, schlick

# Default number of reflection/refraction bounces.
MAX_DEPTH = 5


class World:
    """A scene ready to be traced.

    Args:
        objects: Root shapes. Often a single root Group.
        light: The point light, or None for an unlit scene in which every
            surface renders black.
    """

    def __init__(self, objects: list[Shape] | None = None, light: PointLight | None = None):
        self.objects: list[Shape] = list(objects) if objects else []
        self.light = light

    def add(self, *objects: Shape) -> None:
        self.objects.extend(objects)

    def intersect(self, ray: Ray, stats: RenderStats | None = None) -> list[Intersection]:
        """All intersections of a world-space ray, sorted by t."""
        xs = []
        for shape in self.objects:
            xs.extend(shape.intersect(ray, (), stats))
        xs.sort(key=lambda i: i.t)
        return xs

    def is_shadowed(self, point: Point, stats: RenderStats | None = None) -> bool:
        """True if something lies between the point and the light."""
        if self.light is None:
            return True
        v = self.light.position - point
        distance = v.magnitude()
        ray = Ray(point, v.normalize())
        h = hit(self.intersect(ray, stats))
        return h is not None and h.t < distance

    def shade_hit(self, comps: Computations, remaining: int = MAX_DEPTH, stats: RenderStats | None = None) -> Color:
        """Color at a prepared hit, including reflection and refraction."""
        if self.light is None:
            surface = BLACK
        else:
            shadowed = self.is_shadowed(comps.over_point, stats)
            surface = lighting(
                comps.material,
                self.light,
                comps.over_point,
                comps.eyev,
                comps.normalv,
                shadowed,
                comps.shape,
                comps.trail,
            )
        reflected = self.reflected_color(comps, remaining, stats)
        refracted = self.refracted_color(comps, remaining, stats)

        material = comps.material
        if material.reflective > 0.0 and material.transparency > 0.0:
            reflectance = schlick(comps)
            return surface + reflected * reflectance + refracted * (1.0 - reflectance)
        return surface + reflected + refracted

    def reflected_color(self, comps: Computations, remaining: int = MAX_DEPTH, stats: RenderStats | None = None) -> Color:
        """Color seen along the reflection vector, scaled by reflectivity."""
        reflective = comps.material.reflective
        if remaining < 1 or float_equal(reflective, 0.0):
            return BLACK
        reflect_ray = Ray(comps.over_point, comps.reflectv)
        return self.color_at(reflect_ray, remaining - 1, stats) * reflective

    def refracted_color(self, comps: Computations, remaining: int = MAX_DEPTH, stats: RenderStats | None = None) -> Color:
        """Color seen through the surface, or black under total internal reflection."""
        transparency = comps.material.transparency
        if remaining <= 0 or float_equal(transparency, 0.0):
            return BLACK
        n_ratio = comps.n1 / comps.n2
        cos_i = comps.eyev.dot(comps.normalv)
        sin2_t = n_ratio * n_ratio * (1.0 - cos_i * cos_i)
        if sin2_t > 1.0:
            return BLACK
        cos_t = math.sqrt(1.0 - sin2_t)
        direction = comps.normalv * (n_ratio * cos_i - cos_t) - comps.eyev * n_ratio
        refract_ray = Ray(comps.under_point, direction)
        return self.color_at(refract_ray, remaining - 1, stats) * transparency

    def color_at(self, ray: Ray, remaining: int = MAX_DEPTH, stats: RenderStats | None = None) -> Color:
        """Color seen along a ray; black when nothing is hit."""
        xs = self.intersect(ray, stats)
        h = hit(xs)
        if h is None:
            return BLACK
        return self.shade_hit(prepare_computations(h, ray, xs), remaining, stats)

    def __repr__(self) -> str:
        return f"World(objects={len(self.objects)}, light={self.light!r})"


def default_world() -> World:
    """Two concentric spheres lit from the upper left.

    The outer sphere is unit size and green-ish, the inner one half size
    with the default material. Used throughout the tests.
    """
    outer = Sphere(
        material=Material(color=Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2),
    )
    inner = Sphere(transform=scaling(0.5, 0.5, 0.5), material=Material())
    light = PointLight(Point(-10.0, 10.0, -10.0), Color(1.0, 1.0, 1.0))
    return World([outer, inner], light)
