"""Phong local illumination and Schlick's Fresnel approximation.

Example:
    >>> from src.whitted.core.tuples import Color, Point, Vector
    >>> from src.whitted.materials.light import PointLight
    >>> from src.whitted.materials.material import Material
    >>> light = PointLight(Point(0, 0, -10), Color(1, 1, 1))
    >>> color = lighting(Material(), light, Point(0, 0, 0), Vector(0, 0, -1), Vector(0, 0, -1))
    >>> color == Color(1.9, 1.9, 1.9)
    True
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from src.whitted.core.tuples import BLACK, Color, Point, Vector

if TYPE_CHECKING:
    from src.whitted.geometry.intersection import Computations
    from src.whitted.materials.light import PointLight
    from src.whitted.materials.material import Material


def lighting(
    material: Material,
    light: PointLight,
    point: Point,
    eyev: Vector,
    normalv: Vector,
    in_shadow: bool = False,
    shape=None,
    trail=(),
) -> Color:
    """Phong color of a surface point lit by one point light.

    Args:
        material: Surface material.
        light: The light source.
        point: World-space point being shaded.
        eyev: Unit vector from the point toward the eye.
        normalv: Unit surface normal at the point.
        in_shadow: If True only the ambient term is returned.
        shape: Shape being shaded, needed to evaluate patterns.
        trail: Composite ancestors of the shape, outermost first.

    Returns:
        ambient + diffuse + specular.
    """
    surface = material.color_at(shape, point, trail)
    effective_color = surface * light.intensity
    ambient = effective_color * material.ambient
    if in_shadow:
        return ambient

    lightv = (light.position - point).normalize()
    light_dot_normal = lightv.dot(normalv)
    if light_dot_normal < 0.0:
        # Light is on the other side of the surface.
        return ambient

    diffuse = effective_color * (material.diffuse * light_dot_normal)
    reflectv = (-lightv).reflect(normalv)
    reflect_dot_eye = reflectv.dot(eyev)
    if reflect_dot_eye <= 0.0:
        specular = BLACK
    else:
        factor = reflect_dot_eye ** material.shininess
        specular = light.intensity * (material.specular * factor)
    return ambient + diffuse + specular


def schlick(comps: Computations) -> float:
    """Fraction of light reflected at a hit, by Schlick's approximation.

    Returns exactly 1.0 under total internal reflection.
    """
    cos = comps.eyev.dot(comps.normalv)
    if comps.n1 > comps.n2:
        n = comps.n1 / comps.n2
        sin2_t = n * n * (1.0 - cos * cos)
        if sin2_t > 1.0:
            return 1.0
        cos = math.sqrt(1.0 - sin2_t)
    r0 = ((comps.n1 - comps.n2) / (comps.n1 + comps.n2)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cos) ** 5
