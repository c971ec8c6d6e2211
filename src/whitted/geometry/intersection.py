"""Intersection records and per-hit shading state.

A ray tested against a shape yields a list of Intersection records sorted by
t. ``hit`` picks the visible one (smallest non-negative t) and
``prepare_computations`` turns it into a Computations record holding
everything the shader needs: the point, eye and normal vectors, the offset
points used by secondary rays and the refractive indices on both sides of the
surface.

Each intersection remembers the trail of composite shapes (groups and CSG
nodes) the ray passed through to reach the primitive. Shapes keep no
reference to their parent, so the trail is what converts points and normals
between world and object space and what resolves inherited materials.

Example:
    >>> from src.whitted.core.ray import Ray
    >>> from src.whitted.core.tuples import Point, Vector
    >>> from src.whitted.geometry.sphere import Sphere
    >>> ray = Ray(Point(0, 0, -5), Vector(0, 0, 1))
    >>> xs = Sphere().intersect(ray)
    >>> comps = prepare_computations(hit(xs), ray, xs)
    >>> comps.point, comps.normalv
    (Point(0.0, 0.0, -1.0), Vector(0.0, 0.0, -1.0))
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from operator import attrgetter
from typing import TYPE_CHECKING

from src.whitted.core.tuples import EPSILON, Point, Vector

if TYPE_CHECKING:
    from src.whitted.core.ray import Ray
    from src.whitted.geometry.shape import Shape
    from src.whitted.materials.material import Material

_by_t = attrgetter("t")


@dataclass(eq=False, slots=True)
class Intersection:
    """One crossing of a ray with a primitive surface.

    Attributes:
        t: Distance along the ray, in units of the ray's direction.
        shape: The primitive that was hit.
        u: First barycentric coordinate (triangles only).
        v: Second barycentric coordinate (triangles only).
        trail: Composite ancestors of ``shape``, outermost first.
    """

    t: float
    shape: Shape
    u: float | None = None
    v: float | None = None
    trail: tuple[Shape, ...] = ()

    @property
    def material(self) -> Material:
        """Material of the shape, inherited from the nearest ancestor if unset."""
        return self.shape.resolved_material(self.trail)


def sort_intersections(xs: list[Intersection]) -> list[Intersection]:
    """Sort a list of intersections by t in place and return it."""
    xs.sort(key=_by_t)
    return xs


def hit(xs: Iterable[Intersection]) -> Intersection | None:
    """Return the intersection with the smallest non-negative t, or None."""
    best = None
    for i in xs:
        if i.t >= 0.0 and (best is None or i.t < best.t):
            best = i
    return best


@dataclass(slots=True)
class Computations:
    """Precomputed state at a ray-surface hit.

    Attributes:
        t: Distance along the ray.
        shape: The primitive that was hit.
        trail: Composite ancestors of the shape, outermost first.
        material: Resolved material at the hit.
        point: World-space hit point.
        eyev: Unit-ish vector back toward the eye (negated ray direction).
        normalv: Surface normal, flipped to face the eye.
        inside: True when the hit is on the inside of the surface.
        over_point: Point nudged along the normal; origin for shadow and
            reflection rays.
        under_point: Point nudged against the normal; origin for refraction
            rays.
        reflectv: Ray direction reflected around the normal.
        n1: Refractive index of the medium the ray is leaving.
        n2: Refractive index of the medium the ray is entering.
    """

    t: float
    shape: Shape
    trail: tuple[Shape, ...]
    material: Material
    point: Point
    eyev: Vector
    normalv: Vector
    inside: bool
    over_point: Point
    under_point: Point
    reflectv: Vector
    n1: float
    n2: float


def refractive_indices(hit: Intersection, xs: Sequence[Intersection]) -> tuple[float, float]:
    """Find the refractive indices on either side of a hit.

    Walks the sorted intersections keeping a list of the shapes the ray is
    currently inside. A shape is entered at its first crossing and left at
    the next one.

    Returns:
        (n1, n2): index of the medium being left and of the one entered.
    """
    containers: list[tuple[Shape, float]] = []
    n1 = n2 = 1.0
    for i in xs:
        if i is hit:
            n1 = containers[-1][1] if containers else 1.0
        for index, (shape, _) in enumerate(containers):
            if shape is i.shape:
                del containers[index]
                break
        else:
            containers.append((i.shape, i.material.refractive_index))
        if i is hit:
            n2 = containers[-1][1] if containers else 1.0
            break
    return n1, n2


def prepare_computations(
    hit: Intersection, ray: Ray, xs: Sequence[Intersection] | None = None
) -> Computations:
    """Compute the shading state for a hit.

    Args:
        hit: The intersection being shaded.
        ray: The ray that produced it.
        xs: All intersections of the ray, sorted by t. Needed for n1/n2;
            when omitted only the hit itself is considered.

    Returns:
        A Computations record.
    """
    point = ray.position(hit.t)
    eyev = -ray.direction
    normalv = hit.shape.normal_at(point, hit)
    inside = normalv.dot(eyev) < 0.0
    if inside:
        normalv = -normalv
    offset = normalv * EPSILON
    n1, n2 = refractive_indices(hit, xs if xs is not None else (hit,))
    return Computations(
        t=hit.t,
        shape=hit.shape,
        trail=hit.trail,
        material=hit.material,
        point=point,
        eyev=eyev,
        normalv=normalv,
        inside=inside,
        over_point=point + offset,
        under_point=point - offset,
        reflectv=ray.direction.reflect(normalv),
        n1=n1,
        n2=n2,
    )
