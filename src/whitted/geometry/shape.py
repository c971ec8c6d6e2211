"""Base class for everything that can be placed in a scene.

Concrete shapes implement three methods in their own object space:

* ``local_intersect(ray, trail, stats)`` returns the intersections of an
  object-space ray.
* ``local_normal(point, hit)`` returns the object-space normal at a point.
* ``local_bounds()`` returns the object-space bounding box.

The base class provides the world-space versions once. ``intersect``
transforms the ray by the inverse transform before delegating. ``normal_at``
walks the hit's ancestor trail to convert the point into object space, then
converts the normal back with the inverse-transpose of each transform in
reverse order, renormalizing at every step.

Shapes hold no parent pointer. A shape still has at most one parent: adding
a shape to a second group or CSG node raises SceneGraphError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.whitted.core.errors import SceneGraphError
from src.whitted.core.matrix import IDENTITY, Matrix
from src.whitted.core.tuples import Point, Vector
from src.whitted.materials.material import DEFAULT_MATERIAL, Material

if TYPE_CHECKING:
    from src.whitted.core.ray import Ray
    from src.whitted.core.stats import RenderStats
    from src.whitted.geometry.bounds import BoundingBox
    from src.whitted.geometry.intersection import Intersection

Trail = tuple["Shape", ...]


class Shape:
    """Abstract scene object with a transform and an optional material.

    Args:
        transform: Object-to-parent transform. Default is the identity.
        material: Surface material. None means inherit from the nearest
            ancestor group, falling back to the default material.
        name: Optional label, used by ``Group.find`` and in reprs.

    Raises:
        NonInvertibleMatrixError: If the transform cannot be inverted.
    """

    # Composite shapes (groups, CSG) only route rays to their children and
    # are not counted as intersection tests.
    is_composite = False

    def __init__(
        self,
        transform: Matrix | None = None,
        material: Material | None = None,
        name: str | None = None,
    ):
        self.transform = transform if transform is not None else IDENTITY
        self.material = material
        self.name = name
        self._has_parent = False

    # Transform ----------------------------------------------------------

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, value: Matrix) -> None:
        # Inverting here surfaces singular transforms at scene construction.
        self._inverse = value.inverse()
        self._normal_matrix = self._inverse.transpose()
        self._transform = value

    @property
    def inverse(self) -> Matrix:
        return self._inverse

    # Scene graph --------------------------------------------------------

    @property
    def has_parent(self) -> bool:
        return self._has_parent

    def attach(self) -> None:
        """Mark the shape as owned by a composite.

        Raises:
            SceneGraphError: If the shape already has a parent.
        """
        if self._has_parent:
            raise SceneGraphError(f"{self!r} already belongs to a group or CSG node")
        self._has_parent = True

    def includes(self, shape: Shape) -> bool:
        """True if ``shape`` is this shape or one of its descendants."""
        return shape is self

    def resolved_material(self, trail: Trail = ()) -> Material:
        """Own material, else the nearest ancestor's, else the default."""
        if self.material is not None:
            return self.material
        for ancestor in reversed(trail):
            if ancestor.material is not None:
                return ancestor.material
        return DEFAULT_MATERIAL

    # World-space entry points -------------------------------------------

    def intersect(
        self, ray: Ray, trail: Trail = (), stats: RenderStats | None = None
    ) -> list[Intersection]:
        """Intersect a ray given in the parent's space.

        Args:
            ray: Ray in the coordinate space of this shape's parent.
            trail: Composite ancestors already traversed, outermost first.
            stats: Optional counters, incremented for every primitive test.

        Returns:
            Intersections sorted by t.
        """
        if stats is not None and not self.is_composite:
            stats.intersection_tests += 1
        return self.local_intersect(ray.transform(self._inverse), trail, stats)

    def world_to_object(self, point: Point, trail: Trail = ()) -> Point:
        """Convert a world-space point into this shape's object space."""
        for ancestor in trail:
            point = ancestor._inverse * point
        return self._inverse * point

    def normal_to_world(self, normal: Vector, trail: Trail = ()) -> Vector:
        """Convert an object-space normal into a unit world-space normal."""
        normal = (self._normal_matrix * normal).normalize()
        for ancestor in reversed(trail):
            normal = (ancestor._normal_matrix * normal).normalize()
        return normal

    def normal_at(self, world_point: Point, hit: Intersection | None = None) -> Vector:
        """Unit surface normal at a world-space point.

        Args:
            world_point: A point on the surface, in world space.
            hit: The intersection that produced the point. Supplies the
                ancestor trail and, for smooth triangles, the barycentric
                coordinates.
        """
        trail = hit.trail if hit is not None else ()
        local_point = self.world_to_object(world_point, trail)
        return self.normal_to_world(self.local_normal(local_point, hit), trail)

    def bounds(self) -> BoundingBox:
        """Bounding box in object space."""
        return self.local_bounds()

    def parent_space_bounds(self) -> BoundingBox:
        """Bounding box after applying this shape's own transform."""
        return self.bounds().transform(self._transform)

    # Subclass contract --------------------------------------------------

    def local_intersect(
        self, ray: Ray, trail: Trail = (), stats: RenderStats | None = None
    ) -> list[Intersection]:
        raise NotImplementedError(f"{type(self).__name__} must implement local_intersect()")

    def local_normal(self, point: Point, hit: Intersection | None = None) -> Vector:
        raise NotImplementedError(f"{type(self).__name__} must implement local_normal()")

    def local_bounds(self) -> BoundingBox:
        raise NotImplementedError(f"{type(self).__name__} must implement local_bounds()")

    def __repr__(self) -> str:
        if self.name:
            return f"{type(self).__name__}(name={self.name!r})"
        return f"{type(self).__name__}()"
