"""Groups: composite shapes with a cached bounding box.

A group owns an ordered list of children and applies its transform to all of
them. Its bounding box is the envelope of its children's boxes, each taken
through the child's own transform. The box is computed lazily, cached, and
invalidated when a child is added.

Intersecting a group first runs the slab test against the box; a ray that
misses it never reaches any child, so the children are not tested at all.

Example:
    >>> from src.whitted.core.matrix import translation
    >>> from src.whitted.geometry.group import Group
    >>> from src.whitted.geometry.sphere import Sphere
    >>> group = Group(name="pair")
    >>> group.add(Sphere(), Sphere(transform=translation(3, 0, 0)))
    >>> group.bounds()
    BoundingBox(Point(-1.0, -1.0, -1.0), Point(4.0, 1.0, 1.0))
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from operator import attrgetter

from src.whitted.core.errors import SceneGraphError
from src.whitted.geometry.bounds import BoundingBox
from src.whitted.geometry.shape import Shape

_by_t = attrgetter("t")


class Group(Shape):
    """An ordered collection of shapes sharing a transform.

    Args:
        children: Optional initial children.
        **kwargs: Passed to Shape (transform, material, name). A material
            set on a group is inherited by children that have none.
    """

    is_composite = True

    def __init__(self, children=(), **kwargs):
        super().__init__(**kwargs)
        self.children: list[Shape] = []
        self._bounds: BoundingBox | None = None
        if children:
            self.add(*children)

    def add(self, *children: Shape) -> None:
        """Append children and invalidate the cached bounds.

        All children are checked before any is attached, so a rejected call
        leaves the group unchanged.

        Raises:
            SceneGraphError: If a child already has a parent, appears twice,
                or contains this group.
        """
        for i, child in enumerate(children):
            if child.has_parent:
                raise SceneGraphError(f"{child!r} already belongs to a group or CSG node")
            if any(child is other for other in children[:i]):
                raise SceneGraphError(f"{child!r} was passed to add() more than once")
            if child.includes(self):
                raise SceneGraphError(f"adding {child!r} to {self!r} would create a cycle")
        for child in children:
            child.attach()
            self.children.append(child)
        self._bounds = None

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self) -> Iterator[Shape]:
        return iter(self.children)

    def __getitem__(self, index: int) -> Shape:
        return self.children[index]

    def includes(self, shape: Shape) -> bool:
        if shape is self:
            return True
        return any(child.includes(shape) for child in self.children)

    def find(self, name: str) -> Shape | None:
        """Breadth-first search of the subtree for a shape with this name."""
        queue = deque([self])
        while queue:
            group = queue.popleft()
            for child in group.children:
                if child.name == name:
                    return child
                if isinstance(child, Group):
                    queue.append(child)
        return None

    def bounds(self) -> BoundingBox:
        if self._bounds is None:
            box = BoundingBox()
            for child in self.children:
                box.merge(child.parent_space_bounds())
            self._bounds = box
        return self._bounds

    def local_bounds(self) -> BoundingBox:
        return self.bounds()

    def local_intersect(self, ray, trail=(), stats=None):
        if self.bounds().intersects(ray) is None:
            return []
        child_trail = trail + (self,)
        xs = []
        for child in self.children:
            xs.extend(child.intersect(ray, child_trail, stats))
        xs.sort(key=_by_t)
        return xs

    def local_normal(self, point, hit=None):
        raise NotImplementedError("groups have no surface; normals come from their children")

    def bounds_cube(self, material=None):
        """A cube tracing this group's bounds, for debugging scenes.

        The cube lives in the group's parent space, so add it next to the
        group rather than inside it.
        """
        from src.whitted.geometry.cube import Cube

        return Cube.from_bounds(self.parent_space_bounds(), material=material, name=f"{self.name} bounds")

    def __repr__(self) -> str:
        label = f"name={self.name!r}, " if self.name else ""
        return f"Group({label}children={len(self.children)})"
