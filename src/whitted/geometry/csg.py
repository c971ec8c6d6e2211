"""Constructive solid geometry.

A CSG node combines two shapes with a boolean operation. Intersections of
both operands are merged, sorted, and filtered by walking them in t order
while tracking whether the ray is currently inside the left and the right
operand. Which intersections survive is decided by ``intersection_allowed``:

=========== =========================================================
union       keep hits on either operand that are not inside the other
intersect   keep hits on either operand that are inside the other
difference  keep left hits outside right, and right hits inside left
=========== =========================================================

Example:
    >>> from src.whitted.core.matrix import translation
    >>> from src.whitted.geometry.csg import CSG, CsgOperation
    >>> from src.whitted.geometry.cube import Cube
    >>> from src.whitted.geometry.sphere import Sphere
    >>> carved = CSG(CsgOperation.DIFFERENCE, Cube(), Sphere(transform=translation(0, 0, -1)))
"""

from __future__ import annotations

from enum import Enum
from operator import attrgetter

from src.whitted.core.errors import SceneGraphError
from src.whitted.geometry.bounds import BoundingBox
from src.whitted.geometry.shape import Shape

_by_t = attrgetter("t")


class CsgOperation(str, Enum):
    """Boolean operations supported by CSG nodes."""

    UNION = "union"
    INTERSECT = "intersect"
    DIFFERENCE = "difference"


def intersection_allowed(operation: CsgOperation, left_hit: bool, in_left: bool, in_right: bool) -> bool:
    """Decide whether a hit on one operand belongs to the combined surface.

    Args:
        operation: The boolean operation.
        left_hit: True if the hit is on the left operand.
        in_left: True if the ray is currently inside the left operand.
        in_right: True if the ray is currently inside the right operand.
    """
    if operation is CsgOperation.UNION:
        return (left_hit and not in_right) or (not left_hit and not in_left)
    if operation is CsgOperation.INTERSECT:
        return (left_hit and in_right) or (not left_hit and in_left)
    if operation is CsgOperation.DIFFERENCE:
        return (left_hit and not in_right) or (not left_hit and in_left)
    raise ValueError(f"Unknown CSG operation: {operation!r}")


class CSG(Shape):
    """Boolean combination of two shapes.

    Args:
        operation: One of CsgOperation (or its string value).
        left: Left operand.
        right: Right operand.
        **kwargs: Passed to Shape (transform, material, name).

    Raises:
        SceneGraphError: If either operand already has a parent.
        ValueError: If the operation is unknown.
    """

    is_composite = True

    def __init__(self, operation: CsgOperation | str, left: Shape, right: Shape, **kwargs):
        super().__init__(**kwargs)
        self.operation = CsgOperation(operation)
        if left is right:
            raise SceneGraphError("a CSG node needs two distinct operands")
        for operand in (left, right):
            if operand.has_parent:
                raise SceneGraphError(f"{operand!r} already belongs to a group or CSG node")
        left.attach()
        right.attach()
        self.left = left
        self.right = right
        self._bounds: BoundingBox | None = None

    def includes(self, shape: Shape) -> bool:
        return shape is self or self.left.includes(shape) or self.right.includes(shape)

    def filter_intersections(self, xs):
        """Keep the intersections that lie on the combined surface.

        Args:
            xs: Intersections with either operand, sorted by t.
        """
        in_left = False
        in_right = False
        result = []
        for i in xs:
            left_hit = self.left.includes(i.shape)
            if intersection_allowed(self.operation, left_hit, in_left, in_right):
                result.append(i)
            if left_hit:
                in_left = not in_left
            else:
                in_right = not in_right
        return result

    def bounds(self) -> BoundingBox:
        # Loose: the union of both operands, whatever the operation.
        if self._bounds is None:
            box = BoundingBox()
            box.merge(self.left.parent_space_bounds())
            box.merge(self.right.parent_space_bounds())
            self._bounds = box
        return self._bounds

    def local_bounds(self) -> BoundingBox:
        return self.bounds()

    def local_intersect(self, ray, trail=(), stats=None):
        if self.bounds().intersects(ray) is None:
            return []
        child_trail = trail + (self,)
        xs = self.left.intersect(ray, child_trail, stats) + self.right.intersect(ray, child_trail, stats)
        xs.sort(key=_by_t)
        return self.filter_intersections(xs)

    def local_normal(self, point, hit=None):
        raise NotImplementedError("CSG nodes have no surface; normals come from their operands")

    def __repr__(self) -> str:
        return f"CSG({self.operation.value}, {self.left!r}, {self.right!r})"


def csg_combine(operation: CsgOperation | str, *shapes: Shape) -> CSG:
    """Fold two or more shapes into nested CSG nodes, left to right.

    ``csg_combine(UNION, a, b, c)`` is ``CSG(UNION, CSG(UNION, a, b), c)``.

    Raises:
        ValueError: If fewer than two shapes are given.
    """
    if len(shapes) < 2:
        raise ValueError(f"csg_combine needs at least 2 shapes, got {len(shapes)}")
    result = CSG(operation, shapes[0], shapes[1])
    for shape in shapes[2:]:
        result = CSG(operation, result, shape)
    return result
