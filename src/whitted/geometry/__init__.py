"""Shape primitives, composites and spatial pruning.

Components:
    shape: The Shape base class and the object/world space conversions
    sphere, plane, cube, cylinder, cone, triangle: Primitives
    group: Shape groups with cached bounding boxes
    csg: Constructive solid geometry
    bounds: Axis-aligned bounding boxes
    intersection: Intersection records, hit selection and shading state

Every shape intersects rays in its own object space. A ray passed down
through groups and CSG nodes carries the trail of composites it went
through, which is how materials and normals are resolved without parent
pointers.
"""

from .bounds import BoundingBox
from .cone import Cone
from .csg import CSG, CsgOperation, csg_combine, intersection_allowed
from .cube import Cube
from .cylinder import Cylinder
from .group import Group
from .intersection import Computations, Intersection, hit, prepare_computations
from .plane import Plane
from .shape import Shape
from .sphere import Sphere, glass_sphere
from .triangle import SmoothTriangle, Triangle

__all__ = [
    "Shape",
    "Sphere",
    "glass_sphere",
    "Plane",
    "Cube",
    "Cylinder",
    "Cone",
    "Triangle",
    "SmoothTriangle",
    "Group",
    "CSG",
    "CsgOperation",
    "csg_combine",
    "intersection_allowed",
    "BoundingBox",
    "Intersection",
    "Computations",
    "hit",
    "prepare_computations",
]
