"""Core building blocks for ray tracing.

Components:
    tuples: Points, vectors and colors with tolerant equality
    matrix: 4x4 matrices, inversion and transformation builders
    ray: Ray data structure
    canvas: Pixel buffer and PPM encoding
    stats: Render counters
    errors: Exception hierarchy
"""

from .canvas import Canvas
from .errors import (
    InvalidTupleOperationError,
    NonInvertibleMatrixError,
    ObjParseError,
    RayTracerError,
    SceneGraphError,
    ZeroVectorError,
)
from .matrix import (
    IDENTITY,
    Matrix,
    compose,
    identity,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
)
from .ray import Ray
from .stats import RenderStats
from .tuples import BLACK, EPSILON, ORIGIN, WHITE, Color, Point, Tuple, Vector, float_equal

# Note: renderer is NOT imported here to keep core free of scene imports.
# Import it directly:
#   from src.whitted.core.renderer import ParallelRenderer, RenderSettings

__all__ = [
    "Tuple",
    "Point",
    "Vector",
    "Color",
    "EPSILON",
    "ORIGIN",
    "BLACK",
    "WHITE",
    "float_equal",
    "Matrix",
    "IDENTITY",
    "identity",
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    "compose",
    "Ray",
    "Canvas",
    "RenderStats",
    "RayTracerError",
    "InvalidTupleOperationError",
    "ZeroVectorError",
    "NonInvertibleMatrixError",
    "SceneGraphError",
    "ObjParseError",
]
