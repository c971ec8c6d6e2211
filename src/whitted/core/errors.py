"""Exception hierarchy for the ray tracer.

Every error raised by the library derives from RayTracerError so callers can
catch library failures in one place. Errors that describe a bad argument value
also derive from ValueError, so existing ``except ValueError`` handlers keep
working.

None of these are transient faults: they indicate a scene that was built
incorrectly and are raised at construction time or on first use.
"""


class RayTracerError(Exception):
    """Base class for all ray tracer errors."""


class InvalidTupleOperationError(RayTracerError, ValueError):
    """Raised when tuple arithmetic produces an invalid w component.

    Adding two points, for example, yields w=2, which is neither a point nor
    a vector.
    """


class ZeroVectorError(RayTracerError, ValueError):
    """Raised when normalizing a vector of zero magnitude."""


class NonInvertibleMatrixError(RayTracerError, ValueError):
    """Raised when inverting a matrix whose determinant is (nearly) zero."""


class SceneGraphError(RayTracerError):
    """Raised when a shape would end up with more than one parent."""


class ObjParseError(RayTracerError):
    """Raised by the OBJ/MTL parser in strict mode.

    Attributes:
        line_number: 1-based line number of the offending statement, or None
            when the error is not tied to a single line.
        line: The raw text of the offending line, if known.
    """

    def __init__(self, message: str, line_number: int | None = None, line: str | None = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
        self.line = line
