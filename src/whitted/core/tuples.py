"""Homogeneous tuples: points, vectors and colors.

All geometry in the tracer is expressed with 4-component tuples. Points carry
w=1 and are affected by translation, vectors carry w=0 and are not. Colors
reuse the same four slots as (red, green, blue, alpha).

Tuples are small immutable value objects. Equality is tolerant to floating
point noise (see EPSILON), which also means tuples are not hashable.

Example:
    >>> from src.whitted.core.tuples import Point, Vector
    >>> p = Point(1.0, 2.0, 3.0)
    >>> v = Vector(0.0, 0.0, 1.0)
    >>> p + v * 2.0
    Point(1.0, 2.0, 5.0)
    >>> p + p
    Traceback (most recent call last):
        ...
    InvalidTupleOperationError: ...
"""

from __future__ import annotations

import math
from collections.abc import Iterator

from src.whitted.core.errors import InvalidTupleOperationError, ZeroVectorError

# Tolerance used for every float comparison in the tracer.
EPSILON = 1e-5


def float_equal(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """Compare two floats with an absolute tolerance.

    Infinities of the same sign compare equal.
    """
    return a == b or abs(a - b) < epsilon


def _typed(x: float, y: float, z: float, w: float) -> Tuple:
    if w == 1.0:
        return Point(x, y, z)
    if w == 0.0:
        return Vector(x, y, z)
    return Tuple(x, y, z, w)


def _checked(x: float, y: float, z: float, w: float, op: str) -> Tuple:
    if w < 0.0 or w > 1.0:
        raise InvalidTupleOperationError(
            f"{op} produced w={w}; the result is neither a point nor a vector"
        )
    return _typed(x, y, z, w)


class Tuple:
    """A raw (x, y, z, w) tuple.

    Use Point and Vector for geometry; a bare Tuple only appears as the
    transient result of arithmetic whose w is neither 0 nor 1.
    """

    __slots__ = ("x", "y", "z", "w")

    def __init__(self, x: float, y: float, z: float, w: float):
        self.x = x
        self.y = y
        self.z = z
        self.w = w

    # Arithmetic ---------------------------------------------------------

    def __add__(self, other: Tuple) -> Tuple:
        return _checked(
            self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w, "addition"
        )

    def __sub__(self, other: Tuple) -> Tuple:
        return _checked(
            self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w, "subtraction"
        )

    def __neg__(self) -> Tuple:
        return _typed(-self.x, -self.y, -self.z, -self.w)

    def __mul__(self, scalar: float) -> Tuple:
        return _typed(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Tuple:
        return _typed(self.x / scalar, self.y / scalar, self.z / scalar, self.w / scalar)

    def dot(self, other: Tuple) -> float:
        """Dot product over all four components."""
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w)

    def normalize(self) -> Tuple:
        """Return a tuple of unit magnitude pointing the same way.

        Raises:
            ZeroVectorError: If the magnitude is zero.
        """
        m = self.magnitude()
        if m == 0.0:
            raise ZeroVectorError(f"cannot normalize zero-magnitude {self!r}")
        return _typed(self.x / m, self.y / m, self.z / m, self.w / m)

    # Comparison ---------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return (
            float_equal(self.x, other.x)
            and float_equal(self.y, other.y)
            and float_equal(self.z, other.z)
            and float_equal(self.w, other.w)
        )

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def __repr__(self) -> str:
        return f"Tuple({self.x}, {self.y}, {self.z}, {self.w})"


class Point(Tuple):
    """A position in space (w=1)."""

    __slots__ = ()

    def __init__(self, x: float, y: float, z: float):
        self.x = x
        self.y = y
        self.z = z
        self.w = 1.0

    def __repr__(self) -> str:
        return f"Point({self.x}, {self.y}, {self.z})"


class Vector(Tuple):
    """A direction with magnitude (w=0)."""

    __slots__ = ()

    def __init__(self, x: float, y: float, z: float):
        self.x = x
        self.y = y
        self.z = z
        self.w = 0.0

    def __sub__(self, other: Tuple) -> Tuple:
        # Vector - Vector is by far the most common case; skip the w check.
        if type(other) is Vector:
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        return super().__sub__(other)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector:
        return Vector(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> Vector:
        m = self.magnitude()
        if m == 0.0:
            raise ZeroVectorError(f"cannot normalize zero-magnitude {self!r}")
        return Vector(self.x / m, self.y / m, self.z / m)

    def cross(self, other: Vector) -> Vector:
        """Cross product; only defined for vectors."""
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def reflect(self, normal: Vector) -> Vector:
        """Reflect this vector around a (unit) normal: v - n * 2 * dot(v, n)."""
        return self - normal * (2.0 * self.dot(normal))

    def __repr__(self) -> str:
        return f"Vector({self.x}, {self.y}, {self.z})"


class Color(Tuple):
    """An RGB color with an alpha channel stored in the w slot.

    Color arithmetic never validates w. Sums, differences and scalings keep
    the left operand's alpha; the Hadamard product multiplies alphas.
    Iterating a color yields only (red, green, blue).
    """

    __slots__ = ()

    def __init__(self, red: float, green: float, blue: float, alpha: float = 1.0):
        self.x = red
        self.y = green
        self.z = blue
        self.w = alpha

    @property
    def red(self) -> float:
        return self.x

    @property
    def green(self) -> float:
        return self.y

    @property
    def blue(self) -> float:
        return self.z

    @property
    def alpha(self) -> float:
        return self.w

    def __add__(self, other: Tuple) -> Color:
        return Color(self.x + other.x, self.y + other.y, self.z + other.z, self.w)

    def __sub__(self, other: Tuple) -> Color:
        return Color(self.x - other.x, self.y - other.y, self.z - other.z, self.w)

    def __neg__(self) -> Color:
        return Color(-self.x, -self.y, -self.z, self.w)

    def __mul__(self, other: Color | float) -> Color:
        if isinstance(other, Tuple):
            return Color(self.x * other.x, self.y * other.y, self.z * other.z, self.w * other.w)
        return Color(self.x * other, self.y * other, self.z * other, self.w)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Color:
        return Color(self.x / scalar, self.y / scalar, self.z / scalar, self.w)

    def hadamard(self, other: Color) -> Color:
        """Component-wise product of two colors."""
        return self * other

    def to_255(self) -> tuple[int, int, int]:
        """Quantize to 8-bit channels.

        Each channel is scaled by 255, clamped to [0, 255] and rounded up
        inside the range.
        """
        return (_channel_255(self.x), _channel_255(self.y), _channel_255(self.z))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __repr__(self) -> str:
        if self.w == 1.0:
            return f"Color({self.x}, {self.y}, {self.z})"
        return f"Color({self.x}, {self.y}, {self.z}, alpha={self.w})"


def _channel_255(value: float) -> int:
    scaled = value * 255.0
    if scaled < 0.0:
        return 0
    if scaled > 255.0:
        return 255
    return math.ceil(scaled)


ORIGIN = Point(0.0, 0.0, 0.0)
BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
