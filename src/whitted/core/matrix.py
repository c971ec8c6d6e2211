"""Square matrices and affine transform builders.

Matrix is an immutable value type backed by a read-only numpy float64 array.
Matrix products use numpy; matrix-tuple products (the hot path during
tracing) use cached Python row tuples to avoid array allocation per call.
The inverse and transpose are computed once and cached.

Transforms compose right-to-left. ``compose(a, b, c)`` returns ``c * b * a``
so that ``a`` is applied first, which lets scenes be written in natural
scale-rotate-translate order. The fluent helpers do the same thing one step
at a time:

Example:
    >>> import math
    >>> from src.whitted.core.matrix import identity, compose, scaling, translation
    >>> from src.whitted.core.tuples import Point
    >>> t = identity().scale(2, 2, 2).translate(0, 1, 0)
    >>> t == compose(scaling(2, 2, 2), translation(0, 1, 0))
    True
    >>> t * Point(1, 0, 0)
    Point(2.0, 1.0, 0.0)
"""

from __future__ import annotations

import math
from typing import overload

import numpy as np
import numpy.typing as npt

from src.whitted.core.errors import NonInvertibleMatrixError
from src.whitted.core.tuples import EPSILON, Point, Tuple, Vector, _typed

# Determinants below this magnitude are treated as singular.
SINGULAR_THRESHOLD = 1e-12


class Matrix:
    """An immutable n x n matrix, 1 <= n <= 4.

    Args:
        rows: Nested sequence (or 2D array) of cell values, row-major.

    Raises:
        ValueError: If the rows do not form a square matrix of size 1 to 4.
    """

    __slots__ = ("_cells", "_rows", "_inverse", "_transpose", "_determinant")

    def __init__(self, rows: npt.ArrayLike):
        cells = np.array(rows, dtype=np.float64)
        if cells.ndim != 2 or cells.shape[0] != cells.shape[1] or not 1 <= cells.shape[0] <= 4:
            raise ValueError(f"Matrix must be square with size 1..4, got shape {cells.shape}")
        cells.setflags(write=False)
        self._cells = cells
        self._rows = tuple(tuple(row) for row in cells.tolist())
        self._inverse: Matrix | None = None
        self._transpose: Matrix | None = None
        self._determinant: float | None = None

    # Access -------------------------------------------------------------

    @property
    def size(self) -> int:
        return self._cells.shape[0]

    @property
    def cells(self) -> npt.NDArray[np.float64]:
        """Read-only view of the underlying array."""
        return self._cells

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return self._rows[row][col]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self._cells.shape != other._cells.shape:
            return False
        return bool(np.all(np.abs(self._cells - other._cells) < EPSILON))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix({[list(row) for row in self._rows]})"

    # Products -----------------------------------------------------------

    @overload
    def __mul__(self, other: Matrix) -> Matrix: ...

    @overload
    def __mul__(self, other: Point) -> Point: ...

    @overload
    def __mul__(self, other: Vector) -> Vector: ...

    @overload
    def __mul__(self, other: Tuple) -> Tuple: ...

    def __mul__(self, other):
        if isinstance(other, Matrix):
            if other.size != self.size:
                raise ValueError(f"cannot multiply {self.size}x{self.size} by {other.size}x{other.size}")
            return Matrix(self._cells @ other._cells)
        if isinstance(other, Tuple):
            return self._mul_tuple(other)
        return NotImplemented

    __matmul__ = __mul__

    def _mul_tuple(self, t: Tuple) -> Tuple:
        if self.size != 4:
            raise ValueError(f"only 4x4 matrices transform tuples, this one is {self.size}x{self.size}")
        r0, r1, r2, r3 = self._rows
        x, y, z = t.x, t.y, t.z
        if type(t) is Vector:
            # Translation never affects a direction.
            return Vector(
                r0[0] * x + r0[1] * y + r0[2] * z,
                r1[0] * x + r1[1] * y + r1[2] * z,
                r2[0] * x + r2[1] * y + r2[2] * z,
            )
        if type(t) is Point:
            return Point(
                r0[0] * x + r0[1] * y + r0[2] * z + r0[3],
                r1[0] * x + r1[1] * y + r1[2] * z + r1[3],
                r2[0] * x + r2[1] * y + r2[2] * z + r2[3],
            )
        w = t.w
        return _typed(
            r0[0] * x + r0[1] * y + r0[2] * z + r0[3] * w,
            r1[0] * x + r1[1] * y + r1[2] * z + r1[3] * w,
            r2[0] * x + r2[1] * y + r2[2] * z + r2[3] * w,
            r3[0] * x + r3[1] * y + r3[2] * z + r3[3] * w,
        )

    # Algebra ------------------------------------------------------------

    def transpose(self) -> Matrix:
        if self._transpose is None:
            self._transpose = Matrix(self._cells.T)
        return self._transpose

    def submatrix(self, row: int, col: int) -> Matrix:
        """Return a copy with the given row and column removed."""
        if self.size < 2:
            raise ValueError("a 1x1 matrix has no submatrix")
        cells = np.delete(np.delete(self._cells, row, axis=0), col, axis=1)
        return Matrix(cells)

    def minor(self, row: int, col: int) -> float:
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(f"cofactor ({row}, {col}) outside {self.size}x{self.size} matrix")
        minor = self.minor(row, col)
        return minor if (row + col) % 2 == 0 else -minor

    def determinant(self) -> float:
        """Determinant by cofactor expansion along the first row."""
        if self._determinant is None:
            rows = self._rows
            if self.size == 1:
                det = rows[0][0]
            elif self.size == 2:
                det = rows[0][0] * rows[1][1] - rows[0][1] * rows[1][0]
            else:
                det = sum(rows[0][col] * self.cofactor(0, col) for col in range(self.size))
            self._determinant = det
        return self._determinant

    def is_invertible(self) -> bool:
        return abs(self.determinant()) >= SINGULAR_THRESHOLD

    def inverse(self) -> Matrix:
        """Return the inverse, computed from the adjugate and cached.

        Raises:
            NonInvertibleMatrixError: If the determinant is (nearly) zero.
        """
        if self._inverse is None:
            det = self.determinant()
            if abs(det) < SINGULAR_THRESHOLD:
                raise NonInvertibleMatrixError(f"matrix is not invertible (determinant {det})")
            n = self.size
            if n == 1:
                cells = [[1.0 / det]]
            else:
                cells = [[self.cofactor(col, row) / det for col in range(n)] for row in range(n)]
            inverse = Matrix(cells)
            inverse._inverse = self
            self._inverse = inverse
        return self._inverse

    # Fluent transforms --------------------------------------------------
    #
    # Each helper applies one more transform *after* this one.

    def translate(self, x: float, y: float, z: float) -> Matrix:
        return translation(x, y, z) * self

    def scale(self, x: float, y: float, z: float) -> Matrix:
        return scaling(x, y, z) * self

    def rotate_x(self, radians: float) -> Matrix:
        return rotation_x(radians) * self

    def rotate_y(self, radians: float) -> Matrix:
        return rotation_y(radians) * self

    def rotate_z(self, radians: float) -> Matrix:
        return rotation_z(radians) * self

    def shear(self, xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
        return shearing(xy, xz, yx, yz, zx, zy) * self


# =============================================================================
# Builders
# =============================================================================


def identity(size: int = 4) -> Matrix:
    return Matrix(np.identity(size))


IDENTITY = identity()


def translation(x: float, y: float, z: float) -> Matrix:
    return Matrix(
        [
            [1.0, 0.0, 0.0, x],
            [0.0, 1.0, 0.0, y],
            [0.0, 0.0, 1.0, z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def scaling(x: float, y: float, z: float) -> Matrix:
    return Matrix(
        [
            [x, 0.0, 0.0, 0.0],
            [0.0, y, 0.0, 0.0],
            [0.0, 0.0, z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_x(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_y(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_z(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
    """Shear transform; ``xy`` moves x in proportion to y, and so on."""
    return Matrix(
        [
            [1.0, xy, xz, 0.0],
            [yx, 1.0, yz, 0.0],
            [zx, zy, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def compose(*transforms: Matrix) -> Matrix:
    """Combine transforms so that the first argument is applied first.

    ``compose(s, r, t)`` equals ``t * r * s``: scale, then rotate, then
    translate. With no arguments the identity is returned.
    """
    result = IDENTITY
    for transform in transforms:
        result = transform * result
    return result


# The traditional scale-rotate-translate name.
srt = compose
