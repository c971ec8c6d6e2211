"""Pinhole camera model for perspective projection ray generation.

The camera looks down -z from the origin of its own space, with the canvas
one unit in front of it. The camera transform (usually built with
``view_transform``) moves the world relative to that canonical camera, so
pixel rays are produced in camera space and carried into world space with
the inverse transform.

Example:
    >>> import math
    >>> from src.whitted.camera.pinhole import Camera, view_transform
    >>> from src.whitted.core.tuples import Point, Vector
    >>> camera = Camera(
    ...     hsize=160,
    ...     vsize=120,
    ...     field_of_view=math.pi / 3,
    ...     transform=view_transform(Point(0, 1.5, -5), Point(0, 1, 0), Vector(0, 1, 0)),
    ... )
    >>> ray = camera.ray_for_pixel(80, 60)
"""

from __future__ import annotations

import math
from collections.abc import Callable

import numpy as np
import numpy.typing as npt

from src.whitted.core.canvas import Canvas
from src.whitted.core.matrix import IDENTITY, Matrix, translation
from src.whitted.core.ray import Ray
from src.whitted.core.stats import RenderStats
from src.whitted.core.tuples import Point, Vector

# Called with (rendered_rows, total_rows) after each row.
ProgressCallback = Callable[[int, int], None]

_CAMERA_ORIGIN = Point(0.0, 0.0, 0.0)


def view_transform(from_point: Point, to: Point, up: Vector) -> Matrix:
    """Transform that places the eye at ``from_point`` looking at ``to``.

    Args:
        from_point: Eye position in world space.
        to: Point the eye looks at.
        up: Approximate up direction; need not be perpendicular to the view.

    Returns:
        The world-to-camera matrix.
    """
    forward = (to - from_point).normalize()
    left = forward.cross(up.normalize())
    true_up = left.cross(forward)
    orientation = Matrix(
        [
            [left.x, left.y, left.z, 0.0],
            [true_up.x, true_up.y, true_up.z, 0.0],
            [-forward.x, -forward.y, -forward.z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return orientation * translation(-from_point.x, -from_point.y, -from_point.z)


class Camera:
    """A pinhole camera producing one ray per pixel center.

    Args:
        hsize: Canvas width in pixels.
        vsize: Canvas height in pixels.
        field_of_view: Angle covered by the wider canvas side, in radians.
        transform: World-to-camera transform. Default is the identity.

    Raises:
        ValueError: If the canvas size or field of view is not usable.
    """

    def __init__(self, hsize: int, vsize: int, field_of_view: float, transform: Matrix | None = None):
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"Camera size must be positive, got {hsize}x{vsize}")
        if not 0.0 < field_of_view < math.pi:
            raise ValueError(f"field_of_view must be in (0, pi) radians, got {field_of_view}")
        self.hsize = hsize
        self.vsize = vsize
        self.field_of_view = field_of_view
        self.transform = transform if transform is not None else IDENTITY

        half_view = math.tan(field_of_view / 2.0)
        aspect = hsize / vsize
        if aspect >= 1.0:
            self.half_width = half_view
            self.half_height = half_view / aspect
        else:
            self.half_width = half_view * aspect
            self.half_height = half_view
        self.pixel_size = (self.half_width * 2.0) / hsize

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, value: Matrix) -> None:
        self._inverse = value.inverse()
        self._transform = value

    def ray_for_pixel(self, px: float, py: float) -> Ray:
        """World-space ray through the center of pixel (px, py)."""
        # Offset from the canvas edge to the pixel center. The camera looks
        # toward -z, so +x is to the left.
        world_x = self.half_width - (px + 0.5) * self.pixel_size
        world_y = self.half_height - (py + 0.5) * self.pixel_size
        pixel = self._inverse * Point(world_x, world_y, -1.0)
        origin = self._inverse * _CAMERA_ORIGIN
        return Ray(origin, (pixel - origin).normalize())

    def render_rows(
        self,
        world,
        start_row: int,
        end_row: int,
        remaining: int = 5,
        stats: RenderStats | None = None,
        callback: ProgressCallback | None = None,
    ) -> npt.NDArray[np.float64]:
        """Render a band of full-width rows.

        Args:
            world: The World to trace.
            start_row: First row (inclusive).
            end_row: Last row (exclusive).
            remaining: Reflection/refraction bounce budget.
            stats: Optional counters.
            callback: Optional progress callback, called after each row.

        Returns:
            Array of shape (end_row - start_row, hsize, 3).
        """
        if not 0 <= start_row <= end_row <= self.vsize:
            raise ValueError(f"Invalid row range [{start_row}, {end_row}) for height {self.vsize}")
        band = np.zeros((end_row - start_row, self.hsize, 3), dtype=np.float64)
        total = end_row - start_row
        for row, y in enumerate(range(start_row, end_row)):
            out = band[row]
            for x in range(self.hsize):
                color = world.color_at(self.ray_for_pixel(x, y), remaining, stats)
                out[x] = (color.red, color.green, color.blue)
            if stats is not None:
                stats.pixels += self.hsize
            if callback is not None:
                callback(row + 1, total)
        return band

    def render(
        self,
        world,
        remaining: int = 5,
        start_row: int = 0,
        end_row: int | None = None,
        stats: RenderStats | None = None,
        callback: ProgressCallback | None = None,
    ) -> Canvas:
        """Render the world to a canvas in this process.

        Rows outside [start_row, end_row) are left black.
        """
        end_row = self.vsize if end_row is None else end_row
        canvas = Canvas(self.hsize, self.vsize)
        band = self.render_rows(world, start_row, end_row, remaining, stats, callback)
        canvas.blit(band, start_row)
        return canvas

    def __repr__(self) -> str:
        return f"Camera({self.hsize}x{self.vsize}, fov={self.field_of_view:.4f})"
