"""Pinhole camera: pixel-to-ray mapping and the render loop.

The camera sits at the origin of its own space looking down -z, with the
image plane one unit in front of it. From the canvas size and the field of
view it derives the half extents of that plane:

    half_view = tan(field_of_view / 2)
    aspect    = hsize / vsize
    aspect >= 1: half_width = half_view,          half_height = half_view / aspect
    aspect <  1: half_width = half_view * aspect, half_height = half_view
    pixel_size = 2 * half_width / hsize

The camera's transform is a view transform (world -> camera). Its inverse
carries the pixel point and the camera origin into world space.

Pixel (0, 0) is the top-left corner; x grows to the right and y grows
downward, matching the canvas.

Example:
    >>> import math
    >>> from src.raycaster.camera.pinhole import Camera
    >>> camera = Camera(201, 101, math.pi / 2)
    >>> camera.ray_for_pixel(100, 50).direction
    Tuple(x=0, y=0, z=-1, w=0)
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from loguru import logger

from src.raycaster.core.canvas import Canvas
from src.raycaster.core.matrix import IDENTITY, Matrix
from src.raycaster.core.ray import Ray
from src.raycaster.core.tuple import point

if TYPE_CHECKING:
    from src.raycaster.scene.world import World

# Callback receives (rows_completed, total_rows)
ProgressCallback = Callable[[int, int], None]


class Camera:
    """A pinhole camera with a view transform.

    Attributes:
        hsize: Canvas width in pixels.
        vsize: Canvas height in pixels.
        field_of_view: Horizontal (landscape) or vertical (portrait) view
            angle in radians, spanning the longer canvas side.
        transform: The view transform. Assigning it recomputes the cached
            inverse.
        half_width: Half the width of the image plane at distance 1.
        half_height: Half the height of the image plane at distance 1.
        pixel_size: World-space size of one pixel on the image plane.
    """

    def __init__(
        self,
        hsize: int,
        vsize: int,
        field_of_view: float,
        transform: Matrix = IDENTITY,
    ) -> None:
        """Create a camera.

        Args:
            hsize: Canvas width in pixels (positive).
            vsize: Canvas height in pixels (positive).
            field_of_view: View angle in radians, in (0, pi).
            transform: View transform. Defaults to the identity.

        Raises:
            ValueError: If the size or field of view is out of range.
            NonInvertibleMatrixError: If the transform is singular.
        """
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"Camera size must be positive, got {hsize}x{vsize}")
        if not 0.0 < field_of_view < math.pi:
            raise ValueError(f"Field of view must be in (0, pi), got {field_of_view}")

        self._hsize = hsize
        self._vsize = vsize
        self._field_of_view = field_of_view

        half_view = math.tan(field_of_view / 2.0)
        aspect = hsize / vsize
        if aspect >= 1.0:
            self._half_width = half_view
            self._half_height = half_view / aspect
        else:
            self._half_width = half_view * aspect
            self._half_height = half_view
        self._pixel_size = (self._half_width * 2.0) / hsize

        self.transform = transform

    @property
    def hsize(self) -> int:
        return self._hsize

    @property
    def vsize(self) -> int:
        return self._vsize

    @property
    def field_of_view(self) -> float:
        return self._field_of_view

    @property
    def half_width(self) -> float:
        return self._half_width

    @property
    def half_height(self) -> float:
        return self._half_height

    @property
    def pixel_size(self) -> float:
        return self._pixel_size

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, matrix: Matrix) -> None:
        inverse = matrix.inverse()
        self._transform = matrix
        self._inverse = inverse

    @property
    def inverse_transform(self) -> Matrix:
        """Camera-to-world transform."""
        return self._inverse

    def ray_for_pixel(self, px: int, py: int) -> Ray:
        """World-space ray from the camera through the center of a pixel.

        Args:
            px: Pixel column (0 = left).
            py: Pixel row (0 = top).

        Returns:
            A ray with a normalized direction.
        """
        x_offset = (px + 0.5) * self._pixel_size
        y_offset = (py + 0.5) * self._pixel_size

        # The camera looks toward -z, so +x is to the left
        world_x = self._half_width - x_offset
        world_y = self._half_height - y_offset

        pixel = self._inverse @ point(world_x, world_y, -1.0)
        origin = self._inverse @ point(0.0, 0.0, 0.0)
        direction = (pixel - origin).normalize()
        return Ray(origin, direction)

    def render(self, world: World, callback: ProgressCallback | None = None) -> Canvas:
        """Render a world one pixel at a time, in row-major order.

        Args:
            world: The scene to render. It must not change during the render.
            callback: Optional function called after each row with
                (rows_completed, total_rows).

        Returns:
            A new canvas of size hsize x vsize.
        """
        logger.debug(
            "Rendering {}x{} image of {} objects", self._hsize, self._vsize, len(world.objects)
        )
        start_time = time.perf_counter()

        canvas = Canvas(self._hsize, self._vsize)
        for y in range(self._vsize):
            for x in range(self._hsize):
                ray = self.ray_for_pixel(x, y)
                canvas.write_pixel(x, y, world.color_at(ray))
            if callback is not None:
                callback(y + 1, self._vsize)

        logger.info(
            "Rendered {}x{} image in {:.2f}s",
            self._hsize,
            self._vsize,
            time.perf_counter() - start_time,
        )
        return canvas

    def __repr__(self) -> str:
        return (
            f"Camera(hsize={self._hsize}, vsize={self._vsize}, "
            f"field_of_view={self._field_of_view:g})"
        )
