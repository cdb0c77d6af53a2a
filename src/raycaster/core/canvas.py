"""Pixel buffer that the camera fills.

The canvas stores linear, unclamped colors in a (height, width, 3) float64
array, row-major with row 0 at the top. Encoding to an image format lives in
``src.raycaster.preview.export``.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from src.raycaster.core.color import Color


class Canvas:
    """A width x height grid of colors, initialized to black.

    Attributes:
        width: Number of columns.
        height: Number of rows.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.float64)

    @classmethod
    def from_numpy(cls, image: npt.ArrayLike) -> Canvas:
        """Build a canvas from an array of shape (height, width, 3)."""
        array = np.asarray(image, dtype=np.float64)
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError(f"Expected image of shape (H, W, 3), got {array.shape}")
        canvas = cls(array.shape[1], array.shape[0])
        canvas._pixels[...] = array
        return canvas

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _check_bounds(self, col: int, row: int) -> None:
        # numpy would silently wrap negative indices
        if not (0 <= col < self._width and 0 <= row < self._height):
            raise IndexError(
                f"Pixel ({col}, {row}) out of range for {self._width}x{self._height} canvas"
            )

    def write_pixel(self, col: int, row: int, color: Color) -> None:
        """Write a color at (col, row); row 0 is the top of the image.

        Raises:
            IndexError: If the coordinates are outside the canvas.
        """
        self._check_bounds(col, row)
        self._pixels[row, col] = (color.red, color.green, color.blue)

    def pixel_at(self, col: int, row: int) -> Color:
        """Read the color at (col, row).

        Raises:
            IndexError: If the coordinates are outside the canvas.
        """
        self._check_bounds(col, row)
        r, g, b = self._pixels[row, col]
        return Color(float(r), float(g), float(b))

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a copy of the pixel buffer, shape (height, width, 3)."""
        return self._pixels.copy()

    def __repr__(self) -> str:
        return f"Canvas(width={self._width}, height={self._height})"
