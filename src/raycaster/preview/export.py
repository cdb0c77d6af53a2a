"""Image export utilities for rendered canvases.

Canvases hold linear, unclamped colors. Encoding clamps each channel to
[0, 1], scales it to [0, 255] and rounds half away from zero.

Supported formats:
    - PPM (plain-text ``P3``)
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from src.raycaster.core.canvas import Canvas
    >>> from src.raycaster.core.color import Color
    >>> from src.raycaster.preview.export import canvas_to_ppm
    >>>
    >>> canvas = Canvas(2, 1)
    >>> canvas.write_pixel(0, 0, Color(1.5, 0, 0))
    >>> print(canvas_to_ppm(canvas), end="")
    P3
    2 1
    255
    255 0 0 0 0 0
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from loguru import logger
from PIL import Image as PILImage

if TYPE_CHECKING:
    from src.raycaster.core.canvas import Canvas

# Maximum channel value written to 8-bit images
MAX_COLOR_VALUE = 255


def image_to_uint8(image: npt.ArrayLike) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to 8-bit channel values.

    Args:
        image: Image array of shape (H, W, 3), nominally in [0, 1].

    Returns:
        Array of the same shape with dtype uint8.
    """
    scaled = np.clip(np.asarray(image, dtype=np.float64), 0.0, 1.0) * MAX_COLOR_VALUE
    # Values are non-negative here, so floor(x + 0.5) rounds half away from zero
    return np.floor(scaled + 0.5).astype(np.uint8)


def canvas_to_ppm(canvas: Canvas) -> str:
    """Encode a canvas as a plain-text PPM image.

    The header is ``P3``, then ``width height``, then the maximum value 255.
    Each canvas row becomes one line of space-separated channel values. The
    text ends with a newline.
    """
    pixels = image_to_uint8(canvas.to_numpy())
    lines = ["P3", f"{canvas.width} {canvas.height}", str(MAX_COLOR_VALUE)]
    for row in pixels:
        lines.append(" ".join(str(value) for value in row.reshape(-1)))
    return "\n".join(lines) + "\n"


def save_ppm(canvas: Canvas, filepath: str | Path) -> None:
    """Write a canvas to a plain-text PPM file."""
    Path(filepath).write_text(canvas_to_ppm(canvas), encoding="ascii")
    logger.debug("Saved {}x{} PPM to {}", canvas.width, canvas.height, filepath)


def save_png(canvas: Canvas, filepath: str | Path) -> None:
    """Write a canvas to an 8-bit RGB PNG file.

    Args:
        canvas: The canvas to save.
        filepath: Output file path (should end in .png).
    """
    pil_image = PILImage.fromarray(image_to_uint8(canvas.to_numpy()))
    pil_image.save(filepath)
    logger.debug("Saved {}x{} PNG to {}", canvas.width, canvas.height, filepath)


def save_canvas(canvas: Canvas, filepath: str | Path) -> None:
    """Save a canvas, choosing the format from the file extension.

    Raises:
        ValueError: If the extension is neither .ppm nor .png.
    """
    suffix = Path(filepath).suffix.lower()
    if suffix == ".ppm":
        save_ppm(canvas, filepath)
    elif suffix == ".png":
        save_png(canvas, filepath)
    else:
        raise ValueError(f"Unsupported image format: {suffix!r} (expected .ppm or .png)")


def compute_rmse(canvas_a: Canvas, canvas_b: Canvas) -> float:
    """Compute root mean squared error between two canvases.

    Args:
        canvas_a: First canvas.
        canvas_b: Second canvas (must have the same size as canvas_a).

    Returns:
        RMSE over all channels (lower is more similar).

    Raises:
        ValueError: If the canvas sizes don't match.
    """
    image_a = canvas_a.to_numpy()
    image_b = canvas_b.to_numpy()
    if image_a.shape != image_b.shape:
        raise ValueError(f"Canvas shapes must match: {image_a.shape} vs {image_b.shape}")

    diff = image_a - image_b
    return float(np.sqrt(np.mean(diff**2)))
