"""Matplotlib-based preview display for rendered canvases.

Example:
    >>> from src.raycaster.preview.display import show_preview
    >>> from src.raycaster.scene.showcase import create_showcase_scene
    >>>
    >>> world, camera = create_showcase_scene()
    >>> show_preview(camera.render(world), title="Showcase")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from src.raycaster.preview.export import compute_rmse

if TYPE_CHECKING:
    from src.raycaster.core.canvas import Canvas


def apply_gamma(
    image: npt.NDArray[np.float64],
    gamma: float = 1.0,
) -> npt.NDArray[np.float64]:
    """Clamp to [0, 1] and apply gamma encoding: out = in^(1/gamma).

    The default of 1.0 leaves values linear, which is how the canvas is
    encoded to PPM and PNG.
    """
    if gamma <= 0.0:
        raise ValueError(f"Gamma must be positive, got {gamma}")

    # Clamp first to avoid NaN from negative values
    result = np.clip(image, 0.0, 1.0)
    if gamma != 1.0:
        result = np.power(result, 1.0 / gamma)
    return result


def canvas_to_image(canvas: Canvas, gamma: float = 1.0) -> npt.NDArray[np.float64]:
    """Convert a canvas to a displayable float image of shape (H, W, 3)."""
    return apply_gamma(canvas.to_numpy(), gamma)


def show_preview(
    canvas: Canvas,
    *,
    gamma: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display a canvas as a Matplotlib figure.

    Args:
        canvas: The canvas to display.
        gamma: Gamma correction value (default 1.0, linear).
        title: Custom title (default shows the canvas size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)

    # Nearest keeps small renders crisp when scaled up
    ax.imshow(canvas_to_image(canvas, gamma), interpolation="nearest")
    ax.axis("off")
    ax.set_title(title if title is not None else f"Render Preview - {canvas.width}x{canvas.height}")

    plt.tight_layout()
    plt.show(block=block)


def show_comparison(
    canvas_a: Canvas,
    canvas_b: Canvas,
    *,
    labels: tuple[str, str] = ("A", "B"),
    gamma: float = 1.0,
    diff_scale: float = 10.0,
    figsize: tuple[float, float] = (16, 6),
    block: bool = True,
) -> float:
    """Display two canvases side by side with an amplified difference view.

    Useful for checking the Taichi kernel against the Python renderer.

    Args:
        canvas_a: First canvas.
        canvas_b: Second canvas, same size as canvas_a.
        labels: Labels for the two canvases.
        gamma: Gamma correction value.
        diff_scale: Scale factor for difference amplification.
        figsize: Figure size in inches.
        block: Whether to block execution until figure is closed.

    Returns:
        RMSE between the two canvases in linear space.

    Raises:
        ValueError: If the canvas sizes don't match.
    """
    import matplotlib.pyplot as plt

    rmse = compute_rmse(canvas_a, canvas_b)

    display_a = canvas_to_image(canvas_a, gamma)
    display_b = canvas_to_image(canvas_b, gamma)
    diff_amplified = np.clip(np.abs(display_a - display_b) * diff_scale, 0.0, 1.0)

    fig, axes = plt.subplots(1, 3, figsize=figsize)

    axes[0].imshow(display_a, interpolation="nearest")
    axes[0].set_title(labels[0])
    axes[0].axis("off")

    axes[1].imshow(display_b, interpolation="nearest")
    axes[1].set_title(labels[1])
    axes[1].axis("off")

    axes[2].imshow(diff_amplified, interpolation="nearest")
    axes[2].set_title(f"Difference ({diff_scale}x) - RMSE: {rmse:.6f}")
    axes[2].axis("off")

    plt.tight_layout()
    plt.show(block=block)

    return rmse
