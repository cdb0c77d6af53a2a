"""Preview module for output and visualization.

Components:
    export: PPM and PNG encoding of canvases
    display: Matplotlib-based preview and side-by-side comparison

Example:
    >>> from src.raycaster.preview import save_png, show_preview
    >>> from src.raycaster.scene import create_showcase_scene
    >>>
    >>> world, camera = create_showcase_scene()
    >>> canvas = camera.render(world)
    >>> save_png(canvas, "showcase.png")
    >>> show_preview(canvas)
"""

from .display import apply_gamma, canvas_to_image, show_comparison, show_preview
from .export import (
    canvas_to_ppm,
    compute_rmse,
    image_to_uint8,
    save_canvas,
    save_png,
    save_ppm,
)

__all__ = [
    # Display functions
    "show_preview",
    "show_comparison",
    "canvas_to_image",
    "apply_gamma",
    # Export functions
    "canvas_to_ppm",
    "save_ppm",
    "save_png",
    "save_canvas",
    "image_to_uint8",
    "compute_rmse",
]
