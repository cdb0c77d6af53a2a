"""Camera module: pixel-to-ray mapping and the Python render loop."""

from .pinhole import Camera, ProgressCallback

__all__ = [
    "Camera",
    "ProgressCallback",
]
