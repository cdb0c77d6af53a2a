"""Core building blocks for ray casting.

Components:
    tolerance: Shared epsilon and approximate comparisons
    tuple: Homogeneous points and vectors
    color: RGB color values
    matrix: Square matrices with determinant and inverse
    transforms: Named 4x4 transform builders and the view transform
    ray: Ray with origin and direction
    canvas: Pixel buffer filled by the renderer
    integrator: Taichi render kernel (compiled counterpart of Camera.render)
"""

from .canvas import Canvas
from .color import Color
from .matrix import IDENTITY, Matrix, NonInvertibleMatrixError
from .ray import Ray
from .tolerance import EPSILON, all_approx_eq, approx_eq, approx_zero
from .transforms import (
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from .tuple import Tuple, cross, dot, magnitude, normalize, point, reflect, vector

# Note: integrator is NOT imported here. It allocates Taichi fields at import
# time, so it must be imported after ti.init():
#   from src.raycaster.core.integrator import render_world

__all__ = [
    "EPSILON",
    "approx_eq",
    "approx_zero",
    "all_approx_eq",
    "Tuple",
    "point",
    "vector",
    "magnitude",
    "normalize",
    "dot",
    "cross",
    "reflect",
    "Color",
    "Matrix",
    "IDENTITY",
    "NonInvertibleMatrixError",
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    "view_transform",
    "Ray",
    "Canvas",
]
