"""Geometry module for the sphere primitive and intersection records.

Components:
    sphere: Transformed unit sphere with Python and Taichi intersection
    intersections: Intersection records, hit selection and shading
        precomputation
"""

from .intersections import (
    SHADOW_BIAS,
    Computations,
    Intersection,
    Intersections,
    prepare_computations,
)
from .sphere import Sphere, intersect_unit_sphere, unit_sphere_normal

__all__ = [
    "Sphere",
    "intersect_unit_sphere",
    "unit_sphere_normal",
    "Intersection",
    "Intersections",
    "Computations",
    "prepare_computations",
    "SHADOW_BIAS",
]
