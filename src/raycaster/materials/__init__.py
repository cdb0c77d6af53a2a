"""Materials module: the Phong reflection model.

Components:
    phong: Material coefficients, the Python ``lighting`` function and the
        ``phong_lighting`` Taichi function
"""

from .phong import Material, lighting, phong_lighting

__all__ = [
    "Material",
    "lighting",
    "phong_lighting",
]
