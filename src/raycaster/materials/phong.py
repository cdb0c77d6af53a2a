"""Phong material and local illumination model.

The Phong model approximates the light leaving a surface point as the sum of
three terms:

    ambient  = effective_color * ambient
    diffuse  = effective_color * diffuse * (L . N)
    specular = intensity * specular * (R . E)^shininess

where effective_color = surface color * light intensity, L is the unit vector
toward the light, N the surface normal, E the unit vector toward the eye and
R the reflection of -L about N. Diffuse and specular vanish when the surface
faces away from the light or the point is in shadow; specular also vanishes
when the reflection points away from the eye.

Results are left unclamped.

This module provides both the Python implementation (``lighting``) and a
Taichi function (``phong_lighting``) with the same semantics for use inside
render kernels.

Example:
    >>> from src.raycaster.materials.phong import Material, lighting
    >>> from src.raycaster.scene.light import PointLight
    >>> from src.raycaster.core.color import Color
    >>> from src.raycaster.core.tuple import point, vector
    >>> light = PointLight(point(0, 0, -10), Color(1, 1, 1))
    >>> lighting(Material(), light, point(0, 0, 0), vector(0, 0, -1), vector(0, 0, -1))
    Color(1.9, 1.9, 1.9)
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import taichi as ti
import taichi.math as tm

from src.raycaster.core.color import Color
from src.raycaster.core.tolerance import approx_eq
from src.raycaster.core.tuple import Tuple

if TYPE_CHECKING:
    from src.raycaster.scene.light import PointLight

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

DEFAULT_AMBIENT = 0.1
DEFAULT_DIFFUSE = 0.9
DEFAULT_SPECULAR = 0.9
DEFAULT_SHININESS = 200.0


@dataclass(eq=False)
class Material:
    """Phong surface coefficients.

    Fields may be written directly when building a scene.

    Attributes:
        color: Surface color.
        ambient: Ambient reflection coefficient, typically in [0, 1].
        diffuse: Diffuse reflection coefficient, typically in [0, 1].
        specular: Specular reflection coefficient, typically in [0, 1].
        shininess: Specular exponent; around 10 gives a broad highlight,
            200 a tight one.
    """

    color: Color = field(default_factory=Color.white)
    ambient: float = DEFAULT_AMBIENT
    diffuse: float = DEFAULT_DIFFUSE
    specular: float = DEFAULT_SPECULAR
    shininess: float = DEFAULT_SHININESS

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Material):
            return NotImplemented
        return (
            self.color == other.color
            and approx_eq(self.ambient, other.ambient)
            and approx_eq(self.diffuse, other.diffuse)
            and approx_eq(self.specular, other.specular)
            and approx_eq(self.shininess, other.shininess)
        )

    __hash__ = None  # type: ignore[assignment]

    def lighting(
        self,
        light: "PointLight",
        position: Tuple,
        eye: Tuple,
        normal: Tuple,
        in_shadow: bool = False,
    ) -> Color:
        """Shade a point with this material. See ``lighting``."""
        return lighting(self, light, position, eye, normal, in_shadow)


def lighting(
    material: Material,
    light: "PointLight",
    position: Tuple,
    eye: Tuple,
    normal: Tuple,
    in_shadow: bool = False,
) -> Color:
    """Evaluate the Phong model at a surface point.

    Args:
        material: Surface material.
        light: The point light illuminating the surface.
        position: The shading point (world space).
        eye: Unit vector from the point toward the eye.
        normal: Unit surface normal at the point.
        in_shadow: If True, only the ambient term contributes.

    Returns:
        The unclamped color ambient + diffuse + specular.
    """
    effective_color = material.color * light.intensity
    ambient = effective_color * material.ambient

    light_vector = (light.position - position).normalize()
    light_dot_normal = light_vector.dot(normal)

    if light_dot_normal < 0.0 or in_shadow:
        return ambient

    diffuse = effective_color * material.diffuse * light_dot_normal

    reflect_dot_eye = (-light_vector).reflect(normal).dot(eye)
    if reflect_dot_eye <= 0.0:
        specular = Color.black()
    else:
        factor = reflect_dot_eye**material.shininess
        specular = light.intensity * material.specular * factor

    return ambient + diffuse + specular


@ti.func
def phong_lighting(
    color: vec3,
    ambient: ti.f32,
    diffuse: ti.f32,
    specular: ti.f32,
    shininess: ti.f32,
    light_position: vec3,
    light_intensity: vec3,
    position: vec3,
    eye: vec3,
    normal: vec3,
    in_shadow: ti.i32,
) -> vec3:
    """Evaluate the Phong model inside a Taichi kernel.

    Same semantics as ``lighting``, with the material unpacked into scalars
    and colors represented as vec3.
    """
    effective_color = color * light_intensity
    result = effective_color * ambient

    light_vector = tm.normalize(light_position - position)
    light_dot_normal = tm.dot(light_vector, normal)

    if light_dot_normal >= 0.0 and in_shadow == 0:
        result += effective_color * diffuse * light_dot_normal

        incident = -light_vector
        reflected = incident - 2.0 * tm.dot(incident, normal) * normal
        reflect_dot_eye = tm.dot(reflected, eye)
        if reflect_dot_eye > 0.0:
            result += light_intensity * specular * reflect_dot_eye**shininess

    return result
