"""Unit sphere primitive placed in the world by an affine transform.

Every sphere is, in its own object space, the unit sphere centered at the
origin. Its world-space shape comes entirely from its transform M:

- Intersection transforms the world ray into object space with M^-1 and
  solves |O + tD|^2 = 1:

      a = D . D
      b = 2 (D . O)
      c = O . O - 1
      discriminant = b^2 - 4ac

  A negative discriminant is a miss; otherwise both roots are recorded,
  smaller root first. A tangent ray yields two equal roots.

- The normal at a world point is computed in object space and mapped back
  with (M^-1)^T, which stays perpendicular to the surface under non-uniform
  scaling.

The module also provides Taichi functions with the same math for use inside
render kernels, operating on an uploaded inverse transform.

Example:
    >>> from src.raycaster.geometry.sphere import Sphere
    >>> from src.raycaster.core.ray import Ray
    >>> from src.raycaster.core.tuple import point, vector
    >>> xs = Sphere().intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
    >>> [i.t for i in xs]
    [4.0, 6.0]
"""

import math
from dataclasses import replace

import taichi as ti
import taichi.math as tm

from src.raycaster.core.matrix import IDENTITY, Matrix
from src.raycaster.core.ray import Ray
from src.raycaster.core.tuple import Tuple, point, vector
from src.raycaster.geometry.intersections import Intersection, Intersections
from src.raycaster.materials.phong import Material

# Type aliases using Taichi's math module
vec3 = tm.vec3
vec4 = tm.vec4
mat4 = tm.mat4

# Object-space center of every sphere
ORIGIN = point(0.0, 0.0, 0.0)


class Sphere:
    """A unit sphere with a placement transform and a material.

    Spheres compare equal by value: same transform and same material. Each
    sphere owns its material; passing one Material to several spheres gives
    each its own copy.

    Attributes:
        material: The surface material. Its fields may be written directly.
            Assigning a material stores a copy.
        transform: Object-to-world transform. Assigning it recomputes the
            cached inverse, so a singular matrix is rejected immediately.
    """

    def __init__(self, transform: Matrix | None = None, material: Material | None = None) -> None:
        self.material = material if material is not None else Material()
        self.set_transform(transform if transform is not None else IDENTITY)

    @property
    def material(self) -> Material:
        return self._material

    @material.setter
    def material(self, material: Material) -> None:
        self._material = replace(material)

    def copy(self) -> "Sphere":
        """Independent copy sharing no mutable state with this sphere."""
        clone = Sphere.__new__(Sphere)
        clone._material = replace(self._material)
        # Matrices are immutable, so the cached inverses can be shared
        clone._transform = self._transform
        clone._inverse = self._inverse
        clone._inverse_transpose = self._inverse_transpose
        return clone

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, matrix: Matrix) -> None:
        self.set_transform(matrix)

    @property
    def inverse_transform(self) -> Matrix:
        """World-to-object transform, M^-1."""
        return self._inverse

    def set_transform(self, matrix: Matrix) -> None:
        """Replace the transform wholesale.

        Raises:
            NonInvertibleMatrixError: If the matrix is singular.
        """
        inverse = matrix.inverse()
        self._transform = matrix
        self._inverse = inverse
        self._inverse_transpose = inverse.transpose()

    def intersect(self, ray: Ray) -> Intersections:
        """Intersect a world-space ray with this sphere.

        Args:
            ray: The ray in world space.

        Returns:
            Zero or two intersections, in ascending t order, each holding a
            copy of this sphere. Negative t values are kept.
        """
        local_ray = ray.transform(self._inverse)
        return self.local_intersect(local_ray)

    def local_intersect(self, ray: Ray) -> Intersections:
        """Intersect an object-space ray with the unit sphere."""
        sphere_to_ray = ray.origin - ORIGIN
        a = ray.direction.dot(ray.direction)
        b = 2.0 * ray.direction.dot(sphere_to_ray)
        c = sphere_to_ray.dot(sphere_to_ray) - 1.0

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            return Intersections()

        sqrt_d = math.sqrt(discriminant)
        t1 = (-b - sqrt_d) / (2.0 * a)
        t2 = (-b + sqrt_d) / (2.0 * a)
        return Intersections([Intersection(t1, self), Intersection(t2, self)])

    def normal_at(self, world_point: Tuple) -> Tuple:
        """Unit surface normal at a world-space point on the sphere."""
        object_point = self._inverse @ world_point
        object_normal = object_point - ORIGIN
        world_normal = self._inverse_transpose @ object_normal
        # Translation in M^-1 leaks into w through the transpose
        return vector(world_normal.x, world_normal.y, world_normal.z).normalize()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sphere):
            return NotImplemented
        return self._transform == other._transform and self.material == other.material

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Sphere(transform={self._transform!r}, material={self.material!r})"


# =============================================================================
# Kernel-side sphere math (Taichi)
# =============================================================================


@ti.func
def intersect_unit_sphere(inverse: mat4, origin: vec3, direction: vec3):
    """Intersect a world-space ray with a transformed unit sphere.

    Args:
        inverse: The sphere's world-to-object transform.
        origin: Ray origin in world space.
        direction: Ray direction in world space.

    Returns:
        A tuple (hit, t0, t1) where hit is 1 if the discriminant is
        non-negative, and t0 <= t1 are the two roots (valid only if hit == 1).
    """
    o = inverse @ vec4(origin.x, origin.y, origin.z, 1.0)
    d = inverse @ vec4(direction.x, direction.y, direction.z, 0.0)
    local_origin = vec3(o.x, o.y, o.z)
    local_direction = vec3(d.x, d.y, d.z)

    a = tm.dot(local_direction, local_direction)
    b = 2.0 * tm.dot(local_direction, local_origin)
    c = tm.dot(local_origin, local_origin) - 1.0
    discriminant = b * b - 4.0 * a * c

    # Taichi requires outer-scope declaration
    hit = 0
    t0 = 0.0
    t1 = 0.0
    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        # Stable form: avoid subtracting nearly equal terms in single precision
        q = -0.5 * (b + ti.select(b >= 0.0, sqrt_d, -sqrt_d))
        if q != 0.0:
            r0 = q / a
            r1 = c / q
            t0 = ti.min(r0, r1)
            t1 = ti.max(r0, r1)
        hit = 1

    return hit, t0, t1


@ti.func
def unit_sphere_normal(inverse: mat4, world_point: vec3) -> vec3:
    """World-space unit normal of a transformed unit sphere at a surface point."""
    object_point = inverse @ vec4(world_point.x, world_point.y, world_point.z, 1.0)
    object_normal = vec4(object_point.x, object_point.y, object_point.z, 0.0)
    world_normal = inverse.transpose() @ object_normal
    return tm.normalize(vec3(world_normal.x, world_normal.y, world_normal.z))
