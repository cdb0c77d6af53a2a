"""Scene-level intersection and shadow queries for render kernels.

This module mirrors ``World`` on the Taichi side. ``upload_world`` copies a
world into structure-of-arrays fields (one inverse transform and one set of
Phong coefficients per sphere, plus the point light), and the Taichi
functions answer the two queries shading needs:

- ``intersect_scene``: the nearest intersection with t > 0 over all spheres,
  which is what sorting every record and taking the hit would select.
- ``is_shadowed``: whether a point's path to the light is blocked by a hit
  strictly closer than the light.

Kernel arithmetic is single precision.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raycaster.scene.intersection import upload_world
    >>> from src.raycaster.scene.world import default_world
    >>> upload_world(default_world())
    2
    >>> # Use intersect_scene / is_shadowed within a Taichi kernel
"""

from typing import TYPE_CHECKING

import numpy as np
import taichi as ti
import taichi.math as tm
from loguru import logger

from src.raycaster.geometry.sphere import intersect_unit_sphere

if TYPE_CHECKING:
    from src.raycaster.scene.world import World

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Maximum number of spheres supported in the scene
MAX_SPHERES = 1024

# Upper bound on t for nearest-hit searches
T_MAX = 1e10

# Sphere storage: Structure of Arrays layout
sphere_inverses = ti.Matrix.field(4, 4, dtype=ti.f32, shape=MAX_SPHERES)
sphere_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_ambient = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_diffuse = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_specular = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_shininess = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Point light
light_position = ti.Vector.field(3, dtype=ti.f32, shape=())
light_intensity = ti.Vector.field(3, dtype=ti.f32, shape=())


def clear_scene() -> None:
    """Remove all spheres from the scene.

    The field data is not cleared; it is overwritten by the next upload.
    """
    num_spheres[None] = 0


def upload_world(world: "World") -> int:
    """Copy a world into the scene fields.

    Args:
        world: The world to upload. Must have a light.

    Returns:
        The number of spheres uploaded.

    Raises:
        RuntimeError: If the world has no light or more than MAX_SPHERES
            objects.
    """
    if world.light is None:
        raise RuntimeError("World has no light source; cannot upload to the render kernel")
    count = len(world.objects)
    if count > MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded: {count}")

    inverses = np.zeros((MAX_SPHERES, 4, 4), dtype=np.float32)
    colors = np.zeros((MAX_SPHERES, 3), dtype=np.float32)
    coefficients = np.zeros((4, MAX_SPHERES), dtype=np.float32)

    for i, sphere in enumerate(world.objects):
        material = sphere.material
        inverses[i] = sphere.inverse_transform.to_numpy()
        colors[i] = material.color.to_tuple()
        coefficients[:, i] = (
            material.ambient,
            material.diffuse,
            material.specular,
            material.shininess,
        )

    sphere_inverses.from_numpy(inverses)
    sphere_colors.from_numpy(colors)
    sphere_ambient.from_numpy(coefficients[0])
    sphere_diffuse.from_numpy(coefficients[1])
    sphere_specular.from_numpy(coefficients[2])
    sphere_shininess.from_numpy(coefficients[3])
    num_spheres[None] = count

    light = world.light
    light_position[None] = [light.position.x, light.position.y, light.position.z]
    light_intensity[None] = list(light.intensity.to_tuple())

    logger.debug("Uploaded {} spheres to scene fields", count)
    return count


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


@ti.func
def intersect_scene(origin: vec3, direction: vec3):
    """Find the nearest intersection in front of the ray origin.

    Args:
        origin: Ray origin in world space.
        direction: Ray direction in world space.

    Returns:
        A tuple (index, t): the index of the hit sphere and the hit's t, or
        (-1, T_MAX) if nothing is hit at t > 0.
    """
    closest_t = T_MAX
    hit_index = -1

    for i in range(num_spheres[None]):
        hit, t0, t1 = intersect_unit_sphere(sphere_inverses[i], origin, direction)
        if hit == 1:
            # Roots are ordered, so t1 only matters when t0 is behind the origin
            t = t0
            if t <= 0.0:
                t = t1
            if t > 0.0 and t < closest_t:
                closest_t = t
                hit_index = i

    return hit_index, closest_t


@ti.func
def is_shadowed(position: vec3) -> ti.i32:
    """Check whether any sphere lies between a point and the light.

    Returns:
        1 if a hit exists strictly closer than the light, 0 otherwise.
    """
    to_light = light_position[None] - position
    distance = tm.length(to_light)
    direction = to_light / distance

    hit_index, t = intersect_scene(position, direction)

    shadowed = 0
    if hit_index >= 0 and t < distance:
        shadowed = 1
    return shadowed
