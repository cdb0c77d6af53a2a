"""Showcase scene: three spheres in a room of flattened spheres.

The room is built entirely from spheres:
- Floor: a unit sphere squashed to a 10 x 0.01 x 10 disc
- Left and right walls: the same disc stood upright, rotated +-45 degrees
  about y and pushed 5 units back, meeting behind the spheres
- Three spheres of decreasing size: green (middle), lime (right) and
  yellow (left)

A single white light sits above and to the left of the camera, so every
sphere casts a shadow onto the floor.

Example:
    >>> from src.raycaster.scene.showcase import ShowcaseParams, create_showcase_scene
    >>>
    >>> world, camera = create_showcase_scene(ShowcaseParams(hsize=200, vsize=100))
    >>> len(world.objects)
    6
"""

import math
from dataclasses import dataclass

from src.raycaster.camera.pinhole import Camera
from src.raycaster.core.color import Color
from src.raycaster.core.transforms import (
    rotation_x,
    rotation_y,
    scaling,
    translation,
    view_transform,
)
from src.raycaster.core.tuple import point, vector
from src.raycaster.geometry.sphere import Sphere
from src.raycaster.materials.phong import Material
from src.raycaster.scene.light import PointLight
from src.raycaster.scene.world import World

# =============================================================================
# Showcase Parameters
# =============================================================================


@dataclass
class ShowcaseParams:
    """Parameters for configuring the showcase scene.

    Attributes:
        hsize: Image width in pixels.
        vsize: Image height in pixels.
        field_of_view: Camera view angle in radians.
        light_position: Position of the point light.
        light_color: RGB intensity of the light.
        room_color: Color of the floor and walls.

    Example:
        >>> params = ShowcaseParams()
        >>> params.hsize, params.vsize
        (100, 50)
    """

    hsize: int = 100
    vsize: int = 50
    field_of_view: float = math.pi / 3
    light_position: tuple[float, float, float] = (-10.0, 10.0, -10.0)
    light_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    room_color: tuple[float, float, float] = (1.0, 0.9, 0.9)


# =============================================================================
# Showcase Constants
# =============================================================================

# Flattened sphere used for the floor and walls
ROOM_SCALE = (10.0, 0.01, 10.0)

# Distance from the origin to the point where the walls meet
WALL_DISTANCE = 5.0

# Camera placement
CAMERA_FROM = (0.0, 1.5, -5.0)
CAMERA_TO = (0.0, 1.0, 0.0)
CAMERA_UP = (0.0, 1.0, 0.0)

# Sphere colors
MIDDLE_SPHERE_COLOR = (0.1, 1.0, 0.5)
RIGHT_SPHERE_COLOR = (0.5, 1.0, 0.1)
LEFT_SPHERE_COLOR = (1.0, 0.8, 0.1)

# Shared sphere finish
SPHERE_DIFFUSE = 0.7
SPHERE_SPECULAR = 0.3


# =============================================================================
# Showcase Factory
# =============================================================================


def _room_material(params: ShowcaseParams) -> Material:
    return Material(color=Color(*params.room_color), specular=0.0)


def _sphere_material(color: tuple[float, float, float]) -> Material:
    return Material(color=Color(*color), diffuse=SPHERE_DIFFUSE, specular=SPHERE_SPECULAR)


def create_showcase_scene(params: ShowcaseParams | None = None) -> tuple[World, Camera]:
    """Create the showcase world and a camera looking into it.

    Args:
        params: Optional ShowcaseParams for customizing the image size, light
            and room color. If None, uses default ShowcaseParams().

    Returns:
        A tuple of (World, Camera).
    """
    if params is None:
        params = ShowcaseParams()

    room_scale = scaling(*ROOM_SCALE)

    floor = Sphere(room_scale, _room_material(params))

    left_wall = Sphere(
        translation(0.0, 0.0, WALL_DISTANCE)
        @ rotation_y(-math.pi / 4)
        @ rotation_x(math.pi / 2)
        @ room_scale,
        _room_material(params),
    )

    right_wall = Sphere(
        translation(0.0, 0.0, WALL_DISTANCE)
        @ rotation_y(math.pi / 4)
        @ rotation_x(math.pi / 2)
        @ room_scale,
        _room_material(params),
    )

    middle = Sphere(translation(-0.5, 1.0, 0.5), _sphere_material(MIDDLE_SPHERE_COLOR))

    right = Sphere(
        translation(1.5, 0.5, -0.5) @ scaling(0.5, 0.5, 0.5),
        _sphere_material(RIGHT_SPHERE_COLOR),
    )

    left = Sphere(
        translation(-1.5, 0.33, -0.75) @ scaling(0.33, 0.33, 0.33),
        _sphere_material(LEFT_SPHERE_COLOR),
    )

    light = PointLight(point(*params.light_position), Color(*params.light_color))
    world = World(light, [floor, left_wall, right_wall, middle, right, left])

    camera = Camera(
        params.hsize,
        params.vsize,
        params.field_of_view,
        view_transform(point(*CAMERA_FROM), point(*CAMERA_TO), vector(*CAMERA_UP)),
    )

    return world, camera
