"""Taichi render kernel: the compiled counterpart of ``Camera.render``.

The kernel reproduces the Python pipeline on uploaded field data:

    ray_for_pixel -> intersect_scene -> normal / eye / over point
                  -> is_shadowed -> phong_lighting -> color buffer

Its outer loop is serialized with ``ti.loop_config(serialize=True)`` so pixels
are produced in row-major order on a single thread, exactly like the Python
render loop. Arithmetic is single precision, so the over point uses a larger
shadow bias than the double-precision Python path.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raycaster.core.integrator import render_world
    >>> from src.raycaster.scene.showcase import create_showcase_scene
    >>>
    >>> world, camera = create_showcase_scene()
    >>> canvas = render_world(world, camera)
"""

import time
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm
from loguru import logger

from src.raycaster.core.canvas import Canvas
from src.raycaster.core.color import Color
from src.raycaster.geometry.sphere import unit_sphere_normal
from src.raycaster.materials.phong import phong_lighting
from src.raycaster.scene.intersection import (
    intersect_scene,
    is_shadowed,
    light_intensity,
    light_position,
    sphere_ambient,
    sphere_colors,
    sphere_diffuse,
    sphere_inverses,
    sphere_shininess,
    sphere_specular,
    upload_world,
)

if TYPE_CHECKING:
    from src.raycaster.camera.pinhole import Camera
    from src.raycaster.scene.world import World

# Type aliases
vec3 = tm.vec3
vec4 = tm.vec4

# Over-point offset for single-precision shading. Smaller values let shadow
# rays re-hit the surface of thin flattened spheres.
KERNEL_SHADOW_BIAS = 1e-3

# =============================================================================
# Camera State
# =============================================================================

_camera_inverse = ti.Matrix.field(4, 4, dtype=ti.f32, shape=())
_half_width = ti.field(dtype=ti.f32, shape=())
_half_height = ti.field(dtype=ti.f32, shape=())
_pixel_size = ti.field(dtype=ti.f32, shape=())


def setup_camera(camera: "Camera") -> None:
    """Copy a camera's derived geometry and inverse view transform into fields."""
    _camera_inverse[None] = camera.inverse_transform.tolist()
    _half_width[None] = camera.half_width
    _half_height[None] = camera.half_height
    _pixel_size[None] = camera.pixel_size


# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Indexed [x, y] with y = 0 at the top row
_color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Set the active image size and clear the color buffer.

    Raises:
        ValueError: If dimensions exceed the preallocated maximum or are not
            positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1
    clear_render_target()


def clear_render_target() -> None:
    """Clear the color buffer to black."""
    _color_buffer.fill(0.0)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions as (width, height)."""
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Kernel-side Pipeline
# =============================================================================


@ti.func
def ray_for_pixel(px: ti.i32, py: ti.i32):
    """World-space ray through the center of pixel (px, py).

    Returns:
        A tuple (origin, direction) with a normalized direction.
    """
    x_offset = (ti.cast(px, ti.f32) + 0.5) * _pixel_size[None]
    y_offset = (ti.cast(py, ti.f32) + 0.5) * _pixel_size[None]
    world_x = _half_width[None] - x_offset
    world_y = _half_height[None] - y_offset

    inverse = _camera_inverse[None]
    pixel = inverse @ vec4(world_x, world_y, -1.0, 1.0)
    origin4 = inverse @ vec4(0.0, 0.0, 0.0, 1.0)

    origin = vec3(origin4.x, origin4.y, origin4.z)
    direction = tm.normalize(vec3(pixel.x, pixel.y, pixel.z) - origin)
    return origin, direction


@ti.func
def color_at(origin: vec3, direction: vec3) -> vec3:
    """Shade the nearest hit along a ray, or return the background color."""
    color = vec3(0.0, 0.0, 0.0)
    hit_index, t = intersect_scene(origin, direction)

    if hit_index >= 0:
        position = origin + t * direction
        eye = -direction
        normal = unit_sphere_normal(sphere_inverses[hit_index], position)
        if tm.dot(normal, eye) < 0.0:
            normal = -normal

        over_point = position + normal * KERNEL_SHADOW_BIAS
        shadowed = is_shadowed(over_point)

        color = phong_lighting(
            sphere_colors[hit_index],
            sphere_ambient[hit_index],
            sphere_diffuse[hit_index],
            sphere_specular[hit_index],
            sphere_shininess[hit_index],
            light_position[None],
            light_intensity[None],
            over_point,
            eye,
            normal,
            shadowed,
        )

    return color


@ti.kernel
def _render_kernel(width: ti.i32, height: ti.i32):
    """Fill the color buffer row by row."""
    ti.loop_config(serialize=True)
    for py in range(height):
        for px in range(width):
            origin, direction = ray_for_pixel(px, py)
            _color_buffer[px, py] = color_at(origin, direction)


@ti.kernel
def _render_single_pixel(px: ti.i32, py: ti.i32) -> vec3:
    origin, direction = ray_for_pixel(px, py)
    return color_at(origin, direction)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_image() -> None:
    """Render every pixel of the active render target.

    Raises:
        RuntimeError: If the render target has not been set up.
    """
    _check_render_target_initialized()
    width, height = get_image_dimensions()
    _render_kernel(width, height)


def render_pixel(px: int, py: int) -> Color:
    """Render a single pixel with the uploaded scene and camera.

    Raises:
        RuntimeError: If the render target has not been set up.
        IndexError: If the pixel is outside the render target.
    """
    _check_render_target_initialized()
    width, height = get_image_dimensions()
    if not (0 <= px < width and 0 <= py < height):
        raise IndexError(f"Pixel ({px}, {py}) out of range for {width}x{height} target")
    color = _render_single_pixel(px, py)
    return Color(float(color[0]), float(color[1]), float(color[2]))


def get_image_numpy() -> npt.NDArray[np.float32]:
    """Get the active region of the color buffer.

    Values are linear and unclamped.

    Returns:
        Array of shape (height, width, 3) with row 0 at the top.

    Raises:
        RuntimeError: If the render target has not been set up.
    """
    _check_render_target_initialized()
    width, height = get_image_dimensions()
    image = _color_buffer.to_numpy()[:width, :height, :]
    # (width, height, 3) -> (height, width, 3)
    return np.transpose(image, (1, 0, 2)).astype(np.float32)


def render_world(world: "World", camera: "Camera") -> Canvas:
    """Render a world through a camera with the Taichi kernel.

    Uploads the scene and camera, renders every pixel, and copies the result
    into a new canvas.

    Args:
        world: The scene to render. Must have a light.
        camera: The camera to render through.

    Returns:
        A canvas of size camera.hsize x camera.vsize.

    Raises:
        RuntimeError: If the world has no light or too many objects.
        ValueError: If the camera size exceeds the render target maximum.
    """
    logger.debug("Kernel render {}x{}", camera.hsize, camera.vsize)
    start_time = time.perf_counter()

    upload_world(world)
    setup_camera(camera)
    setup_render_target(camera.hsize, camera.vsize)
    render_image()
    canvas = Canvas.from_numpy(get_image_numpy())

    logger.info(
        "Kernel rendered {}x{} image in {:.2f}s",
        camera.hsize,
        camera.vsize,
        time.perf_counter() - start_time,
    )
    return canvas
