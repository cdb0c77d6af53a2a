"""Named builders for 4x4 affine transforms.

All rotations take radians and follow the left-handed convention used by the
rest of the package (positive angles rotate clockwise when looking down the
axis toward the origin).

Example:
    >>> import math
    >>> from src.raycaster.core.transforms import rotation_x, scaling, translation
    >>> # Rotate, then scale, then translate
    >>> t = translation(10, 5, 7) @ scaling(5, 5, 5) @ rotation_x(math.pi / 2)
"""

import math

from src.raycaster.core.matrix import Matrix
from src.raycaster.core.tuple import Tuple


def translation(x: float, y: float, z: float) -> Matrix:
    """Move points by (x, y, z). Vectors are unaffected since their w is 0."""
    return Matrix(
        [
            [1.0, 0.0, 0.0, x],
            [0.0, 1.0, 0.0, y],
            [0.0, 0.0, 1.0, z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def scaling(x: float, y: float, z: float) -> Matrix:
    """Scale each axis independently. Negative factors reflect."""
    return Matrix(
        [
            [x, 0.0, 0.0, 0.0],
            [0.0, y, 0.0, 0.0],
            [0.0, 0.0, z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_x(radians: float) -> Matrix:
    c = math.cos(radians)
    s = math.sin(radians)
    return Matrix(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_y(radians: float) -> Matrix:
    c = math.cos(radians)
    s = math.sin(radians)
    return Matrix(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_z(radians: float) -> Matrix:
    c = math.cos(radians)
    s = math.sin(radians)
    return Matrix(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
    """Shear each coordinate in proportion to the other two.

    Args:
        xy: Amount x moves in proportion to y.
        xz: Amount x moves in proportion to z.
        yx: Amount y moves in proportion to x.
        yz: Amount y moves in proportion to z.
        zx: Amount z moves in proportion to x.
        zy: Amount z moves in proportion to y.

    Returns:
        The shearing matrix.
    """
    return Matrix(
        [
            [1.0, xy, xz, 0.0],
            [yx, 1.0, yz, 0.0],
            [zx, zy, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def view_transform(from_point: Tuple, to_point: Tuple, up: Tuple) -> Matrix:
    """Build the transform that moves the world in front of an eye at the origin.

    The eye at ``from_point`` looks toward ``to_point``. The result maps world
    coordinates into a frame where the eye sits at the origin looking down -z
    with ``up`` (approximately) along +y.

    Args:
        from_point: Eye position (point).
        to_point: Look-at target (point).
        up: Approximate up direction (vector); need not be normalized or
            exactly orthogonal to the view direction.

    Returns:
        The 4x4 view transform.

    Raises:
        ValueError: If the eye and target coincide, or ``up`` is zero.
            An ``up`` parallel to the view direction yields a singular matrix,
            which fails later when the camera inverts it.
    """
    forward = (to_point - from_point).normalize()
    left = forward.cross(up.normalize())
    true_up = left.cross(forward)
    orientation = Matrix(
        [
            [left.x, left.y, left.z, 0.0],
            [true_up.x, true_up.y, true_up.z, 0.0],
            [-forward.x, -forward.y, -forward.z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return orientation @ translation(-from_point.x, -from_point.y, -from_point.z)
