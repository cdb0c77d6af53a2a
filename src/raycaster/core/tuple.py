"""Homogeneous 4-component tuples for points and vectors.

A Tuple carries (x, y, z, w). By convention w = 1.0 marks a point and
w = 0.0 marks a free vector; the arithmetic operators are component-wise so
the tag follows naturally:

    point - point   -> vector
    point + vector  -> point
    vector + vector -> vector

Example:
    >>> from src.raycaster.core.tuple import point, vector
    >>> p = point(1.0, 2.0, 3.0)
    >>> v = vector(0.0, 0.0, 1.0)
    >>> (p + v).is_point()
    True
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from src.raycaster.core.tolerance import approx_eq


@dataclass(frozen=True, eq=False)
class Tuple:
    """An immutable homogeneous 4-tuple.

    Attributes:
        x: First component.
        y: Second component.
        z: Third component.
        w: Homogeneous tag; 1.0 for points, 0.0 for vectors.
    """

    x: float
    y: float
    z: float
    w: float

    def is_point(self) -> bool:
        """Return True if this tuple is tagged as a point."""
        return approx_eq(self.w, 1.0)

    def is_vector(self) -> bool:
        """Return True if this tuple is tagged as a vector."""
        return approx_eq(self.w, 0.0)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return (
            approx_eq(self.x, other.x)
            and approx_eq(self.y, other.y)
            and approx_eq(self.z, other.z)
            and approx_eq(self.w, other.w)
        )

    # Approximate equality cannot be made consistent with hashing
    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: Tuple) -> Tuple:
        return Tuple(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: Tuple) -> Tuple:
        return Tuple(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def __neg__(self) -> Tuple:
        return Tuple(-self.x, -self.y, -self.z, -self.w)

    def __mul__(self, scalar: float) -> Tuple:
        return Tuple(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Tuple:
        return Tuple(self.x / scalar, self.y / scalar, self.z / scalar, self.w / scalar)

    def magnitude(self) -> float:
        """Euclidean norm over all four components."""
        return math.sqrt(self.x**2 + self.y**2 + self.z**2 + self.w**2)

    def normalize(self) -> Tuple:
        """Scale the tuple to unit magnitude.

        Returns:
            A tuple parallel to this one with magnitude 1.

        Raises:
            ValueError: If the tuple has zero magnitude. Callers must only
                normalize non-degenerate directions.
        """
        length = self.magnitude()
        if length == 0.0:
            raise ValueError(f"Cannot normalize zero-length tuple {self!r}")
        return self / length

    def dot(self, other: Tuple) -> float:
        """Dot product over all four components."""
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def cross(self, other: Tuple) -> Tuple:
        """Three-component cross product; w is ignored and the result is a vector.

        Only meaningful for vector operands. Points are not rejected.
        """
        return vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def reflect(self, normal: Tuple) -> Tuple:
        """Reflect this vector about a (unit) normal."""
        return self - normal * 2.0 * self.dot(normal)

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return the components as a float64 array of shape (4,)."""
        return np.array([self.x, self.y, self.z, self.w], dtype=np.float64)

    def __repr__(self) -> str:
        return f"Tuple(x={self.x:g}, y={self.y:g}, z={self.z:g}, w={self.w:g})"


def point(x: float, y: float, z: float) -> Tuple:
    """Create a point (w = 1)."""
    return Tuple(float(x), float(y), float(z), 1.0)


def vector(x: float, y: float, z: float) -> Tuple:
    """Create a free vector (w = 0)."""
    return Tuple(float(x), float(y), float(z), 0.0)


def magnitude(t: Tuple) -> float:
    return t.magnitude()


def normalize(t: Tuple) -> Tuple:
    return t.normalize()


def dot(a: Tuple, b: Tuple) -> float:
    return a.dot(b)


def cross(a: Tuple, b: Tuple) -> Tuple:
    return a.cross(b)


def reflect(incident: Tuple, normal: Tuple) -> Tuple:
    """Reflect an incident vector about a normal: v - 2 (v . n) n."""
    return incident.reflect(normal)
