"""Ray data structure.

A ray is an origin point plus a direction vector. Rays are immutable:
transforming one produces a new ray and leaves the original untouched.

Example:
    >>> from src.raycaster.core.ray import Ray
    >>> from src.raycaster.core.tuple import point, vector
    >>> ray = Ray(point(2, 3, 4), vector(1, 0, 0))
    >>> ray.position(2.5)
    Tuple(x=4.5, y=3, z=4, w=1)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.raycaster.core.matrix import Matrix
from src.raycaster.core.tuple import Tuple


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (point tuple).
        direction: The direction of the ray (vector tuple). Not required to be
            normalized; object-space rays are generally not unit length.
    """

    origin: Tuple
    direction: Tuple

    def position(self, t: float) -> Tuple:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Positive values are in front of the origin.

        Returns:
            The point origin + direction * t.
        """
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix) -> Ray:
        """Return a new ray with both origin and direction transformed."""
        return Ray(matrix @ self.origin, matrix @ self.direction)
