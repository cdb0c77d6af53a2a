"""Intersection records, hit selection, and shading precomputation.

An Intersection pairs a ray parameter t with the object that was hit. An
Intersections collection gathers the records produced by one or more objects;
after ``sort`` they are in non-decreasing t order across every contributing
object.

The *hit* is the intersection with the smallest strictly positive t: the
nearest surface in front of the ray origin. Records with t <= 0 stay in the
collection but are never selected as the hit.

``prepare_computations`` turns a hit into a Computations snapshot holding
everything the shading step needs: the world-space point, eye vector, normal
(flipped toward the eye when the ray starts inside the object), and the
*over point* nudged along the normal so that shadow rays do not re-hit the
surface they start on.

Example:
    >>> from src.raycaster.geometry.intersections import Intersection, Intersections
    >>> from src.raycaster.geometry.sphere import Sphere
    >>> s = Sphere()
    >>> xs = Intersections([Intersection(5, s), Intersection(-3, s), Intersection(2, s)])
    >>> xs.hit().t
    2
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.raycaster.core.ray import Ray
from src.raycaster.core.tolerance import EPSILON
from src.raycaster.core.tuple import Tuple

if TYPE_CHECKING:
    from src.raycaster.geometry.sphere import Sphere

# Offset along the normal for the over point. Sized for double precision;
# the single-precision kernel uses a larger bias of its own.
SHADOW_BIAS = EPSILON


@dataclass(frozen=True)
class Intersection:
    """A ray/object intersection.

    Attributes:
        t: Ray parameter at the intersection.
        object: A copy of the object that was hit, taken when the
            intersection is recorded. Later changes to the scene object do
            not reach it.
    """

    t: float
    object: Sphere

    def __post_init__(self) -> None:
        object.__setattr__(self, "object", self.object.copy())

    __hash__ = None  # type: ignore[assignment]

    def prepare_computations(self, ray: Ray) -> Computations:
        return prepare_computations(self, ray)


@dataclass(frozen=True)
class Computations:
    """Read-only shading data derived from a hit.

    Attributes:
        t: Ray parameter of the hit.
        object: The object that was hit.
        point: World-space hit point.
        eye: Unit vector from the point toward the ray origin.
        normal: Unit surface normal, facing the eye.
        inside: True if the ray originated inside the object, in which case
            the normal was flipped.
        over_point: ``point`` offset along ``normal`` by SHADOW_BIAS, used as
            the shading and shadow-ray origin.
    """

    t: float
    object: Sphere
    point: Tuple
    eye: Tuple
    normal: Tuple
    inside: bool
    over_point: Tuple

    __hash__ = None  # type: ignore[assignment]


class Intersections:
    """An ordered collection of intersections.

    Supports ``len``, indexing (out-of-range indices raise IndexError),
    iteration, and in-place ``sort`` by t.
    """

    def __init__(self, intersections: Iterable[Intersection] = ()) -> None:
        self._data: list[Intersection] = list(intersections)

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, index: int) -> Intersection:
        return self._data[index]

    def __iter__(self) -> Iterator[Intersection]:
        return iter(self._data)

    def __bool__(self) -> bool:
        return bool(self._data)

    def append(self, intersection: Intersection) -> None:
        self._data.append(intersection)

    def extend(self, intersections: Iterable[Intersection]) -> None:
        self._data.extend(intersections)

    def sort(self) -> None:
        """Stable sort by ascending t."""
        self._data.sort(key=lambda i: i.t)

    def hit(self) -> Intersection | None:
        """Return the intersection with the smallest positive t, or None.

        Works on unsorted collections; ties resolve to the earliest entry.
        """
        result: Intersection | None = None
        for intersection in self._data:
            if intersection.t > 0.0 and (result is None or intersection.t < result.t):
                result = intersection
        return result

    def __repr__(self) -> str:
        return f"Intersections({[i.t for i in self._data]!r})"


def prepare_computations(intersection: Intersection, ray: Ray) -> Computations:
    """Precompute the shading data for a hit.

    Args:
        intersection: The hit to shade.
        ray: The ray that produced it.

    Returns:
        A Computations snapshot for one shading evaluation.
    """
    position = ray.position(intersection.t)
    eye = -ray.direction
    normal = intersection.object.normal_at(position)

    inside = normal.dot(eye) < 0.0
    if inside:
        normal = -normal

    return Computations(
        t=intersection.t,
        object=intersection.object,
        point=position,
        eye=eye,
        normal=normal,
        inside=inside,
        over_point=position + normal * SHADOW_BIAS,
    )
