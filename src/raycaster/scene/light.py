"""Point light source."""

from __future__ import annotations

from dataclasses import dataclass

from src.raycaster.core.color import Color
from src.raycaster.core.tuple import Tuple


@dataclass(frozen=True)
class PointLight:
    """A light with no size, emitting from a single point.

    Attributes:
        position: Light position (point tuple).
        intensity: Light color and brightness.
    """

    position: Tuple
    intensity: Color
