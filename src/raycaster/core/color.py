"""RGB color values used throughout shading.

Colors are not clamped: intermediate shading results may fall below 0 or
above 1, and clamping only happens when a canvas is encoded to an image.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from src.raycaster.core.tolerance import approx_eq


@dataclass(frozen=True, eq=False)
class Color:
    """An immutable RGB triple.

    Attributes:
        red: Red channel, nominally in [0, 1].
        green: Green channel, nominally in [0, 1].
        blue: Blue channel, nominally in [0, 1].
    """

    red: float
    green: float
    blue: float

    @classmethod
    def black(cls) -> Color:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def white(cls) -> Color:
        return cls(1.0, 1.0, 1.0)

    def __iter__(self) -> Iterator[float]:
        yield self.red
        yield self.green
        yield self.blue

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return (
            approx_eq(self.red, other.red)
            and approx_eq(self.green, other.green)
            and approx_eq(self.blue, other.blue)
        )

    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: Color) -> Color:
        return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __sub__(self, other: Color) -> Color:
        return Color(self.red - other.red, self.green - other.green, self.blue - other.blue)

    def __mul__(self, other: Color | float) -> Color:
        """Scale by a scalar, or take the Hadamard product with another color."""
        if isinstance(other, Color):
            return Color(self.red * other.red, self.green * other.green, self.blue * other.blue)
        return Color(self.red * other, self.green * other, self.blue * other)

    def __rmul__(self, scalar: float) -> Color:
        return Color(self.red * scalar, self.green * scalar, self.blue * scalar)

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)

    def __repr__(self) -> str:
        return f"Color({self.red:g}, {self.green:g}, {self.blue:g})"
