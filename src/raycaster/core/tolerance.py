"""Shared floating-point tolerance for geometric comparisons.

Every approximate comparison in the package (tuples, colors, matrices,
intersection bookkeeping) goes through this module so that boundary cases
such as tangent rays and shadow-acne offsets behave consistently.
"""

from collections.abc import Iterable

# Absolute tolerance used for all approximate equality checks
EPSILON = 1e-5


def approx_eq(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """Check whether two floats are equal within an absolute tolerance.

    Args:
        a: First value.
        b: Second value.
        epsilon: Absolute tolerance. Defaults to EPSILON.

    Returns:
        True if |a - b| < epsilon.
    """
    return abs(a - b) < epsilon


def approx_zero(a: float, epsilon: float = EPSILON) -> bool:
    """Check whether a float is zero within an absolute tolerance."""
    return abs(a) < epsilon


def all_approx_eq(a: Iterable[float], b: Iterable[float], epsilon: float = EPSILON) -> bool:
    """Component-wise approximate equality over two equal-length iterables."""
    a = list(a)
    b = list(b)
    if len(a) != len(b):
        return False
    return all(approx_eq(x, y, epsilon) for x, y in zip(a, b))
