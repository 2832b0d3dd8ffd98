"""
Utility functions for libsunmoon.

Degree-based trigonometry, angle reduction, polynomial evaluation and the
three-point interpolation used by the rise/set solver.
"""

import math
from typing import Sequence


def sind(deg: float) -> float:
    """Sine of an angle given in degrees."""
    return math.sin(math.radians(deg))


def cosd(deg: float) -> float:
    """Cosine of an angle given in degrees."""
    return math.cos(math.radians(deg))


def reduce_angle(angle: float) -> float:
    """
    Reduce an angle to the interval [0, 360).

    Args:
        angle: Angle in degrees

    Returns:
        Equivalent angle in [0, 360)

    Examples:
        >>> reduce_angle(370.0)
        10.0
        >>> reduce_angle(-30.0)
        330.0
    """
    return angle - 360.0 * math.floor(angle / 360.0)


def polynomial(variable: float, coeffs: Sequence[float]) -> float:
    """
    Evaluate A + Bx + Cx^2 + ... for coefficients [A, B, C, ...].

    Args:
        variable: Value of x
        coeffs: Coefficients in ascending order of power

    Returns:
        Sum of the polynomial
    """
    total = 0.0
    power = 1.0
    for coeff in coeffs:
        total += power * coeff
        power *= variable
    return total


def interpolate_from_three(
    y1: float, y2: float, y3: float, n: float, normalize: bool = False
) -> float:
    """
    Interpolate from three tabular values (Meeus eq. 3.3).

    Args:
        y1, y2, y3: Values at the start, middle and end of the interval
        n: Interpolating factor relative to the middle value
        normalize: Add 360 to negative differences (for angles that wrap
            from 360 back to 0 inside the interval)

    Returns:
        Interpolated value (not reduced)
    """
    a = y2 - y1
    b = y3 - y2
    if normalize:
        if a < 0:
            a += 360.0
        if b < 0:
            b += 360.0
    c = b - a
    return y2 + (n / 2.0) * (a + b + n * c)
