"""
Nutation in longitude and obliquity for libsunmoon.

Implements the 63-term series of Meeus "Astronomical Algorithms" Chapter 22
(Table 22.A, derived from the IAU 1980 theory). Precision is about 0.5" in
longitude and 0.1" in obliquity, which is far below what sunrise/sunset
timing needs.

The fundamental arguments (D, M, M', F, Omega) are shared with the solar
position module.
"""

import math
from typing import Tuple

from .utils import polynomial, reduce_angle

# =============================================================================
# FUNDAMENTAL ARGUMENTS (Meeus p144), coefficients of T^0..T^3 in degrees
# =============================================================================

MOON_MEAN_ELONGATION = (297.85036, 445267.111480, -0.0019142, 1 / 189474)
SUN_MEAN_ANOMALY = (357.52772, 35999.050340, -0.0001603, -1 / 300000)
MOON_MEAN_ANOMALY = (134.96298, 477198.867398, 0.0086972, 1 / 56250)
MOON_ARGUMENT_OF_LATITUDE = (93.27191, 483202.017538, -0.0036825, 1 / 327270)
MOON_ASCENDING_NODE_LONGITUDE = (125.04452, -1934.136261, 0.0020708, 1 / 450000)

# =============================================================================
# PERIODIC TERMS (Meeus Table 22.A)
# =============================================================================
# Multipliers of D, M, M', F, Omega; then longitude coefficients A, B and
# obliquity coefficients C, D in units of 0.0001".

NUTATION_TERMS = (
    (0, 0, 0, 0, 1, -171996, -174.2, 92025, 8.9),
    (-2, 0, 0, 2, 2, -13187, -1.6, 5736, -3.1),
    (0, 0, 0, 2, 2, -2274, -0.2, 977, -0.5),
    (0, 0, 0, 0, 2, 2062, 0.2, -895, 0.5),
    (0, 1, 0, 0, 0, 1426, -3.4, 54, -0.1),
    (0, 0, 1, 0, 0, 712, 0.1, -7, 0),
    (-2, 1, 0, 2, 2, -517, 1.2, 224, -0.6),
    (0, 0, 0, 2, 1, -386, -0.4, 200, 0),
    (0, 0, 1, 2, 2, -301, 0, 129, -0.1),
    (-2, -1, 0, 2, 2, 217, -0.5, -95, 0.3),
    (-2, 0, 1, 0, 0, -158, 0, 0, 0),
    (-2, 0, 0, 2, 1, 129, 0.1, -70, 0),
    (0, 0, -1, 2, 2, 123, 0, -53, 0),
    (2, 0, 0, 0, 0, 63, 0, 0, 0),
    (0, 0, 1, 0, 1, 63, 0.1, -33, 0),
    (2, 0, -1, 2, 2, -59, 0, 26, 0),
    (0, 0, -1, 0, 1, -58, -0.1, 32, 0),
    (0, 0, 1, 2, 1, -51, 0, 27, 0),
    (-2, 0, 2, 0, 0, 48, 0, 0, 0),
    (0, 0, -2, 2, 1, 46, 0, -24, 0),
    (2, 0, 0, 2, 2, -38, 0, 16, 0),
    (0, 0, 2, 2, 2, -31, 0, 13, 0),
    (0, 0, 2, 0, 0, 29, 0, 0, 0),
    (-2, 0, 1, 2, 2, 29, 0, -12, 0),
    (0, 0, 0, 2, 0, 26, 0, 0, 0),
    (-2, 0, 0, 2, 0, -22, 0, 0, 0),
    (0, 0, -1, 2, 1, 21, 0, -10, 0),
    (0, 2, 0, 0, 0, 17, -0.1, 0, 0),
    (2, 0, -1, 0, 1, 16, 0, -8, 0),
    (-2, 2, 0, 2, 2, -16, 0.1, 7, 0),
    (0, 1, 0, 0, 1, -15, 0, 9, 0),
    (-2, 0, 1, 0, 1, -13, 0, 7, 0),
    (0, -1, 0, 0, 1, -12, 0, 6, 0),
    (0, 0, 2, -2, 0, 11, 0, 0, 0),
    (2, 0, -1, 2, 1, -10, 0, 5, 0),
    (2, 0, 1, 2, 2, -8, 0, 3, 0),
    (0, 1, 0, 2, 2, 7, 0, -3, 0),
    (-2, 1, 1, 0, 0, -7, 0, 0, 0),
    (0, -1, 0, 2, 2, -7, 0, 3, 0),
    (2, 0, 0, 2, 1, -7, 0, 3, 0),
    (2, 0, 1, 0, 0, 6, 0, 0, 0),
    (-2, 0, 2, 2, 2, 6, 0, -3, 0),
    (-2, 0, 1, 2, 1, 6, 0, -3, 0),
    (2, 0, -2, 0, 1, -6, 0, 3, 0),
    (2, 0, 0, 0, 1, -6, 0, 3, 0),
    (0, -1, 1, 0, 0, 5, 0, 0, 0),
    (-2, -1, 0, 2, 1, -5, 0, 3, 0),
    (-2, 0, 0, 0, 1, -5, 0, 3, 0),
    (0, 0, 2, 2, 1, -5, 0, 3, 0),
    (-2, 0, 2, 0, 1, 4, 0, 0, 0),
    (-2, 1, 0, 2, 1, 4, 0, 0, 0),
    (0, 0, 1, -2, 0, 4, 0, 0, 0),
    (-1, 0, 1, 0, 0, -4, 0, 0, 0),
    (-2, 1, 0, 0, 0, -4, 0, 0, 0),
    (1, 0, 0, 0, 0, -4, 0, 0, 0),
    (0, 0, 1, 2, 0, 3, 0, 0, 0),
    (0, 0, -2, 2, 2, -3, 0, 0, 0),
    (-1, -1, 1, 0, 0, -3, 0, 0, 0),
    (0, 1, 1, 0, 0, -3, 0, 0, 0),
    (0, -1, 1, 2, 2, -3, 0, 0, 0),
    (2, -1, -1, 2, 2, -3, 0, 0, 0),
    (0, 0, 3, 2, 2, 3, 0, 0, 0),
    (2, -1, 0, 2, 2, -3, 0, 0, 0),
)

# 0.0001" -> degrees
_UNIT = 36000000.0


def moon_mean_elongation(T: float) -> float:
    """Mean elongation of the Moon from the Sun (D), degrees in [0, 360)."""
    return reduce_angle(polynomial(T, MOON_MEAN_ELONGATION))


def sun_mean_anomaly(T: float) -> float:
    """Mean anomaly of the Sun (M), degrees in [0, 360)."""
    return reduce_angle(polynomial(T, SUN_MEAN_ANOMALY))


def moon_mean_anomaly(T: float) -> float:
    """Mean anomaly of the Moon (M'), degrees in [0, 360)."""
    return reduce_angle(polynomial(T, MOON_MEAN_ANOMALY))


def moon_argument_of_latitude(T: float) -> float:
    """Argument of latitude of the Moon (F), degrees in [0, 360)."""
    return reduce_angle(polynomial(T, MOON_ARGUMENT_OF_LATITUDE))


def moon_ascending_node_longitude(T: float) -> float:
    """
    Longitude of the ascending node of the Moon's mean orbit (Omega).

    Measured on the ecliptic from the mean equinox of the date, degrees
    in [0, 360).
    """
    return reduce_angle(polynomial(T, MOON_ASCENDING_NODE_LONGITUDE))


def _arguments(T: float):
    d = moon_mean_elongation(T)
    m = sun_mean_anomaly(T)
    m_prime = moon_mean_anomaly(T)
    f = moon_argument_of_latitude(T)
    omega = moon_ascending_node_longitude(T)
    for row in NUTATION_TERMS:
        arg = row[0] * d + row[1] * m + row[2] * m_prime + row[3] * f + row[4] * omega
        yield math.radians(arg), row[5:]


def nutation(T: float) -> Tuple[float, float]:
    """
    Nutation in longitude and obliquity.

    Args:
        T: Julian centuries since J2000.0

    Returns:
        Tuple[float, float]: (delta_psi, delta_epsilon) in degrees
    """
    delta_psi = 0.0
    delta_epsilon = 0.0
    for arg, (a, b, c, d) in _arguments(T):
        delta_psi += (a + b * T) * math.sin(arg)
        delta_epsilon += (c + d * T) * math.cos(arg)
    return delta_psi / _UNIT, delta_epsilon / _UNIT


def nutation_in_longitude(T: float) -> float:
    """Nutation in longitude (delta psi) in degrees."""
    return nutation(T)[0]


def nutation_in_obliquity(T: float) -> float:
    """Nutation in obliquity (delta epsilon) in degrees."""
    return nutation(T)[1]
