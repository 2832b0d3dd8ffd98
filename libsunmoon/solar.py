"""
Low-precision solar coordinates for libsunmoon.

Computes the Sun's apparent right ascension and declination and the apparent
sidereal time at Greenwich, all as functions of T (Julian centuries since
J2000.0).

Formulas are based on:
- Jean Meeus "Astronomical Algorithms" (2nd ed., 1998), Chapters 12, 22, 25

Precision:
    About 0.01 degree in solar longitude, which amounts to a few seconds of
    time in the derived rise/set instants.
"""

import math

from .nutation import moon_ascending_node_longitude, nutation, sun_mean_anomaly
from .utils import cosd, polynomial, reduce_angle, sind

# Meeus eq. 25.2
SUN_MEAN_LONGITUDE = (280.46646, 36000.76983, 0.0003032)

# Meeus eq. 22.3 (Laskar), powers of U = T / 100, arcseconds -> degrees
MEAN_OBLIQUITY_OF_ECLIPTIC = tuple(
    c / 3600.0
    for c in (
        84381.448, -4680.93, -1.55, 1999.25, -51.38,
        -249.67, -39.05, 7.12, 27.87, 5.79, 2.45,
    )
)


def sun_mean_longitude(T: float) -> float:
    """Geometric mean longitude of the Sun (L0), degrees in [0, 360)."""
    return reduce_angle(polynomial(T, SUN_MEAN_LONGITUDE))


def sun_equation_of_center(T: float) -> float:
    """Equation of center of the Sun (C) in degrees."""
    m = sun_mean_anomaly(T)
    return (
        (1.914602 - 0.004817 * T - 0.000014 * T * T) * sind(m)
        + (0.019993 - 0.000101 * T) * sind(2 * m)
        + 0.000290 * sind(3 * m)
    )


def sun_true_longitude(T: float) -> float:
    """True geometric longitude of the Sun, L0 + C (not reduced)."""
    return sun_mean_longitude(T) + sun_equation_of_center(T)


def sun_apparent_longitude(T: float) -> float:
    """
    Apparent longitude of the Sun (lambda), corrected for nutation and
    aberration (not reduced).
    """
    omega = moon_ascending_node_longitude(T)
    return sun_true_longitude(T) - 0.00569 - 0.00478 * sind(omega)


def mean_obliquity_of_ecliptic(T: float) -> float:
    """Mean obliquity of the ecliptic (epsilon0) in degrees."""
    return polynomial(T / 100.0, MEAN_OBLIQUITY_OF_ECLIPTIC)


def true_obliquity_of_ecliptic(T: float) -> float:
    """True obliquity of the ecliptic, epsilon0 + delta epsilon."""
    return mean_obliquity_of_ecliptic(T) + nutation(T)[1]


def _apparent_obliquity(T: float) -> float:
    # Meeus eq. 25.8
    return true_obliquity_of_ecliptic(T) + 0.00256 * cosd(moon_ascending_node_longitude(T))


def sun_apparent_right_ascension(T: float) -> float:
    """
    Apparent right ascension of the Sun (Meeus eq. 25.6).

    Args:
        T: Julian centuries since J2000.0

    Returns:
        float: Right ascension in degrees (0-360)
    """
    epsilon = _apparent_obliquity(T)
    lam = sun_apparent_longitude(T)
    alpha = math.degrees(math.atan2(cosd(epsilon) * sind(lam), cosd(lam)))
    return reduce_angle(alpha)


def sun_apparent_declination(T: float) -> float:
    """
    Apparent declination of the Sun (Meeus eq. 25.7).

    Args:
        T: Julian centuries since J2000.0

    Returns:
        float: Declination in degrees (-90 to 90)
    """
    epsilon = _apparent_obliquity(T)
    lam = sun_apparent_longitude(T)
    return math.degrees(math.asin(sind(epsilon) * sind(lam)))


def mean_sidereal_time_greenwich(T: float) -> float:
    """
    Mean sidereal time at Greenwich (Meeus eq. 12.4), not reduced.

    Args:
        T: Julian centuries since J2000.0 (UT)

    Returns:
        float: Mean sidereal time in degrees
    """
    days = T * 36525.0
    return (
        280.46061837
        + 360.98564736629 * days
        + 0.000387933 * T * T
        - T * T * T / 38710000.0
    )


def apparent_sidereal_time_greenwich(T: float) -> float:
    """
    Apparent sidereal time at Greenwich: mean sidereal time corrected by the
    equation of the equinoxes (delta psi * cos epsilon).

    Returns:
        float: Apparent sidereal time in degrees (0-360)
    """
    delta_psi, delta_epsilon = nutation(T)
    epsilon = mean_obliquity_of_ecliptic(T) + delta_epsilon
    theta = mean_sidereal_time_greenwich(T) + delta_psi * cosd(epsilon)
    return reduce_angle(theta)
