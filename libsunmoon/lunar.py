"""
Moon phase calculations for libsunmoon.

This module computes the instants of the principal lunar phases:
- New Moon, First Quarter, Full Moon, Last Quarter

Formulas are based on:
- Jean Meeus "Astronomical Algorithms" (2nd ed., 1998), Chapter 49

Algorithm:
    1. Estimate the lunation number k for the start of the year
    2. Evaluate the mean phase for k (+ 0.25 per quarter)
    3. Apply the periodic corrections for the phase and the 14 planetary
       arguments common to all phases
    4. Convert from ephemeris time to UT by subtracting Delta T

Precision:
    Typically well under a minute for dates within a few centuries of J2000.
"""

import json
import logging
import math
from datetime import MAXYEAR, MINYEAR, datetime, timedelta, tzinfo
from typing import List, Optional, Sequence, Union

from .config import DEFAULT_CONFIG, EngineConfig
from .constants import (
    LUNATION_CANDIDATES,
    LUNATIONS_PER_CENTURY,
    LUNATIONS_PER_YEAR,
    SECONDS_PER_DAY,
)
from .deltat import delta_t
from .events import MoonPhase
from .time_utils import datetime_from_jd, julday
from .timezones import get_timezone, localize, round_to_minute
from .utils import cosd, sind

LOGGER = logging.getLogger(__name__)

# Phase JDEs that datetime_from_jd can represent
_FIRST_JDE = julday(MINYEAR, 1, 1)
_LAST_JDE = julday(MAXYEAR, 12, 31, 23.0)


def approx_k(dt: datetime) -> float:
    """
    Approximate number of new moons since 2000-01-06 (Meeus eq. 49.2).

    Args:
        dt: Datetime whose calendar fields are used

    Returns:
        float: Fractional lunation number
    """
    year = dt.year + dt.month / 12.0 + dt.day / 365.25
    return (year - 2000) * LUNATIONS_PER_YEAR


def k_to_t(k: float) -> float:
    """Julian centuries since J2000.0 for lunation number k (Meeus eq. 49.3)."""
    return k / LUNATIONS_PER_CENTURY


def mean_phase(T: float, k: float) -> float:
    """JDE of the mean phase of the Moon (Meeus eq. 49.1)."""
    return (
        2451550.09766
        + 29.530588861 * k
        + 0.00015437 * T**2
        - 0.000000150 * T**3
        + 0.00000000073 * T**4
    )


def sun_mean_anomaly(T: float, k: float) -> float:
    """Sun's mean anomaly at the phase (Meeus eq. 49.4), not reduced."""
    return 2.5534 + 29.10535670 * k - 0.0000014 * T**2 - 0.00000011 * T**3


def moon_mean_anomaly(T: float, k: float) -> float:
    """Moon's mean anomaly at the phase (Meeus eq. 49.5), not reduced."""
    return (
        201.5643
        + 385.81693528 * k
        + 0.0107582 * T**2
        + 0.00001238 * T**3
        - 0.000000058 * T**4
    )


def moon_argument_of_latitude(T: float, k: float) -> float:
    """Moon's argument of latitude at the phase (Meeus eq. 49.6)."""
    return (
        160.7108
        + 390.67050284 * k
        - 0.0016118 * T**2
        - 0.00000227 * T**3
        + 0.000000011 * T**4
    )


def moon_ascending_node_longitude(T: float, k: float) -> float:
    """Longitude of the ascending node of the lunar orbit (Meeus eq. 49.7)."""
    return 124.7746 - 1.56375588 * k + 0.0020672 * T**2 + 0.00000215 * T**3


def eccentricity_correction(T: float) -> float:
    """Factor E for the decreasing eccentricity of Earth's orbit (eq. 47.6)."""
    return 1 - 0.002516 * T - 0.0000074 * T**2


def planetary_arguments(T: float, k: float) -> List[float]:
    """
    Planetary arguments A1..A14 (Meeus p351).

    Returns:
        list: 15 values; index 0 is unused so indices match Meeus' numbering
    """
    return [
        0.0,
        299.77 + 0.107408 * k - 0.009173 * T**2,
        251.88 + 0.016321 * k,
        251.83 + 26.651886 * k,
        349.42 + 36.412478 * k,
        84.66 + 18.206239 * k,
        141.74 + 53.303771 * k,
        207.14 + 2.453732 * k,
        154.84 + 7.306860 * k,
        34.52 + 27.261239 * k,
        207.19 + 0.121824 * k,
        291.34 + 1.844379 * k,
        161.72 + 24.198154 * k,
        239.56 + 25.513099 * k,
        331.55 + 3.592518 * k,
    ]


_COMMON_COEFFICIENTS = (
    0.000325, 0.000165, 0.000164, 0.000126, 0.000110, 0.000062, 0.000060,
    0.000056, 0.000047, 0.000042, 0.000040, 0.000037, 0.000035, 0.000023,
)


def common_corrections(a: Sequence[float]) -> float:
    """Additional corrections for all phases (Meeus p352), in days."""
    return sum(c * sind(arg) for c, arg in zip(_COMMON_COEFFICIENTS, a[1:]))


def new_moon_full_moon_corrections(
    e: float, m: float, m_prime: float, f: float, omega: float, phase: int
) -> float:
    """
    Periodic corrections for New and Full Moon (Meeus p351), in days.

    The seven largest terms have slightly different coefficients for the
    two phases.
    """
    correction = (
        -0.00111 * sind(m_prime - 2 * f)
        - 0.00057 * sind(m_prime + 2 * f)
        + 0.00056 * e * sind(2 * m_prime + m)
        - 0.00042 * sind(3 * m_prime)
        + 0.00042 * e * sind(m + 2 * f)
        + 0.00038 * e * sind(m - 2 * f)
        - 0.00024 * e * sind(2 * m_prime - m)
        - 0.00017 * sind(omega)
        - 0.00007 * sind(m_prime + 2 * m)
        + 0.00004 * sind(2 * m_prime - 2 * f)
        + 0.00004 * sind(3 * m)
        + 0.00003 * sind(m_prime + m - 2 * f)
        + 0.00003 * sind(2 * m_prime + 2 * f)
        - 0.00003 * sind(m_prime + m + 2 * f)
        + 0.00003 * sind(m_prime - m + 2 * f)
        - 0.00002 * sind(m_prime - m - 2 * f)
        - 0.00002 * sind(3 * m_prime + m)
        + 0.00002 * sind(4 * m_prime)
    )
    if phase == MoonPhase.NEW_MOON:
        correction += (
            -0.40720 * sind(m_prime)
            + 0.17241 * e * sind(m)
            + 0.01608 * sind(2 * m_prime)
            + 0.01039 * sind(2 * f)
            + 0.00739 * e * sind(m_prime - m)
            - 0.00514 * e * sind(m_prime + m)
            + 0.00208 * e * e * sind(2 * m)
        )
    elif phase == MoonPhase.FULL_MOON:
        correction += (
            -0.40614 * sind(m_prime)
            + 0.17302 * e * sind(m)
            + 0.01614 * sind(2 * m_prime)
            + 0.01043 * sind(2 * f)
            + 0.00734 * e * sind(m_prime - m)
            - 0.00515 * e * sind(m_prime + m)
            + 0.00209 * e * e * sind(2 * m)
        )
    else:
        raise ValueError(f"Not a new or full moon phase: {phase}")
    return correction


def quarter_corrections(
    e: float, m: float, m_prime: float, f: float, omega: float, phase: int
) -> float:
    """
    Periodic corrections for First and Last Quarter (Meeus p352), in days.

    Includes the W term, added for First Quarter and subtracted for Last
    Quarter.
    """
    correction = (
        -0.62801 * sind(m_prime)
        + 0.17172 * e * sind(m)
        - 0.01183 * e * sind(m_prime + m)
        + 0.00862 * sind(2 * m_prime)
        + 0.00804 * sind(2 * f)
        + 0.00454 * e * sind(m_prime - m)
        + 0.00204 * e * e * sind(2 * m)
        - 0.00180 * sind(m_prime - 2 * f)
        - 0.00070 * sind(m_prime + 2 * f)
        - 0.00040 * sind(3 * m_prime)
        - 0.00034 * e * sind(2 * m_prime - m)
        + 0.00032 * e * sind(m + 2 * f)
        + 0.00032 * e * sind(m - 2 * f)
        - 0.00028 * e * e * sind(m_prime + 2 * m)
        + 0.00027 * e * sind(2 * m_prime + m)
        - 0.00017 * sind(omega)
        - 0.00005 * sind(m_prime - m - 2 * f)
        + 0.00004 * sind(2 * m_prime + 2 * f)
        - 0.00004 * sind(m_prime + m + 2 * f)
        + 0.00004 * sind(m_prime - 2 * m)
        + 0.00003 * sind(m_prime + m - 2 * f)
        + 0.00003 * sind(3 * m)
        + 0.00002 * sind(2 * m_prime - 2 * f)
        + 0.00002 * sind(m_prime - m + 2 * f)
        - 0.00002 * sind(3 * m_prime + m)
    )
    w = (
        0.00306
        - 0.00038 * e * cosd(m)
        + 0.00026 * cosd(m_prime)
        - 0.00002 * cosd(m_prime - m)
        + 0.00002 * cosd(m_prime + m)
        + 0.00002 * cosd(2 * f)
    )
    if phase == MoonPhase.FIRST_QUARTER:
        return correction + w
    if phase == MoonPhase.LAST_QUARTER:
        return correction - w
    raise ValueError(f"Not a quarter phase: {phase}")


def true_phase(k: float, phase: Union[int, MoonPhase]) -> float:
    """
    Calculate the JDE of a lunar phase near lunation k.

    Args:
        k: Integer lunation number (0 = new moon of 2000-01-06)
        phase: MoonPhase or its integer value (0-3)

    Returns:
        float: Julian Ephemeris Day of the phase

    Raises:
        ValueError: If phase is not a valid MoonPhase
    """
    phase = MoonPhase(phase)
    k = k + phase / 4.0
    T = k_to_t(k)
    e = eccentricity_correction(T)
    m = sun_mean_anomaly(T, k)
    m_prime = moon_mean_anomaly(T, k)
    f = moon_argument_of_latitude(T, k)
    omega = moon_ascending_node_longitude(T, k)

    if phase in (MoonPhase.NEW_MOON, MoonPhase.FULL_MOON):
        correction = new_moon_full_moon_corrections(e, m, m_prime, f, omega, phase)
    else:
        correction = quarter_corrections(e, m, m_prime, f, omega, phase)
    correction += common_corrections(planetary_arguments(T, k))

    return mean_phase(T, k) + correction


def _start_of_day_jd(dt: datetime) -> float:
    # Avoids astimezone, which overflows at the ends of the datetime range
    offset = dt.utcoffset().total_seconds() / SECONDS_PER_DAY
    return julday(dt.year, dt.month, dt.day) - offset


def year_moon_phases(
    year: int,
    phase: Union[int, MoonPhase],
    timezone: Optional[Union[str, tzinfo]] = "UTC",
    config: EngineConfig = DEFAULT_CONFIG,
) -> List[datetime]:
    """
    Find all moons of a given phase within a calendar year.

    Args:
        year: Gregorian calendar year
        phase: MoonPhase or its integer value (0-3)
        timezone: IANA identifier or tzinfo; the year boundaries and the
            returned datetimes use this zone (None means UTC)
        config: Engine options (minute rounding)

    Returns:
        list: Aware datetimes in chronological order

    Raises:
        ValueError: If phase is not a valid MoonPhase
        pytz.UnknownTimeZoneError: If the timezone identifier is unknown

    Example:
        >>> full_moons = year_moon_phases(2024, MoonPhase.FULL_MOON, "Europe/Rome")
    """
    phase = MoonPhase(phase)
    tz = get_timezone(timezone)
    year_begin = localize(tz, year, 1, 1)
    first_jd = max(_FIRST_JDE, _start_of_day_jd(year_begin))
    if year < MAXYEAR:
        year_end = localize(tz, year + 1, 1, 1)
        last_jd = _start_of_day_jd(year_end)
    else:
        # The next year cannot be built; phases on 9999-12-31 are left out
        year_end = None
        last_jd = julday(MAXYEAR, 12, 31)

    # k for the first new moon of the year or earlier
    k = math.floor(approx_k(year_begin)) - 1

    phase_times = []
    for i in range(LUNATION_CANDIDATES):
        jde = true_phase(k + i, phase)
        if not _FIRST_JDE <= jde < _LAST_JDE:
            continue
        # JDE is treated as JD and corrected by Delta T afterwards
        moon_time = datetime_from_jd(jde)
        seconds = delta_t(moon_time)
        if not first_jd < jde - seconds / SECONDS_PER_DAY < last_jd:
            continue
        moon_time -= timedelta(seconds=seconds)
        if config.round_to_nearest_minute:
            moon_time = round_to_minute(moon_time)
        moon_time = moon_time.astimezone(tz)
        if year_begin < moon_time and (year_end is None or moon_time < year_end):
            phase_times.append(moon_time)

    LOGGER.debug(
        json.dumps(
            {
                "event": "moon_phases",
                "year": year,
                "phase": phase.name,
                "timezone": str(tz),
                "count": len(phase_times),
            }
        )
    )
    return phase_times
