"""
Time conversion utilities for libsunmoon.

Implements conversions between:
- Calendar dates and Julian Day numbers
- Gregorian and Julian calendar systems (single fixed cutover)
- Julian Days and Julian centuries since J2000.0

All algorithms follow Meeus "Astronomical Algorithms" (1998), Chapter 7.
"""

import math
from datetime import datetime
from typing import Optional, Tuple

import pytz

from .constants import (
    DAYS_PER_CENTURY,
    GREGORIAN_CUTOVER,
    GREGORIAN_JD_CUTOVER,
    J2000,
    SECONDS_PER_DAY,
)
from .timezones import to_utc


def is_gregorian(year: int, month: int, day: int, hour: float = 0.0) -> bool:
    """True if the calendar fields fall at/after 1582-10-15T12:00."""
    return (year, month, day, hour) >= GREGORIAN_CUTOVER


def julday(
    year: int,
    month: int,
    day: int,
    hour: float = 0.0,
    gregorian: Optional[bool] = None,
) -> float:
    """
    Convert calendar date to Julian Day number.

    Args:
        year: Calendar year (astronomical numbering, 0 = 1 BCE)
        month: Month (1-12)
        day: Day of month (1-31)
        hour: Decimal hour (0.0-23.999...)
        gregorian: Force the Gregorian (True) or Julian (False) rule;
            None selects it from the 1582-10-15T12:00 cutover

    Returns:
        float: Julian Day number (days since JD 0.0 = noon Jan 1, 4713 BCE)

    Note:
        JD 2451545.0 = Jan 1, 2000 12:00 (J2000.0 epoch)
    """
    if gregorian is None:
        gregorian = is_gregorian(year, month, day, hour)

    if month < 3:
        year -= 1
        month += 12

    a = math.floor(year / 100)
    b = 2 - a + math.floor(a / 4) if gregorian else 0

    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + day
        + hour / 24.0
        + b
        - 1524.5
    )


def revjul(jd: float) -> Tuple[int, int, int, int, int, int]:
    """
    Convert Julian Day number to calendar date.

    Args:
        jd: Julian Day number

    Returns:
        tuple: (year, month, day, hour, minute, second)

    Note:
        Julian calendar below JD 2299160.5, Gregorian from there on. The
        fraction of the day is rounded to the nearest whole second.
    """
    jd = jd + 0.5
    z = math.floor(jd)
    # Rounded, not truncated: float noise would otherwise lose a second
    # on the round trip through julian_date
    seconds = round((jd - z) * SECONDS_PER_DAY)
    if seconds >= SECONDS_PER_DAY:
        z += 1
        seconds -= int(SECONDS_PER_DAY)

    a = z
    if z >= GREGORIAN_JD_CUTOVER:
        alpha = math.floor((z - 1867216.25) / 36524.25)
        a += 1 + alpha - math.floor(alpha / 4)

    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)

    day = b - d - math.floor(30.6001 * e)
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715

    hour, remainder = divmod(int(seconds), 3600)
    minute, second = divmod(remainder, 60)
    return year, month, day, hour, minute, second


def julian_date(dt: datetime) -> float:
    """
    Julian Date of an aware datetime, using its UTC calendar fields.

    Raises:
        ValueError: If *dt* is naive
    """
    utc = to_utc(dt)
    hour = utc.hour + (
        utc.minute + (utc.second + utc.microsecond / 1e6) / 60.0
    ) / 60.0
    return julday(utc.year, utc.month, utc.day, hour)


def datetime_from_jd(jd: float) -> datetime:
    """
    UTC datetime for a Julian Date.

    Raises:
        ValueError: If the year falls outside the range of ``datetime``
    """
    year, month, day, hour, minute, second = revjul(jd)
    return datetime(year, month, day, hour, minute, second, tzinfo=pytz.utc)


def jd_to_t(jd: float) -> float:
    """Julian centuries since J2000.0 (Meeus eq. 12.1)."""
    return (jd - J2000) / DAYS_PER_CENTURY


def julian_century(dt: datetime) -> float:
    """Julian centuries since J2000.0 for an aware datetime."""
    return jd_to_t(julian_date(dt))
