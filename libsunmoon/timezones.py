"""
Timezone helpers for libsunmoon.

The solvers work on timezone-aware ``datetime`` objects. These helpers hide
the difference between pytz zones (which must be attached with ``localize``)
and ordinary ``tzinfo`` objects such as ``datetime.timezone.utc``.
"""

from datetime import datetime, timedelta, tzinfo
from typing import Optional, Union

import pytz


def get_timezone(time_zone: Optional[Union[str, tzinfo]]) -> tzinfo:
    """
    Resolve a timezone argument.

    Args:
        time_zone: IANA identifier, a tzinfo object, or None for UTC

    Returns:
        tzinfo instance

    Raises:
        pytz.UnknownTimeZoneError: If the identifier is not in the database
        TypeError: If the argument has an unsupported type
    """
    if time_zone is None:
        return pytz.utc
    if isinstance(time_zone, str):
        return pytz.timezone(time_zone)
    if isinstance(time_zone, tzinfo):
        return time_zone
    raise TypeError(
        f'Unrecognized time zone type "{time_zone.__class__.__name__}". '
        "Time zone must be string, tzinfo, or None."
    )


def require_aware(dt: datetime) -> datetime:
    """Raise ValueError unless *dt* carries a usable UTC offset."""
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        raise ValueError("datetime must be timezone-aware")
    return dt


def localize(time_zone: tzinfo, *args: int) -> datetime:
    """
    Build an aware datetime from calendar fields in *time_zone*.

    Args:
        time_zone: Target timezone
        *args: Positional datetime fields (year, month, day, ...)
    """
    if hasattr(time_zone, "localize"):
        # pytz zones cannot be passed as tzinfo to the constructor
        return time_zone.localize(datetime(*args))
    return datetime(*args, tzinfo=time_zone)


def to_utc(dt: datetime) -> datetime:
    """Convert an aware datetime to UTC."""
    return require_aware(dt).astimezone(pytz.utc)


def utc_midnight(dt: datetime) -> datetime:
    """Midnight UTC of the calendar date *dt* shows in its own timezone."""
    return datetime(dt.year, dt.month, dt.day, tzinfo=pytz.utc)


def utc_offset_minutes(dt: datetime) -> float:
    """Offset of *dt* from UTC in minutes (east positive)."""
    return require_aware(dt).utcoffset().total_seconds() / 60.0


def is_dst(dt: datetime) -> bool:
    """True if daylight saving time is in effect at *dt*."""
    dst = require_aware(dt).dst()
    return bool(dst) and dst != timedelta(0)


def round_to_minute(dt: datetime) -> datetime:
    """Round to the nearest whole minute (half a minute rounds up)."""
    shifted = dt + timedelta(seconds=30)
    return shifted.replace(second=0, microsecond=0)
