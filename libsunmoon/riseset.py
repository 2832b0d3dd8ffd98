"""
Sunrise, sunset and solar transit for libsunmoon.

Formulas are based on:
- Jean Meeus "Astronomical Algorithms" (2nd ed., 1998), Chapter 15

Algorithm:
    1. Compute apparent sidereal time at Greenwich and the Sun's apparent
       right ascension/declination at 0h of the date
    2. Estimate the transit as a fraction m of the day; for rise and set
       shift it by the approximate hour angle H0 at the standard altitude
    3. Refine m from interpolated coordinates until the correction drops
       below CONVERGENCE_THRESHOLD (at most MAX_REFINEMENT_STEPS times)

Longitude is east-positive, the opposite of Meeus' convention.

Precision:
    Rise and set times are typically within a minute of full ephemeris
    results outside polar latitudes.
"""

import json
import logging
import math
from datetime import datetime, timedelta
from typing import Optional, Tuple, Union

from .config import DEFAULT_CONFIG, EngineConfig
from .constants import (
    CONVERGENCE_THRESHOLD,
    DAYS_PER_CENTURY,
    HORIZON_ALTITUDE,
    INTERPOLATION_DELTA_T_SCALE,
    MAX_REFINEMENT_STEPS,
    MINUTES_PER_DAY,
    PLACEHOLDER_SUNRISE_HOUR,
    PLACEHOLDER_SUNSET_HOUR,
    SECONDS_PER_DAY,
    SIDEREAL_RATE,
)
from .deltat import delta_t
from .events import SunEvent, SunEventOutcome, SunEventStatus
from .solar import (
    apparent_sidereal_time_greenwich,
    sun_apparent_declination,
    sun_apparent_right_ascension,
)
from .time_utils import julian_century
from .timezones import (
    is_dst,
    localize,
    require_aware,
    round_to_minute,
    utc_midnight,
    utc_offset_minutes,
)
from .utils import cosd, interpolate_from_three, reduce_angle, sind

LOGGER = logging.getLogger(__name__)

# One day in Julian centuries
_ONE_DAY = 1.0 / DAYS_PER_CENTURY


# =============================================================================
# GEOMETRY
# =============================================================================


def normalize_m(m: float, utc_offset: float) -> float:
    """
    Shift a fractional day so the event falls on the local calendar date.

    Args:
        m: Fraction of the UTC day
        utc_offset: Offset of the local timezone from UTC in minutes

    Returns:
        float: m, m + 1 or m - 1
    """
    local_m = m + utc_offset / MINUTES_PER_DAY
    if local_m < 0:
        return m + 1
    if local_m >= 1:
        return m - 1
    return m


def local_hour_angle(theta0: float, L: float, alpha: float) -> float:
    """Local hour angle in degrees (-180, 180] for east-positive longitude."""
    H = reduce_angle(theta0 + L - alpha)
    if H > 180:
        H -= 360
    return H


def altitude(phi: float, delta: float, H: float) -> float:
    """Altitude above the horizon in degrees (Meeus eq. 13.6)."""
    return math.degrees(
        math.asin(sind(phi) * sind(delta) + cosd(phi) * cosd(delta) * cosd(H))
    )


def approx_local_hour_angle(
    phi: float, delta: float
) -> Tuple[SunEventStatus, Optional[float]]:
    """
    Approximate hour angle of the Sun at the standard altitude (eq. 15.1).

    Args:
        phi: Geographic latitude in degrees
        delta: Apparent declination of the Sun in degrees

    Returns:
        tuple: (status, H0). H0 is None for MIDNIGHT_SUN (cos H0 < -1) and
        POLAR_NIGHT (cos H0 > 1).
    """
    cos_h0 = (sind(HORIZON_ALTITUDE) - sind(phi) * sind(delta)) / (
        cosd(phi) * cosd(delta)
    )
    if cos_h0 < -1:
        return SunEventStatus.MIDNIGHT_SUN, None
    if cos_h0 > 1:
        return SunEventStatus.POLAR_NIGHT, None
    return SunEventStatus.EVENT, math.degrees(math.acos(cos_h0))


def interpolated_right_ascension(T: float, n: float) -> float:
    """Sun's right ascension at day fraction n, wrapping across 0/360."""
    alpha = interpolate_from_three(
        sun_apparent_right_ascension(T - _ONE_DAY),
        sun_apparent_right_ascension(T),
        sun_apparent_right_ascension(T + _ONE_DAY),
        n,
        normalize=True,
    )
    return reduce_angle(alpha)


def interpolated_declination(T: float, n: float) -> float:
    """Sun's declination at day fraction n."""
    delta = interpolate_from_three(
        sun_apparent_declination(T - _ONE_DAY),
        sun_apparent_declination(T),
        sun_apparent_declination(T + _ONE_DAY),
        n,
    )
    # Southern declinations come back as 360 + delta; only sin/cos use them
    return reduce_angle(delta)


# =============================================================================
# CORRECTIONS
# =============================================================================


def sun_transit_correction(
    T: float, theta0: float, dt_seconds: float, L: float, m: float
) -> float:
    """Correction to the transit fraction m (Meeus p103)."""
    theta = theta0 + SIDEREAL_RATE * m
    n = m + dt_seconds / INTERPOLATION_DELTA_T_SCALE
    alpha = interpolated_right_ascension(T, n)
    H = local_hour_angle(theta, L, alpha)
    return -H / 360.0


def sun_rise_set_correction(
    T: float, theta0: float, dt_seconds: float, phi: float, L: float, m: float
) -> float:
    """Correction to the rise/set fraction m (Meeus p103)."""
    theta = theta0 + SIDEREAL_RATE * m
    n = m + dt_seconds / INTERPOLATION_DELTA_T_SCALE
    alpha = interpolated_right_ascension(T, n)
    delta = interpolated_declination(T, n)
    H = local_hour_angle(theta, L, alpha)
    h = altitude(phi, delta, H)
    return (h - HORIZON_ALTITUDE) / (360.0 * cosd(delta) * cosd(phi) * sind(H))


# =============================================================================
# SOLVERS
# =============================================================================


def _day_parameters(dt: datetime):
    base = utc_midnight(dt)
    dt_seconds = delta_t(base)
    T = julian_century(base)
    theta0 = apparent_sidereal_time_greenwich(T)
    # Coordinates at 0h TD, not UT
    TD = T - dt_seconds / (SECONDS_PER_DAY * DAYS_PER_CENTURY)
    return base, dt_seconds, T, theta0, TD


def _finish(
    base: datetime, seconds: int, dt: datetime, config: EngineConfig
) -> datetime:
    event_time = base + timedelta(seconds=seconds)
    if config.round_to_nearest_minute:
        event_time = round_to_minute(event_time)
    return event_time.astimezone(dt.tzinfo)


def sun_transit(
    dt: datetime, L: float, config: EngineConfig = DEFAULT_CONFIG
) -> datetime:
    """
    Time of solar transit (local apparent noon).

    Args:
        dt: Aware datetime; its local calendar date is used
        L: Geographic longitude in degrees, east positive
        config: Engine options (minute rounding)

    Returns:
        datetime: Transit in the timezone of *dt*
    """
    require_aware(dt)
    base, dt_seconds, T, theta0, TD = _day_parameters(dt)
    alpha = sun_apparent_right_ascension(TD)
    m = normalize_m((alpha - L - theta0) / 360.0, utc_offset_minutes(dt))
    m += sun_transit_correction(T, theta0, dt_seconds, L, m)
    return _finish(base, math.floor(m * SECONDS_PER_DAY + 0.5), dt, config)


def sun_rise_set(
    dt: datetime,
    phi: float,
    L: float,
    event: SunEvent,
    config: EngineConfig = DEFAULT_CONFIG,
    threshold: float = CONVERGENCE_THRESHOLD,
    max_steps: int = MAX_REFINEMENT_STEPS,
) -> SunEventOutcome:
    """
    Sunrise or sunset, or the polar classification if there is none.

    Args:
        dt: Aware datetime; its local calendar date is used
        phi: Geographic latitude in degrees, north positive
        L: Geographic longitude in degrees, east positive
        event: SunEvent.SUNRISE or SunEvent.SUNSET
        config: Engine options
        threshold: Stop refining once a correction is at most this many days
        max_steps: Upper bound on refinement steps

    Returns:
        SunEventOutcome: EVENT with the time in the timezone of *dt*, or
        MIDNIGHT_SUN / POLAR_NIGHT (with a placeholder time when the
        placeholder policy is enabled)

    Raises:
        ValueError: If *dt* is naive or *event* is not SUNRISE/SUNSET
    """
    require_aware(dt)
    if event is SunEvent.SUNRISE:
        sign = -1
    elif event is SunEvent.SUNSET:
        sign = 1
    else:
        raise ValueError(f"Not a sunrise or sunset event: {event!r}")

    base, dt_seconds, T, theta0, TD = _day_parameters(dt)
    alpha = sun_apparent_right_ascension(TD)
    delta = sun_apparent_declination(TD)

    status, H0 = approx_local_hour_angle(phi, delta)
    if status is not SunEventStatus.EVENT:
        LOGGER.debug(
            json.dumps(
                {
                    "event": "polar_classification",
                    "kind": event.value,
                    "status": status.value,
                    "date": dt.date().isoformat(),
                    "latitude": phi,
                    "longitude": L,
                }
            )
        )
        return _polar_outcome(dt, event, status, config)

    m0 = normalize_m((alpha - L - theta0) / 360.0, utc_offset_minutes(dt))
    m = m0 + sign * H0 / 360.0

    delta_m = 1.0
    steps = 0
    while abs(delta_m) > threshold and steps < max_steps:
        delta_m = sun_rise_set_correction(T, theta0, dt_seconds, phi, L, m)
        m += delta_m
        steps += 1

    if abs(delta_m) > threshold:
        LOGGER.debug(
            json.dumps(
                {
                    "event": "refinement_not_converged",
                    "kind": event.value,
                    "date": dt.date().isoformat(),
                    "latitude": phi,
                    "longitude": L,
                    "last_correction": delta_m,
                    "steps": steps,
                }
            )
        )

    if m > 0:
        seconds = math.floor(m * SECONDS_PER_DAY + 0.5)
    else:
        seconds = -math.floor(abs(m) * SECONDS_PER_DAY + 0.5)
    return SunEventOutcome(SunEventStatus.EVENT, _finish(base, seconds, dt, config))


def _polar_outcome(
    dt: datetime, event: SunEvent, status: SunEventStatus, config: EngineConfig
) -> SunEventOutcome:
    if not config.return_placeholder_for_polar_events:
        return SunEventOutcome(status)
    if event is SunEvent.SUNRISE:
        hour = PLACEHOLDER_SUNRISE_HOUR
    else:
        hour = PLACEHOLDER_SUNSET_HOUR
    if is_dst(dt):
        hour += 1
    return SunEventOutcome(status, localize(dt.tzinfo, dt.year, dt.month, dt.day, hour))


def sun_event(
    dt: datetime,
    phi: float,
    L: float,
    event: Union[SunEvent, str],
    config: EngineConfig = DEFAULT_CONFIG,
) -> SunEventOutcome:
    """
    Compute any solar event for a date and location.

    Transit always exists, so it is wrapped as an EVENT outcome.

    Args:
        dt: Aware datetime; its local calendar date is used
        phi: Latitude in degrees (ignored for transit)
        L: Longitude in degrees, east positive
        event: SunEvent member or its value ("sunrise", "sunset", "transit")
        config: Engine options

    Raises:
        ValueError: For unknown event kinds or naive datetimes
    """
    event = SunEvent(event)
    if event is SunEvent.TRANSIT:
        return SunEventOutcome(SunEventStatus.EVENT, sun_transit(dt, L, config))
    return sun_rise_set(dt, phi, L, event, config)
