from .constants import *
from .config import DEFAULT_CONFIG, EngineConfig
from .context import SunMoonContext
from .deltat import DeltaTUndefinedError, delta_t, delta_t_for_year
from .events import (
    MoonPhase,
    SunEvent,
    SunEventOutcome,
    SunEventStatus,
    format_outcome,
)
from .lunar import true_phase, year_moon_phases as compute_moon_phases_for_year
from .riseset import sun_event, sun_rise_set, sun_transit
from .time_utils import (
    datetime_from_jd,
    julday,
    julian_century,
    julian_date,
    revjul,
)


# =============================================================================
# PUBLIC OPERATIONS
# =============================================================================


def compute_sunrise(dt, latitude, longitude, config=DEFAULT_CONFIG):
    """
    Sunrise on the local calendar date of *dt*.

    Args:
        dt: Timezone-aware datetime; the result is in the same timezone
        latitude: Degrees, north positive
        longitude: Degrees, east positive
        config: EngineConfig

    Returns:
        SunEventOutcome: EVENT, MIDNIGHT_SUN or POLAR_NIGHT
    """
    return sun_rise_set(dt, latitude, longitude, SunEvent.SUNRISE, config)


def compute_sunset(dt, latitude, longitude, config=DEFAULT_CONFIG):
    """Sunset on the local calendar date of *dt* (see ``compute_sunrise``)."""
    return sun_rise_set(dt, latitude, longitude, SunEvent.SUNSET, config)


def compute_solar_noon(dt, longitude, config=DEFAULT_CONFIG):
    """Solar transit on the local calendar date of *dt*, as a datetime."""
    return sun_transit(dt, longitude, config)


# =============================================================================
# SHORT ALIASES
# =============================================================================

sunrise = compute_sunrise
sunset = compute_sunset
solar_noon = compute_solar_noon
year_moon_phases = compute_moon_phases_for_year

__version__ = "0.1.0"

__all__ = [
    # Thread-safe Context API
    "SunMoonContext",
    # Configuration
    "EngineConfig",
    "DEFAULT_CONFIG",
    # Sun events
    "compute_sunrise",
    "sunrise",
    "compute_sunset",
    "sunset",
    "compute_solar_noon",
    "solar_noon",
    "sun_event",
    # Moon phases
    "compute_moon_phases_for_year",
    "year_moon_phases",
    "true_phase",
    # Result types
    "MoonPhase",
    "SunEvent",
    "SunEventStatus",
    "SunEventOutcome",
    "format_outcome",
    # Time functions
    "julday",
    "revjul",
    "julian_date",
    "datetime_from_jd",
    "julian_century",
    "delta_t",
    "delta_t_for_year",
    "DeltaTUndefinedError",
]
