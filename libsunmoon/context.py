"""
Thread-safe context API for libsunmoon.

A SunMoonContext bundles an EngineConfig and a default timezone for moon
phase searches. Each context owns its settings, so threads that need
different options simply use different contexts; nothing is shared except
immutable configuration values.

Example:
    >>> ctx = SunMoonContext(timezone="Europe/Rome")
    >>> ctx.set_options(round_to_nearest_minute=True)
    >>> rise = ctx.sunrise(now, 41.9, 12.5)
    >>> full_moons = ctx.year_moon_phases(2024, MoonPhase.FULL_MOON)
"""

from datetime import datetime, tzinfo
from typing import List, Optional, Union

from .config import DEFAULT_CONFIG, EngineConfig
from .events import MoonPhase, SunEvent, SunEventOutcome, format_outcome
from .lunar import year_moon_phases
from .riseset import sun_rise_set, sun_transit
from .timezones import get_timezone


class SunMoonContext:
    """
    Per-caller settings for the sun event and moon phase solvers.

    Attributes:
        config: EngineConfig used by every call made through this context
        timezone: Default tzinfo for ``year_moon_phases``
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        timezone: Optional[Union[str, tzinfo]] = None,
    ):
        self.config = config if config is not None else DEFAULT_CONFIG
        self.timezone = get_timezone(timezone)

    # =========================================================================
    # SETTINGS
    # =========================================================================

    def set_options(self, **changes) -> None:
        """
        Replace this context's configuration with a modified copy.

        Raises:
            TypeError: For unknown option names or wrong value types
        """
        self.config = self.config.with_options(**changes)

    def get_options(self) -> EngineConfig:
        return self.config

    def set_timezone(self, timezone: Optional[Union[str, tzinfo]]) -> None:
        self.timezone = get_timezone(timezone)

    def get_timezone(self) -> tzinfo:
        return self.timezone

    # =========================================================================
    # CALCULATIONS
    # =========================================================================

    def sunrise(
        self, dt: datetime, latitude: float, longitude: float
    ) -> SunEventOutcome:
        return sun_rise_set(dt, latitude, longitude, SunEvent.SUNRISE, self.config)

    def sunset(
        self, dt: datetime, latitude: float, longitude: float
    ) -> SunEventOutcome:
        return sun_rise_set(dt, latitude, longitude, SunEvent.SUNSET, self.config)

    def solar_noon(self, dt: datetime, longitude: float) -> datetime:
        return sun_transit(dt, longitude, self.config)

    def year_moon_phases(
        self,
        year: int,
        phase: Union[int, MoonPhase],
        timezone: Optional[Union[str, tzinfo]] = None,
    ) -> List[datetime]:
        """
        Moons of the given phase in *year*.

        Uses the context timezone unless *timezone* is given.
        """
        tz = self.timezone if timezone is None else timezone
        return year_moon_phases(year, phase, tz, self.config)

    def format(
        self, outcome: SunEventOutcome, format_string: str = "%Y-%m-%d %H:%M:%S%z"
    ) -> str:
        """Format an outcome with this context's placeholder markers."""
        return format_outcome(outcome, format_string, self.config)
