"""
Event kinds and result types for libsunmoon.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum
from typing import Optional

from .config import DEFAULT_CONFIG, EngineConfig
from .constants import FIRST_QUARTER, FULL_MOON, LAST_QUARTER, NEW_MOON


class MoonPhase(IntEnum):
    """Principal phases of the Moon, numbered as in Meeus Chapter 49."""

    NEW_MOON = NEW_MOON
    FIRST_QUARTER = FIRST_QUARTER
    FULL_MOON = FULL_MOON
    LAST_QUARTER = LAST_QUARTER


class SunEvent(Enum):
    """Solar events computed by the rise/set solver."""

    SUNRISE = "sunrise"
    SUNSET = "sunset"
    TRANSIT = "transit"


class SunEventStatus(Enum):
    """Classification of a sunrise/sunset computation."""

    EVENT = "event"
    MIDNIGHT_SUN = "MS"
    POLAR_NIGHT = "PN"


@dataclass(frozen=True)
class SunEventOutcome:
    """
    Result of a sunrise or sunset computation.

    Attributes:
        status: EVENT, or MIDNIGHT_SUN / POLAR_NIGHT if the sun does not
            cross the horizon on that date
        time: The event instant; for polar outcomes either None or, when
            the placeholder policy is enabled, a fixed local placeholder
    """

    status: SunEventStatus
    time: Optional[datetime] = None

    @property
    def is_event(self) -> bool:
        return self.status is SunEventStatus.EVENT

    @property
    def is_placeholder(self) -> bool:
        return not self.is_event and self.time is not None


def format_outcome(
    outcome: SunEventOutcome,
    format_string: str = "%Y-%m-%d %H:%M:%S%z",
    config: EngineConfig = DEFAULT_CONFIG,
) -> str:
    """
    Format a sun event outcome for display.

    Placeholder times get the configured midnight sun or polar night marker
    appended; bare classifications format as "MS" or "PN".
    """
    if outcome.time is None:
        return outcome.status.value
    text = outcome.time.strftime(format_string)
    if outcome.status is SunEventStatus.MIDNIGHT_SUN:
        text += config.midnight_sun_marker
    elif outcome.status is SunEventStatus.POLAR_NIGHT:
        text += config.polar_night_marker
    return text
