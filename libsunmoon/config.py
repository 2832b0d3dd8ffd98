"""
Engine configuration for libsunmoon.

All options travel as an immutable ``EngineConfig`` value passed into every
public operation; the library keeps no module-level settings, so calls with
different configurations can run side by side in any number of threads.
"""

from dataclasses import dataclass, replace

from .constants import MIDNIGHT_SUN_MARKER, POLAR_NIGHT_MARKER

_OPTION_TYPES = {
    "round_to_nearest_minute": bool,
    "return_placeholder_for_polar_events": bool,
    "midnight_sun_marker": str,
    "polar_night_marker": str,
}


@dataclass(frozen=True)
class EngineConfig:
    """
    Options for the sun event and moon phase solvers.

    Attributes:
        round_to_nearest_minute: Snap every returned time to a whole minute
        return_placeholder_for_polar_events: On midnight sun / polar night,
            return 06:00 (sunrise) or 18:00 (sunset) local time, one hour
            later during DST, instead of a bare classification
        midnight_sun_marker: Appended by ``format_outcome`` to midnight sun
            placeholders
        polar_night_marker: Appended by ``format_outcome`` to polar night
            placeholders
    """

    round_to_nearest_minute: bool = False
    return_placeholder_for_polar_events: bool = False
    midnight_sun_marker: str = MIDNIGHT_SUN_MARKER
    polar_night_marker: str = POLAR_NIGHT_MARKER

    def __post_init__(self):
        for name, expected in _OPTION_TYPES.items():
            value = getattr(self, name)
            if not isinstance(value, expected):
                raise TypeError(
                    f"{name} must be {expected.__name__}, got {type(value).__name__}"
                )

    def with_options(self, **changes) -> "EngineConfig":
        """
        Return a copy with the given options changed.

        Raises:
            TypeError: For unknown option names or values of the wrong type
        """
        return replace(self, **changes)


DEFAULT_CONFIG = EngineConfig()
