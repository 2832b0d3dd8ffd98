"""
pytest configuration and shared fixtures for libsunmoon tests.
"""

from datetime import datetime

import pytest
import pytz
from skyfield.api import load

from libsunmoon import DEFAULT_CONFIG, EngineConfig


# ============================================================================
# TEST DATA FIXTURES
# ============================================================================


@pytest.fixture
def standard_jd():
    """Standard Julian Day for testing (J2000.0)."""
    return 2451545.0  # 2000-01-01 12:00:00 TT


@pytest.fixture
def test_dates():
    """Collection of Gregorian test dates spanning different eras."""
    return [
        (2000, 1, 1, 12.0, "J2000"),
        (1980, 5, 20, 0.0, "Past"),
        (2024, 11, 5, 18.0, "Recent"),
        (1950, 10, 15, 6.0, "Mid-century"),
        (1700, 3, 1, 6.5, "Early Gregorian"),
    ]


@pytest.fixture
def test_locations():
    """Non-polar locations with their timezones: (name, lat, lon, tz)."""
    return [
        ("Rome", 41.9028, 12.4964, "Europe/Rome"),
        ("London", 51.5074, -0.1278, "Europe/London"),
        ("New York", 40.7128, -74.0060, "America/New_York"),
        ("Sydney", -33.8688, 151.2093, "Australia/Sydney"),
        ("Tokyo", 35.6762, 139.6503, "Asia/Tokyo"),
        ("Equator", 0.0, 0.0, "UTC"),
    ]


@pytest.fixture
def boston():
    """Boston, the rise/set location of Meeus example 15.a."""
    return 42.3333, -71.0833


@pytest.fixture
def tromso():
    """Tromso: polar night in December, midnight sun in June."""
    return 69.6492, 18.9553, pytz.timezone("Europe/Oslo")


@pytest.fixture
def placeholder_config():
    """Config returning placeholder times for polar events."""
    return EngineConfig(return_placeholder_for_polar_events=True)


@pytest.fixture
def rounding_config():
    """Config rounding every result to the nearest minute."""
    return DEFAULT_CONFIG.with_options(round_to_nearest_minute=True)


@pytest.fixture
def aware():
    """Build an aware datetime from fields and an IANA timezone name."""

    def _aware(tz_name, *args):
        return pytz.timezone(tz_name).localize(datetime(*args))

    return _aware


@pytest.fixture(scope="session")
def timescale():
    """Skyfield timescale using its builtin Delta T and leap second tables."""
    return load.timescale()


# ============================================================================
# TOLERANCE FIXTURES
# ============================================================================


@pytest.fixture
def default_tolerances():
    """Default tolerance values for comparisons."""
    return {
        "julian_day": 1e-9,  # days
        "delta_t": 2.0,  # seconds, vs Skyfield for 1900-2010
        "event_seconds": 5.0,  # seconds, against values pinned from worked examples
        "event_minutes": 1.0,  # minutes, against published minute-rounded times
        "angle": 0.002,  # degrees
    }


# ============================================================================
# MARKERS
# ============================================================================


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")
