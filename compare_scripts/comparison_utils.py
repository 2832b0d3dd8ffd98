"""
Shared utilities for comparison scripts.

This module provides common classes, functions, and constants used across
all comparison scripts in the suite. The reference implementation is
Skyfield's almanac with the JPL DE421 kernel.
"""

from datetime import datetime, timedelta
from typing import List, Optional
from dataclasses import dataclass

import pytz

# ============================================================================
# TOLERANCE THRESHOLDS
# ============================================================================


class Tolerances:
    """Tolerance thresholds for different comparison types (seconds)."""

    # Sunrise/sunset: the -50' horizon and low-precision Sun
    SUN_RISE_SET = 120.0
    # Upper transit depends only on right ascension and sidereal time
    SUN_TRANSIT = 60.0

    # Moon phases: Meeus Chapter 49 is good to about a minute near J2000
    MOON_PHASE = 120.0


# ============================================================================
# TEST SUBJECTS
# ============================================================================

# Format: (Name, Year, Month, Day, Lat, Lon, Timezone)
STANDARD_SUBJECTS = [
    ("Greenwich", 2000, 1, 1, 51.4769, 0.0, "Europe/London"),
    ("Rome", 1980, 5, 20, 41.9028, 12.4964, "Europe/Rome"),
    ("New York", 2024, 11, 5, 40.7128, -74.0060, "America/New_York"),
    ("Sydney", 1950, 10, 15, -33.8688, 151.2093, "Australia/Sydney"),
    ("Boston", 1988, 3, 20, 42.3333, -71.0833, "America/New_York"),
]

HIGH_LATITUDE_SUBJECTS = [
    ("Tromso (Arctic)", 1990, 1, 15, 69.6492, 18.9553, "Europe/Oslo"),
    ("Tromso (Arctic)", 1990, 6, 21, 69.6492, 18.9553, "Europe/Oslo"),
    ("McMurdo (Antarctic)", 2005, 6, 21, -77.8463, 166.6681, "Antarctica/McMurdo"),
]

EQUATORIAL_SUBJECTS = [
    ("Equator", 1975, 3, 21, 0.0, 45.0, "Asia/Riyadh"),
]

ALL_SUBJECTS = STANDARD_SUBJECTS + HIGH_LATITUDE_SUBJECTS + EQUATORIAL_SUBJECTS

# Years for moon phase comparisons (DE421 covers 1900-2050)
PHASE_YEARS = [1901, 1950, 1977, 2000, 2024, 2044]

# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================


def local_day(year: int, month: int, day: int, tz_name: str):
    """Start and end of a calendar day in the given timezone."""
    tz = pytz.timezone(tz_name)
    start = tz.localize(datetime(year, month, day))
    end = tz.normalize(start + timedelta(days=1))
    return start, end


def seconds_diff(a: datetime, b: datetime) -> float:
    """Absolute difference between two aware datetimes in seconds."""
    return abs((a - b).total_seconds())


def format_time(value: Optional[datetime]) -> str:
    """Format an event time with consistent width."""
    if value is None:
        return f"{'-':>19}"
    return value.strftime("%Y-%m-%d %H:%M:%S")


def format_diff(value: float, decimals: int = 1, width: int = 8) -> str:
    """Format difference value with consistent width."""
    return f"{value:{width}.{decimals}f}"


def format_status(passed: bool) -> str:
    """Format pass/fail status."""
    return "✓" if passed else "✗"


# ============================================================================
# COMPARISON RESULT CLASSES
# ============================================================================


@dataclass
class EventResult:
    """Stores an event time comparison result."""

    time_ref: Optional[datetime] = None
    time_py: Optional[datetime] = None

    diff_seconds: float = 0.0

    passed: bool = False
    error_ref: Optional[str] = None
    error_py: Optional[str] = None

    def calculate_diffs(self):
        """Calculate the time difference."""
        if self.time_ref is not None and self.time_py is not None:
            self.diff_seconds = seconds_diff(self.time_ref, self.time_py)

    def check_passed(self, tolerance: float) -> bool:
        """Check if within tolerance; both missing counts as agreement."""
        if self.error_ref or self.error_py:
            self.passed = False
            return False
        if self.time_ref is None or self.time_py is None:
            self.passed = self.time_ref is None and self.time_py is None
            return self.passed
        self.passed = self.diff_seconds < tolerance
        return self.passed


# ============================================================================
# SUMMARY STATISTICS
# ============================================================================


class TestStatistics:
    """Tracks and reports test statistics."""

    def __init__(self):
        self.total = 0
        self.passed = 0
        self.failed = 0
        self.errors = 0
        self.max_diff = 0.0
        self.diff_sum = 0.0

    def add_result(self, passed: bool, diff: float = 0.0, error: bool = False):
        """Add a test result."""
        self.total += 1
        if error:
            self.errors += 1
        elif passed:
            self.passed += 1
        else:
            self.failed += 1

        if not error:
            self.max_diff = max(self.max_diff, diff)
            self.diff_sum += diff

    def avg_diff(self) -> float:
        """Calculate average difference (excluding errors)."""
        count = self.total - self.errors
        return self.diff_sum / count if count > 0 else 0.0

    def pass_rate(self) -> float:
        """Calculate pass rate (excluding errors)."""
        count = self.total - self.errors
        return (self.passed / count * 100) if count > 0 else 0.0

    def print_summary(self, title: str = "SUMMARY"):
        """Print formatted summary."""
        print()
        print("=" * 80)
        print(title)
        print("=" * 80)
        print(f"Total tests:   {self.total}")
        print(f"Passed:        {self.passed} ✓")
        print(f"Failed:        {self.failed} ✗")
        print(f"Errors:        {self.errors}")
        if self.total > self.errors:
            print(f"Pass rate:     {self.pass_rate():.1f}%")
            print(f"Max diff:      {self.max_diff:.1f} s")
            print(f"Avg diff:      {self.avg_diff():.1f} s")
        print("=" * 80)


# ============================================================================
# COMMAND LINE HELPERS
# ============================================================================


def parse_args(args: List[str]) -> dict:
    """Parse common command line arguments."""
    return {
        "verbose": "--verbose" in args or "-v" in args,
        "quiet": "--quiet" in args or "-q" in args,
        "help": "--help" in args or "-h" in args,
    }


def print_header(title: str):
    """Print formatted header."""
    print("=" * 80)
    print(title)
    print("=" * 80)
    print()
