"""
Unit tests for Delta T (TT - UT).
"""

from datetime import datetime, timezone

import pytest
import pytz

import libsunmoon as sunmoon
from libsunmoon.deltat import decimal_year


@pytest.mark.unit
class TestDeltaT:
    """Tests for the Espenak-Meeus polynomial expressions."""

    def test_deltat_j2000(self):
        """Delta T is roughly 64 seconds around J2000."""
        dt = datetime(2000, 1, 1, 12, tzinfo=pytz.utc)
        assert 63 < sunmoon.delta_t(dt) < 65

    def test_deltat_1988(self):
        """Meeus example 15.a uses Delta T = 56 s for 1988 March."""
        dt = datetime(1988, 3, 20, tzinfo=pytz.utc)
        assert 54 < sunmoon.delta_t(dt) < 58
        assert sunmoon.delta_t(dt) == pytest.approx(55.88, abs=0.05)

    def test_decimal_year_uses_middle_of_utc_month(self):
        tokyo = pytz.timezone("Asia/Tokyo")
        # Local Feb 1 is still January in UTC
        local = tokyo.localize(datetime(2000, 2, 1, 3, 0))
        assert decimal_year(local) == pytest.approx(2000 + 0.5 / 12)

    def test_deltat_ignores_day_within_month(self):
        first = datetime(2010, 6, 1, tzinfo=timezone.utc)
        last = datetime(2010, 6, 30, 23, 59, tzinfo=timezone.utc)
        assert sunmoon.delta_t(first) == sunmoon.delta_t(last)

    @pytest.mark.parametrize("year", range(1950, 2015, 5))
    def test_deltat_vs_skyfield(self, year, timescale, default_tolerances):
        """Agreement with Skyfield's builtin Delta T table."""
        dt_py = sunmoon.delta_t(datetime(year, 7, 15, tzinfo=pytz.utc))
        dt_sf = timescale.utc(year, 7, 15).delta_t
        assert abs(dt_py - dt_sf) < default_tolerances["delta_t"], (
            f"{year}: {dt_py:.2f}s vs {dt_sf:.2f}s"
        )

    def test_discontinuity_at_2005_preserved(self):
        """Each range has its own polynomial; values jump at the boundary."""
        below = sunmoon.delta_t_for_year(2004.9999)
        above = sunmoon.delta_t_for_year(2005.0)
        assert below == pytest.approx(64.72, abs=0.01)
        assert above == pytest.approx(64.67, abs=0.01)
        assert below - above > 0.02

    def test_ancient_and_future_ranges(self):
        """Parabolic extrapolation outside the tabulated era."""
        assert sunmoon.delta_t_for_year(-1000) > 20000
        assert sunmoon.delta_t_for_year(3000) > 4000
        assert sunmoon.delta_t_for_year(1820) == pytest.approx(12.0, abs=1.0)

    def test_lower_limit(self):
        """-1999 is the earliest supported year."""
        assert sunmoon.delta_t_for_year(-1999) > 0
        with pytest.raises(sunmoon.DeltaTUndefinedError):
            sunmoon.delta_t_for_year(-2000)

    def test_undefined_error_is_value_error(self):
        with pytest.raises(ValueError):
            sunmoon.delta_t_for_year(-2500.5)
