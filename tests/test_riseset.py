"""
Tests for sunrise, sunset and solar transit.
"""

import json
import logging
from datetime import datetime, timedelta

import pytest
import pytz
import swisseph as swe

import libsunmoon as sunmoon
from libsunmoon import SunEvent, SunEventStatus
from libsunmoon.constants import CONVERGENCE_THRESHOLD, MAX_REFINEMENT_STEPS
from libsunmoon.riseset import (
    altitude,
    approx_local_hour_angle,
    local_hour_angle,
    normalize_m,
    sun_event,
    sun_rise_set,
)
from libsunmoon.time_utils import julian_date
from libsunmoon.timezones import round_to_minute


def _seconds_between(a, b):
    return abs((a - b).total_seconds())


def _minutes_between(a, b):
    return abs((a - b).total_seconds()) / 60.0


@pytest.mark.unit
class TestGeometry:
    """Tests for the hour angle helpers."""

    def test_normalize_m(self):
        assert normalize_m(0.5, 0) == 0.5
        assert normalize_m(-0.2, 0) == pytest.approx(0.8)
        assert normalize_m(1.2, 0) == pytest.approx(0.2)
        # 0.9 UTC is the next local day at UTC+3
        assert normalize_m(0.9, 180) == pytest.approx(-0.1)
        # 0.1 UTC is the previous local day at UTC-5
        assert normalize_m(0.1, -300) == pytest.approx(1.1)

    def test_local_hour_angle_range(self):
        assert local_hour_angle(10.0, 0.0, 0.0) == pytest.approx(10.0)
        assert local_hour_angle(0.0, 0.0, 10.0) == pytest.approx(-10.0)
        assert local_hour_angle(190.0, 0.0, 0.0) == pytest.approx(-170.0)
        assert local_hour_angle(100.0, 20.0, 0.0) == pytest.approx(120.0)

    def test_altitude(self):
        assert altitude(0.0, 0.0, 0.0) == pytest.approx(90.0)
        assert altitude(45.0, 0.0, 90.0) == pytest.approx(0.0, abs=1e-9)
        assert altitude(90.0, 23.0, 123.0) == pytest.approx(23.0)

    def test_approx_hour_angle_equinox(self):
        status, H0 = approx_local_hour_angle(0.0, 0.0)
        assert status is SunEventStatus.EVENT
        assert H0 == pytest.approx(90.833, abs=1e-3)

    def test_approx_hour_angle_polar(self):
        assert approx_local_hour_angle(80.0, 20.0) == (SunEventStatus.MIDNIGHT_SUN, None)
        assert approx_local_hour_angle(80.0, -20.0) == (SunEventStatus.POLAR_NIGHT, None)

    def test_refraction_prevents_polar_night_at_arctic_circle(self):
        """-50' of refraction and semidiameter keep the Sun rising at 66.5N."""
        status, H0 = approx_local_hour_angle(66.5, -23.44)
        assert status is SunEventStatus.EVENT
        assert H0 < 20


@pytest.mark.integration
class TestSunEvents:
    """Tests for complete rise/set/transit computations."""

    def test_boston_1988_03_20(self, boston, default_tolerances):
        lat, lon = boston
        dt = datetime(1988, 3, 20, tzinfo=pytz.utc)
        tolerance = default_tolerances["event_seconds"]

        rise = sunmoon.compute_sunrise(dt, lat, lon)
        assert rise.status is SunEventStatus.EVENT
        assert _seconds_between(rise.time, datetime(1988, 3, 20, 10, 47, 12, tzinfo=pytz.utc)) <= tolerance

        setting = sunmoon.compute_sunset(dt, lat, lon)
        assert setting.is_event
        assert _seconds_between(setting.time, datetime(1988, 3, 20, 22, 56, 56, tzinfo=pytz.utc)) <= tolerance

        noon = sunmoon.compute_solar_noon(dt, lon)
        assert _seconds_between(noon, datetime(1988, 3, 20, 16, 51, 42, tzinfo=pytz.utc)) <= tolerance

    def test_refinement_steps_are_parameters(self, boston):
        lat, lon = boston
        dt = datetime(1988, 3, 20, tzinfo=pytz.utc)
        refined = sunmoon.compute_sunrise(dt, lat, lon).time

        explicit = sun_rise_set(
            dt, lat, lon, SunEvent.SUNRISE,
            threshold=CONVERGENCE_THRESHOLD, max_steps=MAX_REFINEMENT_STEPS,
        )
        assert explicit.time == refined

        unrefined = sun_rise_set(dt, lat, lon, SunEvent.SUNRISE, max_steps=0)
        assert unrefined.is_event
        assert _minutes_between(unrefined.time, refined) < 10

        longer = sun_rise_set(dt, lat, lon, SunEvent.SUNRISE, max_steps=10)
        assert _seconds_between(longer.time, refined) <= 10

    def test_non_convergence_is_logged(self, boston, caplog):
        lat, lon = boston
        dt = datetime(1988, 3, 20, tzinfo=pytz.utc)
        with caplog.at_level(logging.DEBUG, logger="libsunmoon.riseset"):
            outcome = sun_rise_set(
                dt, lat, lon, SunEvent.SUNSET, threshold=0.0, max_steps=1
            )
        assert outcome.is_event
        events = [
            json.loads(r.getMessage())["event"]
            for r in caplog.records
            if r.name == "libsunmoon.riseset"
        ]
        assert "refinement_not_converged" in events

    def test_greenwich_transit_2000(self):
        """Equation of time shifts noon to about 12:03 UTC on New Year 2000."""
        noon = sunmoon.solar_noon(datetime(2000, 1, 1, tzinfo=pytz.utc), 0.0)
        assert _minutes_between(noon, datetime(2000, 1, 1, 12, 3, 9, tzinfo=pytz.utc)) < 1

    @pytest.mark.parametrize("event", [SunEvent.SUNRISE, SunEvent.SUNSET])
    def test_vs_swisseph(self, boston, event):
        """Agreement with swisseph's rise/set search (Moshier ephemeris)."""
        lat, lon = boston
        dt = datetime(2015, 6, 10, tzinfo=pytz.utc)
        # Boston sunset falls after 0h UTC, so search for it from noon
        if event is SunEvent.SUNRISE:
            rsmi, start = swe.CALC_RISE, julian_date(dt)
        else:
            rsmi, start = swe.CALC_SET, julian_date(dt) + 0.5
        res, tret = swe.rise_trans(
            start, swe.SUN, rsmi, (lon, lat, 0.0), 0.0, 0.0, swe.FLG_MOSEPH
        )
        assert res == 0
        expected = sunmoon.datetime_from_jd(tret[0])

        outcome = sun_event(dt, lat, lon, event)
        assert _minutes_between(outcome.time, expected) < 2

    def test_local_ordering(self, test_locations, aware):
        for name, lat, lon, tz_name in test_locations:
            for month in (1, 3, 6, 9, 12):
                dt = aware(tz_name, 2024, month, 15, 12)
                rise = sunmoon.sunrise(dt, lat, lon)
                noon = sunmoon.solar_noon(dt, lon)
                setting = sunmoon.sunset(dt, lat, lon)
                assert rise.is_event and setting.is_event, name
                assert rise.time < noon < setting.time, f"{name} {month}"
                for event_time in (rise.time, noon, setting.time):
                    assert event_time.date() == dt.date(), f"{name} {month}"

    def test_results_in_input_timezone(self, aware):
        dt = aware("Europe/Rome", 2024, 7, 1, 9, 30)
        rise = sunmoon.sunrise(dt, 41.9028, 12.4964)
        assert rise.time.tzinfo.zone == "Europe/Rome"
        assert rise.time.utcoffset() == timedelta(hours=2)
        assert 5 <= rise.time.hour <= 6

    def test_time_of_day_does_not_matter(self, aware):
        morning = aware("America/New_York", 2024, 9, 1, 0, 5)
        evening = aware("America/New_York", 2024, 9, 1, 23, 55)
        assert (
            sunmoon.sunrise(morning, 40.7128, -74.0060).time
            == sunmoon.sunrise(evening, 40.7128, -74.0060).time
        )

    def test_rounding_is_idempotent(self, aware, rounding_config):
        dt = aware("Asia/Tokyo", 2024, 5, 5, 12)
        rise = sunmoon.sunrise(dt, 35.6762, 139.6503, config=rounding_config)
        assert rise.time.second == 0 and rise.time.microsecond == 0
        assert round_to_minute(rise.time) == rise.time

        exact = sunmoon.sunrise(dt, 35.6762, 139.6503)
        assert abs((rise.time - exact.time).total_seconds()) <= 30

    def test_sun_event_transit(self, boston):
        lat, lon = boston
        dt = datetime(1988, 3, 20, tzinfo=pytz.utc)
        outcome = sun_event(dt, lat, lon, "transit")
        assert outcome.is_event
        assert outcome.time == sunmoon.solar_noon(dt, lon)

    def test_unknown_event(self, boston):
        lat, lon = boston
        dt = datetime(1988, 3, 20, tzinfo=pytz.utc)
        with pytest.raises(ValueError):
            sun_event(dt, lat, lon, "dusk")
        with pytest.raises(ValueError):
            sunmoon.sun_rise_set(dt, lat, lon, SunEvent.TRANSIT)

    def test_naive_datetime_rejected(self, boston):
        lat, lon = boston
        with pytest.raises(ValueError):
            sunmoon.sunrise(datetime(1988, 3, 20), lat, lon)
        with pytest.raises(ValueError):
            sunmoon.solar_noon(datetime(1988, 3, 20), lon)


@pytest.mark.integration
class TestPolarEvents:
    """Midnight sun and polar night classifications."""

    def test_midnight_sun(self, aware):
        dt = aware("Europe/Stockholm", 2024, 6, 21, 12)
        rise = sunmoon.sunrise(dt, 66.5, 20.0)
        setting = sunmoon.sunset(dt, 66.5, 20.0)
        assert rise.status is SunEventStatus.MIDNIGHT_SUN
        assert rise.time is None
        assert setting.status is SunEventStatus.MIDNIGHT_SUN
        assert not rise.is_placeholder

    def test_midnight_sun_placeholder_during_dst(self, aware, placeholder_config):
        dt = aware("Europe/Stockholm", 2024, 6, 21, 12)
        rise = sunmoon.sunrise(dt, 66.5, 20.0, config=placeholder_config)
        setting = sunmoon.sunset(dt, 66.5, 20.0, config=placeholder_config)
        assert rise.is_placeholder and setting.is_placeholder
        assert rise.status is SunEventStatus.MIDNIGHT_SUN
        assert (rise.time.hour, rise.time.minute) == (7, 0)
        assert (setting.time.hour, setting.time.minute) == (19, 0)
        assert rise.time.date() == dt.date()

    def test_polar_night(self, tromso):
        lat, lon, tz = tromso
        dt = tz.localize(datetime(2024, 12, 21, 12))
        assert sunmoon.sunrise(dt, lat, lon).status is SunEventStatus.POLAR_NIGHT
        assert sunmoon.sunset(dt, lat, lon).status is SunEventStatus.POLAR_NIGHT
        # Transit always exists
        assert sunmoon.solar_noon(dt, lon).date() == dt.date()

    def test_polar_night_placeholder_standard_time(self, tromso, placeholder_config):
        lat, lon, tz = tromso
        dt = tz.localize(datetime(2024, 12, 21, 12))
        rise = sunmoon.sunrise(dt, lat, lon, config=placeholder_config)
        setting = sunmoon.sunset(dt, lat, lon, config=placeholder_config)
        assert rise.status is SunEventStatus.POLAR_NIGHT
        assert rise.time == tz.localize(datetime(2024, 12, 21, 6))
        assert setting.time == tz.localize(datetime(2024, 12, 21, 18))

    def test_midnight_sun_in_tromso(self, tromso):
        lat, lon, tz = tromso
        dt = tz.localize(datetime(2024, 6, 21, 12))
        assert sunmoon.sunrise(dt, lat, lon).status is SunEventStatus.MIDNIGHT_SUN

    def test_southern_polar_night(self):
        """McMurdo in June: no sunrise."""
        dt = pytz.timezone("Antarctica/McMurdo").localize(datetime(2024, 6, 21, 12))
        outcome = sunmoon.sunrise(dt, -77.8419, 166.6863)
        assert outcome.status is SunEventStatus.POLAR_NIGHT
