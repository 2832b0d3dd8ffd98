"""
Comparison script for sun events: sunrise, sunset and solar transit.
Validates libsunmoon against Skyfield's almanac (JPL DE421).
"""

import os
import sys
from datetime import datetime

import pytz
from skyfield import almanac
from skyfield.api import load, wgs84

import libsunmoon as sunmoon
from libsunmoon import SunEventStatus

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
from comparison_utils import *


def skyfield_rise_set(ts, eph, lat, lon, start, end):
    """Sunrise and sunset from Skyfield within [start, end), or None."""
    location = wgs84.latlon(lat, lon)
    f = almanac.sunrise_sunset(eph, location)
    times, is_rise = almanac.find_discrete(
        ts.from_datetime(start), ts.from_datetime(end), f
    )
    rise = setting = None
    for t, up in zip(times, is_rise):
        moment = t.utc_datetime().astimezone(start.tzinfo)
        if up and rise is None:
            rise = moment
        elif not up and setting is None:
            setting = moment
    return rise, setting


def skyfield_transit(ts, eph, lat, lon, start, end):
    """Upper meridian transit of the Sun from Skyfield within [start, end)."""
    location = wgs84.latlon(lat, lon)
    f = almanac.meridian_transits(eph, eph["sun"], location)
    times, events = almanac.find_discrete(
        ts.from_datetime(start), ts.from_datetime(end), f
    )
    for t, event in zip(times, events):
        if event == 1:
            return t.utc_datetime().astimezone(start.tzinfo)
    return None


def compare_day(ts, eph, name, year, month, day, lat, lon, tz_name):
    """Compare sun events for one location and local date."""
    start, end = local_day(year, month, day, tz_name)
    date_str = f"{year}-{month:02d}-{day:02d}"

    print(f"\n{'=' * 80}")
    print(f"SUN EVENTS - {name} ({date_str}, {tz_name})")
    print(f"{'=' * 80}")

    rise_ref, set_ref = skyfield_rise_set(ts, eph, lat, lon, start, end)
    noon_ref = skyfield_transit(ts, eph, lat, lon, start, end)

    reference_day = pytz.timezone(tz_name).localize(datetime(year, month, day, 12))
    rise_py = sunmoon.sunrise(reference_day, lat, lon)
    set_py = sunmoon.sunset(reference_day, lat, lon)
    noon_py = sunmoon.solar_noon(reference_day, lon)

    results = {}
    for label, ref, outcome, tolerance in (
        ("Sunrise", rise_ref, rise_py, Tolerances.SUN_RISE_SET),
        ("Sunset", set_ref, set_py, Tolerances.SUN_RISE_SET),
    ):
        result = EventResult(time_ref=ref, time_py=outcome.time)
        result.calculate_diffs()
        result.check_passed(tolerance)

        note = "" if outcome.status is SunEventStatus.EVENT else f" ({outcome.status.value})"
        print(f"\n{label:-^80}")
        print(f"Skyfield:  {format_time(ref)}")
        print(f"libsunmoon: {format_time(outcome.time)}{note}")
        print(f"Difference: {format_diff(result.diff_seconds)} s {format_status(result.passed)}")
        results[label.lower()] = (result.passed, result.diff_seconds)

    result = EventResult(time_ref=noon_ref, time_py=noon_py)
    result.calculate_diffs()
    result.check_passed(Tolerances.SUN_TRANSIT)
    print(f"\n{'Transit':-^80}")
    print(f"Skyfield:  {format_time(noon_ref)}")
    print(f"libsunmoon: {format_time(noon_py)}")
    print(f"Difference: {format_diff(result.diff_seconds)} s {format_status(result.passed)}")
    results["transit"] = (result.passed, result.diff_seconds)

    return results


def main():
    print_header("SUN EVENTS COMPARISON: libsunmoon vs Skyfield (DE421)")

    ts = load.timescale()
    eph = load("de421.bsp")
    stats = TestStatistics()

    for name, year, month, day, lat, lon, tz_name in ALL_SUBJECTS:
        day_results = compare_day(ts, eph, name, year, month, day, lat, lon, tz_name)
        for passed, diff in day_results.values():
            stats.add_result(passed, diff)

    stats.print_summary("SUN EVENTS SUMMARY")

    if stats.pass_rate() >= 95:
        print("\n✓ Sun events show excellent agreement!")
    elif stats.pass_rate() >= 80:
        print("\n~ Sun events show good agreement with some differences.")
    else:
        print("\n✗ Sun events show significant differences.")

    return 0 if stats.pass_rate() >= 80 else 1


if __name__ == "__main__":
    sys.exit(main())
