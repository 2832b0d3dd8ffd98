import os
import sys
from datetime import datetime

import pytz
import swisseph as swe
from skyfield import almanac
from skyfield.api import load, wgs84

import libsunmoon as sunmoon
from libsunmoon import MoonPhase

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
from comparison_utils import ALL_SUBJECTS, PHASE_YEARS, local_day

# Seconds; the Espenak-Meeus polynomials drift from observed values after 2005
DELTA_T_TOLERANCE = 10.0
EVENT_TOLERANCE = 120.0


def compare_time(name, date_str, year, month, day):
    errors = 0

    jd_swe = swe.julday(year, month, day, 12.0)
    jd_py = sunmoon.julday(year, month, day, 12.0)
    diff = abs(jd_swe - jd_py)
    status = "✓" if diff < 1e-9 else "✗"
    if diff >= 1e-9:
        errors += 1
    print(
        f"[{name}] [{date_str}] [Time    ] Julian Day : SWE={jd_swe:14.6f} PY={jd_py:14.6f} Diff={diff:.2e} {status}"
    )

    dt_swe = swe.deltat(jd_swe) * 86400.0
    dt_py = sunmoon.delta_t(datetime(year, month, day, 12, tzinfo=pytz.utc))
    diff = abs(dt_swe - dt_py)
    status = "✓" if diff < DELTA_T_TOLERANCE else "✗"
    if diff >= DELTA_T_TOLERANCE:
        errors += 1
    print(
        f"[{name}] [{date_str}] [Time    ] Delta T    : SWE={dt_swe:8.2f}s PY={dt_py:8.2f}s Diff={diff:6.2f}s {status}"
    )
    return errors


def compare_sun(ts, eph, name, date_str, year, month, day, lat, lon, tz_name):
    errors = 0
    start, end = local_day(year, month, day, tz_name)
    location = wgs84.latlon(lat, lon)
    times, is_rise = almanac.find_discrete(
        ts.from_datetime(start), ts.from_datetime(end), almanac.sunrise_sunset(eph, location)
    )
    reference = {True: None, False: None}
    for t, up in zip(times, is_rise):
        if reference[bool(up)] is None:
            reference[bool(up)] = t.utc_datetime()

    noon_day = pytz.timezone(tz_name).localize(datetime(year, month, day, 12))
    for label, up, outcome in (
        ("Sunrise", True, sunmoon.sunrise(noon_day, lat, lon)),
        ("Sunset ", False, sunmoon.sunset(noon_day, lat, lon)),
    ):
        ref = reference[up]
        if ref is None or outcome.time is None:
            agree = ref is None and outcome.time is None
            status = "✓" if agree else "✗"
            if not agree:
                errors += 1
            ref_str = "none" if ref is None else f"{ref:%H:%M:%S}"
            print(
                f"[{name}] [{date_str}] [Sun     ] {label}    : SF={ref_str} PY={outcome.status.value} {status}"
            )
            continue
        diff = abs((ref - outcome.time).total_seconds())
        status = "✓" if diff < EVENT_TOLERANCE else "✗"
        if diff >= EVENT_TOLERANCE:
            errors += 1
        print(
            f"[{name}] [{date_str}] [Sun     ] {label}    : SF={ref:%H:%M:%S} PY={outcome.time.astimezone(pytz.utc):%H:%M:%S} Diff={diff:6.1f}s {status}"
        )
    return errors


def compare_phases(ts, eph, year):
    errors = 0
    times, phases = almanac.find_discrete(
        ts.utc(year, 1, 1), ts.utc(year + 1, 1, 1), almanac.moon_phases(eph)
    )
    for phase in MoonPhase:
        ref = [t.utc_datetime() for t, p in zip(times, phases) if int(p) == phase]
        ours = sunmoon.year_moon_phases(year, phase, "UTC")
        if len(ref) != len(ours):
            errors += 1
            print(f"[{year}] [Moon    ] {phase.name:<14}: COUNT SF={len(ref)} PY={len(ours)} ✗")
            continue
        max_diff = max(abs((a - b).total_seconds()) for a, b in zip(ref, ours))
        status = "✓" if max_diff < EVENT_TOLERANCE else "✗"
        if max_diff >= EVENT_TOLERANCE:
            errors += 1
        print(f"[{year}] [Moon    ] {phase.name:<14}: n={len(ours):2d} MaxDiff={max_diff:6.1f}s {status}")
    return errors


def main():
    print("================================================================")
    print("LIBSUNMOON vs SWISS EPHEMERIS / SKYFIELD - COMPREHENSIVE COMPARISON")
    print("================================================================")

    ts = load.timescale()
    eph = load("de421.bsp")
    total_errors = 0

    for name, year, month, day, lat, lon, tz_name in ALL_SUBJECTS:
        date_str = f"{year}-{month}-{day}"

        # 1. Time scales
        total_errors += compare_time(name, date_str, year, month, day)

        # 2. Sunrise / sunset
        total_errors += compare_sun(ts, eph, name, date_str, year, month, day, lat, lon, tz_name)

    # 3. Moon phases
    for year in PHASE_YEARS:
        total_errors += compare_phases(ts, eph, year)

    print("\n\n" + "=" * 60)
    print("FINAL SUMMARY")
    print("=" * 60)
    if total_errors == 0:
        print("ALL CHECKS PASSED! ✓")
    else:
        print(f"FOUND {total_errors} ISSUES.")


if __name__ == "__main__":
    main()
