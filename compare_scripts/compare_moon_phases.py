"""
Comparison script for moon phases: New Moon, quarters and Full Moon.
Validates libsunmoon against Skyfield's almanac (JPL DE421).
"""

import os
import sys

import pytz
from skyfield import almanac
from skyfield.api import load

import libsunmoon as sunmoon
from libsunmoon import MoonPhase

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
from comparison_utils import *


def skyfield_phases(ts, eph, year):
    """All principal phases in a UTC year as {phase: [datetime, ...]}."""
    t0 = ts.utc(year, 1, 1)
    t1 = ts.utc(year + 1, 1, 1)
    times, phases = almanac.find_discrete(t0, t1, almanac.moon_phases(eph))
    found = {phase: [] for phase in MoonPhase}
    for t, phase in zip(times, phases):
        found[MoonPhase(int(phase))].append(t.utc_datetime().astimezone(pytz.utc))
    return found


def compare_year(ts, eph, year, verbose=False):
    """Compare every phase of one year."""
    print(f"\n{'=' * 80}")
    print(f"MOON PHASES - {year}")
    print(f"{'=' * 80}")

    reference = skyfield_phases(ts, eph, year)
    results = []

    for phase in MoonPhase:
        ours = sunmoon.year_moon_phases(year, phase, "UTC")
        theirs = reference[phase]

        count_ok = len(ours) == len(theirs)
        print(
            f"\n{phase.name:-^80}\n"
            f"Count: Skyfield={len(theirs)} libsunmoon={len(ours)} "
            f"{format_status(count_ok)}"
        )
        if not count_ok:
            results.append((False, 0.0, True))
            continue

        for ref, py in zip(theirs, ours):
            result = EventResult(time_ref=ref, time_py=py)
            result.calculate_diffs()
            result.check_passed(Tolerances.MOON_PHASE)
            if verbose or not result.passed:
                print(
                    f"Skyfield={format_time(ref)} libsunmoon={format_time(py)} "
                    f"Diff={format_diff(result.diff_seconds)} s "
                    f"{format_status(result.passed)}"
                )
            results.append((result.passed, result.diff_seconds, False))

    return results


def main():
    options = parse_args(sys.argv[1:])
    print_header("MOON PHASES COMPARISON: libsunmoon vs Skyfield (DE421)")

    ts = load.timescale()
    eph = load("de421.bsp")
    stats = TestStatistics()

    for year in PHASE_YEARS:
        for passed, diff, error in compare_year(ts, eph, year, options["verbose"]):
            stats.add_result(passed, diff, error)

    stats.print_summary("MOON PHASES SUMMARY")

    if stats.pass_rate() >= 95:
        print("\n✓ Moon phases show excellent agreement!")
    elif stats.pass_rate() >= 80:
        print("\n~ Moon phases show good agreement with some differences.")
    else:
        print("\n✗ Moon phases show significant differences.")

    return 0 if stats.pass_rate() >= 80 else 1


if __name__ == "__main__":
    sys.exit(main())
