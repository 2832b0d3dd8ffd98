"""
Constants for libsunmoon.

Epochs, unit conversions and the fixed parameters of the Meeus solvers.
"""

# =============================================================================
# EPOCHS AND TIME UNITS
# =============================================================================

J2000 = 2451545.0  # JD of 2000-01-01 12:00:00 TT
DAYS_PER_CENTURY = 36525.0
SECONDS_PER_DAY = 86400.0
MINUTES_PER_DAY = 1440.0

# First Julian Day number decomposed with the Gregorian rule (1582-10-15)
GREGORIAN_JD_CUTOVER = 2299161

# Calendar fields (year, month, day, hour) at/after which the Gregorian
# correction is applied when converting to a Julian Date
GREGORIAN_CUTOVER = (1582, 10, 15, 12.0)

# =============================================================================
# MOON PHASES
# =============================================================================

NEW_MOON = 0
FIRST_QUARTER = 1
FULL_MOON = 2
LAST_QUARTER = 3

LUNATIONS_PER_YEAR = 12.3685  # Meeus eq. 49.2
LUNATIONS_PER_CENTURY = 1236.85  # Meeus eq. 49.3
LUNATION_CANDIDATES = 15  # enough to cover every phase of any calendar year

# =============================================================================
# SUN EVENTS
# =============================================================================

# Standard altitude of the sun's centre at rise/set: refraction + semidiameter
HORIZON_ALTITUDE = -50.0 / 60.0

SIDEREAL_RATE = 360.985647  # degrees of sidereal time per solar day

CONVERGENCE_THRESHOLD = 0.0001  # fraction of a day, ~8.64 s
MAX_REFINEMENT_STEPS = 3

# Scale of Delta T in the interpolation factor n = m + DeltaT / scale
INTERPOLATION_DELTA_T_SCALE = 864000.0

PLACEHOLDER_SUNRISE_HOUR = 6
PLACEHOLDER_SUNSET_HOUR = 18

# =============================================================================
# FORMATTING
# =============================================================================

MIDNIGHT_SUN_MARKER = "‡"  # double dagger
POLAR_NIGHT_MARKER = "†"  # dagger
