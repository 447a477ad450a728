"""Time base: J2000 day counts, Julian centuries and sidereal time."""

from __future__ import annotations

import math

__all__ = [
    "FULL_CIRCLE",
    "J2000",
    "JULIAN_CENTURY_DAYS",
    "MJD_EPOCH",
    "SECONDS_PER_DAY",
    "century_from_j2000",
    "century_from_julian_date",
    "century_from_modified_julian_date",
    "deg_from_rad",
    "fractional",
    "gmst_from_j2000",
    "gmst_from_modified_julian_date",
    "gmst_radians",
    "j2000_from_century",
    "j2000_from_julian_date",
    "julian_date_from_j2000",
    "julian_day",
    "julian_time_from_hours",
    "modified_julian_date_from_j2000",
    "modified_julian_date_from_julian_date",
    "normalize_radians",
    "rad_from_arcminutes",
    "rad_from_arcseconds",
    "rad_from_deg",
    "seconds_of_day",
]

# Julian Dates of the reference epochs.
J2000 = 2451545.0
MJD_EPOCH = 2400000.5

JULIAN_CENTURY_DAYS = 36525.0
SECONDS_PER_DAY = 86400.0
FULL_CIRCLE = 2.0 * math.pi


def fractional(value: float) -> float:
    """Return ``value - floor(value)``, always in ``[0, 1)``."""

    return value - math.floor(value)


def deg_from_rad(radians: float) -> float:
    return radians * 180.0 / math.pi


def rad_from_deg(degrees: float) -> float:
    return degrees * math.pi / 180.0


def rad_from_arcseconds(arcseconds: float) -> float:
    return rad_from_deg(arcseconds / 3600.0)


def rad_from_arcminutes(arcminutes: float) -> float:
    return rad_from_deg(arcminutes / 60.0)


def normalize_radians(radians: float) -> float:
    """Lift a negative angle into ``[0, 2π)`` by whole turns."""

    result = radians
    while result < 0.0:
        result += FULL_CIRCLE
    return result


def century_from_j2000(date: float) -> float:
    return date / JULIAN_CENTURY_DAYS


def century_from_julian_date(date: float) -> float:
    return century_from_j2000(date - J2000)


def century_from_modified_julian_date(date: float) -> float:
    return century_from_julian_date(date + MJD_EPOCH)


def j2000_from_century(century: float) -> float:
    return century * JULIAN_CENTURY_DAYS


def julian_date_from_j2000(date: float) -> float:
    return date + J2000


def j2000_from_julian_date(date: float) -> float:
    return date - J2000


def modified_julian_date_from_julian_date(date: float) -> float:
    return date - MJD_EPOCH


def modified_julian_date_from_j2000(date: float) -> float:
    return modified_julian_date_from_julian_date(date + J2000)


def julian_day(date: float) -> float:
    """Whole-day part of a Julian Date."""

    return math.floor(date)


def julian_time_from_hours(hours: float) -> float:
    """Convert a span of hours into a span of days."""

    return hours / 24.0


def seconds_of_day(date: float) -> float:
    """Seconds elapsed since the start of the day containing *date*.

    Days start at the integer boundary of whatever day count is passed in,
    so a Modified Julian Date yields seconds since 0h UT.
    """

    return (date - math.floor(date)) * SECONDS_PER_DAY


def gmst_from_modified_julian_date(date: float) -> float:
    """Greenwich Mean Sidereal Time in seconds for a Modified Julian Date.

    The result is not reduced to a single day; callers that want an angle
    should use :func:`gmst_radians`.
    """

    date0 = math.floor(date)
    century_date = century_from_modified_julian_date(date)
    century_day = century_from_modified_julian_date(date0)
    universal_time = seconds_of_day(date)
    return (
        24110.54841
        + (8640184.812866 * century_day)
        + (1.0027379093 * universal_time)
        + (0.093104 * century_date * century_date)
        - (0.0000062 * century_date * century_date * century_date)
    )


def gmst_from_j2000(date: float) -> float:
    return gmst_from_modified_julian_date(modified_julian_date_from_j2000(date))


def gmst_radians(date: float) -> float:
    """Greenwich sidereal rotation angle for a J2000 day value.

    The angle keeps the sign of the sidereal seconds, so dates before the
    polynomial turns positive give a value in ``(-2π, 0]``.
    """

    return FULL_CIRCLE * math.fmod(gmst_from_j2000(date) / SECONDS_PER_DAY, 1.0)
