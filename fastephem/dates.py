"""Conversion between ``datetime`` values and J2000 day counts."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import erfa

from .timebase import J2000, gmst_from_j2000, j2000_from_julian_date, julian_day

__all__ = [
    "datetime_from_j2000",
    "datetime_from_julian_date",
    "default_offset_hours",
    "gmst_from_datetime",
    "j2000_from_datetime",
    "julian_date_from_datetime",
    "julian_day_from_datetime",
    "local_midnight",
    "utc_offset",
]

# UT1 keeps every day 86400 s long, so the mapping stays affine and
# reversible; the leap-second difference from UTC is below model accuracy.
_SCALE = "UT1"


def _two_part_julian_date(dt: datetime) -> tuple[float, float]:
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    dt_utc = dt.astimezone(UTC)
    jd1, jd2 = erfa.dtf2d(
        _SCALE,
        dt_utc.year,
        dt_utc.month,
        dt_utc.day,
        dt_utc.hour,
        dt_utc.minute,
        dt_utc.second + dt_utc.microsecond / 1_000_000,
    )
    return float(jd1), float(jd2)


def julian_date_from_datetime(dt: datetime) -> float:
    jd1, jd2 = _two_part_julian_date(dt)
    return jd1 + jd2


def julian_day_from_datetime(dt: datetime) -> float:
    return julian_day(julian_date_from_datetime(dt))


def j2000_from_datetime(dt: datetime) -> float:
    """J2000 day value of an aware datetime."""

    jd1, jd2 = _two_part_julian_date(dt)
    # jd1 carries the whole day, so subtracting J2000 from it first is exact
    return (jd1 - J2000) + jd2


def datetime_from_j2000(value: float) -> datetime:
    year, month, day, fraction = erfa.jd2cal(J2000, value)
    midnight = datetime(int(year), int(month), int(day), tzinfo=UTC)
    return midnight + timedelta(days=float(fraction))


def datetime_from_julian_date(value: float) -> datetime:
    return datetime_from_j2000(j2000_from_julian_date(value))


def gmst_from_datetime(dt: datetime) -> float:
    """Greenwich mean sidereal time in seconds."""

    return gmst_from_j2000(j2000_from_datetime(dt))


def utc_offset(offset_hours: float) -> timezone:
    seconds = int(round(offset_hours * 3600.0))
    if not -86400 < seconds < 86400:
        raise ValueError(f"offset_hours must be strictly within ±24 hours, got {offset_hours}")
    return timezone(timedelta(seconds=seconds))


def default_offset_hours(longitude: float) -> float:
    """Nominal zone offset of a longitude, clamped to the civil range [-12, 14]."""

    return max(-12.0, min(14.0, float(round(longitude / 15.0))))


def local_midnight(day: date, offset_hours: float) -> float:
    """J2000 day value of 00:00 on *day* at a fixed UTC offset."""

    midnight = datetime(day.year, day.month, day.day, tzinfo=utc_offset(offset_hours))
    return j2000_from_datetime(midnight)
