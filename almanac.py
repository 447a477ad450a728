"""Print a table of daily rise/set times.

Usage:
    fastephem-almanac --lat 47.6062 --lon -122.3321 --start 2018-06-01 --days 7 --tz -7
    fastephem-almanac --lat 78.22 --lon 15.65 --body moon --threshold moonrise
"""

from __future__ import annotations

import argparse
import json
import logging
import os
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import List, Optional, Sequence

from joblib import Parallel, delayed

from fastephem.altitude import GeographicLocation
from fastephem.body import Body
from fastephem.dates import datetime_from_j2000, default_offset_hours, local_midnight, utc_offset
from fastephem.events import EventKind, RiseEvent, RiseThreshold, events

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayTask:
    day: date
    body: Body
    threshold: RiseThreshold
    location: GeographicLocation
    offset_hours: float


def _solve_day(task: DayTask) -> RiseEvent:
    start = local_midnight(task.day, task.offset_hours)
    return events(task.body, start, task.threshold, task.location)


def _format_time(value: Optional[float], offset_hours: float) -> str:
    if value is None:
        return "--:--"
    local = datetime_from_j2000(value).astimezone(utc_offset(offset_hours))
    return local.strftime("%H:%M")


def format_row(day: date, event: RiseEvent, offset_hours: float) -> str:
    if event.kind is EventKind.never_rises:
        return f"{day.isoformat()}  never rises"
    if event.kind is EventKind.never_sets:
        return f"{day.isoformat()}  never sets"
    rise = _format_time(event.rise, offset_hours)
    set_time = _format_time(event.set_time, offset_hours)
    return f"{day.isoformat()}  rise {rise}  set {set_time}"


def compute_table(tasks: Sequence[DayTask], n_jobs: int = 1) -> List[RiseEvent]:
    """Solve every day; days are independent so they can run in parallel."""

    if n_jobs == 1:
        return [_solve_day(task) for task in tasks]
    return Parallel(n_jobs=n_jobs)(delayed(_solve_day)(task) for task in tasks)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD") from exc


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def _job_count(value: str) -> int:
    number = int(value)
    if number == 0:
        raise argparse.ArgumentTypeError("must not be 0")
    return number


def _offset_hours(value: str) -> float:
    number = float(value)
    try:
        utc_offset(number)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Daily rise/set table for the Sun or Moon")
    parser.add_argument("--lat", type=float, required=True, help="latitude in degrees")
    parser.add_argument("--lon", type=float, required=True, help="longitude in degrees, east positive")
    parser.add_argument("--start", type=_parse_date, default=None, help="first local date YYYY-MM-DD (default: today, UTC)")
    parser.add_argument("--days", type=_positive_int, default=1)
    parser.add_argument("--tz", type=_offset_hours, default=None, help="UTC offset in hours (default: round(lon/15))")
    parser.add_argument("--body", choices=[b.value for b in Body], default=Body.sun.value)
    parser.add_argument(
        "--threshold",
        choices=[t.value for t in RiseThreshold],
        default=None,
        help="altitude threshold (default: sunrise for the Sun, moonrise for the Moon)",
    )
    parser.add_argument("--jobs", type=_job_count, default=1, help="parallel workers (joblib n_jobs)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(
        level=os.environ.get("FASTEPHEM_LOG_LEVEL", "INFO").upper(),
        format="%(message)s",
    )
    parser = build_parser()
    ns = parser.parse_args(argv)

    if not -90.0 <= ns.lat <= 90.0:
        parser.error("--lat must be within [-90, 90]")

    body = Body(ns.body)
    if ns.threshold is None:
        threshold = RiseThreshold.moonrise if body is Body.moon else RiseThreshold.sunrise
    else:
        threshold = RiseThreshold(ns.threshold)

    offset_hours = ns.tz if ns.tz is not None else default_offset_hours(ns.lon)
    start = ns.start if ns.start is not None else datetime.now(UTC).date()
    location = GeographicLocation(longitude=ns.lon, latitude=ns.lat)

    tasks = [
        DayTask(start + timedelta(days=i), body, threshold, location, offset_hours)
        for i in range(ns.days)
    ]
    LOGGER.info(
        json.dumps(
            {
                "event": "almanac",
                "body": body.value,
                "threshold": threshold.value,
                "start": start.isoformat(),
                "days": ns.days,
                "jobs": ns.jobs,
            }
        )
    )
    results = compute_table(tasks, n_jobs=ns.jobs)

    print(f"# {body.value} / {threshold.value}  lat={ns.lat} lon={ns.lon}  UTC{offset_hours:+g}")
    for task, event in zip(tasks, results):
        print(format_row(task.day, event, offset_hours))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
