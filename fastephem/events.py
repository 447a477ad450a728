"""Rise, set and twilight events by quadratic interpolation.

The altitude signal is sampled once an hour across the local day. Each
pair of hours is bracketed by three samples, a parabola is fitted through
them and its roots inside the bracket are the threshold crossings.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional

from .altitude import GeographicLocation, sin_altitude
from .body import Body, PositionFunction, resolve_body
from .timebase import julian_time_from_hours, rad_from_deg

__all__ = [
    "EventKind",
    "QuadraticRoots",
    "RiseEvent",
    "RiseThreshold",
    "events",
    "find_roots",
    "rise_set_events",
    "threshold_sine",
]

LOGGER = logging.getLogger(__name__)

# Below this the fitted parabola is treated as a straight line.
DEGENERATE_CURVATURE = 1e-12


class RiseThreshold(str, Enum):
    """Altitude at which a body is considered to rise or set."""

    sunrise = "sunrise"
    civil = "civil"
    nautical = "nautical"
    astronomical = "astronomical"
    moonrise = "moonrise"
    planet = "planet"

    @property
    def altitude(self) -> float:
        """Threshold altitude in degrees."""

        return _THRESHOLD_ALTITUDES[self]

    @property
    def sine(self) -> float:
        return math.sin(rad_from_deg(self.altitude))


# Refraction and apparent radius are folded into the horizon values.
_THRESHOLD_ALTITUDES = {
    RiseThreshold.sunrise: -50.0 / 60.0,
    RiseThreshold.civil: -6.0,
    RiseThreshold.nautical: -12.0,
    RiseThreshold.astronomical: -18.0,
    RiseThreshold.moonrise: 8.0 / 60.0,
    RiseThreshold.planet: -34.0 / 60.0,
}


def threshold_sine(threshold: "RiseThreshold | str") -> float:
    try:
        return RiseThreshold(threshold).sine
    except ValueError as exc:
        raise ValueError(f"Unsupported threshold selector: {threshold}") from exc


class QuadraticRoots(NamedTuple):
    """Extremum and in-bracket roots of a parabola through three samples.

    ``xe`` and ``ye`` are ``None`` when the samples lie on a line.
    """

    xe: Optional[float]
    ye: Optional[float]
    roots: List[float]


def find_roots(y_minus: float, y0: float, y_plus: float) -> QuadraticRoots:
    """Fit a parabola through samples at -1, 0, +1 and find roots in [-1, 1]."""

    a = 0.5 * (y_plus + y_minus) - y0
    b = 0.5 * (y_plus - y_minus)
    c = y0

    if abs(a) < DEGENERATE_CURVATURE:
        if b == 0.0:
            return QuadraticRoots(None, None, [])
        root = -c / b
        return QuadraticRoots(None, None, [root] if -1.0 <= root <= 1.0 else [])

    xe = -b / (2.0 * a)
    ye = (a * xe + b) * xe + c
    disc = b * b - 4.0 * a * c

    roots: List[float] = []
    if disc >= 0.0:
        dx = 0.5 * math.sqrt(disc) / abs(a)
        for root in (xe - dx, xe + dx):
            if -1.0 <= root <= 1.0:
                roots.append(root)
    return QuadraticRoots(xe, ye, roots)


class EventKind(str, Enum):
    never_rises = "never_rises"
    never_sets = "never_sets"
    rises = "rises"
    sets = "sets"
    rises_and_sets = "rises_and_sets"


@dataclass(frozen=True)
class RiseEvent:
    """Outcome of a rise/set search over one local day.

    ``rise`` and ``set_time`` are J2000 day values and are present exactly
    when ``kind`` says so.
    """

    kind: EventKind
    rise: Optional[float] = None
    set_time: Optional[float] = None

    @classmethod
    def from_times(cls, rise: Optional[float], set_time: Optional[float], above: bool) -> "RiseEvent":
        if rise is None and set_time is None:
            return cls(EventKind.never_sets if above else EventKind.never_rises)
        if rise is None:
            return cls(EventKind.sets, set_time=set_time)
        if set_time is None:
            return cls(EventKind.rises, rise=rise)
        return cls(EventKind.rises_and_sets, rise=rise, set_time=set_time)


def rise_set_events(
    position: PositionFunction,
    date: float,
    sin_h0: float,
    location: GeographicLocation,
) -> RiseEvent:
    """Search the local day starting at *date* for threshold crossings.

    *date* should be local midnight as a J2000 day value. The search
    samples hours 0 to 24 and keeps the first rise and the first set it
    meets.
    """

    def signal(hour: float) -> float:
        return sin_altitude(position, date + julian_time_from_hours(hour), location) - sin_h0

    rise_hour: Optional[float] = None
    set_hour: Optional[float] = None
    hour = 1.0

    y_minus = signal(0.0)
    above = y_minus > 0.0

    while hour < 25.0 and not (rise_hour is not None and set_hour is not None):
        y0 = signal(hour)
        y_plus = signal(hour + 1.0)

        _, ye, roots = find_roots(y_minus, y0, y_plus)
        if len(roots) == 1:
            if y_minus < 0.0:
                if rise_hour is None:
                    rise_hour = hour + roots[0]
            elif set_hour is None:
                set_hour = hour + roots[0]
        elif len(roots) == 2:
            if ye < 0.0:
                first_rise, first_set = roots[1], roots[0]
            else:
                first_rise, first_set = roots[0], roots[1]
            if rise_hour is None:
                rise_hour = hour + first_rise
            if set_hour is None:
                set_hour = hour + first_set

        y_minus = y_plus
        hour += 2.0

    rise = None if rise_hour is None else date + julian_time_from_hours(rise_hour)
    set_time = None if set_hour is None else date + julian_time_from_hours(set_hour)
    event = RiseEvent.from_times(rise, set_time, above)
    LOGGER.debug(
        json.dumps(
            {
                "event": "rise_set_search",
                "date": date,
                "sin_h0": sin_h0,
                "longitude": location.longitude,
                "latitude": location.latitude,
                "kind": event.kind.value,
                "rise_hour": rise_hour,
                "set_hour": set_hour,
            }
        )
    )
    return event


def events(
    body: "Body | str",
    date: float,
    threshold: "RiseThreshold | str",
    location: GeographicLocation,
) -> RiseEvent:
    """Rise/set classification for a named body and threshold."""

    return rise_set_events(
        resolve_body(body).equatorial_direction, date, threshold_sine(threshold), location
    )
