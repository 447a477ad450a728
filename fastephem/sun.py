"""Low-order solar position series.

A quick calculation of the Sun's geocentric position. It is good to a
fraction of a degree, which is enough for rise/set and lunar phase work
but not for eclipses.
"""

from __future__ import annotations

import math

from .frames import transform_to_equatorial
from .timebase import FULL_CIRCLE, century_from_j2000, fractional
from .vectors import Cartesian3D, Spherical

__all__ = [
    "SUN_DISTANCE_KM",
    "ecliptic_longitude",
    "fast_direction",
    "fast_equatorial_direction",
    "fast_equatorial_position",
    "fast_equatorial_position_j2000",
    "fast_position",
    "fast_position_j2000",
    "mean_anomaly",
]

SUN_DISTANCE_KM = 149_598_000.0


def mean_anomaly(century: float) -> float:
    return FULL_CIRCLE * fractional(0.993133 + 99.997361 * century)


def ecliptic_longitude(century: float) -> float:
    """Ecliptic longitude of date in radians, in ``[0, 2π)``."""

    m = mean_anomaly(century)
    turns = 0.7859453 + (m / FULL_CIRCLE) + (
        (6893.0 * math.sin(m) + 72.0 * math.sin(2.0 * m) + 6191.2 * century) / 1296.0e3
    )
    return FULL_CIRCLE * fractional(turns)


def _ecliptic_vector(century: float, radius: float) -> Cartesian3D:
    return Cartesian3D.from_spherical(Spherical(ecliptic_longitude(century), 0.0, radius))


def fast_position(century: float) -> Cartesian3D:
    """Geocentric ecliptic position in kilometres at a mean distance."""

    return _ecliptic_vector(century, SUN_DISTANCE_KM)


def fast_direction(century: float) -> Cartesian3D:
    """Geocentric ecliptic unit vector."""

    return _ecliptic_vector(century, 1.0)


def fast_position_j2000(date: float) -> Cartesian3D:
    return fast_position(century_from_j2000(date))


def fast_equatorial_position(century: float) -> Spherical:
    vector = fast_position(century) @ transform_to_equatorial(century)
    return Spherical.from_cartesian(vector)


def fast_equatorial_direction(century: float) -> Spherical:
    vector = fast_direction(century) @ transform_to_equatorial(century)
    return Spherical.from_cartesian(vector)


def fast_equatorial_position_j2000(date: float) -> Spherical:
    return fast_equatorial_position(century_from_j2000(date))
