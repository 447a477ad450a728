"""Low-order lunar position series and illumination geometry."""

from __future__ import annotations

import math
from dataclasses import dataclass

from . import sun
from .frames import transform_to_equatorial
from .timebase import FULL_CIRCLE, century_from_j2000, fractional, rad_from_arcseconds
from .vectors import Cartesian3D, Spherical

__all__ = [
    "MOON_DISTANCE_KM",
    "Illumination",
    "argument_of_latitude",
    "fast_direction",
    "fast_equatorial_direction",
    "fast_equatorial_position",
    "fast_equatorial_position_j2000",
    "fast_illumination",
    "fast_illumination_j2000",
    "fast_position",
    "fast_position_j2000",
    "mean_anomaly",
    "mean_elongation",
    "mean_longitude",
]

MOON_DISTANCE_KM = 384_400.0


@dataclass(frozen=True)
class Illumination:
    """Illuminated fraction ``k`` and phase angle ``phi`` (radians).

    ``phi`` is always in ``[0, π]``, so waxing and waning cannot be told
    apart from it alone.
    """

    k: float
    phi: float

    @property
    def fraction(self) -> float:
        return self.k

    @property
    def phase_angle(self) -> float:
        return self.phi


def mean_longitude(century: float) -> float:
    return FULL_CIRCLE * fractional(0.606433 + 1336.855225 * century)


def mean_anomaly(century: float) -> float:
    return FULL_CIRCLE * fractional(0.374897 + 1325.552410 * century)


def mean_elongation(century: float) -> float:
    """Mean elongation of the Moon from the Sun (D)."""

    return FULL_CIRCLE * fractional(0.827361 + 1236.853086 * century)


def argument_of_latitude(century: float) -> float:
    """Mean distance of the Moon from its ascending node (F)."""

    return FULL_CIRCLE * fractional(0.259086 + 1342.227825 * century)


def _ecliptic_spherical(century: float, radius: float) -> Spherical:
    l0 = mean_longitude(century)
    m = mean_anomaly(century)
    m_sun = sun.mean_anomaly(century)
    d = mean_elongation(century)
    f = argument_of_latitude(century)

    # perturbations in longitude, arcseconds
    dl = (
        22640 * math.sin(m)
        - 4586 * math.sin(m - 2 * d)
        + 2370 * math.sin(2 * d)
        + 869 * math.sin(2 * m)
        - 668 * math.sin(m_sun)
        - 412 * math.sin(2 * f)
        - 212 * math.sin(2 * m - 2 * d)
        - 206 * math.sin(m + m_sun - 2 * d)
        + 192 * math.sin(m + 2 * d)
        - 165 * math.sin(m_sun - 2 * d)
        - 125 * math.sin(d)
        - 110 * math.sin(m + m_sun)
        + 148 * math.sin(m - m_sun)
        - 55 * math.sin(2 * f - 2 * d)
    )

    # F is summed with the arcsecond terms before the conversion
    s = rad_from_arcseconds(f + dl + 412 * math.sin(2 * f) + 541 * math.sin(m_sun))
    h = f - 2 * d
    n = (
        -526 * math.sin(h)
        + 44 * math.sin(m + h)
        - 31 * math.sin(-m + h)
        - 23 * math.sin(m_sun + h)
        + 11 * math.sin(-m_sun + h)
        - 25 * math.sin(-2 * m + f)
        + 21 * math.sin(-m + f)
    )

    longitude = FULL_CIRCLE * fractional(l0 / FULL_CIRCLE + dl / 1296.0e3)
    latitude = rad_from_arcseconds(18520.0 * math.sin(s) + n)
    return Spherical(longitude, latitude, radius)


def fast_position(century: float) -> Cartesian3D:
    """Geocentric ecliptic position in kilometres at the mean distance.

    Takes the larger perturbations into account; good enough for
    moonrise, moonset and the phase.
    """

    return Cartesian3D.from_spherical(_ecliptic_spherical(century, MOON_DISTANCE_KM))


def fast_direction(century: float) -> Cartesian3D:
    return Cartesian3D.from_spherical(_ecliptic_spherical(century, 1.0))


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


def fast_illumination(century: float) -> Illumination:
    """Phase angle and illuminated fraction from the Sun-Earth-Moon triangle.

    Undefined when the Moon coincides with the Earth or the Sun.
    """

    moon_pos = fast_position(century)
    earth_pos = sun.fast_position(century).inverted()
    sun_moon = earth_pos + moon_pos

    r = sun_moon.norm()
    re = earth_pos.norm()
    d = moon_pos.norm()

    cos_phi = (d * d + r * r - re * re) / (2.0 * d * r)
    phi = math.acos(cos_phi)
    k = 0.5 * (1.0 + cos_phi)
    return Illumination(k=k, phi=phi)


def fast_illumination_j2000(date: float) -> Illumination:
    return fast_illumination(century_from_j2000(date))
