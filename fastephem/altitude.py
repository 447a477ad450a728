"""Observer location and the altitude signal sampled by the event solver."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .body import PositionFunction
from .timebase import FULL_CIRCLE, century_from_j2000, gmst_radians, normalize_radians, rad_from_deg
from .vectors import Cartesian3D, Matrix3D, Spherical

__all__ = [
    "GeographicLocation",
    "horizontal_position",
    "local_hour_angle",
    "sin_altitude",
    "sin_altitude_of",
]


@dataclass(frozen=True)
class GeographicLocation:
    """Geographic longitude (east positive) and latitude in degrees."""

    longitude: float
    latitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude must be within [-90, 90] degrees, got {self.latitude}")

    @property
    def sin_phi(self) -> float:
        return math.sin(rad_from_deg(self.latitude))

    @property
    def cos_phi(self) -> float:
        return math.cos(rad_from_deg(self.latitude))

    @property
    def lambda_(self) -> float:
        """Longitude in radians."""

        return rad_from_deg(self.longitude)


def local_hour_angle(right_ascension: float, date: float, location: GeographicLocation) -> float:
    """Hour angle in radians, not reduced to a single turn."""

    return gmst_radians(date) + location.lambda_ - right_ascension


def sin_altitude_of(equatorial: Spherical, date: float, location: GeographicLocation) -> float:
    tau = local_hour_angle(equatorial.phi, date, location)
    return location.sin_phi * math.sin(equatorial.theta) + location.cos_phi * math.cos(
        equatorial.theta
    ) * math.cos(tau)


def sin_altitude(position: PositionFunction, date: float, location: GeographicLocation) -> float:
    """Sine of the geocentric altitude of a body at a J2000 day value."""

    return sin_altitude_of(position(century_from_j2000(date)), date, location)


def horizontal_position(equatorial: Spherical, date: float, location: GeographicLocation) -> Spherical:
    """Equatorial position to azimuth (from north, through east) and altitude."""

    tau = local_hour_angle(equatorial.phi, date, location)
    # x towards the meridian, y towards the west, z towards the pole
    hour_angle_vector = Cartesian3D.from_spherical(Spherical(tau, equatorial.theta, equatorial.radius))
    zenith_tilt = Matrix3D.rotation_y(math.pi / 2.0 - rad_from_deg(location.latitude))
    local = Spherical.from_cartesian(zenith_tilt @ hour_angle_vector)
    azimuth = math.fmod(normalize_radians(local.phi + math.pi), FULL_CIRCLE)
    return Spherical(azimuth, local.theta, local.radius)
