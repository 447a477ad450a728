"""Ecliptic <-> equatorial rotations built from the mean obliquity."""

from __future__ import annotations

from .timebase import rad_from_deg
from .vectors import Matrix3D

__all__ = ["mean_obliquity", "transform_to_ecliptic", "transform_to_equatorial"]


def mean_obliquity(century: float) -> float:
    """Mean obliquity of the ecliptic in degrees."""

    return 23.43929111 - (46.8150 + (0.00059 - 0.001813 * century) * century) * century / 3600.0


def transform_to_ecliptic(century: float) -> Matrix3D:
    """Rotation taking equatorial vectors into the ecliptic frame."""

    return Matrix3D.rotation_x(rad_from_deg(mean_obliquity(century)))


def transform_to_equatorial(century: float) -> Matrix3D:
    # Always the transpose of the ecliptic rotation, never rebuilt from the angle.
    return transform_to_ecliptic(century).transposed()
