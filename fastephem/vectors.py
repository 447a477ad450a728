"""Cartesian and spherical coordinates plus 4x4 homogeneous transforms."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Sequence, Union

import numpy as np

from .timebase import deg_from_rad, normalize_radians, rad_from_deg

__all__ = ["Cartesian3D", "Matrix3D", "Spherical"]


@dataclass(frozen=True)
class Spherical:
    """An angle pair plus radius.

    ``phi`` is the longitude-like angle and ``theta`` the latitude-like
    angle, both in radians. The same value type carries right
    ascension/declination or azimuth/altitude; which one is meant is
    decided by the constructor used to build it.
    """

    phi: float
    theta: float
    radius: float

    def __post_init__(self) -> None:
        if self.radius < 0.0:
            raise ValueError(f"radius must be non-negative, got {self.radius}")

    @classmethod
    def equatorial(cls, right_ascension: float, declination: float, radius: float) -> "Spherical":
        return cls(rad_from_deg(right_ascension), rad_from_deg(declination), radius)

    @classmethod
    def horizontal(cls, azimuth: float, altitude: float, radius: float) -> "Spherical":
        return cls(rad_from_deg(azimuth), rad_from_deg(altitude), radius)

    @classmethod
    def from_cartesian(cls, coords: "Cartesian3D") -> "Spherical":
        # rho is the length of the projection onto the x-y plane
        rho_squared = coords.x * coords.x + coords.y * coords.y
        radius = math.sqrt(rho_squared + coords.z * coords.z)
        phi = math.atan2(coords.y, coords.x)
        theta = math.atan2(coords.z, math.sqrt(rho_squared))
        return cls(phi, theta, radius)

    @property
    def right_ascension(self) -> float:
        """Right ascension in degrees, in ``[0, 360)``."""

        return deg_from_rad(normalize_radians(self.phi))

    @property
    def declination(self) -> float:
        return deg_from_rad(self.theta)

    @property
    def azimuth(self) -> float:
        """Azimuth in degrees, in ``[0, 360)``."""

        return deg_from_rad(normalize_radians(self.phi))

    @property
    def altitude(self) -> float:
        return deg_from_rad(self.theta)


@dataclass(frozen=True)
class Cartesian3D:
    x: float
    y: float
    z: float

    @classmethod
    def from_spherical(cls, coords: Spherical) -> "Cartesian3D":
        radius = coords.radius
        cos_theta = math.cos(coords.theta)
        return cls(
            radius * (cos_theta * math.cos(coords.phi)),
            radius * (cos_theta * math.sin(coords.phi)),
            radius * math.sin(coords.theta),
        )

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __add__(self, other: "Cartesian3D") -> "Cartesian3D":
        return Cartesian3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Cartesian3D") -> "Cartesian3D":
        return Cartesian3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Cartesian3D":
        return self.inverted()

    def __matmul__(self, matrix: "Matrix3D") -> "Cartesian3D":
        if not isinstance(matrix, Matrix3D):
            return NotImplemented
        return matrix @ self

    def norm(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def inverted(self) -> "Cartesian3D":
        return Cartesian3D(-self.x, -self.y, -self.z)

    def to_spherical(self) -> Spherical:
        return Spherical.from_cartesian(self)


class Matrix3D:
    """4x4 homogeneous transform; only rotation and translation are used.

    Vectors are treated as affine points, so the translation column is
    always applied. ``matrix @ vector`` and ``vector @ matrix`` give the
    same result.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Union[Sequence[Sequence[float]], np.ndarray, None] = None) -> None:
        if data is None:
            matrix = np.identity(4, dtype=float)
        else:
            matrix = np.array(data, dtype=float)
            if matrix.shape != (4, 4):
                raise ValueError(f"Matrix3D requires 4x4 data, got shape {matrix.shape}")
        matrix.setflags(write=False)
        self._data = matrix

    @classmethod
    def identity(cls) -> "Matrix3D":
        return cls()

    @classmethod
    def translation(cls, x: float, y: float, z: float) -> "Matrix3D":
        data = np.identity(4, dtype=float)
        data[0, 3] = x
        data[1, 3] = y
        data[2, 3] = z
        return cls(data)

    @classmethod
    def translation_by(cls, vector: Cartesian3D) -> "Matrix3D":
        return cls.translation(vector.x, vector.y, vector.z)

    @classmethod
    def rotation_x(cls, angle: float) -> "Matrix3D":
        c, s = math.cos(angle), math.sin(angle)
        data = np.identity(4, dtype=float)
        data[1, 1] = c
        data[1, 2] = s
        data[2, 1] = -s
        data[2, 2] = c
        return cls(data)

    @classmethod
    def rotation_y(cls, angle: float) -> "Matrix3D":
        c, s = math.cos(angle), math.sin(angle)
        data = np.identity(4, dtype=float)
        data[0, 0] = c
        data[0, 2] = -s
        data[2, 0] = s
        data[2, 2] = c
        return cls(data)

    @classmethod
    def rotation_z(cls, angle: float) -> "Matrix3D":
        c, s = math.cos(angle), math.sin(angle)
        data = np.identity(4, dtype=float)
        data[0, 0] = c
        data[0, 1] = s
        data[1, 0] = -s
        data[1, 1] = c
        return cls(data)

    @property
    def data(self) -> np.ndarray:
        return self._data

    def __getitem__(self, index: int) -> np.ndarray:
        return self._data[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix3D):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    def __repr__(self) -> str:
        return f"Matrix3D({self._data.tolist()!r})"

    def transposed(self) -> "Matrix3D":
        return Matrix3D(self._data.T)

    def __matmul__(self, other: Union["Matrix3D", Cartesian3D]) -> Union["Matrix3D", Cartesian3D]:
        if isinstance(other, Matrix3D):
            return Matrix3D(self._data @ other._data)
        if isinstance(other, Cartesian3D):
            x, y, z, _ = self._data @ np.array([other.x, other.y, other.z, 1.0], dtype=float)
            return Cartesian3D(float(x), float(y), float(z))
        return NotImplemented
