from __future__ import annotations

import math

import numpy as np
import pytest

from fastephem.frames import mean_obliquity, transform_to_ecliptic, transform_to_equatorial
from fastephem.vectors import Cartesian3D, Matrix3D, Spherical

ROOT_800 = math.sqrt(20 * 20 * 2)


@pytest.mark.parametrize(
    "x, y, z, azimuth, altitude, radius",
    [
        (0.0, 20.0, 20.0, 90.0, 45.0, 28.284271247461902),
        (20.0, 20.0, ROOT_800, 45.0, 45.0, 40.0),
        (20.0, -20.0, ROOT_800, 315.0, 45.0, 40.0),
        (-20.0, 20.0, ROOT_800, 135.0, 45.0, 40.0),
        (-20.0, -20.0, ROOT_800, 225.0, 45.0, 40.0),
    ],
)
def test_polar_conversion(x, y, z, azimuth, altitude, radius) -> None:
    polar = Spherical.from_cartesian(Cartesian3D(x, y, z))
    assert polar.azimuth == pytest.approx(azimuth, abs=1e-12)
    assert polar.altitude == pytest.approx(altitude, abs=1e-12)
    assert polar.radius == pytest.approx(radius, abs=1e-12)


@pytest.mark.parametrize(
    "x, y, z, azimuth, altitude, radius",
    [
        (0.0, 20.0, 20.0, 90.0, 45.0, 28.284271247461902),
        (20.0, 20.0, ROOT_800, 45.0, 45.0, 40.0),
        (20.0, -20.0, ROOT_800, -45.0, 45.0, 40.0),
        (-20.0, 20.0, ROOT_800, 135.0, 45.0, 40.0),
        (-20.0, -20.0, ROOT_800, -135.0, 45.0, 40.0),
    ],
)
def test_cartesian_conversion(x, y, z, azimuth, altitude, radius) -> None:
    vector = Cartesian3D.from_spherical(Spherical.horizontal(azimuth, altitude, radius))
    assert vector.x == pytest.approx(x, abs=1e-12)
    assert vector.y == pytest.approx(y, abs=1e-12)
    assert vector.z == pytest.approx(z, abs=1e-12)


def test_round_trip_reproduces_vector() -> None:
    rng = np.random.default_rng(20180808)
    for x, y, z in rng.uniform(-1000.0, 1000.0, size=(200, 3)):
        vector = Cartesian3D(float(x), float(y), float(z))
        back = Cartesian3D.from_spherical(vector.to_spherical())
        assert back.x == pytest.approx(vector.x, rel=1e-12, abs=1e-9)
        assert back.y == pytest.approx(vector.y, rel=1e-12, abs=1e-9)
        assert back.z == pytest.approx(vector.z, rel=1e-12, abs=1e-9)


def test_pole_has_zero_azimuth() -> None:
    polar = Spherical.from_cartesian(Cartesian3D(0.0, 0.0, 5.0))
    assert polar.phi == 0.0
    assert polar.altitude == pytest.approx(90.0)
    assert polar.radius == 5.0


def test_equatorial_views() -> None:
    position = Spherical.equatorial(-30.0, 12.5, 1.0)
    assert position.right_ascension == pytest.approx(330.0)
    assert position.declination == pytest.approx(12.5)


def test_negative_radius_is_rejected() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        Spherical(0.0, 0.0, -1.0)


def test_vector_arithmetic() -> None:
    a = Cartesian3D(1.0, -2.0, 3.0)
    b = Cartesian3D(0.5, 0.5, -1.0)
    assert a + b == Cartesian3D(1.5, -1.5, 2.0)
    assert a - b == Cartesian3D(0.5, -2.5, 4.0)
    assert -a == a.inverted() == Cartesian3D(-1.0, 2.0, -3.0)
    assert Cartesian3D(3.0, 4.0, 12.0).norm() == 13.0
    assert list(a) == [1.0, -2.0, 3.0]
    assert a[2] == 3.0


def test_simple_translation() -> None:
    result = Matrix3D.translation(5, 10, 25) @ Cartesian3D(15, 5, 20)
    assert result == Cartesian3D(20.0, 15.0, 45.0)


def test_many_translations() -> None:
    rng = np.random.default_rng(7)
    for _ in range(100):
        v1 = Cartesian3D(*(float(c) for c in rng.uniform(-1000.0, 1000.0, 3)))
        v2 = Cartesian3D(*(float(c) for c in rng.uniform(-1000.0, 1000.0, 3)))
        result = v1 @ Matrix3D.translation_by(v2)
        assert result == v1 + v2


def _check_rotation(matrix: Matrix3D, fixed: str, expected: dict) -> None:
    vector = Cartesian3D(20, 35, 45)
    result = vector @ matrix
    # distance and the coordinate along the rotation axis are invariant
    assert getattr(result, fixed) == getattr(vector, fixed)
    assert result.norm() == pytest.approx(vector.norm(), rel=1e-14)
    for axis, value in expected.items():
        assert getattr(result, axis) == pytest.approx(value, abs=1e-12)


@pytest.mark.parametrize(
    "degrees, y, z",
    [
        (0.0, 35.0, 45.0),
        (45.0, 56.568542494923804, 7.071067811865479),
        (135.0, 7.071067811865479, -56.568542494923804),
        (180.0, -35.0, -45.0),
        (300.0, -21.47114317029974, 52.81088913245535),
    ],
)
def test_rotation_x(degrees, y, z) -> None:
    _check_rotation(Matrix3D.rotation_x(math.radians(degrees)), "x", {"y": y, "z": z})


@pytest.mark.parametrize(
    "degrees, x, z",
    [
        (0.0, 20.0, 45.0),
        (45.0, -17.677669529663685, 45.96194077712559),
        (135.0, -45.96194077712559, -17.677669529663685),
        (180.0, -20.0, -45.0),
        (300.0, 48.97114317029974, 5.179491924311229),
    ],
)
def test_rotation_y(degrees, x, z) -> None:
    _check_rotation(Matrix3D.rotation_y(math.radians(degrees)), "y", {"x": x, "z": z})


@pytest.mark.parametrize(
    "degrees, x, y",
    [
        (0.0, 20.0, 35.0),
        (45.0, 38.890872965260115, 10.606601717798215),
        (135.0, 10.606601717798215, -38.890872965260115),
        (180.0, -20.0, -35.0),
        (300.0, -20.31088913245535, 34.82050807568877),
    ],
)
def test_rotation_z(degrees, x, y) -> None:
    _check_rotation(Matrix3D.rotation_z(math.radians(degrees)), "z", {"x": x, "y": y})


def test_transposition() -> None:
    matrix = Matrix3D([[1, 2, 3, 4], [5, 6, 7, 8], [9, 10, 11, 12], [13, 14, 15, 16]])
    target = Matrix3D([[1, 5, 9, 13], [2, 6, 10, 14], [3, 7, 11, 15], [4, 8, 12, 16]])
    assert matrix.transposed() == target
    assert list(matrix.transposed()[0]) == [1.0, 5.0, 9.0, 13.0]


def test_transpose_of_rotation_is_its_inverse() -> None:
    rng = np.random.default_rng(3)
    for angle in rng.uniform(-2 * math.pi, 2 * math.pi, 10):
        for build in (Matrix3D.rotation_x, Matrix3D.rotation_y, Matrix3D.rotation_z):
            matrix = build(float(angle))
            vector = Cartesian3D(*(float(c) for c in rng.uniform(-100.0, 100.0, 3)))
            back = matrix @ (matrix.transposed() @ vector)
            assert back.x == pytest.approx(vector.x, abs=1e-11)
            assert back.y == pytest.approx(vector.y, abs=1e-11)
            assert back.z == pytest.approx(vector.z, abs=1e-11)
            composed = (matrix @ matrix.transposed()).data
            assert np.allclose(composed, np.identity(4), atol=1e-15)


def test_vector_times_matrix_matches_matrix_times_vector() -> None:
    matrix = Matrix3D.rotation_z(0.3) @ Matrix3D.translation(1.0, 2.0, 3.0)
    vector = Cartesian3D(-4.0, 0.5, 9.0)
    assert vector @ matrix == matrix @ vector


def test_matrix_requires_four_by_four() -> None:
    with pytest.raises(ValueError, match="4x4"):
        Matrix3D([[1, 0, 0], [0, 1, 0], [0, 0, 1]])


def test_mean_obliquity_at_j2000() -> None:
    assert mean_obliquity(0.0) == 23.43929111
    assert mean_obliquity(1.0) == pytest.approx(23.43929111 - 46.8150 / 3600.0, abs=1e-6)


def test_equatorial_transform_is_transpose_of_ecliptic() -> None:
    for century in (-1.2, 0.0, 0.18, 10.0):
        assert transform_to_equatorial(century) == transform_to_ecliptic(century).transposed()


def test_ecliptic_pole_maps_to_obliquity() -> None:
    pole = Cartesian3D(0.0, 0.0, 1.0) @ transform_to_equatorial(0.0)
    declination = Spherical.from_cartesian(pole).declination
    assert declination == pytest.approx(90.0 - 23.43929111, abs=1e-9)
