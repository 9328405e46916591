import pytest

from foodiepair.recommendations.geo import EARTH_RADIUS_KM, haversine_km


def test_same_point_is_zero():
    assert haversine_km(40.4168, -3.7038, 40.4168, -3.7038) == 0.0


def test_one_degree_of_latitude():
    expected = EARTH_RADIUS_KM * 3.141592653589793 / 180
    assert haversine_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(expected)


def test_madrid_to_barcelona():
    assert haversine_km(40.4168, -3.7038, 41.3874, 2.1686) == pytest.approx(505, abs=5)


def test_distance_is_symmetric():
    there = haversine_km(51.5074, -0.1278, 48.8566, 2.3522)
    back = haversine_km(48.8566, 2.3522, 51.5074, -0.1278)
    assert there == pytest.approx(back)


def test_uses_spherical_earth_along_equator():
    # An ellipsoid would give ~111.32 km for a degree of longitude here
    expected = EARTH_RADIUS_KM * 3.141592653589793 / 180
    assert haversine_km(0.0, 0.0, 0.0, 1.0) == pytest.approx(expected, abs=1e-6)
