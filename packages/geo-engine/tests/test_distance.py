import math

import pytest

from geo_engine.distance import EARTH_RADIUS_KM, bounding_box, haversine_distance_km
from geo_engine.models import GeoPoint


def test_haversine_distance_is_zero_for_same_point() -> None:
    point = GeoPoint(lat=53.4808, lng=-2.2426)
    assert haversine_distance_km(point, point) == 0.0


def test_haversine_distance_matches_known_city_pair() -> None:
    london = GeoPoint(lat=51.5074, lng=-0.1278)
    paris = GeoPoint(lat=48.8566, lng=2.3522)
    distance = haversine_distance_km(london, paris)
    assert 340 < distance < 345


def test_antipodal_points_are_half_circumference_apart() -> None:
    distance = haversine_distance_km(GeoPoint(lat=0.0, lng=0.0), GeoPoint(lat=0.0, lng=180.0))
    assert distance == pytest.approx(math.pi * EARTH_RADIUS_KM)


def test_geo_point_rejects_out_of_range_coordinates() -> None:
    with pytest.raises(ValueError):
        GeoPoint(lat=91.0, lng=0.0)
    with pytest.raises(ValueError):
        GeoPoint(lat=0.0, lng=-180.5)


def test_bounding_box_contains_points_on_the_circle() -> None:
    center = GeoPoint(lat=53.4808, lng=-2.2426)
    box = bounding_box(center, radius_km=10)

    assert box.min_lat < center.lat < box.max_lat
    assert box.min_lng is not None and box.max_lng is not None
    north = GeoPoint(lat=center.lat + math.degrees(10 / EARTH_RADIUS_KM), lng=center.lng)
    assert north.lat <= box.max_lat + 1e-9


def test_bounding_box_opens_longitude_near_pole_and_antimeridian() -> None:
    assert bounding_box(GeoPoint(lat=89.99, lng=0.0), radius_km=50).spans_all_longitudes
    assert bounding_box(GeoPoint(lat=0.0, lng=179.99), radius_km=50).spans_all_longitudes
