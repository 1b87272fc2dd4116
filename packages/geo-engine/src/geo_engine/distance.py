from __future__ import annotations

import math

from geo_engine.models import BoundingBox, GeoPoint

EARTH_RADIUS_KM = 6371.0


def haversine_distance_km(start: GeoPoint, end: GeoPoint) -> float:
    start_lat = math.radians(start.lat)
    end_lat = math.radians(end.lat)
    delta_lat = math.radians(end.lat - start.lat)
    delta_lng = math.radians(end.lng - start.lng)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(start_lat) * math.cos(end_lat) * math.sin(delta_lng / 2) ** 2
    )
    # rounding can push a a hair above 1 for antipodal points
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(min(1.0, a)))


def bounding_box(center: GeoPoint, radius_km: float) -> BoundingBox:
    """Smallest lat/lng box containing every point within ``radius_km`` of ``center``.

    Longitude bounds are left open when the circle covers a pole or crosses the
    antimeridian, so the box can be used as a conservative prefilter.
    """
    if radius_km < 0:
        raise ValueError("radius_km must be >= 0")
    angular = radius_km / EARTH_RADIUS_KM
    lat = math.radians(center.lat)
    min_lat = lat - angular
    max_lat = lat + angular
    if min_lat <= -math.pi / 2 or max_lat >= math.pi / 2 or angular >= math.pi / 2:
        return BoundingBox(
            min_lat=max(-90.0, math.degrees(min_lat)),
            max_lat=min(90.0, math.degrees(max_lat)),
        )

    delta_lng = math.asin(min(1.0, math.sin(angular) / math.cos(lat)))
    min_lng = math.degrees(math.radians(center.lng) - delta_lng)
    max_lng = math.degrees(math.radians(center.lng) + delta_lng)
    if min_lng < -180.0 or max_lng > 180.0:
        return BoundingBox(min_lat=math.degrees(min_lat), max_lat=math.degrees(max_lat))
    return BoundingBox(
        min_lat=math.degrees(min_lat),
        max_lat=math.degrees(max_lat),
        min_lng=min_lng,
        max_lng=max_lng,
    )
