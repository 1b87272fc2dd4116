"""Geo engine core package."""

from geo_engine.distance import (
    EARTH_RADIUS_KM,
    bounding_box,
    haversine_distance_km,
)
from geo_engine.models import BoundingBox, GeoPoint
from geo_engine.proximity import GeoProximityRanker, Locatable, RankedCandidate

__all__ = [
    "EARTH_RADIUS_KM",
    "BoundingBox",
    "GeoPoint",
    "GeoProximityRanker",
    "Locatable",
    "RankedCandidate",
    "bounding_box",
    "haversine_distance_km",
]
