from dataclasses import dataclass

import pytest

from geo_engine.distance import haversine_distance_km
from geo_engine.models import GeoPoint
from geo_engine.proximity import GeoProximityRanker

CENTER = GeoPoint(lat=53.4808, lng=-2.2426)


@dataclass(frozen=True)
class Site:
    id: int
    lat: float
    lng: float


def test_rank_orders_by_distance_and_drops_far_sites() -> None:
    sites = [
        Site(id=1, lat=53.50, lng=-2.24),
        Site(id=2, lat=53.4810, lng=-2.2430),
        Site(id=3, lat=51.5074, lng=-0.1278),
    ]

    ranked = GeoProximityRanker().rank(CENTER, radius_km=5, candidates=sites)

    assert [entry.item.id for entry in ranked] == [2, 1]
    assert ranked[0].distance_km < ranked[1].distance_km


def test_rank_excludes_site_exactly_at_radius() -> None:
    site = Site(id=7, lat=53.52, lng=-2.30)
    radius = haversine_distance_km(CENTER, GeoPoint(lat=site.lat, lng=site.lng))

    assert GeoProximityRanker().rank(CENTER, radius_km=radius, candidates=[site]) == []


def test_site_at_center_is_included_for_any_positive_radius() -> None:
    site = Site(id=1, lat=CENTER.lat, lng=CENTER.lng)

    ranked = GeoProximityRanker().rank(CENTER, radius_km=0.001, candidates=[site])

    assert len(ranked) == 1
    assert ranked[0].distance_km == 0.0


def test_equal_distances_break_ties_by_id() -> None:
    sites = [Site(id=9, lat=53.49, lng=-2.2426), Site(id=4, lat=53.49, lng=-2.2426)]

    ranked = GeoProximityRanker().rank(CENTER, radius_km=5, candidates=sites)

    assert [entry.item.id for entry in ranked] == [4, 9]


def test_limit_caps_result_count() -> None:
    sites = [Site(id=i, lat=CENTER.lat + i * 0.001, lng=CENTER.lng) for i in range(1, 6)]

    ranked = GeoProximityRanker().rank(CENTER, radius_km=5, candidates=sites, limit=2)

    assert [entry.item.id for entry in ranked] == [1, 2]


def test_invalid_radius_or_limit_raises() -> None:
    ranker = GeoProximityRanker()
    with pytest.raises(ValueError):
        ranker.rank(CENTER, radius_km=-1, candidates=[])
    with pytest.raises(ValueError):
        ranker.rank(CENTER, radius_km=1, candidates=[], limit=0)
