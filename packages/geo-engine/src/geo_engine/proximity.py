from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from geo_engine.distance import haversine_distance_km
from geo_engine.models import GeoPoint


class Locatable(Protocol):
    @property
    def id(self) -> int: ...

    @property
    def lat(self) -> float: ...

    @property
    def lng(self) -> float: ...


T = TypeVar("T", bound=Locatable)


@dataclass(frozen=True)
class RankedCandidate(Generic[T]):
    item: T
    distance_km: float


class GeoProximityRanker:
    """Filters candidates to a radius and orders them nearest first.

    The cut is strict: a candidate exactly ``radius_km`` away is excluded.
    Equal distances fall back to ascending ``id`` so results are stable.
    """

    def rank(
        self,
        center: GeoPoint,
        radius_km: float,
        candidates: Iterable[T],
        limit: int | None = None,
    ) -> list[RankedCandidate[T]]:
        if radius_km < 0:
            raise ValueError("radius_km must be >= 0")
        if limit is not None and limit <= 0:
            raise ValueError("limit must be > 0")

        ranked: list[RankedCandidate[T]] = []
        for candidate in candidates:
            distance = haversine_distance_km(center, GeoPoint(lat=candidate.lat, lng=candidate.lng))
            if distance < radius_km:
                ranked.append(RankedCandidate(item=candidate, distance_km=distance))

        ranked.sort(key=lambda entry: (entry.distance_km, entry.item.id))
        if limit is not None:
            return ranked[:limit]
        return ranked
