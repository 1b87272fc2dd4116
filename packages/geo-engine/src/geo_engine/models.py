from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError("lat must be between -90 and 90")
        if not -180.0 <= self.lng <= 180.0:
            raise ValueError("lng must be between -180 and 180")


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lng: float | None = None
    max_lng: float | None = None

    @property
    def spans_all_longitudes(self) -> bool:
        return self.min_lng is None or self.max_lng is None
