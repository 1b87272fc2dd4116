from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import StrEnum

from devkit.timezone import ensure_utc
from geo_engine.models import GeoPoint

MAX_COMMENT_LENGTH = 100


class FacilityField(StrEnum):
    ID = "id"
    TITLE = "title"
    CATEGORY_ID = "category_id"
    DESCRIPTION = "description"
    TOWN = "town"
    COUNTY = "county"
    POSTCODE = "postcode"
    LAT = "lat"
    LNG = "lng"


@dataclass(frozen=True)
class FacilityRecord:
    id: int
    title: str
    lat: float
    lng: float
    category_id: int | None = None
    description: str = ""
    house_number: str | None = None
    street_name: str | None = None
    town: str | None = None
    county: str | None = None
    postcode: str | None = None
    contributor_id: int | None = None

    def __post_init__(self) -> None:
        GeoPoint(lat=self.lat, lng=self.lng)

    @property
    def location(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lng=self.lng)

    @property
    def full_address(self) -> str:
        parts = (self.house_number, self.street_name, self.town, self.county, self.postcode)
        return ", ".join(part.strip() for part in parts if part and part.strip())

    def value_of(self, field: FacilityField) -> object:
        return getattr(self, field.value)

    def to_dict(self) -> dict[str, object]:
        payload = asdict(self)
        payload["full_address"] = self.full_address
        return payload


@dataclass(frozen=True)
class Category:
    id: int
    name: str


@dataclass(frozen=True)
class StatusEntry:
    id: int
    facility_id: int
    comment: str
    author_id: int | None
    timestamp: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "comment", self.comment.strip()[:MAX_COMMENT_LENGTH])
        object.__setattr__(self, "timestamp", ensure_utc(self.timestamp))

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "facility_id": self.facility_id,
            "comment": self.comment,
            "author_id": self.author_id,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class EnrichedFacility:
    """A facility row as served to clients, with its category and current status."""

    record: FacilityRecord
    category_name: str | None = None
    status: StatusEntry | None = None

    @property
    def id(self) -> int:
        return self.record.id

    @property
    def lat(self) -> float:
        return self.record.lat

    @property
    def lng(self) -> float:
        return self.record.lng

    def to_dict(self) -> dict[str, object]:
        payload = self.record.to_dict()
        if self.category_name is not None:
            payload["category_name"] = self.category_name
        if self.status is not None:
            payload["status_comment"] = self.status.comment
            payload["status_author_id"] = self.status.author_id
            payload["status_timestamp"] = self.status.timestamp.isoformat()
        return payload
