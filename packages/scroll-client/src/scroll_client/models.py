from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ListedFacility:
    """One facility row as received from the directory API."""

    id: int
    title: str
    lat: float
    lng: float
    full_address: str = ""
    category_name: str | None = None
    status_comment: str | None = None
    payload: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> ListedFacility:
        return cls(
            id=int(payload["id"]),
            title=str(payload["title"]),
            lat=float(payload["lat"]),
            lng=float(payload["lng"]),
            full_address=str(payload.get("full_address") or ""),
            category_name=payload.get("category_name"),
            status_comment=payload.get("status_comment"),
            payload=payload,
        )


@dataclass(frozen=True)
class FacilityPage:
    items: list[ListedFacility]
    total_matching: int
    current_page: int
    total_pages: int
    page_size: int
