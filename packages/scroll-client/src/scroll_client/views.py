from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from scroll_client.models import ListedFacility


class RenderedListView:
    """Ordered list rows, oldest first, mirroring the window contents."""

    def __init__(self) -> None:
        self._rows: list[ListedFacility] = []

    @property
    def rows(self) -> list[ListedFacility]:
        return list(self._rows)

    def on_append(self, items: Sequence[ListedFacility]) -> None:
        self._rows.extend(items)

    def on_evict(self, items: Sequence[ListedFacility]) -> None:
        # evictions always come off the front
        del self._rows[: len(items)]

    def on_clear(self) -> None:
        self._rows.clear()


@dataclass
class MapMarker:
    facility_id: int
    lat: float
    lng: float
    title: str
    refs: int = 1


class MapMarkerLayer:
    """Map markers keyed by facility id.

    The same facility may arrive twice (e.g. after a record moved between pages);
    its marker stays until every retained copy has been evicted.
    """

    def __init__(self) -> None:
        self._markers: dict[int, MapMarker] = {}

    @property
    def markers(self) -> dict[int, MapMarker]:
        return dict(self._markers)

    def __contains__(self, facility_id: object) -> bool:
        return facility_id in self._markers

    def __len__(self) -> int:
        return len(self._markers)

    def on_append(self, items: Sequence[ListedFacility]) -> None:
        for item in items:
            marker = self._markers.get(item.id)
            if marker is None:
                self._markers[item.id] = MapMarker(facility_id=item.id, lat=item.lat, lng=item.lng, title=item.title)
            else:
                marker.refs += 1

    def on_evict(self, items: Sequence[ListedFacility]) -> None:
        for item in items:
            marker = self._markers.get(item.id)
            if marker is None:
                continue
            marker.refs -= 1
            if marker.refs <= 0:
                del self._markers[item.id]

    def on_clear(self) -> None:
        self._markers.clear()
