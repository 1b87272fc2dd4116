from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from facility_query.models import EnrichedFacility, FacilityRecord, StatusEntry
from facility_query.stores import StatusStore

logger = logging.getLogger(__name__)


def current_status_key(entry: StatusEntry) -> tuple:
    return (entry.timestamp, entry.id)


def select_current_status(entries: Iterable[StatusEntry]) -> StatusEntry | None:
    """Most recent entry by timestamp; equal timestamps go to the highest id."""
    return max(entries, key=current_status_key, default=None)


class StatusAggregator:
    def __init__(self, status_store: StatusStore) -> None:
        self._status_store = status_store

    async def current_status(self, facility_id: int) -> StatusEntry | None:
        try:
            return await self._status_store.current_status(facility_id)
        except Exception:
            logger.warning(
                "status_lookup_failed",
                exc_info=True,
                extra={"component": "status_aggregator", "facility_id": facility_id},
            )
            return None

    async def enrich(
        self,
        records: Iterable[FacilityRecord],
        category_names: Mapping[int, str] | None = None,
    ) -> list[EnrichedFacility]:
        names = category_names or {}
        enriched: list[EnrichedFacility] = []
        for record in records:
            status = await self.current_status(record.id)
            category_name = names.get(record.category_id) if record.category_id is not None else None
            enriched.append(EnrichedFacility(record=record, category_name=category_name, status=status))
        return enriched
