from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from facility_query.models import Category, FacilityField, FacilityRecord, StatusEntry
from facility_query.predicates import Predicate

if TYPE_CHECKING:
    from facility_query.builder import SortSpec


class FacilityStore(Protocol):
    """Read-only facility queries. Both count and fetch take the same predicate."""

    async def count(self, predicate: Predicate) -> int: ...

    async def fetch(
        self,
        predicate: Predicate,
        sort: SortSpec,
        offset: int,
        limit: int,
    ) -> list[FacilityRecord]: ...

    async def fetch_all(self, predicate: Predicate) -> list[FacilityRecord]: ...

    async def get(self, facility_id: int) -> FacilityRecord | None: ...

    async def list_categories(self) -> list[Category]: ...

    async def distinct_values(self, field: FacilityField) -> list[str]: ...


class StatusStore(Protocol):
    async def current_status(self, facility_id: int) -> StatusEntry | None: ...
