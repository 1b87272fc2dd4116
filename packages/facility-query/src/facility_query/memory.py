from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from facility_query.builder import SortSpec
from facility_query.models import Category, FacilityField, FacilityRecord, StatusEntry
from facility_query.predicates import Predicate
from facility_query.status import select_current_status


class InMemoryFacilityStore:
    def __init__(
        self,
        records: Iterable[FacilityRecord] = (),
        categories: Iterable[Category] = (),
    ) -> None:
        self._records: dict[int, FacilityRecord] = {record.id: record for record in records}
        self._categories: dict[int, Category] = {category.id: category for category in categories}

    def add(self, record: FacilityRecord) -> None:
        self._records[record.id] = record

    def _matching(self, predicate: Predicate) -> list[FacilityRecord]:
        return [record for record in self._records.values() if predicate.matches(record)]

    async def count(self, predicate: Predicate) -> int:
        return len(self._matching(predicate))

    async def fetch(
        self,
        predicate: Predicate,
        sort: SortSpec,
        offset: int,
        limit: int,
    ) -> list[FacilityRecord]:
        ordered = sort.apply(self._matching(predicate))
        return ordered[offset : offset + limit]

    async def fetch_all(self, predicate: Predicate) -> list[FacilityRecord]:
        return sorted(self._matching(predicate), key=lambda record: record.id)

    async def get(self, facility_id: int) -> FacilityRecord | None:
        return self._records.get(facility_id)

    async def list_categories(self) -> list[Category]:
        return sorted(self._categories.values(), key=lambda category: (category.name.lower(), category.id))

    async def distinct_values(self, field: FacilityField) -> list[str]:
        values = {record.value_of(field) for record in self._records.values()}
        return sorted(value for value in values if isinstance(value, str) and value.strip())


class InMemoryStatusStore:
    def __init__(self, entries: Iterable[StatusEntry] = ()) -> None:
        self._entries: dict[int, list[StatusEntry]] = defaultdict(list)
        for entry in entries:
            self.add(entry)

    def add(self, entry: StatusEntry) -> None:
        self._entries[entry.facility_id].append(entry)

    async def current_status(self, facility_id: int) -> StatusEntry | None:
        return select_current_status(self._entries.get(facility_id, ()))
