from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import pytest
from devkit.db import AsyncDatabaseManager
from facility_query.builder import FacetedQueryBuilder, SortSpec
from facility_query.criteria import FilterCriteria, SortDirection, SortField
from facility_query.models import FacilityField, FacilityRecord, StatusEntry
from facility_query.predicates import MatchAll
from geo_engine.models import GeoPoint

from directory_api.seed import DEMO_CATEGORIES, DEMO_FACILITIES, DEMO_STATUSES
from directory_api.store import SqlDirectoryStore

EXTRA_FACILITIES = [
    FacilityRecord(id=20, title="100% Recycled Depot", lat=51.5, lng=-0.12, town="London"),
    FacilityRecord(id=21, title="Depot_North", lat=51.6, lng=-0.10, town="London"),
    FacilityRecord(id=22, title="DepotXNorth", lat=51.6, lng=-0.11, town="London"),
]

TIED_STATUSES = [
    StatusEntry(
        id=10,
        facility_id=2,
        comment="Bays full",
        author_id=1,
        timestamp=datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc),
    ),
    StatusEntry(
        id=11,
        facility_id=2,
        comment="Bays cleared",
        author_id=2,
        timestamp=datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc),
    ),
]


@asynccontextmanager
async def _seeded_store(tmp_path) -> AsyncIterator[SqlDirectoryStore]:
    db = AsyncDatabaseManager(f"sqlite:///{tmp_path / 'directory.db'}")
    store = SqlDirectoryStore(db)
    seeded = await store.seed_if_empty(
        [*DEMO_FACILITIES, *EXTRA_FACILITIES],
        DEMO_CATEGORIES,
        [*DEMO_STATUSES, *TIED_STATUSES],
    )
    assert seeded is True
    try:
        yield store
    finally:
        await db.disconnect()


@pytest.mark.asyncio
async def test_seed_runs_only_once(tmp_path) -> None:
    async with _seeded_store(tmp_path) as store:
        assert await store.seed_if_empty(DEMO_FACILITIES, DEMO_CATEGORIES) is False
        assert await store.count(MatchAll()) == 11


@pytest.mark.asyncio
async def test_count_and_fetch_share_the_same_filter(tmp_path) -> None:
    async with _seeded_store(tmp_path) as store:
        query = FacetedQueryBuilder().build(FilterCriteria(town="manchester", page_size=2))

        total = await store.count(query.predicate)
        first = await store.fetch(query.predicate, query.sort, query.offset, query.limit)
        second = await store.fetch(query.predicate, query.sort, 2, 2)

        assert total == 3
        assert [record.id for record in first] == [2, 4]
        assert [record.id for record in second] == [1]


@pytest.mark.asyncio
async def test_like_wildcards_are_escaped(tmp_path) -> None:
    async with _seeded_store(tmp_path) as store:
        builder = FacetedQueryBuilder()

        percent = builder.build(FilterCriteria(search_term="100%"))
        underscore = builder.build(FilterCriteria(search_term="depot_"))

        assert [r.id for r in await store.fetch(percent.predicate, percent.sort, 0, 10)] == [20]
        assert [r.id for r in await store.fetch(underscore.predicate, underscore.sort, 0, 10)] == [21]


@pytest.mark.asyncio
async def test_sort_descending_with_id_tiebreak(tmp_path) -> None:
    async with _seeded_store(tmp_path) as store:
        query = FacetedQueryBuilder().build(
            FilterCriteria(sort_field=SortField.TOWN, sort_direction=SortDirection.DESC, page_size=50)
        )

        records = await store.fetch(query.predicate, query.sort, query.offset, query.limit)

        assert [record.id for record in records] == [7, 3, 1, 2, 4, 20, 21, 22, 5, 6, 8]


@pytest.mark.asyncio
async def test_sort_by_category_puts_missing_category_first(tmp_path) -> None:
    async with _seeded_store(tmp_path) as store:
        records = await store.fetch(MatchAll(), SortSpec(field=FacilityField.CATEGORY_ID), 0, 5)

        assert [record.id for record in records] == [20, 21, 22, 1, 5]


@pytest.mark.asyncio
async def test_area_predicate_limits_nearby_candidates(tmp_path) -> None:
    async with _seeded_store(tmp_path) as store:
        predicate = FacetedQueryBuilder().build_nearby(None, GeoPoint(lat=53.4808, lng=-2.2426), 5.0)

        candidates = await store.fetch_all(predicate)

        assert {record.id for record in candidates} <= {1, 2, 3, 4}
        assert {1, 3, 4} <= {record.id for record in candidates}


@pytest.mark.asyncio
async def test_current_status_breaks_timestamp_ties_by_id(tmp_path) -> None:
    async with _seeded_store(tmp_path) as store:
        tied = await store.current_status(2)
        latest = await store.current_status(1)

        assert tied is not None and tied.id == 11
        assert latest is not None and latest.comment == "Emptied this morning"
        assert latest.timestamp.tzinfo is not None
        assert await store.current_status(8) is None


@pytest.mark.asyncio
async def test_lookup_helpers(tmp_path) -> None:
    async with _seeded_store(tmp_path) as store:
        record = await store.get(1)
        categories = await store.list_categories()
        towns = await store.distinct_values(FacilityField.TOWN)

        assert record is not None and record.postcode == "M1 4BT"
        assert await store.get(999) is None
        assert [category.name for category in categories][0] == "Bottle Bank"
        assert towns == ["Hull", "Leeds", "London", "Manchester", "Salford", "York"]
