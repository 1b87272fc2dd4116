from __future__ import annotations

import logging
from dataclasses import dataclass

from facility_query.builder import FacetedQueryBuilder
from facility_query.criteria import FilterCriteria, PageSizeBounds
from facility_query.models import EnrichedFacility, FacilityField, StatusEntry
from facility_query.pagination import PaginationCoordinator, ResultPage
from facility_query.status import StatusAggregator
from facility_query.stores import FacilityStore, StatusStore
from geo_engine.distance import haversine_distance_km
from geo_engine.models import GeoPoint
from geo_engine.proximity import GeoProximityRanker

from directory_api.schemas import CategoryOption, FilterOptions, GeoDistanceResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NearbyFacility:
    facility: EnrichedFacility
    distance_km: float

    def to_dict(self) -> dict[str, object]:
        payload = self.facility.to_dict()
        payload["distance_km"] = round(self.distance_km, 3)
        return payload


class DirectoryService:
    """Read side of the facility directory: listings, details, filters and proximity."""

    def __init__(
        self,
        facility_store: FacilityStore,
        status_store: StatusStore,
        *,
        page_size_bounds: PageSizeBounds | None = None,
        builder: FacetedQueryBuilder | None = None,
        ranker: GeoProximityRanker | None = None,
    ) -> None:
        self._facility_store = facility_store
        self._builder = builder or FacetedQueryBuilder()
        self._ranker = ranker or GeoProximityRanker()
        self._pagination = PaginationCoordinator(facility_store)
        self._aggregator = StatusAggregator(status_store)
        self.page_size_bounds = page_size_bounds or PageSizeBounds()

    async def list_facilities(self, criteria: FilterCriteria) -> ResultPage[EnrichedFacility]:
        page = await self._pagination.paginate(self._builder.build(criteria))
        enriched = await self._aggregator.enrich(page.items, await self._category_names())
        logger.debug(
            "facilities_listed",
            extra={"component": "directory_service", "page": page.current_page, "total": page.total_matching},
        )
        return page.with_items(enriched)

    async def get_facility(self, facility_id: int) -> EnrichedFacility | None:
        record = await self._facility_store.get(facility_id)
        if record is None:
            return None
        enriched = await self._aggregator.enrich([record], await self._category_names())
        return enriched[0]

    async def current_status(self, facility_id: int) -> StatusEntry | None:
        return await self._aggregator.current_status(facility_id)

    async def filter_options(self) -> FilterOptions:
        categories = await self._facility_store.list_categories()
        return FilterOptions(
            towns=await self._facility_store.distinct_values(FacilityField.TOWN),
            counties=await self._facility_store.distinct_values(FacilityField.COUNTY),
            categories=[CategoryOption(id=category.id, name=category.name) for category in categories],
        )

    async def nearby(
        self,
        center: GeoPoint,
        radius_km: float,
        limit: int,
        criteria: FilterCriteria | None = None,
    ) -> list[NearbyFacility]:
        if radius_km <= 0:
            return []
        candidates = await self._facility_store.fetch_all(self._builder.build_nearby(criteria, center, radius_km))
        ranked = self._ranker.rank(center, radius_km, candidates, limit=limit)
        enriched = await self._aggregator.enrich([entry.item for entry in ranked], await self._category_names())
        return [
            NearbyFacility(facility=facility, distance_km=entry.distance_km)
            for facility, entry in zip(enriched, ranked)
        ]

    async def distance(self, origin: GeoPoint, target: GeoPoint) -> GeoDistanceResult:
        return GeoDistanceResult(distance_km=round(haversine_distance_km(origin, target), 3))

    async def _category_names(self) -> dict[int, str]:
        return {category.id: category.name for category in await self._facility_store.list_categories()}
