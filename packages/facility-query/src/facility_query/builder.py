from __future__ import annotations

from dataclasses import dataclass

from geo_engine.distance import bounding_box
from geo_engine.models import GeoPoint

from facility_query.criteria import FilterCriteria, SortDirection, SortField
from facility_query.models import FacilityField, FacilityRecord
from facility_query.predicates import (
    AnyOf,
    Between,
    Contains,
    Equals,
    MatchAll,
    Predicate,
    StartsWith,
    all_of,
)

SORT_COLUMNS: dict[SortField, FacilityField] = {
    SortField.TITLE: FacilityField.TITLE,
    SortField.CATEGORY: FacilityField.CATEGORY_ID,
    SortField.TOWN: FacilityField.TOWN,
    SortField.COUNTY: FacilityField.COUNTY,
    SortField.POSTCODE: FacilityField.POSTCODE,
}

SEARCHABLE_FIELDS = (FacilityField.TITLE, FacilityField.DESCRIPTION, FacilityField.POSTCODE)


@dataclass(frozen=True)
class SortSpec:
    """Ordering on one whitelisted column, always tie-broken by ascending id."""

    field: FacilityField = FacilityField.TITLE
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC

    def sort_key(self, record: FacilityRecord) -> str | int:
        value = record.value_of(self.field)
        if self.field is FacilityField.CATEGORY_ID:
            return value if isinstance(value, int) else 0
        return value.lower() if isinstance(value, str) else ""

    def apply(self, records: list[FacilityRecord]) -> list[FacilityRecord]:
        # two stable passes: id first, then the sort column
        ordered = sorted(records, key=lambda record: record.id)
        return sorted(ordered, key=self.sort_key, reverse=self.descending)


@dataclass(frozen=True)
class FacetQuery:
    predicate: Predicate
    sort: SortSpec
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


def build_predicate(criteria: FilterCriteria) -> Predicate:
    """Single source of filter logic for both the count and the page query."""
    terms: list[Predicate] = []
    if criteria.search_term:
        terms.append(AnyOf(tuple(Contains(field, criteria.search_term) for field in SEARCHABLE_FIELDS)))
    if criteria.category_id is not None:
        terms.append(Equals(FacilityField.CATEGORY_ID, criteria.category_id))
    if criteria.town:
        terms.append(Contains(FacilityField.TOWN, criteria.town))
    if criteria.county:
        terms.append(Contains(FacilityField.COUNTY, criteria.county))
    if criteria.postcode:
        terms.append(StartsWith(FacilityField.POSTCODE, criteria.postcode))
    return all_of(*terms)


def build_sort(criteria: FilterCriteria) -> SortSpec:
    field = SORT_COLUMNS.get(criteria.sort_field)
    if field is None:
        return SortSpec()
    return SortSpec(field=field, direction=criteria.sort_direction)


def build_area_predicate(center: GeoPoint, radius_km: float) -> Predicate:
    """Conservative lat/lng box around a radius, used to narrow proximity candidates."""
    box = bounding_box(center, radius_km)
    terms: list[Predicate] = [Between(FacilityField.LAT, box.min_lat, box.max_lat)]
    if not box.spans_all_longitudes:
        terms.append(Between(FacilityField.LNG, box.min_lng, box.max_lng))
    return all_of(*terms)


class FacetedQueryBuilder:
    def build(self, criteria: FilterCriteria) -> FacetQuery:
        return FacetQuery(
            predicate=build_predicate(criteria),
            sort=build_sort(criteria),
            page=criteria.page,
            page_size=criteria.page_size,
        )

    def build_nearby(
        self,
        criteria: FilterCriteria | None,
        center: GeoPoint,
        radius_km: float,
    ) -> Predicate:
        facets = build_predicate(criteria) if criteria is not None else MatchAll()
        return all_of(facets, build_area_predicate(center, radius_km))
