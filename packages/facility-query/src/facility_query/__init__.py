"""Faceted search, pagination and status enrichment over a facility directory."""

from facility_query.builder import (
    FacetedQueryBuilder,
    FacetQuery,
    SortSpec,
    build_area_predicate,
    build_predicate,
    build_sort,
)
from facility_query.criteria import (
    DEFAULT_PAGE_SIZE_BOUNDS,
    FilterCriteria,
    PageSizeBounds,
    SortDirection,
    SortField,
    normalize_criteria,
)
from facility_query.memory import InMemoryFacilityStore, InMemoryStatusStore
from facility_query.models import Category, EnrichedFacility, FacilityField, FacilityRecord, StatusEntry
from facility_query.pagination import PaginationCoordinator, ResultPage, total_pages_for
from facility_query.status import StatusAggregator, select_current_status
from facility_query.stores import FacilityStore, StatusStore

__all__ = [
    "DEFAULT_PAGE_SIZE_BOUNDS",
    "Category",
    "EnrichedFacility",
    "FacetQuery",
    "FacetedQueryBuilder",
    "FacilityField",
    "FacilityRecord",
    "FacilityStore",
    "FilterCriteria",
    "InMemoryFacilityStore",
    "InMemoryStatusStore",
    "PageSizeBounds",
    "PaginationCoordinator",
    "ResultPage",
    "SortDirection",
    "SortField",
    "SortSpec",
    "StatusAggregator",
    "StatusEntry",
    "StatusStore",
    "build_area_predicate",
    "build_predicate",
    "build_sort",
    "normalize_criteria",
    "select_current_status",
    "total_pages_for",
]
