from __future__ import annotations

import json
from dataclasses import dataclass, replace
from enum import StrEnum

from facility_query.parsing import clean_text, parse_int, parse_positive_int

SEARCH_TERM_MAX_LENGTH = 100


class SortField(StrEnum):
    TITLE = "title"
    CATEGORY = "category"
    TOWN = "town"
    COUNTY = "county"
    POSTCODE = "postcode"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class PageSizeBounds:
    minimum: int = 10
    maximum: int = 50
    default: int = 10

    def __post_init__(self) -> None:
        if self.minimum < 1 or self.maximum < self.minimum:
            raise ValueError("page size bounds must satisfy 1 <= minimum <= maximum")

    def clamp(self, value: int) -> int:
        return min(self.maximum, max(self.minimum, value))


DEFAULT_PAGE_SIZE_BOUNDS = PageSizeBounds()


@dataclass(frozen=True)
class FilterCriteria:
    search_term: str = ""
    category_id: int | None = None
    town: str = ""
    county: str = ""
    postcode: str = ""
    sort_field: SortField = SortField.TITLE
    sort_direction: SortDirection = SortDirection.ASC
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE_BOUNDS.default

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.page_size < 1:
            raise ValueError("page_size must be >= 1")
        if self.category_id is not None and self.category_id < 1:
            raise ValueError("category_id must be a positive integer")

    def with_page(self, page: int) -> FilterCriteria:
        return replace(self, page=page)

    def to_dict(self) -> dict[str, object]:
        return {
            "search_term": self.search_term,
            "category": self.category_id,
            "town": self.town,
            "county": self.county,
            "postcode": self.postcode,
            "sort_field": self.sort_field.value,
            "sort_direction": self.sort_direction.value,
            "page": self.page,
            "page_size": self.page_size,
        }

    def to_query_params(self) -> dict[str, str | int]:
        return {key: value for key, value in self.to_dict().items() if value not in (None, "")}

    def signature(self) -> str:
        """Canonical serialization of the full request, page included."""
        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))

    def filter_signature(self) -> str:
        """Like :meth:`signature` but ignoring which page is requested."""
        return self.with_page(1).signature()


def parse_sort(field: object, direction: object) -> tuple[SortField, SortDirection]:
    try:
        sort_field = SortField(str(field).strip().lower())
    except ValueError:
        return SortField.TITLE, SortDirection.ASC
    if isinstance(direction, str) and direction.strip().lower() == SortDirection.DESC:
        return sort_field, SortDirection.DESC
    return sort_field, SortDirection.ASC


def normalize_criteria(
    *,
    search_term: object = None,
    category: object = None,
    town: object = None,
    county: object = None,
    postcode: object = None,
    sort_field: object = None,
    sort_direction: object = None,
    page: object = None,
    page_size: object = None,
    bounds: PageSizeBounds = DEFAULT_PAGE_SIZE_BOUNDS,
) -> FilterCriteria:
    """Build criteria from raw request values, degrading bad input to defaults."""
    raw_page_size = parse_int(page_size)
    field, direction = parse_sort(SortField.TITLE.value if sort_field is None else sort_field, sort_direction)
    return FilterCriteria(
        search_term=clean_text(search_term, SEARCH_TERM_MAX_LENGTH),
        category_id=parse_positive_int(category),
        town=clean_text(town),
        county=clean_text(county),
        postcode=clean_text(postcode),
        sort_field=field,
        sort_direction=direction,
        page=parse_positive_int(page) or 1,
        page_size=bounds.default if raw_page_size is None else bounds.clamp(raw_page_size),
    )
