from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from facility_query.builder import FacetQuery
from facility_query.models import FacilityRecord
from facility_query.stores import FacilityStore

T = TypeVar("T")
U = TypeVar("U")

logger = logging.getLogger(__name__)


def total_pages_for(total_matching: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    if total_matching <= 0:
        return 0
    return math.ceil(total_matching / page_size)


@dataclass(frozen=True)
class ResultPage(Generic[T]):
    items: list[T]
    total_matching: int
    current_page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return total_pages_for(self.total_matching, self.page_size)

    def with_items(self, items: list[U]) -> ResultPage[U]:
        return ResultPage(
            items=items,
            total_matching=self.total_matching,
            current_page=self.current_page,
            page_size=self.page_size,
        )

    def meta(self) -> dict[str, int]:
        return {
            "total_matching": self.total_matching,
            "current_page": self.current_page,
            "total_pages": self.total_pages,
            "page_size": self.page_size,
        }


class PaginationCoordinator:
    """Runs the count and the page fetch for one query against the same predicate."""

    def __init__(self, store: FacilityStore) -> None:
        self._store = store

    async def paginate(self, query: FacetQuery) -> ResultPage[FacilityRecord]:
        total = await self._store.count(query.predicate)
        total_pages = total_pages_for(total, query.page_size)
        if query.page > total_pages:
            logger.debug(
                "page_out_of_range",
                extra={"component": "pagination", "page": query.page, "total_pages": total_pages},
            )
            items: list[FacilityRecord] = []
        else:
            items = await self._store.fetch(query.predicate, query.sort, query.offset, query.limit)
        return ResultPage(
            items=items[: query.page_size],
            total_matching=total,
            current_page=query.page,
            page_size=query.page_size,
        )
