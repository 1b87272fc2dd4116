from __future__ import annotations

from collections.abc import Callable, Iterable

from pydantic_settings import BaseSettings, SettingsConfigDict

from facility_query.criteria import FilterCriteria, normalize_criteria

from scroll_client.client import FacilityPageClient
from scroll_client.controller import IncrementalResultController, ScrollState
from scroll_client.models import ListedFacility
from scroll_client.window import SlidingWindowCache, WindowView


class ScrollClientSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SCROLL_", extra="ignore")

    BASE_URL: str = "http://localhost:8000"
    PAGE_SIZE: int = 20
    MAX_ITEMS: int = 100
    DEBOUNCE_SECONDS: float = 0.3
    REQUEST_TIMEOUT_SECONDS: float = 5.0

    def criteria(self, **filters: object) -> FilterCriteria:
        """Normalized criteria for raw filter values, at the configured page size unless one is given."""
        filters.setdefault("page_size", self.PAGE_SIZE)
        return normalize_criteria(**filters)


def create_controller(
    settings: ScrollClientSettings | None = None,
    views: Iterable[WindowView[ListedFacility]] = (),
    on_error: Callable[[str], None] | None = None,
    on_state_change: Callable[[ScrollState], None] | None = None,
) -> IncrementalResultController:
    settings = settings or ScrollClientSettings()
    window: SlidingWindowCache[ListedFacility] = SlidingWindowCache(max_items=settings.MAX_ITEMS)
    for view in views:
        window.subscribe(view)
    return IncrementalResultController(
        FacilityPageClient(base_url=settings.BASE_URL, timeout_seconds=settings.REQUEST_TIMEOUT_SECONDS),
        window,
        debounce_seconds=settings.DEBOUNCE_SECONDS,
        request_timeout_seconds=settings.REQUEST_TIMEOUT_SECONDS,
        on_error=on_error,
        on_state_change=on_state_change,
    )
