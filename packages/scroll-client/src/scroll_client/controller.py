from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum

from facility_query.criteria import FilterCriteria

from scroll_client.client import PageFetchError, PageFetcher
from scroll_client.models import FacilityPage, ListedFacility
from scroll_client.window import SlidingWindowCache

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "An error occurred while loading facilities"


class ScrollPhase(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    EXHAUSTED = "exhausted"
    ERROR = "error"


@dataclass
class ScrollState:
    """Paging progress for one set of filter criteria."""

    criteria: FilterCriteria
    next_page_to_fetch: int = 1
    total_pages: int = 0
    total_matching: int = 0
    loaded_count: int = 0
    phase: ScrollPhase = ScrollPhase.IDLE
    inflight: asyncio.Task | None = field(default=None, repr=False, compare=False)
    inflight_signature: str | None = field(default=None, repr=False, compare=False)

    @property
    def loading(self) -> bool:
        return self.phase is ScrollPhase.LOADING

    @property
    def exhausted(self) -> bool:
        return self.phase is ScrollPhase.EXHAUSTED

    def next_request(self) -> FilterCriteria:
        return self.criteria.with_page(self.next_page_to_fetch)

    def summary(self) -> str:
        if self.total_matching == 0:
            return "No facilities found matching your criteria."
        return f"Showing {self.loaded_count} of {self.total_matching} facilities"


class IncrementalResultController:
    """Drives sequential page fetches into a :class:`SlidingWindowCache`.

    Phases move ``idle -> loading -> idle`` on success, ``loading -> exhausted``
    once the last (or an empty) page arrives, and ``loading -> error -> idle`` on
    failure, leaving ``next_page_to_fetch`` untouched so the next trigger retries
    the same page. At most one fetch per :class:`ScrollState` is in flight; a
    trigger for the request already outstanding waits on it instead of issuing a
    second one. Filter changes replace the state outright, and a response that
    arrives for a replaced state is dropped.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        window: SlidingWindowCache[ListedFacility],
        *,
        debounce_seconds: float = 0.3,
        request_timeout_seconds: float = 5.0,
        on_error: Callable[[str], None] | None = None,
        on_state_change: Callable[[ScrollState], None] | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._window = window
        self._debounce_seconds = debounce_seconds
        self._request_timeout_seconds = request_timeout_seconds
        self._on_error = on_error
        self._on_state_change = on_state_change
        self._state: ScrollState | None = None
        self._pending: asyncio.Task | None = None
        self.last_error: str | None = None

    @property
    def state(self) -> ScrollState | None:
        return self._state

    @property
    def window(self) -> SlidingWindowCache[ListedFacility]:
        return self._window

    @property
    def retained_items(self) -> list[ListedFacility]:
        return self._window.items

    async def mount(self, criteria: FilterCriteria) -> bool:
        """Initial load for a freshly shown view; no debounce."""
        if self._state is None or self._state.criteria.filter_signature() != criteria.filter_signature():
            self._cancel_pending()
            self._reset(criteria)
        return await self.trigger()

    async def trigger(self) -> bool:
        """Fetch the next page. Returns True when this call applied a page."""
        state = self._state
        if state is None:
            return False
        request = state.next_request()
        signature = request.signature()

        if state.phase is ScrollPhase.LOADING:
            if state.inflight is not None and state.inflight_signature == signature:
                logger.debug("fetch_coalesced", extra={"component": "scroll_controller", "page": request.page})
                await asyncio.shield(state.inflight)
            return False
        if state.phase is ScrollPhase.EXHAUSTED:
            return False

        self._set_phase(state, ScrollPhase.LOADING)
        task = asyncio.create_task(self._load(state, request))
        state.inflight = task
        state.inflight_signature = signature
        return await asyncio.shield(task)

    def apply_criteria(self, criteria: FilterCriteria) -> asyncio.Task | None:
        """Restart from page 1 for new criteria after the quiescence delay.

        Criteria equal to the current ones (ignoring the page) change nothing.
        A further change inside the delay replaces the scheduled fetch.
        """
        if self._state is not None and self._state.criteria.filter_signature() == criteria.filter_signature():
            return None
        self._cancel_pending()
        state = self._reset(criteria)
        self._pending = asyncio.create_task(self._debounced_fetch(state))
        return self._pending

    async def wait_until_settled(self) -> None:
        while True:
            pending = self._pending
            if pending is not None and not pending.done():
                await asyncio.gather(pending, return_exceptions=True)
                continue
            state = self._state
            if state is not None and state.inflight is not None and not state.inflight.done():
                await asyncio.shield(state.inflight)
                continue
            return

    def close(self) -> None:
        self._cancel_pending()
        self._state = None
        self._window.clear()

    def _reset(self, criteria: FilterCriteria) -> ScrollState:
        state = ScrollState(criteria=criteria.with_page(1))
        self._state = state
        self.last_error = None
        self._window.clear()
        logger.info(
            "scroll_state_reset",
            extra={"component": "scroll_controller", "criteria": state.criteria.filter_signature()},
        )
        self._notify(state)
        return state

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def _debounced_fetch(self, state: ScrollState) -> None:
        await asyncio.sleep(self._debounce_seconds)
        if state is self._state:
            await self.trigger()

    async def _load(self, state: ScrollState, request: FilterCriteria) -> bool:
        try:
            try:
                page = await asyncio.wait_for(
                    self._fetcher.fetch_page(request),
                    timeout=self._request_timeout_seconds,
                )
            except Exception as exc:
                if state is not self._state:
                    logger.info("stale_failure_discarded", extra={"component": "scroll_controller", "page": request.page})
                    return False
                self._fail(state, request, exc)
                return False

            if state is not self._state:
                logger.info("stale_page_discarded", extra={"component": "scroll_controller", "page": request.page})
                return False
            self._apply(state, page)
            return True
        finally:
            if state.inflight is asyncio.current_task():
                state.inflight = None
                state.inflight_signature = None

    def _apply(self, state: ScrollState, page: FacilityPage) -> None:
        self._window.append(page.items)
        state.total_pages = page.total_pages
        state.total_matching = page.total_matching
        state.loaded_count += len(page.items)
        if not page.items or page.current_page >= page.total_pages:
            self._set_phase(state, ScrollPhase.EXHAUSTED)
        else:
            state.next_page_to_fetch = page.current_page + 1
            self._set_phase(state, ScrollPhase.IDLE)

    def _fail(self, state: ScrollState, request: FilterCriteria, exc: Exception) -> None:
        if isinstance(exc, PageFetchError):
            code = exc.code
        elif isinstance(exc, TimeoutError):
            code = "TIMEOUT"
        else:
            code = type(exc).__name__
        logger.warning(
            "page_fetch_failed",
            extra={"component": "scroll_controller", "page": request.page, "error": code},
            exc_info=not isinstance(exc, (PageFetchError, TimeoutError)),
        )
        self._set_phase(state, ScrollPhase.ERROR)
        self.last_error = LOAD_ERROR_MESSAGE
        if self._on_error is not None:
            self._on_error(LOAD_ERROR_MESSAGE)
        self._set_phase(state, ScrollPhase.IDLE)

    def _set_phase(self, state: ScrollState, phase: ScrollPhase) -> None:
        state.phase = phase
        self._notify(state)

    def _notify(self, state: ScrollState) -> None:
        if self._on_state_change is not None:
            self._on_state_change(state)
