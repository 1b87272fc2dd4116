from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from facility_query.criteria import FilterCriteria

from scroll_client.models import FacilityPage, ListedFacility


@dataclass
class PageFetchError(Exception):
    code: str
    message: str


class PageFetcher(Protocol):
    async def fetch_page(self, criteria: FilterCriteria) -> FacilityPage: ...


class FacilityPageClient:
    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 5.0,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._client_factory = client_factory

    async def fetch_page(self, criteria: FilterCriteria) -> FacilityPage:
        try:
            factory = self._client_factory or (lambda: httpx.AsyncClient(timeout=self._timeout_seconds))
            async with factory() as client:
                response = await client.get(f"{self._base_url}/v1/facilities", params=criteria.to_query_params())
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise PageFetchError("UPSTREAM_TIMEOUT", "Directory request timed out") from exc
        except httpx.HTTPStatusError as exc:
            raise PageFetchError("UPSTREAM_HTTP_ERROR", f"Directory returned {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise PageFetchError("UPSTREAM_FAILURE", "Directory request failed") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise PageFetchError("INVALID_RESPONSE", "Directory response was not JSON") from exc
        return parse_page(payload, criteria)


def parse_page(payload: Any, criteria: FilterCriteria) -> FacilityPage:
    if not isinstance(payload, dict):
        raise PageFetchError("INVALID_RESPONSE", "Directory response was not an object")
    if not payload.get("success", False):
        error = payload.get("error") or {}
        if not isinstance(error, dict):
            raise PageFetchError("INVALID_RESPONSE", "Directory error envelope was malformed")
        raise PageFetchError(
            str(error.get("code", "UPSTREAM_FAILURE")),
            str(error.get("message", "Failed to load facilities")),
        )
    meta = payload.get("meta") or {}
    if not isinstance(meta, dict):
        raise PageFetchError("INVALID_RESPONSE", "Directory response meta was malformed")
    try:
        items = [ListedFacility.from_payload(row) for row in payload.get("data") or []]
        return FacilityPage(
            items=items,
            total_matching=int(meta.get("total_matching", len(items))),
            current_page=int(meta.get("current_page", criteria.page)),
            total_pages=int(meta.get("total_pages", 0)),
            page_size=int(meta.get("page_size", criteria.page_size)),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise PageFetchError("INVALID_RESPONSE", "Directory response was malformed") from exc
