from __future__ import annotations

from fastapi import APIRouter, Depends

from devkit.config import ServiceSettings
from facility_query.criteria import normalize_criteria
from facility_query.parsing import parse_positive_int

from directory_api.cache import ResultPageCache
from directory_api.dependencies import get_directory_service, get_result_cache, get_settings
from directory_api.errors import ApiError
from directory_api.response import success_response
from directory_api.services.directory_service import DirectoryService
from directory_api.upstream import call_store

router = APIRouter(prefix="/v1/facilities", tags=["facilities"])


def _parse_facility_id(facility_id: str) -> int:
    parsed = parse_positive_int(facility_id)
    if parsed is None:
        raise ApiError.not_found("Facility")
    return parsed


@router.get("")
async def list_facilities(
    search_term: str | None = None,
    q: str | None = None,
    category: str | None = None,
    town: str | None = None,
    county: str | None = None,
    postcode: str | None = None,
    page: str | None = None,
    page_size: str | None = None,
    limit: str | None = None,
    sort_field: str | None = None,
    sort_direction: str | None = None,
    service: DirectoryService = Depends(get_directory_service),
    cache: ResultPageCache = Depends(get_result_cache),
    settings: ServiceSettings = Depends(get_settings),
) -> dict:
    # numeric and enum inputs arrive as raw strings so bad values degrade instead of 422
    criteria = normalize_criteria(
        search_term=search_term if search_term is not None else q,
        category=category,
        town=town,
        county=county,
        postcode=postcode,
        sort_field=sort_field,
        sort_direction=sort_direction,
        page=page,
        page_size=page_size if page_size is not None else limit,
        bounds=service.page_size_bounds,
    )
    cache_key = cache.listing_key(criteria.signature())
    cached = await cache.get(cache_key)
    if cached is not None:
        return cached

    result = await call_store(
        service.list_facilities(criteria),
        timeout_seconds=settings.STORE_TIMEOUT_SECONDS,
        operation="list_facilities",
    )
    meta = {
        **result.meta(),
        "sort_field": criteria.sort_field.value,
        "sort_direction": criteria.sort_direction.value,
    }
    payload = success_response([item.to_dict() for item in result.items], meta=meta)
    await cache.set(cache_key, payload)
    return payload


@router.get("/filters")
async def filter_options(
    service: DirectoryService = Depends(get_directory_service),
    settings: ServiceSettings = Depends(get_settings),
) -> dict:
    options = await call_store(
        service.filter_options(),
        timeout_seconds=settings.STORE_TIMEOUT_SECONDS,
        operation="filter_options",
    )
    return success_response(options.model_dump(), meta={})


@router.get("/{facility_id}")
async def get_facility(
    facility_id: str,
    service: DirectoryService = Depends(get_directory_service),
    settings: ServiceSettings = Depends(get_settings),
) -> dict:
    parsed_id = _parse_facility_id(facility_id)
    facility = await call_store(
        service.get_facility(parsed_id),
        timeout_seconds=settings.STORE_TIMEOUT_SECONDS,
        operation="get_facility",
    )
    if facility is None:
        raise ApiError.not_found("Facility")
    return success_response(facility.to_dict(), meta={})


@router.get("/{facility_id}/status")
async def get_facility_status(
    facility_id: str,
    service: DirectoryService = Depends(get_directory_service),
    settings: ServiceSettings = Depends(get_settings),
) -> dict:
    status = await call_store(
        service.current_status(_parse_facility_id(facility_id)),
        timeout_seconds=settings.STORE_TIMEOUT_SECONDS,
        operation="current_status",
    )
    return success_response(status.to_dict() if status else None, meta={})
