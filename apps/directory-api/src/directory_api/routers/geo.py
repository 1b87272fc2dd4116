from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from devkit.config import ServiceSettings
from facility_query.criteria import normalize_criteria
from facility_query.parsing import parse_float, parse_positive_int
from geo_engine.models import GeoPoint

from directory_api.cache import ResultPageCache
from directory_api.dependencies import get_directory_service, get_result_cache, get_settings
from directory_api.response import success_response
from directory_api.services.directory_service import DirectoryService
from directory_api.upstream import call_store

router = APIRouter(prefix="/v1/geo", tags=["geo"])


def _radius_or_default(raw: str | None, default: float) -> float:
    parsed = parse_float(raw)
    if parsed is None or parsed < 0:
        return default
    return parsed


@router.get("/nearby")
async def nearby_facilities(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    radius_km: str | None = None,
    limit: str | None = None,
    search_term: str | None = None,
    category: str | None = None,
    town: str | None = None,
    county: str | None = None,
    postcode: str | None = None,
    service: DirectoryService = Depends(get_directory_service),
    cache: ResultPageCache = Depends(get_result_cache),
    settings: ServiceSettings = Depends(get_settings),
) -> dict:
    radius = _radius_or_default(radius_km, settings.DEFAULT_RADIUS_KM)
    cap = min(parse_positive_int(limit) or settings.DEFAULT_NEARBY_LIMIT, settings.MAX_NEARBY_LIMIT)
    criteria = normalize_criteria(
        search_term=search_term,
        category=category,
        town=town,
        county=county,
        postcode=postcode,
    )
    cache_key = cache.nearby_key(lat, lng, radius, cap, criteria.filter_signature())
    cached = await cache.get(cache_key)
    if cached is not None:
        return cached

    items = await call_store(
        service.nearby(GeoPoint(lat=lat, lng=lng), radius_km=radius, limit=cap, criteria=criteria),
        timeout_seconds=settings.STORE_TIMEOUT_SECONDS,
        operation="nearby_facilities",
    )
    payload = success_response(
        [item.to_dict() for item in items],
        meta={"lat": lat, "lng": lng, "radius_km": radius, "limit": cap, "count": len(items)},
    )
    await cache.set(cache_key, payload)
    return payload


@router.get("/distance")
async def distance(
    origin_lat: float = Query(..., ge=-90, le=90),
    origin_lng: float = Query(..., ge=-180, le=180),
    target_lat: float = Query(..., ge=-90, le=90),
    target_lng: float = Query(..., ge=-180, le=180),
    service: DirectoryService = Depends(get_directory_service),
) -> dict:
    result = await service.distance(
        GeoPoint(lat=origin_lat, lng=origin_lng),
        GeoPoint(lat=target_lat, lng=target_lng),
    )
    return success_response(result.model_dump(), meta={})
