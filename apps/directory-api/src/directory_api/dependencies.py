from __future__ import annotations

import logging

import redis.asyncio as redis
from devkit.config import ServiceSettings, load_settings
from devkit.db import AsyncDatabaseManager
from facility_query.criteria import PageSizeBounds

from directory_api.cache import CacheStore, InMemoryCacheStore, RedisCacheStore, ResultPageCache
from directory_api.seed import (
    DEMO_CATEGORIES,
    DEMO_FACILITIES,
    DEMO_STATUSES,
    demo_facility_store,
    demo_status_store,
)
from directory_api.services.directory_service import DirectoryService
from directory_api.store import SqlDirectoryStore

logger = logging.getLogger(__name__)


def build_directory_service(settings: ServiceSettings, sql_store: SqlDirectoryStore | None = None) -> DirectoryService:
    bounds = PageSizeBounds(
        minimum=settings.MIN_PAGE_SIZE,
        maximum=settings.MAX_PAGE_SIZE,
        default=min(settings.MAX_PAGE_SIZE, max(settings.MIN_PAGE_SIZE, settings.DEFAULT_PAGE_SIZE)),
    )
    if sql_store is not None:
        return DirectoryService(sql_store, sql_store, page_size_bounds=bounds)
    return DirectoryService(demo_facility_store(), demo_status_store(), page_size_bounds=bounds)


def build_cache_store(settings: ServiceSettings) -> CacheStore:
    if not settings.REDIS_URL:
        return InMemoryCacheStore()
    client = redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)
    return RedisCacheStore(client)


_settings = load_settings("directory-api")
_sql_store = SqlDirectoryStore(AsyncDatabaseManager(_settings.DATABASE_URL)) if _settings.DATABASE_URL else None
_directory_service = build_directory_service(_settings, _sql_store)
_result_cache = ResultPageCache(store=build_cache_store(_settings), ttl_seconds=_settings.API_CACHE_TTL_SECONDS)


async def seed_demo_data() -> None:
    if _sql_store is None or not _settings.SEED_DEMO_DATA:
        return
    if await _sql_store.seed_if_empty(DEMO_FACILITIES, DEMO_CATEGORIES, DEMO_STATUSES):
        logger.info("demo_directory_seeded", extra={"component": "directory_api"})


def get_settings() -> ServiceSettings:
    return _settings


def get_directory_service() -> DirectoryService:
    return _directory_service


def get_result_cache() -> ResultPageCache:
    return _result_cache
