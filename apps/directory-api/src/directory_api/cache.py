from __future__ import annotations

import json
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Protocol

FACILITY_PREFIX = "facilities:"
GEO_PREFIX = "geo:"


class CacheStore(ABC):
    @abstractmethod
    async def get(self, key: str) -> dict[str, Any] | None:
        raise NotImplementedError

    @abstractmethod
    async def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None:
        raise NotImplementedError


class RedisLikeCacheClient(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def setex(self, key: str, seconds: int, value: str) -> bool: ...


class InMemoryCacheStore(CacheStore):
    def __init__(self, clock=time.monotonic) -> None:
        self._clock = clock
        self._items: dict[str, tuple[float, dict[str, Any]]] = {}

    async def get(self, key: str) -> dict[str, Any] | None:
        item = self._items.get(key)
        if not item:
            return None
        expires_at, value = item
        if expires_at <= self._clock():
            self._items.pop(key, None)
            return None
        return value

    async def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None:
        self._items[key] = (self._clock() + ttl_seconds, value)


class RedisCacheStore(CacheStore):
    def __init__(self, client: RedisLikeCacheClient, namespace: str = "directory:") -> None:
        self._client = client
        self._namespace = namespace

    async def get(self, key: str) -> dict[str, Any] | None:
        raw = await self._client.get(self._namespace + key)
        if not raw:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None:
        payload = json.dumps(value, ensure_ascii=True)
        await self._client.setex(self._namespace + key, ttl_seconds, payload)


@dataclass
class ResultPageCache:
    """Response envelopes keyed by the canonical request signature."""

    store: CacheStore
    ttl_seconds: int = 30

    @staticmethod
    def listing_key(signature: str) -> str:
        return f"{FACILITY_PREFIX}list:{signature}"

    @staticmethod
    def nearby_key(lat: float, lng: float, radius_km: float, limit: int, filter_signature: str) -> str:
        return f"{GEO_PREFIX}nearby:{lat}:{lng}:{radius_km}:{limit}:{filter_signature}"

    async def get(self, key: str) -> dict[str, Any] | None:
        if self.ttl_seconds <= 0:
            return None
        return await self.store.get(key)

    async def set(self, key: str, value: dict[str, Any]) -> None:
        if self.ttl_seconds <= 0:
            return
        await self.store.set(key, value, self.ttl_seconds)

