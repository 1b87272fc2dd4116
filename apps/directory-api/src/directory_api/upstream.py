from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from directory_api.errors import ApiError

T = TypeVar("T")

logger = logging.getLogger(__name__)


async def call_store(action: Awaitable[T], *, timeout_seconds: float, operation: str) -> T:
    """Await a store-backed call, mapping failures onto API errors for this request only."""
    try:
        return await asyncio.wait_for(action, timeout=timeout_seconds)
    except ApiError:
        raise
    except TimeoutError as exc:
        logger.warning("store_timeout", extra={"component": "directory_api", "operation": operation})
        raise ApiError.upstream_timeout() from exc
    except Exception as exc:
        logger.exception("store_failure", extra={"component": "directory_api", "operation": operation})
        raise ApiError.upstream_failure() from exc
