"""Shared runtime plumbing: settings, database access, logging and tracing."""

from devkit.config import ServiceSettings, load_settings
from devkit.db import (
    AsyncDatabaseManager,
    Base,
    create_all_tables,
    create_async_engine,
    create_session_factory,
    is_transient_db_error,
    normalize_database_url,
)
from devkit.observability import configure_logging, configure_otel, configure_probe_access_log_filter
from devkit.timezone import ensure_utc

__all__ = [
    "AsyncDatabaseManager",
    "Base",
    "ServiceSettings",
    "configure_logging",
    "configure_otel",
    "configure_probe_access_log_filter",
    "create_all_tables",
    "create_async_engine",
    "create_session_factory",
    "ensure_utc",
    "is_transient_db_error",
    "load_settings",
    "normalize_database_url",
]
