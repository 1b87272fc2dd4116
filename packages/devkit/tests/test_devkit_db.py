from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import OperationalError

from devkit.db import is_transient_db_error, normalize_database_url
from devkit.timezone import ensure_utc


def test_normalize_database_url() -> None:
    assert normalize_database_url("postgresql://u:p@h:5432/db") == "postgresql+psycopg://u:p@h:5432/db"
    assert normalize_database_url("postgresql+psycopg://u:p@h:5432/db") == "postgresql+psycopg://u:p@h:5432/db"
    assert normalize_database_url("sqlite:///./directory.db") == "sqlite+aiosqlite:///./directory.db"


def test_transient_error_detection() -> None:
    assert is_transient_db_error(OperationalError("stmt", {}, Exception("down")))
    assert not is_transient_db_error(ValueError("nope"))


def test_ensure_utc_handles_naive_and_aware_values() -> None:
    naive = datetime(2024, 5, 1, 12, 0)
    aware = datetime(2024, 5, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))

    assert ensure_utc(naive) == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    assert ensure_utc(aware) == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
