import pytest
from pydantic import ValidationError

from devkit.config import load_settings


def test_load_settings_reads_env(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql://example")
    monkeypatch.setenv("MAX_PAGE_SIZE", "40")
    settings = load_settings("directory-api")

    assert settings.SERVICE_NAME == "directory-api"
    assert settings.DATABASE_URL == "postgresql://example"
    assert settings.MAX_PAGE_SIZE == 40


def test_default_paging_and_proximity_settings(monkeypatch) -> None:
    for name in ("MIN_PAGE_SIZE", "MAX_PAGE_SIZE", "DEFAULT_RADIUS_KM", "DEFAULT_NEARBY_LIMIT"):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings("directory-api")

    assert (settings.MIN_PAGE_SIZE, settings.MAX_PAGE_SIZE) == (10, 50)
    assert settings.DEFAULT_RADIUS_KM == 5.0
    assert settings.DEFAULT_NEARBY_LIMIT == 10


def test_inverted_page_bounds_are_rejected(monkeypatch) -> None:
    monkeypatch.setenv("MIN_PAGE_SIZE", "30")
    monkeypatch.setenv("MAX_PAGE_SIZE", "20")
    with pytest.raises(ValidationError):
        load_settings("directory-api")


def test_demo_seeding_is_opt_in(monkeypatch) -> None:
    monkeypatch.delenv("SEED_DEMO_DATA", raising=False)
    assert load_settings("directory-api").SEED_DEMO_DATA is False

    monkeypatch.setenv("SEED_DEMO_DATA", "true")
    assert load_settings("directory-api").SEED_DEMO_DATA is True
