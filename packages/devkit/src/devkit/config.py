from __future__ import annotations

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    SERVICE_NAME: str = "service"
    LOG_LEVEL: str = "INFO"
    DATABASE_URL: str | None = None
    REDIS_URL: str | None = None

    MIN_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 50
    DEFAULT_PAGE_SIZE: int = 10

    DEFAULT_RADIUS_KM: float = 5.0
    DEFAULT_NEARBY_LIMIT: int = 10
    MAX_NEARBY_LIMIT: int = 100

    API_CACHE_TTL_SECONDS: int = 30
    STORE_TIMEOUT_SECONDS: float = 5.0
    SEED_DEMO_DATA: bool = False

    @model_validator(mode="after")
    def _check_page_bounds(self) -> "ServiceSettings":
        if self.MIN_PAGE_SIZE < 1:
            raise ValueError("MIN_PAGE_SIZE must be >= 1")
        if self.MAX_PAGE_SIZE < self.MIN_PAGE_SIZE:
            raise ValueError("MAX_PAGE_SIZE must be >= MIN_PAGE_SIZE")
        return self


def load_settings(service_name: str) -> ServiceSettings:
    return ServiceSettings(SERVICE_NAME=service_name)
