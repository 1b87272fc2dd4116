from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    code: str
    message: str
    status_code: int

    @classmethod
    def not_found(cls, what: str) -> ApiError:
        return cls("NOT_FOUND", f"{what} not found", 404)

    @classmethod
    def upstream_timeout(cls) -> ApiError:
        return cls("UPSTREAM_TIMEOUT", "Directory store timed out", 504)

    @classmethod
    def upstream_failure(cls) -> ApiError:
        return cls("UPSTREAM_FAILURE", "Directory store request failed", 502)
