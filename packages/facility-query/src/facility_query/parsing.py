"""Lenient parsing of raw request values.

Anything malformed comes back as ``None`` so callers can treat it as an absent
filter or fall back to a default instead of failing the request.
"""

from __future__ import annotations

import math
import re

_INT_PATTERN = re.compile(r"[+-]?\d+")


def parse_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _INT_PATTERN.fullmatch(text):
            return int(text)
    return None


def parse_positive_int(value: object) -> int | None:
    parsed = parse_int(value)
    if parsed is None or parsed < 1:
        return None
    return parsed


def parse_float(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        parsed = float(value)
    elif isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(parsed) or math.isinf(parsed):
        return None
    return parsed


def clean_text(value: object, max_length: int = 100) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()[:max_length]
