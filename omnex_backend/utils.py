"""
Utility helpers shared across backend modules.
"""
from __future__ import annotations

import os
from typing import Any

BOOL_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
BOOL_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def parse_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in BOOL_TRUE_VALUES:
            return True
        if normalized in BOOL_FALSE_VALUES:
            return False
    return default


def parse_int(value: Any, default: int, *, min_value: int | None = None) -> int:
    """Parse an integer query/env value, falling back to `default` and clamping to `min_value`."""
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        parsed = default
    if min_value is not None and parsed < min_value:
        parsed = min_value
    return parsed


def split_csv(value: Any) -> list[str]:
    """Split a comma-separated parameter into trimmed, non-empty tokens."""
    if value is None:
        return []
    return [part.strip() for part in str(value).split(",") if part.strip()]


def env_bool(name: str, default: bool) -> bool:
    if not name:
        return default
    raw = os.environ.get(name)
    if raw is None:
        return default
    return parse_bool(raw, default)


def env_float(name: str, default: float) -> float:
    if not name:
        return default
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except (ValueError, TypeError):
        return default
