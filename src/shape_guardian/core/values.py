"""Helpers for the JSON-like values that schemas consume."""

from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import Any, List

MAX_RECEIVED_STRING = 100
MAX_RECEIVED_ITEMS = 5


class _Missing:
    """Marker for a key that is absent from its parent object."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def is_number(value: Any) -> bool:
    """Return True for ints and floats, never for booleans."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def value_type_name(value: Any) -> str:
    """Name the JSON type of ``value`` for type-mismatch messages."""
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if is_array(value):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def format_number(value: float | int) -> str:
    """Render a number without a trailing ``.0`` for integral floats."""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def format_value_short(value: Any) -> str:
    """Compact JSON-ish rendering used inside messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return format_number(value)
    if isinstance(value, str):
        if len(value) > 50:
            return f'"{value[:47]}..."'
        return f'"{value}"'
    if is_array(value):
        return f"Array({len(value)})"
    if isinstance(value, dict):
        return f"Object({len(value)})"
    return repr(value)


def truncate_value(value: Any) -> Any:
    """Shorten long strings and arrays before echoing them in an issue."""
    if isinstance(value, str) and len(value) > MAX_RECEIVED_STRING:
        return value[:MAX_RECEIVED_STRING] + "..."
    if is_array(value) and len(value) > MAX_RECEIVED_ITEMS:
        head: List[Any] = [truncate_value(item) for item in value[:MAX_RECEIVED_ITEMS]]
        head.append(f"... {len(value) - MAX_RECEIVED_ITEMS} more")
        return head
    return value


def json_equal(left: Any, right: Any) -> bool:
    """Equality that keeps booleans and numbers apart."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) and is_number(right):
        return left == right
    if type(left) is not type(right) and not (is_array(left) and is_array(right)):
        return False
    if is_array(left):
        return len(left) == len(right) and all(json_equal(a, b) for a, b in zip(left, right))
    if isinstance(left, dict):
        return left.keys() == right.keys() and all(json_equal(left[k], right[k]) for k in left)
    return left == right


def to_json_value(value: Any) -> Any:
    """Convert a parsed output back into a JSON-like value."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.isoformat().replace("+00:00", "Z")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(key): to_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_json_value(item) for item in value]
    if callable(getattr(value, "unwrap", None)):
        return to_json_value(value.unwrap())
    return value
