from __future__ import annotations

from collections.abc import Mapping, Sized
from typing import Any

from .errors import InvalidDataError


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def require(value: Any, message: str, call_context: Mapping[str, Any]) -> None:
    if is_missing(value):
        raise InvalidDataError(message, call_context=call_context)


def require_mapping(
    value: Any,
    message: str,
    call_context: Mapping[str, Any],
    *,
    allow_empty: bool = False,
) -> None:
    if not isinstance(value, Mapping):
        raise InvalidDataError(message, call_context=call_context)
    if not allow_empty and not value:
        raise InvalidDataError(message, call_context=call_context)


def require_table_name(table_name: Any, call_context: Mapping[str, Any]) -> None:
    if not isinstance(table_name, str) or not table_name.strip():
        raise InvalidDataError("No tableName supplied", call_context=call_context)


def require_key(key: Any, call_context: Mapping[str, Any]) -> None:
    require_mapping(key, "No item key supplied", call_context)
    for name in key:
        if not isinstance(name, str) or not name:
            raise InvalidDataError("Item key attribute names must be non-empty strings", call_context=call_context)
