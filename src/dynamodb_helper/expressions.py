from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .errors import InvalidDataError

DEFAULT_KEY_ATTRIBUTE = "id"


@dataclass(frozen=True)
class UpdateField:
    name: str
    value: Any = None

    @classmethod
    def coerce(cls, raw: Any) -> UpdateField:
        """Accept an ``UpdateField``, a ``(name, value)`` pair or a ``{"name", "value"}`` mapping."""
        if isinstance(raw, UpdateField):
            return raw
        if isinstance(raw, Mapping):
            return cls(name=raw.get("name"), value=raw.get("value"))  # type: ignore[arg-type]
        if isinstance(raw, tuple) and len(raw) == 2:
            return cls(name=raw[0], value=raw[1])
        raise TypeError(f"unsupported update field: {raw!r}")


def coerce_fields(fields: Any, call_context: Mapping[str, Any]) -> list[UpdateField]:
    if fields is None or isinstance(fields, (str, bytes, Mapping)) or not isinstance(fields, Sequence):
        raise InvalidDataError("No update fields supplied", call_context=call_context)
    if not fields:
        raise InvalidDataError("No update fields supplied", call_context=call_context)

    out: list[UpdateField] = []
    for i, raw in enumerate(fields):
        try:
            field = UpdateField.coerce(raw)
        except TypeError as err:
            raise InvalidDataError(f"update field {i} is malformed", call_context=call_context) from err
        if not isinstance(field.name, str) or not field.name:
            raise InvalidDataError(f"update field {i} has no name", call_context=call_context)
        out.append(field)
    return out


def build_update_expression(
    fields: Sequence[UpdateField | tuple[str, Any] | Mapping[str, Any]],
    *,
    call_context: Mapping[str, Any] | None = None,
) -> tuple[str, dict[str, Any]]:
    """Build a ``set`` update expression and its value placeholders.

    Clauses keep the input order. A repeated field name produces a repeated
    clause, and its placeholder holds the last value given.
    """
    ctx = call_context if call_context is not None else {"fields": fields}
    coerced = coerce_fields(fields, ctx)

    clauses: list[str] = []
    values: dict[str, Any] = {}
    for field in coerced:
        placeholder = f":{field.name}"
        clauses.append(f"{field.name} = {placeholder}")
        values[placeholder] = field.value

    return "set " + ", ".join(clauses), values


def build_existence_condition(
    require_exists: bool,
    extra: str | None = None,
    *,
    key_attribute: str = DEFAULT_KEY_ATTRIBUTE,
) -> str:
    if not key_attribute:
        raise InvalidDataError(
            "No key attribute supplied",
            call_context={"require_exists": require_exists, "extra": extra, "key_attribute": key_attribute},
        )

    if require_exists:
        base = f"attribute_exists({key_attribute})"
    else:
        base = f"attribute_not_exists({key_attribute})"

    if extra and extra.strip():
        return f"{base}, {extra.strip()}"
    return base


def conjoin_condition(base: str, extra: str | None = None) -> str:
    """Join a caller condition to ``base`` with ``AND`` for a request DynamoDB evaluates."""
    if extra and extra.strip():
        return f"{base} AND ({extra.strip()})"
    return base
