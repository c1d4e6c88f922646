from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def _to_dynamodb_value(value: Any) -> Any:
    # TypeSerializer rejects float; go through str to keep the decimal digits the caller sees.
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, Mapping):
        return {k: _to_dynamodb_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_dynamodb_value(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return {_to_dynamodb_value(v) for v in value}
    return value


def _from_dynamodb_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        return value
    if isinstance(value, dict):
        return {k: _from_dynamodb_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_from_dynamodb_value(v) for v in value]
    if isinstance(value, set):
        return {_from_dynamodb_value(v) for v in value}
    return value


def serialize_value(value: Any) -> dict[str, Any]:
    return _serializer.serialize(_to_dynamodb_value(value))


def serialize_item(item: Mapping[str, Any]) -> dict[str, Any]:
    return {name: serialize_value(value) for name, value in item.items()}


def deserialize_item(item: Mapping[str, Any]) -> dict[str, Any]:
    return {name: _from_dynamodb_value(_deserializer.deserialize(value)) for name, value in item.items()}
