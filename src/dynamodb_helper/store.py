from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping, Sequence
from dataclasses import replace
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from .aws_errors import error_code, map_put_error, map_store_error, map_update_error
from .codec import deserialize_item, serialize_item
from .config import StoreConfig
from .errors import InvalidDataError, NotImplementedOperationError
from .expressions import UpdateField, build_existence_condition, build_update_expression, conjoin_condition
from .results import Found, GetResult, NotFound
from .runtime import create_dynamodb_client
from .validation import require, require_key, require_mapping, require_table_name

logger = logging.getLogger(__name__)


def _serialize(item: Mapping[str, Any], call_context: Mapping[str, Any]) -> dict[str, Any]:
    try:
        return serialize_item(item)
    except TypeError as err:
        raise InvalidDataError(f"unsupported attribute value: {err}", call_context=call_context) from err


class ItemStore:
    """Item operations against DynamoDB tables.

    Every operation validates its arguments, builds the low-level request,
    calls the client once and either returns the outcome or raises an
    ``OperationError`` subclass. Nothing is retried.

    When no client is injected, one is created lazily from ``config`` and
    recreated after ``set_region``. An injected client is used as given.
    """

    def __init__(
        self,
        client: Any | None = None,
        *,
        config: StoreConfig | None = None,
        client_factory: Callable[[StoreConfig], Any] | None = None,
    ) -> None:
        self._config = config or StoreConfig()
        self._client: Any | None = client
        self._owns_client = client is None
        self._client_factory = client_factory or create_dynamodb_client
        self._lock = threading.Lock()

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def region(self) -> str:
        return self._config.region

    def set_region(self, region: str | None) -> None:
        if not isinstance(region, str) or not region.strip():
            logger.warning("No region passed, AWS region remains at %s", self._config.region)
            return

        with self._lock:
            self._config = replace(self._config, region=region.strip())
            if self._owns_client:
                self._client = None
        if not self._owns_client:
            logger.warning(
                "AWS region set to %s but the injected client keeps its own region", self._config.region
            )
            return
        logger.debug("AWS region set to %s", self._config.region)

    def _get_client(self) -> Any:
        client = self._client
        if client is not None:
            return client
        with self._lock:
            if self._client is None:
                self._client = self._client_factory(self._config)
            return self._client

    def put(
        self,
        item: Mapping[str, Any],
        table_name: str,
        overwrite_allowed: bool = False,
        *,
        key_attribute: str | None = None,
    ) -> dict[str, Any]:
        ctx = {"item": item, "table_name": table_name, "overwrite_allowed": overwrite_allowed}
        require_mapping(item, "No item supplied", ctx)
        require_table_name(table_name, ctx)

        resolved_key = key_attribute or self._config.key_attribute
        if resolved_key not in item:
            raise InvalidDataError(f"Item is missing key attribute {resolved_key}", call_context=ctx)

        req: dict[str, Any] = {"TableName": table_name, "Item": _serialize(item, ctx)}
        if not overwrite_allowed:
            req["ConditionExpression"] = build_existence_condition(False, key_attribute=resolved_key)

        logger.debug("put_item table=%s overwrite_allowed=%s", table_name, overwrite_allowed)
        try:
            return self._get_client().put_item(**req)
        except (ClientError, BotoCoreError) as err:
            logger.error("put_item failed on %s: %s", table_name, error_code(err) or err)
            raise map_put_error(err, ctx) from err

    def update(
        self,
        key: Mapping[str, Any],
        table_name: str,
        fields: Sequence[UpdateField | tuple[str, Any] | Mapping[str, Any]],
        extra_condition: str = "",
        *,
        extra_values: Mapping[str, Any] | None = None,
        attribute_names: Mapping[str, str] | None = None,
        return_values: str | None = None,
    ) -> dict[str, Any]:
        ctx = {
            "key": key,
            "table_name": table_name,
            "fields": fields,
            "extra_condition": extra_condition,
        }
        if extra_values is not None:
            ctx["extra_values"] = extra_values
        if attribute_names is not None:
            ctx["attribute_names"] = attribute_names

        require_key(key, ctx)
        require(fields, "No update fields supplied", ctx)
        require_table_name(table_name, ctx)
        if extra_condition is not None and not isinstance(extra_condition, str):
            raise InvalidDataError("extra_condition must be a string", call_context=ctx)

        update_expr, values = build_update_expression(fields, call_context=ctx)
        if extra_values:
            require_mapping(extra_values, "extra_values must be a mapping", ctx)
            for placeholder, value in extra_values.items():
                if placeholder in values:
                    raise InvalidDataError(
                        f"condition placeholder {placeholder} collides with an update field",
                        call_context=ctx,
                    )
                values[placeholder] = value

        partition_key = next(iter(key))
        req: dict[str, Any] = {
            "TableName": table_name,
            "Key": _serialize(key, ctx),
            "UpdateExpression": update_expr,
            "ConditionExpression": conjoin_condition(
                build_existence_condition(True, key_attribute=partition_key), extra_condition
            ),
            "ExpressionAttributeValues": _serialize(values, ctx),
        }
        if attribute_names:
            require_mapping(attribute_names, "attribute_names must be a mapping", ctx)
            req["ExpressionAttributeNames"] = dict(attribute_names)
        if return_values:
            req["ReturnValues"] = return_values

        logger.debug("update_item table=%s expression=%r", table_name, update_expr)
        try:
            return self._get_client().update_item(**req)
        except (ClientError, BotoCoreError) as err:
            logger.error("update_item failed on %s: %s", table_name, error_code(err) or err)
            raise map_update_error(err, ctx) from err

    def delete(
        self,
        key: Mapping[str, Any],
        table_name: str,
        condition: str,
        condition_values: Mapping[str, Any],
    ) -> dict[str, Any]:
        ctx = {
            "key": key,
            "table_name": table_name,
            "condition": condition,
            "condition_values": condition_values,
        }
        require_key(key, ctx)
        require_table_name(table_name, ctx)
        if not isinstance(condition, str):
            raise InvalidDataError("No delete condition supplied", call_context=ctx)
        require(condition, "No delete condition supplied", ctx)
        require_mapping(condition_values, "No delete condition values supplied", ctx, allow_empty=True)

        req: dict[str, Any] = {
            "TableName": table_name,
            "Key": _serialize(key, ctx),
            "ConditionExpression": condition,
        }
        # DynamoDB rejects an empty ExpressionAttributeValues map.
        if condition_values:
            req["ExpressionAttributeValues"] = _serialize(condition_values, ctx)

        logger.debug("delete_item table=%s condition=%r", table_name, condition)
        try:
            return self._get_client().delete_item(**req)
        except (ClientError, BotoCoreError) as err:
            logger.error("delete_item failed on %s: %s", table_name, error_code(err) or err)
            raise map_store_error("Delete", err, ctx) from err

    def get(
        self,
        key: Mapping[str, Any],
        table_name: str,
        *,
        consistent_read: bool = False,
    ) -> GetResult:
        ctx = {"key": key, "table_name": table_name}
        require_key(key, ctx)
        require_table_name(table_name, ctx)

        req: dict[str, Any] = {"TableName": table_name, "Key": _serialize(key, ctx)}
        if consistent_read:
            req["ConsistentRead"] = True

        logger.debug("get_item table=%s", table_name)
        try:
            resp = self._get_client().get_item(**req)
        except (ClientError, BotoCoreError) as err:
            logger.error("get_item failed on %s: %s", table_name, error_code(err) or err)
            raise map_store_error("Get", err, ctx) from err

        item = resp.get("Item")
        if not item:
            return NotFound()
        return Found(item=deserialize_item(item))

    def query(
        self,
        key_condition: str,
        attribute_names: Mapping[str, str],
        attribute_values: Mapping[str, Any],
        table_name: str,
        index_name: str | None = "",
    ) -> list[dict[str, Any]]:
        """Return the items matching ``key_condition`` from one page of results.

        ``index_name`` targets a secondary index; empty means the table's
        primary index. The condition may only reference indexed attributes,
        which is left to DynamoDB to enforce.
        """
        ctx = {
            "key_condition": key_condition,
            "attribute_names": attribute_names,
            "attribute_values": attribute_values,
            "table_name": table_name,
            "index_name": index_name,
        }
        if not isinstance(key_condition, str):
            raise InvalidDataError("No key condition supplied", call_context=ctx)
        require(key_condition, "No key condition supplied", ctx)
        require_mapping(attribute_names, "No expression attribute names supplied", ctx)
        require_mapping(attribute_values, "No expression attribute values supplied", ctx)
        require_table_name(table_name, ctx)
        if index_name is not None and not isinstance(index_name, str):
            raise InvalidDataError("index_name must be a string", call_context=ctx)

        req: dict[str, Any] = {
            "TableName": table_name,
            "KeyConditionExpression": key_condition,
            "ExpressionAttributeNames": dict(attribute_names),
            "ExpressionAttributeValues": _serialize(attribute_values, ctx),
        }
        if index_name and index_name.strip():
            req["IndexName"] = index_name.strip()

        logger.debug("query table=%s index=%s", table_name, req.get("IndexName"))
        try:
            resp = self._get_client().query(**req)
        except (ClientError, BotoCoreError) as err:
            logger.error("query failed on %s: %s", table_name, error_code(err) or err)
            raise map_store_error("Query", err, ctx) from err

        if resp.get("LastEvaluatedKey"):
            logger.debug("query on %s has more results; only the first page is returned", table_name)
        return [deserialize_item(item) for item in resp.get("Items", [])]

    def scan(self, table_name: str, **kwargs: Any) -> list[dict[str, Any]]:
        raise NotImplementedOperationError(
            "Full table scan is not implemented",
            call_context={"table_name": table_name, **kwargs},
        )
