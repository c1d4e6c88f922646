from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from .errors import ConditionalCheckFailedError, DBError, ItemExistsError, OperationError

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


def error_code(err: BaseException) -> str:
    if isinstance(err, ClientError):
        return str(err.response.get("Error", {}).get("Code", ""))
    return ""


def is_condition_failure(err: BaseException) -> bool:
    return error_code(err) == CONDITIONAL_CHECK_FAILED


def map_put_error(err: ClientError | BotoCoreError, call_context: Mapping[str, Any]) -> OperationError:
    if is_condition_failure(err):
        return ItemExistsError("Item with that key already exists", call_context=call_context, cause=err)
    return DBError("Put failed on dynamoDB", call_context=call_context, cause=err)


def map_update_error(err: ClientError | BotoCoreError, call_context: Mapping[str, Any]) -> OperationError:
    if is_condition_failure(err):
        return ConditionalCheckFailedError(
            "Update condition failed: item does not exist or the supplied condition is false",
            call_context=call_context,
            cause=err,
        )
    return DBError("Update failed on dynamoDB", call_context=call_context, cause=err)


def map_store_error(
    operation: str,
    err: ClientError | BotoCoreError,
    call_context: Mapping[str, Any],
) -> OperationError:
    return DBError(f"{operation} failed on dynamoDB", call_context=call_context, cause=err)
