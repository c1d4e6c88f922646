from __future__ import annotations

from botocore.exceptions import EndpointConnectionError

from dynamodb_helper import (
    ConditionalCheckFailedError,
    DBError,
    ErrorCode,
    ItemExistsError,
    OperationError,
)
from dynamodb_helper.aws_errors import (
    error_code,
    is_condition_failure,
    map_put_error,
    map_store_error,
    map_update_error,
)
from dynamodb_helper.testkit import client_error, condition_failed

CTX = {"table_name": "T"}


def test_error_code_reads_client_error_code() -> None:
    assert error_code(client_error("ValidationException")) == "ValidationException"
    assert error_code(EndpointConnectionError(endpoint_url="http://x")) == ""
    assert error_code(RuntimeError("boom")) == ""


def test_is_condition_failure() -> None:
    assert is_condition_failure(condition_failed())
    assert not is_condition_failure(client_error("ProvisionedThroughputExceededException"))


def test_map_put_error_classifies_condition_failure_as_item_exists() -> None:
    err = map_put_error(condition_failed(), CTX)
    assert isinstance(err, ItemExistsError)
    assert not isinstance(err, DBError)
    assert err.code is ErrorCode.ITEM_EXISTS
    assert err.call_context == CTX


def test_map_put_error_other_failures_are_db_errors() -> None:
    cause = client_error("ResourceNotFoundException", "no table")
    err = map_put_error(cause, CTX)
    assert type(err) is DBError
    assert err.cause is cause


def test_map_update_error_refines_condition_failure() -> None:
    err = map_update_error(condition_failed(operation="UpdateItem"), CTX)
    assert isinstance(err, ConditionalCheckFailedError)
    assert isinstance(err, DBError)
    assert err.code is ErrorCode.CONDITIONAL_CHECK_FAILED
    assert str(err.code) == "DBError.ConditionalCheckFailedException"

    other = map_update_error(client_error("ValidationException", operation="UpdateItem"), CTX)
    assert type(other) is DBError


def test_map_store_error_is_always_db_error() -> None:
    transport = EndpointConnectionError(endpoint_url="http://localhost:1")
    err = map_store_error("Get", transport, CTX)
    assert type(err) is DBError
    assert err.message == "Get failed on dynamoDB"
    assert err.cause is transport

    cond = map_store_error("Delete", condition_failed(operation="DeleteItem"), CTX)
    assert type(cond) is DBError


def test_operation_error_renders_legacy_shape() -> None:
    cause = client_error("ValidationException")
    err = map_put_error(cause, {"item": {"id": "a"}, "table_name": "T", "overwrite_allowed": False})

    assert isinstance(err, OperationError)
    assert str(err) == "DBError: Put failed on dynamoDB"
    assert err.to_dict() == {
        "msg": "Put failed on dynamoDB",
        "code": "DBError",
        "DBError": cause,
        "calledWith": {"item": {"id": "a"}, "table_name": "T", "overwrite_allowed": False},
    }


def test_operation_error_call_context_is_copied() -> None:
    ctx = {"table_name": "T"}
    err = map_put_error(condition_failed(), ctx)
    ctx["table_name"] = "changed"
    assert err.call_context == {"table_name": "T"}
    assert "DBError" not in ItemExistsError("x", call_context={}).to_dict()
