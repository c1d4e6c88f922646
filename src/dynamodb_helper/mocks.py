from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from botocore.exceptions import ClientError

_OPERATION_NAMES = {
    "put_item": "PutItem",
    "get_item": "GetItem",
    "update_item": "UpdateItem",
    "delete_item": "DeleteItem",
    "query": "Query",
}


def make_client_error(code: str, message: str = "", *, operation: str = "PutItem") -> ClientError:
    if not code:
        raise ValueError("code must be non-empty")
    return ClientError({"Error": {"Code": code, "Message": message or code}}, operation)


class _AnySentinel:
    def __repr__(self) -> str:  # pragma: no cover
        return "ANY"


ANY: Any = _AnySentinel()


def _assert_match(expected: Any, actual: Any, *, path: str) -> None:
    if expected is ANY:
        return

    if isinstance(expected, dict):
        if not isinstance(actual, dict):
            raise AssertionError(f"{path}: expected dict, got {type(actual).__name__}")
        for k, v in expected.items():
            if k not in actual:
                raise AssertionError(f"{path}: missing key {k!r}")
            _assert_match(v, actual[k], path=f"{path}.{k}")
        return

    if isinstance(expected, list):
        if not isinstance(actual, list):
            raise AssertionError(f"{path}: expected list, got {type(actual).__name__}")
        if len(expected) != len(actual):
            raise AssertionError(f"{path}: expected {len(expected)} items, got {len(actual)}")
        for i, (e, a) in enumerate(zip(expected, actual, strict=True)):
            _assert_match(e, a, path=f"{path}[{i}]")
        return

    if expected != actual:
        raise AssertionError(f"{path}: expected {expected!r}, got {actual!r}")


@dataclass(frozen=True)
class ExpectedCall:
    method: str
    expected: Mapping[str, Any] | Callable[[Mapping[str, Any]], None] | None = None
    response: Mapping[str, Any] | None = None
    error: Exception | None = None


class FakeDynamoDBClient:
    """Scripted stand-in for the boto3 low-level DynamoDB client.

    Each ``expect`` queues one call. Requests are matched against the queued
    expectation (a partial mapping, using ``ANY`` as a wildcard, or a
    callable) and every call is recorded in ``calls``.
    """

    def __init__(self) -> None:
        self._expected: list[ExpectedCall] = []
        self.calls: list[tuple[str, dict[str, Any]]] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def expect(
        self,
        method: str,
        expected: Mapping[str, Any] | Callable[[Mapping[str, Any]], None] | None = None,
        *,
        response: Mapping[str, Any] | None = None,
        error: Exception | None = None,
    ) -> None:
        if method not in _OPERATION_NAMES:
            raise ValueError(f"unsupported method: {method}")
        self._expected.append(ExpectedCall(method=method, expected=expected, response=response, error=error))

    def expect_error(
        self,
        method: str,
        code: str,
        message: str = "",
        expected: Mapping[str, Any] | Callable[[Mapping[str, Any]], None] | None = None,
    ) -> ClientError:
        """Queue a call that fails with a ``ClientError`` named after the DynamoDB operation."""
        err = make_client_error(code, message, operation=_OPERATION_NAMES.get(method, method))
        self.expect(method, expected, error=err)
        return err

    def requests(self, method: str) -> list[dict[str, Any]]:
        return [req for name, req in self.calls if name == method]

    def assert_no_pending(self) -> None:
        if self._expected:
            raise AssertionError(f"pending expected calls: {self._expected!r}")

    def _handle(self, method: str, req: dict[str, Any]) -> dict[str, Any]:
        self.calls.append((method, dict(req)))
        if not self._expected:
            raise AssertionError(f"unexpected call: {method}")

        call = self._expected.pop(0)
        if call.method != method:
            raise AssertionError(f"expected {call.method}, got {method}")

        if callable(call.expected):
            call.expected(req)
        elif call.expected is not None:
            _assert_match(dict(call.expected), req, path=method)

        if call.error is not None:
            raise call.error

        return dict(call.response or {})

    def put_item(self, **kwargs: Any) -> dict[str, Any]:
        return self._handle("put_item", kwargs)

    def get_item(self, **kwargs: Any) -> dict[str, Any]:
        return self._handle("get_item", kwargs)

    def update_item(self, **kwargs: Any) -> dict[str, Any]:
        return self._handle("update_item", kwargs)

    def delete_item(self, **kwargs: Any) -> dict[str, Any]:
        return self._handle("delete_item", kwargs)

    def query(self, **kwargs: Any) -> dict[str, Any]:
        return self._handle("query", kwargs)
