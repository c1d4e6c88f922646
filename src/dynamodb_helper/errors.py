from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any, ClassVar


class ErrorCode(StrEnum):
    INVALID_DATA = "InvalidData"
    ITEM_EXISTS = "ItemExists"
    DB_ERROR = "DBError"
    CONDITIONAL_CHECK_FAILED = "DBError.ConditionalCheckFailedException"
    NOT_IMPLEMENTED = "NotImplemented"


class OperationError(Exception):
    """Base error for every failed item operation.

    ``call_context`` echoes the arguments the operation was called with so a
    failure can be diagnosed without the caller's stack. ``cause`` is the
    underlying botocore exception when the store or transport failed.
    """

    code: ClassVar[ErrorCode]

    def __init__(
        self,
        message: str,
        *,
        call_context: Mapping[str, Any],
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.call_context = dict(call_context)
        self.cause = cause

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"msg": self.message, "code": str(self.code)}
        if self.cause is not None:
            out["DBError"] = self.cause
        out["calledWith"] = dict(self.call_context)
        return out


class InvalidDataError(OperationError):
    code = ErrorCode.INVALID_DATA


class ItemExistsError(OperationError):
    code = ErrorCode.ITEM_EXISTS


class DBError(OperationError):
    code = ErrorCode.DB_ERROR


class ConditionalCheckFailedError(DBError):
    code = ErrorCode.CONDITIONAL_CHECK_FAILED


class NotImplementedOperationError(OperationError):
    code = ErrorCode.NOT_IMPLEMENTED
