from __future__ import annotations

from botocore.exceptions import ClientError

from .mocks import ANY, FakeDynamoDBClient
from .mocks import make_client_error as client_error


def condition_failed(*, operation: str = "PutItem") -> ClientError:
    return client_error("ConditionalCheckFailedException", "The conditional request failed", operation=operation)


__all__ = [
    "ANY",
    "FakeDynamoDBClient",
    "client_error",
    "condition_failed",
]
