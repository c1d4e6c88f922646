from __future__ import annotations

import json
import re
from importlib.resources import files
from typing import TYPE_CHECKING, Any

from .config import DEFAULT_REGION, StoreConfig
from .errors import (
    ConditionalCheckFailedError,
    DBError,
    ErrorCode,
    InvalidDataError,
    ItemExistsError,
    NotImplementedOperationError,
    OperationError,
)
from .expressions import (
    DEFAULT_KEY_ATTRIBUTE,
    UpdateField,
    build_existence_condition,
    build_update_expression,
    conjoin_condition,
)
from .results import Found, GetResult, NotFound

if TYPE_CHECKING:
    from .runtime import create_boto3_config, create_dynamodb_client
    from .store import ItemStore


def _read_repo_version() -> str:
    try:
        data = json.loads(files(__package__).joinpath("version.json").read_text(encoding="utf-8"))
    except Exception:
        return "0.0.0"

    version = data.get("version")
    return version if isinstance(version, str) and version else "0.0.0"


def _normalize_repo_version(repo_version: str) -> str:
    match = re.match(r"^(\d+\.\d+\.\d+)-rc\.?([0-9]+)$", repo_version)
    if match:
        return f"{match.group(1)}rc{match.group(2)}"
    return repo_version


__repo_version__ = _read_repo_version()
__version__ = _normalize_repo_version(__repo_version__)


def __getattr__(name: str) -> Any:
    if name == "ItemStore":
        from .store import ItemStore

        return ItemStore
    if name in {"create_boto3_config", "create_dynamodb_client"}:
        from . import runtime

        return getattr(runtime, name)
    raise AttributeError(name)


__all__ = [
    "ConditionalCheckFailedError",
    "create_boto3_config",
    "create_dynamodb_client",
    "DBError",
    "DEFAULT_KEY_ATTRIBUTE",
    "DEFAULT_REGION",
    "ErrorCode",
    "Found",
    "GetResult",
    "InvalidDataError",
    "ItemExistsError",
    "ItemStore",
    "NotFound",
    "NotImplementedOperationError",
    "OperationError",
    "StoreConfig",
    "UpdateField",
    "__repo_version__",
    "__version__",
    "build_existence_condition",
    "conjoin_condition",
    "build_update_expression",
]
