from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .expressions import DEFAULT_KEY_ATTRIBUTE

DEFAULT_REGION = "eu-west-1"


@dataclass(frozen=True)
class StoreConfig:
    region: str = DEFAULT_REGION
    endpoint_url: str | None = None
    connect_timeout: float | None = None
    read_timeout: float | None = None
    key_attribute: str = DEFAULT_KEY_ATTRIBUTE

    def __post_init__(self) -> None:
        if not self.region:
            raise ValueError("region is required")
        if not self.key_attribute:
            raise ValueError("key_attribute is required")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> StoreConfig:
        region = (environ.get("DYNAMODB_HELPER_REGION") or environ.get("AWS_REGION") or "").strip()
        endpoint = (environ.get("DYNAMODB_ENDPOINT") or "").strip()
        key_attribute = (environ.get("DYNAMODB_HELPER_KEY_ATTRIBUTE") or "").strip()
        return cls(
            region=region or DEFAULT_REGION,
            endpoint_url=endpoint or None,
            key_attribute=key_attribute or DEFAULT_KEY_ATTRIBUTE,
        )
