from __future__ import annotations

from typing import Any, cast

import boto3
from botocore.config import Config

from .config import StoreConfig


def create_boto3_config(config: StoreConfig) -> Config | None:
    options: dict[str, Any] = {}
    if config.connect_timeout is not None:
        options["connect_timeout"] = config.connect_timeout
    if config.read_timeout is not None:
        options["read_timeout"] = config.read_timeout
    if not options:
        return None
    return Config(**options)


def create_dynamodb_client(config: StoreConfig, *, session: Any | None = None) -> Any:
    sess = session or boto3.session.Session(region_name=config.region)
    kwargs: dict[str, Any] = {"region_name": config.region}
    if config.endpoint_url:
        kwargs["endpoint_url"] = config.endpoint_url
    boto_config = create_boto3_config(config)
    if boto_config is not None:
        kwargs["config"] = boto_config
    return cast(Any, sess).client("dynamodb", **kwargs)
