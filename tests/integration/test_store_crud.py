from __future__ import annotations

import os
import uuid

import boto3
import pytest

from dynamodb_helper import (
    ConditionalCheckFailedError,
    Found,
    ItemExistsError,
    ItemStore,
    NotFound,
    StoreConfig,
)

pytestmark = pytest.mark.skipif(
    not os.environ.get("DYNAMODB_ENDPOINT"),
    reason="DYNAMODB_ENDPOINT is not set (DynamoDB Local required)",
)


def _client():
    return boto3.client(
        "dynamodb",
        endpoint_url=os.environ["DYNAMODB_ENDPOINT"],
        region_name=os.environ.get("AWS_REGION", "eu-west-1"),
        aws_access_key_id=os.environ.get("AWS_ACCESS_KEY_ID", "dummy"),
        aws_secret_access_key=os.environ.get("AWS_SECRET_ACCESS_KEY", "dummy"),
    )


def test_store_crud_round_trip_and_conditions() -> None:
    table_name = f"dynamodb_helper_{uuid.uuid4().hex[:12]}"
    client = _client()
    client.create_table(
        TableName=table_name,
        KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
        BillingMode="PAY_PER_REQUEST",
    )
    client.get_waiter("table_exists").wait(TableName=table_name)

    try:
        store = ItemStore(client, config=StoreConfig.from_env())
        item = {"id": "4666fsffr", "val": 1}

        store.put(item, table_name)
        with pytest.raises(ItemExistsError):
            store.put(item, table_name)

        assert store.get({"id": "4666fsffr"}, table_name) == Found(item=item)

        store.update({"id": "4666fsffr"}, table_name, [("nickname", "bob")])
        with pytest.raises(ConditionalCheckFailedError):
            store.update({"id": "ghost"}, table_name, [("nickname", "bob")])

        got = store.query("#id = :id", {"#id": "id"}, {":id": "4666fsffr"}, table_name)
        assert got == [{"id": "4666fsffr", "val": 1, "nickname": "bob"}]

        store.delete({"id": "4666fsffr"}, table_name, "attribute_exists(id)", {})
        assert store.get({"id": "4666fsffr"}, table_name) == NotFound()
    finally:
        client.delete_table(TableName=table_name)
