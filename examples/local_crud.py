from __future__ import annotations

import logging
import os
import uuid

import boto3

from dynamodb_helper import ItemExistsError, ItemStore, StoreConfig, UpdateField


def _client():
    return boto3.client(
        "dynamodb",
        endpoint_url=os.environ.get("DYNAMODB_ENDPOINT", "http://localhost:8000"),
        region_name=os.environ.get("AWS_REGION", "eu-west-1"),
        aws_access_key_id=os.environ.get("AWS_ACCESS_KEY_ID", "dummy"),
        aws_secret_access_key=os.environ.get("AWS_SECRET_ACCESS_KEY", "dummy"),
    )


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    client = _client()
    table_name = f"dynamodb_helper_example_{uuid.uuid4().hex[:12]}"

    client.create_table(
        TableName=table_name,
        KeySchema=[{"AttributeName": "HashID", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "HashID", "AttributeType": "S"}],
        BillingMode="PAY_PER_REQUEST",
    )
    client.get_waiter("table_exists").wait(TableName=table_name)

    try:
        store = ItemStore(client, config=StoreConfig(key_attribute="HashID"))

        store.put({"HashID": "4666fsffr", "val": 1}, table_name)
        try:
            store.put({"HashID": "4666fsffr", "val": 2}, table_name)
        except ItemExistsError as err:
            print("put again:", err.to_dict())

        store.update({"HashID": "4666fsffr"}, table_name, [UpdateField("val", 3)])
        print("get:", store.get({"HashID": "4666fsffr"}, table_name))

        store.delete({"HashID": "4666fsffr"}, table_name, "attribute_exists(HashID)", {})
        print("after delete:", store.get({"HashID": "4666fsffr"}, table_name))
    finally:
        client.delete_table(TableName=table_name)


if __name__ == "__main__":
    main()
