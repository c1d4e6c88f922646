from __future__ import annotations

import pytest

import dynamodb_helper


def test_init_exposes_lazy_exports_via_getattr() -> None:
    assert callable(dynamodb_helper.ItemStore)
    assert callable(dynamodb_helper.create_dynamodb_client)
    assert callable(dynamodb_helper.create_boto3_config)


def test_init_exports_are_resolvable() -> None:
    for name in dynamodb_helper.__all__:
        assert getattr(dynamodb_helper, name) is not None


def test_init_unknown_attribute_raises() -> None:
    with pytest.raises(AttributeError):
        _ = dynamodb_helper.Table
