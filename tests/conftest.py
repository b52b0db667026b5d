from __future__ import annotations

import io
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from amazon_lookup.shared.config import LookupConfig
from amazon_lookup.shared.item_cache import ItemCache
from amazon_lookup.shared.item_service import ItemService


def client_error(code: str, status: int = 400, operation: str = "GetObject") -> ClientError:
    return ClientError(
        {
            "Error": {"Code": code, "Message": f"{code} raised in test"},
            "ResponseMetadata": {"HTTPStatusCode": status},
        },
        operation,
    )


def s3_body(data: bytes) -> Dict[str, Any]:
    return {"Body": io.BytesIO(data)}


@pytest.fixture
def config() -> LookupConfig:
    return LookupConfig(
        region="ap-northeast-1",
        bucket="item-cache",
        access_key="AKIDEXAMPLE",
        secret_key="secret",
        associate_tag="tag-22",
        domain="JP",
    )


@pytest.fixture
def s3_client() -> MagicMock:
    client = MagicMock(name="s3_client")
    client.get_object.side_effect = client_error("NoSuchKey", 404)
    return client


@pytest.fixture
def lookup_client() -> MagicMock:
    client = MagicMock(name="lookup_client")
    client.lookup.return_value = {"Items": []}
    return client


@pytest.fixture
def cache(s3_client: MagicMock) -> ItemCache:
    return ItemCache(s3_client, "item-cache")


@pytest.fixture
def service(cache: ItemCache, lookup_client: MagicMock) -> ItemService:
    return ItemService(cache, lookup_client)


@pytest.fixture
def widget_record() -> Dict[str, Any]:
    return {
        "ASIN": "B001",
        "ItemAttributes": {"Title": "Widget"},
        "DetailPageURL": "http://x/B001",
    }
