"""
Cache-aside item lookup.

Reads the S3 cache first, falls back to the Product Advertising API on a
miss, and writes the normalized item back. Cache failures never fail a
request; they are logged as warnings and the item is fetched fresh.
"""

import logging
from typing import Any

from .amazon_client import AmazonClient, build_lookup_params
from .config import LookupConfig
from .error_handling import (
    BadRequestError,
    EmptyResultError,
    InternalError,
    MalformedItemError,
)
from .input_validation import validate_item_id
from .item_cache import ItemCache, create_s3_client
from .item_types import normalize_item
from .serialization import serialize_item

logger = logging.getLogger(__name__)


class ItemService:
    """Resolves item ids to serialized item JSON."""

    def __init__(self, cache: ItemCache, client: Any):
        self.cache = cache
        self.client = client

    def resolve(self, item_id: str) -> bytes:
        """
        Return the item JSON for an ASIN.

        A cached entry is returned as stored, without revalidation.

        Args:
            item_id: ASIN

        Returns:
            Item JSON as UTF-8 bytes

        Raises:
            BadRequestError: If the item id is empty or invalid
            InternalError: If the lookup fails, returns no items, or the
                item cannot be serialized
        """
        is_valid, error_msg = validate_item_id(item_id)
        if not is_valid:
            raise BadRequestError(error_msg)

        try:
            cached = self.cache.get(item_id)
        except Exception as e:
            logger.warning(f"failed get a cache: {e}")
            cached = None

        if cached is not None:
            return cached

        params = build_lookup_params(item_id)
        try:
            response = self.client.lookup(params)
        except Exception as e:
            raise InternalError(f"failed to get item information: {e}") from e

        try:
            item = normalize_item(response)
        except (EmptyResultError, MalformedItemError) as e:
            raise InternalError(f"failed to get item from response: {e}") from e

        if item.ASIN != item_id:
            logger.info(f"Lookup for {item_id} returned item {item.ASIN}")

        try:
            self.cache.put(item)
        except Exception as e:
            logger.warning(f"failed to save a cache: {e}")

        try:
            body = serialize_item(item)
        except (TypeError, ValueError) as e:
            raise InternalError(f"failed to marshal json: {e}") from e

        logger.info(f"item id({item_id}) json: {body.decode('utf-8')}")
        return body


def build_item_service(config: LookupConfig) -> ItemService:
    """Construct a fresh service and its clients for one invocation."""
    cache = ItemCache(create_s3_client(config), config.bucket)
    client = AmazonClient(config)
    return ItemService(cache, client)
