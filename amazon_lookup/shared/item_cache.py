"""
S3-backed cache of serialized items.

Entries live under ``amazon/<ASIN>`` and are never expired or deleted.
"""

import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .config import LookupConfig
from .error_handling import CacheReadError, CacheWriteError
from .item_types import Item
from .serialization import serialize_item

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "amazon"

NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


def create_s3_client(config: LookupConfig) -> Any:
    """
    Create the S3 client for one invocation.

    In Lambda, use the IAM role. Locally, use an endpoint override or a
    named profile when one is configured.
    """
    if config.s3_endpoint:
        # Use a local S3 (minio, localstack)
        return boto3.client("s3", endpoint_url=config.s3_endpoint, region_name=config.region)
    if not config.is_lambda and config.aws_profile:
        session = boto3.Session(profile_name=config.aws_profile, region_name=config.region)
        return session.client("s3")
    return boto3.client("s3", region_name=config.region)


def cache_key(item_id: str) -> str:
    return f"{CACHE_KEY_PREFIX}/{item_id}"


def _is_not_found(error: ClientError) -> bool:
    code = str(error.response.get("Error", {}).get("Code", ""))
    status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return code in NOT_FOUND_CODES or status == 404


class ItemCache:
    """Read-through cache of item JSON keyed by ASIN."""

    def __init__(self, s3_client: Any, bucket: str):
        self.s3 = s3_client
        self.bucket = bucket

    def get(self, item_id: str) -> Optional[bytes]:
        """
        Read a cached item.

        Args:
            item_id: ASIN

        Returns:
            Cached JSON bytes, or None when no entry exists

        Raises:
            CacheReadError: For any failure other than a missing entry
        """
        key = cache_key(item_id)

        try:
            response = self.s3.get_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if _is_not_found(e):
                logger.info(f"Cache miss for {key}")
                return None
            raise CacheReadError(f"failed to get s3://{self.bucket}/{key}: {e}") from e
        except BotoCoreError as e:
            raise CacheReadError(f"failed to get s3://{self.bucket}/{key}: {e}") from e

        body = response["Body"]
        try:
            data = body.read()
        except (BotoCoreError, OSError) as e:
            raise CacheReadError(f"failed to read s3://{self.bucket}/{key}: {e}") from e
        finally:
            body.close()

        try:
            data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CacheReadError(f"cached body of {key} is not valid UTF-8") from e

        logger.info(f"Cache hit for {key} ({len(data)} bytes)")
        return data

    def put(self, item: Item) -> None:
        """
        Store an item under its own ASIN.

        Raises:
            CacheWriteError: If the item cannot be encoded or stored
        """
        key = cache_key(item.ASIN)

        try:
            data = serialize_item(item)
            self.s3.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType="application/json",
            )
        except (ClientError, BotoCoreError, TypeError, ValueError) as e:
            raise CacheWriteError(f"failed to put s3://{self.bucket}/{key}: {e}") from e

        logger.info(f"Cached {key} ({len(data)} bytes)")
