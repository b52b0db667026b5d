"""
Amazon item lookup Lambda handler.

Returns normalized product metadata for an ASIN, using S3 as a read-through
cache in front of the Product Advertising API.
"""

import os
import json
import logging
from typing import Dict, Any

from amazon_lookup.shared.config import LookupConfig
from amazon_lookup.shared.error_handling import (
    ConfigurationError,
    InternalError,
    ItemLookupError,
    sanitize_error_message,
)
from amazon_lookup.shared.item_service import build_item_service
from .utils import create_response, parse_item_id

# Configure logging
logger = logging.getLogger(__name__)
logging.getLogger('amazon_lookup').setLevel(os.getenv('LOG_LEVEL', 'INFO'))


def handler(event: Dict[str, Any], context: Any) -> Dict[str, str]:
    """
    Main Lambda handler for item lookup.

    Args:
        event: API Gateway event with queryStringParameters.item_id
        context: Lambda context

    Returns:
        {"body": "<item JSON>"}

    Raises:
        BadRequestError: If the item id is missing or invalid
        InternalError: For any other failure
    """
    logger.info(f"Event: {json.dumps(event, default=str)}")

    item_id = parse_item_id(event)

    try:
        config = LookupConfig.from_env()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        raise InternalError(str(e)) from e

    try:
        service = build_item_service(config)
        body = service.resolve(item_id)
    except ItemLookupError:
        raise
    except Exception as e:
        raise InternalError(sanitize_error_message(e)) from e

    return create_response(body)
