"""
Event parsing and response shaping for the item lookup handler.
"""

import logging
from typing import Any, Dict, Union
from urllib.parse import parse_qs

from amazon_lookup.shared.error_handling import BadRequestError
from amazon_lookup.shared.input_validation import validate_item_id

logger = logging.getLogger(__name__)

ITEM_ID_PARAM = "item_id"


def get_query_params(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extract query parameters from API Gateway event.

    Args:
        event: API Gateway event

    Returns:
        Dict of query parameters
    """
    params = {}

    if 'queryStringParameters' in event and event['queryStringParameters']:
        params = event['queryStringParameters']

    # HTTP API v2 may only carry the raw query string
    elif event.get('rawQueryString'):
        parsed = parse_qs(event['rawQueryString'])
        params = {k: v[0] if len(v) == 1 else v for k, v in parsed.items()}

    return params


def parse_item_id(event: Any) -> str:
    """
    Extract the item id from the inbound event.

    Args:
        event: {"queryStringParameters": {"item_id": "<ASIN>"}}

    Returns:
        Item id

    Raises:
        BadRequestError: If the item id is absent, empty or malformed
    """
    if not isinstance(event, dict):
        raise BadRequestError(f"invalid event: {type(event).__name__}")

    params = get_query_params(event)
    if not isinstance(params, dict):
        raise BadRequestError("invalid queryStringParameters")

    item_id = params.get(ITEM_ID_PARAM, "")
    is_valid, error_msg = validate_item_id(item_id)
    if not is_valid:
        raise BadRequestError(error_msg)

    return item_id


def create_response(body: Union[bytes, str]) -> Dict[str, str]:
    """Wrap the item JSON in the Lambda result."""
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    return {"body": body}
