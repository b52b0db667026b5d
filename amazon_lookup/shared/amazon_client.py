"""
Product Advertising API client.

Wraps bottlenose for request signing and parses the XML reply into
``{"Items": [record, ...]}`` where each record is the ``<Item>`` element
as a dict (e.g. ``{"ASIN": ..., "ItemAttributes": {"Title": ...}}``).
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

import bottlenose
import xmltodict

from .config import LookupConfig
from .error_handling import AmazonLookupError

logger = logging.getLogger(__name__)

LOOKUP_ID_TYPE = "ASIN"
LOOKUP_OPERATION = "ItemLookup"
LOOKUP_RESPONSE_GROUP = "Large"


def build_lookup_params(item_id: str) -> Dict[str, str]:
    """Fixed ItemLookup parameters for a single ASIN."""
    return {
        "IdType": LOOKUP_ID_TYPE,
        "ItemId": item_id,
        "Operation": LOOKUP_OPERATION,
        "ResponseGroup": LOOKUP_RESPONSE_GROUP,
    }


def parse_lookup_response(xml: Any) -> Dict[str, Any]:
    """Parse an ItemLookup XML reply into nested dicts."""
    return xmltodict.parse(xml, force_list=("Items", "Item", "Error"))


def _format_errors(errors: List[Mapping[str, Any]]) -> str:
    return "; ".join(f"{e.get('Code')}: {e.get('Message')}" for e in errors)


def _response_items(document: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """Collect item records and raise on errors reported by the API."""
    root = next(iter(document.values()), None) if document else None
    if not isinstance(root, Mapping):
        raise AmazonLookupError("unexpected response document")

    # <ItemLookupErrorResponse> carries errors at the top level
    if root.get("Error"):
        raise AmazonLookupError(_format_errors(root["Error"]))

    records: List[Dict[str, Any]] = []
    for items in root.get("Items") or []:
        if not isinstance(items, Mapping):
            continue
        request = items.get("Request") or {}
        errors = (request.get("Errors") or {}).get("Error") or []
        if errors:
            raise AmazonLookupError(_format_errors(errors))
        records.extend(items.get("Item") or [])

    return records


class AmazonClient:
    """ItemLookup client for one marketplace."""

    def __init__(self, config: LookupConfig, api: Optional[Any] = None):
        self.config = config
        self._api = api or bottlenose.Amazon(
            AWSAccessKeyId=config.access_key,
            AWSSecretAccessKey=config.secret_key,
            AssociateTag=config.associate_tag,
            Region=config.domain,
            Parser=parse_lookup_response,
        )

    def lookup(self, params: Mapping[str, str]) -> Dict[str, Any]:
        """
        Call the API operation named in params.

        Args:
            params: Request parameters including "Operation"

        Returns:
            {"Items": [record, ...]}

        Raises:
            AmazonLookupError: If the API reports request errors
        """
        request = dict(params)
        operation = request.pop("Operation", LOOKUP_OPERATION)

        logger.info(f"Calling {operation} on {self.config.domain} with {request}")
        document = getattr(self._api, operation)(**request)

        records = _response_items(document)
        logger.info(f"{operation} returned {len(records)} item(s)")
        return {"Items": records}
