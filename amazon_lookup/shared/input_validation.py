"""
Shared input validation for item identifiers.
"""

from typing import Any, Optional, Tuple


def validate_item_id(item_id: Any) -> Tuple[bool, Optional[str]]:
    """
    Validate an item id (ASIN) before it reaches the cache or the API.

    Any non-blank string is accepted; ``amazon/<id>`` stays a distinct S3
    key for every distinct id, slashes included.

    Args:
        item_id: Candidate item id

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(item_id, str):
        return False, f"item id must be a string: {item_id!r}"

    if not item_id.strip():
        return False, f"invalid item id: {item_id!r}"

    if '\x00' in item_id:
        return False, "item id contains null bytes"

    return True, None
