"""
JSON encoding of Item records, shared by the response and the cache.
"""

import json

from .item_types import Item

# HTML-safe escapes, applied inside string values
HTML_SAFE_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def serialize_item(item: Item) -> bytes:
    """Encode an Item as compact UTF-8 JSON, keys in field order."""
    encoded = json.dumps(item.to_dict(), ensure_ascii=False, separators=(",", ":"))
    for char, escape in HTML_SAFE_ESCAPES.items():
        encoded = encoded.replace(char, escape)
    return encoded.encode("utf-8")
