"""
Item record returned to callers and the normalizer that builds it from
Product Advertising API ItemLookup responses.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from .error_handling import EmptyResultError, MalformedItemError

ITEM_ATTRIBUTE_FIELDS = (
    "Brand",
    "Creator",
    "Manufacturer",
    "Publisher",
    "ReleaseDate",
    "Studio",
    "Title",
)


@dataclass(frozen=True)
class Item:
    """Flat product metadata. Optional fields are empty strings when unknown."""

    ASIN: str
    Brand: str = ""
    Creator: str = ""
    Manufacturer: str = ""
    Publisher: str = ""
    ReleaseDate: str = ""
    Studio: str = ""
    Title: str = ""
    URL: str = ""
    SmallImage: str = ""
    MediumImage: str = ""
    LargeImage: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "ASIN": self.ASIN,
            "Brand": self.Brand,
            "Creator": self.Creator,
            "Manufacturer": self.Manufacturer,
            "Publisher": self.Publisher,
            "ReleaseDate": self.ReleaseDate,
            "Studio": self.Studio,
            "Title": self.Title,
            "URL": self.URL,
            "SmallImage": self.SmallImage,
            "MediumImage": self.MediumImage,
            "LargeImage": self.LargeImage,
        }


def _text(value: Any) -> str:
    """Collapse an XML-derived value into its text."""
    if value is None:
        return ""
    if isinstance(value, list):
        return _text(value[0]) if value else ""
    if isinstance(value, dict):
        # Elements with attributes, e.g. <Creator Role="Author">
        return _text(value.get("#text"))
    return str(value)


def _nested(record: Mapping[str, Any], *path: str) -> str:
    """Follow a key path through nested mappings, empty string when absent."""
    value: Any = record
    for key in path:
        if isinstance(value, list):
            value = value[0] if value else None
        if not isinstance(value, Mapping):
            return ""
        value = value.get(key)
    return _text(value)


def get_item_records(response: Any) -> List[Dict[str, Any]]:
    """Return the item records of a lookup response."""
    if not isinstance(response, Mapping):
        return []

    records = response.get("Items") or []
    if isinstance(records, Mapping):
        records = [records]

    return [record for record in records if isinstance(record, Mapping)]


def normalize_item(response: Any) -> Item:
    """
    Map the first record of a lookup response into an Item.

    Any further records are ignored; an ASIN lookup is expected to
    match at most one product.

    Args:
        response: Lookup response of the form {"Items": [record, ...]}

    Returns:
        Item

    Raises:
        EmptyResultError: If the response holds no records
        MalformedItemError: If the first record has no ASIN
    """
    records = get_item_records(response)
    if not records:
        raise EmptyResultError("empty amazon items")

    record = records[0]
    asin = _nested(record, "ASIN")
    if not asin:
        raise MalformedItemError("amazon item has no ASIN")

    attributes = {field: _nested(record, "ItemAttributes", field) for field in ITEM_ATTRIBUTE_FIELDS}

    return Item(
        ASIN=asin,
        URL=_nested(record, "DetailPageURL"),
        SmallImage=_nested(record, "SmallImage", "URL"),
        MediumImage=_nested(record, "MediumImage", "URL"),
        LargeImage=_nested(record, "LargeImage", "URL"),
        **attributes,
    )
