import json

import pytest

from amazon_lookup.shared.error_handling import EmptyResultError, MalformedItemError
from amazon_lookup.shared.item_types import Item, get_item_records, normalize_item
from amazon_lookup.shared.serialization import serialize_item


def test_normalize_item_copies_known_fields():
    record = {
        "ASIN": "4088725093",
        "DetailPageURL": "https://www.amazon.co.jp/dp/4088725093",
        "ItemAttributes": {
            "Brand": "Shueisha",
            "Creator": "Oda Eiichiro",
            "Manufacturer": "Shueisha Inc.",
            "Publisher": "Shueisha",
            "ReleaseDate": "1997-12-24",
            "Studio": "Shueisha Studio",
            "Title": "One Piece 1",
        },
        "SmallImage": {"URL": "https://images/small.jpg", "Height": {"#text": "75", "@Units": "pixels"}},
        "MediumImage": {"URL": "https://images/medium.jpg"},
        "LargeImage": {"URL": "https://images/large.jpg"},
    }

    item = normalize_item({"Items": [record]})

    assert item == Item(
        ASIN="4088725093",
        Brand="Shueisha",
        Creator="Oda Eiichiro",
        Manufacturer="Shueisha Inc.",
        Publisher="Shueisha",
        ReleaseDate="1997-12-24",
        Studio="Shueisha Studio",
        Title="One Piece 1",
        URL="https://www.amazon.co.jp/dp/4088725093",
        SmallImage="https://images/small.jpg",
        MediumImage="https://images/medium.jpg",
        LargeImage="https://images/large.jpg",
    )


def test_normalize_item_fills_missing_fields_with_empty_strings(widget_record):
    item = normalize_item({"Items": [widget_record]})

    assert item.to_dict() == {
        "ASIN": "B001",
        "Brand": "",
        "Creator": "",
        "Manufacturer": "",
        "Publisher": "",
        "ReleaseDate": "",
        "Studio": "",
        "Title": "Widget",
        "URL": "http://x/B001",
        "SmallImage": "",
        "MediumImage": "",
        "LargeImage": "",
    }


def test_normalize_item_collapses_xml_shaped_values():
    record = {
        "ASIN": "B00X",
        "ItemAttributes": {
            "Creator": [
                {"@Role": "Author", "#text": "First Author"},
                {"@Role": "Illustrator", "#text": "Second"},
            ],
            "Title": {"#text": "Tagged Title"},
            "Studio": None,
        },
        "SmallImage": "not-a-mapping",
    }

    item = normalize_item({"Items": [record]})

    assert item.Creator == "First Author"
    assert item.Title == "Tagged Title"
    assert item.Studio == ""
    assert item.SmallImage == ""


def test_normalize_item_does_not_mutate_input(widget_record):
    response = {"Items": [widget_record]}
    before = repr(response)

    normalize_item(response)

    assert repr(response) == before


@pytest.mark.parametrize("response", [{"Items": []}, {}, None, {"Items": None}])
def test_normalize_item_rejects_empty_response(response):
    with pytest.raises(EmptyResultError):
        normalize_item(response)


def test_normalize_item_rejects_record_without_asin():
    with pytest.raises(MalformedItemError):
        normalize_item({"Items": [{"ItemAttributes": {"Title": "No id"}}]})


def test_get_item_records_accepts_single_mapping(widget_record):
    assert get_item_records({"Items": widget_record}) == [widget_record]


def test_item_is_immutable():
    item = Item(ASIN="B001")

    with pytest.raises(AttributeError):
        item.Title = "changed"


def test_serialize_item_is_compact_and_ordered():
    data = serialize_item(Item(ASIN="B001", Title="Widget"))

    assert data.startswith(b'{"ASIN":"B001","Brand":"","Creator":""')
    assert b" " not in data


def test_serialize_item_keeps_non_ascii_text():
    data = serialize_item(Item(ASIN="B001", Title="ワンピース"))

    assert "ワンピース".encode("utf-8") in data


def test_serialize_item_escapes_html_characters():
    item = Item(ASIN="B001", Title="Salt & Pepper <Deluxe>", URL="http://x/dp/B001?tag=a&ref=b")

    data = serialize_item(item)

    assert b'"Title":"Salt \\u0026 Pepper \\u003cDeluxe\\u003e"' in data
    assert b'"URL":"http://x/dp/B001?tag=a\\u0026ref=b"' in data
    assert json.loads(data)["Title"] == "Salt & Pepper <Deluxe>"


def test_serialize_item_escapes_line_separators():
    data = serialize_item(Item(ASIN="B001", Title="a\u2028b\u2029c"))

    assert b'"Title":"a\\u2028b\\u2029c"' in data
