"""
Tests for the item models.
"""

import json

import pytest
from pydantic import ValidationError

from indexer.enums import ItemType
from indexer.models import (
    Item,
    ItemMetadata,
    ItemStructuredData,
    NamedProperty,
    SearchQualityMetadata,
    StructuredDataObject,
)


class TestItem:
    """Tests for Item model."""

    def test_minimal_item(self):
        """Test an item always carries metadata."""
        item = Item(name="foo")
        assert item.metadata == ItemMetadata()
        assert item.to_dict() == {"name": "foo", "metadata": {}}

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Item(name="")

    def test_wire_names(self):
        """Test serialization uses camelCase names and omits unset fields."""
        item = Item(
            name="foo",
            item_type=ItemType.CONTENT_ITEM,
            metadata=ItemMetadata(
                source_repository_url="http://example.com",
                update_time="2018-08-08T15:48:17.000Z",
                search_quality_metadata=SearchQualityMetadata(quality=0.5),
                object_type="doc",
            ),
        )

        assert item.to_dict() == {
            "name": "foo",
            "itemType": "CONTENT_ITEM",
            "metadata": {
                "sourceRepositoryUrl": "http://example.com",
                "updateTime": "2018-08-08T15:48:17.000Z",
                "searchQualityMetadata": {"quality": 0.5},
                "objectType": "doc",
            },
        }

    def test_version_encoding(self):
        """Test the version is URL-safe base64 on the wire."""
        item = Item(name="foo", version=b"\xfb\xff version")

        encoded = item.to_dict()["version"]
        assert encoded == item.encoded_version
        assert "+" not in encoded and "/" not in encoded
        assert Item.decode_version(encoded) == b"\xfb\xff version"
        assert json.loads(item.to_json())["version"] == encoded

    def test_no_version(self):
        item = Item(name="foo")
        assert item.encoded_version is None
        assert "version" not in item.to_dict()

    def test_item_is_immutable(self):
        """Test built items cannot be modified."""
        item = Item(name="foo")
        with pytest.raises(ValidationError):
            item.name = "bar"

    def test_structured_data_alias(self):
        """Test structured data serializes under 'object'."""
        item = Item(
            name="foo",
            structured_data=ItemStructuredData(
                data_object=StructuredDataObject(
                    properties=[NamedProperty(name="year", type="integer", values=[1999])]
                )
            ),
        )

        assert item.to_dict()["structuredData"] == {
            "object": {"properties": [{"name": "year", "type": "integer", "values": [1999]}]}
        }


class TestItemMetadata:
    """Tests for ItemMetadata model."""

    def test_is_empty(self):
        assert ItemMetadata().is_empty
        assert not ItemMetadata(title="").is_empty

    def test_populate_by_alias(self):
        metadata = ItemMetadata.model_validate({"contentLanguage": "en", "mimeType": "text/html"})
        assert metadata.content_language == "en"
        assert metadata.mime_type == "text/html"


class TestSearchQualityMetadata:
    """Tests for SearchQualityMetadata model."""

    @pytest.mark.parametrize("quality", [0.0, 0.5, 1.0])
    def test_valid(self, quality):
        assert SearchQualityMetadata(quality=quality).quality == quality

    @pytest.mark.parametrize("quality", [-0.1, 1.1])
    def test_out_of_range(self, quality):
        with pytest.raises(ValidationError):
            SearchQualityMetadata(quality=quality)
