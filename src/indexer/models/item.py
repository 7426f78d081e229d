"""
Item models for the search index.

An Item carries its name, optional queueing and versioning attributes,
an always-present metadata sub-record and optional structured data.
"""

import base64
from typing import Any, Optional

from pydantic import Field, field_serializer

from indexer.enums import ItemType, PropertyType
from indexer.models.base import IndexModel


def encode_version(version: bytes) -> str:
    """Encode version bytes as URL-safe base64."""
    return base64.urlsafe_b64encode(version).decode("ascii")


class SearchQualityMetadata(IndexModel):
    """Quality hints used by the search ranking."""

    quality: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Indication of item quality, between 0.0 and 1.0",
    )


class NamedProperty(IndexModel):
    """A single structured data property and its coerced values."""

    name: str = Field(..., description="Property name as declared in the schema")
    type: PropertyType = Field(default=PropertyType.TEXT)
    values: list[Any] = Field(default_factory=list)


class StructuredDataObject(IndexModel):
    """Schema-validated property set for one object type."""

    properties: list[NamedProperty] = Field(default_factory=list)

    def get(self, name: str) -> Optional[NamedProperty]:
        """Look up a property by name."""
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None


class ItemStructuredData(IndexModel):
    """Structured data payload attached to an item."""

    data_object: StructuredDataObject = Field(..., alias="object")


class ItemMetadata(IndexModel):
    """
    Resolved scalar attributes of an item.

    Attributes:
        title: Display title
        source_repository_url: Link back to the item in its repository
        content_language: BCP-47 language code
        update_time: Last modification, as a canonical instant
        create_time: Creation, as a canonical instant
        mime_type: Content type of the item content
        hash: Opaque change-detection hash
        container_name: Name of the parent container item
        search_quality_metadata: Ranking quality hints
        object_type: Structured data object type name
    """

    title: Optional[str] = None
    source_repository_url: Optional[str] = Field(default=None, alias="sourceRepositoryUrl")
    content_language: Optional[str] = Field(default=None, alias="contentLanguage")
    update_time: Optional[str] = Field(default=None, alias="updateTime")
    create_time: Optional[str] = Field(default=None, alias="createTime")
    mime_type: Optional[str] = Field(default=None, alias="mimeType")
    hash: Optional[str] = None
    container_name: Optional[str] = Field(default=None, alias="containerName")
    search_quality_metadata: Optional[SearchQualityMetadata] = Field(
        default=None, alias="searchQualityMetadata"
    )
    object_type: Optional[str] = Field(default=None, alias="objectType")

    @property
    def is_empty(self) -> bool:
        """True when no attribute was resolved."""
        return not self.model_dump(exclude_none=True)


class Item(IndexModel):
    """
    A record ready to be pushed to the search index.

    The version is held as raw bytes and rendered as URL-safe base64
    when serialized.
    """

    name: str = Field(..., min_length=1, description="Unique item identifier")
    item_type: Optional[ItemType] = Field(default=None, alias="itemType")
    queue: Optional[str] = None
    version: Optional[bytes] = None
    metadata: ItemMetadata = Field(default_factory=ItemMetadata)
    structured_data: Optional[ItemStructuredData] = Field(default=None, alias="structuredData")

    @field_serializer("version")
    def serialize_version(self, version: Optional[bytes]) -> Optional[str]:
        return encode_version(version) if version is not None else None

    @property
    def encoded_version(self) -> Optional[str]:
        """The version as it appears on the wire."""
        return encode_version(self.version) if self.version is not None else None

    @staticmethod
    def decode_version(encoded: str) -> bytes:
        """Decode a wire version back to bytes."""
        return base64.urlsafe_b64decode(encoded.encode("ascii"))
