"""
Pydantic models for search index items and structured data schemas.

These models cover:
- Item / ItemMetadata / SearchQualityMetadata
- ItemStructuredData / StructuredDataObject / NamedProperty
- Schema / ObjectDefinition / PropertyDefinition
"""

from indexer.enums import ItemType, PropertyType
from indexer.models.base import IndexModel
from indexer.models.item import (
    Item,
    ItemMetadata,
    ItemStructuredData,
    NamedProperty,
    SearchQualityMetadata,
    StructuredDataObject,
)
from indexer.models.schema import ObjectDefinition, PropertyDefinition, Schema

__all__ = [
    "IndexModel",
    "Item",
    "ItemMetadata",
    "ItemStructuredData",
    "NamedProperty",
    "SearchQualityMetadata",
    "StructuredDataObject",
    "Schema",
    "ObjectDefinition",
    "PropertyDefinition",
    "ItemType",
    "PropertyType",
]
