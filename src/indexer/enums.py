"""
Enums for item and schema attributes.

These enums define the valid values for item types and structured data
property types.
"""

from enum import Enum


class ItemType(str, Enum):
    """Kinds of items in the search index."""

    CONTENT_ITEM = "CONTENT_ITEM"
    CONTAINER_ITEM = "CONTAINER_ITEM"
    VIRTUAL_CONTAINER_ITEM = "VIRTUAL_CONTAINER_ITEM"


class PropertyType(str, Enum):
    """Value types a structured data property can declare."""

    TEXT = "text"
    HTML = "html"
    INTEGER = "integer"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    DATE = "date"
    TIMESTAMP = "timestamp"
    ENUM = "enum"
