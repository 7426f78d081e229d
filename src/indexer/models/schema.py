"""
Structured data schema definitions.

A Schema declares object types and, for each, the properties that may
be extracted from an item's value map.
"""

import json
from pathlib import Path

from pydantic import Field

from indexer.enums import PropertyType
from indexer.models.base import IndexModel


class PropertyDefinition(IndexModel):
    """Declaration of one property of an object type."""

    name: str = Field(..., min_length=1)
    type: PropertyType = Field(default=PropertyType.TEXT)
    is_repeatable: bool = Field(default=False, alias="isRepeatable")
    is_required: bool = Field(default=False, alias="isRequired")


class ObjectDefinition(IndexModel):
    """An object type and its declared properties."""

    name: str = Field(..., min_length=1)
    property_definitions: list[PropertyDefinition] = Field(
        default_factory=list, alias="propertyDefinitions"
    )


class Schema(IndexModel):
    """Collection of object definitions."""

    object_definitions: list[ObjectDefinition] = Field(
        default_factory=list, alias="objectDefinitions"
    )

    @classmethod
    def from_file(cls, path: str | Path) -> "Schema":
        """
        Load a schema from a JSON file.

        Args:
            path: Path to a JSON document with an ``objectDefinitions`` list

        Returns:
            Schema instance
        """
        with open(path) as f:
            return cls.model_validate(json.load(f))
