"""
Exception hierarchy for item building.

Configuration errors are raised eagerly when configuration is loaded.
Schema errors surface from ``ItemBuilder.build()``. Per-item value
problems are never raised; the affected attribute is omitted instead.
"""

from typing import Optional


class IndexerError(Exception):
    """Base class for all item indexer errors."""


class InvalidArgumentError(IndexerError, ValueError):
    """A required argument (such as the item identifier) is missing or invalid."""


class ConfigNotInitializedError(IndexerError):
    """A configuration context was used before ``init()`` was called."""


class ConfigFormatError(IndexerError):
    """A configuration value or file could not be parsed."""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        raw_value: Optional[str] = None,
    ):
        super().__init__(message)
        self.key = key
        self.raw_value = raw_value


class SchemaValidationError(IndexerError):
    """Structured data could not be built for an object type."""

    def __init__(
        self,
        message: str,
        object_type: Optional[str] = None,
        property_name: Optional[str] = None,
    ):
        super().__init__(message)
        self.object_type = object_type
        self.property_name = property_name
