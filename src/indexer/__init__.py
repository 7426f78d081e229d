"""
Item Indexer - Build search index items from extracted values.

This package resolves item metadata from explicit settings, configured
field references and configured defaults, and attaches schema-validated
structured data.
"""

__version__ = "0.1.0"

from indexer.config import ItemConfiguration
from indexer.enums import ItemType, PropertyType
from indexer.errors import (
    ConfigFormatError,
    ConfigNotInitializedError,
    IndexerError,
    InvalidArgumentError,
    SchemaValidationError,
)
from indexer.models import Item, ItemMetadata, Schema, SearchQualityMetadata
from indexer.structured_data import StructuredData
from indexer.workflow import BatchResult, FieldOrValue, ItemAssembler, ItemBuilder
from indexer.writers import JSONWriter, ParquetWriter, write_batch_to_json, write_batch_to_parquet

__all__ = [
    # Configuration and schema contexts
    "ItemConfiguration",
    "StructuredData",
    # Models
    "Item",
    "ItemMetadata",
    "SearchQualityMetadata",
    "Schema",
    "ItemType",
    "PropertyType",
    # Workflow
    "FieldOrValue",
    "ItemBuilder",
    "ItemAssembler",
    "BatchResult",
    # Errors
    "IndexerError",
    "InvalidArgumentError",
    "ConfigFormatError",
    "ConfigNotInitializedError",
    "SchemaValidationError",
    # Writers
    "JSONWriter",
    "ParquetWriter",
    "write_batch_to_json",
    "write_batch_to_parquet",
]
