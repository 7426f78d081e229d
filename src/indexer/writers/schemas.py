"""
PyArrow schema definitions for item exports.

Metadata attributes are flattened into columns; structured data is kept
as a JSON string.
"""

import pyarrow as pa

# Schema for exported items
ITEM_SCHEMA = pa.schema(
    [
        # Item fields
        ("name", pa.string()),
        ("item_type", pa.string()),
        ("queue", pa.string()),
        pa.field("version", pa.string(), metadata={b"description": b"URL-safe base64 encoded version"}),
        # Metadata fields
        ("title", pa.string()),
        ("source_repository_url", pa.string()),
        ("content_language", pa.string()),
        # Canonical instants keep their original offset, so stored as strings
        ("update_time", pa.string()),
        ("create_time", pa.string()),
        ("mime_type", pa.string()),
        ("hash", pa.string()),
        ("container_name", pa.string()),
        ("quality", pa.float64()),
        ("object_type", pa.string()),
        # Structured data
        ("structured_data", pa.string()),
    ],
)
