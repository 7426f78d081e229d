"""
Serialization utilities for converting Items to flat export records.
"""

import json
from typing import Any

from indexer.models.item import Item


def item_to_record(item: Item) -> dict[str, Any]:
    """
    Convert an Item to a flat dict for Parquet.

    Args:
        item: The Item model instance

    Returns:
        Dict with keys matching ITEM_SCHEMA
    """
    metadata = item.metadata
    quality = metadata.search_quality_metadata

    structured_data = None
    if item.structured_data is not None:
        structured_data = json.dumps(item.structured_data.to_dict())

    return {
        "name": item.name,
        "item_type": item.item_type,
        "queue": item.queue,
        "version": item.encoded_version,
        "title": metadata.title,
        "source_repository_url": metadata.source_repository_url,
        "content_language": metadata.content_language,
        "update_time": metadata.update_time,
        "create_time": metadata.create_time,
        "mime_type": metadata.mime_type,
        "hash": metadata.hash,
        "container_name": metadata.container_name,
        "quality": quality.quality if quality else None,
        "object_type": metadata.object_type,
        "structured_data": structured_data,
    }
