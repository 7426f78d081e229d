"""
Item assembler for building batches of items.

The main orchestrator for turning extracted records into index items.
"""

import binascii
import logging
from typing import Any, Iterable, Mapping, Optional

from indexer.config import ItemConfiguration
from indexer.errors import IndexerError, InvalidArgumentError
from indexer.models.item import Item
from indexer.structured_data import StructuredData

from .field_or_value import FieldOrValue
from .item_builder import ItemBuilder
from .result import BatchResult

logger = logging.getLogger(__name__)

# Record keys applied through the matching builder setter
RECORD_SETTERS = {
    "title": "set_title",
    "source_repository_url": "set_source_repository_url",
    "content_language": "set_content_language",
    "update_time": "set_update_time",
    "create_time": "set_create_time",
    "mime_type": "set_mime_type",
    "hash": "set_hash",
    "container_name": "set_container_name",
    "search_quality": "set_search_quality_metadata",
}

# Record keys passed through literally
PASS_THROUGH_SETTERS = {
    "item_type": "set_item_type",
    "queue": "set_queue",
    "object_type": "set_object_type",
}


class ItemAssembler:
    """
    Builds items from a batch of extracted records.

    Each record is a mapping with:
    - ``id``: the item identifier (required)
    - ``values``: multimap of extracted field values
    - optional attribute overrides (``title``, ``queue``, ``item_type``, ...).
      A string starting with ``@`` is a field reference (``"@name"``).
    - optional ``version``: a string, encoded as UTF-8 bytes

    Example:
        assembler = ItemAssembler(configuration, structured_data)
        result = assembler.assemble(records)

        for item in result.items:
            print(item.to_json())
        if result.has_errors:
            print(result.summary())
    """

    def __init__(
        self,
        configuration: Optional[ItemConfiguration] = None,
        structured_data: Optional[StructuredData] = None,
    ):
        """
        Initialize the assembler.

        Args:
            configuration: Configuration defaults; without one, only record
                values and overrides are used
            structured_data: Schema context for records with an object type
        """
        self.configuration = configuration
        self.structured_data = structured_data

    def assemble(self, records: Iterable[Mapping[str, Any]]) -> BatchResult:
        """
        Build every record, collecting failures instead of stopping.

        Args:
            records: Extracted records

        Returns:
            BatchResult with built items and any issues
        """
        result = BatchResult()

        for index, record in enumerate(records):
            if not isinstance(record, Mapping):
                result.errors.append(f"record[{index}]: expected an object, got {type(record).__name__}")
                continue

            identifier = record.get("id")
            label = identifier or f"record[{index}]"
            try:
                item = self.build_item(record)
            except IndexerError as e:
                result.errors.append(f"{label}: {e}")
                logger.warning(f"Skipping {label}: {e}")
                continue

            if item.metadata.is_empty:
                result.warnings.append(f"{label}: no metadata resolved")
            result.items.append(item)

        logger.info(f"Built {len(result.items)} items with {len(result.errors)} errors")
        return result

    def build_item(self, record: Mapping[str, Any]) -> Item:
        """
        Build a single item from a record.

        Raises:
            IndexerError: If the record cannot be built
        """
        identifier = record.get("id")
        if identifier is not None:
            identifier = str(identifier)

        if self.configuration is not None:
            builder = ItemBuilder.from_configuration(
                identifier, self.configuration, self.structured_data
            )
        else:
            builder = ItemBuilder(identifier, self.structured_data)

        builder.set_values(record.get("values") or {})

        for key, setter in RECORD_SETTERS.items():
            if key in record:
                getattr(builder, setter)(_parse_override(record[key]))

        for key, setter in PASS_THROUGH_SETTERS.items():
            if key in record:
                getattr(builder, setter)(record[key])

        version = record.get("version")
        if version is not None:
            builder.set_version(_parse_version(version))

        return builder.build()


def _parse_override(value: Any) -> Any:
    """Turn ``"@key"`` into a field reference; anything else is a literal."""
    if isinstance(value, str) and value.startswith("@") and len(value) > 1:
        return FieldOrValue.with_field(value[1:])
    return value


def _parse_version(version: Any) -> bytes:
    if isinstance(version, bytes):
        return version
    if isinstance(version, Mapping) and "base64" in version:
        encoded = str(version["base64"])
        try:
            return Item.decode_version(encoded)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise InvalidArgumentError(f"Invalid base64 version '{encoded}': {e}") from e
    return str(version).encode("utf-8")
