"""
Item builder.

Resolves each item attribute from, in order of precedence:
1. an explicit setter call on the builder
2. the configured ``.field`` key, looked up in the value map
3. the configured ``.defaultValue`` literal

An attribute with no source is omitted from the built item.
"""

import logging
from typing import Any, Callable, Mapping, Optional

from pydantic import ValidationError

from indexer import config as config_keys
from indexer.config import CONFIGURABLE_ATTRIBUTES, ItemConfiguration
from indexer.dates import to_canonical_instant
from indexer.enums import ItemType
from indexer.errors import InvalidArgumentError, SchemaValidationError
from indexer.models.item import (
    Item,
    ItemMetadata,
    ItemStructuredData,
    SearchQualityMetadata,
)
from indexer.structured_data import StructuredData

from .field_or_value import FieldOrValue

logger = logging.getLogger(__name__)


def _to_string(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def _to_search_quality(value: Any) -> SearchQualityMetadata:
    if isinstance(value, SearchQualityMetadata):
        return value
    if isinstance(value, Mapping):
        return SearchQualityMetadata.model_validate(value)
    if isinstance(value, bool):
        raise ValueError("boolean is not a quality score")
    return SearchQualityMetadata(quality=float(value))


# Attribute name -> converter from a raw resolved value
ATTRIBUTE_CONVERTERS: dict[str, Callable[[Any], Any]] = {
    "title": _to_string,
    "source_repository_url": _to_string,
    "content_language": _to_string,
    "update_time": to_canonical_instant,
    "create_time": to_canonical_instant,
    "mime_type": _to_string,
    "hash": _to_string,
    "container_name": _to_string,
    "search_quality_metadata": _to_search_quality,
}


class ItemBuilder:
    """
    Fluent builder for a single Item.

    One builder builds one item and is not meant to be shared between
    threads.

    Example:
        item = (
            ItemBuilder.from_configuration("doc-1", config, structured_data)
            .set_values({"name": ["My Name"], "modified": ["2018-08-08T15:48:17Z"]})
            .set_title(FieldOrValue.with_field("name"))
            .set_update_time(FieldOrValue.with_field("modified"))
            .build()
        )
    """

    # Configuration keys, re-exported for callers building properties
    TITLE_FIELD = config_keys.TITLE_FIELD
    TITLE_VALUE = config_keys.TITLE_VALUE
    SOURCE_REPOSITORY_URL_FIELD = config_keys.SOURCE_REPOSITORY_URL_FIELD
    SOURCE_REPOSITORY_URL_VALUE = config_keys.SOURCE_REPOSITORY_URL_VALUE
    CONTENT_LANGUAGE_FIELD = config_keys.CONTENT_LANGUAGE_FIELD
    CONTENT_LANGUAGE_VALUE = config_keys.CONTENT_LANGUAGE_VALUE
    UPDATE_TIME_FIELD = config_keys.UPDATE_TIME_FIELD
    UPDATE_TIME_VALUE = config_keys.UPDATE_TIME_VALUE
    CREATE_TIME_FIELD = config_keys.CREATE_TIME_FIELD
    CREATE_TIME_VALUE = config_keys.CREATE_TIME_VALUE
    OBJECT_TYPE = config_keys.OBJECT_TYPE

    def __init__(self, identifier: str, structured_data: Optional[StructuredData] = None):
        """
        Create a builder with only the identifier set.

        Args:
            identifier: Unique item name (required)
            structured_data: Schema context used when an object type is set

        Raises:
            InvalidArgumentError: If the identifier is missing or empty
        """
        if not identifier:
            raise InvalidArgumentError("Item identifier is required")

        self._identifier = identifier
        self._structured_data = structured_data
        self._item_type: Optional[ItemType] = None
        self._queue: Optional[str] = None
        self._version: Optional[bytes] = None
        self._values: Mapping[str, Any] = {}
        self._object_type: Optional[str] = None

        # Explicit setter calls; a None entry means explicitly cleared
        self._explicit: dict[str, Optional[FieldOrValue]] = {}
        # Seeded from configuration
        self._config_fields: dict[str, str] = {}
        self._config_values: dict[str, str] = {}

    @classmethod
    def from_configuration(
        cls,
        identifier: str,
        configuration: ItemConfiguration,
        structured_data: Optional[StructuredData] = None,
    ) -> "ItemBuilder":
        """
        Create a builder seeded with configured fields and default values.

        Args:
            identifier: Unique item name (required)
            configuration: Initialized configuration context
            structured_data: Schema context used when an object type is set

        Returns:
            ItemBuilder with configuration defaults applied

        Raises:
            InvalidArgumentError: If the identifier is missing or empty
            ConfigNotInitializedError: If the configuration was not loaded
        """
        builder = cls(identifier, structured_data)
        configuration.check_initialized()

        for attribute, (field_key, value_key) in CONFIGURABLE_ATTRIBUTES.items():
            field = configuration.get(field_key)
            if field:
                builder._config_fields[attribute] = field

            if value_key in config_keys.DATE_VALUE_KEYS:
                value = configuration.get_date(value_key)
            else:
                value = configuration.get(value_key)
            if value is not None:
                builder._config_values[attribute] = value

        builder._object_type = configuration.get(config_keys.OBJECT_TYPE)
        return builder

    @property
    def identifier(self) -> str:
        return self._identifier

    # --- Pass-through attributes ---

    def set_item_type(self, item_type: Optional[ItemType | str]) -> "ItemBuilder":
        if item_type is None:
            self._item_type = None
            return self
        try:
            self._item_type = ItemType(item_type)
        except ValueError as e:
            raise InvalidArgumentError(f"Unknown item type: {item_type}") from e
        return self

    def set_queue(self, queue: Optional[str]) -> "ItemBuilder":
        self._queue = queue
        return self

    def set_version(self, version: Optional[bytes]) -> "ItemBuilder":
        self._version = version
        return self

    def set_values(self, values: Optional[Mapping[str, Any]]) -> "ItemBuilder":
        """Set the multimap of extracted field values used for field references."""
        if values is not None and not isinstance(values, Mapping):
            raise InvalidArgumentError(f"Values must be a mapping, got {type(values).__name__}")
        self._values = values if values is not None else {}
        return self

    def set_object_type(self, object_type: Optional[str]) -> "ItemBuilder":
        if object_type is not None and not isinstance(object_type, str):
            raise InvalidArgumentError(f"Object type must be a string: {object_type!r}")
        self._object_type = object_type
        return self

    # --- Resolvable attributes ---

    def set_title(self, title: Any) -> "ItemBuilder":
        return self._set("title", title)

    def set_source_repository_url(self, url: Any) -> "ItemBuilder":
        return self._set("source_repository_url", url)

    def set_content_language(self, language: Any) -> "ItemBuilder":
        return self._set("content_language", language)

    def set_update_time(self, update_time: Any) -> "ItemBuilder":
        return self._set("update_time", update_time)

    def set_create_time(self, create_time: Any) -> "ItemBuilder":
        return self._set("create_time", create_time)

    def set_mime_type(self, mime_type: Any) -> "ItemBuilder":
        return self._set("mime_type", mime_type)

    def set_hash(self, hash_value: Any) -> "ItemBuilder":
        return self._set("hash", hash_value)

    def set_container_name(self, container_name: Any) -> "ItemBuilder":
        return self._set("container_name", container_name)

    def set_search_quality_metadata(self, quality: Any) -> "ItemBuilder":
        return self._set("search_quality_metadata", quality)

    def _set(self, attribute: str, value: Any) -> "ItemBuilder":
        """Record an explicit setting; None clears the attribute."""
        if value is None or isinstance(value, FieldOrValue):
            self._explicit[attribute] = value
        else:
            self._explicit[attribute] = FieldOrValue.with_value(value)
        return self

    # --- Build ---

    def build(self) -> Item:
        """
        Resolve every attribute and build the item.

        Returns:
            Immutable Item

        Raises:
            SchemaValidationError: If structured data cannot be built
            InvalidArgumentError: If a pass-through attribute has the wrong type
        """
        resolved = {
            attribute: self._resolve(attribute, converter)
            for attribute, converter in ATTRIBUTE_CONVERTERS.items()
        }

        structured = None
        if self._object_type:
            structured = self._build_structured_data(self._object_type)

        try:
            metadata = ItemMetadata(object_type=self._object_type or None, **resolved)
            return Item(
                name=self._identifier,
                item_type=self._item_type,
                queue=self._queue,
                version=self._version,
                metadata=metadata,
                structured_data=structured,
            )
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid attributes for item {self._identifier}: {e}") from e

    def _resolve(self, attribute: str, converter: Callable[[Any], Any]) -> Any:
        """
        Resolve one attribute by precedence.

        A setter called with None clears the attribute. A FieldOrValue
        that resolves to nothing falls through to the configured field,
        then the configured default.
        """
        if attribute in self._explicit:
            explicit = self._explicit[attribute]
            if explicit is None:
                return None
            converted = self._convert(attribute, explicit.resolve(self._values), converter)
            if converted is not None:
                return converted

        field = self._config_fields.get(attribute)
        if field is not None:
            raw = FieldOrValue.with_field(field).resolve(self._values)
            converted = self._convert(attribute, raw, converter)
            if converted is not None:
                return converted

        # Configured dates are already canonical
        return self._config_values.get(attribute)

    def _convert(self, attribute: str, raw: Any, converter: Callable[[Any], Any]) -> Any:
        """Convert a raw value, omitting the attribute if conversion fails."""
        if raw is None:
            return None
        try:
            return converter(raw)
        except (ValueError, TypeError) as e:
            logger.warning(
                f"Omitting {attribute} for item {self._identifier}: "
                f"cannot convert '{raw}' ({e})"
            )
            return None

    def _build_structured_data(self, object_type: str) -> ItemStructuredData:
        """Build the structured data payload for the object type."""
        if self._structured_data is None:
            raise SchemaValidationError(
                f"No structured data schema available for object type {object_type}",
                object_type=object_type,
            )
        data_object = self._structured_data.build_structured_data(object_type, self._values)
        return ItemStructuredData(data_object=data_object)
