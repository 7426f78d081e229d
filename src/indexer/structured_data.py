"""
Structured data built from a schema and an item's value map.

The StructuredData context is loaded once with a Schema and then used
read-only by every builder that references it.
"""

import logging
import math
from typing import Any, Callable, Iterable, Mapping, Optional

from indexer.dates import to_canonical_date, to_canonical_instant
from indexer.enums import PropertyType
from indexer.errors import SchemaValidationError
from indexer.models.item import NamedProperty, StructuredDataObject
from indexer.models.schema import ObjectDefinition, PropertyDefinition, Schema

logger = logging.getLogger(__name__)


def get_values(values: Optional[Mapping[str, Any]], key: str) -> list[Any]:
    """
    Get all values stored under a key of a value map.

    Any iterable other than text, bytes or a mapping holds several values,
    in iteration order. A bare scalar under the key counts as a single
    value; ``None`` entries are dropped.
    """
    if not values or key not in values:
        return []
    raw = values[key]
    if raw is None:
        return []
    if isinstance(raw, Iterable) and not isinstance(raw, (str, bytes, Mapping)):
        return [v for v in raw if v is not None]
    return [raw]


def _to_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def _to_integer(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("boolean is not an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{value} is not integral")
        return int(value)
    return int(str(value).strip())


def _to_double(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("boolean is not a number")
    result = float(value) if isinstance(value, (int, float)) else float(str(value).strip())
    if math.isnan(result):
        raise ValueError("NaN is not allowed")
    return result


def _to_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError(f"'{value}' is not a boolean")


# Converters for each declared property type
CONVERTERS: dict[PropertyType, Callable[[Any], Any]] = {
    PropertyType.TEXT: _to_text,
    PropertyType.HTML: _to_text,
    PropertyType.ENUM: _to_text,
    PropertyType.INTEGER: _to_integer,
    PropertyType.DOUBLE: _to_double,
    PropertyType.BOOLEAN: _to_boolean,
    PropertyType.TIMESTAMP: to_canonical_instant,
    PropertyType.DATE: to_canonical_date,
}


class StructuredData:
    """
    Schema context with an init/reset lifecycle.

    Usage:
        structured_data = StructuredData()
        structured_data.init(Schema.from_file("schema.json"))

        payload = structured_data.build_structured_data("Movie", values)
    """

    def __init__(self, schema: Optional[Schema] = None):
        """
        Initialize the context, optionally loading a schema at once.

        Args:
            schema: Schema to load
        """
        self._definitions: dict[str, ObjectDefinition] = {}
        self._initialized = False
        if schema is not None:
            self.init(schema)

    def init(self, schema: Schema) -> "StructuredData":
        """
        Load object definitions from a schema, replacing any loaded before.

        Raises:
            SchemaValidationError: If two object definitions share a name
        """
        definitions: dict[str, ObjectDefinition] = {}
        for definition in schema.object_definitions:
            if definition.name in definitions:
                raise SchemaValidationError(
                    f"Duplicate object definition: {definition.name}",
                    object_type=definition.name,
                )
            definitions[definition.name] = definition

        self._definitions = definitions
        self._initialized = True
        logger.debug(f"Loaded {len(definitions)} object definitions")
        return self

    def reset(self) -> None:
        """Drop all loaded object definitions."""
        self._definitions = {}
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        """Check if init() has been called since the last reset()."""
        return self._initialized

    @property
    def object_types(self) -> list[str]:
        """Names of the loaded object types."""
        return list(self._definitions)

    def get_object_definition(self, name: str) -> ObjectDefinition:
        """
        Get the definition of an object type.

        Raises:
            SchemaValidationError: If not initialized or the type is undeclared
        """
        if not self._initialized:
            raise SchemaValidationError("Structured data schema has not been initialized")
        definition = self._definitions.get(name)
        if definition is None:
            raise SchemaValidationError(f"Undefined object type: {name}", object_type=name)
        return definition

    def build_structured_data(
        self,
        object_type: str,
        values: Optional[Mapping[str, Any]],
    ) -> StructuredDataObject:
        """
        Build a structured data object from an item's value map.

        Only declared properties are read; other keys are ignored.

        Args:
            object_type: Name of a declared object type
            values: Multimap of extracted field values

        Returns:
            StructuredDataObject with one entry per property that has values

        Raises:
            SchemaValidationError: If a required property is missing or a
                value cannot be coerced to its declared type
        """
        definition = self.get_object_definition(object_type)

        properties = []
        for prop in definition.property_definitions:
            named = self._build_property(object_type, prop, get_values(values, prop.name))
            if named is not None:
                properties.append(named)

        return StructuredDataObject(properties=properties)

    def _build_property(
        self,
        object_type: str,
        prop: PropertyDefinition,
        raw_values: list[Any],
    ) -> Optional[NamedProperty]:
        """Coerce the raw values of one property."""
        if not raw_values:
            if prop.is_required:
                raise SchemaValidationError(
                    f"Missing required property '{prop.name}' for {object_type}",
                    object_type=object_type,
                    property_name=prop.name,
                )
            return None

        if not prop.is_repeatable and len(raw_values) > 1:
            logger.debug(
                f"Property {object_type}.{prop.name} is not repeatable; "
                f"keeping first of {len(raw_values)} values"
            )
            raw_values = raw_values[:1]

        prop_type = PropertyType(prop.type)
        converter = CONVERTERS[prop_type]
        converted = []
        for raw in raw_values:
            try:
                converted.append(converter(raw))
            except (ValueError, TypeError) as e:
                raise SchemaValidationError(
                    f"Cannot convert value '{raw}' of {object_type}.{prop.name} "
                    f"to {prop_type.value}: {e}",
                    object_type=object_type,
                    property_name=prop.name,
                ) from e

        return NamedProperty(name=prop.name, type=prop_type, values=converted)
