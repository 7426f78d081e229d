"""
Configuration context for item building.

Holds the flat key/value defaults that seed ``ItemBuilder.from_configuration``.
Each resolvable attribute has a ``.field`` key naming a value-map key and a
``.defaultValue`` key holding a literal. Date-time literals are parsed once,
when the configuration is initialized, so a malformed value fails fast.
"""

import json
import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from indexer.dates import to_canonical_instant
from indexer.errors import ConfigFormatError, ConfigNotInitializedError

logger = logging.getLogger(__name__)

# Environment variable naming the default configuration file
CONFIG_ENV_VAR = "INDEXER_CONFIG"

TITLE_FIELD = "itemMetadata.title.field"
TITLE_VALUE = "itemMetadata.title.defaultValue"
SOURCE_REPOSITORY_URL_FIELD = "itemMetadata.sourceRepositoryUrl.field"
SOURCE_REPOSITORY_URL_VALUE = "itemMetadata.sourceRepositoryUrl.defaultValue"
CONTENT_LANGUAGE_FIELD = "itemMetadata.contentLanguage.field"
CONTENT_LANGUAGE_VALUE = "itemMetadata.contentLanguage.defaultValue"
UPDATE_TIME_FIELD = "itemMetadata.updateTime.field"
UPDATE_TIME_VALUE = "itemMetadata.updateTime.defaultValue"
CREATE_TIME_FIELD = "itemMetadata.createTime.field"
CREATE_TIME_VALUE = "itemMetadata.createTime.defaultValue"
OBJECT_TYPE = "itemMetadata.objectType"

# Attribute name -> (field key, value key)
CONFIGURABLE_ATTRIBUTES = {
    "title": (TITLE_FIELD, TITLE_VALUE),
    "source_repository_url": (SOURCE_REPOSITORY_URL_FIELD, SOURCE_REPOSITORY_URL_VALUE),
    "content_language": (CONTENT_LANGUAGE_FIELD, CONTENT_LANGUAGE_VALUE),
    "update_time": (UPDATE_TIME_FIELD, UPDATE_TIME_VALUE),
    "create_time": (CREATE_TIME_FIELD, CREATE_TIME_VALUE),
}

DATE_VALUE_KEYS = frozenset({UPDATE_TIME_VALUE, CREATE_TIME_VALUE})

KNOWN_KEYS = frozenset(
    [key for pair in CONFIGURABLE_ATTRIBUTES.values() for key in pair] + [OBJECT_TYPE]
)


class ItemConfiguration:
    """
    Explicit configuration context with an init/reset lifecycle.

    Usage:
        config = ItemConfiguration()
        config.init({TITLE_FIELD: "name", UPDATE_TIME_VALUE: "2001-01-01T00:00:00Z"})

        builder = ItemBuilder.from_configuration("doc-1", config)
    """

    def __init__(self, properties: Optional[Mapping[str, str]] = None):
        """
        Initialize the context, optionally loading properties at once.

        Args:
            properties: Flat key/value configuration to load
        """
        self._properties: dict[str, str] = {}
        self._dates: dict[str, str] = {}
        self._initialized = False
        if properties is not None:
            self.init(properties)

    def init(self, properties: Mapping[str, str]) -> "ItemConfiguration":
        """
        Load configuration, replacing anything loaded before.

        Args:
            properties: Flat key/value configuration

        Returns:
            This configuration, for chaining

        Raises:
            ConfigFormatError: If a date-time default value cannot be parsed
        """
        loaded: dict[str, str] = {}
        for key, value in properties.items():
            if value is None:
                continue
            loaded[str(key)] = str(value).strip()

        dates: dict[str, str] = {}
        for key in DATE_VALUE_KEYS:
            raw = loaded.get(key)
            if not raw:
                continue
            try:
                dates[key] = to_canonical_instant(raw)
            except ValueError as e:
                raise ConfigFormatError(
                    f"Invalid date-time for {key}: '{raw}'", key=key, raw_value=raw
                ) from e

        unknown = sorted(k for k in loaded if k.startswith("itemMetadata.") and k not in KNOWN_KEYS)
        for key in unknown:
            logger.warning(f"Ignoring unknown item metadata configuration key: {key}")

        self._properties = loaded
        self._dates = dates
        self._initialized = True
        logger.debug(f"Loaded {len(loaded)} configuration properties")
        return self

    def reset(self) -> None:
        """Drop all loaded configuration."""
        self._properties = {}
        self._dates = {}
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        """Check if init() has been called since the last reset()."""
        return self._initialized

    def check_initialized(self) -> None:
        """Raise if the configuration has not been loaded."""
        if not self._initialized:
            raise ConfigNotInitializedError("Configuration has not been initialized")

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Empty values are treated as unset.
        """
        self.check_initialized()
        value = self._properties.get(key)
        return value if value else default

    def get_date(self, key: str) -> Optional[str]:
        """Get a pre-parsed date-time value as a canonical instant."""
        self.check_initialized()
        return self._dates.get(key)

    def as_dict(self) -> dict[str, str]:
        """Copy of the loaded properties."""
        return dict(self._properties)

    @classmethod
    def from_file(cls, path: str | Path) -> "ItemConfiguration":
        """
        Load configuration from a JSON or properties file.

        JSON files must contain a single object. Any other file is read as
        ``key=value`` lines, with ``#`` and ``!`` comments.

        Args:
            path: Path to the configuration file

        Returns:
            Initialized ItemConfiguration

        Raises:
            ConfigFormatError: If the file cannot be read or parsed
        """
        file_path = Path(path)
        try:
            text = file_path.read_text()
        except OSError as e:
            raise ConfigFormatError(f"Cannot read configuration file {file_path}: {e}") from e

        if file_path.suffix.lower() == ".json":
            try:
                data = json.loads(text)
            except json.JSONDecodeError as e:
                raise ConfigFormatError(f"Invalid JSON in {file_path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigFormatError(f"Configuration file {file_path} must contain an object")
            properties = {str(k): str(v) for k, v in data.items() if v is not None}
        else:
            properties = _parse_properties(text, file_path)

        logger.info(f"Loaded configuration from {file_path}")
        return cls(properties)

    @classmethod
    def from_env(cls) -> Optional["ItemConfiguration"]:
        """Load the file named by INDEXER_CONFIG, if set."""
        path = os.environ.get(CONFIG_ENV_VAR)
        if not path:
            return None
        return cls.from_file(path)


def _parse_properties(text: str, file_path: Path) -> dict[str, str]:
    """Parse ``key=value`` (or ``key: value``) lines."""
    properties = {}
    for line_number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped[0] in "#!":
            continue
        separators = [i for i in (stripped.find("="), stripped.find(":")) if i > 0]
        if not separators:
            raise ConfigFormatError(
                f"{file_path}:{line_number}: expected key=value, got '{stripped}'"
            )
        index = min(separators)
        key = stripped[:index].strip()
        properties[key] = stripped[index + 1 :].strip()
    return properties
