"""
Tests for configuration loading and date-time normalization.
"""

import json
from datetime import date, datetime, timedelta, timezone

import pytest

from indexer.config import (
    CONFIG_ENV_VAR,
    CREATE_TIME_VALUE,
    OBJECT_TYPE,
    TITLE_FIELD,
    TITLE_VALUE,
    UPDATE_TIME_VALUE,
    ItemConfiguration,
)
from indexer.dates import format_instant, parse_datetime, to_canonical_date, to_canonical_instant
from indexer.errors import ConfigFormatError, ConfigNotInitializedError


class TestDates:
    """Tests for date-time parsing and canonical formatting."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Wed, 08 Aug 2018 15:48:17 +0000", "2018-08-08T15:48:17.000Z"),
            ("2018-08-08T15:48:17Z", "2018-08-08T15:48:17.000Z"),
            ("2010-10-10T10:10:10-10:00", "2010-10-10T10:10:10.000-10:00"),
            ("2020-01-02T03:04:05.678+05:30", "2020-01-02T03:04:05.678+05:30"),
            ("2001-01-01", "2001-01-01T00:00:00.000Z"),
        ],
    )
    def test_canonical_instant(self, raw, expected):
        """Test various input formats normalize to the canonical instant."""
        assert to_canonical_instant(raw) == expected

    def test_naive_datetime_is_utc(self):
        """Test naive datetimes are taken as UTC."""
        assert format_instant(datetime(2018, 8, 8, 15, 48, 17)) == "2018-08-08T15:48:17.000Z"

    def test_microseconds_truncated(self):
        """Test sub-millisecond precision is dropped."""
        value = datetime(2018, 8, 8, 15, 48, 17, 123999, tzinfo=timezone.utc)
        assert format_instant(value) == "2018-08-08T15:48:17.123Z"

    def test_offset_preserved(self):
        """Test non-UTC offsets are not converted."""
        value = datetime(2018, 8, 8, 15, 48, 17, tzinfo=timezone(timedelta(hours=-3)))
        assert format_instant(value) == "2018-08-08T15:48:17.000-03:00"

    def test_parse_date_object(self):
        """Test date objects parse to midnight UTC."""
        parsed = parse_datetime(date(2019, 5, 6))
        assert parsed == datetime(2019, 5, 6, tzinfo=timezone.utc)

    @pytest.mark.parametrize("raw", ["garbage", "", "   ", 12345])
    def test_invalid_input(self, raw):
        """Test unparseable input raises ValueError."""
        with pytest.raises(ValueError):
            parse_datetime(raw)

    def test_canonical_date(self):
        """Test date-only formatting."""
        assert to_canonical_date("Wed, 08 Aug 2018 15:48:17 +0000") == "2018-08-08"
        assert to_canonical_date(date(2019, 5, 6)) == "2019-05-06"


class TestItemConfiguration:
    """Tests for the configuration context lifecycle."""

    def test_init_and_get(self):
        """Test values are loaded and whitespace is stripped."""
        config = ItemConfiguration()
        config.init({TITLE_FIELD: "  name  ", OBJECT_TYPE: "movie"})

        assert config.is_initialized
        assert config.get(TITLE_FIELD) == "name"
        assert config.get(OBJECT_TYPE) == "movie"
        assert config.get(TITLE_VALUE) is None

    def test_empty_value_is_unset(self):
        """Test empty values read as unset."""
        config = ItemConfiguration({TITLE_VALUE: ""})
        assert config.get(TITLE_VALUE) is None
        assert config.get(TITLE_VALUE, "fallback") == "fallback"

    def test_reset(self):
        """Test reset drops configuration and requires a new init."""
        config = ItemConfiguration({TITLE_FIELD: "name"})
        config.reset()

        assert not config.is_initialized
        with pytest.raises(ConfigNotInitializedError):
            config.get(TITLE_FIELD)

    def test_init_replaces_previous(self):
        """Test init discards previously loaded keys."""
        config = ItemConfiguration({TITLE_FIELD: "name"})
        config.init({TITLE_VALUE: "Default"})

        assert config.get(TITLE_FIELD) is None
        assert config.get(TITLE_VALUE) == "Default"

    def test_uninitialized(self):
        """Test reading before init fails."""
        with pytest.raises(ConfigNotInitializedError):
            ItemConfiguration().get(TITLE_FIELD)

    def test_dates_parsed_at_init(self):
        """Test date defaults are normalized when loaded."""
        config = ItemConfiguration(
            {
                UPDATE_TIME_VALUE: "2010-10-10T10:10:10-10:00",
                CREATE_TIME_VALUE: "2001-01-01T00:00:00Z",
            }
        )

        assert config.get_date(UPDATE_TIME_VALUE) == "2010-10-10T10:10:10.000-10:00"
        assert config.get_date(CREATE_TIME_VALUE) == "2001-01-01T00:00:00.000Z"

    def test_malformed_date_fails_fast(self):
        """Test a malformed date default raises at init, naming key and value."""
        config = ItemConfiguration()
        with pytest.raises(ConfigFormatError) as exc_info:
            config.init({UPDATE_TIME_VALUE: "not-a-date"})

        assert exc_info.value.key == UPDATE_TIME_VALUE
        assert exc_info.value.raw_value == "not-a-date"
        assert UPDATE_TIME_VALUE in str(exc_info.value)
        assert not config.is_initialized

    def test_from_json_file(self, tmp_path):
        """Test loading a JSON configuration file."""
        config_file = tmp_path / "items.json"
        config_file.write_text(json.dumps({TITLE_FIELD: "name", CREATE_TIME_VALUE: "2001-01-01T00:00:00Z"}))

        config = ItemConfiguration.from_file(config_file)

        assert config.get(TITLE_FIELD) == "name"
        assert config.get_date(CREATE_TIME_VALUE) == "2001-01-01T00:00:00.000Z"

    def test_from_properties_file(self, tmp_path):
        """Test loading a properties file with comments."""
        config_file = tmp_path / "items.properties"
        config_file.write_text(
            "# Item metadata\n"
            "! legacy comment\n"
            "\n"
            f"{TITLE_FIELD}=name\n"
            f"{UPDATE_TIME_VALUE} = 2001-01-01T00:00:00Z\n"
            f"{OBJECT_TYPE}: movie\n"
        )

        config = ItemConfiguration.from_file(config_file)

        assert config.get(TITLE_FIELD) == "name"
        assert config.get(OBJECT_TYPE) == "movie"
        assert config.get_date(UPDATE_TIME_VALUE) == "2001-01-01T00:00:00.000Z"

    def test_malformed_properties_line(self, tmp_path):
        """Test a line without a separator is rejected."""
        config_file = tmp_path / "items.properties"
        config_file.write_text("just some words\n")

        with pytest.raises(ConfigFormatError):
            ItemConfiguration.from_file(config_file)

    def test_invalid_json_file(self, tmp_path):
        """Test invalid JSON is reported as a format error."""
        config_file = tmp_path / "items.json"
        config_file.write_text("{not json")

        with pytest.raises(ConfigFormatError):
            ItemConfiguration.from_file(config_file)

    def test_json_file_must_be_object(self, tmp_path):
        """Test a JSON list is rejected."""
        config_file = tmp_path / "items.json"
        config_file.write_text("[]")

        with pytest.raises(ConfigFormatError):
            ItemConfiguration.from_file(config_file)

    def test_missing_file(self, tmp_path):
        """Test an unreadable file is reported as a format error."""
        with pytest.raises(ConfigFormatError):
            ItemConfiguration.from_file(tmp_path / "missing.properties")

    def test_from_env(self, tmp_path, monkeypatch):
        """Test loading the file named by the environment."""
        config_file = tmp_path / "items.properties"
        config_file.write_text(f"{TITLE_VALUE}=From Env\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))

        config = ItemConfiguration.from_env()

        assert config is not None
        assert config.get(TITLE_VALUE) == "From Env"

    def test_from_env_unset(self, monkeypatch):
        """Test no configuration when the environment variable is unset."""
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert ItemConfiguration.from_env() is None
