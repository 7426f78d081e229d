"""
Tests for the CLI module.
"""

import json

import pytest

from indexer.cli.main import app
from indexer.config import CONFIG_ENV_VAR, OBJECT_TYPE, TITLE_FIELD, UPDATE_TIME_VALUE


@pytest.fixture(autouse=True)
def no_env_config(monkeypatch):
    """Keep a developer's INDEXER_CONFIG out of the tests."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "items.properties"
    path.write_text(f"{TITLE_FIELD}=name\n{UPDATE_TIME_VALUE}=2001-01-01T00:00:00Z\n")
    return path


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.json"
    path.write_text(
        json.dumps(
            {
                "objectDefinitions": [
                    {
                        "name": "movie",
                        "propertyDefinitions": [{"name": "name", "isRequired": True}],
                    }
                ]
            }
        )
    )
    return path


@pytest.fixture
def values_file(tmp_path):
    path = tmp_path / "values.json"
    path.write_text(json.dumps({"name": ["My Name is Sam"], "lang": ["en-US"]}))
    return path


class TestCLIBuild:
    """Tests for the build command."""

    def test_build_minimal(self, capsys):
        """Test building an item with only an identifier."""
        result = app(["build", "foo"])

        assert result == 0
        assert json.loads(capsys.readouterr().out) == {"name": "foo", "metadata": {}}

    def test_build_with_config(self, capsys, config_file, values_file):
        """Test configuration and field-reference overrides."""
        result = app([
            "build", "foo",
            "--config", str(config_file),
            "--values", str(values_file),
            "--content-language", "@lang",
            "--queue", "q1",
        ])

        assert result == 0
        item = json.loads(capsys.readouterr().out)
        assert item["queue"] == "q1"
        assert item["metadata"] == {
            "title": "My Name is Sam",
            "contentLanguage": "en-US",
            "updateTime": "2001-01-01T00:00:00.000Z",
        }

    def test_build_with_schema(self, capsys, schema_file, values_file):
        result = app([
            "build", "foo",
            "--schema", str(schema_file),
            "--values", str(values_file),
            "--object-type", "movie",
        ])

        assert result == 0
        item = json.loads(capsys.readouterr().out)
        assert item["metadata"]["objectType"] == "movie"
        assert item["structuredData"]["object"]["properties"][0]["values"] == ["My Name is Sam"]

    def test_build_schema_error(self, schema_file):
        """Test structured data errors fail the command."""
        result = app(["build", "foo", "--schema", str(schema_file), "--object-type", "movie"])
        assert result == 1

    def test_build_bad_config(self, tmp_path):
        """Test a malformed configuration date fails the command."""
        bad_config = tmp_path / "bad.properties"
        bad_config.write_text(f"{UPDATE_TIME_VALUE}=garbage\n")

        result = app(["build", "foo", "--config", str(bad_config)])
        assert result == 1

    def test_build_uses_env_config(self, capsys, monkeypatch, config_file, values_file):
        """Test INDEXER_CONFIG supplies the default configuration."""
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))

        result = app(["build", "foo", "--values", str(values_file)])

        assert result == 0
        assert json.loads(capsys.readouterr().out)["metadata"]["title"] == "My Name is Sam"


class TestCLIBatch:
    """Tests for the batch command."""

    @pytest.fixture
    def records_file(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text(
            json.dumps(
                [
                    {"id": "doc-1", "values": {"name": ["First"]}, "object_type": "movie"},
                    {"id": "doc-2", "values": {}, "object_type": "movie"},
                    {"id": "doc-3", "values": {"name": ["Third"]}},
                ]
            )
        )
        return path

    def test_batch_writes_json(self, tmp_path, records_file, config_file, schema_file):
        output_dir = tmp_path / "output"

        result = app([
            "batch", str(records_file),
            "--output", str(output_dir),
            "--config", str(config_file),
            "--schema", str(schema_file),
        ])

        assert result == 0
        with open(output_dir / "items.json") as f:
            items = json.load(f)
        assert [i["name"] for i in items] == ["doc-1", "doc-3"]
        assert (output_dir / "errors.json").exists()

    def test_batch_writes_parquet(self, tmp_path, records_file, schema_file):
        output_dir = tmp_path / "output"

        result = app([
            "batch", str(records_file),
            "--output", str(output_dir),
            "--schema", str(schema_file),
            "--format", "parquet",
        ])

        assert result == 0
        assert len(list(output_dir.glob("items/**/*.parquet"))) == 2

    def test_batch_strict(self, tmp_path, records_file, schema_file):
        """Test --strict fails when any record fails."""
        output_dir = tmp_path / "output"

        result = app([
            "batch", str(records_file),
            "--output", str(output_dir),
            "--schema", str(schema_file),
            "--strict",
        ])

        assert result == 1
        assert not output_dir.exists()

    def test_batch_dry_run(self, tmp_path, records_file, schema_file, capsys):
        output_dir = tmp_path / "output"

        result = app([
            "batch", str(records_file),
            "--output", str(output_dir),
            "--schema", str(schema_file),
            "--dry-run",
            "--json",
        ])

        assert result == 0
        assert not output_dir.exists()
        out = capsys.readouterr().out
        summary = json.loads(out[: out.index("\nDry run")])
        assert summary["items"] == ["doc-1", "doc-3"]
        assert len(summary["errors"]) == 1

    def test_batch_invalid_records(self, tmp_path):
        records_file = tmp_path / "records.json"
        records_file.write_text("{not json")

        result = app(["batch", str(records_file), "--output", str(tmp_path / "out")])
        assert result == 1


class TestCLICheckConfig:
    """Tests for the check-config command."""

    def test_valid(self, config_file, capsys):
        result = app(["check-config", "--json", str(config_file)])

        assert result == 0
        output = json.loads(capsys.readouterr().out)
        assert output["valid"] is True
        assert output["properties"][TITLE_FIELD] == "name"

    def test_invalid(self, tmp_path):
        bad_config = tmp_path / "bad.json"
        bad_config.write_text(json.dumps({OBJECT_TYPE: "movie", UPDATE_TIME_VALUE: "garbage"}))

        result = app(["check-config", str(bad_config)])
        assert result == 1


class TestCLIHelp:
    """Tests for CLI help."""

    def test_help_returns_zero(self):
        """Test that --help exits cleanly."""
        result = app(["--help"])
        assert result == 0

    def test_command_help(self):
        """Test command-level help."""
        result = app(["batch", "--help"])
        assert result == 0
