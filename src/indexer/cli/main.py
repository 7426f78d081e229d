"""
Main CLI entry point for item-indexer using Click.

Usage:
    item-indexer build ID [--config FILE] [--values FILE] [--schema FILE] [--title TEXT]...
    item-indexer batch RECORDS --output DIR [--config FILE] [--schema FILE] [--format json|parquet]
    item-indexer check-config FILE
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from indexer import __version__
from indexer.config import ItemConfiguration
from indexer.errors import IndexerError
from indexer.models.schema import Schema
from indexer.structured_data import StructuredData
from indexer.workflow import BatchResult, ItemAssembler, assemble_from_file
from indexer.writers import JSONWriter, ParquetWriter


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class Config:
    """Shared configuration for CLI commands."""

    def __init__(self) -> None:
        self.verbose = False
        self.debug = False


pass_config = click.make_pass_decorator(Config, ensure=True)


def _load_configuration(path: Optional[str]) -> Optional[ItemConfiguration]:
    """Load item configuration from a file, or from INDEXER_CONFIG if set."""
    try:
        if path:
            return ItemConfiguration.from_file(path)
        return ItemConfiguration.from_env()
    except IndexerError as e:
        raise click.ClickException(f"Error loading configuration: {e}")


def _load_structured_data(path: Optional[str]) -> Optional[StructuredData]:
    """Load a schema file into a structured data context."""
    if not path:
        return None
    try:
        structured_data = StructuredData(Schema.from_file(path))
    except (OSError, json.JSONDecodeError, ValidationError, IndexerError) as e:
        raise click.ClickException(f"Error loading schema: {e}")

    logging.getLogger("schema").info(
        f"Loaded object types from {path}: {', '.join(structured_data.object_types)}"
    )
    return structured_data


def _load_values(path: Optional[str]) -> dict:
    """Load a value map from a JSON object file."""
    if not path:
        return {}
    try:
        with open(path) as f:
            values = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise click.ClickException(f"Error loading values: {e}")
    if not isinstance(values, dict):
        raise click.ClickException(f"Values file must contain a JSON object: {path}")
    return values


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.version_option(version=__version__, prog_name="item-indexer")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """Build search index items from extracted values and configuration."""
    ctx.ensure_object(Config)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    setup_logging(verbose=verbose, debug=debug)


@cli.command()
@click.argument("identifier")
@click.option("--config", "-c", "config_file", type=click.Path(exists=True), help="Configuration file (.json or .properties)")
@click.option("--values", "values_file", type=click.Path(exists=True), help="JSON object of extracted field values")
@click.option("--schema", "-s", "schema_file", type=click.Path(exists=True), help="Structured data schema JSON file")
@click.option("--title", help="Title, or @FIELD to read it from the values")
@click.option("--source-repository-url", help="Source URL, or @FIELD")
@click.option("--content-language", help="Content language, or @FIELD")
@click.option("--update-time", help="Update time, or @FIELD")
@click.option("--create-time", help="Create time, or @FIELD")
@click.option("--mime-type", help="MIME type, or @FIELD")
@click.option("--item-type", type=click.Choice(["CONTENT_ITEM", "CONTAINER_ITEM", "VIRTUAL_CONTAINER_ITEM"]))
@click.option("--queue", help="Indexing queue name")
@click.option("--object-type", help="Structured data object type")
@click.option("--version", "item_version", help="Item version (encoded as UTF-8 bytes)")
@pass_config
def build(
    config: Config,
    identifier: str,
    config_file: Optional[str],
    values_file: Optional[str],
    schema_file: Optional[str],
    title: Optional[str],
    source_repository_url: Optional[str],
    content_language: Optional[str],
    update_time: Optional[str],
    create_time: Optional[str],
    mime_type: Optional[str],
    item_type: Optional[str],
    queue: Optional[str],
    object_type: Optional[str],
    item_version: Optional[str],
) -> None:
    """Build a single item and print it as JSON.

    Example:
        item-indexer build doc-1 --config items.properties --values values.json --title @name
    """
    logger = logging.getLogger("build")

    configuration = _load_configuration(config_file)
    structured_data = _load_structured_data(schema_file)

    record: dict = {"id": identifier, "values": _load_values(values_file)}
    overrides = {
        "title": title,
        "source_repository_url": source_repository_url,
        "content_language": content_language,
        "update_time": update_time,
        "create_time": create_time,
        "mime_type": mime_type,
        "item_type": item_type,
        "queue": queue,
        "object_type": object_type,
        "version": item_version,
    }
    record.update({key: value for key, value in overrides.items() if value is not None})

    logger.info(f"Building item {identifier}")
    assembler = ItemAssembler(configuration=configuration, structured_data=structured_data)
    try:
        item = assembler.build_item(record)
    except IndexerError as e:
        raise click.ClickException(f"Error building item: {e}")

    click.echo(json.dumps(item.to_dict(), indent=2))


@cli.command()
@click.argument("records_file", type=click.Path(exists=True))
@click.option("--output", "-o", required=True, type=click.Path(), help="Output directory")
@click.option("--config", "-c", "config_file", type=click.Path(exists=True), help="Configuration file (.json or .properties)")
@click.option("--schema", "-s", "schema_file", type=click.Path(exists=True), help="Structured data schema JSON file")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "parquet"]),
    default="json",
    show_default=True,
    help="Output format",
)
@click.option("--strict", is_flag=True, help="Exit with an error if any record fails")
@click.option("--dry-run", is_flag=True, help="Build items but don't write output")
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON")
@pass_config
def batch(
    config: Config,
    records_file: str,
    output: str,
    config_file: Optional[str],
    schema_file: Optional[str],
    output_format: str,
    strict: bool,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Build items from a file of records and write them.

    RECORDS_FILE is a JSON list of records (or .jsonl, one per line). Each
    record has an "id", a "values" object and optional attribute overrides.

    Example:
        item-indexer batch records.json --config items.properties --output ./export/
    """
    logger = logging.getLogger("batch")

    configuration = _load_configuration(config_file)
    structured_data = _load_structured_data(schema_file)

    logger.info(f"Reading records: {records_file}")
    try:
        result = assemble_from_file(records_file, configuration, structured_data)
    except (OSError, json.JSONDecodeError) as e:
        raise click.ClickException(f"Error reading records: {e}")

    if as_json:
        _print_batch_summary_json(result)
    else:
        click.echo(result.summary())

    if result.has_errors:
        for error in result.errors:
            click.echo(click.style(f"Warning: {error}", fg="yellow"), err=True)
        if strict:
            sys.exit(1)

    if dry_run:
        logger.info("Dry run - skipping output")
        click.echo(click.style("\nDry run - no files written", fg="cyan"))
        return

    logger.info(f"Writing to: {output}")
    output_path = Path(output)
    try:
        if output_format == "parquet":
            paths = ParquetWriter(output_path).write_batch(result)
        else:
            paths = list(JSONWriter(output_path).write_batch(result).values())
    except OSError as e:
        raise click.ClickException(f"Error writing output: {e}")

    click.echo(click.style("\nOutput files:", fg="green"))
    for path in paths:
        click.echo(f"  {path}")


@cli.command(name="check-config")
@click.argument("config_file", type=click.Path(exists=True))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@pass_config
def check_config(config: Config, config_file: str, as_json: bool) -> None:
    """Validate a configuration file.

    Loads the file and parses every date-time default, reporting the first
    malformed value.

    Example:
        item-indexer check-config items.properties
    """
    configuration = _load_configuration(config_file)
    properties = configuration.as_dict()

    if as_json:
        click.echo(json.dumps({"valid": True, "properties": properties}, indent=2))
    else:
        click.echo(f"Configuration: {click.style('OK', fg='green')}")
        for key in sorted(properties):
            click.echo(f"  {key} = {properties[key]}")


def _print_batch_summary_json(result: BatchResult) -> None:
    """Print batch summary as JSON."""
    output = {
        "source_file": result.source_file,
        "items": result.item_names,
        "errors": result.errors,
        "warnings": result.warnings,
    }
    click.echo(json.dumps(output, indent=2))


def app(args: Optional[list[str]] = None) -> int:
    """
    Main application entry point (for testing).

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success)
    """
    try:
        cli(args, standalone_mode=False)
        return 0
    except click.ClickException as e:
        e.show()
        return 1
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
