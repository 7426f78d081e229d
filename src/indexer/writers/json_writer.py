"""
JSON writer for outputting built items.

Items are written in their wire shape (camelCase names, unset attributes
omitted), ready to be sent to the search index.
"""

from __future__ import annotations

import json
from pathlib import Path

from indexer.models.item import Item
from indexer.workflow import BatchResult


class JSONWriter:
    """Writes built items to JSON files."""

    def __init__(self, output_dir: str | Path):
        """
        Initialize the JSON writer.

        Args:
            output_dir: Base directory for output files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write_items(self, items: list[Item], filename: str = "items.json") -> Path:
        """
        Write items as a JSON list.

        Args:
            items: Items to write
            filename: Output file name

        Returns:
            Path to the written JSON file
        """
        output_path = self.output_dir / filename

        with open(output_path, "w") as f:
            json.dump([item.to_dict() for item in items], f, indent=2)

        return output_path

    def write_errors(self, errors: list[str], filename: str = "errors.json") -> Path:
        """Write batch error messages as a JSON list."""
        output_path = self.output_dir / filename

        with open(output_path, "w") as f:
            json.dump(errors, f, indent=2)

        return output_path

    def write_batch(self, result: BatchResult) -> dict[str, Path]:
        """
        Write the items of a batch, and its errors if there were any.

        Args:
            result: The BatchResult from ItemAssembler

        Returns:
            Dict mapping output names to written file paths
        """
        paths: dict[str, Path] = {"items": self.write_items(result.items)}

        if result.errors:
            paths["errors"] = self.write_errors(result.errors)

        return paths


def write_batch_to_json(result: BatchResult, output_dir: str | Path) -> dict[str, Path]:
    """
    Convenience function to write a batch result to JSON.

    Args:
        result: The BatchResult from ItemAssembler
        output_dir: Directory for output files

    Returns:
        Dict mapping output names to written file paths
    """
    writer = JSONWriter(output_dir)
    return writer.write_batch(result)
