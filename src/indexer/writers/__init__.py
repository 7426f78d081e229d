"""
Writers module for exporting built items to JSON and Parquet files.

Module structure:
- schemas.py: PyArrow schema definition for item exports
- serializers.py: Item-to-record conversion
- parquet_writer.py: ParquetWriter class
- json_writer.py: JSONWriter class for JSON output
"""

from pathlib import Path

from indexer.workflow import BatchResult

from .json_writer import JSONWriter, write_batch_to_json
from .parquet_writer import ParquetWriter
from .schemas import ITEM_SCHEMA
from .serializers import item_to_record

__all__ = [
    "ITEM_SCHEMA",
    "item_to_record",
    "ParquetWriter",
    "JSONWriter",
    "write_batch_to_parquet",
    "write_batch_to_json",
]


def write_batch_to_parquet(result: BatchResult, output_dir: str | Path) -> list[Path]:
    """
    Convenience function to write all items of a batch to Parquet.

    Args:
        result: The BatchResult from ItemAssembler
        output_dir: Directory for output files

    Returns:
        Paths to the written files

    Example:
        result = ItemAssembler(configuration).assemble(records)

        paths = write_batch_to_parquet(result, "/data/exports")
    """
    writer = ParquetWriter(output_dir)
    return writer.write_batch(result)
