"""
Parquet file writer for item exports.
"""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import TYPE_CHECKING

import pyarrow as pa
import pyarrow.parquet as pq

from indexer.models.item import Item

from .schemas import ITEM_SCHEMA
from .serializers import item_to_record

if TYPE_CHECKING:
    from indexer.workflow import BatchResult


class ParquetWriter:
    """
    Writes built items to Parquet files.

    Supports Hive-style partitioning by object type.

    Example:
        writer = ParquetWriter("/data/exports")
        paths = writer.write_items(result.items)
    """

    def __init__(
        self,
        output_dir: str | Path,
        partition_by_object_type: bool = True,
    ):
        """
        Initialize the writer with an output directory.

        Args:
            output_dir: Base directory for output files. Subdirectories
                       will be created for partitions.
            partition_by_object_type: Whether to partition by object type (default True)
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.partition_by_object_type = partition_by_object_type

    def _get_partition_path(self, table_name: str, object_type: str | None = None) -> Path:
        """
        Build a partition path.

        Args:
            table_name: The table name (e.g., 'items')
            object_type: Optional object type for partitioning

        Returns:
            Path to the partition directory
        """
        parts = [self.output_dir, table_name]
        if object_type and self.partition_by_object_type:
            parts.append(f"object_type={object_type}")
        return Path(*parts)

    def write_items(self, items: list[Item], filename: str = "items.parquet") -> list[Path]:
        """
        Write items to Parquet, one file per partition.

        Args:
            items: Items to write
            filename: File name used in each partition directory

        Returns:
            Paths to the written files
        """
        groups: dict[str | None, list[dict]] = defaultdict(list)
        for item in items:
            key = item.metadata.object_type if self.partition_by_object_type else None
            groups[key].append(item_to_record(item))

        paths = []
        for object_type, records in groups.items():
            table = pa.Table.from_pylist(records, schema=ITEM_SCHEMA)

            partition_dir = self._get_partition_path("items", object_type)
            partition_dir.mkdir(parents=True, exist_ok=True)

            output_path = partition_dir / filename
            pq.write_table(table, output_path)
            paths.append(output_path)

        return paths

    def write_batch(self, result: BatchResult) -> list[Path]:
        """Write all items of a batch result."""
        return self.write_items(result.items)
