"""
Workflow module for building index items.

Module structure:
- field_or_value.py: FieldOrValue value/field-reference union
- item_builder.py: ItemBuilder resolving a single item
- result.py: BatchResult dataclass
- assembler.py: ItemAssembler building batches of items
"""

import json
from pathlib import Path
from typing import Optional

from indexer.config import ItemConfiguration
from indexer.structured_data import StructuredData

from .assembler import ItemAssembler
from .field_or_value import FieldOrValue
from .item_builder import ItemBuilder
from .result import BatchResult

__all__ = [
    # Main classes
    "FieldOrValue",
    "ItemBuilder",
    "ItemAssembler",
    "BatchResult",
    # Convenience function
    "assemble_from_file",
]


def assemble_from_file(
    records_path: str | Path,
    configuration: Optional[ItemConfiguration] = None,
    structured_data: Optional[StructuredData] = None,
) -> BatchResult:
    """
    Convenience function to build items from a JSON records file.

    The file holds a list of records, or one record per line (JSON Lines)
    when its suffix is ``.jsonl``.

    Args:
        records_path: Path to the records file
        configuration: Optional configuration defaults
        structured_data: Optional schema context

    Returns:
        BatchResult with built items

    Example:
        result = assemble_from_file("records.json", ItemConfiguration.from_file("items.properties"))
        print(result.summary())
    """
    path = Path(records_path)
    with open(path) as f:
        if path.suffix.lower() == ".jsonl":
            records = [json.loads(line) for line in f if line.strip()]
        else:
            records = json.load(f)

    if isinstance(records, dict):
        records = [records]

    assembler = ItemAssembler(configuration=configuration, structured_data=structured_data)
    result = assembler.assemble(records)
    result.source_file = str(path)
    return result
