"""
Batch result dataclass.

Holds the output of building a batch of items.
"""

from dataclasses import dataclass, field

from indexer.models.item import Item


@dataclass
class BatchResult:
    """
    Result of building items from a batch of records.

    A record that fails to build is reported in ``errors`` and skipped;
    the remaining records are still built.

    Attributes:
        items: Successfully built items, in input order
        errors: One message per record that could not be built
        warnings: Non-fatal issues encountered
        source_file: Path of the records file, if read from disk
    """

    items: list[Item] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    source_file: str | None = None

    @property
    def has_errors(self) -> bool:
        """Check if there were any errors."""
        return len(self.errors) > 0

    @property
    def item_names(self) -> list[str]:
        return [item.name for item in self.items]

    def summary(self) -> str:
        """Generate a human-readable summary."""
        lines = ["Batch Summary:"]
        lines.append(f"  Items built: {len(self.items)}")

        with_structured = sum(1 for item in self.items if item.structured_data is not None)
        if with_structured:
            lines.append(f"    With structured data: {with_structured}")

        if self.warnings:
            lines.append(f"\nWarnings ({len(self.warnings)}):")
            for w in self.warnings[:5]:  # Limit to first 5
                lines.append(f"  - {w}")

        if self.errors:
            lines.append(f"\nErrors ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  - {e}")

        return "\n".join(lines)
