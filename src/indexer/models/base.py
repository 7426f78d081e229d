"""
Base model for all index entities.

Provides the shared pydantic configuration and serialization helpers.
"""

from pydantic import BaseModel, ConfigDict


class IndexModel(BaseModel):
    """
    Base model for index records and schema definitions.

    Provides:
    - Immutability once constructed
    - camelCase wire names via field aliases
    - JSON serialization that omits unset attributes
    """

    model_config = ConfigDict(
        # Built records are not mutated after construction
        frozen=True,
        # Use enum values in serialization
        use_enum_values=True,
        # Populate by field name or alias
        populate_by_name=True,
    )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Convert to JSON string."""
        return self.model_dump_json(by_alias=True, exclude_none=True)
