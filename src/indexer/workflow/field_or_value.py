"""
Value-or-field-reference union used by the item builder.
"""

from dataclasses import dataclass
from typing import Any, Generic, Mapping, Optional, TypeVar

from indexer.structured_data import get_values

T = TypeVar("T")


@dataclass(frozen=True)
class FieldOrValue(Generic[T]):
    """
    Either a literal value or the name of a key in the item's value map.

    Exactly one variant is active; build instances with ``with_value`` or
    ``with_field``.
    """

    field: Optional[str] = None
    value: Optional[T] = None

    @classmethod
    def with_value(cls, value: Optional[T]) -> "FieldOrValue[T]":
        """Use a literal value."""
        return cls(field=None, value=value)

    @classmethod
    def with_field(cls, field: str) -> "FieldOrValue[T]":
        """Look up the first value stored under ``field`` at build time."""
        if not field:
            raise ValueError("Field name must not be empty")
        return cls(field=field, value=None)

    @property
    def is_field(self) -> bool:
        return self.field is not None

    def resolve(self, values: Optional[Mapping[str, Any]]) -> Any:
        """
        Resolve to a raw value.

        Returns:
            The literal value, the first value under the referenced key,
            or None if the key has no values
        """
        if self.field is None:
            return self.value
        found = get_values(values, self.field)
        return found[0] if found else None

    def __repr__(self) -> str:
        if self.is_field:
            return f"FieldOrValue.with_field({self.field!r})"
        return f"FieldOrValue.with_value({self.value!r})"
