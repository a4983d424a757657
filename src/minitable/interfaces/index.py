"""Protocol definition for a secondary index."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..core.types import Field, RowPosition


class SecondaryIndex(Protocol):
    """Equality index from column value to row positions."""

    column_name: str
    row_count: int | None

    def add_entry(self, value: Field, row_index: RowPosition) -> None:
        """Append row_index to the positions stored under value."""
        ...

    def lookup(self, value: Field) -> list[RowPosition]:
        """Return the positions stored under value, or [] if absent."""
        ...
