"""Single-column secondary index.

Maps each distinct column value to the positions of the rows holding it.
Uses sortedcontainers.SortedDict so keys iterate and persist in sorted order.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from sortedcontainers import SortedDict

from ..core.errors import DeserializationError
from .persistence import read_document, require_field, write_document

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ..core.types import Field, IndexDocument, IndexStats, RowPosition

logger = logging.getLogger(__name__)


class ColumnIndex:
    """Point-in-time equality index over one column of a table.

    Args:
        column_name: Name of the indexed column
        row_count: Number of rows in the source table at build time,
            or None when unknown

    Invariants:
        - Positions under each value are in insertion (row-scan) order
        - The index holds no reference to its source table
        - Equality ignores row_count
    """

    def __init__(self, column_name: str, row_count: int | None = None):
        self.column_name = column_name
        self.row_count = row_count
        self.index: SortedDict = SortedDict()

    def add_entry(self, value: Field, row_index: RowPosition) -> None:
        """Append row_index to the positions stored under value."""
        positions = self.index.get(value)
        if positions is None:
            positions = self.index[value] = []
        positions.append(row_index)

    def lookup(self, value: Field) -> list[RowPosition]:
        """Return the positions stored under value, or [] if absent."""
        return list(self.index.get(value, ()))

    def keys(self) -> Iterator[Field]:
        """Iterate distinct values in sorted order."""
        return iter(self.index.keys())

    def stats(self) -> IndexStats:
        return {
            "column_name": self.column_name,
            "distinct_values": len(self.index),
            "total_rows_indexed": sum(len(p) for p in self.index.values()),
        }

    def __len__(self) -> int:
        return len(self.index)

    def __contains__(self, value: object) -> bool:
        return value in self.index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColumnIndex):
            return NotImplemented
        return self.column_name == other.column_name and self.index == other.index

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return (
            f"ColumnIndex(column_name={self.column_name!r}, "
            f"distinct_values={len(self.index)}, row_count={self.row_count!r})"
        )

    # ---------------- persistence ----------------

    def to_document(self) -> IndexDocument:
        document: IndexDocument = {
            "column_name": self.column_name,
            "index": {value: list(positions) for value, positions in self.index.items()},
        }
        if self.row_count is not None:
            document["row_count"] = self.row_count
        return document

    @classmethod
    def from_document(cls, document: Any, source: str = "index document") -> ColumnIndex:
        """Build an index from its serialized form, validating the schema."""
        column_name = require_field(document, "column_name", str, source)
        mapping = require_field(document, "index", dict, source)

        row_count = None
        if "row_count" in document:
            row_count = require_field(document, "row_count", int, source)
            if row_count < 0:
                raise DeserializationError(f"{source}: 'row_count' must be non-negative")

        index = cls(column_name, row_count=row_count)
        for value, positions in mapping.items():
            if not isinstance(positions, list):
                raise DeserializationError(
                    f"{source}: positions for {value!r} must be a list"
                )
            for position in positions:
                if (
                    not isinstance(position, int)
                    or isinstance(position, bool)
                    or position < 0
                ):
                    raise DeserializationError(
                        f"{source}: invalid row position {position!r} for {value!r}"
                    )
            index.index[value] = list(positions)
        return index

    def save_to_file(
        self, filename: str | Path, indent: int | None = None, fsync: bool = True
    ) -> None:
        """Write the index document to filename, creating or truncating it."""
        write_document(filename, self.to_document(), indent=indent, fsync=fsync)
        logger.info(
            f"Saved index on '{self.column_name}' ({len(self.index)} values) to {filename}"
        )

    @classmethod
    def load_from_file(cls, filename: str | Path) -> ColumnIndex:
        """Read an index document written by save_to_file."""
        index = cls.from_document(read_document(filename), source=str(filename))
        logger.info(
            f"Loaded index on '{index.column_name}' ({len(index)} values) from {filename}"
        )
        return index
