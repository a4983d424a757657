"""In-memory table - main public API.

Holds column metadata and text rows, answers equality lookups by linear scan
or through a secondary index, and persists itself as a JSON document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..components.index import ColumnIndex
from ..components.persistence import read_document, require_field, write_document
from .errors import ColumnNotFoundError, DeserializationError, IndexMismatchError, StaleIndexError

if TYPE_CHECKING:
    from ..interfaces.index import SecondaryIndex
    from .types import ColumnDocument, Field, Row, RowPosition, TableDocument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Column:
    """Column metadata. dtype is a descriptive label and is never enforced."""

    name: str
    dtype: str

    def to_document(self) -> ColumnDocument:
        return {"name": self.name, "dtype": self.dtype}


class Table:
    """Append-only table of text rows.

    Args:
        name: Table name
        columns: Ordered column definitions
        rows: Initial rows (the list is used as-is, not copied)

    Public API:
        - insert(row): Append a row
        - select(column_name, value): Linear equality scan
        - create_index(column_name): Build a ColumnIndex snapshot
        - select_with_index(index, value): Equality lookup through an index
        - save_to_file(filename) / load_from_file(filename): JSON persistence

    Invariants:
        - A row's position never changes once inserted
        - Field count and types are not validated; all values are text
    """

    def __init__(self, name: str, columns: list[Column], rows: list[Row] | None = None):
        self.name = name
        self.columns = list(columns)
        self.rows: list[Row] = rows if rows is not None else []

    def __len__(self) -> int:
        return len(self.rows)

    def __repr__(self) -> str:
        return f"Table(name={self.name!r}, columns={self.columns!r}, rows={len(self.rows)})"

    def column_position(self, column_name: str) -> int:
        """Return the position of column_name among the columns."""
        for i, column in enumerate(self.columns):
            if column.name == column_name:
                return i
        raise ColumnNotFoundError(column_name, self.name, [c.name for c in self.columns])

    # ---------------- INSERT ----------------
    def insert(self, row: Row) -> RowPosition:
        """Append row and return its position."""
        self.rows.append(row)
        return len(self.rows) - 1

    # ---------------- SELECT ----------------
    def select(self, column_name: str, value: Field) -> list[Row]:
        """Return every row whose field in column_name equals value, in row order."""
        pos = self.column_position(column_name)
        return [row for row in self.rows if row[pos] == value]

    def select_with_index(
        self, index: SecondaryIndex, value: Field, column_name: str | None = None
    ) -> list[Row]:
        """Return the rows the index stores under value, in stored order.

        The index is trusted to have been built for the queried column unless
        column_name is given, in which case a mismatch raises
        IndexMismatchError. An index that recorded its build-time row count
        must still match this table's row count.
        """
        if column_name is not None and index.column_name != column_name:
            raise IndexMismatchError(
                f"Index is on column '{index.column_name}', query is on '{column_name}'"
            )
        if index.row_count is not None and index.row_count != len(self.rows):
            raise StaleIndexError(
                f"Index on '{index.column_name}' was built over {index.row_count} rows, "
                f"table '{self.name}' now has {len(self.rows)}"
            )

        positions = index.lookup(value)
        for i in positions:
            # Negative positions would wrap around instead of failing
            if not 0 <= i < len(self.rows):
                raise StaleIndexError(
                    f"Index on '{index.column_name}' references row {i} outside "
                    f"table '{self.name}' ({len(self.rows)} rows)"
                )
        return [self.rows[i] for i in positions]

    # ---------------- INDEX ----------------
    def create_index(self, column_name: str) -> ColumnIndex:
        """Build a fresh index over column_name from the current rows."""
        pos = self.column_position(column_name)
        index = ColumnIndex(column_name, row_count=len(self.rows))

        for i, row in enumerate(self.rows):
            index.add_entry(row[pos], i)

        logger.info(
            f"Index created on column '{column_name}' of '{self.name}' "
            f"({len(self.rows)} rows, {len(index)} distinct values)"
        )
        return index

    # ---------------- PERSISTENCE ----------------
    def to_document(self) -> TableDocument:
        return {
            "name": self.name,
            "columns": [column.to_document() for column in self.columns],
            "rows": [list(row) for row in self.rows],
        }

    @classmethod
    def from_document(cls, document: Any, source: str = "table document") -> Table:
        """Build a table from its serialized form, validating the schema."""
        name = require_field(document, "name", str, source)
        raw_columns = require_field(document, "columns", list, source)
        raw_rows = require_field(document, "rows", list, source)

        columns = []
        for i, raw in enumerate(raw_columns):
            columns.append(
                Column(
                    name=require_field(raw, "name", str, f"{source} column {i}"),
                    dtype=require_field(raw, "dtype", str, f"{source} column {i}"),
                )
            )

        for i, row in enumerate(raw_rows):
            if not isinstance(row, list) or not all(isinstance(f, str) for f in row):
                raise DeserializationError(f"{source}: row {i} must be a list of strings")

        return cls(name, columns, raw_rows)

    def save_to_file(
        self, filename: str | Path, indent: int | None = None, fsync: bool = True
    ) -> None:
        """Write the whole table to filename as a JSON document."""
        write_document(filename, self.to_document(), indent=indent, fsync=fsync)
        logger.info(f"Saved table '{self.name}' ({len(self.rows)} rows) to {filename}")

    @classmethod
    def load_from_file(cls, filename: str | Path) -> Table:
        """Read a table document written by save_to_file."""
        table = cls.from_document(read_document(filename), source=str(filename))
        logger.info(f"Loaded table '{table.name}' ({len(table.rows)} rows) from {filename}")
        return table
