"""Common type definitions for minitable.

Defines the row representation and the persisted document shapes.
"""

from __future__ import annotations

from typing import NotRequired, TypedDict

# Core primitive types
Field = str
Row = list[Field]
RowPosition = int


class ColumnDocument(TypedDict):
    """Serialized form of a single column definition."""
    name: str
    dtype: str


class TableDocument(TypedDict):
    """Serialized form of a whole table."""
    name: str
    columns: list[ColumnDocument]
    rows: list[Row]


class IndexDocument(TypedDict):
    """Serialized form of a single-column secondary index."""
    column_name: str
    index: dict[Field, list[RowPosition]]
    row_count: NotRequired[int]


class IndexStats(TypedDict):
    """Summary counters for an index."""
    column_name: str
    distinct_values: int
    total_rows_indexed: int
