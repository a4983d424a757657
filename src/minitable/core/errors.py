"""Exception hierarchy for minitable.

Defines all custom exceptions used throughout the implementation.
I/O failures are not wrapped and surface as the builtin OSError family.
"""

from __future__ import annotations


class MiniTableError(Exception):
    """Base exception for all minitable errors."""
    pass


class ColumnNotFoundError(MiniTableError, LookupError):
    """Raised when a column name is not part of a table's columns."""

    def __init__(self, column_name: str, table_name: str, available: list[str]):
        self.column_name = column_name
        self.table_name = table_name
        self.available = available
        super().__init__(
            f"Column '{column_name}' not found in table '{table_name}'. "
            f"Available: {available}"
        )


class StaleIndexError(MiniTableError):
    """Raised when an index no longer matches the table it is applied to."""
    pass


class IndexMismatchError(MiniTableError):
    """Raised when an index built for one column is used to query another."""
    pass


class SerializationError(MiniTableError):
    """Raised when an in-memory value cannot be encoded."""
    pass


class DeserializationError(MiniTableError):
    """Raised when persisted content does not match the expected schema."""
    pass
