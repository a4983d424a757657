"""minitable - in-memory table with a single-column secondary index."""

from .core.config import MiniTableConfig
from .core.errors import (
    MiniTableError,
    ColumnNotFoundError,
    StaleIndexError,
    IndexMismatchError,
    SerializationError,
    DeserializationError,
)
from .core.table import Column, Table
from .core.types import Field, Row, RowPosition, TableDocument, IndexDocument, IndexStats
from .components.index import ColumnIndex

__all__ = [
    "MiniTableConfig",
    "MiniTableError",
    "ColumnNotFoundError",
    "StaleIndexError",
    "IndexMismatchError",
    "SerializationError",
    "DeserializationError",
    "Column",
    "Table",
    "ColumnIndex",
    "Field",
    "Row",
    "RowPosition",
    "TableDocument",
    "IndexDocument",
    "IndexStats",
]
