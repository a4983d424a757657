"""Configuration for minitable.

Defines where tables and indexes are persisted and how documents are written.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class MiniTableConfig:
    """Configuration parameters for table and index persistence.

    Attributes:
        data_dir: Root directory for all persisted documents
        table_filename: File name of the table document inside data_dir
        index_filename_template: File name pattern for index documents,
            formatted with the indexed column name
        json_indent: Indentation passed to the JSON encoder (None = compact)
        fsync_on_save: Whether to fsync documents before the atomic rename
    """

    data_dir: str
    table_filename: str = "table.json"
    index_filename_template: str = "{column}_index.json"
    json_indent: int | None = None
    fsync_on_save: bool = True

    def table_path(self) -> Path:
        """Return the full path of the table document."""
        return Path(self.data_dir) / self.table_filename

    def index_path(self, column: str) -> Path:
        """Return the full path of the index document for a column."""
        return Path(self.data_dir) / self.index_filename_template.format(column=column)
