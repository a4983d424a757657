"""minitable demo driver

Builds a large table, indexes one column, persists and reloads the index,
then times an index lookup against a full scan for the same value.

Usage:
    minitable-demo --rows 1000000 --column name --needle Alice
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path

from minitable.components.index import ColumnIndex
from minitable.core.config import MiniTableConfig
from minitable.core.errors import MiniTableError
from minitable.core.table import Column, Table
from minitable.core.types import Row

MARKER_ID = "ZZZ"


@dataclass
class DemoResult:
    """Outcome of one scan-vs-index comparison."""

    indexed_rows: list[Row]
    scanned_rows: list[Row]
    index_micros: int
    scan_micros: int


def build_users_table(num_rows: int, needle: str) -> Table:
    """Create the demo table: num_rows generated rows plus one marker row holding needle."""
    table = Table(
        "users",
        [Column(name="id", dtype="int"), Column(name="name", dtype="string")],
    )
    for i in range(num_rows):
        table.insert([str(i), f"test {i}"])
    table.insert([MARKER_ID, needle])
    return table


def run_demo(config: MiniTableConfig, num_rows: int, column: str, needle: str) -> DemoResult:
    """Run the scan-vs-index workload and print both timings."""
    Path(config.data_dir).mkdir(parents=True, exist_ok=True)

    print(f"Building table with {num_rows + 1} rows...")
    table = build_users_table(num_rows, needle)
    table.save_to_file(config.table_path(), indent=config.json_indent, fsync=config.fsync_on_save)

    index = table.create_index(column)
    index_path = config.index_path(column)
    index.save_to_file(index_path, indent=config.json_indent, fsync=config.fsync_on_save)

    loaded_index = ColumnIndex.load_from_file(index_path)

    print("With index")
    start = time.perf_counter()
    indexed_rows = table.select_with_index(loaded_index, needle, column_name=column)
    index_micros = int((time.perf_counter() - start) * 1_000_000)
    print(indexed_rows)
    print(f"Lookup took: {index_micros} us")

    print("Without index")
    start = time.perf_counter()
    scanned_rows = table.select(column, needle)
    scan_micros = int((time.perf_counter() - start) * 1_000_000)
    print(scanned_rows)
    print(f"Scan took: {scan_micros} us")

    return DemoResult(indexed_rows, scanned_rows, index_micros, scan_micros)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="minitable-demo", description="Compare index lookup with a full table scan"
    )
    p.add_argument("--data-dir", default="/tmp/minitable_demo", help="Data directory")
    p.add_argument("--rows", type=int, default=1_000_000, help="Number of generated rows")
    p.add_argument(
        "--column",
        default="name",
        help="Column to index and query (default: name)",
    )
    p.add_argument(
        "--needle", default="Alice", help="Value stored in the marker row and looked up"
    )
    p.add_argument(
        "--json-indent", type=int, default=None, help="Indent persisted documents"
    )
    p.add_argument("--no-fsync", action="store_true", help="Skip fsync on save")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return p


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config = MiniTableConfig(
        data_dir=args.data_dir,
        json_indent=args.json_indent,
        fsync_on_save=not args.no_fsync,
    )

    try:
        run_demo(config, args.rows, args.column, args.needle)
    except (MiniTableError, OSError) as e:
        print(f"Demo failed: {e}")
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
