"""JSON document persistence.

Whole-document writes and reads shared by tables and indexes.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from ..core.errors import DeserializationError, SerializationError

logger = logging.getLogger(__name__)


def encode_document(document: Any, indent: int | None = None) -> str:
    """Encode a document as JSON text with sorted mapping keys."""
    try:
        return json.dumps(
            document, indent=indent, sort_keys=True, ensure_ascii=False, allow_nan=False
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Cannot encode document: {e}") from e


def write_document(
    path: str | Path,
    document: Any,
    indent: int | None = None,
    fsync: bool = True,
) -> None:
    """Write a document to path, creating or replacing the file.

    The document is encoded before the file is touched, then written to a
    temp file next to the target and renamed over it.
    """
    path = Path(path)
    payload = encode_document(document, indent=indent)

    temp_path = path.with_name(path.name + ".tmp")
    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            if fsync:
                os.fsync(f.fileno())

        # Atomic rename
        os.replace(temp_path, path)
    except OSError as e:
        logger.error(f"Failed to write {path}: {e}")
        raise
    logger.debug(f"Wrote {len(payload)} bytes to {path}")


def read_document(path: str | Path) -> Any:
    """Read and decode the JSON document stored at path."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            raw = f.read()
    except OSError as e:
        logger.error(f"Failed to read {path}: {e}")
        raise
    except UnicodeDecodeError as e:
        logger.error(f"Undecodable document at {path}: {e}")
        raise DeserializationError(f"{path} is not UTF-8 text: {e}") from e

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error(f"Malformed document at {path}: {e}")
        raise DeserializationError(f"Malformed JSON in {path}: {e}") from e


def require_field(document: Any, field: str, expected: type, source: str) -> Any:
    """Return document[field], checking presence and type."""
    if not isinstance(document, dict):
        raise DeserializationError(
            f"{source}: expected an object, got {type(document).__name__}"
        )
    if field not in document:
        raise DeserializationError(f"{source}: missing field '{field}'")
    value = document[field]
    # bool is an int subclass but never a valid position or count
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise DeserializationError(
            f"{source}: field '{field}' must be {expected.__name__}, "
            f"got {type(value).__name__}"
        )
    return value
