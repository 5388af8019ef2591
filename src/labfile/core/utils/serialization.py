"""
Serialization Utilities

JSON helpers for the ``output.json`` entry list.

- ``deserialize_entries`` converts decoded records into Entry objects
- ``load_entries`` adds file I/O on top
- Validation via schemas runs before any Entry is constructed
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..models.entries import Entry
from ..schemas.validator import validate_entries


def deserialize_entries(data: Any, *, validate: bool = True) -> list[Entry]:
    """
    Deserialize entries from decoded JSON.

    Args:
        data: List of records
        validate: Whether to validate against schema first

    Returns:
        Entries in file order

    Raises:
        ValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_entries(data)
    return [Entry.from_dict(record) for record in data]


def load_entries(path: Path, *, validate: bool = True) -> list[Entry]:
    """
    Load entries from a JSON file.

    Raises:
        FileNotFoundError: If path does not exist
        json.JSONDecodeError: If the file is not valid JSON
        ValidationError: If validate=True and data is invalid
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return deserialize_entries(data, validate=validate)
