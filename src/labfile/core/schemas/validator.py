"""
Schema Validation Utilities

Validates the two input documents of a lab-file build against packaged
JSON Schemas:

- ``entries.schema.json``: the ``output.json`` entry array
- ``format.schema.json``: the parsed ``format.toml`` configuration

Schema checks run before any dataclass is constructed so that a bad input
file fails with every problem listed at once instead of the first
KeyError.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _validate(data: Any, schema_name: str, what: str) -> None:
    schema = _load_schema(schema_name)
    validator = jsonschema.Draft202012Validator(schema)
    problems = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))
    if not problems:
        return

    messages = []
    for problem in problems:
        location = "/".join(str(p) for p in problem.absolute_path) or "<root>"
        messages.append(f"{location}: {problem.message}")

    first = problems[0]
    raise ValidationError(
        f"Invalid {what}: {messages[0]}"
        + (f" (+{len(messages) - 1} more)" if len(messages) > 1 else ""),
        path="/".join(str(p) for p in first.absolute_path),
        errors=messages,
    )


def validate_entries(data: Any) -> None:
    """
    Validate an ``output.json`` payload.

    Checks the schema, then that entry indices are unique.

    Args:
        data: Decoded JSON value

    Raises:
        ValidationError: If data is invalid
    """
    _validate(data, "entries", "entries")

    seen: dict[int, int] = {}
    for position, record in enumerate(data):
        index = record["index"]
        if index in seen:
            raise ValidationError(
                f"Duplicate entry index {index} (records {seen[index]} and {position})",
                path=f"{position}/index",
            )
        seen[index] = position


def validate_format(data: Any) -> None:
    """
    Validate a parsed ``format.toml`` document.

    Args:
        data: Mapping produced by the TOML parser

    Raises:
        ValidationError: If data is invalid
    """
    _validate(data, "format", "format configuration")
