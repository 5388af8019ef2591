"""
Module: builder.loading.parser

Purpose:
    Parse and validate the two input files of a build: ``format.toml``
    (report configuration) and ``output.json`` (entries).

Key Functions:
    - parse_format(): format.toml -> DocumentConfig
    - parse_format_from_dict(): Mapping -> DocumentConfig
    - parse_entries(): output.json -> list of Entry

Key Classes:
    - ParseError: Exception for parse failures

Dependencies:
    - tomllib (std)
    - json (std)
    - labfile.core.schemas.validator: Schema validation

Used By:
    - builder.loading.loader: Workspace loading
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List

from labfile.core.models import Entry
from labfile.core.schemas.validator import ValidationError, validate_format
from labfile.core.utils.serialization import load_entries
from labfile.builder.layout.config import DocumentConfig

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Error parsing an input file."""
    pass


def parse_format(path: Path) -> DocumentConfig:
    """
    Parse format.toml.

    Validates:
    - File exists and is valid TOML
    - Required sections present (question, solution, output)
    - Option types correct

    Args:
        path: Path to format.toml

    Returns:
        DocumentConfig

    Raises:
        ParseError: If file missing, invalid TOML, or invalid options

    Example:
        >>> config = parse_format(Path("~/lab/format.toml"))
        >>> config.solution.title.text
        'Solution'
    """
    if not path.exists():
        raise ParseError(f"Format file not found: {path}")

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ParseError(f"Invalid TOML in {path}: {e}") from e

    return parse_format_from_dict(data, source=str(path))


def parse_format_from_dict(data: Dict[str, Any], *, source: str = "format") -> DocumentConfig:
    """
    Build a DocumentConfig from an already-decoded mapping.

    Raises:
        ParseError: If the mapping fails validation
    """
    try:
        validate_format(data)
        return DocumentConfig.from_dict(data)
    except ValidationError as e:
        details = "; ".join(e.errors) if e.errors else str(e)
        raise ParseError(f"Invalid format configuration in {source}: {details}") from e
    except ValueError as e:
        raise ParseError(f"Invalid option in {source}: {e}") from e


def parse_entries(path: Path) -> List[Entry]:
    """
    Parse output.json.

    Args:
        path: Path to output.json

    Returns:
        Entries in file order

    Raises:
        ParseError: If file missing, invalid JSON, or records invalid
    """
    if not path.exists():
        raise ParseError(f"Entries file not found: {path}")

    try:
        return load_entries(path)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in {path}: {e}") from e
    except ValidationError as e:
        raise ParseError(f"Invalid entries in {path}: {e}") from e
    except ValueError as e:
        raise ParseError(f"Invalid entry in {path}: {e}") from e
