"""
Module: builder.loading.loader

Purpose:
    Load a lab-file work folder: the report configuration and the entry
    list, both validated.

Key Functions:
    - load_workspace(): Load config and entries from a folder

Key Classes:
    - Workspace: Loaded inputs plus their source paths
    - LoaderError: Exception for loading failures

Dependencies:
    - builder.loading.parser: TOML/JSON parsing

Used By:
    - builder.controller: Main build controller
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from labfile.core.models import Entry
from labfile.builder.layout.config import DocumentConfig

from .parser import ParseError, parse_entries, parse_format

logger = logging.getLogger(__name__)

SUMMARY_WIDTH = 60


class LoaderError(Exception):
    """Error loading a work folder."""
    pass


@dataclass(frozen=True)
class Workspace:
    """
    Loaded inputs of one build.

    Attributes:
        config: Report configuration
        entries: Entries sorted by index
        format_path: Source of ``config``
        entries_path: Source of ``entries``
    """

    config: DocumentConfig
    entries: Tuple[Entry, ...]
    format_path: Path
    entries_path: Path


def _summary(text: str) -> str:
    first = text.strip().splitlines()[0] if text.strip() else ""
    if len(first) > SUMMARY_WIDTH:
        return first[:SUMMARY_WIDTH - 3] + "..."
    return first


def load_workspace(
    work_dir: Path,
    *,
    format_name: str = "format.toml",
    entries_name: str = "output.json",
) -> Workspace:
    """
    Load format and entries from a work folder.

    Args:
        work_dir: Folder holding both input files
        format_name: Configuration file name
        entries_name: Entries file name

    Returns:
        Workspace with entries sorted by index

    Raises:
        LoaderError: If the folder or either file is missing or invalid

    Example:
        >>> ws = load_workspace(Path.home() / "lab3")
        >>> [e.index for e in ws.entries]
        [0, 1, 2]
    """
    if not work_dir.is_dir():
        raise LoaderError(f"Work folder does not exist: {work_dir}")

    format_path = work_dir / format_name
    entries_path = work_dir / entries_name

    try:
        config = parse_format(format_path)
        entries = parse_entries(entries_path)
    except ParseError as e:
        raise LoaderError(str(e)) from e

    ordered = tuple(sorted(entries, key=lambda e: e.index))
    logger.info(f"Loaded {len(ordered)} entries from {entries_path}")
    for entry in ordered:
        highlight = "rich" if entry.has_rich_code else "plain"
        logger.info(f"  #{entry.number} [{highlight}] {_summary(entry.question)}")

    return Workspace(
        config=config,
        entries=ordered,
        format_path=format_path,
        entries_path=entries_path,
    )
