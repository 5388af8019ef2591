"""Shared utilities: text helpers and entry deserialization."""

from .text import split_lines, strip_ansi
from .serialization import deserialize_entries, load_entries

__all__ = [
    "split_lines",
    "strip_ansi",
    "deserialize_entries",
    "load_entries",
]
