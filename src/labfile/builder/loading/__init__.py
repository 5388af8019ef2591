"""
Module: builder.loading

Purpose:
    Input loading: format.toml and output.json from a work folder.

Key Functions:
    - load_workspace(): Load config and entries
    - parse_format(): Parse format.toml
    - parse_entries(): Parse output.json

Used By:
    - builder.controller: Main build controller
"""

from .loader import LoaderError, Workspace, load_workspace
from .parser import ParseError, parse_entries, parse_format, parse_format_from_dict

__all__ = [
    "LoaderError",
    "Workspace",
    "load_workspace",
    "ParseError",
    "parse_entries",
    "parse_format",
    "parse_format_from_dict",
]
