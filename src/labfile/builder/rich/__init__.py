"""
Module: builder.rich

Purpose:
    Rich-text adapter: decode highlighter RTF, index its tokens and
    resolve its formatting into run styles.

Key Functions:
    - decode_rtf(): Decode RTF into blocks + color table
    - build_rich_index(): Token lookup for alignment
    - resolve_format(): Formatting -> RunStyle

Used By:
    - builder.layout: Solution rendering
"""

from .rtf import DecodeFailure, RichTextDecoder, decode_rtf
from .index import RichIndex, build_rich_index
from .resolver import CODE_FONT, CODE_SIZE, code_style, resolve_format

__all__ = [
    "DecodeFailure",
    "RichTextDecoder",
    "decode_rtf",
    "RichIndex",
    "build_rich_index",
    "CODE_FONT",
    "CODE_SIZE",
    "code_style",
    "resolve_format",
]
