"""
Module: builder.code

Purpose:
    Raw-code tokenization and the two strategies for mapping rich-text
    formatting onto raw code: heuristic token alignment and character
    stream replay.

Key Functions:
    - tokenize_line(): Raw line -> Tokens
    - find_best_format(): Match one token against a RichIndex
    - align_line(): Match every token of a line
    - align_stream(): Character replay over a whole code block
"""

from .tokenizer import tokenize_line
from .aligner import (
    DEFAULT_KEYWORDS,
    FormatMatch,
    MatchRule,
    align_line,
    find_best_format,
)
from .streaming import align_stream

__all__ = [
    "tokenize_line",
    "DEFAULT_KEYWORDS",
    "FormatMatch",
    "MatchRule",
    "align_line",
    "find_best_format",
    "align_stream",
]
