"""
Module: tokens

Purpose:
    Lexical units of a raw source line, as produced by the raw-code
    tokenizer and consumed by the token aligner.

Key Classes:
    - TokenKind: word / punct / string / whitespace
    - Token: Text plus kind

Dependencies:
    - enum (std)
    - dataclasses (std)

Used By:
    - builder.code.tokenizer
    - builder.code.aligner
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    """Classification assigned by the raw-code tokenizer."""

    WORD = "word"
    PUNCT = "punct"
    STRING = "string"
    WHITESPACE = "whitespace"


@dataclass(frozen=True, slots=True)
class Token:
    """
    One lexical unit of a raw code line.

    Example:
        >>> Token("int", TokenKind.WORD).is_whitespace
        False
    """

    text: str
    kind: TokenKind

    @property
    def is_whitespace(self) -> bool:
        """Whitespace tokens carry no format and pass through verbatim."""
        return self.kind is TokenKind.WHITESPACE
