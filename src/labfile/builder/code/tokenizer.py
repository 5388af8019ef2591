"""
Module: builder.code.tokenizer

Purpose:
    Split one raw source line into ordered tokens. Concatenating the
    token texts always reproduces the line exactly.

Key Functions:
    - tokenize_line(): Raw line -> list of Tokens

Dependencies:
    - core.models.tokens: Token, TokenKind

Used By:
    - builder.code.aligner: Heuristic alignment
"""

from __future__ import annotations

from typing import List

from labfile.core.models import Token, TokenKind

QUOTES = frozenset("\"'")
WHITESPACE = frozenset(" \t")
OPERATORS = frozenset("(){}[];,.+-*/=<>!&|")


def tokenize_line(line: str) -> List[Token]:
    """
    Tokenize a single line of raw code in one greedy left-to-right pass.

    Rules:
    - A quote opens a string literal that runs to the next unescaped
      occurrence of the same quote, or to the end of the line.
    - Each space or tab is its own whitespace token.
    - Each character of ``( ) { } [ ] ; , . + - * / = < > ! & |`` is its
      own punctuation token.
    - Anything else accumulates into a word.

    Args:
        line: One line of code without its line terminator

    Returns:
        Tokens in source order

    Example:
        >>> [t.text for t in tokenize_line('int x = "a b";')]
        ['int', ' ', 'x', ' ', '=', ' ', '"a b"', ';']
    """
    tokens: List[Token] = []
    word: List[str] = []

    def flush_word() -> None:
        if word:
            tokens.append(Token("".join(word), TokenKind.WORD))
            word.clear()

    i = 0
    length = len(line)
    while i < length:
        ch = line[i]
        if ch in QUOTES:
            flush_word()
            end = _string_end(line, i)
            tokens.append(Token(line[i:end], TokenKind.STRING))
            i = end
            continue

        if ch in WHITESPACE:
            flush_word()
            tokens.append(Token(ch, TokenKind.WHITESPACE))
        elif ch in OPERATORS:
            flush_word()
            tokens.append(Token(ch, TokenKind.PUNCT))
        else:
            word.append(ch)
        i += 1

    flush_word()
    return tokens


def _string_end(line: str, start: int) -> int:
    """Index just past the literal opened at ``start``."""
    quote = line[start]
    escaped = False
    for j in range(start + 1, len(line)):
        ch = line[j]
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == quote:
            return j + 1
    return len(line)
