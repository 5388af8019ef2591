"""
Module: core.utils.text

Purpose:
    Small text helpers used on every rendered section: line splitting with
    stable line counts and removal of terminal escape sequences.

Key Functions:
    - split_lines(): Split text into lines (empty text is one line)
    - strip_ansi(): Remove ESC[...m sequences

Dependencies:
    - None

Used By:
    - builder.layout.runs: Paragraph-per-line building
    - builder.layout.templates: Output cleaning before substitution
"""

from __future__ import annotations

from typing import List

ESCAPE = "\x1b"


def split_lines(text: str) -> List[str]:
    """
    Split text into lines.

    Lines end at "\\n" with an optional preceding "\\r". A final trailing
    newline does not open an extra line, and empty text is one empty line,
    so every input yields at least one line.

    Args:
        text: Text to split

    Returns:
        List of lines without terminators

    Example:
        >>> split_lines("a\\r\\nb\\n")
        ['a', 'b']
        >>> split_lines("")
        ['']
    """
    if not text:
        return [""]

    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def strip_ansi(text: str) -> str:
    """
    Remove ANSI escape sequences of the form ESC [ ... m.

    Everything from the escape byte up to and including the next "m" is
    dropped; an unterminated sequence swallows the rest of the string. An
    escape byte not followed by "[" is kept.

    Args:
        text: Terminal output

    Returns:
        Text with escape sequences removed

    Example:
        >>> strip_ansi("\\x1b[31mHELLO\\x1b[0m")
        'HELLO'
    """
    if ESCAPE not in text:
        return text

    out: List[str] = []
    i = 0
    length = len(text)
    while i < length:
        ch = text[i]
        if ch == ESCAPE and i + 1 < length and text[i + 1] == "[":
            end = text.find("m", i + 2)
            if end == -1:
                break
            i = end + 1
            continue
        out.append(ch)
        i += 1
    return "".join(out)
