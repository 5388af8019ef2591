"""
Module: builder.code.streaming

Purpose:
    Character-replay alignment. Assumes the highlighter's text matches the
    raw code one-to-one and copies each rich character's formatting onto
    the raw character it lines up with. A short look-ahead resynchronizes
    after small divergences (e.g. dropped trailing spaces).

Key Functions:
    - align_stream(): Raw code + RichDocument -> formatted segments per line

Dependencies:
    - core.models: RichDocument, FormatAttributes
    - core.utils.text: split_lines

Used By:
    - builder.layout.runs: Rich code paragraphs (stream strategy)
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from labfile.core.models import FormatAttributes, RichDocument
from labfile.core.utils.text import split_lines

# How far ahead in the rich stream to look for the next raw character
RESYNC_WINDOW = 8

Segment = Tuple[str, Optional[FormatAttributes]]


def _flatten(document: RichDocument) -> Tuple[str, List[FormatAttributes]]:
    chars: List[str] = []
    formats: List[FormatAttributes] = []
    for block in document.blocks:
        for ch in block.text:
            if ch == "\r":
                continue
            chars.append(ch)
            formats.append(block.attributes)
    return "".join(chars), formats


def _find(stream: str, ch: str, pos: int) -> int:
    return stream.find(ch, pos, pos + RESYNC_WINDOW + 1)


def align_stream(code: str, document: RichDocument) -> List[List[Segment]]:
    """
    Replay rich formatting over raw code character by character.

    Segment text always comes from the raw code; consecutive characters
    with the same formatting are merged into one segment. Characters the
    rich stream cannot account for get None.

    Args:
        code: Raw source code
        document: Decoded rich rendering of the same code

    Returns:
        One list of (text, attributes-or-None) segments per raw line;
        an empty line yields an empty list

    Example:
        >>> from labfile.core.models import RichBlock
        >>> bold = FormatAttributes(bold=True)
        >>> doc = RichDocument(blocks=(RichBlock("int", bold), RichBlock(" x")))
        >>> [[t for t, _ in line] for line in align_stream("int x", doc)]
        [['int', ' x']]
    """
    stream, formats = _flatten(document)
    pos = 0
    lines: List[List[Segment]] = []

    for line in split_lines(code):
        segments: List[List] = []
        for ch in line:
            attrs: Optional[FormatAttributes] = None
            found = _find(stream, ch, pos)
            if found != -1:
                attrs = formats[found]
                pos = found + 1
            if segments and segments[-1][1] == attrs:
                segments[-1][0] += ch
            else:
                segments.append([ch, attrs])

        newline = _find(stream, "\n", pos)
        if newline != -1:
            pos = newline + 1
        lines.append([(text, attrs) for text, attrs in segments])

    return lines
