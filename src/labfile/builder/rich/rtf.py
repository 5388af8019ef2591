"""
Module: builder.rich.rtf

Purpose:
    Decode RTF emitted by syntax highlighters into ordered formatted
    blocks plus the document's color table. Only character formatting is
    kept (bold, italic, underline, foreground color); layout metadata such
    as margins, tab stops and fonts is skipped.

Key Functions:
    - decode_rtf(): RTF string -> RichDocument

Key Classes:
    - DecodeFailure: Raised for malformed input
    - RichTextDecoder: Protocol for pluggable decoders

Dependencies:
    - codecs (std): Code page lookup for \\'hh escapes
    - core.models: RichDocument, RichBlock, FormatAttributes, ColorTable

Used By:
    - builder.layout.assembler: Rich solution rendering
"""

from __future__ import annotations

import codecs
import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Protocol

from labfile.core.models import (
    Color,
    ColorTable,
    FormatAttributes,
    RichBlock,
    RichDocument,
)

logger = logging.getLogger(__name__)

DEFAULT_CODEPAGE = "cp1252"

# Destinations whose content is never document text
SKIPPED_DESTINATIONS = frozenset({
    "fonttbl", "stylesheet", "info", "pict", "object", "header", "footer",
    "headerl", "headerr", "headerf", "footerl", "footerr", "footerf",
    "listtable", "listoverridetable", "rsidtbl", "generator", "themedata",
    "colorschememapping", "datastore", "latentstyles", "xmlnstbl",
    "filetbl", "revtbl", "fldinst", "field", "mmathPr",
})

# Control words that stand for a single character
SYMBOL_WORDS = {
    "par": "\n",
    "line": "\n",
    "tab": "\t",
    "emdash": "\u2014",
    "endash": "\u2013",
    "bullet": "\u2022",
    "lquote": "\u2018",
    "rquote": "\u2019",
    "ldblquote": "\u201c",
    "rdblquote": "\u201d",
}

UNDERLINE_ON = frozenset({"ul", "uld", "uldb", "uldash", "ulth", "ulw", "ulwave"})

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
MAX_CODE_POINT = 0x10FFFF


def _channel(value: int) -> int:
    """Clamp a color table component to 0-255."""
    return max(0, min(value, 255))


class DecodeFailure(Exception):
    """Rich text could not be decoded; callers fall back to plain rendering."""
    pass


class RichTextDecoder(Protocol):
    """Anything that turns a rich-text string into a RichDocument."""

    def __call__(self, text: str) -> RichDocument: ...


@dataclass
class _GroupState:
    """Formatting state saved and restored with each {...} group."""

    attributes: FormatAttributes
    skip: bool = False
    in_color_table: bool = False
    unicode_skip: int = 1


class _RtfDecoder:
    """Single-use decoder over one RTF string."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._stack: List[_GroupState] = []
        self._state = _GroupState(attributes=FormatAttributes())
        self._codepage = DEFAULT_CODEPAGE
        self._pending_skip = 0

        self._blocks: List[RichBlock] = []
        self._buffer: List[str] = []
        self._buffer_attrs: Optional[FormatAttributes] = None

        self._colors: Dict[int, Color] = {}
        self._color_slot = 0
        self._color_parts: Dict[str, int] = {}

    # ─────────────────────────────────────────────────────────────────────
    # Driver
    # ─────────────────────────────────────────────────────────────────────

    def decode(self) -> RichDocument:
        text = self._text
        start = len(text) - len(text.lstrip())
        if not text.startswith("{\\rtf", start):
            raise DecodeFailure("input does not start with an {\\rtf group")
        self._pos = start

        closed = False
        while self._pos < len(text):
            ch = text[self._pos]
            if ch == "{":
                self._stack.append(self._state)
                self._state = replace(self._state)
                self._pending_skip = 0
                self._pos += 1
            elif ch == "}":
                if not self._stack:
                    raise DecodeFailure(f"unbalanced '}}' at offset {self._pos}")
                if self._state.in_color_table:
                    self._finish_color_slot(force=False)
                self._state = self._stack.pop()
                self._pending_skip = 0
                self._pos += 1
                if not self._stack:
                    closed = True
                    break
            elif ch == "\\":
                self._read_control()
            elif ch in "\r\n":
                self._pos += 1
            else:
                self._emit(ch)
                self._pos += 1

        if not closed:
            raise DecodeFailure("unbalanced braces: document group never closed")
        if text[self._pos:].strip(" \t\r\n\x00"):
            raise DecodeFailure(f"unbalanced braces: trailing data at offset {self._pos}")

        self._flush()
        return RichDocument(
            blocks=tuple(self._blocks),
            color_table=ColorTable(dict(self._colors)),
        )

    # ─────────────────────────────────────────────────────────────────────
    # Control words and symbols
    # ─────────────────────────────────────────────────────────────────────

    def _read_control(self) -> None:
        text = self._text
        pos = self._pos + 1
        if pos >= len(text):
            raise DecodeFailure("dangling backslash at end of input")

        ch = text[pos]
        if ch.isascii() and ch.isalpha():
            end = pos
            while end < len(text) and text[end].isascii() and text[end].isalpha():
                end += 1
            word = text[pos:end]

            param: Optional[int] = None
            num_start = end
            if end < len(text) and text[end] == "-":
                end += 1
            digits_start = end
            while end < len(text) and text[end].isdigit():
                end += 1
            if end > digits_start:
                param = int(text[num_start:end])
            else:
                end = num_start

            if end < len(text) and text[end] == " ":
                end += 1
            self._pos = end
            self._handle_word(word, param)
            return

        self._pos = pos + 1
        if ch == "'":
            hex_digits = text[pos + 1:pos + 3]
            if len(hex_digits) != 2 or any(c not in HEX_DIGITS for c in hex_digits):
                raise DecodeFailure(f"bad hex escape at offset {pos - 1}: {hex_digits!r}")
            byte = int(hex_digits, 16)
            self._pos = pos + 3
            self._emit(bytes([byte]).decode(self._codepage, errors="replace"))
        elif ch in "\\{}":
            self._emit(ch)
        elif ch == "*":
            self._state.skip = True
        elif ch == "~":
            self._emit("\u00a0")
        elif ch == "_":
            self._emit("\u2011")
        elif ch in "\r\n":
            self._emit("\n")
        # \- (optional hyphen) and unknown symbols produce nothing

    def _handle_word(self, word: str, param: Optional[int]) -> None:
        state = self._state
        attrs = state.attributes
        on = param is None or param != 0

        if word in SKIPPED_DESTINATIONS:
            state.skip = True
        elif word == "colortbl":
            state.in_color_table = True
            self._color_slot = 0
            self._color_parts = {}
        elif state.in_color_table and word in ("red", "green", "blue"):
            self._color_parts[word] = param or 0
        elif word == "b":
            state.attributes = replace(attrs, bold=on)
        elif word == "i":
            state.attributes = replace(attrs, italic=on)
        elif word in UNDERLINE_ON:
            state.attributes = replace(attrs, underline=on)
        elif word == "ulnone":
            state.attributes = replace(attrs, underline=False)
        elif word == "cf":
            state.attributes = replace(attrs, color_ref=param or 0)
        elif word == "plain":
            state.attributes = FormatAttributes()
        elif word == "ansicpg" and param is not None:
            self._set_codepage(f"cp{param}")
        elif word == "uc" and param is not None:
            state.unicode_skip = max(param, 0)
        elif word == "u" and param is not None:
            code_point = param + 65536 if param < 0 else param
            if not 0 <= code_point <= MAX_CODE_POINT:
                raise DecodeFailure(f"unicode escape out of range: \\u{param}")
            self._emit(chr(code_point), fallback=False)
            self._pending_skip = state.unicode_skip
        elif word in SYMBOL_WORDS:
            self._emit(SYMBOL_WORDS[word])

    def _set_codepage(self, name: str) -> None:
        try:
            codecs.lookup(name)
        except LookupError:
            logger.debug(f"Unknown RTF code page {name}, keeping {self._codepage}")
            return
        self._codepage = name

    # ─────────────────────────────────────────────────────────────────────
    # Output
    # ─────────────────────────────────────────────────────────────────────

    def _emit(self, text: str, *, fallback: bool = True) -> None:
        if fallback and self._pending_skip > 0:
            self._pending_skip -= 1
            return

        state = self._state
        if state.skip:
            return
        if state.in_color_table:
            if text == ";":
                self._finish_color_slot(force=True)
            return

        if self._buffer_attrs != state.attributes:
            self._flush()
            self._buffer_attrs = state.attributes
        self._buffer.append(text)

    def _flush(self) -> None:
        if self._buffer and self._buffer_attrs is not None:
            self._blocks.append(RichBlock("".join(self._buffer), self._buffer_attrs))
        self._buffer = []

    def _finish_color_slot(self, *, force: bool) -> None:
        """Close one color table slot; empty slots are "auto" colors."""
        if not force and not self._color_parts:
            return
        if self._color_parts:
            self._colors[self._color_slot] = Color(
                red=_channel(self._color_parts.get("red", 0)),
                green=_channel(self._color_parts.get("green", 0)),
                blue=_channel(self._color_parts.get("blue", 0)),
            )
        self._color_slot += 1
        self._color_parts = {}


def decode_rtf(text: str) -> RichDocument:
    """
    Decode an RTF string into formatted blocks and a color table.

    Consecutive characters sharing the same formatting form one block.
    ``\\par`` and ``\\line`` decode to "\\n", ``\\tab`` to "\\t".

    Args:
        text: RTF source, e.g. the output of a syntax highlighter

    Returns:
        RichDocument with blocks in source order

    Raises:
        DecodeFailure: If the input is not a well-formed RTF group

    Example:
        >>> doc = decode_rtf(r"{\\rtf1{\\colortbl;\\red255\\green0\\blue0;}{\\cf1\\b int} x;}")
        >>> [(b.text, b.attributes.bold) for b in doc.blocks]
        [('int', True), (' x;', False)]
        >>> doc.color_table.lookup(1).hex
        'ff0000'
    """
    try:
        return _RtfDecoder(text).decode()
    except ValueError as e:
        raise DecodeFailure(f"malformed rich text: {e}") from e
