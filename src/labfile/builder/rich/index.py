"""
Module: builder.rich.index

Purpose:
    Normalize decoded rich-text blocks into a lookup from token text to
    the formatting it carried, so raw-code tokens can be matched against
    it independently of how the highlighter split its output.

Key Functions:
    - build_rich_index(): RichDocument -> RichIndex

Key Classes:
    - RichIndex: Ordered token-text -> FormatAttributes lookup

Dependencies:
    - core.models: RichDocument, FormatAttributes

Used By:
    - builder.code.aligner: Token matching
    - builder.layout.runs: Rich code paragraph building
"""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple

from labfile.core.models import FormatAttributes, RichDocument

# Characters that split rich text into sub-tokens. Punctuation is also
# indexed on its own; whitespace is not.
RICH_WHITESPACE = frozenset(" \t")
RICH_PUNCTUATION = frozenset("(){}[];,.")


class RichIndex:
    """
    Lookup from normalized token text to formatting.

    Keys keep the order in which they were first inserted; a later insert
    of the same key replaces its formatting but not its position, so scans
    are deterministic.

    Example:
        >>> index = RichIndex()
        >>> index.add("int", FormatAttributes(bold=True))
        >>> index.get("int").bold
        True
    """

    def __init__(self) -> None:
        self._formats: Dict[str, FormatAttributes] = {}

    def add(self, key: str, attributes: FormatAttributes) -> None:
        """Insert or overwrite ``key``."""
        self._formats[key] = attributes

    def get(self, key: str) -> Optional[FormatAttributes]:
        """Exact lookup."""
        return self._formats.get(key)

    def items(self) -> Iterator[Tuple[str, FormatAttributes]]:
        """Iterate (key, attributes) in insertion order."""
        return iter(self._formats.items())

    def __contains__(self, key: object) -> bool:
        return key in self._formats

    def __len__(self) -> int:
        return len(self._formats)

    def __repr__(self) -> str:
        return f"RichIndex({len(self._formats)} keys)"


def build_rich_index(document: RichDocument) -> RichIndex:
    """
    Build the token lookup for one decoded document.

    For each block, carriage returns are dropped and newlines become
    spaces. Blocks that are blank after that are skipped. The block text
    is split on spaces, tabs and ``( ) { } [ ] ; , .``; every non-blank
    sub-token and every punctuation character is indexed, and so is the
    whole trimmed block text (for compound lexemes such as keywords fused
    with neighbouring text).

    Args:
        document: Decoded rich text

    Returns:
        RichIndex for this document only

    Example:
        >>> from labfile.core.models import RichBlock
        >>> doc = RichDocument(blocks=(RichBlock("System.out", FormatAttributes(italic=True)),))
        >>> sorted(key for key, _ in build_rich_index(doc).items())
        ['.', 'System', 'System.out', 'out']
    """
    index = RichIndex()

    for block in document.blocks:
        clean = block.text.replace("\r", "").replace("\n", " ")
        if not clean.strip():
            continue

        current: list[str] = []
        for ch in clean:
            if ch in RICH_WHITESPACE or ch in RICH_PUNCTUATION:
                token = "".join(current)
                if token.strip():
                    index.add(token, block.attributes)
                current = []
                if ch in RICH_PUNCTUATION:
                    index.add(ch, block.attributes)
            else:
                current.append(ch)

        token = "".join(current)
        if token.strip():
            index.add(token, block.attributes)

        index.add(clean.strip(), block.attributes)

    return index
