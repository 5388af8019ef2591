"""
Module: rich

Purpose:
    Decoded rich-text document: ordered formatted blocks plus the color
    table they reference.

Key Classes:
    - RichBlock: One formatted fragment in document order
    - RichDocument: Blocks and palette of one decoded rendering

Dependencies:
    - core.models.formatting: FormatAttributes, ColorTable

Used By:
    - builder.rich.rtf: Produces RichDocument
    - builder.rich.index: Builds the token lookup
    - builder.code.streaming: Character replay
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .formatting import ColorTable, FormatAttributes


@dataclass(frozen=True, slots=True)
class RichBlock:
    """Text fragment with the formatting active when it was decoded."""

    text: str
    attributes: FormatAttributes = FormatAttributes()


@dataclass(frozen=True)
class RichDocument:
    """
    Result of decoding a rich-text string.

    Attributes:
        blocks: Formatted fragments, in the order they appear in the source
        color_table: Palette referenced by the blocks' color_ref values
    """

    blocks: tuple[RichBlock, ...] = ()
    color_table: ColorTable = field(default_factory=ColorTable)

    @property
    def text(self) -> str:
        """Plain text of all blocks concatenated."""
        return "".join(block.text for block in self.blocks)
