"""
Core Models Package

Immutable data models passed through the report pipeline.

All models in this package are frozen dataclasses so that no stage of
the pipeline can mutate an entry, a decoded block or an emitted run
behind another stage's back.
"""

from .entries import Entry
from .formatting import Color, ColorTable, FormatAttributes, RunStyle
from .rich import RichBlock, RichDocument
from .tokens import Token, TokenKind
from .document import (
    ALIGNMENTS,
    AssembledDocument,
    Paragraph,
    StyleDefinition,
    TextRun,
)

__all__ = [
    "Entry",
    "Color",
    "ColorTable",
    "FormatAttributes",
    "RunStyle",
    "RichBlock",
    "RichDocument",
    "Token",
    "TokenKind",
    "ALIGNMENTS",
    "AssembledDocument",
    "Paragraph",
    "StyleDefinition",
    "TextRun",
]
