"""
Module: document

Purpose:
    Sink-independent document model. The assembler produces an ordered
    list of Paragraphs, each an ordered tuple of TextRuns; sinks turn them
    into DOCX or PDF.

Key Classes:
    - TextRun: Atomic styled output unit
    - Paragraph: One output line/block
    - StyleDefinition: Named paragraph style (id -> display label)
    - AssembledDocument: Styles plus paragraphs handed to a sink

Dependencies:
    - core.models.formatting: RunStyle

Used By:
    - builder.layout: Run/paragraph building and assembly
    - builder.output: Sinks
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from .formatting import RunStyle


Alignment = Literal["left", "center", "right", "justify"]
ALIGNMENTS: tuple[str, ...] = ("left", "center", "right", "justify")


@dataclass(frozen=True, slots=True)
class TextRun:
    """
    Smallest styled unit of output text.

    Attributes:
        text: Run text (may be empty)
        style: Resolved run style
        page_break: If True the run is a page break; text is ignored
    """

    text: str = ""
    style: RunStyle = RunStyle()
    page_break: bool = False


@dataclass(frozen=True)
class Paragraph:
    """
    One output block composed of runs.

    Attributes:
        runs: Runs in left-to-right order
        alignment: Horizontal alignment
        style: Paragraph style id (e.g. "Normal", "Heading1")
        line_spacing: Line spacing multiple, None to inherit
        margin_top: Space before in points
        margin_bottom: Space after in points
        indent: Left indent in points

    Example:
        >>> p = Paragraph(runs=(TextRun("a"), TextRun("b")))
        >>> p.text
        'ab'
    """

    runs: tuple[TextRun, ...]
    alignment: Alignment = "left"
    style: str = "Normal"
    line_spacing: Optional[float] = None
    margin_top: float = 0
    margin_bottom: float = 0
    indent: float = 0

    def __post_init__(self) -> None:
        if self.alignment not in ALIGNMENTS:
            raise ValueError(f"Invalid alignment: {self.alignment!r}")

    @property
    def text(self) -> str:
        """Concatenated text of all non-break runs."""
        return "".join(run.text for run in self.runs if not run.page_break)

    @property
    def is_page_break(self) -> bool:
        return any(run.page_break for run in self.runs)

    @classmethod
    def blank(cls, style: str = "Normal") -> Paragraph:
        """Empty paragraph holding one empty run."""
        return cls(runs=(TextRun(),), style=style)

    @classmethod
    def page_break_paragraph(cls) -> Paragraph:
        """Paragraph holding a single page-break run."""
        return cls(runs=(TextRun(page_break=True),))


@dataclass(frozen=True, slots=True)
class StyleDefinition:
    """Named paragraph style: identifier plus display label."""

    style_id: str
    label: str


@dataclass(frozen=True)
class AssembledDocument:
    """
    Everything a sink needs to write the report.

    Attributes:
        styles: Named paragraph styles, in registration order
        paragraphs: Paragraph stream, in document order
        warnings: Non-fatal issues raised while assembling
    """

    styles: tuple[StyleDefinition, ...]
    paragraphs: tuple[Paragraph, ...]
    warnings: tuple[str, ...] = ()

    @property
    def paragraph_count(self) -> int:
        return len(self.paragraphs)

    @property
    def page_break_count(self) -> int:
        return sum(1 for p in self.paragraphs if p.is_page_break)
