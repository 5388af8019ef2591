"""
Module: builder.output.pdf_renderer

Purpose:
    Render an AssembledDocument to PDF using ReportLab. Paragraphs flow
    top to bottom on A4 pages; runs are drawn left to right with the
    standard Type 1 families and wrap at the right margin.

Key Functions:
    - render_to_pdf(): Convenience wrapper around PdfSink

Key Classes:
    - PdfSink: Sink accepting styles and paragraphs, packed to .pdf

Dependencies:
    - reportlab: PDF generation
    - core.models.document: Paragraph, TextRun

Used By:
    - builder.controller: Optional PDF export
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from labfile.core.models import AssembledDocument, Paragraph, RunStyle, StyleDefinition, TextRun

from .sink import write_document

logger = logging.getLogger(__name__)

# Constants
DEFAULT_MARGIN_PT = 56.7  # 2 cm
DEFAULT_FONT_SIZE = 12.0
LEADING_FACTOR = 1.2
UNDERLINE_OFFSET_PT = 1.5

# (regular, bold, italic, bold-italic) per standard family
FONT_FAMILIES: Dict[str, Tuple[str, str, str, str]] = {
    "Courier": ("Courier", "Courier-Bold", "Courier-Oblique", "Courier-BoldOblique"),
    "Helvetica": ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique"),
    "Times": ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic"),
}

MONOSPACE_HINTS = ("mono", "courier", "consol", "cask", "code", "menlo")
SERIF_HINTS = ("times", "georgia", "garamond", "cambria", "serif")

# Outline level per heading style id
OUTLINE_LEVELS = {"Title": 0, **{f"Heading{n}": n - 1 for n in range(1, 7)}}


def _family_for(font: Optional[str]) -> str:
    """Map a requested font family onto a standard PDF family."""
    name = (font or "").lower()
    if any(hint in name for hint in MONOSPACE_HINTS):
        return "Courier"
    if any(hint in name for hint in SERIF_HINTS) and "sans" not in name:
        return "Times"
    return "Helvetica"


def _font_name(style: RunStyle) -> str:
    regular, bold, italic, bold_italic = FONT_FAMILIES[_family_for(style.font)]
    if style.bold and style.italic:
        return bold_italic
    if style.bold:
        return bold
    if style.italic:
        return italic
    return regular


def _hex_to_rgb(color: Optional[str]) -> Tuple[float, float, float]:
    if not color:
        return (0.0, 0.0, 0.0)
    return tuple(int(color[i:i + 2], 16) / 255.0 for i in (0, 2, 4))  # type: ignore[return-value]


class PdfSink:
    """
    Document sink backed by a ReportLab canvas.

    Paragraphs are buffered and drawn on ``pack()``. Paragraphs styled as
    Title or HeadingN also become PDF outline entries.
    """

    def __init__(
        self,
        *,
        page_size: Tuple[float, float] = A4,
        margin_pt: float = DEFAULT_MARGIN_PT,
    ) -> None:
        self._page_width, self._page_height = page_size
        self._margin = margin_pt
        self._styles: Dict[str, str] = {}
        self._paragraphs: List[Paragraph] = []

    def add_styles(self, styles: Iterable[StyleDefinition]) -> None:
        """Register named styles (id -> display label)."""
        for definition in styles:
            self._styles[definition.style_id] = definition.label

    def add_paragraphs(self, paragraphs: Iterable[Paragraph]) -> None:
        self._paragraphs.extend(paragraphs)

    def pack(self, path: Path) -> Path:
        """
        Draw all paragraphs and save the PDF.

        Args:
            path: Destination .pdf path; parent directories are created

        Returns:
            The written path
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        c = canvas.Canvas(str(path), pagesize=(self._page_width, self._page_height))
        layout = _PageCursor(c, self._page_width, self._page_height, self._margin)

        outline_level = -1
        for index, paragraph in enumerate(self._paragraphs):
            if paragraph.is_page_break:
                layout.new_page()
                continue
            if paragraph.style in OUTLINE_LEVELS and paragraph.text.strip():
                level = min(OUTLINE_LEVELS[paragraph.style], outline_level + 1)
                key = f"p{index}"
                c.bookmarkPage(key)
                c.addOutlineEntry(paragraph.text.strip(), key, level=level)
                outline_level = level
            layout.draw_paragraph(paragraph)

        c.save()
        logger.info(f"Rendered {layout.page_count} pages to {path}")
        return path


class _PageCursor:
    """Tracks the drawing position and starts new pages as needed."""

    def __init__(self, c: canvas.Canvas, width: float, height: float, margin: float) -> None:
        self._c = c
        self._left = margin
        self._right = width - margin
        self._top = height - margin
        self._bottom = margin
        self._y = self._top
        self._page_has_content = False
        self.page_count = 1

    def new_page(self) -> None:
        self._c.showPage()
        self._y = self._top
        self._page_has_content = False
        self.page_count += 1

    def draw_paragraph(self, paragraph: Paragraph) -> None:
        runs = [run for run in paragraph.runs if not run.page_break]
        sizes = [run.style.size or DEFAULT_FONT_SIZE for run in runs] or [DEFAULT_FONT_SIZE]
        leading = max(sizes) * LEADING_FACTOR * (paragraph.line_spacing or 1.0)

        if self._page_has_content:
            self._y -= paragraph.margin_top
        left = self._left + paragraph.indent
        lines = self._wrap(runs, left)

        for line in lines:
            if self._y - leading < self._bottom:
                self.new_page()
            self._y -= leading
            self._draw_line(line, left, paragraph.alignment)
            self._page_has_content = True

        self._y -= paragraph.margin_bottom

    def _wrap(self, runs: List[TextRun], left: float) -> List[List[Tuple[str, RunStyle, float]]]:
        """Split runs into lines of (text, style, width) pieces."""
        lines: List[List[Tuple[str, RunStyle, float]]] = [[]]
        x = left
        for run in runs:
            font = _font_name(run.style)
            size = run.style.size or DEFAULT_FONT_SIZE
            text = run.text
            while text:
                width = self._c.stringWidth(text, font, size)
                if x + width <= self._right:
                    lines[-1].append((text, run.style, width))
                    x += width
                    break
                fit = self._fit(text, font, size, self._right - x)
                if fit == 0 and not lines[-1]:
                    fit = 1
                if fit:
                    piece = text[:fit]
                    lines[-1].append((piece, run.style, self._c.stringWidth(piece, font, size)))
                    text = text[fit:]
                lines.append([])
                x = left
        return lines

    def _fit(self, text: str, font: str, size: float, available: float) -> int:
        """Longest prefix length of ``text`` that fits in ``available``."""
        lo, hi = 0, len(text)
        while lo < hi:
            mid = (lo + hi + 1) // 2
            if self._c.stringWidth(text[:mid], font, size) <= available:
                lo = mid
            else:
                hi = mid - 1
        return lo

    def _draw_line(self, pieces: List[Tuple[str, RunStyle, float]], left: float, alignment: str) -> None:
        total = sum(width for _, _, width in pieces)
        if alignment == "center":
            x = left + max(0.0, (self._right - left - total) / 2)
        elif alignment == "right":
            x = max(left, self._right - total)
        else:
            x = left

        for text, style, width in pieces:
            size = style.size or DEFAULT_FONT_SIZE
            self._c.setFont(_font_name(style), size)
            self._c.setFillColorRGB(*_hex_to_rgb(style.color))
            self._c.drawString(x, self._y, text)
            if style.underline:
                self._c.setStrokeColorRGB(*_hex_to_rgb(style.color))
                self._c.setLineWidth(0.5)
                self._c.line(x, self._y - UNDERLINE_OFFSET_PT, x + width, self._y - UNDERLINE_OFFSET_PT)
            x += width


def render_to_pdf(document: AssembledDocument, path: Path) -> Path:
    """
    Render an assembled document to ``path``.

    Args:
        document: Styles and paragraphs
        path: Destination .pdf path

    Returns:
        The written path

    Raises:
        OSError: If the file cannot be written
    """
    return write_document(document, PdfSink(), path)
