"""
Module: builder.output.docx_writer

Purpose:
    Write an AssembledDocument to a .docx file using python-docx.

Key Functions:
    - write_docx(): Convenience wrapper around DocxSink

Key Classes:
    - DocxSink: Sink accepting styles and paragraphs, packed to .docx

Dependencies:
    - python-docx: Document generation
    - core.models.document: Paragraph, TextRun, StyleDefinition

Used By:
    - builder.controller: Pipeline orchestration
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, Iterable, Optional

from docx import Document
from docx.enum.style import WD_STYLE_TYPE
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_BREAK
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor

from labfile.core.models import AssembledDocument, Paragraph, StyleDefinition, TextRun

from .sink import write_document

logger = logging.getLogger(__name__)

FALLBACK_STYLE = "Normal"

# Characters XML 1.0 cannot hold (C0 controls other than tab, newline, CR)
INVALID_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")

ALIGNMENT_MAP = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
    "right": WD_ALIGN_PARAGRAPH.RIGHT,
    "justify": WD_ALIGN_PARAGRAPH.JUSTIFY,
}



def _xml_safe(text: str) -> str:
    """Drop characters that cannot appear in document XML."""
    cleaned = INVALID_XML_CHARS.sub("", text)
    if len(cleaned) != len(text):
        logger.debug(f"Dropped {len(text) - len(cleaned)} control characters from run text")
    return cleaned

class DocxSink:
    """
    Document sink backed by python-docx.

    Styles are registered by id and resolved to the document's paragraph
    style with the matching display label; missing labels are created as
    paragraph styles based on Normal. A label already taken by a
    character or table style cannot hold a paragraph style and maps to
    Normal instead.

    Example:
        >>> sink = DocxSink()
        >>> sink.add_styles(DEFAULT_STYLES)
        >>> sink.add_paragraphs(paragraphs)
        >>> sink.pack(Path("labfile.docx"))
    """

    def __init__(self, template: Optional[Path] = None) -> None:
        self._document = Document(str(template)) if template else Document()
        self._style_names: Dict[str, str] = {}
        self._paragraph_count = 0

    @property
    def paragraph_count(self) -> int:
        return self._paragraph_count

    def add_styles(self, styles: Iterable[StyleDefinition]) -> None:
        """Register named paragraph styles (id -> display label)."""
        for definition in styles:
            self._style_names[definition.style_id] = self._ensure_style(definition.label)

    def add_paragraphs(self, paragraphs: Iterable[Paragraph]) -> None:
        """Append paragraphs in order."""
        for paragraph in paragraphs:
            self._add_paragraph(paragraph)

    def pack(self, path: Path) -> Path:
        """
        Save the document.

        Args:
            path: Destination .docx path; parent directories are created

        Returns:
            The written path
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        self._document.save(str(path))
        logger.info(f"Wrote {self._paragraph_count} paragraphs to {path}")
        return path

    # ─────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────

    def _ensure_style(self, label: str) -> str:
        styles = self._document.styles
        try:
            existing = styles[label]
        except KeyError:
            style = styles.add_style(label, WD_STYLE_TYPE.PARAGRAPH)
            style.base_style = styles[FALLBACK_STYLE]
            logger.debug(f"Created paragraph style {label!r}")
            return label

        if existing.type != WD_STYLE_TYPE.PARAGRAPH:
            logger.debug(f"Style {label!r} is not a paragraph style, using {FALLBACK_STYLE}")
            return FALLBACK_STYLE
        return label

    def _style_name(self, style_id: str) -> str:
        if style_id in self._style_names:
            return self._style_names[style_id]
        name = self._ensure_style(style_id)
        self._style_names[style_id] = name
        return name

    def _add_paragraph(self, paragraph: Paragraph) -> None:
        p = self._document.add_paragraph(style=self._style_name(paragraph.style))
        p.alignment = ALIGNMENT_MAP[paragraph.alignment]

        fmt = p.paragraph_format
        if paragraph.line_spacing is not None:
            fmt.line_spacing = paragraph.line_spacing
        if paragraph.margin_top:
            fmt.space_before = Pt(paragraph.margin_top)
        if paragraph.margin_bottom:
            fmt.space_after = Pt(paragraph.margin_bottom)
        if paragraph.indent:
            fmt.left_indent = Pt(paragraph.indent)

        for run in paragraph.runs:
            self._add_run(p, run)
        self._paragraph_count += 1

    @staticmethod
    def _add_run(p, text_run: TextRun) -> None:
        if text_run.page_break:
            p.add_run().add_break(WD_BREAK.PAGE)
            return

        run = p.add_run(_xml_safe(text_run.text))
        style = text_run.style
        if style.bold:
            run.bold = True
        if style.italic:
            run.italic = True
        if style.underline:
            run.underline = True
        if style.size is not None:
            run.font.size = Pt(style.size)
        if style.color is not None:
            run.font.color.rgb = RGBColor.from_string(style.color.upper())
        if style.font is not None:
            run.font.name = style.font
            r_fonts = run._element.get_or_add_rPr().get_or_add_rFonts()
            r_fonts.set(qn("w:eastAsia"), style.font)


def write_docx(document: AssembledDocument, path: Path, *, template: Optional[Path] = None) -> Path:
    """
    Write an assembled document to ``path``.

    Args:
        document: Styles and paragraphs
        path: Destination .docx path
        template: Optional .docx whose styles seed the document

    Returns:
        The written path

    Raises:
        OSError: If the file cannot be written
    """
    return write_document(document, DocxSink(template), path)
