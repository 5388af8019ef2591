"""
Module: builder.layout.runs

Purpose:
    Turn section text, program output and (optionally highlighted) code
    into Paragraphs. Every builder emits exactly one paragraph per input
    line, and the concatenated run text of a paragraph is always the
    source line.

Key Functions:
    - build_text_paragraphs(): Template text with section styling
    - build_rich_code_paragraphs(): Code with per-token rich formatting
    - build_plain_code_paragraphs(): Code without highlighting
    - build_output_paragraphs(): ANSI-cleaned program output

Dependencies:
    - builder.code: Tokenization and alignment strategies
    - builder.rich: Index building and format resolution
    - core.utils.text: split_lines, strip_ansi

Used By:
    - builder.layout.assembler: Section rendering
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from labfile.core.models import Paragraph, RichDocument, TextRun
from labfile.core.utils.text import split_lines, strip_ansi
from labfile.builder.code.aligner import DEFAULT_KEYWORDS, align_line
from labfile.builder.code.streaming import align_stream
from labfile.builder.rich.index import build_rich_index
from labfile.builder.rich.resolver import code_style, resolve_format

from .config import AlignmentStrategy, SectionStyle


def _paragraph(runs: Sequence[TextRun], style: str) -> Paragraph:
    """Code/output paragraph; pads a run-less line with one empty run."""
    return Paragraph(runs=tuple(runs) if runs else (TextRun(),), style=style)


def build_text_paragraphs(text: str, section: SectionStyle) -> List[Paragraph]:
    """
    Build paragraphs for substituted template text.

    Args:
        text: Text after placeholder substitution
        section: Section whose styling applies to every line

    Returns:
        One paragraph per line; empty text gives one paragraph with a
        single unstyled empty run

    Example:
        >>> paras = build_text_paragraphs("a\\nb", SectionStyle(text="{question}"))
        >>> [p.text for p in paras]
        ['a', 'b']
    """
    if not text:
        return [Paragraph.blank(section.style)]

    run_style = section.run_style
    return [
        Paragraph(
            runs=(TextRun(line, run_style),),
            alignment=section.alignment,
            style=section.style,
            line_spacing=section.line_spacing,
            margin_top=section.margin_top,
            margin_bottom=section.margin_bottom,
            indent=section.indent,
        )
        for line in split_lines(text)
    ]


def build_rich_code_paragraphs(
    code: str,
    document: RichDocument,
    *,
    style: str,
    keywords: Iterable[str] = DEFAULT_KEYWORDS,
    strategy: AlignmentStrategy = AlignmentStrategy.HEURISTIC,
) -> List[Paragraph]:
    """
    Build code paragraphs carrying the highlighter's formatting.

    With the heuristic strategy each raw token becomes one run; the set of
    consumed rich keys is shared by all lines of this code block and
    discarded afterwards. With the stream strategy each run is a stretch
    of characters sharing one replayed format.

    Args:
        code: Raw source code (the text that is rendered)
        document: Decoded rich rendering of ``code``
        style: Paragraph style id
        keywords: Keyword-assist list for the heuristic strategy
        strategy: Alignment strategy

    Returns:
        One paragraph per raw line
    """
    table = document.color_table
    paragraphs: List[Paragraph] = []

    if strategy is AlignmentStrategy.STREAM:
        for segments in align_stream(code, document):
            runs = [TextRun(text, resolve_format(attrs, table)) for text, attrs in segments]
            paragraphs.append(_paragraph(runs, style))
        return paragraphs

    index = build_rich_index(document)
    used: set[str] = set()
    keyword_set = frozenset(keywords)
    for line in split_lines(code):
        runs = [
            TextRun(token.text, resolve_format(attrs, table))
            for token, attrs in align_line(line, index, used, keyword_set)
        ]
        paragraphs.append(_paragraph(runs, style))
    return paragraphs


def build_plain_code_paragraphs(code: str, *, style: str) -> List[Paragraph]:
    """One monospace run per raw line, no highlighting."""
    return [
        _paragraph([TextRun(line, code_style())] if line else [], style)
        for line in split_lines(code)
    ]


def build_output_paragraphs(output: str, *, style: str) -> List[Paragraph]:
    """
    Build paragraphs for program output.

    Escape sequences are stripped first. Blank lines become one empty
    run; other lines one monospace run.

    Args:
        output: Raw program output
        style: Paragraph style id

    Returns:
        One paragraph per cleaned line (at least one)
    """
    paragraphs: List[Paragraph] = []
    for line in split_lines(strip_ansi(output)):
        if not line.strip():
            paragraphs.append(Paragraph.blank(style))
        else:
            paragraphs.append(_paragraph([TextRun(line, code_style())], style))
    return paragraphs
