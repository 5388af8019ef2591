"""
Module: builder.layout.assembler

Purpose:
    Assemble the full paragraph stream of a lab file: for each entry, in
    ascending index order, the header, question, solution, output and
    footer sections separated by blank paragraphs, with page breaks
    between entries.

Key Functions:
    - assemble_document(): Entries + DocumentConfig -> AssembledDocument
    - render_entry(): Paragraphs of a single entry

Key Classes:
    - AssemblyOptions: Decoder, alignment strategy and keyword list

Dependencies:
    - builder.layout.runs: Paragraph builders
    - builder.layout.templates: Placeholder substitution
    - builder.rich.rtf: Default rich-text decoder

Used By:
    - builder.controller: Build pipeline
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from labfile.core.models import AssembledDocument, Entry, Paragraph, StyleDefinition
from labfile.builder.code.aligner import DEFAULT_KEYWORDS
from labfile.builder.rich.rtf import DecodeFailure, RichTextDecoder, decode_rtf

from .config import AlignmentStrategy, DocumentConfig, SectionStyle, TitledSection
from .runs import (
    build_output_paragraphs,
    build_plain_code_paragraphs,
    build_rich_code_paragraphs,
    build_text_paragraphs,
)
from .templates import substitute

logger = logging.getLogger(__name__)


# Named paragraph styles registered with every document (id -> label)
DEFAULT_STYLES: Tuple[StyleDefinition, ...] = (
    StyleDefinition("Heading1", "Heading 1"),
    StyleDefinition("Heading2", "Heading 2"),
    StyleDefinition("Heading3", "Heading 3"),
    StyleDefinition("Heading4", "Heading 4"),
    StyleDefinition("Heading5", "Heading 5"),
    StyleDefinition("Heading6", "Heading 6"),
    StyleDefinition("Title", "Title"),
    StyleDefinition("Subtitle", "Subtitle"),
    StyleDefinition("Normal", "Normal"),
    StyleDefinition("Quote", "Quote"),
    StyleDefinition("Emphasis", "Emphasis"),
    StyleDefinition("Strong", "Strong"),
)


@dataclass(frozen=True)
class AssemblyOptions:
    """
    Knobs of the assembly pass (immutable).

    Attributes:
        keywords: Keyword-assist list for heuristic alignment
        alignment: Strategy for mapping rich formatting onto raw code
        decoder: Rich-text decoder; raises DecodeFailure on bad input
    """

    keywords: Tuple[str, ...] = DEFAULT_KEYWORDS
    alignment: AlignmentStrategy = AlignmentStrategy.HEURISTIC
    decoder: RichTextDecoder = field(default=decode_rtf)


def assemble_document(
    entries: Sequence[Entry],
    config: DocumentConfig,
    options: Optional[AssemblyOptions] = None,
) -> AssembledDocument:
    """
    Assemble every entry into one paragraph stream.

    Entries are sorted by index. A page-break paragraph separates
    consecutive entries; none follows the last. Rich code that cannot be
    decoded is rendered without highlighting and reported in the
    warnings, never as an error.

    Args:
        entries: Entries in any order
        config: Report configuration
        options: Assembly options (defaults when None)

    Returns:
        AssembledDocument with DEFAULT_STYLES and all paragraphs

    Example:
        >>> doc = assemble_document(entries, config)
        >>> doc.page_break_count == len(entries) - 1
        True
    """
    options = options or AssemblyOptions()
    ordered = sorted(entries, key=lambda e: e.index)

    paragraphs: List[Paragraph] = []
    warnings: List[str] = []

    for position, entry in enumerate(ordered):
        paragraphs.extend(render_entry(entry, config, options, warnings))
        if position != len(ordered) - 1:
            paragraphs.append(Paragraph.page_break_paragraph())

    logger.info(f"Assembled {len(paragraphs)} paragraphs from {len(ordered)} entries")
    return AssembledDocument(
        styles=DEFAULT_STYLES,
        paragraphs=tuple(paragraphs),
        warnings=tuple(warnings),
    )


def render_entry(
    entry: Entry,
    config: DocumentConfig,
    options: Optional[AssemblyOptions] = None,
    warnings: Optional[List[str]] = None,
) -> List[Paragraph]:
    """
    Render the paragraphs of a single entry (no trailing page break).

    Order: header + blank (if configured), question, blank, solution,
    blank, output, blank, footer (if configured).

    Args:
        entry: Entry to render
        config: Report configuration
        options: Assembly options (defaults when None)
        warnings: List receiving non-fatal issues, if given

    Returns:
        Paragraphs of the entry
    """
    options = options or AssemblyOptions()
    warnings = warnings if warnings is not None else []
    paragraphs: List[Paragraph] = []

    if config.header is not None:
        paragraphs.extend(_render_section(entry, config.header))
        paragraphs.append(Paragraph.blank())

    paragraphs.extend(_render_section(entry, config.question))
    paragraphs.append(Paragraph.blank())
    paragraphs.extend(_render_titled(entry, config.solution, options, warnings))
    paragraphs.append(Paragraph.blank())
    paragraphs.extend(_render_titled(entry, config.output, options, warnings))
    paragraphs.append(Paragraph.blank())

    if config.footer is not None:
        paragraphs.extend(_render_section(entry, config.footer))

    return paragraphs


def _render_section(entry: Entry, section: SectionStyle) -> List[Paragraph]:
    return build_text_paragraphs(substitute(section.text, entry), section)


def _render_titled(
    entry: Entry,
    section: TitledSection,
    options: AssemblyOptions,
    warnings: List[str],
) -> List[Paragraph]:
    paragraphs = _render_section(entry, section.title)
    content = section.content

    if content.has_placeholder("solution") and entry.rich_code:
        paragraphs.extend(_render_rich_code(entry, content, options, warnings))
    elif content.has_placeholder("output"):
        paragraphs.extend(build_output_paragraphs(entry.output, style=content.style))
    else:
        paragraphs.extend(_render_section(entry, content))

    return paragraphs


def _render_rich_code(
    entry: Entry,
    content: SectionStyle,
    options: AssemblyOptions,
    warnings: List[str],
) -> List[Paragraph]:
    """Highlighted code, or plain code when the rich text is unusable."""
    try:
        document = options.decoder(entry.rich_code or "")
    except DecodeFailure as e:
        message = f"Entry {entry.number}: rich code could not be decoded ({e}); rendering without highlighting"
        logger.warning(message)
        warnings.append(message)
        return build_plain_code_paragraphs(entry.code, style=content.style)

    logger.debug(
        f"Entry {entry.number}: decoded {len(document.blocks)} rich blocks, "
        f"{len(document.color_table)} colors"
    )
    return build_rich_code_paragraphs(
        entry.code,
        document,
        style=content.style,
        keywords=options.keywords,
        strategy=options.alignment,
    )
