"""
Module: builder.layout

Purpose:
    Section configuration, placeholder substitution, paragraph building
    and document assembly.

Key Functions:
    - assemble_document(): Main entry point for layout
    - substitute(): Template placeholder substitution

Key Classes:
    - DocumentConfig: Report configuration
    - AssemblyOptions: Alignment strategy, keywords and decoder

Used By:
    - builder.controller: Build pipeline
"""

from .config import AlignmentStrategy, DocumentConfig, SectionStyle, TitledSection
from .templates import substitute
from .runs import (
    build_output_paragraphs,
    build_plain_code_paragraphs,
    build_rich_code_paragraphs,
    build_text_paragraphs,
)
from .assembler import DEFAULT_STYLES, AssemblyOptions, assemble_document, render_entry

__all__ = [
    # Config
    "AlignmentStrategy",
    "DocumentConfig",
    "SectionStyle",
    "TitledSection",
    # Templates
    "substitute",
    # Paragraph builders
    "build_output_paragraphs",
    "build_plain_code_paragraphs",
    "build_rich_code_paragraphs",
    "build_text_paragraphs",
    # Assembly
    "DEFAULT_STYLES",
    "AssemblyOptions",
    "assemble_document",
    "render_entry",
]
