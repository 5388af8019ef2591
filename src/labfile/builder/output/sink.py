"""
Module: builder.output.sink

Purpose:
    The protocol every document sink implements, and the helper that
    feeds an AssembledDocument through it.

Key Functions:
    - write_document(): Styles, then paragraphs, then pack

Key Classes:
    - DocumentSink: Structural protocol for sinks
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Protocol

from labfile.core.models import AssembledDocument, Paragraph, StyleDefinition


class DocumentSink(Protocol):
    """Output writer accepting styles and paragraphs."""

    def add_styles(self, styles: Iterable[StyleDefinition]) -> None: ...

    def add_paragraphs(self, paragraphs: Iterable[Paragraph]) -> None: ...

    def pack(self, path: Path) -> Path: ...


def write_document(document: AssembledDocument, sink: DocumentSink, path: Path) -> Path:
    """
    Feed ``document`` through ``sink`` and pack it to ``path``.

    Returns:
        The written path
    """
    sink.add_styles(document.styles)
    sink.add_paragraphs(document.paragraphs)
    return sink.pack(path)
