"""
Module: builder.output

Purpose:
    Document sinks. Every sink accepts named styles and paragraphs and
    packs them into a file.

Key Functions:
    - write_docx(): AssembledDocument -> .docx
    - render_to_pdf(): AssembledDocument -> .pdf

Key Classes:
    - DocumentSink: Protocol shared by all sinks
    - DocxSink: python-docx implementation
    - PdfSink: ReportLab implementation
"""

from .sink import DocumentSink, write_document
from .docx_writer import DocxSink, write_docx
from .pdf_renderer import PdfSink, render_to_pdf

__all__ = [
    "DocumentSink",
    "write_document",
    "DocxSink",
    "write_docx",
    "PdfSink",
    "render_to_pdf",
]
