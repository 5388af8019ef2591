"""
Module: builder.controller

Purpose:
    Orchestrate the complete lab-file pipeline.
    Load → Assemble → Write (DOCX, optionally PDF) → Clean up

Key Functions:
    - build_report(): Main entry point for building a lab file

Key Classes:
    - BuildResult: Complete build result
    - BuildError: Exception for build failures

Dependencies:
    - builder.loading: Input loading
    - builder.layout: Document assembly
    - builder.output: DOCX and PDF sinks

Used By:
    - labfile.cli: Command-line entry point
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .config import BuilderConfig
from .code.aligner import DEFAULT_KEYWORDS
from .layout import AlignmentStrategy, AssemblyOptions, DocumentConfig, assemble_document
from .loading import LoaderError, load_workspace
from .output import DocxSink, PdfSink, write_document

logger = logging.getLogger(__name__)


class BuildError(Exception):
    """Error during build pipeline."""
    pass


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        docx_path: Path to the generated .docx
        pdf_path: Path to the generated .pdf (if requested)
        entry_count: Number of rendered entries
        paragraph_count: Number of emitted paragraphs
        warnings: Non-fatal issues, e.g. rich code rendered without highlighting

    Example:
        >>> result = build_report(config)
        >>> print(f"Wrote {result.entry_count} entries to {result.docx_path}")
    """

    docx_path: Path
    pdf_path: Optional[Path]
    entry_count: int
    paragraph_count: int
    warnings: tuple[str, ...]


def build_report(config: BuilderConfig) -> BuildResult:
    """
    Build a lab file from a work folder.

    Process:
    1. Load and validate format.toml and output.json
    2. Resolve alignment strategy and keyword list
       (BuilderConfig, then format.toml, then defaults)
    3. Assemble all entries into one paragraph stream
    4. Write the .docx (and .pdf when requested)
    5. Delete output.json when cleanup_entries is set

    Args:
        config: Build configuration

    Returns:
        BuildResult with paths, counts and warnings

    Raises:
        BuildError: If inputs cannot be loaded or outputs cannot be written
    """
    start_time = time.perf_counter()
    logger.info(f"Starting build in {config.work_dir}")

    try:
        workspace = load_workspace(
            config.work_dir,
            format_name=config.format_name,
            entries_name=config.entries_name,
        )
    except LoaderError as e:
        raise BuildError(f"Failed to load inputs: {e}") from e

    if not workspace.entries:
        logger.warning("No entries to render; the lab file will be empty")

    options = _assembly_options(config, workspace.config)
    logger.info(
        f"Assembling with {options.alignment.value} alignment, "
        f"{len(options.keywords)} assist keywords"
    )
    document = assemble_document(workspace.entries, workspace.config, options)
    warnings: List[str] = list(document.warnings)

    try:
        docx_path = write_document(document, DocxSink(config.template), config.output_path)
        logger.info(f"Wrote lab file: {docx_path}")

        pdf_path = None
        if config.export_pdf:
            pdf_path = write_document(document, PdfSink(), config.pdf_path)
            logger.info(f"Rendered PDF: {pdf_path}")
    except OSError as e:
        raise BuildError(f"Failed to write output: {e}") from e

    if config.cleanup_entries:
        try:
            workspace.entries_path.unlink()
            logger.info(f"Removed {workspace.entries_path}")
        except OSError as e:
            message = f"Could not remove {workspace.entries_path}: {e}"
            logger.warning(message)
            warnings.append(message)

    elapsed = time.perf_counter() - start_time
    logger.info(f"Lab file completed in {elapsed:.2f}s")

    return BuildResult(
        docx_path=docx_path,
        pdf_path=pdf_path,
        entry_count=len(workspace.entries),
        paragraph_count=document.paragraph_count,
        warnings=tuple(warnings),
    )


def _assembly_options(config: BuilderConfig, document_config: DocumentConfig) -> AssemblyOptions:
    """Resolve overrides: BuilderConfig first, then format.toml, then defaults."""
    alignment = config.alignment or document_config.alignment or AlignmentStrategy.HEURISTIC

    if config.keyword_assist is not None:
        keywords = config.keyword_assist
    elif document_config.keywords is not None:
        keywords = document_config.keywords
    else:
        keywords = DEFAULT_KEYWORDS

    return AssemblyOptions(keywords=tuple(keywords), alignment=AlignmentStrategy(alignment))
