"""
Command-line entry point.

Builds a lab file from a work folder holding ``format.toml`` and
``output.json``::

    labfile lab3 --pdf
    labfile /abs/path/to/lab3 --output report.docx --keep-json

A relative folder is resolved against the user's home directory.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from labfile import __version__
from labfile.builder import BuilderConfig, BuildError, build_report
from labfile.builder.layout.config import AlignmentStrategy

logger = logging.getLogger("labfile")

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


class FolderError(Exception):
    """Work folder cannot be resolved."""
    pass


def resolve_folder(folder: str) -> Path:
    """
    Resolve the work folder.

    Absolute paths are used as given; relative paths are joined to $HOME.

    Raises:
        FolderError: If the path is relative and HOME is not set
    """
    path = Path(folder).expanduser()
    if path.is_absolute():
        return path
    home = os.environ.get("HOME")
    if not home:
        raise FolderError("HOME is not set; pass an absolute folder path")
    return Path(home) / path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="labfile",
        description="Assemble a formatted lab file (.docx) from questions, code and program output.",
    )
    parser.add_argument("folder", help="Work folder with format.toml and output.json (relative to $HOME)")
    parser.add_argument("--output", default="labfile.docx", help="Output file name (default: labfile.docx)")
    parser.add_argument("--pdf", action="store_true", help="Also render a PDF next to the DOCX")
    parser.add_argument("--keep-json", action="store_true", help="Keep output.json after a successful build")
    parser.add_argument(
        "--alignment",
        choices=[s.value for s in AlignmentStrategy],
        default=None,
        help="How highlighter formatting is mapped onto code (default: from format.toml, else heuristic)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    try:
        config = BuilderConfig(
            work_dir=resolve_folder(args.folder),
            output_name=args.output,
            export_pdf=args.pdf,
            cleanup_entries=not args.keep_json,
            alignment=AlignmentStrategy(args.alignment) if args.alignment else None,
        )
        result = build_report(config)
    except (FolderError, ValueError, BuildError) as e:
        logger.error(str(e))
        return 1

    for warning in result.warnings:
        logger.warning(warning)
    logger.info(f"Done: {result.entry_count} entries, {result.paragraph_count} paragraphs -> {result.docx_path}")
    if result.pdf_path:
        logger.info(f"PDF: {result.pdf_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
