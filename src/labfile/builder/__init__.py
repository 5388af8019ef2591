"""
Module: builder

Purpose:
    Lab-file building pipeline: loads entries and report configuration
    from a work folder, aligns highlighter formatting onto raw code and
    writes the assembled document to DOCX (and optionally PDF).

Key Functions:
    - load_workspace(): Load format.toml and output.json
    - assemble_document(): Entries -> paragraphs
    - build_report(): Main entry point for lab-file generation

Key Classes:
    - BuilderConfig: Configuration for building
    - BuildResult: Build outcome

Dependencies:
    - python-docx: DOCX output
    - reportlab: PDF output
    - labfile.core.schemas.validator: Schema validation

Used By:
    - labfile.cli: Command-line entry point
"""

from .config import BuilderConfig
from .loading.loader import load_workspace, LoaderError
from .layout import assemble_document, AssemblyOptions
from .controller import build_report, BuildResult, BuildError

__all__ = [
    # Config
    "BuilderConfig",
    # Loading
    "load_workspace",
    "LoaderError",
    # Layout
    "assemble_document",
    "AssemblyOptions",
    # Controller
    "build_report",
    "BuildResult",
    "BuildError",
]
