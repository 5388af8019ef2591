"""
Module: builder.config

Purpose:
    Configuration dataclass for a lab-file build. Immutable
    configuration with validation on construction.

Key Classes:
    - BuilderConfig: Main configuration for building a lab file

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - builder.controller: Main build controller
    - labfile.cli: Command-line entry point
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from labfile.builder.layout.config import AlignmentStrategy


@dataclass(frozen=True)
class BuilderConfig:
    """
    Configuration for building a lab file (immutable).

    ``alignment`` and ``keyword_assist`` override the matching
    ``format.toml`` options when set; left as None, the file decides and
    the built-in defaults apply last.

    Attributes:
        work_dir: Folder holding format.toml and output.json
        output_name: File name of the generated .docx (inside work_dir)
        format_name: Configuration file name
        entries_name: Entries file name
        export_pdf: Also render a .pdf next to the .docx
        cleanup_entries: Delete the entries file after a successful build
        alignment: Alignment strategy override
        keyword_assist: Keyword-assist list override
        template: Optional .docx whose styles seed the output

    Example:
        >>> config = BuilderConfig(work_dir=Path.home() / "lab3", export_pdf=True)
        >>> config.output_path.name
        'labfile.docx'
    """

    # Required
    work_dir: Path

    # Files
    output_name: str = "labfile.docx"
    format_name: str = "format.toml"
    entries_name: str = "output.json"
    template: Optional[Path] = None

    # Behavior
    export_pdf: bool = False
    cleanup_entries: bool = True
    alignment: Optional[AlignmentStrategy] = None
    keyword_assist: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.output_name.lower().endswith(".docx"):
            raise ValueError(f"output_name must end with .docx: {self.output_name!r}")
        if Path(self.output_name).name != self.output_name:
            raise ValueError(f"output_name must be a bare file name: {self.output_name!r}")
        if self.keyword_assist is not None and any(not k for k in self.keyword_assist):
            raise ValueError("keyword_assist cannot contain empty keywords")

    @property
    def output_path(self) -> Path:
        """Destination of the .docx."""
        return self.work_dir / self.output_name

    @property
    def pdf_path(self) -> Path:
        """Destination of the optional .pdf."""
        return self.output_path.with_suffix(".pdf")
