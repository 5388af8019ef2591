"""
Module: builder.layout.config

Purpose:
    Report configuration as read from ``format.toml``: one SectionStyle per
    report section (header, question, solution, output, footer), where the
    solution and output sections also carry a title paragraph.

Key Classes:
    - SectionStyle: Template text plus paragraph/run options
    - TitledSection: Body SectionStyle with a title SectionStyle
    - DocumentConfig: The whole report configuration
    - AlignmentStrategy: How rich formatting is mapped onto raw code

Dependencies:
    - dataclasses (std)
    - core.models.formatting: RunStyle

Used By:
    - builder.loading.parser: Builds DocumentConfig from TOML
    - builder.layout.assembler: Section rendering
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from labfile.core.models.formatting import RunStyle


# Defaults for unspecified section options
DEFAULT_SIZE = 12
DEFAULT_ALIGN = "left"
DEFAULT_FONT = "Arial"
DEFAULT_COLOR = "#000000"
DEFAULT_LINE_SPACING = 1.0
DEFAULT_STYLE = "Normal"

_ALIGN_NAMES = {"left": "left", "center": "center", "right": "right", "justify": "justify"}


class AlignmentStrategy(str, Enum):
    """
    Strategy for mapping rich-text formatting onto raw code.

    HEURISTIC tolerates highlighters that tokenize differently from the
    raw code. STREAM replays the rich text character by character and
    suits highlighters whose text matches the raw code one-to-one.
    """

    HEURISTIC = "heuristic"
    STREAM = "stream"


@dataclass(frozen=True)
class SectionStyle:
    """
    Template and style options for one report section (immutable).

    Attributes:
        text: Template text with optional placeholders
        size: Font size in points
        align: left, center, right or justify (anything else is left)
        bold: Bold flag
        italic: Italic flag
        underline: Underline flag
        font: Font family
        color: Hex color, with or without '#'
        line_spacing: Line spacing multiple
        margin_top: Space before each paragraph in points
        margin_bottom: Space after each paragraph in points
        indent: Left indent in points
        style: Paragraph style id

    Example:
        >>> SectionStyle(text="Q{n}", align="Center").alignment
        'center'
    """

    text: str = ""
    size: float = DEFAULT_SIZE
    align: str = DEFAULT_ALIGN
    bold: bool = False
    italic: bool = False
    underline: bool = False
    font: str = DEFAULT_FONT
    color: str = DEFAULT_COLOR
    line_spacing: float = DEFAULT_LINE_SPACING
    margin_top: float = 0
    margin_bottom: float = 0
    indent: float = 0
    style: str = DEFAULT_STYLE

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.size <= 0:
            raise ValueError(f"size must be positive: {self.size}")
        if self.line_spacing <= 0:
            raise ValueError(f"line_spacing must be positive: {self.line_spacing}")

    @property
    def alignment(self) -> str:
        """Normalized alignment; unknown values fall back to left."""
        return _ALIGN_NAMES.get(self.align.lower(), DEFAULT_ALIGN)

    @property
    def run_style(self) -> RunStyle:
        """Run style for template text of this section."""
        return RunStyle(
            font=self.font,
            size=float(self.size),
            bold=self.bold,
            italic=self.italic,
            underline=self.underline,
            color=self.color.lstrip("#").lower(),
        )

    def has_placeholder(self, name: str) -> bool:
        """Check whether the template references ``{name}``."""
        return "{" + name + "}" in self.text

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SectionStyle:
        """
        Build from a TOML table, ignoring unknown keys.

        Args:
            data: Mapping with at least "text"

        Returns:
            SectionStyle with defaults for missing options
        """
        known = {
            key: data[key]
            for key in cls.__dataclass_fields__
            if key in data
        }
        return cls(**known)


@dataclass(frozen=True)
class TitledSection:
    """Section whose body is preceded by a title paragraph."""

    content: SectionStyle
    title: SectionStyle

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TitledSection:
        """Body options sit at table level, the title in a ``title`` sub-table."""
        return cls(
            content=SectionStyle.from_dict(data),
            title=SectionStyle.from_dict(data["title"]),
        )


@dataclass(frozen=True)
class DocumentConfig:
    """
    Complete report configuration (immutable per run).

    Attributes:
        question: Question section
        solution: Solution section (title + code body)
        output: Output section (title + output body)
        header: Optional header emitted before each entry
        footer: Optional footer emitted after each entry
        keywords: Keyword-assist override for token alignment
        alignment: Alignment strategy override
    """

    question: SectionStyle
    solution: TitledSection
    output: TitledSection
    header: Optional[SectionStyle] = None
    footer: Optional[SectionStyle] = None
    keywords: Optional[Tuple[str, ...]] = None
    alignment: Optional[AlignmentStrategy] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> DocumentConfig:
        """
        Build from a parsed ``format.toml`` mapping.

        Raises:
            KeyError: If a required section is missing
            ValueError: If an option value is invalid
        """
        keywords = data.get("keywords")
        alignment = data.get("alignment")
        return cls(
            question=SectionStyle.from_dict(data["question"]),
            solution=TitledSection.from_dict(data["solution"]),
            output=TitledSection.from_dict(data["output"]),
            header=SectionStyle.from_dict(data["header"]) if "header" in data else None,
            footer=SectionStyle.from_dict(data["footer"]) if "footer" in data else None,
            keywords=tuple(keywords) if keywords is not None else None,
            alignment=AlignmentStrategy(alignment) if alignment else None,
        )
