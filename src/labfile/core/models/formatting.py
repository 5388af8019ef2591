"""
Module: formatting

Purpose:
    Style value objects shared by the rich-text adapter and the layout
    builder. FormatAttributes is what the decoder reports for a block of
    text; RunStyle is the concrete style written to a sink.

Key Classes:
    - Color: RGB triple
    - ColorTable: Palette mapping color references to Colors
    - FormatAttributes: Decoded style fragment (bold/italic/underline/ref)
    - RunStyle: Resolved, sink-ready run style

Dependencies:
    - dataclasses (std)

Used By:
    - builder.rich: Decoding and color resolution
    - builder.layout: Run and paragraph building
    - builder.output: DOCX and PDF sinks
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True, slots=True)
class Color:
    """
    RGB color with 0-255 channels.

    Example:
        >>> Color(255, 0, 128).hex
        'ff0080'
    """

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"Color channel {name} out of range: {value}")

    @property
    def hex(self) -> str:
        """Lowercase hex string without '#'."""
        return f"{self.red:02x}{self.green:02x}{self.blue:02x}"


@dataclass(frozen=True)
class ColorTable:
    """
    Palette of a single decoded document.

    Scoped to one entry: never shared between entries.

    Attributes:
        colors: Mapping of color reference to Color. References missing
            from the mapping (e.g. RTF "auto" slots) resolve to no color.
    """

    colors: Dict[int, Color] = field(default_factory=dict)

    def lookup(self, ref: int) -> Optional[Color]:
        """Return the color for ``ref`` or None on a miss."""
        return self.colors.get(ref)

    def __len__(self) -> int:
        return len(self.colors)


@dataclass(frozen=True, slots=True)
class FormatAttributes:
    """
    Style fragment attached to a rich-text block.

    ``color_ref`` is an index into the document's ColorTable; it is
    resolved at render time, never stored as a concrete color.
    """

    bold: bool = False
    italic: bool = False
    underline: bool = False
    color_ref: int = 0


@dataclass(frozen=True, slots=True)
class RunStyle:
    """
    Concrete style of one text run.

    None values mean "inherit from the paragraph style" in the sink.

    Attributes:
        font: Font family name
        size: Font size in points
        bold: Bold flag
        italic: Italic flag
        underline: Single underline flag
        color: Hex color without '#', e.g. "ff0000"
    """

    font: Optional[str] = None
    size: Optional[float] = None
    bold: bool = False
    italic: bool = False
    underline: bool = False
    color: Optional[str] = None

    def __post_init__(self) -> None:
        if self.size is not None and self.size <= 0:
            raise ValueError(f"Run size must be positive: {self.size}")
        if self.color is not None and self.color.startswith("#"):
            raise ValueError(f"Run color must not include '#': {self.color!r}")
