"""
Module: builder.rich.resolver

Purpose:
    Resolve decoded formatting into concrete run styles. Color references
    are looked up in the entry's color table at the moment a run is built,
    never carried across entries.

Key Functions:
    - resolve_format(): FormatAttributes + ColorTable -> RunStyle
    - code_style(): Plain monospace run style

Dependencies:
    - core.models: FormatAttributes, ColorTable, RunStyle

Used By:
    - builder.layout.runs: Code and output runs
"""

from __future__ import annotations

from typing import Optional

from labfile.core.models import ColorTable, FormatAttributes, RunStyle

# Fixed typography of code and program output
CODE_FONT = "CaskaydiaCove NF"
CODE_SIZE = 10.0


def code_style() -> RunStyle:
    """Monospace run style without any highlighting."""
    return RunStyle(font=CODE_FONT, size=CODE_SIZE)


def resolve_format(
    attributes: Optional[FormatAttributes],
    color_table: ColorTable,
) -> RunStyle:
    """
    Turn decoded formatting into a run style.

    Args:
        attributes: Matched formatting, or None for an unmatched token
        color_table: Palette of the document the attributes came from

    Returns:
        Monospace RunStyle with flags and color applied. A color
        reference missing from the table leaves the color unset.

    Example:
        >>> from labfile.core.models import Color
        >>> table = ColorTable({1: Color(0, 0, 255)})
        >>> resolve_format(FormatAttributes(bold=True, color_ref=1), table).color
        '0000ff'
    """
    if attributes is None:
        return code_style()

    color = color_table.lookup(attributes.color_ref)
    return RunStyle(
        font=CODE_FONT,
        size=CODE_SIZE,
        bold=attributes.bold,
        italic=attributes.italic,
        underline=attributes.underline,
        color=color.hex if color is not None else None,
    )
