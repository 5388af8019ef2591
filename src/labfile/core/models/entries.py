"""
Module: entries

Purpose:
    Provides the Entry dataclass - one question/code/output record that
    renders as a self-contained item of the lab file.

Key Classes:
    - Entry: Immutable report item

Dependencies:
    - dataclasses (std)

Used By:
    - core.utils.serialization: JSON record conversion
    - builder.layout.assembler: Document assembly
    - builder.layout.templates: Placeholder substitution
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True, slots=True)
class Entry:
    """
    One report item (immutable).

    Attributes:
        index: Zero-based ordinal, used for ordering and ``{n}``
        question: Question text
        code: Raw source code, the ground truth for rendered text
        output: Execution output, may contain ANSI escape sequences
        rich_code: RTF rendering of ``code`` from a syntax highlighter
        extension: Source file extension (e.g. "java"), informational

    Invariants:
        - index >= 0

    Example:
        >>> e = Entry(index=0, question="2+2?", code="print(4)", output="4")
        >>> e.number
        1
    """

    index: int
    question: str
    code: str
    output: str
    rich_code: Optional[str] = None
    extension: str = ""

    def __post_init__(self) -> None:
        """Validate entry on construction."""
        if self.index < 0:
            raise ValueError(f"Entry index cannot be negative: {self.index}")

    @property
    def number(self) -> int:
        """1-based display number."""
        return self.index + 1

    @property
    def has_rich_code(self) -> bool:
        """True when a non-empty rich rendering is attached."""
        return bool(self.rich_code)

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to the ``output.json`` record shape.

        Returns:
            Dictionary using the on-disk field names
        """
        data: dict[str, Any] = {
            "index": self.index,
            "question": self.question,
            "code": self.code,
            "output_rtf": self.output,
        }
        if self.rich_code is not None:
            data["code_rtf"] = self.rich_code
        if self.extension:
            data["extension"] = self.extension
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Entry:
        """
        Build an Entry from an ``output.json`` record.

        Args:
            data: Record with index, question, code, output_rtf and
                optional code_rtf / extension

        Returns:
            Entry instance

        Raises:
            KeyError: If a required field is missing
        """
        return cls(
            index=int(data["index"]),
            question=data["question"],
            code=data["code"],
            output=data["output_rtf"],
            rich_code=data.get("code_rtf"),
            extension=data.get("extension") or "",
        )
