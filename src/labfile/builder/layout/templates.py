"""
Module: builder.layout.templates

Purpose:
    Placeholder substitution for section templates.

Key Functions:
    - substitute(): Fill {n}, {question}, {solution}, {output}

Dependencies:
    - re (std)
    - core.utils.text: strip_ansi

Used By:
    - builder.layout.assembler: Section rendering
"""

from __future__ import annotations

import re
from typing import Dict

from labfile.core.models import Entry
from labfile.core.utils.text import strip_ansi

PLACEHOLDERS = ("n", "question", "solution", "output")

_PLACEHOLDER_RE = re.compile(r"\{(" + "|".join(PLACEHOLDERS) + r")\}")


def placeholder_values(entry: Entry) -> Dict[str, str]:
    """Values substituted for each placeholder of ``entry``."""
    return {
        "n": str(entry.number),
        "question": entry.question,
        "solution": entry.code,
        "output": strip_ansi(entry.output),
    }


def substitute(template: str, entry: Entry) -> str:
    """
    Replace placeholders in ``template`` with fields of ``entry``.

    Substitution is a single literal pass, so text inserted for one
    placeholder is never scanned for another and the result does not
    depend on placeholder order. Unknown ``{...}`` sequences are kept.

    Args:
        template: Section template text
        entry: Entry supplying the values

    Returns:
        Substituted text; a template without placeholders is returned as is

    Example:
        >>> e = Entry(index=0, question="2+2?", code="", output="")
        >>> substitute("Q{n}: {question}", e)
        'Q1: 2+2?'
    """
    if "{" not in template:
        return template
    values = placeholder_values(entry)
    return _PLACEHOLDER_RE.sub(lambda m: values[m.group(1)], template)
