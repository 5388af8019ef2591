"""
Module: builder.code.aligner

Purpose:
    Match raw-code tokens to rich-text formatting when the highlighter and
    the raw tokenizer disagree on token boundaries. Each token walks a
    fixed cascade of rules and takes the first match.

Key Functions:
    - find_best_format(): Match one token
    - align_line(): Match every token of a line

Key Classes:
    - MatchRule: Which rule produced a match
    - FormatMatch: Matched key, formatting and rule

Dependencies:
    - builder.rich.index: RichIndex
    - builder.code.tokenizer: tokenize_line

Used By:
    - builder.layout.runs: Rich code paragraph building
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Set, Tuple

from labfile.core.models import FormatAttributes, Token
from labfile.builder.rich.index import RichIndex

from .tokenizer import QUOTES, tokenize_line

logger = logging.getLogger(__name__)

DEFAULT_KEYWORDS: Tuple[str, ...] = ("class", "static", "public", "void", "int", "import", "new")

# Fuzzy matching only considers tokens and keys longer than this
FUZZY_MIN_LENGTH = 5


class MatchRule(str, Enum):
    """Rules of the matching cascade, in priority order."""

    EXACT = "exact"
    CASE_INSENSITIVE = "case_insensitive"
    KEYWORD = "keyword"
    STRING = "string"
    FUZZY = "fuzzy"


@dataclass(frozen=True, slots=True)
class FormatMatch:
    """Result of a successful token match."""

    key: str
    attributes: FormatAttributes
    rule: MatchRule


def find_best_format(
    token: str,
    index: RichIndex,
    used: Set[str],
    keywords: Iterable[str] = DEFAULT_KEYWORDS,
) -> Optional[FormatMatch]:
    """
    Find the rich formatting for one raw token.

    Cascade (first success wins):
    1. Exact key match.
    2. Case-insensitive key match.
    3. Keyword assist: a keyword token takes any key containing it. Not
       recorded in ``used``; several keywords may share one fused key.
    4. String literal: a quoted token takes the first unused quoted key.
    5. Compound identifier: a letters/underscore token longer than five
       characters takes the first unused key longer than five characters
       where either text contains the other.

    Rules 4 and 5 add the key they consume to ``used``.

    Args:
        token: Raw token text (not whitespace)
        index: Rich lookup of the entry being rendered
        used: Keys already consumed in this code block; updated in place
        keywords: Keyword-assist list

    Returns:
        FormatMatch, or None when no rule applies

    Example:
        >>> idx = RichIndex()
        >>> idx.add("publicclass", FormatAttributes(bold=True))
        >>> find_best_format("class", idx, set()).rule
        <MatchRule.KEYWORD: 'keyword'>
    """
    exact = index.get(token)
    if exact is not None:
        return FormatMatch(token, exact, MatchRule.EXACT)

    lowered = token.lower()
    for key, attributes in index.items():
        if key.lower() == lowered:
            return FormatMatch(key, attributes, MatchRule.CASE_INSENSITIVE)

    if token in keywords:
        for key, attributes in index.items():
            if token in key:
                return FormatMatch(key, attributes, MatchRule.KEYWORD)

    if token[:1] in QUOTES:
        for key, attributes in index.items():
            if key[:1] in QUOTES and key not in used:
                used.add(key)
                return FormatMatch(key, attributes, MatchRule.STRING)

    if len(token) > FUZZY_MIN_LENGTH and all(c.isalpha() or c == "_" for c in token):
        for key, attributes in index.items():
            if len(key) > FUZZY_MIN_LENGTH and key not in used and (key in token or token in key):
                used.add(key)
                return FormatMatch(key, attributes, MatchRule.FUZZY)

    return None


def align_line(
    line: str,
    index: RichIndex,
    used: Set[str],
    keywords: Iterable[str] = DEFAULT_KEYWORDS,
) -> List[Tuple[Token, Optional[FormatAttributes]]]:
    """
    Tokenize a raw line and attach matched formatting to each token.

    Whitespace tokens are never matched and pair with None.

    Args:
        line: One raw code line
        index: Rich lookup of the entry being rendered
        used: Consumed keys, shared across all lines of one code block
        keywords: Keyword-assist list

    Returns:
        (token, attributes-or-None) pairs in source order
    """
    keyword_set = frozenset(keywords)
    aligned: List[Tuple[Token, Optional[FormatAttributes]]] = []
    for token in tokenize_line(line):
        if token.is_whitespace:
            aligned.append((token, None))
            continue
        match = find_best_format(token.text, index, used, keyword_set)
        if match is None:
            logger.debug(f"No rich format for token {token.text!r}")
        aligned.append((token, match.attributes if match else None))
    return aligned
