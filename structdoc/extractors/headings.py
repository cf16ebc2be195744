"""Heading detection rules shared by the text and markup extractors.

Everything here is data or a pure function so the rule set can be
enumerated and tested exhaustively:

- TITLE_KEYWORDS: section names that mark a line as a heading
- MAIN_SECTION_KEYWORDS: the subset that marks a top-level heading
- numbering_depth() / level_for_depth(): chapter numbering to level
"""

from __future__ import annotations

import re

from structdoc.models import Subtitle, Title

TITLE_KEYWORDS: tuple[str, ...] = (
    "INTRODUÇÃO",
    "DESENVOLVIMENTO",
    "CONCLUSÃO",
    "REFERÊNCIAS",
    "BIBLIOGRAFIA",
    "RESUMO",
    "ABSTRACT",
    "METODOLOGIA",
    "RESULTADOS",
    "DISCUSSÃO",
    "CONSIDERAÇÕES FINAIS",
    "AGRADECIMENTOS",
    "SUMÁRIO",
    "LISTA DE",
    "ANEXO",
    "APÊNDICE",
)

MAIN_SECTION_KEYWORDS: tuple[str, ...] = (
    "INTRODUÇÃO",
    "CONCLUSÃO",
    "REFERÊNCIAS",
    "DESENVOLVIMENTO",
    "RESUMO",
    "ABSTRACT",
)

# "2 ", "2. ", "2.1 ", "2.1.3. "
NUMBERING_PATTERN = re.compile(r"^(\d+(?:\.\d+)*)\.?\s+")

# Label lines that mention section names but are never headings
NON_TITLE_PREFIXES: tuple[str, ...] = ("palavras-chave:", "keywords:")

MIN_TITLE_LENGTH = 2
MAX_TITLE_LENGTH = 150
MAX_SHORT_TITLE_LENGTH = 80  # exclusive
MAX_HEADING_LEVEL = 3


def contains_keyword(line: str, keywords: tuple[str, ...] = TITLE_KEYWORDS) -> bool:
    """Case-insensitive substring match against a keyword table."""
    upper = line.upper()
    return any(keyword in upper for keyword in keywords)


def is_all_caps(line: str) -> bool:
    """True when the line is its own upper-case form and has a letter."""
    return line == line.upper() and any(ch.isalpha() for ch in line)


def numbering_depth(line: str) -> int:
    """Number of dot-separated digit groups in a leading chapter number.

    Returns 0 when the line does not start with chapter numbering.

    >>> numbering_depth("2.1.4 Amostra")
    3
    >>> numbering_depth("Amostra")
    0
    """
    match = NUMBERING_PATTERN.match(line)
    if not match:
        return 0
    return match.group(1).count(".") + 1


def level_for_depth(depth: int) -> int:
    """Heading level for a numbering depth, capped at MAX_HEADING_LEVEL."""
    return max(1, min(depth, MAX_HEADING_LEVEL))


def is_title_line(line: str) -> bool:
    """Decide whether a single line of text reads as a heading.

    Lines outside 2 to 150 characters, and keyword label lines
    ("Palavras-chave: ..."), are never headings. Otherwise a line is a
    heading when ANY of these hold:
    - all caps, with at least one letter
    - starts with chapter numbering ("1.2 ")
    - contains a section keyword (case-insensitive)
    - shorter than 80 characters, no final period, and contains a keyword
    """
    trimmed = line.strip()
    if not MIN_TITLE_LENGTH <= len(trimmed) <= MAX_TITLE_LENGTH:
        return False
    if trimmed.lower().startswith(NON_TITLE_PREFIXES):
        return False

    all_caps = is_all_caps(trimmed)
    has_numbering = NUMBERING_PATTERN.match(trimmed) is not None
    has_keyword = contains_keyword(trimmed)
    short_without_period = len(trimmed) < MAX_SHORT_TITLE_LENGTH and not trimmed.endswith(".")

    return all_caps or has_numbering or has_keyword or (short_without_period and has_keyword)


def title_level(line: str) -> int:
    """Heading level (1..3) for a line already accepted as a heading."""
    trimmed = line.strip()

    depth = numbering_depth(trimmed)
    if depth:
        return level_for_depth(depth)

    if contains_keyword(trimmed, MAIN_SECTION_KEYWORDS):
        return 1

    if trimmed == trimmed.upper():
        return 1

    return 2


def heading_element(line: str, level: int) -> Title | Subtitle:
    """Build the heading element for a level: 1 is a Title, deeper is a Subtitle."""
    if level == 1:
        return Title(content=line)
    return Subtitle(content=line, level=level_for_depth(level))
