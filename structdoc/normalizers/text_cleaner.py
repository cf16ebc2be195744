"""
Whitespace and punctuation cleanup for raw document text.

The cleaner is a fixed, ordered sequence of rewrite passes. Each pass is a
pure function ``text -> (text, count)`` and later passes assume the earlier
ones ran:

    1. tabs -> one space
    2. 3+ consecutive line breaks -> exactly 2
    3. trim every line
    4. 3+ spaces between two non-space characters -> one space
       (gaps left behind by justified text)
    5. any remaining 2+ spaces -> one space
    6. spaces before . , ; : ! ? removed

Counts are per-pass diagnostics. A character touched by two passes is
counted by both, so ``total_changes`` is not a count of distinct edits.

Running the cleaner on its own output changes nothing.

Usage:
    from structdoc.normalizers.text_cleaner import clean_text

    result = clean_text(raw)
    print(result.text)
    print(result.stats.total_changes)
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)


# =============================================================================
# PATTERNS
# =============================================================================

TAB_PATTERN = re.compile(r"\t")

# A run of 3+ line breaks; lines holding only horizontal whitespace
# belong to the run.
LINE_BREAK_RUN_PATTERN = re.compile(r"\n(?:[^\S\n]*\n){2,}")

JUSTIFICATION_GAP_PATTERN = re.compile(r"(?<=\S) {3,}(?=\S)")
MULTIPLE_SPACES_PATTERN = re.compile(r" {2,}")
SPACE_BEFORE_PUNCTUATION_PATTERN = re.compile(r" +(?=[.,;:!?])")


# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass(frozen=True)
class CleaningStats:
    """Per-pass change counts."""

    tabs_converted: int = 0
    line_breaks_normalized: int = 0
    whitespace_trimmed: int = 0
    justification_spacing_fixed: int = 0
    multiple_spaces_removed: int = 0
    punctuation_fixed: int = 0

    @property
    def total_changes(self) -> int:
        return sum(getattr(self, f.name) for f in fields(self))

    def __add__(self, other: CleaningStats) -> CleaningStats:
        if not isinstance(other, CleaningStats):
            return NotImplemented
        return CleaningStats(
            **{f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)}
        )

    def to_dict(self) -> dict[str, int]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["total_changes"] = self.total_changes
        return data


@dataclass(frozen=True)
class CleaningResult:
    """Cleaned text plus the per-pass counts that produced it."""

    text: str
    stats: CleaningStats


# =============================================================================
# PASSES
# =============================================================================


def convert_tabs(text: str) -> tuple[str, int]:
    """Replace every tab with a single space."""
    return TAB_PATTERN.subn(" ", text)


def normalize_line_breaks(text: str) -> tuple[str, int]:
    """Collapse runs of 3+ line breaks to a single blank line."""
    count = 0

    def collapse(match: re.Match[str]) -> str:
        nonlocal count
        count += match.group(0).count("\n") - 2
        return "\n\n"

    return LINE_BREAK_RUN_PATTERN.sub(collapse, text), count


def trim_lines(text: str) -> tuple[str, int]:
    """Strip leading and trailing whitespace from every line."""
    count = 0
    trimmed = []
    for line in text.split("\n"):
        stripped = line.strip()
        count += len(line) - len(stripped)
        trimmed.append(stripped)
    return "\n".join(trimmed), count


def fix_justification_spacing(text: str) -> tuple[str, int]:
    """Collapse 3+ spaces sitting between two words."""
    count = 0

    def collapse(match: re.Match[str]) -> str:
        nonlocal count
        count += len(match.group(0)) - 1
        return " "

    return JUSTIFICATION_GAP_PATTERN.sub(collapse, text), count


def collapse_multiple_spaces(text: str) -> tuple[str, int]:
    """Collapse any remaining run of 2+ spaces."""
    count = 0

    def collapse(match: re.Match[str]) -> str:
        nonlocal count
        count += len(match.group(0)) - 1
        return " "

    return MULTIPLE_SPACES_PATTERN.sub(collapse, text), count


def fix_punctuation(text: str) -> tuple[str, int]:
    """Remove spaces immediately before punctuation marks."""
    return SPACE_BEFORE_PUNCTUATION_PATTERN.subn("", text)


CleaningPass = Callable[[str], tuple[str, int]]

# (stats field, pass) in application order
CLEANING_PASSES: tuple[tuple[str, CleaningPass], ...] = (
    ("tabs_converted", convert_tabs),
    ("line_breaks_normalized", normalize_line_breaks),
    ("whitespace_trimmed", trim_lines),
    ("justification_spacing_fixed", fix_justification_spacing),
    ("multiple_spaces_removed", collapse_multiple_spaces),
    ("punctuation_fixed", fix_punctuation),
)


# =============================================================================
# CLEANER
# =============================================================================


class TextCleaner:
    """
    Applies the cleaning passes in order.

    Example:
        >>> cleaner = TextCleaner()
        >>> result = cleaner.clean("Texto\\tcom    espaços , e vírgula")
        >>> result.text
        'Texto com espaços, e vírgula'
        >>> result.stats.punctuation_fixed
        1
    """

    def __init__(self, passes: tuple[tuple[str, CleaningPass], ...] = CLEANING_PASSES):
        self.passes = passes

    def clean(self, text: str) -> CleaningResult:
        counts: dict[str, int] = {}
        for name, cleaning_pass in self.passes:
            text, counts[name] = cleaning_pass(text)

        stats = CleaningStats(**counts)
        if stats.total_changes:
            logger.debug("Text cleaned: %s", stats.to_dict())
        return CleaningResult(text=text, stats=stats)


def clean_text(text: str) -> CleaningResult:
    """Clean text with the standard pass sequence."""
    return TextCleaner().clean(text)
