"""
Normalizers for transforming raw document content.

Text cleanup runs before structure inference:
- TextCleaner: ordered whitespace/punctuation rewrite passes
- clean_text: convenience wrapper over the standard pass sequence
- CleaningStats: per-pass change counts (diagnostic, not deduplicated)
"""

from structdoc.normalizers.text_cleaner import (
    CLEANING_PASSES,
    CleaningResult,
    CleaningStats,
    TextCleaner,
    clean_text,
    collapse_multiple_spaces,
    convert_tabs,
    fix_justification_spacing,
    fix_punctuation,
    normalize_line_breaks,
    trim_lines,
)

__all__ = [
    "TextCleaner",
    "clean_text",
    "CleaningResult",
    "CleaningStats",
    "CLEANING_PASSES",
    # Individual passes
    "convert_tabs",
    "normalize_line_breaks",
    "trim_lines",
    "fix_justification_spacing",
    "collapse_multiple_spaces",
    "fix_punctuation",
]
