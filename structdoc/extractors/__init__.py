"""
Structure extraction module.

Two extractors produce the same element model:
- LineClassifier: plain text, heading heuristics per line, paragraph buffering
- MarkupStructureExtractor: HTML trees, tag dispatch, nested-table resolution

Both share the heading rules in ``headings`` (keyword table, chapter
numbering, all-caps detection, level assignment).
"""

from structdoc.extractors.headings import (
    MAIN_SECTION_KEYWORDS,
    MAX_HEADING_LEVEL,
    TITLE_KEYWORDS,
    heading_element,
    is_title_line,
    level_for_depth,
    numbering_depth,
    title_level,
)
from structdoc.extractors.markup import (
    MarkupStructureExtractor,
    analyze_markup,
    cell_text,
    extract_table_rows,
    parse_markup,
    resolve_table,
)
from structdoc.extractors.text import (
    LineClassifier,
    analyze_text,
)

__all__ = [
    # Extractors
    "LineClassifier",
    "MarkupStructureExtractor",
    "analyze_text",
    "analyze_markup",
    # Heading rules
    "TITLE_KEYWORDS",
    "MAIN_SECTION_KEYWORDS",
    "MAX_HEADING_LEVEL",
    "is_title_line",
    "title_level",
    "numbering_depth",
    "level_for_depth",
    "heading_element",
    # Markup helpers
    "parse_markup",
    "resolve_table",
    "extract_table_rows",
    "cell_text",
]
