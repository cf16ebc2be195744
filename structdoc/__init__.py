"""
structdoc: Infer the structure of loosely formatted documents.

This library turns plain text, or HTML extracted from a word-processing
file, into an ordered model of typed elements (titles, subtitles,
paragraphs, tables, images, quotes, lists, code) so that a renderer can
apply an academic layout style consistently.

Example:
    >>> import structdoc
    >>> doc = structdoc.structure_text(open("monografia.txt").read())
    >>> for element in doc.elements:
    ...     print(element.type.value, element.level, element.content[:40])

    >>> # Style parameters travel with the document
    >>> doc.style.paragraph.first_line_indent
    35.43
"""

from structdoc.compliance import (
    FormatComplianceChecker,
    FormatValidation,
    ObservedFormat,
    validate_format,
)
from structdoc.config import StructureConfig
from structdoc.convert import (
    convert,
    convert_batch,
    detect_format,
    structure_markup,
    structure_text,
    supported_formats,
)
from structdoc.exceptions import (
    ConfigurationError,
    StructDocError,
    UnknownStyleError,
    UnsupportedFormatError,
)
from structdoc.extractors import (
    LineClassifier,
    MarkupStructureExtractor,
    analyze_markup,
    analyze_text,
)
from structdoc.models import (
    Code,
    DocumentElement,
    DocumentStructure,
    ElementType,
    Image,
    ListBlock,
    ListType,
    PageBreak,
    Paragraph,
    Quote,
    StructuredDocument,
    StructureStats,
    Subtitle,
    Table,
    Title,
    Unknown,
)
from structdoc.normalizers import CleaningResult, CleaningStats, TextCleaner, clean_text
from structdoc.styles import (
    DEFAULT_STYLE,
    STYLES,
    Alignment,
    ElementStyle,
    StyleConfig,
    available_styles,
    get_style,
    load_styles,
)

__version__ = "0.1.0"
__all__ = [
    # Main API
    "convert",
    "convert_batch",
    "structure_text",
    "structure_markup",
    "detect_format",
    "supported_formats",
    # Configuration
    "StructureConfig",
    # Extractors
    "LineClassifier",
    "MarkupStructureExtractor",
    "analyze_text",
    "analyze_markup",
    # Cleaning
    "TextCleaner",
    "clean_text",
    "CleaningResult",
    "CleaningStats",
    # Elements
    "ElementType",
    "ListType",
    "DocumentElement",
    "Title",
    "Subtitle",
    "Paragraph",
    "Table",
    "Image",
    "Quote",
    "ListBlock",
    "Code",
    "PageBreak",
    "Unknown",
    # Output
    "DocumentStructure",
    "StructureStats",
    "StructuredDocument",
    # Styles
    "StyleConfig",
    "ElementStyle",
    "Alignment",
    "STYLES",
    "DEFAULT_STYLE",
    "get_style",
    "available_styles",
    "load_styles",
    # Compliance
    "FormatComplianceChecker",
    "FormatValidation",
    "ObservedFormat",
    "validate_format",
    # Exceptions
    "StructDocError",
    "UnsupportedFormatError",
    "ConfigurationError",
    "UnknownStyleError",
]
