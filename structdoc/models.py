"""
Data models for structdoc.

These models represent the output of structure inference: an ordered,
immutable sequence of typed document elements plus summary counts.

The element family is closed. Each variant fixes its own ``type``,
``preserve_as_is`` and ``needs_formatting`` at class level, so the
invariants a renderer relies on hold by construction:

- only Title/Subtitle carry a ``level`` (1..3)
- only Table/Image/Quote/List/Code are preserved as-is
- only Title/Subtitle/Paragraph need style-driven formatting
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar

from structdoc.normalizers.text_cleaner import CleaningStats
from structdoc.styles import StyleConfig

IMAGE_PLACEHOLDER = "Image"
MIN_LEVEL = 1
MAX_LEVEL = 3


class ElementType(Enum):
    """Kind of a classified document element."""

    TITLE = "title"
    SUBTITLE = "subtitle"
    PARAGRAPH = "paragraph"
    TABLE = "table"
    IMAGE = "image"
    QUOTE = "quote"
    LIST = "list"
    CODE = "code"
    PAGE_BREAK = "page-break"
    UNKNOWN = "unknown"


class ListType(Enum):
    """Marker style of a list element."""

    ORDERED = "ordered"
    UNORDERED = "unordered"


# ═══════════════════════════════════════════════════════════════════════════════
# Elements
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class DocumentElement:
    """Base class for one classified unit of document content."""

    content: str

    type: ClassVar[ElementType] = ElementType.UNKNOWN
    preserve_as_is: ClassVar[bool] = False
    needs_formatting: ClassVar[bool] = False

    @property
    def level(self) -> int | None:
        """Heading level; None for everything that is not a heading."""
        return None

    @property
    def metadata(self) -> dict[str, Any]:
        """Kind-specific payload."""
        return {}

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the element
        """
        data: dict[str, Any] = {
            "type": self.type.value,
            "content": self.content,
            "preserve_as_is": self.preserve_as_is,
            "needs_formatting": self.needs_formatting,
        }
        if self.level is not None:
            data["level"] = self.level
        if self.metadata:
            data["metadata"] = self.metadata
        return data


@dataclass(frozen=True)
class Title(DocumentElement):
    """Main section heading (always level 1)."""

    level: int = 1  # type: ignore[assignment]

    type: ClassVar[ElementType] = ElementType.TITLE
    needs_formatting: ClassVar[bool] = True

    def __post_init__(self) -> None:
        if self.level != MIN_LEVEL:
            raise ValueError(f"Title level must be {MIN_LEVEL}, got {self.level}")


@dataclass(frozen=True)
class Subtitle(DocumentElement):
    """Subsection heading (level 2 or 3)."""

    level: int = 2  # type: ignore[assignment]

    type: ClassVar[ElementType] = ElementType.SUBTITLE
    needs_formatting: ClassVar[bool] = True

    def __post_init__(self) -> None:
        if not MIN_LEVEL < self.level <= MAX_LEVEL:
            raise ValueError(
                f"Subtitle level must be between {MIN_LEVEL + 1} and {MAX_LEVEL}, "
                f"got {self.level}"
            )


@dataclass(frozen=True)
class Paragraph(DocumentElement):
    """Body text."""

    type: ClassVar[ElementType] = ElementType.PARAGRAPH
    needs_formatting: ClassVar[bool] = True


@dataclass(frozen=True)
class Table(DocumentElement):
    """
    Table preserved as-is.

    ``rows`` is a ragged matrix: every row keeps exactly the cells it had.
    ``content`` is a plain-text rendering of the cells; ``source_markup``
    keeps the HTML of the table when it came from a markup tree.
    """

    rows: tuple[tuple[str, ...], ...] = ()
    source_markup: str | None = None

    type: ClassVar[ElementType] = ElementType.TABLE
    preserve_as_is: ClassVar[bool] = True

    def __post_init__(self) -> None:
        rows = tuple(tuple(row) for row in self.rows if len(row) > 0)
        if not rows:
            raise ValueError("Table must have at least one non-empty row")
        object.__setattr__(self, "rows", rows)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        """Number of cells in the first row."""
        return len(self.rows[0])

    @property
    def metadata(self) -> dict[str, Any]:
        return {
            "table_data": [list(row) for row in self.rows],
            "rows": self.row_count,
            "columns": self.column_count,
        }


@dataclass(frozen=True)
class Image(DocumentElement):
    """Image reference; ``content`` is the alt text."""

    content: str = IMAGE_PLACEHOLDER
    src: str | None = None
    source_markup: str | None = None

    type: ClassVar[ElementType] = ElementType.IMAGE
    preserve_as_is: ClassVar[bool] = True

    @property
    def metadata(self) -> dict[str, Any]:
        return {"src": self.src, "alt": self.content}


@dataclass(frozen=True)
class Quote(DocumentElement):
    """Block quotation."""

    source_markup: str | None = None

    type: ClassVar[ElementType] = ElementType.QUOTE
    preserve_as_is: ClassVar[bool] = True

    @property
    def metadata(self) -> dict[str, Any]:
        return {"is_quote": True}


@dataclass(frozen=True)
class ListBlock(DocumentElement):
    """Ordered or unordered list, kept whole."""

    list_type: ListType = ListType.UNORDERED
    source_markup: str | None = None

    type: ClassVar[ElementType] = ElementType.LIST
    preserve_as_is: ClassVar[bool] = True

    @property
    def metadata(self) -> dict[str, Any]:
        return {"list_type": self.list_type.value}


@dataclass(frozen=True)
class Code(DocumentElement):
    """Preformatted code block."""

    source_markup: str | None = None

    type: ClassVar[ElementType] = ElementType.CODE
    preserve_as_is: ClassVar[bool] = True


@dataclass(frozen=True)
class PageBreak(DocumentElement):
    """Explicit page break."""

    content: str = ""

    type: ClassVar[ElementType] = ElementType.PAGE_BREAK


@dataclass(frozen=True)
class Unknown(DocumentElement):
    """Content that matched no known kind."""

    type: ClassVar[ElementType] = ElementType.UNKNOWN


# ═══════════════════════════════════════════════════════════════════════════════
# Structure
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class StructureStats:
    """Summary counts of formatted elements."""

    titles: int = 0
    subtitles: int = 0
    paragraphs: int = 0

    @classmethod
    def from_elements(cls, elements: tuple[DocumentElement, ...]) -> StructureStats:
        """Count titles, subtitles and paragraphs in an element sequence."""
        types = [e.type for e in elements]
        return cls(
            titles=types.count(ElementType.TITLE),
            subtitles=types.count(ElementType.SUBTITLE),
            paragraphs=types.count(ElementType.PARAGRAPH),
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "titles": self.titles,
            "subtitles": self.subtitles,
            "paragraphs": self.paragraphs,
        }


@dataclass(frozen=True)
class DocumentStructure:
    """
    Ordered element sequence plus summary counts for one document.

    Stats are derived from the elements, so they always match.

    Example:
        >>> structure = analyze_text("INTRODUÇÃO\\nCorpo do texto.")
        >>> [e.type.value for e in structure]
        ['title', 'paragraph']
        >>> structure.stats.titles
        1
    """

    elements: tuple[DocumentElement, ...] = ()
    stats: StructureStats = field(init=False)

    def __post_init__(self) -> None:
        elements = tuple(self.elements)
        object.__setattr__(self, "elements", elements)
        object.__setattr__(self, "stats", StructureStats.from_elements(elements))

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self):
        return iter(self.elements)

    def __getitem__(self, index: int) -> DocumentElement:
        return self.elements[index]

    def of_type(self, element_type: ElementType) -> list[DocumentElement]:
        """Return all elements of the given type, in document order."""
        return [e for e in self.elements if e.type == element_type]

    def to_dict(self) -> dict[str, Any]:
        return {
            "elements": [e.to_dict() for e in self.elements],
            "stats": self.stats.to_dict(),
        }


@dataclass
class StructuredDocument:
    """
    The main output type for users.

    Bundles the inferred structure with the style the renderer must apply,
    so style selection travels explicitly with the document.

    Example:
        >>> doc = structdoc.structure_text(text, StructureConfig(style="apa"))
        >>> doc.style.paragraph.alignment
        <Alignment.LEFT: 'left'>
        >>> doc.structure.stats.titles
        3
    """

    structure: DocumentStructure
    style: StyleConfig
    input_format: str  # "text" or "html"

    source_path: str | None = None
    cleaning: CleaningStats | None = None

    # Diagnostics
    processing_log: list[str] = field(default_factory=list)

    @property
    def elements(self) -> tuple[DocumentElement, ...]:
        return self.structure.elements

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the document
        """
        return {
            "style": self.style.key,
            "input_format": self.input_format,
            "source_path": str(Path(self.source_path)) if self.source_path else None,
            "structure": self.structure.to_dict(),
            "cleaning": self.cleaning.to_dict() if self.cleaning else None,
            "processing_log": self.processing_log,
        }
