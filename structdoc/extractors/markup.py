"""
Structure extraction from rich-text markup.

Input is HTML as produced by word-processor converters (a string, or a tree
already parsed with BeautifulSoup). The tree is walked depth-first and each
node is dispatched exactly once on its tag name:

- table / img / blockquote / ul, ol / pre, code: emitted whole and
  preserved as-is; the walk does not descend into them
- p, h1-h3: classified as Title/Subtitle/Paragraph, or, when they hold no
  text, descended into (empty wrappers around images and tables)
- bare text outside any recognized tag: a Paragraph
- anything else: a container, descended into without emitting

Tables get special care. Converters often wrap a real table inside the
first cell of a layout table; when that happens the outer table is dropped
and the inner one extracted in its place. Cells are only ever read from
their own row, never from a table nested elsewhere in the row.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PageElement, PreformattedString

from structdoc.extractors.headings import heading_element, is_title_line, title_level
from structdoc.models import (
    IMAGE_PLACEHOLDER,
    Code,
    DocumentElement,
    DocumentStructure,
    Image,
    ListBlock,
    ListType,
    Paragraph,
    Quote,
    Subtitle,
    Table,
    Title,
)

logger = logging.getLogger(__name__)

CELL_TAGS = ("td", "th")
TABLE_SECTION_TAGS = ("thead", "tbody", "tfoot")
LIST_TAGS = ("ul", "ol")
CODE_TAGS = ("pre", "code")
TEXT_BLOCK_TAGS = ("p", "h1", "h2", "h3")

# Tags whose contents are never document text
SKIPPED_TAGS = frozenset({"script", "style", "noscript", "template", "head"})

Markup = str | Tag


def parse_markup(markup: Markup) -> Tag:
    """Parse an HTML string; parsed trees are returned unchanged."""
    if isinstance(markup, Tag):
        return markup
    return BeautifulSoup(markup, "html.parser")


def _element_children(node: Tag, names: tuple[str, ...] | None = None) -> list[Tag]:
    """Direct Tag children, optionally filtered by tag name."""
    return [
        child
        for child in node.children
        if isinstance(child, Tag) and (names is None or child.name in names)
    ]


def _contains(node: PageElement, target: Tag) -> bool:
    """True when target is node or lies somewhere below it."""
    if node is target:
        return True
    return any(parent is node for parent in target.parents)


# ═══════════════════════════════════════════════════════════════════════════════
# Tables
# ═══════════════════════════════════════════════════════════════════════════════


def resolve_table(table: Tag) -> Tag:
    """
    Follow layout wrappers down to the table that holds the data.

    When the first cell of a table contains a nested table, the nested
    table replaces the outer one (repeatedly, for wrappers of wrappers).
    Only the first cell is inspected.
    """
    while True:
        first_cell = table.find(list(CELL_TAGS))
        nested = first_cell.find("table") if first_cell is not None else None
        if nested is None:
            return table
        logger.debug("Nested table in first cell, extracting inner table")
        table = nested


def cell_text(cell: Tag) -> str:
    """
    Text of a single cell.

    A cell holding a nested table contributes only the text of its other
    children; the nested table's text is dropped.
    """
    nested = cell.find("table")
    if nested is None:
        return cell.get_text().strip()

    parts = []
    for child in cell.children:
        if isinstance(child, PreformattedString):
            continue
        if isinstance(child, Tag) and (child.name == "table" or _contains(child, nested)):
            continue
        text = child.get_text().strip() if isinstance(child, Tag) else child.strip()
        if text:
            parts.append(text)
    return " ".join(parts)


def extract_table_rows(table: Tag) -> list[list[str]]:
    """
    Ragged cell matrix of a table (already resolved by ``resolve_table``).

    Rows are read in document order from the table's direct tr children and
    from the tr children of its thead/tbody/tfoot sections, so bare rows
    next to a section are kept. Rows without cells are dropped.
    """
    row_nodes: list[Tag] = []
    for child in _element_children(table):
        if child.name == "tr":
            row_nodes.append(child)
        elif child.name in TABLE_SECTION_TAGS:
            row_nodes.extend(_element_children(child, ("tr",)))

    rows = []
    for row in row_nodes:
        cells = [cell_text(cell) for cell in _element_children(row, CELL_TAGS)]
        if cells:
            rows.append(cells)
    return rows


def _table_as_text(rows: list[list[str]]) -> str:
    return "\n".join(" | ".join(row) for row in rows)


# ═══════════════════════════════════════════════════════════════════════════════
# Extractor
# ═══════════════════════════════════════════════════════════════════════════════


class MarkupStructureExtractor:
    """
    Walks a markup tree and emits document elements in order.

    Usage:
        extractor = MarkupStructureExtractor()
        structure = extractor.extract("<h1>Título</h1><p>Texto.</p>")
        print(structure.stats.titles)  # 1

    Each handler appends what it emits and returns; returning means the
    node was handled and its children are not visited.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[Tag, list[DocumentElement]], None]] = {
            "table": self._handle_table,
            "img": self._handle_image,
            "blockquote": self._handle_quote,
        }
        self._handlers.update({name: self._handle_list for name in LIST_TAGS})
        self._handlers.update({name: self._handle_code for name in CODE_TAGS})
        self._handlers.update({name: self._handle_text_block for name in TEXT_BLOCK_TAGS})

    def extract(self, markup: Markup) -> DocumentStructure:
        """
        Build the element structure for a markup document.

        Args:
            markup: HTML string, BeautifulSoup document, or a single Tag

        Returns:
            DocumentStructure in document order
        """
        tree = parse_markup(markup)
        elements: list[DocumentElement] = []

        if isinstance(tree, BeautifulSoup):
            root = tree.find("body") or tree
            for child in list(root.children):
                self._walk(child, elements)
        else:
            self._walk(tree, elements)

        structure = DocumentStructure(elements=tuple(elements))
        logger.debug(
            "Extracted %d elements from markup (%s)", len(structure), structure.stats.to_dict()
        )
        return structure

    def _walk(self, node: PageElement, elements: list[DocumentElement]) -> None:
        # Comments, doctypes, CDATA and processing instructions are not text
        if isinstance(node, PreformattedString):
            return

        if isinstance(node, NavigableString):
            text = node.strip()
            if text:
                elements.append(Paragraph(content=text))
            return

        if not isinstance(node, Tag) or node.name in SKIPPED_TAGS:
            return

        handler = self._handlers.get(node.name)
        if handler is not None:
            handler(node, elements)
            return

        self._walk_children(node, elements)

    def _walk_children(self, node: Tag, elements: list[DocumentElement]) -> None:
        for child in list(node.children):
            self._walk(child, elements)

    def _handle_table(self, node: Tag, elements: list[DocumentElement]) -> None:
        table = resolve_table(node)
        rows = extract_table_rows(table)
        if not rows:
            logger.debug("Table without rows, omitting")
            return

        logger.debug("Table detected: %d rows, %d columns", len(rows), len(rows[0]))
        elements.append(
            Table(content=_table_as_text(rows), rows=rows, source_markup=str(table))
        )

    def _handle_image(self, node: Tag, elements: list[DocumentElement]) -> None:
        alt = node.get("alt")
        src = node.get("src")
        elements.append(
            Image(
                content=alt if isinstance(alt, str) and alt.strip() else IMAGE_PLACEHOLDER,
                src=src if isinstance(src, str) else None,
                source_markup=str(node),
            )
        )

    def _handle_quote(self, node: Tag, elements: list[DocumentElement]) -> None:
        elements.append(Quote(content=node.get_text().strip(), source_markup=str(node)))

    def _handle_list(self, node: Tag, elements: list[DocumentElement]) -> None:
        list_type = ListType.ORDERED if node.name == "ol" else ListType.UNORDERED
        elements.append(
            ListBlock(
                content=node.get_text().strip(),
                list_type=list_type,
                source_markup=str(node),
            )
        )

    def _handle_code(self, node: Tag, elements: list[DocumentElement]) -> None:
        elements.append(Code(content=node.get_text().strip(), source_markup=str(node)))

    def _handle_text_block(self, node: Tag, elements: list[DocumentElement]) -> None:
        text = node.get_text().strip()
        if not text:
            self._walk_children(node, elements)
            return

        if node.name == "h1":
            element: DocumentElement = Title(content=text)
        elif node.name == "h2":
            element = Subtitle(content=text, level=2)
        elif is_title_line(text):
            element = heading_element(text, title_level(text))
        else:
            element = Paragraph(content=text)

        logger.debug("Classified <%s> as %s: %.50s", node.name, element.type.value, text)
        elements.append(element)


def analyze_markup(markup: Markup) -> DocumentStructure:
    """Extract structure from markup with the default extractor."""
    return MarkupStructureExtractor().extract(markup)
