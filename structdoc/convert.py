"""
Document structuring orchestrator.

This module provides the main entry points that turn input into a
StructuredDocument by wiring together:
- TextCleaner (whitespace/punctuation cleanup)
- LineClassifier (plain text) or MarkupStructureExtractor (HTML)
- the style registry (layout parameters handed to the renderer)

Decoding binary formats (DOCX, PDF) is left to the caller: convert HTML
produced by a DOCX converter with ``structure_markup()``, or extracted
text with ``structure_text()``.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from structdoc.config import StructureConfig
from structdoc.exceptions import StructDocError, UnsupportedFormatError
from structdoc.extractors.markup import Markup, MarkupStructureExtractor
from structdoc.extractors.text import LineClassifier
from structdoc.models import DocumentStructure, StructuredDocument
from structdoc.normalizers.text_cleaner import CleaningStats, TextCleaner
from structdoc.styles import StyleConfig, get_style, load_styles

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Document Builder
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass
class BuilderContext:
    """Context accumulated during document building."""

    config: StructureConfig
    input_format: str
    source_path: str | None = None
    processing_log: list[str] = field(default_factory=list)

    cleaning: CleaningStats | None = None


class DocumentBuilder:
    """
    Builds StructuredDocument from text or markup.

    The style is resolved once, when the builder is created, so an unknown
    style fails before any document is processed.
    """

    def __init__(self, config: StructureConfig | None = None) -> None:
        """Initialize the builder."""
        self.config = config or StructureConfig()
        self.registry = self._load_registry()
        self.style: StyleConfig = get_style(self.config.style, self.registry)

        self.cleaner = TextCleaner()
        self.line_classifier = LineClassifier()
        self.markup_extractor = MarkupStructureExtractor()

    def _load_registry(self) -> Mapping[str, StyleConfig] | None:
        if self.config.styles_file is None:
            return None
        return load_styles(self.config.styles_file)

    def build_from_text(self, text: str, source_path: str | None = None) -> StructuredDocument:
        """
        Build a StructuredDocument from plain text.

        Args:
            text: Raw newline-delimited text
            source_path: Where the text came from, for diagnostics

        Returns:
            A fully populated StructuredDocument
        """
        ctx = BuilderContext(config=self.config, input_format="text", source_path=source_path)
        ctx.processing_log.append(f"Raw text: {len(text)} chars")

        if self.config.clean_text:
            result = self.cleaner.clean(text)
            text = result.text
            ctx.cleaning = result.stats
            ctx.processing_log.append(
                f"After cleaning: {len(text)} chars, {result.stats.total_changes} changes"
            )

        structure = self.line_classifier.classify(text)
        return self._assemble(ctx, structure)

    def build_from_markup(
        self, markup: Markup, source_path: str | None = None
    ) -> StructuredDocument:
        """
        Build a StructuredDocument from HTML.

        Cleaning, when enabled, applies only to elements that need
        formatting; preserved elements pass through untouched.
        """
        ctx = BuilderContext(config=self.config, input_format="html", source_path=source_path)
        if isinstance(markup, str):
            ctx.processing_log.append(f"Raw markup: {len(markup)} chars")

        structure = self.markup_extractor.extract(markup)

        if self.config.clean_text:
            structure = self._clean_elements(ctx, structure)

        return self._assemble(ctx, structure)

    def _clean_elements(
        self, ctx: BuilderContext, structure: DocumentStructure
    ) -> DocumentStructure:
        stats = CleaningStats()
        elements = []
        for element in structure:
            if element.needs_formatting:
                result = self.cleaner.clean(element.content)
                stats += result.stats
                if result.text != element.content:
                    element = dataclasses.replace(element, content=result.text)
            elements.append(element)

        ctx.cleaning = stats
        ctx.processing_log.append(f"Cleaned formatted elements: {stats.total_changes} changes")
        return DocumentStructure(elements=tuple(elements))

    def _assemble(self, ctx: BuilderContext, structure: DocumentStructure) -> StructuredDocument:
        stats = structure.stats
        ctx.processing_log.append(
            f"Structure: {len(structure)} elements "
            f"({stats.titles} titles, {stats.subtitles} subtitles, "
            f"{stats.paragraphs} paragraphs), style={self.style.key}"
        )
        return StructuredDocument(
            structure=structure,
            style=self.style,
            input_format=ctx.input_format,
            source_path=ctx.source_path,
            cleaning=ctx.cleaning,
            processing_log=ctx.processing_log,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════════


def structure_text(text: str, config: StructureConfig | None = None) -> StructuredDocument:
    """
    Infer the structure of plain text.

    Example:
        >>> doc = structure_text("1 INTRODUÇÃO\\nEste trabalho...")
        >>> doc.structure[0].type.value
        'title'
    """
    return DocumentBuilder(config).build_from_text(text)


def structure_markup(markup: Markup, config: StructureConfig | None = None) -> StructuredDocument:
    """
    Infer the structure of an HTML document or parsed tree.

    Example:
        >>> doc = structure_markup("<h2>Método</h2><p>Texto.</p>")
        >>> doc.structure.stats.subtitles
        1
    """
    return DocumentBuilder(config).build_from_markup(markup)


def convert(
    source: str | Path,
    config: StructureConfig | None = None,
) -> StructuredDocument:
    """
    Read a text or HTML file and infer its structure.

    Args:
        source: Path to a .txt/.md or .html file
        config: Structure configuration (uses defaults if None)

    Returns:
        StructuredDocument with elements, stats and the resolved style

    Raises:
        FileNotFoundError: If source doesn't exist
        UnsupportedFormatError: If format not supported
        UnknownStyleError: If the configured style is not registered

    Example:
        >>> doc = convert("monografia.txt", StructureConfig(style="abnt"))
        >>> for element in doc.elements:
        ...     print(element.type.value, element.content[:40])
    """
    source = Path(source)
    config = config or StructureConfig()

    # Validate file exists
    if not source.exists():
        raise FileNotFoundError(f"Source file not found: {source}")

    fmt = config.input_format if config.input_format != "auto" else detect_format(source)
    content = source.read_text(encoding=config.encoding)
    logger.info("Structuring %s as %s", source, fmt)

    builder = DocumentBuilder(config)
    if fmt == "html":
        return builder.build_from_markup(content, source_path=str(source))
    return builder.build_from_text(content, source_path=str(source))


def convert_batch(
    sources: Iterable[str | Path],
    config: StructureConfig | None = None,
) -> Iterator[tuple[Path, StructuredDocument | Exception]]:
    """
    Convert multiple files, yielding results in order.

    Failures do not stop the batch; the exception is yielded in place of
    the document.

    Yields:
        (path, result) tuples where result is StructuredDocument or Exception
    """
    config = config or StructureConfig()

    for source in sources:
        source = Path(source)
        try:
            yield (source, convert(source, config))
        except (OSError, UnicodeDecodeError, StructDocError) as e:
            logger.warning("Could not structure %s: %s", source, e)
            yield (source, e)


def detect_format(path: str | Path) -> str:
    """
    Detect input format from file extension.

    Args:
        path: Path to input file

    Returns:
        Format string: "text" or "html"

    Raises:
        UnsupportedFormatError: If format cannot be detected or isn't supported
    """
    path = Path(path)

    ext = path.suffix.lower()
    ext_map = {
        ".txt": "text",
        ".text": "text",
        ".md": "text",
        ".html": "html",
        ".htm": "html",
        ".xhtml": "html",
    }

    if ext in ext_map:
        return ext_map[ext]

    raise UnsupportedFormatError(
        f"Cannot detect format for: {path}. Supported: {', '.join(supported_formats())}"
    )


def supported_formats() -> list[str]:
    """Return list of currently supported input formats."""
    return ["text", "html"]
