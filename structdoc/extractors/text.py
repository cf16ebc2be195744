"""
Line classifier for plain-text documents.

Walks the text line by line. Heading lines (see ``headings.is_title_line``)
become Title/Subtitle elements; runs of other lines are buffered and
flushed as one Paragraph on a blank line, before a heading, and at the end
of input.

When a whole document yields no heading at all, the heuristics are
assumed not to apply and the text is re-segmented into paragraphs by
blank lines instead.
"""

from __future__ import annotations

import logging
import re

from structdoc.extractors.headings import heading_element, is_title_line, title_level
from structdoc.models import DocumentElement, DocumentStructure, ElementType, Paragraph

logger = logging.getLogger(__name__)

BLANK_LINE_SPLIT = re.compile(r"\n\n+")


class LineClassifier:
    """
    Classifies plain-text lines into headings and paragraphs.

    Usage:
        classifier = LineClassifier()
        structure = classifier.classify("1 INTRODUÇÃO\\nTexto do trabalho.")
        for element in structure:
            print(element.type.value, element.level, element.content)
    """

    def classify(self, text: str) -> DocumentStructure:
        """
        Build the element structure for a plain-text document.

        Args:
            text: Newline-delimited text, ideally already cleaned

        Returns:
            DocumentStructure; empty when the text holds no content
        """
        elements: list[DocumentElement] = []
        buffer: list[str] = []

        def flush_paragraph() -> None:
            if buffer:
                content = " ".join(buffer).strip()
                if content:
                    elements.append(Paragraph(content=content))
                buffer.clear()

        for raw_line in text.split("\n"):
            line = raw_line.strip()

            if not line:
                flush_paragraph()
                continue

            if is_title_line(line):
                flush_paragraph()
                elements.append(heading_element(line, title_level(line)))
            else:
                buffer.append(line)

        flush_paragraph()

        if elements and not any(
            e.type in (ElementType.TITLE, ElementType.SUBTITLE) for e in elements
        ):
            logger.debug("No headings detected, re-segmenting %d elements", len(elements))
            return self._paragraphs_only(elements)

        return DocumentStructure(elements=tuple(elements))

    def _paragraphs_only(self, elements: list[DocumentElement]) -> DocumentStructure:
        """Re-split all element text into blank-line-delimited paragraphs."""
        all_text = "\n\n".join(e.content for e in elements)
        blocks = [block.strip() for block in BLANK_LINE_SPLIT.split(all_text)]
        return DocumentStructure(
            elements=tuple(Paragraph(content=block) for block in blocks if block)
        )


def analyze_text(text: str) -> DocumentStructure:
    """Classify a plain-text document with the default classifier."""
    return LineClassifier().classify(text)
