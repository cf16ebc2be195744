#!/usr/bin/env python3
"""
Basic structdoc Usage Example

This example demonstrates the core workflow:
1. Structure a plain-text file
2. Inspect elements and stats
3. Structure HTML exported from a word processor
4. Switch and extend layout styles
5. Audit a rendered element against the style
"""

import json

from structdoc import (
    ElementType,
    ObservedFormat,
    StructureConfig,
    convert,
    get_style,
    load_styles,
    structure_markup,
    validate_format,
)


def main():
    # ─────────────────────────────────────────────────────────────────────────
    # 1. Basic Conversion
    # ─────────────────────────────────────────────────────────────────────────

    # Structure a text file with the default (ABNT) style
    doc = convert("path/to/monografia.txt")

    print(f"Structured: {doc.source_path}")
    print(f"  Elements: {len(doc.elements)}")
    print(f"  Cleanup changes: {doc.cleaning.total_changes}")

    # ─────────────────────────────────────────────────────────────────────────
    # 2. Inspect Elements
    # ─────────────────────────────────────────────────────────────────────────

    for element in doc.elements:
        marker = f"h{element.level}" if element.level else element.type.value
        print(f"  [{marker}] {element.content[:60]}")

    stats = doc.structure.stats
    print(f"Titles: {stats.titles}, subtitles: {stats.subtitles}, paragraphs: {stats.paragraphs}")

    # Only the headings, in document order
    for title in doc.structure.of_type(ElementType.TITLE):
        print(f"  Chapter: {title.content}")

    # ─────────────────────────────────────────────────────────────────────────
    # 3. Structure HTML
    # ─────────────────────────────────────────────────────────────────────────

    html = """
    <h1>Relatório</h1>
    <p>1 INTRODUÇÃO</p>
    <p>Texto   do relatório .</p>
    <table><tr><td><table><tr><td>Ano</td><td>Total</td></tr></table></td></tr></table>
    """
    doc = structure_markup(html)

    for element in doc.elements:
        if element.preserve_as_is:
            print(f"  Preserved {element.type.value}: {element.metadata}")
        else:
            print(f"  Formatted {element.type.value}: {element.content}")

    # ─────────────────────────────────────────────────────────────────────────
    # 4. Styles
    # ─────────────────────────────────────────────────────────────────────────

    config = StructureConfig(style="apa")
    doc = convert("path/to/monografia.txt", config)
    print(f"Paragraph alignment: {doc.style.paragraph.alignment.value}")

    # Add styles from a YAML file
    registry = load_styles("path/to/minhas_normas.yaml")
    print(f"Available: {sorted(registry)}")

    # ─────────────────────────────────────────────────────────────────────────
    # 5. Format Compliance
    # ─────────────────────────────────────────────────────────────────────────

    observed = ObservedFormat.from_css(
        {
            "font-family": "Times New Roman",
            "font-size": "16px",
            "line-height": "24px",
            "text-align": "left",
            "text-indent": "47px",
        }
    )
    result = validate_format(observed, ElementType.PARAGRAPH, get_style("abnt"))
    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
