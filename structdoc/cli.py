"""
Command-line interface for structdoc.

Usage:
    structdoc convert <file> [--style NAME] [--styles-file YAML] [--format json|summary]
    structdoc styles [--styles-file YAML]

Examples:
    # Print the element structure of a text file as JSON
    structdoc convert monografia.txt --style abnt

    # One line per element, for a quick look
    structdoc convert relatorio.html --format summary

    # List built-in and custom styles
    structdoc styles --styles-file minhas_normas.yaml
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from structdoc.config import StructureConfig
from structdoc.convert import convert
from structdoc.exceptions import StructDocError
from structdoc.models import StructuredDocument
from structdoc.styles import STYLES, available_styles, get_style, load_styles

logger = logging.getLogger("structdoc")

SUMMARY_WIDTH = 70


def setup_argparser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="structdoc",
        description="Infer titles, paragraphs, tables and lists from loosely formatted documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_parser = subparsers.add_parser("convert", help="Structure a text or HTML file")
    convert_parser.add_argument("input", type=Path, help="Input .txt/.md or .html file")
    convert_parser.add_argument(
        "--style", "-s",
        default=None,
        help=f"Layout style (default: {get_style().key})",
    )
    convert_parser.add_argument(
        "--styles-file",
        type=Path,
        default=None,
        help="YAML file with additional styles",
    )
    convert_parser.add_argument(
        "--input-format",
        choices=["auto", "text", "html"],
        default="auto",
        help="Override format detection (default: auto)",
    )
    convert_parser.add_argument(
        "--no-clean",
        action="store_true",
        help="Skip whitespace and punctuation cleanup",
    )
    convert_parser.add_argument(
        "--format", "-f",
        choices=["json", "summary"],
        default="json",
        help="Output format (default: json)",
    )

    styles_parser = subparsers.add_parser("styles", help="List registered styles")
    styles_parser.add_argument(
        "--styles-file",
        type=Path,
        default=None,
        help="YAML file with additional styles",
    )

    return parser


def format_summary(doc: StructuredDocument) -> str:
    """One line per element, then the stats."""
    lines = []
    for element in doc.elements:
        label = element.type.value
        if element.level is not None:
            label = f"{label}:{element.level}"
        preview = " ".join(element.content.split())
        if len(preview) > SUMMARY_WIDTH:
            preview = preview[: SUMMARY_WIDTH - 3] + "..."
        lines.append(f"{label:<12} {preview}")

    stats = doc.structure.stats
    lines.append("")
    lines.append(
        f"{len(doc.elements)} elements: {stats.titles} titles, "
        f"{stats.subtitles} subtitles, {stats.paragraphs} paragraphs "
        f"(style: {doc.style.name})"
    )
    return "\n".join(lines)


def run_convert(args: argparse.Namespace) -> int:
    config = StructureConfig(
        style=args.style or get_style().key,
        styles_file=args.styles_file,
        clean_text=not args.no_clean,
        input_format=args.input_format,
    )
    doc = convert(args.input, config)

    if args.format == "summary":
        print(format_summary(doc))
    else:
        print(json.dumps(doc.to_dict(), ensure_ascii=False, indent=2))
    return 0


def run_styles(args: argparse.Namespace) -> int:
    registry = load_styles(args.styles_file) if args.styles_file else STYLES
    default = get_style().key
    for key in available_styles(registry):
        style = registry[key]
        marker = "*" if key == default else " "
        print(
            f"{marker} {key:<10} {style.name:<10} {style.font_family} {style.font_size:g}pt, "
            f"line spacing {style.line_spacing:g} - {style.description}"
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = setup_argparser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        if args.command == "styles":
            return run_styles(args)
        return run_convert(args)
    except (StructDocError, FileNotFoundError, UnicodeDecodeError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
