"""Layout styles for rendering a document structure.

A style is a named bundle of layout parameters: base font, size, line
spacing, and per-kind (title, subtitle, paragraph) alignment, emphasis,
spacing and indentation. Styles are data only; a renderer must reproduce
every field of the active style exactly.

All lengths are in points. Indents declared in centimetres or inches are
converted once, here, with ``cm()`` and ``inches()``.

Standard styles:
- ABNT (default): Brazilian academic norm, 1.5 spacing, justified text
- APA: double spacing, centered titles, left-aligned text
- Chicago: double spacing, centered titles, justified text

Extra styles can be read from YAML with ``load_styles()``; that returns a
new registry and never changes the standard one.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from structdoc.exceptions import ConfigurationError, UnknownStyleError

logger = logging.getLogger(__name__)

POINTS_PER_INCH = 72.0
CM_PER_INCH = 2.54


def inches(value: float) -> float:
    """Inches to points."""
    return round(value * POINTS_PER_INCH, 2)


def cm(value: float) -> float:
    """Centimetres to points."""
    return round(value / CM_PER_INCH * POINTS_PER_INCH, 2)


class Alignment(Enum):
    """Horizontal text alignment."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFIED = "justified"


@dataclass(frozen=True)
class ElementStyle:
    """Layout parameters for one element kind.

    Attributes:
        alignment: Horizontal alignment.
        bold: Render in bold.
        uppercase: Transform text to upper case.
        spacing_before: Space above the block, in points.
        spacing_after: Space below the block, in points.
        left_indent: Indent of the whole block, in points.
        first_line_indent: Extra indent of the first line, in points.
    """

    alignment: Alignment = Alignment.LEFT
    bold: bool = False
    uppercase: bool = False
    spacing_before: float = 0.0
    spacing_after: float = 0.0
    left_indent: float = 0.0
    first_line_indent: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["alignment"] = self.alignment.value
        return data


@dataclass(frozen=True)
class StyleConfig:
    """Complete layout style.

    Attributes:
        key: Registry identifier (e.g., "abnt").
        name: Display name.
        description: Human-readable description.
        font_family: Base font family.
        font_size: Base font size, in points.
        line_spacing: Line spacing as a multiple of single spacing.
        title: Parameters for level-1 headings.
        subtitle: Parameters for level-2/3 headings.
        paragraph: Parameters for body paragraphs.
    """

    key: str
    name: str
    description: str
    font_family: str = "Times New Roman"
    font_size: float = 12.0
    line_spacing: float = 1.0
    title: ElementStyle = field(default_factory=ElementStyle)
    subtitle: ElementStyle = field(default_factory=ElementStyle)
    paragraph: ElementStyle = field(default_factory=ElementStyle)

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.font_size <= 0:
            raise ConfigurationError(
                f"font_size must be positive, got {self.font_size} (style {self.key!r})"
            )
        if self.line_spacing <= 0:
            raise ConfigurationError(
                f"line_spacing must be positive, got {self.line_spacing} (style {self.key!r})"
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "description": self.description,
            "font_family": self.font_family,
            "font_size": self.font_size,
            "line_spacing": self.line_spacing,
            "title": self.title.to_dict(),
            "subtitle": self.subtitle.to_dict(),
            "paragraph": self.paragraph.to_dict(),
        }


# Standard styles

ABNT_STYLE = StyleConfig(
    key="abnt",
    name="ABNT",
    description="Associação Brasileira de Normas Técnicas (NBR 14724)",
    font_family="Times New Roman",
    font_size=12.0,
    line_spacing=1.5,
    title=ElementStyle(
        alignment=Alignment.LEFT,
        bold=True,
        uppercase=True,
        spacing_before=18.0,
        spacing_after=12.0,
    ),
    subtitle=ElementStyle(
        alignment=Alignment.LEFT,
        bold=True,
        spacing_before=12.0,
        spacing_after=6.0,
    ),
    paragraph=ElementStyle(
        alignment=Alignment.JUSTIFIED,
        first_line_indent=cm(1.25),
    ),
)

APA_STYLE = StyleConfig(
    key="apa",
    name="APA",
    description="American Psychological Association Style",
    font_family="Times New Roman",
    font_size=12.0,
    line_spacing=2.0,
    title=ElementStyle(
        alignment=Alignment.CENTER,
        bold=True,
        spacing_after=12.0,
    ),
    subtitle=ElementStyle(
        alignment=Alignment.LEFT,
        bold=True,
        spacing_before=12.0,
    ),
    paragraph=ElementStyle(
        alignment=Alignment.LEFT,
        first_line_indent=inches(0.5),
    ),
)

CHICAGO_STYLE = StyleConfig(
    key="chicago",
    name="Chicago",
    description="The Chicago Manual of Style",
    font_family="Times New Roman",
    font_size=12.0,
    line_spacing=2.0,
    title=ElementStyle(
        alignment=Alignment.CENTER,
        bold=True,
        spacing_after=12.0,
    ),
    subtitle=ElementStyle(
        alignment=Alignment.LEFT,
        bold=True,
        spacing_before=12.0,
        spacing_after=6.0,
    ),
    paragraph=ElementStyle(
        alignment=Alignment.JUSTIFIED,
        spacing_after=12.0,
        first_line_indent=inches(0.5),
    ),
)

DEFAULT_STYLE = "abnt"

# Style lookup table
STYLES: Mapping[str, StyleConfig] = MappingProxyType(
    {
        "abnt": ABNT_STYLE,
        "apa": APA_STYLE,
        "chicago": CHICAGO_STYLE,
    }
)


def available_styles(registry: Mapping[str, StyleConfig] | None = None) -> list[str]:
    """Identifiers of all registered styles."""
    return sorted(registry if registry is not None else STYLES)


def get_style(
    name: str | None = None,
    registry: Mapping[str, StyleConfig] | None = None,
) -> StyleConfig:
    """Look up a style by identifier.

    Args:
        name: Style identifier; None selects DEFAULT_STYLE.
        registry: Registry to search (defaults to the standard STYLES).

    Returns:
        The registered StyleConfig.

    Raises:
        UnknownStyleError: If the identifier is not registered.
    """
    registry = registry if registry is not None else STYLES
    key = (name or DEFAULT_STYLE).lower()
    try:
        return registry[key]
    except KeyError:
        raise UnknownStyleError(
            f"Unknown style {name!r}. Available: {', '.join(available_styles(registry))}"
        ) from None


# ═══════════════════════════════════════════════════════════════════════════════
# YAML style files
# ═══════════════════════════════════════════════════════════════════════════════

LENGTH_PATTERN = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*(pt|cm|mm|in)?\s*$")
LENGTH_FIELDS = ("spacing_before", "spacing_after", "left_indent", "first_line_indent")
ELEMENT_KINDS = ("title", "subtitle", "paragraph")


def parse_length(value: Any) -> float:
    """Read a length given as points (number) or a string with a unit.

    >>> parse_length("1.25cm")
    35.43
    >>> parse_length(12)
    12.0
    """
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid length: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)

    match = LENGTH_PATTERN.match(str(value))
    if not match:
        raise ConfigurationError(f"Invalid length: {value!r}")

    number = float(match.group(1))
    unit = match.group(2) or "pt"
    if unit == "cm":
        return cm(number)
    if unit == "mm":
        return cm(number / 10)
    if unit == "in":
        return inches(number)
    return number


def _element_style_from_dict(data: Mapping[str, Any], where: str) -> ElementStyle:
    known = {f.name for f in fields(ElementStyle)}
    unknown = set(data) - known
    if unknown:
        raise ConfigurationError(f"Unknown fields in {where}: {', '.join(sorted(unknown))}")

    kwargs: dict[str, Any] = {}
    for name, value in data.items():
        if name == "alignment":
            try:
                kwargs[name] = Alignment(str(value).lower())
            except ValueError:
                raise ConfigurationError(
                    f"Invalid alignment {value!r} in {where}; "
                    f"expected one of {[a.value for a in Alignment]}"
                ) from None
        elif name in LENGTH_FIELDS:
            kwargs[name] = parse_length(value)
        else:
            kwargs[name] = bool(value)
    return ElementStyle(**kwargs)


def style_from_dict(key: str, data: Mapping[str, Any]) -> StyleConfig:
    """Build a StyleConfig from a plain mapping (one YAML style entry)."""
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Style {key!r} must be a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(StyleConfig)} - {"key"}
    unknown = set(data) - known
    if unknown:
        raise ConfigurationError(
            f"Unknown fields in style {key!r}: {', '.join(sorted(unknown))}"
        )

    kwargs: dict[str, Any] = {"key": key, "name": data.get("name", key), "description": ""}
    for name, value in data.items():
        if name in ELEMENT_KINDS:
            kwargs[name] = _element_style_from_dict(value or {}, f"{key}.{name}")
        elif name in ("font_size", "line_spacing"):
            try:
                kwargs[name] = float(value)
            except (TypeError, ValueError):
                raise ConfigurationError(f"Invalid {name} in style {key!r}: {value!r}") from None
        else:
            kwargs[name] = str(value)
    return StyleConfig(**kwargs)


def load_styles(
    path: str | Path,
    base: Mapping[str, StyleConfig] | None = None,
) -> Mapping[str, StyleConfig]:
    """Load style definitions from a YAML file.

    The file holds a top-level ``styles`` mapping of identifier to fields::

        styles:
          mla:
            name: MLA
            line_spacing: 2.0
            paragraph:
              alignment: left
              first_line_indent: 0.5in

    Args:
        path: YAML file to read.
        base: Registry to extend (defaults to the standard STYLES).

    Returns:
        New read-only registry with base and file styles; file styles
        replace base styles of the same identifier.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigurationError: If the file content is not a valid style table.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Cannot parse style file {path}: {e}") from e

    styles_data = data.get("styles") if isinstance(data, dict) else None
    if not isinstance(styles_data, dict):
        raise ConfigurationError(f"Style file {path} must contain a 'styles' mapping")

    registry = dict(base if base is not None else STYLES)
    for key, style_data in styles_data.items():
        key = str(key).lower()
        registry[key] = style_from_dict(key, style_data)
        logger.debug("Loaded style %r from %s", key, path)

    return MappingProxyType(registry)
