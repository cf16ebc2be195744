"""
Format compliance checks for rendered elements.

After a renderer has laid out a document, its computed visual properties can
be audited against the active style. Checks are tolerance bands rather than
exact comparisons, since renderers round and substitute fonts.

Issues are reported, never raised: a failed check appends one readable
message, and a result without messages is valid.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from structdoc.models import ElementType
from structdoc.styles import Alignment, StyleConfig, get_style

logger = logging.getLogger(__name__)

PX_PER_INCH = 96.0
POINTS_PER_INCH = 72.0

ACCEPTED_FONTS = ("times new roman", "times", "arial", "calibri")
NORMAL_LINE_HEIGHT = 1.2

FONT_SIZE_TOLERANCE_PX = 1.0
LINE_HEIGHT_RANGE = (1.4, 1.6)
INDENT_TOLERANCE_PX = 8.0
MARGIN_RANGE_PX = (0.0, 50.0)
MIN_BOLD_WEIGHT = 600

HEADING_TYPES = (ElementType.TITLE, ElementType.SUBTITLE)

CSS_LENGTH_PATTERN = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*(px|pt)?\s*$")


def pt_to_px(points: float) -> float:
    return points * PX_PER_INCH / POINTS_PER_INCH


def parse_css_length(value: Any) -> float | None:
    """Read a CSS length ("16px", "12pt", 16) as pixels; None if unreadable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = CSS_LENGTH_PATTERN.match(str(value))
    if not match:
        return None
    number = float(match.group(1))
    return pt_to_px(number) if match.group(2) == "pt" else number


@dataclass(frozen=True)
class ObservedFormat:
    """
    Computed visual properties of one rendered element.

    Values mirror computed CSS: lengths as "16px" strings or pixel numbers,
    ``line_height`` may be "normal", ``font_weight`` "bold" or "700".
    """

    font_family: str | None = None
    font_size: str | float | None = None
    line_height: str | float | None = None
    text_align: str | None = None
    text_indent: str | float | None = None
    font_weight: str | int | None = None
    margin_top: str | float | None = None
    margin_bottom: str | float | None = None

    @classmethod
    def from_css(cls, properties: Mapping[str, Any]) -> ObservedFormat:
        """Build from CSS property names ("font-size" or "fontSize")."""
        kwargs = {}
        for name, value in properties.items():
            key = re.sub(r"(?<!^)(?=[A-Z])", "_", name).replace("-", "_").lower()
            if key in cls.__dataclass_fields__:
                kwargs[key] = value
        return cls(**kwargs)


@dataclass
class FormatValidation:
    """Outcome of a compliance check."""

    issues: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues

    def to_dict(self) -> dict[str, Any]:
        return {"is_valid": self.is_valid, "issues": list(self.issues)}


class FormatComplianceChecker:
    """
    Audits rendered elements against a style's nominal values.

    Checks, in order:
    - font family is an accepted serif/sans substitute
    - font size within FONT_SIZE_TOLERANCE_PX of the style's base size
    - paragraphs: line-height ratio in LINE_HEIGHT_RANGE, justified
      alignment, first-line indent within INDENT_TOLERANCE_PX of nominal
    - titles and subtitles: bold weight

    Example:
        >>> checker = FormatComplianceChecker()
        >>> observed = ObservedFormat(font_family="Arial", font_size="16px",
        ...                           font_weight="700")
        >>> checker.check(observed, ElementType.TITLE).is_valid
        True
    """

    def __init__(self, style: StyleConfig | None = None):
        """Initialize the checker.

        Args:
            style: Style supplying nominal values (default style if None).
        """
        self.style = style or get_style()

    @property
    def nominal_font_size_px(self) -> float:
        return pt_to_px(self.style.font_size)

    @property
    def nominal_indent_px(self) -> float:
        return pt_to_px(self.style.paragraph.first_line_indent)

    def check(
        self, observed: ObservedFormat | None, kind: ElementType | str
    ) -> FormatValidation:
        """Check one rendered element.

        Args:
            observed: Computed properties; None when the element is missing.
            kind: Element type (or its string value) the element renders.

        Returns:
            FormatValidation listing every failed check.
        """
        if observed is None:
            return FormatValidation(issues=["Element not found"])

        kind = _coerce_kind(kind)
        issues: list[str] = []

        self._check_font(observed, issues)
        font_size = self._check_font_size(observed, issues)

        if kind == ElementType.PARAGRAPH:
            self._check_line_height(observed, font_size, issues)
            self._check_alignment(observed, issues)
            self._check_indent(observed, issues)

        if kind in HEADING_TYPES:
            self._check_weight(observed, issues)

        if issues:
            logger.debug("%s failed %d format checks: %s", kind.value, len(issues), issues)
        return FormatValidation(issues=issues)

    def check_margins(self, observed: ObservedFormat | None) -> FormatValidation:
        """Check that top and bottom margins stay within MARGIN_RANGE_PX."""
        if observed is None:
            return FormatValidation(issues=["Element not found"])

        issues = []
        low, high = MARGIN_RANGE_PX
        for label, value in (("Top", observed.margin_top), ("Bottom", observed.margin_bottom)):
            margin = parse_css_length(value)
            if margin is None or not low <= margin <= high:
                issues.append(f"{label} margin needs adjustment ({value!r})")
        return FormatValidation(issues=issues)

    def _check_font(self, observed: ObservedFormat, issues: list[str]) -> None:
        family = str(observed.font_family or "").lower()
        if not any(font in family for font in ACCEPTED_FONTS):
            issues.append(
                f"Font {observed.font_family!r} is not Times New Roman, Arial or a substitute"
            )

    def _check_font_size(self, observed: ObservedFormat, issues: list[str]) -> float | None:
        size = parse_css_length(observed.font_size)
        nominal = self.nominal_font_size_px
        if size is None or not abs(size - nominal) <= FONT_SIZE_TOLERANCE_PX:
            issues.append(
                f"Font size {observed.font_size!r} is not {self.style.font_size:g}pt"
            )
        return size

    def _check_line_height(
        self, observed: ObservedFormat, font_size: float | None, issues: list[str]
    ) -> None:
        low, high = LINE_HEIGHT_RANGE
        if isinstance(observed.line_height, str) and observed.line_height.strip() == "normal":
            ratio: float | None = NORMAL_LINE_HEIGHT
        else:
            height = parse_css_length(observed.line_height)
            ratio = height / font_size if height is not None and font_size else None

        if ratio is None or not low <= ratio <= high:
            issues.append(f"Line spacing {observed.line_height!r} is not 1.5")

    def _check_alignment(self, observed: ObservedFormat, issues: list[str]) -> None:
        align = str(observed.text_align or "").strip().lower()
        if align == "justify":
            align = Alignment.JUSTIFIED.value
        if align != Alignment.JUSTIFIED.value:
            issues.append(f"Text is not justified ({observed.text_align!r})")

    def _check_indent(self, observed: ObservedFormat, issues: list[str]) -> None:
        indent = parse_css_length(observed.text_indent)
        nominal = self.nominal_indent_px
        if indent is None or not abs(indent - nominal) <= INDENT_TOLERANCE_PX:
            issues.append(
                f"First-line indent {observed.text_indent!r} is not "
                f"{self.style.paragraph.first_line_indent:g}pt"
            )

    def _check_weight(self, observed: ObservedFormat, issues: list[str]) -> None:
        weight = str(observed.font_weight or "").strip().lower()
        if weight in ("bold", "bolder"):
            return
        try:
            if int(float(weight)) >= MIN_BOLD_WEIGHT:
                return
        except (ValueError, OverflowError):
            pass
        issues.append(f"Heading is not bold (weight {observed.font_weight!r})")


def _coerce_kind(kind: ElementType | str) -> ElementType:
    if isinstance(kind, ElementType):
        return kind
    try:
        return ElementType(str(kind).lower())
    except ValueError:
        return ElementType.UNKNOWN


def validate_format(
    observed: ObservedFormat | None,
    kind: ElementType | str,
    style: StyleConfig | None = None,
) -> FormatValidation:
    """Check one rendered element against a style (default style if None)."""
    return FormatComplianceChecker(style).check(observed, kind)
