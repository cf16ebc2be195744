"""
Tests for format compliance checks on rendered elements.
"""

import pytest

from structdoc.compliance import (
    FormatComplianceChecker,
    ObservedFormat,
    parse_css_length,
    pt_to_px,
    validate_format,
)
from structdoc.models import ElementType
from structdoc.styles import get_style


def abnt_paragraph(**overrides) -> ObservedFormat:
    """A paragraph rendered exactly as ABNT expects, with overrides."""
    values = {
        "font_family": '"Times New Roman", serif',
        "font_size": "16px",
        "line_height": "24px",
        "text_align": "justify",
        "text_indent": "47px",
    }
    values.update(overrides)
    return ObservedFormat(**values)


class TestCssLengths:
    """Tests for CSS length parsing."""

    def test_pt_to_px(self):
        """12pt is 16px."""
        assert pt_to_px(12) == 16.0

    @pytest.mark.parametrize(
        "value,pixels",
        [("16px", 16.0), ("12pt", 16.0), (" 20 px ", 20.0), (18, 18.0), ("1.5", 1.5)],
    )
    def test_parse(self, value, pixels):
        """Pixel and point lengths are read as pixels."""
        assert parse_css_length(value) == pixels

    @pytest.mark.parametrize("value", [None, "normal", "2em", "", True])
    def test_unreadable(self, value):
        """Unreadable lengths give None."""
        assert parse_css_length(value) is None


class TestParagraphChecks:
    """Tests for paragraph compliance."""

    def test_compliant_paragraph(self):
        """A correctly rendered paragraph has no issues."""
        result = FormatComplianceChecker().check(abnt_paragraph(), ElementType.PARAGRAPH)
        assert result.is_valid
        assert result.issues == []

    def test_wrong_font(self):
        """Unaccepted fonts are reported."""
        result = validate_format(abnt_paragraph(font_family="Comic Sans MS"), "paragraph")
        assert len(result.issues) == 1
        assert result.issues[0].startswith("Font 'Comic Sans MS'")

    @pytest.mark.parametrize("family", ["Arial", "Calibri, sans-serif", "Times", "TIMES NEW ROMAN"])
    def test_accepted_fonts(self, family):
        """Accepted fonts match case-insensitively inside the family list."""
        assert validate_format(abnt_paragraph(font_family=family), "paragraph").is_valid

    @pytest.mark.parametrize("size,valid", [("15px", True), ("17px", True), ("20px", False)])
    def test_font_size_tolerance(self, size, valid):
        """Font size passes within 1px of 12pt."""
        line_height = f"{float(size[:-2]) * 1.5}px"
        observed = abnt_paragraph(font_size=size, line_height=line_height)
        assert validate_format(observed, ElementType.PARAGRAPH).is_valid is valid

    def test_line_height_normal(self):
        """'normal' line height reads as 1.2 and fails."""
        result = validate_format(abnt_paragraph(line_height="normal"), ElementType.PARAGRAPH)
        assert result.issues == ["Line spacing 'normal' is not 1.5"]

    @pytest.mark.parametrize(
        "height,valid", [("23px", True), ("25px", True), ("32px", False), ("20px", False)]
    )
    def test_line_height_band(self, height, valid):
        """Line height must be 1.4 to 1.6 times the font size."""
        result = validate_format(abnt_paragraph(line_height=height), ElementType.PARAGRAPH)
        assert result.is_valid is valid

    @pytest.mark.parametrize("align", ["justify", "justified", "JUSTIFY"])
    def test_justified_spellings(self, align):
        """CSS and style spellings of justified both pass."""
        assert validate_format(abnt_paragraph(text_align=align), "paragraph").is_valid

    def test_not_justified(self):
        """Other alignments are reported."""
        result = validate_format(abnt_paragraph(text_align="left"), "paragraph")
        assert result.issues == ["Text is not justified ('left')"]

    def test_indent_out_of_band(self):
        """Indent must be near the style's first-line indent."""
        result = validate_format(abnt_paragraph(text_indent="20px"), "paragraph")
        assert result.issues == ["First-line indent '20px' is not 35.43pt"]

    def test_indent_follows_style(self):
        """APA's half-inch indent is 48px."""
        apa = get_style("apa")
        assert validate_format(abnt_paragraph(text_indent="48px"), "paragraph", apa).is_valid
        assert validate_format(abnt_paragraph(text_indent="40px"), "paragraph", apa).is_valid
        assert not validate_format(abnt_paragraph(text_indent="30px"), "paragraph", apa).is_valid

    def test_issue_order(self):
        """Every failed check is reported, in check order."""
        observed = ObservedFormat(
            font_family="Comic Sans MS",
            font_size="30px",
            line_height="normal",
            text_align="center",
            text_indent="0px",
        )
        issues = validate_format(observed, ElementType.PARAGRAPH).issues
        assert [issue.split()[0] for issue in issues] == [
            "Font",
            "Font",
            "Line",
            "Text",
            "First-line",
        ]


class TestHeadingChecks:
    """Tests for title and subtitle compliance."""

    @pytest.mark.parametrize("weight", ["700", "600", "bold", "bolder", 800, "900.0"])
    def test_bold_weights(self, weight):
        """Weights of 600 and up, or bold keywords, pass."""
        observed = ObservedFormat(font_family="Arial", font_size="16px", font_weight=weight)
        assert validate_format(observed, ElementType.TITLE).is_valid

    @pytest.mark.parametrize("weight", ["400", "normal", None, "inf", "nan"])
    def test_not_bold(self, weight):
        """Lighter or unreadable weights are reported."""
        observed = ObservedFormat(font_family="Arial", font_size="16px", font_weight=weight)
        result = validate_format(observed, ElementType.SUBTITLE)
        assert len(result.issues) == 1
        assert result.issues[0].startswith("Heading is not bold")

    def test_headings_skip_paragraph_checks(self):
        """Alignment, indent and line height are paragraph-only."""
        observed = ObservedFormat(
            font_family="Arial", font_size="16px", font_weight="bold", text_align="center"
        )
        assert validate_format(observed, "title").is_valid


class TestOtherKinds:
    """Tests for missing elements and other kinds."""

    def test_missing_element(self):
        """A missing element yields a single fixed issue."""
        result = validate_format(None, ElementType.PARAGRAPH)
        assert result.issues == ["Element not found"]
        assert result.to_dict() == {"is_valid": False, "issues": ["Element not found"]}

    def test_unknown_kind_checks_font_only(self):
        """Kinds without extra rules only check font and size."""
        observed = ObservedFormat(font_family="Arial", font_size="16px")
        assert validate_format(observed, "diagram").is_valid
        assert validate_format(observed, ElementType.TABLE).is_valid

    def test_garbage_never_raises(self):
        """Unparseable values become issues, never exceptions."""
        observed = ObservedFormat(
            font_family=None,
            font_size=float("nan"),
            line_height=object(),
            text_align=None,
            text_indent="??",
            font_weight=float("inf"),
        )
        for kind in ElementType:
            result = validate_format(observed, kind)
            assert not result.is_valid

    def test_nominal_values(self):
        """Nominal values come from the style."""
        checker = FormatComplianceChecker()
        assert checker.style.key == "abnt"
        assert checker.nominal_font_size_px == 16.0
        assert checker.nominal_indent_px == pytest.approx(47.24)


class TestMargins:
    """Tests for margin checks."""

    def test_margins_in_range(self):
        """Margins from 0 to 50px pass."""
        observed = ObservedFormat(margin_top="0px", margin_bottom="50px")
        assert FormatComplianceChecker().check_margins(observed).is_valid

    def test_margins_out_of_range(self):
        """Each margin is reported separately."""
        observed = ObservedFormat(margin_top="60px", margin_bottom="-1px")
        issues = FormatComplianceChecker().check_margins(observed).issues
        assert issues == [
            "Top margin needs adjustment ('60px')",
            "Bottom margin needs adjustment ('-1px')",
        ]

    def test_margins_missing_element(self):
        """A missing element yields the fixed issue."""
        assert FormatComplianceChecker().check_margins(None).issues == ["Element not found"]


class TestObservedFormat:
    """Tests for building observations from CSS properties."""

    def test_from_css(self):
        """Kebab-case and camelCase names are both accepted; unknown ones ignored."""
        observed = ObservedFormat.from_css(
            {
                "font-family": "Arial",
                "fontSize": "16px",
                "text-align": "justify",
                "lineHeight": "24px",
                "color": "red",
            }
        )
        assert observed == ObservedFormat(
            font_family="Arial", font_size="16px", text_align="justify", line_height="24px"
        )
