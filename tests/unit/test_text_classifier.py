"""
Tests for the plain-text line classifier.
"""

from pathlib import Path

import pytest

from structdoc.extractors import LineClassifier, analyze_text
from structdoc.models import ElementType, Paragraph, StructureStats, Subtitle, Title
from structdoc.normalizers import clean_text


def summarize(structure):
    """(type, level, content) triples for compact assertions."""
    return [(e.type.value, e.level, e.content) for e in structure]


class TestLineClassifier:
    """Tests for LineClassifier.classify."""

    def test_numbered_subtitle(self):
        """A two-group number gives a level-2 subtitle."""
        structure = analyze_text("1.2 METHOD\nSome body text here.")
        assert summarize(structure) == [
            ("subtitle", 2, "1.2 METHOD"),
            ("paragraph", None, "Some body text here."),
        ]

    def test_empty_text(self):
        """Empty input gives an empty structure."""
        structure = analyze_text("")
        assert len(structure) == 0
        assert structure.stats == StructureStats(0, 0, 0)

    def test_blank_lines_only(self):
        """Whitespace-only input gives an empty structure."""
        structure = analyze_text("\n\n  \n\t\n")
        assert len(structure) == 0

    def test_lines_buffered_into_paragraph(self):
        """Consecutive lines join with a space; blank lines split paragraphs."""
        structure = analyze_text("TITULO\nlinha um\nlinha dois\n\nlinha tres")
        assert summarize(structure) == [
            ("title", 1, "TITULO"),
            ("paragraph", None, "linha um linha dois"),
            ("paragraph", None, "linha tres"),
        ]

    def test_heading_flushes_paragraph(self):
        """A heading line ends the paragraph before it."""
        structure = analyze_text("linha um\nINTRODUÇÃO\nlinha dois")
        assert [e.type for e in structure] == [
            ElementType.PARAGRAPH,
            ElementType.TITLE,
            ElementType.PARAGRAPH,
        ]

    def test_lines_are_trimmed(self):
        """Headings and paragraph lines are stripped."""
        structure = analyze_text("   RESUMO   \n   corpo do texto   ")
        assert summarize(structure) == [
            ("title", 1, "RESUMO"),
            ("paragraph", None, "corpo do texto"),
        ]

    def test_all_caps_line_is_title(self):
        """A 40-character all-caps line is a level-1 title."""
        line = "QUADRO GERAL DE INDICADORES DO PROJETO X"
        structure = analyze_text(f"{line}\ncorpo.")
        assert structure[0] == Title(content=line)

    def test_keyword_subtitle(self):
        """A mixed-case keyword heading is a level-2 subtitle."""
        structure = analyze_text("Metodologia aplicada\ncorpo.")
        assert structure[0] == Subtitle(content="Metodologia aplicada", level=2)

    def test_deep_numbering_capped(self):
        """Four-group numbering is still level 3."""
        structure = analyze_text("1.2.3.4 Detalhe\ncorpo.")
        assert structure[0] == Subtitle(content="1.2.3.4 Detalhe", level=3)

    def test_long_line_with_keyword_is_paragraph(self):
        """A whole paragraph on one line stays a paragraph despite keywords."""
        sentence = (
            "Neste capítulo os resultados obtidos são comparados com estudos anteriores "
            "da área de estudo, considerando a amostra, os instrumentos e as limitações do método."
        )
        structure = analyze_text(f"INTRODUÇÃO\n{sentence}")
        assert summarize(structure) == [
            ("title", 1, "INTRODUÇÃO"),
            ("paragraph", None, sentence),
        ]

    def test_keyword_label_joins_paragraph(self):
        """A keyword label line is body text."""
        structure = analyze_text(
            "RESUMO\nTexto do resumo.\nPalavras-chave: metodologia, resultados"
        )
        assert summarize(structure) == [
            ("title", 1, "RESUMO"),
            ("paragraph", None, "Texto do resumo. Palavras-chave: metodologia, resultados"),
        ]

    def test_consecutive_headings(self):
        """Adjacent headings produce no empty paragraph between them."""
        structure = analyze_text("2 DESENVOLVIMENTO\n2.1 Revisão\ncorpo.")
        assert summarize(structure) == [
            ("title", 1, "2 DESENVOLVIMENTO"),
            ("subtitle", 2, "2.1 Revisão"),
            ("paragraph", None, "corpo."),
        ]


class TestParagraphFallback:
    """Tests for re-segmentation when no heading is found."""

    def test_no_headings_splits_on_blank_lines(self):
        """Without headings, paragraphs are the blank-line-delimited blocks."""
        text = "Primeiro parágrafo aqui.\ncontinua aqui.\n\nSegundo parágrafo.\n\n\nTerceiro."
        structure = analyze_text(text)
        assert structure.elements == (
            Paragraph(content="Primeiro parágrafo aqui. continua aqui."),
            Paragraph(content="Segundo parágrafo."),
            Paragraph(content="Terceiro."),
        )

    def test_fallback_has_no_headings(self):
        """Fallback output contains paragraphs only."""
        structure = analyze_text("um.\n\ndois.")
        assert structure.stats == StructureStats(titles=0, subtitles=0, paragraphs=2)


class TestStatsInvariant:
    """Stats always add up to the formatted elements."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "RESUMO\nTexto.\n\n1 INTRODUÇÃO\nMais texto.\n1.1 Objetivo\nFim.",
            "apenas texto corrido.\n\noutro bloco.",
            "A\nB\nC",
        ],
    )
    def test_stats_sum_to_elements(self, text):
        """Titles + subtitles + paragraphs equals the element count."""
        structure = analyze_text(text)
        stats = structure.stats
        assert stats.titles + stats.subtitles + stats.paragraphs == len(structure)


class TestSampleThesis:
    """Classify the sample thesis fixture after cleaning."""

    def test_sample_thesis(self, thesis_path: Path):
        """Numbered chapters, keyword sections and body text are recognized."""
        text = clean_text(thesis_path.read_text(encoding="utf-8")).text
        structure = LineClassifier().classify(text)

        assert summarize(structure) == [
            ("title", 1, "RESUMO"),
            (
                "paragraph",
                None,
                "Este trabalho analisa a formatação de documentos. "
                "Palavras-chave: formatação; documentos.",
            ),
            ("title", 1, "1 INTRODUÇÃO"),
            ("paragraph", None, "Este capítulo apresenta o tema. Ela continua nesta linha."),
            ("title", 1, "2 DESENVOLVIMENTO"),
            ("subtitle", 2, "2.1 Revisão da literatura"),
            ("paragraph", None, "Texto da revisão."),
            ("subtitle", 3, "2.1.1 Estudos anteriores"),
            ("paragraph", None, "Detalhes dos estudos."),
            ("title", 1, "CONCLUSÃO"),
            ("paragraph", None, "O trabalho termina aqui."),
        ]
        assert structure.stats == StructureStats(titles=4, subtitles=2, paragraphs=5)
