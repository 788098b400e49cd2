"""
Tests for PDF rendering, color resolution and download filenames.
"""

from datetime import datetime

import pytest
from reportlab.lib import colors

from app.layout import (
    CardSpec,
    ConfigurationError,
    KeyValue,
    Page,
    ReportDocument,
    Section,
    TextLine,
)
from app.services.pdf_renderer import (
    BRAND_PRIMARY,
    PDFRenderer,
    report_filename,
    resolve_color,
    safe_filename,
)

from factories import make_paginator


def two_page_document():
    cards = [
        CardSpec(f"CARD {i}", (KeyValue("Score", f"{i}/7"),), width=190, height=100)
        for i in range(3)
    ]
    return ReportDocument([Section(cards)], title="Skill Gap Report")


class TestRender:
    def test_renders_a_pdf(self, a4):
        pages = make_paginator().paginate(two_page_document())
        pdf = PDFRenderer(a4).render(pages, title="Skill Gap Report")

        assert pdf.startswith(b"%PDF")
        assert b"/Count 2" in pdf

    def test_one_pdf_page_per_layout_page(self, a4):
        pages = [Page(index=i) for i in range(3)]
        assert b"/Count 3" in PDFRenderer(a4).render(pages)

    def test_no_pages_is_an_error(self, a4):
        with pytest.raises(ConfigurationError):
            PDFRenderer(a4).render([])

    def test_unknown_color_is_an_error(self, a4):
        page = Page(index=0, ops=(TextLine(10, 40, "x", "Helvetica", 8, "chartreuse"),))
        with pytest.raises(ConfigurationError):
            PDFRenderer(a4).render([page])


class TestResolveColor:
    def test_palette_token(self):
        assert resolve_color("primary") == BRAND_PRIMARY
        assert resolve_color("text") == BRAND_PRIMARY

    def test_hex_literal(self):
        assert resolve_color("#123456") == colors.HexColor("#123456")

    @pytest.mark.parametrize("token", ["chartreuse", "#12345", "123456", ""])
    def test_unknown_tokens(self, token):
        with pytest.raises(ConfigurationError):
            resolve_color(token)

    def test_custom_palette(self):
        assert resolve_color("brand", {"brand": colors.red}) == colors.red


class TestReportFilename:
    def test_candidate_and_timestamp(self):
        now = datetime(2026, 10, 18, 9, 5, 3)
        assert report_filename(42, "pdf", now) == "42_Report_20261018090503.pdf"

    def test_unsafe_characters_are_replaced(self):
        now = datetime(2026, 10, 18, 9, 5, 3)
        assert report_filename("a/b c", "pdf", now) == "a_b_c_Report_20261018090503.pdf"

    def test_custom_prefix_and_extension(self):
        now = datetime(2026, 1, 2, 3, 4, 5)
        name = report_filename("7", "json", now, prefix="Layout")
        assert name == "7_Layout_20260102030405.json"


class TestSafeFilename:
    @pytest.mark.parametrize("text,expected", [
        ("Team Report", "Team_Report"),
        ("Rapport d’évaluation Ω", "Rapport_d_valuation"),
        ('say "hi"', "say_hi"),
        ("ΩΩΩ", "report"),
    ])
    def test_reduces_to_ascii_word_characters(self, text, expected):
        assert safe_filename(text, "report") == expected
