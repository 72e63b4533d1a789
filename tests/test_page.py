"""
Tests for page.py

Verifies data-order sort keys on rendered cells, escaping, filter options
and the empty-table placeholder.
"""
from tariff_scorecard.core.normalize import normalize_rows, parse_csv
from tariff_scorecard.core.scorecard import build_scorecard, filter_rows
from tariff_scorecard.core.variants import VARIANTS
from tariff_scorecard.page import render_filters, render_page, render_table


class TestRenderTable:
    def test_rows_carry_sort_keys(self, senate):
        html = render_table(senate)
        assert html.count('<tr data-row-id="') == 3
        assert '<td data-order="1"><span class="overall-pill overall-Aplus">' in html

    def test_headers_follow_columns(self, senate):
        html = render_table(senate)
        assert "<th>Pre-Trump</th>" in html
        assert "<th>Final Grade</th>" in html

    def test_quoted_name_rendered(self, senate):
        assert "Coons, Chris" in render_table(senate)

    def test_subset(self, senate):
        html = render_table(senate, filter_rows(senate, party="R"))
        assert "Jane Smith" in html
        assert "John Doe" not in html

    def test_empty_placeholder_keeps_headers(self):
        html = render_table(build_scorecard([], VARIANTS["house-tariff"]))
        assert "No records available" in html
        assert "<th>Canada</th>" in html

    def test_sheet_text_is_escaped(self):
        variant = VARIANTS["senate-2026"]
        sheet = 'Name,Party,Grade,Reason\n<b>Bold</b>,D / DE,A+,"tariffs & ""trade"""\n'
        html = render_table(build_scorecard(normalize_rows(parse_csv(sheet), variant.layout), variant))
        assert "&lt;b&gt;Bold&lt;/b&gt;" in html
        assert "<b>Bold" not in html
        assert "tariffs &amp; &#34;trade&#34;" in html


class TestRenderFilters:
    def test_options(self, senate):
        html = render_filters(senate)
        assert '<option value="DE">DE</option>' in html
        assert '<option value="R">R</option>' in html
        assert '<option value="">All states</option>' in html


class TestRenderPage:
    def test_document(self, senate):
        html = render_page(senate)
        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Senate Tariff Messaging Index 2026</title>" in html
        assert 'id="scorecard-table"' in html
