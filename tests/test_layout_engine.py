"""Tests for the pagination engine."""

import pytest

from bizdoc.document_model import build_rows
from bizdoc.layout_engine import FooterMetrics, LayoutEngine, PageGeometry, paginate


@pytest.fixture
def engine():
    return LayoutEngine()


class TestCapacity:
    def test_rows_per_page(self, engine):
        assert engine.rows_on_first_page == 22
        assert engine.rows_on_other_pages == 31

    def test_table_start(self):
        geometry = PageGeometry()
        assert geometry.first_page_table_start_y == 96
        assert geometry.other_page_table_start_y == 20

    def test_full_first_page_reaches_bottom_margin(self, engine, make_items):
        page = engine.paginate(build_rows(make_items(22)))[0]
        assert page.row_y(len(page.rows), engine.geometry) <= engine.geometry.content_bottom_y

    def test_custom_geometry(self):
        engine = LayoutEngine(PageGeometry(row_height=10.0))
        assert engine.rows_on_first_page == 17


class TestFooterHeight:
    @pytest.mark.parametrize("terms,sections,expected", [
        (0, 0, 40),
        (5, 0, 40),
        (8, 0, 52),
        (0, 2, 56),
        (10, 2, 60),
        (3, 20, 200),
    ])
    def test_taller_column_wins(self, engine, terms, sections, expected):
        assert engine.compute_footer_height(FooterMetrics(terms, sections)) == expected


class TestPaginate:
    @pytest.mark.parametrize("count", [0, 1, 15, 16, 21, 22, 23, 53, 54, 100, 250])
    def test_every_row_placed_once(self, make_items, count):
        rows = build_rows(make_items(count))
        pages = paginate(rows)
        placed = [row for page in pages for row in page.rows]
        assert placed == rows

    @pytest.mark.parametrize("count", [1, 22, 23, 53, 100])
    def test_no_empty_table_pages(self, make_items, count):
        pages = paginate(build_rows(make_items(count)))
        assert all(page.rows for page in pages if not page.is_footer_only)

    def test_capacity_respected(self, make_items):
        pages = paginate(build_rows(make_items(100)))
        assert len(pages[0].rows) == 22
        assert all(len(page.rows) <= 31 for page in pages[1:])

    def test_header_only_on_first_page(self, make_items):
        pages = paginate(build_rows(make_items(60)))
        assert [page.has_header for page in pages] == [True] + [False] * (len(pages) - 1)

    def test_empty_document_is_one_page(self):
        pages = paginate([])
        assert len(pages) == 1
        assert pages[0].has_header and pages[0].has_footer
        assert pages[0].footer_start_y == 96 + 10 + 10

    def test_footer_below_rows(self, make_items):
        pages = paginate(build_rows(make_items(3)))
        assert len(pages) == 1
        assert pages[0].footer_start_y == 96 + 10 + 3 * 8 + 10

    def test_footer_fits_exactly(self, make_items):
        pages = paginate(build_rows(make_items(15)))
        assert len(pages) == 1
        assert pages[0].has_footer

    def test_footer_moves_to_own_page(self, make_items):
        pages = paginate(build_rows(make_items(16)))
        assert len(pages) == 2
        assert not pages[0].has_footer
        footer_page = pages[1]
        assert footer_page.is_footer_only
        assert footer_page.rows == []
        assert footer_page.table_start_y is None
        assert footer_page.footer_start_y == 20

    def test_taller_footer_overflows_sooner(self, make_items):
        rows = build_rows(make_items(15))
        assert len(paginate(rows, footer=FooterMetrics(section_count=1))) == 2
        rows = build_rows(make_items(14))
        assert len(paginate(rows, footer=FooterMetrics(section_count=1))) == 1

    def test_footer_on_continuation_page(self, make_items):
        pages = paginate(build_rows(make_items(23)))
        assert len(pages) == 2
        assert len(pages[1].rows) == 1
        assert pages[1].footer_start_y == 20 + 10 + 8 + 10

    @pytest.mark.parametrize("sections", range(0, 21))
    @pytest.mark.parametrize("terms", [0, 5, 12])
    @pytest.mark.parametrize("count", [0, 10, 22, 40])
    def test_exactly_one_footer_within_margins(self, engine, make_items, sections, terms, count):
        footer = FooterMetrics(terms_lines=terms, section_count=sections)
        pages = engine.paginate(build_rows(make_items(count)), footer)

        footer_pages = [page for page in pages if page.has_footer]
        assert len(footer_pages) == 1
        assert footer_pages[0] is pages[-1]
        bottom = footer_pages[0].footer_start_y + engine.compute_footer_height(footer)
        assert bottom <= engine.geometry.content_bottom_y

    def test_row_y(self, engine, make_items):
        page = engine.paginate(build_rows(make_items(2)))[0]
        assert page.row_y(0, engine.geometry) == 106
        assert page.row_y(1, engine.geometry) == 114

    def test_row_y_on_footer_page(self, engine, make_items):
        pages = engine.paginate(build_rows(make_items(16)))
        with pytest.raises(ValueError):
            pages[1].row_y(0, engine.geometry)


class TestTaxLineFooter:
    def test_tax_lines_grow_totals_column(self, engine):
        assert engine.compute_footer_height(FooterMetrics(section_count=2, tax_line_count=2)) == 40 + 4 * 8

    def test_tax_lines_share_growth_with_terms(self, engine):
        footer = FooterMetrics(terms_lines=10, tax_line_count=2)
        assert engine.compute_footer_height(footer) == 60
