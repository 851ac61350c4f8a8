"""Pagination engine for splitting table rows across A4 pages."""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

from .document_model import RenderRow

logger = logging.getLogger(__name__)


# Page dimensions (mm)
A4_WIDTH = 210.0
A4_HEIGHT = 297.0


@dataclass
class PageGeometry:
    """Fixed page geometry used for pagination, all values in mm."""
    page_width: float = A4_WIDTH
    page_height: float = A4_HEIGHT
    margin_top: float = 20.0
    margin_bottom: float = 15.0
    header_height: float = 60.0  # First page only
    table_header_height: float = 10.0
    row_height: float = 8.0
    base_footer_height: float = 40.0
    first_page_adjustment: float = 16.0
    footer_spacing: float = 10.0  # Gap between last row and footer

    # Footer growth
    terms_line_height: float = 4.0
    terms_default_height: float = 20.0
    totals_line_height: float = 8.0

    @property
    def first_page_table_start_y(self) -> float:
        return self.margin_top + self.header_height + self.first_page_adjustment

    @property
    def other_page_table_start_y(self) -> float:
        return self.margin_top

    @property
    def content_bottom_y(self) -> float:
        """Lowest y (measured from the top) content may reach."""
        return self.page_height - self.margin_bottom


@dataclass
class FooterMetrics:
    """Counts that drive the footer's height."""
    terms_lines: int = 0
    section_count: int = 0
    tax_line_count: int = 0  # Sub Total and V.A.T lines

    @property
    def totals_lines(self) -> int:
        return max(0, self.section_count) + max(0, self.tax_line_count)


@dataclass
class Page:
    """Rows assigned to one physical page plus its chrome flags."""
    index: int
    rows: List[RenderRow] = field(default_factory=list)
    has_header: bool = False
    has_footer: bool = False
    is_footer_only: bool = False
    table_start_y: Optional[float] = None  # None on footer-only pages
    footer_start_y: Optional[float] = None

    def row_y(self, row_index: int, geometry: PageGeometry) -> float:
        """Top y of a row on this page."""
        if self.table_start_y is None:
            raise ValueError("Footer-only pages have no table rows")
        return self.table_start_y + geometry.table_header_height + row_index * geometry.row_height


class LayoutEngine:
    """Computes page boundaries and footer placement."""

    def __init__(self, geometry: Optional[PageGeometry] = None):
        self.geometry = geometry or PageGeometry()

    @property
    def rows_on_first_page(self) -> int:
        g = self.geometry
        available = (
            g.page_height - g.margin_top - g.header_height - g.table_header_height
            - g.margin_bottom - g.first_page_adjustment
        )
        return max(1, math.floor(available / g.row_height))

    @property
    def rows_on_other_pages(self) -> int:
        g = self.geometry
        available = g.page_height - g.margin_top - g.table_header_height - g.margin_bottom
        return max(1, math.floor(available / g.row_height))

    def compute_footer_height(self, footer: FooterMetrics) -> float:
        """
        Height of the footer block.

        The terms column and the totals box sit side by side, so only the
        taller of the two growths is added to the base height.
        """
        g = self.geometry
        terms_extra = max(0.0, footer.terms_lines * g.terms_line_height - g.terms_default_height)
        totals_extra = footer.totals_lines * g.totals_line_height
        return g.base_footer_height + max(terms_extra, totals_extra)

    def footer_start_y(self, page: Page) -> float:
        """Where the footer would start if attached below this page's rows."""
        g = self.geometry
        last_row_bottom = page.row_y(len(page.rows), g)
        return last_row_bottom + g.footer_spacing

    def can_fit_footer(self, page: Page, footer: FooterMetrics) -> bool:
        available = self.geometry.content_bottom_y - self.footer_start_y(page)
        return available >= self.compute_footer_height(footer)

    def split_rows(self, rows: List[RenderRow]) -> List[List[RenderRow]]:
        """Slice rows into page-sized chunks; never yields an empty trailing chunk."""
        first = self.rows_on_first_page
        other = self.rows_on_other_pages

        chunks = [list(rows[:first])]
        remaining = rows[first:]
        while remaining:
            chunks.append(list(remaining[:other]))
            remaining = remaining[other:]
        return chunks

    def paginate(
        self,
        rows: List[RenderRow],
        footer: Optional[FooterMetrics] = None,
    ) -> List[Page]:
        """
        Assign rows to pages and place the footer.

        The footer is attached to the last table page when it fits below
        the rows; otherwise it moves whole to an extra footer-only page.
        """
        footer = footer or FooterMetrics()
        g = self.geometry

        pages: List[Page] = []
        for idx, chunk in enumerate(self.split_rows(rows)):
            pages.append(Page(
                index=idx,
                rows=chunk,
                has_header=(idx == 0),
                table_start_y=(g.first_page_table_start_y if idx == 0
                               else g.other_page_table_start_y),
            ))

        last = pages[-1]
        if self.can_fit_footer(last, footer):
            last.has_footer = True
            last.footer_start_y = self.footer_start_y(last)
        else:
            logger.debug(
                "Footer (%.1fmm) does not fit below %d rows on page %d; adding footer page",
                self.compute_footer_height(footer), len(last.rows), last.index + 1,
            )
            pages.append(Page(
                index=len(pages),
                has_footer=True,
                is_footer_only=True,
                footer_start_y=g.margin_top,
            ))

        logger.debug("Paginated %d rows onto %d page(s)", len(rows), len(pages))
        return pages


def paginate(
    rows: List[RenderRow],
    geometry: Optional[PageGeometry] = None,
    footer: Optional[FooterMetrics] = None,
) -> List[Page]:
    """Paginate rows with the given (or default A4) geometry."""
    return LayoutEngine(geometry).paginate(rows, footer)
