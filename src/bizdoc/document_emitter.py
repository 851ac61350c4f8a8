"""Emit positioned elements and input maps for each paginated page."""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .document_model import (
    CELL_DESCRIPTION, CELL_TOTAL, DocumentData, RenderRow,
    client_values, compute_client_info_box,
)
from .formatting import format_money
from .layout_engine import FooterMetrics, LayoutEngine, Page, PageGeometry
from .schema import BRAND_COLOR, PositionedElement, SchemaBuilder
from .text_metrics import TextMetrics


@dataclass(frozen=True)
class TableColumn:
    """One column of the item table."""
    key: str
    caption: str
    x: float
    width: float
    alignment: str


# Cell order matches RenderRow.cells
TABLE_COLUMNS = (
    TableColumn("item_number", "Item", 17, 12, "center"),
    TableColumn("description", "Description", 29, 68, "left"),
    TableColumn("unit", "Unit", 97, 20, "center"),
    TableColumn("quantity", "Qty", 117, 20, "center"),
    TableColumn("unit_price", "Unit Price", 137, 30, "right"),
    TableColumn("total", "Total", 167, 28, "right"),
)

TABLE_X = 15.0
TABLE_WIDTH = 180.0
ROW_FONT_SIZE = 9
ROW_TEXT_OFFSET = 1.5
ROW_TEXT_HEIGHT = 5.0

WATERMARK_BOX = (60.0, 100.0, 90.0, 90.0)
WATERMARK_OPACITY = 0.08

# Footer block, offsets relative to footer_start_y
TERMS_X = 15.0
TERMS_WIDTH = 120.0
TERMS_TITLE = "TERMS AND CONDITIONS:"
TOTALS_BOX_X = 150.0
TOTALS_BOX_WIDTH = 45.0
TOTALS_BOX_BASE_HEIGHT = 16.0
TOTALS_FIRST_LINE_OFFSET = 4.0
TOTALS_LABEL_X = 152.0
TOTALS_LABEL_WIDTH = 18.0
TOTALS_VALUE_X = 165.0
TOTALS_VALUE_WIDTH = 28.0
SIGNATURE_LINE_WIDTH = 50.0


@dataclass
class RenderedDocument:
    """Page-aligned layout schemas and their input maps."""
    schemas: List[List[PositionedElement]] = field(default_factory=list)
    inputs: List[Dict[str, str]] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.schemas)

    @property
    def template(self) -> List[List[Dict[str, Any]]]:
        return [[element.to_dict() for element in page] for page in self.schemas]

    def to_dict(self) -> Dict[str, Any]:
        return {"template": self.template, "inputs": [dict(page) for page in self.inputs]}


def footer_metrics_for(data: DocumentData) -> FooterMetrics:
    """Footer sizing counts for a document's terms and totals box."""
    return FooterMetrics(
        terms_lines=len(data.terms),
        section_count=len(data.section_totals),
        tax_line_count=len(data.tax_lines()),
    )


class DocumentEmitter:
    """Builds the schema and inputs for every page of a document."""

    def __init__(
        self,
        geometry: Optional[PageGeometry] = None,
        metrics: Optional[TextMetrics] = None,
    ):
        self.geometry = geometry or PageGeometry()
        self.layout_engine = LayoutEngine(self.geometry)
        self.metrics = metrics

    def emit(
        self,
        pages: List[Page],
        data: DocumentData,
        cooperative: bool = False,
    ) -> RenderedDocument:
        document = RenderedDocument()
        for page in pages:
            builder = SchemaBuilder()
            self._emit_watermark(builder, data)
            if page.has_header:
                self._emit_header(builder, data)
            if not page.is_footer_only:
                self._emit_table_header(builder, page)
                for row_idx, row in enumerate(page.rows):
                    self._emit_row(builder, page, row_idx, row)
            if page.has_footer:
                self._emit_footer(builder, page, data)

            document.schemas.append(list(builder.elements))
            document.inputs.append(dict(builder.inputs))

            if cooperative and page.index < len(pages) - 1:
                time.sleep(0)

        return document

    def _emit_watermark(self, builder: SchemaBuilder, data: DocumentData):
        x, y, w, h = WATERMARK_BOX
        builder.image("watermark", data.watermark, x, y, w, h, opacity=WATERMARK_OPACITY)

    def _emit_header(self, builder: SchemaBuilder, data: DocumentData):
        builder.image("logo", data.company_logo, 15, 5, 38, 38)
        builder.text("company_name", data.company_name, 60, 11, 140, height=10,
                     font_size=16, bold=True, color=BRAND_COLOR)
        builder.text("company_location", data.company_location, 60, 21, 140, height=6, font_size=11)
        builder.text("company_phone", data.company_phone, 60, 27, 140, height=6, font_size=11)
        builder.text("company_email", data.company_email, 60, 33, 140, height=6, font_size=11)

        builder.rectangle("title_background", 0, 45, 210, 16)
        builder.text("document_title", data.document_title, 0, 47, 210, height=12,
                     font_size=18, bold=True, alignment="center", color=BRAND_COLOR)

        box = compute_client_info_box(client_values(data), self.metrics)
        builder.rectangle("client_info_box", box.x, box.y, box.width, box.height, radius=4)
        for client_field in box.fields:
            builder.text(f"{client_field.key}_label", client_field.label,
                         client_field.label_x, client_field.y, client_field.label_width,
                         font_size=8, bold=True)
            builder.text(f"{client_field.key}_value", client_field.value,
                         client_field.value_x, client_field.y, client_field.value_width,
                         font_size=8)

        number_label = data.number_label.rstrip(":") + ":" if data.number_label else ""
        builder.text("document_number_label", number_label, 135, 69, 30, font_size=8, bold=True)
        builder.text("document_number_value", data.document_number, 165, 69, 30, font_size=8)
        if data.original_document_number:
            builder.text("original_number_label", "Ref:", 135, 75, 30, font_size=8, bold=True)
            builder.text("original_number_value", data.original_document_number,
                         165, 75, 30, font_size=8)

    def _emit_table_header(self, builder: SchemaBuilder, page: Page):
        y = page.table_start_y
        builder.rectangle("table_header_background", TABLE_X, y, TABLE_WIDTH,
                          self.geometry.table_header_height)
        for column in TABLE_COLUMNS:
            builder.text(f"{column.key}_header", column.caption, column.x, y + 3, column.width,
                         font_size=10, bold=True, alignment="center")

    def _emit_row(self, builder: SchemaBuilder, page: Page, row_idx: int, row: RenderRow):
        y = page.row_y(row_idx, self.geometry) + ROW_TEXT_OFFSET
        prefix = f"row_{row_idx}"
        description_col = TABLE_COLUMNS[CELL_DESCRIPTION]
        total_col = TABLE_COLUMNS[CELL_TOTAL]

        if row.is_section:
            builder.text(f"{prefix}_section", row.description, description_col.x, y,
                         description_col.width, height=ROW_TEXT_HEIGHT,
                         font_size=ROW_FONT_SIZE, bold=True)
        elif row.is_section_summary:
            label = row.description if row.description.endswith(":") else f"{row.description}:"
            builder.text(f"{prefix}_summary_label", label, description_col.x, y,
                         total_col.x - description_col.x, height=ROW_TEXT_HEIGHT,
                         font_size=ROW_FONT_SIZE, bold=True, alignment="right")
            builder.text(f"{prefix}_summary_total", row.total, total_col.x, y, total_col.width,
                         height=ROW_TEXT_HEIGHT, font_size=ROW_FONT_SIZE, bold=True,
                         alignment="right")
        else:
            for column, value in zip(TABLE_COLUMNS, row.cells):
                builder.text(f"{prefix}_{column.key}", value, column.x, y, column.width,
                             height=ROW_TEXT_HEIGHT, font_size=ROW_FONT_SIZE,
                             alignment=column.alignment)

    def _emit_footer(self, builder: SchemaBuilder, page: Page, data: DocumentData):
        g = self.geometry
        top = page.footer_start_y
        footer = footer_metrics_for(data)
        footer_height = self.layout_engine.compute_footer_height(footer)

        # Terms column
        terms_height = max(g.terms_default_height, len(data.terms) * g.terms_line_height)
        builder.text("terms_title", TERMS_TITLE, TERMS_X, top, 60, font_size=10, bold=True)
        builder.text("terms_content", "\n".join(data.terms), TERMS_X, top + 5, TERMS_WIDTH,
                     height=terms_height, font_size=8)

        # Totals box
        box_height = TOTALS_BOX_BASE_HEIGHT + footer.totals_lines * g.totals_line_height
        builder.rectangle("totals_box", TOTALS_BOX_X, top, TOTALS_BOX_WIDTH, box_height, radius=4)
        line_y = top + TOTALS_FIRST_LINE_OFFSET
        for idx, section_total in enumerate(data.section_totals):
            builder.text(f"section_total_{idx}_label", f"{section_total.name}:",
                         TOTALS_LABEL_X, line_y, TOTALS_LABEL_WIDTH)
            builder.text(f"section_total_{idx}_value",
                         format_money(section_total.total, data.currency),
                         TOTALS_VALUE_X, line_y, TOTALS_VALUE_WIDTH, alignment="right")
            line_y += g.totals_line_height
        for key, label, amount in data.tax_lines():
            builder.text(f"{key}_label", label, TOTALS_LABEL_X, line_y, TOTALS_LABEL_WIDTH)
            builder.text(f"{key}_value", format_money(amount, data.currency),
                         TOTALS_VALUE_X, line_y, TOTALS_VALUE_WIDTH, alignment="right")
            line_y += g.totals_line_height
        builder.text("total_label", "Total:", TOTALS_LABEL_X, line_y, TOTALS_LABEL_WIDTH, bold=True)
        builder.text("total_value", format_money(data.total, data.currency),
                     TOTALS_VALUE_X, line_y, TOTALS_VALUE_WIDTH, bold=True, alignment="right")

        # Signatures along the bottom edge of the footer block
        signature_y = top + footer_height - 5
        builder.text("prepared_by_label", "Prepared by:", 15, signature_y, 25)
        builder.line("prepared_by_line", 35, signature_y + 3, SIGNATURE_LINE_WIDTH)
        builder.text("prepared_by_name", data.prepared_by, 37, signature_y - 1, 46, font_size=8)
        builder.text("approved_by_label", "Approved by:", 120, signature_y, 25)
        builder.line("approved_by_line", 145, signature_y + 3, SIGNATURE_LINE_WIDTH)
        builder.text("approved_by_name", data.approved_by, 147, signature_y - 1, 46, font_size=8)


def emit(
    pages: List[Page],
    data: DocumentData,
    geometry: Optional[PageGeometry] = None,
    metrics: Optional[TextMetrics] = None,
    cooperative: bool = False,
) -> RenderedDocument:
    """Emit layout schemas and inputs for already-paginated pages."""
    return DocumentEmitter(geometry, metrics).emit(pages, data, cooperative=cooperative)
