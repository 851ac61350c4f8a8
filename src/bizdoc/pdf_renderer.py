"""PDF rasterization of layout schemas using ReportLab."""

import io
import logging
from pathlib import Path
from typing import Any, Mapping, Sequence, Union

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .images import decode_data_uri
from .schema import (
    ImageElement, LineElement, PositionedElement, RectangleElement, TextElement,
    element_from_dict,
)

logger = logging.getLogger(__name__)


PT_TO_MM = 25.4 / 72.0
LINE_SPACING = 1.4  # Multiple of font size for multi-line fields
BASELINE_RATIO = 0.8  # Ascent as a share of font size
RULE_WIDTH = 0.3  # Points

PageSchema = Sequence[Union[PositionedElement, Mapping[str, Any]]]


def truncate_text(text: str, max_width: float, font_name: str, font_size: float, canvas_obj: canvas.Canvas) -> str:
    """Truncate text to fit within max_width (points), adding '...' if needed."""
    if not text:
        return text

    text_width = canvas_obj.stringWidth(text, font_name, font_size)
    if text_width <= max_width:
        return text

    ellipsis = "..."
    ellipsis_width = canvas_obj.stringWidth(ellipsis, font_name, font_size)
    available_width = max_width - ellipsis_width

    if available_width <= 0:
        return ellipsis[:1]

    for i in range(len(text), 0, -1):
        truncated = text[:i]
        if canvas_obj.stringWidth(truncated, font_name, font_size) <= available_width:
            return truncated + ellipsis

    return ellipsis


class PDFRenderer:
    """Draws page schemas and their inputs onto an A4 ReportLab canvas."""

    def __init__(self, page_size=A4, truncate: bool = True):
        self.page_size = page_size
        self.truncate = truncate

    @property
    def page_height_mm(self) -> float:
        return self.page_size[1] / mm

    def render(self, template: Sequence[PageSchema], inputs: Sequence[Mapping[str, str]]) -> bytes:
        """Render every page and return the PDF bytes."""
        if len(template) != len(inputs):
            raise ValueError(
                f"Template has {len(template)} page(s) but inputs has {len(inputs)}"
            )

        buffer = io.BytesIO()
        c = canvas.Canvas(buffer, pagesize=self.page_size)
        for page_idx, (schema, page_inputs) in enumerate(zip(template, inputs)):
            for element in schema:
                if isinstance(element, Mapping):
                    element = element_from_dict(dict(element))
                self._draw_element(c, element, page_inputs)
            c.showPage()
            logger.debug("Rendered page %d with %d elements", page_idx + 1, len(schema))
        c.save()
        return buffer.getvalue()

    def render_to_file(
        self,
        template: Sequence[PageSchema],
        inputs: Sequence[Mapping[str, str]],
        pdf_path: Path,
    ) -> Path:
        pdf_path = Path(pdf_path)
        pdf_path.parent.mkdir(parents=True, exist_ok=True)
        pdf_path.write_bytes(self.render(template, inputs))
        return pdf_path

    def _draw_element(self, c: canvas.Canvas, element: PositionedElement, inputs: Mapping[str, str]):
        if isinstance(element, TextElement):
            value = inputs.get(element.name)
            if value is None:
                value = element.content or ""
            self._draw_text(c, element, value)
        elif isinstance(element, RectangleElement):
            self._draw_rectangle(c, element)
        elif isinstance(element, LineElement):
            self._draw_line(c, element)
        elif isinstance(element, ImageElement):
            data = inputs.get(element.name, "")
            if data:
                self._draw_image(c, element, data)
        else:
            raise TypeError(f"Unsupported element: {element!r}")

    def _y(self, top_mm: float, height_mm: float = 0.0) -> float:
        """Convert a top-left y (mm) to ReportLab's bottom-left points."""
        return (self.page_height_mm - top_mm - height_mm) * mm

    def _draw_text(self, c: canvas.Canvas, element: TextElement, value: str):
        if not value:
            return

        font_name = element.font_name
        font_size = element.font_size
        font_mm = font_size * PT_TO_MM
        c.setFont(font_name, font_size)
        c.setFillColor(HexColor(element.font_color))

        max_width = element.width * mm
        baseline = element.y + font_mm * BASELINE_RATIO
        for line in value.split("\n"):
            text = line
            if self.truncate and max_width > 0:
                text = truncate_text(line, max_width, font_name, font_size, c)
            text_width = c.stringWidth(text, font_name, font_size)

            if element.alignment == "right":
                x = element.x * mm + max_width - text_width
            elif element.alignment == "center":
                x = element.x * mm + (max_width - text_width) / 2
            else:
                x = element.x * mm

            c.drawString(x, self._y(baseline), text)
            baseline += font_mm * LINE_SPACING

    def _draw_rectangle(self, c: canvas.Canvas, element: RectangleElement):
        c.setFillColor(HexColor(element.color))
        x = element.x * mm
        y = self._y(element.y, element.height)
        width = element.width * mm
        height = element.height * mm
        if element.radius:
            c.roundRect(x, y, width, height, element.radius * mm, stroke=0, fill=1)
        else:
            c.rect(x, y, width, height, stroke=0, fill=1)

    def _draw_line(self, c: canvas.Canvas, element: LineElement):
        c.setStrokeColor(HexColor(element.color))
        c.setLineWidth(RULE_WIDTH)
        y = self._y(element.y)
        c.line(element.x * mm, y, (element.x + element.width) * mm, y)

    def _draw_image(self, c: canvas.Canvas, element: ImageElement, data: str):
        reader = ImageReader(io.BytesIO(decode_data_uri(data)))
        c.saveState()
        c.setFillAlpha(element.opacity)
        c.drawImage(
            reader,
            element.x * mm,
            self._y(element.y, element.height),
            width=element.width * mm,
            height=element.height * mm,
            mask="auto",
            preserveAspectRatio=True,
        )
        c.restoreState()


def render_pdf(template: Sequence[PageSchema], inputs: Sequence[Mapping[str, str]]) -> bytes:
    """Render a template/inputs pair with default settings."""
    return PDFRenderer().render(template, inputs)
