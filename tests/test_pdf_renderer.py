"""Tests for ReportLab rendering and end-to-end PDF generation."""

from dataclasses import replace

import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from bizdoc.cash_book import CashBookMeta, CashBookTxn
from bizdoc.errors import DocumentGenerationError, ImageLoadError
from bizdoc.generator import generate_cash_book_pdf, generate_document, generate_pdf
from bizdoc.pdf_renderer import PDFRenderer, render_pdf, truncate_text
from bizdoc.schema import SchemaBuilder


class TestTruncateText:
    @pytest.fixture
    def c(self, tmp_path):
        return canvas.Canvas(str(tmp_path / "scratch.pdf"), pagesize=A4)

    def test_short_text_untouched(self, c):
        assert truncate_text("Slab", 200, "Helvetica", 9, c) == "Slab"

    def test_long_text_gets_ellipsis(self, c):
        text = truncate_text("Granite slab with polished edges " * 5, 100, "Helvetica", 9, c)
        assert text.endswith("...")
        assert c.stringWidth(text, "Helvetica", 9) <= 100

    def test_empty(self, c):
        assert truncate_text("", 10, "Helvetica", 9, c) == ""


class TestPDFRenderer:
    def test_renders_pdf_bytes(self, worktop_document):
        document = generate_document(worktop_document)
        pdf = PDFRenderer().render(document.schemas, document.inputs)
        assert pdf.startswith(b"%PDF")

    def test_accepts_serialized_template(self, worktop_document):
        document = generate_document(worktop_document)
        assert render_pdf(document.template, document.inputs).startswith(b"%PDF")

    def test_page_count_mismatch(self, worktop_document):
        document = generate_document(worktop_document)
        with pytest.raises(ValueError):
            PDFRenderer().render(document.schemas, document.inputs * 2)

    def test_draws_images(self, png_data_uri):
        builder = SchemaBuilder()
        builder.image("logo", png_data_uri, 15, 5, 38, 38)
        builder.image("watermark", png_data_uri, 60, 100, 90, 90, opacity=0.08)
        builder.text("caption", "Hello", 15, 50, 100)
        assert render_pdf([builder.elements], [builder.inputs]).startswith(b"%PDF")

    def test_corrupt_image(self):
        builder = SchemaBuilder()
        builder.image("logo", "data:image/png;base64,!!!not-base64", 15, 5, 38, 38)
        with pytest.raises(ImageLoadError):
            render_pdf([builder.elements], [builder.inputs])

    def test_render_to_file(self, worktop_document, tmp_path):
        document = generate_document(worktop_document)
        path = PDFRenderer().render_to_file(document.schemas, document.inputs,
                                            tmp_path / "nested" / "qt.pdf")
        assert path.read_bytes().startswith(b"%PDF")


class TestGeneratePdf:
    def test_writes_file(self, worktop_document, tmp_path):
        path = tmp_path / "out" / "quotation.pdf"
        pdf = generate_pdf(worktop_document, path)
        assert pdf.startswith(b"%PDF")
        assert path.read_bytes() == pdf

    def test_multi_page_with_images(self, worktop_document, make_items, png_data_uri):
        data = replace(worktop_document, items=make_items(80),
                       company_logo=png_data_uri, watermark=png_data_uri)
        assert generate_pdf(data, cooperative=True).startswith(b"%PDF")

    def test_corrupt_logo_is_wrapped(self, worktop_document):
        data = replace(worktop_document, company_logo="data:image/png;base64,@@@")
        with pytest.raises(DocumentGenerationError) as excinfo:
            generate_pdf(data)
        assert str(excinfo.value) == "Failed to generate PDF"
        assert isinstance(excinfo.value.__cause__, ImageLoadError)

    def test_non_finite_total_is_wrapped(self, worktop_document):
        with pytest.raises(DocumentGenerationError):
            generate_pdf(replace(worktop_document, total=float("nan")))

    def test_cash_book(self, tmp_path):
        receipts = [CashBookTxn(date="02/01", particulars="Jane", cash=500.0)] * 14
        pdf = generate_cash_book_pdf(receipts, [], CashBookMeta(company_name="ACME"),
                                     tmp_path / "cb.pdf")
        assert pdf.startswith(b"%PDF")
        assert (tmp_path / "cb.pdf").exists()
