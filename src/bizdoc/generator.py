"""End-to-end document generation: rows, pagination, emission, rendering."""

import json
import logging
from dataclasses import replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple
import yaml

from .cash_book import CashBookMeta, CashBookTxn, build_cash_book, cash_book_template
from .document_emitter import DocumentEmitter, RenderedDocument, footer_metrics_for
from .document_model import DocumentData, build_rows
from .errors import BizDocError, DocumentGenerationError
from .layout_engine import LayoutEngine, PageGeometry
from .numbering import (
    CASH_SALE_PREFIX, INVOICE_PREFIX, QUOTATION_PREFIX, SALES_ORDER_PREFIX,
    DocumentNumberSequence,
)
from .pdf_renderer import PDFRenderer
from .text_metrics import TextMetrics

logger = logging.getLogger(__name__)


class DocumentKind(Enum):
    """Business documents sharing the paginated item-table layout."""
    QUOTATION = "quotation"
    SALES_ORDER = "sales_order"
    INVOICE = "invoice"
    CASH_SALE = "cash_sale"


# kind -> (title, number caption, number prefix)
DOCUMENT_KINDS: Dict[DocumentKind, Tuple[str, str, str]] = {
    DocumentKind.QUOTATION: ("QUOTATION", "Quotation No.", QUOTATION_PREFIX),
    DocumentKind.SALES_ORDER: ("SALES ORDER", "Sales Order No.", SALES_ORDER_PREFIX),
    DocumentKind.INVOICE: ("INVOICE", "Invoice No.", INVOICE_PREFIX),
    DocumentKind.CASH_SALE: ("CASH SALE RECEIPT", "Receipt No.", CASH_SALE_PREFIX),
}


def apply_kind(
    data: DocumentData,
    kind: DocumentKind,
    numbers: Optional[DocumentNumberSequence] = None,
) -> DocumentData:
    """
    Return a copy of data titled for the given document kind.

    A document without a number gets the next one from the sequence
    when a sequence is supplied.
    """
    title, number_label, prefix = DOCUMENT_KINDS[kind]
    document_number = data.document_number
    if not document_number and numbers is not None:
        document_number = numbers.next_document_number(prefix)
    return replace(data, document_title=title, number_label=number_label,
                   document_number=document_number)


def generate_document(
    data: DocumentData,
    geometry: Optional[PageGeometry] = None,
    metrics: Optional[TextMetrics] = None,
    cooperative: bool = False,
) -> RenderedDocument:
    """Lay out a document and return its per-page schemas and inputs."""
    geometry = geometry or PageGeometry()
    rows = build_rows(data.items, data.section_names)
    pages = LayoutEngine(geometry).paginate(rows, footer_metrics_for(data))
    return DocumentEmitter(geometry, metrics).emit(pages, data, cooperative=cooperative)


def generate_pdf(
    data: DocumentData,
    pdf_path: Optional[Path] = None,
    geometry: Optional[PageGeometry] = None,
    metrics: Optional[TextMetrics] = None,
    renderer: Optional[PDFRenderer] = None,
    cooperative: bool = False,
) -> bytes:
    """
    Lay out and rasterize a document.

    Any failure is logged with its cause and re-raised as a
    DocumentGenerationError carrying a user-facing message.
    """
    renderer = renderer or PDFRenderer()
    try:
        document = generate_document(data, geometry, metrics, cooperative=cooperative)
        pdf_bytes = renderer.render(document.schemas, document.inputs)
        if pdf_path is not None:
            Path(pdf_path).parent.mkdir(parents=True, exist_ok=True)
            Path(pdf_path).write_bytes(pdf_bytes)
    except (BizDocError, ValueError, TypeError, OSError) as exc:
        logger.exception("PDF generation failed for %s %s",
                         data.document_title, data.document_number or "<unnumbered>")
        raise DocumentGenerationError() from exc
    return pdf_bytes


def generate_cash_book_pdf(
    receipts: Sequence[CashBookTxn],
    payments: Sequence[CashBookTxn],
    meta: CashBookMeta,
    pdf_path: Optional[Path] = None,
    renderer: Optional[PDFRenderer] = None,
) -> bytes:
    """Fill and rasterize the single-page cash book."""
    renderer = renderer or PDFRenderer()
    try:
        inputs = build_cash_book(receipts, payments, meta)
        pdf_bytes = renderer.render(cash_book_template(), inputs)
        if pdf_path is not None:
            Path(pdf_path).parent.mkdir(parents=True, exist_ok=True)
            Path(pdf_path).write_bytes(pdf_bytes)
    except (BizDocError, ValueError, TypeError, OSError) as exc:
        logger.exception("Cash book generation failed for %s", meta.report_no)
        raise DocumentGenerationError() from exc
    return pdf_bytes


def _load_mapping(path: Path) -> Dict[str, Any]:
    path = Path(path)
    with open(path, "r") as f:
        if path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a mapping")
    return data


def load_document(path: Path) -> DocumentData:
    """Load DocumentData from a YAML or JSON file."""
    return DocumentData.from_dict(_load_mapping(path))


def load_cash_book(path: Path) -> Tuple[List[CashBookTxn], List[CashBookTxn], CashBookMeta]:
    """Load receipts, payments and report details from a YAML or JSON file."""
    data = _load_mapping(path)
    receipts = [CashBookTxn.from_dict(entry) for entry in data.get("receipts") or []]
    payments = [CashBookTxn.from_dict(entry) for entry in data.get("payments") or []]
    meta = CashBookMeta.from_dict(data.get("meta") or {})
    return receipts, payments, meta
