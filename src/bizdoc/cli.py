"""Command-line interface for generating business document PDFs."""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional
import numpy as np

from .cash_book import CashBookMeta
from .config import GeneratorConfig, load_config
from .document_model import DocumentData
from .errors import BizDocError
from .generator import (
    DocumentKind, apply_kind, generate_cash_book_pdf, generate_document, generate_pdf,
    load_cash_book, load_document,
)
from .images import load_logo, load_watermark
from .layout_writer import clear_metadata, write_document_metadata, write_layout, write_layout_file
from .numbering import CASH_BOOK_PREFIX, DocumentNumberSequence
from .sample_data import generate_cash_book_transactions, generate_document_data

logger = logging.getLogger(__name__)


def with_company_images(data: DocumentData, config: GeneratorConfig) -> DocumentData:
    """Fill in logo and watermark from the configured company profile."""
    logo = data.company_logo or load_logo(config.company.logo_path)
    watermark = data.watermark or load_watermark(config.company.watermark_path)
    return replace(data, company_logo=logo, watermark=watermark)


def cmd_render(args, config: GeneratorConfig) -> int:
    data = load_document(args.data)
    if not data.terms and config.default_terms:
        data = replace(data, terms=list(config.default_terms))
    if args.kind:
        data = apply_kind(data, DocumentKind(args.kind), DocumentNumberSequence())
    data = with_company_images(data, config)

    if args.layout_json:
        document = generate_document(data, config.geometry, cooperative=config.cooperative)
        path = write_layout_file(document, args.layout_json)
        print(f"Layout written to {path}")

    generate_pdf(data, args.out, geometry=config.geometry, cooperative=config.cooperative)
    print(f"{data.document_title} {data.document_number} written to {args.out}")
    return 0


def cmd_cashbook(args, config: GeneratorConfig) -> int:
    receipts, payments, meta = load_cash_book(args.data)
    if not meta.watermark:
        meta.watermark = load_watermark(config.company.watermark_path)
    generate_cash_book_pdf(receipts, payments, meta, args.out)
    print(f"Cash book {meta.report_no} written to {args.out}")
    return 0


def cmd_sample(args, config: GeneratorConfig) -> int:
    """Generate a batch of sample documents plus one cash book."""
    seed = args.seed if args.seed is not None else config.seed
    num_docs = args.num_docs if args.num_docs is not None else config.num_docs
    out_dir = args.out_dir or config.out_dir
    rng = np.random.default_rng(seed)
    numbers = DocumentNumberSequence()
    kinds = list(DocumentKind)

    clear_metadata(out_dir)
    pdf_dir = Path(out_dir) / "pdfs"

    print(f"Generating {num_docs} documents...")
    print(f"Output directory: {out_dir}")

    total_pages = 0
    for doc_idx in range(num_docs):
        kind = kinds[doc_idx % len(kinds)]
        data = generate_document_data(
            rng,
            company=config.company,
            terms=config.default_terms,
            currency=config.currency,
        )
        data = with_company_images(apply_kind(data, kind, numbers), config)

        doc_id = f"{kind.value}__{doc_idx:05d}"
        document = generate_document(data, config.geometry, cooperative=config.cooperative)
        write_layout(document, out_dir, doc_id)
        pdf_path = pdf_dir / f"{doc_id}.pdf"
        generate_pdf(data, pdf_path, geometry=config.geometry)
        write_document_metadata(doc_id, kind.value, data.document_number,
                                document.page_count, pdf_path, out_dir)
        total_pages += document.page_count

        if (doc_idx + 1) % 10 == 0 or doc_idx == 0:
            print(f"  Generated {doc_idx + 1}/{num_docs} documents")

    receipts, payments = generate_cash_book_transactions(rng)
    meta = CashBookMeta(
        company_name=config.company.name,
        company_location=config.company.location,
        company_tel=config.company.phone,
        company_email=config.company.email,
        report_date="01 Feb 2025",
        period="January 2025",
        report_no=numbers.next_document_number(CASH_BOOK_PREFIX),
        watermark=load_watermark(config.company.watermark_path),
    )
    generate_cash_book_pdf(receipts, payments, meta, pdf_dir / "cash_book.pdf")

    print("\nGeneration complete!")
    print(f"  Documents: {num_docs}")
    print(f"  Pages: {total_pages}")
    print(f"  Cash book: {pdf_dir / 'cash_book.pdf'}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Business document PDF generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", type=Path, help="Path to YAML configuration file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Render a document from a YAML/JSON data file")
    render.add_argument("data", type=Path, help="Document data file")
    render.add_argument("--out", type=Path, required=True, help="Output PDF path")
    render.add_argument(
        "--kind",
        choices=[kind.value for kind in DocumentKind],
        help="Document kind (overrides the title and number caption in the data file)",
    )
    render.add_argument("--layout-json", type=Path, help="Also write the layout as JSON")
    render.set_defaults(func=cmd_render)

    cashbook = subparsers.add_parser("cashbook", help="Render a cash book from a YAML/JSON data file")
    cashbook.add_argument("data", type=Path, help="Cash book data file")
    cashbook.add_argument("--out", type=Path, required=True, help="Output PDF path")
    cashbook.set_defaults(func=cmd_cashbook)

    sample = subparsers.add_parser("sample", help="Generate sample documents")
    sample.add_argument("--num-docs", type=int, help="Number of documents (overrides config)")
    sample.add_argument("--out-dir", type=Path, help="Output directory (overrides config)")
    sample.add_argument("--seed", type=int, help="Random seed (overrides config)")
    sample.set_defaults(func=cmd_sample)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = load_config(args.config)
        return args.func(args, config)
    except BizDocError as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as exc:
        logger.exception("Could not load input")
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
