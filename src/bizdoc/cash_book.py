"""Fixed-grid cash book report with receipts and payments side by side."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from .formatting import format_currency, format_optional_currency, parse_formatted_number
from .schema import BRAND_COLOR, PositionedElement, SchemaBuilder

logger = logging.getLogger(__name__)


CASH_BOOK_ROWS = 12
FIRST_ROW_Y = 100.0
ROW_STEP = 6.0
TOTALS_Y = 180.0

# Column layout for one side: (field, header caption, x offset, width, alignment)
SIDE_COLUMNS = (
    ("date", "Date", 0, 12, "left"),
    ("particulars", "Particulars", 12, 25, "left"),
    ("ref", "REF", 37, 12, "left"),
    ("cash", "Cash (KES)", 49, 15, "right"),
    ("bank", "Bank (KES)", 64, 15, "right"),
    ("discount", None, 79, 6, "right"),
)
MONEY_FIELDS = ("cash", "bank", "discount")

RECEIPTS = "receipts"
PAYMENTS = "payments"
SIDE_ORIGIN_X = {RECEIPTS: 10.0, PAYMENTS: 105.0}
SIDE_TITLES = {RECEIPTS: "DR (Receipts)", PAYMENTS: "CR (Payments)"}
DISCOUNT_CAPTIONS = {RECEIPTS: "Disc. Allowed", PAYMENTS: "Disc. Received"}


@dataclass(frozen=True)
class CashBookTxn:
    """One receipt or payment line in the cash book."""
    date: str = ""
    particulars: str = ""
    ref: str = ""
    cash: float = 0.0
    bank: float = 0.0
    discount: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CashBookTxn":
        if not isinstance(data, Mapping):
            raise ValueError(f"Each cash book transaction must be a mapping, got {data!r}")

        def money(key):
            value = data.get(key)
            if isinstance(value, str):
                return parse_formatted_number(value)
            return float(value or 0)

        return cls(
            date=str(data.get("date", "") or ""),
            particulars=str(data.get("particulars", "") or ""),
            ref=str(data.get("ref", "") or ""),
            cash=money("cash"),
            bank=money("bank"),
            discount=money("discount"),
        )


@dataclass
class CashBookMeta:
    """Header and footer details for a cash book report."""
    company_name: str = ""
    company_location: str = ""
    company_tel: str = ""
    company_email: str = ""
    report_date: str = ""
    period: str = "N/A"
    report_no: str = "CB-001"
    watermark: str = ""
    prepared_by: str = ""
    approved_by: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CashBookMeta":
        """Build from a plain mapping, rejecting keys the report does not print."""
        if not isinstance(data, Mapping):
            raise ValueError(f"Cash book meta must be a mapping, got {data!r}")
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown cash book meta fields: {sorted(unknown)}")
        return cls(**{key: "" if value is None else str(value) for key, value in data.items()})


def transaction_value(transactions: Sequence[CashBookTxn], index: int, key: str) -> Any:
    """Field of the transaction at index, or '' past the end of the list."""
    if index < len(transactions):
        return getattr(transactions[index], key)
    return ""


def column_totals(transactions: Sequence[CashBookTxn]) -> Dict[str, float]:
    """Sum cash, bank and discount over the full list, including rows not displayed."""
    return {key: sum(getattr(txn, key) or 0.0 for txn in transactions) for key in MONEY_FIELDS}


def truncated_rows(receipts: Sequence[CashBookTxn], payments: Sequence[CashBookTxn]) -> Tuple[int, int]:
    """How many receipts and payments fall beyond the fixed grid."""
    return (
        max(0, len(receipts) - CASH_BOOK_ROWS),
        max(0, len(payments) - CASH_BOOK_ROWS),
    )


def _field_name(side: str, key: str, row: int) -> str:
    return f"{side}_{key}_{row + 1}"


def _build(meta: CashBookMeta, receipts: Sequence[CashBookTxn], payments: Sequence[CashBookTxn]) -> SchemaBuilder:
    builder = SchemaBuilder()

    # Company header
    builder.text("company_name", meta.company_name, 10, 10, 190, height=7,
                 font_size=14, bold=True, alignment="center", color=BRAND_COLOR)
    builder.text("company_location", f"Location: {meta.company_location}", 10, 18, 190,
                 font_size=8, alignment="center")
    builder.text("company_tel", f"Tel: {meta.company_tel}", 10, 23, 190,
                 font_size=8, alignment="center")
    builder.text("company_email", f"Email: {meta.company_email}", 10, 28, 190,
                 font_size=8, alignment="center")
    builder.text("report_title", "CASH BOOK", 10, 40, 190, height=7,
                 font_size=12, bold=True, alignment="center", color=BRAND_COLOR)

    # Report info
    for idx, (key, label, value) in enumerate((
        ("report_date", "Date:", meta.report_date),
        ("report_period", "Period:", meta.period or "N/A"),
        ("report_no", "No:", meta.report_no or "CB-001"),
    )):
        y = 55 + idx * 5
        builder.text(f"{key}_label", label, 15, y, 20, height=4, font_size=8, bold=True)
        builder.text(f"{key}_value", value, 35, y, 40, height=4, font_size=8)

    builder.image("watermark", meta.watermark, 55, 100, 100, 100, opacity=0.1)

    for side, transactions in ((RECEIPTS, receipts), (PAYMENTS, payments)):
        origin = SIDE_ORIGIN_X[side]
        builder.text(f"{side}_header", SIDE_TITLES[side], origin, 80, 85,
                     font_size=10, bold=True)
        for key, caption, offset, width, alignment in SIDE_COLUMNS:
            caption = caption or DISCOUNT_CAPTIONS[side]
            builder.text(f"{side}_{key}_header", caption, origin + offset, 90, width,
                         font_size=8, bold=True, alignment=alignment)

        for row in range(CASH_BOOK_ROWS):
            y = FIRST_ROW_Y + row * ROW_STEP
            for key, _, offset, width, alignment in SIDE_COLUMNS:
                value = transaction_value(transactions, row, key)
                if key in MONEY_FIELDS:
                    value = format_optional_currency(value)
                builder.text(_field_name(side, key, row), value, origin + offset, y, width,
                             height=4, font_size=7, alignment=alignment)

        totals = column_totals(transactions)
        builder.text(f"{side}_total_label", "TOTAL", origin, TOTALS_Y, 40,
                     font_size=8, bold=True)
        for key, _, offset, width, alignment in SIDE_COLUMNS:
            if key in MONEY_FIELDS:
                builder.text(f"{side}_total_{key}", format_currency(totals[key]),
                             origin + offset, TOTALS_Y, width,
                             font_size=8, bold=True, alignment=alignment)

    prepared = "Prepared By:" + (f" {meta.prepared_by}" if meta.prepared_by else "")
    approved = "Approved By:" + (f" {meta.approved_by}" if meta.approved_by else "")
    builder.text("prepared_by", prepared, 10, 270, 80, font_size=8, bold=True)
    builder.text("approved_by", approved, 120, 270, 80, font_size=8, bold=True, alignment="right")
    builder.text("page_number", "Page 1 of 1", 10, 280, 190, font_size=7, alignment="center")
    return builder


def cash_book_template() -> List[List[PositionedElement]]:
    """The static single-page cash book layout."""
    return [list(_build(CashBookMeta(), [], []).elements)]


def build_cash_book(
    receipts: Sequence[CashBookTxn],
    payments: Sequence[CashBookTxn],
    meta: CashBookMeta,
) -> List[Dict[str, str]]:
    """
    Fill the fixed 12-row grid for both sides of the cash book.

    Rows past the twelfth are not displayed, but column totals are
    still summed over every transaction supplied.
    """
    dropped_receipts, dropped_payments = truncated_rows(receipts, payments)
    if dropped_receipts or dropped_payments:
        logger.warning(
            "Cash book shows %d rows per side; %d receipt(s) and %d payment(s) not displayed",
            CASH_BOOK_ROWS, dropped_receipts, dropped_payments,
        )
    return [dict(_build(meta, receipts, payments).inputs)]
