"""Document number sequences (QT-0001, INV-0002, ...)."""

from typing import Dict, Optional

# Prefixes used by each document kind
QUOTATION_PREFIX = "QT"
SALES_ORDER_PREFIX = "SO"
INVOICE_PREFIX = "INV"
CASH_SALE_PREFIX = "CS"
CASH_BOOK_PREFIX = "CB"


class DocumentNumberSequence:
    """
    Hands out sequential document numbers per prefix.

    Instances are injected where numbers are needed; seed them from the
    last number stored in the database to continue an existing series.
    """

    def __init__(self, start: Optional[Dict[str, int]] = None, width: int = 4):
        self._counters: Dict[str, int] = dict(start or {})
        self.width = width

    def peek(self, prefix: str) -> int:
        """Last number issued for a prefix (0 if none)."""
        return self._counters.get(prefix, 0)

    def next_document_number(self, prefix: str) -> str:
        if not prefix:
            raise ValueError("Document number prefix must not be empty")
        value = self._counters.get(prefix, 0) + 1
        self._counters[prefix] = value
        return f"{prefix}-{value:0{self.width}d}"

    @staticmethod
    def parse(number: str) -> int:
        """Numeric part of a document number such as 'QT-0042'."""
        _, _, digits = number.rpartition("-")
        if not digits.isdigit():
            raise ValueError(f"Not a document number: {number!r}")
        return int(digits)
