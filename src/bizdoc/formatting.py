"""Currency and number formatting for rendered documents."""

import math
from typing import Optional, Union

from .errors import FormatError

Number = Union[int, float]


def format_currency(amount: Number) -> str:
    """
    Format an amount with thousands grouping and exactly two decimals.

    Raises FormatError for NaN or infinite values so that "nan" never
    ends up printed on a document.
    """
    value = float(amount)
    if not math.isfinite(value):
        raise FormatError(amount)
    text = f"{value:,.2f}"
    # -0.001 rounds to "-0.00"
    if text == "-0.00":
        return "0.00"
    return text


def format_optional_currency(value: Optional[Union[Number, str]]) -> str:
    """Format a value that may be missing; blank stays blank."""
    if value is None or value == "":
        return ""
    return format_currency(value)


def format_money(amount: Number, currency: str = "KES") -> str:
    """Format an amount with a currency prefix, e.g. 'KES 30,000.00'."""
    if not currency:
        return format_currency(amount)
    return f"{currency} {format_currency(amount)}"


def format_quantity(quantity: Optional[Number]) -> str:
    """Render a quantity without a trailing '.0' for whole numbers."""
    if quantity is None or quantity == "":
        return ""
    value = float(quantity)
    if not math.isfinite(value):
        raise FormatError(quantity)
    if value.is_integer():
        return str(int(value))
    return f"{value:g}"


def parse_formatted_number(text: Optional[str]) -> float:
    """Parse '1,234.50' back into a float; blank or junk gives 0.0."""
    if text is None:
        return 0.0
    cleaned = str(text).replace(",", "").strip()
    if not cleaned:
        return 0.0
    try:
        value = float(cleaned)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0
