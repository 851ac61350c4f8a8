"""Document data model and the row builder that feeds pagination."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .formatting import format_optional_currency, format_quantity, parse_formatted_number
from .text_metrics import BOLD, REGULAR, AverageCharWidthMetrics, TextMetrics


@dataclass(frozen=True)
class Item:
    """A priced line on the document."""
    description: str
    item_number: str = ""
    unit: str = ""
    quantity: Optional[float] = None
    unit_price: Optional[float] = None
    total: Optional[float] = None


@dataclass(frozen=True)
class SectionHeader:
    """Category banner such as 'WORKTOP'."""
    description: str


@dataclass(frozen=True)
class SectionSummary:
    """Subtotal line closing a section."""
    description: str
    total: float


LineItem = Union[Item, SectionHeader, SectionSummary]


@dataclass(frozen=True)
class SectionTotal:
    """One line of the footer totals box."""
    name: str
    total: float


@dataclass
class DocumentData:
    """Everything needed to lay out one business document."""
    # Company
    company_name: str = ""
    company_location: str = ""
    company_phone: str = ""
    company_email: str = ""
    company_logo: str = ""  # inline data URI

    # Client
    client_name: str = ""
    site_location: str = ""
    mobile_no: str = ""
    date: str = ""

    # Document identity
    document_number: str = ""
    original_document_number: Optional[str] = None
    document_title: str = "QUOTATION"
    number_label: str = "Quotation No."

    items: List[LineItem] = field(default_factory=list)
    section_names: Dict[str, str] = field(default_factory=dict)
    section_totals: List[SectionTotal] = field(default_factory=list)
    subtotal: Optional[float] = None
    vat: Optional[float] = None
    vat_percentage: Optional[float] = None
    total: float = 0.0
    currency: str = "KES"

    notes: str = ""
    terms: List[str] = field(default_factory=list)
    prepared_by: str = ""
    approved_by: str = ""
    watermark: str = ""  # inline data URI

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DocumentData":
        """Build from a plain mapping (as loaded from YAML or JSON)."""
        values = dict(data)
        values["items"] = [line_item_from_dict(entry) for entry in values.get("items") or []]
        values["section_totals"] = [
            section_total_from_dict(entry) for entry in values.get("section_totals") or []
        ]
        values["section_names"] = dict(values.get("section_names") or {})
        terms = values.get("terms") or []
        if isinstance(terms, str):
            terms = [line for line in terms.split("\n") if line.strip()]
        values["terms"] = [str(line) for line in terms]
        if "total" in values:
            values["total"] = _to_float(values["total"])
        for key in ("subtotal", "vat", "vat_percentage"):
            if key in values:
                values[key] = _optional_float(values[key])

        known = set(cls.__dataclass_fields__)
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown document fields: {sorted(unknown)}")
        return cls(**values)

    def tax_lines(self) -> List[Tuple[str, str, float]]:
        """(key, label, amount) for the Sub Total and V.A.T lines that are set."""
        lines = []
        if self.subtotal is not None:
            lines.append(("subtotal", "Sub Total:", self.subtotal))
        if self.vat is not None:
            label = "V.A.T:"
            if self.vat_percentage is not None:
                label = f"V.A.T ({format_quantity(self.vat_percentage)}%):"
            lines.append(("vat", label, self.vat))
        return lines


def _require_mapping(entry: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(entry, Mapping):
        raise ValueError(f"Each {what} entry must be a mapping, got {entry!r}")
    return entry


def section_total_from_dict(entry: Mapping[str, Any]) -> SectionTotal:
    """Convert a {name, total} mapping into a SectionTotal."""
    entry = _require_mapping(entry, "section_totals")
    return SectionTotal(name=str(entry.get("name", "")), total=_to_float(entry.get("total")))


def _to_float(value: Any) -> float:
    if isinstance(value, str):
        return parse_formatted_number(value)
    if value is None:
        return 0.0
    return float(value)


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return _to_float(value)


def line_item_from_dict(entry: Mapping[str, Any]) -> LineItem:
    """
    Convert a mapping into a LineItem.

    Accepts either an explicit ``type`` key ("item", "section",
    "section_summary") or the ``is_section`` / ``is_section_summary``
    flags used by older exports.
    """
    entry = _require_mapping(entry, "items")
    kind = entry.get("type")
    if kind is None:
        if entry.get("is_section"):
            kind = "section"
        elif entry.get("is_section_summary"):
            kind = "section_summary"
        else:
            kind = "item"

    description = str(entry.get("description", "") or "")
    if kind == "section":
        return SectionHeader(description=description)
    if kind == "section_summary":
        return SectionSummary(description=description, total=_to_float(entry.get("total")))
    if kind == "item":
        return Item(
            description=description,
            item_number=str(entry.get("item_number", "") or ""),
            unit=str(entry.get("unit", "") or ""),
            quantity=_optional_float(entry.get("quantity")),
            unit_price=_optional_float(entry.get("unit_price")),
            total=_optional_float(entry.get("total")),
        )
    raise ValueError(f"Unknown line item type: {kind!r}")


class RowKind(Enum):
    """Kinds of rows in the item table."""
    ITEM = "ITEM"
    SECTION = "SECTION"
    SECTION_SUMMARY = "SECTION_SUMMARY"


# Cell positions within RenderRow.cells
CELL_ITEM_NUMBER = 0
CELL_DESCRIPTION = 1
CELL_UNIT = 2
CELL_QUANTITY = 3
CELL_UNIT_PRICE = 4
CELL_TOTAL = 5


@dataclass(frozen=True)
class RenderRow:
    """A render-ready table row with pre-formatted cell strings."""
    kind: RowKind
    cells: Tuple[str, str, str, str, str, str]

    @property
    def is_section(self) -> bool:
        return self.kind == RowKind.SECTION

    @property
    def is_section_summary(self) -> bool:
        return self.kind == RowKind.SECTION_SUMMARY

    @property
    def description(self) -> str:
        return self.cells[CELL_DESCRIPTION]

    @property
    def total(self) -> str:
        return self.cells[CELL_TOTAL]


def resolve_section_name(name: str, section_names: Optional[Mapping[str, str]]) -> str:
    """Look up a custom display name for a section, ignoring case."""
    if not section_names:
        return name
    if name in section_names:
        return section_names[name]
    lowered = name.strip().lower()
    for key, display in section_names.items():
        if key.strip().lower() == lowered:
            return display
    return name


def build_rows(
    items: List[LineItem],
    section_names: Optional[Mapping[str, str]] = None,
) -> List[RenderRow]:
    """
    Map line items to render rows without reordering them.

    Items with a blank item number are numbered sequentially; the counter
    only advances on Item entries.
    """
    rows: List[RenderRow] = []
    item_counter = 0

    for entry in items:
        if isinstance(entry, SectionHeader):
            title = resolve_section_name(entry.description, section_names).upper()
            rows.append(RenderRow(RowKind.SECTION, ("", title, "", "", "", "")))
        elif isinstance(entry, SectionSummary):
            rows.append(RenderRow(
                RowKind.SECTION_SUMMARY,
                ("", entry.description, "", "", "", format_optional_currency(entry.total)),
            ))
        elif isinstance(entry, Item):
            item_counter += 1
            number = entry.item_number or str(item_counter)
            rows.append(RenderRow(RowKind.ITEM, (
                number,
                entry.description,
                entry.unit,
                format_quantity(entry.quantity),
                format_optional_currency(entry.unit_price),
                format_optional_currency(entry.total),
            )))
        else:
            raise TypeError(f"Unsupported line item: {entry!r}")

    return rows


# Client info box geometry (mm)
CLIENT_BOX_X = 15.0
CLIENT_BOX_Y = 66.0
CLIENT_BOX_HEIGHT = 26.0
CLIENT_LABEL_X = 16.0
CLIENT_FIRST_ROW_Y = 69.0
CLIENT_ROW_STEP = 6.0
CLIENT_FONT_SIZE = 8
LABEL_VALUE_GAP = 6.0
CLIENT_BOX_PADDING = 1.0

CLIENT_LABELS = (
    ("client_name", "CLIENT NAME:"),
    ("site_location", "SITE LOCATION:"),
    ("mobile_no", "MOBILE NO:"),
    ("date", "DATE:"),
)


@dataclass
class ClientField:
    """Placement of one label/value pair inside the client box."""
    key: str
    label: str
    value: str
    y: float
    label_x: float
    label_width: float
    value_x: float
    value_width: float


@dataclass
class ClientInfoBox:
    """Computed client info box and its field placements."""
    x: float
    y: float
    width: float
    height: float
    fields: List[ClientField]


def compute_client_info_box(
    values: Mapping[str, str],
    metrics: Optional[TextMetrics] = None,
) -> ClientInfoBox:
    """
    Size the client info box so every label/value pair fits.

    The width is the widest label + gap + value over all pairs, plus
    padding. Each value starts right after its own label and the gap.
    """
    metrics = metrics or AverageCharWidthMetrics()
    fields: List[ClientField] = []
    widest = 0.0

    for idx, (key, label) in enumerate(CLIENT_LABELS):
        value = str(values.get(key) or "")
        label_width = metrics.estimate_width(label, CLIENT_FONT_SIZE, BOLD)
        value_width = metrics.estimate_width(value, CLIENT_FONT_SIZE, REGULAR)
        widest = max(widest, label_width + LABEL_VALUE_GAP + value_width)
        fields.append(ClientField(
            key=key,
            label=label,
            value=value,
            y=CLIENT_FIRST_ROW_Y + idx * CLIENT_ROW_STEP,
            label_x=CLIENT_LABEL_X,
            label_width=label_width,
            value_x=CLIENT_LABEL_X + label_width + LABEL_VALUE_GAP,
            value_width=value_width,
        ))

    return ClientInfoBox(
        x=CLIENT_BOX_X,
        y=CLIENT_BOX_Y,
        width=widest + CLIENT_BOX_PADDING,
        height=CLIENT_BOX_HEIGHT,
        fields=fields,
    )


def client_values(data: DocumentData) -> Dict[str, str]:
    """Pull the four client fields out of a document."""
    return {
        "client_name": data.client_name,
        "site_location": data.site_location,
        "mobile_no": data.mobile_no,
        "date": data.date,
    }
