"""Generate realistic sample documents and cash book transactions."""

from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple
import numpy as np
from faker import Faker

from .cash_book import CashBookTxn
from .config import DEFAULT_TERMS, CompanyProfile
from .document_model import DocumentData, Item, LineItem, SectionHeader, SectionSummary, SectionTotal


# section key -> (default display name, catalogue of (description, unit, price range))
SECTION_CATALOGUE: Dict[str, Tuple[str, List[Tuple[str, str, Tuple[float, float]]]]] = {
    "cabinet": ("General", [
        ("Base cabinet carcass 600mm", "pcs", (6000, 12000)),
        ("Wall cabinet carcass 800mm", "pcs", (5000, 10000)),
        ("Tall pantry unit", "pcs", (18000, 35000)),
        ("MDF door, high gloss", "pcs", (2500, 6000)),
        ("Soft-close hinges", "pairs", (350, 900)),
        ("Plinth board", "m", (800, 1500)),
    ]),
    "worktop": ("Worktop", [
        ("Granite slab", "pcs", (12000, 30000)),
        ("Quartz worktop", "m", (9000, 20000)),
        ("Sink cut-out and polishing", "pcs", (2000, 4500)),
        ("Backsplash strip", "m", (1500, 3500)),
    ]),
    "accessories": ("Accessories", [
        ("Cutlery tray insert", "pcs", (1200, 3000)),
        ("Pull-out corner carousel", "pcs", (9000, 18000)),
        ("Aluminium handle 160mm", "pcs", (250, 800)),
        ("LED strip lighting", "m", (900, 2200)),
    ]),
    "appliances": ("Appliances", [
        ("Built-in oven", "pcs", (45000, 90000)),
        ("Gas hob, 4 burner", "pcs", (25000, 55000)),
        ("Chimney hood", "pcs", (30000, 60000)),
    ]),
    "wardrobes": ("Wardrobes", [
        ("Sliding wardrobe door", "pcs", (15000, 30000)),
        ("Wardrobe carcass 2.4m", "pcs", (20000, 45000)),
        ("Hanging rail", "pcs", (600, 1500)),
    ]),
    "tvunit": ("TV Unit", [
        ("Floating TV console", "pcs", (18000, 40000)),
        ("Wall panel, fluted", "sqm", (4000, 9000)),
    ]),
}


def generate_line_items(
    rng: np.random.Generator,
    num_sections: int = 3,
    items_per_section: Tuple[int, int] = (2, 6),
    section_names: Optional[Dict[str, str]] = None,
) -> Tuple[List[LineItem], List[SectionTotal], float]:
    """
    Generate a sectioned list of line items.

    Returns (items, section_totals, grand_total).
    """
    keys = list(SECTION_CATALOGUE.keys())
    num_sections = max(0, min(num_sections, len(keys)))
    chosen = [keys[i] for i in sorted(rng.choice(len(keys), size=num_sections, replace=False))]

    items: List[LineItem] = []
    section_totals: List[SectionTotal] = []
    grand_total = 0.0

    for key in chosen:
        default_name, catalogue = SECTION_CATALOGUE[key]
        name = (section_names or {}).get(key, default_name)
        items.append(SectionHeader(description=name))

        section_total = 0.0
        count = int(rng.integers(items_per_section[0], items_per_section[1] + 1))
        for idx in rng.choice(len(catalogue), size=min(count, len(catalogue)), replace=False):
            description, unit, (low, high) = catalogue[int(idx)]
            quantity = float(rng.integers(1, 6))
            unit_price = round(float(rng.uniform(low, high)), -1)
            total = round(quantity * unit_price, 2)
            section_total += total
            items.append(Item(
                description=description,
                unit=unit,
                quantity=quantity,
                unit_price=unit_price,
                total=total,
            ))

        section_total = round(section_total, 2)
        items.append(SectionSummary(description=f"{name} Total", total=section_total))
        section_totals.append(SectionTotal(name=name, total=section_total))
        grand_total += section_total

    return items, section_totals, round(grand_total, 2)


def generate_document_data(
    rng: np.random.Generator,
    company: Optional[CompanyProfile] = None,
    num_sections: Optional[int] = None,
    terms: Optional[List[str]] = None,
    currency: str = "KES",
) -> DocumentData:
    """Generate a complete quotation-shaped DocumentData."""
    fake = Faker()
    fake.seed_instance(int(rng.integers(0, 2**31)))
    company = company or CompanyProfile()

    if num_sections is None:
        num_sections = int(rng.integers(1, 5))
    items, section_totals, total = generate_line_items(rng, num_sections)

    issued = date(2025, 1, 1) + timedelta(days=int(rng.integers(0, 365)))

    return DocumentData(
        company_name=company.name,
        company_location=f"Location: {company.location}",
        company_phone=f"Tel: {company.phone}",
        company_email=f"Email: {company.email}",
        client_name=fake.name(),
        site_location=fake.city(),
        mobile_no=f"+2547{int(rng.integers(10000000, 99999999))}",
        date=issued.strftime("%d/%m/%Y"),
        items=items,
        section_totals=section_totals,
        total=total,
        currency=currency,
        terms=list(DEFAULT_TERMS if terms is None else terms),
        prepared_by=fake.name(),
        approved_by=fake.name(),
    )


def generate_cash_book_transactions(
    rng: np.random.Generator,
    num_receipts: int = 10,
    num_payments: int = 10,
    start: date = date(2025, 1, 1),
) -> Tuple[List[CashBookTxn], List[CashBookTxn]]:
    """Generate receipts (money in) and payments (money out), sorted by date."""
    fake = Faker()
    fake.seed_instance(int(rng.integers(0, 2**31)))

    def _txn(prefix: str, particulars: str) -> Tuple[date, CashBookTxn]:
        when = start + timedelta(days=int(rng.integers(0, 28)))
        amount = round(float(rng.lognormal(np.log(15000), 0.6)), 2)
        via_bank = rng.random() < 0.6
        discount = round(amount * 0.02, 2) if rng.random() < 0.15 else 0.0
        return when, CashBookTxn(
            date=when.strftime("%d/%m"),
            particulars=particulars,
            ref=f"{prefix}{int(rng.integers(1000, 9999))}",
            cash=0.0 if via_bank else amount,
            bank=amount if via_bank else 0.0,
            discount=discount,
        )

    receipts = [_txn("RC", fake.name()) for _ in range(num_receipts)]
    payments = [_txn("PV", fake.company()) for _ in range(num_payments)]
    receipts.sort(key=lambda pair: pair[0])
    payments.sort(key=lambda pair: pair[0])
    return [txn for _, txn in receipts], [txn for _, txn in payments]
