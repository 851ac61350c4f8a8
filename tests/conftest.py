"""
Pytest configuration for bizdoc
"""

import base64
import io
import logging
import sys

import numpy as np
import pytest

from bizdoc.document_model import DocumentData, Item, SectionHeader, SectionSummary, SectionTotal


@pytest.fixture(autouse=True)
def configure_logging():
    """Keep test output quiet unless something goes wrong."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def worktop_document():
    """Single-section quotation: header, one item, one summary."""
    return DocumentData(
        company_name="CABINET MASTER STYLES & FINISHES",
        company_location="Location: Ruiru Eastern By-Pass",
        company_phone="Tel: +254729554475",
        company_email="Email: cabinetmasterstyles@gmail.com",
        client_name="Jane Wanjiru",
        site_location="Kiambu",
        mobile_no="+254712345678",
        date="12/03/2025",
        document_number="QT-0001",
        items=[
            SectionHeader("WORKTOP"),
            Item(item_number="1", description="Granite slab", unit="pcs",
                 quantity=2, unit_price=15000, total=30000),
            SectionSummary("Worktop Total", 30000),
        ],
        section_totals=[SectionTotal("Worktop", 30000)],
        total=30000,
        terms=["1. All sales final."],
    )


@pytest.fixture
def make_items():
    """Factory for N plain priced items."""
    def _make(count):
        return [
            Item(description=f"Line {i + 1}", unit="pcs", quantity=1, unit_price=100.0, total=100.0)
            for i in range(count)
        ]
    return _make


@pytest.fixture
def png_data_uri():
    """A tiny PNG encoded as a data URI."""
    from PIL import Image

    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), (176, 106, 43)).save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")
