"""Shared test fixtures: a Saudi seller, a B2B buyer and sample invoices."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from fawtara.app.core.config import settings
from fawtara.app.main import app
from fawtara.app.schemas.invoice import Client, Invoice, InvoiceItem, SellerInfo
from fawtara.app.services.invoice_pdf.fonts import FALLBACK_FONTS, FontSetup, resolve_fonts

SELLER_NAME = "شركة تجريبية"
VAT_NUMBER = "310123456700003"
ISSUED_AT = "2025-01-01T10:00:00Z"

# DejaVu Sans covers the Arabic presentation forms
_DEJAVU_DIRS = (
    "/usr/share/fonts/truetype/dejavu",
    "/usr/share/fonts/dejavu",
    "/usr/share/fonts/TTF",
    "/usr/local/share/fonts",
)


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def fallback_fonts() -> FontSetup:
    return FALLBACK_FONTS


@pytest.fixture
def unicode_fonts() -> FontSetup:
    """The configured Arabic font, else a system DejaVu Sans."""
    if (Path(settings.PDF_FONT_DIR) / settings.PDF_FONT_REGULAR).is_file():
        return resolve_fonts(
            settings.PDF_FONT_DIR,
            settings.PDF_FONT_FAMILY,
            settings.PDF_FONT_REGULAR,
            settings.PDF_FONT_BOLD,
        )
    for directory in _DEJAVU_DIRS:
        if (Path(directory) / "DejaVuSans.ttf").is_file():
            return resolve_fonts(directory, "DejaVuSans", "DejaVuSans.ttf", "DejaVuSans-Bold.ttf")
    pytest.skip("no TrueType font with Arabic coverage installed")


@pytest.fixture
def seller() -> SellerInfo:
    return SellerInfo(
        name=SELLER_NAME,
        vat_number=VAT_NUMBER,
        cr_number="1010123456",
        address="King Fahd Road",
        city="Riyadh",
        country="SA",
    )


@pytest.fixture
def latin_seller(seller: SellerInfo) -> SellerInfo:
    return seller.model_copy(update={"name": "Demo Trading Co"})


@pytest.fixture
def buyer() -> Client:
    return Client(
        name="Acme Trading",
        company_name="Acme Trading LLC",
        tax_number="300000000000003",
        address="Prince Sultan St",
        city="Jeddah",
    )


@pytest.fixture
def standard_items() -> list[InvoiceItem]:
    return [
        InvoiceItem(description="Consulting", quantity=10, unit_price=Decimal("1000.00")),
        InvoiceItem(description="Support plan", quantity=5, unit_price=Decimal("1000.00")),
    ]


@pytest.fixture
def standard_invoice() -> Invoice:
    return Invoice(
        invoice_number="INV-0001",
        issue_date=ISSUED_AT,
        due_date="2025-01-31",
        status="sent",
        document_kind="invoice",
        invoice_type="standard",
        subtotal=Decimal("15000.00"),
        tax_rate=Decimal("15"),
        tax_amount=Decimal("2250.00"),
        total_amount=Decimal("17250.00"),
    )


@pytest.fixture
def regular_items() -> list[InvoiceItem]:
    return [InvoiceItem(description="Logo design", quantity=1, unit_price=Decimal("500.00"))]


@pytest.fixture
def regular_invoice() -> Invoice:
    return Invoice(
        invoice_number="INV-0002",
        issue_date="2025-02-01",
        due_date="2025-02-15",
        status="draft",
        invoice_type="regular",
        subtotal=Decimal("500.00"),
        tax_rate=Decimal("0"),
        tax_amount=Decimal("0"),
        total_amount=Decimal("500.00"),
    )


def invoice_payload(seller_name: str = SELLER_NAME, **overrides: object) -> dict:
    """JSON body for the invoice document endpoints."""
    invoice = {
        "invoice_number": "INV-0001",
        "issue_date": ISSUED_AT,
        "due_date": "2025-01-31",
        "status": "sent",
        "document_kind": "invoice",
        "invoice_type": "standard",
        "subtotal": "15000.00",
        "tax_rate": "15",
        "tax_amount": "2250.00",
        "total_amount": "17250.00",
        "notes": "Payment within 30 days",
    }
    invoice.update(overrides)
    return {
        "invoice": invoice,
        "client": {"name": "Acme Trading", "tax_number": "300000000000003"},
        "items": [
            {"description": "Consulting", "quantity": 10, "unit_price": "1000.00"},
            {"description": "Support plan", "quantity": 5, "unit_price": "1000.00"},
        ],
        "seller": {"name": seller_name, "vat_number": VAT_NUMBER},
    }
