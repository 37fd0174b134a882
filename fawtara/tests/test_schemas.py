"""Invoice schema: legacy vocabulary and null-safe money fields."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from fawtara.app.schemas.invoice import (
    DocumentKind,
    Invoice,
    InvoiceItem,
    InvoiceType,
    normalize_document_kind,
    normalize_invoice_type,
)


class TestNormalizeInvoiceType:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("standard", InvoiceType.STANDARD),
            ("standard_tax", InvoiceType.STANDARD),
            ("SIMPLIFIED_TAX", InvoiceType.SIMPLIFIED),
            ("non_tax", InvoiceType.REGULAR),
            ("regular", InvoiceType.REGULAR),
            ("whatever", InvoiceType.REGULAR),
            (None, InvoiceType.REGULAR),
        ],
    )
    def test_vocabulary(self, value: str | None, expected: InvoiceType) -> None:
        assert normalize_invoice_type(value) is expected

    def test_document_kind(self) -> None:
        assert normalize_document_kind("credit_note") is DocumentKind.CREDIT_NOTE
        assert normalize_document_kind("receipt") is DocumentKind.INVOICE
        assert normalize_document_kind(None) is DocumentKind.INVOICE


class TestInvoice:
    def test_legacy_type_key(self) -> None:
        invoice = Invoice.model_validate({"invoice_number": "A", "type": "simplified_tax"})
        assert invoice.invoice_type is InvoiceType.SIMPLIFIED

    def test_invoice_type_wins_over_legacy_type(self) -> None:
        invoice = Invoice.model_validate(
            {"invoice_number": "A", "type": "non_tax", "invoice_type": "standard"}
        )
        assert invoice.invoice_type is InvoiceType.STANDARD

    def test_record_without_type_is_standard(self) -> None:
        assert Invoice(invoice_number="A").invoice_type is InvoiceType.STANDARD

    def test_unknown_type_is_regular(self) -> None:
        invoice = Invoice(invoice_number="A", invoice_type="proforma")
        assert invoice.invoice_type is InvoiceType.REGULAR
        assert not invoice.is_tax_invoice

    def test_null_money_loads_as_zero(self) -> None:
        invoice = Invoice.model_validate(
            {"invoice_number": "A", "subtotal": None, "tax_amount": None, "total_amount": None}
        )
        assert invoice.subtotal == invoice.tax_amount == invoice.total_amount == Decimal("0")

    def test_vat_amount_alias(self) -> None:
        invoice = Invoice.model_validate({"invoice_number": "A", "vat_amount": "2250.00"})
        assert invoice.tax_amount == Decimal("2250.00")

    def test_dates_become_iso_strings(self) -> None:
        invoice = Invoice(invoice_number="A", issue_date=date(2025, 1, 1))
        assert invoice.issue_date == "2025-01-01"

    def test_unknown_status_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Invoice(invoice_number="A", status="archived")


class TestInvoiceItem:
    def test_line_total_rounds_half_up(self) -> None:
        item = InvoiceItem(description="x", quantity=3, unit_price=Decimal("0.335"))
        assert item.line_total == Decimal("1.01")

    def test_explicit_total_wins(self) -> None:
        item = InvoiceItem(description="x", quantity=2, unit_price=10, total=Decimal("15.00"))
        assert item.line_total == Decimal("15.00")

    def test_null_price_is_zero(self) -> None:
        assert InvoiceItem(quantity=1, unit_price=None).line_total == Decimal("0.00")

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_quantity_must_be_positive(self, quantity: int) -> None:
        with pytest.raises(ValidationError):
            InvoiceItem(quantity=quantity, unit_price=1)

    def test_negative_price_rejected(self) -> None:
        with pytest.raises(ValidationError):
            InvoiceItem(quantity=1, unit_price=-5)
