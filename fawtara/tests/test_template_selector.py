"""Template selection by document kind and invoice type."""

from __future__ import annotations

import pytest

from fawtara.app.services.invoice_pdf.selector import (
    TemplateName,
    requires_qr,
    resolve_template_name,
    select_template,
)
from fawtara.app.services.invoice_pdf.templates.credit_note import render_credit_note
from fawtara.app.services.invoice_pdf.templates.regular import render_regular_invoice
from fawtara.app.services.invoice_pdf.templates.simplified import render_simplified_invoice
from fawtara.app.services.invoice_pdf.templates.standard import render_standard_invoice


class TestSelectTemplate:
    @pytest.mark.parametrize(
        "invoice_type", ["standard", "simplified", "regular", "standard_tax", "bogus", None]
    )
    def test_credit_note_wins(self, invoice_type: str | None) -> None:
        assert select_template("credit_note", invoice_type) is render_credit_note

    def test_legacy_alias_equivalence(self) -> None:
        assert select_template("invoice", "standard_tax") is select_template("invoice", "standard")
        assert select_template("invoice", "standard") is render_standard_invoice

    def test_simplified(self) -> None:
        assert select_template("invoice", "simplified_tax") is render_simplified_invoice
        assert select_template("invoice", "simplified") is render_simplified_invoice

    @pytest.mark.parametrize("invoice_type", ["regular", "non_tax", "unrecognized_value", "", None])
    def test_everything_else_is_regular(self, invoice_type: str | None) -> None:
        assert select_template("invoice", invoice_type) is render_regular_invoice

    def test_unknown_document_kind_is_invoice(self) -> None:
        assert resolve_template_name("quote", "standard") is TemplateName.STANDARD_TAX
        assert resolve_template_name(None, "standard") is TemplateName.STANDARD_TAX


class TestRequiresQr:
    @pytest.mark.parametrize(
        "name,expected",
        [
            (TemplateName.STANDARD_TAX, True),
            (TemplateName.SIMPLIFIED_TAX, True),
            (TemplateName.REGULAR, False),
            (TemplateName.CREDIT_NOTE, False),
        ],
    )
    def test_qr_only_for_tax_invoices(self, name: TemplateName, expected: bool) -> None:
        assert requires_qr(name) is expected
