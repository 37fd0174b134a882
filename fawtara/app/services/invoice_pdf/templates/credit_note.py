"""Credit note reversing (part of) an earlier invoice."""
from __future__ import annotations

from typing import Sequence

from fawtara.app.schemas.invoice import Client, Invoice, InvoiceItem, SellerInfo
from fawtara.app.services.invoice_pdf.formatters import format_amount, safe_text
from fawtara.app.services.invoice_pdf.labels import t
from fawtara.app.services.invoice_pdf.layout import (
    Field,
    InvoiceLayout,
    buyer_block,
    columns,
    footer_text,
    meta_block,
    notes_text,
    seller_block,
    totals_block,
)

TEMPLATE = "credit_note"

COLUMNS = (
    ("index", 0.5, True),
    ("description", 4.0, False),
    ("quantity", 1.0, True),
    ("unit_price", 1.8, True),
    ("total", 2.2, True),
)


def original_invoice_reference(invoice: Invoice) -> str:
    """Number of the invoice being credited, falling back to its identifier."""
    for candidate in (invoice.related_invoice_number, invoice.related_invoice_id):
        if candidate and candidate.strip():
            return candidate.strip()
    return safe_text(None)


def render_credit_note(
    invoice: Invoice,
    client: Client | None,
    items: Sequence[InvoiceItem],
    seller: SellerInfo,
    lang: str = "ar",
) -> InvoiceLayout:
    rows = [
        [
            str(i),
            safe_text(item.description),
            str(item.quantity),
            format_amount(item.unit_price),
            format_amount(item.line_total),
        ]
        for i, item in enumerate(items, start=1)
    ]
    meta = meta_block(invoice, lang, number_key="credit_note_number")
    meta.insert(
        1,
        Field("original_invoice", t(lang, "original_invoice"), original_invoice_reference(invoice)),
    )
    return InvoiceLayout(
        template=TEMPLATE,
        lang=lang,
        title=t(lang, "credit_note"),
        meta=meta,
        seller=seller_block(seller, lang),
        buyer=buyer_block(client, lang, with_vat=invoice.is_tax_invoice),
        columns=columns(lang, COLUMNS),
        rows=rows,
        totals=totals_block(invoice, lang, with_tax=invoice.is_tax_invoice, total_key="credit_total"),
        footer=footer_text(seller, lang),
        notes=notes_text(invoice),
    )
