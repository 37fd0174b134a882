"""Regular (non-tax) invoice. No VAT columns, no tax line, no QR."""
from __future__ import annotations

from typing import Sequence

from fawtara.app.schemas.invoice import Client, Invoice, InvoiceItem, SellerInfo
from fawtara.app.services.invoice_pdf.formatters import format_amount, safe_text
from fawtara.app.services.invoice_pdf.labels import t
from fawtara.app.services.invoice_pdf.layout import (
    InvoiceLayout,
    buyer_block,
    columns,
    footer_text,
    meta_block,
    notes_text,
    seller_block,
    totals_block,
)

TEMPLATE = "regular"

COLUMNS = (
    ("description", 4.5, False),
    ("quantity", 1.2, True),
    ("unit_price", 2.0, True),
    ("total", 2.3, True),
)


def render_regular_invoice(
    invoice: Invoice,
    client: Client | None,
    items: Sequence[InvoiceItem],
    seller: SellerInfo,
    lang: str = "ar",
) -> InvoiceLayout:
    rows = [
        [
            safe_text(item.description),
            str(item.quantity),
            format_amount(item.unit_price),
            format_amount(item.line_total),
        ]
        for item in items
    ]
    return InvoiceLayout(
        template=TEMPLATE,
        lang=lang,
        title=t(lang, "invoice"),
        meta=meta_block(invoice, lang),
        seller=seller_block(seller, lang),
        buyer=buyer_block(client, lang),
        columns=columns(lang, COLUMNS),
        rows=rows,
        totals=totals_block(invoice, lang, with_tax=False),
        footer=footer_text(seller, lang),
        notes=notes_text(invoice),
    )
