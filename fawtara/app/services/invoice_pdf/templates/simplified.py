"""Simplified (B2C) tax invoice: condensed table, issue time and ZATCA QR."""
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

TEMPLATE = "simplified_tax"

COLUMNS = (
    ("description", 4.5, False),
    ("quantity", 1.5, True),
    ("total", 4.0, True),
)


def render_simplified_invoice(
    invoice: Invoice,
    client: Client | None,
    items: Sequence[InvoiceItem],
    seller: SellerInfo,
    qr_png: bytes | None = None,
    lang: str = "ar",
) -> InvoiceLayout:
    rows = [
        [safe_text(item.description), str(item.quantity), format_amount(item.line_total)]
        for item in items
    ]
    return InvoiceLayout(
        template=TEMPLATE,
        lang=lang,
        title=t(lang, "simplified_tax_invoice"),
        meta=meta_block(invoice, lang, with_time=True),
        seller=seller_block(seller, lang),
        buyer=buyer_block(client, lang),
        columns=columns(lang, COLUMNS),
        rows=rows,
        totals=totals_block(invoice, lang, with_tax=True),
        footer=footer_text(seller, lang),
        notes=notes_text(invoice),
        qr_png=qr_png,
        qr_caption=t(lang, "scan_to_verify") if qr_png else None,
    )
