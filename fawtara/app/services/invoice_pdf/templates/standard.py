"""Standard (B2B) tax invoice: full per-line VAT breakdown and ZATCA QR."""
from __future__ import annotations

from typing import Sequence

from fawtara.app.schemas.invoice import Client, Invoice, InvoiceItem, SellerInfo
from fawtara.app.services.invoice_pdf.formatters import format_amount, format_percent, safe_text
from fawtara.app.services.invoice_pdf.labels import t
from fawtara.app.services.invoice_pdf.layout import (
    InvoiceLayout,
    buyer_block,
    columns,
    footer_text,
    line_tax,
    meta_block,
    notes_text,
    seller_block,
    totals_block,
)

TEMPLATE = "standard_tax"

COLUMNS = (
    ("index", 0.5, True),
    ("description", 3.2, False),
    ("quantity", 0.8, True),
    ("unit_price", 1.2, True),
    ("tax_rate", 1.0, True),
    ("tax_amount", 1.3, True),
    ("total_incl_vat", 2.0, True),
)


def render_standard_invoice(
    invoice: Invoice,
    client: Client | None,
    items: Sequence[InvoiceItem],
    seller: SellerInfo,
    qr_png: bytes | None = None,
    lang: str = "ar",
) -> InvoiceLayout:
    rows: list[list[str]] = []
    for i, item in enumerate(items, start=1):
        net = item.line_total
        vat = line_tax(net, invoice.tax_rate)
        rows.append([
            str(i),
            safe_text(item.description),
            str(item.quantity),
            format_amount(item.unit_price),
            format_percent(invoice.tax_rate),
            format_amount(vat),
            format_amount(net + vat),
        ])

    return InvoiceLayout(
        template=TEMPLATE,
        lang=lang,
        title=t(lang, "tax_invoice"),
        meta=meta_block(invoice, lang),
        seller=seller_block(seller, lang),
        buyer=buyer_block(client, lang, with_vat=True),
        columns=columns(lang, COLUMNS),
        rows=rows,
        totals=totals_block(invoice, lang, with_tax=True),
        footer=footer_text(seller, lang),
        notes=notes_text(invoice),
        qr_png=qr_png,
        qr_caption=t(lang, "scan_to_verify") if qr_png else None,
    )
