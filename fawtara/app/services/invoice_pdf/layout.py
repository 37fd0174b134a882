"""Document layout shared by all invoice templates.

A template turns invoice data into an ``InvoiceLayout``: every value is
already a display string, so the PDF writer only draws. Keys are kept next
to translated labels so callers can inspect the structure independent of
language.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from fawtara.app.schemas.invoice import Client, Invoice, SellerInfo
from fawtara.app.services.invoice_pdf.formatters import (
    format_currency,
    format_date,
    format_datetime,
    format_percent,
    safe_text,
)
from fawtara.app.services.invoice_pdf.labels import t

Q2 = Decimal("0.01")


@dataclass
class Field:
    key: str
    label: str
    value: str


@dataclass
class Column:
    key: str
    label: str
    weight: float
    numeric: bool = False


@dataclass
class TotalLine:
    key: str
    label: str
    value: str
    emphasis: bool = False


@dataclass
class InvoiceLayout:
    template: str
    lang: str
    title: str
    meta: list[Field]
    seller: list[Field]
    buyer: list[Field]
    columns: list[Column]
    rows: list[list[str]]
    totals: list[TotalLine]
    footer: str
    notes: str | None = None
    qr_png: bytes | None = None
    qr_caption: str | None = None

    @property
    def column_keys(self) -> list[str]:
        return [c.key for c in self.columns]

    @property
    def total_keys(self) -> list[str]:
        return [line.key for line in self.totals]

    @property
    def final_total(self) -> TotalLine:
        return self.totals[-1]


# ── Block builders ──────────────────────────────────────────────────────────


def _field(lang: str, key: str, value: object) -> Field:
    return Field(key=key, label=t(lang, key), value=safe_text(value))


def seller_block(seller: SellerInfo, lang: str) -> list[Field]:
    address = ", ".join(
        part.strip() for part in (seller.address, seller.city, seller.country)
        if part and part.strip()
    )
    fields = [
        _field(lang, "name", seller.name),
        _field(lang, "vat_number", seller.vat_number),
        _field(lang, "cr_number", seller.cr_number),
        _field(lang, "address", address),
    ]
    if seller.iban and seller.iban.strip():
        fields.append(_field(lang, "iban", seller.iban))
    return fields


def buyer_block(client: Client | None, lang: str, with_vat: bool = False) -> list[Field]:
    if client is None:
        client = Client()
    address = ", ".join(
        part.strip() for part in (client.address, client.city) if part and part.strip()
    )
    fields = [
        _field(lang, "name", client.name),
        _field(lang, "company", client.company_name),
    ]
    if with_vat:
        fields.append(_field(lang, "vat_number", client.tax_number))
    fields.append(_field(lang, "address", address))
    return fields


def meta_block(
    invoice: Invoice,
    lang: str,
    number_key: str = "invoice_number",
    with_time: bool = False,
) -> list[Field]:
    if with_time:
        issued = Field("issue_datetime", t(lang, "issue_datetime"), format_datetime(invoice.issue_date))
    else:
        issued = Field("issue_date", t(lang, "issue_date"), format_date(invoice.issue_date))
    return [
        _field(lang, number_key, invoice.invoice_number),
        issued,
        Field("due_date", t(lang, "due_date"), format_date(invoice.due_date)),
        Field("status", t(lang, "status"), t(lang, f"status_{invoice.status.value}")),
    ]


def totals_block(
    invoice: Invoice,
    lang: str,
    with_tax: bool,
    total_key: str = "grand_total",
) -> list[TotalLine]:
    lines = [
        TotalLine("subtotal", t(lang, "subtotal"), format_currency(invoice.subtotal)),
    ]
    if with_tax:
        lines.append(
            TotalLine(
                "vat",
                f"{t(lang, 'vat')} ({format_percent(invoice.tax_rate)})",
                format_currency(invoice.tax_amount),
            )
        )
    lines.append(
        TotalLine(total_key, t(lang, total_key), format_currency(invoice.total_amount), emphasis=True)
    )
    return lines


def notes_text(invoice: Invoice) -> str | None:
    if invoice.notes is None or not invoice.notes.strip():
        return None
    return invoice.notes.strip()


def footer_text(seller: SellerInfo, lang: str) -> str:
    if seller.footer_note and seller.footer_note.strip():
        return seller.footer_note.strip()
    return t(lang, "thanks")


def columns(lang: str, definitions: Sequence[tuple[str, float, bool]]) -> list[Column]:
    return [Column(key, t(lang, key), weight, numeric) for key, weight, numeric in definitions]


def line_tax(line_total: Decimal, rate: Decimal) -> Decimal:
    return (line_total * rate / Decimal("100")).quantize(Q2, rounding=ROUND_HALF_UP)
