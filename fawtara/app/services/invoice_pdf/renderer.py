"""Invoice PDF entry point: select template → build QR (tax types) → lay out → write."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Sequence

from fawtara.app.core.config import settings
from fawtara.app.schemas.invoice import Client, Invoice, InvoiceItem, SellerInfo
from fawtara.app.services.invoice_pdf.fonts import FontRegistrationError, FontSetup, load_font_setup
from fawtara.app.services.invoice_pdf.labels import SUPPORTED_LANGUAGES
from fawtara.app.services.invoice_pdf.layout import InvoiceLayout
from fawtara.app.services.invoice_pdf.selector import (
    TemplateName,
    requires_qr,
    resolve_template_name,
    select_template,
)
from fawtara.app.services.invoice_pdf.writer import needs_unicode_font, write_pdf
from fawtara.app.services.zatca.qr_code import build_invoice_qr, render_qr_png

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedInvoice:
    content: bytes
    invoice_number: str
    template: TemplateName
    lang: str
    fonts: FontSetup
    qr_payload: str | None = None

    @property
    def filename(self) -> str:
        stem = re.sub(r"[^A-Za-z0-9._-]+", "_", self.invoice_number).strip("_") or "invoice"
        return f"{stem}.pdf"


def resolve_language(lang: str | None, fonts: FontSetup) -> str:
    """Pick the output language; Arabic needs the Unicode font."""
    language = (lang or settings.DEFAULT_LANGUAGE).lower()
    if language not in SUPPORTED_LANGUAGES:
        language = "en"
    if language == "ar" and not fonts.unicode:
        logger.warning("Arabic PDF requested without a Unicode font, rendering English labels")
        return "en"
    return language


def build_invoice_layout(
    invoice: Invoice,
    client: Client | None,
    items: Sequence[InvoiceItem],
    seller: SellerInfo,
    lang: str = "ar",
) -> tuple[TemplateName, InvoiceLayout, str | None]:
    """Select the template and build its layout. Returns (template, layout, qr payload).

    Raises ``ZatcaQrError``/``TlvEncodingError`` when a tax invoice cannot
    carry a valid QR code.
    """
    name = resolve_template_name(invoice.document_kind, invoice.invoice_type)
    renderer = select_template(invoice.document_kind, invoice.invoice_type)
    if not requires_qr(name):
        return name, renderer(invoice, client, items, seller, lang=lang), None

    payload = build_invoice_qr(invoice, seller)
    layout = renderer(invoice, client, items, seller, qr_png=render_qr_png(payload), lang=lang)
    return name, layout, payload


def render_invoice_pdf(
    invoice: Invoice,
    client: Client | None,
    items: Sequence[InvoiceItem],
    seller: SellerInfo,
    lang: str | None = None,
    fonts: FontSetup | None = None,
) -> RenderedInvoice:
    """Render a complete invoice document.

    Raises:
        FontRegistrationError: the Unicode font is mandatory and missing, or
            the invoice data contains text core fonts cannot draw.
        ZatcaQrError, TlvEncodingError: the QR payload cannot be encoded.
    """
    fonts = fonts or load_font_setup()
    language = resolve_language(lang, fonts)
    name, layout, payload = build_invoice_layout(invoice, client, items, seller, lang=language)
    if not fonts.unicode and needs_unicode_font(layout):
        # Core fonts would print these characters as "?"
        raise FontRegistrationError(
            f"Invoice {invoice.invoice_number} contains non-Latin text but no Unicode font "
            f"is available; install {settings.PDF_FONT_REGULAR} in {settings.PDF_FONT_DIR}"
        )
    content = write_pdf(layout, fonts)
    logger.info(
        "Rendered %s PDF for invoice %s (%d bytes, %s)",
        name.value,
        invoice.invoice_number,
        len(content),
        language,
    )
    return RenderedInvoice(
        content=content,
        invoice_number=invoice.invoice_number,
        template=name,
        lang=language,
        fonts=fonts,
        qr_payload=payload,
    )
