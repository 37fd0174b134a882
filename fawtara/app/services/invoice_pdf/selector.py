"""Template selection by document kind and invoice type."""
from __future__ import annotations

import enum
from typing import Callable

from fawtara.app.schemas.invoice import (
    DocumentKind,
    InvoiceType,
    normalize_document_kind,
    normalize_invoice_type,
)
from fawtara.app.services.invoice_pdf.layout import InvoiceLayout
from fawtara.app.services.invoice_pdf.templates.credit_note import render_credit_note
from fawtara.app.services.invoice_pdf.templates.regular import render_regular_invoice
from fawtara.app.services.invoice_pdf.templates.simplified import render_simplified_invoice
from fawtara.app.services.invoice_pdf.templates.standard import render_standard_invoice

Renderer = Callable[..., InvoiceLayout]


class TemplateName(str, enum.Enum):
    STANDARD_TAX = "standard_tax"
    SIMPLIFIED_TAX = "simplified_tax"
    REGULAR = "regular"
    CREDIT_NOTE = "credit_note"


TEMPLATE_RENDERERS: dict[TemplateName, Renderer] = {
    TemplateName.STANDARD_TAX: render_standard_invoice,
    TemplateName.SIMPLIFIED_TAX: render_simplified_invoice,
    TemplateName.REGULAR: render_regular_invoice,
    TemplateName.CREDIT_NOTE: render_credit_note,
}

# Templates that carry a ZATCA QR code
QR_TEMPLATES = frozenset({TemplateName.STANDARD_TAX, TemplateName.SIMPLIFIED_TAX})


def resolve_template_name(
    document_kind: str | DocumentKind | None,
    invoice_type: str | InvoiceType | None,
) -> TemplateName:
    """Credit notes win over invoice type; unknown types get the regular template."""
    if normalize_document_kind(document_kind) is DocumentKind.CREDIT_NOTE:
        return TemplateName.CREDIT_NOTE
    kind = normalize_invoice_type(invoice_type)
    if kind is InvoiceType.STANDARD:
        return TemplateName.STANDARD_TAX
    if kind is InvoiceType.SIMPLIFIED:
        return TemplateName.SIMPLIFIED_TAX
    return TemplateName.REGULAR


def select_template(
    document_kind: str | DocumentKind | None,
    invoice_type: str | InvoiceType | None,
) -> Renderer:
    return TEMPLATE_RENDERERS[resolve_template_name(document_kind, invoice_type)]


def requires_qr(name: TemplateName) -> bool:
    return name in QR_TEMPLATES
