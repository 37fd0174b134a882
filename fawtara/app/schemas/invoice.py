from __future__ import annotations

import enum
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

Q2 = Decimal("0.01")
ZERO = Decimal("0")


class InvoiceStatus(str, enum.Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class DocumentKind(str, enum.Enum):
    INVOICE = "invoice"
    CREDIT_NOTE = "credit_note"


class InvoiceType(str, enum.Enum):
    STANDARD = "standard"
    SIMPLIFIED = "simplified"
    REGULAR = "regular"


# Values stored in the old ``type`` column before ``invoice_type`` existed
LEGACY_INVOICE_TYPES: dict[str, InvoiceType] = {
    "standard_tax": InvoiceType.STANDARD,
    "simplified_tax": InvoiceType.SIMPLIFIED,
    "non_tax": InvoiceType.REGULAR,
}

TAX_INVOICE_TYPES = frozenset({InvoiceType.STANDARD, InvoiceType.SIMPLIFIED})


def normalize_invoice_type(value: str | InvoiceType | None) -> InvoiceType:
    """Map current or legacy invoice type vocabulary to ``InvoiceType``.

    Unknown or empty values resolve to ``REGULAR`` so a record can always be
    rendered, just without tax treatment.
    """
    if isinstance(value, InvoiceType):
        return value
    if value is None:
        return InvoiceType.REGULAR
    key = str(value).strip().lower()
    if key in LEGACY_INVOICE_TYPES:
        return LEGACY_INVOICE_TYPES[key]
    try:
        return InvoiceType(key)
    except ValueError:
        return InvoiceType.REGULAR


def normalize_document_kind(value: str | DocumentKind | None) -> DocumentKind:
    if isinstance(value, DocumentKind):
        return value
    if value is not None and str(value).strip().lower() == DocumentKind.CREDIT_NOTE.value:
        return DocumentKind.CREDIT_NOTE
    return DocumentKind.INVOICE


def _zero_if_none(value: Any) -> Any:
    return ZERO if value is None else value


# ─── Parties ─────────────────────────────────────────────────────────────────


class Client(BaseModel):
    id: str | None = None
    name: str | None = None
    company_name: str | None = None
    tax_number: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None


class SellerInfo(BaseModel):
    name: str = Field(min_length=1)
    vat_number: str | None = None
    cr_number: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    iban: str | None = None
    footer_note: str | None = None


# ─── Invoice ─────────────────────────────────────────────────────────────────


class InvoiceItem(BaseModel):
    description: str | None = None
    quantity: int = Field(gt=0)
    unit_price: Decimal = Field(default=ZERO, ge=0)
    total: Decimal | None = None

    @field_validator("unit_price", mode="before")
    @classmethod
    def _price_default(cls, value: Any) -> Any:
        return _zero_if_none(value)

    @property
    def line_total(self) -> Decimal:
        if self.total is not None:
            return self.total
        return (self.unit_price * self.quantity).quantize(Q2, rounding=ROUND_HALF_UP)


class Invoice(BaseModel):
    id: str | None = None
    invoice_number: str
    issue_date: str | None = None
    due_date: str | None = None
    status: InvoiceStatus = InvoiceStatus.DRAFT
    document_kind: DocumentKind = DocumentKind.INVOICE
    invoice_type: InvoiceType = InvoiceType.STANDARD
    subtotal: Decimal = ZERO
    tax_rate: Decimal = ZERO
    tax_amount: Decimal = Field(
        default=ZERO, validation_alias=AliasChoices("tax_amount", "vat_amount")
    )
    total_amount: Decimal = ZERO
    notes: str | None = None
    related_invoice_id: str | None = None
    related_invoice_number: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _migrate_legacy_type(cls, data: Any) -> Any:
        """Fill ``invoice_type`` from the legacy ``type`` key when absent.

        Records carrying neither field predate the type column, when every
        invoice was a standard tax invoice.
        """
        if isinstance(data, dict) and not data.get("invoice_type"):
            data = dict(data)
            legacy = data.pop("type", None)
            data["invoice_type"] = (
                normalize_invoice_type(legacy) if legacy else InvoiceType.STANDARD
            )
        return data

    @field_validator("invoice_type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> InvoiceType:
        return normalize_invoice_type(value)

    @field_validator("document_kind", mode="before")
    @classmethod
    def _normalize_kind(cls, value: Any) -> DocumentKind:
        return normalize_document_kind(value)

    @field_validator("subtotal", "tax_rate", "tax_amount", "total_amount", mode="before")
    @classmethod
    def _money_default(cls, value: Any) -> Any:
        return _zero_if_none(value)

    @field_validator("issue_date", "due_date", mode="before")
    @classmethod
    def _iso_string(cls, value: Any) -> Any:
        if value is not None and hasattr(value, "isoformat"):
            return value.isoformat()
        return value

    @property
    def is_tax_invoice(self) -> bool:
        return self.invoice_type in TAX_INVOICE_TYPES


# ─── API payloads ────────────────────────────────────────────────────────────


class InvoiceDocumentRequest(BaseModel):
    invoice: Invoice
    client: Client | None = None
    items: list[InvoiceItem] = Field(min_length=1)
    seller: SellerInfo


class ZatcaQrRequest(BaseModel):
    invoice: Invoice
    seller: SellerInfo


class ZatcaQrOut(BaseModel):
    payload: str
    fields: dict[str, str]
