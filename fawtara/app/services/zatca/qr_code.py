"""Phase 1 ZATCA QR code: five TLV tags, Base64 encoded."""

from __future__ import annotations

import base64
import io
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from fawtara.app.core.config import settings
from fawtara.app.schemas.invoice import Invoice, SellerInfo
from fawtara.app.services.zatca.tlv import decode_tlv, encode_tlv

Q2 = Decimal("0.01")

# Tag order is fixed by ZATCA (tags 1-5)
ZATCA_FIELDS: tuple[str, ...] = (
    "seller_name",
    "vat_number",
    "timestamp",
    "invoice_total",
    "vat_total",
)


class ZatcaQrError(ValueError):
    """Invoice or seller data cannot produce a valid ZATCA QR payload."""


def build_tlv_base64(
    seller_name: str,
    vat_number: str,
    timestamp: str,
    invoice_total: str,
    vat_total: str,
) -> str:
    """Encode the five mandated fields as TLV (tags 1-5) and Base64 the result.

    Args:
        seller_name: Seller legal name (UTF-8, Arabic allowed)
        vat_number: Seller VAT registration number
        timestamp: ISO 8601 timestamp of the invoice
        invoice_total: Total incl. VAT with two decimals, e.g. ``"17250.00"``
        vat_total: VAT total with two decimals, e.g. ``"2250.00"``

    Returns:
        Standard (RFC 4648) Base64 string.

    Raises:
        TlvEncodingError: a field exceeds 255 UTF-8 bytes.
    """
    values = (seller_name, vat_number, timestamp, invoice_total, vat_total)
    tlv_data = b"".join(
        encode_tlv(tag, value) for tag, value in enumerate(values, start=1)
    )
    return base64.b64encode(tlv_data).decode("ascii")


def decode_tlv_base64(payload: str) -> dict[str, str]:
    """Decode a QR payload into named fields (unknown tags as ``tag_N``)."""
    records = decode_tlv(base64.b64decode(payload, validate=True))
    names = dict(enumerate(ZATCA_FIELDS, start=1))
    return {names.get(tag, f"tag_{tag}"): value for tag, value in records}


def zatca_amount(value: Decimal | float | int | str | None) -> str:
    """Format an amount with exactly two fraction digits and no grouping."""
    try:
        amount = Decimal(str(value)) if value is not None else Decimal("0")
    except InvalidOperation:
        raise ZatcaQrError(f"Invalid amount for ZATCA QR: {value!r}") from None
    if not amount.is_finite():
        raise ZatcaQrError(f"Invalid amount for ZATCA QR: {value!r}")
    return str(amount.quantize(Q2, rounding=ROUND_HALF_UP))


def zatca_timestamp(value: str | date | datetime | None) -> str:
    """Return the ISO 8601 timestamp for tag 3.

    ISO strings with a "T" separator are passed through unchanged, other
    parseable timestamps (e.g. "2025-01-01 10:00:00+00") are re-emitted in
    ISO form and bare dates are pinned to midnight UTC. Anything else raises
    ``ZatcaQrError`` rather than reaching the payload.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ZatcaQrError("Invoice issue date is required for a ZATCA QR code")
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return f"{value.isoformat()}T00:00:00Z"
    text = value.strip()
    if len(text) == 10:
        try:
            return f"{date.fromisoformat(text).isoformat()}T00:00:00Z"
        except ValueError:
            raise ZatcaQrError(f"Invalid issue date for ZATCA QR: {value!r}") from None
    iso = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        parsed = datetime.fromisoformat(iso)
    except ValueError:
        raise ZatcaQrError(f"Invalid issue date for ZATCA QR: {value!r}") from None
    # Already ISO 8601 with the "T" separator: keep the caller's exact text
    if len(text) > 10 and text[10] in "Tt":
        return text
    return parsed.isoformat()


def build_invoice_qr(invoice: Invoice, seller: SellerInfo) -> str:
    """Build the Base64 TLV payload for a tax invoice."""
    seller_name = (seller.name or "").strip()
    vat_number = (seller.vat_number or "").strip()
    if not seller_name:
        raise ZatcaQrError("Seller name is required for a ZATCA QR code")
    if not vat_number:
        raise ZatcaQrError("Seller VAT number is required for a ZATCA QR code")
    return build_tlv_base64(
        seller_name=seller_name,
        vat_number=vat_number,
        timestamp=zatca_timestamp(invoice.issue_date),
        invoice_total=zatca_amount(invoice.total_amount),
        vat_total=zatca_amount(invoice.tax_amount),
    )


def render_qr_png(
    payload: str,
    box_size: int | None = None,
    border: int | None = None,
) -> bytes:
    """Render a payload into a scannable PNG image."""
    qr = qrcode.QRCode(
        error_correction=ERROR_CORRECT_M,
        box_size=box_size or settings.QR_BOX_SIZE,
        border=settings.QR_BORDER if border is None else border,
    )
    qr.add_data(payload)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf)
    return buf.getvalue()
