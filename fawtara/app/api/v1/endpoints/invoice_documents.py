from __future__ import annotations

import io
import logging

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import StreamingResponse

from fawtara.app.schemas.invoice import InvoiceDocumentRequest, ZatcaQrOut, ZatcaQrRequest
from fawtara.app.services.invoice_pdf.fonts import FontRegistrationError
from fawtara.app.services.invoice_pdf.renderer import render_invoice_pdf
from fawtara.app.services.invoice_pdf.selector import requires_qr, resolve_template_name
from fawtara.app.services.zatca.qr_code import build_invoice_qr, decode_tlv_base64

logger = logging.getLogger(__name__)

router = APIRouter()

_PDF_MIME = "application/pdf"


@router.post("/pdf")
def invoice_pdf(
    payload: InvoiceDocumentRequest,
    request: Request,
) -> StreamingResponse:
    """Render the invoice PDF.

    The language comes from ``?lang=`` or ``Accept-Language``, resolved by
    ``LanguageMiddleware``.
    """
    try:
        rendered = render_invoice_pdf(
            payload.invoice,
            payload.client,
            payload.items,
            payload.seller,
            lang=request.state.language,
        )
    except FontRegistrationError as e:
        logger.error("Invoice %s not rendered: %s", payload.invoice.invoice_number, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    except ValueError as e:
        # TLV/QR encoding failures: the user must see why no PDF was produced
        logger.warning("Invoice %s rejected: %s", payload.invoice.invoice_number, e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return StreamingResponse(
        io.BytesIO(rendered.content),
        media_type=_PDF_MIME,
        headers={
            "Content-Disposition": f'attachment; filename="{rendered.filename}"',
            "Content-Language": rendered.lang,
            "X-Invoice-Template": rendered.template.value,
        },
    )


@router.post("/qr", response_model=ZatcaQrOut)
def invoice_qr(payload: ZatcaQrRequest) -> ZatcaQrOut:
    invoice = payload.invoice
    if not requires_qr(resolve_template_name(invoice.document_kind, invoice.invoice_type)):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="ZATCA QR codes apply to standard and simplified tax invoices only",
        )
    try:
        qr = build_invoice_qr(payload.invoice, payload.seller)
    except ValueError as e:
        logger.warning("ZATCA QR rejected for %s: %s", payload.invoice.invoice_number, e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ZatcaQrOut(payload=qr, fields=decode_tlv_base64(qr))
