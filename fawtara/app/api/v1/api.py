from fastapi import APIRouter

from fawtara.app.api.v1.endpoints import invoice_documents

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(invoice_documents.router, prefix="/invoices", tags=["invoices"])
