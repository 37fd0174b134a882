"""Document language negotiation."""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from fawtara.app.core.config import settings
from fawtara.app.services.invoice_pdf.labels import SUPPORTED_LANGUAGES


class LanguageMiddleware(BaseHTTPMiddleware):
    """Resolve the requested document language into ``request.state.language``.

    An explicit ``?lang=`` query parameter wins over ``Accept-Language``.
    Unsupported values resolve to the configured default. Endpoints that
    render in a different language (e.g. Arabic without a Unicode font) set
    ``Content-Language`` themselves; otherwise the requested one is echoed.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request.state.language = negotiate_language(
            request.query_params.get("lang"),
            request.headers.get("Accept-Language", ""),
        )
        response = await call_next(request)
        response.headers.setdefault("Content-Language", request.state.language)
        return response


def negotiate_language(requested: str | None, accept: str) -> str:
    if requested:
        tag = requested.strip().lower().split("-")[0]
        if tag in SUPPORTED_LANGUAGES:
            return tag
    return parse_preferred(accept)


def parse_preferred(header: str) -> str:
    """Return the first supported language in an ``Accept-Language`` header.

    Quality weights are ignored; clients list preferred tags first.
    """
    for part in header.split(","):
        tag = part.split(";")[0].strip().lower()
        # "ar-SA" → "ar"
        primary = tag.split("-")[0]
        if primary in SUPPORTED_LANGUAGES:
            return primary
    return settings.DEFAULT_LANGUAGE
