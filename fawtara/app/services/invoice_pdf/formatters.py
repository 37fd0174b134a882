"""Null-safe text, money and date formatting shared by all invoice templates.

None of these functions raise: PDF text cells must always receive a
printable string.
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from fawtara.app.core.config import settings

PLACEHOLDER = "—"
Q2 = Decimal("0.01")


def safe_text(value: Any) -> str:
    """Trimmed ``str(value)``, or the placeholder for None/blank input."""
    if value is None:
        return PLACEHOLDER
    text = str(value).strip()
    return text or PLACEHOLDER


def _to_decimal(amount: Any) -> Decimal | None:
    if amount is None or isinstance(amount, bool):
        return None
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        return None
    return value if value.is_finite() else None


def format_amount(amount: Any) -> str:
    """``1234.5`` -> ``"1,234.50"``; non-finite input -> ``"0.00"``."""
    value = _to_decimal(amount)
    if value is None:
        return "0.00"
    return f"{value.quantize(Q2, rounding=ROUND_HALF_UP):,.2f}"


def format_currency(amount: Any, currency: str | None = None) -> str:
    """``1234.5`` -> ``"SAR 1,234.50"``; non-finite input -> ``"0.00"``."""
    if _to_decimal(amount) is None:
        return "0.00"
    return f"{currency or settings.CURRENCY} {format_amount(amount)}"


def format_percent(rate: Any) -> str:
    value = _to_decimal(rate)
    if value is None:
        return "0%"
    text = f"{value.quantize(Q2, rounding=ROUND_HALF_UP):f}".rstrip("0").rstrip(".")
    return f"{text}%"


def _parse(value: Any) -> date | None:
    if isinstance(value, (datetime, date)):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def format_date(value: str | date | datetime | None) -> str:
    """Render as ``dd/mm/yyyy``; placeholder for missing or invalid input."""
    parsed = _parse(value)
    if parsed is None:
        return PLACEHOLDER
    return parsed.strftime("%d/%m/%Y")


def format_datetime(value: str | date | datetime | None) -> str:
    """Render as ``dd/mm/yyyy HH:MM``; bare dates render at 00:00."""
    parsed = _parse(value)
    if parsed is None:
        return PLACEHOLDER
    if not isinstance(parsed, datetime):
        parsed = datetime(parsed.year, parsed.month, parsed.day)
    return parsed.strftime("%d/%m/%Y %H:%M")
