"""Font resolution for invoice PDFs.

Font files are located once per process. Each new document then registers
the resolved files with fpdf2. When the Unicode font is missing the caller
gets an explicit Helvetica fallback (``FontSetup.unicode`` is False), or an
error if the font is mandatory.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from fpdf import FPDF

from fawtara.app.core.config import settings

logger = logging.getLogger(__name__)

FALLBACK_FAMILY = "Helvetica"


class FontRegistrationError(RuntimeError):
    """The configured Unicode font is required but could not be found."""


@dataclass(frozen=True)
class FontSetup:
    family: str
    unicode: bool
    regular_path: Path | None = None
    bold_path: Path | None = None


FALLBACK_FONTS = FontSetup(family=FALLBACK_FAMILY, unicode=False)


@lru_cache(maxsize=8)
def resolve_fonts(
    font_dir: str,
    family: str,
    regular: str,
    bold: str,
    required: bool = False,
) -> FontSetup:
    """Locate the Unicode font files. Returns the fallback setup when missing.

    A missing bold face reuses the regular file.
    """
    regular_path = Path(font_dir) / regular
    bold_path = Path(font_dir) / bold
    if not regular_path.is_file():
        if required:
            raise FontRegistrationError(f"PDF font not found: {regular_path}")
        logger.warning(
            "PDF font not found: %s, falling back to %s (Latin-1 only)",
            regular_path,
            FALLBACK_FAMILY,
        )
        return FALLBACK_FONTS
    if not bold_path.is_file():
        logger.warning("Bold PDF font not found: %s, using regular face", bold_path)
        bold_path = regular_path
    return FontSetup(
        family=family, unicode=True, regular_path=regular_path, bold_path=bold_path
    )


def load_font_setup() -> FontSetup:
    """Resolve fonts from the application settings."""
    return resolve_fonts(
        settings.PDF_FONT_DIR,
        settings.PDF_FONT_FAMILY,
        settings.PDF_FONT_REGULAR,
        settings.PDF_FONT_BOLD,
        settings.PDF_REQUIRE_UNICODE_FONT,
    )


def apply_fonts(pdf: FPDF, setup: FontSetup) -> str:
    """Register the setup's font faces on *pdf*. Returns the family to use."""
    if setup.unicode:
        pdf.add_font(setup.family, "", str(setup.regular_path))
        pdf.add_font(setup.family, "B", str(setup.bold_path))
    return setup.family
