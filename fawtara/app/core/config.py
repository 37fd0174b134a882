from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_FONT_DIR = Path(__file__).resolve().parent.parent / "services" / "invoice_pdf" / "fonts"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Display currency for totals (ISO 4217)
    CURRENCY: str = "SAR"
    DEFAULT_LANGUAGE: str = "ar"

    # Unicode font used for Arabic output; Helvetica is the fallback
    PDF_FONT_DIR: str = str(_DEFAULT_FONT_DIR)
    PDF_FONT_FAMILY: str = "NotoSansArabic"
    PDF_FONT_REGULAR: str = "NotoSansArabic-Regular.ttf"
    PDF_FONT_BOLD: str = "NotoSansArabic-Bold.ttf"
    PDF_REQUIRE_UNICODE_FONT: bool = False

    # QR image rendering
    QR_BOX_SIZE: int = 10
    QR_BORDER: int = 2

    CORS_ORIGINS: list[str] = ["http://localhost:3000"]


settings = Settings()
