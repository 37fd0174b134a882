"""Draw an ``InvoiceLayout`` into PDF bytes using fpdf2."""
from __future__ import annotations

import io
from typing import Sequence, TypeVar

import arabic_reshaper
from bidi.algorithm import get_display
from fpdf import FPDF
from fpdf.enums import MethodReturnValue, XPos, YPos

from fawtara.app.services.invoice_pdf.fonts import FALLBACK_FAMILY, FontSetup, apply_fonts
from fawtara.app.services.invoice_pdf.formatters import PLACEHOLDER
from fawtara.app.services.invoice_pdf.labels import t
from fawtara.app.services.invoice_pdf.layout import Column, Field, InvoiceLayout

T = TypeVar("T")

# ── Shared helpers ──────────────────────────────────────────────────────────

_HEAD_BG = (31, 41, 55)     # slate table header / rules
_SEC_BG = (243, 244, 246)   # light grey section title
_ALT_BG = (249, 250, 251)   # alternating row shade
_BORDER = (209, 213, 219)
_TEXT = (31, 41, 55)
_MUTED = (107, 114, 128)
_NOTES_BG = (254, 243, 199)
_NOTES_FG = (120, 53, 15)
_LINE_H = 7
_ROW_LINE_H = 5
_QR_SIZE = 32


def _latin1(text: str) -> str:
    """Replace characters core fonts cannot encode."""
    return text.replace(PLACEHOLDER, "-").encode("latin-1", errors="replace").decode("latin-1")


def _shape(text: str) -> str:
    """Join Arabic letters into presentation forms, still in logical order."""
    return arabic_reshaper.reshape(text.replace(PLACEHOLDER, "-"))


def _needs_unicode(text: str) -> bool:
    return any(ord(ch) > 255 for ch in text.replace(PLACEHOLDER, "-"))


def layout_texts(layout: InvoiceLayout) -> list[str]:
    """Every string the writer draws for *layout*."""
    texts = [layout.title, layout.footer, layout.notes or "", layout.qr_caption or ""]
    for field in (*layout.meta, *layout.seller, *layout.buyer):
        texts += [field.label, field.value]
    texts += [c.label for c in layout.columns]
    for row in layout.rows:
        texts += row
    for line in layout.totals:
        texts += [line.label, line.value]
    return texts


def needs_unicode_font(layout: InvoiceLayout) -> bool:
    """True when a core Latin-1 font would lose characters of *layout*."""
    return any(_needs_unicode(text) for text in layout_texts(layout))


class InvoicePDF(FPDF):
    """A4 portrait document with a footer note and page numbers on every page."""

    def __init__(self, layout: InvoiceLayout, fonts: FontSetup) -> None:
        super().__init__(orientation="P", unit="mm", format="A4")
        self.invoice_layout = layout
        self.font_setup = fonts
        self.body_font = apply_fonts(self, fonts)
        self.is_rtl_layout = layout.lang == "ar"

    def footer(self) -> None:
        self.set_y(-15)
        self.set_draw_color(*_BORDER)
        self.line(self.l_margin, self.get_y(), self.w - self.r_margin, self.get_y())
        self.set_text_color(*_MUTED)
        self.put(self.l_margin, self.epw, 5, self.invoice_layout.footer, align="C", size=8)
        self.ln(5)
        self.put(self.l_margin, self.epw, 4, f"{self.page_no()}/{{nb}}", align="C", size=7, numeric=True)

    def _is_latin(self, text: str, numeric: bool) -> bool:
        return numeric or not self.font_setup.unicode or not _needs_unicode(text)

    def select_font(self, text: str, style: str, size: float, numeric: bool) -> str:
        """Set the font for *text* and return it in visual order for one line.

        Numbers and Latin text use Helvetica and keep their LTR order; Arabic
        text is reshaped and reordered for the Unicode font.
        """
        if self._is_latin(text, numeric):
            self.set_font(FALLBACK_FAMILY, style, size)
            return _latin1(text)
        self.set_font(self.body_font, style, size)
        return get_display(_shape(text))

    def put(
        self,
        x: float,
        w: float,
        h: float,
        text: str,
        *,
        align: str = "L",
        style: str = "",
        size: float = 9,
        numeric: bool = False,
        fill: bool = False,
        border: int | str = 0,
    ) -> None:
        """Draw one single-line cell at *x* on the current line."""
        line = self.select_font(text, style, size, numeric)
        self.set_x(x)
        self.cell(w, h, line, border=border, align=align, fill=fill)

    def wrap_logical(
        self, text: str, w: float, style: str = "", size: float = 9, numeric: bool = False
    ) -> list[str]:
        """Break *text* into lines fitting *w*, each still in reading order.

        Arabic is reshaped before measuring (joined forms have their own
        widths) but not reordered, so the first line holds the first words.
        """
        if self._is_latin(text, numeric):
            self.set_font(FALLBACK_FAMILY, style, size)
            text = _latin1(text)
        else:
            self.set_font(self.body_font, style, size)
            text = _shape(text)
        lines = self.multi_cell(w, 1, text, dry_run=True, output=MethodReturnValue.LINES)
        return list(lines) or [""]

    def wrap(
        self, text: str, w: float, style: str = "", size: float = 9, numeric: bool = False
    ) -> list[str]:
        """Like ``wrap_logical`` but with every line in visual order."""
        lines = self.wrap_logical(text, w, style, size, numeric)
        if self._is_latin(text, numeric):
            return lines
        return [get_display(line) for line in lines]

    def put_wrapped(
        self,
        x: float,
        y: float,
        w: float,
        line_h: float,
        text: str,
        *,
        align: str = "L",
        style: str = "",
        size: float = 9,
        numeric: bool = False,
    ) -> int:
        """Draw *text* wrapped to *w* starting at (x, y). Returns the line count."""
        lines = self.wrap(text, w, style, size, numeric)
        for i, line in enumerate(lines):
            self.set_xy(x, y + i * line_h)
            self.cell(w, line_h, line, align=align)
        return len(lines)

    def mirrored(self, seq: Sequence[T]) -> list[T]:
        return list(reversed(seq)) if self.is_rtl_layout else list(seq)


def column_positions(pdf: InvoicePDF, columns: list[Column]) -> list[tuple[Column, float, float]]:
    """``(column, x, width)`` in logical column order.

    Right-to-left documents place the first column at the right edge.
    """
    total_weight = sum(c.weight for c in columns)
    widths = [pdf.epw * c.weight / total_weight for c in columns]
    placed = []
    x = pdf.l_margin
    for column, w in zip(pdf.mirrored(columns), pdf.mirrored(widths)):
        placed.append((column, x, w))
        x += w
    return pdf.mirrored(placed)


def _pair(pdf: InvoicePDF, x: float, w: float, field: Field, label_w: float, size: float = 9) -> None:
    """Label/value line; the label sits on the reading-start side, long values wrap."""
    h = size * 0.6
    value_w = w - label_w
    top = pdf.get_y()
    if pdf.is_rtl_layout:
        label_x, value_x, align = x + value_w, x, "R"
    else:
        label_x, value_x, align = x, x + label_w, "L"
    pdf.put(label_x, label_w, h, field.label, align=align, style="B", size=size)
    lines = pdf.put_wrapped(value_x, top, value_w, h, field.value, align=align, size=size)
    pdf.set_y(top + lines * h)


def _section_title(pdf: InvoicePDF, x: float, w: float, text: str) -> None:
    pdf.set_fill_color(*_SEC_BG)
    pdf.set_text_color(*_TEXT)
    pdf.put(x, w, _LINE_H, text, align="R" if pdf.is_rtl_layout else "L", style="B", size=10, fill=True)
    pdf.ln(_LINE_H + 1)


# ── Blocks ──────────────────────────────────────────────────────────────────


def _draw_header(pdf: InvoicePDF) -> None:
    layout = pdf.invoice_layout
    top = pdf.get_y()
    qr_w = _QR_SIZE + 4 if layout.qr_png else 0
    text_x = pdf.l_margin + (qr_w if pdf.is_rtl_layout else 0)
    text_w = pdf.epw - qr_w

    if layout.qr_png:
        # QR sits on the reading-end side, opposite the title
        qr_x = pdf.l_margin if pdf.is_rtl_layout else pdf.l_margin + pdf.epw - _QR_SIZE
        pdf.image(io.BytesIO(layout.qr_png), x=qr_x, y=top, w=_QR_SIZE, h=_QR_SIZE)
        if layout.qr_caption:
            pdf.set_y(top + _QR_SIZE)
            pdf.set_text_color(*_MUTED)
            pdf.put(qr_x, _QR_SIZE, 4, layout.qr_caption, align="C", size=6)

    pdf.set_y(top)
    pdf.set_text_color(*_TEXT)
    pdf.put(text_x, text_w, 11, layout.title, align="R" if pdf.is_rtl_layout else "L", style="B", size=20)
    pdf.ln(13)
    pdf.set_text_color(*_TEXT)
    for field in layout.meta:
        _pair(pdf, text_x, text_w, field, label_w=40)

    bottom = max(pdf.get_y(), top + (_QR_SIZE + 5 if layout.qr_png else 0))
    pdf.set_y(bottom + 2)
    pdf.set_draw_color(*_HEAD_BG)
    pdf.set_line_width(0.6)
    pdf.line(pdf.l_margin, pdf.get_y(), pdf.l_margin + pdf.epw, pdf.get_y())
    pdf.set_line_width(0.2)
    pdf.ln(5)


def _draw_parties(pdf: InvoicePDF) -> None:
    layout = pdf.invoice_layout
    gap = 6
    box_w = (pdf.epw - gap) / 2
    top = pdf.get_y()
    start_x, end_x = pdf.l_margin, pdf.l_margin + box_w + gap
    if pdf.is_rtl_layout:
        start_x, end_x = end_x, start_x

    bottoms = []
    for x, key, fields in ((start_x, "seller", layout.seller), (end_x, "buyer", layout.buyer)):
        pdf.set_y(top)
        _section_title(pdf, x, box_w, t(layout.lang, key))
        pdf.set_text_color(*_TEXT)
        for field in fields:
            _pair(pdf, x + 2, box_w - 4, field, label_w=30, size=8.5)
        bottoms.append(pdf.get_y())

    bottom = max(bottoms) + 2
    pdf.set_draw_color(*_BORDER)
    for x in (start_x, end_x):
        pdf.rect(x, top, box_w, bottom - top)
    pdf.set_y(bottom + 5)


def _cell_align(pdf: InvoicePDF, column: Column) -> str:
    # Figures stay left-aligned LTR inside an RTL table
    if column.numeric:
        return "L" if pdf.is_rtl_layout else "R"
    return "R" if pdf.is_rtl_layout else "L"


def _table_header(pdf: InvoicePDF, positions: list[tuple[Column, float, float]]) -> None:
    pdf.set_fill_color(*_HEAD_BG)
    pdf.set_text_color(255, 255, 255)
    for column, x, w in positions:
        pdf.put(x, w, _LINE_H + 1, column.label, align="C", style="B", size=8.5, fill=True)
    pdf.ln(_LINE_H + 1)
    pdf.set_text_color(*_TEXT)


def _draw_items(pdf: InvoicePDF) -> None:
    layout = pdf.invoice_layout
    positions = column_positions(pdf, layout.columns)

    _table_header(pdf, positions)
    for i, row in enumerate(layout.rows):
        counts = [
            len(pdf.wrap(value, w, size=8.5, numeric=column.numeric))
            for (column, _, w), value in zip(positions, row)
        ]
        h = max(_LINE_H, max(counts) * _ROW_LINE_H)
        if pdf.will_page_break(h):
            pdf.add_page()
            _table_header(pdf, positions)

        top = pdf.get_y()
        if i % 2 == 1:
            pdf.set_fill_color(*_ALT_BG)
            pdf.rect(pdf.l_margin, top, pdf.epw, h, style="F")
        for (column, x, w), value, count in zip(positions, row, counts):
            pdf.put_wrapped(
                x, top + (h - count * _ROW_LINE_H) / 2, w, _ROW_LINE_H, value,
                align=_cell_align(pdf, column),
                size=8.5,
                numeric=column.numeric,
            )
        pdf.set_draw_color(*_BORDER)
        pdf.line(pdf.l_margin, top + h, pdf.l_margin + pdf.epw, top + h)
        pdf.set_y(top + h)


def _draw_totals(pdf: InvoicePDF) -> None:
    lines = pdf.invoice_layout.totals
    box_w, label_w = 90, 50
    value_w = box_w - label_w
    if pdf.will_page_break(len(lines) * 8 + 12):
        pdf.add_page()
    pdf.ln(5)
    x = pdf.l_margin if pdf.is_rtl_layout else pdf.l_margin + pdf.epw - box_w
    top = pdf.get_y()

    for line in lines:
        size, h = (12, 9) if line.emphasis else (9, 6)
        if line.emphasis:
            pdf.set_draw_color(*_HEAD_BG)
            pdf.set_line_width(0.5)
            pdf.line(x + 2, pdf.get_y() + 1, x + box_w - 2, pdf.get_y() + 1)
            pdf.set_line_width(0.2)
            pdf.set_y(pdf.get_y() + 1.5)
        pdf.set_text_color(*(_TEXT if line.emphasis else _MUTED))
        if pdf.is_rtl_layout:
            pdf.put(x + 2, value_w, h, line.value, align="L", style="B", size=size, numeric=True)
            pdf.put(x + value_w, label_w - 2, h, line.label, align="R", style="B", size=size)
        else:
            pdf.put(x + 2, label_w, h, line.label, style="B", size=size)
            pdf.put(x + label_w, value_w - 2, h, line.value, align="R", style="B", size=size, numeric=True)
        pdf.ln(h)

    pdf.set_draw_color(*_BORDER)
    pdf.rect(x, top - 2, box_w, pdf.get_y() - top + 4)
    pdf.set_y(pdf.get_y() + 4)


def _draw_notes(pdf: InvoicePDF, notes: str) -> None:
    layout = pdf.invoice_layout
    align = "R" if pdf.is_rtl_layout else "L"
    if pdf.will_page_break(20):
        pdf.add_page()
    pdf.ln(4)
    pdf.set_fill_color(*_NOTES_BG)
    pdf.set_text_color(*_NOTES_FG)
    pdf.put(pdf.l_margin, pdf.epw, _LINE_H, t(layout.lang, "notes"), align=align, style="B", size=10, fill=True)
    pdf.ln(_LINE_H)
    # Wrapped in reading order first, then each line is reordered on its own
    for line in pdf.wrap(notes, pdf.epw, size=9):
        pdf.set_x(pdf.l_margin)
        pdf.cell(pdf.epw, 5, line, fill=True, align=align, new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def build_pdf(layout: InvoiceLayout, fonts: FontSetup) -> InvoicePDF:
    """Draw every block of *layout* into a new document."""
    pdf = InvoicePDF(layout, fonts)
    pdf.set_title(layout.title)
    pdf.set_creator("fawtara")
    pdf.set_lang(layout.lang)
    pdf.set_auto_page_break(auto=True, margin=20)
    pdf.add_page()

    _draw_header(pdf)
    _draw_parties(pdf)
    _draw_items(pdf)
    _draw_totals(pdf)
    if layout.notes:
        _draw_notes(pdf, layout.notes)
    return pdf


def write_pdf(layout: InvoiceLayout, fonts: FontSetup) -> bytes:
    """Render *layout* and return the PDF document bytes."""
    return bytes(build_pdf(layout, fonts).output())
