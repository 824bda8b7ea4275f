from __future__ import annotations

import io
import logging
from datetime import date

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from ...core.exceptions import RenderError
from ...users.model import Author
from ..model import PayrollBreakdown, Period
from .formatting import format_date_id, format_percent, format_rupiah, month_name_id

logger = logging.getLogger(__name__)

BRAND_RED = colors.HexColor("#ff4f4f")
TEXT_COLOR = colors.Color(0.2, 0.2, 0.2)
MUTED_COLOR = colors.Color(0.5, 0.5, 0.5)

LEFT_X = 50
VALUE_X = 150
AMOUNT_X = 400
RULE_END_X = 500
LINE_HEIGHT = 20
GAP = 10
FOOTER_Y = 150

FOOTER_LINES = (
    "Catatan: Slip gaji ini dihasilkan secara otomatis oleh sistem.",
    "Untuk pertanyaan, hubungi HRD di info@langsapost.com",
)


class PayslipRenderer:
    """Fixed-layout single-page A4 payslip ("slip gaji").

    Output is byte-identical for identical input: the canvas runs in
    reportlab's invariant mode and the print date is passed in.
    Page compression is off so amounts stay readable in the raw bytes.
    Content that does not fit is cut off, never paginated.
    """

    def render(self, author: Author, period: Period, breakdown: PayrollBreakdown, *, generated_on: date) -> bytes:
        try:
            return self._render(author, period, breakdown, generated_on)
        except RenderError:
            raise
        except Exception as e:
            logger.exception("Payslip render failed for author %s (%s)", author.author_id, period)
            raise RenderError(f"Could not render payslip: {e}") from e

    def _render(self, author: Author, period: Period, b: PayrollBreakdown, generated_on: date) -> bytes:
        buf = io.BytesIO()
        c = canvas.Canvas(buf, pagesize=A4, invariant=1, pageCompression=0)
        c.setTitle(f"Slip Gaji {author.name} {period}")
        c.setAuthor("LangsaPost")
        _, height = A4

        c.setFillColor(BRAND_RED)
        c.setFont("Helvetica-Bold", 24)
        c.drawString(LEFT_X, height - 80, "LANGSAPOST")

        c.setFillColor(TEXT_COLOR)
        c.setFont("Helvetica-Bold", 16)
        c.drawString(LEFT_X, height - 110, "SLIP GAJI KARYAWAN")

        y = height - 160
        c.setFont("Helvetica", 11)
        for label, value in (
            ("Nama", author.name),
            ("NIK", author.nik or "-"),
            ("Email", author.email),
            ("Periode", f"{month_name_id(period.month)} {period.year}"),
            ("Tanggal Cetak", format_date_id(generated_on)),
        ):
            c.drawString(LEFT_X, y, label)
            c.drawString(VALUE_X, y, f": {value}")
            y -= LINE_HEIGHT

        y -= 20
        c.setFont("Helvetica-Bold", 14)
        c.drawString(LEFT_X, y, "RINCIAN GAJI")
        y -= 30

        rows = (
            ("Gaji Pokok", format_rupiah(b.base_salary)),
            (f"Bonus Artikel ({b.article_count} artikel)", format_rupiah(b.article_bonus)),
            ("Bonus Views", format_rupiah(b.view_bonus)),
            None,
            ("TOTAL GAJI KOTOR", format_rupiah(b.gross)),
            None,
            ("POTONGAN:", ""),
            (f"Pajak ({format_percent(b.tax_rate)}%)", format_rupiah(b.deductions)),
            None,
            ("TOTAL GAJI BERSIH", format_rupiah(b.total)),
        )
        for row in rows:
            if row is None:
                y -= GAP
                continue
            label, amount = row
            emphasized = "TOTAL" in label or label == "POTONGAN:"
            c.setFont("Helvetica-Bold" if emphasized else "Helvetica", 12 if emphasized else 11)
            c.drawString(LEFT_X, y, label)
            if amount:
                c.drawString(AMOUNT_X, y, amount)
            if label == "TOTAL GAJI BERSIH":
                c.setStrokeColor(TEXT_COLOR)
                c.setLineWidth(1)
                c.line(LEFT_X, y + 15, RULE_END_X, y + 15)
            y -= LINE_HEIGHT

        c.setFillColor(MUTED_COLOR)
        c.setFont("Helvetica", 9)
        for i, line in enumerate(FOOTER_LINES):
            c.drawString(LEFT_X, FOOTER_Y - 15 * i, line)

        c.showPage()
        c.save()
        return buf.getvalue()
