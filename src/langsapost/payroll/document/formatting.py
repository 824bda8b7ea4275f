from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

MONTH_NAMES_ID = (
    "Januari",
    "Februari",
    "Maret",
    "April",
    "Mei",
    "Juni",
    "Juli",
    "Agustus",
    "September",
    "Oktober",
    "November",
    "Desember",
)


def format_rupiah(amount: Decimal) -> str:
    """``Decimal("3011500") -> "Rp 3.011.500"`` (id-ID grouping, no fraction)."""
    whole = int(Decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    grouped = f"{abs(whole):,}".replace(",", ".")
    return f"-Rp {grouped}" if whole < 0 else f"Rp {grouped}"


def month_name_id(month: int) -> str:
    return MONTH_NAMES_ID[int(month) - 1]


def format_date_id(d: date) -> str:
    # id-ID short date: no zero padding
    return f"{d.day}/{d.month}/{d.year}"


def format_percent(rate: Decimal) -> str:
    pct = (Decimal(rate) * 100).normalize()
    return format(pct, "f")
