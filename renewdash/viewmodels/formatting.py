"""Display helpers for currency and dates.

Call context:
    List, reminder and report pages call these helpers when rendering cells.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from renewdash.domain.reminders import parse_day

MONTHS_ID = ("Jan", "Feb", "Mar", "Apr", "Mei", "Jun", "Jul", "Agu", "Sep", "Okt", "Nov", "Des")
EMPTY = "-"


def format_idr(value: Any) -> str:
    """Format ``value`` as Rupiah without decimals, e.g. ``Rp 150.000``."""
    if value is None or value == "" or isinstance(value, bool):
        return EMPTY
    try:
        amount = round(float(value))
    except (TypeError, ValueError):
        return EMPTY
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(amount):,}".replace(",", ".")
    return f"{sign}Rp {grouped}"


def format_date(value: Any) -> str:
    """Format an ISO date or datetime as ``DD Mon YYYY``."""
    day: Optional[date] = parse_day(value)
    if day is None:
        return EMPTY
    return f"{day.day:02d} {MONTHS_ID[day.month - 1]} {day.year}"


def format_datetime(value: Any) -> str:
    """Format an ISO timestamp as ``DD Mon YYYY HH:MM``; dates fall back to :func:`format_date`."""
    if isinstance(value, datetime):
        moment = value
    else:
        text = str(value or "").strip()
        if not text:
            return EMPTY
        try:
            moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return format_date(text)
    return f"{format_date(moment)} {moment.hour:02d}:{moment.minute:02d}"


def status_label(value: Any) -> str:
    """Service status flag as shown in tables."""
    return "Aktif" if str(value) == "1" else "Tidak Aktif"


__all__ = ["MONTHS_ID", "format_date", "format_datetime", "format_idr", "status_label"]
