"""Renewal reminder horizons and expiry urgency."""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Any, Dict, Literal, Optional

Horizon = Literal["week", "month", "twoMonth"]
Urgency = Literal["expired", "critical", "warning", "ok", "unknown"]

HORIZONS: Dict[str, str] = {
    "week": "7 Hari",
    "month": "1 Bulan",
    "twoMonth": "2 Bulan",
}


def add_months(day: date, months: int) -> date:
    """Shift ``day`` by whole months, clamping to the last day of the target month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


def horizon_cutoff(horizon: str, today: date) -> date:
    """Latest ``end_date`` included by a reminder horizon."""
    if horizon == "week":
        return today + timedelta(days=7)
    if horizon == "month":
        return add_months(today, 1)
    if horizon == "twoMonth":
        return add_months(today, 2)
    raise ValueError(f"Unknown reminder horizon '{horizon}'")


def parse_day(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value or "").strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def days_until(end_date: Any, today: date) -> Optional[int]:
    end = parse_day(end_date)
    if end is None:
        return None
    return (end - today).days


def urgency(days_left: Optional[int]) -> Urgency:
    if days_left is None:
        return "unknown"
    if days_left <= 0:
        return "expired"
    if days_left <= 3:
        return "critical"
    if days_left <= 7:
        return "warning"
    return "ok"


__all__ = ["HORIZONS", "Horizon", "Urgency", "add_months", "days_until", "horizon_cutoff", "parse_day", "urgency"]
