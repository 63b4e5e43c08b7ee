"""Renewal reminder list: services ending within a chosen horizon."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from renewdash.domain.reminders import HORIZONS, Urgency, days_until, horizon_cutoff, urgency

from .list_vm import ListVM

DEFAULT_HORIZON = "week"


@dataclass
class ReminderRow:
    """Display row for one expiring service."""
    service: Dict[str, Any]
    days_left: Optional[int]
    urgency: Urgency

    @property
    def days_label(self) -> str:
        if self.days_left is None:
            return "-"
        if self.days_left < 0:
            return f"Lewat {abs(self.days_left)} hari"
        if self.days_left == 0:
            return "Hari ini"
        return f"{self.days_left} hari lagi"


class ReminderVM(ListVM):
    """``ListVM`` over services filtered by an ``end_date`` horizon."""

    def __init__(self, *args: Any, today: Optional[Callable[[], date]] = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._today = today or date.today
        self.horizon = DEFAULT_HORIZON
        self.query = self.query.with_filter("end_date", horizon_cutoff(self.horizon, self._today()).isoformat())

    def set_horizon(self, horizon: str) -> None:
        if horizon not in HORIZONS:
            raise ValueError(f"horizon must be one of {tuple(HORIZONS)}")
        self.horizon = horizon
        self.set_filter("end_date", horizon_cutoff(horizon, self._today()).isoformat())

    def reminder_rows(self) -> List[ReminderRow]:
        today = self._today()
        rows: List[ReminderRow] = []
        for row in self.rows:
            left = days_until(row.get("end_date"), today)
            rows.append(ReminderRow(service=row, days_left=left, urgency=urgency(left)))
        return rows


__all__ = ["DEFAULT_HORIZON", "ReminderRow", "ReminderVM"]
