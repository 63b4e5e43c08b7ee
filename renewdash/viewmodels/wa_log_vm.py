"""WhatsApp message log pager over :class:`renewdash.usecases.fetch_wa_log.FetchWaLog`."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from renewdash.domain.ports import UseCaseError
from renewdash.usecases.fetch_wa_log import FetchWaLog


class WaLogVM:
    """Current log page, navigation flags and error text.

    Pages are 0-based. Navigation follows the ``next_page_uri`` and
    ``previous_page_uri`` links of the provider's log page.
    """

    def __init__(self, fetch: FetchWaLog) -> None:
        self._fetch = fetch
        self.page = 0
        self.data: Optional[Dict[str, Any]] = None
        self.error: Optional[UseCaseError] = None

    @property
    def messages(self) -> List[Dict[str, Any]]:
        if not self.data:
            return []
        return [entry for entry in self.data.get("messages") or [] if isinstance(entry, dict)]

    @property
    def has_next_page(self) -> bool:
        return bool(self.data and self.data.get("next_page_uri"))

    @property
    def has_previous_page(self) -> bool:
        return self.page > 0

    @property
    def error_message(self) -> str:
        return self.error.message if self.error else ""

    def load(self, page: int = 0) -> None:
        try:
            data = self._fetch(page)
        except UseCaseError as err:
            self.error = err
            return
        self.error = None
        self.page = max(0, int(page))
        self.data = data

    def refresh(self) -> None:
        try:
            data = self._fetch.refresh(self.page)
        except UseCaseError as err:
            self.error = err
            return
        self.error = None
        self.data = data

    def next_page(self) -> None:
        if self.has_next_page:
            self.load(self.page + 1)

    def previous_page(self) -> None:
        if self.has_previous_page:
            self.load(self.page - 1)


__all__ = ["WaLogVM"]
