"""Use case for the WhatsApp message log with a per-page cache."""

from __future__ import annotations

from typing import Any, Dict

from renewdash.domain.ports import AdminPort

from .error_mapping import map_api_error


class FetchWaLog:
    """Return log pages, cached by page number until :meth:`refresh`.

    Pages are 0-based, matching the backend's log endpoint.
    """

    def __init__(self, admin_port: AdminPort) -> None:
        self.admin_port = admin_port
        self._cache: Dict[int, Dict[str, Any]] = {}

    def __call__(self, page: int = 0) -> Dict[str, Any]:
        page = max(0, int(page))
        cached = self._cache.get(page)
        if cached is not None:
            return cached
        try:
            data = self.admin_port.wa_log_page(page)
        except Exception as exc:
            raise map_api_error(exc, default_message="Gagal memuat log WhatsApp") from exc
        self._cache[page] = data
        return data

    def refresh(self, page: int = 0) -> Dict[str, Any]:
        self._cache.clear()
        return self(page)

    def is_cached(self, page: int) -> bool:
        return page in self._cache
