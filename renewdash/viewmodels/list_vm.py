"""List screen state: query, debounced refetch and page affordances.

Call context:
    ``renewdash.web_ui.main`` builds one ``ListVM`` per list page. Widget
    callbacks call the ``set_*``/``toggle_sort`` commands; the VM debounces
    them through :class:`renewdash.app.timer_scheduler.TimerScheduler` and asks
    the page to fetch once the query has settled.

Fetches are split into :meth:`ListVM.begin_fetch` and
:meth:`ListVM.complete_fetch` so the web runtime can await the network call
off the event loop. Each fetch carries a generation number; a completion whose
generation is no longer current is dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from renewdash.app.timer_scheduler import TimerScheduler
from renewdash.domain.entities import ResourceSpec
from renewdash.domain.pagination import LIMIT_CHOICES, ListQuery, PageResult
from renewdash.domain.ports import UseCaseError

LOGGER = logging.getLogger(__name__)

REFRESH_TIMER = "list-refresh"

ListFn = Callable[[str, ListQuery], PageResult]


@dataclass(frozen=True)
class FetchTicket:
    """Handle for one issued fetch."""
    generation: int
    query: ListQuery


class ListVM:
    """State holder for one paginated, sortable, searchable list."""

    def __init__(
        self,
        spec: ResourceSpec,
        list_fn: ListFn,
        scheduler: TimerScheduler,
        *,
        debounce_ms: int = 500,
        query: Optional[ListQuery] = None,
        dispatch: Optional[Callable[[], None]] = None,
    ) -> None:
        """Create the VM.

        Args:
            spec: Resource being listed.
            list_fn: ``ListResources`` compatible callable used by :meth:`load`.
            scheduler: Timer owner used for the debounce channel.
            debounce_ms: Quiet period before a settled query is fetched.
            query: Initial query; defaults to page 1 sorted by the resource's
                default sort field, descending.
            dispatch: Called when a debounced fetch is due. Defaults to the
                synchronous :meth:`load`.
        """
        self.spec = spec
        self._list_fn = list_fn
        self._scheduler = scheduler
        self.debounce_ms = int(debounce_ms)
        self.query = query or ListQuery(sort_field=spec.default_sort)
        self._dispatch = dispatch or self.load
        self._generation = 0
        self._in_flight: Optional[FetchTicket] = None
        self.result: Optional[PageResult] = None
        self.error: Optional[UseCaseError] = None

    # ------------------------------------------------------------------
    # Query commands
    # ------------------------------------------------------------------
    def set_search(self, text: str) -> None:
        text = text or ""
        if text == self.query.search:
            return
        self.query = self.query.with_search(text)
        self.schedule_refresh()

    def set_limit(self, limit: int) -> None:
        limit = int(limit)
        if limit not in LIMIT_CHOICES:
            raise ValueError(f"limit must be one of {LIMIT_CHOICES}")
        if limit == self.query.limit:
            return
        self.query = self.query.with_limit(limit)
        self.schedule_refresh()

    def set_page(self, page: int) -> None:
        page = int(page)
        if page < 1 or page == self.query.page:
            return
        self.query = self.query.with_page(page)
        self.schedule_refresh()

    def next_page(self) -> None:
        if self.has_next_page:
            self.set_page(self.query.page + 1)

    def previous_page(self) -> None:
        if self.has_previous_page:
            self.set_page(self.query.page - 1)

    def toggle_sort(self, field_name: str) -> None:
        """Flip direction on the active column, or sort a new column descending."""
        if field_name not in self.spec.sortable_fields:
            LOGGER.debug("Ignoring sort on non-sortable column %s", field_name)
            return
        self.query = self.query.toggled_sort(field_name)
        self.schedule_refresh()

    def set_filter(self, key: str, value: Any) -> None:
        updated = self.query.with_filter(key, value)
        if updated.filters == self.query.filters:
            return
        self.query = updated
        self.schedule_refresh()

    # ------------------------------------------------------------------
    # Fetch lifecycle
    # ------------------------------------------------------------------
    def schedule_refresh(self) -> None:
        """(Re)start the debounce window; the fetch runs once it elapses."""
        self._scheduler.schedule(REFRESH_TIMER, self.debounce_ms, self._dispatch)

    def refresh_now(self) -> None:
        """Skip the debounce window (first render, after a delete)."""
        self._scheduler.cancel(REFRESH_TIMER)
        self._dispatch()

    def begin_fetch(self) -> Optional[FetchTicket]:
        """Issue a fetch for the current query.

        Returns:
            A ticket, or ``None`` when the same query is already in flight.
        """
        if self._in_flight is not None and self._in_flight.query == self.query:
            LOGGER.debug("Fetch for %s already in flight", self.spec.name)
            return None
        self._generation += 1
        ticket = FetchTicket(generation=self._generation, query=self.query)
        self._in_flight = ticket
        return ticket

    def complete_fetch(
        self,
        ticket: FetchTicket,
        *,
        result: Optional[PageResult] = None,
        error: Optional[UseCaseError] = None,
    ) -> bool:
        """Apply a finished fetch.

        Returns:
            ``True`` when applied, ``False`` when a newer fetch superseded it.
        """
        if ticket.generation != self._generation:
            LOGGER.debug("Dropping stale %s page (generation %s)", self.spec.name, ticket.generation)
            return False
        self._in_flight = None
        if error is not None:
            self.error = error
            return True
        self.error = None
        self.result = result
        return True

    def load(self) -> None:
        """Fetch the current query synchronously."""
        ticket = self.begin_fetch()
        if ticket is None:
            return
        try:
            result = self._list_fn(self.spec.name, ticket.query)
        except UseCaseError as err:
            self.complete_fetch(ticket, error=err)
            return
        self.complete_fetch(ticket, result=result)

    def dispose(self) -> None:
        """Cancel the pending refresh and ignore any response still in flight."""
        self._scheduler.cancel(REFRESH_TIMER)
        self._generation += 1
        self._in_flight = None

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------
    @property
    def loading(self) -> bool:
        return self._in_flight is not None

    @property
    def rows(self) -> List[Dict[str, Any]]:
        if self.result is None:
            return []
        return list(self.result.rows)

    @property
    def error_message(self) -> str:
        return self.error.message if self.error else ""

    @property
    def has_previous_page(self) -> bool:
        return self.result is not None and self.result.has_previous_page

    @property
    def has_next_page(self) -> bool:
        return self.result is not None and self.result.has_next_page

    def sort_indicator(self, field_name: str) -> str:
        if field_name != self.query.sort_field:
            return ""
        return "▲" if self.query.sort_direction == "ASC" else "▼"

    def numbered_rows(self) -> List[Tuple[int, Dict[str, Any]]]:
        """Rows paired with their 1-based number across pages."""
        if self.result is None:
            return []
        query = self.result.query
        return [(query.row_number(index), row) for index, row in enumerate(self.result.rows)]

    def range_label(self) -> str:
        if self.result is None or not self.result.rows:
            return "Tidak ada data"
        return (
            f"Menampilkan {self.result.first_row_number}-{self.result.last_row_number}"
            f" (halaman {self.result.query.page})"
        )


__all__ = ["FetchTicket", "ListVM", "REFRESH_TIMER"]
