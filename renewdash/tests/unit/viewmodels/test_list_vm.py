from __future__ import annotations

from typing import Any, Dict, List

from renewdash.domain.entities import RESOURCES
from renewdash.domain.pagination import ListQuery, PageResult
from renewdash.domain.ports import UseCaseError
from renewdash.tests.unit.helpers import ManualTimers
from renewdash.viewmodels.list_vm import ListVM


class _Lister:
    def __init__(self, rows_per_call: int = 10) -> None:
        self.queries: List[ListQuery] = []
        self.rows_per_call = rows_per_call
        self.error: UseCaseError | None = None

    def __call__(self, resource: str, query: ListQuery) -> PageResult:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        rows = tuple({"id": idx} for idx in range(self.rows_per_call))
        return PageResult(query=query, rows=rows)


def _vm(lister: _Lister, timers: ManualTimers, **kwargs: Any) -> ListVM:
    return ListVM(RESOURCES["clients"], lister, timers.scheduler(), debounce_ms=500, **kwargs)


def test_initial_query_uses_resource_default_sort() -> None:
    vm = _vm(_Lister(), ManualTimers())

    assert vm.query.sort_field == "created_date"
    assert vm.query.sort_direction == "DESC"
    assert vm.query.page == 1
    assert vm.query.limit == 10


def test_rapid_keystrokes_produce_one_fetch_after_settling() -> None:
    lister, timers = _Lister(), ManualTimers()
    vm = _vm(lister, timers)

    for text in ("a", "ac", "acm", "acme"):
        vm.set_search(text)
        timers.advance(200)
    assert lister.queries == []

    timers.advance(300)

    assert len(lister.queries) == 1
    assert lister.queries[0].search == "acme"
    timers.advance(5000)
    assert len(lister.queries) == 1


def test_search_change_resets_page_before_fetch() -> None:
    lister, timers = _Lister(), ManualTimers()
    vm = _vm(lister, timers)
    vm.set_page(3)
    timers.advance(500)
    assert lister.queries[-1].page == 3

    vm.set_search("acme")
    timers.advance(500)

    assert lister.queries[-1].page == 1
    assert lister.queries[-1].to_params()["search"] == "acme"


def test_limit_change_resets_page_before_fetch() -> None:
    lister, timers = _Lister(rows_per_call=25), ManualTimers()
    vm = _vm(lister, timers)
    vm.set_page(2)
    timers.advance(500)

    vm.set_limit(25)
    timers.advance(500)

    assert (lister.queries[-1].page, lister.queries[-1].limit) == (1, 25)
    assert vm.has_next_page is True


def test_page_affordances_follow_row_count() -> None:
    lister, timers = _Lister(rows_per_call=10), ManualTimers()
    vm = _vm(lister, timers)
    vm.load()

    assert vm.has_next_page is True
    assert vm.has_previous_page is False

    lister.rows_per_call = 4
    vm.next_page()
    timers.advance(500)

    assert vm.query.page == 2
    assert vm.has_next_page is False
    assert vm.has_previous_page is True
    assert [number for number, _ in vm.numbered_rows()] == [11, 12, 13, 14]


def test_toggle_sort_flips_and_resets_page() -> None:
    lister, timers = _Lister(), ManualTimers()
    vm = _vm(lister, timers)
    vm.set_page(4)

    vm.toggle_sort("name")
    assert (vm.query.sort_field, vm.query.sort_direction, vm.query.page) == ("name", "DESC", 1)
    vm.toggle_sort("name")
    assert vm.query.sort_direction == "ASC"
    assert vm.sort_indicator("name") == "▲"

    timers.advance(500)
    assert len(lister.queries) == 1


def test_non_sortable_column_is_ignored() -> None:
    timers = ManualTimers()
    vm = _vm(_Lister(), timers)

    vm.toggle_sort("whatsapp_number")

    assert vm.query.sort_field == "created_date"
    assert timers.pending == 0


def test_stale_response_is_discarded() -> None:
    vm = _vm(_Lister(), ManualTimers())
    old = vm.begin_fetch()
    vm.query = vm.query.with_search("new")
    new = vm.begin_fetch()
    assert old is not None and new is not None

    new_rows = PageResult(query=new.query, rows=({"id": "new"},))
    old_rows = PageResult(query=old.query, rows=({"id": "old"},))
    assert vm.complete_fetch(new, result=new_rows) is True
    assert vm.complete_fetch(old, result=old_rows) is False

    assert vm.rows == [{"id": "new"}]


def test_identical_query_in_flight_is_not_refetched() -> None:
    vm = _vm(_Lister(), ManualTimers())

    first = vm.begin_fetch()

    assert first is not None
    assert vm.loading is True
    assert vm.begin_fetch() is None
    vm.complete_fetch(first, result=PageResult(query=first.query))
    assert vm.loading is False
    assert vm.begin_fetch() is not None


def test_fetch_error_is_kept_for_inline_display() -> None:
    lister = _Lister()
    lister.error = UseCaseError("SESSION_EXPIRED", "Sesi telah berakhir, silakan login kembali", status=401)
    vm = _vm(lister, ManualTimers())

    vm.load()

    assert vm.error_message == "Sesi telah berakhir, silakan login kembali"
    assert vm.rows == []
    assert vm.loading is False


def test_custom_dispatch_runs_when_debounce_elapses() -> None:
    timers = ManualTimers()
    dispatched: List[Dict[str, Any]] = []
    vm = _vm(_Lister(), timers, dispatch=lambda: dispatched.append(vm.query.to_params()))

    vm.set_filter("client_type_id", 2)
    timers.advance(500)

    assert dispatched[0]["client_type_id"] == "2"


def test_dispose_cancels_refresh_and_drops_late_results() -> None:
    lister, timers = _Lister(), ManualTimers()
    vm = _vm(lister, timers)
    ticket = vm.begin_fetch()
    vm.set_search("x")

    vm.dispose()
    timers.advance(1000)

    assert lister.queries == []
    assert vm.complete_fetch(ticket, result=PageResult(query=ticket.query)) is False


def test_disconnected_page_ignores_late_error_and_keeps_rows() -> None:
    timers = ManualTimers()
    dispatched: List[int] = []
    vm = _vm(_Lister(), timers, dispatch=lambda: dispatched.append(1))
    first = vm.begin_fetch()
    vm.complete_fetch(first, result=PageResult(query=first.query, rows=({"id": 1},)))
    vm.set_search("acme")
    late = vm.begin_fetch()

    vm.dispose()
    timers.advance(1000)

    assert dispatched == []
    error = UseCaseError("NETWORK", "Tidak dapat terhubung ke server")
    assert vm.complete_fetch(late, error=error) is False
    assert vm.error_message == ""
    assert vm.rows == [{"id": 1}]
