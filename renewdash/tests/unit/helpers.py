from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import jwt

from renewdash.adapters.http_client import AuthenticatedSession, HttpConfig
from renewdash.app.timer_scheduler import TimerScheduler

_NO_JSON = object()

TOKEN_SECRET = "renewdash-unit-test-signing-key-0001"


def make_token(**claims: Any) -> str:
    """HS256 token carrying ``claims``; the client never checks the signature."""
    return jwt.encode(claims, TOKEN_SECRET, algorithm="HS256")


class FakeResponse:
    def __init__(
        self,
        payload: Any = None,
        status_code: int = 200,
        *,
        headers: Optional[Dict[str, str]] = None,
        content: Optional[bytes] = None,
        json_body: bool = True,
    ) -> None:
        self._payload = payload if json_body else _NO_JSON
        self.status_code = status_code
        self.headers = dict(headers or {"Content-Type": "application/json"})
        if content is None:
            content = json.dumps(payload).encode("utf-8") if json_body and payload is not None else b""
        self.content = content
        self.text = content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        if self._payload is _NO_JSON:
            raise ValueError("not json")
        return self._payload


class FakeHttpSession:
    """Stands in for ``requests.Session`` and records every request."""

    def __init__(self, responses: Sequence[Any] = ()) -> None:
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def queue(self, *responses: Any) -> None:
        self._responses.extend(responses)

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> FakeResponse:
        self.calls.append(
            {
                "method": method,
                "url": url,
                "params": params,
                "json": json.loads(data) if data else None,
                "headers": dict(headers or {}),
                "timeout": timeout,
            }
        )
        if not self._responses:
            raise RuntimeError("No fake response configured")
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def make_session(
    responses: Sequence[Any] = (),
    *,
    token: Optional[str] = "tok",
    base_url: str = "http://api.local/",
) -> Tuple[AuthenticatedSession, FakeHttpSession]:
    session = AuthenticatedSession(HttpConfig(base_url=base_url), token_provider=lambda: token)
    fake = FakeHttpSession(responses)
    session.session = fake  # type: ignore[assignment]
    return session, fake


def envelope(data: Any, code: int = 200, status: str = "OK") -> Dict[str, Any]:
    return {"code": code, "status": status, "data": data}


class ManualTimers:
    """Deterministic ``schedule``/``cancel`` pair driven by :meth:`advance`."""

    def __init__(self) -> None:
        self.now_ms = 0
        self._next = 0
        self._timers: Dict[int, Tuple[int, Callable[[], None]]] = {}

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> int:
        self._next += 1
        self._timers[self._next] = (self.now_ms + int(delay_ms), callback)
        return self._next

    def cancel(self, token: int) -> None:
        self._timers.pop(token, None)

    def advance(self, ms: int) -> None:
        target = self.now_ms + int(ms)
        while True:
            due = [(at, token) for token, (at, _) in self._timers.items() if at <= target]
            if not due:
                break
            at, token = min(due)
            _, callback = self._timers.pop(token)
            self.now_ms = at
            callback()
        self.now_ms = target

    @property
    def pending(self) -> int:
        return len(self._timers)

    def scheduler(self) -> TimerScheduler:
        return TimerScheduler(self.schedule, self.cancel)


class MemoryTokenStore:
    def __init__(self, token: Optional[str] = None) -> None:
        self.token = token
        self.cleared = 0

    def get_token(self) -> Optional[str]:
        return self.token

    def set_token(self, token: str) -> None:
        self.token = token

    def clear_token(self) -> None:
        self.token = None
        self.cleared += 1


class FakeAdminPort:
    """In-memory ``AdminPort`` that records calls.

    Set ``failures[<method>]`` to an exception to make that method raise.
    """

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self.failures: Dict[str, Exception] = {}
        self.token = make_token(id=1, username="admin", exp=4102444800)
        self.pages: List[Dict[str, Any]] = []
        self.records: Dict[Tuple[str, Any], Dict[str, Any]] = {}
        self.lookups: Dict[str, List[Dict[str, Any]]] = {}
        self.report_rows: List[Dict[str, Any]] = []
        self.report_bytes = b"xlsx-bytes"
        self.wa_pages: Dict[int, Dict[str, Any]] = {}

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        failure = self.failures.get(name)
        if failure is not None:
            raise failure

    def calls_to(self, name: str) -> List[Tuple[Any, ...]]:
        return [args for call, args in self.calls if call == name]

    def login(self, username: str, password: str) -> str:
        self._record("login", username, password)
        return self.token

    def list_page(self, resource: str, params: Mapping[str, Any]) -> Dict[str, Any]:
        self._record("list_page", resource, dict(params))
        if self.pages:
            return self.pages.pop(0)
        return {"rows": [], "pagination": {}}

    def list_all(self, resource: str) -> List[Dict[str, Any]]:
        self._record("list_all", resource)
        return list(self.lookups.get(resource, []))

    def get(self, resource: str, record_id: Any) -> Dict[str, Any]:
        self._record("get", resource, record_id)
        return dict(self.records[(resource, record_id)])

    def create(self, resource: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
        self._record("create", resource, dict(payload))
        return {"id": 99, **dict(payload)}

    def update(self, resource: str, record_id: Any, payload: Mapping[str, Any]) -> Dict[str, Any]:
        self._record("update", resource, record_id, dict(payload))
        return {"id": record_id, **dict(payload)}

    def delete(self, resource: str, record_id: Any) -> None:
        self._record("delete", resource, record_id)

    def report_preview(self, params: Mapping[str, Any]) -> List[Dict[str, Any]]:
        self._record("report_preview", dict(params))
        return list(self.report_rows)

    def report_download(self, params: Mapping[str, Any]) -> bytes:
        self._record("report_download", dict(params))
        return self.report_bytes

    def wa_log_page(self, page: int) -> Dict[str, Any]:
        self._record("wa_log_page", page)
        return dict(self.wa_pages.get(page, {"page": page, "messages": []}))

    def send_wa_reminder(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        self._record("send_wa_reminder", dict(payload))
        return {}


__all__ = [
    "FakeAdminPort",
    "FakeHttpSession",
    "FakeResponse",
    "ManualTimers",
    "MemoryTokenStore",
    "envelope",
    "make_session",
    "make_token",
]
