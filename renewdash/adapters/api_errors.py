from __future__ import annotations

from typing import Any, Optional


class ApiError(RuntimeError):
    """Base class for REST adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload
        self.context = context

    @property
    def detail(self) -> Optional[str]:
        """Backend-provided ``message`` text, if the body carried one."""
        return body_message(self.payload)


class ApiClientError(ApiError):
    """HTTP 4xx from the admin API."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, status=status, payload=payload, context=context)


class ApiServerError(ApiError):
    """HTTP 5xx from the admin API."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, status=status, payload=payload, context=context)


class ApiConnectionError(ApiError):
    """Transport level failure: DNS, refused connection or timeout."""

    def __init__(
        self,
        message: str,
        *,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, context=context)


class ApiEnvelopeError(ApiError):
    """2xx response whose envelope ``code`` does not report success."""


def parse_error_payload(resp: Any) -> Any:
    """Best-effort extraction of error payload without raising."""
    try:
        return resp.json()
    except ValueError:
        snippet = getattr(resp, "text", "")
        if not snippet:
            return None
        return snippet[:400]


def build_error_message(ctx: str, status: int, payload: Any) -> str:
    detail = first_string(payload)
    if detail:
        return f"{ctx}: {detail} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def body_message(payload: Any) -> Optional[str]:
    """Top-level ``message`` of an error body, if any."""
    if not isinstance(payload, dict):
        return None
    value = payload.get("message")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def first_string(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        for key in ("message", "detail", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
            if isinstance(value, (list, dict)):
                candidate = first_string(value)
                if candidate:
                    return candidate
    if isinstance(payload, list):
        for item in payload:
            candidate = first_string(item)
            if candidate:
                return candidate
    return None


__all__ = [
    "ApiClientError",
    "ApiConnectionError",
    "ApiEnvelopeError",
    "ApiError",
    "ApiServerError",
    "body_message",
    "build_error_message",
    "first_string",
    "parse_error_payload",
]
