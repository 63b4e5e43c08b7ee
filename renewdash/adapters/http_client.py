"""Shared HTTP transport for the admin REST adapter.

This module provides a thin wrapper around ``requests.Session`` so every call
against the admin backend carries the same headers and timeout policy.

Dependencies:
    - ``requests`` for network I/O.
    - ``renewdash.adapters.api_errors.ApiConnectionError`` for typed transport failures.

Call context:
    - Constructed by ``renewdash.adapters.admin_rest.AdminRestAdapter``.
    - Used only inside adapter methods; use cases interact through ports.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import requests
from requests import exceptions as req_exc

from renewdash.adapters.api_errors import ApiConnectionError

LOGGER = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


@dataclass
class HttpConfig:
    """Endpoint and timeout configuration for admin API calls.

    Attributes:
        base_url: Backend origin, for example ``https://admin.example``.
        api_key: Static value sent as ``X-Api-Key`` on every request.
        request_timeout_s: Timeout in seconds for JSON calls.
        download_timeout_s: Timeout in seconds for report downloads.
    """
    base_url: str
    api_key: str = "X-Secret-Key"
    request_timeout_s: int = 10
    download_timeout_s: int = 60


class AuthenticatedSession:
    """Requests wrapper that attaches bearer token and API key headers.

    This class is transport-only. Callers decide how to map non-2xx responses
    into domain/use-case errors. Requests are never retried automatically.
    """

    def __init__(self, cfg: HttpConfig, token_provider: TokenProvider) -> None:
        """Create an authenticated session.

        Args:
            cfg: Backend origin, API key and timeouts.
            token_provider: Callable returning the current bearer token or ``None``.

        Side Effects:
            Creates a persistent ``requests.Session`` object.
        """
        if not cfg.base_url:
            raise ValueError("AuthenticatedSession requires a base URL")
        self.session = requests.Session()
        self.cfg = cfg
        self._token_provider = token_provider

    def url(self, path: str) -> str:
        base = self.cfg.base_url.rstrip("/")
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{base}{path}"

    def _headers(
        self, accept: str = "application/json", json_body: bool = True
    ) -> Dict[str, str]:
        headers = {"Accept": accept}
        token = self._token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if self.cfg.api_key:
            headers["X-Api-Key"] = self.cfg.api_key
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
        accept: str = "application/json",
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send one request to ``path`` relative to the configured base URL.

        Args:
            method: HTTP verb.
            path: API path such as ``/api/clients``.
            params: Optional query parameter mapping.
            json_body: Optional payload serialized to JSON text.
            accept: ``Accept`` header value.
            timeout: Optional timeout override in seconds.

        Returns:
            ``requests.Response`` regardless of status code.

        Raises:
            ApiConnectionError: On timeout or connectivity failures.
        """
        url = self.url(path)
        context = f"{method.upper()} {path}"
        data = None if json_body is None else json.dumps(json_body)
        LOGGER.debug("%s params=%s", context, params)
        try:
            return self.session.request(
                method.upper(),
                url,
                params=params,
                data=data,
                headers=self._headers(accept=accept),
                timeout=timeout or self.cfg.request_timeout_s,
            )
        except (req_exc.Timeout, req_exc.ConnectionError) as exc:
            LOGGER.warning("%s failed: %s", context, exc)
            raise ApiConnectionError(
                f"Cannot reach {url}", context=context
            ) from exc

    def get(self, path: str, **kwargs: Any) -> requests.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> requests.Response:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> requests.Response:
        return self.request("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> requests.Response:
        return self.request("DELETE", path, **kwargs)


__all__ = ["AuthenticatedSession", "HttpConfig", "TokenProvider"]
