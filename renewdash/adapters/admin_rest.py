from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

import requests

from renewdash.domain.entities import resource_spec
from renewdash.domain.ports import AdminPort, Record

from .api_errors import (
    ApiClientError,
    ApiEnvelopeError,
    ApiError,
    ApiServerError,
    body_message,
    build_error_message,
    parse_error_payload,
)
from .http_client import AuthenticatedSession

LOGGER = logging.getLogger(__name__)

SUCCESS_CODES = (200, 201, 204)
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

LOGIN_PATH = "/api/login"
REPORT_PREVIEW_PATH = "/api/services/reports/preview"
REPORT_DOWNLOAD_PATH = "/api/services/reports/download/excel"
WA_LOG_PATH = "/api/log/wa"
WA_REMINDER_PATH = "/api/reminder/wa"


class AdminRestAdapter(AdminPort):
    """REST adapter for the renewal admin backend.

    Every response is expected in the ``{code, status, data}`` envelope. List
    endpoints nest rows under ``data.data`` next to a ``pagination`` echo.
    """

    def __init__(self, session: AuthenticatedSession) -> None:
        self.session = session

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------
    def login(self, username: str, password: str) -> str:
        resp = self.session.post(
            LOGIN_PATH, json_body={"username": username, "password": password}
        )
        data = self._unwrap(resp, "login")
        token = data.get("token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token.strip():
            raise ApiEnvelopeError("login: response carries no token", context="login")
        return token.strip()

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------
    def list_page(self, resource: str, params: Mapping[str, Any]) -> Dict[str, Any]:
        spec = resource_spec(resource)
        resp = self.session.get(spec.path, params=dict(params))
        data = self._unwrap(resp, f"list[{resource}]")
        return {
            "rows": self._rows(data),
            "pagination": self._pagination(data),
        }

    def list_all(self, resource: str) -> List[Record]:
        spec = resource_spec(resource)
        # Roles have no /all variant; the plain list returns every row.
        path = spec.path if resource == "roles" else spec.all_path
        resp = self.session.get(path)
        return self._rows(self._unwrap(resp, f"all[{resource}]"))

    def get(self, resource: str, record_id: Any) -> Record:
        spec = resource_spec(resource)
        resp = self.session.get(spec.item_path(record_id))
        data = self._unwrap(resp, f"get[{resource}:{record_id}]")
        if isinstance(data, list):
            data = data[0] if data else None
        if not isinstance(data, dict):
            raise ApiEnvelopeError(
                f"get[{resource}:{record_id}]: expected object data",
                context=f"get[{resource}]",
            )
        return dict(data)

    def create(self, resource: str, payload: Mapping[str, Any]) -> Record:
        spec = resource_spec(resource)
        resp = self.session.post(spec.path, json_body=dict(payload))
        data = self._unwrap(resp, f"create[{resource}]")
        return dict(data) if isinstance(data, dict) else {}

    def update(self, resource: str, record_id: Any, payload: Mapping[str, Any]) -> Record:
        spec = resource_spec(resource)
        resp = self.session.put(spec.item_path(record_id), json_body=dict(payload))
        data = self._unwrap(resp, f"update[{resource}:{record_id}]")
        return dict(data) if isinstance(data, dict) else {}

    def delete(self, resource: str, record_id: Any) -> None:
        spec = resource_spec(resource)
        resp = self.session.delete(spec.item_path(record_id))
        self._unwrap(resp, f"delete[{resource}:{record_id}]", allow_empty=True)

    # ------------------------------------------------------------------
    # Reports and WhatsApp
    # ------------------------------------------------------------------
    def report_preview(self, params: Mapping[str, Any]) -> List[Record]:
        resp = self.session.get(REPORT_PREVIEW_PATH, params=dict(params))
        return self._rows(self._unwrap(resp, "report_preview"))

    def report_download(self, params: Mapping[str, Any]) -> bytes:
        resp = self.session.get(
            REPORT_DOWNLOAD_PATH,
            params=dict(params),
            accept=f"{XLSX_MIME}, application/json",
            timeout=self.session.cfg.download_timeout_s,
        )
        self._ensure_ok(resp, "report_download")
        content_type = str(resp.headers.get("Content-Type") or "").lower()
        if "application/json" in content_type:
            # Errors may arrive as JSON with a 200 status.
            payload = parse_error_payload(resp)
            message = body_message(payload) or "report_download: no spreadsheet returned"
            raise ApiEnvelopeError(message, status=resp.status_code, payload=payload, context="report_download")
        return resp.content

    def wa_log_page(self, page: int) -> Dict[str, Any]:
        resp = self.session.get(WA_LOG_PATH, params={"page": int(page)})
        data = self._unwrap(resp, f"wa_log[{page}]")
        if not isinstance(data, dict):
            raise ApiEnvelopeError(f"wa_log[{page}]: expected object data", context="wa_log")
        return dict(data)

    def send_wa_reminder(self, payload: Mapping[str, Any]) -> Record:
        resp = self.session.post(WA_REMINDER_PATH, json_body=dict(payload))
        data = self._unwrap(resp, "wa_reminder", allow_empty=True)
        return dict(data) if isinstance(data, dict) else {}

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _ensure_ok(resp: requests.Response, ctx: str) -> None:
        if 200 <= resp.status_code < 300:
            return
        status = resp.status_code
        payload = parse_error_payload(resp)
        message = build_error_message(ctx, status, payload)
        LOGGER.info("%s -> HTTP %s", ctx, status)
        if 400 <= status < 500:
            raise ApiClientError(message, status=status, payload=payload, context=ctx)
        if 500 <= status < 600:
            raise ApiServerError(message, status=status, payload=payload, context=ctx)
        raise ApiError(message, status=status, payload=payload, context=ctx)

    @classmethod
    def _unwrap(cls, resp: requests.Response, ctx: str, *, allow_empty: bool = False) -> Any:
        cls._ensure_ok(resp, ctx)
        if allow_empty and (resp.status_code == 204 or not getattr(resp, "content", b"")):
            return None
        try:
            envelope = resp.json()
        except ValueError as exc:
            snippet = str(getattr(resp, "text", ""))[:400]
            raise ApiEnvelopeError(f"{ctx}: invalid JSON response: {snippet}", context=ctx) from exc
        if not isinstance(envelope, dict):
            raise ApiEnvelopeError(f"{ctx}: expected envelope object", payload=envelope, context=ctx)
        code = envelope.get("code")
        if code is not None and code not in SUCCESS_CODES:
            message = body_message(envelope) or f"{ctx}: envelope code {code}"
            raise ApiEnvelopeError(message, payload=envelope, context=ctx)
        return envelope.get("data")

    @staticmethod
    def _rows(data: Any) -> List[Record]:
        if isinstance(data, dict):
            data = data.get("data")
        if not isinstance(data, list):
            return []
        return [dict(entry) for entry in data if isinstance(entry, dict)]

    @staticmethod
    def _pagination(data: Any) -> Dict[str, Any]:
        if isinstance(data, dict) and isinstance(data.get("pagination"), dict):
            return dict(data["pagination"])
        return {}

