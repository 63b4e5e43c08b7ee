"""Runtime settings for the dashboard client.

Values come from ``RENEWDASH_*`` environment variables; the defaults match
the dashboard behaviour (2 s post-submit redirect, 500 ms search debounce, one
hour session timer).
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional, Tuple

ENV_PREFIX = "RENEWDASH_"
MISSING_BASE_URL = f"{ENV_PREFIX}API_BASE (or {ENV_PREFIX}API_BASE_URL) is not configured."


@dataclass(frozen=True)
class DashboardSettings:
    """Typed runtime settings.

    Attributes:
        api_base_url: Backend origin; required by the web runtime.
        api_key: Static ``X-Api-Key`` value.
        request_timeout_s: Timeout for JSON API calls.
        download_timeout_s: Timeout for the Excel report download.
        session_timeout_s: Session expiry timer armed on every protected screen.
        redirect_delay_s: Delay before navigating after a notice (expiry, saved form).
        search_debounce_ms: Quiet period before a list refetch fires.
        reminder_phone_1: First business number quoted in WhatsApp reminders.
        reminder_phone_2: Second business number quoted in WhatsApp reminders.
        download_dir: Directory receiving downloaded reports.
        storage_secret: Secret for the web runtime's browser storage.
    """

    api_base_url: str = ""
    api_key: str = "X-Secret-Key"
    request_timeout_s: int = 10
    download_timeout_s: int = 60
    session_timeout_s: int = 3600
    redirect_delay_s: float = 2.0
    search_debounce_ms: int = 500
    reminder_phone_1: str = ""
    reminder_phone_2: str = ""
    download_dir: str = "."
    storage_secret: str = "renewdash"

    def __post_init__(self) -> None:
        for name in ("request_timeout_s", "download_timeout_s", "session_timeout_s", "search_debounce_ms"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive.")
        if self.redirect_delay_s < 0:
            raise ValueError("redirect_delay_s must be non-negative.")

    @property
    def contact_numbers(self) -> Tuple[str, str]:
        return (self.reminder_phone_1, self.reminder_phone_2)

    def with_overrides(self, **overrides: Any) -> "DashboardSettings":
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "DashboardSettings":
        """Build settings from flat keys, coercing strings to field types."""
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")
        known = {item.name: item for item in fields(cls)}
        unknown = set(payload.keys()) - set(known)
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}")
        values: Dict[str, Any] = {}
        defaults = cls()
        for key, raw in payload.items():
            values[key] = _coerce(key, raw, type(getattr(defaults, key)))
        return cls(**values)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DashboardSettings":
        env = os.environ if environ is None else environ
        payload: Dict[str, Any] = {}
        for item in fields(cls):
            value = env.get(f"{ENV_PREFIX}{item.name.upper()}")
            if value is not None and value.strip():
                payload[item.name] = value
        # Deployments commonly expose the backend origin as API_BASE.
        if "api_base_url" not in payload and env.get(f"{ENV_PREFIX}API_BASE"):
            payload["api_base_url"] = env[f"{ENV_PREFIX}API_BASE"]
        return cls.from_mapping(payload)


def _coerce(name: str, value: Any, target: type) -> Any:
    if target is str:
        return "" if value is None else str(value).strip()
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number.")
    try:
        if target is int:
            return int(str(value).strip()) if isinstance(value, str) else int(value)
        if target is float:
            return float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number.") from exc
    raise ValueError(f"Unhandled settings field: {name}")


__all__ = ["DashboardSettings", "ENV_PREFIX", "MISSING_BASE_URL"]
