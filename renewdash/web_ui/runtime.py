"""NiceGUI runtime orchestration for the dashboard.

This module composes settings, per-browser controllers, timer schedulers and
session guards for the pages registered in :mod:`renewdash.web_ui.main`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from nicegui import app, ui

from renewdash.adapters.storage_local import MappingTokenStore
from renewdash.app.controller import AppController
from renewdash.app.session_guard import SessionGuard
from renewdash.app.settings import MISSING_BASE_URL, DashboardSettings
from renewdash.app.timer_scheduler import TimerScheduler
from renewdash.domain.ports import UseCaseError
from renewdash.usecases.error_mapping import is_session_expired
from renewdash.usecases.load_lookup import as_options

LOGGER = logging.getLogger(__name__)

# Draft field -> (lookup resource, label column).
LOOKUP_FIELDS: Dict[str, Tuple[str, str]] = {
    "client_type_id": ("client_types", "name"),
    "role_id": ("roles", "name"),
    "service_category_id": ("service_categories", "name"),
    "client_id": ("clients", "name"),
    "service_type_id": ("service_types", "name"),
    "vendor_id": ("vendors", "name"),
    "renewal_service_id": ("services", "service_detail_name"),
}

FIELD_LABELS: Dict[str, str] = {
    "name": "Nama",
    "description": "Deskripsi",
    "address": "Alamat",
    "whatsapp_number": "Nomor WhatsApp",
    "email": "Email",
    "username": "Username",
    "password": "Password",
    "client_type_id": "Tipe Klien",
    "role_id": "Role",
    "service_category_id": "Kategori Layanan",
    "client_id": "Klien",
    "service_type_id": "Tipe Layanan",
    "vendor_id": "Vendor",
    "renewal_service_id": "Layanan yang diperpanjang",
    "service_detail_name": "Nama Layanan",
    "domain_name": "Domain",
    "base_price": "Harga Dasar",
    "normal_price": "Harga Normal",
    "is_discount": "Diskon",
    "discount_type": "Jenis Diskon",
    "discount": "Nilai Diskon",
    "final_price": "Harga Akhir",
    "notes": "Catatan",
    "start_date": "Tanggal Mulai",
    "end_date": "Tanggal Berakhir",
    "handled_by": "Ditangani oleh",
    "status": "Status",
    "pic": "PIC",
    "order_type": "Jenis Order",
    "price": "Harga",
    "is_need_vendor": "Butuh Vendor",
}

NUMBER_FIELDS = frozenset({"base_price", "normal_price", "discount", "price"})
TEXTAREA_FIELDS = frozenset({"address", "notes", "description"})
DATE_FIELDS = frozenset({"start_date", "end_date"})
STATIC_OPTIONS: Dict[str, Dict[Any, str]] = {
    "discount_type": {"amount": "Nominal (Rp)", "percentage": "Persen (%)"},
    "order_type": {"NEW": "Baru", "RENEWAL": "Perpanjangan"},
    "is_need_vendor": {"0": "Tidak", "1": "Ya"},
    "status": {1: "Aktif", 0: "Tidak Aktif"},
}


def _schedule_timer(delay_ms: int, callback: Callable[[], None]) -> Any:
    return ui.timer(delay_ms / 1000.0, callback, once=True)


def _cancel_timer(timer: Any) -> None:
    timer.cancel()


class WebRuntime:
    """Shared runtime state for every browser session.

    Controllers are cached per browser id so the WhatsApp log cache survives
    page navigation within one session.
    """

    def __init__(self, settings: Optional[DashboardSettings] = None) -> None:
        self.settings = settings or DashboardSettings.from_env()
        self._controllers: Dict[str, AppController] = {}

    def token_store(self) -> MappingTokenStore:
        return MappingTokenStore(app.storage.user)

    @staticmethod
    def browser_id() -> str:
        return str(app.storage.browser.get("id") or "")

    def controller(self) -> AppController:
        browser_id = self.browser_id()
        ctrl = self._controllers.get(browser_id)
        if ctrl is None:
            ctrl = AppController(self.settings, self.token_store())
            self._controllers[browser_id] = ctrl
        if not ctrl.ensure_ready():
            raise RuntimeError(MISSING_BASE_URL)
        return ctrl

    def forget_controller(self, browser_id: Optional[str] = None) -> None:
        """Drop the cached controller of a browser whose session ended."""
        key = self.browser_id() if browser_id is None else browser_id
        if self._controllers.pop(key, None) is not None:
            LOGGER.debug("Evicted controller for browser %s", key)

    def scheduler(self) -> TimerScheduler:
        return TimerScheduler(_schedule_timer, _cancel_timer)

    def guard(self, scheduler: TimerScheduler) -> SessionGuard:
        # timer callbacks run outside the request, so bind the id now
        browser_id = self.browser_id()
        return SessionGuard(
            self.token_store(),
            scheduler,
            navigate=ui.navigate.to,
            notify=lambda message: ui.notify(message, type="warning"),
            session_timeout_s=self.settings.session_timeout_s,
            redirect_delay_s=self.settings.redirect_delay_s,
            on_expire=lambda: self.forget_controller(browser_id),
        )

    @property
    def redirect_delay_ms(self) -> int:
        return int(self.settings.redirect_delay_s * 1000)

    def lookup_options(self, field_name: str) -> Dict[Any, str]:
        """Options for a choice field, loaded synchronously (use ``run.io_bound``)."""
        if field_name in STATIC_OPTIONS:
            return dict(STATIC_OPTIONS[field_name])
        resource, label_key = LOOKUP_FIELDS[field_name]
        rows = self.controller().uc_lookup(resource)
        return dict(as_options(rows, label_key))

    def lookup_rows(self, resource: str) -> List[Dict[str, Any]]:
        return self.controller().uc_lookup(resource)

    def client_services(self, client_id: Any) -> Dict[Any, str]:
        """Renewal candidates for one client."""
        rows = self.controller().uc_lookup("services")
        matching = [row for row in rows if str(row.get("client_id")) == str(client_id)]
        return dict(as_options(matching, "service_detail_name"))


def handle_error(guard: SessionGuard, err: UseCaseError, *, inline: bool = False) -> None:
    """Apply the 401 policy, then surface ``err`` as a toast unless shown inline."""
    if is_session_expired(err) and guard.handle_unauthorized():
        return
    if not inline:
        ui.notify(err.message, type="negative", close_button="OK")


def field_label(name: str) -> str:
    return FIELD_LABELS.get(name, name.replace("_", " ").title())


def editable_fields(defaults: Mapping[str, Any], *, is_edit: bool) -> List[str]:
    """Draft keys rendered as inputs, in declaration order."""
    names = [name for name in defaults if name != "final_price"]
    if is_edit and "password" in names:
        names.remove("password")
    return names


__all__ = [
    "DATE_FIELDS",
    "LOOKUP_FIELDS",
    "NUMBER_FIELDS",
    "STATIC_OPTIONS",
    "TEXTAREA_FIELDS",
    "WebRuntime",
    "editable_fields",
    "field_label",
    "handle_error",
]
