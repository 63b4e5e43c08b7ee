"""NiceGUI entrypoint for the renewal dashboard web runtime."""

from __future__ import annotations

import argparse
from typing import Any, Callable, Dict, Optional, Tuple

from nicegui import background_tasks, run, ui

from renewdash.app.session_guard import SIGN_IN_ROUTE, SessionGuard
from renewdash.app.timer_scheduler import TimerScheduler
from renewdash.domain.entities import RESOURCES, resource_spec
from renewdash.domain.pagination import LIMIT_CHOICES
from renewdash.domain.ports import UseCaseError
from renewdash.domain.reminders import HORIZONS
from renewdash.usecases.service_reports import ALL, ReportFilters
from renewdash.utils.logging import configure_root
from renewdash.viewmodels.form_vm import FormVM
from renewdash.viewmodels.formatting import format_date, format_datetime, format_idr, status_label
from renewdash.viewmodels.list_vm import ListVM
from renewdash.viewmodels.reminder_vm import ReminderVM
from renewdash.viewmodels.service_form_vm import ServiceFormVM
from renewdash.viewmodels.wa_log_vm import WaLogVM
from renewdash.web_ui.runtime import (
    DATE_FIELDS,
    LOOKUP_FIELDS,
    NUMBER_FIELDS,
    STATIC_OPTIONS,
    TEXTAREA_FIELDS,
    WebRuntime,
    editable_fields,
    field_label,
    handle_error,
)

MONEY_COLUMNS = frozenset({"final_price", "price", "normal_price"})
DATE_COLUMNS = frozenset({"end_date", "start_date", "created_date", "modified_date"})
URGENCY_COLORS = {
    "expired": "negative",
    "critical": "negative",
    "warning": "warning",
    "ok": "positive",
    "unknown": "grey",
}

NAV_LINKS = (
    ("Pengingat", "/dashboard"),
    ("Klien", "/dashboard/clients"),
    ("Layanan", "/dashboard/services"),
    ("User", "/dashboard/users"),
    ("Vendor", "/dashboard/vendors"),
    ("Tipe Klien", "/dashboard/client_types"),
    ("Status Klien", "/dashboard/client_statuses"),
    ("Tipe Layanan", "/dashboard/service_types"),
    ("Kategori", "/dashboard/service_categories"),
    ("Role", "/dashboard/roles"),
    ("Laporan", "/dashboard/reports"),
    ("Log WA", "/dashboard/wa-log"),
)


def _install_theme() -> None:
    """Install global CSS tokens for the dashboard."""
    ui.add_head_html(
        """
<style>
:root {
  --rd-bg: #f4f6fb;
  --rd-card: #ffffff;
  --rd-border: #d8dee9;
  --rd-accent: #1d5d9b;
  --rd-muted: #5b6678;
}
body { background: var(--rd-bg); }
.rd-page { max-width: 1280px; margin: 0 auto; padding: 16px; }
.rd-card { background: var(--rd-card); border: 1px solid var(--rd-border); border-radius: 12px; }
.rd-muted { color: var(--rd-muted); }
.rd-error { color: #b42318; font-size: 12px; min-height: 14px; }
</style>
        """,
        shared=True,
    )


def _cell(key: str, value: Any) -> str:
    if key in MONEY_COLUMNS:
        return format_idr(value)
    if key in DATE_COLUMNS:
        return format_date(value)
    if key == "status":
        return status_label(value)
    return "-" if value in (None, "") else str(value)


def _option_key(options: Dict[Any, str], value: Any) -> Any:
    """Map a record value onto the matching select key; API ids may arrive as strings."""
    for key in options:
        if str(key) == str(value):
            return key
    return None


def _build_ui(runtime: WebRuntime) -> None:
    """Register the NiceGUI pages for the runtime."""

    def protect() -> Optional[Tuple[TimerScheduler, SessionGuard]]:
        scheduler = runtime.scheduler()
        guard = runtime.guard(scheduler)
        if not guard.mount():
            return None
        ui.context.client.on_disconnect(scheduler.cancel_all)
        return scheduler, guard

    def header(guard: SessionGuard) -> None:
        with ui.row().classes("w-full items-center justify-between rd-card q-pa-sm q-mb-md"):
            with ui.row().classes("q-gutter-sm"):
                for label, route in NAV_LINKS:
                    ui.link(label, route)
            with ui.row().classes("items-center q-gutter-sm"):
                identity = guard.identity
                if identity is not None:
                    ui.label(f"{identity.username} ({identity.role or '-'})").classes("rd-muted")
                ui.button("Keluar", on_click=guard.logout, color="negative").props("flat dense")

    @ui.page("/")
    def index() -> None:
        target = "/dashboard" if runtime.token_store().get_token() else SIGN_IN_ROUTE
        ui.navigate.to(target)

    @ui.page(SIGN_IN_ROUTE)
    def sign_in() -> None:
        with ui.column().classes("rd-page items-center"):
            with ui.card().classes("rd-card q-pa-lg w-96"):
                ui.label("Masuk").classes("text-h5")
                username = ui.input("Username").classes("w-full")
                password = ui.input("Kata sandi", password=True, password_toggle_button=True).classes("w-full")
                error_label = ui.label("").classes("rd-error")

                async def submit() -> None:
                    error_label.text = ""
                    button.disable()
                    try:
                        ctrl = runtime.controller()
                        await run.io_bound(ctrl.uc_login, username.value or "", password.value or "")
                    except (UseCaseError, RuntimeError) as exc:
                        error_label.text = str(exc)
                        button.enable()
                        return
                    ui.navigate.to("/dashboard")

                button = ui.button("Masuk", on_click=submit, color="primary").classes("w-full")
                password.on("keydown.enter", submit)

    @ui.page("/dashboard")
    async def reminders() -> None:
        ctx = protect()
        if ctx is None:
            return
        scheduler, guard = ctx
        ctrl = runtime.controller()
        client = ui.context.client

        async def fetch() -> None:
            ticket = vm.begin_fetch()
            if ticket is None:
                return
            try:
                result = await run.io_bound(ctrl.uc_list, "services", ticket.query)
            except UseCaseError as err:
                applied = vm.complete_fetch(ticket, error=err)
                if applied:
                    with client:
                        handle_error(guard, err, inline=True)
            else:
                applied = vm.complete_fetch(ticket, result=result)
            if applied:
                with client:
                    render_rows.refresh()

        vm = ReminderVM(
            RESOURCES["services"],
            ctrl.uc_list,
            scheduler,
            debounce_ms=runtime.settings.search_debounce_ms,
            dispatch=lambda: background_tasks.create(fetch()),
        )
        client.on_disconnect(vm.dispose)

        async def send_reminder(service_id: Any) -> None:
            try:
                message = await run.io_bound(ctrl.uc_wa_reminder, service_id)
            except UseCaseError as err:
                handle_error(guard, err)
                return
            ui.notify(message, type="positive")

        def choose_horizon(value: str) -> None:
            vm.set_horizon(value)
            render_rows.refresh()

        @ui.refreshable
        def render_rows() -> None:
            if vm.error_message:
                ui.label(vm.error_message).classes("rd-error")
            if vm.loading and vm.result is None:
                ui.spinner()
                return
            for row in vm.reminder_rows():
                service = row.service
                with ui.card().classes("rd-card w-full q-pa-sm"):
                    with ui.row().classes("w-full items-center justify-between"):
                        with ui.column():
                            ui.label(str(service.get("service_detail_name") or "-")).classes("text-subtitle1")
                            ui.label(
                                f"{service.get('client_name') or '-'} | berakhir {format_date(service.get('end_date'))}"
                            ).classes("rd-muted")
                        with ui.row().classes("items-center q-gutter-sm"):
                            ui.badge(row.days_label, color=URGENCY_COLORS[row.urgency])
                            ui.button(
                                "Kirim WA",
                                on_click=lambda _, sid=service.get("id"): send_reminder(sid),
                            ).props("dense")
            with ui.row().classes("items-center q-gutter-sm"):
                ui.button("Sebelumnya", on_click=vm.previous_page).props("flat").set_enabled(vm.has_previous_page)
                ui.label(f"Halaman {vm.query.page}")
                ui.button("Berikutnya", on_click=vm.next_page).props("flat").set_enabled(vm.has_next_page)

        with ui.column().classes("rd-page w-full"):
            header(guard)
            ui.label("Layanan yang akan berakhir").classes("text-h5")
            ui.toggle(dict(HORIZONS), value=vm.horizon, on_change=lambda e: choose_horizon(str(e.value)))
            render_rows()
        vm.refresh_now()

    @ui.page("/dashboard/reports")
    async def reports() -> None:
        ctx = protect()
        if ctx is None:
            return
        _, guard = ctx
        ctrl = runtime.controller()
        filters = ReportFilters()
        preview: Dict[str, Any] = {"rows": []}
        try:
            client_options = await run.io_bound(runtime.lookup_options, "client_id")
            type_options = await run.io_bound(runtime.lookup_options, "service_type_id")
        except UseCaseError as err:
            handle_error(guard, err)
            client_options, type_options = {}, {}

        async def load_preview() -> None:
            try:
                preview["rows"] = await run.io_bound(ctrl.uc_report_preview, filters)
            except UseCaseError as err:
                handle_error(guard, err)
                return
            render_preview.refresh()

        async def download() -> None:
            try:
                path = await run.io_bound(ctrl.uc_report_download, filters, runtime.settings.download_dir)
            except UseCaseError as err:
                handle_error(guard, err)
                return
            ui.download(path)
            ui.notify("Laporan berhasil diunduh", type="positive")

        @ui.refreshable
        def render_preview() -> None:
            rows = preview["rows"]
            if not rows:
                ui.label("Belum ada data pratinjau").classes("rd-muted")
                return
            columns = [
                {"name": key, "label": field_label(key), "field": key}
                for key in ("service_detail_name", "client_name", "service_name", "final_price", "end_date")
            ]
            table_rows = [{key: _cell(key, row.get(key)) for key in row} for row in rows]
            ui.table(columns=columns, rows=table_rows).classes("w-full")

        with ui.column().classes("rd-page w-full"):
            header(guard)
            ui.label("Laporan Layanan").classes("text-h5")
            with ui.row().classes("q-gutter-md items-end"):
                ui.input("Tanggal mulai").props("type=date").bind_value(filters, "start_date")
                ui.input("Tanggal akhir").props("type=date").bind_value(filters, "end_date")
                ui.select(
                    {ALL: "Semua klien", **{str(k): v for k, v in client_options.items()}},
                    value=ALL,
                    label="Klien",
                    on_change=lambda e: setattr(filters, "client_ids", str(e.value)),
                )
                ui.select(
                    {ALL: "Semua tipe", **{str(k): v for k, v in type_options.items()}},
                    value=ALL,
                    label="Tipe layanan",
                    on_change=lambda e: setattr(filters, "service_type_ids", str(e.value)),
                )
                ui.select(
                    {"1": "Aktif", "0": "Tidak Aktif", ALL: "Semua"},
                    value=filters.status_id,
                    label="Status",
                    on_change=lambda e: setattr(filters, "status_id", str(e.value)),
                )
            with ui.row().classes("q-gutter-sm"):
                ui.button("Pratinjau", on_click=load_preview, color="primary")
                ui.button("Unduh Excel", on_click=download)
            render_preview()

    @ui.page("/dashboard/wa-log")
    async def wa_log() -> None:
        ctx = protect()
        if ctx is None:
            return
        _, guard = ctx
        vm = WaLogVM(runtime.controller().uc_wa_log)

        async def go(action: Callable[[], None]) -> None:
            await run.io_bound(action)
            if vm.error is not None:
                handle_error(guard, vm.error, inline=True)
            render_log.refresh()

        @ui.refreshable
        def render_log() -> None:
            if vm.error_message:
                ui.label(vm.error_message).classes("rd-error")
            for message in vm.messages:
                with ui.card().classes("rd-card w-full q-pa-sm"):
                    with ui.row().classes("w-full justify-between"):
                        ui.label(f"{message.get('from') or '-'} -> {message.get('to') or '-'}")
                        ui.badge(str(message.get("status") or "-"))
                    ui.label(str(message.get("body") or "")).classes("rd-muted")
                    ui.label(format_datetime(message.get("date_sent") or message.get("date_created"))).classes(
                        "text-caption"
                    )
            with ui.row().classes("items-center q-gutter-sm"):
                ui.button("Sebelumnya", on_click=lambda: go(vm.previous_page)).props("flat").set_enabled(
                    vm.has_previous_page
                )
                ui.label(f"Halaman {vm.page + 1}")
                ui.button("Berikutnya", on_click=lambda: go(vm.next_page)).props("flat").set_enabled(
                    vm.has_next_page
                )
                ui.button("Muat ulang", on_click=lambda: go(vm.refresh)).props("flat")

        with ui.column().classes("rd-page w-full"):
            header(guard)
            ui.label("Log WhatsApp").classes("text-h5")
            render_log()
        await go(vm.load)

    @ui.page("/dashboard/{resource}")
    async def list_page(resource: str) -> None:
        try:
            spec = resource_spec(resource)
        except ValueError:
            ui.label("Halaman tidak ditemukan")
            return
        ctx = protect()
        if ctx is None:
            return
        scheduler, guard = ctx
        ctrl = runtime.controller()
        client = ui.context.client

        async def fetch() -> None:
            ticket = vm.begin_fetch()
            if ticket is None:
                return
            with client:
                render_table.refresh()
            try:
                result = await run.io_bound(ctrl.uc_list, spec.name, ticket.query)
            except UseCaseError as err:
                applied = vm.complete_fetch(ticket, error=err)
                if applied:
                    with client:
                        handle_error(guard, err, inline=True)
            else:
                applied = vm.complete_fetch(ticket, result=result)
            if applied:
                with client:
                    render_table.refresh()

        vm = ListVM(
            spec,
            ctrl.uc_list,
            scheduler,
            debounce_ms=runtime.settings.search_debounce_ms,
            dispatch=lambda: background_tasks.create(fetch()),
        )
        client.on_disconnect(vm.dispose)

        async def delete(row: Dict[str, Any]) -> None:
            name = row.get("name") or row.get("service_detail_name") or row.get("id")
            with ui.dialog() as dialog, ui.card():
                ui.label(f"Hapus {spec.label.lower()} {name}?")
                with ui.row():
                    ui.button("Batal", on_click=lambda: dialog.submit(False)).props("flat")
                    ui.button("Hapus", on_click=lambda: dialog.submit(True), color="negative")
            if not await dialog:
                return
            try:
                await run.io_bound(ctrl.uc_delete, spec.name, row.get("id"))
            except UseCaseError as err:
                handle_error(guard, err)
                return
            ui.notify(f"{spec.label} {name} berhasil dihapus", type="positive")
            vm.refresh_now()

        def sort_by(key: str) -> None:
            vm.toggle_sort(key)
            render_table.refresh()

        @ui.refreshable
        def render_table() -> None:
            if vm.error_message:
                ui.label(vm.error_message).classes("rd-error")
            columns = list(spec.columns)
            extra = 2 if spec.writable else 1
            with ui.grid(columns=len(columns) + extra).classes("w-full rd-card q-pa-sm items-center"):
                ui.label("No").classes("text-bold")
                for column in columns:
                    if column.sortable:
                        ui.button(
                            f"{column.label} {vm.sort_indicator(column.key)}".strip(),
                            on_click=lambda _, key=column.key: sort_by(key),
                        ).props("flat dense no-caps")
                    else:
                        ui.label(column.label).classes("text-bold")
                if spec.writable:
                    ui.label("Aksi").classes("text-bold")
                for number, row in vm.numbered_rows():
                    ui.label(str(number))
                    for column in columns:
                        ui.label(_cell(column.key, row.get(column.key)))
                    if spec.writable:
                        with ui.row().classes("q-gutter-xs"):
                            ui.button(
                                icon="edit",
                                on_click=lambda _, rid=row.get("id"): ui.navigate.to(
                                    f"/dashboard/{spec.name}/{rid}/edit"
                                ),
                            ).props("flat dense")
                            ui.button(
                                icon="delete",
                                color="negative",
                                on_click=lambda _, r=row: delete(r),
                            ).props("flat dense")
            if vm.loading:
                ui.spinner()
            with ui.row().classes("items-center q-gutter-sm"):
                ui.label(vm.range_label()).classes("rd-muted")
                ui.button("Sebelumnya", on_click=vm.previous_page).props("flat").set_enabled(vm.has_previous_page)
                ui.label(f"Halaman {vm.query.page}")
                ui.button("Berikutnya", on_click=vm.next_page).props("flat").set_enabled(vm.has_next_page)

        with ui.column().classes("rd-page w-full"):
            header(guard)
            with ui.row().classes("w-full items-center justify-between"):
                ui.label(spec.label).classes("text-h5")
                if spec.writable:
                    ui.button(
                        f"Tambah {spec.label}",
                        on_click=lambda: ui.navigate.to(f"/dashboard/{spec.name}/new"),
                        color="primary",
                    )
            with ui.row().classes("items-end q-gutter-md"):
                ui.input("Cari", on_change=lambda e: vm.set_search(str(e.value or ""))).props("clearable")
                ui.select(
                    list(LIMIT_CHOICES),
                    value=vm.query.limit,
                    label="Baris per halaman",
                    on_change=lambda e: vm.set_limit(int(e.value)),
                )
            render_table()
        vm.refresh_now()

    @ui.page("/dashboard/{resource}/new")
    async def create_page(resource: str) -> None:
        await form_page(resource, None)

    @ui.page("/dashboard/{resource}/{record_id}/edit")
    async def edit_page(resource: str, record_id: str) -> None:
        await form_page(resource, record_id)

    async def form_page(resource: str, record_id: Optional[str]) -> None:
        try:
            spec = resource_spec(resource)
        except ValueError:
            ui.label("Halaman tidak ditemukan")
            return
        if not spec.writable:
            ui.label(f"{spec.label} tidak dapat diubah")
            return
        ctx = protect()
        if ctx is None:
            return
        scheduler, guard = ctx
        ctrl = runtime.controller()

        record = None
        try:
            if record_id is not None:
                record = await run.io_bound(ctrl.uc_load, resource, record_id)
            service_types = await run.io_bound(runtime.lookup_rows, "service_types") if resource == "services" else []
        except UseCaseError as err:
            handle_error(guard, err)
            with ui.column().classes("rd-page"):
                ui.label(err.message).classes("rd-error")
            return

        common = dict(
            record=record,
            record_id=record_id,
            navigate=ui.navigate.to,
            list_route=f"/dashboard/{resource}",
            redirect_delay_ms=runtime.redirect_delay_ms,
        )
        vm: FormVM
        if resource == "services":
            vm = ServiceFormVM(spec, scheduler, service_types=service_types, **common)
        else:
            vm = FormVM(spec, scheduler, **common)
        ui.context.client.on_disconnect(vm.dispose)

        names = editable_fields(spec.defaults, is_edit=vm.is_edit)
        options: Dict[str, Dict[Any, str]] = {}
        for name in names:
            if name in ("vendor_id", "renewal_service_id"):
                continue
            if name in LOOKUP_FIELDS or name in STATIC_OPTIONS:
                try:
                    options[name] = await run.io_bound(runtime.lookup_options, name)
                except UseCaseError as err:
                    handle_error(guard, err)
                    options[name] = {}

        inputs: Dict[str, Any] = {}
        error_labels: Dict[str, Any] = {}
        holders: Dict[str, Any] = {}

        def sync_widgets() -> None:
            for key, widget in inputs.items():
                current = vm.draft.get(key)
                if isinstance(widget, ui.select):
                    current = _option_key(widget.options, current)
                if widget.value != current:
                    widget.value = current
            for key, label in error_labels.items():
                label.text = vm.errors.get(key, "")
            if isinstance(vm, ServiceFormVM):
                final_label.text = format_idr(vm.final_price)
                holders["vendor_id"].set_visibility(vm.vendor_required)
                holders["renewal_service_id"].set_visibility(vm.draft.get("order_type") == "RENEWAL")

        def on_change(key: str, value: Any) -> None:
            vm.set_field(key, value)
            sync_widgets()

        async def load_vendors() -> None:
            try:
                inputs["vendor_id"].options = await run.io_bound(runtime.lookup_options, "vendor_id")
            except UseCaseError as err:
                handle_error(guard, err)
            inputs["vendor_id"].update()

        async def load_renewal_candidates() -> None:
            client_id = vm.draft.get("client_id")
            if vm.draft.get("order_type") != "RENEWAL" or not client_id:
                return
            try:
                inputs["renewal_service_id"].options = await run.io_bound(runtime.client_services, client_id)
            except UseCaseError as err:
                handle_error(guard, err)
            inputs["renewal_service_id"].update()

        async def on_service_type(value: Any) -> None:
            if vm.draft.get("service_type_id") == value:
                return
            if vm.select_service_type(value):
                await load_vendors()
            sync_widgets()

        async def on_client(value: Any) -> None:
            if vm.draft.get("client_id") == value:
                return
            vm.select_client(value)
            sync_widgets()
            await load_renewal_candidates()

        async def on_order_type(value: Any) -> None:
            on_change("order_type", value)
            await load_renewal_candidates()

        async def on_renewal_source(value: Any) -> None:
            if not value or value == vm.draft.get("renewal_service_id"):
                return
            try:
                source = await run.io_bound(ctrl.uc_load, "services", value)
            except UseCaseError as err:
                handle_error(guard, err)
                return
            vm.apply_renewal_source(source)
            if vm.vendor_required:
                await load_vendors()
            sync_widgets()

        special: Dict[str, Callable[[Any], Any]] = {}
        if isinstance(vm, ServiceFormVM):
            special = {
                "service_type_id": on_service_type,
                "client_id": on_client,
                "order_type": on_order_type,
                "renewal_service_id": on_renewal_source,
            }

        def build_input(name: str) -> None:
            label = field_label(name)
            value = vm.draft.get(name)
            handler = special.get(name)
            callback = (
                (lambda e, h=handler: h(e.value))
                if handler is not None
                else (lambda e, key=name: on_change(key, e.value))
            )
            with ui.column().classes("w-full q-gutter-none") as holder:
                if name in LOOKUP_FIELDS or name in STATIC_OPTIONS:
                    choices = options.get(name, {})
                    widget = ui.select(choices, value=_option_key(choices, value), label=label, on_change=callback)
                elif name == "is_discount":
                    widget = ui.checkbox(label, value=bool(value), on_change=callback)
                elif name in NUMBER_FIELDS:
                    widget = ui.number(label, value=value, min=0, on_change=callback)
                elif name in DATE_FIELDS:
                    widget = ui.input(label, value=value or "", on_change=callback).props("type=date")
                elif name in TEXTAREA_FIELDS:
                    widget = ui.textarea(label, value=value or "", on_change=callback)
                elif name == "password":
                    widget = ui.input(label, value=value or "", password=True, on_change=callback)
                else:
                    widget = ui.input(label, value=value or "", on_change=callback)
                widget.classes("w-full")
                error_labels[name] = ui.label("").classes("rd-error")
            inputs[name] = widget
            holders[name] = holder

        @ui.refreshable
        def render_feedback() -> None:
            if vm.success_message:
                ui.label(vm.success_message).classes("text-positive")
            if vm.error_message:
                ui.label(vm.error_message).classes("rd-error")

        async def submit() -> None:
            payload = vm.begin_submit()
            sync_widgets()
            render_feedback.refresh()
            if payload is None:
                return
            submit_button.disable()
            actor = guard.identity.username if guard.identity else ""
            try:
                saved = await run.io_bound(ctrl.uc_save, resource, payload, record_id=vm.record_id, actor=actor)
            except UseCaseError as err:
                vm.finish_submit(error=err)
                handle_error(guard, err, inline=True)
            else:
                vm.finish_submit(saved=saved)
            render_feedback.refresh()
            if vm.can_submit:
                submit_button.enable()

        with ui.column().classes("rd-page w-full"):
            header(guard)
            title = f"Edit {spec.label}" if vm.is_edit else f"Tambah {spec.label}"
            ui.label(title).classes("text-h5")
            with ui.card().classes("rd-card w-full q-pa-md"):
                for name in names:
                    build_input(name)
                if isinstance(vm, ServiceFormVM):
                    with ui.row().classes("items-center q-gutter-sm"):
                        ui.label(field_label("final_price")).classes("text-bold")
                        final_label = ui.label(format_idr(vm.final_price))
                render_feedback()
                with ui.row().classes("q-gutter-sm"):
                    submit_button = ui.button("Simpan", on_click=submit, color="primary")
                    ui.button("Batal", on_click=lambda: ui.navigate.to(vm.list_route)).props("flat")
        if isinstance(vm, ServiceFormVM):
            if vm.vendor_required:
                await load_vendors()
            await load_renewal_candidates()
        sync_widgets()


def _parse_args() -> argparse.Namespace:
    """Parse CLI args for web runtime startup."""
    parser = argparse.ArgumentParser(description="Run the renewal dashboard NiceGUI web UI.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--reload", action="store_true")
    parser.add_argument("--smoke-test", action="store_true")
    return parser.parse_args()


def main() -> None:
    """CLI entrypoint for the NiceGUI runtime."""
    args = _parse_args()
    configure_root()
    runtime = WebRuntime()
    if args.smoke_test:
        payload = runtime.settings.to_dict()
        print("web-smoke-ok", bool(payload.get("api_base_url")), sorted(RESOURCES))
        return
    _install_theme()
    _build_ui(runtime)
    ui.run(
        host=args.host,
        port=args.port,
        title="Renewal Dashboard",
        reload=args.reload,
        show=False,
        storage_secret=runtime.settings.storage_secret,
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
