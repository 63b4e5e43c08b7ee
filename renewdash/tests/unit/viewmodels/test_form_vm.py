from __future__ import annotations

from typing import Any, Dict, List

from renewdash.domain.entities import RESOURCES
from renewdash.domain.ports import UseCaseError
from renewdash.tests.unit.helpers import ManualTimers
from renewdash.viewmodels.form_vm import FormVM


class _Saver:
    def __init__(self, error: UseCaseError | None = None) -> None:
        self.payloads: List[Dict[str, Any]] = []
        self.error = error

    def __call__(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return {"id": 99, **payload}


def _client_form(timers: ManualTimers, navigated: List[str], **kwargs: Any) -> FormVM:
    return FormVM(
        RESOURCES["clients"],
        timers.scheduler(),
        navigate=navigated.append,
        **kwargs,
    )


def test_invalid_draft_never_reaches_backend() -> None:
    timers, navigated, saver = ManualTimers(), [], _Saver()
    vm = _client_form(timers, navigated)
    vm.set_field("email", "not-an-email")

    assert vm.submit(saver) is False

    assert saver.payloads == []
    assert vm.errors == {
        "name": "Nama klien wajib diisi",
        "client_type_id": "Tipe klien wajib dipilih",
        "email": "Format email tidak valid",
    }
    assert vm.can_submit is True
    assert vm.submitting is False


def test_editing_a_field_clears_only_its_error() -> None:
    vm = _client_form(ManualTimers(), [])
    vm.validate()

    vm.set_field("name", "Acme")

    assert "name" not in vm.errors
    assert "client_type_id" in vm.errors


def test_successful_create_reports_and_returns_to_list() -> None:
    timers, navigated, saver = ManualTimers(), [], _Saver()
    vm = _client_form(timers, navigated)
    vm.set_field("name", "Acme")
    vm.set_field("client_type_id", 2)

    assert vm.submit(saver) is True

    assert saver.payloads[0]["name"] == "Acme"
    assert vm.success_message == "Klien berhasil ditambahkan!"
    assert vm.can_submit is False
    timers.advance(1999)
    assert navigated == []
    timers.advance(1)
    assert navigated == ["/dashboard/clients"]


def test_edit_mode_uses_record_id_and_update_message() -> None:
    timers, navigated = ManualTimers(), []
    record = {"id": 5, "name": "Acme", "client_type_id": 1, "email": ""}
    vm = _client_form(timers, navigated, record=record)

    assert vm.is_edit is True
    assert vm.record_id == 5
    assert vm.value("name") == "Acme"
    assert vm.submit(_Saver()) is True
    assert vm.success_message == "Klien berhasil diupdate!"


def test_user_edit_does_not_require_password() -> None:
    create = FormVM(RESOURCES["users"], ManualTimers().scheduler())
    edit = FormVM(RESOURCES["users"], ManualTimers().scheduler(), record_id=3)

    assert "password" in {rule.name for rule in create.rules}
    assert "password" not in {rule.name for rule in edit.rules}


def test_short_password_is_rejected_on_create() -> None:
    vm = FormVM(RESOURCES["users"], ManualTimers().scheduler())
    for key, value in {"name": "A", "username": "a", "email": "a@b.co", "role_id": 1}.items():
        vm.set_field(key, value)
    vm.set_field("password", "short")

    assert vm.validate() == {"password": "Password minimal 8 karakter"}


def test_failed_submit_keeps_draft_and_reenables_button() -> None:
    timers, navigated = ManualTimers(), []
    saver = _Saver(UseCaseError("VALIDATION", "Nama sudah digunakan", status=422))
    vm = _client_form(timers, navigated)
    vm.set_field("name", "Acme")
    vm.set_field("client_type_id", 2)

    assert vm.submit(saver) is False

    assert vm.error_message == "Nama sudah digunakan"
    assert vm.value("name") == "Acme"
    assert vm.can_submit is True
    timers.advance(5000)
    assert navigated == []


def test_begin_submit_blocks_double_submit() -> None:
    vm = _client_form(ManualTimers(), [])
    vm.set_field("name", "Acme")
    vm.set_field("client_type_id", 2)

    first = vm.begin_submit()

    assert first is not None
    assert vm.begin_submit() is None
    vm.finish_submit(saved={"id": 1})
    assert vm.completed is True


def test_dispose_cancels_pending_redirect() -> None:
    timers, navigated = ManualTimers(), []
    vm = _client_form(timers, navigated)
    vm.set_field("name", "Acme")
    vm.set_field("client_type_id", 2)
    vm.submit(_Saver())

    vm.dispose()
    timers.advance(5000)

    assert navigated == []


def test_edit_payload_omits_joined_display_fields() -> None:
    record = {
        "id": 5,
        "name": "Acme",
        "client_type_id": 1,
        "client_type_name": "Korporat",
        "address": "Jl. Sudirman",
        "whatsapp_number": "0811",
        "email": "ops@acme.id",
        "created_by": "admin",
        "created_date": "2025-01-01T00:00:00Z",
    }
    saver = _Saver()
    vm = _client_form(ManualTimers(), [], record=record)

    assert vm.submit(saver) is True

    sent = saver.payloads[0]
    assert set(sent) == set(RESOURCES["clients"].defaults)
    assert "client_type_name" not in sent
    assert sent["address"] == "Jl. Sudirman"
