"""Create/edit form state for one resource record.

Call context:
    Form pages seed a ``FormVM`` from the resource defaults (create) or the
    fetched record (edit), bind inputs to :meth:`FormVM.set_field` and route
    the submit button through :meth:`FormVM.begin_submit` /
    :meth:`FormVM.finish_submit`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from renewdash.app.timer_scheduler import TimerScheduler
from renewdash.domain.entities import ResourceSpec
from renewdash.domain.ports import Record, UseCaseError
from renewdash.domain.validation import FieldRule, validate

LOGGER = logging.getLogger(__name__)

REDIRECT_TIMER = "form-redirect"

SaveFn = Callable[[Dict[str, Any]], Record]


class FormVM:
    """Draft, per-field errors and submit lifecycle of a form."""

    def __init__(
        self,
        spec: ResourceSpec,
        scheduler: TimerScheduler,
        *,
        record: Optional[Mapping[str, Any]] = None,
        record_id: Optional[Any] = None,
        navigate: Optional[Callable[[str], None]] = None,
        list_route: str = "",
        redirect_delay_ms: int = 2000,
    ) -> None:
        self.spec = spec
        self._scheduler = scheduler
        self.record_id = record_id
        if record_id is None and record is not None:
            self.record_id = record.get("id")
        self.draft: Dict[str, Any] = spec.blank_draft()
        if record is not None:
            # joined display columns (client_name, role_name, ...) stay out of the draft
            self.draft.update({key: value for key, value in record.items() if key in self.draft})
        self.errors: Dict[str, str] = {}
        self.submitting = False
        self.completed = False
        self.success_message = ""
        self.error: Optional[UseCaseError] = None
        self._navigate = navigate
        self.list_route = list_route or f"/dashboard/{spec.name}"
        self.redirect_delay_ms = int(redirect_delay_ms)

    @property
    def is_edit(self) -> bool:
        return self.record_id is not None

    @property
    def rules(self) -> Tuple[FieldRule, ...]:
        return self.spec.update_rules if self.is_edit else self.spec.create_rules

    @property
    def can_submit(self) -> bool:
        return not self.submitting and not self.completed

    @property
    def error_message(self) -> str:
        return self.error.message if self.error else ""

    def value(self, name: str, default: Any = None) -> Any:
        return self.draft.get(name, default)

    def set_field(self, name: str, value: Any) -> None:
        """Store ``value`` and clear the error previously shown for ``name``."""
        self.draft[name] = value
        self.errors.pop(name, None)

    def validate(self) -> Dict[str, str]:
        self.errors = validate(self.rules, self.draft)
        return dict(self.errors)

    def payload(self) -> Dict[str, Any]:
        """Draft as sent to the backend."""
        return dict(self.draft)

    def begin_submit(self) -> Optional[Dict[str, Any]]:
        """Validate and enter the submitting state.

        Returns:
            The payload to send, or ``None`` when the draft is invalid or a
            submit is already running. An invalid draft leaves the button
            enabled.
        """
        if not self.can_submit:
            return None
        self.error = None
        self.success_message = ""
        if self.validate():
            LOGGER.debug("%s form has %d invalid fields", self.spec.name, len(self.errors))
            return None
        self.submitting = True
        return self.payload()

    def finish_submit(
        self,
        *,
        saved: Optional[Record] = None,
        error: Optional[UseCaseError] = None,
    ) -> None:
        """Leave the submitting state with the backend outcome."""
        self.submitting = False
        if error is not None:
            self.error = error
            return
        self.completed = True
        verb = "diupdate" if self.is_edit else "ditambahkan"
        self.success_message = f"{self.spec.label} berhasil {verb}!"
        if self._navigate is not None:
            self._scheduler.schedule(REDIRECT_TIMER, self.redirect_delay_ms, self._go_back)

    def submit(self, save_fn: SaveFn) -> bool:
        """Validate and save synchronously.

        Returns:
            ``True`` when the backend accepted the draft.
        """
        payload = self.begin_submit()
        if payload is None:
            return False
        try:
            saved = save_fn(payload)
        except UseCaseError as err:
            self.finish_submit(error=err)
            return False
        self.finish_submit(saved=saved)
        return True

    def dispose(self) -> None:
        self._scheduler.cancel(REDIRECT_TIMER)

    def _go_back(self) -> None:
        if self._navigate is not None:
            self._navigate(self.list_route)


__all__ = ["FormVM", "REDIRECT_TIMER", "SaveFn"]
