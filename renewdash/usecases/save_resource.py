"""Use case for creating or updating one resource record."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from renewdash.domain.entities import AUDIT_FIELDS, resource_spec
from renewdash.domain.ports import AdminPort, Record, UseCaseError

from .error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)

# Display-only fields resolved by the backend; never sent back.
READ_ONLY_FIELDS = frozenset({"id", *AUDIT_FIELDS})


class SaveResource:
    """Create (``record_id is None``) or update a record.

    The caller's username is stamped as ``created_by`` on create and
    ``modified_by`` on update.
    """

    def __init__(self, admin_port: AdminPort) -> None:
        self.admin_port = admin_port

    def __call__(
        self,
        resource: str,
        draft: Mapping[str, Any],
        *,
        record_id: Optional[Any] = None,
        actor: str = "",
    ) -> Record:
        spec = resource_spec(resource)
        if not spec.writable:
            raise UseCaseError("READ_ONLY", f"{spec.label} tidak dapat diubah")
        payload = {key: value for key, value in draft.items() if key not in READ_ONLY_FIELDS}
        creating = record_id is None
        if not creating and not payload.get("password"):
            # blank password on edit keeps the stored one
            payload.pop("password", None)
        audit_key = "created_by" if creating else "modified_by"
        payload[audit_key] = actor or "Admin"
        action = "menambahkan" if creating else "memperbarui"
        try:
            if creating:
                saved = self.admin_port.create(resource, payload)
            else:
                saved = self.admin_port.update(resource, record_id, payload)
        except Exception as exc:
            raise map_api_error(exc, default_message=f"Gagal {action} {spec.label.lower()}") from exc
        LOGGER.info("%s %s saved (id=%s)", resource, "created" if creating else "updated", record_id or saved.get("id"))
        return saved
