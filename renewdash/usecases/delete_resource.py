from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from renewdash.domain.entities import resource_spec
from renewdash.domain.ports import AdminPort, UseCaseError

from .error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)


@dataclass
class DeleteResource:
    admin_port: AdminPort

    def __call__(self, resource: str, record_id: Any) -> None:
        spec = resource_spec(resource)
        if not spec.writable:
            raise UseCaseError("READ_ONLY", f"{spec.label} tidak dapat dihapus")
        try:
            self.admin_port.delete(resource, record_id)
        except Exception as exc:
            raise map_api_error(exc, default_message=f"Gagal menghapus {spec.label.lower()}") from exc
        LOGGER.info("%s %s deleted", resource, record_id)
