from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from renewdash.domain.entities import resource_spec
from renewdash.domain.ports import AdminPort, Record

from .error_mapping import map_api_error


@dataclass
class LoadResource:
    admin_port: AdminPort

    def __call__(self, resource: str, record_id: Any) -> Record:
        spec = resource_spec(resource)
        try:
            return self.admin_port.get(resource, record_id)
        except Exception as exc:
            raise map_api_error(exc, default_message=f"Gagal memuat data {spec.label.lower()}") from exc
