from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from renewdash.domain.entities import resource_spec
from renewdash.domain.ports import AdminPort, Record

from .error_mapping import map_api_error


@dataclass
class LoadLookup:
    """Load every row of a resource for dropdown options."""

    admin_port: AdminPort

    def __call__(self, resource: str) -> List[Record]:
        spec = resource_spec(resource)
        try:
            return list(self.admin_port.list_all(resource))
        except Exception as exc:
            raise map_api_error(exc, default_message=f"Gagal memuat {spec.label.lower()}") from exc


def as_options(rows: List[Record], label_key: str = "name") -> List[Tuple[int, str]]:
    """Convert lookup rows to ``(id, label)`` pairs, skipping rows without an id."""
    options: List[Tuple[int, str]] = []
    for row in rows:
        raw_id = row.get("id")
        if raw_id is None:
            continue
        try:
            option_id = int(raw_id)
        except (TypeError, ValueError):
            continue
        options.append((option_id, str(row.get(label_key) or option_id)))
    return options
