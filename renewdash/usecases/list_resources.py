"""Use case for fetching one page of a resource list."""

from __future__ import annotations

import logging

from renewdash.domain.entities import resource_spec
from renewdash.domain.pagination import ListQuery, PageResult
from renewdash.domain.ports import AdminPort

from .error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)


class ListResources:
    """Use-case callable returning a :class:`PageResult` for a list screen."""

    def __init__(self, admin_port: AdminPort) -> None:
        self.admin_port = admin_port

    def __call__(self, resource: str, query: ListQuery) -> PageResult:
        """Fetch the page described by ``query``.

        Raises:
            UseCaseError: Mapped from adapter failures.
        """
        spec = resource_spec(resource)
        try:
            payload = self.admin_port.list_page(resource, query.to_params())
        except Exception as exc:
            raise map_api_error(
                exc, default_message=f"Gagal memuat data {spec.label.lower()}"
            ) from exc
        rows = tuple(payload.get("rows") or ())
        LOGGER.debug("list[%s] page=%s rows=%s", resource, query.page, len(rows))
        return PageResult(query=query, rows=rows, pagination=dict(payload.get("pagination") or {}))
