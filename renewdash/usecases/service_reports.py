"""Use cases for the service report screen: preview rows and Excel download."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from datetime import date
from typing import Callable, Dict, List, Optional

from renewdash.domain.ports import AdminPort, Record

from .error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)

ALL = "all"


@dataclass
class ReportFilters:
    """Report filter form. Empty strings and ``"all"`` are not sent."""
    start_date: str = ""
    end_date: str = ""
    client_ids: str = ALL
    service_type_ids: str = ALL
    status_id: str = "1"

    def to_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        for item in fields(self):
            value = str(getattr(self, item.name) or "").strip()
            if value and value != ALL:
                params[item.name] = value
        return params


def report_filename(today: date) -> str:
    return f"service_reports_{today.isoformat()}.xlsx"


class PreviewReport:
    def __init__(self, admin_port: AdminPort) -> None:
        self.admin_port = admin_port

    def __call__(self, filters: ReportFilters) -> List[Record]:
        try:
            return self.admin_port.report_preview(filters.to_params())
        except Exception as exc:
            raise map_api_error(exc, default_message="Gagal memuat laporan") from exc


class DownloadReport:
    """Download the Excel report and write it into ``target_dir``.

    Returns the path of the written file.
    """

    def __init__(
        self,
        admin_port: AdminPort,
        *,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self.admin_port = admin_port
        self._today = today or date.today

    def __call__(self, filters: ReportFilters, target_dir: str) -> str:
        try:
            content = self.admin_port.report_download(filters.to_params())
        except Exception as exc:
            raise map_api_error(exc, default_message="Gagal mengunduh laporan") from exc
        os.makedirs(target_dir, exist_ok=True)
        path = os.path.join(target_dir, report_filename(self._today()))
        with open(path, "wb") as fh:
            fh.write(content)
        LOGGER.info("Report saved to %s (%d bytes)", path, len(content))
        return path
