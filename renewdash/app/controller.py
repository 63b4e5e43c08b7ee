"""Adapter and use-case wiring for the dashboard runtime.

This module owns lazy construction of the authenticated HTTP session, the
REST adapter and the use-case objects that depend on
:class:`renewdash.app.settings.DashboardSettings`.
"""

from __future__ import annotations

from typing import Optional

from ..adapters.admin_rest import AdminRestAdapter
from ..adapters.http_client import AuthenticatedSession, HttpConfig
from ..domain.ports import TokenStorePort
from ..usecases.delete_resource import DeleteResource
from ..usecases.fetch_wa_log import FetchWaLog
from ..usecases.list_resources import ListResources
from ..usecases.load_lookup import LoadLookup
from ..usecases.load_resource import LoadResource
from ..usecases.login import Login
from ..usecases.save_resource import SaveResource
from ..usecases.send_wa_reminder import SendWaReminder
from ..usecases.service_reports import DownloadReport, PreviewReport
from .settings import DashboardSettings


class AppController:
    """Create and cache runtime adapters/use-cases from settings state.

    Call chain:
        ``renewdash.web_ui.runtime`` creates one instance per browser session
        with that session's token store. Pages call ``ensure_ready`` before
        touching any use case.
    """

    def __init__(self, settings: DashboardSettings, token_store: TokenStorePort) -> None:
        self.settings = settings
        self.token_store = token_store
        self._adapter: Optional[AdminRestAdapter] = None
        self.uc_login: Optional[Login] = None
        self.uc_list: Optional[ListResources] = None
        self.uc_lookup: Optional[LoadLookup] = None
        self.uc_load: Optional[LoadResource] = None
        self.uc_save: Optional[SaveResource] = None
        self.uc_delete: Optional[DeleteResource] = None
        self.uc_report_preview: Optional[PreviewReport] = None
        self.uc_report_download: Optional[DownloadReport] = None
        self.uc_wa_reminder: Optional[SendWaReminder] = None
        self.uc_wa_log: Optional[FetchWaLog] = None

    @property
    def adapter(self) -> Optional[AdminRestAdapter]:
        """Return the cached REST adapter, if built."""
        return self._adapter

    def reset(self) -> None:
        """Drop all cached adapters and use-cases.

        The next ``ensure_ready`` call rebuilds everything from the current
        settings, including a fresh WhatsApp log cache.
        """
        self._adapter = None
        self.uc_login = None
        self.uc_list = None
        self.uc_lookup = None
        self.uc_load = None
        self.uc_save = None
        self.uc_delete = None
        self.uc_report_preview = None
        self.uc_report_download = None
        self.uc_wa_reminder = None
        self.uc_wa_log = None

    def ensure_ready(self) -> bool:
        """Ensure adapter/use-cases are available for network operations.

        Returns:
            ``True`` when dependencies are available, ``False`` when the API
            base URL is missing from settings.
        """
        if self._adapter is not None:
            return True
        if not self.settings.api_base_url:
            return False

        session = AuthenticatedSession(
            HttpConfig(
                base_url=self.settings.api_base_url,
                api_key=self.settings.api_key,
                request_timeout_s=self.settings.request_timeout_s,
                download_timeout_s=self.settings.download_timeout_s,
            ),
            token_provider=self.token_store.get_token,
        )
        adapter = AdminRestAdapter(session)
        self._adapter = adapter
        self.uc_login = Login(adapter, self.token_store)
        self.uc_list = ListResources(adapter)
        self.uc_lookup = LoadLookup(adapter)
        self.uc_load = LoadResource(adapter)
        self.uc_save = SaveResource(adapter)
        self.uc_delete = DeleteResource(adapter)
        self.uc_report_preview = PreviewReport(adapter)
        self.uc_report_download = DownloadReport(adapter)
        self.uc_wa_reminder = SendWaReminder(adapter, self.settings.contact_numbers)
        self.uc_wa_log = FetchWaLog(adapter)
        return True
