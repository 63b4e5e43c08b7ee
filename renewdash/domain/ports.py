from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional, Protocol

Record = Dict[str, Any]
ResourceName = str


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str, *, status: Optional[int] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status = status


# ---- Ports (Hexagonal boundaries) ----
class AdminPort(Protocol):
    """CRUD, auth and report operations against the admin REST API."""

    def login(self, username: str, password: str) -> str: ...  # bearer token
    def list_page(self, resource: ResourceName, params: Mapping[str, Any]) -> Dict: ...  # {"rows", "pagination"}
    def list_all(self, resource: ResourceName) -> List[Record]: ...
    def get(self, resource: ResourceName, record_id: Any) -> Record: ...
    def create(self, resource: ResourceName, payload: Mapping[str, Any]) -> Record: ...
    def update(self, resource: ResourceName, record_id: Any, payload: Mapping[str, Any]) -> Record: ...
    def delete(self, resource: ResourceName, record_id: Any) -> None: ...
    def report_preview(self, params: Mapping[str, Any]) -> List[Record]: ...
    def report_download(self, params: Mapping[str, Any]) -> bytes: ...
    def wa_log_page(self, page: int) -> Dict: ...
    def send_wa_reminder(self, payload: Mapping[str, Any]) -> Record: ...


class TokenStorePort(Protocol):
    """Persistence for the session bearer token."""

    def get_token(self) -> Optional[str]: ...
    def set_token(self, token: str) -> None: ...
    def clear_token(self) -> None: ...
