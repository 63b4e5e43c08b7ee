"""Session token stores behind ``TokenStorePort``."""

from __future__ import annotations

from typing import Any, MutableMapping, Optional
from renewdash.domain.ports import TokenStorePort

TOKEN_KEY = "token"


class MappingTokenStore(TokenStorePort):
    """Token store over any mutable mapping (plain dict or browser user storage)."""

    def __init__(self, mapping: Optional[MutableMapping[str, Any]] = None, key: str = TOKEN_KEY) -> None:
        self._mapping: MutableMapping[str, Any] = {} if mapping is None else mapping
        self._key = key

    def get_token(self) -> Optional[str]:
        value = self._mapping.get(self._key)
        if isinstance(value, str) and value.strip():
            return value
        return None

    def set_token(self, token: str) -> None:
        self._mapping[self._key] = token

    def clear_token(self) -> None:
        self._mapping.pop(self._key, None)
