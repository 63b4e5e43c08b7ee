from __future__ import annotations

import logging
from dataclasses import dataclass

from renewdash.adapters.api_errors import ApiClientError
from renewdash.domain.ports import AdminPort, TokenStorePort, UseCaseError
from renewdash.domain.session import Identity, MalformedTokenError, decode_identity

from .error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)


@dataclass
class Login:
    admin_port: AdminPort
    token_store: TokenStorePort

    def __call__(self, username: str, password: str) -> Identity:
        username = (username or "").strip()
        if not username or not password:
            raise UseCaseError("MISSING_CREDENTIALS", "Harap isi username dan kata sandi.")
        try:
            token = self.admin_port.login(username, password)
        except ApiClientError as exc:
            if exc.status in (400, 401):
                raise UseCaseError(
                    "INVALID_CREDENTIALS", "Username atau kata sandi salah.", status=exc.status
                ) from exc
            raise map_api_error(exc, default_message="Gagal masuk") from exc
        except Exception as exc:
            raise map_api_error(exc, default_message="Gagal masuk") from exc
        try:
            identity = decode_identity(token)
        except MalformedTokenError as exc:
            raise UseCaseError("INVALID_TOKEN", "Token dari server tidak valid") from exc
        self.token_store.set_token(token)
        LOGGER.info("Signed in as %s", identity.username or username)
        return identity
