"""Session identity decoded from the backend's bearer token.

The token is a JSON Web Token decoded with PyJWT. Only the claims are read
and the signature is never verified: the decoded identity drives display and
the expiry countdown. Authorization is enforced by the backend.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import jwt


class MalformedTokenError(ValueError):
    """Raised when a token cannot be decoded into an identity."""


@dataclass(frozen=True)
class Identity:
    """Claims carried by the session token.

    Attributes:
        id: Backend user id (string form).
        username: Login name.
        email: Contact email.
        role: Role label, display only.
        expires_at: UTC instant of the ``exp`` claim, ``None`` if absent.
    """
    id: str
    username: str
    email: str
    role: str
    expires_at: Optional[datetime]

    def is_expired(self, now: datetime) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at <= now

    def seconds_left(self, now: datetime) -> Optional[float]:
        if self.expires_at is None:
            return None
        return (self.expires_at - now).total_seconds()


def decode_claims(token: str) -> Dict[str, Any]:
    """Return the JSON payload of ``token`` without signature verification."""
    if not isinstance(token, str) or not token.strip():
        raise MalformedTokenError("Token must be a non-empty string")
    try:
        claims = jwt.decode(token.strip(), options={"verify_signature": False})
    except jwt.InvalidTokenError as exc:
        raise MalformedTokenError(f"Token could not be decoded: {exc}") from exc
    if not isinstance(claims, dict):
        raise MalformedTokenError("Token payload must be a JSON object")
    return claims


def _expiry(raw_exp: Any) -> Optional[datetime]:
    if raw_exp is None:
        return None
    if isinstance(raw_exp, bool) or not isinstance(raw_exp, (int, float)):
        raise MalformedTokenError("Token 'exp' claim must be numeric")
    try:
        return datetime.fromtimestamp(float(raw_exp), tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise MalformedTokenError("Token 'exp' claim is out of range") from exc


def decode_identity(token: str) -> Identity:
    claims = decode_claims(token)
    return Identity(
        id=str(claims.get("id") or ""),
        username=str(claims.get("username") or ""),
        email=str(claims.get("email") or ""),
        role=str(claims.get("role") or ""),
        expires_at=_expiry(claims.get("exp")),
    )


__all__ = ["Identity", "MalformedTokenError", "decode_claims", "decode_identity"]
