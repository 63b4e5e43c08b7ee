from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from jwt.utils import base64url_encode

from renewdash.domain.session import MalformedTokenError, decode_claims, decode_identity
from renewdash.tests.unit.helpers import TOKEN_SECRET, make_token

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def test_decode_identity_reads_display_claims() -> None:
    exp = int((NOW + timedelta(hours=1)).timestamp())
    token = make_token(id=7, username="rina", email="rina@example.com", role="admin", exp=exp)

    identity = decode_identity(token)

    assert identity.id == "7"
    assert identity.username == "rina"
    assert identity.email == "rina@example.com"
    assert identity.role == "admin"
    assert identity.expires_at == NOW + timedelta(hours=1)
    assert identity.is_expired(NOW) is False
    assert identity.seconds_left(NOW) == pytest.approx(3600)


def test_exp_equal_to_now_counts_as_expired() -> None:
    identity = decode_identity(make_token(exp=int(NOW.timestamp())))

    assert identity.is_expired(NOW) is True


def test_token_without_exp_never_expires_locally() -> None:
    identity = decode_identity(make_token(username="rina"))

    assert identity.expires_at is None
    assert identity.is_expired(NOW) is False
    assert identity.seconds_left(NOW) is None


@pytest.mark.parametrize(
    "token",
    ["", "abc", "a.b", "a.!!!.c", "a.bm90LWpzb24.c"],
)
def test_malformed_tokens_raise(token: str) -> None:
    with pytest.raises(MalformedTokenError):
        decode_claims(token)


def test_non_numeric_exp_is_malformed() -> None:
    with pytest.raises(MalformedTokenError):
        decode_identity(make_token(exp="tomorrow"))


@pytest.mark.parametrize("exp", [10**20, -(10**20), float("nan"), float("inf")])
def test_out_of_range_exp_is_malformed(exp) -> None:
    with pytest.raises(MalformedTokenError):
        decode_identity(make_token(username="rina", exp=exp))


def test_non_object_payload_is_malformed() -> None:
    token = jwt.encode({"exp": 1}, TOKEN_SECRET, algorithm="HS256")
    header, _, signature = token.split(".")
    listed = base64url_encode(b"[1, 2]").decode("ascii")

    with pytest.raises(MalformedTokenError):
        decode_claims(f"{header}.{listed}.{signature}")
