from __future__ import annotations

import pytest

from renewdash.adapters.api_errors import ApiClientError, ApiConnectionError
from renewdash.domain.ports import UseCaseError
from renewdash.tests.unit.helpers import FakeAdminPort, MemoryTokenStore, make_token
from renewdash.usecases.login import Login


def test_login_stores_token_and_returns_identity() -> None:
    port = FakeAdminPort()
    store = MemoryTokenStore()

    identity = Login(port, store)(" admin ", "secret")

    assert store.token == port.token
    assert identity.username == "admin"
    assert port.calls_to("login") == [("admin", "secret")]


def test_blank_credentials_make_no_call() -> None:
    port = FakeAdminPort()

    with pytest.raises(UseCaseError) as info:
        Login(port, MemoryTokenStore())("", "secret")

    assert info.value.code == "MISSING_CREDENTIALS"
    assert port.calls == []


@pytest.mark.parametrize("status", [400, 401])
def test_rejected_credentials(status: int) -> None:
    port = FakeAdminPort()
    port.failures["login"] = ApiClientError("x", status=status)
    store = MemoryTokenStore()

    with pytest.raises(UseCaseError) as info:
        Login(port, store)("admin", "wrong")

    assert info.value.code == "INVALID_CREDENTIALS"
    assert info.value.message == "Username atau kata sandi salah."
    assert store.token is None


def test_network_failure_on_login() -> None:
    port = FakeAdminPort()
    port.failures["login"] = ApiConnectionError("down")

    with pytest.raises(UseCaseError) as info:
        Login(port, MemoryTokenStore())("admin", "secret")

    assert info.value.code == "NETWORK_ERROR"


def test_undecodable_token_is_not_stored() -> None:
    port = FakeAdminPort()
    port.token = "garbage"
    store = MemoryTokenStore()

    with pytest.raises(UseCaseError) as info:
        Login(port, store)("admin", "secret")

    assert info.value.code == "INVALID_TOKEN"
    assert store.token is None


def test_out_of_range_expiry_from_server_is_rejected() -> None:
    port = FakeAdminPort()
    port.token = make_token(username="admin", exp=10**20)
    store = MemoryTokenStore()

    with pytest.raises(UseCaseError) as info:
        Login(port, store)("admin", "secret")

    assert info.value.code == "INVALID_TOKEN"
    assert store.token is None
