from __future__ import annotations

import pytest

from renewdash.adapters.api_errors import (
    ApiClientError,
    ApiConnectionError,
    ApiEnvelopeError,
    ApiServerError,
)
from renewdash.domain.ports import UseCaseError
from renewdash.usecases.error_mapping import (
    NETWORK_ERROR_MESSAGE,
    SESSION_EXPIRED_MESSAGE,
    is_session_expired,
    map_api_error,
)


def test_unauthorized_maps_to_session_expired() -> None:
    err = map_api_error(ApiClientError("x", status=401, payload={"message": "jwt expired"}))

    assert err.code == "SESSION_EXPIRED"
    assert err.message == "Sesi telah berakhir, silakan login kembali"
    assert err.message == SESSION_EXPIRED_MESSAGE
    assert is_session_expired(err)


@pytest.mark.parametrize(
    "exc, code, message",
    [
        (ApiClientError("x", status=403), "FORBIDDEN", "Anda tidak memiliki izin untuk mengakses resource ini"),
        (ApiClientError("x", status=404), "NOT_FOUND", "Data tidak ditemukan"),
        (ApiClientError("x", status=422), "INVALID_DATA", "Data yang dikirim tidak valid"),
        (
            ApiServerError("x", status=500),
            "SERVER_ERROR",
            "Terjadi kesalahan pada server. Silakan coba lagi atau hubungi administrator",
        ),
        (
            ApiServerError("x", status=502),
            "BAD_GATEWAY",
            "Server sedang tidak dapat diakses. Silakan coba lagi dalam beberapa menit",
        ),
    ],
)
def test_status_table(exc: Exception, code: str, message: str) -> None:
    err = map_api_error(exc, default_message="Gagal memuat data")

    assert (err.code, err.message, err.status) == (code, message, exc.status)


def test_unlisted_status_uses_body_message_verbatim() -> None:
    exc = ApiClientError("x", status=409, payload={"message": "Username sudah terdaftar"})

    err = map_api_error(exc, default_message="Gagal menambahkan user")

    assert err.code == "REQUEST_FAILED"
    assert err.message == "Username sudah terdaftar"


def test_unlisted_status_without_body_message_quotes_status() -> None:
    err = map_api_error(ApiServerError("x", status=503), default_message="Gagal memuat data klien")

    assert err.message == "Gagal memuat data klien (status: 503)"


def test_envelope_status_label_is_not_used_as_message() -> None:
    exc = ApiClientError("x", status=400, payload={"code": 400, "status": "Bad Request", "data": None})

    err = map_api_error(exc, default_message="Gagal memuat data")

    assert err.message == "Gagal memuat data (status: 400)"


def test_network_failure_has_distinct_message() -> None:
    err = map_api_error(ApiConnectionError("down"))

    assert err.code == "NETWORK_ERROR"
    assert err.message == NETWORK_ERROR_MESSAGE


def test_envelope_failure_uses_envelope_message() -> None:
    exc = ApiEnvelopeError("Nama sudah dipakai", payload={"code": 400, "message": "Nama sudah dipakai"})

    err = map_api_error(exc, default_message="Gagal")

    assert (err.code, err.message) == ("REQUEST_FAILED", "Nama sudah dipakai")


def test_use_case_errors_pass_through() -> None:
    original = UseCaseError("READ_ONLY", "Role tidak dapat diubah")

    assert map_api_error(original) is original


def test_unknown_exceptions_fall_back_to_default_message() -> None:
    err = map_api_error(KeyError("boom"), default_message="Gagal memuat")

    assert (err.code, err.message) == ("REQUEST_FAILED", "Gagal memuat")
