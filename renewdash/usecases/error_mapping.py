"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations


from typing import Dict, Optional, Tuple

from renewdash.adapters.api_errors import (
    ApiConnectionError,
    ApiEnvelopeError,
    ApiError,
)
from renewdash.domain.ports import UseCaseError

SESSION_EXPIRED_MESSAGE = "Sesi telah berakhir, silakan login kembali"
NETWORK_ERROR_MESSAGE = "Tidak dapat terhubung ke server. Periksa koneksi internet Anda"
DEFAULT_ERROR_MESSAGE = "Terjadi kesalahan"

STATUS_MESSAGES: Dict[int, Tuple[str, str]] = {
    401: ("SESSION_EXPIRED", SESSION_EXPIRED_MESSAGE),
    403: ("FORBIDDEN", "Anda tidak memiliki izin untuk mengakses resource ini"),
    404: ("NOT_FOUND", "Data tidak ditemukan"),
    422: ("INVALID_DATA", "Data yang dikirim tidak valid"),
    500: (
        "SERVER_ERROR",
        "Terjadi kesalahan pada server. Silakan coba lagi atau hubungi administrator",
    ),
    502: (
        "BAD_GATEWAY",
        "Server sedang tidak dapat diakses. Silakan coba lagi dalam beberapa menit",
    ),
}


def map_api_error(
    exc: Exception,
    *,
    default_message: Optional[str] = None,
    default_code: str = "REQUEST_FAILED",
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Args:
        exc: Exception raised by an adapter or use case.
        default_message: Operation-specific fallback, for example
            ``"Gagal memuat data klien"``.
        default_code: Code used for errors outside the status table.

    Returns:
        UseCaseError: Localized, user-presentable error.
    """
    if isinstance(exc, UseCaseError):
        return exc
    fallback = default_message or DEFAULT_ERROR_MESSAGE
    if isinstance(exc, ApiConnectionError):
        return UseCaseError("NETWORK_ERROR", NETWORK_ERROR_MESSAGE)
    if isinstance(exc, ApiEnvelopeError):
        return UseCaseError(default_code, exc.detail or fallback, status=exc.status)
    if isinstance(exc, ApiError):
        status = exc.status or 0
        mapped = STATUS_MESSAGES.get(status)
        if mapped:
            code, message = mapped
            return UseCaseError(code, message, status=status)
        if exc.detail:
            return UseCaseError(default_code, exc.detail, status=status)
        label = f"{fallback} (status: {status})" if status else fallback
        return UseCaseError(default_code, label, status=status or None)

    message = default_message or str(exc) or DEFAULT_ERROR_MESSAGE
    return UseCaseError(default_code, message)


def is_session_expired(err: UseCaseError) -> bool:
    return err.code == "SESSION_EXPIRED"


__all__ = [
    "NETWORK_ERROR_MESSAGE",
    "SESSION_EXPIRED_MESSAGE",
    "STATUS_MESSAGES",
    "is_session_expired",
    "map_api_error",
]
