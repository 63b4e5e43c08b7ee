"""Session guard shared by every protected screen.

The guard reads the stored bearer token, decodes its claims locally, and
arms one expiry timer per mounted screen. Decoding is never verified: the
identity is a display hint, and the backend enforces authorization.

Call context:
    ``renewdash.web_ui.main`` builds one guard per page visit, calls
    :meth:`SessionGuard.mount` before rendering and :meth:`SessionGuard.unmount`
    when the client disconnects.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from renewdash.domain.ports import TokenStorePort
from renewdash.domain.session import Identity, MalformedTokenError, decode_identity

from .timer_scheduler import TimerScheduler

LOGGER = logging.getLogger(__name__)

SIGN_IN_ROUTE = "/auth/sign-in"
EXPIRED_NOTICE = "Sesi Anda telah habis. Silakan login kembali."

EXPIRY_TIMER = "session-expiry"
REDIRECT_TIMER = "session-redirect"

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionGuard:
    """Redirect unauthenticated visitors and force logout when the session ends."""

    def __init__(
        self,
        token_store: TokenStorePort,
        scheduler: TimerScheduler,
        *,
        navigate: Callable[[str], None],
        notify: Callable[[str], None],
        session_timeout_s: int = 3600,
        redirect_delay_s: float = 2.0,
        clock: Optional[Clock] = None,
        sign_in_route: str = SIGN_IN_ROUTE,
        on_expire: Optional[Callable[[], None]] = None,
    ) -> None:
        if session_timeout_s <= 0:
            raise ValueError("session_timeout_s must be positive")
        self.token_store = token_store
        self.scheduler = scheduler
        self._navigate = navigate
        self._notify = notify
        self.session_timeout_s = session_timeout_s
        self.redirect_delay_s = redirect_delay_s
        self._clock = clock or utc_now
        self.sign_in_route = sign_in_route
        self.identity: Optional[Identity] = None
        self._on_expire = on_expire

    def mount(self) -> bool:
        """Check the stored session and arm the expiry timer.

        Returns:
            ``True`` when the screen may render, ``False`` after a redirect.
        """
        token = self.token_store.get_token()
        if not token:
            self._redirect_now()
            return False
        try:
            identity = decode_identity(token)
        except MalformedTokenError:
            LOGGER.warning("Stored token could not be decoded; signing out")
            self._expire_now()
            return False
        now = self._clock()
        if identity.is_expired(now):
            LOGGER.info("Stored token expired at %s", identity.expires_at)
            self._expire_now()
            return False
        self.identity = identity
        delay_s = float(self.session_timeout_s)
        left = identity.seconds_left(now)
        if left is not None:
            delay_s = min(delay_s, left)
        self.scheduler.schedule(EXPIRY_TIMER, int(delay_s * 1000), self._on_timer)
        return True

    def unmount(self) -> None:
        """Cancel every pending guard timer."""
        self.scheduler.cancel(EXPIRY_TIMER)
        self.scheduler.cancel(REDIRECT_TIMER)

    def handle_unauthorized(self) -> bool:
        """React to an HTTP 401 from any authenticated call.

        Returns:
            ``True`` when the local session is confirmed missing or expired and
            a logout + redirect was issued; ``False`` when the caller should
            show the mapped message inline.
        """
        token = self.token_store.get_token()
        if not token:
            self.unmount()
            self._redirect_now()
            return True
        try:
            identity = decode_identity(token)
        except MalformedTokenError:
            self.unmount()
            self._expire_now()
            return True
        if identity.is_expired(self._clock()):
            self.unmount()
            self._expire_now()
            return True
        return False

    def logout(self) -> None:
        """Clear the session and leave immediately (user menu action)."""
        self.unmount()
        self._end_session()
        self._redirect_now()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _on_timer(self) -> None:
        LOGGER.info("Session timer elapsed; signing out")
        self._notify(EXPIRED_NOTICE)
        self._end_session()
        delay_ms = int(self.redirect_delay_s * 1000)
        if delay_ms <= 0:
            self._redirect_now()
            return
        self.scheduler.schedule(REDIRECT_TIMER, delay_ms, self._redirect_now)

    def _expire_now(self) -> None:
        self._end_session()
        self._redirect_now()

    def _end_session(self) -> None:
        self.token_store.clear_token()
        self.identity = None
        if self._on_expire is not None:
            self._on_expire()

    def _redirect_now(self) -> None:
        self._navigate(self.sign_in_route)


__all__ = ["EXPIRED_NOTICE", "SIGN_IN_ROUTE", "SessionGuard", "utc_now"]
