"""
Cookie-based session management.

Session state lives entirely in the signed session cookie. Writes go through
a MutableCookieJar; reads take the request's cookie mapping and are free of
side effects.
"""

import logging
import time
from typing import Mapping, Optional

from .codec import SessionCodec
from .cookies import SESSION_COOKIE_NAME, CookieOptions, MutableCookieJar
from .errors import CryptoUnavailable, InvalidCredentials
from .models import Credentials, SessionPayload
from .password import CredentialChecker

logger = logging.getLogger(__name__)


# Session duration: 10 minutes, extended when fewer than 2 remain
SESSION_TTL = 10 * 60  # seconds
REFRESH_THRESHOLD = 2 * 60  # seconds


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


class SessionManager:
    """Manages signed cookie-based sessions."""

    def __init__(
        self,
        codec: SessionCodec,
        checker: CredentialChecker,
        cookie_options: CookieOptions,
        ttl_seconds: int = SESSION_TTL,
        refresh_threshold_seconds: int = REFRESH_THRESHOLD,
    ):
        """
        Initialize session manager.

        Args:
            codec: Token codec holding the signing key
            checker: Credential check used by login
            cookie_options: Attributes for the session cookie
            ttl_seconds: Lifetime of a new or refreshed session
            refresh_threshold_seconds: Remaining lifetime below which
                update_session issues a fresh token
        """
        if refresh_threshold_seconds >= ttl_seconds:
            raise ValueError("Refresh threshold must be shorter than the session TTL")

        self._codec = codec
        self._checker = checker
        self._cookie_options = cookie_options
        self._ttl_ms = ttl_seconds * 1000
        self._threshold_ms = refresh_threshold_seconds * 1000

    def _issue(self, payload: SessionPayload, jar: MutableCookieJar) -> str:
        token = self._codec.encode(payload)
        jar.set(SESSION_COOKIE_NAME, token, self._cookie_options)
        return token

    def login(self, credentials: Credentials, jar: MutableCookieJar) -> SessionPayload:
        """
        Verify credentials and set a new session cookie.

        Args:
            credentials: Submitted username and password
            jar: Write access to the outgoing response's cookies

        Returns:
            The payload stored in the new session

        Raises:
            InvalidCredentials: If the credentials do not match; no cookie is set
        """
        user = self._checker.verify(credentials)
        if user is None:
            logger.info(f"Failed login for user '{credentials.username}'")
            raise InvalidCredentials()

        payload = SessionPayload(user=user, expires=now_ms() + self._ttl_ms)
        self._issue(payload, jar)

        logger.info(f"User '{user.name}' logged in")
        return payload

    def get_session(self, cookies: Mapping[str, str]) -> Optional[SessionPayload]:
        """
        Get the current session from request cookies.

        Args:
            cookies: Request cookie mapping

        Returns:
            Session payload, or None if missing, invalid or expired
        """
        token = cookies.get(SESSION_COOKIE_NAME)
        if not token:
            return None

        payload = self._codec.decode(token)
        if payload is None:
            return None

        if payload.is_expired(now_ms()):
            return None

        return payload

    def is_authenticated(self, cookies: Mapping[str, str]) -> bool:
        """Check if the request carries a current session for a user."""
        session = self.get_session(cookies)
        return session is not None and session.is_authenticated

    def logout(self, jar: MutableCookieJar) -> None:
        """Clear the session cookie."""
        jar.delete(SESSION_COOKIE_NAME, self._cookie_options)
        logger.info("Session cleared")

    def prepare_refresh(self, cookies: Mapping[str, str]) -> Optional[str]:
        """
        Build a refreshed token if the session is close to expiry.

        Only current sessions for a user are extended. A token whose absolute
        expiry has passed is not revived.

        Args:
            cookies: Cookies of the incoming request

        Returns:
            New token, or None if no refresh is needed or possible
        """
        token = cookies.get(SESSION_COOKIE_NAME)
        if not token:
            return None

        payload = self._codec.decode(token)
        if payload is None or not payload.is_authenticated:
            return None

        now = now_ms()
        remaining = payload.remaining_ms(now)
        if remaining <= 0 or remaining >= self._threshold_ms:
            return None

        refreshed = payload.model_copy(update={"expires": now + self._ttl_ms})
        try:
            new_token = self._codec.encode(refreshed)
        except CryptoUnavailable:
            logger.warning("Skipping session refresh: token signing failed", exc_info=True)
            return None

        logger.debug(f"Refreshing session for '{payload.user.name}' ({remaining} ms left)")
        return new_token

    def apply_refresh(self, token: str, jar: MutableCookieJar) -> None:
        """Write a token produced by prepare_refresh to the response."""
        jar.set(SESSION_COOKIE_NAME, token, self._cookie_options)

    def update_session(self, cookies: Mapping[str, str], jar: MutableCookieJar) -> bool:
        """
        Extend the session if it is close to expiry.

        Args:
            cookies: Cookies of the incoming request
            jar: Write access to the outgoing response's cookies

        Returns:
            True if a refreshed session cookie was set
        """
        new_token = self.prepare_refresh(cookies)
        if new_token is None:
            return False

        self.apply_refresh(new_token, jar)
        return True
