"""
Password hashing and the credential check used by login.
"""

import hmac
import logging
from typing import Optional, Protocol

from passlib.hash import bcrypt

from .models import Credentials, UserRef

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    return bcrypt.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a bcrypt hash. Malformed hashes never match."""
    try:
        return bcrypt.verify(password, password_hash)
    except (ValueError, TypeError):
        logger.warning("Configured password hash is not a valid bcrypt hash")
        return False


class CredentialChecker(Protocol):
    """Resolves submitted credentials to a user, or None on mismatch."""

    def verify(self, credentials: Credentials) -> Optional[UserRef]:
        ...


class StaticCredentialChecker:
    """Single fixed account, configured at startup."""

    def __init__(
        self,
        username: str,
        password: Optional[str] = None,
        password_hash: Optional[str] = None,
        display_name: str = "Admin",
    ):
        """
        Initialize checker.

        Args:
            username: Accepted username
            password: Accepted plaintext password (used when no hash is set)
            password_hash: bcrypt hash, takes precedence over password
            display_name: Name stored in the session for this account
        """
        if not password and not password_hash:
            raise ValueError("Either password or password_hash is required")

        self._username = username
        self._password = password
        self._password_hash = password_hash
        self._user = UserRef(name=display_name)

    @classmethod
    def from_settings(cls, settings) -> "StaticCredentialChecker":
        return cls(
            username=settings.admin_username,
            password=settings.admin_password,
            password_hash=settings.admin_password_hash or None,
            display_name=settings.admin_display_name,
        )

    def verify(self, credentials: Credentials) -> Optional[UserRef]:
        username_ok = hmac.compare_digest(
            credentials.username.encode("utf-8"), self._username.encode("utf-8")
        )

        if self._password_hash:
            password_ok = verify_password(credentials.password, self._password_hash)
        else:
            password_ok = hmac.compare_digest(
                credentials.password.encode("utf-8"), self._password.encode("utf-8")
            )

        if username_ok and password_ok:
            return self._user
        return None
