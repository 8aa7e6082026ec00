"""
Authentication module.
"""

from app.auth.codec import SessionCodec, SigningContext
from app.auth.cookies import (
    SESSION_COOKIE_NAME,
    FLASH_COOKIE_NAME,
    CookieOptions,
    MutableCookieJar,
    session_cookie_options,
    flash_cookie_options,
)
from app.auth.errors import AuthError, InvalidCredentials, CryptoUnavailable
from app.auth.flash import FlashChannel, encode_flash, parse_flash
from app.auth.models import Credentials, SessionPayload, UserRef
from app.auth.password import (
    hash_password,
    verify_password,
    CredentialChecker,
    StaticCredentialChecker,
)
from app.auth.session import SessionManager, SESSION_TTL, REFRESH_THRESHOLD

__all__ = [
    "SessionCodec",
    "SigningContext",
    "SESSION_COOKIE_NAME",
    "FLASH_COOKIE_NAME",
    "CookieOptions",
    "MutableCookieJar",
    "session_cookie_options",
    "flash_cookie_options",
    "AuthError",
    "InvalidCredentials",
    "CryptoUnavailable",
    "FlashChannel",
    "encode_flash",
    "parse_flash",
    "Credentials",
    "SessionPayload",
    "UserRef",
    "hash_password",
    "verify_password",
    "CredentialChecker",
    "StaticCredentialChecker",
    "SessionManager",
    "SESSION_TTL",
    "REFRESH_THRESHOLD",
]
