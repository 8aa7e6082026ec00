"""
Authentication errors.

Only errors a caller has to act on are raised. Malformed, forged and expired
session tokens are never raised; they collapse to "no session".
"""


class AuthError(Exception):
    """Base class for authentication errors."""


class InvalidCredentials(AuthError):
    """Raised by login when the submitted credentials do not match."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class CryptoUnavailable(AuthError):
    """Raised when the signing primitive fails to produce a signature."""
