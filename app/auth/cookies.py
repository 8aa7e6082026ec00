"""
Cookie access for sessions and flash messages.

Request cookies are a read-only mapping. Writing requires a MutableCookieJar,
which only trusted call sites (form actions and the refresh middleware)
construct around the response they are about to return.
"""

from dataclasses import dataclass

from fastapi import Response


SESSION_COOKIE_NAME = "session"
FLASH_COOKIE_NAME = "flash"


@dataclass(frozen=True)
class CookieOptions:
    """Attributes applied when a cookie is written or cleared."""
    max_age: int
    httponly: bool = True
    secure: bool = False
    samesite: str = "lax"
    path: str = "/"


def session_cookie_options(settings) -> CookieOptions:
    """Session cookie: http-only, lives as long as the session TTL."""
    return CookieOptions(
        max_age=settings.session_ttl_seconds,
        httponly=True,  # Not accessible via JavaScript
        secure=settings.is_production,
    )


def flash_cookie_options(settings) -> CookieOptions:
    """Flash cookie: readable by client script, short-lived."""
    return CookieOptions(
        max_age=settings.flash_max_age_seconds,
        httponly=False,
        secure=settings.is_production,
    )


class MutableCookieJar:
    """Write access to the cookies of one outgoing response."""

    def __init__(self, response: Response):
        self._response = response

    @property
    def response(self) -> Response:
        return self._response

    def set(self, name: str, value: str, options: CookieOptions) -> None:
        self._response.set_cookie(
            key=name,
            value=value,
            max_age=options.max_age,
            path=options.path,
            secure=options.secure,
            httponly=options.httponly,
            samesite=options.samesite,
        )

    def delete(self, name: str, options: CookieOptions) -> None:
        self._response.delete_cookie(
            key=name,
            path=options.path,
            secure=options.secure,
            httponly=options.httponly,
            samesite=options.samesite,
        )

    def has_pending(self, name: str) -> bool:
        """Check whether the response already sets or clears this cookie."""
        prefix = f"{name}="
        return any(
            header.startswith(prefix)
            for header in self._response.headers.getlist("set-cookie")
        )
