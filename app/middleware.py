"""
Per-request session refresh.
"""

import logging
import re

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from .auth import SESSION_COOKIE_NAME, MutableCookieJar
from .dependencies import get_session_manager

logger = logging.getLogger(__name__)

# Static assets and probes never touch the session
SKIP_PATHS = re.compile(
    r"^/(static/|health$|favicon\.ico$|robots\.txt$|sitemap\.xml$)"
    r"|\.(png|jpg|jpeg|gif|svg|ico)$"
)


class SessionRefreshMiddleware(BaseHTTPMiddleware):
    """Extends sessions that are close to expiry on every page request."""

    async def dispatch(self, request: Request, call_next):
        if SKIP_PATHS.search(request.url.path):
            return await call_next(request)

        # Decide from the incoming cookies before the handler runs
        new_token = get_session_manager().prepare_refresh(request.cookies)

        response = await call_next(request)

        if new_token is None:
            return response

        jar = MutableCookieJar(response)
        # A login or logout in this request wins over the refresh
        if jar.has_pending(SESSION_COOKIE_NAME):
            logger.debug("Session cookie already set by handler, skipping refresh")
            return response

        get_session_manager().apply_refresh(new_token, jar)
        return response
