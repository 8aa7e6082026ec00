"""
FastAPI dependency injection.
Session manager and flash channel, built once from settings.
"""

import logging
from typing import Optional

from fastapi import Request, HTTPException

from .config import settings, Settings
from .auth import (
    FlashChannel,
    SessionCodec,
    SessionManager,
    SessionPayload,
    SigningContext,
    StaticCredentialChecker,
    flash_cookie_options,
    session_cookie_options,
)

logger = logging.getLogger(__name__)


# Global instances (initialized on startup)
_session_manager: Optional[SessionManager] = None
_flash_channel: Optional[FlashChannel] = None


def init_dependencies(config: Settings = settings):
    """Initialize global dependencies. Called on app startup."""
    global _session_manager, _flash_channel

    if config.uses_default_secret:
        logger.warning(
            "SESSION_SECRET is not set; using the insecure development secret. "
            "Never run production with it."
        )

    _session_manager = SessionManager(
        codec=SessionCodec(SigningContext.from_settings(config)),
        checker=StaticCredentialChecker.from_settings(config),
        cookie_options=session_cookie_options(config),
        ttl_seconds=config.session_ttl_seconds,
        refresh_threshold_seconds=config.session_refresh_threshold_seconds,
    )
    _flash_channel = FlashChannel(
        flash_cookie_options(config),
        max_entries=config.flash_max_entries,
    )


def close_dependencies():
    """Drop global dependencies. Called on app shutdown."""
    global _session_manager, _flash_channel
    _session_manager = None
    _flash_channel = None


def get_session_manager() -> SessionManager:
    """Get the session manager instance."""
    if _session_manager is None:
        raise RuntimeError("Session manager not initialized")
    return _session_manager


def get_flash_channel() -> FlashChannel:
    """Get the flash channel instance."""
    if _flash_channel is None:
        raise RuntimeError("Flash channel not initialized")
    return _flash_channel


def require_session(request: Request) -> SessionPayload:
    """
    Dependency that requires an authenticated session.
    Redirects to the landing page otherwise.
    """
    session = get_session_manager().get_session(request.cookies)

    if session is None or not session.is_authenticated:
        raise HTTPException(status_code=303, headers={"Location": "/"})
    return session
