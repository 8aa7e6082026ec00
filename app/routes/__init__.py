"""
Routes package.
"""

from .auth import router as auth_router, invalid_credentials_handler
from .pages import router as pages_router

__all__ = [
    "auth_router",
    "pages_router",
    "invalid_credentials_handler",
]
