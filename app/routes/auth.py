"""
Authentication routes - login/logout.
"""

from fastapi import APIRouter, Request, Form
from fastapi.responses import RedirectResponse

from ..auth import Credentials, InvalidCredentials, MutableCookieJar
from ..dependencies import get_session_manager
from .pages import render_home

router = APIRouter()


@router.post("/login")
async def login(username: str = Form(""), password: str = Form("")):
    """Handle login form submission."""
    response = RedirectResponse(url="/", status_code=303)
    get_session_manager().login(
        Credentials(username=username, password=password),
        MutableCookieJar(response),
    )
    return response


@router.post("/logout")
async def logout():
    """Handle logout."""
    response = RedirectResponse(url="/", status_code=303)
    get_session_manager().logout(MutableCookieJar(response))
    return response


@router.get("/logout")
async def logout_get():
    """Handle logout via GET."""
    return await logout()


async def invalid_credentials_handler(request: Request, exc: InvalidCredentials):
    """Show the login form again with the error; no cookie is written."""
    return render_home(request, error=str(exc), status_code=401)
