"""
Page routes - public landing page and the protected page.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Request, Depends
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ..auth import MutableCookieJar, SessionPayload
from ..dependencies import get_session_manager, get_flash_channel, require_session

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def render_home(request: Request, error: Optional[str] = None, status_code: int = 200):
    """Render the landing page for the current request's session."""
    session = get_session_manager().get_session(request.cookies)

    return templates.TemplateResponse(
        request,
        "home.html",
        {
            "session": session,
            "session_json": session.model_dump_json(indent=2) if session else "null",
            "flash": get_flash_channel().read(request.cookies),
            "error": error,
        },
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse)
async def home(request: Request):
    """Public page with login/logout."""
    return render_home(request)


@router.get("/protected", response_class=HTMLResponse)
async def protected_page(request: Request, session: SessionPayload = Depends(require_session)):
    """Page visible only with a current session."""
    return templates.TemplateResponse(
        request,
        "protected.html",
        {
            "session": session,
            "flash": get_flash_channel().read(request.cookies),
        },
    )


@router.post("/protected/save", dependencies=[Depends(require_session)])
async def simulate_save(request: Request):
    """Record a flash message for a simulated save."""
    response = RedirectResponse(url="/protected", status_code=303)
    get_flash_channel().append(
        request.cookies,
        MutableCookieJar(response),
        f"Saved at {datetime.now().strftime('%H:%M:%S')}",
    )
    return response
