# Authentication routes (register/login/logout)
import logging

from fastapi import APIRouter, Form, Request
from fastapi.responses import RedirectResponse, HTMLResponse

from app.auth import accounts
from app.auth.sessions import SESSION_COOKIE_NAME, end_session, start_session
from app.state.store import AccountExists, User
from app.settings import settings
from app.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter()

def _safe_next(next_url: str | None) -> str:
    # Only allow local paths as redirect targets
    if next_url and next_url.startswith("/") and not next_url.startswith("//"):
        return next_url
    return "/dashboard"

def _signed_in_response(user: User, next_url: str | None = None) -> RedirectResponse:
    raw, _ = start_session(user)
    logger.info("Signed in %s", user.email)

    resp = RedirectResponse(url=_safe_next(next_url), status_code=303)
    # Cookie security flags: httpOnly always; secure=True in prod over HTTPS
    resp.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=raw,
        httponly=True,
        secure=(settings.env == "prod"),
        samesite="lax",
        max_age=60 * 60 * 24 * settings.session_absolute_days,
        path="/",
    )
    return resp

@router.get("/register", response_class=HTMLResponse)
def register_page(request: Request):
    return templates.TemplateResponse(request, "register.html", {})

@router.post("/register")
def register(request: Request, name: str = Form(...), email: str = Form(...), password: str = Form(...)):
    try:
        user = accounts.register(name, email, password)
    except AccountExists:
        return RedirectResponse(url="/register?error=exists", status_code=303)
    except ValueError as e:
        return templates.TemplateResponse(request, "register.html",
        {"error": str(e), "name": name, "email": email}, status_code=400)

    return _signed_in_response(user)

@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request, next: str | None = None):
    return templates.TemplateResponse(request, "login.html", {"next": next})

@router.post("/login")
def login(email: str = Form(...), password: str = Form(""), next: str | None = Form(None)):
    try:
        user = accounts.authenticate(email, password)
    except accounts.InvalidCredentials:
        return RedirectResponse(url="/login?error=bad_credentials",
        status_code=303)

    return _signed_in_response(user, next)

@router.post("/logout")
def logout(request: Request):
    end_session(request.cookies.get(SESSION_COOKIE_NAME))
    logger.info("Signed out a session")

    resp = RedirectResponse(url="/login?logged_out=1", status_code=303)
    resp.delete_cookie(SESSION_COOKIE_NAME, path="/")
    return resp
