## Routes for the application
from datetime import date

from fastapi import APIRouter, Request, Depends, Form
from fastapi.responses import HTMLResponse, RedirectResponse

from app.auth import accounts
from app.auth.deps import get_current_session
from app.deps import get_today
from app.state.store import SessionState
from app.templating import templates
from app.tracker.progress import summarize_progress

router = APIRouter()

@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(request: Request, state: SessionState = Depends(get_current_session),
today: date = Depends(get_today)):
    summary = summarize_progress(state.roadmap, state.completed_items, today)
    return templates.TemplateResponse(request, "dashboard.html",
    {"user": state.user, "roadmap": state.roadmap, "summary": summary})

@router.get("/profile", response_class=HTMLResponse)
def profile_page(request: Request, updated: int = 0, state: SessionState = Depends(get_current_session)):
    return templates.TemplateResponse(request, "profile.html",
    {"user": state.user, "updated": bool(updated)})

@router.post("/profile")
def update_profile(request: Request, name: str = Form(""), state: SessionState = Depends(get_current_session)):
    try:
        accounts.rename(state.user, name)
    except ValueError as e:
        return templates.TemplateResponse(request, "profile.html",
        {"user": state.user, "error": str(e)}, status_code=400)
    return RedirectResponse(url="/profile?updated=1", status_code=303)
