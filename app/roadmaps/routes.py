# Roadmap pages: generate, display, tick tasks off
import logging
from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError

from app.agents.llm.base import LLMClient
from app.agents.schemas import TASK_CATEGORIES, RoadmapRequest
from app.agents.workflow import AIGenerationError, generate_roadmap
from app.auth.deps import get_current_session
from app.deps import get_llm, get_today
from app.state.store import SessionState
from app.tracker.progress import UnknownTaskError, summarize_progress, toggle_completion
from app.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/roadmap")

GENERATION_FAILED = "Failed to generate roadmap. The AI returned an empty or invalid response."
SKILL_LEVELS = ("Beginner", "Intermediate", "Advanced")
CATEGORY_TITLES = {
    "skills": "Skills to Learn",
    "projects": "Project Ideas",
    "certifications": "Certifications",
    "job_prep": "Job Prep",
}

def _page(request: Request, state: SessionState, today: date, status_code: int = 200, **extra):
    ctx = {
        "user": state.user,
        "roadmap": state.roadmap,
        "completed": state.completed_items,
        "summary": summarize_progress(state.roadmap, state.completed_items, today),
        "categories": [(c, CATEGORY_TITLES[c]) for c in TASK_CATEGORIES],
        "skill_levels": SKILL_LEVELS,
        "form": {},
    }
    ctx.update(extra)
    return templates.TemplateResponse(request, "roadmap.html", ctx, status_code=status_code)

@router.get("", response_class=HTMLResponse)
def roadmap_page(request: Request, error: str | None = None,
state: SessionState = Depends(get_current_session), today: date = Depends(get_today)):
    message = "That task does not exist on the current roadmap." if error == "unknown_task" else None
    return _page(request, state, today, error=message)

@router.post("", response_class=HTMLResponse)
def create_roadmap(
    request: Request,
    degree: str = Form(""),
    skills: str = Form(""),
    interests: str = Form(""),
    skill_level: str = Form(""),
    state: SessionState = Depends(get_current_session),
    llm: LLMClient = Depends(get_llm),
    today: date = Depends(get_today),
    ):

    form = {"degree": degree, "skills": skills, "interests": interests, "skill_level": skill_level}
    try:
        req = RoadmapRequest(
            degree=degree.strip(),
            skills=skills.strip(),
            interests=interests.strip(),
            skill_level=skill_level,
        )
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors()})
        return _page(request, state, today, status_code=400, form=form,
        error="Please check these fields: " + ", ".join(fields))

    try:
        roadmap = generate_roadmap(llm, req)
    except AIGenerationError:
        logger.exception("Roadmap generation failed for %s", state.user.email)
        return _page(request, state, today, status_code=502, form=form, error=GENERATION_FAILED)

    state.replace_roadmap(roadmap)
    return RedirectResponse(url="/roadmap", status_code=303)

@router.post("/tasks/{key}/toggle")
def toggle_task(key: str, state: SessionState = Depends(get_current_session)):
    try:
        state.completed_items = toggle_completion(state.roadmap, state.completed_items,
        key, datetime.now(timezone.utc))
    except UnknownTaskError:
        return RedirectResponse(url="/roadmap?error=unknown_task", status_code=303)
    return RedirectResponse(url=f"/roadmap#{key}", status_code=303)

@router.post("/reset")
def reset_roadmap(state: SessionState = Depends(get_current_session)):
    state.replace_roadmap(None)
    return RedirectResponse(url="/roadmap", status_code=303)
