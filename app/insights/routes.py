# Placement / market insights with charts
import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from app.agents.insights import placement_insights
from app.agents.llm.base import LLMClient
from app.agents.workflow import AIGenerationError
from app.auth.deps import get_current_session
from app.deps import get_llm
from app.state.store import SessionState
from app.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/insights")

INSIGHTS_FAILED = "Failed to generate placement insights. The AI returned an empty or invalid response."

def _page(request: Request, state: SessionState, status_code: int = 200, **extra):
    insights = state.insights
    return templates.TemplateResponse(request, "insights.html", {
        "user": state.user,
        "role": state.insights_role,
        "insights": insights,
        "chart_data": insights.model_dump() if insights else None,
        **extra,
    }, status_code=status_code)

@router.get("", response_class=HTMLResponse)
def insights_page(request: Request, state: SessionState = Depends(get_current_session)):
    return _page(request, state)

@router.post("", response_class=HTMLResponse)
def generate(
    request: Request,
    role: str = Form(""),
    state: SessionState = Depends(get_current_session),
    llm: LLMClient = Depends(get_llm),
):
    role = role.strip()
    if len(role) < 2:
        return _page(request, state, status_code=400, error="Enter a job role or industry.")

    try:
        result = placement_insights(llm, role)
    except AIGenerationError:
        logger.exception("Placement insights failed for role %r", role)
        return _page(request, state, status_code=502, error=INSIGHTS_FAILED)

    state.insights = result
    state.insights_role = role
    return RedirectResponse(url="/insights", status_code=303)
