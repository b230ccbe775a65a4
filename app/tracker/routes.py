# Learning tracker: progress, streak, activity calendar
import calendar
from datetime import date

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse

from app.auth.deps import get_current_session
from app.deps import get_today
from app.state.store import SessionState
from app.tracker.progress import summarize_progress
from app.templating import templates

router = APIRouter(prefix="/tracker")

def _month_grid(today: date, active: set[date]) -> list[list[dict | None]]:
    """Weeks of the current month for the activity calendar (Monday first)."""
    weeks = []
    for week in calendar.Calendar().monthdatescalendar(today.year, today.month):
        row = []
        for d in week:
            if d.month != today.month:
                row.append(None)
            else:
                row.append({"day": d.day, "active": d in active, "today": d == today})
        weeks.append(row)
    return weeks

@router.get("", response_class=HTMLResponse)
def tracker_page(request: Request, state: SessionState = Depends(get_current_session),
today: date = Depends(get_today)):
    summary = summarize_progress(state.roadmap, state.completed_items, today)
    return templates.TemplateResponse(request, "tracker.html", {
        "user": state.user,
        "roadmap": state.roadmap,
        "summary": summary,
        "month_label": today.strftime("%B %Y"),
        "weeks": _month_grid(today, set(summary.completion_dates)),
    })

@router.get("/summary")
def tracker_summary(state: SessionState = Depends(get_current_session),
today: date = Depends(get_today)):
    summary = summarize_progress(state.roadmap, state.completed_items, today)
    return JSONResponse({"has_roadmap": state.roadmap is not None, **summary.as_dict()})
