## Main application entry point
import logging

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from urllib.parse import quote

from app.auth.routes import router as auth_router
from app.routes import router as app_router
from app.auth.deps import NotAuthenticated
from app.roadmaps.routes import router as roadmap_router
from app.tracker.routes import router as tracker_router
from app.resume.routes import router as resume_router
from app.chat.routes import router as chat_router
from app.insights.routes import router as insights_router
from app.settings import settings
from app.templating import APP_DIR, templates

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="CareerRoad")

app.mount("/static", StaticFiles(directory=str(APP_DIR / "static")), name="static")

@app.get("/",response_class=HTMLResponse)
async def home(request: Request):
    return templates.TemplateResponse(request, "home.html", {})

@app.get("/health")
async def health():
    return {"ok": True, "llm_provider": settings.LLM_PROVIDER}

@app.exception_handler(NotAuthenticated)
async def not_authenticated_handler(request: Request, exc: NotAuthenticated):
    # Preserve where the user was going
    next_url = quote(request.url.path, safe="/")
    return RedirectResponse(url=f"/login?next={next_url}", status_code=303)

app.include_router(auth_router)
app.include_router(app_router)
app.include_router(roadmap_router)
app.include_router(tracker_router)
app.include_router(resume_router)
app.include_router(chat_router)
app.include_router(insights_router)
