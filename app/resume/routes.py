# Resume feedback and job match pages
import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse

from app.agents.documents import ResumeDocumentError, resolve_resume_text
from app.agents.job_match import match_job
from app.agents.llm.base import LLMClient
from app.agents.resume_review import analyze_resume
from app.agents.workflow import AIGenerationError
from app.auth.deps import get_current_session
from app.deps import get_llm
from app.settings import settings
from app.state.store import SessionState
from app.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resume")

FEEDBACK_FAILED = "Failed to analyze resume. The AI returned an empty or invalid response."
MATCH_FAILED = "Failed to find job matches. The AI returned an empty or invalid response."
MIN_JOB_DESCRIPTION_CHARS = 50

async def _read_resume(resume_text: str, resume_file: UploadFile | None) -> str:
    # Read one byte past the limit so oversized uploads are rejected without buffering them whole
    blob = await resume_file.read(settings.resume_max_bytes + 1) if resume_file is not None else None
    filename = resume_file.filename if resume_file is not None else None
    return resolve_resume_text(resume_text, filename, blob, max_bytes=settings.resume_max_bytes)

@router.get("/feedback", response_class=HTMLResponse)
def feedback_page(request: Request, state: SessionState = Depends(get_current_session)):
    return templates.TemplateResponse(request, "resume_feedback.html", {"user": state.user})

@router.post("/feedback", response_class=HTMLResponse)
async def feedback(
    request: Request,
    resume_text: str = Form(""),
    job_description: str = Form(""),
    resume_file: UploadFile | None = File(None),
    state: SessionState = Depends(get_current_session),
    llm: LLMClient = Depends(get_llm),
):
    ctx = {"user": state.user, "job_description": job_description, "resume_text": resume_text}
    try:
        text = await _read_resume(resume_text, resume_file)
    except ResumeDocumentError as e:
        return templates.TemplateResponse(request, "resume_feedback.html",
        {**ctx, "error": str(e)}, status_code=400)

    try:
        # Blocking provider call; keep it off the event loop
        result = await run_in_threadpool(analyze_resume, llm, text, job_description or None)
    except AIGenerationError:
        logger.exception("Resume analysis failed for %s", state.user.email)
        return templates.TemplateResponse(request, "resume_feedback.html",
        {**ctx, "error": FEEDBACK_FAILED}, status_code=502)

    return templates.TemplateResponse(request, "resume_feedback.html", {**ctx, "result": result})

@router.get("/match", response_class=HTMLResponse)
def match_page(request: Request, state: SessionState = Depends(get_current_session)):
    return templates.TemplateResponse(request, "job_match.html", {"user": state.user})

@router.post("/match", response_class=HTMLResponse)
async def match(
    request: Request,
    resume_text: str = Form(""),
    job_description: str = Form(""),
    resume_file: UploadFile | None = File(None),
    state: SessionState = Depends(get_current_session),
    llm: LLMClient = Depends(get_llm),
):
    ctx = {"user": state.user, "job_description": job_description, "resume_text": resume_text}
    if len(job_description.strip()) < MIN_JOB_DESCRIPTION_CHARS:
        return templates.TemplateResponse(request, "job_match.html",
        {**ctx, "error": "Please paste a job description."}, status_code=400)

    try:
        text = await _read_resume(resume_text, resume_file)
    except ResumeDocumentError as e:
        return templates.TemplateResponse(request, "job_match.html",
        {**ctx, "error": str(e)}, status_code=400)

    try:
        result = await run_in_threadpool(match_job, llm, text, job_description)
    except AIGenerationError:
        logger.exception("Job match failed for %s", state.user.email)
        return templates.TemplateResponse(request, "job_match.html",
        {**ctx, "error": MATCH_FAILED}, status_code=502)

    return templates.TemplateResponse(request, "job_match.html", {**ctx, "result": result})
