# Career advice chatbot
import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from app.agents.career_chat import career_advice
from app.agents.llm.base import LLMClient
from app.agents.workflow import AIGenerationError
from app.auth.deps import get_current_session
from app.deps import get_llm
from app.state.store import ChatMessage, SessionState
from app.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat")

CHAT_FAILED = "Failed to get chatbot response. The AI returned an empty response."
MAX_QUESTION_CHARS = 2000

def _page(request: Request, state: SessionState, status_code: int = 200, **extra):
    return templates.TemplateResponse(request, "chat.html",
    {"user": state.user, "messages": state.chat, **extra}, status_code=status_code)

@router.get("", response_class=HTMLResponse)
def chat_page(request: Request, state: SessionState = Depends(get_current_session)):
    return _page(request, state)

@router.post("", response_class=HTMLResponse)
def ask(
    request: Request,
    question: str = Form(""),
    state: SessionState = Depends(get_current_session),
    llm: LLMClient = Depends(get_llm),
):
    question = question.strip()
    if not question or len(question) > MAX_QUESTION_CHARS:
        return _page(request, state, status_code=400,
        error=f"Ask a question of 1-{MAX_QUESTION_CHARS} characters.")

    try:
        result = career_advice(llm, question)
    except AIGenerationError:
        logger.exception("Chatbot call failed for %s", state.user.email)
        # The question is not kept when no answer came back
        return _page(request, state, status_code=502, error=CHAT_FAILED, question=question)

    state.chat.append(ChatMessage(role="user", content=question))
    state.chat.append(ChatMessage(role="bot", content=result.advice))
    return RedirectResponse(url="/chat", status_code=303)

@router.post("/clear")
def clear_chat(state: SessionState = Depends(get_current_session)):
    state.chat.clear()
    return RedirectResponse(url="/chat", status_code=303)
