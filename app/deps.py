## Shared request dependencies
from datetime import date, datetime, timezone

from app.agents.llm.base import LLMClient
from app.agents.llm.client import get_llm_client

def get_llm() -> LLMClient:
    return get_llm_client()

def get_today() -> date:
    # Evaluation date for streaks; overridden in tests
    return datetime.now(timezone.utc).date()
