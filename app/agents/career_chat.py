from app.agents.llm.base import LLMClient
from app.agents.schemas import CareerAdvice
from app.agents.workflow import generate_validated

SYSTEM_CAREER_COACH = """You are a career coach chatbot. A user is asking for career advice.
Answer the user's question with helpful, practical advice.
Return ONLY JSON of the form {"advice": "..."} with no markdown fences.
"""

def _validate_advice(a: CareerAdvice) -> None:
    if not a.advice.strip():
        raise ValueError("advice is empty")

def career_advice(llm: LLMClient, question: str) -> CareerAdvice:
    return generate_validated(
        llm,
        CareerAdvice,
        system=SYSTEM_CAREER_COACH,
        user_prompt=f"User's Question: {question.strip()}",
        check=_validate_advice,
        temperature=0.5,
    )
