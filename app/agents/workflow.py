# app/agents/workflow.py
import logging
from typing import Callable, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.agents.llm.base import LLMClient, LLMError
from app.agents.schemas import Roadmap, RoadmapRequest
from app.settings import settings

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class AIGenerationError(RuntimeError):
    """The model could not produce a valid result after retries."""


SYSTEM_ROADMAP = """You are a career advisor expert specializing in personalized career roadmaps.

You must return ONLY valid JSON (no markdown, no code fences, no commentary).
The JSON must match the given schema exactly.
"""


def build_roadmap_prompt(req: RoadmapRequest, months: int) -> str:
    return f"""
Create a {months}-month career roadmap for this person.
Tailor it to their level: a Beginner roadmap focuses on fundamentals,
an Advanced one covers specialized topics.

Skill Level: {req.skill_level}
Degree: {req.degree}
Skills: {req.skills}
Interests: {req.interests}

Output must be STRICT JSON matching this schema:
{{
  "title": "string",
  "overview": "string",
  "months": [
    {{
      "month": 1,
      "theme": "string",
      "skills": ["string"],
      "projects": ["string"],
      "certifications": ["string"],
      "job_prep": ["string"]
    }}
  ]
}}

Rules:
- "months" must contain exactly {months} items, numbered 1..{months} in order.
- Every list item is one short, specific task.
- Use correct grammar and keep the structure easy to follow.
""".strip()


def _extract_first_json_object(text: str) -> str | None:
    """
    Extract the first complete top-level JSON object using brace counting.
    Returns the first balanced { ... } substring, or None if not found.
    """
    start = text.find("{")
    if start == -1:
        return None

    brace_count = 0
    for i in range(start, len(text)):
        if text[i] == "{":
            brace_count += 1
        elif text[i] == "}":
            brace_count -= 1
            if brace_count == 0:
                return text[start:i + 1]

    return None


def _parse(schema: Type[T], text: str, check: Callable[[T], None] | None) -> T:
    result = schema.model_validate_json(text)
    if check is not None:
        check(result)
    return result


def generate_validated(
    llm: LLMClient,
    schema: Type[T],
    *,
    system: str,
    user_prompt: str,
    check: Callable[[T], None] | None = None,
    temperature: float = 0.2,
    max_attempts: int | None = None,
) -> T:
    """
    Ask the model for JSON matching `schema`, validate it, and run `check`.

    Each failed attempt is fed back to the model as a repair prompt carrying
    the error and the invalid output. Raises AIGenerationError once
    `max_attempts` (default: settings.llm_max_attempts) are used up or the
    provider itself fails.
    """
    attempts = max_attempts or settings.llm_max_attempts
    prompt = user_prompt
    last_err: Exception | None = None

    for attempt in range(1, attempts + 1):
        try:
            raw_text = llm.generate_text(system=system, user=prompt, temperature=temperature)
        except LLMError as e:
            logger.exception("LLM provider call failed for %s", schema.__name__)
            raise AIGenerationError(str(e)) from e

        # 1) Try strict JSON validation
        try:
            return _parse(schema, raw_text, check)
        except (ValidationError, ValueError) as e:
            last_err = e

        # 2) Try extracting embedded JSON object
        extracted_json = _extract_first_json_object(raw_text)
        if extracted_json:
            try:
                return _parse(schema, extracted_json, check)
            except (ValidationError, ValueError) as e:
                last_err = e

        logger.warning("%s output invalid (attempt %d/%d): %s",
                       schema.__name__, attempt, attempts, last_err)

        # 3) Build repair prompt with detailed error info
        invalid_json = extracted_json if extracted_json else raw_text
        prompt = f"""
{user_prompt}

PREVIOUS ATTEMPT FAILED:
Error: {last_err}

Invalid output:
{invalid_json}

Return ONLY corrected JSON, no extra keys, no markdown.
""".strip()

    raise AIGenerationError(
        f"{schema.__name__} output did not validate after {attempts} attempts. Last error: {last_err}"
    )


def _validate_roadmap(roadmap: Roadmap) -> None:
    if not roadmap.title.strip():
        raise ValueError("Roadmap title is empty")
    if not roadmap.months:
        raise ValueError("Roadmap must contain at least one month")


def generate_roadmap(llm: LLMClient, req: RoadmapRequest, months: int | None = None) -> Roadmap:
    months = months or settings.roadmap_months
    return generate_validated(
        llm,
        Roadmap,
        system=SYSTEM_ROADMAP,
        user_prompt=build_roadmap_prompt(req, months),
        check=_validate_roadmap,
        temperature=0.1,
    )
