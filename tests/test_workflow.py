import json

import pytest

from app.agents.llm.base import LLMError
from app.agents.schemas import CareerAdvice, Roadmap, RoadmapRequest
from app.agents.workflow import (
    AIGenerationError,
    _extract_first_json_object,
    build_roadmap_prompt,
    generate_roadmap,
    generate_validated,
)

from conftest import FakeLLM, ROADMAP_JSON


def _request(**overrides) -> RoadmapRequest:
    data = {"degree": "BSc Computer Science", "skills": "python, sql",
            "interests": "data engineering", "skill_level": "Beginner"}
    data.update(overrides)
    return RoadmapRequest(**data)


def test_extract_first_json_object_handles_surrounding_text():
    text = 'Sure! Here it is:\n{"advice": "Learn {SQL}"} and {"other": 1}'
    assert _extract_first_json_object(text) == '{"advice": "Learn {SQL}"}'
    assert _extract_first_json_object("no json here") is None
    assert _extract_first_json_object('{"unbalanced": ') is None


def test_valid_first_response_needs_one_call():
    llm = FakeLLM({"advice": "Network early."})
    result = generate_validated(llm, CareerAdvice, system="s", user_prompt="q")
    assert result.advice == "Network early."
    assert len(llm.calls) == 1


def test_json_wrapped_in_markdown_is_recovered():
    llm = FakeLLM('```json\n{"advice": "Ship side projects."}\n```')
    result = generate_validated(llm, CareerAdvice, system="s", user_prompt="q")
    assert result.advice == "Ship side projects."
    assert len(llm.calls) == 1


def test_invalid_output_triggers_repair_prompt():
    llm = FakeLLM("not json at all", {"advice": "Practice interviews."})
    result = generate_validated(llm, CareerAdvice, system="s", user_prompt="original question")

    assert result.advice == "Practice interviews."
    repair = llm.calls[1]["user"]
    assert repair.startswith("original question")
    assert "PREVIOUS ATTEMPT FAILED" in repair
    assert "not json at all" in repair


def test_check_failures_are_retried():
    def non_empty(a):
        if not a.advice.strip():
            raise ValueError("advice is empty")

    llm = FakeLLM({"advice": "  "}, {"advice": "Find a mentor."})
    result = generate_validated(llm, CareerAdvice, system="s", user_prompt="q", check=non_empty)
    assert result.advice == "Find a mentor."
    assert "advice is empty" in llm.calls[1]["user"]


def test_gives_up_after_max_attempts():
    llm = FakeLLM("nope", "still nope", "never")
    with pytest.raises(AIGenerationError, match="after 3 attempts"):
        generate_validated(llm, CareerAdvice, system="s", user_prompt="q", max_attempts=3)
    assert len(llm.calls) == 3


def test_max_attempts_defaults_to_settings(monkeypatch):
    from app.agents import workflow

    monkeypatch.setattr(workflow.settings, "llm_max_attempts", 2)
    llm = FakeLLM("bad", "bad")
    with pytest.raises(AIGenerationError):
        generate_validated(llm, CareerAdvice, system="s", user_prompt="q")
    assert len(llm.calls) == 2


def test_provider_error_is_not_retried():
    llm = FakeLLM(LLMError("timeout"), {"advice": "unused"})
    with pytest.raises(AIGenerationError, match="timeout"):
        generate_validated(llm, CareerAdvice, system="s", user_prompt="q")
    assert len(llm.calls) == 1


def test_generate_roadmap_returns_parsed_roadmap():
    llm = FakeLLM(ROADMAP_JSON)
    roadmap = generate_roadmap(llm, _request(), months=2)

    assert isinstance(roadmap, Roadmap)
    assert roadmap.title == "Path to Data Engineer"
    assert [m.theme for m in roadmap.months] == ["Foundations", "Pipelines"]
    assert "2-month career roadmap" in llm.calls[0]["user"]
    assert llm.calls[0]["temperature"] == 0.1


@pytest.mark.parametrize("broken", [
    {**ROADMAP_JSON, "title": "   "},
    {**ROADMAP_JSON, "months": []},
])
def test_generate_roadmap_rejects_empty_title_or_months(broken):
    llm = FakeLLM(broken, ROADMAP_JSON)
    roadmap = generate_roadmap(llm, _request())
    assert roadmap.months
    assert len(llm.calls) == 2


def test_roadmap_prompt_carries_user_inputs():
    prompt = build_roadmap_prompt(_request(skill_level="Advanced", interests="MLOps"), 6)
    assert "Skill Level: Advanced" in prompt
    assert "Interests: MLOps" in prompt
    assert 'exactly 6 items' in prompt
    # the schema example in the prompt is itself valid JSON
    start = prompt.index("{")
    end = prompt.index("Rules:")
    json.loads(prompt[start:end].strip())
