import pytest

from app.agents.career_chat import career_advice
from app.agents.insights import build_insights_prompt, placement_insights
from app.agents.job_match import match_job
from app.agents.resume_review import analyze_resume, build_resume_prompt
from app.agents.workflow import AIGenerationError

from conftest import FakeLLM

FEEDBACK = {
    "ats_score": 72,
    "overall_feedback": "Solid structure; quantify impact.",
    "section_feedback": [
        {"section_title": "Work Experience",
         "feedback": [{"point": "Add metrics", "example": "Cut ETL time by 40%"}, {"point": "Use action verbs"}]},
    ],
}

MATCH = {"match_score": 64, "matches": ["Data Engineer", "Analytics Engineer"], "analysis": "Strong SQL, no Spark."}

INSIGHTS = {
    "trends": [{"month": "Jan", "hires": 120}, {"month": "Feb", "hires": 135}],
    "top_companies": [{"name": "Acme", "hires": 40}],
    "average_salaries": [{"skill": "Python", "average_salary": 118000}],
    "summary": "Demand is steady.",
}


def test_analyze_resume_parses_sections():
    llm = FakeLLM(FEEDBACK)
    fb = analyze_resume(llm, "Jane Doe, data analyst", None)
    assert fb.ats_score == 72
    assert fb.section_feedback[0].feedback[0].example == "Cut ETL time by 40%"
    assert fb.section_feedback[0].feedback[1].example is None


def test_resume_prompt_only_mentions_job_when_given():
    assert "Job Description for tailoring" not in build_resume_prompt("cv", None)
    assert "Job Description for tailoring" not in build_resume_prompt("cv", "   ")
    assert "Backend role at Acme" in build_resume_prompt("cv", "Backend role at Acme")


def test_ats_score_out_of_range_is_retried():
    llm = FakeLLM({**FEEDBACK, "ats_score": 140}, FEEDBACK)
    assert analyze_resume(llm, "cv").ats_score == 72
    assert len(llm.calls) == 2


def test_resume_feedback_without_sections_is_retried():
    llm = FakeLLM({**FEEDBACK, "section_feedback": []}, FEEDBACK)
    analyze_resume(llm, "cv")
    assert "section_feedback" in llm.calls[1]["user"]


def test_match_job():
    llm = FakeLLM(MATCH)
    result = match_job(llm, "cv text", "We need a data engineer with Spark.")
    assert result.match_score == 64
    assert result.matches == ["Data Engineer", "Analytics Engineer"]
    assert "We need a data engineer with Spark." in llm.calls[0]["user"]


def test_match_job_requires_analysis():
    llm = FakeLLM({**MATCH, "analysis": ""}, {**MATCH, "analysis": ""}, {**MATCH, "analysis": ""})
    with pytest.raises(AIGenerationError):
        match_job(llm, "cv", "jd")


def test_career_advice():
    llm = FakeLLM({"advice": "Start with a portfolio."})
    assert career_advice(llm, "  How do I start?  ").advice == "Start with a portfolio."
    assert llm.calls[0]["user"] == "User's Question: How do I start?"


def test_placement_insights():
    llm = FakeLLM(INSIGHTS)
    result = placement_insights(llm, " Data Engineer ")
    assert result.trends[1].hires == 135
    assert result.average_salaries[0].average_salary == 118000
    assert "'Data Engineer'" in llm.calls[0]["user"]


@pytest.mark.parametrize("field", ["trends", "top_companies", "average_salaries"])
def test_placement_insights_needs_every_series(field):
    llm = FakeLLM({**INSIGHTS, field: []}, INSIGHTS)
    placement_insights(llm, "Data Engineer")
    assert len(llm.calls) == 2


def test_insights_prompt_pins_the_role():
    assert build_insights_prompt("Nurse").count("'Nurse'") >= 3
