from app.agents.llm.base import LLMClient
from app.agents.schemas import ResumeFeedback
from app.agents.workflow import generate_validated

SYSTEM_RESUME_REVIEWER = """You are an expert resume writer and career coach.
Be encouraging and professional in your tone.
You must return ONLY valid JSON (no markdown, no code fences, no commentary).
"""

def build_resume_prompt(resume_text: str, job_description: str | None = None) -> str:
    tailoring = ""
    if job_description and job_description.strip():
        tailoring = f"""
Job Description for tailoring:
{job_description.strip()}
"""

    return f"""
Analyze the resume below and give structured feedback to help the user improve it.
If a job description is provided, tailor the feedback to that specific role.

Resume:
{resume_text}
{tailoring}
Output must be STRICT JSON matching this schema:
{{
  "ats_score": 0,
  "overall_feedback": "string",
  "section_feedback": [
    {{"section_title": "string", "feedback": [{{"point": "string", "example": "string or null"}}]}}
  ]
}}

Rules:
- ats_score is an integer 0-100 reflecting keyword optimization (against the job description if given), formatting and ATS-friendliness.
- overall_feedback is one concise paragraph of key takeaways.
- section_feedback covers each major section you comment on (e.g. Summary, Work Experience, Skills, Education).
- Each feedback point is specific and actionable; include an example where it helps.
""".strip()

def _validate_feedback(fb: ResumeFeedback) -> None:
    if not fb.overall_feedback.strip():
        raise ValueError("overall_feedback is empty")
    if not fb.section_feedback:
        raise ValueError("section_feedback must contain at least one section")

def analyze_resume(llm: LLMClient, resume_text: str, job_description: str | None = None) -> ResumeFeedback:
    return generate_validated(
        llm,
        ResumeFeedback,
        system=SYSTEM_RESUME_REVIEWER,
        user_prompt=build_resume_prompt(resume_text, job_description),
        check=_validate_feedback,
    )
