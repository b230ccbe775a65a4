from app.agents.llm.base import LLMClient
from app.agents.schemas import JobMatch
from app.agents.workflow import generate_validated

SYSTEM_JOB_MATCHER = """You are a career expert who compares resumes with job descriptions.
You must return ONLY valid JSON (no markdown, no code fences, no commentary).
"""

def build_match_prompt(resume_text: str, job_description: str) -> str:
    return f"""
Analyze the resume and job description to identify potential job matches.

Resume:
{resume_text}

Job Description:
{job_description.strip()}

Output must be STRICT JSON matching this schema:
{{"match_score": 0, "matches": ["string"], "analysis": "string"}}

Rules:
- match_score is an integer 0-100 for how compatible the resume is with the job.
- matches lists job titles from the description or similar roles.
- analysis explains the score, with strengths and weaknesses of the resume for this job.
""".strip()

def _validate_match(m: JobMatch) -> None:
    if not m.analysis.strip():
        raise ValueError("analysis is empty")

def match_job(llm: LLMClient, resume_text: str, job_description: str) -> JobMatch:
    return generate_validated(
        llm,
        JobMatch,
        system=SYSTEM_JOB_MATCHER,
        user_prompt=build_match_prompt(resume_text, job_description),
        check=_validate_match,
    )
