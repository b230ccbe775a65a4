from app.agents.llm.base import LLMClient
from app.agents.schemas import PlacementInsights
from app.agents.workflow import generate_validated

SYSTEM_MARKET_ANALYST = """You are a job market analyst.
Generate realistic placement insights strictly for the role the user names.
Do not substitute or infer a different role.
You must return ONLY valid JSON (no markdown, no code fences, no commentary).
"""

def build_insights_prompt(role: str) -> str:
    return f"""
The target role is: '{role}'

Output must be STRICT JSON matching this schema:
{{
  "trends": [{{"month": "Jan", "hires": 0}}],
  "top_companies": [{{"name": "string", "hires": 0}}],
  "average_salaries": [{{"skill": "string", "average_salary": 0}}],
  "summary": "string"
}}

Rules:
- trends: hiring numbers for the last 6 months, months abbreviated (Jan, Feb, ...).
- top_companies: the top 5 hiring companies for this role.
- average_salaries: average annual salary in USD for 5 key skills of the '{role}' role.
- summary: a concise, professional summary of the key takeaways for the '{role}' market.
- All data must be plausible and directly relevant to the role.
""".strip()

def _validate_insights(ins: PlacementInsights) -> None:
    if not ins.summary.strip():
        raise ValueError("summary is empty")
    if not ins.trends:
        raise ValueError("trends must not be empty")
    if not ins.top_companies:
        raise ValueError("top_companies must not be empty")
    if not ins.average_salaries:
        raise ValueError("average_salaries must not be empty")

def placement_insights(llm: LLMClient, role: str) -> PlacementInsights:
    return generate_validated(
        llm,
        PlacementInsights,
        system=SYSTEM_MARKET_ANALYST,
        user_prompt=build_insights_prompt(role.strip()),
        check=_validate_insights,
    )
