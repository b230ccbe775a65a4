## Pydantic Schemas for Structured Output
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, conint

SkillLevel = Literal["Beginner", "Intermediate", "Advanced"]

TASK_CATEGORIES = ("skills", "projects", "certifications", "job_prep")


# Roadmap

class RoadmapRequest(BaseModel):
    degree: str = Field(min_length=2, max_length=200)
    skills: str = Field(min_length=2, max_length=1000)
    interests: str = Field(min_length=2, max_length=1000)
    skill_level: SkillLevel


class MonthPlan(BaseModel):
    month: int
    theme: str
    skills: List[str] = Field(default_factory=list)
    projects: List[str] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)
    job_prep: List[str] = Field(default_factory=list)

    def items(self, category: str) -> List[str]:
        return getattr(self, category)


class Roadmap(BaseModel):
    title: str
    overview: str
    months: List[MonthPlan] = Field(default_factory=list)


# Resume feedback

class FeedbackItem(BaseModel):
    point: str
    example: Optional[str] = None


class SectionFeedback(BaseModel):
    section_title: str
    feedback: List[FeedbackItem] = Field(default_factory=list)


class ResumeFeedback(BaseModel):
    ats_score: conint(ge=0, le=100)
    overall_feedback: str
    section_feedback: List[SectionFeedback] = Field(default_factory=list)


# Job match

class JobMatch(BaseModel):
    match_score: conint(ge=0, le=100)
    matches: List[str] = Field(default_factory=list)
    analysis: str


# Chatbot

class CareerAdvice(BaseModel):
    advice: str


# Placement insights

class HiringTrend(BaseModel):
    month: str
    hires: int


class CompanyHires(BaseModel):
    name: str
    hires: int


class SkillSalary(BaseModel):
    skill: str
    average_salary: float


class PlacementInsights(BaseModel):
    trends: List[HiringTrend] = Field(default_factory=list)
    top_companies: List[CompanyHires] = Field(default_factory=list)
    average_salaries: List[SkillSalary] = Field(default_factory=list)
    summary: str
