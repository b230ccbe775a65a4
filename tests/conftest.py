import json
from datetime import date

import pytest
from fastapi.testclient import TestClient

from app.agents.llm.base import LLMClient, LLMError
from app.deps import get_llm, get_today
from app.main import app
from app.state.store import accounts, sessions

TODAY = date(2026, 3, 12)

ROADMAP_JSON = {
    "title": "Path to Data Engineer",
    "overview": "Six months from SQL basics to production pipelines.",
    "months": [
        {
            "month": 1,
            "theme": "Foundations",
            "skills": ["SQL joins", "Python basics"],
            "projects": ["Build a CSV loader"],
            "certifications": [],
            "job_prep": ["Update LinkedIn headline"],
        },
        {
            "month": 2,
            "theme": "Pipelines",
            "skills": ["Airflow"],
            "projects": [],
            "certifications": ["Astronomer Airflow Fundamentals"],
            "job_prep": [],
        },
    ],
}


class FakeLLM(LLMClient):
    """Replays canned completions and records every prompt it was sent."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def generate_text(self, *, system: str, user: str, temperature: float = 0.2) -> str:
        self.calls.append({"system": system, "user": user, "temperature": temperature})
        if not self.responses:
            raise AssertionError("FakeLLM ran out of responses")
        nxt = self.responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        if isinstance(nxt, (dict, list)):
            return json.dumps(nxt)
        return nxt


class FailingLLM(LLMClient):
    def generate_text(self, *, system: str, user: str, temperature: float = 0.2) -> str:
        raise LLMError("connection refused")


@pytest.fixture(autouse=True)
def clean_state():
    sessions.clear()
    accounts.clear()
    yield
    sessions.clear()
    accounts.clear()
    app.dependency_overrides.clear()


@pytest.fixture
def fake_llm():
    llm = FakeLLM()
    app.dependency_overrides[get_llm] = lambda: llm
    return llm


@pytest.fixture
def client(fake_llm):
    app.dependency_overrides[get_today] = lambda: TODAY
    with TestClient(app) as c:
        yield c


@pytest.fixture
def signed_in(client):
    r = client.post("/login", data={"email": "ada@example.com", "password": "x"})
    assert r.status_code == 200
    return client
