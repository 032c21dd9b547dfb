import pytest
from fastapi.testclient import TestClient

from lessoncraft.api.routes_auth import get_draft_store
from lessoncraft.main import app
from lessoncraft.models.lesson_plan import LessonOutline, LessonPlan
from lessoncraft.services.draft_session import DraftStore
from lessoncraft.utils.ai_client import GenerationError


class FakeGenerator:
    def __init__(self, reply="Generated lesson content", error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    async def __call__(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_generator():
    return FakeGenerator()


@pytest.fixture
def failing_generator():
    return FakeGenerator(error=GenerationError("quota exceeded"))


@pytest.fixture
def store(fake_generator):
    return DraftStore(generator=fake_generator)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_draft_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    resp = client.post("/auth/login", json={"username": "demouser", "password": "demopass"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def bare_plan():
    """A plan with empty lists and one-line outline parts."""
    return LessonPlan(
        topic="Fractions",
        grade_level="4th Grade",
        main_concept="Parts of a whole",
        outline=LessonOutline(
            introduction="Intro",
            development="Develop",
            practice="Practice",
            assessment="Assess",
            closure="Close",
        ),
    )
