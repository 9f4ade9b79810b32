"""Shared fixtures for tests."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("OPENROUTER_API_KEY", "test-key")

import json

import pytest

from database.database import Base, SessionLocal, engine
from database import models  # noqa: F401


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
def db_session():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


# ---------------------------------------------------------------------------
# Model replies
# ---------------------------------------------------------------------------


def make_reply(number_of_tasks=2, task_count=2, fenced=True, **overrides) -> str:
    data = {
        "title": "Binary Trees",
        "deadline": "2025-03-01",
        "totalMarksWeightage": "100",
        "evaluationCriteria": "Correctness and clarity",
        "numberOfTasks": number_of_tasks,
        "tasks": [
            {"description": f"Task body {i}", "weightage": str(10 * i)}
            for i in range(1, task_count + 1)
        ],
    }
    data.update(overrides)
    body = json.dumps(data, indent=2)
    return f"```json\n{body}\n```" if fenced else body


@pytest.fixture
def reply_factory():
    return make_reply
