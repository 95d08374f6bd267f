"""
Pytest configuration and fixtures for StudyPilot backend tests.

Provides:
- In-memory SQLite database, recreated per test
- Goal workflow wired to a scripted chat provider and a ticking clock
- FastAPI test client with dependency overrides
- Signed bearer tokens for two users
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Generator

import pytest

# Set test environment before importing the app
os.environ["STORAGE_BACKEND"] = "sql"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["JWT_AUDIENCE"] = ""
os.environ["LLM_API_KEY"] = "test-key-not-real"

from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.orm import Session, sessionmaker

from studypilot import config
from studypilot.database import Base, build_engine
from studypilot.dependencies import get_workflow
from studypilot.main import app
from studypilot.repositories import SqlRepository
from studypilot.services import ContentGenerationGateway, GoalWorkflow, InFlightRegistry

import studypilot.models  # noqa: F401  (register tables)

from mocks import MockChatProvider


OWNER_ID = "user-123"
OTHER_ID = "user-456"

test_engine = build_engine("sqlite://")
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Fresh tables for each test"""
    Base.metadata.create_all(bind=test_engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def repo(db: Session) -> SqlRepository:
    return SqlRepository(db)


@pytest.fixture
def mock_provider() -> MockChatProvider:
    return MockChatProvider()


@pytest.fixture
def gateway(mock_provider: MockChatProvider) -> ContentGenerationGateway:
    return ContentGenerationGateway(mock_provider)


@pytest.fixture
def clock():
    """Clock that moves one second forward on every read"""
    state = {"now": datetime(2025, 1, 6, 8, 0, tzinfo=timezone.utc)}

    def tick() -> datetime:
        state["now"] += timedelta(seconds=1)
        return state["now"]

    return tick


@pytest.fixture
def workflow(repo: SqlRepository, gateway: ContentGenerationGateway, clock) -> GoalWorkflow:
    return GoalWorkflow(repo, gateway, clock=clock, registry=InFlightRegistry())


@pytest.fixture
def client(workflow: GoalWorkflow) -> Generator[TestClient, None, None]:
    """FastAPI test client sharing the test workflow"""
    app.dependency_overrides[get_workflow] = lambda: workflow
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_token(user_id: str, expires_in: timedelta = timedelta(hours=1), **claims) -> str:
    payload = {"sub": user_id, "exp": datetime.now(timezone.utc) + expires_in, **claims}
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


@pytest.fixture
def auth_headers() -> dict:
    return {"Authorization": f"Bearer {make_token(OWNER_ID)}"}


@pytest.fixture
def other_headers() -> dict:
    return {"Authorization": f"Bearer {make_token(OTHER_ID)}"}


# =========================================================================
# Record fixtures
# =========================================================================

@pytest.fixture
def goal(workflow: GoalWorkflow):
    return workflow.create_goal(OWNER_ID, "Learn X", "high", description="Basics of X")
