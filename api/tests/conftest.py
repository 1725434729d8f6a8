import os

# Settings refuse to load without a database URL
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from mdd_api.core.database import get_session
from mdd_api.main import app
from mdd_api.models import Topic, User


@pytest.fixture(name="session")
def session_fixture():
    """A session on a fresh in-memory database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    engine.dispose()


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """API client whose requests run on the test session."""
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session: Session):
    """Insert a user directly, bypassing the service."""
    def _make_user(username: str = "bob", email: str = None, password: str = "secret", **fields) -> User:
        user = User(
            username=username,
            email=email or f"{username}@x.com",
            password=User.hash_password(password),
            **fields,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
    return _make_user


@pytest.fixture
def make_topic(session: Session):
    """Insert a topic directly, bypassing the service."""
    def _make_topic(name: str = "Java", **fields) -> Topic:
        topic = Topic(name=name, **fields)
        session.add(topic)
        session.commit()
        session.refresh(topic)
        return topic
    return _make_topic
