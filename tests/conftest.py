"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator
from typing import Any

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-kotoba-tests-0123456789")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from kotoba import models  # noqa: E402
from kotoba.database import Base, get_db  # noqa: E402
from kotoba.infrastructure.identity.auth.token_service import create_access_token  # noqa: E402
from kotoba.main import app  # noqa: E402

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite://"

# One shared connection so every session sees the same in-memory database
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=test_engine)


def _override_get_db(db_session: Session) -> None:
    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def test_user(db_session: Session) -> models.User:
    """Create the user the test client is authenticated as."""
    user = models.User(email="learner@example.com", name="Learner")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def other_user(db_session: Session) -> models.User:
    """Create a second user whose records must stay invisible."""
    user = models.User(email="someone-else@example.com", name="Someone Else")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(test_user: models.User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(test_user.id)}"}


@pytest.fixture
def other_auth_headers(other_user: models.User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(other_user.id)}"}


@pytest.fixture
def client(
    db_session: Session, auth_headers: dict[str, str]
) -> Generator[TestClient, Any, None]:
    """Create a test client authenticated as test_user."""
    _override_get_db(db_session)

    with TestClient(app, headers=auth_headers) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client without credentials."""
    _override_get_db(db_session)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def test_course(db_session: Session) -> models.Course:
    """Create a published course with 10 lessons."""
    course = models.Course(
        title="Japanese for Beginners",
        description="Hiragana, katakana and first phrases",
        difficulty="beginner",
        estimated_hours=20,
        is_published=True,
    )
    course.lessons = [models.Lesson(title=f"Lesson {i}", order_index=i) for i in range(1, 11)]
    db_session.add(course)
    db_session.commit()
    db_session.refresh(course)
    return course


@pytest.fixture
def empty_course(db_session: Session) -> models.Course:
    """Create a course without lessons."""
    course = models.Course(title="Coming Soon", is_published=False)
    db_session.add(course)
    db_session.commit()
    db_session.refresh(course)
    return course


@pytest.fixture
def test_vocabulary(db_session: Session) -> models.Vocabulary:
    """Create a vocabulary item."""
    vocabulary = models.Vocabulary(
        word="猫",
        reading="ねこ",
        meaning="cat",
        part_of_speech="noun",
        example_sentence="猫が好きです。",
        difficulty="N5",
    )
    db_session.add(vocabulary)
    db_session.commit()
    db_session.refresh(vocabulary)
    return vocabulary


@pytest.fixture
def second_vocabulary(db_session: Session) -> models.Vocabulary:
    """Create another vocabulary item."""
    vocabulary = models.Vocabulary(word="犬", reading="いぬ", meaning="dog", difficulty="N5")
    db_session.add(vocabulary)
    db_session.commit()
    db_session.refresh(vocabulary)
    return vocabulary
