import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")

from datetime import datetime, timedelta
from itertools import count

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session, create_engine, select

from app.core.database import get_session
from app.core.security import create_access_token
from app.main import app
from app.models import Lesson, LessonLevel, Topic, User, UserRole

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'learnify.db'}",
        connect_args={"check_same_thread": False},
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session):
    sequence = count(1)

    def _make_user(role: UserRole = UserRole.USER, password: str = "secret123", **overrides) -> User:
        n = next(sequence)
        user = User(
            name=overrides.pop("name", f"User {n}"),
            email=overrides.pop("email", f"user{n}@learnify.test"),
            password=User.hash_password(password),
            role=role,
            **overrides,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_topic(session):
    sequence = count(1)

    def _make_topic(**overrides) -> Topic:
        n = next(sequence)
        values = {
            "title": f"Topic {n}",
            "slug": f"topic-{n}",
            "description": f"Description of topic {n}",
            "created_at": BASE_TIME + timedelta(minutes=n),
        }
        values.update(overrides)
        topic = Topic(**values)
        session.add(topic)
        session.commit()
        session.refresh(topic)
        return topic

    return _make_topic


@pytest.fixture
def make_lesson(session):
    sequence = count(1)

    def _make_lesson(topic: Topic, **overrides) -> Lesson:
        n = next(sequence)
        values = {
            "topic_id": topic.id,
            "title": f"Lesson {n}",
            "slug": f"lesson-{n}",
            "content": f"<p>Content of lesson {n}</p>",
            "level": LessonLevel.BEGINNER,
            "created_at": BASE_TIME + timedelta(minutes=n),
        }
        values.update(overrides)
        lesson = Lesson(**values)
        session.add(lesson)
        session.commit()
        session.refresh(lesson)
        return lesson

    return _make_lesson


@pytest.fixture
def admin_user(make_user):
    return make_user(role=UserRole.ADMIN, name="Admin", email="admin@learnify.test")


@pytest.fixture
def regular_user(make_user):
    return make_user(role=UserRole.USER, name="Reader", email="reader@learnify.test")


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {create_access_token(str(admin_user.id))}"}


@pytest.fixture
def user_headers(regular_user):
    return {"Authorization": f"Bearer {create_access_token(str(regular_user.id))}"}


@pytest.fixture
def fetch(engine):
    """Read rows through a fresh session so API writes are always visible."""
    def _fetch(model, **filters):
        with Session(engine) as fresh:
            statement = select(model)
            for field, value in filters.items():
                statement = statement.where(getattr(model, field) == value)
            return fresh.exec(statement).all()

    return _fetch
