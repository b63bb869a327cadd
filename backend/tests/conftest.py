import os
from datetime import date

# Keep the app off Postgres: in-memory storage for API tests, SQLite for the engine.
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from runtracker.auth import get_current_user_id  # noqa: E402
from runtracker.db import Base  # noqa: E402
from runtracker.main import app  # noqa: E402
from runtracker.schemas.activity import ActivityRead  # noqa: E402
from runtracker.schemas.goal import GoalRead  # noqa: E402
from runtracker.storage.factory import get_storage  # noqa: E402
from runtracker.storage.memory import MemoryStorage  # noqa: E402
from runtracker.storage.sql import SqlStorage  # noqa: E402

USER_ID = "550e8400-e29b-41d4-a716-446655440000"


@pytest.fixture()
def storage():
    return MemoryStorage()


@pytest.fixture()
def client(storage):
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_current_user_id] = lambda: USER_ID
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def sql_session():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture()
def sql_storage(sql_session):
    return SqlStorage(sql_session)


def make_goal(**overrides) -> GoalRead:
    data = {
        "id": "goal-1",
        "user_id": USER_ID,
        "title": "January distance",
        "type": "distance",
        "target": 20.0,
        "current_value": 0.0,
        "unit": "km",
        "start_date": date(2024, 1, 1),
        "deadline": date(2024, 1, 31),
        "status": "active",
    }
    data.update(overrides)
    return GoalRead(**data)


def make_activity(day: date, distance: float = 5.0, duration: int = 30, **overrides) -> ActivityRead:
    data = {
        "id": f"act-{day.isoformat()}-{distance}-{duration}",
        "user_id": USER_ID,
        "date": day,
        "distance": distance,
        "duration": duration,
        "pace": duration / distance if distance else 0.0,
    }
    data.update(overrides)
    return ActivityRead(**data)
