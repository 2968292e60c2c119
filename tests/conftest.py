"""
Shared fixtures.
Each test gets its own SQLite file, a fixed clock and a TestClient wired to both.
"""

import os

os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["DB_SLOW_QUERY_MS"] = "0"

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from consultdesk.config import settings
from consultdesk.domain.events.base import EventDispatcher
from consultdesk.infrastructure.db.database import create_db_engine, get_db
from consultdesk.infrastructure.db.models import create_all_tables
from consultdesk.infrastructure.db.seed import seed_demo_user
from consultdesk.infrastructure.web.dependencies import get_clock, get_dispatcher
from consultdesk.main import create_application


API = settings.api_prefix


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)

    def set(self, now: datetime) -> None:
        self.now = now


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 15, 10, 0))


@pytest.fixture
def dispatcher():
    return EventDispatcher()


@pytest.fixture
def db_engine(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'consultdesk-test.db'}", slow_query_ms=0)
    create_all_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    factory = sessionmaker(bind=db_engine, autoflush=False, expire_on_commit=False)
    session = factory()
    try:
        seed_demo_user(session)
    finally:
        session.close()
    return factory


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def app(session_factory, clock, dispatcher):
    application = create_application()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_clock] = lambda: clock
    application.dependency_overrides[get_dispatcher] = lambda: dispatcher
    return application


@pytest.fixture
def client(app):
    # No context manager: the lifespan would touch the configured database
    return TestClient(app)


@pytest.fixture
def create_project(client):
    def _create(**overrides):
        payload = {
            "name": "Genome Assembly Pipeline",
            "client_name": "Biology Department",
            "hourly_rate": "100.00",
            "software_tools": ["Python", "Nextflow"],
        }
        payload.update(overrides)
        response = client.post(f"{API}/projects", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_student(client):
    def _create(**overrides):
        payload = {
            "name": "Alex Rivera",
            "email": "alex.rivera@example.com",
            "program": "Computational Biology",
            "level": "PhD",
        }
        payload.update(overrides)
        response = client.post(f"{API}/students", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def log_time(client, clock):
    """Run a timer for the given number of minutes, optionally from a given start."""

    def _log(project_id, minutes, description="Sequence alignment", start=None):
        if start is not None:
            clock.set(start)
        response = client.post(
            f"{API}/time-entries",
            json={"project_id": project_id, "description": description}
        )
        assert response.status_code == 201, response.text
        clock.advance(minutes=minutes)
        response = client.post(f"{API}/time-entries/{response.json()['id']}/stop")
        assert response.status_code == 200, response.text
        return response.json()

    return _log
