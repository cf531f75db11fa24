"""Shared test fixtures for AI Calendar tests.

This module provides common fixtures used across all test modules:
- In-memory SQLite engine with every table created
- A SQLAlchemy session per test
- Seeded users
- A FastAPI TestClient wired to the same database

Usage:
    def test_something(db_session, users):
        service = EventService(db_session)
        ...
"""

from collections.abc import Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from aicalendar.core.database import init_db


# ─────────────────────────────────────────────────────────────────────────────
# Database Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine shared across threads, tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)

    yield engine

    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """A session for the duration of one test."""
    session = session_factory()

    yield session

    session.close()


# ─────────────────────────────────────────────────────────────────────────────
# User Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def users(db_session: Session) -> dict:
    """Four registered users keyed by username."""
    from aicalendar.services.user_service import UserService

    service = UserService(db_session)
    created = {}
    for name in ("alice", "bob", "carol", "dave"):
        created[name] = service.create_user(username=name, email=f"{name}@example.com").value
    return created


@pytest.fixture
def alice(users):
    return users["alice"]


@pytest.fixture
def bob(users):
    return users["bob"]


@pytest.fixture
def carol(users):
    return users["carol"]


@pytest.fixture
def dave(users):
    return users["dave"]


# ─────────────────────────────────────────────────────────────────────────────
# API Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def test_client(session_factory: sessionmaker):
    """TestClient whose requests use the test database."""
    from fastapi.testclient import TestClient

    from aicalendar.core.database import get_db
    from aicalendar.main import create_app

    app = create_app(initialize_database=False)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
