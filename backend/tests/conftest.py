"""Shared fixtures: in-memory SQLite app, test client and walk builders."""

import os

# Must be set before walkmate.core.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from walkmate.db import Base, SessionLocal, engine
from walkmate.main import app


@pytest.fixture(autouse=True)
def clean_tables():
    """Empty every table after each test."""
    yield
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fixed_now(monkeypatch):
    """Pin "now" for the HTTP handlers to Wednesday 2025-03-05 12:00 UTC."""
    now = datetime(2025, 3, 5, 12, 0, tzinfo=timezone.utc)
    monkeypatch.setattr("walkmate.api.users.utc_now", lambda: now)
    monkeypatch.setattr("walkmate.api.walks.utc_now", lambda: now)
    return now


@pytest.fixture
def make_walk():
    """Build a walk-like object for the pure service functions."""

    def _make(date, steps=1000, distance=800.0, duration=10):
        if date.tzinfo is None:
            date = date.replace(tzinfo=timezone.utc)
        return SimpleNamespace(date=date, steps=steps, distance=distance, duration=duration)

    return _make


@pytest.fixture
def user_payload():
    return {"name": "Test Walker", "goalType": "steps", "goalValue": 10000}
