"""Shared fixtures for the mentor pairing test suite.

Unit and API tests run against an in-memory SQLite database; the concurrency
tests build their own file-backed database so several connections can race.
"""

from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mentor_pairing.config import Settings
from mentor_pairing.database import Base, get_db
from mentor_pairing.main import app
from mentor_pairing.models import MentorDirectoryEntry, Pairing, PairingStatus
from mentor_pairing.security import create_access_token


def make_settings(**overrides) -> Settings:
    values = {"PAIRING_TX_MAX_ATTEMPTS": 5, "PAIRING_TX_RETRY_BACKOFF_SECONDS": 0.0}
    values.update(overrides)
    return Settings(**values)


def add_directory_entry(
    db,
    mentor_id: str = "mentor-1",
    *,
    capacity: int = 3,
    active_students: int = 0,
    active: bool = True,
    handle: str | None = "hermes",
    mentor_type: str | None = "scholar",
) -> MentorDirectoryEntry:
    """Insert a directory row directly, bypassing the services."""
    entry = MentorDirectoryEntry(
        mentor_id=mentor_id,
        handle=handle,
        mentor_type=mentor_type,
        bio="",
        active=active,
        capacity=capacity,
        active_students=active_students,
        available_slots=max(0, capacity - active_students),
        created_at=datetime.now(timezone.utc),
    )
    db.add(entry)
    db.commit()
    return entry


def get_entry(db, mentor_id: str = "mentor-1") -> MentorDirectoryEntry:
    db.expire_all()
    return db.query(MentorDirectoryEntry).filter(MentorDirectoryEntry.mentor_id == mentor_id).one()


def get_pairing(db, pairing_id: str) -> Pairing:
    db.expire_all()
    return db.query(Pairing).filter(Pairing.id == pairing_id).one()


def count_accepted(db, mentor_id: str = "mentor-1") -> int:
    db.expire_all()
    return db.query(Pairing).filter(
        Pairing.mentor_id == mentor_id, Pairing.status == PairingStatus.ACCEPTED.value
    ).count()


def auth_headers(uid: str, handle: str | None = None, mentor_status: str | None = None) -> dict:
    claims = {"sub": uid}
    if handle:
        claims["handle"] = handle
    if mentor_status:
        claims["mentor_status"] = mentor_status
    return {"Authorization": f"Bearer {create_access_token(claims)}"}


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
