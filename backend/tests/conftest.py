"""
Test configuration and fixtures for the Placement Tracker.

Provides shared fixtures for unit and integration tests:
- FastAPI app/client with the database session replaced by a mock
- Signed bearer tokens for each role
- An in-memory SQLite database for service tests that need real
  unique constraints and rollback
"""

import time
from datetime import datetime, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from placement.config.settings import get_settings
from placement.domain.models import DriveStatus
from placement.infrastructure.db import models  # noqa: F401
from placement.infrastructure.db.database import get_session
from placement.infrastructure.db.models import CandidateCreate, DriveCreate
from placement.infrastructure.db.repositories import (
    CandidateRepository,
    DriveRepository,
)


# =============================================================================
# App Fixtures
# =============================================================================

@pytest.fixture
def app():
    """Get the FastAPI application."""
    from placement.main import app
    return app


@pytest.fixture
def mock_session():
    """Mock AsyncSession handed to routes instead of a real one."""
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    return session


@pytest.fixture
def client(app, mock_session):
    """Synchronous test client with the database session mocked out."""

    async def _override_session():
        yield mock_session

    app.dependency_overrides[get_session] = _override_session
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


# =============================================================================
# Auth Fixtures
# =============================================================================

def make_token(role: str, sub: str = None, candidate_id=None, expires_in: int = 3600,
               secret: str = None) -> str:
    """Sign a token the way the identity service does."""
    settings = get_settings()
    payload = {
        "sub": sub or str(uuid4()),
        "role": role,
        "exp": int(time.time()) + expires_in,
    }
    if candidate_id is not None:
        payload["candidate_id"] = str(candidate_id)
    return jwt.encode(
        payload,
        secret or settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


@pytest.fixture
def token_factory():
    """Expose make_token to tests."""
    return make_token


@pytest.fixture
def student_candidate_id():
    return uuid4()


@pytest.fixture
def student_headers(student_candidate_id):
    token = make_token("STUDENT", candidate_id=student_candidate_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {make_token('ADMIN')}"}


# =============================================================================
# Database Fixtures (in-memory SQLite)
# =============================================================================

@pytest.fixture
async def engine():
    """Fresh in-memory database per test, schema created from the models."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    """Session configured like the application's session factory."""
    async with AsyncSession(engine, expire_on_commit=False, autoflush=False) as session:
        yield session


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest.fixture
def make_candidate(session):
    """Factory inserting a candidate; keyword arguments override defaults."""

    async def _make(**overrides):
        data = {
            "first_name": "Asha",
            "last_name": "Rao",
            "email": f"{uuid4().hex[:8]}@college.edu",
            "enrollment_number": f"EN{uuid4().hex[:10].upper()}",
            "branch": "CSE",
            "cgpa": 8.0,
            "tenth_percent": 85.0,
            "twelfth_percent": 80.0,
            "has_active_backlog": False,
        }
        data.update(overrides)
        return await CandidateRepository(session).create(CandidateCreate(**data))

    return _make


@pytest.fixture
def make_drive(session):
    """Factory inserting an ACTIVE drive; keyword arguments override defaults."""

    async def _make(**overrides):
        data = {
            "company_name": "Acme Systems",
            "job_role": "Software Engineer",
            "ctc": 12.0,
            "min_cgpa": 7.0,
            "min_percent": 60.0,
            "allowed_branches": "CSE,IT",
            "status": DriveStatus.ACTIVE,
        }
        data.update(overrides)
        return await DriveRepository(session).create(DriveCreate(**data))

    return _make


@pytest.fixture
def scheduled_at():
    return datetime(2026, 11, 2, 10, 0, tzinfo=timezone.utc)
