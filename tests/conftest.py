"""Pytest configuration and shared fixtures for all tests."""

import os
import sys
from pathlib import Path

# Minimal environment for tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENCRYPTION_SECRET", "test_encryption_secret_for_testing_only_000")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FILE", "")

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from reward_vault.config.database import create_session_maker
from reward_vault.config.settings import settings
from reward_vault.models import Base, RewardCategory, Submission
from reward_vault.services.reward_distribution_service import RewardDistributionService
from reward_vault.utils.encryption import SecretCipher


@pytest.fixture
def mock_session():
    """Mock AsyncSession for tests without a database."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    session.delete = MagicMock()
    session.refresh = AsyncMock()
    return session


@pytest.fixture(scope="session")
def cipher() -> SecretCipher:
    """Cipher with the test secret (key derivation runs once per test run)."""
    return SecretCipher(settings.encryption_secret, settings.encryption_salt)


@pytest_asyncio.fixture
async def engine(tmp_path):
    """
    Async engine on a temporary SQLite file.

    Transactions start with BEGIN IMMEDIATE so concurrent writers
    serialize on the database lock, and SAVEPOINT works under pysqlite.
    """
    db_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'reward_vault.db'}",
        poolclass=NullPool,
        connect_args={"timeout": 30},
    )

    @event.listens_for(db_engine.sync_engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(db_engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield db_engine

    await db_engine.dispose()


@pytest.fixture
def session_maker(engine) -> async_sessionmaker:
    """Session factory bound to the test engine."""
    return create_session_maker(engine)


@pytest_asyncio.fixture
async def session(session_maker):
    """One session shared by a test."""
    async with session_maker() as db_session:
        yield db_session


@pytest.fixture
def service(session, cipher) -> RewardDistributionService:
    """Distribution service on the shared session with fast audit retries."""
    return RewardDistributionService(session, cipher, audit_retry_delay=0)


@pytest.fixture
def make_submission(session):
    """Factory for committed submissions; returns the new ID."""

    async def _make(selected_category: RewardCategory | None = None, email: str = "winner@example.com") -> int:
        submission = Submission(email=email, selected_category=selected_category)
        session.add(submission)
        await session.flush()
        submission_id = submission.id
        await session.commit()
        return submission_id

    return _make


def account_data(**overrides: Any) -> dict[str, Any]:
    """Valid raw input for a new reward account."""
    data = {
        "service_name": "Netflix",
        "account_type": "Premium",
        "category": RewardCategory.STREAMING_SERVICE,
        "credentials": "user@example.com:s3cret!",
        "created_by": 1,
        "subscription_duration": "12 months",
        "description": "Annual premium plan",
    }
    data.update(overrides)
    return data


@pytest.fixture
def valid_account_data():
    """Factory for valid account input."""
    return account_data
