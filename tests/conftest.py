"""Shared pytest fixtures for the operational journal tests."""

import asyncio
import os
import tempfile
from pathlib import Path

# Point the application engine at a throwaway SQLite file before any project import
_TEST_DB_DIR = tempfile.mkdtemp(prefix="operational-journal-")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{Path(_TEST_DB_DIR) / 'journal.db'}")
os.environ.setdefault("POD_ENV", "test")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from models import UserInfo
from storage import models  # noqa: F401  registers tables on Base.metadata
from storage.database import Base, engine
from routers.services.journal_service import JournalService
from routers.services.reference_service import ReferenceService
from utils import get_current_user


@pytest_asyncio.fixture
async def session():
    """An AsyncSession bound to a fresh in-memory database."""
    test_engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as db_session:
        yield db_session

    await test_engine.dispose()


@pytest.fixture
def journal_service(session):
    return JournalService(session)


@pytest.fixture
def reference_service(session):
    return ReferenceService(session)


async def _drop_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def current_user():
    return UserInfo(user_id="u-ivanov", name="Ivanov")


@pytest.fixture
def client(current_user):
    """TestClient with the signed-in user fixed to ``current_user``."""
    from main import app

    app.dependency_overrides[get_current_user] = lambda: current_user
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    asyncio.run(_drop_tables())


@pytest.fixture
def anonymous_client():
    """TestClient that goes through the real authentication dependency."""
    from main import app

    with TestClient(app) as test_client:
        yield test_client
    asyncio.run(_drop_tables())
