from __future__ import annotations

import os
from datetime import date

# Settings are read at import time; pin a non-production environment so the
# login code is echoed back by /auth/request-code.
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from salesboard.api.deps.clock import get_today
from salesboard.db.session import get_db

# Ensure Base + models are registered before create_all
from salesboard.db.base import Base
import salesboard.models  # noqa: F401

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL_ASYNC", "sqlite+aiosqlite://")

# Monday, mid-month: 13 business days left in July 2024
TODAY = date(2024, 7, 15)


# ---------------------------------------------------------
# Engine: fresh in-memory schema per test
# ---------------------------------------------------------
@pytest_asyncio.fixture()
async def engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture()
def sessionmaker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# ---------------------------------------------------------
# DB session for assertions / setup
# ---------------------------------------------------------
@pytest_asyncio.fixture()
async def db(sessionmaker):
    async with sessionmaker() as session:
        yield session
        await session.rollback()


# ---------------------------------------------------------
# FastAPI app + dependency overrides
# ---------------------------------------------------------
@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def app(sessionmaker, today):
    from salesboard.main import app as fastapi_app

    async def _override_get_db():
        async with sessionmaker() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = _override_get_db
    fastapi_app.dependency_overrides[get_today] = lambda: today
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


# ---------------------------------------------------------
# HTTP client
# ---------------------------------------------------------
@pytest_asyncio.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def login(client):
    """
    Runs the magic-code flow and returns bearer headers for the email.
    """

    async def _login(email: str) -> dict[str, str]:
        r = await client.post("/api/v1/auth/request-code", json={"email": email})
        assert r.status_code == 200
        code = r.json()["code"]

        r = await client.post("/api/v1/auth/verify-code", json={"email": email, "code": code})
        assert r.status_code == 200
        return {"Authorization": f"Bearer {r.json()['access_token']}"}

    return _login
