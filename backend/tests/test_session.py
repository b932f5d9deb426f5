# tests/test_session.py
from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.db.session import AsyncSessionLocal, get_db


def test_session_factory_keeps_rows_loaded_after_commit():
    assert AsyncSessionLocal.kw["expire_on_commit"] is False
    assert AsyncSessionLocal.kw["autoflush"] is False


@pytest.mark.asyncio
async def test_get_db_yields_one_session_per_request():
    first = get_db()
    second = get_db()

    s1 = await first.__anext__()
    s2 = await second.__anext__()
    assert isinstance(s1, AsyncSession)
    assert s1 is not s2

    await first.aclose()
    await second.aclose()
