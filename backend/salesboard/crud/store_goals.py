# salesboard/crud/store_goals.py
from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.core.money import MONEY_ZERO
from salesboard.models.store_goal import StoreGoal


async def get_store_goal(db: AsyncSession, month: str) -> Optional[StoreGoal]:
    res = await db.execute(select(StoreGoal).where(StoreGoal.month == month))
    return res.scalar_one_or_none()


async def get_store_goal_amount(db: AsyncSession, month: str) -> Decimal:
    goal = await get_store_goal(db, month)
    return goal.goal if goal is not None else MONEY_ZERO


async def set_store_goal(
    db: AsyncSession,
    month: str,
    goal: Decimal,
    set_by_user_id: Optional[uuid.UUID],
) -> StoreGoal:
    """
    Upsert; last write wins. Caller commits.
    """
    row = await get_store_goal(db, month)
    if row is None:
        row = StoreGoal(month=month, goal=goal, set_by_user_id=set_by_user_id)
        db.add(row)
    else:
        row.goal = goal
        row.set_by_user_id = set_by_user_id
    await db.flush()
    return row


async def list_store_goals(db: AsyncSession) -> dict[str, Decimal]:
    rows = (await db.execute(select(StoreGoal))).scalars().all()
    return {r.month: r.goal for r in rows}
