from __future__ import annotations

from fastapi import Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.core.periods import MONTH_PATTERN
from salesboard.crud.sales_months import get_or_create_month
from salesboard.db.session import get_db
from salesboard.api.deps.auth import get_current_user
from salesboard.models.sales_month import SalesMonth
from salesboard.models.user import User


def month_path(
    month: str = Path(..., pattern=MONTH_PATTERN, description="Month identifier, YYYY-MM"),
) -> str:
    return month


async def get_my_month(
    month: str = Depends(month_path),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
) -> SalesMonth:
    """
    The caller's bucket for the month in the path, created on first touch.
    """
    bucket = await get_or_create_month(db, user.id, month)
    await db.commit()
    return bucket
