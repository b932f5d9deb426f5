# salesboard/crud/sales_months.py
from __future__ import annotations

import uuid
from collections import defaultdict
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.core.sales_totals import SellerMonth
from salesboard.models.daily_sale import DailySale
from salesboard.models.sales_month import SalesMonth
from salesboard.models.user import User


async def get_month(db: AsyncSession, user_id: uuid.UUID, month: str) -> Optional[SalesMonth]:
    """
    Loads a seller's bucket with its entries. populate_existing makes sure a
    bucket already in the identity map picks up entries written since.
    """
    stmt = (
        select(SalesMonth)
        .where(SalesMonth.user_id == user_id)
        .where(SalesMonth.month == month)
        .execution_options(populate_existing=True)
    )
    return (await db.execute(stmt)).scalar_one_or_none()


async def get_or_create_month(db: AsyncSession, user_id: uuid.UUID, month: str) -> SalesMonth:
    """
    Buckets are created lazily, the first time a seller touches a month.
    Caller commits.
    """
    bucket = await get_month(db, user_id, month)
    if bucket is not None:
        return bucket

    bucket = SalesMonth(user_id=user_id, month=month)
    db.add(bucket)
    await db.flush()
    # reload so daily_sales is an initialised (empty) collection
    return await get_month(db, user_id, month)


async def list_user_months(db: AsyncSession, user_id: uuid.UUID) -> list[SalesMonth]:
    stmt = (
        select(SalesMonth)
        .where(SalesMonth.user_id == user_id)
        .order_by(SalesMonth.month.desc())
        .execution_options(populate_existing=True)
    )
    return list((await db.execute(stmt)).scalars().all())


async def get_sale(db: AsyncSession, bucket: SalesMonth, sale_id: int) -> Optional[DailySale]:
    stmt = (
        select(DailySale)
        .where(DailySale.id == sale_id)
        .where(DailySale.sales_month_id == bucket.id)
    )
    return (await db.execute(stmt)).scalar_one_or_none()


async def load_store_months(db: AsyncSession, month: Optional[str] = None) -> dict[str, list[SellerMonth]]:
    """
    Every seller bucket (optionally only one month), grouped by month as
    core SellerMonth values.
    """
    stmt = (
        select(SalesMonth, User)
        .join(User, User.id == SalesMonth.user_id)
        .order_by(SalesMonth.month, User.email)
        .execution_options(populate_existing=True)
    )
    if month is not None:
        stmt = stmt.where(SalesMonth.month == month)

    grouped: dict[str, list[SellerMonth]] = defaultdict(list)
    for bucket, user in (await db.execute(stmt)).all():
        grouped[bucket.month].append(
            SellerMonth(
                seller_id=user.id,
                name=user.display_name,
                records=bucket.to_monthly_data().daily_sales,
            )
        )
    return dict(grouped)
