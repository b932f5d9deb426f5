# salesboard/api/v1/store.py
from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.api.deps.auth import get_current_user
from salesboard.api.deps.clock import get_today
from salesboard.api.deps.months import month_path
from salesboard.core.commission import store_goal_percentage
from salesboard.core.money import MONEY_ZERO, to_money
from salesboard.core.periods import actual_daily_average, remaining_business_days, required_daily_average
from salesboard.core.sales_totals import leaderboard, store_sales_by_day, store_statistics
from salesboard.crud.sales_months import load_store_months
from salesboard.crud.store_goals import get_store_goal_amount, list_store_goals, set_store_goal
from salesboard.db.session import get_db
from salesboard.models.user import User
from salesboard.schemas.months import BestMonthOut
from salesboard.schemas.store import (
    LeaderboardEntryOut,
    StoreDashboardOut,
    StoreGoalOut,
    StoreGoalUpdate,
    StoreMonthOut,
    StoreStatsOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/store", tags=["store"])


@router.get("/months/{month}/goal", response_model=StoreGoalOut)
async def get_goal(
    month: str = Depends(month_path),
    db: AsyncSession = Depends(get_db),
    _: User = Depends(get_current_user),
):
    return StoreGoalOut(month=month, goal=await get_store_goal_amount(db, month))


@router.put("/months/{month}/goal", response_model=StoreGoalOut)
async def put_goal(
    payload: StoreGoalUpdate,
    month: str = Depends(month_path),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    row = await set_store_goal(db, month, payload.goal, set_by_user_id=user.id)
    await db.commit()
    logger.info("Store goal for %s set to %s by user %s", month, payload.goal, user.id)
    return StoreGoalOut(month=row.month, goal=payload.goal)


@router.get("/months/{month}/dashboard", response_model=StoreDashboardOut)
async def get_dashboard(
    month: str = Depends(month_path),
    db: AsyncSession = Depends(get_db),
    _: User = Depends(get_current_user),
    today: date = Depends(get_today),
):
    """
    Manager view of one month: goal progress, daily pace and leaderboard.
    Store sales are de-duplicated per day across sellers.
    """
    sellers = (await load_store_months(db, month)).get(month, [])
    goal = await get_store_goal_amount(db, month)

    by_day = store_sales_by_day(r for s in sellers for r in s.records)
    total_store = to_money(sum(by_day.values(), MONEY_ZERO))
    days_with_sales = len(by_day)
    remaining = remaining_business_days(month, today)

    return StoreDashboardOut(
        month=month,
        goal=goal,
        total_store_sales=total_store,
        goal_percentage=store_goal_percentage(total_store, goal),
        days_with_sales=days_with_sales,
        remaining_business_days=remaining,
        required_daily_average=required_daily_average(goal, total_store, remaining),
        actual_daily_average=actual_daily_average(total_store, days_with_sales),
        leaderboard=[
            LeaderboardEntryOut(seller_id=str(e.seller_id), name=e.name, total=e.total)
            for e in leaderboard(sellers)
        ],
    )


@router.get("/stats", response_model=StoreStatsOut)
async def get_store_stats(
    db: AsyncSession = Depends(get_db),
    _: User = Depends(get_current_user),
):
    stats = store_statistics(await load_store_months(db), await list_store_goals(db))
    return StoreStatsOut(
        months=[StoreMonthOut.model_validate(m) for m in stats.months],
        grand_total_store_sales=stats.grand_total_store_sales,
        grand_total_individual_sales=stats.grand_total_individual_sales,
        grand_total_commission=stats.grand_total_commission,
        best_month=BestMonthOut.model_validate(stats.best_month) if stats.best_month else None,
    )
