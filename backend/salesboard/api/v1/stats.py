# salesboard/api/v1/stats.py
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.api.deps.auth import get_current_user
from salesboard.api.deps.clock import get_today
from salesboard.core.commission import evaluate_commission
from salesboard.core.periods import MONTH_PATTERN, month_of
from salesboard.core.sales_totals import MonthlyData, history_stats, month_stats, monthly_totals
from salesboard.crud.sales_months import list_user_months
from salesboard.db.session import get_db
from salesboard.models.user import User
from salesboard.schemas.months import (
    ActiveMonthStatsOut,
    AllTimeStatsOut,
    BestDayOut,
    SellerStatsOut,
)

router = APIRouter(prefix="/me/stats", tags=["stats"])


@router.get("", response_model=SellerStatsOut)
async def get_my_stats(
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="Active month, defaults to the current one"),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
    today: date = Depends(get_today),
):
    """
    Personal statistics: the active month plus all-time figures.
    Read-only; unlike the month endpoints this never creates a bucket.
    """
    active = month or month_of(today)

    history = {b.month: b.to_monthly_data() for b in await list_user_months(db, user.id)}
    active_data = history.get(active, MonthlyData())

    stats = month_stats(active_data.daily_sales)
    totals = monthly_totals(active_data.daily_sales)
    commission = evaluate_commission(totals.total_individual, totals.total_store, active_data.store_goal)

    return SellerStatsOut(
        active_month=ActiveMonthStatsOut(
            month=active,
            sales_days=stats.sales_days,
            average_daily_sale=stats.average_daily_sale,
            best_day=BestDayOut.model_validate(stats.best_day) if stats.best_day else None,
            total_individual=totals.total_individual,
            commission_amount=commission.amount,
        ),
        all_time=AllTimeStatsOut.model_validate(history_stats(history)),
    )
