# salesboard/api/v1/months.py
from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.api.deps.auth import get_current_user
from salesboard.api.deps.clock import get_today
from salesboard.api.deps.months import get_my_month
from salesboard.core.commission import (
    contribution_percentage,
    evaluate_commission,
    store_goal_percentage,
    tier_insights,
)
from salesboard.core.periods import is_in_month, remaining_business_days, required_daily_average
from salesboard.core.sales_totals import monthly_totals
from salesboard.crud.sales_months import get_month, get_sale, list_user_months
from salesboard.db.session import get_db
from salesboard.models.daily_sale import DailySale
from salesboard.models.sales_month import SalesMonth
from salesboard.models.user import User
from salesboard.schemas.commission import CommissionResultOut, TierInsightsOut
from salesboard.schemas.months import (
    DailySaleCreate,
    DailySaleOut,
    DailySaleUpdate,
    MonthGoalUpdate,
    MonthHistoryItem,
    MonthHistoryOut,
    MonthSummaryOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/me/months", tags=["months"])


def _sale_out(sale: DailySale) -> DailySaleOut:
    return DailySaleOut(
        id=sale.id,
        date=sale.sale_date,
        individual_sale=sale.individual_sale,
        store_sale=sale.store_sale,
    )


def _ensure_in_month(day: date, month: str) -> None:
    if not is_in_month(day, month):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": "SALE_DATE_OUTSIDE_MONTH",
                "message": f"Sale date {day.isoformat()} is outside {month}.",
                "month": month,
            },
        )


async def _reload(db: AsyncSession, bucket: SalesMonth) -> SalesMonth:
    return await get_month(db, bucket.user_id, bucket.month)


def _summary(bucket: SalesMonth, today: date) -> MonthSummaryOut:
    data = bucket.to_monthly_data()
    totals = monthly_totals(data.daily_sales)
    result = evaluate_commission(totals.total_individual, totals.total_store, data.store_goal)
    remaining = remaining_business_days(bucket.month, today)

    entries = sorted(bucket.daily_sales, key=lambda s: (s.sale_date, s.id), reverse=True)

    return MonthSummaryOut(
        month=bucket.month,
        store_goal=data.store_goal,
        total_individual=totals.total_individual,
        total_store=totals.total_store,
        commission=CommissionResultOut.model_validate(result),
        insights=TierInsightsOut.model_validate(tier_insights(totals.total_individual)),
        store_goal_percentage=store_goal_percentage(totals.total_store, data.store_goal),
        contribution_percentage=contribution_percentage(totals.total_individual, totals.total_store),
        remaining_business_days=remaining,
        required_daily_average=required_daily_average(data.store_goal, totals.total_store, remaining),
        entries=[_sale_out(s) for s in entries],
    )


@router.get("", response_model=MonthHistoryOut)
async def list_my_months(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Sales history: every month the caller has touched, newest first.
    """
    items: list[MonthHistoryItem] = []
    for bucket in await list_user_months(db, user.id):
        data = bucket.to_monthly_data()
        totals = monthly_totals(data.daily_sales)
        result = evaluate_commission(totals.total_individual, totals.total_store, data.store_goal)
        items.append(
            MonthHistoryItem(
                month=bucket.month,
                store_goal=data.store_goal,
                total_individual=totals.total_individual,
                total_store=totals.total_store,
                entries_count=len(data.daily_sales),
                commission=CommissionResultOut.model_validate(result),
            )
        )
    return MonthHistoryOut(items=items)


@router.get("/{month}", response_model=MonthSummaryOut)
async def get_month_summary(
    bucket: SalesMonth = Depends(get_my_month),
    today: date = Depends(get_today),
):
    return _summary(bucket, today)


@router.put("/{month}/goal", response_model=MonthSummaryOut)
async def set_month_goal(
    payload: MonthGoalUpdate,
    bucket: SalesMonth = Depends(get_my_month),
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
):
    bucket.store_goal = payload.store_goal
    await db.commit()
    logger.info("Store goal for %s set to %s by user %s", bucket.month, payload.store_goal, bucket.user_id)
    return _summary(await _reload(db, bucket), today)


@router.post("/{month}/sales", response_model=DailySaleOut, status_code=status.HTTP_201_CREATED)
async def add_sale(
    payload: DailySaleCreate,
    bucket: SalesMonth = Depends(get_my_month),
    db: AsyncSession = Depends(get_db),
):
    _ensure_in_month(payload.date, bucket.month)

    sale = DailySale(
        sales_month_id=bucket.id,
        sale_date=payload.date,
        individual_sale=payload.individual_sale,
        store_sale=payload.store_sale,
    )
    db.add(sale)
    await db.commit()
    await db.refresh(sale)

    logger.info("Sale %s added to %s for user %s", sale.id, bucket.month, bucket.user_id)
    return _sale_out(sale)


async def _get_sale_or_404(db: AsyncSession, bucket: SalesMonth, sale_id: int) -> DailySale:
    sale = await get_sale(db, bucket, sale_id)
    if sale is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sale not found")
    return sale


@router.patch("/{month}/sales/{sale_id}", response_model=DailySaleOut)
async def update_sale(
    sale_id: int,
    payload: DailySaleUpdate,
    bucket: SalesMonth = Depends(get_my_month),
    db: AsyncSession = Depends(get_db),
):
    data = payload.model_dump(exclude_unset=True)
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields provided to update.")
    for field in ("individual_sale", "store_sale"):
        if field in data and data[field] is None:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=f"{field} cannot be null")

    sale = await _get_sale_or_404(db, bucket, sale_id)

    if data.get("date") is not None:
        _ensure_in_month(data["date"], bucket.month)
        sale.sale_date = data["date"]
    if "individual_sale" in data:
        sale.individual_sale = data["individual_sale"]
    if "store_sale" in data:
        sale.store_sale = data["store_sale"]

    await db.commit()
    await db.refresh(sale)

    logger.info("Sale %s in %s updated by user %s", sale.id, bucket.month, bucket.user_id)
    return _sale_out(sale)


@router.delete("/{month}/sales/{sale_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sale(
    sale_id: int,
    bucket: SalesMonth = Depends(get_my_month),
    db: AsyncSession = Depends(get_db),
):
    sale = await _get_sale_or_404(db, bucket, sale_id)
    await db.delete(sale)
    await db.commit()

    logger.info("Sale %s in %s deleted by user %s", sale_id, bucket.month, bucket.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
