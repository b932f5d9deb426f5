# salesboard/schemas/store.py
from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from salesboard.schemas.months import BestMonthOut


class StoreGoalUpdate(BaseModel):
    goal: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)


class StoreGoalOut(BaseModel):
    month: str
    goal: Decimal


class LeaderboardEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    seller_id: str
    name: str
    total: Decimal


class StoreDashboardOut(BaseModel):
    month: str
    goal: Decimal

    total_store_sales: Decimal
    goal_percentage: Decimal
    days_with_sales: int

    remaining_business_days: int
    required_daily_average: Decimal
    actual_daily_average: Decimal

    leaderboard: List[LeaderboardEntryOut]


class StoreMonthOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month: str
    total_store: Decimal
    total_individual: Decimal
    total_commission: Decimal
    active_sellers: int


class StoreStatsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    months: List[StoreMonthOut]
    grand_total_store_sales: Decimal
    grand_total_individual_sales: Decimal
    grand_total_commission: Decimal
    best_month: Optional[BestMonthOut] = None
