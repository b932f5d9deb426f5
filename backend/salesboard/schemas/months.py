# salesboard/schemas/months.py
from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from salesboard.schemas.commission import CommissionResultOut, TierInsightsOut


class DailySaleCreate(BaseModel):
    date: dt.date
    individual_sale: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)
    store_sale: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)


class DailySaleUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    date: Optional[dt.date] = None
    individual_sale: Optional[Decimal] = Field(None, gt=0, max_digits=14, decimal_places=2)
    store_sale: Optional[Decimal] = Field(None, gt=0, max_digits=14, decimal_places=2)


class DailySaleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: dt.date
    individual_sale: Decimal
    store_sale: Decimal


class MonthGoalUpdate(BaseModel):
    store_goal: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)


class MonthSummaryOut(BaseModel):
    month: str
    store_goal: Decimal

    total_individual: Decimal
    total_store: Decimal

    commission: CommissionResultOut
    insights: TierInsightsOut

    store_goal_percentage: Decimal
    contribution_percentage: Decimal

    remaining_business_days: int
    required_daily_average: Decimal

    # newest first
    entries: List[DailySaleOut]


class MonthHistoryItem(BaseModel):
    month: str
    store_goal: Decimal
    total_individual: Decimal
    total_store: Decimal
    entries_count: int
    commission: CommissionResultOut


class MonthHistoryOut(BaseModel):
    items: List[MonthHistoryItem]


class BestDayOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: dt.date
    sales: Decimal


class BestMonthOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month: str
    sales: Decimal


class ActiveMonthStatsOut(BaseModel):
    month: str
    sales_days: int
    average_daily_sale: Decimal
    best_day: Optional[BestDayOut] = None
    total_individual: Decimal
    commission_amount: Decimal


class AllTimeStatsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_sales: Decimal
    total_commission: Decimal
    average_monthly_sales: Decimal
    best_month: Optional[BestMonthOut] = None
    total_months: int
    total_entries: int


class SellerStatsOut(BaseModel):
    active_month: ActiveMonthStatsOut
    all_time: AllTimeStatsOut
