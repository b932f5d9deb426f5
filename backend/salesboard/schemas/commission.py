# salesboard/schemas/commission.py
from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from salesboard.core.commission import CommissionReason


class TierOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    min: Decimal
    max: Decimal
    rate: Decimal


class TierTableOut(BaseModel):
    tiers: List[TierOut]


class CommissionResultOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    amount: Decimal
    rate: Decimal
    eligible: bool
    reason: str
    reason_code: CommissionReason
    tier: Optional[TierOut] = None

    lost_amount: Decimal = Field(
        description=(
            "Informational only: commission forfeited because the store missed its goal. "
            "Never included in amount."
        ),
    )
    store_performance: Optional[Decimal] = None


class TierInsightsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    current_tier: Optional[TierOut] = None
    is_on_highest_tier: bool
    next_tier: Optional[TierOut] = None
    amount_to_next_tier: Decimal


class EvaluateRequest(BaseModel):
    total_individual: Decimal = Field(..., ge=0, allow_inf_nan=False)
    total_store: Decimal = Field(..., ge=0, allow_inf_nan=False)
    store_goal: Decimal = Field(..., ge=0, allow_inf_nan=False)


class EvaluateResponse(BaseModel):
    commission: CommissionResultOut
    insights: TierInsightsOut
