# salesboard/api/v1/commission.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from salesboard.api.deps.auth import get_current_user
from salesboard.core.commission import evaluate_commission, tier_insights
from salesboard.core.commission_tiers import COMMISSION_TIERS
from salesboard.schemas.commission import (
    CommissionResultOut,
    EvaluateRequest,
    EvaluateResponse,
    TierInsightsOut,
    TierOut,
    TierTableOut,
)

router = APIRouter(prefix="/commission", tags=["commission"], dependencies=[Depends(get_current_user)])


@router.get("/tiers", response_model=TierTableOut)
async def list_tiers():
    return TierTableOut(tiers=[TierOut.model_validate(t) for t in COMMISSION_TIERS])


@router.post("/evaluate", response_model=EvaluateResponse)
async def evaluate(payload: EvaluateRequest):
    """
    Stateless what-if: evaluates arbitrary totals against the tier table.
    """
    try:
        result = evaluate_commission(payload.total_individual, payload.total_store, payload.store_goal)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    return EvaluateResponse(
        commission=CommissionResultOut.model_validate(result),
        insights=TierInsightsOut.model_validate(tier_insights(payload.total_individual)),
    )
