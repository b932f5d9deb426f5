# salesboard/core/commission.py
from __future__ import annotations

import enum
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from salesboard.core.commission_tiers import COMMISSION_TIERS, CommissionTier, TierTable
from salesboard.core.money import MONEY_ZERO, to_decimal, to_money

# Store-performance gates. Fixed business policy, not configuration.
FULL_COMMISSION_THRESHOLD = Decimal("1.0")
MINIMUM_COMMISSION_THRESHOLD = Decimal("0.85")
PARTIAL_COMMISSION_MULTIPLIER = Decimal("0.70")

RATE_ZERO = Decimal("0")


class CommissionReason(str, enum.Enum):
    GOAL_NOT_SET = "GOAL_NOT_SET"
    NO_INDIVIDUAL_SALES = "NO_INDIVIDUAL_SALES"
    BELOW_FIRST_TIER = "BELOW_FIRST_TIER"
    EXCEEDS_MAX_TIER = "EXCEEDS_MAX_TIER"
    GOAL_MET = "GOAL_MET"
    MINIMUM_GOAL_MET = "MINIMUM_GOAL_MET"
    BELOW_MINIMUM_GOAL = "BELOW_MINIMUM_GOAL"


@dataclass(frozen=True)
class CommissionResult:
    """
    Derived, never stored. Recomputed from a month's totals on every read.

    lost_amount is informational only: the commission forfeited because the
    store missed its goal. It is never part of amount and must not be paid.
    """

    amount: Decimal
    rate: Decimal
    eligible: bool
    reason: str
    reason_code: CommissionReason
    tier: Optional[CommissionTier] = None
    lost_amount: Decimal = MONEY_ZERO
    store_performance: Optional[Decimal] = None


@dataclass(frozen=True)
class TierInsights:
    current_tier: Optional[CommissionTier]
    is_on_highest_tier: bool
    next_tier: Optional[CommissionTier]
    amount_to_next_tier: Decimal


def _not_eligible(
    code: CommissionReason,
    reason: str,
    *,
    tier: Optional[CommissionTier] = None,
    lost_amount: Decimal = MONEY_ZERO,
    store_performance: Optional[Decimal] = None,
) -> CommissionResult:
    return CommissionResult(
        amount=MONEY_ZERO,
        rate=tier.rate if tier is not None else RATE_ZERO,
        eligible=False,
        reason=reason,
        reason_code=code,
        tier=tier,
        lost_amount=lost_amount,
        store_performance=store_performance,
    )


def _individual_total(value) -> Decimal:
    """
    Cent-quantized individual total. An infinite total is kept as is so it
    lands above the tier table like any other out-of-range amount.
    """
    amount = to_decimal(value)
    if amount.is_nan():
        raise ValueError("total_individual must be a number")
    if amount.is_infinite():
        return amount
    return to_money(amount)


def evaluate_commission(
    total_individual,
    total_store,
    store_goal,
    *,
    tiers: TierTable = COMMISSION_TIERS,
) -> CommissionResult:
    """
    Maps a month's totals to a payout decision.

    Commission is gated on the shared store goal:
      - store at or above 100% of goal: full commission
      - store at or above 85%: 70% of the commission, the rest is "lost"
      - below 85%: nothing, the whole commission is "lost"

    Business conditions (no goal, no sales, out-of-table totals) come back as
    non-eligible results. A negative store total raises ValueError, as does
    an infinite or NaN store total or goal.
    """
    individual = _individual_total(total_individual)
    store = to_money(total_store)
    goal = to_money(store_goal)

    if goal <= 0:
        return _not_eligible(CommissionReason.GOAL_NOT_SET, "The store goal has not been set.")

    if individual <= 0:
        return _not_eligible(CommissionReason.NO_INDIVIDUAL_SALES, "No individual sales recorded.")

    if store < 0:
        raise ValueError(f"total_store must be non-negative, got {store}")

    if individual > tiers.highest.max:
        return _not_eligible(
            CommissionReason.EXCEEDS_MAX_TIER,
            f"Your sales exceed the highest commission tier (up to {tiers.highest.max:,.2f}).",
        )

    tier = tiers.find(individual)
    if tier is None:
        return _not_eligible(
            CommissionReason.BELOW_FIRST_TIER,
            f"Your sales ({individual:,.2f}) have not reached the first commission tier.",
        )

    store_performance = store / goal
    # unrounded; only amounts handed back are quantized
    base_commission = individual * tier.rate

    if store_performance >= FULL_COMMISSION_THRESHOLD:
        return CommissionResult(
            amount=to_money(base_commission),
            rate=tier.rate,
            eligible=True,
            reason="Store goal met! You receive 100% of your commission.",
            reason_code=CommissionReason.GOAL_MET,
            tier=tier,
            lost_amount=MONEY_ZERO,
            store_performance=store_performance,
        )

    if store_performance >= MINIMUM_COMMISSION_THRESHOLD:
        amount = to_money(base_commission * PARTIAL_COMMISSION_MULTIPLIER)
        return CommissionResult(
            amount=amount,
            rate=tier.rate,
            eligible=True,
            reason="Minimum goal (85%) reached. You receive 70% of your commission.",
            reason_code=CommissionReason.MINIMUM_GOAL_MET,
            tier=tier,
            lost_amount=to_money(base_commission) - amount,
            store_performance=store_performance,
        )

    return _not_eligible(
        CommissionReason.BELOW_MINIMUM_GOAL,
        f"The store did not reach the 85% minimum goal ({store_performance * 100:.2f}%).",
        tier=tier,
        lost_amount=to_money(base_commission),
        store_performance=store_performance,
    )


def tier_insights(total_individual, *, tiers: TierTable = COMMISSION_TIERS) -> TierInsights:
    individual = _individual_total(total_individual)

    if individual > tiers.highest.max:
        return TierInsights(
            current_tier=None,
            is_on_highest_tier=True,
            next_tier=None,
            amount_to_next_tier=MONEY_ZERO,
        )

    if individual < tiers.lowest.min:
        return TierInsights(
            current_tier=None,
            is_on_highest_tier=False,
            next_tier=tiers.lowest,
            amount_to_next_tier=tiers.lowest.min - individual,
        )

    current = tiers.find(individual)
    # contiguous table + cent-quantized amount: always found here
    nxt = tiers.next_after(current)
    if nxt is None:
        return TierInsights(
            current_tier=current,
            is_on_highest_tier=True,
            next_tier=None,
            amount_to_next_tier=MONEY_ZERO,
        )

    return TierInsights(
        current_tier=current,
        is_on_highest_tier=False,
        next_tier=nxt,
        amount_to_next_tier=nxt.min - individual,
    )


def store_goal_percentage(total_store, store_goal) -> Decimal:
    goal = to_decimal(store_goal)
    if goal <= 0:
        return Decimal("0.00")
    return to_money(to_decimal(total_store) / goal * 100)


def contribution_percentage(total_individual, total_store) -> Decimal:
    store = to_decimal(total_store)
    if store <= 0:
        return Decimal("0.00")
    return to_money(to_decimal(total_individual) / store * 100)
