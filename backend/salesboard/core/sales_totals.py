# salesboard/core/sales_totals.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Hashable, Iterable, Mapping, Optional, Sequence

from salesboard.core.commission import evaluate_commission
from salesboard.core.money import MONEY_ZERO, to_money


@dataclass(frozen=True)
class DailySaleRecord:
    id: int
    date: date
    individual_sale: Decimal
    store_sale: Decimal


@dataclass(frozen=True)
class MonthlyData:
    store_goal: Decimal = MONEY_ZERO
    daily_sales: tuple[DailySaleRecord, ...] = ()


@dataclass(frozen=True)
class MonthlyTotals:
    total_individual: Decimal = MONEY_ZERO
    total_store: Decimal = MONEY_ZERO


def monthly_totals(records: Iterable[DailySaleRecord]) -> MonthlyTotals:
    total_individual = MONEY_ZERO
    total_store = MONEY_ZERO
    for r in records:
        total_individual += r.individual_sale
        total_store += r.store_sale
    return MonthlyTotals(total_individual=to_money(total_individual), total_store=to_money(total_store))


# -----------------------------
# Seller statistics
# -----------------------------
@dataclass(frozen=True)
class BestDay:
    date: date
    sales: Decimal


@dataclass(frozen=True)
class MonthStats:
    sales_days: int
    average_daily_sale: Decimal
    best_day: Optional[BestDay]


def month_stats(records: Sequence[DailySaleRecord]) -> MonthStats:
    """
    sales_days counts entries, not distinct dates.
    """
    totals = monthly_totals(records)
    sales_days = len(records)
    average = to_money(totals.total_individual / sales_days) if sales_days else MONEY_ZERO

    best: Optional[BestDay] = None
    for r in records:
        if r.individual_sale > (best.sales if best else MONEY_ZERO):
            best = BestDay(date=r.date, sales=to_money(r.individual_sale))

    return MonthStats(sales_days=sales_days, average_daily_sale=average, best_day=best)


@dataclass(frozen=True)
class BestMonth:
    month: str
    sales: Decimal


@dataclass(frozen=True)
class HistoryStats:
    total_sales: Decimal
    total_commission: Decimal
    average_monthly_sales: Decimal
    best_month: Optional[BestMonth]
    total_months: int
    total_entries: int


def history_stats(history: Mapping[str, MonthlyData]) -> HistoryStats:
    """
    All-time figures for one seller. Each month is evaluated against its own
    goal; months are visited oldest first so ties keep the earlier month.
    """
    total_sales = MONEY_ZERO
    total_commission = MONEY_ZERO
    total_entries = 0
    best: Optional[BestMonth] = None

    for month in sorted(history):
        data = history[month]
        total_entries += len(data.daily_sales)

        totals = monthly_totals(data.daily_sales)
        result = evaluate_commission(totals.total_individual, totals.total_store, data.store_goal)

        total_sales += totals.total_individual
        total_commission += result.amount

        if totals.total_individual > (best.sales if best else MONEY_ZERO):
            best = BestMonth(month=month, sales=totals.total_individual)

    total_months = len(history)
    average = to_money(total_sales / total_months) if total_months else MONEY_ZERO

    return HistoryStats(
        total_sales=total_sales,
        total_commission=total_commission,
        average_monthly_sales=average,
        best_month=best,
        total_months=total_months,
        total_entries=total_entries,
    )


# -----------------------------
# Store-wide reductions
# -----------------------------
def store_sales_by_day(records: Iterable[DailySaleRecord]) -> dict[date, Decimal]:
    """
    Several sellers report the same store figure for a day; keep the maximum
    per date so the store total is not counted once per seller.
    """
    by_day: dict[date, Decimal] = {}
    for r in records:
        by_day[r.date] = max(by_day.get(r.date, MONEY_ZERO), r.store_sale)
    return by_day


def total_store_sales(records: Iterable[DailySaleRecord]) -> Decimal:
    return to_money(sum(store_sales_by_day(records).values(), MONEY_ZERO))


@dataclass(frozen=True)
class SellerMonth:
    seller_id: Hashable
    name: str
    records: tuple[DailySaleRecord, ...] = ()


@dataclass(frozen=True)
class LeaderboardEntry:
    seller_id: Hashable
    name: str
    total: Decimal


def leaderboard(sellers: Iterable[SellerMonth]) -> list[LeaderboardEntry]:
    """
    Sellers with at least one entry, highest individual total first.
    """
    entries = [
        LeaderboardEntry(seller_id=s.seller_id, name=s.name, total=monthly_totals(s.records).total_individual)
        for s in sellers
        if s.records
    ]
    return sorted(entries, key=lambda e: (-e.total, e.name))


@dataclass(frozen=True)
class StoreMonthAggregate:
    month: str
    total_store: Decimal = MONEY_ZERO
    total_individual: Decimal = MONEY_ZERO
    total_commission: Decimal = MONEY_ZERO
    active_sellers: int = 0


@dataclass(frozen=True)
class StoreStatistics:
    months: list[StoreMonthAggregate] = field(default_factory=list)
    grand_total_store_sales: Decimal = MONEY_ZERO
    grand_total_individual_sales: Decimal = MONEY_ZERO
    grand_total_commission: Decimal = MONEY_ZERO
    best_month: Optional[BestMonth] = None


def store_month_aggregate(month: str, sellers: Sequence[SellerMonth], store_goal) -> StoreMonthAggregate:
    """
    Every active seller is evaluated against the de-duplicated store total
    and the month's store goal (0 when unset).
    """
    store_total = total_store_sales(r for s in sellers for r in s.records)

    total_individual = MONEY_ZERO
    total_commission = MONEY_ZERO
    active = 0
    for s in sellers:
        if not s.records:
            continue
        individual = monthly_totals(s.records).total_individual
        total_individual += individual
        total_commission += evaluate_commission(individual, store_total, store_goal).amount
        active += 1

    return StoreMonthAggregate(
        month=month,
        total_store=store_total,
        total_individual=total_individual,
        total_commission=total_commission,
        active_sellers=active,
    )


def store_statistics(
    months: Mapping[str, Sequence[SellerMonth]],
    goals: Mapping[str, Decimal],
) -> StoreStatistics:
    """
    Per-month aggregates (newest first), grand totals and the best month by
    store total.
    """
    aggregates = [
        store_month_aggregate(month, months[month], goals.get(month, MONEY_ZERO))
        for month in sorted(months)
    ]

    best: Optional[BestMonth] = None
    for agg in aggregates:
        if agg.total_store > (best.sales if best else MONEY_ZERO):
            best = BestMonth(month=agg.month, sales=agg.total_store)

    return StoreStatistics(
        months=list(reversed(aggregates)),
        grand_total_store_sales=sum((a.total_store for a in aggregates), MONEY_ZERO),
        grand_total_individual_sales=sum((a.total_individual for a in aggregates), MONEY_ZERO),
        grand_total_commission=sum((a.total_commission for a in aggregates), MONEY_ZERO),
        best_month=best,
    )
