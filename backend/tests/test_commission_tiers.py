# tests/test_commission_tiers.py
from __future__ import annotations

from decimal import Decimal

import pytest

from salesboard.core.commission_tiers import (
    COMMISSION_TIERS,
    CommissionTier,
    TierTable,
    TierTableError,
    build_tier_table,
)


def test_reference_table_shape():
    assert len(COMMISSION_TIERS) == 15
    assert COMMISSION_TIERS.lowest.min == Decimal("50000.01")
    assert COMMISSION_TIERS.highest.max == Decimal("200000")
    assert COMMISSION_TIERS.lowest.rate == Decimal("0.0060")
    assert COMMISSION_TIERS.highest.rate == Decimal("0.0130")


def test_reference_table_rates_step_by_five_basis_points():
    rates = [t.rate for t in COMMISSION_TIERS]
    steps = {b - a for a, b in zip(rates, rates[1:])}
    assert steps == {Decimal("0.0005")}


@pytest.mark.parametrize(
    "amount, expected_min",
    [
        ("50000.01", "50000.01"),
        ("60000", "50000.01"),
        ("60000.01", "60000.01"),
        ("75000", "70000.01"),
        ("100000", "90000.01"),
        ("200000", "190000.01"),
    ],
)
def test_find_respects_inclusive_bounds(amount, expected_min):
    tier = COMMISSION_TIERS.find(Decimal(amount))
    assert tier is not None
    assert tier.min == Decimal(expected_min)


@pytest.mark.parametrize("amount", ["0", "50000", "200000.01", "300000"])
def test_find_outside_table_returns_none(amount):
    assert COMMISSION_TIERS.find(Decimal(amount)) is None


def test_find_quantizes_sub_cent_amounts():
    # 60000.004 rounds to 60000.00, 60000.005 to 60000.01
    assert COMMISSION_TIERS.find(Decimal("60000.004")).min == Decimal("50000.01")
    assert COMMISSION_TIERS.find(Decimal("60000.005")).min == Decimal("60000.01")


def test_every_cent_maps_to_at_most_one_tier():
    for cents in range(4_999_000, 20_001_000, 997):
        amount = Decimal(cents) / 100
        matches = [t for t in COMMISSION_TIERS if t.contains(amount)]
        assert len(matches) <= 1
        assert (COMMISSION_TIERS.find(amount) is not None) == (len(matches) == 1)


def test_next_after():
    first = COMMISSION_TIERS.lowest
    assert COMMISSION_TIERS.next_after(first) == COMMISSION_TIERS[1]
    assert COMMISSION_TIERS.next_after(COMMISSION_TIERS.highest) is None


def test_gap_between_tiers_is_rejected():
    with pytest.raises(TierTableError):
        build_tier_table([("0.01", "100", "0.01"), ("100.02", "200", "0.02")])


def test_overlap_between_tiers_is_rejected():
    with pytest.raises(TierTableError):
        build_tier_table([("0.01", "100", "0.01"), ("100", "200", "0.02")])


def test_inverted_tier_is_rejected():
    with pytest.raises(TierTableError):
        build_tier_table([("200", "100", "0.01")])


def test_negative_rate_is_rejected():
    with pytest.raises(TierTableError):
        build_tier_table([("0.01", "100", "-0.01")])


def test_empty_table_is_rejected():
    with pytest.raises(TierTableError):
        TierTable([])


def test_tier_table_error_is_value_error():
    assert issubclass(TierTableError, ValueError)


def test_custom_table_lookup():
    table = TierTable(
        [
            CommissionTier(min=Decimal("0.01"), max=Decimal("10"), rate=Decimal("0.1")),
            CommissionTier(min=Decimal("10.01"), max=Decimal("20"), rate=Decimal("0.2")),
        ]
    )
    assert table.find(10).rate == Decimal("0.1")
    assert table.find("10.01").rate == Decimal("0.2")
    assert table.find(20.5) is None
