# ============================
# FILE: salesboard/core/commission_tiers.py
# Canonical commission tier table
# ============================
from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Iterator, Optional, Sequence

from salesboard.core.money import CENT, to_money


class TierTableError(ValueError):
    """Raised when a tier table has gaps, overlaps or unsorted bands."""


@dataclass(frozen=True)
class CommissionTier:
    min: Decimal
    max: Decimal
    rate: Decimal

    def contains(self, amount: Decimal) -> bool:
        return self.min <= amount <= self.max


class TierTable:
    """
    Ordered, contiguous commission bands.

    Validated on construction:
      - at least one tier
      - every tier has min <= max and a non-negative rate
      - adjacent tiers satisfy tier[i].max + 0.01 == tier[i+1].min

    Lookup is a bisect over the band minimums. Amounts are quantized to cents
    first, so a contiguous table leaves no value between two bands.
    """

    def __init__(self, tiers: Iterable[CommissionTier]):
        self._tiers: tuple[CommissionTier, ...] = tuple(tiers)
        self._validate()
        self._mins = [t.min for t in self._tiers]

    def _validate(self) -> None:
        if not self._tiers:
            raise TierTableError("Tier table must contain at least one tier.")

        for i, tier in enumerate(self._tiers):
            if tier.min > tier.max:
                raise TierTableError(f"Tier #{i} has min {tier.min} above max {tier.max}.")
            if tier.rate < 0:
                raise TierTableError(f"Tier #{i} has a negative rate {tier.rate}.")

        for i, (prev, nxt) in enumerate(zip(self._tiers, self._tiers[1:])):
            if prev.max + CENT != nxt.min:
                raise TierTableError(
                    f"Tiers #{i} and #{i + 1} are not contiguous: "
                    f"{prev.max} + 0.01 != {nxt.min}."
                )

    def __iter__(self) -> Iterator[CommissionTier]:
        return iter(self._tiers)

    def __len__(self) -> int:
        return len(self._tiers)

    def __getitem__(self, index: int) -> CommissionTier:
        return self._tiers[index]

    @property
    def lowest(self) -> CommissionTier:
        return self._tiers[0]

    @property
    def highest(self) -> CommissionTier:
        return self._tiers[-1]

    def find(self, amount) -> Optional[CommissionTier]:
        """
        Returns the tier whose [min, max] range contains amount, or None when
        the amount is below the first band or above the last one.
        """
        value = to_money(amount)
        idx = bisect_right(self._mins, value) - 1
        if idx < 0:
            return None
        tier = self._tiers[idx]
        return tier if tier.contains(value) else None

    def next_after(self, tier: CommissionTier) -> Optional[CommissionTier]:
        idx = self._tiers.index(tier)
        if idx + 1 < len(self._tiers):
            return self._tiers[idx + 1]
        return None


def build_tier_table(rows: Sequence[tuple[str, str, str]]) -> TierTable:
    """
    Builds a TierTable from (min, max, rate) string triples.
    Strings keep the Decimal values exact.
    """
    return TierTable(
        CommissionTier(min=Decimal(lo), max=Decimal(hi), rate=Decimal(rate))
        for lo, hi, rate in rows
    )


# Reference table: 10,000-wide bands from 50,000.01 to 200,000,
# rate rising by 0.05 percentage points per band.
COMMISSION_TIERS: TierTable = build_tier_table(
    [
        ("50000.01", "60000", "0.0060"),
        ("60000.01", "70000", "0.0065"),
        ("70000.01", "80000", "0.0070"),
        ("80000.01", "90000", "0.0075"),
        ("90000.01", "100000", "0.0080"),
        ("100000.01", "110000", "0.0085"),
        ("110000.01", "120000", "0.0090"),
        ("120000.01", "130000", "0.0095"),
        ("130000.01", "140000", "0.0100"),
        ("140000.01", "150000", "0.0105"),
        ("150000.01", "160000", "0.0110"),
        ("160000.01", "170000", "0.0115"),
        ("170000.01", "180000", "0.0120"),
        ("180000.01", "190000", "0.0125"),
        ("190000.01", "200000", "0.0130"),
    ]
)
