from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Union

CENT = Decimal("0.01")
MONEY_ZERO = Decimal("0.00")


def to_money(val: Union[Decimal, int, float, str, None]) -> Decimal:
    """
    Normalizes a currency value to a Decimal quantized to cents (ROUND_HALF_UP).
    Floats go through str() so 0.1 stays 0.10 rather than its binary expansion.
    Infinity and NaN are not currency amounts and raise ValueError.
    """
    if val is None:
        return MONEY_ZERO
    if not isinstance(val, Decimal):
        val = Decimal(str(val))
    if not val.is_finite():
        raise ValueError(f"Currency amount must be finite, got {val}")
    with localcontext() as ctx:
        # integer digits plus cents, with a spare digit for a rounding carry
        ctx.prec = max(ctx.prec, val.adjusted() + 4)
        return val.quantize(CENT, rounding=ROUND_HALF_UP)


def to_decimal(val: Union[Decimal, int, float, str, None]) -> Decimal:
    if val is None:
        return Decimal(0)
    if isinstance(val, Decimal):
        return val
    return Decimal(str(val))
