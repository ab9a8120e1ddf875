"""
formatters.py

Money display helpers:
- format_money: two decimals with comma thousands grouping
- format_abbr_money: compact k / M form for large figures
- split_digits / changed_positions: glyph-level diffing for the flip display

Rounding is half away from zero on the exact binary value of the float, so
1.005 (stored as 1.00499...) rounds down while 0.125 (an exact tie) rounds
up.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Set

CENTS = Decimal("0.01")
MILLS = Decimal("0.001")


def _round(amount: float, step: Decimal) -> Decimal:
    return Decimal(amount).quantize(step, rounding=ROUND_HALF_UP)


def format_money(amount: float) -> str:
    value = _round(amount, CENTS)
    if value == 0:
        # no "-0.00"
        value = abs(value)
    return f"{value:,.2f}"


def format_abbr_money(amount: float) -> str:
    """
    Compact rendering on the absolute value:
      999.5        -> "999.500"
      1000         -> "1k.000"
      1234.5       -> "1k 234.500"
      1234567.891  -> "1M 234k567.891"
    A leading '-' marks negative amounts.
    """
    magnitude = abs(amount)
    whole = int(math.floor(magnitude))
    sign = "-" if amount < 0 else ""

    rest = ""
    if whole < 1000:
        main = str(whole)
    elif whole < 1_000_000:
        main = f"{whole // 1000}k"
        remainder = whole % 1000
        if remainder:
            rest = f"{remainder:03d}"
    else:
        main = f"{whole // 1_000_000}M"
        thousands = (whole % 1_000_000) // 1000
        rest = f"{thousands}k{whole % 1000:03d}"

    # ".xxx" tail; a fraction rounding up to 1.000 keeps ".000"
    fraction = (Decimal(magnitude) % 1).quantize(MILLS, rounding=ROUND_HALF_UP)
    decimal_str = f"{fraction:.3f}"[1:]

    return sign + main + (" " + rest if rest else "") + decimal_str


def split_digits(text: str) -> List[str]:
    return list(text)


def changed_positions(previous: str, current: str) -> Set[int]:
    """
    Indices of 'current' whose glyph differs from the one at the same index
    in 'previous'. Positions past the end of 'previous' always count as
    changed.
    """
    return {
        i for i, ch in enumerate(current)
        if i >= len(previous) or previous[i] != ch
    }
