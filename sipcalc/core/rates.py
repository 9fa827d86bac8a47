"""Rate conversion and rounding shared by every projection mode."""

from __future__ import annotations

import math
import sys

# Amounts saturate here instead of overflowing to inf
MAX_AMOUNT = sys.float_info.max


def saturate(value: float) -> float:
    """Clamp into the finite float range; NaN (inf - inf and friends) becomes 0."""
    if value != value:
        return 0.0
    return max(-MAX_AMOUNT, min(MAX_AMOUNT, value))


def round_currency(value: float) -> int:
    """Round half-up to whole currency units (same as the browser's Math.round)."""
    value = saturate(value)
    if abs(value) >= 2 ** 52:
        # already integral at this magnitude
        return int(value)
    return int(math.floor(value + 0.5))


def real_rate_percent(annual_rate_percent: float, inflation_percent: float) -> float:
    """Fisher real rate, in percent: ((1 + r) / (1 + f) - 1) * 100."""
    return ((1 + annual_rate_percent / 100) / (1 + inflation_percent / 100) - 1) * 100


def effective_annual_rate_percent(
    annual_rate_percent: float,
    inflation_percent: float,
    adjust_for_inflation: bool,
) -> float:
    if not adjust_for_inflation:
        return annual_rate_percent
    if inflation_percent <= -100:
        # (1 + f) would be zero or negative; no meaningful real rate
        return annual_rate_percent
    return real_rate_percent(annual_rate_percent, inflation_percent)


def period_rate(annual_rate_percent: float, periods_per_year: int) -> float:
    """
    Nominal division of the annual rate, NOT the compound root.

    12% a year is 1% a month here, never (1.12 ** (1/12)) - 1.
    """
    return annual_rate_percent / 100 / periods_per_year


def growth_factor(rate: float) -> float:
    """1 + rate, floored at zero so a < -100% period loses everything instead of going negative."""
    return max(0.0, 1 + rate)


def compound(rate: float, periods: float) -> float:
    """(1 + rate) ** periods, saturated at MAX_AMOUNT."""
    factor = growth_factor(rate)
    if factor == 0.0:
        return 0.0 if periods > 0 else MAX_AMOUNT if periods < 0 else 1.0
    try:
        return saturate(factor ** periods)
    except OverflowError:
        return MAX_AMOUNT


def percent_of(part: float, whole: float) -> float:
    if whole <= 0:
        return 0.0
    # float first: int / int raises once the quotient leaves the float range
    return saturate(float(part) / float(whole) * 100)
