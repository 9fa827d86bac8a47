from __future__ import annotations

import logging
from typing import List, Optional

from sipcalc.core.rates import (
    compound,
    effective_annual_rate_percent,
    growth_factor,
    percent_of,
    period_rate,
    round_currency,
    saturate,
)
from sipcalc.models import (
    ProjectionMode,
    SWPParameters,
    WithdrawalConversionRequest,
    finite_or,
)
from sipcalc.schemas.projection import (
    SWPPoint,
    SWPResult,
    WithdrawalConversion,
    WithdrawalRateSummary,
)

logger = logging.getLogger(__name__)


def withdrawal_amount_from_rate(corpus: float, rate_percent: float, periods_per_year: int = 12) -> float:
    """Annual withdrawal for a per-period rate of the corpus."""
    return saturate(corpus * rate_percent / 100 * periods_per_year)


def withdrawal_rate_from_amount(corpus: float, annual_amount: float, periods_per_year: int = 12) -> float:
    """Per-period percent of the corpus for an annual withdrawal; 0 without a corpus."""
    if corpus <= 0:
        return 0.0
    return saturate(annual_amount / periods_per_year / corpus * 100)


def convert_withdrawal(request: WithdrawalConversionRequest) -> WithdrawalConversion:
    """
    Recompute whichever of amount/rate was not given against the current corpus.

    `withdrawal_amount` is annual. `withdrawal_rate` is percent of the corpus per
    withdrawal period, not per year: 6 on a monthly plan means 6% every month.
    """
    corpus = request.initial_investment
    per_year = request.withdrawal_frequency
    if request.withdrawal_rate is not None:
        amount = withdrawal_amount_from_rate(corpus, request.withdrawal_rate, per_year)
        return WithdrawalConversion(withdrawal_amount=amount, withdrawal_rate=request.withdrawal_rate)

    rate = withdrawal_rate_from_amount(corpus, request.withdrawal_amount, per_year)
    return WithdrawalConversion(withdrawal_amount=request.withdrawal_amount, withdrawal_rate=rate)


def scheduled_total_withdrawals(
    period_withdrawal: float,
    annual_withdrawal: float,
    period_inflation: float,
    periods: int,
    years: float,
    adjust_for_inflation: bool,
) -> float:
    """
    What the plan would pay out if the corpus never ran dry.

    Indexed withdrawals form a geometric series: w0 * ((1 + i)^n - 1) / i.
    """
    if not adjust_for_inflation:
        return saturate(annual_withdrawal * years)
    if growth_factor(period_inflation) == 1:
        return saturate(period_withdrawal * periods)
    return saturate(period_withdrawal * (compound(period_inflation, periods) - 1) / period_inflation)


def _year_label(year: float) -> str:
    return f"Year {year:g}"


def _swp_point(period: int, per_year: int, corpus: float, withdrawal: float, total_withdrawn: float) -> SWPPoint:
    year = period / per_year
    return SWPPoint(
        period_index=period,
        year_label=_year_label(year),
        year=year,
        invested_or_withdrawn_cumulative=round(total_withdrawn, 2),
        current_value=round(corpus, 2),
        withdrawal=round(withdrawal, 2),
    )


def _empty_result(per_year: int) -> SWPResult:
    return SWPResult(
        mode=ProjectionMode.SWP,
        future_value=0,
        total_contributed_or_withdrawn=0,
        gain=0,
        gain_percent=0.0,
        series=[],
        withdrawals_per_year=per_year,
    )


def compute_swp(params: SWPParameters) -> SWPResult:
    """
    Simulate a systematic withdrawal plan period by period.

    Order of operations (per period):
      1) Withdraw min(corpus, withdrawal); stop at once if the corpus hits zero.
      2) Grow the remaining corpus by the per-period nominal return.
      3) Index next period's withdrawal to inflation (when enabled).
    A point is recorded at every full year, at the final period and at depletion.
    """
    per_year = params.withdrawal_frequency
    initial = params.initial_investment

    if params.withdrawal_rate is not None:
        period_withdrawal = saturate(initial * params.withdrawal_rate / 100)
        annual_withdrawal = saturate(period_withdrawal * per_year)
    else:
        annual_withdrawal = params.withdrawal_amount
        period_withdrawal = annual_withdrawal / per_year

    if initial <= 0 or period_withdrawal <= 0:
        return _empty_result(per_year)

    periods = int(params.withdrawal_period * per_year)
    growth = growth_factor(period_rate(params.expected_return, per_year))
    period_inflation = period_rate(params.inflation_rate, per_year)

    scheduled = scheduled_total_withdrawals(
        period_withdrawal,
        annual_withdrawal,
        period_inflation,
        periods,
        params.withdrawal_period,
        params.adjust_for_inflation,
    )

    first_withdrawal = period_withdrawal
    corpus = float(initial)
    total_withdrawn = 0.0
    depletion_period: Optional[int] = None
    series: List[SWPPoint] = [_swp_point(0, per_year, corpus, 0.0, total_withdrawn)]

    for period in range(1, periods + 1):
        withdrawn = min(corpus, period_withdrawal)
        corpus -= withdrawn
        total_withdrawn = saturate(total_withdrawn + withdrawn)

        if corpus <= 0:
            corpus = 0.0
            depletion_period = period
            series.append(_swp_point(period, per_year, corpus, period_withdrawal, total_withdrawn))
            break

        corpus = saturate(corpus * growth)

        if params.adjust_for_inflation:
            period_withdrawal = saturate(period_withdrawal * growth_factor(period_inflation))

        if period % per_year == 0 or period == periods:
            series.append(_swp_point(period, per_year, corpus, period_withdrawal, total_withdrawn))

    depleted_at_years = None
    if depletion_period is not None:
        depleted_at_years = depletion_period / per_year
        logger.debug("corpus of %.2f depleted at period %d (%.2f years)", initial, depletion_period, depleted_at_years)

    final_corpus = round_currency(max(0.0, corpus))
    withdrawn_total = round_currency(total_withdrawn)
    gain = saturate(final_corpus + withdrawn_total - round_currency(initial))

    return SWPResult(
        mode=ProjectionMode.SWP,
        future_value=final_corpus,
        total_contributed_or_withdrawn=withdrawn_total,
        gain=gain,
        gain_percent=percent_of(gain, initial),
        series=series,
        depleted_at_period=depletion_period,
        scheduled_total_withdrawals=round_currency(scheduled),
        depleted_at_years=depleted_at_years,
        initial_period_withdrawal=round_currency(first_withdrawal),
        final_withdrawal_amount=round_currency(period_withdrawal),
        withdrawals_per_year=per_year,
    )


def sustainable_withdrawal(
    corpus,
    annual_rate_percent,
    years,
    adjust_for_inflation: bool = False,
    inflation_percent=6.0,
) -> int:
    """Monthly withdrawal that runs the corpus down to zero exactly at the horizon (PMT)."""
    corpus = max(0.0, finite_or(corpus, 0.0))
    years = max(0.0, finite_or(years, 0.0))
    annual = effective_annual_rate_percent(
        finite_or(annual_rate_percent, 0.0),
        finite_or(inflation_percent, 0.0),
        adjust_for_inflation,
    )
    rate = period_rate(annual, 12)
    months = years * 12

    if months <= 0:
        return 0
    if rate == 0:
        return round_currency(corpus / months)
    if growth_factor(rate) == 0:
        return 0
    denominator = 1 - compound(rate, -months)
    if not denominator:
        return round_currency(corpus / months)
    return round_currency(saturate(corpus * rate) / denominator)


def summarize_withdrawal_rate(
    corpus: float,
    withdrawal_rate: float,
    return_rate: float,
    years: float,
    inflation: float = 0.0,
    adjust_for_inflation: bool = False,
) -> WithdrawalRateSummary:
    """Monthly SWP driven by `withdrawal_rate` percent of the corpus per month."""
    params = SWPParameters(
        initial_investment=corpus,
        withdrawal_rate=withdrawal_rate,
        expected_return=return_rate,
        withdrawal_period=years,
        inflation_rate=inflation,
        withdrawal_frequency=12,
        adjust_for_inflation=adjust_for_inflation,
    )
    result = compute_swp(params)
    start = params.initial_investment

    return WithdrawalRateSummary(
        initial_monthly_withdrawal=result.initial_period_withdrawal,
        final_monthly_withdrawal=result.final_withdrawal_amount,
        total_withdrawal=result.total_contributed_or_withdrawn,
        remaining_corpus=result.future_value,
        withdrawal_percentage=percent_of(result.total_contributed_or_withdrawn, start),
        remaining_corpus_percentage=percent_of(result.future_value, start),
    )
