from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List, Union

from sipcalc.core.rates import (
    compound,
    effective_annual_rate_percent,
    growth_factor,
    percent_of,
    period_rate,
    round_currency,
    saturate,
)
from sipcalc.core.withdrawal import compute_swp
from sipcalc.models import (
    ProjectionMode,
    ProjectionParameters,
    RequiredSIPParameters,
)
from sipcalc.schemas.projection import (
    ProjectionPoint,
    ProjectionResult,
    RequiredSIPResult,
    ScenarioProjection,
    SWPResult,
)

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


# -----------------------------
# Preset return scenarios
# -----------------------------


class ReturnScenario(str, Enum):
    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


SCENARIOS: Dict[ReturnScenario, Dict[str, object]] = {
    ReturnScenario.CONSERVATIVE: {"name": "Conservative", "return": 8.0},
    ReturnScenario.MODERATE: {"name": "Moderate", "return": 12.0},
    ReturnScenario.AGGRESSIVE: {"name": "Aggressive", "return": 15.0},
}


def _point(month: int, invested: float, value: float) -> ProjectionPoint:
    return ProjectionPoint(
        period_index=month,
        year_label=f"Year {month // MONTHS_PER_YEAR}",
        invested_or_withdrawn_cumulative=round_currency(invested),
        current_value=round_currency(value),
    )


def monthly_rate(params: ProjectionParameters) -> float:
    annual = effective_annual_rate_percent(
        params.annual_rate_percent,
        params.inflation_percent,
        params.adjust_for_inflation,
    )
    return period_rate(annual, MONTHS_PER_YEAR)


def compute_lumpsum(params: ProjectionParameters) -> ProjectionResult:
    """
    Single upfront investment compounded monthly for years*12 months.

    The series holds the principal at month 0, then one sample per full year.
    """
    principal = params.amount
    rate = monthly_rate(params)
    months = params.years * MONTHS_PER_YEAR

    future_value = round_currency(principal * compound(rate, months))
    invested = round_currency(principal)

    series = [_point(0, principal, principal)]
    for month in range(MONTHS_PER_YEAR, int(months) + 1, MONTHS_PER_YEAR):
        series.append(_point(month, principal, principal * compound(rate, month)))

    gain = future_value - invested
    return ProjectionResult(
        mode=ProjectionMode.LUMPSUM,
        future_value=future_value,
        total_contributed_or_withdrawn=invested,
        gain=gain,
        gain_percent=percent_of(gain, invested),
        series=series,
    )


def compute_sip(params: ProjectionParameters) -> ProjectionResult:
    """
    Month-by-month SIP accumulation.

    Order of operations (per month):
      1) Step the contribution up when a new step-up window begins.
      2) Add the contribution to the invested total.
      3) Grow (value + contribution); deposits land at the START of the month.
    """
    rate = monthly_rate(params)
    months = int(params.years * MONTHS_PER_YEAR)
    step_up = params.step_up
    growth = growth_factor(rate)

    contribution = params.amount
    invested = 0.0
    value = 0.0
    series = [_point(0, invested, value)]

    for month in range(1, months + 1):
        if step_up.enabled and month > 1 and month % step_up.frequency_months == 1:
            contribution = saturate(contribution * (1 + step_up.percent / 100))

        invested = saturate(invested + contribution)
        value = saturate((value + contribution) * growth)

        if month % MONTHS_PER_YEAR == 0:
            series.append(_point(month, invested, value))

    future_value = round_currency(value)
    total_investment = round_currency(invested)
    gain = future_value - total_investment
    return ProjectionResult(
        mode=ProjectionMode.SIP,
        future_value=future_value,
        total_contributed_or_withdrawn=total_investment,
        gain=gain,
        gain_percent=percent_of(gain, total_investment),
        series=series,
    )


def compute_required_sip(params: RequiredSIPParameters) -> RequiredSIPResult:
    """
    Fixed monthly contribution that reaches `target_amount` (no step-up).

    Annuity-due factor: FV = P * (((1 + r)^n - 1) / r) * (1 + r). An inflated
    target is solved with the nominal rate.
    """
    target = params.target_amount
    if params.adjust_for_inflation:
        target = saturate(target * compound(params.inflation_percent / 100, params.years))

    rate = period_rate(params.annual_rate_percent, MONTHS_PER_YEAR)
    # whole months, the same count compute_sip simulates
    months = int(params.years * MONTHS_PER_YEAR)

    if months <= 0:
        required = 0.0
    elif rate == 0:
        required = target / months
    else:
        denominator = saturate(((compound(rate, months) - 1) / rate) * growth_factor(rate))
        required = saturate(target / denominator) if denominator else 0.0

    required = round_currency(required)
    total_contribution = saturate(required * months)
    gain = saturate(target - total_contribution)

    return RequiredSIPResult(
        required_periodic_contribution=required,
        total_contribution=round_currency(total_contribution),
        gain=round_currency(gain),
        gain_percent=percent_of(gain, total_contribution),
        inflation_adjusted_target=round_currency(target),
        original_target=round_currency(params.target_amount),
    )


def compute_projection(params: ProjectionParameters) -> Union[ProjectionResult, SWPResult]:
    """Dispatch on the mode tag."""
    if params.mode == ProjectionMode.LUMPSUM:
        return compute_lumpsum(params)
    if params.mode == ProjectionMode.SWP:
        return compute_swp(params.to_swp_parameters())
    return compute_sip(params)


def compare_scenarios(params: ProjectionParameters) -> List[ScenarioProjection]:
    """Run the same projection once per preset return rate."""
    results: List[ScenarioProjection] = []
    for scenario, preset in SCENARIOS.items():
        rate = float(preset["return"])
        scenario_params = params.model_copy(update={"annual_rate_percent": rate})
        results.append(
            ScenarioProjection(
                scenario=scenario.value,
                name=str(preset["name"]),
                annual_rate_percent=rate,
                result=compute_projection(scenario_params),
            )
        )
    logger.debug("compared %d return scenarios for mode=%s", len(results), params.mode.value)
    return results


__all__ = [
    "MONTHS_PER_YEAR",
    "ReturnScenario",
    "SCENARIOS",
    "monthly_rate",
    "compute_lumpsum",
    "compute_sip",
    "compute_required_sip",
    "compute_projection",
    "compare_scenarios",
]
