"""
Positional call shapes of the old calculator helpers.

Each wrapper only builds the canonical parameter record and delegates to the
engine, so both call styles always agree.
"""

from sipcalc.core.projection import compute_lumpsum, compute_required_sip, compute_sip
from sipcalc.models import ProjectionMode, ProjectionParameters, RequiredSIPParameters, StepUp
from sipcalc.schemas.projection import ProjectionResult


def lumpsum_future_value(principal, rate_per_annum, years, include_inflation=False, inflation_rate=6) -> int:
    params = ProjectionParameters(
        mode=ProjectionMode.LUMPSUM,
        amount=principal,
        annual_rate_percent=rate_per_annum,
        years=years,
        adjust_for_inflation=include_inflation,
        inflation_percent=inflation_rate,
    )
    return int(compute_lumpsum(params).future_value)


def sip_future_value(
    monthly_investment,
    rate_per_annum,
    years,
    include_inflation=False,
    inflation_rate=6,
    is_step_up=False,
    step_up_percentage=10,
    step_up_frequency=12,
) -> ProjectionResult:
    params = ProjectionParameters(
        mode=ProjectionMode.SIP,
        amount=monthly_investment,
        annual_rate_percent=rate_per_annum,
        years=years,
        adjust_for_inflation=include_inflation,
        inflation_percent=inflation_rate,
        step_up=StepUp(
            enabled=is_step_up,
            percent=step_up_percentage,
            frequency_months=step_up_frequency,
        ),
    )
    return compute_sip(params)


def required_monthly_sip(target_amount, rate_per_annum, years, include_inflation=False, inflation_rate=6) -> int:
    # include_inflation inflates the target; the rate itself stays nominal
    params = RequiredSIPParameters(
        target_amount=target_amount,
        annual_rate_percent=rate_per_annum,
        years=years,
        adjust_for_inflation=include_inflation,
        inflation_percent=inflation_rate,
    )
    return int(compute_required_sip(params).required_periodic_contribution)
