"""Result records returned by the projection engine."""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from sipcalc.models import ProjectionMode


class _Result(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ProjectionPoint(_Result):
    """One sampled instant of a projection, in chronological order."""

    period_index: int = Field(..., ge=0, description="Month (SIP/Lumpsum) or withdrawal period (SWP).")
    year_label: str
    invested_or_withdrawn_cumulative: float
    current_value: float


class SWPPoint(ProjectionPoint):
    """Yearly corpus sample; `withdrawal` is the per-period amount in force."""

    year: float
    withdrawal: float


class ProjectionResult(_Result):
    mode: ProjectionMode
    future_value: float
    total_contributed_or_withdrawn: float
    gain: float
    gain_percent: float
    series: List[ProjectionPoint] = Field(default_factory=list)
    depleted_at_period: Optional[int] = Field(
        default=None,
        description="1-based withdrawal period at which the corpus ran out (SWP only).",
    )


class SWPResult(ProjectionResult):
    series: List[SWPPoint] = Field(default_factory=list)
    scheduled_total_withdrawals: float = 0.0
    depleted_at_years: Optional[float] = None
    initial_period_withdrawal: float = 0.0
    final_withdrawal_amount: float = 0.0
    withdrawals_per_year: int = 12


class RequiredSIPResult(_Result):
    required_periodic_contribution: float
    total_contribution: float
    gain: float
    gain_percent: float
    inflation_adjusted_target: float
    original_target: float


class ScenarioProjection(_Result):
    scenario: str
    name: str
    annual_rate_percent: float
    result: Union[SWPResult, ProjectionResult]


class WithdrawalRateSummary(_Result):
    """Rate-driven monthly SWP summary."""

    initial_monthly_withdrawal: float
    final_monthly_withdrawal: float
    total_withdrawal: float
    remaining_corpus: float
    withdrawal_percentage: float
    remaining_corpus_percentage: float


class WithdrawalConversion(_Result):
    withdrawal_amount: float = Field(..., description="Annual withdrawal amount.")
    withdrawal_rate: float = Field(..., description="Percent of corpus withdrawn per period.")
