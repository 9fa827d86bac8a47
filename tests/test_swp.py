from __future__ import annotations

import math
from math import isclose

import pytest

from sipcalc.core.projection import compute_projection
from sipcalc.core.rates import MAX_AMOUNT
from sipcalc.core.withdrawal import (
    compute_swp,
    convert_withdrawal,
    summarize_withdrawal_rate,
    sustainable_withdrawal,
    withdrawal_amount_from_rate,
    withdrawal_rate_from_amount,
)
from sipcalc.models import ProjectionMode, ProjectionParameters, SWPParameters, WithdrawalConversionRequest


def plan(**overrides) -> SWPParameters:
    base = {
        "initial_investment": 1_000_000,
        "withdrawal_amount": 60_000,
        "expected_return": 10,
        "withdrawal_period": 20,
        "withdrawal_frequency": "monthly",
        "adjust_for_inflation": False,
    }
    base.update(overrides)
    return SWPParameters(**base)


def test_sustainable_plan_never_depletes():
    result = compute_swp(plan())

    assert result.depleted_at_years is None
    assert result.depleted_at_period is None
    assert result.scheduled_total_withdrawals == 1_200_000
    assert result.total_contributed_or_withdrawn == 1_200_000
    assert result.future_value > 1_000_000, "10% return outpaces a 6% withdrawal"
    assert result.initial_period_withdrawal == 5000
    assert result.final_withdrawal_amount == 5000
    assert result.withdrawals_per_year == 12


def test_series_has_one_point_per_year():
    result = compute_swp(plan())

    assert len(result.series) == 21
    assert [point.year for point in result.series] == [float(year) for year in range(21)]
    assert result.series[0].current_value == 1_000_000
    assert result.series[0].withdrawal == 0
    assert result.series[1].invested_or_withdrawn_cumulative == 60_000
    assert result.series[-1].period_index == 240
    assert result.series[-1].year_label == "Year 20"


def test_heavy_withdrawals_deplete_before_the_horizon():
    result = compute_swp(plan(withdrawal_amount=200_000, expected_return=2))

    assert result.depleted_at_years is not None
    assert 0 < result.depleted_at_years < 20
    assert result.depleted_at_period == result.series[-1].period_index
    assert isclose(result.depleted_at_years, result.depleted_at_period / 12)
    assert result.series[-1].current_value == 0
    assert result.future_value == 0
    assert result.total_contributed_or_withdrawn < result.scheduled_total_withdrawals
    assert result.total_contributed_or_withdrawn > 1_000_000, "growth adds to what can be withdrawn"


def test_corpus_never_negative_and_stops_at_depletion():
    result = compute_swp(plan(withdrawal_amount=300_000, expected_return=0, withdrawal_frequency="quarterly"))

    assert all(point.current_value >= 0 for point in result.series)
    assert all(point.period_index <= result.depleted_at_period for point in result.series)
    periods = [point.period_index for point in result.series]
    assert periods == sorted(periods)


def test_exact_depletion_without_growth():
    result = compute_swp(
        plan(initial_investment=1_200_000, withdrawal_amount=120_000, expected_return=0, withdrawal_frequency="yearly")
    )

    assert result.depleted_at_period == 10
    assert result.depleted_at_years == 10.0
    assert len(result.series) == 11
    assert result.total_contributed_or_withdrawn == 1_200_000
    assert result.scheduled_total_withdrawals == 2_400_000
    assert result.gain == 0


def test_inflation_indexed_withdrawals():
    """
    Yearly 12000 indexed at 10%: 12000 + 13200 + 14520 paid, 15972 due next.
    """
    result = compute_swp(
        plan(
            withdrawal_amount=12_000,
            expected_return=0,
            inflation_rate=10,
            withdrawal_period=3,
            withdrawal_frequency="yearly",
            adjust_for_inflation=True,
        )
    )

    assert result.total_contributed_or_withdrawn == 39_720
    assert result.scheduled_total_withdrawals == 39_720
    assert result.initial_period_withdrawal == 12_000
    assert result.final_withdrawal_amount == 15_972
    assert [point.withdrawal for point in result.series[1:]] == pytest.approx([13_200, 14_520, 15_972])


def test_zero_inflation_with_adjustment_uses_flat_schedule():
    result = compute_swp(plan(inflation_rate=0, adjust_for_inflation=True))

    assert result.scheduled_total_withdrawals == 1_200_000


@pytest.mark.parametrize(
    "overrides",
    [
        {"initial_investment": 0},
        {"withdrawal_amount": 0},
        {"initial_investment": -5, "withdrawal_amount": 60_000},
        {"withdrawal_rate": 0},
    ],
)
def test_empty_plan_yields_zero_summary(overrides: dict):
    result = compute_swp(plan(**overrides))

    assert result.series == []
    assert result.future_value == 0
    assert result.total_contributed_or_withdrawn == 0
    assert result.scheduled_total_withdrawals == 0
    assert result.depleted_at_years is None


def test_larger_withdrawals_never_help():
    previous_corpus = math.inf
    previous_depletion = math.inf
    for amount in (40_000, 60_000, 120_000, 200_000, 400_000):
        result = compute_swp(plan(withdrawal_amount=amount, expected_return=2))
        depletion = result.depleted_at_years if result.depleted_at_years is not None else math.inf

        assert result.future_value <= previous_corpus
        assert depletion <= previous_depletion
        previous_corpus = result.future_value
        previous_depletion = depletion


@pytest.mark.parametrize("expected_return", [2, 0, 10])
def test_higher_withdrawal_rates_never_help(expected_return: float):
    previous_corpus = math.inf
    previous_depletion = math.inf
    for rate in (0.3, 0.5, 1, 2, 5):
        result = compute_swp(plan(withdrawal_rate=rate, expected_return=expected_return))
        depletion = result.depleted_at_years if result.depleted_at_years is not None else math.inf

        assert result.future_value <= previous_corpus, f"rate {rate}% left more than a lower rate"
        assert depletion <= previous_depletion, f"rate {rate}% lasted longer than a lower rate"
        previous_corpus = result.future_value
        previous_depletion = depletion


def test_rate_driven_plan_matches_amount_driven_plan():
    by_rate = compute_swp(plan(withdrawal_rate=0.5))
    by_amount = compute_swp(plan(withdrawal_amount=60_000))

    assert by_rate.initial_period_withdrawal == 5000
    assert by_rate.future_value == by_amount.future_value
    assert by_rate.scheduled_total_withdrawals == by_amount.scheduled_total_withdrawals


def test_withdrawal_amount_and_rate_interconvert():
    assert withdrawal_rate_from_amount(1_000_000, 60_000, 12) == pytest.approx(0.5)
    assert withdrawal_amount_from_rate(1_000_000, 0.5, 12) == pytest.approx(60_000)
    assert withdrawal_rate_from_amount(0, 60_000, 12) == 0.0

    converted = convert_withdrawal(
        WithdrawalConversionRequest(initial_investment=2_000_000, withdrawal_rate=1, withdrawal_frequency="quarterly")
    )
    assert converted.withdrawal_amount == pytest.approx(80_000)
    assert converted.withdrawal_rate == 1


def test_conversion_requires_exactly_one_driver():
    with pytest.raises(ValueError):
        WithdrawalConversionRequest(initial_investment=1_000_000, withdrawal_amount=60_000, withdrawal_rate=0.5)
    with pytest.raises(ValueError):
        WithdrawalConversionRequest(initial_investment=1_000_000)


def test_sustainable_withdrawal_pmt():
    assert sustainable_withdrawal(1_200_000, 0, 10) == 10_000
    assert sustainable_withdrawal(100_000, 12, 1) == 8885
    assert sustainable_withdrawal(100_000, 12, 0) == 0
    assert sustainable_withdrawal(float("nan"), 12, 5) == 0


def test_rate_summary_reports_percentages():
    summary = summarize_withdrawal_rate(corpus=1_000_000, withdrawal_rate=0.5, return_rate=0, years=1)

    assert summary.initial_monthly_withdrawal == 5000
    assert summary.final_monthly_withdrawal == 5000
    assert summary.total_withdrawal == 60_000
    assert summary.remaining_corpus == 940_000
    assert summary.withdrawal_percentage == pytest.approx(6.0)
    assert summary.remaining_corpus_percentage == pytest.approx(94.0)


def test_projection_parameters_route_to_swp():
    params = ProjectionParameters(
        mode=ProjectionMode.SWP,
        amount=1_000_000,
        annual_rate_percent=10,
        years=20,
        withdrawal_amount=60_000,
        withdrawal_frequency_per_year=12,
    )

    assert compute_projection(params) == compute_swp(plan())


def test_repeated_calls_are_identical():
    params = plan(withdrawal_amount=150_000, expected_return=7, adjust_for_inflation=True)

    assert compute_swp(params) == compute_swp(params)


def test_runaway_return_saturates_corpus():
    result = compute_swp(plan(expected_return=1000, withdrawal_period=100))

    assert result.depleted_at_years is None
    assert result.future_value == MAX_AMOUNT
    assert result.total_contributed_or_withdrawn == 6_000_000
    assert math.isfinite(result.gain)
    assert math.isfinite(result.gain_percent)
    assert all(math.isfinite(point.current_value) for point in result.series)


def test_runaway_inflation_indexing_saturates_withdrawals():
    result = compute_swp(
        plan(expected_return=1000, inflation_rate=1000, adjust_for_inflation=True, withdrawal_period=100)
    )

    assert result.scheduled_total_withdrawals == MAX_AMOUNT
    assert math.isfinite(result.final_withdrawal_amount)
    assert math.isfinite(result.total_contributed_or_withdrawn)
    assert all(math.isfinite(point.withdrawal) for point in result.series)


def test_huge_corpus_and_rate_stay_finite():
    result = compute_swp(plan(initial_investment=1e308, withdrawal_rate=50, withdrawal_frequency="yearly"))

    assert result.depleted_at_years is None
    for value in (result.future_value, result.gain, result.gain_percent, result.scheduled_total_withdrawals):
        assert math.isfinite(value)


@pytest.mark.parametrize("corpus,rate", [(1e308, 1000), (1_000_000, -1000), (1e308, 1e-14)])
def test_sustainable_withdrawal_extremes_stay_finite(corpus: float, rate: float):
    assert math.isfinite(sustainable_withdrawal(corpus, rate, 100))


def test_conversion_saturates_at_the_float_maximum():
    converted = convert_withdrawal(
        WithdrawalConversionRequest(initial_investment=1e308, withdrawal_rate=1000, withdrawal_frequency="monthly")
    )

    assert converted.withdrawal_amount == MAX_AMOUNT
    assert withdrawal_rate_from_amount(1e-300, 1e300, 1) == MAX_AMOUNT
