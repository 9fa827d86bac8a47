from __future__ import annotations

import math
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

# Withdrawal cadence names used by the front-end selector
FREQUENCIES = {
    "monthly": 12,
    "quarterly": 4,
    "half-yearly": 2,
    "yearly": 1,
    "annually": 1,
}
ALLOWED_PERIODS_PER_YEAR = (1, 2, 4, 12)

# Keeps every simulation loop bounded
MAX_YEARS = 100.0


class ProjectionMode(str, Enum):
    SIP = "sip"
    LUMPSUM = "lumpsum"
    SWP = "swp"


def finite_or(value: Any, default: float) -> float:
    """Coerce a loosely typed number; missing, unparsable or non-finite -> default."""
    if value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def periods_per_year(value: Any) -> int:
    """Map a frequency name or count onto 12/4/2/1. Unknown values mean yearly."""
    if value is None:
        return 12
    if isinstance(value, str):
        key = value.strip().lower()
        if key in FREQUENCIES:
            return FREQUENCIES[key]
    count = finite_or(value, 1.0)
    if count in ALLOWED_PERIODS_PER_YEAR:
        return int(count)
    return 1


class _Params(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @classmethod
    def _default_for(cls, info: ValidationInfo) -> float:
        return cls.model_fields[info.field_name].default

    @field_validator("adjust_for_inflation", mode="before", check_fields=False)
    @classmethod
    def _flag(cls, value: Any) -> Any:
        return False if value is None else value


class StepUp(_Params):
    """Contribution increase of `percent` applied every `frequency_months` months."""

    enabled: bool = False
    percent: float = 10.0
    frequency_months: int = 12

    @field_validator("enabled", mode="before")
    @classmethod
    def _enabled(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("percent", mode="before")
    @classmethod
    def _percent(cls, value: Any) -> float:
        return finite_or(value, 0.0)

    @field_validator("frequency_months", mode="before")
    @classmethod
    def _frequency(cls, value: Any) -> int:
        months = finite_or(value, 12.0)
        if months < 1:
            return 12
        return int(months)


class ProjectionParameters(_Params):
    """
    Inputs for a single projection. `amount` is the monthly contribution (SIP),
    the principal (LUMPSUM) or the starting corpus (SWP).
    """

    mode: ProjectionMode = ProjectionMode.SIP
    amount: float = 0.0
    annual_rate_percent: float = 0.0
    years: float = 0.0
    inflation_percent: float = 6.0
    adjust_for_inflation: bool = False
    step_up: StepUp = Field(default_factory=StepUp)

    # SWP only
    withdrawal_frequency_per_year: int = 12
    withdrawal_amount: float = 0.0
    withdrawal_rate: Optional[float] = None

    @field_validator("amount", "years", "withdrawal_amount", mode="before")
    @classmethod
    def _non_negative(cls, value: Any) -> float:
        return max(0.0, finite_or(value, 0.0))

    @field_validator("years")
    @classmethod
    def _horizon(cls, value: float) -> float:
        return min(value, MAX_YEARS)

    @field_validator("annual_rate_percent", "inflation_percent", mode="before")
    @classmethod
    def _rate(cls, value: Any, info: ValidationInfo) -> float:
        return finite_or(value, cls._default_for(info))

    @field_validator("withdrawal_rate", mode="before")
    @classmethod
    def _optional_rate(cls, value: Any) -> Optional[float]:
        if value is None:
            return None
        return max(0.0, finite_or(value, 0.0))

    @field_validator("withdrawal_frequency_per_year", mode="before")
    @classmethod
    def _periods(cls, value: Any) -> int:
        return periods_per_year(value)

    @field_validator("step_up", mode="before")
    @classmethod
    def _step_up(cls, value: Any) -> Any:
        return StepUp() if value is None else value

    def to_swp_parameters(self) -> "SWPParameters":
        return SWPParameters(
            initial_investment=self.amount,
            withdrawal_amount=self.withdrawal_amount,
            withdrawal_rate=self.withdrawal_rate,
            expected_return=self.annual_rate_percent,
            withdrawal_period=self.years,
            inflation_rate=self.inflation_percent,
            withdrawal_frequency=self.withdrawal_frequency_per_year,
            adjust_for_inflation=self.adjust_for_inflation,
        )


class RequiredSIPParameters(_Params):
    target_amount: float = 0.0
    annual_rate_percent: float = 0.0
    years: float = 0.0
    inflation_percent: float = 6.0
    adjust_for_inflation: bool = False

    @field_validator("target_amount", "years", mode="before")
    @classmethod
    def _non_negative(cls, value: Any) -> float:
        return max(0.0, finite_or(value, 0.0))

    @field_validator("years")
    @classmethod
    def _horizon(cls, value: float) -> float:
        return min(value, MAX_YEARS)

    @field_validator("annual_rate_percent", "inflation_percent", mode="before")
    @classmethod
    def _rate(cls, value: Any, info: ValidationInfo) -> float:
        return finite_or(value, cls._default_for(info))


class SWPParameters(_Params):
    """
    Withdrawal plan inputs, named after the calculator form fields.

    `withdrawal_amount` is the annual figure. When `withdrawal_rate` is given it
    drives the plan instead: each period withdraws that percent of the starting
    corpus.
    """

    initial_investment: float = 0.0
    withdrawal_amount: float = 0.0
    withdrawal_rate: Optional[float] = None
    expected_return: float = 10.0
    withdrawal_period: float = 20.0
    inflation_rate: float = 5.0
    withdrawal_frequency: int = 12
    adjust_for_inflation: bool = False

    @field_validator("initial_investment", "withdrawal_amount", mode="before")
    @classmethod
    def _non_negative(cls, value: Any) -> float:
        return max(0.0, finite_or(value, 0.0))

    @field_validator("withdrawal_rate", mode="before")
    @classmethod
    def _optional_rate(cls, value: Any) -> Optional[float]:
        if value is None:
            return None
        return max(0.0, finite_or(value, 0.0))

    @field_validator("expected_return", "inflation_rate", mode="before")
    @classmethod
    def _rate(cls, value: Any, info: ValidationInfo) -> float:
        return finite_or(value, cls._default_for(info))

    @field_validator("withdrawal_period", mode="before")
    @classmethod
    def _period(cls, value: Any) -> float:
        return min(max(0.0, finite_or(value, 20.0)), MAX_YEARS)

    @field_validator("withdrawal_frequency", mode="before")
    @classmethod
    def _periods(cls, value: Any) -> int:
        return periods_per_year(value)


class WithdrawalConversionRequest(_Params):
    """Either an annual withdrawal amount or a per-period rate, never both."""

    initial_investment: float = 0.0
    withdrawal_amount: Optional[float] = None
    withdrawal_rate: Optional[float] = None
    withdrawal_frequency: int = 12

    @field_validator("initial_investment", mode="before")
    @classmethod
    def _corpus(cls, value: Any) -> float:
        return max(0.0, finite_or(value, 0.0))

    @field_validator("withdrawal_amount", "withdrawal_rate", mode="before")
    @classmethod
    def _optional(cls, value: Any) -> Optional[float]:
        if value is None:
            return None
        return max(0.0, finite_or(value, 0.0))

    @field_validator("withdrawal_frequency", mode="before")
    @classmethod
    def _periods(cls, value: Any) -> int:
        return periods_per_year(value)

    @model_validator(mode="after")
    def ensure_single_driver(self) -> "WithdrawalConversionRequest":
        if (self.withdrawal_amount is None) == (self.withdrawal_rate is None):
            raise ValueError("provide exactly one of withdrawalAmount or withdrawalRate")
        return self
