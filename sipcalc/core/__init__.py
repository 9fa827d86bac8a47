"""Pure projection functions for SIP, Lumpsum and SWP plans."""

from sipcalc.core.projection import (
    SCENARIOS,
    ReturnScenario,
    compare_scenarios,
    compute_lumpsum,
    compute_projection,
    compute_required_sip,
    compute_sip,
)
from sipcalc.core.withdrawal import (
    compute_swp,
    convert_withdrawal,
    scheduled_total_withdrawals,
    summarize_withdrawal_rate,
    sustainable_withdrawal,
    withdrawal_amount_from_rate,
    withdrawal_rate_from_amount,
)

__all__ = [
    "SCENARIOS",
    "ReturnScenario",
    "compare_scenarios",
    "compute_lumpsum",
    "compute_projection",
    "compute_required_sip",
    "compute_sip",
    "compute_swp",
    "convert_withdrawal",
    "scheduled_total_withdrawals",
    "summarize_withdrawal_rate",
    "sustainable_withdrawal",
    "withdrawal_amount_from_rate",
    "withdrawal_rate_from_amount",
]
