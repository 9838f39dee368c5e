"""taxes - Fee, GST, TCS and TDS calculations for contracts.

Scope:
- TDS threshold decision (Section 194J, per client-freelancer pair per FY)
- Freelancer payout and client payable breakdowns
- Equal-split milestone schedules with per-milestone TDS

Constraints:
- Pure calculation - no profile or ledger access
- Callers resolve GST registration, deductor status and cumulative
  history, and pass them in as plain values

Modules:
- tds: TDS applicability decision and TDS amount
- payout: Payout, payable and milestone breakdowns

Usage:
    from payoutcalc.sdk.taxes import calculate_freelancer_payout

    payout = calculate_freelancer_payout(50000, True, client_is_tds_deductor=True)
"""

from .tds import (
    check_tds_applicability,
    calc_tds,
)

from .payout import (
    calculate_freelancer_payout,
    calculate_client_payable,
    calculate_milestone_breakdown,
    calc_service_gst,
    calc_platform_fee,
    calc_tcs,
)

__all__ = [
    # TDS
    "check_tds_applicability",
    "calc_tds",
    # Breakdowns
    "calculate_freelancer_payout",
    "calculate_client_payable",
    "calculate_milestone_breakdown",
    "calc_service_gst",
    "calc_platform_fee",
    "calc_tcs",
]
