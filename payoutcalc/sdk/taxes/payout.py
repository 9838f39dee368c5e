"""Payout, payable and milestone calculations.

Implements the platform's fee and tax decomposition of a contract value:

    Freelancer payout:
        gross      = contract + GST on service (18%, if GST registered)
        net payout = gross - platform fee (5%) - GST on fee (18%)
                     - TCS (1%) - TDS (10%, if applicable)

    Client payable:
        total = contract + GST on service + platform fee (3%) + GST on fee

Every intermediate amount is rounded to paise before it is used in the
next step, so the stored breakdown always reconciles to the paisa.

These are pure functions. Profile flags (GST registration, TDS deductor
status) and cumulative history are looked up by the caller and passed in.
"""

import logging
from typing import List, Optional, Sequence

from ..constants import PLATFORM_FEES, TAX_RATES, rate
from ..money import round_to_two
from ..schemas import MilestonePayment, PayableBreakdown, PayoutBreakdown
from .tds import calc_tds, check_tds_applicability

logger = logging.getLogger(__name__)


def calc_service_gst(amount: float, gst_registered: bool) -> Optional[float]:
    """GST on service (18%), or None when the freelancer is not registered."""
    if not gst_registered:
        return None
    return round_to_two(amount * rate(TAX_RATES["gst"]))


def calc_platform_fee(amount: float, percentage: float) -> tuple:
    """Platform fee and the GST charged on it.

    Returns:
        Tuple of (platform_fee, platform_fee_gst)
    """
    fee = round_to_two(amount * rate(percentage))
    fee_gst = round_to_two(fee * rate(TAX_RATES["gst"]))
    return fee, fee_gst


def calc_tcs(amount: float) -> float:
    """TCS (1%). Collected regardless of GST or TDS status."""
    return round_to_two(amount * rate(TAX_RATES["tcs"]))


def calculate_freelancer_payout(
    contract_value: float,
    freelancer_gst_registered: bool,
    *,
    client_is_tds_deductor: bool,
    force_tds_applicable: Optional[bool] = None,
    cumulative_amount: float = 0,
) -> PayoutBreakdown:
    """Calculate what a freelancer nets from a contract.

    Args:
        contract_value: Contract (accepted bid) value in INR
        freelancer_gst_registered: Whether the freelancer charges GST
        client_is_tds_deductor: Whether the paying client deducts TDS
        force_tds_applicable: Optional override for the TDS decision
        cumulative_amount: Prior payments from the same client to this
            freelancer in the current financial year

    Returns:
        PayoutBreakdown

    Example:
        payout = calculate_freelancer_payout(
            50000, True, client_is_tds_deductor=True, force_tds_applicable=True,
        )
        payout.net_payout  # 50550.0
    """
    service_gst = calc_service_gst(contract_value, freelancer_gst_registered)
    gross_amount = round_to_two(contract_value + (service_gst or 0))

    platform_fee, platform_fee_gst = calc_platform_fee(
        contract_value, PLATFORM_FEES["freelancer_percentage"]
    )
    tcs = calc_tcs(contract_value)

    applicability = check_tds_applicability(
        contract_value,
        cumulative_amount,
        client_is_tds_deductor,
        force_tds_applicable,
    )
    tds = calc_tds(contract_value) if applicability.tds_applicable else None

    net_payout = gross_amount - platform_fee - platform_fee_gst - tcs
    if tds is not None:
        net_payout -= tds
    net_payout = round_to_two(net_payout)

    return PayoutBreakdown(
        contract_value=contract_value,
        service_gst=service_gst,
        gross_amount=gross_amount,
        platform_fee=platform_fee,
        platform_fee_gst=platform_fee_gst,
        tcs=tcs,
        tds=tds,
        tds_applicable=applicability.tds_applicable,
        tds_reason=applicability.tds_reason,
        net_payout=net_payout,
    )


def calculate_client_payable(
    contract_value: float,
    freelancer_gst_registered: bool,
    *,
    client_is_tds_deductor: bool,
    force_tds_applicable: Optional[bool] = None,
) -> PayableBreakdown:
    """Calculate what a client pays for a contract.

    The TDS check here always uses a cumulative of 0; the client view does
    not track history. tds_held is the portion of the total that goes to
    FD instead of the freelancer, it is not added to total_payable.
    """
    service_gst = calc_service_gst(contract_value, freelancer_gst_registered)
    total_service_amount = round_to_two(contract_value + (service_gst or 0))

    platform_fee, platform_fee_gst = calc_platform_fee(
        contract_value, PLATFORM_FEES["client_percentage"]
    )

    applicability = check_tds_applicability(
        contract_value, 0, client_is_tds_deductor, force_tds_applicable
    )
    tds_held = calc_tds(contract_value) if applicability.tds_applicable else None

    total_payable = round_to_two(total_service_amount + platform_fee + platform_fee_gst)

    return PayableBreakdown(
        service_value=contract_value,
        service_gst=service_gst,
        total_service_amount=total_service_amount,
        platform_fee=platform_fee,
        platform_fee_gst=platform_fee_gst,
        tds_held=tds_held,
        tds_applicable=applicability.tds_applicable,
        total_payable=total_payable,
    )


def calculate_milestone_breakdown(
    contract_value: float,
    phases: Sequence[str],
    freelancer_gst_registered: bool,
    *,
    client_is_tds_deductor: bool,
    cumulative_amount_paid: float = 0,
) -> List[MilestonePayment]:
    """Split a contract into equal milestones, one per phase.

    The last phase absorbs the rounding remainder so the milestone amounts
    always sum to the contract value. TDS is decided per milestone against
    a running cumulative, so a later phase can cross the FY threshold that
    an earlier one did not.

    Args:
        contract_value: Total contract value
        phases: Ordered phase names
        freelancer_gst_registered: Whether the freelancer charges GST
        client_is_tds_deductor: Whether the paying client deducts TDS
        cumulative_amount_paid: Prior payments in the FY for this pair

    Returns:
        List of MilestonePayment in phase order (empty if no phases)
    """
    num_phases = len(phases)
    if num_phases == 0:
        return []

    amount_per_phase = round_to_two(contract_value / num_phases)
    percentage_per_phase = round_to_two(100 / num_phases)

    cumulative = cumulative_amount_paid
    milestones = []

    for index, phase_name in enumerate(phases):
        if index == num_phases - 1:
            phase_amount = round_to_two(contract_value - amount_per_phase * index)
        else:
            phase_amount = amount_per_phase

        applicability = check_tds_applicability(
            phase_amount, cumulative, client_is_tds_deductor
        )
        tds = calc_tds(phase_amount) if applicability.tds_applicable else 0
        tcs = calc_tcs(phase_amount)
        service_gst = calc_service_gst(phase_amount, freelancer_gst_registered)
        platform_fee, platform_fee_gst = calc_platform_fee(
            phase_amount, PLATFORM_FEES["freelancer_percentage"]
        )
        gross_amount = round_to_two(phase_amount + (service_gst or 0))

        net_payout = round_to_two(gross_amount - platform_fee - platform_fee_gst - tcs - tds)
        cumulative = round_to_two(cumulative + phase_amount)

        milestones.append(MilestonePayment(
            phase_index=index,
            phase_name=phase_name,
            amount=phase_amount,
            percentage=percentage_per_phase,
            tds_applicable=applicability.tds_applicable,
            tds=tds,
            tcs=tcs,
            service_gst=service_gst,
            platform_fee=platform_fee,
            platform_fee_gst=platform_fee_gst,
            net_payout=net_payout,
            cumulative_amount=cumulative,
        ))

    logger.debug(
        f"Milestones: {num_phases} phases of {amount_per_phase:.2f}, "
        f"last {milestones[-1].amount:.2f}, cumulative {cumulative:.2f}"
    )
    return milestones
