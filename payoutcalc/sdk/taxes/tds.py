"""TDS applicability decision.

TDS (Section 194J) is withheld only when the paying client is a TDS
deductor and the payment crosses a threshold. The checks run in a fixed
order, and the first one that matches decides:

1. Client is not a TDS deductor -> never applicable
2. Explicit override supplied -> honoured as given
3. Single payment > 30,000 -> applicable
4. Prior cumulative + payment > 30,000 in the FY -> applicable
5. Otherwise -> not applicable
"""

import logging
from typing import Optional

from ..constants import TAX_RATES, TDS_THRESHOLD, rate
from ..money import round_to_two
from ..schemas import TDSApplicability

logger = logging.getLogger(__name__)


def check_tds_applicability(
    current_amount: float,
    cumulative_amount: float,
    client_is_tds_deductor: bool,
    force_applicable: Optional[bool] = None,
) -> TDSApplicability:
    """Decide whether TDS applies to a payment.

    Args:
        current_amount: Amount of this payment
        cumulative_amount: Amount already paid by the same client to the same
            freelancer in this financial year (excluding this payment)
        client_is_tds_deductor: Whether the paying client deducts TDS
        force_applicable: Override to force a scenario (demos and tests).
            Ignored when the client is not a deductor.

    Returns:
        TDSApplicability with the decision and its reason
    """
    if not client_is_tds_deductor:
        result = TDSApplicability(tds_applicable=False, tds_reason="client_not_tds_deductor")
    elif force_applicable is not None:
        result = TDSApplicability(
            tds_applicable=force_applicable,
            tds_reason="single_payment_exceeds_threshold" if force_applicable else "below_threshold",
        )
    elif current_amount > TDS_THRESHOLD["single_payment"]:
        result = TDSApplicability(tds_applicable=True, tds_reason="single_payment_exceeds_threshold")
    elif cumulative_amount + current_amount > TDS_THRESHOLD["cumulative_per_fy"]:
        result = TDSApplicability(tds_applicable=True, tds_reason="cumulative_exceeds_threshold")
    else:
        result = TDSApplicability(tds_applicable=False, tds_reason="below_threshold")

    logger.debug(
        f"TDS check: amount={current_amount:.2f} cumulative={cumulative_amount:.2f} "
        f"deductor={client_is_tds_deductor} force={force_applicable} -> {result.tds_reason}"
    )
    return result


def calc_tds(amount: float) -> float:
    """TDS on an amount (10%), rounded to paise."""
    return round_to_two(amount * rate(TAX_RATES["tds"]))
