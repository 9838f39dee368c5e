"""Cumulative payment lookup for the TDS threshold.

The FY cumulative threshold is per client-freelancer pair, so the
calculators need the amount already paid this financial year. That lookup
lives here, at the call boundary, behind a small interface:

- LedgerCumulativeSource: sums payments recorded in a JSON ledger file
  in the data directory
- FixedCumulativeSource: returns a fixed amount (demos and tests)

Ledger file format (tds_ledger.json):
    {"payments": [{"client_id": ..., "freelancer_id": ..., "amount": ...,
                   "paid_on": "YYYY-MM-DD", "financial_year": "2025-2026"}]}
"""

import json
import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import List, Optional, Protocol

from .constants import TDS_THRESHOLD
from .fiscal import get_financial_year
from .money import round_to_two
from .schemas import PaymentEntry

logger = logging.getLogger(__name__)

LEDGER_FILENAME = "tds_ledger.json"


class CumulativeSource(Protocol):
    """Looks up FY-to-date payments for a client-freelancer pair."""

    def get_cumulative(self, client_id: str, freelancer_id: str, financial_year: str) -> float:
        ...


class FixedCumulativeSource:
    """Always returns the same cumulative amount."""

    def __init__(self, amount: float = 0):
        self.amount = amount

    def get_cumulative(self, client_id: str, freelancer_id: str, financial_year: str) -> float:
        return self.amount


def get_ledger_path() -> Path:
    """Default ledger location in the data directory."""
    from .config import get_data_path
    return get_data_path(create=False) / LEDGER_FILENAME


def load_payments(ledger_path: Optional[Path] = None) -> List[PaymentEntry]:
    """Load all payment entries. A missing ledger is empty."""
    path = ledger_path or get_ledger_path()
    if not path.exists():
        logger.debug(f"No ledger at {path}")
        return []

    with open(path) as f:
        data = json.load(f)

    return [PaymentEntry(**entry) for entry in data.get("payments", [])]


def record_payment(
    client_id: str,
    freelancer_id: str,
    amount: float,
    paid_on: Optional[date] = None,
    contract_id: Optional[str] = None,
    milestone_index: Optional[int] = None,
    ledger_path: Optional[Path] = None,
) -> PaymentEntry:
    """Append a payment to the ledger.

    The financial year is derived from paid_on (default: today).
    """
    paid_on = paid_on or date.today()
    entry = PaymentEntry(
        client_id=client_id,
        freelancer_id=freelancer_id,
        amount=round_to_two(amount),
        paid_on=paid_on,
        financial_year=get_financial_year(paid_on),
        contract_id=contract_id,
        milestone_index=milestone_index,
    )

    path = ledger_path or get_ledger_path()
    payments = load_payments(path)
    payments.append(entry)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(
            {"payments": [p.model_dump(mode="json") for p in payments]},
            f,
            indent=2,
        )

    logger.debug(f"Recorded {entry.amount:.2f} {client_id}->{freelancer_id} ({entry.financial_year})")
    return entry


class LedgerCumulativeSource:
    """Sums recorded payments for a pair within a financial year."""

    def __init__(self, ledger_path: Optional[Path] = None):
        self.ledger_path = ledger_path

    def get_cumulative(self, client_id: str, freelancer_id: str, financial_year: str) -> float:
        total = 0.0
        for entry in load_payments(self.ledger_path):
            if (
                entry.client_id == client_id
                and entry.freelancer_id == freelancer_id
                and entry.financial_year == financial_year
            ):
                total += entry.amount
        return round_to_two(total)


@dataclass
class ThresholdStatus:
    """FY-to-date position of a client-freelancer pair against the TDS threshold."""

    client_id: str
    freelancer_id: str
    financial_year: str
    cumulative_amount: float

    @property
    def threshold_crossed(self) -> bool:
        return self.cumulative_amount > TDS_THRESHOLD["cumulative_per_fy"]

    @property
    def remaining_before_threshold(self) -> float:
        return max(0.0, round_to_two(TDS_THRESHOLD["cumulative_per_fy"] - self.cumulative_amount))


def get_threshold_status(
    client_id: str,
    freelancer_id: str,
    financial_year: str,
    source: CumulativeSource,
) -> ThresholdStatus:
    """Look up the pair's cumulative and wrap it as a ThresholdStatus."""
    return ThresholdStatus(
        client_id=client_id,
        freelancer_id=freelancer_id,
        financial_year=financial_year,
        cumulative_amount=source.get_cumulative(client_id, freelancer_id, financial_year),
    )
