"""Pydantic schemas for payout calculation results.

All result schemas are frozen value records. They use extra='forbid' so a
misspelled field in a caller-built record fails loudly, and each breakdown
checks its own arithmetic after construction.
"""

from datetime import date
from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


TDSReason = Literal[
    "client_not_tds_deductor",
    "single_payment_exceeds_threshold",
    "cumulative_exceeds_threshold",
    "below_threshold",
]

MilestoneStatus = Literal["pending", "in_progress", "completed", "paid"]

# Every amount is rounded to paise, so anything beyond one paisa is a real error
TOLERANCE = 0.011


# =============================================================================
# TDS
# =============================================================================


class TDSApplicability(BaseModel):
    """Outcome of the TDS threshold decision for a single payment."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tds_applicable: bool
    tds_reason: TDSReason


# =============================================================================
# Breakdowns
# =============================================================================


class PayoutBreakdown(BaseModel):
    """What a freelancer receives for a contract after all deductions."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    contract_value: float = Field(..., description="Original contract/bid value")
    service_gst: Optional[float] = Field(
        default=None,
        description="GST on service (18%); None if freelancer not GST registered",
    )
    gross_amount: float = Field(..., description="Contract value plus service GST")
    platform_fee: float = Field(..., description="Platform fee (5% of contract value)")
    platform_fee_gst: float = Field(..., description="GST on platform fee (18% of fee)")
    tcs: float = Field(..., description="Tax Collected at Source (1% of contract value)")
    tds: Optional[float] = Field(
        default=None,
        description="TDS (10% of contract value); None if not applicable",
    )
    tds_applicable: bool
    tds_reason: TDSReason
    net_payout: float = Field(..., description="Final amount paid to the freelancer")

    @model_validator(mode="after")
    def check_coherence(self) -> "PayoutBreakdown":
        """Validate gross and net amounts against their components."""
        errors = []

        expected_gross = self.contract_value + (self.service_gst or 0)
        if abs(self.gross_amount - expected_gross) > TOLERANCE:
            errors.append(
                f"gross_amount ({self.gross_amount:.2f}) != "
                f"contract_value + service_gst ({expected_gross:.2f})"
            )

        expected_net = (
            self.gross_amount - self.platform_fee - self.platform_fee_gst
            - self.tcs - (self.tds or 0)
        )
        if abs(self.net_payout - expected_net) > TOLERANCE:
            errors.append(
                f"net_payout ({self.net_payout:.2f}) != "
                f"gross - fees - tcs - tds ({expected_net:.2f})"
            )

        if errors:
            raise ValueError("; ".join(errors))

        return self

    @property
    def total_deductions(self) -> float:
        """Everything withheld from the gross amount."""
        return self.platform_fee + self.platform_fee_gst + self.tcs + (self.tds or 0)


class PayableBreakdown(BaseModel):
    """What a client pays for a contract.

    TDS is informational: it is held out of the same total, not added to it.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    service_value: float
    service_gst: Optional[float] = None
    total_service_amount: float
    platform_fee: float = Field(..., description="Platform fee (3% of contract value)")
    platform_fee_gst: float
    tds_held: Optional[float] = Field(
        default=None,
        description="TDS held in FD (10% of contract value); None if not applicable",
    )
    tds_applicable: bool
    total_payable: float

    @model_validator(mode="after")
    def check_coherence(self) -> "PayableBreakdown":
        expected = self.total_service_amount + self.platform_fee + self.platform_fee_gst
        if abs(self.total_payable - expected) > TOLERANCE:
            raise ValueError(
                f"total_payable ({self.total_payable:.2f}) != "
                f"service + platform fee + fee GST ({expected:.2f})"
            )
        return self


class MilestonePayment(BaseModel):
    """One phase of a contract's payment schedule."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    phase_index: int = Field(..., ge=0, description="0-based position in the schedule")
    phase_name: str
    amount: float = Field(..., description="Portion of the contract value")
    percentage: float = Field(..., description="Percentage of total contract")
    tds_applicable: bool
    tds: float = Field(default=0, description="TDS for this milestone (0 if not applicable)")
    tcs: float
    service_gst: Optional[float] = None
    platform_fee: float
    platform_fee_gst: float
    net_payout: float
    cumulative_amount: float = Field(
        ..., description="Cumulative paid so far, including this milestone"
    )
    status: MilestoneStatus = "pending"

    @model_validator(mode="after")
    def check_coherence(self) -> "MilestonePayment":
        gross = self.amount + (self.service_gst or 0)
        expected_net = gross - self.platform_fee - self.platform_fee_gst - self.tcs - self.tds
        if abs(self.net_payout - expected_net) > TOLERANCE:
            raise ValueError(
                f"net_payout ({self.net_payout:.2f}) != "
                f"phase gross - fees - tcs - tds ({expected_net:.2f})"
            )
        return self

    @property
    def gross_amount(self) -> float:
        return self.amount + (self.service_gst or 0)


# =============================================================================
# Validation
# =============================================================================


class ValidationResult(BaseModel):
    """Result of validating a single input field."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    valid: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(valid=False, error=error)


class ProfileValidationResult(BaseModel):
    """Result of validating a financial profile, errors keyed by field."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    valid: bool
    errors: Dict[str, str] = Field(default_factory=dict)


# =============================================================================
# Profile and ledger
# =============================================================================


class FinancialProfile(BaseModel):
    """User financial details, as stored in profile.yaml."""

    model_config = ConfigDict(extra="forbid")

    pan_number: Optional[str] = None
    gstin_number: Optional[str] = None
    is_gst_registered: bool = False
    is_tds_deductor: bool = Field(
        default=False,
        description="Whether this user deducts TDS when paying as a client",
    )
    billing_address: Optional[str] = None


class PaymentEntry(BaseModel):
    """A payment from a client to a freelancer, used for TDS cumulative tracking."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    client_id: str
    freelancer_id: str
    amount: float
    paid_on: date
    financial_year: str = Field(..., pattern=r"^\d{4}-\d{4}$")
    contract_id: Optional[str] = None
    milestone_index: Optional[int] = None
