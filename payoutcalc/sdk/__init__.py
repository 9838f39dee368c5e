"""Payout Calc SDK - Core functionality for contract payout and TDS calculations."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_profile_path,
    load_profile,
    save_profile,
    load_financial_profile,
    get_data_path,
    ProfileNotFoundError,
    ProfileInvalidError,
)

from .schemas import (
    TDSApplicability,
    PayoutBreakdown,
    PayableBreakdown,
    MilestonePayment,
    ValidationResult,
    ProfileValidationResult,
    FinancialProfile,
    PaymentEntry,
)

from .money import (
    round_to_two,
    calculate_percentage,
    format_inr,
    format_indian_number,
)

from .taxes import (
    check_tds_applicability,
    calculate_freelancer_payout,
    calculate_client_payable,
    calculate_milestone_breakdown,
)

from .validators import (
    validate_pan,
    validate_gstin,
    validate_pan_gstin_match,
    validate_financial_profile,
    validate_bid_amount,
    format_pan,
    format_gstin,
    extract_pan_from_gstin,
    get_pan_holder_type,
    get_state_from_gstin,
)

from .fiscal import (
    get_financial_year,
    get_current_financial_year,
    get_quarter_end_date,
    calculate_fd_maturity_date,
)

from .ledger import (
    CumulativeSource,
    FixedCumulativeSource,
    LedgerCumulativeSource,
    ThresholdStatus,
    get_threshold_status,
    record_payment,
    load_payments,
)

from .phases import (
    get_phases_for_category,
    list_categories,
    load_phase_mapping,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_profile_path",
    "load_profile",
    "save_profile",
    "load_financial_profile",
    "get_data_path",
    "ProfileNotFoundError",
    "ProfileInvalidError",
    # Schemas
    "TDSApplicability",
    "PayoutBreakdown",
    "PayableBreakdown",
    "MilestonePayment",
    "ValidationResult",
    "ProfileValidationResult",
    "FinancialProfile",
    "PaymentEntry",
    # Money
    "round_to_two",
    "calculate_percentage",
    "format_inr",
    "format_indian_number",
    # Calculations
    "check_tds_applicability",
    "calculate_freelancer_payout",
    "calculate_client_payable",
    "calculate_milestone_breakdown",
    # Validators
    "validate_pan",
    "validate_gstin",
    "validate_pan_gstin_match",
    "validate_financial_profile",
    "validate_bid_amount",
    "format_pan",
    "format_gstin",
    "extract_pan_from_gstin",
    "get_pan_holder_type",
    "get_state_from_gstin",
    # Fiscal dates
    "get_financial_year",
    "get_current_financial_year",
    "get_quarter_end_date",
    "calculate_fd_maturity_date",
    # Ledger
    "CumulativeSource",
    "FixedCumulativeSource",
    "LedgerCumulativeSource",
    "ThresholdStatus",
    "get_threshold_status",
    "record_payment",
    "load_payments",
    # Phases
    "get_phases_for_category",
    "list_categories",
    "load_phase_mapping",
]
