"""Validation for financial profile fields and bid amounts.

Validators never raise on bad input. A malformed PAN or GSTIN is an
expected condition the caller shows to the user, so every check returns a
ValidationResult (or ProfileValidationResult) instead.

Usage:
    from payoutcalc.sdk.validators import validate_pan, validate_gstin

    validate_pan("ABCDE1234F")        # valid=True
    validate_pan("ABC1234F")          # valid=False, error="PAN must be ..."
    validate_gstin("27ABCDE1234F1Z5") # valid=True
"""

import logging
import math
from typing import Optional

from .constants import (
    GSTIN_PATTERN,
    GSTIN_STATE_CODES,
    MIN_BID_PERCENTAGE,
    PAN_HOLDER_TYPE_INDEX,
    PAN_HOLDER_TYPES,
    PAN_PATTERN,
    PAN_VALIDATION_TYPE_INDEX,
)
from .money import format_indian_number
from .schemas import ProfileValidationResult, ValidationResult

logger = logging.getLogger(__name__)


# =============================================================================
# PAN
# =============================================================================


def format_pan(pan: str) -> str:
    """Normalize a PAN (trim and uppercase)."""
    return pan.strip().upper()


def validate_pan(pan: Optional[str]) -> ValidationResult:
    """Validate PAN number format.

    Format: XXXXX0000X (5 letters, 4 digits, 1 letter), with a known
    holder type code at PAN_VALIDATION_TYPE_INDEX.
    """
    if not pan or not pan.strip():
        return ValidationResult.fail("PAN number is required")

    clean_pan = format_pan(pan)

    if len(clean_pan) != 10:
        return ValidationResult.fail("PAN must be exactly 10 characters")

    if not PAN_PATTERN.match(clean_pan):
        return ValidationResult.fail(
            "Invalid PAN format. Must be 5 letters, 4 digits, 1 letter (e.g., ABCDE1234F)"
        )

    if clean_pan[PAN_VALIDATION_TYPE_INDEX] not in PAN_HOLDER_TYPES:
        return ValidationResult.fail("Invalid PAN holder type character")

    return ValidationResult.ok()


def get_pan_holder_type(pan: Optional[str]) -> str:
    """Describe the PAN holder type from its 4th character."""
    if not pan or len(pan) <= PAN_HOLDER_TYPE_INDEX:
        return "Unknown"
    return PAN_HOLDER_TYPES.get(pan[PAN_HOLDER_TYPE_INDEX].upper(), "Unknown")


# =============================================================================
# GSTIN
# =============================================================================


def format_gstin(gstin: str) -> str:
    """Normalize a GSTIN (trim and uppercase)."""
    return gstin.strip().upper()


def extract_pan_from_gstin(gstin: Optional[str]) -> Optional[str]:
    """Return the PAN embedded in characters 3-12 of a GSTIN."""
    if not gstin or len(gstin) < 12:
        return None
    return gstin[2:12].upper()


def validate_gstin(gstin: Optional[str]) -> ValidationResult:
    """Validate GSTIN format.

    GSTIN is optional, so an empty value is valid. Whether a GST-registered
    user must provide one is checked by validate_financial_profile().

    Format: 2 digit state code + 10 char PAN + entity number + Z + checksum
    """
    if not gstin or not gstin.strip():
        return ValidationResult.ok()

    clean_gstin = format_gstin(gstin)

    if len(clean_gstin) != 15:
        return ValidationResult.fail("GSTIN must be exactly 15 characters")

    if not GSTIN_PATTERN.match(clean_gstin):
        return ValidationResult.fail("Invalid GSTIN format")

    if clean_gstin[:2] not in GSTIN_STATE_CODES:
        return ValidationResult.fail("Invalid state code in GSTIN")

    if not validate_pan(clean_gstin[2:12]).valid:
        return ValidationResult.fail("Invalid PAN embedded in GSTIN")

    return ValidationResult.ok()


def get_state_from_gstin(gstin: Optional[str]) -> str:
    """Return the state name for a GSTIN's 2 digit state code."""
    if not gstin or len(gstin) < 2:
        return "Unknown"
    return GSTIN_STATE_CODES.get(gstin[:2], "Unknown")


def validate_pan_gstin_match(pan: str, gstin: str) -> ValidationResult:
    """Check that the PAN embedded in a GSTIN is the user's PAN.

    A mismatch is a hard error: the GSTIN belongs to a different taxpayer.
    """
    embedded_pan = extract_pan_from_gstin(format_gstin(gstin))
    if embedded_pan is not None and embedded_pan != format_pan(pan):
        logger.debug(f"GSTIN PAN {embedded_pan} != profile PAN {format_pan(pan)}")
        return ValidationResult.fail("PAN in GSTIN does not match provided PAN number")
    return ValidationResult.ok()


# =============================================================================
# Combined
# =============================================================================


def validate_financial_profile(
    pan_number: Optional[str],
    gstin_number: Optional[str],
    is_gst_registered: bool,
) -> ProfileValidationResult:
    """Validate all financial profile fields together.

    Rules:
    - PAN is mandatory
    - GSTIN is mandatory for GST registered users, otherwise validated only
      when provided
    - The PAN inside the GSTIN must match the PAN

    Returns:
        ProfileValidationResult with errors keyed by "pan_number" / "gstin_number"
    """
    errors = {}

    if pan_number:
        pan_result = validate_pan(pan_number)
        if not pan_result.valid:
            errors["pan_number"] = pan_result.error
    else:
        errors["pan_number"] = "PAN number is required"

    if is_gst_registered and not gstin_number:
        errors["gstin_number"] = "GSTIN is required for GST registered users"
    elif gstin_number:
        gstin_result = validate_gstin(gstin_number)
        if not gstin_result.valid:
            errors["gstin_number"] = gstin_result.error

    # Mismatch overrides any format error on the GSTIN
    if pan_number and gstin_number and len(gstin_number.strip()) >= 12:
        match_result = validate_pan_gstin_match(pan_number, gstin_number)
        if not match_result.valid:
            errors["gstin_number"] = match_result.error

    return ProfileValidationResult(valid=not errors, errors=errors)


def validate_bid_amount(
    amount: float,
    project_budget: Optional[float] = None,
    min_percentage: float = MIN_BID_PERCENTAGE,
) -> ValidationResult:
    """Validate a bid against the project budget.

    A bid must be positive and, when the project has a budget, at least
    min_percentage of it.
    """
    if amount is None or math.isnan(amount) or amount <= 0:
        return ValidationResult.fail("Please enter a valid bid amount")

    if project_budget and project_budget > 0:
        min_bid = project_budget * (min_percentage / 100)
        if amount < min_bid:
            return ValidationResult.fail(
                f"Minimum bid is ₹{format_indian_number(min_bid)} "
                f"({min_percentage:g}% of project budget)"
            )

    return ValidationResult.ok()
