"""Rounding and display formatting for INR amounts.

Every monetary value produced by the calculators passes through
round_to_two(). The formatters round the same way so a displayed amount
never differs from the stored one.
"""

import math
import sys

# Nudge applied before rounding so values like 1.005 (stored as 1.00499...)
# round up instead of down.
EPSILON = sys.float_info.epsilon


def round_to_two(amount: float) -> float:
    """Round to 2 decimal places, half up.

    Example: 1.005 -> 1.01, 0.1 + 0.2 -> 0.3
    """
    if not math.isfinite(amount):
        return amount
    return math.floor((amount + EPSILON) * 100 + 0.5) / 100


def calculate_percentage(amount: float, percentage: float) -> float:
    """Return `percentage`% of `amount`, rounded to paise."""
    return round_to_two(amount * (percentage / 100))


def _group_indian(digits: str) -> str:
    # Last three digits, then groups of two (lakh/crore system)
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_indian_number(amount: float) -> str:
    """Format a number with Indian digit grouping and 2 decimals.

    Example: 1234567.5 -> "12,34,567.50"
    """
    value = round_to_two(amount)
    sign = "-" if value < 0 else ""
    whole, fraction = f"{abs(value):.2f}".split(".")
    return f"{sign}{_group_indian(whole)}.{fraction}"


def format_inr(amount: float) -> str:
    """Format an amount as Indian Rupees (e.g., "₹50,000.00")."""
    formatted = format_indian_number(amount)
    if formatted.startswith("-"):
        return f"-₹{formatted[1:]}"
    return f"₹{formatted}"
