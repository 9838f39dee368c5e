"""Indian financial year and TDS escrow date helpers.

The financial year runs April to March, so January-March belongs to the FY
that started in the previous calendar year. TDS held in FD matures 30 days
after the end of the payment's quarter, plus 5 working days.

Functions that default to "today" accept the date explicitly for tests.
"""

from datetime import date, timedelta
from typing import Optional

from .constants import FD_MATURITY

# Quarter (by calendar month) -> (month, day) of its last day
_QUARTER_ENDS = {
    (4, 5, 6): (6, 30),
    (7, 8, 9): (9, 30),
    (10, 11, 12): (12, 31),
    (1, 2, 3): (3, 31),
}


def get_financial_year(d: date) -> str:
    """Return the FY label for a date, e.g. "2024-2025"."""
    if d.month < 4:
        return f"{d.year - 1}-{d.year}"
    return f"{d.year}-{d.year + 1}"


def get_current_financial_year(today: Optional[date] = None) -> str:
    """Return the FY label for today."""
    return get_financial_year(today or date.today())


def get_quarter_end_date(d: Optional[date] = None) -> date:
    """Return the last day of the fiscal quarter containing `d`.

    Q1 Apr-Jun -> Jun 30, Q2 Jul-Sep -> Sep 30,
    Q3 Oct-Dec -> Dec 31, Q4 Jan-Mar -> Mar 31
    """
    d = d or date.today()
    for months, (month, day) in _QUARTER_ENDS.items():
        if d.month in months:
            return date(d.year, month, day)
    raise ValueError(f"Invalid month: {d.month}")


def calculate_fd_maturity_date(payment_date: Optional[date] = None) -> date:
    """Return the date TDS held in FD for a payment can be released.

    Quarter end + 30 calendar days, then 5 working days (Mon-Fri).
    """
    after_quarter = get_quarter_end_date(payment_date) + timedelta(
        days=FD_MATURITY["quarter_end_days"]
    )

    maturity = after_quarter
    working_days_added = 0
    while working_days_added < FD_MATURITY["buffer_working_days"]:
        maturity += timedelta(days=1)
        if maturity.weekday() < 5:
            working_days_added += 1

    return maturity
