"""Payout Calc - contract payout, payable and TDS calculations."""

__version__ = "0.1.0"
