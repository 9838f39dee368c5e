"""Payout Calc command-line interface."""
