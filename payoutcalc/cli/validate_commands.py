"""Validation commands for PAN, GSTIN, financial profile and bids."""

import sys

import click

from payoutcalc.sdk import (
    ProfileInvalidError,
    ProfileNotFoundError,
    format_gstin,
    format_pan,
    get_pan_holder_type,
    get_state_from_gstin,
    load_financial_profile,
    validate_bid_amount,
    validate_financial_profile,
    validate_gstin,
    validate_pan,
    validate_pan_gstin_match,
)


def _report(label: str, result, details: str = "") -> None:
    if result.valid:
        suffix = f" ({details})" if details else ""
        click.echo(click.style(f"{label}: valid", fg="green") + suffix)
    else:
        click.echo(click.style(f"{label}: invalid - {result.error}", fg="red"))


@click.group()
def validate():
    """Validate PAN, GSTIN, the financial profile, or a bid amount.

    Exits with status 1 when validation fails.
    """
    pass


@validate.command("pan")
@click.argument("pan")
def validate_pan_cmd(pan):
    """Validate a PAN number (e.g., ABCDE1234F)."""
    result = validate_pan(pan)
    _report(f"PAN {format_pan(pan)}", result, get_pan_holder_type(format_pan(pan)))
    if not result.valid:
        sys.exit(1)


@validate.command("gstin")
@click.argument("gstin")
@click.option("--pan", help="Check that the GSTIN belongs to this PAN")
def validate_gstin_cmd(gstin, pan):
    """Validate a GSTIN (e.g., 27ABCDE1234F1Z5)."""
    result = validate_gstin(gstin)
    _report(f"GSTIN {format_gstin(gstin)}", result, get_state_from_gstin(format_gstin(gstin)))
    ok = result.valid

    if pan:
        match = validate_pan_gstin_match(pan, gstin)
        _report("PAN match", match)
        ok = ok and match.valid

    if not ok:
        sys.exit(1)


@validate.command("profile")
def validate_profile_cmd():
    """Validate the financial section of profile.yaml."""
    try:
        profile = load_financial_profile(require_exists=True)
    except (ProfileNotFoundError, ProfileInvalidError) as e:
        raise click.ClickException(str(e))

    if profile is None:
        raise click.ClickException("profile.yaml has no 'financial' section")

    result = validate_financial_profile(
        profile.pan_number, profile.gstin_number, profile.is_gst_registered
    )
    if result.valid:
        click.echo(click.style("Financial profile: valid", fg="green"))
        return

    click.echo(click.style("Financial profile: invalid", fg="red"))
    for field, error in result.errors.items():
        click.echo(f"  {field}: {error}")
    sys.exit(1)


@validate.command("bid")
@click.argument("amount", type=float)
@click.option("--budget", type=float, help="Project budget")
@click.option("--min-percentage", type=float, default=None,
              help="Minimum bid as percentage of budget (default: 80)")
def validate_bid_cmd(amount, budget, min_percentage):
    """Validate a bid AMOUNT against a project budget."""
    if min_percentage is None:
        result = validate_bid_amount(amount, budget)
    else:
        result = validate_bid_amount(amount, budget, min_percentage)
    _report("Bid", result)
    if not result.valid:
        sys.exit(1)
