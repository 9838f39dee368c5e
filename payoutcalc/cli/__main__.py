"""Payout Calc CLI - Command-line interface for contract payout calculations."""

import json
import logging
import os
from datetime import date
from typing import Optional

import click
from rich.console import Console

from payoutcalc import __version__
from payoutcalc.sdk import (
    FixedCumulativeSource,
    LedgerCumulativeSource,
    ProfileInvalidError,
    calculate_client_payable,
    calculate_fd_maturity_date,
    calculate_freelancer_payout,
    calculate_milestone_breakdown,
    get_current_financial_year,
    get_financial_year,
    get_phases_for_category,
    get_quarter_end_date,
    get_setting,
    list_categories,
    load_financial_profile,
)

from .ledger_commands import ledger as ledger_group
from .profile_commands import profile as profile_group
from .profile_commands import settings as settings_group
from .renderers.breakdown_renderer import render_milestones, render_payable, render_payout
from .validate_commands import validate as validate_group


def _configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@click.group()
@click.version_option(version=__version__, prog_name="payout-calc")
@click.option("--verbose", "-v", is_flag=True, help="Log calculation details")
def cli(verbose):
    """Payout Calc - Contract payout, payable and TDS calculations.

    Computes GST, platform fee, TCS and TDS for freelance contracts under
    Indian tax rules.

    Configuration is loaded from (in order):

    \b
    1. PAYOUT_CALC_CONFIG_PATH environment variable
    2. ~/.config/payout-calc/ (XDG default)

    GST registration and TDS deductor defaults come from the 'financial'
    section of profile.yaml. Run 'payout-calc profile show' to check it.
    """
    _configure_logging(verbose)


cli.add_command(validate_group)
cli.add_command(ledger_group)
cli.add_command(profile_group)
cli.add_command(settings_group)


def _profile():
    try:
        return load_financial_profile()
    except ProfileInvalidError as e:
        raise click.ClickException(str(e))


def _resolve_flag(value: Optional[bool], profile_value: Optional[bool], flag_names: str) -> bool:
    """Use an explicit flag, else the profile value, else fail."""
    if value is not None:
        return value
    if profile_value is not None:
        return profile_value
    raise click.UsageError(f"Specify {flag_names} (not set in profile)")


def _resolve_cumulative(
    cumulative: Optional[float],
    client_id: Optional[str],
    freelancer_id: Optional[str],
    financial_year: Optional[str],
) -> float:
    """Pick the cumulative source: explicit amount, ledger lookup, or zero."""
    if cumulative is not None and (client_id or freelancer_id):
        raise click.UsageError("Use either --cumulative or --client/--freelancer, not both")

    if client_id or freelancer_id:
        if not (client_id and freelancer_id):
            raise click.UsageError("--client and --freelancer must be given together")
        source = LedgerCumulativeSource()
    else:
        source = FixedCumulativeSource(cumulative or 0)

    fy = financial_year or get_current_financial_year()
    return source.get_cumulative(client_id or "", freelancer_id or "", fy)


def _output_json(output_json: bool) -> bool:
    return output_json or get_setting("default_output_format") == "json"


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


_cumulative_options = [
    click.option("--cumulative", type=float, default=None,
                 help="Amount already paid by this client to this freelancer in the FY"),
    click.option("--client", "client_id", help="Client ID for ledger cumulative lookup"),
    click.option("--freelancer", "freelancer_id", help="Freelancer ID for ledger cumulative lookup"),
    click.option("--fy", "financial_year", help="Financial year for ledger lookup (default: current)"),
]


def cumulative_options(func):
    for option in reversed(_cumulative_options):
        func = option(func)
    return func


@cli.command("payout")
@click.argument("amount", type=float)
@click.option("--gst/--no-gst", "gst_registered", default=None,
              help="Freelancer is GST registered (default: from profile)")
@click.option("--deductor/--non-deductor", "client_is_deductor", default=None,
              help="Client is a TDS deductor")
@click.option("--force-tds/--no-force-tds", "force_tds", default=None,
              help="Force the TDS decision (demos)")
@cumulative_options
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def payout(amount, gst_registered, client_is_deductor, force_tds,
           cumulative, client_id, freelancer_id, financial_year, output_json):
    """Show what a freelancer nets from a contract of AMOUNT.

    \b
    Examples:
      payout-calc payout 50000 --gst --deductor --force-tds
      payout-calc payout 25000 --no-gst --deductor --cumulative 10000
      payout-calc payout 25000 --deductor --client c1 --freelancer f1
    """
    profile = _profile()
    gst_registered = _resolve_flag(
        gst_registered, profile.is_gst_registered if profile else None, "--gst or --no-gst"
    )
    if client_is_deductor is None:
        raise click.UsageError("Specify --deductor or --non-deductor for the paying client")

    prior = _resolve_cumulative(cumulative, client_id, freelancer_id, financial_year)
    result = calculate_freelancer_payout(
        amount,
        gst_registered,
        client_is_tds_deductor=client_is_deductor,
        force_tds_applicable=force_tds,
        cumulative_amount=prior,
    )

    if _output_json(output_json):
        _echo_json(result.model_dump(mode="json"))
        return

    render_payout(Console(), result)


@cli.command("payable")
@click.argument("amount", type=float)
@click.option("--gst/--no-gst", "gst_registered", default=None,
              help="Freelancer is GST registered")
@click.option("--deductor/--non-deductor", "client_is_deductor", default=None,
              help="Client is a TDS deductor (default: from profile)")
@click.option("--force-tds/--no-force-tds", "force_tds", default=None,
              help="Force the TDS decision (demos)")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def payable(amount, gst_registered, client_is_deductor, force_tds, output_json):
    """Show what a client pays for a contract of AMOUNT.

    \b
    Examples:
      payout-calc payable 50000 --gst --deductor --force-tds
    """
    profile = _profile()
    if gst_registered is None:
        raise click.UsageError("Specify --gst or --no-gst for the freelancer")
    client_is_deductor = _resolve_flag(
        client_is_deductor, profile.is_tds_deductor if profile else None,
        "--deductor or --non-deductor",
    )

    result = calculate_client_payable(
        amount,
        gst_registered,
        client_is_tds_deductor=client_is_deductor,
        force_tds_applicable=force_tds,
    )

    if _output_json(output_json):
        _echo_json(result.model_dump(mode="json"))
        return

    render_payable(Console(), result)


@cli.command("milestones")
@click.argument("amount", type=float)
@click.option("--phase", "-p", "phases", multiple=True, help="Phase name (repeat, in order)")
@click.option("--category", "-c", help="Project category to look up phases for")
@click.option("--gst/--no-gst", "gst_registered", default=None,
              help="Freelancer is GST registered (default: from profile)")
@click.option("--deductor/--non-deductor", "client_is_deductor", default=None,
              help="Client is a TDS deductor")
@cumulative_options
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def milestones(amount, phases, category, gst_registered, client_is_deductor,
               cumulative, client_id, freelancer_id, financial_year, output_json):
    """Split a contract of AMOUNT into phase-wise milestone payouts.

    Phases come from --phase options, or from the --category lookup table.

    \b
    Examples:
      payout-calc milestones 100000 -c "Web Development" --gst --deductor
      payout-calc milestones 60000 -p Design -p Build -p Launch --no-gst --deductor
    """
    if phases and category:
        raise click.UsageError("Use either --phase or --category, not both")
    if not phases and not category:
        raise click.UsageError(
            "Specify phases with --phase or a --category. Known categories: "
            + ", ".join(list_categories())
        )

    phase_list = list(phases) if phases else get_phases_for_category(category)

    profile = _profile()
    gst_registered = _resolve_flag(
        gst_registered, profile.is_gst_registered if profile else None, "--gst or --no-gst"
    )
    if client_is_deductor is None:
        raise click.UsageError("Specify --deductor or --non-deductor for the paying client")

    prior = _resolve_cumulative(cumulative, client_id, freelancer_id, financial_year)
    schedule = calculate_milestone_breakdown(
        amount,
        phase_list,
        gst_registered,
        client_is_tds_deductor=client_is_deductor,
        cumulative_amount_paid=prior,
    )

    if _output_json(output_json):
        _echo_json([m.model_dump(mode="json") for m in schedule])
        return

    render_milestones(Console(), schedule)


@cli.command("fy")
@click.option("--date", "-d", "on_date", type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Payment date (default: today)")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def fy(on_date, output_json):
    """Show financial year, quarter end and TDS FD maturity for a date."""
    d = on_date.date() if on_date else date.today()

    info = {
        "date": d.isoformat(),
        "financial_year": get_financial_year(d),
        "quarter_end": get_quarter_end_date(d).isoformat(),
        "fd_maturity": calculate_fd_maturity_date(d).isoformat(),
    }

    if _output_json(output_json):
        _echo_json(info)
        return

    click.echo(f"Date:            {info['date']}")
    click.echo(f"Financial year:  {info['financial_year']}")
    click.echo(f"Quarter end:     {info['quarter_end']}")
    click.echo(f"FD maturity:     {info['fd_maturity']}")


@cli.command("phases")
@click.argument("category", required=False)
def phases_cmd(category):
    """List phase lists by project category, or the phases for CATEGORY."""
    if category:
        for i, name in enumerate(get_phases_for_category(category), 1):
            click.echo(f"{i}. {name}")
        return

    for name in list_categories():
        click.echo(f"{name}: {', '.join(get_phases_for_category(name))}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
