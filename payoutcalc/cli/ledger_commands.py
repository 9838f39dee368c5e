"""Payment ledger commands for TDS cumulative tracking."""

import click

from payoutcalc.sdk import (
    LedgerCumulativeSource,
    format_inr,
    get_current_financial_year,
    get_threshold_status,
    load_payments,
    record_payment,
)


@click.group()
def ledger():
    """Record and inspect payments between client-freelancer pairs.

    The TDS cumulative threshold (₹30,000 per financial year) is tracked
    per pair. Payments recorded here feed the --client/--freelancer
    lookup of the payout and milestones commands.
    """
    pass


@ledger.command("add")
@click.argument("client_id")
@click.argument("freelancer_id")
@click.argument("amount", type=float)
@click.option("--date", "-d", "paid_on", type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Payment date (default: today)")
@click.option("--contract", "contract_id", help="Contract ID")
@click.option("--milestone", "milestone_index", type=int, help="Milestone index (0-based)")
def ledger_add(client_id, freelancer_id, amount, paid_on, contract_id, milestone_index):
    """Record a payment of AMOUNT from CLIENT_ID to FREELANCER_ID."""
    if amount <= 0:
        raise click.BadParameter("Amount must be positive", param_hint="AMOUNT")

    entry = record_payment(
        client_id,
        freelancer_id,
        amount,
        paid_on=paid_on.date() if paid_on else None,
        contract_id=contract_id,
        milestone_index=milestone_index,
    )
    click.echo(
        f"Recorded {format_inr(entry.amount)} on {entry.paid_on.isoformat()} "
        f"(FY {entry.financial_year})"
    )


@ledger.command("show")
@click.argument("client_id", required=False)
@click.argument("freelancer_id", required=False)
@click.option("--fy", "financial_year", help="Financial year (default: current)")
def ledger_show(client_id, freelancer_id, financial_year):
    """List payments, or the threshold status of one pair."""
    fy = financial_year or get_current_financial_year()

    if client_id and freelancer_id:
        status = get_threshold_status(client_id, freelancer_id, fy, LedgerCumulativeSource())
        click.echo(f"{client_id} -> {freelancer_id}, FY {fy}")
        click.echo(f"  Cumulative paid:   {format_inr(status.cumulative_amount)}")
        if status.threshold_crossed:
            click.echo(click.style("  TDS threshold:     crossed", fg="yellow"))
        else:
            click.echo(f"  Until threshold:   {format_inr(status.remaining_before_threshold)}")
        return

    payments = [p for p in load_payments() if p.financial_year == fy]
    if client_id:
        payments = [p for p in payments if p.client_id == client_id]

    if not payments:
        click.echo(f"No payments recorded for FY {fy}.")
        return

    for p in payments:
        click.echo(
            f"{p.paid_on.isoformat()}  {p.client_id} -> {p.freelancer_id}  "
            f"{format_inr(p.amount):>14}"
        )
