"""Rich renderer for payout, payable and milestone breakdowns.

Transforms SDK breakdown models into formatted Rich tables.
"""

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from payoutcalc.sdk import (
    MilestonePayment,
    PayableBreakdown,
    PayoutBreakdown,
    format_inr,
)

_TDS_REASON_LABELS = {
    "client_not_tds_deductor": "client is not a TDS deductor",
    "single_payment_exceeds_threshold": "single payment exceeds ₹30,000",
    "cumulative_exceeds_threshold": "FY cumulative exceeds ₹30,000",
    "below_threshold": "below threshold",
}


def _amount(value: Optional[float]) -> str:
    return format_inr(value) if value is not None else "N/A"


def _line_table() -> Table:
    table = Table(show_header=False, box=box.SIMPLE, padding=(0, 2))
    table.add_column("item")
    table.add_column("amount", justify="right")
    return table


def render_payout(console: Console, payout: PayoutBreakdown) -> None:
    """Render a freelancer payout breakdown."""
    table = _line_table()
    table.add_row("Contract Value", format_inr(payout.contract_value))
    table.add_row("Service GST (18%)", _amount(payout.service_gst))
    table.add_row("[bold]Gross Amount[/bold]", f"[bold]{format_inr(payout.gross_amount)}[/bold]")
    table.add_row("Platform Fee (5%)", f"-{format_inr(payout.platform_fee)}")
    table.add_row("GST on Platform Fee", f"-{format_inr(payout.platform_fee_gst)}")
    table.add_row("TCS (1%)", f"-{format_inr(payout.tcs)}")
    if payout.tds is not None:
        table.add_row("TDS (10%)", f"-{format_inr(payout.tds)}")
    else:
        table.add_row("TDS (10%)", "[dim]N/A[/dim]")
    table.add_row("[green bold]Net Payout[/green bold]",
                  f"[green bold]{format_inr(payout.net_payout)}[/green bold]")

    console.print(Panel(table, title="Freelancer Payout", border_style="cyan"))
    _render_tds_note(console, payout.tds_applicable, payout.tds_reason)


def render_payable(console: Console, payable: PayableBreakdown) -> None:
    """Render a client payable breakdown."""
    table = _line_table()
    table.add_row("Service Value", format_inr(payable.service_value))
    table.add_row("Service GST (18%)", _amount(payable.service_gst))
    table.add_row("Total Service Amount", format_inr(payable.total_service_amount))
    table.add_row("Platform Fee (3%)", format_inr(payable.platform_fee))
    table.add_row("GST on Platform Fee", format_inr(payable.platform_fee_gst))
    table.add_row("[bold]Total Payable[/bold]", f"[bold]{format_inr(payable.total_payable)}[/bold]")

    console.print(Panel(table, title="Client Payable", border_style="cyan"))
    if payable.tds_held is not None:
        console.print(
            f"[yellow]TDS held in FD: {format_inr(payable.tds_held)} "
            f"(included in total, released after Form 16A)[/yellow]"
        )


def render_milestones(console: Console, milestones: List[MilestonePayment]) -> None:
    """Render a milestone schedule, one row per phase."""
    if not milestones:
        console.print("[dim]No phases.[/dim]")
        return

    table = Table(box=box.SIMPLE_HEAD, title=f"Phase-wise Payout ({len(milestones)} phases)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Phase")
    table.add_column("Amount", justify="right")
    table.add_column("%", justify="right")
    table.add_column("TDS", justify="right")
    table.add_column("TCS", justify="right")
    table.add_column("Fee + GST", justify="right")
    table.add_column("Net Payout", justify="right", style="green")
    table.add_column("Cumulative", justify="right", style="dim")

    for m in milestones:
        tds = format_inr(m.tds) if m.tds_applicable else "[dim]-[/dim]"
        table.add_row(
            str(m.phase_index + 1),
            m.phase_name,
            format_inr(m.amount),
            f"{m.percentage:g}",
            tds,
            format_inr(m.tcs),
            format_inr(m.platform_fee + m.platform_fee_gst),
            format_inr(m.net_payout),
            format_inr(m.cumulative_amount),
        )

    console.print(table)
    total_net = sum(m.net_payout for m in milestones)
    console.print(f"Total net payout: [green bold]{format_inr(total_net)}[/green bold]")


def _render_tds_note(console: Console, applicable: bool, reason: str) -> None:
    label = _TDS_REASON_LABELS.get(reason, reason)
    if applicable:
        console.print(f"[yellow]TDS applies: {label}[/yellow]")
    else:
        console.print(f"[dim]TDS not applicable: {label}[/dim]")
