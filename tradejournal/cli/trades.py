"""Trade history command for the trading journal CLI."""

import csv
from pathlib import Path
from typing import Optional, Sequence

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    console,
    format_pnl,
    get_config,
    json_option,
    print_json,
    query_trades,
    trade_type_option,
)
from tradejournal.models import Trade, TradeResult, TradeType

CSV_HEADERS = [
    "Date",
    "Time",
    "Type",
    "Session",
    "Strategy",
    "Result",
    "P&L",
    "R:R",
    "Grade",
    "Emotion",
    "Mistake",
]

_RESULT_COLORS = {
    TradeResult.WIN: "green",
    TradeResult.LOSS: "red",
    TradeResult.BREAKEVEN: "dim",
}


def export_trades_csv(trades: Sequence[Trade], path: Path) -> int:
    """Write trades to a CSV file.

    Returns:
        Number of rows written.
    """
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADERS)
        for t in trades:
            day = t.log_date or t.timestamp.date()
            writer.writerow([
                day.isoformat(),
                t.entry_time or t.timestamp.strftime("%H:%M"),
                t.trade_type.value,
                t.session,
                t.strategy,
                t.result.value,
                f"{t.pnl:.2f}",
                t.rr,
                t.setup_grade or "",
                t.emotion or "",
                t.mistake,
            ])
    return len(trades)


def trade_table(trades: Sequence[Trade], title: str) -> Table:
    """Rich table of trades in the given order."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Date/Time", style="dim")
    table.add_column("Type", justify="center", style="dim")
    table.add_column("Session")
    table.add_column("Strategy", style="bold")
    table.add_column("Result", justify="center")
    table.add_column("P&L", justify="right")
    table.add_column("R:R", justify="center")
    table.add_column("Grade", justify="center")
    table.add_column("Mistake", max_width=20)

    for t in trades:
        color = _RESULT_COLORS[t.result]
        table.add_row(
            t.timestamp.strftime("%Y-%m-%d %H:%M"),
            t.trade_type.value,
            t.session or "-",
            t.strategy or "-",
            f"[{color}]{t.result.value}[/{color}]",
            format_pnl(t.pnl),
            t.rr,
            t.setup_grade or "-",
            t.mistake if t.has_mistake else "-",
        )

    return table


@click.command()
@trade_type_option
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Number of recent trades (default from config).")
@click.option("--all", "show_all", is_flag=True, default=False, help="Show the full history.")
@click.option("--csv", "csv_path", type=str, default=None, help="Export the trades to a CSV file.")
@json_option
@click.pass_context
def trades(
    ctx: click.Context,
    trade_type: Optional[str],
    limit: Optional[int],
    show_all: bool,
    csv_path: Optional[str],
    as_json: bool,
) -> None:
    """Display recent trades, newest first.

    \b
    Examples:
      tradejournal trades                # Most recent trades
      tradejournal trades --type Live --limit 20
      tradejournal trades --all --csv trades.csv
    """
    if show_all:
        limit = None
    elif limit is None:
        limit = get_config(ctx)["analytics"]["recent_trades_limit"]

    type_filter = TradeType(trade_type) if trade_type else None
    history = query_trades(
        ctx,
        lambda store, user_id: store.get_recent_trades(user_id, limit=limit, trade_type=type_filter),
    )

    if csv_path:
        count = export_trades_csv(history, Path(csv_path).expanduser())
        console.print(f"[green]Exported {count} trades to {csv_path}[/green]")
        return

    if as_json:
        print_json({"trades": history})
        return

    if not history:
        console.print(Panel(
            "[dim]No trades found[/dim]",
            title="[bold]Trade History[/bold]",
            border_style="dim",
        ))
        return

    console.print(trade_table(history, "Trade History"))
    total = sum(t.pnl for t in history)
    console.print(f"\n[bold]Trades:[/bold] {len(history)}")
    console.print(f"[bold]Total P&L:[/bold] {format_pnl(total)}")
