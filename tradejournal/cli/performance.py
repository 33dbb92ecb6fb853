"""Breakdown commands for the trading journal CLI.

Time of day, day of week, R:R efficiency, strategies, setup grades,
sessions and mistakes.
"""

from typing import Optional, Sequence

import click
from rich.table import Table

from tradejournal.analytics import (
    drawdown_for_trades,
    mistake_stats,
    mistake_trends,
    rr_efficiency,
    stats_by_hour,
    stats_by_session,
    stats_by_setup_grade,
    stats_by_strategy,
    stats_by_weekday,
)
from tradejournal.cli.common import (
    console,
    format_pct,
    format_pnl,
    get_config,
    json_option,
    load_trades,
    print_json,
    trade_filters,
    trade_type_option,
)
from tradejournal.models import GroupStats


def _group_table(title: str, label: str, rows: Sequence[tuple[str, GroupStats]]) -> Table:
    """Table of grouped stats, one row per (label, stats)."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column(label, style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("W/L", justify="center")
    table.add_column("Win Rate", justify="right")
    table.add_column("Avg P&L", justify="right")
    table.add_column("Total P&L", justify="right")

    for name, group in rows:
        table.add_row(
            name,
            str(group.count),
            f"{group.wins}/{group.losses}",
            format_pct(group.win_rate),
            format_pnl(group.avg_pnl),
            format_pnl(group.total_pnl),
        )
    return table


@click.command()
@json_option
@click.pass_context
def analytics(ctx: click.Context, as_json: bool) -> None:
    """Display time-of-day, day-of-week, R:R efficiency and drawdown."""
    trades = load_trades(ctx)
    time_of_day = stats_by_hour(trades)
    day_of_week = stats_by_weekday(trades)
    efficiency = rr_efficiency(trades)
    drawdown = drawdown_for_trades(trades)

    if as_json:
        print_json({
            "timeOfDay": time_of_day,
            "dayOfWeek": day_of_week,
            "rrEfficiency": efficiency,
            "drawdown": drawdown,
        })
        return

    console.print(_group_table(
        "Time of Day", "Hour", [(f"{h.hour:02d}:00", h) for h in time_of_day]
    ))
    console.print(_group_table(
        "Day of Week", "Day", [(d.day_name, d) for d in day_of_week]
    ))

    table = Table(title="R:R Efficiency", show_header=True, header_style="bold cyan")
    table.add_column("Target", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("Wins", justify="right")
    table.add_column("Actual R", justify="right")
    table.add_column("Efficiency", justify="right")
    for row in efficiency:
        table.add_row(
            row.target_rr,
            str(row.count),
            str(row.wins),
            f"{row.avg_actual_rr:.2f}",
            format_pct(row.efficiency),
        )
    console.print(table)

    console.print(f"\n[bold]Max Drawdown:[/bold] {format_pct(drawdown)}")


@click.command()
@json_option
@click.pass_context
def strategies(ctx: click.Context, as_json: bool) -> None:
    """Display performance per strategy, best first."""
    result = stats_by_strategy(load_trades(ctx))
    if as_json:
        print_json(result)
        return
    console.print(_group_table("Strategy Performance", "Strategy", [(s.strategy or "-", s) for s in result]))


@click.command()
@trade_type_option
@json_option
@click.pass_context
def grades(ctx: click.Context, trade_type: Optional[str], as_json: bool) -> None:
    """Display performance per setup grade (A+, A, B, C)."""
    result = stats_by_setup_grade(load_trades(ctx, trade_filters(trade_type)))
    if as_json:
        print_json(result)
        return
    console.print(_group_table("Setup Grades", "Grade", [(g.setup_grade, g) for g in result]))


@click.command()
@json_option
@click.pass_context
def sessions(ctx: click.Context, as_json: bool) -> None:
    """Display performance per market session."""
    result = stats_by_session(load_trades(ctx))
    if as_json:
        print_json(result)
        return
    console.print(_group_table("Session Performance", "Session", [(s.session or "-", s) for s in result]))


@click.command()
@click.option("--days", type=click.IntRange(min=0), default=None, help="Trend window in days (default from config).")
@json_option
@click.pass_context
def mistakes(ctx: click.Context, days: Optional[int], as_json: bool) -> None:
    """Display mistake frequency, cost and recent trend.

    \b
    Examples:
      tradejournal mistakes
      tradejournal mistakes --days 7
    """
    window = days if days is not None else get_config(ctx)["analytics"]["mistake_trend_days"]
    trades = load_trades(ctx)
    stats_rows = mistake_stats(trades)
    trends = mistake_trends(trades, days=window)

    if as_json:
        print_json({"mistakeStats": stats_rows, "mistakeTrends": trends})
        return

    if not stats_rows:
        console.print("[green]No mistakes logged.[/green]")
        return

    table = Table(title="Mistakes", show_header=True, header_style="bold cyan")
    table.add_column("Mistake", style="bold")
    table.add_column("Count", justify="right")
    table.add_column("Share", justify="right")
    table.add_column("Avg Cost", justify="right")
    table.add_column("Total Cost", justify="right")
    for row in stats_rows:
        table.add_row(
            row.mistake,
            str(row.frequency),
            format_pct(row.percentage),
            format_pnl(row.avg_cost),
            format_pnl(row.total_cost),
        )
    console.print(table)

    costliest = min(stats_rows, key=lambda m: m.total_cost)
    console.print(
        f"\n[bold]Most Costly:[/bold] {costliest.mistake} {format_pnl(costliest.total_cost)}"
    )
    console.print(f"[dim]{sum(t.count for t in trends)} mistakes in the last {window} days[/dim]")
