"""Overview commands for the trading journal CLI.

Headline stats, equity curve, streaks and the P&L calendar.
"""

import calendar as calendar_module
from datetime import date
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.analytics import (
    build_equity_curve,
    calculate_current_streak,
    calculate_streaks,
    calendar_days,
    drawdown_for_trades,
    performance_summary,
    round2,
    user_stats,
)
from tradejournal.cli.common import (
    console,
    error_panel,
    format_pct,
    format_pnl,
    get_config,
    json_option,
    load_trades,
    print_json,
    query_trades,
    trade_filters,
    trade_type_option,
)
from tradejournal.cli.trades import trade_table


def _streak_label(streak_type: str, count: int) -> str:
    if streak_type == "win":
        return f"[green]{count}W[/green]"
    if streak_type == "loss":
        return f"[red]{count}L[/red]"
    return "[dim]-[/dim]"


@click.command()
@trade_type_option
@json_option
@click.pass_context
def stats(ctx: click.Context, trade_type: Optional[str], as_json: bool) -> None:
    """Display total trades, win rate, P&L and current streak.

    \b
    Examples:
      tradejournal stats
      tradejournal stats --type Backtest
    """
    trades = load_trades(ctx, trade_filters(trade_type))
    result = user_stats(trades)
    streak = calculate_current_streak(trades)

    if as_json:
        print_json({"stats": result, "streak": streak})
        return

    console.print(Panel(
        f"Total Trades: [bold]{result.total_trades}[/bold]\n"
        f"Wins / Losses / BE: [green]{result.wins}[/green] / "
        f"[red]{result.losses}[/red] / [dim]{result.breakeven}[/dim]\n"
        f"Win Rate:     {format_pct(result.win_rate)}\n"
        f"Total P&L:    {format_pnl(result.total_pnl)}\n"
        f"Streak:       {_streak_label(streak.type, streak.count)}",
        title="[bold cyan]Trading Stats[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@trade_type_option
@json_option
@click.pass_context
def summary(ctx: click.Context, trade_type: Optional[str], as_json: bool) -> None:
    """Display profit factor, expectancy, Sharpe and best/worst days."""
    config = get_config(ctx)
    trades = load_trades(ctx, trade_filters(trade_type))
    result = performance_summary(trades, config["analytics"]["risk_free_rate"])

    if as_json:
        print_json(result)
        return

    if not trades:
        console.print(Panel(
            "[dim]No trades found[/dim]",
            title="[bold]Performance Summary[/bold]",
            border_style="dim",
        ))
        return

    lines = [
        f"Avg Win:        {format_pnl(result.avg_win)}",
        f"Avg Loss:       {format_pnl(-result.avg_loss)}",
        f"Profit Factor:  {result.profit_factor:.2f}",
        f"Expectancy:     {format_pnl(result.expectancy)}",
        f"Sharpe Ratio:   {result.sharpe_ratio:.2f}",
        f"Max Drawdown:   {format_pct(result.max_drawdown)}",
    ]
    if result.best_day:
        lines.append(f"Best Day:       {result.best_day.date} {format_pnl(result.best_day.pnl)}")
    if result.worst_day:
        lines.append(f"Worst Day:      {result.worst_day.date} {format_pnl(result.worst_day.pnl)}")
    if result.best_session:
        lines.append(f"Best Session:   {result.best_session}")

    console.print(Panel(
        "\n".join(lines),
        title="[bold cyan]Performance Summary[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@trade_type_option
@json_option
@click.pass_context
def equity(ctx: click.Context, trade_type: Optional[str], as_json: bool) -> None:
    """Display the cumulative P&L curve and max drawdown."""
    trades = load_trades(ctx, trade_filters(trade_type))
    curve = build_equity_curve(trades)
    drawdown = drawdown_for_trades(trades)

    if as_json:
        print_json({"equity": curve, "drawdown": drawdown})
        return

    if not curve:
        console.print("[dim]No trades found[/dim]")
        return

    table = Table(title="Equity Curve", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Date/Time", style="dim")
    table.add_column("Cumulative P&L", justify="right")

    for i, point in enumerate(curve, start=1):
        table.add_row(str(i), point.timestamp.strftime("%Y-%m-%d %H:%M"), format_pnl(point.cumulative_pnl))

    console.print(table)
    console.print(f"\n[bold]Max Drawdown:[/bold] {format_pct(drawdown)}")


@click.command()
@json_option
@click.pass_context
def streaks(ctx: click.Context, as_json: bool) -> None:
    """Display longest and current win/loss streaks."""
    trades = load_trades(ctx)
    info = calculate_streaks(trades)

    if as_json:
        print_json(info)
        return

    console.print(Panel(
        f"Longest Win Streak:  [green]{info.longest_win_streak}[/green]\n"
        f"Longest Loss Streak: [red]{info.longest_loss_streak}[/red]\n"
        f"Current Streak:      {_streak_label(info.current_streak_type, info.current_streak_count)}",
        title="[bold cyan]Streaks[/bold cyan]",
        border_style="cyan",
    ))


def _month_bounds(month: Optional[str]) -> tuple[date, date]:
    """First and last day of a YYYY-MM month (default: current month)."""
    if month:
        year, month_num = (int(part) for part in month.split("-"))
    else:
        today = date.today()
        year, month_num = today.year, today.month
    last_day = calendar_module.monthrange(year, month_num)[1]
    return date(year, month_num, 1), date(year, month_num, last_day)


def _show_day(ctx: click.Context, day_value: str, as_json: bool) -> None:
    """List the trades journaled on one day."""
    try:
        day = date.fromisoformat(day_value)
    except ValueError:
        error_panel(f"[red]Invalid day: {day_value}. Use YYYY-MM-DD[/red]")
        raise SystemExit(1)

    trades = query_trades(ctx, lambda store, user_id: store.get_trades_for_day(user_id, day))
    day_pnl = round2(sum(t.pnl for t in trades))

    if as_json:
        print_json({"date": day.isoformat(), "pnl": day_pnl, "trades": trades})
        return

    if not trades:
        console.print(f"[dim]No trades on {day.isoformat()}[/dim]")
        return

    console.print(trade_table(trades, day.strftime("%A %d %B %Y")))
    console.print(f"\n[bold]Day P&L:[/bold] {format_pnl(day_pnl)}")


@click.command()
@click.option("--month", type=str, default=None, help="Month to show (YYYY-MM). Defaults to this month.")
@click.option("--day", "day_value", type=str, default=None, help="List the trades of one day (YYYY-MM-DD).")
@json_option
@click.pass_context
def calendar(ctx: click.Context, month: Optional[str], day_value: Optional[str], as_json: bool) -> None:
    """Display daily P&L for a month, or the trades of a single day.

    \b
    Examples:
      tradejournal calendar
      tradejournal calendar --month 2024-03
      tradejournal calendar --day 2024-03-14
    """
    if day_value:
        _show_day(ctx, day_value, as_json)
        return

    try:
        start, end = _month_bounds(month)
    except ValueError:
        error_panel(f"[red]Invalid month: {month}. Use YYYY-MM[/red]")
        raise SystemExit(1)

    trades = load_trades(ctx)
    days = calendar_days(trades, start, end)
    info = calculate_streaks(trades)

    if as_json:
        print_json({"calendar": days, "streaks": info, "month": start.strftime("%B %Y")})
        return

    table = Table(title=start.strftime("%B %Y"), show_header=True, header_style="bold cyan")
    table.add_column("Date", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("W/L", justify="center")
    table.add_column("P&L", justify="right")

    for day in days:
        table.add_row(
            day.date.strftime("%a %d"),
            str(day.trades),
            f"{day.wins}/{day.losses}",
            format_pnl(day.pnl),
        )

    console.print(table)
    month_pnl = sum(day.pnl for day in days)
    console.print(f"\n[bold]Month P&L:[/bold] {format_pnl(month_pnl)}")
    console.print(
        f"[dim]Longest streaks: {info.longest_win_streak}W / {info.longest_loss_streak}L[/dim]"
    )
