"""Dashboard performance summary."""

from collections import defaultdict
from typing import Sequence

from tradejournal.analytics.equity import build_equity_curve, calculate_max_drawdown
from tradejournal.analytics.grouping import stats_by_session
from tradejournal.analytics.metrics import (
    average_loss,
    average_win,
    expectancy,
    profit_factor,
    round2,
    sharpe_ratio,
    win_rate,
)
from tradejournal.models import DayPnL, PerformanceSummary, Trade, TradeResult


def performance_summary(
    trades: Sequence[Trade], risk_free_rate: float = 0.0
) -> PerformanceSummary:
    """Compute the headline metrics for a set of trades.

    Args:
        trades: Trades in ascending timestamp order.
        risk_free_rate: Per-trade risk-free return for the Sharpe ratio.

    Returns:
        PerformanceSummary with rounded metrics.
    """
    if not trades:
        return PerformanceSummary()

    avg_win = average_win(trades)
    avg_loss = average_loss(trades)
    wins = sum(1 for t in trades if t.result == TradeResult.WIN)
    rate = win_rate(wins, len(trades))

    # Unrounded running totals so the drawdown is not skewed by rounding
    equity = []
    cumulative = 0.0
    for trade in trades:
        cumulative += trade.pnl
        equity.append(cumulative)

    daily: dict = defaultdict(float)
    for trade in trades:
        daily[trade.timestamp.date()] += trade.pnl

    best_day = max(daily.items(), key=lambda item: item[1])
    worst_day = min(daily.items(), key=lambda item: item[1])

    sessions = stats_by_session(trades)

    return PerformanceSummary(
        avg_win=round2(avg_win),
        avg_loss=round2(avg_loss),
        profit_factor=round2(profit_factor(avg_win, avg_loss)),
        expectancy=round2(expectancy(rate, avg_win, avg_loss)),
        sharpe_ratio=round2(sharpe_ratio([t.pnl for t in trades], risk_free_rate)),
        max_drawdown=round2(calculate_max_drawdown(equity)),
        best_day=DayPnL(date=best_day[0], pnl=round2(best_day[1])),
        worst_day=DayPnL(date=worst_day[0], pnl=round2(worst_day[1])),
        best_session=sessions[0].session if sessions else None,
    )


def drawdown_for_trades(trades: Sequence[Trade]) -> float:
    """Maximum drawdown of the reported (rounded) equity curve."""
    curve = build_equity_curve(trades)
    return round2(calculate_max_drawdown([point.cumulative_pnl for point in curve]))
