"""Equity curve and drawdown calculations."""

from typing import Sequence

from tradejournal.analytics.metrics import round2
from tradejournal.models import EquityPoint, Trade


def build_equity_curve(trades: Sequence[Trade]) -> list[EquityPoint]:
    """Build the running cumulative P&L curve.

    Args:
        trades: Trades in ascending timestamp order.

    Returns:
        One point per trade. Only the reported value is rounded; the
        running total keeps full precision.
    """
    curve = []
    cumulative = 0.0

    for trade in trades:
        cumulative += trade.pnl
        curve.append(
            EquityPoint(timestamp=trade.timestamp, cumulative_pnl=round2(cumulative))
        )

    return curve


def calculate_max_drawdown(equity: Sequence[float]) -> float:
    """Calculate the maximum percentage decline from a running peak.

    The peak starts at the first value. Points where the running peak is
    zero or negative have no defined percentage and count as 0.

    Args:
        equity: Cumulative equity values in order.

    Returns:
        Maximum drawdown percentage (0 for an empty curve).
    """
    if len(equity) == 0:
        return 0.0

    max_drawdown = 0.0
    peak = equity[0]

    for value in equity:
        if value > peak:
            peak = value
        if peak <= 0:
            continue
        drawdown = (peak - value) / peak * 100
        if drawdown > max_drawdown:
            max_drawdown = drawdown

    return max_drawdown
