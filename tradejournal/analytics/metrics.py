"""Ratio and efficiency metrics for trade performance.

All functions are pure. Divide-by-zero cases resolve to 0 rather than
NaN or Infinity so results can be displayed directly.
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable, Sequence

from tradejournal.models import RREfficiency, Trade, TradeResult, UserStats

# Average winning P&L is divided by this to approximate an achieved R multiple.
RR_ACTUAL_DIVISOR = 100.0

# Leading number of a ratio part, so "3R" reads as 3
_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def round2(value: float) -> float:
    """Round to 2 decimals, halves away from zero.

    Uses the shortest decimal representation of the float, so 2.675
    rounds to 2.68 and -0.125 to -0.13.
    """
    if not math.isfinite(value):
        return 0.0
    # Wide enough for any finite float plus two decimals
    with localcontext() as ctx:
        ctx.prec = 400
        return float(Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def win_rate(wins: int, total: int) -> float:
    """Calculate win rate as a percentage (unrounded)."""
    if total == 0:
        return 0.0
    return wins / total * 100


def profit_factor(avg_win: float, avg_loss: float) -> float:
    """Average win divided by average loss magnitude.

    Args:
        avg_win: Average winning P&L.
        avg_loss: Average losing P&L; sign is ignored.

    Returns:
        The ratio, or 0 when there is no loss magnitude.
    """
    loss = abs(avg_loss)
    if loss == 0:
        return 0.0
    return avg_win / loss


def expectancy(win_rate_pct: float, avg_win: float, avg_loss: float) -> float:
    """Expected P&L per trade from win rate and average win/loss sizes."""
    return (win_rate_pct / 100 * avg_win) - ((100 - win_rate_pct) / 100 * abs(avg_loss))


def sharpe_ratio(returns: Sequence[float], risk_free_rate: float = 0.0) -> float:
    """Simplified Sharpe ratio using population standard deviation.

    No annualization is applied.
    """
    if len(returns) == 0:
        return 0.0

    mean = sum(returns) / len(returns)
    variance = sum((r - mean) ** 2 for r in returns) / len(returns)
    std_dev = math.sqrt(variance)

    if std_dev == 0:
        return 0.0
    return (mean - risk_free_rate) / std_dev


def average_win(trades: Iterable[Trade]) -> float:
    """Average P&L of trades marked as wins (0 if none)."""
    pnls = [t.pnl for t in trades if t.result == TradeResult.WIN]
    return sum(pnls) / len(pnls) if pnls else 0.0


def average_loss(trades: Iterable[Trade]) -> float:
    """Average loss magnitude of trades marked as losses (0 if none)."""
    pnls = [t.pnl for t in trades if t.result == TradeResult.LOSS]
    return abs(sum(pnls) / len(pnls)) if pnls else 0.0


def parse_target_ratio(rr: str) -> float:
    """Parse the reward multiple from a "W:X" ratio string.

    Strings without a colon target 1. Only the leading number of the
    target is read, so "1:3R" targets 3. Returns 0 for values that
    cannot be parsed.
    """
    parts = rr.split(":")
    target = parts[1].strip() if len(parts) > 1 else ""
    if not target:
        return 1.0
    match = _LEADING_NUMBER.match(target)
    if match is None:
        return 0.0
    value = float(match.group())
    return value if math.isfinite(value) else 0.0


def rr_efficiency(trades: Sequence[Trade]) -> list[RREfficiency]:
    """Compare achieved R:R against each target ratio.

    The achieved ratio is the group's average of winning P&L (non-wins
    count as 0) divided by a fixed constant. Ordered by descending count.
    """
    groups: dict[str, list[Trade]] = {}
    for trade in trades:
        groups.setdefault(trade.rr, []).append(trade)

    results = []
    for rr, group in groups.items():
        wins = sum(1 for t in group if t.result == TradeResult.WIN)
        avg_win_pnl = sum(t.pnl for t in group if t.result == TradeResult.WIN) / len(group)

        target = parse_target_ratio(rr)
        actual = avg_win_pnl / RR_ACTUAL_DIVISOR
        efficiency = actual / target * 100 if target != 0 else 0.0

        results.append(
            RREfficiency(
                target_rr=rr,
                count=len(group),
                wins=wins,
                avg_actual_rr=round2(actual),
                efficiency=round2(efficiency),
            )
        )

    results.sort(key=lambda r: r.count, reverse=True)
    return results


def user_stats(trades: Sequence[Trade]) -> UserStats:
    """Headline result counts, total P&L and win rate."""
    wins = sum(1 for t in trades if t.result == TradeResult.WIN)
    losses = sum(1 for t in trades if t.result == TradeResult.LOSS)
    breakeven = sum(1 for t in trades if t.result == TradeResult.BREAKEVEN)

    return UserStats(
        total_trades=len(trades),
        wins=wins,
        losses=losses,
        breakeven=breakeven,
        total_pnl=round2(sum(t.pnl for t in trades)),
        win_rate=round2(win_rate(wins, len(trades))),
    )
