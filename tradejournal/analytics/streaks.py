"""Win/loss streak calculations.

Trades are expected in ascending time order. A breakeven (BE) trade is
neutral: it ends any running streak and never starts one.
"""

from typing import Sequence

from tradejournal.models import CurrentStreak, StreakInfo, Trade, TradeResult

_STREAK_TYPES = {
    TradeResult.WIN: "win",
    TradeResult.LOSS: "loss",
}


def calculate_current_streak(trades: Sequence[Trade]) -> CurrentStreak:
    """Get the streak ending at the most recent trade.

    Scans backward from the newest trade until a different result is
    found. A BE as the newest trade means there is no current streak.

    Args:
        trades: Trades in ascending time order.

    Returns:
        The current streak type and length.
    """
    if not trades:
        return CurrentStreak()

    latest = trades[-1].result
    if latest == TradeResult.BREAKEVEN:
        return CurrentStreak()

    count = 0
    for trade in reversed(trades):
        if trade.result != latest:
            break
        count += 1

    return CurrentStreak(type=_STREAK_TYPES[latest], count=count)


def calculate_streaks(trades: Sequence[Trade]) -> StreakInfo:
    """Find the longest win and loss streaks plus the current streak.

    Args:
        trades: Trades in ascending time order.

    Returns:
        StreakInfo with longest and current streaks.
    """
    longest_win = 0
    longest_loss = 0
    run_result = None
    run_length = 0

    for trade in trades:
        if trade.result == TradeResult.BREAKEVEN:
            run_result = None
            run_length = 0
            continue

        if trade.result == run_result:
            run_length += 1
        else:
            run_result = trade.result
            run_length = 1

        if run_result == TradeResult.WIN:
            longest_win = max(longest_win, run_length)
        else:
            longest_loss = max(longest_loss, run_length)

    current = calculate_current_streak(trades)

    return StreakInfo(
        longest_win_streak=longest_win,
        longest_loss_streak=longest_loss,
        current_streak_type=current.type,
        current_streak_count=current.count,
    )
