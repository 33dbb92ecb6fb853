"""Grouped performance aggregation.

Trades are partitioned by a categorical key (hour, weekday, strategy,
setup grade, session, mistake, journal date) and summarized per group.
Trades whose key is missing are left out of every group.
"""

from collections import defaultdict
from datetime import date, timedelta
from typing import Callable, Hashable, Iterable, Optional, Sequence

from tradejournal.analytics.metrics import round2, win_rate
from tradejournal.models import (
    CalendarDay,
    HourStats,
    MistakeStats,
    MistakeTrend,
    SessionStats,
    SetupGradeStats,
    StrategyStats,
    Trade,
    TradeResult,
    WeekdayStats,
)

DAY_NAMES = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]


def group_trades(
    trades: Iterable[Trade], key: Callable[[Trade], Optional[Hashable]]
) -> dict:
    """Partition trades by key, skipping trades whose key is None.

    Groups keep first-seen order and trades keep input order.
    """
    groups: dict = {}
    for trade in trades:
        value = key(trade)
        if value is None:
            continue
        groups.setdefault(value, []).append(trade)
    return groups


def summarize(trades: Sequence[Trade]) -> dict:
    """Count, wins, losses, win rate, average and total P&L for a group."""
    count = len(trades)
    wins = sum(1 for t in trades if t.result == TradeResult.WIN)
    losses = sum(1 for t in trades if t.result == TradeResult.LOSS)
    total_pnl = sum(t.pnl for t in trades)
    avg_pnl = total_pnl / count if count else 0.0

    return {
        "count": count,
        "wins": wins,
        "losses": losses,
        "win_rate": round2(win_rate(wins, count)),
        "avg_pnl": round2(avg_pnl),
        "total_pnl": round2(total_pnl),
    }


def entry_hour(trade: Trade) -> Optional[int]:
    """Hour of day from the trade's "HH:MM" entry time, if valid."""
    if not trade.entry_time:
        return None
    try:
        hour = int(trade.entry_time.strip().split(":")[0])
    except ValueError:
        return None
    return hour if 0 <= hour <= 23 else None


def log_weekday(trade: Trade) -> Optional[int]:
    """Day of week of the journal date, 0 = Sunday."""
    if trade.log_date is None:
        return None
    return (trade.log_date.weekday() + 1) % 7


def stats_by_hour(trades: Sequence[Trade]) -> list[HourStats]:
    """Performance per entry hour, ascending."""
    groups = group_trades(trades, entry_hour)
    return [
        HourStats(hour=hour, **summarize(groups[hour]))
        for hour in sorted(groups)
    ]


def stats_by_weekday(trades: Sequence[Trade]) -> list[WeekdayStats]:
    """Performance per journal weekday, Sunday through Saturday."""
    groups = group_trades(trades, log_weekday)
    return [
        WeekdayStats(day_of_week=day, day_name=DAY_NAMES[day], **summarize(groups[day]))
        for day in sorted(groups)
    ]


def stats_by_strategy(trades: Sequence[Trade]) -> list[StrategyStats]:
    """Performance per strategy, highest total P&L first."""
    groups = group_trades(trades, lambda t: t.strategy)
    ranked = sorted(groups.items(), key=lambda item: sum(t.pnl for t in item[1]), reverse=True)
    return [
        StrategyStats(strategy=strategy, **summarize(group))
        for strategy, group in ranked
    ]


def stats_by_setup_grade(trades: Sequence[Trade]) -> list[SetupGradeStats]:
    """Performance per setup grade, ordered by grade label.

    Ungraded trades are excluded.
    """
    groups = group_trades(trades, lambda t: t.setup_grade or None)
    return [
        SetupGradeStats(setup_grade=grade, **summarize(groups[grade]))
        for grade in sorted(groups)
    ]


def stats_by_session(trades: Sequence[Trade]) -> list[SessionStats]:
    """Performance per market session, highest total P&L first."""
    groups = group_trades(trades, lambda t: t.session)
    ranked = sorted(groups.items(), key=lambda item: sum(t.pnl for t in item[1]), reverse=True)
    return [
        SessionStats(session=session, **summarize(group))
        for session, group in ranked
    ]


def mistake_stats(trades: Sequence[Trade]) -> list[MistakeStats]:
    """Frequency, signed cost and share of each logged mistake.

    Trades with the "None" mistake are excluded. Percentages are shares of
    all mistake occurrences. Ordered by descending frequency, then label.
    """
    groups = group_trades(trades, lambda t: t.mistake if t.has_mistake else None)
    total = sum(len(group) for group in groups.values())

    results = []
    for mistake, group in groups.items():
        frequency = len(group)
        total_cost = sum(t.pnl for t in group)
        results.append(
            MistakeStats(
                mistake=mistake,
                frequency=frequency,
                total_cost=round2(total_cost),
                avg_cost=round2(total_cost / frequency),
                percentage=round2(frequency / total * 100) if total > 0 else 0.0,
            )
        )

    results.sort(key=lambda m: (-m.frequency, m.mistake))
    return results


def mistake_trends(
    trades: Sequence[Trade], days: int = 30, today: Optional[date] = None
) -> list[MistakeTrend]:
    """Count mistakes per journal date over a trailing window.

    Args:
        trades: Trades to scan.
        days: Size of the window in days.
        today: End of the window. Defaults to the current date.

    Returns:
        Counts per (date, mistake), newest date first.
    """
    today = today or date.today()
    since = today - timedelta(days=days)

    counts: dict[tuple[date, str], int] = defaultdict(int)
    for trade in trades:
        if not trade.has_mistake or trade.log_date is None:
            continue
        if trade.log_date < since:
            continue
        counts[(trade.log_date, trade.mistake)] += 1

    ordered = sorted(counts.items(), key=lambda item: item[0][1])
    ordered.sort(key=lambda item: item[0][0], reverse=True)
    return [
        MistakeTrend(date=day, mistake=mistake, count=count)
        for (day, mistake), count in ordered
    ]


def calendar_days(trades: Sequence[Trade], start: date, end: date) -> list[CalendarDay]:
    """Daily P&L and result counts for journal dates within [start, end]."""
    groups = group_trades(
        trades,
        lambda t: t.log_date if t.log_date is not None and start <= t.log_date <= end else None,
    )

    days = []
    for day in sorted(groups):
        summary = summarize(groups[day])
        days.append(
            CalendarDay(
                date=day,
                pnl=summary["total_pnl"],
                trades=summary["count"],
                wins=summary["wins"],
                losses=summary["losses"],
            )
        )
    return days
