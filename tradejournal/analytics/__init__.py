"""Trade performance analytics.

Pure functions over sequences of trades for one user.
"""

from tradejournal.analytics.equity import build_equity_curve, calculate_max_drawdown
from tradejournal.analytics.grouping import (
    DAY_NAMES,
    calendar_days,
    mistake_stats,
    mistake_trends,
    stats_by_hour,
    stats_by_session,
    stats_by_setup_grade,
    stats_by_strategy,
    stats_by_weekday,
)
from tradejournal.analytics.metrics import (
    expectancy,
    profit_factor,
    round2,
    rr_efficiency,
    sharpe_ratio,
    user_stats,
    win_rate,
)
from tradejournal.analytics.streaks import calculate_current_streak, calculate_streaks
from tradejournal.analytics.summary import drawdown_for_trades, performance_summary

__all__ = [
    "DAY_NAMES",
    "build_equity_curve",
    "calculate_current_streak",
    "calculate_max_drawdown",
    "calculate_streaks",
    "calendar_days",
    "drawdown_for_trades",
    "expectancy",
    "mistake_stats",
    "mistake_trends",
    "performance_summary",
    "profit_factor",
    "round2",
    "rr_efficiency",
    "sharpe_ratio",
    "stats_by_hour",
    "stats_by_session",
    "stats_by_setup_grade",
    "stats_by_strategy",
    "stats_by_weekday",
    "user_stats",
    "win_rate",
]
