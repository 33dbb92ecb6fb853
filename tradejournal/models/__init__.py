"""Data models for the trading journal."""

from tradejournal.models.trade import NO_MISTAKE, Trade, TradeResult, TradeType
from tradejournal.models.session import UserSession
from tradejournal.models.stats import (
    CalendarDay,
    CurrentStreak,
    DayPnL,
    EquityPoint,
    GroupStats,
    HourStats,
    MistakeStats,
    MistakeTrend,
    PerformanceSummary,
    RREfficiency,
    SessionStats,
    SetupGradeStats,
    StrategyStats,
    StreakInfo,
    UserStats,
    WeekdayStats,
)

__all__ = [
    "NO_MISTAKE",
    "Trade",
    "TradeResult",
    "TradeType",
    "UserSession",
    "CalendarDay",
    "CurrentStreak",
    "DayPnL",
    "EquityPoint",
    "GroupStats",
    "HourStats",
    "MistakeStats",
    "MistakeTrend",
    "PerformanceSummary",
    "RREfficiency",
    "SessionStats",
    "SetupGradeStats",
    "StrategyStats",
    "StreakInfo",
    "UserStats",
    "WeekdayStats",
]
