"""Analytics result models.

These are the plain records handed to the presentation layer. Money and
percentage fields are already rounded to 2 decimals.
"""

from datetime import date as date_type
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

StreakType = Literal["win", "loss", "none"]


class CurrentStreak(BaseModel):
    """The most recent run of identical results."""

    type: StreakType = Field(default="none", description="win, loss or none")
    count: int = Field(default=0, ge=0, description="Length of the run")

    model_config = {"frozen": True}


class StreakInfo(BaseModel):
    """Longest and current win/loss streaks."""

    longest_win_streak: int = Field(default=0, ge=0)
    longest_loss_streak: int = Field(default=0, ge=0)
    current_streak_type: StreakType = Field(default="none")
    current_streak_count: int = Field(default=0, ge=0)

    model_config = {"frozen": True}


class EquityPoint(BaseModel):
    """One point of the cumulative P&L curve."""

    timestamp: datetime = Field(..., description="Timestamp of the trade")
    cumulative_pnl: float = Field(..., description="Running P&L after the trade")

    model_config = {"frozen": True}


class GroupStats(BaseModel):
    """Win/loss and P&L aggregate for one group of trades."""

    count: int = Field(..., ge=0, description="Trades in the group")
    wins: int = Field(..., ge=0)
    losses: int = Field(..., ge=0)
    win_rate: float = Field(..., ge=0, le=100, description="Win rate percentage")
    avg_pnl: float = Field(..., description="Average P&L per trade")
    total_pnl: float = Field(..., description="Summed P&L")

    model_config = {"frozen": True}


class HourStats(GroupStats):
    """Performance for one hour of the day."""

    hour: int = Field(..., ge=0, le=23)


class WeekdayStats(GroupStats):
    """Performance for one day of the week (0 = Sunday)."""

    day_of_week: int = Field(..., ge=0, le=6)
    day_name: str


class StrategyStats(GroupStats):
    """Performance for one strategy."""

    strategy: str


class SetupGradeStats(GroupStats):
    """Performance for one setup grade."""

    setup_grade: str


class SessionStats(GroupStats):
    """Performance for one market session."""

    session: str


class MistakeStats(BaseModel):
    """Frequency and cost of one mistake.

    ``total_cost`` is the signed sum of P&L, so the most costly mistake is
    the one with the lowest value.
    """

    mistake: str
    frequency: int = Field(..., ge=0)
    total_cost: float
    avg_cost: float
    percentage: float = Field(..., ge=0, le=100)

    model_config = {"frozen": True}


class MistakeTrend(BaseModel):
    """Mistake occurrences on one journal date."""

    date: date_type
    mistake: str
    count: int = Field(..., ge=1)

    model_config = {"frozen": True}


class RREfficiency(BaseModel):
    """Achieved versus targeted risk:reward for one target ratio."""

    target_rr: str
    count: int = Field(..., ge=0)
    wins: int = Field(..., ge=0)
    avg_actual_rr: float
    efficiency: float = Field(..., description="Percentage of target achieved")

    model_config = {"frozen": True}


class CalendarDay(BaseModel):
    """Daily P&L for the calendar heatmap."""

    date: date_type
    pnl: float
    trades: int = Field(..., ge=0)
    wins: int = Field(..., ge=0)
    losses: int = Field(..., ge=0)

    model_config = {"frozen": True}


class UserStats(BaseModel):
    """Headline counts for a user's trades."""

    total_trades: int = Field(default=0, ge=0)
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    breakeven: int = Field(default=0, ge=0)
    total_pnl: float = Field(default=0.0)
    win_rate: float = Field(default=0.0, ge=0, le=100)

    model_config = {"frozen": True}


class DayPnL(BaseModel):
    """Total P&L on one calendar day."""

    date: date_type
    pnl: float

    model_config = {"frozen": True}


class PerformanceSummary(BaseModel):
    """Derived performance metrics shown on the dashboard."""

    avg_win: float = Field(default=0.0)
    avg_loss: float = Field(default=0.0, ge=0, description="Average loss magnitude")
    profit_factor: float = Field(default=0.0)
    expectancy: float = Field(default=0.0)
    sharpe_ratio: float = Field(default=0.0)
    max_drawdown: float = Field(default=0.0, ge=0)
    best_day: Optional[DayPnL] = None
    worst_day: Optional[DayPnL] = None
    best_session: Optional[str] = None

    model_config = {"frozen": True}
