"""Trade data model."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

NO_MISTAKE = "None"


class TradeResult(str, Enum):
    """Outcome of a logged trade."""

    WIN = "Win"
    LOSS = "Loss"
    BREAKEVEN = "BE"


class TradeType(str, Enum):
    """Whether a trade was taken live or in backtesting."""

    LIVE = "Live"
    BACKTEST = "Backtest"


class Trade(BaseModel):
    """Represents a logged journal trade."""

    id: int = Field(..., description="Database ID")
    user_id: int = Field(..., description="Owning user (Discord) ID")
    timestamp: datetime = Field(..., description="When the trade was recorded")
    session: str = Field(default="", description="Market session label")
    strategy: str = Field(default="", description="Strategy label")
    result: TradeResult = Field(..., description="Win, Loss or BE")
    pnl: float = Field(..., description="Realized P&L")
    rr: str = Field(default="1:1", description="Target risk:reward, e.g. '1:3'")
    mistake: str = Field(default=NO_MISTAKE, description="Mistake label or 'None'")
    emotion: Optional[str] = Field(default=None, description="Emotional state")
    screenshot_url: Optional[str] = Field(default=None, description="Chart screenshot")
    trade_type: TradeType = Field(default=TradeType.LIVE, description="Live or Backtest")
    setup_grade: Optional[str] = Field(default=None, description="A+, A, B or C")
    log_date: Optional[date] = Field(default=None, description="Journal date")
    entry_time: Optional[str] = Field(default=None, description="Entry time as HH:MM")

    model_config = {"frozen": True}

    @property
    def has_mistake(self) -> bool:
        return self.mistake != NO_MISTAKE
