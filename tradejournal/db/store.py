"""Read-only SQLite trade store for the trading journal."""

import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from tradejournal.models import Trade, TradeType

logger = logging.getLogger(__name__)

# Schema written by the journal bot that logs trades. This store never
# writes to it.
TRADES_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS trades (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL,
        timestamp TEXT NOT NULL,
        session TEXT,
        strategy TEXT,
        result TEXT NOT NULL,
        pnl REAL NOT NULL,
        rr TEXT,
        mistake TEXT,
        emotion TEXT,
        screenshot_url TEXT,
        trade_type TEXT,
        setup_grade TEXT,
        log_date TEXT,
        entry_time TEXT
    )
"""

TRADE_COLUMNS = (
    "id, user_id, timestamp, session, strategy, result, pnl, rr, mistake, "
    "emotion, screenshot_url, trade_type, setup_grade, log_date, entry_time"
)


class StoreClosedError(RuntimeError):
    """Raised when a TradeStore is used before open() or after close()."""


class TradeFilters(BaseModel):
    """Optional filters applied when fetching a user's trades."""

    trade_type: Optional[TradeType] = Field(default=None, description="Live or Backtest")
    from_date: Optional[date] = Field(default=None, description="Earliest trade date")
    to_date: Optional[date] = Field(default=None, description="Latest trade date")
    limit: Optional[int] = Field(default=None, gt=0, description="Most recent N trades")

    model_config = {"frozen": True}


def _parse_log_date(value: Optional[str]) -> Optional[date]:
    """Journal date from an ISO "YYYY-MM-DD" prefix, or None."""
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        logger.warning("Ignoring invalid log_date %r", value)
        return None


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def row_to_trade(row: sqlite3.Row) -> Optional[Trade]:
    """Convert a trades row into a Trade.

    Returns None for rows whose timestamp cannot be parsed.
    """
    timestamp = _parse_timestamp(row["timestamp"])
    if timestamp is None:
        logger.warning("Skipping trade %s with invalid timestamp %r", row["id"], row["timestamp"])
        return None

    return Trade(
        id=row["id"],
        user_id=row["user_id"],
        timestamp=timestamp,
        session=row["session"] or "",
        strategy=row["strategy"] or "",
        result=row["result"],
        pnl=row["pnl"],
        rr=row["rr"] or "1:1",
        mistake=row["mistake"] or "None",
        emotion=row["emotion"],
        screenshot_url=row["screenshot_url"],
        trade_type=row["trade_type"] or TradeType.LIVE,
        setup_grade=row["setup_grade"] or None,
        log_date=_parse_log_date(row["log_date"]),
        entry_time=row["entry_time"],
    )


def _rows_to_trades(rows: list[sqlite3.Row]) -> list[Trade]:
    trades = []
    for row in rows:
        trade = row_to_trade(row)
        if trade is not None:
            trades.append(trade)
    return trades


class TradeStore:
    """Read-only access to the trades database.

    The connection is opened explicitly and must be closed by the caller,
    either with close() or by using the store as a context manager::

        with TradeStore(db_path) as store:
            trades = store.fetch_trades_for_user(user_id)
    """

    def __init__(self, db_path: Path):
        """Initialize the trade store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> "TradeStore":
        """Open a read-only connection to the database.

        Raises:
            FileNotFoundError: If the database file does not exist.
        """
        if self._conn is not None:
            return self

        if not self.db_path.exists():
            raise FileNotFoundError(f"Trades database not found: {self.db_path}")

        uri = self.db_path.resolve().as_uri() + "?mode=ro"
        self._conn = sqlite3.connect(uri, uri=True)
        self._conn.row_factory = sqlite3.Row
        logger.debug("Opened trades database %s", self.db_path)
        return self

    def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.debug("Closed trades database %s", self.db_path)

    def __enter__(self) -> "TradeStore":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreClosedError("TradeStore is not open")
        return self._conn

    # ==================== Trades ====================

    def fetch_trades_for_user(
        self, user_id: int, filters: Optional[TradeFilters] = None
    ) -> list[Trade]:
        """Get a user's trades in ascending timestamp order.

        Args:
            user_id: Owning user ID.
            filters: Optional trade type, date range and limit. With a
                limit, the most recent trades are kept.

        Returns:
            List of trades, oldest first.
        """
        filters = filters or TradeFilters()
        clauses = ["user_id = ?"]
        params: list = [user_id]

        if filters.trade_type is not None:
            clauses.append("trade_type = ?")
            params.append(filters.trade_type.value)
        if filters.from_date is not None:
            clauses.append("date(timestamp) >= ?")
            params.append(filters.from_date.isoformat())
        if filters.to_date is not None:
            clauses.append("date(timestamp) <= ?")
            params.append(filters.to_date.isoformat())

        query = f"SELECT {TRADE_COLUMNS} FROM trades WHERE {' AND '.join(clauses)}"
        if filters.limit is not None:
            query += " ORDER BY timestamp DESC, id DESC LIMIT ?"
            params.append(filters.limit)
        else:
            query += " ORDER BY timestamp ASC, id ASC"

        cursor = self._get_connection().cursor()
        cursor.execute(query, params)
        trades = _rows_to_trades(cursor.fetchall())

        if filters.limit is not None:
            trades.reverse()

        logger.debug("Fetched %d trades for user %s", len(trades), user_id)
        return trades

    def get_recent_trades(
        self,
        user_id: int,
        limit: Optional[int] = 50,
        trade_type: Optional[TradeType] = None,
    ) -> list[Trade]:
        """Get a user's most recent trades, newest first.

        Args:
            user_id: Owning user ID.
            limit: Maximum number of trades, or None for the full history.
            trade_type: Optional Live/Backtest filter.

        Returns:
            List of trades.
        """
        trades = self.fetch_trades_for_user(
            user_id, TradeFilters(trade_type=trade_type, limit=limit)
        )
        trades.reverse()
        return trades

    def get_trades_for_day(self, user_id: int, day: date) -> list[Trade]:
        """Get a user's trades with the given journal date, newest first."""
        cursor = self._get_connection().cursor()
        cursor.execute(
            f"""
            SELECT {TRADE_COLUMNS}
            FROM trades
            WHERE user_id = ? AND date(log_date) = ?
            ORDER BY timestamp DESC, id DESC
            """,
            (user_id, day.isoformat()),
        )
        return _rows_to_trades(cursor.fetchall())
