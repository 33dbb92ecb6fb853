"""Database access for the trading journal."""

from tradejournal.db.store import StoreClosedError, TradeFilters, TradeStore

__all__ = ["StoreClosedError", "TradeFilters", "TradeStore"]
