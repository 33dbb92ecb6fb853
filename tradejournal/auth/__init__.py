"""Authentication state for the trading journal."""

from tradejournal.auth.session import SessionStore

__all__ = ["SessionStore"]
