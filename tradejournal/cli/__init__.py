"""CLI commands for the trading journal.

This package provides the command-line interface for viewing
performance analytics of logged trades.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
