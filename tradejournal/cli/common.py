"""Shared helpers for trading journal CLI commands."""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Callable, Optional

import click
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from tradejournal.auth import SessionStore
from tradejournal.config import get_db_path, load_config
from tradejournal.db import StoreClosedError, TradeFilters, TradeStore
from tradejournal.models import Trade, TradeType

console = Console()
logger = logging.getLogger(__name__)

trade_type_option = click.option(
    "--type",
    "trade_type",
    type=click.Choice([t.value for t in TradeType]),
    default=None,
    help="Only Live or Backtest trades.",
)
json_option = click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")


def trade_filters(trade_type: Optional[str] = None) -> TradeFilters:
    """Build store filters from CLI options."""
    return TradeFilters(trade_type=TradeType(trade_type) if trade_type else None)


def setup_logging(level: str) -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def get_config(ctx: click.Context) -> dict:
    """Config loaded by the root command, or loaded now."""
    obj = ctx.ensure_object(dict)
    if "config" not in obj:
        obj["config"] = load_config(obj.get("config_path"))
    return obj["config"]


def get_session_store(ctx: click.Context) -> SessionStore:
    obj = ctx.ensure_object(dict)
    return SessionStore(obj.get("session_path"))


def error_panel(message: str, title: str = "Error") -> None:
    """Print an error panel."""
    console.print(Panel(
        message,
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def require_user_id(ctx: click.Context) -> int:
    """Current user ID, or exit if nobody is logged in."""
    user_id = get_session_store(ctx).current_user_id()
    if user_id is None:
        error_panel(
            "[red]Not logged in.[/red]\n\n"
            "Run [cyan]tradejournal login[/cyan] to record your Discord session.",
            title="Unauthorized",
        )
        raise SystemExit(1)
    return user_id


def open_store(ctx: click.Context) -> TradeStore:
    """Open the configured trade store, or exit with an error panel."""
    db_path = get_db_path(get_config(ctx))
    try:
        return TradeStore(db_path).open()
    except (FileNotFoundError, sqlite3.Error) as e:
        logger.debug("Failed to open %s", db_path, exc_info=True)
        error_panel(f"[red]Could not open trades database:[/red]\n\n{e}")
        raise SystemExit(1)


def query_trades(ctx: click.Context, query: Callable[[TradeStore, int], list[Trade]]) -> list[Trade]:
    """Run a store query for the current user, exiting with a panel on failure.

    Args:
        query: Called with the open store and the user ID.
    """
    user_id = require_user_id(ctx)
    store = open_store(ctx)
    try:
        return query(store, user_id)
    except (sqlite3.Error, StoreClosedError, ValidationError, ValueError) as e:
        logger.debug("Failed to fetch trades", exc_info=True)
        error_panel(f"[red]Failed to load trades:[/red]\n\n{e}")
        raise SystemExit(1)
    finally:
        store.close()


def load_trades(ctx: click.Context, filters: Optional[TradeFilters] = None) -> list[Trade]:
    """Fetch the current user's trades, oldest first."""
    return query_trades(ctx, lambda store, user_id: store.fetch_trades_for_user(user_id, filters))


def _to_plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_plain(v) for k, v in value.items()}
    return value


def print_json(data: Any) -> None:
    """Print records as plain JSON."""
    click.echo(json.dumps(_to_plain(data), indent=2))


def format_pnl(value: float, currency: str = "$") -> str:
    """Colored, signed money string."""
    color = "green" if value > 0 else "red" if value < 0 else "dim"
    sign = "+" if value >= 0 else "-"
    return f"[{color}]{sign}{currency}{abs(value):,.2f}[/{color}]"


def format_pct(value: float) -> str:
    return f"{value:.2f}%"


def default_path(value: Optional[str]) -> Optional[Path]:
    return Path(value).expanduser() if value else None
