"""Session commands for the trading journal CLI.

The Discord OAuth handshake happens in the journal bot's web flow; these
commands record, show and clear the resulting identity locally.
"""

from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel

from tradejournal.cli.common import (
    console,
    default_path,
    error_panel,
    get_session_store,
)
from tradejournal.config import create_template_config
from tradejournal.models import UserSession


@click.command()
@click.option("--path", type=str, default=None, help="Where to write the config file.")
@click.pass_context
def init(ctx: click.Context, path: Optional[str]) -> None:
    """Create a template configuration file.

    \b
    Examples:
      tradejournal init
      tradejournal init --path ./config.toml
    """
    target = default_path(path) or ctx.obj.get("config_path")
    config_path = create_template_config(target)
    console.print(Panel(
        f"Config written to [cyan]{config_path}[/cyan]\n\n"
        "Set [bold]database.path[/bold] to your journal's trades.db.",
        title="[bold green]Config Created[/bold green]",
        border_style="green",
    ))


@click.command()
@click.option("--discord-id", required=True, help="Your Discord user ID.")
@click.option("--username", required=True, help="Your Discord username.")
@click.option("--avatar", default=None, help="Discord avatar hash.")
@click.pass_context
def login(ctx: click.Context, discord_id: str, username: str, avatar: Optional[str]) -> None:
    """Record your Discord identity for this machine.

    \b
    Examples:
      tradejournal login --discord-id 123456789 --username trader
    """
    if not discord_id.isdigit():
        error_panel(f"[red]Discord ID must be numeric, got:[/red] {discord_id}")
        raise SystemExit(1)

    try:
        session = UserSession(
            id=discord_id,
            discord_id=discord_id,
            username=username,
            avatar=avatar,
        )
    except ValidationError as e:
        error_panel(f"[red]Invalid session details:[/red]\n\n{e}")
        raise SystemExit(1)

    get_session_store(ctx).save(session)
    console.print(Panel(
        f"Logged in as [bold]{session.username}[/bold] ({session.discord_id})",
        title="[bold green]Login Successful[/bold green]",
        border_style="green",
    ))


@click.command()
@click.pass_context
def logout(ctx: click.Context) -> None:
    """Clear the stored session."""
    if get_session_store(ctx).clear():
        console.print("[green]Logged out.[/green]")
    else:
        console.print("[dim]No active session.[/dim]")


@click.command()
@click.pass_context
def whoami(ctx: click.Context) -> None:
    """Show the logged-in user."""
    session = get_session_store(ctx).load()
    if session is None:
        console.print("[dim]Not logged in.[/dim]")
        raise SystemExit(1)

    console.print(Panel(
        f"Username:   [bold]{session.username}[/bold]\n"
        f"Discord ID: {session.discord_id}\n"
        f"Avatar:     {session.avatar or '-'}",
        title="[bold cyan]Session[/bold cyan]",
        border_style="cyan",
    ))
