"""Main CLI entry point for the trading journal.

Commands are grouped into help sections and their modules are only
imported when a command is looked up.
"""

import importlib
from typing import Optional

import click

from tradejournal.cli.common import default_path, get_config, setup_logging


class LazyGroup(click.Group):
    """A click Group that resolves commands from import strings on demand."""

    def __init__(
        self,
        *args,
        lazy_subcommands: dict[str, str] | None = None,
        sections: dict[str, list[str]] | None = None,
        **kwargs,
    ):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Command name to "package.module:attribute".
            sections: Help section title to the command names it lists.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}
        self._sections = sections or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted(set(super().list_commands(ctx)) | set(self._lazy_subcommands))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        if cmd_name not in self.commands and cmd_name in self._lazy_subcommands:
            self.add_command(self._resolve(cmd_name), cmd_name)
        return self.commands.get(cmd_name)

    def _resolve(self, cmd_name: str) -> click.Command:
        import_path = self._lazy_subcommands[cmd_name]
        module_path, _, attr_name = import_path.partition(":")
        module = importlib.import_module(module_path)

        cmd = getattr(module, attr_name or cmd_name, None)
        if not isinstance(cmd, click.Command):
            raise click.ClickException(f"'{import_path}' is not a click command")
        return cmd

    def format_commands(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """List commands under their help sections; unsectioned ones go last."""
        listed: set[str] = set()
        groups = []
        for title, names in self._sections.items():
            groups.append((title, names))
            listed.update(names)

        remaining = [name for name in self.list_commands(ctx) if name not in listed]
        if remaining:
            groups.append(("Other Commands", remaining))

        limit = formatter.width - 6 - max(len(name) for name in self.list_commands(ctx))
        for title, names in groups:
            rows = []
            for name in names:
                cmd = self.get_command(ctx, name)
                if cmd is None or cmd.hidden:
                    continue
                rows.append((name, cmd.get_short_help_str(limit)))
            if rows:
                with formatter.section(title):
                    formatter.write_dl(rows)


LAZY_SUBCOMMANDS = {
    "init": "tradejournal.cli.auth:init",
    "login": "tradejournal.cli.auth:login",
    "logout": "tradejournal.cli.auth:logout",
    "whoami": "tradejournal.cli.auth:whoami",
    "stats": "tradejournal.cli.dashboard:stats",
    "summary": "tradejournal.cli.dashboard:summary",
    "equity": "tradejournal.cli.dashboard:equity",
    "streaks": "tradejournal.cli.dashboard:streaks",
    "calendar": "tradejournal.cli.dashboard:calendar",
    "analytics": "tradejournal.cli.performance:analytics",
    "strategies": "tradejournal.cli.performance:strategies",
    "grades": "tradejournal.cli.performance:grades",
    "sessions": "tradejournal.cli.performance:sessions",
    "mistakes": "tradejournal.cli.performance:mistakes",
    "trades": "tradejournal.cli.trades:trades",
}

COMMAND_SECTIONS = {
    "Session": ["init", "login", "logout", "whoami"],
    "Overview": ["stats", "summary", "equity", "streaks", "calendar"],
    "Breakdowns": ["analytics", "strategies", "grades", "sessions", "mistakes"],
    "History": ["trades"],
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(
    cls=LazyGroup,
    lazy_subcommands=LAZY_SUBCOMMANDS,
    sections=COMMAND_SECTIONS,
    context_settings=CONTEXT_SETTINGS,
)
@click.version_option(package_name="tradejournal")
@click.option("--config", "config_path", type=str, default=None, help="Path to config.toml.")
@click.option("--db", "db_path", type=str, default=None, help="Path to the trades database.")
@click.option("--session-file", type=str, default=None, help="Path to the session file.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[str],
    db_path: Optional[str],
    session_file: Optional[str],
    verbose: bool,
) -> None:
    """Trading Journal - performance analytics for your logged trades.

    Summarizes win rate, P&L, streaks, mistakes and setup grades from
    the journal database.

    \b
    Quick Start:
      tradejournal login --discord-id 1234 --username trader
      tradejournal stats       # Headline numbers
      tradejournal analytics   # Time of day, weekday and R:R
    """
    obj = ctx.ensure_object(dict)
    obj["config_path"] = default_path(config_path)
    obj["session_path"] = default_path(session_file)

    config = get_config(ctx)
    if db_path:
        config["database"]["path"] = db_path

    setup_logging("DEBUG" if verbose else config["logging"]["level"])


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
