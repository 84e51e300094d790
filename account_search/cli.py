"""Command-line interface for account-search."""

from __future__ import annotations

import os
from pathlib import Path

import click

from account_search import __version__
from account_search.accounts import Account, load_accounts
from account_search.config import Config, load_config
from account_search.exceptions import ConfigError, DataError
from account_search.utils.output import (
    error,
    set_color,
    set_verbosity,
    warning,
)


class Context:
    """Shared context for all commands."""

    def __init__(self) -> None:
        self.config: Config | None = None
        self.data_path: Path | None = None
        self.verbose: bool = False
        self.debug: bool = False
        self.quiet: bool = False

    def load_accounts(self) -> list[Account]:
        """Load the accounts file chosen by --data or the config.

        Raises:
            DataError: If no file is configured or it cannot be read.
        """
        path = self.data_path
        if path is None and self.config is not None:
            path = self.config.accounts_file
        if path is None:
            raise DataError(
                "No accounts file given. Use --data or set data.accounts in the config"
            )
        return load_accounts(path)


pass_context = click.make_pass_decorator(Context, ensure=True)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False, path_type=Path),
    help="Path to config file (default: ~/.config/account-search/config.toml)",
)
@click.option(
    "--data",
    "-d",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with account records (overrides config)",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug output (implies --verbose)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress non-error output",
)
@click.version_option(version=__version__, prog_name="account-search")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    data: Path | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
) -> None:
    """account-search: Search, filter and sort account records.

    Records are read from a JSON file given with --data or configured in
    ~/.config/account-search/config.toml. When a search finds nothing,
    similar values are suggested.

    Examples:

        # Create demo data and search it
        account-search sample-data accounts.json
        account-search -d accounts.json search --company acme

        # Show help for a specific command
        account-search search --help
    """
    ctx.ensure_object(Context)
    app_ctx = ctx.obj
    app_ctx.verbose = verbose or debug
    app_ctx.debug = debug
    app_ctx.quiet = quiet
    app_ctx.data_path = data

    set_verbosity(verbose=verbose, debug=debug)

    # Color is disabled by --no-color, NO_COLOR env, or config
    disable_color = no_color or os.environ.get("NO_COLOR") is not None

    if disable_color:
        set_color(False)

    try:
        loaded_config, warnings = load_config(config)
        app_ctx.config = loaded_config

        if not disable_color and not loaded_config.colored_output:
            set_color(False)

        if not quiet:
            for warn in warnings:
                warning(warn)

    except ConfigError as e:
        error(str(e))
        ctx.exit(1)


@cli.command("help")
@click.argument("command", required=False, nargs=-1)
@click.pass_context
def help_cmd(ctx: click.Context, command: tuple[str, ...]) -> None:
    """Show help for a command."""
    group = cli
    for name in command:
        cmd = group.get_command(ctx, name)
        if cmd is None:
            error(f"Unknown command: {name}")
            ctx.exit(1)
            return
        if isinstance(cmd, click.Group):
            group = cmd
        else:
            click.echo(cmd.get_help(ctx))
            return
    click.echo(group.get_help(ctx))


def register_commands() -> None:
    """Register all commands from the commands package."""
    from account_search.commands import discover_commands

    for command in discover_commands():
        cli.add_command(command)


# Register commands on import
register_commands()
