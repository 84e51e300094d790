"""Generate a demo accounts file."""

from __future__ import annotations

from pathlib import Path

import click

from account_search.accounts import dump_accounts, generate_sample_accounts
from account_search.cli import Context, pass_context
from account_search.utils.output import error, success


@click.command("sample-data")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--count",
    "-n",
    type=click.IntRange(min=1),
    default=50,
    show_default=True,
    help="Number of accounts to generate",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Random seed for reproducible data",
)
@click.option(
    "--force",
    "-f",
    is_flag=True,
    default=False,
    help="Overwrite an existing file",
)
@pass_context
def cli(ctx: Context, output: Path, count: int, seed: int | None, force: bool) -> None:
    """Write COUNT generated accounts to OUTPUT as JSON.

    \b
    Examples:
      account-search sample-data accounts.json
      account-search sample-data demo.json --count 200 --seed 7
    """
    if output.exists() and not force:
        error(f"File already exists: {output}", hint="Use --force to overwrite")
        raise SystemExit(1)

    accounts = generate_sample_accounts(count, seed=seed)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        dump_accounts(accounts, output)
    except OSError as e:
        error(f"Failed to write accounts: {e}")
        raise SystemExit(1)

    if not ctx.quiet:
        success(f"Wrote {len(accounts)} accounts to {output}")
