"""Suggest accounts whose field value resembles a search term."""

from __future__ import annotations

import json

import click
from rich.markup import escape

from account_search.accounts import account_to_dict
from account_search.cli import Context, pass_context
from account_search.config import Config
from account_search.exceptions import DataError, UnknownFieldError
from account_search.search.fields import FIELDS, resolve_field
from account_search.search.matching import closest_candidates
from account_search.utils.output import console, create_table, error, info

EXIT_SUCCESS = 0
EXIT_USAGE_ERROR = 1
EXIT_DATA_ERROR = 2


@click.command("suggest")
@click.argument("term")
@click.option(
    "--field",
    "-F",
    "field_name",
    default="company_name",
    show_default=True,
    help="Field to compare the term against",
)
@click.option(
    "--limit",
    "-l",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum suggestions (default from config: 5)",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print suggestions as JSON",
)
@pass_context
def cli(ctx: Context, term: str, field_name: str, limit: int | None, as_json: bool) -> None:
    """Show the accounts closest to TERM ("did you mean").

    Values are scored on exact, prefix, substring and in-order character
    matches, shared characters and word starts, minus a length penalty.
    Each distinct value is shown once.

    \b
    Examples:
      account-search suggest "acme crop"
      account-search suggest jhon --field contact_name
    """
    config = ctx.config or Config()
    try:
        resolved = resolve_field(field_name)
    except UnknownFieldError as e:
        error(str(e), hint=f"Fields: {', '.join(FIELDS)}")
        raise SystemExit(EXIT_USAGE_ERROR)

    try:
        accounts = ctx.load_accounts()
    except DataError as e:
        error(str(e))
        raise SystemExit(EXIT_DATA_ERROR)

    ranked = closest_candidates(term, accounts, resolved, limit or config.suggestion_limit)

    if as_json:
        payload = [
            {"score": round(c.score, 2), "account": account_to_dict(c.account)} for c in ranked
        ]
        click.echo(json.dumps(payload, indent=2))
        raise SystemExit(EXIT_SUCCESS)

    if not ranked:
        info(f"No suggestions for: {escape(term)}")
        raise SystemExit(EXIT_SUCCESS)

    table = create_table(show_header=True, header_style="bold")
    table.add_column("Score", justify="right")
    table.add_column(FIELDS[resolved].label)
    table.add_column("ID")
    for candidate in ranked:
        table.add_row(f"{candidate.score:.1f}", escape(candidate.value), candidate.account.id)
    console.print(table)
    raise SystemExit(EXIT_SUCCESS)
