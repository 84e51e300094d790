"""Search, filter and sort account records."""

from __future__ import annotations

import json

import click
from rich.markup import escape

from account_search.accounts import ACCOUNT_STATUSES, Account, account_to_dict
from account_search.cli import Context, pass_context
from account_search.config import Config
from account_search.exceptions import (
    DataError,
    FilterParseError,
    UnknownFieldError,
    ValidationError,
)
from account_search.search.ast_nodes import FilterCondition, SimpleSearch
from account_search.search.fields import FIELDS, SEARCHABLE_FIELDS, resolve_field
from account_search.search.parser import parse_filter_chain
from account_search.search.query import QueryResult, evaluate_query
from account_search.search.validation import validate_filter_chain, validate_simple_search
from account_search.utils.output import (
    console,
    create_table,
    error,
    info,
    verbose,
)

EXIT_SUCCESS = 0
EXIT_NO_RESULTS = 0
EXIT_VALIDATION_ERROR = 1
EXIT_DATA_ERROR = 2

# Table columns in display order, matching the export layout of the web front end
COLUMNS: tuple[str, ...] = (
    "account_number",
    "company_name",
    "contact_name",
    "phone_number",
    "email",
    "status",
    "date_added",
    "balance",
)


def _format_balance(balance: int) -> str:
    """Format a balance with thousands separators, negatives in red."""
    text = f"{balance:,}"
    if balance < 0:
        return f"[balance.negative]{text}[/balance.negative]"
    return text


def _resolve_case_sensitive(config: Config, names: tuple[str, ...]) -> dict[str, bool]:
    flags = dict.fromkeys(config.case_sensitive, True)
    for name in names:
        field_name = resolve_field(name)
        if field_name not in SEARCHABLE_FIELDS:
            raise ValidationError(
                "case-sensitive field", name, "only free-text search fields can be case-sensitive"
            )
        flags[field_name] = True
    return flags


@click.command("search")
@click.option("--account", "account_number", default="", help="Account number search")
@click.option("--company", "company_name", default="", help="Company name search")
@click.option("--contact", "contact_name", default="", help="Contact name search")
@click.option("--phone", "phone_number", default="", help="Phone number search")
@click.option("--email", default="", help="Email search (partial addresses allowed)")
@click.option(
    "--case-sensitive",
    "-C",
    "case_sensitive",
    multiple=True,
    metavar="FIELD",
    help="Search FIELD case-sensitively (repeatable)",
)
@click.option(
    "--status",
    "-S",
    "statuses",
    multiple=True,
    type=click.Choice(ACCOUNT_STATUSES, case_sensitive=False),
    help="Only show accounts with this status (repeatable)",
)
@click.option(
    "--where",
    "-w",
    default=None,
    help="Advanced filter chain, e.g. 'company:Acme or balance:>1000'",
)
@click.option(
    "--sort",
    "-s",
    "sort_field",
    default=None,
    help="Sort by field (default from config: account_number)",
)
@click.option(
    "--limit",
    "-l",
    type=click.IntRange(min=1),
    default=None,
    help="Limit number of results",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json", "ids"]),
    default="table",
    help="Output format (default: table)",
)
@pass_context
def cli(
    ctx: Context,
    account_number: str,
    company_name: str,
    contact_name: str,
    phone_number: str,
    email: str,
    case_sensitive: tuple[str, ...],
    statuses: tuple[str, ...],
    where: str | None,
    sort_field: str | None,
    limit: int | None,
    output_format: str,
) -> None:
    """Search accounts by column text, status and advanced filters.

    Column searches are combined with AND. Case-insensitive searches match
    anywhere in the value; case-sensitive searches starting with a letter or
    digit match at the start of the value.

    \b
    Advanced filters (--where):
      company:Acme                 contains
      company:="Acme Corp"         is
      company:^Ac                  starts with
      company:!Acme,Corp           contains none of these
      balance:>1000                numeric: > < >= <=
      status:=Open,Closed          any of several values
      date:2024-01-01..2024-06-30  date range (either side optional)
      date:<2024-01-01             before / after (>) a day, <= >= inclusive
      date:2024-03-15              that day only
    Conditions are joined with 'and' / 'or' and evaluated strictly left
    to right: 'a:x or b:y and c:z' means '(a:x or b:y) and c:z'.

    \b
    Sorting is fixed per field: account_number and phone_number ascending
    by number, company_name, contact_name and email alphabetically,
    balance and date_added descending.

    When nothing matches, similar values are suggested.
    """
    config = ctx.config or Config()

    try:
        search = SimpleSearch(
            account_number=account_number,
            company_name=company_name,
            contact_name=contact_name,
            phone_number=phone_number,
            email=email,
            case_sensitive=_resolve_case_sensitive(config, case_sensitive),
            statuses=list(statuses),
        )
        filters: list[FilterCondition] = parse_filter_chain(where) if where else []
        sort_key = resolve_field(sort_field) if sort_field else config.default_sort
    except FilterParseError as e:
        error(str(e), hint="See 'account-search search --help' for the filter syntax")
        raise SystemExit(EXIT_VALIDATION_ERROR)
    except (UnknownFieldError, ValidationError) as e:
        error(str(e), hint=f"Fields: {', '.join(FIELDS)}")
        raise SystemExit(EXIT_VALIDATION_ERROR)

    for check in (validate_simple_search(search), validate_filter_chain(filters)):
        if not check:
            error(check.error or "Invalid input")
            raise SystemExit(EXIT_VALIDATION_ERROR)

    try:
        accounts = ctx.load_accounts()
    except DataError as e:
        error(str(e))
        raise SystemExit(EXIT_DATA_ERROR)
    verbose(f"Searching {len(accounts)} accounts")

    result = evaluate_query(
        accounts,
        search,
        filters,
        sort_key=sort_key,
        suggestion_limit=config.suggestion_limit,
    )
    if limit is not None:
        result.results = result.results[:limit]

    if output_format == "json":
        _print_json(result)
    elif output_format == "ids":
        _print_ids(result.results)
    elif result.results:
        _print_table(result.results)

    if not result.results:
        if output_format == "table":
            info("No accounts found")
            if result.suggestions:
                _print_suggestions(result.suggestions)
        raise SystemExit(EXIT_NO_RESULTS)

    raise SystemExit(EXIT_SUCCESS)


def _print_table(accounts: list[Account]) -> None:
    """Print results as a Rich table."""
    info(f"{len(accounts)} accounts")
    table = create_table(show_header=True, header_style="bold")
    for name in COLUMNS:
        justify = "right" if name == "balance" else "left"
        table.add_column(FIELDS[name].label, no_wrap=True, justify=justify)

    for account in accounts:
        row = []
        for name in COLUMNS:
            if name == "balance":
                row.append(_format_balance(account.balance))
            elif name == "company_name":
                row.append(f"[account.company]{escape(account.company_name)}[/account.company]")
            else:
                row.append(escape(account.text(name)))
        table.add_row(*row)
    console.print(table)


def _print_suggestions(suggestions: dict[str, list[Account]]) -> None:
    """Print "did you mean" values per field."""
    for field_name, accounts in suggestions.items():
        label = FIELDS[field_name].label
        values = ", ".join(
            f"[suggestion]{escape(a.text(field_name))}[/suggestion]" for a in accounts
        )
        console.print(f"Did you mean ({label}): {values}")


def _print_ids(accounts: list[Account]) -> None:
    """Print one account id per line."""
    for account in accounts:
        click.echo(account.id)


def _print_json(result: QueryResult) -> None:
    """Print results (and suggestions, if any) as JSON."""
    payload: dict = {"results": [account_to_dict(a) for a in result.results]}
    if result.suggestions:
        payload["suggestions"] = {
            field_name: [account_to_dict(a) for a in accounts]
            for field_name, accounts in result.suggestions.items()
        }
    click.echo(json.dumps(payload, indent=2))
