"""Check a value against a field's input rules."""

from __future__ import annotations

import click

from account_search.cli import Context, pass_context
from account_search.exceptions import UnknownFieldError
from account_search.search.fields import FIELDS, resolve_field
from account_search.search.validation import validate_search_input
from account_search.utils.output import error, success

EXIT_VALID = 0
EXIT_INVALID = 1


@click.command("validate")
@click.argument("field_name", metavar="FIELD")
@click.argument("value")
@pass_context
def cli(ctx: Context, field_name: str, value: str) -> None:
    """Check whether VALUE is acceptable input for FIELD.

    Account and phone numbers may not contain letters (phone formatting
    characters are ignored) and balances must be plain non-negative
    numbers. Exits with status 1 when the value is rejected.

    \b
    Examples:
      account-search validate account_number 12345678
      account-search validate phone "(555) 123-4567"
    """
    try:
        resolved = resolve_field(field_name)
    except UnknownFieldError as e:
        error(str(e), hint=f"Fields: {', '.join(FIELDS)}")
        raise SystemExit(EXIT_INVALID)

    result = validate_search_input(resolved, value)
    if not result:
        error(result.error or "Invalid input")
        raise SystemExit(EXIT_INVALID)

    if not ctx.quiet:
        success(f"Valid {FIELDS[resolved].label}: {value!r}")
    raise SystemExit(EXIT_VALID)
