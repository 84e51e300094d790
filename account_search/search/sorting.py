"""Sort accounts by a field using that field's fixed ordering."""

from __future__ import annotations

from collections.abc import Iterable

from account_search.accounts import Account
from account_search.search.fields import get_field_spec


def sort_accounts_by_field(accounts: Iterable[Account], field: str | None) -> list[Account]:
    """Return a new list of accounts ordered by ``field``.

    Account and phone numbers sort ascending numerically (phone numbers on
    their digits only), balance and date added sort descending, and names
    and email sort ascending by Unicode collation. Any other field keeps the
    input order. The sort is stable, so equal keys keep their relative order.

    Args:
        accounts: Accounts to sort; never modified.
        field: Field name or alias to sort by. None keeps the input order.

    Returns:
        A new list.
    """
    spec = get_field_spec(field) if field else None
    if spec is None or spec.sort_key is None:
        return list(accounts)
    return sorted(accounts, key=spec.sort_key, reverse=spec.descending)
