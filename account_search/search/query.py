"""Run a search over an in-memory collection of accounts."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from account_search.accounts import Account
from account_search.search.ast_nodes import FilterCondition, SimpleSearch
from account_search.search.fields import (
    DEFAULT_SORT_FIELD,
    MAX_SUGGESTIONS,
    FieldKind,
    get_field_spec,
    resolve_field,
)
from account_search.search.matching import find_closest_matches
from account_search.search.predicates import (
    fold_conditions,
    matches_simple_search,
    matches_status,
)
from account_search.search.sorting import sort_accounts_by_field

log = logging.getLogger(__name__)


@dataclass
class QueryResult:
    """Outcome of a query.

    Attributes:
        results: Matching accounts in sort order.
        suggestions: Closest matches per field when nothing matched and a
            search term was given, otherwise None.
    """

    results: list[Account]
    suggestions: dict[str, list[Account]] | None = None


def _is_date_condition(condition: FilterCondition) -> bool:
    spec = get_field_spec(condition.field)
    return spec is not None and spec.kind is FieldKind.DATE


def _has_search_term(search: SimpleSearch, filters: Sequence[FilterCondition]) -> bool:
    if any(term.strip() for term in search.terms().values()):
        return True
    return any(
        value.strip()
        for condition in filters
        if not _is_date_condition(condition)
        for value in condition.values
    )


def build_suggestions(
    accounts: Sequence[Account],
    search: SimpleSearch,
    filters: Sequence[FilterCondition],
    limit: int = MAX_SUGGESTIONS,
) -> dict[str, list[Account]] | None:
    """Collect "did you mean" candidates for every populated search term.

    Simple-search terms are tried first. For each non-date filter, operands
    are tried in order until one yields matches, unless its field already
    has suggestions.
    """
    suggestions: dict[str, list[Account]] = {}

    for field_name, term in search.terms().items():
        if not term.strip():
            continue
        found = find_closest_matches(term, accounts, field_name, limit=limit)
        if found:
            suggestions[field_name] = found

    for condition in filters:
        if _is_date_condition(condition):
            continue
        field_name = resolve_field(condition.field)
        for value in condition.values:
            if field_name in suggestions:
                break
            if not value.strip():
                continue
            found = find_closest_matches(value, accounts, field_name, limit=limit)
            if found:
                suggestions[field_name] = found

    return suggestions or None


def evaluate_query(
    accounts: Sequence[Account],
    search: SimpleSearch | None = None,
    filters: Sequence[FilterCondition] | None = None,
    sort_key: str | None = DEFAULT_SORT_FIELD,
    suggestion_limit: int = MAX_SUGGESTIONS,
) -> QueryResult:
    """Filter, sort and (on an empty result) suggest.

    An account is kept when it passes the advanced filter chain (if any), the
    simple search terms and the status selection. Survivors are sorted by
    ``sort_key``. When nothing is kept and a search term or filter operand
    was given, suggestions are computed over the full collection.

    Nothing passed in is modified. Validation is the caller's job (see
    ``account_search.search.validation``).

    Args:
        accounts: All accounts to search.
        search: Free-text column search and status selection.
        filters: Advanced filter chain, folded left to right.
        sort_key: Field to sort results by; None keeps collection order.
        suggestion_limit: Maximum suggestions per field.

    Returns:
        QueryResult with ordered results and optional suggestions.
    """
    search = search or SimpleSearch()
    filters = list(filters or [])

    kept = [
        account
        for account in accounts
        if (not filters or fold_conditions(account, filters))
        and matches_simple_search(account, search)
        and matches_status(account, search.statuses)
    ]
    results = sort_accounts_by_field(kept, sort_key)
    log.debug(
        "Query kept %d of %d accounts (%d filters, sort=%s)",
        len(results),
        len(accounts),
        len(filters),
        sort_key,
    )

    if results or not _has_search_term(search, filters):
        return QueryResult(results=results)

    suggestions = build_suggestions(accounts, search, filters, limit=suggestion_limit)
    if suggestions:
        log.debug("Suggestions for fields: %s", ", ".join(suggestions))
    return QueryResult(results=results, suggestions=suggestions)
