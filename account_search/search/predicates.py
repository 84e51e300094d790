"""Decide whether an account satisfies filter conditions and simple searches."""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterable, Sequence
from datetime import date

from account_search.accounts import Account
from account_search.search.ast_nodes import (
    FilterCondition,
    FilterOperator,
    LogicOperator,
    SimpleSearch,
)
from account_search.search.fields import FIELDS, FieldKind, resolve_field

_STARTS_ALNUM = re.compile(r"^[0-9a-zA-Z]")


def _as_number(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        return math.nan


# Each operator pairs a per-operand test with how operand results combine.
# ``does not contain`` is the only operator that needs every operand to pass,
# i.e. the field must contain none of the operands.
_OperatorEntry = tuple[Callable[[str, str], bool], Callable[[Iterable[bool]], bool]]

_OPERATOR_TABLE: dict[FilterOperator, _OperatorEntry] = {
    FilterOperator.IS: (lambda v, o: v.lower() == o.lower(), any),
    FilterOperator.CONTAINS: (lambda v, o: o.lower() in v.lower(), any),
    FilterOperator.DOES_NOT_CONTAIN: (lambda v, o: o.lower() not in v.lower(), all),
    FilterOperator.STARTS_WITH: (lambda v, o: v.lower().startswith(o.lower()), any),
    FilterOperator.GT: (lambda v, o: _as_number(v) > _as_number(o), any),
    FilterOperator.LT: (lambda v, o: _as_number(v) < _as_number(o), any),
    FilterOperator.GE: (lambda v, o: _as_number(v) >= _as_number(o), any),
    FilterOperator.LE: (lambda v, o: _as_number(v) <= _as_number(o), any),
    FilterOperator.BEFORE: (lambda v, o: v < o, any),
    FilterOperator.AFTER: (lambda v, o: v > o, any),
}


def _bound_text(bound: date | str) -> str:
    return bound.isoformat() if isinstance(bound, date) else str(bound)


def _matches_date_range(value: str, start: date | str | None, end: date | str | None) -> bool:
    # ISO dates order correctly as strings
    if start is not None and value < _bound_text(start):
        return False
    if end is not None and value > _bound_text(end):
        return False
    return True


def matches(account: Account, condition: FilterCondition) -> bool:
    """Return whether ``account`` satisfies a single filter condition.

    Date fields are only ever checked against the start and end bounds
    (inclusive); their operator and values play no part, and with neither
    bound set they match everything. On other fields a condition without
    operands matches everything, and the operator is applied to each
    operand. Unknown operators match everything.
    """
    field_name = resolve_field(condition.field)
    value = account.text(field_name)

    if FIELDS[field_name].kind is FieldKind.DATE:
        return _matches_date_range(value, condition.start_date, condition.end_date)

    if not condition.values:
        return True

    try:
        test, combine = _OPERATOR_TABLE[FilterOperator(condition.operator)]
    except ValueError:
        return True

    return combine(test(value, operand) for operand in condition.values)


def fold_conditions(account: Account, conditions: Sequence[FilterCondition]) -> bool:
    """Combine the results of a filter chain strictly left to right.

    The first condition seeds the result and its logic tag is ignored. Every
    later condition joins the running result with its own tag, with no
    precedence between AND and OR: ``A; OR B; AND C`` is ``(A or B) and C``.
    All conditions are evaluated. An empty chain matches.
    """
    result = True
    for index, condition in enumerate(conditions):
        matched = matches(account, condition)
        if index == 0:
            result = matched
        elif LogicOperator.parse(condition.logic) is LogicOperator.AND:
            result = result and matched
        else:
            result = result or matched
    return result


def _matches_term(value: str, term: str, case_sensitive: bool) -> bool:
    if case_sensitive:
        if _STARTS_ALNUM.match(term):
            return value.startswith(term)
        return term in value
    return term.lower() in value.lower()


def matches_simple_search(account: Account, search: SimpleSearch) -> bool:
    """Return whether ``account`` matches every populated free-text term.

    Case-sensitive terms beginning with a digit or letter must be a prefix of
    the field value; other case-sensitive terms must appear anywhere.
    Case-insensitive terms must appear anywhere, ignoring case.
    """
    for field_name, term in search.terms().items():
        value = account.text(field_name)
        if not _matches_term(value, term, search.is_case_sensitive(field_name)):
            return False
    return True


def matches_status(account: Account, statuses: Sequence[str]) -> bool:
    """Return whether the account status is selected. No selection passes all."""
    if not statuses:
        return True
    return account.status.value in statuses
