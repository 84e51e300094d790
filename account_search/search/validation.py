"""Syntactic checks for user-entered search values.

All checks are pure: they return a ValidationResult and never raise, so a
caller can surface the message and re-prompt.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from typing import Literal

from account_search.exceptions import ValidationError
from account_search.search.ast_nodes import FilterCondition, FilterOperator, SimpleSearch
from account_search.search.fields import FieldKind, get_field_spec


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation check."""

    valid: bool
    error: str | None = None

    def __bool__(self) -> bool:
        return self.valid

    def raise_for_error(self, field: str, value: object) -> None:
        """Raise ValidationError if this result is a failure."""
        if not self.valid:
            raise ValidationError(field, value, self.error or "invalid input")


VALID = ValidationResult(True)


def _invalid(message: str) -> ValidationResult:
    return ValidationResult(False, message)


def validate_search_input(field: str, value: str) -> ValidationResult:
    """Check a raw value against the syntactic rule of a field.

    Empty input is always valid. Account numbers may not contain letters,
    phone numbers may not contain letters once spaces, hyphens and
    parentheses are removed, and balances must be non-negative decimal
    numbers. Email accepts anything so partial addresses can be searched.

    Args:
        field: Field name or alias.
        value: Text the user typed.

    Returns:
        ValidationResult with an error message on failure.
    """
    if not value:
        return VALID
    spec = get_field_spec(field)
    if spec is None or spec.validator is None:
        return VALID
    message = spec.validator(value)
    if message is not None:
        return _invalid(message)
    return VALID


def validate_date_bound(
    bound: Literal["start", "end"],
    candidate: date,
    *,
    start: date | None = None,
    end: date | None = None,
    today: date | None = None,
) -> ValidationResult:
    """Check a date bound being set on a date-range filter.

    Args:
        bound: Which bound is being set.
        candidate: The new value for that bound.
        start: The start bound already present, if any.
        end: The end bound already present, if any.
        today: Reference date for the future check (defaults to today).
    """
    today = today or date.today()
    if candidate > today:
        return _invalid("Date cannot be in the future")
    if bound == "start" and end is not None and candidate > end:
        return _invalid("Start date cannot be after end date")
    if bound == "end" and start is not None and candidate < start:
        return _invalid("End date cannot be before start date")
    return VALID


def validate_simple_search(search: SimpleSearch) -> ValidationResult:
    """Validate every populated free-text term; the first failure wins."""
    for name, term in search.terms().items():
        result = validate_search_input(name, term)
        if not result:
            return result
    return VALID


def _validate_date_condition(
    condition: FilterCondition, today: date | None
) -> ValidationResult:
    start, end = condition.start_date, condition.end_date
    if start is not None and end is not None and start > end:
        return _invalid("Start date cannot be after end date in advanced filters.")
    if start is not None:
        result = validate_date_bound("start", start, end=end, today=today)
        if not result:
            return result
    if end is not None:
        result = validate_date_bound("end", end, start=start, today=today)
        if not result:
            return result
    return VALID


def validate_filter_chain(
    conditions: Sequence[FilterCondition], *, today: date | None = None
) -> ValidationResult:
    """Validate an advanced filter chain before it is executed.

    Date conditions are checked through their bounds only: no bound may
    lie after ``today`` and the range must be ordered. Other conditions
    must use an operator offered for their field, and every operand must
    pass that field's input check.
    """
    for condition in conditions:
        spec = get_field_spec(condition.field)
        if spec is None:
            return _invalid(f"Unknown field: {condition.field}")

        if spec.kind is FieldKind.DATE:
            result = _validate_date_condition(condition, today)
            if not result:
                return result
            continue

        try:
            operator = FilterOperator(condition.operator)
        except ValueError:
            operator = None
        if operator is not None and operator not in spec.operators:
            return _invalid(f"Operator '{operator.value}' is not available for {spec.label}")

        for value in condition.values:
            result = validate_search_input(spec.name, value)
            if not result:
                return result
    return VALID


def can_append_condition(conditions: Sequence[FilterCondition]) -> ValidationResult:
    """Check whether another condition may be chained after ``conditions``.

    The last condition must carry a value (or, for date fields, a bound),
    otherwise the chain would silently grow vacuous links.
    """
    if not conditions:
        return VALID
    last = conditions[-1]
    spec = get_field_spec(last.field)
    if spec is not None and spec.kind is FieldKind.DATE:
        if not last.has_bounds:
            return _invalid(
                "Date filters must have at least a start date or end date. "
                "Please add a date before adding another condition."
            )
        return VALID
    if not last.values:
        return _invalid(
            "Filters must have at least one value. "
            "Please add a value before adding another condition."
        )
    return VALID
