"""Parse advanced filter expressions into a chain of FilterConditions."""

from __future__ import annotations

from datetime import date, timedelta
from importlib import resources
from typing import Any

from lark import Lark, Token, Transformer, UnexpectedInput

from account_search.exceptions import FilterParseError, ValidationError
from account_search.search.ast_nodes import FilterCondition, FilterOperator, LogicOperator
from account_search.search.fields import FIELDS, FieldKind, resolve_field
from account_search.search.validation import validate_search_input

# Operator symbols used in expressions. None means no symbol was given.
_SYMBOL_OPERATORS: dict[str | None, FilterOperator] = {
    None: FilterOperator.CONTAINS,
    "=": FilterOperator.IS,
    "^": FilterOperator.STARTS_WITH,
    "!": FilterOperator.DOES_NOT_CONTAIN,
    ">": FilterOperator.GT,
    "<": FilterOperator.LT,
    ">=": FilterOperator.GE,
    "<=": FilterOperator.LE,
}

# Comparison symbols on date fields set a single bound: (bound, day shift, operator)
_DATE_SYMBOL_BOUNDS: dict[str, tuple[str, int, FilterOperator]] = {
    "<": ("end", -1, FilterOperator.BEFORE),
    "<=": ("end", 0, FilterOperator.BEFORE),
    ">": ("start", 1, FilterOperator.AFTER),
    ">=": ("start", 0, FilterOperator.AFTER),
}

_RANGE_SEP = ".."


def _load_grammar() -> str:
    """Load the Lark grammar from the package resources."""
    return resources.files("account_search.search").joinpath("grammar.lark").read_text()


_GRAMMAR_TEXT = _load_grammar()

_parser = Lark(
    _GRAMMAR_TEXT,
    parser="earley",
    ambiguity="resolve",
)


class _RawCondition:
    """A condition as written, before field and operator resolution."""

    def __init__(self, field: str, symbol: str | None, values: list[str]) -> None:
        self.field = field
        self.symbol = symbol
        self.values = values
        self.logic = LogicOperator.AND


class _FilterTransformer(Transformer):
    """Transform the Lark parse tree into raw conditions."""

    def start(self, items: list[Any]) -> list[_RawCondition]:
        return items[0] if items else []

    def chain(self, items: list[Any]) -> list[_RawCondition]:
        conditions: list[_RawCondition] = []
        pending = LogicOperator.AND
        for item in items:
            if isinstance(item, LogicOperator):
                pending = item
                continue
            item.logic = pending
            conditions.append(item)
            pending = LogicOperator.AND
        return conditions

    def connective(self, items: list[Any]) -> LogicOperator:
        return LogicOperator.parse(str(items[0]))

    def condition(self, items: list[Any]) -> _RawCondition:
        field_name = str(items[0])
        if len(items) == 3:
            return _RawCondition(field_name, str(items[1]), items[2])
        return _RawCondition(field_name, None, items[1])

    def value_list(self, items: list[Any]) -> list[str]:
        return [str(item) for item in items]

    def quoted_value(self, items: list[Any]) -> str:
        raw = str(items[0])
        # Strip surrounding quotes
        if raw.startswith('"') and raw.endswith('"'):
            return raw[1:-1]
        return raw

    def bare_value(self, items: list[Any]) -> str:
        return str(items[0])

    def FIELD_NAME(self, token: Token) -> str:
        return str(token)

    def OPERATOR(self, token: Token) -> str:
        return str(token)


_transformer = _FilterTransformer()


def _parse_date(field_name: str, text: str) -> date | None:
    text = text.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValidationError(field_name, text, "dates must be written as YYYY-MM-DD") from None


def _require_date(field_name: str, text: str) -> date:
    day = _parse_date(field_name, text)
    if day is None:
        raise ValidationError(field_name, text, "a date is required")
    return day


def _build_date_condition(raw: _RawCondition, field_name: str) -> FilterCondition:
    """Turn a date expression into start/end bounds.

    ``a..b`` is a range with either side optional, ``<``/``<=``/``>``/``>=``
    set one bound (strict comparisons shift it by a day), and a bare or
    ``=`` date matches that single day.
    """
    if len(raw.values) != 1:
        raise ValidationError(field_name, ",".join(raw.values), "give a single date or range")
    text = raw.values[0]
    operator = FilterOperator.IS
    start: date | None = None
    end: date | None = None

    if raw.symbol in _DATE_SYMBOL_BOUNDS:
        bound, shift, operator = _DATE_SYMBOL_BOUNDS[raw.symbol]
        day = _require_date(field_name, text) + timedelta(days=shift)
        if bound == "start":
            start = day
        else:
            end = day
    elif raw.symbol not in (None, "="):
        raise ValidationError(
            field_name, text, f"operator '{raw.symbol}' is not available for dates"
        )
    elif _RANGE_SEP in text:
        start_text, _, end_text = text.partition(_RANGE_SEP)
        start = _parse_date(field_name, start_text)
        end = _parse_date(field_name, end_text)
        if start is None and end is None:
            raise ValidationError(field_name, text, "date range needs a start or end")
    else:
        start = end = _require_date(field_name, text)

    return FilterCondition(
        field=field_name,
        operator=operator,
        logic=raw.logic,
        start_date=start,
        end_date=end,
    )


def _build_condition(raw: _RawCondition) -> FilterCondition:
    field_name = resolve_field(raw.field)
    if FIELDS[field_name].kind is FieldKind.DATE:
        return _build_date_condition(raw, field_name)

    for value in raw.values:
        validate_search_input(field_name, value).raise_for_error(field_name, value)

    return FilterCondition(
        field=field_name,
        operator=_SYMBOL_OPERATORS[raw.symbol],
        values=list(raw.values),
        logic=raw.logic,
    )


def parse_filter_chain(expression: str) -> list[FilterCondition]:
    """Parse a filter expression into an ordered chain of conditions.

    Args:
        expression: Text such as ``company:Acme or balance:>1000``.

    Returns:
        Conditions in written order. The first one's logic tag is AND and
        carries no meaning.

    Raises:
        FilterParseError: If the expression is not valid syntax.
        UnknownFieldError: If a field name is not recognized.
        ValidationError: If an operand or date is malformed.
    """
    expression = expression.strip()
    if not expression:
        return []

    try:
        tree = _parser.parse(expression)
    except UnexpectedInput as e:
        raise FilterParseError(expression, str(e)) from e

    return [_build_condition(raw) for raw in _transformer.transform(tree)]
