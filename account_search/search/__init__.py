"""Account query engine: validation, filtering, sorting and suggestions."""

from account_search.search.ast_nodes import (
    FilterCondition,
    FilterOperator,
    LogicOperator,
    SimpleSearch,
)
from account_search.search.matching import find_closest_matches
from account_search.search.parser import parse_filter_chain
from account_search.search.predicates import fold_conditions, matches
from account_search.search.query import QueryResult, evaluate_query
from account_search.search.sorting import sort_accounts_by_field
from account_search.search.validation import (
    ValidationResult,
    can_append_condition,
    validate_filter_chain,
    validate_search_input,
)

__all__ = [
    "FilterCondition",
    "FilterOperator",
    "LogicOperator",
    "QueryResult",
    "SimpleSearch",
    "ValidationResult",
    "can_append_condition",
    "evaluate_query",
    "find_closest_matches",
    "fold_conditions",
    "matches",
    "parse_filter_chain",
    "sort_accounts_by_field",
    "validate_filter_chain",
    "validate_search_input",
]
