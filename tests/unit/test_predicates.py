"""Unit tests for single-condition matching and the left-to-right filter fold."""

from __future__ import annotations

from datetime import date

import pytest

from account_search.accounts import Account
from account_search.exceptions import UnknownFieldError
from account_search.search.ast_nodes import (
    FilterCondition,
    FilterOperator,
    LogicOperator,
    SimpleSearch,
)
from account_search.search.predicates import (
    fold_conditions,
    matches,
    matches_simple_search,
    matches_status,
)


def _matching(accounts: list[Account], condition: FilterCondition) -> list[str]:
    return [a.id[-1] for a in accounts if matches(a, condition)]


def _folding(accounts: list[Account], conditions: list[FilterCondition]) -> list[str]:
    return [a.id[-1] for a in accounts if fold_conditions(a, conditions)]


# ---------------------------------------------------------------------------
# Text operators
# ---------------------------------------------------------------------------


class TestTextOperators:
    def test_is_ignores_case(self, accounts: list[Account]) -> None:
        condition = FilterCondition("company_name", FilterOperator.IS, ["ACME CORP"])
        assert _matching(accounts, condition) == ["1", "4"]

    def test_is_needs_whole_value(self, accounts: list[Account]) -> None:
        condition = FilterCondition("company_name", FilterOperator.IS, ["Acme"])
        assert _matching(accounts, condition) == []

    def test_contains(self, accounts: list[Account]) -> None:
        condition = FilterCondition("company_name", FilterOperator.CONTAINS, ["corp"])
        assert _matching(accounts, condition) == ["1", "4"]

    def test_contains_any_operand(self, accounts: list[Account]) -> None:
        condition = FilterCondition("company_name", FilterOperator.CONTAINS, ["zeta", "labs"])
        assert _matching(accounts, condition) == ["2", "3"]

    def test_starts_with(self, accounts: list[Account]) -> None:
        condition = FilterCondition("company_name", FilterOperator.STARTS_WITH, ["aC"])
        assert _matching(accounts, condition) == ["1", "4"]

    def test_does_not_contain_requires_every_operand_absent(
        self, accounts: list[Account]
    ) -> None:
        condition = FilterCondition(
            "company_name", FilterOperator.DOES_NOT_CONTAIN, ["Acme", "Corp"]
        )
        assert _matching(accounts, condition) == ["2", "3", "5"]

    def test_does_not_contain_one_operand_present(self, make_account) -> None:
        # "Corp" alone is enough to exclude the record
        condition = FilterCondition(
            "company_name", FilterOperator.DOES_NOT_CONTAIN, ["Acme", "Corp"]
        )
        assert not matches(make_account(company_name="Widget Corp"), condition)

    def test_status_is_any_of(self, accounts: list[Account]) -> None:
        condition = FilterCondition("status", FilterOperator.IS, ["Open", "Closed"])
        assert _matching(accounts, condition) == ["1", "2", "5"]

    def test_operator_given_as_plain_string(self, accounts: list[Account]) -> None:
        condition = FilterCondition("company_name", "starts with", ["zeta"])
        assert _matching(accounts, condition) == ["2"]


# ---------------------------------------------------------------------------
# Numeric and date operators
# ---------------------------------------------------------------------------


class TestNumericOperators:
    def test_greater_than(self, accounts: list[Account]) -> None:
        condition = FilterCondition("balance", FilterOperator.GT, ["1000"])
        assert _matching(accounts, condition) == ["1"]

    def test_greater_than_any_operand(self, accounts: list[Account]) -> None:
        condition = FilterCondition("balance", FilterOperator.GT, ["6000", "900"])
        assert _matching(accounts, condition) == ["1", "3", "4"]

    def test_greater_or_equal(self, accounts: list[Account]) -> None:
        condition = FilterCondition("balance", FilterOperator.GE, ["1000"])
        assert _matching(accounts, condition) == ["1", "3", "4"]

    def test_less_or_equal(self, accounts: list[Account]) -> None:
        condition = FilterCondition("balance", FilterOperator.LE, ["0"])
        assert _matching(accounts, condition) == ["2", "5"]

    def test_less_than(self, accounts: list[Account]) -> None:
        condition = FilterCondition("balance", FilterOperator.LT, ["0"])
        assert _matching(accounts, condition) == ["2"]

    def test_decimal_operand(self, accounts: list[Account]) -> None:
        condition = FilterCondition("balance", FilterOperator.GT, ["999.5"])
        assert _matching(accounts, condition) == ["1", "3", "4"]

    def test_unparsable_operand_matches_nothing(self, accounts: list[Account]) -> None:
        condition = FilterCondition("balance", FilterOperator.GT, ["lots"])
        assert _matching(accounts, condition) == []


class TestDateConditions:
    def test_start_bound(self, accounts: list[Account]) -> None:
        condition = FilterCondition("date_added", start_date=date(2024, 1, 1))
        assert _matching(accounts, condition) == ["1", "3", "5"]

    def test_end_bound(self, accounts: list[Account]) -> None:
        condition = FilterCondition("date_added", end_date=date(2023, 12, 31))
        assert _matching(accounts, condition) == ["2", "4"]

    def test_both_bounds(self, accounts: list[Account]) -> None:
        condition = FilterCondition(
            "date_added", start_date=date(2024, 3, 1), end_date=date(2024, 3, 31)
        )
        assert _matching(accounts, condition) == ["1", "5"]

    def test_bounds_are_inclusive(self, accounts: list[Account]) -> None:
        day = date(2024, 3, 15)
        condition = FilterCondition("date_added", start_date=day, end_date=day)
        assert _matching(accounts, condition) == ["1", "5"]

    def test_string_bounds(self, accounts: list[Account]) -> None:
        condition = FilterCondition("date_added", start_date="2024-07-01")  # type: ignore[arg-type]
        assert _matching(accounts, condition) == ["3"]

    def test_no_bounds_no_values_matches_all(self, accounts: list[Account]) -> None:
        condition = FilterCondition("date_added")
        assert len(_matching(accounts, condition)) == len(accounts)

    @pytest.mark.parametrize(
        "operator",
        [FilterOperator.BEFORE, FilterOperator.AFTER, FilterOperator.IS, FilterOperator.CONTAINS],
    )
    def test_values_without_bounds_match_everything(
        self, accounts: list[Account], operator: FilterOperator
    ) -> None:
        condition = FilterCondition("date_added", operator, ["2020-01-01"])
        assert len(_matching(accounts, condition)) == len(accounts)

    def test_old_account_passes_bare_before(self, make_account) -> None:
        account = make_account(date_added=date(2023, 1, 1))
        condition = FilterCondition("date_added", FilterOperator.BEFORE, ["2020-01-01"])
        assert matches(account, condition)

    def test_only_bounds_decide(self, accounts: list[Account]) -> None:
        condition = FilterCondition(
            "date_added",
            FilterOperator.IS,
            ["1999-01-01"],
            start_date=date(2024, 7, 1),
        )
        assert _matching(accounts, condition) == ["3"]


# ---------------------------------------------------------------------------
# Vacuous and fail-open cases
# ---------------------------------------------------------------------------


class TestVacuousConditions:
    def test_empty_values_match_everything(self, accounts: list[Account]) -> None:
        condition = FilterCondition("balance", FilterOperator.GT, [])
        assert len(_matching(accounts, condition)) == len(accounts)

    def test_unknown_operator_matches_everything(self, accounts: list[Account]) -> None:
        condition = FilterCondition("company_name", "sounds like", ["nothing like it"])
        assert len(_matching(accounts, condition)) == len(accounts)

    def test_unknown_field_raises(self, accounts: list[Account]) -> None:
        with pytest.raises(UnknownFieldError):
            matches(accounts[0], FilterCondition("shoe_size", values=["9"]))

    def test_alias_field(self, accounts: list[Account]) -> None:
        condition = FilterCondition("companyName", FilterOperator.CONTAINS, ["zeta"])
        assert _matching(accounts, condition) == ["2"]


# ---------------------------------------------------------------------------
# Left-to-right fold
# ---------------------------------------------------------------------------

# A matches 1, 4; B matches 1, 5; C matches 1, 3, 4; D matches 1
A = FilterCondition("company_name", FilterOperator.CONTAINS, ["acme"])
B = FilterCondition("status", FilterOperator.IS, ["Open"])
C = FilterCondition("balance", FilterOperator.GT, ["500"])
D = FilterCondition("balance", FilterOperator.GT, ["2000"])


def _tag(condition: FilterCondition, logic: LogicOperator) -> FilterCondition:
    return FilterCondition(
        condition.field, condition.operator, list(condition.values), logic=logic
    )


class TestFoldConditions:
    def test_empty_chain_matches(self, accounts: list[Account]) -> None:
        assert len(_folding(accounts, [])) == len(accounts)

    def test_single_condition(self, accounts: list[Account]) -> None:
        assert _folding(accounts, [A]) == ["1", "4"]

    def test_first_logic_tag_ignored(self, accounts: list[Account]) -> None:
        assert _folding(accounts, [_tag(A, LogicOperator.OR)]) == ["1", "4"]

    def test_and(self, accounts: list[Account]) -> None:
        assert _folding(accounts, [A, _tag(B, LogicOperator.AND)]) == ["1"]

    def test_or(self, accounts: list[Account]) -> None:
        assert _folding(accounts, [A, _tag(B, LogicOperator.OR)]) == ["1", "4", "5"]

    def test_no_precedence(self, accounts: list[Account]) -> None:
        # (A or B) and D, not A or (B and D)
        chain = [A, _tag(B, LogicOperator.OR), _tag(D, LogicOperator.AND)]
        assert _folding(accounts, chain) == ["1"]

    def test_order_across_logic_boundary_matters(self, accounts: list[Account]) -> None:
        a_and_b_or_c = [A, _tag(B, LogicOperator.AND), _tag(C, LogicOperator.OR)]
        a_or_b_and_c = [A, _tag(B, LogicOperator.OR), _tag(C, LogicOperator.AND)]
        assert _folding(accounts, a_and_b_or_c) == ["1", "3", "4"]
        assert _folding(accounts, a_or_b_and_c) == ["1", "4"]

    def test_and_is_commutative(self, accounts: list[Account]) -> None:
        forward = [A, _tag(C, LogicOperator.AND)]
        backward = [C, _tag(A, LogicOperator.AND)]
        for account in accounts:
            assert fold_conditions(account, forward) == fold_conditions(account, backward)

    def test_logic_tag_as_string(self, accounts: list[Account]) -> None:
        or_open = FilterCondition("status", FilterOperator.IS, ["Open"])
        or_open.logic = "or"  # type: ignore[assignment]
        chain = [A, or_open]
        assert _folding(accounts, chain) == ["1", "4", "5"]

    def test_vacuous_link_keeps_running_result(self, accounts: list[Account]) -> None:
        empty = FilterCondition("balance", FilterOperator.GT, [], logic=LogicOperator.AND)
        assert _folding(accounts, [A, empty]) == ["1", "4"]


# ---------------------------------------------------------------------------
# Simple search
# ---------------------------------------------------------------------------


class TestMatchesSimpleSearch:
    def _run(self, accounts: list[Account], search: SimpleSearch) -> list[str]:
        return [a.id[-1] for a in accounts if matches_simple_search(a, search)]

    def test_empty_search_matches_all(self, accounts: list[Account]) -> None:
        assert len(self._run(accounts, SimpleSearch())) == len(accounts)

    def test_insensitive_substring(self, accounts: list[Account]) -> None:
        assert self._run(accounts, SimpleSearch(company_name="ACME")) == ["1", "4"]

    def test_sensitive_alnum_term_is_prefix(self, accounts: list[Account]) -> None:
        search = SimpleSearch(company_name="Acme", case_sensitive={"company_name": True})
        assert self._run(accounts, search) == ["1"]

    def test_sensitive_alnum_term_not_found_mid_value(self, accounts: list[Account]) -> None:
        search = SimpleSearch(company_name="Corp", case_sensitive={"company_name": True})
        assert self._run(accounts, search) == []

    def test_sensitive_symbol_term_is_substring(self, accounts: list[Account]) -> None:
        search = SimpleSearch(email="@example.com", case_sensitive={"email": True})
        assert self._run(accounts, search) == ["1", "2"]

    def test_account_number_prefix_vs_substring(self, accounts: list[Account]) -> None:
        sensitive = SimpleSearch(account_number="1", case_sensitive={"account_number": True})
        assert self._run(accounts, sensitive) == ["3", "5"]
        assert self._run(accounts, SimpleSearch(account_number="1")) == ["1", "3", "5"]

    def test_terms_combine_with_and(self, accounts: list[Account]) -> None:
        search = SimpleSearch(company_name="acme", contact_name="sarah")
        assert self._run(accounts, search) == ["4"]


class TestMatchesStatus:
    def test_no_selection_passes(self, accounts: list[Account]) -> None:
        assert all(matches_status(a, []) for a in accounts)

    def test_selection(self, accounts: list[Account]) -> None:
        kept = [a.id[-1] for a in accounts if matches_status(a, ["Collections", "Suspended"])]
        assert kept == ["3", "4"]
