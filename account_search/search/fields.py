"""Per-field behavior table: sorting, input validation and allowed operators.

Every field-specific decision of the search engine is read from ``FIELDS``
instead of being spread across ``if field == ...`` branches. The fixed
asymmetries live here as data: balance and date sort descending while
account number sorts ascending, and each field kind exposes its own operator
set.
"""

from __future__ import annotations

import enum
import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from pyuca import Collator

from account_search.accounts import Account
from account_search.exceptions import UnknownFieldError
from account_search.search.ast_nodes import FilterOperator

MAX_SUGGESTIONS = 5
DEFAULT_SORT_FIELD = "account_number"

_LETTERS = re.compile(r"[a-zA-Z]")
_PHONE_FORMATTING = re.compile(r"[\s\-()]")
_NON_DIGITS = re.compile(r"\D")
_BALANCE = re.compile(r"^\d+(\.\d+)?$")

NUMERIC_OPERATORS: tuple[FilterOperator, ...] = (
    FilterOperator.IS,
    FilterOperator.CONTAINS,
    FilterOperator.GT,
    FilterOperator.LT,
    FilterOperator.GE,
    FilterOperator.LE,
)
DATE_OPERATORS: tuple[FilterOperator, ...] = (
    FilterOperator.IS,
    FilterOperator.CONTAINS,
    FilterOperator.BEFORE,
    FilterOperator.AFTER,
)
TEXT_OPERATORS: tuple[FilterOperator, ...] = (
    FilterOperator.IS,
    FilterOperator.CONTAINS,
    FilterOperator.DOES_NOT_CONTAIN,
    FilterOperator.STARTS_WITH,
)


class FieldKind(enum.Enum):
    """Broad data type of an account field."""

    IDENTIFIER = "identifier"
    TEXT = "text"
    NUMERIC = "numeric"
    DATE = "date"
    STATUS = "status"


@dataclass(frozen=True)
class FieldSpec:
    """How the engine treats one account field.

    Attributes:
        name: Account attribute name.
        label: Human-readable name used in messages and table headers.
        kind: Broad data type.
        searchable: Whether the field has a free-text search column.
        sort_key: Key function for sorting, or None to keep input order.
        descending: Fixed sort direction for this field.
        validator: Returns an error message for a bad raw value, else None.
        operators: Filter operators offered for this field.
    """

    name: str
    label: str
    kind: FieldKind
    searchable: bool = False
    sort_key: Callable[[Account], Any] | None = None
    descending: bool = False
    validator: Callable[[str], str | None] | None = None
    operators: tuple[FilterOperator, ...] = TEXT_OPERATORS


# ---------------------------------------------------------------------------
# Sort keys
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_collator() -> Collator:
    """Return the shared Unicode collator (the table is loaded once)."""
    return Collator()


def _collation_key(field_name: str) -> Callable[[Account], Any]:
    def key(account: Account) -> Any:
        return get_collator().sort_key(account.text(field_name))

    return key


def _account_number_key(account: Account) -> float:
    # Unparsable numbers sort after all real ones
    try:
        return float(account.account_number)
    except ValueError:
        return math.inf


def _phone_number_key(account: Account) -> int:
    return int(_NON_DIGITS.sub("", account.phone_number) or 0)


def _balance_key(account: Account) -> int:
    return account.balance


def _date_added_key(account: Account) -> str:
    return account.date_added.isoformat()


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def _check_account_number(value: str) -> str | None:
    if _LETTERS.search(value):
        return "Account number cannot contain letters"
    return None


def _check_phone_number(value: str) -> str | None:
    if _LETTERS.search(_PHONE_FORMATTING.sub("", value)):
        return "Phone number cannot contain letters"
    return None


def _check_balance(value: str) -> str | None:
    if not _BALANCE.match(value):
        return "Balance must be a valid number."
    return None


# ---------------------------------------------------------------------------
# The table
# ---------------------------------------------------------------------------

FIELDS: dict[str, FieldSpec] = {
    spec.name: spec
    for spec in (
        FieldSpec(name="id", label="ID", kind=FieldKind.IDENTIFIER),
        FieldSpec(
            name="account_number",
            label="Account #",
            kind=FieldKind.TEXT,
            searchable=True,
            sort_key=_account_number_key,
            validator=_check_account_number,
        ),
        FieldSpec(
            name="company_name",
            label="Company Name",
            kind=FieldKind.TEXT,
            searchable=True,
            sort_key=_collation_key("company_name"),
        ),
        FieldSpec(
            name="contact_name",
            label="Contact Name",
            kind=FieldKind.TEXT,
            searchable=True,
            sort_key=_collation_key("contact_name"),
        ),
        FieldSpec(
            name="phone_number",
            label="Phone",
            kind=FieldKind.TEXT,
            searchable=True,
            sort_key=_phone_number_key,
            validator=_check_phone_number,
        ),
        FieldSpec(
            name="email",
            label="Email",
            kind=FieldKind.TEXT,
            searchable=True,
            sort_key=_collation_key("email"),
        ),
        FieldSpec(name="status", label="Status", kind=FieldKind.STATUS),
        FieldSpec(
            name="balance",
            label="Balance",
            kind=FieldKind.NUMERIC,
            sort_key=_balance_key,
            descending=True,
            validator=_check_balance,
            operators=NUMERIC_OPERATORS,
        ),
        FieldSpec(
            name="date_added",
            label="Date Added",
            kind=FieldKind.DATE,
            sort_key=_date_added_key,
            descending=True,
            operators=DATE_OPERATORS,
        ),
    )
}

SEARCHABLE_FIELDS: tuple[str, ...] = tuple(n for n, s in FIELDS.items() if s.searchable)
SORTABLE_FIELDS: tuple[str, ...] = tuple(n for n, s in FIELDS.items() if s.sort_key is not None)

# Alternative spellings: camelCase keys of the web front end and short names
_FIELD_ALIASES: dict[str, str] = {
    "accountnumber": "account_number",
    "account": "account_number",
    "companyname": "company_name",
    "company": "company_name",
    "contactname": "contact_name",
    "contact": "contact_name",
    "phonenumber": "phone_number",
    "phone": "phone_number",
    "dateadded": "date_added",
    "date": "date_added",
}


def resolve_field(name: str) -> str:
    """Map a field name or alias to its canonical account attribute name.

    Raises:
        UnknownFieldError: If ``name`` matches no field.
    """
    if name in FIELDS:
        return name
    folded = name.strip().lower()
    if folded in FIELDS:
        return folded
    alias = _FIELD_ALIASES.get(folded.replace("_", "").replace("-", ""))
    if alias is None:
        raise UnknownFieldError(name)
    return alias


def get_field_spec(name: str) -> FieldSpec | None:
    """Return the FieldSpec for a field name or alias, or None if unknown."""
    try:
        return FIELDS[resolve_field(name)]
    except UnknownFieldError:
        return None
