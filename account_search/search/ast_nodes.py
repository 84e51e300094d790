"""Data classes describing a search: simple field search and advanced filters."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date


class LogicOperator(str, enum.Enum):
    """How a filter condition combines with the conditions before it."""

    AND = "And"
    OR = "Or"

    @classmethod
    def parse(cls, value: str | LogicOperator) -> LogicOperator:
        """Parse ``and``/``AND``/``And`` (and the same for OR)."""
        if isinstance(value, LogicOperator):
            return value
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        raise ValueError(f"Unknown logic operator: {value!r}")


class FilterOperator(str, enum.Enum):
    """Comparison applied between a record field and a condition's operands."""

    IS = "is"
    CONTAINS = "contains"
    DOES_NOT_CONTAIN = "does not contain"
    STARTS_WITH = "starts with"
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    BEFORE = "before"
    AFTER = "after"


@dataclass
class FilterCondition:
    """One rule in an advanced filter chain.

    ``logic`` joins this condition to the running result of the conditions
    before it and is ignored for the first condition in a chain. Date fields
    use ``start_date``/``end_date`` bounds instead of ``values``.

    A condition with no values and no bounds is vacuous and matches every
    record.

    Operators:
        - ``is``, ``contains``, ``starts with``: case-insensitive, any operand
        - ``does not contain``: case-insensitive, none of the operands
        - ``>``, ``<``, ``>=``, ``<=``: numeric, any operand
        - ``before``, ``after``: lexical comparison, any operand
    """

    field: str
    operator: FilterOperator | str = FilterOperator.IS
    values: list[str] = field(default_factory=list)
    logic: LogicOperator = LogicOperator.AND
    start_date: date | None = None
    end_date: date | None = None

    @property
    def has_bounds(self) -> bool:
        return self.start_date is not None or self.end_date is not None


@dataclass
class SimpleSearch:
    """Per-column free-text search terms plus a status selection.

    An empty string means the field is not searched. ``case_sensitive`` maps
    field names to their case-sensitivity flag (missing means insensitive).
    An empty ``statuses`` list lets every status through.
    """

    account_number: str = ""
    company_name: str = ""
    contact_name: str = ""
    phone_number: str = ""
    email: str = ""
    case_sensitive: dict[str, bool] = field(default_factory=dict)
    statuses: list[str] = field(default_factory=list)

    def terms(self) -> dict[str, str]:
        """Return the populated ``{field: term}`` pairs in column order."""
        pairs = {
            "account_number": self.account_number,
            "company_name": self.company_name,
            "contact_name": self.contact_name,
            "phone_number": self.phone_number,
            "email": self.email,
        }
        return {name: term for name, term in pairs.items() if term}

    def is_case_sensitive(self, field_name: str) -> bool:
        return self.case_sensitive.get(field_name, False)
