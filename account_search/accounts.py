"""Account records and their JSON representation."""

from __future__ import annotations

import enum
import json
import random
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import Any

from account_search.exceptions import RecordLoadError


class AccountStatus(str, enum.Enum):
    """Lifecycle state of an account."""

    OPEN = "Open"
    CLOSED = "Closed"
    COLLECTIONS = "Collections"
    SUSPENDED = "Suspended"

    def __str__(self) -> str:
        return self.value


ACCOUNT_STATUSES: tuple[str, ...] = tuple(s.value for s in AccountStatus)


@dataclass(frozen=True)
class Account:
    """A single account record.

    Attributes:
        id: Unique identifier (``ACC00001``).
        account_number: Numeric string, e.g. ``12345678``.
        company_name: Company the account belongs to.
        contact_name: Primary contact person.
        phone_number: Formatted phone number, e.g. ``(555) 123-4567``.
        email: Contact email address.
        status: Current account status.
        balance: Signed balance in whole currency units.
        date_added: Day the account was added to the system.
    """

    id: str
    account_number: str
    company_name: str
    contact_name: str
    phone_number: str
    email: str
    status: AccountStatus
    balance: int
    date_added: date

    def text(self, field: str) -> str:
        """Return a field value as the string the search engine compares against."""
        value = getattr(self, field)
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, AccountStatus):
            return value.value
        return str(value)


# camelCase keys as exported by the web front end
_CAMEL_KEYS: dict[str, str] = {
    "accountNumber": "account_number",
    "companyName": "company_name",
    "contactName": "contact_name",
    "phoneNumber": "phone_number",
    "dateAdded": "date_added",
}

_REQUIRED_KEYS: tuple[str, ...] = (
    "id",
    "account_number",
    "company_name",
    "contact_name",
    "phone_number",
    "email",
    "status",
    "balance",
    "date_added",
)


def account_from_dict(data: dict[str, Any], source: str = "<record>") -> Account:
    """Build an Account from a JSON object.

    Both snake_case and camelCase keys are accepted. Unknown keys are ignored.

    Raises:
        RecordLoadError: If a key is missing or a value has the wrong shape.
    """
    if not isinstance(data, dict):
        raise RecordLoadError(source, f"expected an object, got {type(data).__name__}")

    values = {_CAMEL_KEYS.get(k, k): v for k, v in data.items()}
    missing = [k for k in _REQUIRED_KEYS if k not in values]
    if missing:
        raise RecordLoadError(source, f"missing keys: {', '.join(missing)}")

    try:
        status = AccountStatus(values["status"])
    except ValueError:
        raise RecordLoadError(
            source,
            f"status must be one of {', '.join(ACCOUNT_STATUSES)}, got {values['status']!r}",
        ) from None

    balance = values["balance"]
    if isinstance(balance, bool) or not isinstance(balance, int):
        raise RecordLoadError(source, f"balance must be an integer, got {balance!r}")

    try:
        date_added = date.fromisoformat(str(values["date_added"]))
    except ValueError:
        raise RecordLoadError(
            source, f"date_added must be YYYY-MM-DD, got {values['date_added']!r}"
        ) from None

    return Account(
        id=str(values["id"]),
        account_number=str(values["account_number"]),
        company_name=str(values["company_name"]),
        contact_name=str(values["contact_name"]),
        phone_number=str(values["phone_number"]),
        email=str(values["email"]),
        status=status,
        balance=balance,
        date_added=date_added,
    )


def account_to_dict(account: Account) -> dict[str, Any]:
    """Convert an Account to a JSON-serializable dict."""
    return {
        "id": account.id,
        "account_number": account.account_number,
        "company_name": account.company_name,
        "contact_name": account.contact_name,
        "phone_number": account.phone_number,
        "email": account.email,
        "status": account.status.value,
        "balance": account.balance,
        "date_added": account.date_added.isoformat(),
    }


def load_accounts(path: Path) -> list[Account]:
    """Load accounts from a JSON file.

    The file holds either a list of account objects or an object with an
    ``accounts`` list.

    Raises:
        RecordLoadError: If the file is missing, not JSON, or holds a bad record.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise RecordLoadError(str(path), "file not found") from None
    except json.JSONDecodeError as e:
        raise RecordLoadError(str(path), f"invalid JSON: {e}") from e

    if isinstance(raw, dict):
        raw = raw.get("accounts")
    if not isinstance(raw, list):
        raise RecordLoadError(str(path), "expected a list of accounts")

    return [account_from_dict(item, f"{path}[{i}]") for i, item in enumerate(raw)]


def dump_accounts(accounts: list[Account], path: Path) -> None:
    """Write accounts to a JSON file."""
    data = [account_to_dict(a) for a in accounts]
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------

_FIRST_NAMES = [
    "John",
    "Jane",
    "Michael",
    "Sarah",
    "David",
    "Emily",
    "Robert",
    "Lisa",
    "William",
    "Jennifer",
]
_LAST_NAMES = [
    "Smith",
    "Johnson",
    "Williams",
    "Brown",
    "Jones",
    "Garcia",
    "Miller",
    "Davis",
    "Rodriguez",
    "Martinez",
]
_COMPANIES = [
    "Acme Corp",
    "TechStart Inc",
    "Global Solutions",
    "Innovation Labs",
    "Bright Future Co",
    "Digital Dynamics",
    "Prime Enterprises",
    "Nexus Group",
    "Summit Partners",
    "Vertex Systems",
]


def _random_date(rng: random.Random, start: date, end: date) -> date:
    return start + timedelta(days=rng.randrange((end - start).days))


def generate_sample_accounts(count: int = 50, seed: int | None = None) -> list[Account]:
    """Generate realistic demo accounts.

    Args:
        count: Number of accounts to generate.
        seed: Optional random seed for reproducible output.

    Returns:
        List of accounts with ids ``ACC00001`` onwards.
    """
    rng = random.Random(seed)
    accounts: list[Account] = []
    for i in range(count):
        first = rng.choice(_FIRST_NAMES)
        last = rng.choice(_LAST_NAMES)
        accounts.append(
            Account(
                id=f"ACC{i + 1:05d}",
                account_number=str(10000000 + rng.randrange(90000000)),
                company_name=rng.choice(_COMPANIES),
                contact_name=f"{first} {last}",
                phone_number=(
                    f"({rng.randint(100, 999)}) {rng.randint(100, 999)}-{rng.randint(1000, 9999)}"
                ),
                email=f"{first.lower()}.{last.lower()}@example.com",
                status=rng.choice(list(AccountStatus)),
                balance=rng.randrange(100000) - 20000,
                date_added=_random_date(rng, date(2019, 1, 1), date(2025, 1, 1)),
            )
        )
    return accounts
