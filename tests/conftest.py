"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

import account_search.cli  # noqa: F401  (build the cli group before any command module is imported)
from account_search.accounts import Account, AccountStatus, dump_accounts

if TYPE_CHECKING:
    from collections.abc import Callable, Generator


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""[search]
default_sort = "account_number"
suggestion_limit = 5

[display]
colored_output = false
""")
    return config_path


@pytest.fixture
def make_account() -> Callable[..., Account]:
    """Factory for accounts with overridable fields."""

    def factory(**overrides: Any) -> Account:
        values: dict[str, Any] = {
            "id": "ACC99999",
            "account_number": "12345678",
            "company_name": "Acme Corp",
            "contact_name": "John Smith",
            "phone_number": "(555) 123-4567",
            "email": "john.smith@example.com",
            "status": AccountStatus.OPEN,
            "balance": 0,
            "date_added": date(2024, 1, 1),
        }
        values.update(overrides)
        return Account(**values)

    return factory


@pytest.fixture
def accounts() -> list[Account]:
    """Five accounts covering every status, sign of balance and sort quirk.

    ACC00001  20000001  Acme Corp         Open         5000  2024-03-15
    ACC00002  9         Zeta Holdings     Closed       -200  2023-11-02
    ACC00003  10        Ångström Labs     Collections  1000  2024-07-01
    ACC00004  30000000  acme corp         Suspended    1000  2022-01-20
    ACC00005  15        Bright Future Co  Open            0  2024-03-15
    """
    return [
        Account(
            id="ACC00001",
            account_number="20000001",
            company_name="Acme Corp",
            contact_name="John Smith",
            phone_number="(555) 123-4567",
            email="john.smith@example.com",
            status=AccountStatus.OPEN,
            balance=5000,
            date_added=date(2024, 3, 15),
        ),
        Account(
            id="ACC00002",
            account_number="9",
            company_name="Zeta Holdings",
            contact_name="Jane Doe",
            phone_number="(555) 987-6543",
            email="jane.doe@example.com",
            status=AccountStatus.CLOSED,
            balance=-200,
            date_added=date(2023, 11, 2),
        ),
        Account(
            id="ACC00003",
            account_number="10",
            company_name="Ångström Labs",
            contact_name="Émile Zola",
            phone_number="555-000-1111",
            email="emile@labs.example",
            status=AccountStatus.COLLECTIONS,
            balance=1000,
            date_added=date(2024, 7, 1),
        ),
        Account(
            id="ACC00004",
            account_number="30000000",
            company_name="acme corp",
            contact_name="Sarah Brown",
            phone_number="(212) 555-0100",
            email="sarah.brown@acme.example",
            status=AccountStatus.SUSPENDED,
            balance=1000,
            date_added=date(2022, 1, 20),
        ),
        Account(
            id="ACC00005",
            account_number="15",
            company_name="Bright Future Co",
            contact_name="Michael Jones",
            phone_number="(800) 111-2222",
            email="m.jones@bright.example",
            status=AccountStatus.OPEN,
            balance=0,
            date_added=date(2024, 3, 15),
        ),
    ]


@pytest.fixture
def accounts_file(temp_dir: Path, accounts: list[Account]) -> Path:
    """Write the ``accounts`` fixture to a JSON file."""
    path = temp_dir / "accounts.json"
    dump_accounts(accounts, path)
    return path
