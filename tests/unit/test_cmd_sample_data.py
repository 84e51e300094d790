"""Unit tests for the sample-data command."""

from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from account_search.accounts import load_accounts
from account_search.cli import cli


class TestSampleDataCommand:
    def test_writes_accounts(self, temp_dir: Path) -> None:
        output = temp_dir / "accounts.json"
        result = CliRunner().invoke(
            cli, ["-q", "sample-data", str(output), "--count", "7", "--seed", "3"]
        )
        assert result.exit_code == 0
        accounts = load_accounts(output)
        assert len(accounts) == 7
        assert accounts[0].id == "ACC00001"

    def test_seed_is_reproducible(self, temp_dir: Path) -> None:
        runner = CliRunner()
        first = temp_dir / "a.json"
        second = temp_dir / "b.json"
        runner.invoke(cli, ["-q", "sample-data", str(first), "--seed", "11"])
        runner.invoke(cli, ["-q", "sample-data", str(second), "--seed", "11"])
        assert first.read_text() == second.read_text()

    def test_refuses_to_overwrite(self, temp_dir: Path) -> None:
        output = temp_dir / "accounts.json"
        output.write_text("keep me")
        result = CliRunner().invoke(cli, ["-q", "sample-data", str(output)])
        assert result.exit_code == 1
        assert output.read_text() == "keep me"

    def test_force_overwrites(self, temp_dir: Path) -> None:
        output = temp_dir / "accounts.json"
        output.write_text("old")
        result = CliRunner().invoke(cli, ["-q", "sample-data", str(output), "-f", "-n", "2"])
        assert result.exit_code == 0
        assert len(load_accounts(output)) == 2

    def test_generated_file_is_searchable(self, temp_dir: Path, sample_config: Path) -> None:
        output = temp_dir / "accounts.json"
        runner = CliRunner()
        runner.invoke(cli, ["-q", "sample-data", str(output), "-n", "30", "--seed", "5"])
        result = runner.invoke(
            cli,
            ["-q", "-c", str(sample_config), "-d", str(output), "search", "-f", "ids"],
        )
        assert result.exit_code == 0
        assert len(result.output.split()) == 30

    def test_rejects_zero_count(self, temp_dir: Path) -> None:
        result = CliRunner().invoke(cli, ["sample-data", str(temp_dir / "x.json"), "-n", "0"])
        assert result.exit_code == 2
