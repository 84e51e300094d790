"""Configuration management for account-search."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from account_search.exceptions import (
    ConfigParseError,
    ConfigValidationError,
    UnknownFieldError,
)
from account_search.search.fields import (
    DEFAULT_SORT_FIELD,
    MAX_SUGGESTIONS,
    SEARCHABLE_FIELDS,
    SORTABLE_FIELDS,
    resolve_field,
)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "account-search" / "config.toml"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        accounts_file: JSON file with account records searched by default.
        default_sort: Field results are sorted by when --sort is not given.
        suggestion_limit: Maximum "did you mean" suggestions per field.
        case_sensitive: Free-text fields searched case-sensitively by default.
        colored_output: Whether to use colored terminal output.
        config_path: Path where config was loaded from (None if defaults).
    """

    accounts_file: Path | None = None
    default_sort: str = DEFAULT_SORT_FIELD
    suggestion_limit: int = MAX_SUGGESTIONS
    case_sensitive: list[str] = field(default_factory=list)
    colored_output: bool = True
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.
        """
        warnings: list[str] = []

        if self.accounts_file is not None:
            self.accounts_file = self.accounts_file.expanduser().resolve()
            if not self.accounts_file.exists():
                warnings.append(f"Accounts file not found: {self.accounts_file}")

        if self.default_sort not in SORTABLE_FIELDS:
            warnings.append(
                f"search.default_sort={self.default_sort} is not sortable, "
                f"using {DEFAULT_SORT_FIELD}"
            )
            self.default_sort = DEFAULT_SORT_FIELD

        if not 1 <= self.suggestion_limit <= MAX_SUGGESTIONS:
            warnings.append(
                f"search.suggestion_limit={self.suggestion_limit} "
                f"is outside valid range 1-{MAX_SUGGESTIONS}"
            )
            self.suggestion_limit = max(1, min(self.suggestion_limit, MAX_SUGGESTIONS))

        return warnings


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        config = Config()
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: account-search init-config"
        )
        config_warnings = config.validate()
        return config, warnings + config_warnings

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [data] section
    data_section = data.get("data", {})
    if "accounts" in data_section:
        value = data_section["accounts"]
        if not isinstance(value, str):
            raise ConfigValidationError("data.accounts", value, "must be a string path")
        path = Path(value).expanduser()
        # Relative paths are relative to the config file
        if not path.is_absolute():
            path = config_path.parent / path
        config.accounts_file = path

    # Parse [search] section
    search = data.get("search", {})
    if "default_sort" in search:
        value = search["default_sort"]
        if not isinstance(value, str):
            raise ConfigValidationError("search.default_sort", value, "must be a field name")
        try:
            config.default_sort = resolve_field(value)
        except UnknownFieldError as e:
            raise ConfigValidationError("search.default_sort", value, str(e)) from e

    if "suggestion_limit" in search:
        value = search["suggestion_limit"]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigValidationError("search.suggestion_limit", value, "must be an integer")
        config.suggestion_limit = value

    if "case_sensitive" in search:
        value = search["case_sensitive"]
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigValidationError(
                "search.case_sensitive", value, "must be a list of field names"
            )
        fields: list[str] = []
        for name in value:
            try:
                resolved = resolve_field(name)
            except UnknownFieldError as e:
                raise ConfigValidationError("search.case_sensitive", name, str(e)) from e
            if resolved not in SEARCHABLE_FIELDS:
                raise ConfigValidationError(
                    "search.case_sensitive", name, "is not a free-text search field"
                )
            fields.append(resolved)
        config.case_sensitive = fields

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()

    # Ensure directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {
        "search": {
            "default_sort": config.default_sort,
            "suggestion_limit": config.suggestion_limit,
        },
        "display": {
            "colored_output": config.colored_output,
        },
    }

    if config.accounts_file is not None:
        data["data"] = {"accounts": str(config.accounts_file)}

    if config.case_sensitive:
        data["search"]["case_sensitive"] = list(config.case_sensitive)

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
