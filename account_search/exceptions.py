"""Exception hierarchy for account-search."""

from pathlib import Path


class AccountSearchError(Exception):
    """Base exception for all account-search errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all account-search errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(AccountSearchError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Data Errors
class DataError(AccountSearchError):
    """Account data could not be read."""

    pass


class RecordLoadError(DataError):
    """An accounts file or a single record is malformed."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot load accounts from {source}: {reason}")


# Query Errors
class ValidationError(AccountSearchError):
    """Invalid input value."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class UnknownFieldError(AccountSearchError):
    """Field name does not match any account field or alias."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown field: {name}")


class FilterParseError(AccountSearchError):
    """Raised when a filter expression cannot be parsed."""

    def __init__(self, expression: str, message: str) -> None:
        self.expression = expression
        super().__init__(f"Failed to parse filter expression '{expression}': {message}")
