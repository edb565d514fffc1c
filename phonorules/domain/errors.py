"""Domain errors for phonorules."""

from typing import Optional, Sequence


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize domain error.

        Args:
            message: Error message
        """
        super().__init__(message)
        self.message = message


class InvalidPositionError(DomainError, IndexError):
    """Raised when a rule is matched at a negative input position."""

    def __init__(self, position: int) -> None:
        message = f"Can not match pattern at negative index {position}"
        super().__init__(message)
        self.position = position


class ConfigurationError(DomainError):
    """Raised when the declared rule catalogs cannot be loaded."""


class CatalogNotFoundError(ConfigurationError):
    """Raised when a catalog source is missing or unreadable."""

    def __init__(self, catalog: str, reason: Optional[str] = None) -> None:
        """
        Initialize catalog not found error.

        Args:
            catalog: Catalog name that could not be opened
            reason: Underlying cause, if known
        """
        message = f"Unable to load rule catalog: {catalog}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.catalog = catalog
        self.reason = reason


class IncludeCycleError(ConfigurationError):
    """Raised when a catalog includes itself, directly or transitively."""

    def __init__(self, chain: Sequence[str]) -> None:
        message = "Circular catalog include: " + " -> ".join(chain)
        super().__init__(message)
        self.chain = tuple(chain)


class IncludeDepthError(ConfigurationError):
    """Raised when nested includes exceed the configured depth."""

    def __init__(self, catalog: str, max_depth: int) -> None:
        message = f"Include depth {max_depth} exceeded while loading {catalog}"
        super().__init__(message)
        self.catalog = catalog
        self.max_depth = max_depth


class CatalogFormatError(ConfigurationError):
    """Raised when a structured catalog document cannot be understood at all."""

    def __init__(self, catalog: str, detail: str) -> None:
        super().__init__(f"Invalid rule catalog {catalog}: {detail}")
        self.catalog = catalog
        self.detail = detail


class RuleSetNotFoundError(DomainError, LookupError):
    """Raised when no rules are registered for a name type, rule type and language."""

    def __init__(self, name_type: str, rule_type: str, language: str) -> None:
        """
        Initialize rule set not found error.

        Args:
            name_type: Requested name type
            rule_type: Requested rule type
            language: Requested language key
        """
        message = f"No rules found for {name_type}, {rule_type}, {language}."
        super().__init__(message)
        self.name_type = name_type
        self.rule_type = rule_type
        self.language = language
