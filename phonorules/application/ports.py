"""Application ports for the phonetic rules context.

This module defines the contracts between the application layer and the
collaborators that supply settings, catalogs and language lists.
"""

from abc import ABC, abstractmethod
from typing import AbstractSet, FrozenSet, Iterator, Optional, Tuple, Union

from phonorules.domain.rules.engine.loader import CatalogSource
from phonorules.domain.rules.entities import Rule
from phonorules.domain.rules.value_objects import NameType, RuleType

__all__ = [
    "CatalogSource",
    "LanguageRegistry",
    "RuleRepository",
    "SettingsProvider",
]


class SettingsProvider(ABC):
    """Port for configuration values."""

    @abstractmethod
    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        pass


class LanguageRegistry(ABC):
    """Port for the languages declared for each name type."""

    @abstractmethod
    def languages(self, name_type: NameType) -> FrozenSet[str]:
        """
        Get the languages declared for a name type.

        Args:
            name_type: Name type to look up

        Returns:
            Declared language names
        """
        pass


class RuleRepository(ABC):
    """Port for read-only access to compiled rule sets."""

    @abstractmethod
    def get_rules(
        self,
        name_type: Union[NameType, str],
        rule_type: Union[RuleType, str],
        language: Union[str, AbstractSet[str]],
    ) -> Tuple[Rule, ...]:
        """
        Get the rules for a name type, rule type and language.

        Args:
            name_type: Name type to consider
            rule_type: Rule type to consider
            language: A single language, or a set of languages in scope

        Returns:
            Ordered rules

        Raises:
            RuleSetNotFoundError: If no rules are registered for the key
        """
        pass

    @abstractmethod
    def keys(self) -> Iterator[Tuple[NameType, RuleType, str]]:
        """Iterate every registered (name type, rule type, language) key."""
        pass
