"""Rule repository implementation for phonorules.

The repository is built once from a catalog loader and a language registry,
then serves immutable rule tuples keyed by name type, rule type and
language. Nothing is mutated after the build, so one instance may be shared
by any number of threads.
"""

import time
from types import MappingProxyType
from typing import AbstractSet, Dict, Iterable, Iterator, List, Mapping, Tuple, Union

from phonorules.application.ports import LanguageRegistry, RuleRepository
from phonorules.domain.errors import RuleSetNotFoundError
from phonorules.domain.rules.engine import CatalogLoader, ParseDiagnostic
from phonorules.domain.rules.entities import Rule
from phonorules.domain.rules.value_objects import (
    ANY,
    COMMON,
    NameType,
    RuleType,
    catalog_name,
)
from phonorules.shared.logging import get_logger, with_build_context

RuleTable = Mapping[NameType, Mapping[RuleType, Mapping[str, Tuple[Rule, ...]]]]


def _freeze(table: RuleTable) -> RuleTable:
    """Copy a nested rule table into read-only mappings of tuples."""
    return MappingProxyType({
        name_type: MappingProxyType({
            rule_type: MappingProxyType({
                language: tuple(rules) for language, rules in by_language.items()
            })
            for rule_type, by_language in by_rule_type.items()
        })
        for name_type, by_rule_type in table.items()
    })


class CatalogRuleRepository(RuleRepository):
    """
    Read-only rule repository backed by parsed catalogs.

    Use ``build`` to load every catalog; the constructor only wraps an
    already assembled table.
    """

    def __init__(self, rules: RuleTable, diagnostics: Iterable[ParseDiagnostic] = ()):
        """
        Initialize repository from an assembled rule table.

        Args:
            rules: name type -> rule type -> language -> rules
            diagnostics: Lines skipped while the table was parsed
        """
        self._logger = get_logger("infrastructure.rule_repository")
        self._rules = _freeze(rules)
        self._diagnostics = tuple(diagnostics)

    @classmethod
    @with_build_context
    def build(
        cls,
        loader: CatalogLoader,
        languages: LanguageRegistry,
        name_types: Iterable[NameType] = tuple(NameType),
        rule_types: Iterable[RuleType] = tuple(RuleType),
    ) -> "CatalogRuleRepository":
        """
        Load every catalog and assemble a repository.

        For each name type, each rule type and each language declared for
        the name type, the catalog ``{name_type}_{rule_type}_{language}`` is
        loaded. Rule types other than RULES also load a ``common`` catalog.

        Args:
            loader: Catalog loader (plain text parser or YAML compiler)
            languages: Registry of languages per name type
            name_types: Name types to load
            rule_types: Rule types to load

        Returns:
            Built repository

        Raises:
            ConfigurationError: If any declared catalog cannot be loaded
        """
        logger = get_logger("infrastructure.rule_repository")
        start_time = time.perf_counter()
        name_types = tuple(NameType(name_type) for name_type in name_types)
        rule_types = tuple(RuleType(rule_type) for rule_type in rule_types)

        logger.info(
            "rule_repository_build_started",
            loader=type(loader).__name__,
            name_types=[name_type.value for name_type in name_types],
            rule_types=[rule_type.value for rule_type in rule_types],
        )

        table: Dict[NameType, Dict[RuleType, Dict[str, Tuple[Rule, ...]]]] = {}
        diagnostics: List[ParseDiagnostic] = []
        catalogs_loaded = 0

        for name_type in name_types:
            declared = sorted(languages.languages(name_type))
            by_rule_type: Dict[RuleType, Dict[str, Tuple[Rule, ...]]] = {}

            for rule_type in rule_types:
                keys = list(declared)
                if rule_type is not RuleType.RULES:
                    keys.append(COMMON)

                by_language: Dict[str, Tuple[Rule, ...]] = {}
                for language in keys:
                    by_language[language] = loader.load(catalog_name(name_type, rule_type, language))
                    diagnostics.extend(loader.diagnostics)
                    catalogs_loaded += 1

                by_rule_type[rule_type] = by_language

            table[name_type] = by_rule_type

        repository = cls(table, diagnostics)

        logger.info(
            "rule_repository_build_completed",
            catalogs_loaded=catalogs_loaded,
            rules_count=repository.rule_count,
            diagnostics_count=len(diagnostics),
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )
        return repository

    @property
    def diagnostics(self) -> Tuple[ParseDiagnostic, ...]:
        """Catalog lines skipped during the build."""
        return self._diagnostics

    @property
    def rule_count(self) -> int:
        """Total number of rules held, counted once per key."""
        return sum(
            len(rules)
            for by_rule_type in self._rules.values()
            for by_language in by_rule_type.values()
            for rules in by_language.values()
        )

    def keys(self) -> Iterator[Tuple[NameType, RuleType, str]]:
        for name_type, by_rule_type in self._rules.items():
            for rule_type, by_language in by_rule_type.items():
                for language in by_language:
                    yield name_type, rule_type, language

    def get_rules(
        self,
        name_type: Union[NameType, str],
        rule_type: Union[RuleType, str],
        language: Union[str, AbstractSet[str]],
    ) -> Tuple[Rule, ...]:
        """
        Get the rules for a name type, rule type and language.

        A set holding exactly one language is looked up as that language;
        any other set falls back to the ``any`` rules.

        Args:
            name_type: Name type, as enum member or value
            rule_type: Rule type, as enum member or value
            language: A single language, or a set of languages in scope

        Returns:
            Ordered rules

        Raises:
            RuleSetNotFoundError: If no rules are registered for the key
        """
        if not isinstance(language, str):
            requested = list(language)
            language = requested[0] if len(requested) == 1 else ANY

        try:
            name_type = NameType(name_type)
            rule_type = RuleType(rule_type)
        except ValueError:
            rules = None
        else:
            rules = self._rules.get(name_type, {}).get(rule_type, {}).get(language)

        if rules is None:
            name_value = getattr(name_type, "value", name_type)
            rule_value = getattr(rule_type, "value", rule_type)
            self._logger.warning(
                "rule_repository_lookup_miss",
                name_type=name_value,
                rule_type=rule_value,
                language=language,
            )
            raise RuleSetNotFoundError(str(name_value), str(rule_value), language)

        return rules
