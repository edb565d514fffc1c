"""
phonorules - phonetic rule catalogs and matching.

Parses phonetic rule catalogs, indexes them by name type, rule type and
language, and evaluates whether a rule matches a name at a position.
"""

from phonorules.domain.errors import (
    CatalogFormatError,
    CatalogNotFoundError,
    ConfigurationError,
    DomainError,
    IncludeCycleError,
    IncludeDepthError,
    InvalidPositionError,
    RuleSetNotFoundError,
)
from phonorules.domain.rules import (
    ALL,
    ANY,
    COMMON,
    NameType,
    Rule,
    RuleType,
    catalog_name,
    in_scope,
    matches,
)
from phonorules.domain.rules.engine import (
    ParseDiagnostic,
    RuleCatalogCompiler,
    RuleTextParser,
)
from phonorules.infrastructure.bootstrap import build_repository
from phonorules.infrastructure.catalog import (
    CatalogLanguageRegistry,
    DirectoryCatalogSource,
    InMemoryCatalogSource,
    PackageCatalogSource,
    StaticLanguageRegistry,
)
from phonorules.infrastructure.repositories.rules import CatalogRuleRepository

__version__ = "1.0.0"

__all__ = [
    # Rules
    "Rule",
    "matches",
    "in_scope",
    "NameType",
    "RuleType",
    "catalog_name",
    "ALL",
    "ANY",
    "COMMON",
    # Loading
    "RuleTextParser",
    "RuleCatalogCompiler",
    "ParseDiagnostic",
    "DirectoryCatalogSource",
    "InMemoryCatalogSource",
    "PackageCatalogSource",
    "CatalogLanguageRegistry",
    "StaticLanguageRegistry",
    # Repository
    "CatalogRuleRepository",
    "build_repository",
    # Errors
    "DomainError",
    "ConfigurationError",
    "CatalogNotFoundError",
    "CatalogFormatError",
    "IncludeCycleError",
    "IncludeDepthError",
    "InvalidPositionError",
    "RuleSetNotFoundError",
]
