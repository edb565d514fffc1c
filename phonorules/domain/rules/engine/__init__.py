"""
phonorules catalog engine.

Loads rule catalogs (plain text or YAML) into ordered tuples of Rule.
"""

from .compiler import CATALOG_SCHEMA, RuleCatalogCompiler
from .ir_types import DiagnosticKind, ParseDiagnostic, ParseStats
from .loader import DEFAULT_MAX_INCLUDE_DEPTH, CatalogLoader, CatalogSource
from .parser import RuleTextParser, split_lines, strip_quotes, trim

__all__ = [
    # Loaders
    "CatalogLoader",
    "RuleTextParser",
    "RuleCatalogCompiler",

    # Ports
    "CatalogSource",

    # Data structures
    "ParseDiagnostic",
    "ParseStats",
    "DiagnosticKind",

    # Helpers
    "strip_quotes",
    "split_lines",
    "trim",
    "CATALOG_SCHEMA",
    "DEFAULT_MAX_INCLUDE_DEPTH",
]
