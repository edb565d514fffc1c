"""Phonetic rules domain module.

Rules, their category keys, and the matching predicates the phonetic
encoder evaluates at each position of a name.
"""

from .entities import Rule, in_scope, matches
from .value_objects import (
    ALL,
    ANY,
    COMMON,
    NameType,
    RuleType,
    catalog_name,
)

__all__ = [
    # Entities
    "Rule",
    "matches",
    "in_scope",
    # Value Objects
    "NameType",
    "RuleType",
    "catalog_name",
    # Constants
    "ALL",
    "ANY",
    "COMMON",
]
