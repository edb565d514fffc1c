"""Value objects for the phonetic rules bounded context.

Name types and rule types are fixed category keys; every catalog in a rule
set is addressed by one of each plus a language.
"""

from enum import Enum
from typing import Union

# Wildcard language: a requested set containing it lifts every language restriction
ANY = "any"

# Logical combinator requiring every language of a rule to be in scope
ALL = "ALL"

# Synthetic language holding rules shared by every language of a rule type
COMMON = "common"


class NameType(Enum):
    """Kinds of names a rule set is tuned for."""

    ASHKENAZI = "ash"
    GENERIC = "gen"
    SEPHARDIC = "sep"

    @property
    def languages_catalog(self) -> str:
        """Name of the catalog listing this name type's languages."""
        return f"{self.value}_languages"


class RuleType(Enum):
    """Stages of phonetic rule application."""

    APPROX = "approx"
    EXACT = "exact"
    RULES = "rules"


def catalog_name(
    name_type: Union[NameType, str],
    rule_type: Union[RuleType, str],
    language: str,
) -> str:
    """Build the catalog name for a name type, rule type and language.

    >>> catalog_name(NameType.GENERIC, RuleType.APPROX, COMMON)
    'gen_approx_common'
    """
    return f"{NameType(name_type).value}_{RuleType(rule_type).value}_{language}"
