"""Language registry adapters implementing the LanguageRegistry port."""

from typing import Dict, FrozenSet, Iterable, Mapping, Union

from phonorules.application.ports import CatalogSource, LanguageRegistry
from phonorules.domain.rules.engine.parser import (
    COMMENT,
    MULTILINE_COMMENT_END,
    MULTILINE_COMMENT_START,
    split_lines,
    trim,
)
from phonorules.domain.rules.value_objects import NameType
from phonorules.shared.logging import get_logger


def parse_languages(text: str) -> FrozenSet[str]:
    """
    Parse a languages catalog: one language name per line.

    Blank lines, ``//`` comment lines and ``/* ... */`` blocks are skipped.
    """
    languages = set()
    in_multiline_comment = False

    for raw_line in split_lines(text):
        line = trim(raw_line)

        if in_multiline_comment:
            if line.endswith(MULTILINE_COMMENT_END):
                in_multiline_comment = False
            continue

        if line.startswith(MULTILINE_COMMENT_START):
            in_multiline_comment = True
        elif line and not line.startswith(COMMENT):
            languages.add(line)

    return frozenset(languages)


class CatalogLanguageRegistry(LanguageRegistry):
    """
    Languages read from the ``{name_type}_languages`` catalog of a source.

    Each name type is read once and cached.
    """

    def __init__(self, source: CatalogSource):
        self.source = source
        self._cache: Dict[NameType, FrozenSet[str]] = {}
        self._logger = get_logger("infrastructure.language_registry")

    def languages(self, name_type: NameType) -> FrozenSet[str]:
        name_type = NameType(name_type)
        cached = self._cache.get(name_type)
        if cached is not None:
            return cached

        languages = parse_languages(self.source.open_text(name_type.languages_catalog))
        self._cache[name_type] = languages

        self._logger.debug(
            "language_registry_loaded",
            name_type=name_type.value,
            languages_count=len(languages),
        )
        return languages


class StaticLanguageRegistry(LanguageRegistry):
    """Languages supplied directly by the caller."""

    def __init__(self, languages: Mapping[Union[NameType, str], Iterable[str]]):
        self._languages: Dict[NameType, FrozenSet[str]] = {
            NameType(name_type): frozenset(names) for name_type, names in languages.items()
        }

    def languages(self, name_type: NameType) -> FrozenSet[str]:
        return self._languages.get(NameType(name_type), frozenset())
