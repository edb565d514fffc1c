"""Entities for the phonetic rules bounded context.

A Rule fires when its literal pattern sits at the current position, the text
before it satisfies the left context, the text after it satisfies the right
context, and its language restriction is met by the languages in play.
"""

import re
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Pattern

from phonorules.domain.errors import InvalidPositionError
from .value_objects import ALL, ANY


@dataclass(frozen=True)
class Rule:
    """
    Immutable phoneme rule.

    The left context is compiled anchored at the end of the text preceding
    the pattern and the right context anchored at the start of the text
    following it. Both use search semantics, so only the anchored end is
    constrained.

    Compiled contexts are derived once in ``__post_init__`` and excluded from
    equality, so two rules built from the same source tuple compare equal.
    Instances carry no mutable state and are safe to share between threads.
    """

    pattern: str
    left_context: str
    right_context: str
    phoneme: str
    languages: FrozenSet[str] = frozenset()
    logical: str = ""
    _left: Pattern[str] = field(init=False, repr=False, compare=False)
    _right: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "languages", frozenset(self.languages))
        object.__setattr__(self, "_left", re.compile(self.left_context + "$"))
        object.__setattr__(self, "_right", re.compile("^" + self.right_context))

    @property
    def left_pattern(self) -> Pattern[str]:
        """Compiled left context, anchored at the end of the preceding text."""
        return self._left

    @property
    def right_pattern(self) -> Pattern[str]:
        """Compiled right context, anchored at the start of the following text."""
        return self._right

    def pattern_and_context_matches(self, input: str, i: int) -> bool:
        """
        Decide if the pattern and both contexts match at a position.

        Args:
            input: Text being encoded
            i: Offset at which the pattern must start

        Returns:
            True if pattern, left context and right context all match

        Raises:
            InvalidPositionError: If ``i`` is negative
        """
        if i < 0:
            raise InvalidPositionError(i)

        end = i + len(self.pattern)
        if end > len(input):
            # not enough room for the pattern
            return False

        return (
            input[i:end] == self.pattern
            and self._right.search(input[end:]) is not None
            and self._left.search(input[:i]) is not None
        )

    def language_matches(self, requested: Iterable[str]) -> bool:
        """
        Decide if the language restriction of this rule is satisfied.

        An empty language set always matches, whatever ``logical`` says.

        Args:
            requested: Languages in scope for the current name; a single
                string is one language

        Returns:
            True if the requested languages satisfy this rule's restriction
        """
        requested = frozenset({requested}) if isinstance(requested, str) else frozenset(requested)
        if ANY in requested or not self.languages:
            return True

        if self.logical == ALL:
            return requested >= self.languages

        return not requested.isdisjoint(self.languages)


def matches(rule: Rule, input: str, position: int) -> bool:
    """Return True if ``rule`` matches ``input`` at ``position``."""
    return rule.pattern_and_context_matches(input, position)


def in_scope(rule: Rule, requested_languages: Iterable[str]) -> bool:
    """Return True if ``rule`` applies to the requested languages."""
    return rule.language_matches(requested_languages)
