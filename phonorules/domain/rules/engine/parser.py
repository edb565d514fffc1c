"""
Plain text rule catalog parser.

Catalogs are UTF-8, line oriented:

- ``// ...`` discards the rest of the line
- a line starting with ``/*`` opens a comment that runs until a line
  ending with ``*/``
- ``#include name`` splices the rules of catalog ``name`` in place
- any other non-blank line holds four whitespace separated, optionally
  double-quoted fields: pattern, left context, right context, phoneme

Rule lines with the wrong number of fields and include lines with embedded
whitespace are reported as diagnostics and skipped.
"""

import re
from typing import List

from phonorules.domain.errors import CatalogFormatError
from phonorules.domain.rules.entities import Rule
from .ir_types import DiagnosticKind
from .loader import CatalogLoader

COMMENT = "//"
MULTILINE_COMMENT_START = "/*"
MULTILINE_COMMENT_END = "*/"
HASH_INCLUDE = "#include"
DOUBLE_QUOTE = '"'

RULE_FIELDS = 4

# Line terminators and field separators are ASCII, except for the Unicode
# line and paragraph separators and NEL, which end a line.
LINE_BREAK = re.compile(r"\r\n|[\n\r\u2028\u2029\u0085]")
FIELD_SEPARATOR = re.compile(r"[ \t\n\x0b\f\r]+")
BLANK = "".join(chr(code) for code in range(ord(" ") + 1))


def strip_quotes(value: str) -> str:
    """Remove at most one leading and one trailing double quote."""
    if value.startswith(DOUBLE_QUOTE):
        value = value[1:]

    if value.endswith(DOUBLE_QUOTE):
        value = value[:-1]

    return value


def split_lines(text: str) -> List[str]:
    """Split catalog text into lines; a final terminator does not start a new line."""
    lines = LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def trim(value: str) -> str:
    """Strip control characters and spaces from both ends."""
    return value.strip(BLANK)


class RuleTextParser(CatalogLoader):
    """Loader for the plain text catalog format."""

    def _parse(self, text: str, name: str) -> List[Rule]:
        rules: List[Rule] = []
        in_multiline_comment = False

        for line_number, raw_line in enumerate(split_lines(text), start=1):
            self.stats.lines_read += 1

            if in_multiline_comment:
                self.stats.comment_lines += 1
                if raw_line.endswith(MULTILINE_COMMENT_END):
                    in_multiline_comment = False
                continue

            if raw_line.startswith(MULTILINE_COMMENT_START):
                self.stats.comment_lines += 1
                in_multiline_comment = True
                continue

            line = raw_line
            comment_at = line.find(COMMENT)
            if comment_at >= 0:
                line = line[:comment_at]

            line = trim(line)
            if not line:
                if comment_at >= 0:
                    self.stats.comment_lines += 1
                continue

            if line.startswith(HASH_INCLUDE):
                rules.extend(self._parse_include(line, name, line_number, raw_line))
            else:
                rule = self._parse_rule(line, name, line_number, raw_line)
                if rule is not None:
                    rules.append(rule)

        return rules

    def _parse_include(self, line: str, name: str, line_number: int, raw_line: str) -> List[Rule]:
        included = trim(line[len(HASH_INCLUDE):])

        if not included or FIELD_SEPARATOR.search(included):
            self._diagnose(
                name,
                line_number,
                DiagnosticKind.MALFORMED_INCLUDE,
                "malformed include statement",
                raw_line,
            )
            return []

        return self._include(included)

    def _parse_rule(self, line: str, name: str, line_number: int, raw_line: str):
        parts = FIELD_SEPARATOR.split(line)

        if len(parts) != RULE_FIELDS:
            self._diagnose(
                name,
                line_number,
                DiagnosticKind.MALFORMED_RULE,
                f"malformed rule statement split into {len(parts)} parts",
                raw_line,
            )
            return None

        pattern, left_context, right_context, phoneme = (strip_quotes(part) for part in parts)

        try:
            return Rule(pattern, left_context, right_context, phoneme)
        except re.error as e:
            raise CatalogFormatError(name, f"line {line_number}: invalid context expression: {e}")
