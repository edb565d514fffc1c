"""
Data types produced alongside parsed rule catalogs.

Diagnostics describe catalog lines that were skipped; stats summarize one
load call.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DiagnosticKind(Enum):
    """Kinds of recoverable catalog problems."""

    MALFORMED_RULE = "malformed_rule"
    MALFORMED_INCLUDE = "malformed_include"


@dataclass(frozen=True)
class ParseDiagnostic:
    """A catalog line that was skipped."""

    source: str
    line_number: int
    kind: DiagnosticKind
    message: str
    raw_line: str = ""

    def __str__(self) -> str:
        return f"{self.source}:{self.line_number}: {self.message}"


@dataclass
class ParseStats:
    """Counters for one catalog load, includes counted in."""

    catalogs_read: int = 0
    lines_read: int = 0
    comment_lines: int = 0
    rules_parsed: int = 0
    includes_resolved: int = 0
    diagnostics_count: int = 0
    parse_time_ms: float = 0.0
