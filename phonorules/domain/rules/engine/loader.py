"""
Catalog loading shared by every rule catalog format.

A loader reads named catalogs from a CatalogSource, splices included
catalogs in place, and collects diagnostics for lines it had to skip.
Includes are resolved on an explicit stack so that a catalog including
itself, directly or through others, fails with IncludeCycleError instead of
recursing without end.
"""

import time
from abc import ABC, abstractmethod
from typing import List, Tuple

from phonorules.domain.errors import IncludeCycleError, IncludeDepthError
from phonorules.domain.rules.entities import Rule
from phonorules.shared.logging import get_logger
from .ir_types import DiagnosticKind, ParseDiagnostic, ParseStats

DEFAULT_MAX_INCLUDE_DEPTH = 32


class CatalogSource(ABC):
    """Port for reading rule catalogs by name."""

    @abstractmethod
    def open_text(self, name: str) -> str:
        """
        Read the full text of a catalog.

        Args:
            name: Catalog name (e.g. "gen_approx_common")

        Returns:
            Decoded catalog text

        Raises:
            CatalogNotFoundError: If the catalog is missing or unreadable
        """
        pass


class CatalogLoader(ABC):
    """
    Base class for catalog formats.

    Loaders keep per-load state (include stack, diagnostics, stats) and are
    meant to be used by one build at a time. The rules they return are
    immutable and may be shared freely.
    """

    def __init__(self, source: CatalogSource, max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH):
        """
        Initialize the loader.

        Args:
            source: Where catalogs are read from
            max_include_depth: Maximum number of catalogs open at once
        """
        if max_include_depth < 1:
            raise ValueError("max_include_depth must be positive")

        self.source = source
        self.max_include_depth = max_include_depth
        self.stats = ParseStats()
        self._logger = get_logger(f"domain.rules.{type(self).__name__}")
        self._stack: List[str] = []
        self._diagnostics: List[ParseDiagnostic] = []

    @property
    def diagnostics(self) -> Tuple[ParseDiagnostic, ...]:
        """Lines skipped during the most recent load."""
        return tuple(self._diagnostics)

    def load(self, name: str) -> Tuple[Rule, ...]:
        """
        Load a catalog and every catalog it includes.

        Args:
            name: Catalog name

        Returns:
            Rules in textual order, included rules spliced in place

        Raises:
            ConfigurationError: If a catalog is missing, circular or unusable
        """
        self._reset()
        start_time = time.perf_counter()

        rules = self._load_catalog(name)

        return self._finish(name, rules, start_time)

    def parse_text(self, text: str, name: str = "<string>") -> Tuple[Rule, ...]:
        """
        Parse catalog text directly; includes are still read from the source.

        Args:
            text: Catalog text
            name: Name used in diagnostics and include cycle detection

        Returns:
            Rules in textual order
        """
        self._reset()
        start_time = time.perf_counter()

        self._stack.append(name)
        try:
            self.stats.catalogs_read += 1
            rules = self._parse(text, name)
        finally:
            self._stack.pop()

        return self._finish(name, rules, start_time)

    def _reset(self) -> None:
        self.stats = ParseStats()
        self._stack = []
        self._diagnostics = []

    def _finish(self, name: str, rules: List[Rule], start_time: float) -> Tuple[Rule, ...]:
        self.stats.rules_parsed = len(rules)
        self.stats.diagnostics_count = len(self._diagnostics)
        self.stats.parse_time_ms = (time.perf_counter() - start_time) * 1000

        self._logger.debug(
            "rule_catalog_loaded",
            catalog=name,
            rules_count=self.stats.rules_parsed,
            catalogs_read=self.stats.catalogs_read,
            includes_resolved=self.stats.includes_resolved,
            diagnostics_count=self.stats.diagnostics_count,
            duration_ms=self.stats.parse_time_ms,
        )
        return tuple(rules)

    def _load_catalog(self, name: str) -> List[Rule]:
        if name in self._stack:
            raise IncludeCycleError(self._stack + [name])

        if len(self._stack) >= self.max_include_depth:
            raise IncludeDepthError(name, self.max_include_depth)

        text = self.source.open_text(name)
        self.stats.catalogs_read += 1

        self._stack.append(name)
        try:
            return self._parse(text, name)
        finally:
            self._stack.pop()

    def _include(self, name: str) -> List[Rule]:
        """Load an included catalog so its rules can be spliced in place."""
        self.stats.includes_resolved += 1
        return self._load_catalog(name)

    def _diagnose(
        self,
        source: str,
        line_number: int,
        kind: DiagnosticKind,
        message: str,
        raw_line: str,
    ) -> None:
        diagnostic = ParseDiagnostic(
            source=source,
            line_number=line_number,
            kind=kind,
            message=message,
            raw_line=raw_line,
        )
        self._diagnostics.append(diagnostic)

        self._logger.warning(
            "rule_catalog_malformed_line",
            catalog=source,
            line_number=line_number,
            kind=kind.value,
            detail=message,
            raw_line=raw_line,
        )

    @abstractmethod
    def _parse(self, text: str, name: str) -> List[Rule]:
        """Turn one catalog's text into rules, resolving includes via _include."""
        pass
