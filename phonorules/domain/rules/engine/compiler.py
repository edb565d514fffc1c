"""
YAML rule catalog compiler.

The YAML format carries what plain text catalogs cannot: a language set and
a logical combinator per rule. Entries are either rules or includes, and
includes are spliced in place like ``#include`` lines::

    rules:
      - pattern: "ch"
        left: ""
        right: ""
        phoneme: "x"
        languages: [german, polish]
        logical: ALL
      - include: gen_approx_common

Documents are validated against CATALOG_SCHEMA before any rule is built.
"""

import re
from typing import Any, Dict, List, Optional

import jsonschema
import yaml

from phonorules.domain.errors import CatalogFormatError
from phonorules.domain.rules.entities import Rule
from .loader import CatalogLoader, CatalogSource, DEFAULT_MAX_INCLUDE_DEPTH

_RULE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["pattern", "phoneme"],
    "properties": {
        "pattern": {"type": "string"},
        "left": {"type": "string"},
        "right": {"type": "string"},
        "phoneme": {"type": "string"},
        "languages": {"type": "array", "items": {"type": "string"}, "uniqueItems": True},
        "logical": {"type": "string"},
    },
    "additionalProperties": False,
}

_INCLUDE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["include"],
    "properties": {
        "include": {"type": "string", "pattern": r"^\S+$"},
    },
    "additionalProperties": False,
}

CATALOG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["rules"],
    "properties": {
        "rules": {
            "type": "array",
            "items": {"oneOf": [_RULE_SCHEMA, _INCLUDE_SCHEMA]},
        },
    },
}


class RuleCatalogCompiler(CatalogLoader):
    """Loader for YAML rule catalogs."""

    def __init__(
        self,
        source: CatalogSource,
        max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH,
        schema: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the compiler.

        Args:
            source: Where catalogs are read from
            max_include_depth: Maximum number of catalogs open at once
            schema: JSON schema overriding CATALOG_SCHEMA
        """
        super().__init__(source, max_include_depth)
        self.schema = schema or CATALOG_SCHEMA

    def _parse(self, text: str, name: str) -> List[Rule]:
        document = self._load_document(text, name)
        rules: List[Rule] = []

        for position, entry in enumerate(document["rules"]):
            if "include" in entry:
                rules.extend(self._include(entry["include"]))
            else:
                rules.append(self._compile_rule(entry, name, position))

        return rules

    def _load_document(self, text: str, name: str) -> Dict[str, Any]:
        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise CatalogFormatError(name, f"YAML syntax error: {e}")

        if document is None:
            # empty file
            return {"rules": []}

        try:
            jsonschema.validate(document, self.schema)
        except jsonschema.ValidationError as e:
            raise CatalogFormatError(name, f"schema validation failed: {e.message}")

        self.stats.lines_read += len(text.splitlines())
        return document

    def _compile_rule(self, entry: Dict[str, Any], name: str, position: int) -> Rule:
        try:
            return Rule(
                pattern=entry["pattern"],
                left_context=entry.get("left", ""),
                right_context=entry.get("right", ""),
                phoneme=entry["phoneme"],
                languages=frozenset(entry.get("languages", ())),
                logical=entry.get("logical", ""),
            )
        except re.error as e:
            raise CatalogFormatError(name, f"rule {position}: invalid context expression: {e}")
