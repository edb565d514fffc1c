"""Rule repository implementations."""

from .rule_repository import CatalogRuleRepository

__all__ = ["CatalogRuleRepository"]
