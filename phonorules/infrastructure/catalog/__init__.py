"""Catalog infrastructure."""

from .languages import CatalogLanguageRegistry, StaticLanguageRegistry, parse_languages
from .sources import DirectoryCatalogSource, InMemoryCatalogSource, PackageCatalogSource

__all__ = [
    "CatalogLanguageRegistry",
    "StaticLanguageRegistry",
    "parse_languages",
    "DirectoryCatalogSource",
    "InMemoryCatalogSource",
    "PackageCatalogSource",
]
