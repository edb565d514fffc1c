"""
Application bootstrap and dependency wiring.
This is the composition root where catalog sources, loaders and the rule
repository are put together from configuration.
"""

from typing import Optional

from phonorules.application.config import CatalogFormat, Config, get_config
from phonorules.application.errors import ValidationError
from phonorules.application.ports import CatalogSource, LanguageRegistry
from phonorules.domain.rules.engine import CatalogLoader, RuleCatalogCompiler, RuleTextParser
from phonorules.infrastructure.catalog import CatalogLanguageRegistry, DirectoryCatalogSource
from phonorules.infrastructure.repositories.rules import CatalogRuleRepository
from phonorules.infrastructure.settings import get_settings_adapter
from phonorules.shared.logging import configure_logging


def bootstrap_config() -> Config:
    """
    Bootstrap configuration from the process environment.

    Returns:
        Configured Config instance
    """
    return get_config(get_settings_adapter())


def setup_logging(config: Config) -> None:
    """Configure structured logging from configuration."""
    configure_logging(
        environment=config.ENVIRONMENT.value,
        log_level=config.LOG_LEVEL,
        json_logs=config.json_logs,
    )


def create_catalog_source(config: Config) -> CatalogSource:
    """Create the catalog source described by configuration."""
    if not config.CATALOG_PATH:
        raise ValidationError("PHONORULES_CATALOG_PATH", "catalog directory is not configured")

    return DirectoryCatalogSource(
        config.CATALOG_PATH,
        suffix=config.CATALOG_FORMAT.suffix,
        encoding=config.CATALOG_ENCODING,
    )


def create_loader(config: Config, source: CatalogSource) -> CatalogLoader:
    """Create the loader matching the configured catalog format."""
    if config.CATALOG_FORMAT == CatalogFormat.YAML:
        return RuleCatalogCompiler(source, max_include_depth=config.MAX_INCLUDE_DEPTH)
    return RuleTextParser(source, max_include_depth=config.MAX_INCLUDE_DEPTH)


def build_repository(
    config: Optional[Config] = None,
    source: Optional[CatalogSource] = None,
    languages: Optional[LanguageRegistry] = None,
) -> CatalogRuleRepository:
    """
    Build a rule repository from configuration.

    Args:
        config: Configuration; read from the environment when omitted
        source: Catalog source; a directory source from config when omitted
        languages: Language registry; read from the catalog source when omitted

    Returns:
        Built repository, owned by the caller

    Raises:
        ConfigurationError: If a declared catalog cannot be loaded
        ValidationError: If configuration is incomplete
    """
    config = config or bootstrap_config()
    source = source or create_catalog_source(config)

    # Language lists are plain text in every catalog format
    if languages is None:
        languages = CatalogLanguageRegistry(
            DirectoryCatalogSource(source.root, encoding=config.CATALOG_ENCODING)
            if isinstance(source, DirectoryCatalogSource)
            else source
        )

    return CatalogRuleRepository.build(create_loader(config, source), languages)
