"""Application configuration for phonorules."""

from enum import Enum
from typing import Optional

from phonorules.application.errors import ValidationError
from phonorules.application.ports import SettingsProvider
from phonorules.domain.rules.engine.loader import DEFAULT_MAX_INCLUDE_DEPTH
from phonorules.shared.logging.factory import LOG_LEVELS


class Environment(Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


class CatalogFormat(Enum):
    """Rule catalog file formats."""

    TEXT = "text"
    YAML = "yaml"

    @property
    def suffix(self) -> str:
        """File suffix of catalogs in this format."""
        return ".txt" if self is CatalogFormat.TEXT else ".yaml"


class LogFormat(Enum):
    """Log renderers."""

    JSON = "json"
    CONSOLE = "console"


class Config:
    """Application configuration read from a settings provider."""

    def __init__(self, settings: SettingsProvider):
        """Initialize configuration with a settings provider."""
        self.settings = settings
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from the settings provider."""
        self.ENVIRONMENT = self._enum(
            Environment, "PHONORULES_ENVIRONMENT", Environment.DEVELOPMENT.value
        )

        # Catalogs
        self.CATALOG_PATH = self.settings.get("PHONORULES_CATALOG_PATH") or None
        self.CATALOG_FORMAT = self._enum(
            CatalogFormat, "PHONORULES_CATALOG_FORMAT", CatalogFormat.TEXT.value
        )
        self.CATALOG_ENCODING = self.settings.get("PHONORULES_CATALOG_ENCODING", "utf-8")
        self.MAX_INCLUDE_DEPTH = self._int(
            "PHONORULES_MAX_INCLUDE_DEPTH", DEFAULT_MAX_INCLUDE_DEPTH
        )

        # Logging
        self.LOG_LEVEL = self.settings.get("PHONORULES_LOG_LEVEL", "INFO").upper()
        self.LOG_FORMAT = self._enum(LogFormat, "PHONORULES_LOG_FORMAT", LogFormat.JSON.value)

    def _enum(self, enum_cls, key: str, default: str):
        raw = self.settings.get(key, default) or default
        try:
            return enum_cls(raw.strip().lower())
        except ValueError:
            allowed = ", ".join(member.value for member in enum_cls)
            raise ValidationError(key, f"must be one of {allowed}, got {raw!r}")

    def _int(self, key: str, default: int) -> int:
        raw = self.settings.get(key)
        if raw is None or raw == "":
            return default
        try:
            return int(raw)
        except ValueError:
            raise ValidationError(key, f"must be an integer, got {raw!r}")

    def validate(self) -> None:
        """Validate critical configuration values."""
        if self.MAX_INCLUDE_DEPTH < 1:
            raise ValidationError("PHONORULES_MAX_INCLUDE_DEPTH", "must be positive")

        if self.LOG_LEVEL not in LOG_LEVELS:
            raise ValidationError("PHONORULES_LOG_LEVEL", f"unknown level {self.LOG_LEVEL!r}")

        if self.ENVIRONMENT == Environment.PRODUCTION and not self.CATALOG_PATH:
            raise ValidationError("PHONORULES_CATALOG_PATH", "must be set in production")

    @property
    def json_logs(self) -> bool:
        """Whether logs are rendered as JSON."""
        return self.LOG_FORMAT == LogFormat.JSON


# Global configuration instance
_config: Optional[Config] = None


def get_config(settings: Optional[SettingsProvider] = None) -> Config:
    """
    Get or create the process configuration.

    Args:
        settings: SettingsProvider implementation. Required on first call.

    Returns:
        Configuration instance

    Raises:
        ValueError: If settings is None and no configuration exists yet
    """
    global _config
    if _config is None:
        if settings is None:
            raise ValueError(
                "SettingsProvider must be provided when creating Config for the first time"
            )
        _config = Config(settings)
        _config.validate()
    return _config


def reset_config() -> None:
    """Forget the process configuration."""
    global _config
    _config = None
