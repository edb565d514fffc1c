"""
Settings adapters implementing the SettingsProvider port.
"""

import os
from typing import Mapping, Optional

from phonorules.application.ports import SettingsProvider


class EnvironmentSettings(SettingsProvider):
    """Settings read from process environment variables."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = os.environ if environ is None else environ

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get configuration value by key."""
        return self._environ.get(key, default)


class DictSettings(SettingsProvider):
    """Settings held in a plain mapping."""

    def __init__(self, values: Mapping[str, str]):
        self._values = dict(values)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get configuration value by key."""
        return self._values.get(key, default)


def get_settings_adapter() -> SettingsProvider:
    """Factory function to create the default settings adapter."""
    return EnvironmentSettings()
