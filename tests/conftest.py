"""Test configuration and shared fixtures."""

import pytest

from phonorules.application.config import reset_config
from phonorules.domain.rules.engine import RuleTextParser
from tests.fakes import FakeCatalogSource, FakeLanguageRegistry


@pytest.fixture(autouse=True)
def _fresh_config():
    """Each test starts without a cached process configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def catalog_source() -> FakeCatalogSource:
    """Empty in-memory catalog source."""
    return FakeCatalogSource()


@pytest.fixture
def parser(catalog_source: FakeCatalogSource) -> RuleTextParser:
    """Plain text parser reading from the fake source."""
    return RuleTextParser(catalog_source)


@pytest.fixture
def language_registry() -> FakeLanguageRegistry:
    """Registry declaring the languages used across tests."""
    return FakeLanguageRegistry(declared=frozenset({"any", "english", "french"}))
