"""
Pytest configuration and fixtures for marc8bridge tests.
"""

import pytest

from marc8bridge import CharacterSetRegistry, TranscodingEngine, default_registry


@pytest.fixture(scope="session")
def registry():
    """The process-wide registry with the standard sets."""
    return default_registry()


@pytest.fixture
def fresh_registry():
    """A private registry, so lazy loading can be observed from scratch."""
    return CharacterSetRegistry()


@pytest.fixture
def engine():
    """Engine with default registers (ASCII/Ansel), diagnostics off."""
    return TranscodingEngine()


@pytest.fixture
def diagnostic_engine():
    """Engine with default registers and diagnostics on."""
    return TranscodingEngine(diagnostics=True)


@pytest.fixture(scope="session")
def ansel(registry):
    return registry.resolve("E")


@pytest.fixture(scope="session")
def ascii_set(registry):
    return registry.resolve("B")


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "slow: mark test as slow (deselect with '-m \"not slow\"')"
    )
