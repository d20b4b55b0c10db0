"""
Shared test fixtures for the depreg test suite.
"""

import pytest

from depreg import DependencyRegistry


@pytest.fixture
def registry():
    """A fresh, empty registry."""
    return DependencyRegistry()


@pytest.fixture
def deps(registry):
    """Accessor of the ``registry`` fixture."""
    return registry.export()
