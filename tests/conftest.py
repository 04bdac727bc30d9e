"""Shared fixtures."""
import pytest

from refschema import RegistryConfig, SchemaRegistry


@pytest.fixture
def registry():
    """Fresh registry per test, so mixins never leak between tests."""
    return SchemaRegistry(RegistryConfig())


@pytest.fixture
def lenient_registry():
    return SchemaRegistry(RegistryConfig(extra_keys='ignore'))
