"""
Pytest configuration and fixtures for the WYSIWYM doc model tests
"""

import os
import sys

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

from utils.mock_utils import make_fake_registry
from wysiwym.main import create_app
from wysiwym.plugins.loader import initialize_plugins
from wysiwym.plugins.registry import KindRegistry
from wysiwym.services.schema_service import build_schema


@pytest.fixture
def registry() -> KindRegistry:
    """A fresh registry with every built-in plugin, validated and frozen."""
    reg = KindRegistry()
    initialize_plugins(reg)
    return reg


@pytest.fixture
def schema(registry):
    return build_schema(registry)


@pytest.fixture
def fake_registry() -> KindRegistry:
    """Fabricated kinds; not frozen, so tests can add or break registrations."""
    return make_fake_registry()


@pytest.fixture
def fake_schema(fake_registry):
    return build_schema(fake_registry)


@pytest.fixture
def client(registry):
    """Test client whose lifespan uses the fixture registry."""
    with TestClient(create_app(registry)) as test_client:
        yield test_client
