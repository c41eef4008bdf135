"""Shared pytest fixtures for the Fibonacci API tests."""

import pytest
from fastapi.testclient import TestClient

from fibonacci_api.config import Settings
from fibonacci_api.node import create_app

FIB_ENV_VARS = (
    "FIB_MAX_N",
    "FIB_DEFAULT_N",
    "FIB_DEBUG",
    "FIB_RESOLVER_ORDER",
    "FIB_STRUCTURAL_TOKENS",
    "FIB_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Each test starts without FIB_* variables; anything a test exports is undone."""
    for name in FIB_ENV_VARS:
        # setenv records the prior state so teardown restores or removes it
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)
