"""Unit test fixtures."""

from contextlib import contextmanager
from unittest.mock import Mock

import pytest

import core.dependencies as deps_module
from config.settings import Settings
from tests.factories import FORM_URL


@contextmanager
def override_deps(app, overrides):
    """Set FastAPI dependency overrides and clear them on exit.

    Args:
        app: The FastAPI application.
        overrides: A dict mapping dependency functions to their replacement values.
    """

    def _make_override(val):
        return lambda: val

    for dep_fn, provider in overrides.items():
        app.dependency_overrides[dep_fn] = _make_override(provider)
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def mock_settings(monkeypatch):
    """Settings with safe test defaults (no real DSNs or keys)."""
    monkeypatch.delenv("GOOGLE_FORM_URL", raising=False)
    monkeypatch.delenv("VITE_GOOGLE_FORM_URL", raising=False)
    monkeypatch.setenv("SENTRY_DSN", "")
    monkeypatch.setenv("POSTHOG_API_KEY", "")
    monkeypatch.setenv("ENABLE_TELEMETRY", "false")
    return Settings(
        google_form_url=FORM_URL,
        sentry_dsn=None,
        posthog_api_key=None,
        enable_telemetry=False,
    )


@pytest.fixture
def mock_posthog_client():
    """Mock PostHog client."""
    client = Mock()
    client.capture = Mock()
    client.flush = Mock()
    client.shutdown = Mock()
    return client


@pytest.fixture(autouse=True)
def reset_dependency_singletons():
    """Reset module-level service singletons between tests."""
    deps_module._catalog_service = None
    deps_module._form_service = None
    deps_module._posthog_client = None
    yield
    deps_module._catalog_service = None
    deps_module._form_service = None
    deps_module._posthog_client = None
