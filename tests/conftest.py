"""Shared test fixtures for pytest."""

from unittest.mock import AsyncMock

import httpx
import pytest

from catalog.service import CatalogService
from submission.service import FormSubmissionService
from tests.factories import FORM_URL, make_track


@pytest.fixture
def mock_http_client():
    """AsyncMock standing in for httpx.AsyncClient."""
    client = AsyncMock(spec=httpx.AsyncClient)
    client.get = AsyncMock(return_value=httpx.Response(200, json={"results": []}))
    client.post = AsyncMock(return_value=httpx.Response(200, text="ok"))
    return client


@pytest.fixture
def catalog_service(mock_http_client):
    """CatalogService whose HTTP client is mocked."""
    service = CatalogService(user_agent="djrequests/test")
    service._client = mock_http_client
    return service


@pytest.fixture
def form_service(mock_http_client):
    """FormSubmissionService for FORM_URL whose HTTP client is mocked."""
    service = FormSubmissionService(FORM_URL)
    service._client = mock_http_client
    return service


@pytest.fixture
def sample_track():
    """Create a sample track for testing."""
    return make_track()
