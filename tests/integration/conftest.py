"""Integration test fixtures.

Runs the real application with real services. Only the outbound HTTP layer
is replaced: the iTunes Search API and the Google Form endpoint are served by
an in-process httpx.MockTransport that records every request it sees.
"""

import httpx
import pytest
import pytest_asyncio

from catalog.service import CatalogService
from config.settings import Settings
from submission.service import FormSubmissionService
from tests.factories import FORM_URL, make_itunes_result


class UpstreamStub:
    """Fake iTunes and Google Form endpoints."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.search_results = [
            make_itunes_result(111, trackName="Digital Love", collectionName="Discovery"),
            make_itunes_result(222, trackName="One More Time", collectionName="Discovery"),
        ]
        self.search_status = 200
        self.form_status = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "itunes.apple.com":
            if self.search_status != 200:
                return httpx.Response(self.search_status, text="nope")
            return httpx.Response(
                200,
                json={"resultCount": len(self.search_results), "results": self.search_results},
            )
        if request.url.path.endswith("/formResponse"):
            return httpx.Response(self.form_status, text="<html>Thanks</html>")
        return httpx.Response(404)

    @property
    def form_posts(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]


@pytest.fixture
def upstream():
    return UpstreamStub()


@pytest.fixture
def test_settings():
    """Settings with a fake form link, telemetry disabled."""
    return Settings(
        _env_file=None,
        google_form_url=FORM_URL,
        sentry_dsn=None,
        posthog_api_key=None,
        enable_telemetry=False,
    )


@pytest_asyncio.fixture
async def services(upstream, test_settings):
    """Real catalog and form services wired to the upstream stub."""
    transport = httpx.MockTransport(upstream.handler)

    catalog = CatalogService(
        search_url=test_settings.itunes_search_url,
        user_agent=test_settings.user_agent,
        limit=test_settings.search_limit,
    )
    catalog._client = httpx.AsyncClient(
        transport=transport, headers={"User-Agent": test_settings.user_agent}
    )

    form = FormSubmissionService(test_settings.resolved_google_form_url)
    form._client = httpx.AsyncClient(transport=transport, follow_redirects=True)

    yield catalog, form

    await catalog.close()
    await form.close()


@pytest_asyncio.fixture
async def app_client(services, test_settings):
    """httpx AsyncClient against the app with stubbed upstreams."""
    from httpx import ASGITransport, AsyncClient

    from config.settings import get_settings
    from core.dependencies import get_catalog_service, get_form_service, get_posthog_client
    from main import app

    catalog, form = services
    app.dependency_overrides[get_catalog_service] = lambda: catalog
    app.dependency_overrides[get_form_service] = lambda: form
    app.dependency_overrides[get_posthog_client] = lambda: None
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
