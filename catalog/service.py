"""iTunes Search API service."""

import logging
from typing import Any

import httpx

from catalog.models import SearchResponse, Track
from core.exceptions import RateLimitedError, TransportError, UpstreamError, ValidationError
from core.sentry import add_upstream_breadcrumb

logger = logging.getLogger(__name__)

ITUNES_SEARCH_URL = "https://itunes.apple.com/search"
DEFAULT_SEARCH_LIMIT = 25


class CatalogService:
    """Searches the public iTunes catalog for songs.

    Every search is a single GET with no retry. Upstream failures are
    classified so callers can tell a rate limit (back off) from a broken
    upstream or a connectivity problem.
    """

    def __init__(
        self,
        search_url: str = ITUNES_SEARCH_URL,
        user_agent: str | None = None,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ):
        self.search_url = search_url
        self.user_agent = user_agent
        self.limit = limit
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            headers = {"User-Agent": self.user_agent} if self.user_agent else {}
            self._client = httpx.AsyncClient(headers=headers)
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def check_api(self) -> bool:
        """Check iTunes Search API connectivity with a one-result query."""
        try:
            client = await self._get_client()
            resp = await client.get(
                self.search_url, params={"term": "music", "entity": "song", "limit": 1}
            )
            return bool(resp.status_code == 200)
        except httpx.HTTPError:
            return False

    async def search(self, term: str) -> SearchResponse:
        """Search the catalog for songs matching a free-text term.

        Args:
            term: Free-text search term; surrounding whitespace is ignored

        Returns:
            SearchResponse with tracks in upstream order, or an empty list and
            an informational message when nothing matched

        Raises:
            ValidationError: If the term is empty (no request is made)
            RateLimitedError: If the API answers 429
            UpstreamError: If the API answers any other non-2xx status
            TransportError: If the API cannot be reached
        """
        term = (term or "").strip()
        if not term:
            raise ValidationError("Missing search term")

        params = {"term": term, "entity": "song", "limit": str(self.limit)}
        add_upstream_breadcrumb("itunes", "search", {"term": term})
        logger.info(f"Searching iTunes for: '{term}'")

        try:
            client = await self._get_client()
            response = await client.get(self.search_url, params=params)
        except httpx.RequestError as e:
            logger.error(f"iTunes request failed: {e}")
            add_upstream_breadcrumb(
                "itunes", "search", {"term": term, "error": type(e).__name__}, level="error"
            )
            raise TransportError(
                f"Failed to reach iTunes Search API: {str(e) or type(e).__name__}"
            ) from e

        if not response.is_success:
            add_upstream_breadcrumb(
                "itunes", "search", {"term": term, "status": response.status_code}, level="error"
            )

        if response.status_code == 429:
            logger.warning("iTunes rate limit hit")
            raise RateLimitedError(
                "The iTunes Search API rate limit has been reached. Please retry shortly.",
                status=response.status_code,
            )

        if not response.is_success:
            logger.error(f"iTunes returned status {response.status_code}")
            raise UpstreamError(
                f"iTunes Search API returned status {response.status_code}",
                status=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamError(
                "iTunes Search API returned an unreadable payload",
                status=response.status_code,
            ) from e

        results = payload.get("results") or []
        if not results:
            logger.info(f"No iTunes results for '{term}'")
            return SearchResponse(tracks=[], message=f'No songs found for "{term}".')

        tracks = [self._normalize_track(result) for result in results]
        logger.info(f"iTunes search found {len(tracks)} tracks")
        return SearchResponse(tracks=tracks)

    def _normalize_track(self, result: dict[str, Any]) -> Track:
        """Map an iTunes result record onto a Track."""
        return Track(
            id=str(result.get("trackId")),
            title=result.get("trackName") or "",
            artist=result.get("artistName") or "",
            album=result.get("collectionName"),
            artwork_url=result.get("artworkUrl100"),
            preview_url=result.get("previewUrl"),
        )
