"""HTTP client for the DJ requests API, used by front ends."""

import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from catalog.models import SearchResponse, Track
from submission.models import RequesterDetails

logger = logging.getLogger(__name__)


class RequestsApiError(Exception):
    """Raised when the API reports a failure. The message is safe to show users."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


def _error_message(response: httpx.Response, fallback: str) -> str:
    """Pull the ``error`` string out of a failed response, if there is one."""
    try:
        payload = response.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict) and isinstance(payload.get("error"), str):
        return payload["error"]
    return fallback


class RequestsApiClient:
    """Searches tracks and submits song requests against a running service."""

    def __init__(self, base_url: str, client: httpx.AsyncClient | None = None):
        self.base_url = base_url.rstrip("/")
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url)
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def search(self, term: str) -> SearchResponse:
        """Search for tracks.

        Raises:
            RequestsApiError: With the server's error message on failure
        """
        client = await self._get_client()
        try:
            response = await client.get("/api/v1/search", params={"term": term})
        except httpx.RequestError as e:
            logger.warning(f"Search request failed: {e}")
            raise RequestsApiError("Search failed") from e

        if not response.is_success:
            raise RequestsApiError(
                _error_message(response, "Search failed"), status_code=response.status_code
            )

        try:
            return SearchResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            logger.warning(f"Unreadable search response: {e}")
            raise RequestsApiError("Search failed", status_code=response.status_code) from e

    async def submit_song_request(
        self,
        song: Track,
        details: RequesterDetails | None = None,
    ) -> str:
        """Submit a request for a track.

        Returns:
            The server's confirmation message

        Raises:
            RequestsApiError: With the server's error message on failure
        """
        details = details or RequesterDetails()
        body = {
            "song": song.model_dump(by_alias=True),
            "requester": details.model_dump(exclude_none=True),
        }

        client = await self._get_client()
        try:
            response = await client.post("/api/v1/request", json=body)
        except httpx.RequestError as e:
            logger.warning(f"Song request failed: {e}")
            raise RequestsApiError("Unable to submit request.") from e

        if not response.is_success:
            raise RequestsApiError(
                _error_message(response, "Unable to submit request."),
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and isinstance(payload.get("message"), str):
            return payload["message"]
        return ""
