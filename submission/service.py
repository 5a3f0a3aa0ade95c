"""Google Form submission service.

The operator configures one prefilled form link. From it we derive both the
``formResponse`` endpoint and a baseline of default answers, so the two can
never drift apart.
"""

import logging
import re
from dataclasses import dataclass
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx

from core.exceptions import ConfigurationError, TransportError, UpstreamError, ValidationError
from core.sentry import add_upstream_breadcrumb
from submission.fields import form_field_ids, form_field_items
from submission.models import RequesterDetails, SongPayload

logger = logging.getLogger(__name__)

SUBMIT_MARKER = "submit"
SUBMIT_VALUE = "Submit"
SUCCESS_MESSAGE = "Song request submitted successfully."

_FORM_PAGE_SEGMENT = re.compile(r"(viewform|prefill)(/|$)")


@dataclass(frozen=True)
class FormResponseConfig:
    """Where to post a submission and which default answers to keep."""

    response_url: str
    default_params: tuple[tuple[str, str], ...] = ()


def derive_form_response_config(form_url: str | None) -> FormResponseConfig:
    """Turn a prefilled form link into a submission endpoint and baseline params.

    The ``viewform``/``prefill`` path segment becomes ``formResponse``. Query
    parameters are kept as defaults, except for the mapped field entries and
    the submit marker, which the submission always sets itself.

    Args:
        form_url: Prefilled Google Form link

    Returns:
        FormResponseConfig for the form

    Raises:
        ConfigurationError: If the link is missing or not an absolute URL
    """
    if not form_url:
        raise ConfigurationError(
            "Google Form URL is not configured. Set GOOGLE_FORM_URL or VITE_GOOGLE_FORM_URL."
        )

    try:
        parts = urlsplit(form_url)
    except ValueError as e:
        raise ConfigurationError(
            "Google Form URL is invalid. Provide a full prefilled link."
        ) from e

    if not parts.scheme or not parts.netloc:
        raise ConfigurationError("Google Form URL is invalid. Provide a full prefilled link.")

    response_path = _FORM_PAGE_SEGMENT.sub(r"formResponse\2", parts.path, count=1)
    response_url = urlunsplit((parts.scheme, parts.netloc, response_path, "", ""))

    excluded = form_field_ids() | {SUBMIT_MARKER}
    default_params = tuple(
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in excluded
    )

    return FormResponseConfig(response_url=response_url, default_params=default_params)


def validate_song(song: SongPayload | None) -> SongPayload:
    """Reject a song without id, title and artist."""
    if song is None or not song.id or not song.title or not song.artist:
        raise ValidationError("Song information is required")
    return song


def build_form_params(
    config: FormResponseConfig,
    song: SongPayload,
    requester: RequesterDetails | None = None,
) -> list[tuple[str, str]]:
    """Assemble the form-encoded answers for one submission.

    Every mapped field is written, with an empty string for missing values:
    the form treats an absent entry as unanswered.
    """
    requester = requester or RequesterDetails()
    values = {
        "trackId": song.id,
        "trackName": song.title,
        "artistName": song.artist,
        "albumName": song.album,
        "artworkUrl": song.artwork_url,
        "previewUrl": song.preview_url,
        "requesterName": requester.name,
        "dedication": requester.dedication,
        "contact": requester.contact,
    }

    params = list(config.default_params)
    for name, field_id in form_field_items():
        params.append((field_id, values[name] or ""))
    params.append((SUBMIT_MARKER, SUBMIT_VALUE))
    return params


class FormSubmissionService:
    """Submits song requests to a Google Form."""

    def __init__(self, form_url: str | None):
        """Initialize the service with the prefilled form link.

        Args:
            form_url: Prefilled Google Form link, or None if not configured
        """
        self.form_url = form_url
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(follow_redirects=True)
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def check_config(self) -> bool:
        """Check that the configured form link can be turned into an endpoint."""
        try:
            derive_form_response_config(self.form_url)
        except ConfigurationError:
            return False
        return True

    async def submit(
        self,
        song: SongPayload | None,
        requester: RequesterDetails | None = None,
    ) -> str:
        """Submit one song request. Makes a single attempt, no retry.

        Args:
            song: The requested song; id, title and artist are required
            requester: Optional requester name, dedication and contact

        Returns:
            Confirmation message

        Raises:
            ValidationError: If the song is missing its identity (no request is made)
            ConfigurationError: If the form link is missing or invalid
            TransportError: If the form cannot be reached
            UpstreamError: If the form answers with a non-2xx status
        """
        song = validate_song(song)
        config = derive_form_response_config(self.form_url)
        params = build_form_params(config, song, requester)

        add_upstream_breadcrumb(
            "google_form", "submit", {"track_id": song.id, "url": config.response_url}
        )
        logger.info(f"Submitting request for '{song.title}' by {song.artist} (id {song.id})")

        try:
            client = await self._get_client()
            response = await client.post(
                config.response_url,
                content=urlencode(params),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.RequestError as e:
            logger.error(f"Google Form request failed: {e}")
            add_upstream_breadcrumb(
                "google_form",
                "submit",
                {"track_id": song.id, "error": type(e).__name__},
                level="error",
            )
            raise TransportError(
                f"Failed to submit to Google Form: {str(e) or type(e).__name__}"
            ) from e

        if not response.is_success:
            logger.error(f"Google Form returned status {response.status_code}")
            add_upstream_breadcrumb(
                "google_form",
                "submit",
                {"track_id": song.id, "status": response.status_code},
                level="error",
            )
            raise UpstreamError(
                f"Google Form responded with status {response.status_code}",
                status=response.status_code,
            )

        logger.info(f"Request for track {song.id} submitted")
        return SUCCESS_MESSAGE
