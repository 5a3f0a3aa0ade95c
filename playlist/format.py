"""Formatting of song requests into playlist document entries."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DEFAULT_DISPLAY_TIMEZONE = "Europe/London"
MISSING_VALUE = "—"
GUEST_REQUESTER = "Guest"


class SongRequestSubmission(BaseModel):
    """A song request as received by the form's submit trigger."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    track_id: str
    track_name: str
    artist_name: str
    album_name: str | None = None
    requester_name: str | None = None
    dedication: str | None = None
    contact: str | None = None
    submitted_at_iso: str


class DocMetadataItem(BaseModel):
    """One labelled line under an entry heading."""

    label: str
    value: str


class DocEntry(BaseModel):
    """A heading plus ordered metadata lines for the playlist document."""

    heading: str
    metadata: list[DocMetadataItem]


def format_requested_at(raw: str, display_timezone: str = DEFAULT_DISPLAY_TIMEZONE) -> str:
    """Render an ISO-8601 timestamp as e.g. ``2 Oct 2025, 20:30``.

    A timestamp without an offset is taken as UTC. Anything that does not
    parse is returned unchanged so a malformed value stays visible.
    """
    try:
        parsed = datetime.fromisoformat(raw)
    except (TypeError, ValueError):
        return raw

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    local = parsed.astimezone(ZoneInfo(display_timezone))
    return f"{local.day} {local:%b %Y, %H:%M}"


def _or_default(value: str | None, default: str) -> str:
    return default if value is None else value


def build_doc_entry(
    submission: SongRequestSubmission,
    display_timezone: str = DEFAULT_DISPLAY_TIMEZONE,
) -> DocEntry:
    """Build the playlist document entry for a submission.

    Args:
        submission: The submitted request
        display_timezone: IANA timezone the request time is shown in

    Returns:
        DocEntry with metadata in the order Artist, Album, Requested by,
        Dedication, Contact, Requested at
    """
    metadata = [
        ("Artist", submission.artist_name),
        ("Album", _or_default(submission.album_name, MISSING_VALUE)),
        ("Requested by", _or_default(submission.requester_name, GUEST_REQUESTER)),
        ("Dedication", _or_default(submission.dedication, MISSING_VALUE)),
        ("Contact", _or_default(submission.contact, MISSING_VALUE)),
        ("Requested at", format_requested_at(submission.submitted_at_iso, display_timezone)),
    ]

    return DocEntry(
        heading=f"{submission.track_name} (ID: {submission.track_id})",
        metadata=[DocMetadataItem(label=label, value=value) for label, value in metadata],
    )
