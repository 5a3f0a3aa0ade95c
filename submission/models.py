"""Models for the song request API contract."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SongPayload(BaseModel):
    """The song being requested, as sent by the client.

    Identity fields are optional here so that an incomplete song reaches the
    submission service and is rejected with a readable message.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    id: str | None = None
    title: str | None = None
    artist: str | None = None
    album: str | None = None
    artwork_url: str | None = None
    preview_url: str | None = None


class RequesterDetails(BaseModel):
    """Optional context from the person making the request."""

    name: str | None = None
    dedication: str | None = None
    contact: str | None = None


class SongRequestBody(BaseModel):
    """Request body for POST /request."""

    song: SongPayload | None = None
    requester: RequesterDetails | None = None


class SongRequestAccepted(BaseModel):
    """Response for a submitted song request."""

    message: str
