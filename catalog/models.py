"""Pydantic models for catalog search results."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Track(BaseModel):
    """A normalized song from the catalog.

    Optional fields are always present and set to None when the catalog has
    no value for them.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    id: str
    title: str
    artist: str
    album: str | None = None
    artwork_url: str | None = None
    preview_url: str | None = None


class SearchResponse(BaseModel):
    """Response for a catalog search."""

    tracks: list[Track] = []
    message: str | None = None
    error: str | None = None
