"""Playlist entry preview router.

The form's submit trigger can post its named values here to get back the
exact entry that would be appended to the playlist document.
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from config.settings import Settings, get_settings
from playlist.document import (
    MarkdownDocumentBody,
    append_doc_entry,
    submission_from_named_values,
)
from playlist.format import DocEntry, build_doc_entry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/playlist", tags=["playlist"])


class PlaylistEntryRequest(BaseModel):
    """Named values delivered by the form's submit trigger."""

    model_config = ConfigDict(populate_by_name=True)

    named_values: dict[str, list[str]] = Field(default_factory=dict, alias="namedValues")
    submitted_at: str | None = Field(None, alias="submittedAt")


class PlaylistEntryResponse(DocEntry):
    """A formatted entry plus its Markdown rendering."""

    markdown: str


@router.post(
    "/entry",
    response_model=PlaylistEntryResponse,
    summary="Format a form submission as a playlist entry",
    responses={
        200: {"description": "Entry formatted"},
        422: {"description": "Malformed named values"},
    },
)
async def format_playlist_entry(
    request: PlaylistEntryRequest,
    settings: Settings = Depends(get_settings),
) -> PlaylistEntryResponse:
    """Format a submission without writing it anywhere."""
    submission = submission_from_named_values(request.named_values, request.submitted_at)
    entry = build_doc_entry(submission, settings.display_timezone)

    body = MarkdownDocumentBody()
    append_doc_entry(body, entry)
    logger.info(f"Formatted playlist entry: {entry.heading}")

    return PlaylistEntryResponse(
        heading=entry.heading, metadata=entry.metadata, markdown=body.render()
    )
