"""Appending song requests to the playlist document.

The form's submit trigger reports answers as named values keyed by question
title. These are mapped back to a submission, formatted, and written to any
body that speaks the small paragraph API below (a Google Docs body in
production, ``MarkdownDocumentBody`` for previews).
"""

from datetime import datetime, timezone
from typing import Protocol

from playlist.format import (
    DEFAULT_DISPLAY_TIMEZONE,
    DocEntry,
    SongRequestSubmission,
    build_doc_entry,
)
from submission.fields import FORM_QUESTION_TITLES

ENTRY_HEADING_LEVEL = 2


class DocumentParagraph(Protocol):
    def set_heading(self, level: int) -> "DocumentParagraph": ...

    def set_bold(self, bold: bool) -> "DocumentParagraph": ...


class DocumentBody(Protocol):
    def append_paragraph(self, text: str) -> DocumentParagraph: ...

    def append_horizontal_rule(self) -> None: ...


def submission_from_named_values(
    named_values: dict[str, list[str]],
    submitted_at: str | None = None,
) -> SongRequestSubmission:
    """Map the form trigger's named values back onto a submission.

    Only the first answer of each question is used. Blank optional answers
    count as not supplied.

    Args:
        named_values: Answers keyed by question title
        submitted_at: Submission time as sent by the trigger, passed through
            as is; defaults to now (UTC)

    Returns:
        SongRequestSubmission ready for formatting
    """

    def first(name: str) -> str | None:
        answers = named_values.get(FORM_QUESTION_TITLES[name]) or []
        return answers[0] if answers else None

    def optional(name: str) -> str | None:
        value = first(name)
        return value if value and value.strip() else None

    submitted_at = submitted_at or datetime.now(timezone.utc).isoformat()

    return SongRequestSubmission(
        track_id=first("trackId") or "",
        track_name=first("trackName") or "Unknown Track",
        artist_name=first("artistName") or "Unknown Artist",
        album_name=optional("albumName"),
        requester_name=optional("requesterName"),
        dedication=optional("dedication"),
        contact=optional("contact"),
        submitted_at_iso=submitted_at,
    )


def append_doc_entry(body: DocumentBody, entry: DocEntry) -> None:
    """Append a formatted entry, closed by a horizontal rule."""
    body.append_paragraph(entry.heading).set_heading(ENTRY_HEADING_LEVEL).set_bold(True)

    for item in entry.metadata:
        body.append_paragraph(f"{item.label}: {item.value}")

    body.append_horizontal_rule()


def append_submission_to_doc(
    body: DocumentBody,
    submission: SongRequestSubmission,
    display_timezone: str = DEFAULT_DISPLAY_TIMEZONE,
) -> None:
    """Format a submission and append it to the document."""
    append_doc_entry(body, build_doc_entry(submission, display_timezone))


class MarkdownParagraph:
    def __init__(self, text: str):
        self.text = text
        self.heading_level = 0
        self.bold = False

    def set_heading(self, level: int) -> "MarkdownParagraph":
        self.heading_level = level
        return self

    def set_bold(self, bold: bool) -> "MarkdownParagraph":
        self.bold = bold
        return self

    def render(self) -> str:
        text = f"**{self.text}**" if self.bold else self.text
        if self.heading_level:
            return f"{'#' * self.heading_level} {text}"
        return text


class MarkdownDocumentBody:
    """In-memory document body that renders to Markdown."""

    def __init__(self):
        self._blocks: list[MarkdownParagraph | None] = []

    def append_paragraph(self, text: str) -> MarkdownParagraph:
        paragraph = MarkdownParagraph(text)
        self._blocks.append(paragraph)
        return paragraph

    def append_horizontal_rule(self) -> None:
        self._blocks.append(None)

    def render(self) -> str:
        """Render all blocks, one per paragraph, separated by blank lines."""
        return "\n\n".join(
            "---" if block is None else block.render() for block in self._blocks
        )
