"""Unit tests for playlist/document.py."""

from datetime import datetime
from unittest.mock import MagicMock, call

from playlist.document import (
    MarkdownDocumentBody,
    append_doc_entry,
    append_submission_to_doc,
    submission_from_named_values,
)
from playlist.format import DocEntry, DocMetadataItem
from tests.factories import make_submission

NAMED_VALUES = {
    "Track ID": ["321"],
    "Track Name": ["Digital Love"],
    "Artist Name": ["Daft Punk"],
    "Album Name": ["Discovery"],
    "Requester Name": ["Avery"],
    "Dedication": ["To the dancefloor crew!"],
    "Contact": ["instagram.com/avery"],
}


class TestSubmissionFromNamedValues:
    def test_maps_question_titles(self):
        submission = submission_from_named_values(
            NAMED_VALUES, submitted_at="2025-10-02T19:30:00+00:00"
        )

        assert submission.track_id == "321"
        assert submission.track_name == "Digital Love"
        assert submission.artist_name == "Daft Punk"
        assert submission.album_name == "Discovery"
        assert submission.requester_name == "Avery"
        assert submission.dedication == "To the dancefloor crew!"
        assert submission.contact == "instagram.com/avery"
        assert submission.submitted_at_iso == "2025-10-02T19:30:00+00:00"

    def test_uses_first_answer(self):
        submission = submission_from_named_values({"Track Name": ["First", "Second"]})
        assert submission.track_name == "First"

    def test_defaults_when_missing(self):
        submission = submission_from_named_values({})

        assert submission.track_id == ""
        assert submission.track_name == "Unknown Track"
        assert submission.artist_name == "Unknown Artist"
        assert submission.album_name is None
        assert submission.requester_name is None

    def test_blank_optional_answers_are_absent(self):
        values = {**NAMED_VALUES, "Album Name": [""], "Contact": ["   "], "Dedication": []}
        submission = submission_from_named_values(values)

        assert submission.album_name is None
        assert submission.contact is None
        assert submission.dedication is None

    def test_defaults_timestamp_to_now(self):
        submission = submission_from_named_values(NAMED_VALUES)
        parsed = datetime.fromisoformat(submission.submitted_at_iso)
        assert parsed.tzinfo is not None

    def test_timestamp_passed_through_verbatim(self):
        submission = submission_from_named_values(NAMED_VALUES, submitted_at="yesterday-ish")
        assert submission.submitted_at_iso == "yesterday-ish"


class TestAppendSubmissionToDoc:
    def test_calls_body_in_order(self):
        body = MagicMock()
        heading = body.append_paragraph.return_value
        heading.set_heading.return_value = heading

        append_submission_to_doc(body, make_submission())

        assert body.append_paragraph.call_args_list == [
            call("Digital Love (ID: 321)"),
            call("Artist: Daft Punk"),
            call("Album: Discovery"),
            call("Requested by: Avery"),
            call("Dedication: To the dancefloor crew!"),
            call("Contact: instagram.com/avery"),
            call("Requested at: 2 Oct 2025, 20:30"),
        ]
        heading.set_heading.assert_any_call(2)
        heading.set_bold.assert_any_call(True)
        body.append_horizontal_rule.assert_called_once()

    def test_append_prebuilt_entry(self):
        body = MarkdownDocumentBody()
        entry = DocEntry(
            heading="One More Time (ID: 222)",
            metadata=[DocMetadataItem(label="Artist", value="Daft Punk")],
        )

        append_doc_entry(body, entry)

        assert body.render() == "## **One More Time (ID: 222)**\n\nArtist: Daft Punk\n\n---"


class TestMarkdownDocumentBody:
    def test_renders_entry(self):
        body = MarkdownDocumentBody()
        append_submission_to_doc(body, make_submission(contact=None))

        assert body.render() == "\n\n".join(
            [
                "## **Digital Love (ID: 321)**",
                "Artist: Daft Punk",
                "Album: Discovery",
                "Requested by: Avery",
                "Dedication: To the dancefloor crew!",
                "Contact: —",
                "Requested at: 2 Oct 2025, 20:30",
                "---",
            ]
        )

    def test_empty_body(self):
        assert MarkdownDocumentBody().render() == ""

    def test_plain_paragraph(self):
        body = MarkdownDocumentBody()
        body.append_paragraph("hello")
        assert body.render() == "hello"
