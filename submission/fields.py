"""Google Form field mapping.

The single place that knows the destination form's structure. Entry ids come
from the form owner's prefilled link; question titles are what the form's
submit trigger reports back as named values. Changing the form means editing
only these tables.
"""

from types import MappingProxyType

FORM_FIELD_IDS = MappingProxyType(
    {
        "trackId": "entry.1111111111",
        "trackName": "entry.2222222222",
        "artistName": "entry.3333333333",
        "albumName": "entry.4444444444",
        "artworkUrl": "entry.5555555555",
        "previewUrl": "entry.6666666666",
        "requesterName": "entry.7777777777",
        "dedication": "entry.8888888888",
        "contact": "entry.9999999999",
    }
)

# Question titles for the fields written to the playlist document.
FORM_QUESTION_TITLES = MappingProxyType(
    {
        "trackId": "Track ID",
        "trackName": "Track Name",
        "artistName": "Artist Name",
        "albumName": "Album Name",
        "requesterName": "Requester Name",
        "dedication": "Dedication",
        "contact": "Contact",
    }
)


def form_field_items() -> list[tuple[str, str]]:
    """Enumerate (logical field name, form entry id) pairs in declaration order."""
    return list(FORM_FIELD_IDS.items())


def form_field_ids() -> frozenset[str]:
    """Get every destination entry id."""
    return frozenset(FORM_FIELD_IDS.values())
