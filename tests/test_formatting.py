"""Tests for display helpers used by the list and detail pages."""

from ethernote.errors import NetworkFailure, NotFoundError, ValidationError
from ethernote.ui.formatting import (
    NO_CONTENT,
    content_or_placeholder,
    describe_error,
    format_long_date,
    format_short_date,
    note_count_label,
)


def test_short_date():
    assert format_short_date("2024-10-05T15:04:00Z") == "Oct 5, 2024"
    assert format_short_date(None) == ""


def test_short_date_respects_timezone():
    assert format_short_date("2024-10-05T02:00:00+00:00", tz="America/Bogota") == "Oct 4, 2024"


def test_long_date():
    assert format_long_date("2024-10-05T15:04:00+00:00") == "October 5, 2024 at 03:04 PM"


def test_note_count_label():
    assert note_count_label(0) == "0 notes"
    assert note_count_label(1) == "1 note"
    assert note_count_label(12) == "12 notes"


def test_content_placeholder():
    assert content_or_placeholder("") == NO_CONTENT
    assert content_or_placeholder(None) == NO_CONTENT
    assert content_or_placeholder("Milk") == "Milk"


def test_describe_error():
    assert describe_error(None, "save note") == ""
    assert describe_error(ValidationError("Title cannot be empty"), "save note") == (
        "Title cannot be empty"
    )
    assert describe_error(NotFoundError("x"), "load note") == "This note no longer exists."
    assert describe_error(NetworkFailure("x"), "save note") == (
        "Failed to save note. Please try again."
    )
