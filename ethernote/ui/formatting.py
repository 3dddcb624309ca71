"""Display strings for note rows and the detail view."""
from __future__ import annotations

from typing import Optional

from ethernote.errors import NotFoundError, ValidationError
from ethernote.time_utils import to_tz

NO_CONTENT = "No content"


def format_short_date(value: Optional[str], tz: str = "UTC") -> str:
    """``Oct 5, 2024`` style date for list rows."""
    if not value:
        return ""
    dt = to_tz(value, tz)
    return f"{dt.strftime('%b')} {dt.day}, {dt.year}"


def format_long_date(value: Optional[str], tz: str = "UTC") -> str:
    """``October 5, 2024 at 03:04 PM`` style date for the detail view."""
    if not value:
        return ""
    dt = to_tz(value, tz)
    return f"{dt.strftime('%B')} {dt.day}, {dt.year} at {dt.strftime('%I:%M %p')}"


def note_count_label(count: int) -> str:
    return f"{count} {'note' if count == 1 else 'notes'}"


def content_or_placeholder(content: Optional[str]) -> str:
    return content if content else NO_CONTENT


def describe_error(exc: Optional[Exception], action: str) -> str:
    """User-facing message for an error recorded by a controller."""
    if exc is None:
        return ""
    if isinstance(exc, ValidationError):
        return str(exc)
    if isinstance(exc, NotFoundError):
        return "This note no longer exists."
    return f"Failed to {action}. Please try again."


__all__ = [
    "NO_CONTENT",
    "format_short_date",
    "format_long_date",
    "note_count_label",
    "content_or_placeholder",
    "describe_error",
]
