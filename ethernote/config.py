"""Shared constants for the notes table and client defaults."""

NOTES_TABLE = "notes"
PLACEHOLDER_TITLE = "Untitled Note"

NOTE_COLUMNS = "id, title, content, created_at, updated_at"
SUMMARY_COLUMNS = "id, title, created_at"
LIST_ORDER_COLUMN = "created_at"

HTTP_TIMEOUT_SECONDS = 10.0
HTTP_CONNECT_TIMEOUT_SECONDS = 5.0
