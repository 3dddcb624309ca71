"""Error kinds raised by the store and recorded by the controllers."""

from __future__ import annotations


class NoteError(RuntimeError):
    """Base class for every error surfaced to the presentation layer."""


class ValidationError(NoteError):
    """Raised locally when a note fails validation before reaching the store."""


class StoreError(NoteError):
    """Raised when the remote store rejects or cannot serve a request."""


class NotFoundError(StoreError):
    """Raised when the requested note does not exist (or no longer exists)."""


class NetworkFailure(StoreError):
    """Raised for transport failures and server-side errors."""


__all__ = [
    "NoteError",
    "ValidationError",
    "StoreError",
    "NotFoundError",
    "NetworkFailure",
]
