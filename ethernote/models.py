"""Note records and the state snapshots handed to the presentation layer."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Tuple


class Mode(str, Enum):
    """Lifecycle modes of a single open note."""

    LOADING = "loading"
    VIEWING = "viewing"
    EDITING = "editing"
    SAVING = "saving"
    DELETING = "deleting"
    LOAD_ERROR = "load_error"
    CLOSED = "closed"


@dataclass(frozen=True)
class Note:
    """Persisted copy of a note as last confirmed by the store."""

    id: Optional[str]
    title: str
    content: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Note":
        raw_id = row.get("id")
        return cls(
            id=str(raw_id) if raw_id is not None else None,
            title=row.get("title") or "",
            content=row.get("content") or "",
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )


@dataclass(frozen=True)
class NoteSummary:
    """List row projection: enough to render and open a note."""

    id: str
    title: str
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "NoteSummary":
        return cls(
            id=str(row.get("id")),
            title=row.get("title") or "",
            created_at=row.get("created_at"),
        )


@dataclass
class EditSession:
    """Working copy of the open note. Mutable, owned by one controller."""

    title: str
    content: str
    is_new: bool = False

    @classmethod
    def from_note(cls, note: Note, *, is_new: bool = False) -> "EditSession":
        return cls(title=note.title, content=note.content, is_new=is_new)


@dataclass(frozen=True)
class NoteSnapshot:
    """Read-only view of a lifecycle controller for rendering."""

    mode: Mode
    note: Optional[Note] = None
    title: Optional[str] = None
    content: Optional[str] = None
    last_error: Optional[Exception] = None
    is_busy: bool = False
    is_new: bool = False

    @property
    def has_working_copy(self) -> bool:
        return self.title is not None


@dataclass(frozen=True)
class ListSnapshot:
    """Read-only view of the list controller for rendering."""

    summaries: Tuple[NoteSummary, ...] = field(default_factory=tuple)
    is_loading: bool = False
    is_refreshing: bool = False
    is_creating: bool = False
    has_loaded: bool = False
    last_error: Optional[Exception] = None

    @property
    def is_busy(self) -> bool:
        return self.is_loading or self.is_refreshing or self.is_creating


__all__ = [
    "Mode",
    "Note",
    "NoteSummary",
    "EditSession",
    "NoteSnapshot",
    "ListSnapshot",
]
