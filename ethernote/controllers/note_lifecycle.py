"""Edit lifecycle of a single note.

The controller owns two copies of a note: the persisted copy (what the store
last confirmed) and the working copy (what the user is typing). Network
intents (:meth:`open`, :meth:`save`, :meth:`delete`) are coroutines and are
the only places the controller suspends; local edits are plain methods.

At most one network operation is in flight per controller. A second
``save``/``delete``/``open`` while one is pending returns ``False`` without
touching the store. Re-invoking ``open`` while an earlier ``open`` is still
pending is allowed: the newer request wins and the older response is
discarded when it arrives. Every intent returns ``True`` when it was applied.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, Optional

from ethernote.config import NOTE_COLUMNS, NOTES_TABLE, PLACEHOLDER_TITLE
from ethernote.controllers.base import Observable
from ethernote.errors import StoreError, ValidationError
from ethernote.models import EditSession, Mode, Note, NoteSnapshot
from ethernote.time_utils import now_iso

__all__ = ["NoteLifecycleController"]

logger = logging.getLogger(__name__)


class NoteLifecycleController(Observable):
    def __init__(
        self,
        store: Any,
        *,
        collection: str = NOTES_TABLE,
        clock: Callable[[], str] = now_iso,
    ) -> None:
        super().__init__()
        self._store = store
        self._collection = collection
        self._clock = clock

        self._mode = Mode.LOADING
        self._note_id: Optional[str] = None
        self._persisted: Optional[Note] = None
        self._session: Optional[EditSession] = None
        self._last_error: Optional[Exception] = None

        self._inflight: Optional[str] = None
        # Epoch the in-flight request was started in; close() leaves it pending.
        self._inflight_epoch = 0
        # Bumped by open() and close(); responses tagged with an older epoch are stale.
        self._epoch = 0

    @classmethod
    def for_new_note(
        cls, store: Any, note: Optional[Note] = None, **kwargs: Any
    ) -> "NoteLifecycleController":
        """Start a session for a note that has never been saved by the user.

        ``note`` is the placeholder row already inserted by the list, if any.
        Without it the first successful ``save`` inserts the row instead.
        """
        ctrl = cls(store, **kwargs)
        placeholder = note or Note(id=None, title=PLACEHOLDER_TITLE)
        ctrl._note_id = placeholder.id
        ctrl._persisted = placeholder
        ctrl._session = EditSession(
            title=placeholder.title or PLACEHOLDER_TITLE, content="", is_new=True
        )
        ctrl._mode = Mode.EDITING
        return ctrl

    # ------------------------------------------------------------------ state

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def note_id(self) -> Optional[str]:
        return self._note_id

    @property
    def is_busy(self) -> bool:
        return self._inflight is not None

    @property
    def is_closed(self) -> bool:
        return self._mode is Mode.CLOSED

    def snapshot(self) -> NoteSnapshot:
        session = self._session
        return NoteSnapshot(
            mode=self._mode,
            note=self._persisted,
            title=session.title if session else None,
            content=session.content if session else None,
            last_error=self._last_error,
            is_busy=self.is_busy,
            is_new=session.is_new if session else False,
        )

    # ---------------------------------------------------------------- network

    async def open(self, note_id: str) -> bool:
        """Fetch ``note_id`` and show it; supersedes any pending open."""
        if not note_id:
            raise ValueError("note_id is required")
        if self._inflight in ("save", "delete"):
            logger.debug("open(%s) rejected: %s in flight", note_id, self._inflight)
            return False

        self._epoch += 1
        epoch = self._epoch
        self._inflight = "open"
        self._inflight_epoch = epoch
        self._note_id = note_id
        self._persisted = None
        self._session = None
        self._last_error = None
        self._mode = Mode.LOADING
        self._notify()

        try:
            row = await self._store.get(self._collection, note_id, columns=NOTE_COLUMNS)
        except StoreError as exc:
            return self._fail(epoch, "open", exc, Mode.LOAD_ERROR)
        except BaseException:
            self._abort(epoch, Mode.LOAD_ERROR)
            raise

        if not self._is_current(epoch, "open"):
            return False
        note = Note.from_row(row)
        self._inflight = None
        self._persisted = note
        self._session = EditSession.from_note(note)
        self._mode = Mode.VIEWING
        self._notify()
        return True

    async def save(self) -> bool:
        if self._mode is not Mode.EDITING or self._inflight is not None:
            logger.debug("save() rejected in mode %s", self._mode.value)
            return False

        session = self._session
        if session is None:
            return False
        title = session.title.strip()
        content = session.content.strip()
        if not title:
            self._last_error = ValidationError("Title cannot be empty")
            self._notify()
            return False

        updated_at = self._clock()
        fields: Dict[str, Any] = {
            "title": title,
            "content": content,
            "updated_at": updated_at,
        }

        epoch = self._epoch
        self._inflight = "save"
        self._inflight_epoch = epoch
        self._last_error = None
        self._mode = Mode.SAVING
        self._notify()

        try:
            if self._note_id is None:
                row = await self._store.insert(
                    self._collection, {**fields, "created_at": updated_at}
                )
                saved = Note.from_row(row)
            else:
                await self._store.update(self._collection, self._note_id, fields)
                base = self._persisted or Note(id=self._note_id, title=title)
                saved = replace(base, title=title, content=content, updated_at=updated_at)
        except StoreError as exc:
            return self._fail(epoch, "save", exc, Mode.EDITING)
        except BaseException:
            self._abort(epoch, Mode.EDITING)
            raise

        if not self._is_current(epoch, "save"):
            return False
        self._inflight = None
        self._note_id = saved.id
        self._persisted = saved
        self._session = EditSession.from_note(saved)
        self._mode = Mode.VIEWING
        self._notify()
        return True

    async def delete(self) -> bool:
        """Delete the note. Confirmation is the caller's job."""
        if self._mode not in (Mode.VIEWING, Mode.EDITING) or self._inflight is not None:
            logger.debug("delete() rejected in mode %s", self._mode.value)
            return False
        if self._note_id is None:
            # Never reached the store; nothing to delete remotely.
            self.close()
            return True

        prior = self._mode
        epoch = self._epoch
        self._inflight = "delete"
        self._inflight_epoch = epoch
        self._last_error = None
        self._mode = Mode.DELETING
        self._notify()

        try:
            await self._store.delete(self._collection, self._note_id)
        except StoreError as exc:
            return self._fail(epoch, "delete", exc, prior)
        except BaseException:
            self._abort(epoch, prior)
            raise

        if not self._is_current(epoch, "delete"):
            return False
        self._inflight = None
        self._persisted = None
        self._session = None
        self._mode = Mode.CLOSED
        self._notify()
        return True

    # ------------------------------------------------------------------ local

    def begin_edit(self) -> bool:
        if self._mode is not Mode.VIEWING or self._persisted is None:
            return False
        self._session = EditSession.from_note(self._persisted)
        self._last_error = None
        self._mode = Mode.EDITING
        self._notify()
        return True

    def update_title(self, text: str) -> bool:
        if self._mode is not Mode.EDITING or self._session is None:
            return False
        self._session.title = text
        self._notify()
        return True

    def update_content(self, text: str) -> bool:
        if self._mode is not Mode.EDITING or self._session is None:
            return False
        self._session.content = text
        self._notify()
        return True

    def cancel_edit(self) -> bool:
        """Drop unsaved edits; a never-saved note has nothing to go back to."""
        if self._mode is not Mode.EDITING or self._session is None:
            return False
        if self._session.is_new or self._persisted is None:
            self.close()
            return True
        self._session = EditSession.from_note(self._persisted)
        self._last_error = None
        self._mode = Mode.VIEWING
        self._notify()
        return True

    def close(self) -> None:
        """Discard the session; late responses are ignored from here on.

        A request still in flight stays counted until it answers, so the
        instance never has two network calls running at once.
        """
        self._epoch += 1
        self._session = None
        self._persisted = None
        self._mode = Mode.CLOSED
        self._notify()

    # ---------------------------------------------------------------- helpers

    def _is_current(self, epoch: int, op: str) -> bool:
        if epoch == self._epoch:
            return True
        logger.debug("Discarding stale %s response for note %s", op, self._note_id)
        self._release(epoch)
        return False

    def _release(self, epoch: int) -> None:
        # A superseded open must not clear the flag of the open that replaced it.
        if self._inflight is not None and epoch == self._inflight_epoch:
            self._inflight = None
            self._notify()

    def _fail(self, epoch: int, op: str, exc: StoreError, mode: Mode) -> bool:
        if not self._is_current(epoch, op):
            return False
        logger.warning("Note %s: %s failed: %s", self._note_id, op, exc)
        self._inflight = None
        self._last_error = exc
        self._mode = mode
        self._notify()
        return False

    def _abort(self, epoch: int, mode: Mode) -> None:
        if epoch != self._epoch:
            self._release(epoch)
            return
        self._inflight = None
        self._mode = mode
        self._notify()
