"""Collection view: the list of note summaries and the "New" action."""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Tuple

from ethernote.config import (
    LIST_ORDER_COLUMN,
    NOTES_TABLE,
    PLACEHOLDER_TITLE,
    SUMMARY_COLUMNS,
)
from ethernote.controllers.base import Observable
from ethernote.controllers.note_lifecycle import NoteLifecycleController
from ethernote.errors import StoreError
from ethernote.models import ListSnapshot, Note, NoteSummary
from ethernote.services.notes import DESCENDING
from ethernote.time_utils import now_iso

__all__ = ["NoteListController"]

logger = logging.getLogger(__name__)


class NoteListController(Observable):
    """Holds the latest fetched summaries, newest first.

    The list is only ever replaced wholesale by a successful fetch. A failed
    fetch keeps whatever was shown before (nothing, on the first load) and
    records ``last_error``. When several fetches overlap, only the latest one
    is applied.
    """

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

        self._summaries: Tuple[NoteSummary, ...] = ()
        self._has_loaded = False
        self._last_error: Optional[Exception] = None
        self._is_loading = False
        self._is_refreshing = False
        self._is_creating = False
        self._fetch_epoch = 0

    @property
    def summaries(self) -> Tuple[NoteSummary, ...]:
        return self._summaries

    def snapshot(self) -> ListSnapshot:
        return ListSnapshot(
            summaries=self._summaries,
            is_loading=self._is_loading,
            is_refreshing=self._is_refreshing,
            is_creating=self._is_creating,
            has_loaded=self._has_loaded,
            last_error=self._last_error,
        )

    async def load_all(self) -> bool:
        return await self._fetch(refreshing=False)

    async def refresh(self) -> bool:
        """Like :meth:`load_all`, flagged as a pull-to-refresh."""
        return await self._fetch(refreshing=True)

    async def on_visible(self) -> bool:
        """The list is shown again (e.g. back from a note): re-fetch everything."""
        return await self.load_all()

    async def create_and_open(self) -> Optional[NoteLifecycleController]:
        """Insert a placeholder note and return a controller editing it.

        Returns ``None`` when the insert fails or another create is pending.
        """
        if self._is_creating:
            logger.debug("create_and_open() rejected: insert already in flight")
            return None

        self._is_creating = True
        self._last_error = None
        self._notify()

        fields = {
            "title": PLACEHOLDER_TITLE,
            "content": "",
            "created_at": self._clock(),
        }
        try:
            row = await self._store.insert(self._collection, fields)
        except StoreError as exc:
            logger.warning("Creating a note failed: %s", exc)
            self._is_creating = False
            self._last_error = exc
            self._notify()
            return None
        except BaseException:
            self._is_creating = False
            self._notify()
            raise

        self._is_creating = False
        self._notify()
        note = Note.from_row(row)
        logger.info("Created note %s", note.id)
        return NoteLifecycleController.for_new_note(
            self._store, note, collection=self._collection, clock=self._clock
        )

    async def open_note(self, note_id: str) -> NoteLifecycleController:
        """Hand an existing note to a fresh controller and load it.

        The controller is returned whatever the fetch outcome; a failed load
        leaves it in ``load_error`` for the detail view to render.
        """
        ctrl = NoteLifecycleController(
            self._store, collection=self._collection, clock=self._clock
        )
        await ctrl.open(note_id)
        return ctrl

    async def _fetch(self, *, refreshing: bool) -> bool:
        self._fetch_epoch += 1
        epoch = self._fetch_epoch
        self._is_loading = not refreshing
        self._is_refreshing = refreshing
        self._last_error = None
        self._notify()

        try:
            rows = await self._store.list(
                self._collection,
                LIST_ORDER_COLUMN,
                DESCENDING,
                columns=SUMMARY_COLUMNS,
            )
        except StoreError as exc:
            if epoch != self._fetch_epoch:
                return False
            logger.warning("Loading notes failed: %s", exc)
            self._is_loading = self._is_refreshing = False
            self._last_error = exc
            self._notify()
            return False
        except BaseException:
            if epoch == self._fetch_epoch:
                self._is_loading = self._is_refreshing = False
                self._notify()
            raise

        if epoch != self._fetch_epoch:
            logger.debug("Discarding stale notes list response")
            return False
        self._summaries = tuple(NoteSummary.from_row(row) for row in rows)
        self._has_loaded = True
        self._is_loading = self._is_refreshing = False
        self._notify()
        return True
