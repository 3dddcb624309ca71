"""Shared fixtures: an in-memory async store with controllable timing."""

from __future__ import annotations

import asyncio
import itertools
from typing import Any, Dict, List, Optional

import pytest


class FakeStore:
    """Async stand-in for :class:`ethernote.services.notes.SupabaseStore`.

    ``gates`` holds ``asyncio.Event`` objects keyed by ``op`` or ``(op, id)``;
    a call waits on its gate before answering. ``failures`` maps an op name to
    the exception every call of that op raises.
    """

    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None):
        self.rows: Dict[str, Dict[str, Any]] = {r["id"]: dict(r) for r in rows or []}
        self.calls: List[tuple] = []
        self.gates: Dict[Any, asyncio.Event] = {}
        self.failures: Dict[str, Exception] = {}
        self.get_columns: List[str] = []
        self._ids = itertools.count(1)

    def ops(self, name: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == name]

    async def _enter(self, op: str, record_id: Any = None) -> None:
        gate = self.gates.get((op, record_id)) or self.gates.get(op)
        if gate is not None:
            await gate.wait()
        exc = self.failures.get(op)
        if exc is not None:
            raise exc

    async def list(self, collection, order_by, direction="desc", *, columns="*", filters=None):
        self.calls.append(("list", collection, order_by, direction, columns))
        await self._enter("list")
        rows = sorted(
            self.rows.values(),
            key=lambda r: r.get(order_by) or "",
            reverse=direction == "desc",
        )
        return [dict(r) for r in rows]

    async def get(self, collection, record_id, *, columns="*"):
        from ethernote.errors import NotFoundError

        self.calls.append(("get", collection, record_id))
        self.get_columns.append(columns)
        await self._enter("get", record_id)
        if record_id not in self.rows:
            raise NotFoundError(f"{collection}/{record_id} not found")
        return dict(self.rows[record_id])

    async def insert(self, collection, fields):
        self.calls.append(("insert", collection, dict(fields)))
        await self._enter("insert")
        row = {"id": f"new-{next(self._ids)}", **fields}
        row.setdefault("created_at", "2024-01-01T00:00:00+00:00")
        self.rows[row["id"]] = row
        return dict(row)

    async def update(self, collection, record_id, fields):
        from ethernote.errors import NotFoundError

        self.calls.append(("update", collection, record_id, dict(fields)))
        await self._enter("update", record_id)
        if record_id not in self.rows:
            raise NotFoundError(f"{collection}/{record_id} not found for update")
        self.rows[record_id].update(fields)

    async def delete(self, collection, record_id):
        self.calls.append(("delete", collection, record_id))
        await self._enter("delete", record_id)
        self.rows.pop(record_id, None)


GROCERIES = {
    "id": "n1",
    "title": "Groceries",
    "content": "Milk",
    "created_at": "2024-03-01T10:00:00+00:00",
    "updated_at": "2024-03-01T10:00:00+00:00",
}
TRIP = {
    "id": "n2",
    "title": "Trip",
    "content": "Pack bags",
    "created_at": "2024-03-02T09:30:00+00:00",
    "updated_at": "2024-03-02T09:30:00+00:00",
}

FIXED_NOW = "2024-05-05T12:00:00+00:00"


def fixed_clock() -> str:
    return FIXED_NOW


@pytest.fixture
def store() -> FakeStore:
    return FakeStore([GROCERIES, TRIP])
