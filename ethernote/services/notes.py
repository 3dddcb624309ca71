"""Remote store client for the notes table.

All direct Supabase interactions live here so the controllers stay focused on
state handling. The store is a thin async CRUD layer over one PostgREST
collection at a time: list, get, insert, update and delete, keyed by the
opaque ``id`` column. Every failure is re-raised as a
:class:`~ethernote.errors.StoreError` subclass carrying a readable message.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx
from postgrest.exceptions import APIError

from ethernote.errors import NetworkFailure, NotFoundError

__all__ = ["SupabaseStore", "ASCENDING", "DESCENDING"]

logger = logging.getLogger(__name__)

ASCENDING = "asc"
DESCENDING = "desc"

# PostgREST code for "JSON object requested, multiple (or no) rows returned".
_NO_ROWS_CODE = "PGRST116"


class SupabaseStore:
    """Async CRUD over Supabase tables. ``client`` is a ``supabase.AsyncClient``."""

    def __init__(self, client: Any):
        if client is None:
            raise RuntimeError("Supabase client not configured")
        self._client = client

    async def list(
        self,
        collection: str,
        order_by: str,
        direction: str = DESCENDING,
        *,
        columns: str = "*",
        filters: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """Return every row of ``collection`` ordered by ``order_by``."""
        if direction not in (ASCENDING, DESCENDING):
            raise ValueError(f"unknown sort direction: {direction!r}")

        query = (
            self._client.table(collection)
            .select(columns)
            .order(order_by, desc=direction == DESCENDING)
        )
        for column, value in (filters or {}).items():
            query = query.eq(column, value)

        response = await self._execute(query, f"list {collection}")
        return list(response.data or [])

    async def get(
        self, collection: str, record_id: str, *, columns: str = "*"
    ) -> Dict[str, Any]:
        if not record_id:
            raise ValueError("record_id is required")
        query = self._client.table(collection).select(columns).eq("id", record_id).limit(1)
        response = await self._execute(query, f"get {collection}/{record_id}")
        rows = response.data or []
        if not rows:
            raise NotFoundError(f"{collection}/{record_id} not found")
        return rows[0]

    async def insert(self, collection: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it with its server-assigned columns."""
        query = self._client.table(collection).insert(dict(fields))
        response = await self._execute(query, f"insert {collection}")
        rows = response.data or []
        if not rows:
            raise NetworkFailure(f"insert {collection}: Supabase did not return the created row")
        logger.info("Inserted %s/%s", collection, rows[0].get("id"))
        return rows[0]

    async def update(
        self, collection: str, record_id: str, fields: Mapping[str, Any]
    ) -> None:
        if not record_id:
            raise ValueError("record_id is required")
        query = self._client.table(collection).update(dict(fields)).eq("id", record_id)
        response = await self._execute(query, f"update {collection}/{record_id}")
        if not (response.data or []):
            raise NotFoundError(f"{collection}/{record_id} not found for update")
        logger.info("Updated %s/%s", collection, record_id)

    async def delete(self, collection: str, record_id: str) -> None:
        if not record_id:
            raise ValueError("record_id is required")
        query = self._client.table(collection).delete().eq("id", record_id)
        await self._execute(query, f"delete {collection}/{record_id}")
        logger.info("Deleted %s/%s", collection, record_id)

    async def _execute(self, query: Any, context: str) -> Any:
        try:
            return await query.execute()
        except APIError as exc:
            message = _format_api_error(context, exc)
            logger.warning("Supabase request failed: %s", message)
            if getattr(exc, "code", None) == _NO_ROWS_CODE:
                raise NotFoundError(message) from exc
            raise NetworkFailure(message) from exc
        except httpx.HTTPError as exc:
            logger.warning("Supabase request failed: %s: %s", context, exc)
            raise NetworkFailure(f"{context}: {exc}") from exc


def _format_api_error(context: str, exc: APIError) -> str:
    message = getattr(exc, "message", None) or str(exc)
    hint = getattr(exc, "hint", "")
    details = getattr(exc, "details", "")
    parts = [f"{context}: {message}"]
    if details:
        parts.append(str(details))
    if hint:
        parts.append(str(hint))
    return " | ".join(parts)
