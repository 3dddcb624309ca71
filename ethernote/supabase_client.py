"""Supabase client and note store for the Streamlit pages."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

try:
    import streamlit as st
except Exception:  # pragma: no cover - allow headless usage (tests / CLI)
    st = None

from ethernote.services.notes import SupabaseStore
from ethernote.utils.aio import run
from ethernote.utils.supa import SupabaseConfigError, create_supabase_client

__all__ = ["get_client", "get_store"]


if st is not None:

    @st.cache_resource  # type: ignore[misc]
    def _cached_client() -> Any:
        """One async client per process, created on the shared event loop."""
        return run(create_supabase_client())

else:

    @lru_cache(maxsize=1)
    def _cached_client() -> Any:
        """Fallback cached client when Streamlit is unavailable."""
        return run(create_supabase_client())


def get_client() -> Any:
    """Return the shared Supabase client, stopping the page when unconfigured."""
    try:
        return _cached_client()
    except SupabaseConfigError as exc:
        if st is not None:
            st.error(str(exc))
            st.stop()
        raise


def get_store() -> SupabaseStore:
    return SupabaseStore(get_client())
