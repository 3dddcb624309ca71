from __future__ import annotations
from typing import Dict
import logging
import os

import httpx

try:
    import streamlit as st
except Exception:  # pragma: no cover - allow headless usage (tests / CLI)
    st = None

from supabase import AsyncClient, AsyncClientOptions, SupabaseException, acreate_client

from ethernote.config import HTTP_CONNECT_TIMEOUT_SECONDS, HTTP_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class SupabaseConfigError(RuntimeError):
    """Raised when Supabase credentials are missing from secrets or env."""


class SupabaseConnectionError(RuntimeError):
    """Raised when the client cannot reach Supabase within the timeout window."""


_MISSING_CONFIG_MSG = (
    "Supabase secrets missing. Add `[supabase].url` and `[supabase].anon_key` to "
    "`.streamlit/secrets.toml` or set SUPABASE_URL and SUPABASE_ANON_KEY environment "
    "variables."
)


def _read_supabase_config() -> Dict[str, str]:
    """
    Prefer Streamlit secrets:
      st.secrets["supabase"]["url"]
      st.secrets["supabase"]["anon_key"]

    Fallback to env:
      SUPABASE_URL
      SUPABASE_ANON_KEY
    """
    url = None
    key = None

    if st is not None:
        try:
            url = st.secrets["supabase"]["url"]
            key = st.secrets["supabase"]["anon_key"]
        except Exception:
            # No secrets.toml (or no [supabase] table): env vars are the fallback.
            logger.debug("Supabase secrets unavailable, falling back to environment")

    url = url or os.getenv("SUPABASE_URL")
    key = key or os.getenv("SUPABASE_ANON_KEY")

    if not url or not key:
        raise SupabaseConfigError(_MISSING_CONFIG_MSG)

    return {"url": url, "anon_key": key}


def _build_client_options() -> AsyncClientOptions:
    """Return Supabase client options with tighter HTTP timeouts."""

    timeout = httpx.Timeout(HTTP_TIMEOUT_SECONDS, connect=HTTP_CONNECT_TIMEOUT_SECONDS)
    return AsyncClientOptions(
        httpx_client=httpx.AsyncClient(timeout=timeout),
        postgrest_client_timeout=timeout,
        storage_client_timeout=timeout,
        function_client_timeout=timeout,
    )


async def _close_options_client(options: AsyncClientOptions) -> None:
    client = getattr(options, "httpx_client", None)
    if client is not None:
        await client.aclose()


async def create_supabase_client() -> AsyncClient:
    """Build an async Supabase client, mapping failures to config/connection errors."""
    cfg = _read_supabase_config()
    options = _build_client_options()
    try:
        return await acreate_client(cfg["url"], cfg["anon_key"], options=options)
    except SupabaseException as exc:
        await _close_options_client(options)
        raise SupabaseConfigError(str(exc) or _MISSING_CONFIG_MSG) from exc
    except httpx.HTTPStatusError as exc:
        await _close_options_client(options)
        status = exc.response.status_code if exc.response is not None else "unknown"
        body = exc.response.text if exc.response is not None else ""
        if body:
            preview = body.strip().replace("\n", " ")[:200]
            logger.warning("Supabase client HTTP error: %s -> %s", status, preview)
        else:
            logger.warning("Supabase client HTTP error: %s -> %s", status, exc)
        raise SupabaseConfigError(
            "Supabase responded with HTTP "
            f"{status}. Verify the Supabase URL/anon key in your Streamlit secrets or environment."
        ) from exc
    except httpx.HTTPError as exc:
        await _close_options_client(options)
        logger.warning("Supabase client connection failed: %s", exc)
        raise SupabaseConnectionError(
            "Unable to reach Supabase right now. Check your internet connection and try again."
        ) from exc


__all__ = [
    "create_supabase_client",
    "SupabaseConfigError",
    "SupabaseConnectionError",
]
