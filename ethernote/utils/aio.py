"""Run coroutines on one long-lived background event loop.

Streamlit re-executes the page script on every interaction, and each run may
happen on a different thread. The async Supabase client keeps an HTTP
connection pool bound to the loop that created it, so every coroutine the
pages start is funnelled onto the same loop here.
"""
from __future__ import annotations

import asyncio
import threading
from typing import Awaitable, Optional, TypeVar

T = TypeVar("T")

_LOCK = threading.Lock()
_LOOP: Optional[asyncio.AbstractEventLoop] = None


def get_loop() -> asyncio.AbstractEventLoop:
    """Return the shared loop, starting its thread on first use."""
    global _LOOP
    with _LOCK:
        if _LOOP is None or _LOOP.is_closed():
            loop = asyncio.new_event_loop()
            thread = threading.Thread(
                target=loop.run_forever, name="ethernote-io", daemon=True
            )
            thread.start()
            _LOOP = loop
        return _LOOP


def run(coro: Awaitable[T], timeout: Optional[float] = None) -> T:
    """Block until ``coro`` finishes on the shared loop and return its result."""
    future = asyncio.run_coroutine_threadsafe(coro, get_loop())  # type: ignore[arg-type]
    return future.result(timeout)


__all__ = ["get_loop", "run"]
