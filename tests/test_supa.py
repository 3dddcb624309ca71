import asyncio

import httpx
import pytest

from ethernote.utils import supa
from ethernote.utils.supa import SupabaseConfigError, SupabaseConnectionError


def test_missing_config_raises(monkeypatch):
    monkeypatch.setattr(supa, "st", None)
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)

    with pytest.raises(SupabaseConfigError):
        supa._read_supabase_config()  # pylint: disable=protected-access


def test_env_config_is_used(monkeypatch):
    monkeypatch.setattr(supa, "st", None)
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")

    cfg = supa._read_supabase_config()  # pylint: disable=protected-access
    assert cfg == {"url": "https://example.supabase.co", "anon_key": "anon-key"}


def test_create_supabase_client_http_status_error(monkeypatch):
    monkeypatch.setattr(supa, "st", None)
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")

    request = httpx.Request("GET", "https://example.supabase.co")
    response = httpx.Response(404, request=request, text="Not Found")

    async def _raise_http_status(*args, **kwargs):  # pragma: no cover - helper for test
        raise httpx.HTTPStatusError("not found", request=request, response=response)

    monkeypatch.setattr(supa, "acreate_client", _raise_http_status)

    with pytest.raises(SupabaseConfigError) as excinfo:
        asyncio.run(supa.create_supabase_client())

    assert "HTTP 404" in str(excinfo.value)


def test_create_supabase_client_connection_error(monkeypatch):
    monkeypatch.setattr(supa, "st", None)
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")

    async def _raise_connect(*args, **kwargs):  # pragma: no cover - helper for test
        raise httpx.ConnectError("unreachable")

    monkeypatch.setattr(supa, "acreate_client", _raise_connect)

    with pytest.raises(SupabaseConnectionError):
        asyncio.run(supa.create_supabase_client())
