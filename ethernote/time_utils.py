"""Timestamp helpers shared by the store, controllers and pages."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from zoneinfo import ZoneInfo

UTC = ZoneInfo("UTC")


def parse_iso(value: str | datetime | None) -> Optional[datetime]:
    """Parse a PostgREST timestamp (tolerates ``Z`` suffix and naive values)."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def to_tz(dt_iso: str | datetime, tz: str) -> datetime:
    """Parse ISO timestamp and convert to timezone ``tz`` (IANA name)."""

    dt = parse_iso(dt_iso)
    if dt is None:
        raise ValueError("timestamp is required")
    return dt.astimezone(ZoneInfo(tz))


def utc_iso(dt: datetime | None) -> str | None:
    """Return an ISO 8601 string in UTC for ``dt`` (tolerates naive input)."""

    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat()


def now_iso() -> str:
    """Fresh UTC timestamp used for ``created_at`` / ``updated_at``."""

    return utc_iso(datetime.now(UTC))  # type: ignore[return-value]


__all__ = ["UTC", "parse_iso", "to_tz", "utc_iso", "now_iso"]
