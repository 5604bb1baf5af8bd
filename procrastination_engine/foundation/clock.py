"""Timezone-aware clock utilities.

All instants handled by the engine are UTC-aware.  Components that need
"now" accept a ``Clock`` callable and default to :func:`utc_now`, so tests
can pass a frozen instant instead of patching.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Callable
from zoneinfo import ZoneInfo

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Attach UTC to a naive datetime; aware values pass through."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def fixed_clock(instant: datetime) -> Clock:
    """Return a clock that always reports *instant*."""
    frozen = ensure_aware(instant)
    return lambda: frozen


def resolve_timezone(name: str) -> tzinfo:
    """Map a zone name to a tzinfo; "UTC" needs no tz database."""
    if name.upper() in ("UTC", "Z"):
        return timezone.utc
    return ZoneInfo(name)
