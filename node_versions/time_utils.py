"""
Shared datetime helpers and the reference clock.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Union


Instant = Union[datetime, str]


def ensure_utc(dt: datetime) -> datetime:
    """Return a timezone-aware UTC datetime."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp or date and normalize it to UTC."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return ensure_utc(parsed)


def to_instant(value: Instant) -> datetime:
    """Coerce a datetime or ISO string into an aware UTC datetime."""
    if isinstance(value, datetime):
        return ensure_utc(value)
    parsed = parse_timestamp(value)
    if parsed is None:
        raise ValueError(f"Invalid instant: {value!r}")
    return parsed


class ReferenceClock:
    """The instant every lifecycle comparison is made against.

    Defaults to the wall-clock time at construction and only changes through
    :meth:`set`, which lets tests and long-running servers pin "now".
    """

    def __init__(self, when: Optional[Instant] = None) -> None:
        self._now = to_instant(when) if when is not None else datetime.now(timezone.utc)

    def now(self) -> datetime:
        return self._now

    def set(self, when: Instant) -> datetime:
        instant = to_instant(when)
        self._now = instant
        return instant
