"""
Core data models for version lifecycle classification.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Dict, Optional


@dataclass(frozen=True)
class ScheduleEntry:
    """Dated phase boundaries of a significant release line."""

    start: datetime
    end: datetime
    lts: Optional[datetime] = None
    maintenance: Optional[datetime] = None
    codename: Optional[str] = None


@dataclass(frozen=True)
class ReleaseEntry:
    """An absolute release and the LTS line label it shipped under."""

    date: datetime
    lts: Optional[str] = None


@dataclass(frozen=True)
class AggregateState:
    """Latest-of-class significant identifiers for one schedule snapshot."""

    latest_current: Optional[str] = None
    latest_active: Optional[str] = None
    latest_maintenance: Optional[str] = None


@dataclass(frozen=True)
class ClassificationContext:
    """The clock value and aggregate snapshot a classification runs against."""

    now: datetime
    aggregates: Optional[AggregateState] = None


# Status keys in their fixed order, mapped to the upstream camelCase names.
STATUS_KEYS: Dict[str, str] = {
    "active": "active",
    "active_or_current": "activeOrCurrent",
    "current": "current",
    "esm": "esm",
    "latest_active": "latestActive",
    "latest_current": "latestCurrent",
    "latest_maintenance": "latestMaintenance",
    "lts": "lts",
    "maintained": "maintained",
    "maintained_or_lts": "maintainedOrLTS",
    "maintenance": "maintenance",
    "released": "released",
    "vercel": "vercel",
}


@dataclass(frozen=True)
class VersionStatus:
    """Snapshot of every lifecycle predicate for one identifier."""

    active: bool
    active_or_current: bool
    current: bool
    esm: bool
    latest_active: bool
    latest_current: bool
    latest_maintenance: bool
    lts: bool
    maintained: bool
    maintained_or_lts: bool
    maintenance: bool
    released: bool
    vercel: bool

    def to_dict(self, camel_case: bool = False) -> Dict[str, bool]:
        result = {}
        for item in fields(self):
            key = STATUS_KEYS[item.name] if camel_case else item.name
            result[key] = getattr(self, item.name)
        return result
