"""
Lifecycle classification of Node.js versions against the release schedule.

Phases run Current > Active LTS > Maintenance > end of life. Every predicate
compares against the instant held by the :class:`ClassificationContext`, so
the same classifier answers consistently for the life of one context.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Dict, Optional

from .comparator import compare_versions, is_absolute_version
from .errors import NotReadyError
from .interfaces import VersionData
from .models import ClassificationContext, ScheduleEntry, STATUS_KEYS, VersionStatus


logger = logging.getLogger(__name__)

# Oldest line tracked by the schedule.
FIRST_TRACKED_VERSION = "0.8"
# Odd 0.x lines that were never released as stable.
UNTRACKED_VERSIONS = ("0.9", "0.11")
# Absolute releases from this line onwards carry an LTS label when eligible.
LTS_LABEL_VERSION = "1"
# First line with native ECMAScript module support.
ESM_VERSION = "12"
# https://vercel.com/docs/runtimes#official-runtimes/node-js/node-js-version
VERCEL_VERSIONS = ("10", "12", "14")


def _within(now: datetime, start: Optional[datetime], end: Optional[datetime]) -> bool:
    if start is None or end is None:
        return False
    return start <= now <= end


class LifecycleClassifier:
    """Answer lifecycle questions for significant and absolute identifiers."""

    def __init__(self, data: VersionData, context: ClassificationContext) -> None:
        self.data = data
        self.context = context

    @property
    def now(self) -> datetime:
        return self.context.now

    def _require_data(self, name: str) -> None:
        if not self.data.ready:
            raise NotReadyError(
                f"You must call preload() prior to using the [{name}] filter."
            )

    def schedule_entry_safe(self, identifier: str) -> Optional[ScheduleEntry]:
        """Schedule entry for the identifier's line, or ``None`` for untracked lines."""
        if compare_versions(identifier, FIRST_TRACKED_VERSION) < 0:
            return None
        for untracked in UNTRACKED_VERSIONS:
            if compare_versions(identifier, untracked) == 0:
                return None
        return self.data.schedule_entry(identifier)

    def _has_lts_label(self, identifier: str) -> bool:
        return self.data.release_entry(identifier).lts is not None

    def is_released(self, identifier: str) -> bool:
        """Has the version existed at some point?"""
        self._require_data("released")
        if is_absolute_version(identifier):
            date = self.data.release_entry(identifier).date
        else:
            meta = self.schedule_entry_safe(identifier)
            if meta is None:
                return False
            date = meta.start
        return self.now >= date

    def is_current(self, identifier: str) -> bool:
        """Is the version in its Current phase, before any LTS or maintenance cutover?"""
        self._require_data("current")
        meta = self.schedule_entry_safe(identifier)
        if meta is None:
            return False
        return _within(self.now, meta.start, meta.lts or meta.maintenance or meta.end)

    def is_active_or_current(self, identifier: str) -> bool:
        """Is the version Current or Active LTS, i.e. not in maintenance nor end of life?"""
        self._require_data("activeOrCurrent")
        meta = self.schedule_entry_safe(identifier)
        if meta is None:
            return False
        return _within(self.now, meta.start, meta.maintenance or meta.end)

    def is_active(self, identifier: str) -> bool:
        """Is the version an Active LTS release?

        Absolute releases additionally need to have shipped under an LTS label.
        """
        self._require_data("active")
        if is_absolute_version(identifier) and not self._has_lts_label(identifier):
            return False
        meta = self.schedule_entry_safe(identifier)
        if meta is None:
            return False
        return _within(self.now, meta.lts, meta.maintenance or meta.end)

    def is_maintenance(self, identifier: str) -> bool:
        """Is the version in Maintenance, receiving critical and security fixes only?"""
        self._require_data("maintenance")
        meta = self.schedule_entry_safe(identifier)
        if meta is None:
            return False
        return _within(self.now, meta.maintenance, meta.end)

    def is_maintained(self, identifier: str) -> bool:
        """Current, Active or Maintenance."""
        self._require_data("maintained")
        meta = self.schedule_entry_safe(identifier)
        if meta is None:
            return False
        return _within(self.now, meta.start, meta.end)

    def is_lts(self, identifier: str) -> bool:
        """Is the version an LTS release? Tolerates unreleased versions.

        The historical 0.8, 0.10 and 0.12 lines count as LTS, identified by
        having neither an ``lts`` nor a ``maintenance`` date.
        """
        self._require_data("lts")
        if (
            is_absolute_version(identifier)
            and compare_versions(identifier, LTS_LABEL_VERSION) >= 0
            and not self._has_lts_label(identifier)
        ):
            return False
        meta = self.schedule_entry_safe(identifier)
        if meta is None:
            return False
        return meta.lts is not None or meta.maintenance is None

    def is_maintained_or_lts(self, identifier: str) -> bool:
        """Is the version maintained, or a released historical LTS? Excludes unreleased versions."""
        self._require_data("maintainedOrLTS")
        meta = self.schedule_entry_safe(identifier)
        if meta is None:
            return False
        if self.now < meta.start:
            return False
        if self.now <= meta.end:
            return True
        return meta.lts is not None or meta.maintenance is None

    def is_esm(self, identifier: str) -> bool:
        """Does the version natively support ECMAScript modules?"""
        return compare_versions(identifier, ESM_VERSION) >= 0

    def is_vercel(self, identifier: str) -> bool:
        """Is the version one of the Node.js runtimes Vercel offers?"""
        return any(compare_versions(identifier, seek) == 0 for seek in VERCEL_VERSIONS)

    def _latest(self, name: str, field: str, identifier: str) -> bool:
        aggregates = self.context.aggregates
        if aggregates is None:
            raise NotReadyError(
                f"You must call preload() prior to using the [{name}] filter."
            )
        latest = getattr(aggregates, field)
        if latest is None:
            return False
        return compare_versions(identifier, latest) == 0

    def is_latest_active(self, identifier: str) -> bool:
        """Is the version the newest line in Active LTS?"""
        return self._latest("latestActive", "latest_active", identifier)

    def is_latest_current(self, identifier: str) -> bool:
        """Is the version the newest line in Current?"""
        return self._latest("latestCurrent", "latest_current", identifier)

    def is_latest_maintenance(self, identifier: str) -> bool:
        """Is the version the newest line in Maintenance?"""
        return self._latest("latestMaintenance", "latest_maintenance", identifier)

    def predicates(self) -> Dict[str, Callable[[str], bool]]:
        """Bound predicates keyed by status name, in status order."""
        return {name: getattr(self, f"is_{name}") for name in STATUS_KEYS}

    def predicate(self, name: str) -> Callable[[str], bool]:
        if name not in STATUS_KEYS:
            raise ValueError(f"Unknown lifecycle predicate: {name}")
        return getattr(self, f"is_{name}")

    def get_status(self, identifier: str) -> VersionStatus:
        """Every lifecycle predicate for the identifier, in a fixed key order."""
        status = {name: check(identifier) for name, check in self.predicates().items()}
        logger.debug("Status of %s at %s: %s", identifier, self.now.date(), status)
        return VersionStatus(**status)
