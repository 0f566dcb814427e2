"""
Entry point tying repositories, clock, aggregates and filters together.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Any, Callable, Iterable, List, Optional

import requests

from .aggregates import resolve_aggregates
from .classifier import LifecycleClassifier
from .comparator import is_absolute_version
from .editions import edition_order, es_version_for_date
from .errors import NotReadyError
from .filters import admits, filter_versions
from .models import AggregateState, ClassificationContext, VersionStatus
from .repositories import (
    DEFAULT_RELEASES_URL,
    DEFAULT_SCHEDULE_URL,
    DEFAULT_TIMEOUT,
    ReleaseRepository,
    RepositoryVersionData,
    ScheduleRepository,
)
from .time_utils import Instant, ReferenceClock


logger = logging.getLogger(__name__)


class NodeVersions:
    """Classify and filter Node.js versions against the release schedule."""

    def __init__(
        self,
        schedule_source: str = DEFAULT_SCHEDULE_URL,
        releases_source: str = DEFAULT_RELEASES_URL,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
        now: Optional[Instant] = None,
        schedule_fetcher: Optional[Callable[[], Any]] = None,
        releases_fetcher: Optional[Callable[[], Any]] = None,
    ):
        """Initialize the version catalogue.

        Args:
            schedule_source: URL or file path of the release schedule JSON
            releases_source: URL or file path of the release index JSON
            session: HTTP session shared by both repositories
            timeout: HTTP timeout in seconds
            now: Reference instant, defaults to the current time
            schedule_fetcher: Replaces retrieval of the schedule payload
            releases_fetcher: Replaces retrieval of the release index payload
        """
        self.session = session or requests.Session()
        self.schedule = ScheduleRepository(
            schedule_source, session=self.session, timeout=timeout, fetcher=schedule_fetcher
        )
        self.releases = ReleaseRepository(
            releases_source, session=self.session, timeout=timeout, fetcher=releases_fetcher
        )
        self.data = RepositoryVersionData(self.schedule, self.releases)
        self.clock = ReferenceClock(now)
        self._lock = threading.Lock()
        self._aggregates: Optional[AggregateState] = None

    def now(self) -> datetime:
        return self.clock.now()

    def set_clock(self, when: Instant) -> datetime:
        """Pin the instant comparisons are made against.

        The latest-of-class aggregates keep their previous value until the
        next :meth:`preload`.
        """
        return self.clock.set(when)

    @property
    def aggregates(self) -> Optional[AggregateState]:
        return self._aggregates

    @property
    def context(self) -> ClassificationContext:
        return ClassificationContext(now=self.clock.now(), aggregates=self._aggregates)

    def preload(self) -> "NodeVersions":
        """Load both repositories once and resolve the latest-of-class aggregates."""
        self.data.preload()
        classifier = LifecycleClassifier(self.data, ClassificationContext(now=self.clock.now()))
        aggregates = resolve_aggregates(self.data.schedule_identifiers(), classifier)
        with self._lock:
            self._aggregates = aggregates
        logger.info(
            "Preloaded %d lines and %d releases",
            len(self.data.schedule_identifiers()),
            len(self.data.release_identifiers()),
        )
        return self

    def fetch_versions(self) -> List[str]:
        """Preload and return every significant version, oldest first."""
        self.preload()
        return self.data.schedule_identifiers()

    def classifier(self) -> LifecycleClassifier:
        return LifecycleClassifier(self.data, self.context)

    def classify(self, identifier: str) -> VersionStatus:
        return self.classifier().get_status(identifier)

    def admits(self, identifier: str, filters: Any) -> bool:
        return admits(self.classifier(), identifier, filters)

    def filter(self, identifiers: Iterable[str], filters: Any) -> List[str]:
        return filter_versions(self.classifier(), list(identifiers), filters)

    def _require_preloaded(self, name: str) -> None:
        if not self.data.ready or self._aggregates is None:
            raise NotReadyError(f"You must call preload() prior to using [{name}].")

    def filter_significant(self, filters: Any) -> List[str]:
        """Filter the significant versions from the schedule."""
        self._require_preloaded("filter_significant")
        return self.filter(self.data.schedule_identifiers(), filters)

    def filter_absolute(self, filters: Any) -> List[str]:
        """Filter the absolute versions from the release index."""
        self._require_preloaded("filter_absolute")
        return self.filter(self.data.release_identifiers(), filters)

    def release_date(self, identifier: str) -> Optional[datetime]:
        """Release date of an absolute version, or schedule start of a line."""
        self._require_preloaded("release_date")
        if is_absolute_version(identifier):
            return self.data.release_entry(identifier).date
        meta = self.classifier().schedule_entry_safe(identifier)
        return meta.start if meta is not None else None

    def es_version_for(self, identifier: str) -> Optional[str]:
        """The ECMAScript edition ratified when the version was released."""
        date = self.release_date(identifier)
        if date is None:
            return None
        return es_version_for_date(date)

    def es_versions_for(self, identifiers: Iterable[str]) -> List[str]:
        """Unique ECMAScript editions for the versions, oldest edition first."""
        labels = {self.es_version_for(identifier) for identifier in identifiers}
        labels.discard(None)
        return sorted(labels, key=edition_order)
