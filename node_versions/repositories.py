"""
Load-once repositories for the Node.js release schedule and release list.
"""

from __future__ import annotations

import json
import logging
import threading
from concurrent.futures import Future
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

import requests

from .comparator import significant_version
from .errors import FetchError, LookupMissError, NotReadyError
from .interfaces import VersionData, VersionRepository
from .models import ReleaseEntry, ScheduleEntry
from .time_utils import parse_timestamp


logger = logging.getLogger(__name__)

DEFAULT_SCHEDULE_URL = "https://raw.githubusercontent.com/nodejs/Release/main/schedule.json"
DEFAULT_RELEASES_URL = "https://nodejs.org/dist/index.json"
DEFAULT_TIMEOUT = 30.0

T = TypeVar("T")
EntryT = TypeVar("EntryT")


class LoaderState(Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class CachedLoader(Generic[T]):
    """Run a fetch once and share its outcome with every caller.

    Callers arriving while a fetch is in flight wait on the same future
    instead of issuing another fetch. A failure leaves no data behind, so the
    next call to :meth:`load` tries again.
    """

    def __init__(self, source: str, fetch: Callable[[], T]) -> None:
        self.source = source
        self._fetch = fetch
        self._lock = threading.Lock()
        self._state = LoaderState.UNLOADED
        self._future: Optional[Future] = None
        self._data: Optional[T] = None
        self._error: Optional[FetchError] = None

    @property
    def state(self) -> LoaderState:
        return self._state

    @property
    def error(self) -> Optional[FetchError]:
        return self._error

    @property
    def data(self) -> Optional[T]:
        return self._data

    def load(self) -> T:
        with self._lock:
            if self._state is LoaderState.LOADED:
                logger.debug("Cache hit: %s", self.source)
                return self._data
            if self._state is LoaderState.LOADING:
                future = self._future
                owner = False
            else:
                future = Future()
                self._future = future
                self._state = LoaderState.LOADING
                owner = True

        if not owner:
            logger.debug("Waiting on in-flight load of %s", self.source)
            return future.result()

        try:
            data = self._fetch()
        except Exception as e:
            error = e if isinstance(e, FetchError) else FetchError(self.source, str(e))
            with self._lock:
                self._data = None
                self._error = error
                self._state = LoaderState.FAILED
            logger.warning("Failed to load %s: %s", self.source, e)
            future.set_exception(error)
            if error is e:
                raise
            raise error from e
        except BaseException as e:
            # Interrupted (KeyboardInterrupt, SystemExit): release waiters and allow a retry.
            with self._lock:
                self._data = None
                self._state = LoaderState.UNLOADED
            future.set_exception(e)
            raise

        with self._lock:
            self._data = data
            self._error = None
            self._state = LoaderState.LOADED
        future.set_result(data)
        return data


class _Repository(VersionRepository[EntryT]):
    """Shared fetch, cache and lookup behaviour for both repositories."""

    kind = "repository"

    def __init__(
        self,
        source: str,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
        fetcher: Optional[Callable[[], Any]] = None,
    ) -> None:
        self.source = str(source)
        self.session = session or requests.Session()
        self.timeout = timeout
        self._fetcher = fetcher or self._read_source
        self._loader: CachedLoader[Dict[str, EntryT]] = CachedLoader(self.source, self._load)

    @property
    def loaded(self) -> bool:
        return self._loader.state is LoaderState.LOADED

    @property
    def state(self) -> LoaderState:
        return self._loader.state

    def preload(self) -> Dict[str, EntryT]:
        return self._loader.load()

    def identifiers(self) -> List[str]:
        return list(self._entries())

    def lookup(self, identifier: str) -> EntryT:
        key = self._key(identifier)
        try:
            return self._entries()[key]
        except KeyError:
            raise LookupMissError(identifier, self.kind) from None

    def _key(self, identifier: str) -> str:
        return str(identifier).strip().lstrip("v")

    def _entries(self) -> Dict[str, EntryT]:
        if not self.loaded:
            raise NotReadyError(
                f"The {self.kind} has not been loaded; call preload() first"
            )
        return self._loader.data

    def _load(self) -> Dict[str, EntryT]:
        payload = self._fetcher()
        try:
            entries = self._parse(payload)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise FetchError(self.source, f"malformed {self.kind} payload: {e}") from e
        logger.info("Loaded %d %s entries from %s", len(entries), self.kind, self.source)
        return entries

    def _read_source(self) -> Any:
        if self.source.startswith(("http://", "https://")):
            logger.info("Fetching %s from %s", self.kind, self.source)
            try:
                with self.session.get(self.source, timeout=self.timeout) as response:
                    response.raise_for_status()
                    return response.json()
            except (requests.RequestException, ValueError) as e:
                raise FetchError(self.source, str(e)) from e

        path = Path(self.source)
        logger.info("Reading %s from %s", self.kind, path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise FetchError(self.source, str(e)) from e

    def _parse(self, payload: Any) -> Dict[str, EntryT]:
        raise NotImplementedError


class ScheduleRepository(_Repository[ScheduleEntry]):
    """Significant lines from the Node.js ``schedule.json``, in published order."""

    kind = "schedule"

    def __init__(self, source: str = DEFAULT_SCHEDULE_URL, **kwargs) -> None:
        super().__init__(source, **kwargs)

    def lookup(self, identifier: str) -> ScheduleEntry:
        return super().lookup(significant_version(identifier))

    def _parse(self, payload: Any) -> Dict[str, ScheduleEntry]:
        entries = {}
        for key, meta in payload.items():
            start = parse_timestamp(meta.get("start"))
            end = parse_timestamp(meta.get("end"))
            if start is None or end is None:
                raise ValueError(f"{key} is missing its start or end date")
            entries[self._key(key)] = ScheduleEntry(
                start=start,
                end=end,
                lts=parse_timestamp(meta.get("lts")),
                maintenance=parse_timestamp(meta.get("maintenance")),
                codename=meta.get("codename") or None,
            )
        return entries


class ReleaseRepository(_Repository[ReleaseEntry]):
    """Absolute releases from the Node.js ``dist/index.json``."""

    kind = "releases"

    def __init__(self, source: str = DEFAULT_RELEASES_URL, **kwargs) -> None:
        super().__init__(source, **kwargs)

    def _parse(self, payload: Any) -> Dict[str, ReleaseEntry]:
        entries = {}
        for item in payload:
            date = parse_timestamp(item.get("date"))
            if date is None:
                raise ValueError(f"{item.get('version')} is missing its release date")
            lts = item.get("lts")
            entries[self._key(item["version"])] = ReleaseEntry(
                date=date,
                lts=lts if isinstance(lts, str) and lts else None,
            )
        return entries


class RepositoryVersionData(VersionData):
    """Expose a schedule and a release repository as classifier data."""

    def __init__(
        self,
        schedule: VersionRepository[ScheduleEntry],
        releases: VersionRepository[ReleaseEntry],
    ) -> None:
        self.schedule = schedule
        self.releases = releases

    @property
    def ready(self) -> bool:
        return self.schedule.loaded and self.releases.loaded

    def preload(self) -> None:
        self.schedule.preload()
        self.releases.preload()

    def schedule_entry(self, identifier: str) -> ScheduleEntry:
        return self.schedule.lookup(identifier)

    def release_entry(self, identifier: str) -> ReleaseEntry:
        return self.releases.lookup(identifier)

    def schedule_identifiers(self) -> List[str]:
        return self.schedule.identifiers()

    def release_identifiers(self) -> List[str]:
        return self.releases.identifiers()
