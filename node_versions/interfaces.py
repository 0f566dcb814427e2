"""
Interfaces for version repositories and the data the classifier consumes.
"""

from __future__ import annotations

from typing import Dict, List, Protocol, TypeVar

from .models import ReleaseEntry, ScheduleEntry


EntryT = TypeVar("EntryT")


class VersionRepository(Protocol[EntryT]):
    """A load-once mapping from version identifier to dated metadata."""

    source: str

    @property
    def loaded(self) -> bool:
        ...

    def preload(self) -> Dict[str, EntryT]:
        ...

    def identifiers(self) -> List[str]:
        ...

    def lookup(self, identifier: str) -> EntryT:
        ...


class VersionData(Protocol):
    """Schedule and release metadata access for lifecycle classification."""

    @property
    def ready(self) -> bool:
        ...

    def schedule_entry(self, identifier: str) -> ScheduleEntry:
        ...

    def release_entry(self, identifier: str) -> ReleaseEntry:
        ...

    def schedule_identifiers(self) -> List[str]:
        ...

    def release_identifiers(self) -> List[str]:
        ...
