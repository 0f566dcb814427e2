"""Errors raised by the version lifecycle engine."""

from __future__ import annotations

from typing import Optional


class NodeVersionsError(RuntimeError):
    """Base class for node-versions failures."""


class NotReadyError(NodeVersionsError):
    """Raised when a query needs data that has not been preloaded yet."""


class FetchError(NodeVersionsError):
    """Raised when a repository source cannot be retrieved or decoded."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"Failed to load {source}: {message}")
        self.source = source


class LookupMissError(NodeVersionsError, LookupError):
    """Raised when an identifier is absent from a loaded repository."""

    def __init__(self, identifier: str, source: Optional[str] = None) -> None:
        where = f" in {source}" if source else ""
        super().__init__(f"Version {identifier!r} was not found{where}")
        self.identifier = identifier
        self.source = source
