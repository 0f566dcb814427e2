"""
Node.js Version Lifecycle Tool

Classify Node.js versions against the release schedule and filter them by
lifecycle phase (Current, Active LTS, Maintenance).
"""

__version__ = "0.1.0"

from .cli import main
from .errors import FetchError, LookupMissError, NodeVersionsError, NotReadyError
from .filters import Filters
from .models import VersionStatus
from .versions import NodeVersions

__all__ = [
    "main",
    "NodeVersions",
    "Filters",
    "VersionStatus",
    "NodeVersionsError",
    "NotReadyError",
    "FetchError",
    "LookupMissError",
]
