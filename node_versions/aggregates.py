"""
Latest-of-class resolution across the whole release schedule.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .classifier import LifecycleClassifier
from .models import AggregateState


logger = logging.getLogger(__name__)


def resolve_aggregates(
    identifiers: Iterable[str], classifier: LifecycleClassifier
) -> AggregateState:
    """Find the last Current, Active and Maintenance lines in schedule order.

    The last match by position wins, not the highest by comparison, so the
    identifiers must be supplied in publication order (oldest line first).
    """
    latest_current = latest_active = latest_maintenance = None
    for identifier in identifiers:
        if classifier.is_current(identifier):
            latest_current = identifier
        if classifier.is_active(identifier):
            latest_active = identifier
        if classifier.is_maintenance(identifier):
            latest_maintenance = identifier

    state = AggregateState(
        latest_current=latest_current,
        latest_active=latest_active,
        latest_maintenance=latest_maintenance,
    )
    logger.debug(
        "Resolved latest current=%s active=%s maintenance=%s",
        latest_current,
        latest_active,
        latest_maintenance,
    )
    return state
