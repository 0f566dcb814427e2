"""
ECMAScript edition lookup by date.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from .time_utils import Instant, to_instant


# Editions in ratification order with their Ecma General Assembly approval dates.
ES_EDITIONS: List[Tuple[str, datetime]] = [
    (label, to_instant(ratified))
    for label, ratified in (
        ("ES1", "1997-06-01"),
        ("ES2", "1998-06-01"),
        ("ES3", "1999-12-01"),
        ("ES5", "2009-12-03"),
        ("ES5.1", "2011-06-01"),
        ("ES2015", "2015-06-17"),
        ("ES2016", "2016-06-14"),
        ("ES2017", "2017-06-27"),
        ("ES2018", "2018-06-26"),
        ("ES2019", "2019-06-26"),
        ("ES2020", "2020-06-16"),
        ("ES2021", "2021-06-22"),
        ("ES2022", "2022-06-22"),
        ("ES2023", "2023-06-27"),
        ("ES2024", "2024-06-26"),
        ("ES2025", "2025-06-25"),
    )
]


def es_version_for_date(when: Instant) -> Optional[str]:
    """The newest edition ratified on or before the given instant."""
    instant = to_instant(when)
    result = None
    for label, ratified in ES_EDITIONS:
        if ratified > instant:
            break
        result = label
    return result


def edition_order(label: str) -> int:
    for index, (edition, _) in enumerate(ES_EDITIONS):
        if edition == label:
            return index
    raise ValueError(f"Unknown ECMAScript edition: {label}")
