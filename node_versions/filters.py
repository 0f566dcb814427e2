"""
Filter composition over lifecycle predicates.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .classifier import LifecycleClassifier
from .comparator import compare_versions, within_range
from .models import STATUS_KEYS


PARAMETRIC_KEYS = ("these", "between", "lte", "gte", "range")

_ALIASES = {camel: snake for snake, camel in STATUS_KEYS.items()}


def is_these(identifier: str, these: Sequence[str]) -> bool:
    """Is the version one of these versions?"""
    return any(compare_versions(identifier, seek) == 0 for seek in these)


def is_between(identifier: str, bounds: Tuple[str, str]) -> bool:
    """Is the version within (inclusive) the two bounds?"""
    gte, lte = bounds
    return compare_versions(identifier, gte) >= 0 and compare_versions(identifier, lte) <= 0


def is_lte(identifier: str, seek: str) -> bool:
    return compare_versions(identifier, seek) <= 0


def is_gte(identifier: str, seek: str) -> bool:
    return compare_versions(identifier, seek) >= 0


def is_within_range(identifier: str, expression: str) -> bool:
    return within_range(identifier, expression)


@dataclass(frozen=True)
class Filters:
    """A conjunction of version constraints.

    ``None`` leaves a key unconstrained. A boolean predicate set to ``True``
    keeps only versions where it holds, ``False`` only versions where it
    does not.
    """

    these: Optional[Tuple[str, ...]] = None
    between: Optional[Tuple[str, str]] = None
    lte: Optional[str] = None
    gte: Optional[str] = None
    range: Optional[str] = None

    active: Optional[bool] = None
    active_or_current: Optional[bool] = None
    current: Optional[bool] = None
    esm: Optional[bool] = None
    latest_active: Optional[bool] = None
    latest_current: Optional[bool] = None
    latest_maintenance: Optional[bool] = None
    lts: Optional[bool] = None
    maintained: Optional[bool] = None
    maintained_or_lts: Optional[bool] = None
    maintenance: Optional[bool] = None
    released: Optional[bool] = None
    vercel: Optional[bool] = None

    def __post_init__(self) -> None:
        if isinstance(self.these, str):
            object.__setattr__(self, "these", (self.these,))
        elif self.these is not None:
            object.__setattr__(self, "these", tuple(str(v) for v in self.these))
        if isinstance(self.between, str):
            raise ValueError("between expects a pair of versions, not a string")
        if self.between is not None:
            between = tuple(str(v) for v in self.between)
            if len(between) != 2:
                raise ValueError("between expects exactly two versions")
            object.__setattr__(self, "between", between)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "Filters":
        """Build filters from snake_case or upstream camelCase keys."""
        known = {item.name for item in fields(cls)}
        values = {}
        for key, value in mapping.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown filter: {key}")
            values[name] = value
        return cls(**values)

    def and_(self, other: "Filters") -> "Filters":
        """Combine two filter sets; keys present in both must agree."""
        values = {}
        for item in fields(self):
            mine = getattr(self, item.name)
            theirs = getattr(other, item.name)
            if mine is not None and theirs is not None and mine != theirs:
                raise ValueError(f"Conflicting values for filter: {item.name}")
            values[item.name] = mine if mine is not None else theirs
        return Filters(**values)

    def boolean_items(self) -> List[Tuple[str, bool]]:
        result = []
        for name in STATUS_KEYS:
            value = getattr(self, name)
            if value is not None:
                result.append((name, bool(value)))
        return result


def _coerce(filters: Any) -> Filters:
    if isinstance(filters, Filters):
        return filters
    return Filters.from_mapping(filters)


def admits(classifier: LifecycleClassifier, identifier: str, filters: Any) -> bool:
    """Is the version compatible with every present filter?"""
    filters = _coerce(filters)

    # with params
    if filters.these is not None and not is_these(identifier, filters.these):
        return False
    if filters.between is not None and not is_between(identifier, filters.between):
        return False
    if filters.lte is not None and not is_lte(identifier, filters.lte):
        return False
    if filters.gte is not None and not is_gte(identifier, filters.gte):
        return False
    if filters.range is not None and not is_within_range(identifier, filters.range):
        return False

    # without params
    for name, expected in filters.boolean_items():
        if classifier.predicate(name)(identifier) != expected:
            return False
    return True


def filter_versions(
    classifier: LifecycleClassifier, identifiers: Sequence[str], filters: Any
) -> List[str]:
    """The versions admitted by the filters, in their original order."""
    filters = _coerce(filters)
    return [identifier for identifier in identifiers if admits(classifier, identifier, filters)]
