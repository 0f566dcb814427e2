"""
Version comparison and range evaluation for Node.js version identifiers.
"""

from __future__ import annotations

import re
from functools import cmp_to_key
from typing import Callable, Dict, Iterable, List, Tuple

from packaging import version as pkg_version


_COMPARATOR_PATTERN = re.compile(r"^(>=|<=|==|>|<|=)?\s*(v?\d+(?:\.\d+)*)$")

_OPERATORS: Dict[str, Callable[[int], bool]] = {
    ">=": lambda result: result >= 0,
    "<=": lambda result: result <= 0,
    ">": lambda result: result > 0,
    "<": lambda result: result < 0,
    "=": lambda result: result == 0,
    "==": lambda result: result == 0,
}


def version_components(identifier: str) -> Tuple[int, ...]:
    """Return the numeric release components of an identifier.

    Raises ``packaging.version.InvalidVersion`` for malformed input.
    """
    return pkg_version.Version(str(identifier).strip()).release


def is_absolute_version(identifier: str) -> bool:
    """Absolute identifiers have exactly three components, e.g. ``14.15.0``."""
    return len(str(identifier).strip().lstrip("v").split(".")) == 3


def significant_version(identifier: str) -> str:
    """Map an identifier to its schedule line: ``0.12.18`` -> ``0.12``, ``14.15.0`` -> ``14``."""
    components = version_components(identifier)
    if components[0] == 0 and len(components) > 1:
        return f"0.{components[1]}"
    return str(components[0])


def compare_versions(left: str, right: str) -> int:
    """Compare two identifiers component-wise up to the shorter length.

    A significant identifier therefore compares equal to every absolute
    release of its own line.
    """
    a = version_components(left)
    b = version_components(right)
    size = min(len(a), len(b))
    a, b = a[:size], b[:size]
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def sort_versions(identifiers: Iterable[str]) -> List[str]:
    return sorted(identifiers, key=cmp_to_key(compare_versions))


def _clause_matches(identifier: str, clause: str) -> bool:
    tokens = re.findall(r"(?:>=|<=|==|>|<|=)?\s*v?\d+(?:\.\d+)*", clause)
    if not tokens or "".join(tokens).replace(" ", "") != clause.replace(" ", ""):
        raise ValueError(f"Invalid range clause: {clause!r}")
    for token in tokens:
        match = _COMPARATOR_PATTERN.match(token.strip())
        if match is None:
            raise ValueError(f"Invalid range comparator: {token!r}")
        operator = match.group(1) or "="
        if not _OPERATORS[operator](compare_versions(identifier, match.group(2))):
            return False
    return True


def within_range(identifier: str, expression: str) -> bool:
    """Is the identifier within a range such as ``<4`` or ``>=10 <14 || 16``?"""
    if not expression or not expression.strip():
        raise ValueError("Range expression must not be empty")
    for clause in expression.split("||"):
        clause = clause.strip()
        if not clause:
            raise ValueError(f"Invalid range expression: {expression!r}")
        if _clause_matches(identifier, clause):
            return True
    return False
