"""Policy severity levels and their ordering."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Severity of a policy, from most to least severe."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    UNKNOWN = "UNKNOWN"

    def __str__(self) -> str:
        return self.value


_RANK = {
    Severity.CRITICAL.value: 0,
    Severity.HIGH.value: 1,
    Severity.MEDIUM.value: 2,
    Severity.LOW.value: 3,
    Severity.UNKNOWN.value: 4,
}


def _key(severity: str) -> str:
    return severity.value if isinstance(severity, Severity) else severity


def is_valid(severity: str) -> bool:
    """Return True for a known severity other than UNKNOWN."""
    key = _key(severity)
    if key == Severity.UNKNOWN.value:
        return False
    return key in _RANK


def less(first: str, second: str) -> bool:
    """Return True if ``first`` is more severe than ``second``.

    Unrecognised severities rank as the most severe.
    """
    return _RANK.get(_key(first), 0) < _RANK.get(_key(second), 0)