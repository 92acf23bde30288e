"""Regrouping of the flattened report scheme into the other output schemes."""

from __future__ import annotations

import functools
from collections.abc import Callable
from enum import Enum
from typing import Any

from legitify.scheme import FlattenedScheme, OutputData, PolicyInfo, Violation, append_violations


class SchemeType(str, Enum):
    """Shape of the report handed to a formatter."""

    FLATTENED = "flattened"
    GROUP_BY_NAMESPACE = "group-by-namespace"
    GROUP_BY_RESOURCE = "group-by-resource"
    GROUP_BY_SEVERITY = "group-by-severity"
    OBJECT = "object"

    def __str__(self) -> str:
        return self.value


DEFAULT_SCHEME = SchemeType.FLATTENED

Grouper = Callable[[PolicyInfo, Violation], Any]


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def convert_to_group_by(element: Grouper, output: FlattenedScheme) -> dict[str, FlattenedScheme]:
    """Split ``output`` into one flattened scheme per key that ``element`` yields.

    Each violation goes under the key computed from its policy info and itself;
    the order of keys, policies and violations follows ``output``.
    """
    grouped: dict[str, FlattenedScheme] = {}
    for policy_name, data in output.items():
        for violation in data.violations:
            key = _plain(element(data.policy_info, violation))
            by_policy = grouped.setdefault(key, FlattenedScheme())
            if policy_name not in by_policy:
                by_policy[policy_name] = OutputData(data.policy_info)
            by_policy[policy_name] = append_violations(by_policy[policy_name], violation)
    return grouped


def _by_namespace(policy_info: PolicyInfo, violation: Violation) -> Any:
    return policy_info.namespace


def _by_resource(policy_info: PolicyInfo, violation: Violation) -> Any:
    return violation.canonical_link


def _by_severity(policy_info: PolicyInfo, violation: Violation) -> Any:
    return policy_info.severity


def _flattened(output: FlattenedScheme) -> FlattenedScheme:
    """The flattened scheme is already in its final shape; it is passed on as is."""
    if not isinstance(output, FlattenedScheme):
        raise TypeError(f"Expected a flattened scheme, got {type(output).__name__}")
    return output


_CONVERTERS: dict[SchemeType, Callable[[FlattenedScheme], Any] | None] = {
    SchemeType.FLATTENED: _flattened,
    SchemeType.GROUP_BY_NAMESPACE: functools.partial(convert_to_group_by, _by_namespace),
    SchemeType.GROUP_BY_RESOURCE: functools.partial(convert_to_group_by, _by_resource),
    SchemeType.GROUP_BY_SEVERITY: functools.partial(convert_to_group_by, _by_severity),
    SchemeType.OBJECT: None,
}


def _lookup(scheme_type: str) -> SchemeType | None:
    try:
        return SchemeType(scheme_type)
    except ValueError:
        return None


def convert(scheme_type: str, output: FlattenedScheme) -> Any:
    """Convert ``output`` into the requested scheme; raises ValueError if unavailable."""
    known = _lookup(scheme_type)
    converter = _CONVERTERS.get(known) if known is not None else None
    if converter is None:
        raise ValueError(f"No output converter for {scheme_type}")
    return converter(output)


def validate_output_scheme(scheme_type: str) -> SchemeType:
    """Return the scheme type, raising ValueError if it is not a known one."""
    known = _lookup(scheme_type)
    if known is None:
        raise ValueError(f"Unsupported output scheme type: {scheme_type}")
    return known


def scheme_types() -> list[SchemeType]:
    """Scheme types that have a working converter."""
    return [scheme_type for scheme_type, converter in _CONVERTERS.items() if converter is not None]