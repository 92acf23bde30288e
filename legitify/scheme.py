"""Report structures: policies, their violations, and the flattened scheme."""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from legitify.enrichers import Enrichment
from legitify.namespace import Namespace
from legitify.severity import less as severity_less


class PolicyStatus(str, Enum):
    """Outcome of a policy on one entity."""

    PASSED = "PASSED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"

    def __str__(self) -> str:
        return self.value


@dataclass
class PolicyInfo:
    title: str
    description: str
    policy_name: str
    fully_qualified_policy_name: str
    severity: str
    remediation_steps: list[str] | None
    namespace: str


@dataclass
class Violation:
    violation_entity_type: str
    canonical_link: str
    aux: dict[str, Enrichment] | None
    status: PolicyStatus | str


@dataclass
class OutputData:
    policy_info: PolicyInfo
    violations: list[Violation] = field(default_factory=list)

    def clone(self) -> OutputData:
        return OutputData(self.policy_info, list(self.violations))


def append_violations(output_data: OutputData, *args: Violation) -> OutputData:
    """Return a copy of ``output_data`` with the given violations appended."""
    return replace(output_data, violations=[*output_data.violations, *args])


class FlattenedScheme(dict):
    """Ordered mapping of fully qualified policy names to their OutputData.

    Two schemes are equal only if they hold the same entries in the same order.
    """

    def __init__(self, items: Iterable[tuple[str, OutputData]] | Mapping[str, OutputData] = ()) -> None:
        super().__init__(items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FlattenedScheme):
            return list(self.items()) == list(other.items())
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"FlattenedScheme({dict(self)!r})"

    def clone(self) -> FlattenedScheme:
        return FlattenedScheme((name, data.clone()) for name, data in self.items())

    def policy_data(self, policy_name: str) -> OutputData:
        return self[policy_name]


def filter_policies_by_violations(
    output: FlattenedScheme, violation_filter: Callable[[Violation], bool]
) -> FlattenedScheme:
    """Keep only matching violations, dropping policies left with none."""
    filtered = FlattenedScheme()
    for name, data in output.items():
        kept = [violation for violation in data.violations if violation_filter(violation)]
        if kept:
            filtered[name] = replace(data, violations=kept)
    return filtered


def filter_violations_by_status(output: FlattenedScheme, status: PolicyStatus | str) -> FlattenedScheme:
    return filter_policies_by_violations(output, lambda violation: violation.status == status)


def only_failed_violations(output: FlattenedScheme) -> FlattenedScheme:
    return filter_violations_by_status(output, PolicyStatus.FAILED)


def sort_scheme(
    output: FlattenedScheme,
    inplace: bool,
    key: Callable[[tuple[str, OutputData]], Any],
) -> FlattenedScheme:
    """Order policies by ``key`` applied to (name, data) pairs, and each policy's
    violations by canonical link."""
    if not inplace:
        output = output.clone()
    ordered = [
        (name, replace(data, violations=sorted(data.violations, key=lambda v: v.canonical_link)))
        for name, data in sorted(output.items(), key=key)
    ]
    output.clear()
    output.update(ordered)
    return output


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _compare_by_severity(first: tuple[str, OutputData], second: tuple[str, OutputData]) -> int:
    first_severity = _plain(first[1].policy_info.severity)
    second_severity = _plain(second[1].policy_info.severity)
    if first_severity != second_severity:
        if severity_less(first_severity, second_severity):
            return -1
        if severity_less(second_severity, first_severity):
            return 1
        return 0
    return (first[0] > second[0]) - (first[0] < second[0])


_NAMESPACE_ORDER = {
    Namespace.ORGANIZATION.value: 0,
    Namespace.ACTIONS.value: 1,
    Namespace.MEMBER.value: 2,
    Namespace.REPOSITORY.value: 3,
}


def _compare_by_namespace(first: tuple[str, OutputData], second: tuple[str, OutputData]) -> int:
    first_ns = _plain(first[1].policy_info.namespace)
    second_ns = _plain(second[1].policy_info.namespace)
    if first_ns != second_ns:
        first_rank = _NAMESPACE_ORDER.get(first_ns, 0)
        second_rank = _NAMESPACE_ORDER.get(second_ns, 0)
        return (first_rank > second_rank) - (first_rank < second_rank)
    return _compare_by_severity(first, second)


def sort_scheme_by_severity(output: FlattenedScheme, inplace: bool) -> FlattenedScheme:
    """Most severe first, then by policy name."""
    return sort_scheme(output, inplace, functools.cmp_to_key(_compare_by_severity))


def sort_scheme_by_namespace(output: FlattenedScheme, inplace: bool) -> FlattenedScheme:
    """Organization, actions, member, repository; then by severity and name."""
    return sort_scheme(output, inplace, functools.cmp_to_key(_compare_by_namespace))


def to_jsonable(obj: Any) -> Any:
    """Convert report structures into plain JSON-ready values."""
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Enrichment):
        return to_jsonable(obj.to_json())
    if isinstance(obj, PolicyInfo):
        return {
            "title": obj.title,
            "description": obj.description,
            "policyName": obj.policy_name,
            "fullyQualifiedPolicyName": obj.fully_qualified_policy_name,
            "severity": to_jsonable(obj.severity),
            "remediationSteps": None if obj.remediation_steps is None else list(obj.remediation_steps),
            "namespace": to_jsonable(obj.namespace),
        }
    if isinstance(obj, Violation):
        aux = None if obj.aux is None else {k: to_jsonable(obj.aux[k]) for k in sorted(obj.aux)}
        return {
            "violationEntityType": obj.violation_entity_type,
            "canonicalLink": obj.canonical_link,
            "aux": aux,
            "Status": to_jsonable(obj.status),
        }
    if isinstance(obj, OutputData):
        return {
            "policyInfo": to_jsonable(obj.policy_info),
            "violations": [to_jsonable(v) for v in obj.violations],
        }
    if isinstance(obj, Mapping):
        return {str(_plain(key)): to_jsonable(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(item) for item in obj]
    return obj