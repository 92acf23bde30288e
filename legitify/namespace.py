"""Namespaces that policies are grouped under."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum


class Namespace(str, Enum):
    """Kind of entity a policy applies to."""

    ORGANIZATION = "organization"
    REPOSITORY = "repository"
    MEMBER = "member"
    ACTIONS = "actions"
    RUNNER_GROUP = "runner_group"

    def __str__(self) -> str:
        return self.value


ALL: tuple[Namespace, ...] = tuple(Namespace)


def validate_namespaces(namespaces: Iterable[str]) -> list[Namespace]:
    """Check every name and return them as Namespace members.

    Raises ValueError for the first name that is not a known namespace.
    """
    result = []
    for name in namespaces:
        try:
            result.append(Namespace(name))
        except ValueError:
            raise ValueError(f"invalid namespace {name}") from None
    return result