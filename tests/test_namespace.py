import pytest

from legitify.namespace import ALL, Namespace, validate_namespaces


def test_namespace_values():
    result = validate_namespaces(["organization", "runner_group", "actions"])
    assert result == [Namespace.ORGANIZATION, Namespace.RUNNER_GROUP, Namespace.ACTIONS]
    assert [str(ns) for ns in result] == ["organization", "runner_group", "actions"]


def test_all_lists_every_namespace_in_order():
    names = ["organization", "repository", "member", "actions", "runner_group"]
    assert validate_namespaces(names) == list(ALL)
    assert list(ALL) == [
        Namespace.ORGANIZATION,
        Namespace.REPOSITORY,
        Namespace.MEMBER,
        Namespace.ACTIONS,
        Namespace.RUNNER_GROUP,
    ]


def test_validate_returns_members():
    names = [ns.value for ns in ALL]
    assert validate_namespaces(names) == list(ALL)


def test_validate_empty():
    assert validate_namespaces([]) == []


def test_validate_rejects_unknown():
    with pytest.raises(ValueError, match="invalid namespace bogus"):
        validate_namespaces(["repository", "bogus", "member"])