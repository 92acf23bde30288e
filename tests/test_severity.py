import functools

import pytest

from legitify.severity import Severity, is_valid, less


def test_values_are_the_wire_strings():
    assert Severity.CRITICAL == "CRITICAL"
    assert str(Severity.LOW) == "LOW"
    assert Severity("HIGH") is Severity.HIGH


@pytest.mark.parametrize(
    "severity", [Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW]
)
def test_known_severities_are_valid(severity):
    assert is_valid(severity)
    assert is_valid(severity.value)


def test_unknown_and_garbage_are_invalid():
    assert not is_valid(Severity.UNKNOWN)
    assert not is_valid("UNKNOWN")
    assert not is_valid("nope")


def test_less_orders_by_severity():
    ordered = [Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW, Severity.UNKNOWN]
    for more, fewer in zip(ordered, ordered[1:]):
        assert less(more, fewer)
        assert not less(fewer, more)


def test_less_is_irreflexive():
    for sev in Severity:
        assert not less(sev, sev)


def test_sorting_with_less():
    shuffled = ["LOW", "CRITICAL", "UNKNOWN", "MEDIUM", "HIGH"]
    cmp = functools.cmp_to_key(lambda a, b: -1 if less(a, b) else (1 if less(b, a) else 0))
    assert sorted(shuffled, key=cmp) == [s.value for s in Severity]