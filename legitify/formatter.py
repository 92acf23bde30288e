"""Rendering of report schemes as JSON or as human-readable text."""

from __future__ import annotations

import json
from collections import Counter
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from tabulate import tabulate
from termcolor import colored

from legitify.converter import SchemeType
from legitify.enrichers import Enrichment
from legitify.scheme import (
    FlattenedScheme,
    PolicyInfo,
    PolicyStatus,
    Violation,
    only_failed_violations,
    sort_scheme_by_namespace,
    to_jsonable,
)

DEFAULT_OUTPUT_INDENT = "  "


class FormatName(str, Enum):
    """Output format of a report."""

    HUMAN = "human"
    JSON = "json"
    SARIF = "sarif"

    def __str__(self) -> str:
        return self.value


class UnsupportedSchemeError(TypeError):
    """Raised when a formatter is given a scheme it cannot render."""

    def __init__(self, scheme: Any) -> None:
        self.scheme = scheme
        super().__init__(f"Unsupported scheme type: {type(scheme).__name__}")


_SEVERITY_COLORS = {
    "CRITICAL": "red",
    "HIGH": "light_red",
    "MEDIUM": "light_yellow",
    "LOW": "yellow",
    "UNKNOWN": "white",
}


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _camel_case_to_title(camel_cased: str) -> str:
    parts = []
    for position, char in enumerate(camel_cased):
        if char.islower():
            parts.append(char.upper() if position == 0 else char)
        else:
            parts.append(" " + char)
    return "".join(parts)


class HumanFormatter:
    """Renders a flattened scheme as readable text with a summary table."""

    def __init__(self, indent: str = DEFAULT_OUTPUT_INDENT, color: bool = True) -> None:
        self.indent = indent
        self.color = color

    def _indent(self, depth: int) -> str:
        return self.indent * depth

    def _line(self, depth: int, text: str) -> str:
        return self._indent(depth) + text

    def _colorize(self, data: Any, color: str | None = None, bold: bool = False) -> str:
        text = str(_plain(data))
        if not self.color:
            return text
        return colored(text, color, attrs=["bold"] if bold else None)

    def _policy_color(self, policy_info: PolicyInfo) -> str | None:
        return _SEVERITY_COLORS.get(_plain(policy_info.severity))

    def _indent_multiline(self, depth: int, text: str) -> str:
        return ("\n" + self._indent(depth)).join(text.split("\n"))

    def _format_aux(self, aux: Mapping[str, Enrichment]) -> str:
        parts = []
        for key, enrichment in aux.items():
            value = enrichment.human_readable(self._indent(4))
            template = "- {}:\n" if "\n" in value else "- {}: "
            value = value.removesuffix("\n")
            parts.append(self._line(3, template.format(_camel_case_to_title(key))))
            parts.append(value.upper())
            parts.append("\n")
        return "".join(parts)

    def _format_policy_info(self, policy_name: str, policy_info: PolicyInfo) -> str:
        color = self._policy_color(policy_info)
        parts = [
            self._colorize(f"{policy_info.title}\n", color),
            "-" * len(policy_info.title) + "\n",
            self._line(1, self._indent_multiline(1, policy_info.description) + "\n"),
            self._line(1, f"Policy Name: {policy_name}\n"),
            self._line(1, f"Namespace: {_plain(policy_info.namespace)}\n"),
            self._colorize(self._line(1, f"Severity: {_plain(policy_info.severity)}\n"), color),
            self._line(1, "Remediation Steps:\n"),
        ]
        for number, step in enumerate(policy_info.remediation_steps or (), start=1):
            parts.append(self._line(2, f"{number}. {step}\n"))
        return "".join(parts)

    def _format_violation(self, violation: Violation) -> str:
        text = self._line(
            2,
            f"{self.indent}Link to {violation.violation_entity_type}: {violation.canonical_link}\n",
        )
        if violation.aux:
            text += self._line(2, f"{self.indent}Auxiliary Info:\n")
            text += self._format_aux(violation.aux)
        return text

    def _format_summary_table(self, output: FlattenedScheme) -> str:
        ordered = sort_scheme_by_namespace(output, False)
        headers = [
            self._colorize(header, bold=True)
            for header in ("#", "Namespace", "Policy", "Severity", "Passed", "Failed", "Skipped")
        ]
        rows = []
        for number, data in enumerate(ordered.values(), start=1):
            info = data.policy_info
            counts = Counter(_plain(violation.status) for violation in data.violations)
            rows.append([
                self._colorize(number, bold=True),
                str(_plain(info.namespace)),
                info.title,
                self._colorize(info.severity, self._policy_color(info)),
                self._colorize(counts[PolicyStatus.PASSED.value], "green"),
                self._colorize(counts[PolicyStatus.FAILED.value], "red"),
                self._colorize(counts[PolicyStatus.SKIPPED.value], "light_blue"),
            ])
        table = tabulate(rows, headers=headers, tablefmt="grid", disable_numparse=True)
        return self._colorize("\nFindings summary:\n", bold=True) + table + "\n"

    def _format_failed_violations(self, output: FlattenedScheme) -> str:
        blocks = []
        for policy_name, data in output.items():
            parts = [self._format_policy_info(policy_name, data.policy_info), "\n"]
            parts.append(self._line(1, "Violations:\n"))
            separator = self._line(2, "---\n")
            parts.append(separator.join(self._format_violation(v) for v in data.violations))
            blocks.append("".join(parts))
        return "\n".join(blocks)

    def format(self, output: Any, failed_only: bool) -> bytes:
        """Render ``output``; without ``failed_only`` a summary table is appended
        and only failed violations are detailed."""
        if not isinstance(output, FlattenedScheme):
            raise UnsupportedSchemeError(output)
        summary = ""
        if not failed_only:
            summary = self._format_summary_table(output)
            output = only_failed_violations(output)
        return (self._format_failed_violations(output) + summary).encode("utf-8")

    def is_scheme_supported(self, scheme_type: str) -> bool:
        return _plain(scheme_type) == SchemeType.FLATTENED.value


class JsonFormatter:
    """Renders any scheme as indented JSON."""

    def __init__(self, indent: str = DEFAULT_OUTPUT_INDENT) -> None:
        self.indent = indent

    def format(self, output: Any, failed_only: bool) -> bytes:
        return json.dumps(to_jsonable(output), indent=self.indent, ensure_ascii=False).encode("utf-8")

    def is_scheme_supported(self, scheme_type: str) -> bool:
        """Every named scheme can be serialised as JSON."""
        return isinstance(_plain(scheme_type), str)


_FORMATTERS: dict[FormatName, Callable[[str], Any] | None] = {
    FormatName.HUMAN: HumanFormatter,
    FormatName.JSON: JsonFormatter,
    FormatName.SARIF: None,
}


def _lookup(output_format: str) -> FormatName | None:
    try:
        return FormatName(output_format)
    except ValueError:
        return None


def validate_output_format(output_format: str, scheme_type: str) -> FormatName:
    """Return the format, raising ValueError if it is unknown or cannot render the scheme."""
    known = _lookup(output_format)
    creator = _FORMATTERS.get(known) if known is not None else None
    if creator is None:
        raise ValueError(f"Unsupported output format: {output_format}")
    if not creator(DEFAULT_OUTPUT_INDENT).is_scheme_supported(_plain(scheme_type)):
        raise ValueError(
            f"Scheme Type ({_plain(scheme_type)}) does not support output format: {output_format}"
        )
    return known


def output_formats() -> list[FormatName]:
    """Formats that have a working formatter."""
    return [name for name, creator in _FORMATTERS.items() if creator is not None]


def format_output(output_format: str, indent: str, scheme: Any, failed_only: bool) -> bytes:
    """Render ``scheme`` in ``output_format``; raises ValueError if there is no formatter."""
    known = _lookup(output_format)
    creator = _FORMATTERS.get(known) if known is not None else None
    if creator is None:
        raise ValueError(f"No output generator for {output_format}")
    return creator(indent).format(scheme, failed_only)