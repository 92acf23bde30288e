"""Collects enriched policy results into a report and writes it out."""

from __future__ import annotations

import io
from collections.abc import Iterable, Mapping
from typing import IO, Any

from legitify.converter import convert
from legitify.enricher_manager import EnrichedData
from legitify.formatter import DEFAULT_OUTPUT_INDENT, format_output
from legitify.scheme import (
    FlattenedScheme,
    OutputData,
    PolicyInfo,
    Violation,
    append_violations,
    only_failed_violations,
    sort_scheme_by_severity,
)


def _policy_info(data: EnrichedData) -> PolicyInfo:
    return PolicyInfo(
        title=data.title,
        description=data.description,
        policy_name=data.policy_name,
        fully_qualified_policy_name=data.fully_qualified_policy_name,
        severity=data.severity,
        remediation_steps=data.remediation_steps,
        namespace=data.namespace,
    )


def _violation(data: EnrichedData) -> Violation:
    return Violation(
        violation_entity_type=data.entity.violation_entity_type,
        canonical_link=data.canonical_link,
        aux=data.enrichers,
        status=data.status,
    )


def _collect(enriched_data: Iterable[EnrichedData]) -> FlattenedScheme:
    scheme = FlattenedScheme()
    for data in enriched_data:
        name = data.fully_qualified_policy_name
        if name not in scheme:
            scheme[name] = OutputData(_policy_info(data))
        scheme[name] = append_violations(scheme[name], _violation(data))
    return scheme


class Outputer:
    """Builds a report in the chosen scheme and format from enriched results."""

    def __init__(
        self,
        output_format: str,
        scheme_type: str,
        failed_only: bool = False,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self.output_format = output_format
        self.scheme_type = scheme_type
        self.failed_only = failed_only
        self.context = context or {}
        self._output = b""
        self._error: Exception | None = None

    def digest(self, enriched_data: Iterable[EnrichedData]) -> bytes:
        """Consume all results and render the report, which is kept for :meth:`output`.

        Errors from converting or formatting are raised here and again by
        :meth:`output`. Calling this again replaces the previous report.
        """
        self._error = None
        self._output = b""
        try:
            scheme = sort_scheme_by_severity(_collect(enriched_data), True)
            if self.failed_only:
                scheme = only_failed_violations(scheme)
            converted = convert(self.scheme_type, scheme)
            self._output = format_output(
                self.output_format, DEFAULT_OUTPUT_INDENT, converted, self.failed_only
            )
        except Exception as err:
            self._error = err
            raise
        return self._output

    def output(self, writer: IO[Any]) -> None:
        """Write the rendered report to a binary or text stream."""
        if self._error is not None:
            raise self._error
        if isinstance(writer, io.TextIOBase):
            writer.write(self._output.decode("utf-8"))
        else:
            writer.write(self._output)