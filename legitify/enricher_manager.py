"""Attaches the requested enrichments to analysed policy results."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from legitify.enrichers import (
    ENTITY_ID,
    ENTITY_NAME,
    HOOKS_LIST,
    AnalyzedData,
    Enricher,
    Enrichment,
    EntityIdEnricher,
    EntityNameEnricher,
    HooksListEnricher,
)

DEFAULT_ENRICHERS: tuple[str, ...] = (ENTITY_ID, ENTITY_NAME)

_ENRICHERS: dict[str, type[Enricher]] = {
    ENTITY_ID: EntityIdEnricher,
    ENTITY_NAME: EntityNameEnricher,
    HOOKS_LIST: HooksListEnricher,
}


@dataclass
class EnrichedData:
    """Analysed data together with its enrichments."""

    entity: Any
    namespace: str
    policy_name: str
    fully_qualified_policy_name: str
    annotations: Any
    title: str
    description: str
    enrichers: dict[str, Enrichment] = field(default_factory=dict)
    remediation_steps: list[str] = field(default_factory=list)
    severity: str = ""
    canonical_link: str = ""
    status: Any = None


class EnricherManager:
    """Runs the enrichers each analysed result asks for, plus the defaults."""

    def __init__(self, context: Mapping[str, Any] | None = None) -> None:
        self.context = context or {}

    def enrich(self, analyzed_data: Iterable[AnalyzedData]) -> Iterator[EnrichedData]:
        """Yield one EnrichedData for each analysed result, in order."""
        for analyzed in analyzed_data:
            yield self._enrich_one(analyzed)

    def _enrich_one(self, analyzed: AnalyzedData) -> EnrichedData:
        enrichments: dict[str, Enrichment] = {}
        for requested in [*(analyzed.required_enrichers or ()), *DEFAULT_ENRICHERS]:
            enricher_class = _ENRICHERS.get(requested)
            if enricher_class is None:
                continue
            enricher = enricher_class(self.context)
            if not enricher.should_enrich(requested):
                continue
            enrichment = enricher.enrich(analyzed)
            if enrichment is None:
                continue
            enrichments[requested] = enrichment

        return EnrichedData(
            entity=analyzed.entity,
            namespace=analyzed.namespace,
            policy_name=analyzed.policy_name,
            fully_qualified_policy_name=analyzed.fully_qualified_policy_name,
            annotations=analyzed.annotations,
            title=analyzed.title,
            description=analyzed.description,
            enrichers=enrichments,
            remediation_steps=analyzed.remediation_steps,
            severity=analyzed.severity,
            canonical_link=analyzed.canonical_link,
            status=analyzed.status,
        )