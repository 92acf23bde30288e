import json
from dataclasses import dataclass

from legitify.enricher_manager import DEFAULT_ENRICHERS, EnricherManager
from legitify.enrichers import AnalyzedData, BasicEnrichment, HooksListEnrichment


@dataclass
class FakeEntity:
    id: int = 666
    name: str = "arbitrary"
    canonical_link: str = "arbitrary"
    violation_entity_type: str = "organization"


def some_analyzed(entity=None, required=None, extra=None):
    return AnalyzedData(
        entity=entity or FakeEntity(),
        policy_name="A Policy",
        fully_qualified_policy_name="A Full Policy",
        annotations=None,
        required_enrichers=required or [],
        extra_data=extra,
    )


def test_policy_with_no_enricher_does_not_enrich():
    results = list(EnricherManager().enrich([some_analyzed()] * 3))
    assert len(results) == 3
    for result in results:
        assert len(result.enrichers) == len(DEFAULT_ENRICHERS)
        assert set(result.enrichers) == set(DEFAULT_ENRICHERS)


def test_default_enrichers_values():
    (result,) = EnricherManager().enrich([some_analyzed()])
    assert result.enrichers["entityId"] == BasicEnrichment("666")
    assert result.enrichers["entityName"] == BasicEnrichment("arbitrary")


def test_repository_entity_enriched_twice():
    entity = FakeEntity(id=0, name="A Name", canonical_link="")
    results = list(EnricherManager().enrich([some_analyzed(entity)] * 3))
    assert [len(r.enrichers) for r in results] == [2, 2, 2]
    assert results[0].enrichers["entityName"] == BasicEnrichment("A Name")


def test_required_enricher_added():
    key = json.dumps({"name": "web", "url": "https://example.com/hook"})
    (result,) = EnricherManager().enrich(
        [some_analyzed(required=["violatedHooks"], extra={key: True})]
    )
    assert len(result.enrichers) == 3
    assert isinstance(result.enrichers["violatedHooks"], HooksListEnrichment)


def test_failed_and_unknown_enrichers_skipped():
    (result,) = EnricherManager().enrich(
        [some_analyzed(required=["violatedHooks", "noSuchEnricher"], extra="bad")]
    )
    assert set(result.enrichers) == set(DEFAULT_ENRICHERS)


def test_fields_copied_and_order_kept():
    items = [some_analyzed(FakeEntity(id=i, name=f"n{i}")) for i in range(4)]
    results = list(EnricherManager().enrich(items))
    assert [r.entity.id for r in results] == [0, 1, 2, 3]
    assert results[0].policy_name == "A Policy"
    assert results[0].fully_qualified_policy_name == "A Full Policy"