# legitify

A library for turning the results of security-posture policy checks on an
organization's repositories, members, actions settings and runner groups into
reports.

It covers the stages that follow policy evaluation: enriching each result,
collecting results per policy, regrouping them, and rendering the report as
JSON or as readable text.

## Modules

- `legitify.enrichers` — `AnalyzedData` (one policy evaluated against one
  entity), the `Enrichment` base with `BasicEnrichment` and
  `HooksListEnrichment`, and the enrichers `EntityIdEnricher`,
  `EntityNameEnricher` and `HooksListEnricher`. The hooks enricher reads the
  result's `extra_data`, whose keys are webhook JSON, into `Hook` records.
- `legitify.enricher_manager` — `EnricherManager.enrich()` takes an iterable
  of `AnalyzedData` and yields `EnrichedData`, running the enrichers each
  result asks for plus the defaults (entity id and entity name). Unknown
  enricher names and enrichers with nothing to add are skipped.
- `legitify.scheme` — `PolicyInfo`, `Violation`, `OutputData`, `PolicyStatus`
  and `FlattenedScheme`, an ordered mapping of fully qualified policy names to
  their data. Helpers: `append_violations`, `filter_policies_by_violations`,
  `filter_violations_by_status`, `only_failed_violations`,
  `sort_scheme_by_severity` (most severe first, then by name),
  `sort_scheme_by_namespace` (organization, actions, member, repository) and
  `to_jsonable`.
- `legitify.converter` — `convert(scheme_type, output)` returns the flattened
  scheme as is or regroups it by namespace, resource (canonical link) or
  severity. `SchemeType` lists the names; `scheme_types()` returns those with
  a working converter; `validate_output_scheme()` checks a name.
- `legitify.formatter` — `format_output(output_format, indent, scheme,
  failed_only)` renders with `JsonFormatter` (any scheme) or `HumanFormatter`
  (flattened scheme only; details of failed results, plus a colour summary
  table of passed/failed/skipped counts unless `failed_only` is set; pass
  `color=False` for plain text). `FormatName` lists the names,
  `output_formats()` returns those with a working formatter, and
  `validate_output_format()` checks a format against a scheme type.
- `legitify.outputer` — `Outputer(output_format, scheme_type,
  failed_only=False)` ties it together: `digest()` consumes enriched results,
  sorts them by severity, converts and formats them and returns the bytes;
  `output()` writes them to a binary or text stream.
- `legitify.severity`, `legitify.namespace` — the `Severity` and `Namespace`
  enums with `is_valid`, `less` and `validate_namespaces`.
- `legitify.permissions` — token scopes and roles: `parse_token_scopes`
  (with implied scopes filled in), `has_scope`, `has_org_scope`,
  `has_repo_scope`, `get_org_role`, `is_org_role`, `is_repository_role`.
- `legitify.utils` — `PrependedStringBuilder` and `retry`, which retries an
  operation that raises `RetryableError`.

## Installation

```
pip install .
```

## Example

```python
import sys

from legitify.converter import SchemeType
from legitify.formatter import FormatName
from legitify.outputer import Outputer

outputer = Outputer(FormatName.JSON, SchemeType.FLATTENED, failed_only=False)
outputer.digest(enriched_results)   # an iterable of EnrichedData
outputer.output(sys.stdout)
```

## What it does not do

The package starts from results that have already been evaluated. It does not
collect data from a source-control service, does not evaluate policies, and
has no command-line tool. The `sarif` format and the `object` scheme type are
named but have no implementation; asking for them raises `ValueError`. Only
the entity id, entity name and webhook-list enrichers exist.

## Running the tests

```
pip install .[test]
pytest
```