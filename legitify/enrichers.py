"""Enrichments attached to analysed policy results, and the enrichers that make them."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Protocol

from legitify.severity import Severity
from legitify.utils import PrependedStringBuilder

ENTITY_ID = "entityId"
ENTITY_NAME = "entityName"
HOOKS_LIST = "violatedHooks"


class _Entity(Protocol):
    @property
    def id(self) -> int: ...

    @property
    def name(self) -> str: ...

    @property
    def canonical_link(self) -> str: ...

    @property
    def violation_entity_type(self) -> str: ...


class Enrichment(ABC):
    """Extra information attached to a policy result."""

    @abstractmethod
    def human_readable(self, prepend: str) -> str:
        """Render the enrichment as text, each piece prefixed with ``prepend``."""

    @abstractmethod
    def to_json(self) -> Any:
        """Return a JSON-ready value for the enrichment."""


@dataclass(frozen=True)
class BasicEnrichment(Enrichment):
    """An enrichment holding a single string."""

    value: str

    def human_readable(self, prepend: str) -> str:
        builder = PrependedStringBuilder(prepend)
        builder.write(self.value)
        return str(builder)

    def to_json(self) -> str:
        return self.value


@dataclass
class AnalyzedData:
    """A policy evaluated against one collected entity."""

    entity: _Entity
    policy_name: str = ""
    fully_qualified_policy_name: str = ""
    namespace: str = ""
    annotations: Any = None
    title: str = ""
    description: str = ""
    required_enrichers: list[str] = field(default_factory=list)
    extra_data: Any = None
    remediation_steps: list[str] = field(default_factory=list)
    severity: str = Severity.UNKNOWN
    canonical_link: str = ""
    status: Any = None


class Enricher(ABC):
    """Produces one kind of enrichment for analysed data."""

    name: ClassVar[str]

    def __init__(self, context: Mapping[str, Any] | None = None) -> None:
        self.context = context or {}

    def should_enrich(self, requested_enricher: str) -> bool:
        return requested_enricher == self.name

    @abstractmethod
    def enrich(self, data: AnalyzedData) -> Enrichment | None:
        """Return the enrichment for ``data``, or None when there is none."""


class EntityIdEnricher(Enricher):
    """Adds the entity's numeric id."""

    name = ENTITY_ID

    def enrich(self, data: AnalyzedData) -> Enrichment | None:
        return BasicEnrichment(str(data.entity.id))


class EntityNameEnricher(Enricher):
    """Adds the entity's name."""

    name = ENTITY_NAME

    def enrich(self, data: AnalyzedData) -> Enrichment | None:
        return BasicEnrichment(data.entity.name)


def _optional(raw: Mapping[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, bool) and kind is int:
        raise ValueError(f"hook field {key!r} has the wrong type")
    if not isinstance(value, kind):
        raise ValueError(f"hook field {key!r} has the wrong type")
    return value


@dataclass(frozen=True)
class Hook:
    """A webhook as described by the hosting service."""

    id: int | None = None
    name: str | None = None
    url: str | None = None
    active: bool | None = None
    events: tuple[str, ...] = ()
    config: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, text: str) -> Hook:
        """Parse a hook from its JSON text; raises ValueError on malformed input."""
        raw = json.loads(text)
        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise ValueError("hook JSON must be an object")
        events = _optional(raw, "events", list) or []
        if not all(isinstance(event, str) for event in events):
            raise ValueError("hook field 'events' has the wrong type")
        return cls(
            id=_optional(raw, "id", int),
            name=_optional(raw, "name", str),
            url=_optional(raw, "url", str),
            active=_optional(raw, "active", bool),
            events=tuple(events),
            config=dict(_optional(raw, "config", dict) or {}),
        )

    def to_json(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.url is not None:
            result["url"] = self.url
        if self.id is not None:
            result["id"] = self.id
        if self.name is not None:
            result["name"] = self.name
        if self.config:
            result["config"] = dict(self.config)
        if self.events:
            result["events"] = list(self.events)
        if self.active is not None:
            result["active"] = self.active
        return result


@dataclass(frozen=True)
class HooksListEnrichment(Enrichment):
    """The webhooks that violated a policy."""

    hooks: tuple[Hook, ...] = ()

    def human_readable(self, prepend: str) -> str:
        builder = PrependedStringBuilder(prepend)
        for number, hook in enumerate(self.hooks, start=1):
            builder.write(f"{number}. {hook.name or ''}: {hook.url or ''}\n")
        return str(builder)

    def to_json(self) -> dict[str, Any]:
        return {"Hooks": [hook.to_json() for hook in self.hooks]}


class HooksListEnricher(Enricher):
    """Lists the hooks named by a policy's extra data, whose keys are hook JSON."""

    name = HOOKS_LIST

    def enrich(self, data: AnalyzedData) -> Enrichment | None:
        if not isinstance(data.extra_data, Mapping):
            return None
        try:
            hooks = tuple(Hook.from_json(key) for key in data.extra_data)
        except (ValueError, TypeError):
            return None
        return HooksListEnrichment(hooks)