"""Aggregation – AggregationRule: one tag context bound to one counts aggregate."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from mp_tagcloud.aggregation.naming import (
    DEFAULT_COLLECTION_TEMPLATE,
    default_collection_name,
    default_rule_template,
    detokenize,
)
from mp_tagcloud.aggregation.strategies import AggregationStrategy, resolve_strategy
from mp_tagcloud.kernel.errors import TagContextNotFoundError
from mp_tagcloud.kernel.tagging import Snapshot, TagContext

Scope = Callable[[Snapshot], bool]


class EntityType(Protocol):
    """What a rule needs to know about the entity type that owns it."""

    entity: str
    database: Any
    contexts: Mapping[str, TagContext]
    default_strategy: type[AggregationStrategy]
    collection_name_template: str


@dataclasses.dataclass(frozen=True)
class CollectionRef:
    """Resolved storage location of a rule's counts.

    ``handle`` is set only when the caller passed an explicit collection
    object; ``database`` is a name or a backend database handle.
    """

    name: str
    database: Any = None
    handle: Any = None


@dataclasses.dataclass(frozen=True)
class AggregationRule:
    """Immutable description of one aggregation target.

    Build instances with :meth:`resolve`, which applies the naming and
    storage resolution rules and validates the strategy.
    """

    name: str
    entity: str
    context: TagContext
    strategy_cls: type[AggregationStrategy]
    collection: CollectionRef
    group_by: str | None = None
    scope: Scope | None = None

    @property
    def grouped(self) -> bool:
        return self.group_by is not None

    @property
    def strategy_identifier(self) -> str:
        return self.strategy_cls.identifier

    @classmethod
    def resolve(
        cls,
        entity_type: EntityType,
        context: str,
        *,
        name: str | None = None,
        strategy: type[AggregationStrategy] | str | None = None,
        group_by: str | None = None,
        scope: Scope | None = None,
        collection: Any = None,
        collection_name: str | None = None,
        database: Any = None,
    ) -> AggregationRule:
        """Resolve a rule for *context* on *entity_type*.

        Raises:
            TagContextNotFoundError: *context* is not declared on the entity type.
            InvalidStrategyError: *strategy* is not a concrete strategy.
            UnsupportedOptionForStrategyError: the strategy cannot honour
                ``group_by`` or ``scope``.
        """
        tag_context = entity_type.contexts.get(context)
        if tag_context is None:
            raise TagContextNotFoundError(context, entity_type.entity)

        strategy_cls = (
            entity_type.default_strategy if strategy is None else resolve_strategy(strategy)
        )
        strategy_cls.check_options(group_by=group_by, scope=scope)

        def _detokenize(template: str) -> str:
            return detokenize(
                template,
                context=tag_context.name,
                group_by=group_by,
                strategy=strategy_cls.identifier,
            )

        raw_name = name or default_rule_template(
            grouped=group_by is not None,
            scoped=scope is not None,
            default_strategy=strategy_cls is entity_type.default_strategy,
        )
        rule_name = _detokenize(raw_name)

        if collection is not None:
            ref = CollectionRef(
                name=collection.name,
                database=getattr(collection, "database", None),
                handle=collection,
            )
        else:
            if collection_name is not None:
                resolved_name = _detokenize(collection_name)
            else:
                resolved_name = default_collection_name(
                    entity_type.entity,
                    rule_name,
                    entity_type.collection_name_template or DEFAULT_COLLECTION_TEMPLATE,
                )
            ref = CollectionRef(
                name=resolved_name,
                database=database if database is not None else entity_type.database,
            )

        return cls(
            name=rule_name,
            entity=entity_type.entity,
            context=tag_context,
            strategy_cls=strategy_cls,
            collection=ref,
            group_by=group_by,
            scope=scope,
        )


__all__ = ["AggregationRule", "CollectionRef", "EntityType", "Scope"]
