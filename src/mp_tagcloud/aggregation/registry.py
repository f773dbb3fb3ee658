"""Aggregation – AggregationRegistry: contexts, rules and strategies of one entity type."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mp_tagcloud.aggregation.naming import DEFAULT_COLLECTION_TEMPLATE
from mp_tagcloud.aggregation.ports import StorageBackend
from mp_tagcloud.aggregation.records import RecalculationResult
from mp_tagcloud.aggregation.rule import AggregationRule, Scope
from mp_tagcloud.aggregation.strategies import (
    DEFAULT_STRATEGY,
    AggregationStrategy,
    RealTime,
    resolve_strategy,
)
from mp_tagcloud.kernel.errors import (
    ContextDeclaredAfterGlobalRuleError,
    DuplicateRuleNameError,
    DuplicateTagContextError,
    RuleNotFoundError,
    UnsupportedOptionForStrategyError,
)
from mp_tagcloud.kernel.tagging import Snapshot, TagContext
from mp_tagcloud.observability.logging import get_logger

if TYPE_CHECKING:
    from mp_tagcloud.config.settings import TagCloudSettings


class AggregationRegistry:
    """Tag contexts and aggregation rules declared for one entity type.

    Construct one registry per entity collection at startup, declare its
    contexts with :meth:`taggable` and its rules with :meth:`taggregation`,
    then wire the entity layer's post-commit hooks to
    :meth:`on_entity_saved` and :meth:`on_entity_destroyed`.

    Usage::

        articles = AggregationRegistry("articles", backend=MongoBackend(db))
        articles.taggable()
        articles.taggable("a", as_="artists", separator=", ")
        articles.taggregation("tags", group_by="user")

        await articles.on_entity_saved(None, {"tags": ["food", "bee"], "user": "u1"})
        await articles.tags_for("tags_by_user", "u1")   # ["bee", "food"]

    Declaration order matters: once :meth:`taggregation` is called without
    contexts (a *global* rule covering every context declared so far), no
    further context may be declared.
    """

    def __init__(
        self,
        entity: str,
        backend: StorageBackend,
        *,
        database: Any = None,
        settings: TagCloudSettings | None = None,
    ) -> None:
        self.entity = entity
        self.backend = backend
        self.database = database if database is not None else backend.default_database
        self.default_strategy: type[AggregationStrategy] = (
            resolve_strategy(settings.default_strategy) if settings is not None else DEFAULT_STRATEGY
        )
        self.collection_name_template = (
            settings.collection_name_template if settings is not None else DEFAULT_COLLECTION_TEMPLATE
        )
        self.contexts: dict[str, TagContext] = {}
        self._rules: dict[str, AggregationRule] = {}
        self._strategies: dict[str, AggregationStrategy] = {}
        self._has_global_rule = False
        self._log = get_logger(__name__, entity=entity)

    # ------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------

    def taggable(
        self,
        attribute_key: str | None = None,
        *,
        as_: str | None = None,
        separator: str | None = None,
    ) -> TagContext:
        """Declare a tag context stored in *attribute_key* (default ``"tags"``).

        Raises:
            ContextDeclaredAfterGlobalRuleError: a global rule already exists.
            DuplicateTagContextError: a context with the same name exists.
        """
        context = TagContext.declare(attribute_key, as_=as_, separator=separator)
        if self._has_global_rule:
            raise ContextDeclaredAfterGlobalRuleError(context.name)
        if context.name in self.contexts:
            raise DuplicateTagContextError(context.name)
        self.contexts[context.name] = context
        self._log.debug("tagcloud.context_declared", context=context.name, attribute=context.attribute_key)
        return context

    def taggregation(
        self,
        *contexts: str,
        name: str | None = None,
        strategy: type[AggregationStrategy] | str | None = None,
        group_by: str | None = None,
        scope: Scope | None = None,
        collection: Any = None,
        collection_name: str | None = None,
        database: Any = None,
    ) -> list[AggregationRule]:
        """Declare one aggregation rule per context in *contexts*.

        Without contexts the rule applies to every context declared so far
        and the registry stops accepting new contexts. *name* and
        *collection_name* may use the ``{context}``, ``{groupBy}`` and
        ``{strategy}`` tokens.

        Raises:
            TagContextNotFoundError, InvalidStrategyError,
            UnsupportedOptionForStrategyError, DuplicateRuleNameError
        """
        is_global = not contexts
        targets = tuple(self.contexts) if is_global else contexts

        rules = [
            AggregationRule.resolve(
                self,
                context,
                name=name,
                strategy=strategy,
                group_by=group_by,
                scope=scope,
                collection=collection,
                collection_name=collection_name,
                database=database,
            )
            for context in targets
        ]
        seen: set[str] = set()
        for rule in rules:
            if rule.name in self._rules or rule.name in seen:
                raise DuplicateRuleNameError(rule.name, self.entity)
            seen.add(rule.name)

        for rule in rules:
            self._rules[rule.name] = rule
            self._strategies[rule.name] = self._bind(rule)
            self._log.info(
                "tagcloud.rule_declared",
                rule=rule.name,
                context=rule.context.name,
                strategy=rule.strategy_identifier,
                collection=rule.collection.name,
            )
        if is_global:
            self._has_global_rule = True
        return rules

    def _bind(self, rule: AggregationRule) -> AggregationStrategy:
        store = self.backend.counts_store(rule.collection, grouped=rule.grouped)
        source = self.backend.entity_source(self.entity, self.database)
        return rule.strategy_cls(rule, store, source)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def rules(self) -> list[AggregationRule]:
        return list(self._rules.values())

    @property
    def has_global_rule(self) -> bool:
        return self._has_global_rule

    def rule(self, rule_or_context: str) -> AggregationRule:
        """Find a rule by name, falling back to the first rule on a context of that name."""
        rule = self._rules.get(rule_or_context)
        if rule is not None:
            return rule
        for candidate in self._rules.values():
            if candidate.context.name == rule_or_context:
                return candidate
        raise RuleNotFoundError(rule_or_context)

    def strategy(self, rule_or_context: str) -> AggregationStrategy:
        return self._strategies[self.rule(rule_or_context).name]

    def tag_attribute_keys(self) -> list[str]:
        """Storage attribute of every declared context."""
        return [context.attribute_key for context in self.contexts.values()]

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def tags_for(self, rule_or_context: str, group: Any = None) -> list[str]:
        return await self.strategy(rule_or_context).tags(group)

    async def tags_with_weight_for(self, rule_or_context: str, group: Any = None) -> list[tuple[str, int]]:
        return await self.strategy(rule_or_context).tags_with_weight(group)

    async def autocomplete_for(
        self,
        rule_or_context: str,
        prefix: str,
        *,
        sort_by_count: bool = False,
        max: int = 0,  # noqa: A002
        group: Any = None,
    ) -> list[tuple[str, int]]:
        """Prefix search over a real-time rule's visible tags.

        Raises:
            UnsupportedOptionForStrategyError: the rule is not real-time.
        """
        strategy = self.strategy(rule_or_context)
        if not isinstance(strategy, RealTime):
            raise UnsupportedOptionForStrategyError(strategy.identifier, "autocomplete")
        return await strategy.autocomplete(prefix, sort_by_count=sort_by_count, max=max, group=group)

    def aggregation_collection_name(self, rule_or_context: str) -> str:
        return self.rule(rule_or_context).collection.name

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    async def recalculate(self, context: str | None = None) -> list[RecalculationResult]:
        """Rebuild every rule's counts, or only those bound to *context*."""
        results: list[RecalculationResult] = []
        for rule in self._rules.values():
            if context is not None and rule.context.name != context:
                continue
            results.append(await self._strategies[rule.name].recalculate())
        return results

    async def compact(self, context: str | None = None) -> int:
        """Delete non-positive records left behind by decrements."""
        removed = 0
        for rule in self._rules.values():
            if context is not None and rule.context.name != context:
                continue
            removed += await self._strategies[rule.name].store.compact()
        self._log.info("tagcloud.compacted", context=context, removed=removed)
        return removed

    async def ensure_indexes(self) -> None:
        for strategy in self._strategies.values():
            await strategy.store.ensure_indexes()

    # ------------------------------------------------------------------
    # Entity lifecycle
    # ------------------------------------------------------------------

    async def on_entity_saved(self, before: Snapshot | None, after: Snapshot) -> None:
        """Post-commit hook for creates (``before is None``) and updates.

        A storage failure propagates to the caller after being logged;
        whether the entity save is rolled back is the caller's decision.
        """
        for name, strategy in self._strategies.items():
            try:
                await strategy.on_save(before, after)
            except Exception as exc:
                self._log.error("tagcloud.save_hook_failed", rule=name, error=exc)
                raise

    async def on_entity_destroyed(self, before: Snapshot) -> None:
        """Post-commit hook for deletes."""
        for name, strategy in self._strategies.items():
            try:
                await strategy.on_destroy(before)
            except Exception as exc:
                self._log.error("tagcloud.destroy_hook_failed", rule=name, error=exc)
                raise


__all__ = ["AggregationRegistry"]
