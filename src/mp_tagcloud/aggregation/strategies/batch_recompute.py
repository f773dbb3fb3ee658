"""Aggregation strategies – BatchRecompute: full scan and atomic replace."""

from __future__ import annotations

import logging
import time
from collections import Counter
from collections.abc import Hashable
from typing import TYPE_CHECKING, Any

from mp_tagcloud.aggregation.ports import CountsStore, EntitySource
from mp_tagcloud.aggregation.records import AggregateRecord, RecalculationResult, group_key
from mp_tagcloud.aggregation.strategies.base import AggregationStrategy
from mp_tagcloud.kernel.tagging import Snapshot

if TYPE_CHECKING:
    from mp_tagcloud.aggregation.rule import AggregationRule

logger = logging.getLogger(__name__)


async def count_tags(rule: AggregationRule, source: EntitySource) -> list[AggregateRecord]:
    """Count every ``(tag, group)`` pair over the full entity set.

    Equivalent to replaying each entity's current tags as a single "added"
    event from empty history. Entities outside the rule's scope contribute
    nothing.
    """
    context = rule.context
    fields: list[str] | None = None
    if rule.scope is None:
        fields = [context.attribute_key]
        if rule.group_by is not None:
            fields.append(rule.group_by)

    counts: Counter[tuple[str, Hashable]] = Counter()
    groups: dict[Hashable, Any] = {}
    async for snapshot in source.scan(fields):
        if rule.scope is not None and not rule.scope(snapshot):
            continue
        group = snapshot.get(rule.group_by) if rule.group_by is not None else None
        key = group_key(group)
        groups.setdefault(key, group)
        for tag in context.tags_of(snapshot):
            counts[(tag, key)] += 1

    ordered = sorted(counts.items(), key=lambda item: item[0][0])
    return [AggregateRecord(tag=tag, count=count, group=groups[key]) for (tag, key), count in ordered]


async def recompute(rule: AggregationRule, source: EntitySource, store: CountsStore) -> RecalculationResult:
    """Scan, count and atomically replace *store*'s contents for *rule*."""
    started = time.perf_counter()
    records = await count_tags(rule, source)
    await store.replace_all(records)
    elapsed_ms = (time.perf_counter() - started) * 1000
    result = RecalculationResult(
        rule=rule.name,
        tags=len({record.tag for record in records}),
        records=len(records),
        elapsed_ms=round(elapsed_ms, 3),
    )
    logger.info(
        "tagcloud.recalculated rule=%s collection=%s records=%d elapsed_ms=%.1f",
        rule.name,
        store.name,
        result.records,
        result.elapsed_ms,
    )
    return result


class BatchRecompute(AggregationStrategy):
    """Recompute the whole aggregate whenever a tag attribute changes.

    Correct by construction but O(total entities) per write. Grouping and
    scoping are not implemented for this strategy; declaring a rule with
    either fails at configuration time.
    """

    supports_group_by = False
    supports_scope = False

    async def on_save(self, before: Snapshot | None, after: Snapshot) -> None:
        if self.tags_changed(before, after):
            await self.recalculate()

    async def on_destroy(self, before: Snapshot) -> None:
        if self.rule.context.tags_of(before):
            await self.recalculate()

    async def recalculate(self) -> RecalculationResult:
        return await recompute(self.rule, self.source, self.store)


__all__ = ["BatchRecompute", "count_tags", "recompute"]
