"""Aggregation strategies – RealTime: incremental diff-and-increment updates."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from mp_tagcloud.aggregation.records import RecalculationResult, RecordQuery
from mp_tagcloud.aggregation.strategies.base import AggregationStrategy
from mp_tagcloud.aggregation.strategies.batch_recompute import recompute
from mp_tagcloud.kernel.tagging import Snapshot

logger = logging.getLogger(__name__)


class RealTime(AggregationStrategy):
    """Apply each save as a minimal set of atomic ``+1``/``-1`` increments.

    For one save, with ``unchanged = old ∩ new``, every tag in
    ``old - unchanged`` is decremented and every tag in ``new - unchanged``
    incremented, each as an independent upsert-increment. Concurrent saves
    therefore never read-modify-write a count.

    The group key is the entity's post-save group. When the group value
    itself changes, the old tags leave the old group and the new tags join
    the new one. With a scope, a snapshot outside the scope contributes no
    tags.
    """

    async def on_save(self, before: Snapshot | None, after: Snapshot) -> None:
        old_group, old_tags = self._contribution(before)
        new_group, new_tags = self._contribution(after)

        if old_group == new_group:
            new_set = set(new_tags)
            old_set = set(old_tags)
            removed = [tag for tag in old_tags if tag not in new_set]
            added = [tag for tag in new_tags if tag not in old_set]
            await self._apply(removed, new_group, -1)
            await self._apply(added, new_group, 1)
        else:
            await self._apply(old_tags, old_group, -1)
            await self._apply(new_tags, new_group, 1)

    async def on_destroy(self, before: Snapshot) -> None:
        group, tags = self._contribution(before)
        await self._apply(tags, group, -1)

    async def recalculate(self) -> RecalculationResult:
        return await recompute(self.rule, self.source, self.store)

    async def autocomplete(
        self,
        prefix: str,
        *,
        sort_by_count: bool = False,
        max: int = 0,  # noqa: A002
        group: Any = None,
    ) -> list[tuple[str, int]]:
        """Visible tags starting with *prefix*.

        Ordered by tag, or by descending count (ties by tag) when
        *sort_by_count* is set. ``max <= 0`` returns every match.
        """
        query = RecordQuery(
            group=group,
            prefix=prefix,
            order_by_count=sort_by_count,
            limit=max if max > 0 else 0,
        )
        return await self._query(query)

    def _contribution(self, snapshot: Snapshot | None) -> tuple[Any, list[str]]:
        if snapshot is None:
            return None, []
        group = snapshot.get(self.rule.group_by) if self.rule.group_by is not None else None
        if self.rule.scope is not None and not self.rule.scope(snapshot):
            return group, []
        return group, self.rule.context.tags_of(snapshot)

    async def _apply(self, tags: Sequence[str], group: Any, delta: int) -> None:
        for tag in tags:
            await self.store.increment(tag, group, delta)
        if tags:
            logger.debug(
                "tagcloud.incremented rule=%s delta=%d group=%r tags=%s",
                self.rule.name,
                delta,
                group,
                ",".join(tags),
            )


__all__ = ["RealTime"]
