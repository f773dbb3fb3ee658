"""Aggregation strategies – AggregationStrategy base and the shared read contract."""

from __future__ import annotations

import abc
import inspect
from typing import TYPE_CHECKING, Any, ClassVar

from mp_tagcloud.aggregation.naming import underscore
from mp_tagcloud.aggregation.ports import CountsStore, EntitySource
from mp_tagcloud.aggregation.records import AggregateRecord, RecalculationResult, RecordQuery
from mp_tagcloud.kernel.errors import InvalidTagQueryError, UnsupportedOptionForStrategyError
from mp_tagcloud.kernel.tagging import Snapshot

if TYPE_CHECKING:
    from mp_tagcloud.aggregation.rule import AggregationRule


class AggregationStrategy(abc.ABC):
    """Keeps one rule's counts current and serves reads from them.

    Every strategy shares the read contract implemented here: only records
    with ``count > 0`` are visible, tags come back in ascending order, a
    group filter applies only when a group is passed, and records of
    several groups collapsing onto one tag have their counts summed.

    Lifecycle hooks (:meth:`on_save`, :meth:`on_destroy`) are no-ops here;
    subclasses override the ones their semantics need.
    """

    identifier: ClassVar[str] = ""
    supports_group_by: ClassVar[bool] = True
    supports_scope: ClassVar[bool] = True

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "identifier" not in cls.__dict__:
            cls.identifier = underscore(cls.__name__)

    def __init__(self, rule: AggregationRule, store: CountsStore, source: EntitySource) -> None:
        self.check_options(group_by=rule.group_by, scope=rule.scope)
        self.rule = rule
        self.store = store
        self.source = source

    @classmethod
    def is_concrete(cls) -> bool:
        return cls is not AggregationStrategy and not inspect.isabstract(cls)

    @classmethod
    def check_options(cls, *, group_by: str | None = None, scope: Any = None) -> None:
        """Reject rule options this strategy cannot honour.

        Raises:
            UnsupportedOptionForStrategyError: ``group_by`` or ``scope`` is set
                on a strategy that does not implement it.
        """
        if group_by is not None and not cls.supports_group_by:
            raise UnsupportedOptionForStrategyError(cls.identifier, "group_by")
        if scope is not None and not cls.supports_scope:
            raise UnsupportedOptionForStrategyError(cls.identifier, "scope")

    # ------------------------------------------------------------------
    # Read contract
    # ------------------------------------------------------------------

    async def tags(self, group: Any = None) -> list[str]:
        return [tag for tag, _ in await self.tags_with_weight(group)]

    async def tags_with_weight(self, group: Any = None) -> list[tuple[str, int]]:
        return await self._query(RecordQuery(group=group))

    async def _query(self, query: RecordQuery) -> list[tuple[str, int]]:
        if query.group is not None and not self.rule.grouped:
            raise InvalidTagQueryError(
                f"Rule '{self.rule.name}' is not grouped; cannot filter by group",
                detail={"rule": self.rule.name},
            )
        collapses = self.rule.grouped and query.group is None
        if not collapses:
            return [(r.tag, r.count) for r in await self.store.find(query)]

        # ordering and limit only hold after per-group records are merged
        records = await self.store.find(RecordQuery(prefix=query.prefix))
        weights = _merge(records)
        if query.order_by_count:
            weights.sort(key=lambda pair: (-pair[1], pair[0]))
        if query.limit > 0:
            weights = weights[: query.limit]
        return weights

    # ------------------------------------------------------------------
    # Lifecycle hooks
    # ------------------------------------------------------------------

    async def on_save(self, before: Snapshot | None, after: Snapshot) -> None:
        """Called after an entity is created (``before is None``) or updated."""

    async def on_destroy(self, before: Snapshot) -> None:
        """Called after an entity is removed."""

    @abc.abstractmethod
    async def recalculate(self) -> RecalculationResult:
        """Rebuild the rule's counts from the full, current entity set."""

    def tags_changed(self, before: Snapshot | None, after: Snapshot | None) -> bool:
        context = self.rule.context
        return context.tags_of(before) != context.tags_of(after)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rule={self.rule.name!r}, collection={self.store.name!r})"


def _merge(records: list[AggregateRecord]) -> list[tuple[str, int]]:
    weights: dict[str, int] = {}
    for record in records:
        weights[record.tag] = weights.get(record.tag, 0) + record.count
    return sorted(weights.items())


__all__ = ["AggregationStrategy"]
